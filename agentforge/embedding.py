"""Embedding models and the embeddings they produce."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Iterable


class EmbeddingError(Exception):
    """Base class of errors raised while producing embeddings."""

    label = "EmbeddingError"

    def __str__(self) -> str:
        return f"{self.label}: {super().__str__()}"


class EmbeddingHttpError(EmbeddingError):
    """Connection error, timeout and the like."""

    label = "HttpError"


class EmbeddingJsonError(EmbeddingError):
    """Serialization or deserialization failure."""

    label = "JsonError"


class DocumentError(EmbeddingError):
    """Error processing a document for embedding."""

    label = "DocumentError"


class EmbeddingResponseError(EmbeddingError):
    """Error parsing the embedding response."""

    label = "ResponseError"


class EmbeddingProviderError(EmbeddingError):
    """Error returned by the embedding model provider."""

    label = "ProviderError"


@dataclass(eq=False)
class Embedding:
    """A document together with its embedding vector.

    Two embeddings are equal when they embed the same document.
    """

    document: str = ""
    vec: list[float] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Embedding):
            return NotImplemented
        return self.document == other.document

    def __hash__(self) -> int:
        return hash(self.document)


class EmbeddingModel(ABC):
    """A model that embeds texts into vectors."""

    #: The largest number of documents embedded in a single request.
    MAX_DOCUMENTS: ClassVar[int]

    @abstractmethod
    def ndims(self) -> int:
        """The number of dimensions of the embedding vectors."""

    @abstractmethod
    async def embed_texts(self, texts: Iterable[str]) -> list[Embedding]:
        """Embed several texts in one request."""

    async def embed_text(self, text: str) -> Embedding:
        """Embed a single text."""
        embeddings = await self.embed_texts([text])
        if not embeddings:
            raise EmbeddingResponseError("There should be at least one embedding")
        return embeddings[-1]
"""Embeddable description of a tool, used when retrieving tools by similarity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .embed import Embed, TextEmbedder


@dataclass
class ToolSchema(Embed):
    """A tool's name, its context and the documents it is embedded by."""

    name: str = ""
    context: Any = None
    embedding_docs: list[str] = field(default_factory=list)

    def embed(self, embedder: TextEmbedder) -> None:
        """Add each embedding document to ``embedder``."""
        for doc in self.embedding_docs:
            embedder.embed(doc)
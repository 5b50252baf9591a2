"""Completion requests, responses and the interfaces of completion models.

The high-level interfaces are :class:`Prompt` (prompt in, response out) and
:class:`Chat` (prompt and history in, response out). :class:`Completion` gives a
request builder that can be customised before sending, and
:class:`CompletionModel` is the interface a provider implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Optional, TypeVar, Union

from .json_utils import merge

T = TypeVar("T")


# ----------------------------------------------------------------
# Errors
# ----------------------------------------------------------------
class CompletionError(Exception):
    """Base class of errors raised while producing a completion."""

    label = "CompletionError"

    def __str__(self) -> str:
        return f"{self.label}: {super().__str__()}"


class HttpError(CompletionError):
    """Connection error, timeout and the like."""

    label = "HttpError"


class JsonError(CompletionError):
    """Serialization or deserialization failure."""

    label = "JsonError"


class RequestError(CompletionError):
    """Error while building the completion request."""

    label = "RequestError"


class ResponseError(CompletionError):
    """Error while parsing the completion response."""

    label = "ResponseError"


class ProviderError(CompletionError):
    """Error returned by the completion model provider."""

    label = "ProviderError"


class PromptError(Exception):
    """Error raised by a prompt or chat: a completion or a tool call failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        label = "CompletionError" if isinstance(self.cause, CompletionError) else "ToolCallError"
        return f"{label}: {self.cause}"


# ----------------------------------------------------------------
# Request models
# ----------------------------------------------------------------
@dataclass
class Message:
    """A chat message; ``role`` is "system", "user" or "assistant"."""

    role: str
    content: str


def _debug_quote(text: str) -> str:
    """Quote a string, escaping quotes, backslashes and control characters."""
    escapes = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}
    parts = []
    for ch in text:
        if ch in escapes:
            parts.append(escapes[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            parts.append(f"\\u{{{ord(ch):x}}}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


@dataclass
class Document:
    """A context document attached to a completion request."""

    id: str
    text: str
    additional_props: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.additional_props:
            metadata = " ".join(
                f"{key}: {_debug_quote(value)}"
                for key, value in sorted(self.additional_props.items())
            )
            body = f"<metadata {metadata} />\n{self.text}"
        else:
            body = self.text
        return f"<file id: {self.id}>\n{body}\n</file>\n"


@dataclass
class ToolDefinition:
    """Name, description and JSON-schema parameters of a tool."""

    name: str
    description: str
    parameters: Any


# ----------------------------------------------------------------
# Responses
# ----------------------------------------------------------------
@dataclass(frozen=True)
class MessageChoice:
    """The model answered with a message."""

    message: str


@dataclass(frozen=True)
class ToolCallChoice:
    """The model asked for a tool to be called with the given arguments."""

    name: str
    arguments: Any


ModelChoice = Union[MessageChoice, ToolCallChoice]


@dataclass
class CompletionResponse(Generic[T]):
    """The high-level choice of a completion together with the raw response."""

    choice: ModelChoice
    raw_response: T


# ----------------------------------------------------------------
# Interfaces
# ----------------------------------------------------------------
class Prompt(ABC):
    """High-level one-shot prompt interface."""

    @abstractmethod
    async def prompt(self, prompt: str) -> str:
        """Send a prompt and return the response text, calling a tool if asked."""


class Chat(ABC):
    """High-level chat interface with history."""

    @abstractmethod
    async def chat(self, prompt: str, chat_history: list[Message]) -> str:
        """Send a prompt with chat history and return the response text."""


class Completion(ABC):
    """Low-level interface producing a request builder for a prompt."""

    @abstractmethod
    async def completion(
        self, prompt: str, chat_history: list[Message]
    ) -> "CompletionRequestBuilder":
        """Return a request builder pre-filled with this object's configuration."""


class CompletionModel(ABC):
    """A model that turns completion requests into completion responses."""

    @abstractmethod
    async def completion(self, request: "CompletionRequest") -> CompletionResponse[Any]:
        """Generate a completion response for ``request``."""

    def completion_request(self, prompt: str) -> "CompletionRequestBuilder":
        """Start a request builder for ``prompt`` on this model."""
        return CompletionRequestBuilder(self, prompt)


# ----------------------------------------------------------------
# Requests
# ----------------------------------------------------------------
@dataclass
class CompletionRequest:
    """A provider-independent completion request."""

    prompt: str
    preamble: Optional[str] = None
    chat_history: list[Message] = field(default_factory=list)
    documents: list[Document] = field(default_factory=list)
    tools: list[ToolDefinition] = field(default_factory=list)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    additional_params: Any = None

    def prompt_with_context(self) -> str:
        """The prompt preceded by the request's documents as attachments."""
        if not self.documents:
            return self.prompt
        attachments = "".join(str(doc) for doc in self.documents)
        return f"<attachments>\n{attachments}</attachments>\n\n{self.prompt}"


class CompletionRequestBuilder:
    """Builds a :class:`CompletionRequest` step by step; each step returns the builder."""

    def __init__(self, model: CompletionModel, prompt: str) -> None:
        self._model = model
        self._prompt = prompt
        self._preamble: Optional[str] = None
        self._chat_history: list[Message] = []
        self._documents: list[Document] = []
        self._tools: list[ToolDefinition] = []
        self._temperature: Optional[float] = None
        self._max_tokens: Optional[int] = None
        self._additional_params: Any = None

    def preamble(self, preamble: str) -> "CompletionRequestBuilder":
        """Set the preamble (system prompt)."""
        self._preamble = preamble
        return self

    def message(self, message: Message) -> "CompletionRequestBuilder":
        """Append a message to the chat history."""
        self._chat_history.append(message)
        return self

    def messages(self, messages: Iterable[Message]) -> "CompletionRequestBuilder":
        """Append several messages to the chat history."""
        self._chat_history.extend(messages)
        return self

    def document(self, document: Document) -> "CompletionRequestBuilder":
        """Attach a document."""
        self._documents.append(document)
        return self

    def documents(self, documents: Iterable[Document]) -> "CompletionRequestBuilder":
        """Attach several documents."""
        self._documents.extend(documents)
        return self

    def tool(self, tool: ToolDefinition) -> "CompletionRequestBuilder":
        """Add a tool definition."""
        self._tools.append(tool)
        return self

    def tools(self, tools: Iterable[ToolDefinition]) -> "CompletionRequestBuilder":
        """Add several tool definitions."""
        self._tools.extend(tools)
        return self

    def additional_params(self, additional_params: Any) -> "CompletionRequestBuilder":
        """Merge provider-specific parameters into those already set."""
        if self._additional_params is None:
            self._additional_params = additional_params
        else:
            self._additional_params = merge(self._additional_params, additional_params)
        return self

    def replace_additional_params(self, additional_params: Any) -> "CompletionRequestBuilder":
        """Replace the provider-specific parameters; ``None`` clears them."""
        self._additional_params = additional_params
        return self

    def temperature(self, temperature: Optional[float]) -> "CompletionRequestBuilder":
        """Set the temperature; ``None`` leaves it to the provider."""
        self._temperature = temperature
        return self

    def max_tokens(self, max_tokens: Optional[int]) -> "CompletionRequestBuilder":
        """Set the maximum number of tokens; ``None`` leaves it unset."""
        self._max_tokens = max_tokens
        return self

    def build(self) -> CompletionRequest:
        """Produce the request."""
        return CompletionRequest(
            prompt=self._prompt,
            preamble=self._preamble,
            chat_history=list(self._chat_history),
            documents=list(self._documents),
            tools=list(self._tools),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            additional_params=self._additional_params,
        )

    async def send(self) -> CompletionResponse[Any]:
        """Build the request and send it to the model."""
        return await self._model.completion(self.build())
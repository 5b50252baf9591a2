"""LLM agents: a completion model combined with a preamble and context documents.

An :class:`Agent` is created with an :class:`AgentBuilder`. Its preamble (system
prompt), context documents and model parameters are sent with every prompt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .completion import (
    Chat,
    Completion,
    CompletionError,
    CompletionModel,
    CompletionRequestBuilder,
    Document,
    Message,
    MessageChoice,
    Prompt,
    PromptError,
    ToolCallChoice,
)


class _ToolNotFoundError(Exception):
    """The model asked for a tool that the agent does not have."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"ToolNotFoundError: {self.name}"


@dataclass
class Agent(Prompt, Chat, Completion):
    """A completion model with a preamble and a static set of context documents."""

    model: CompletionModel
    preamble: str = ""
    static_context: list[Document] = field(default_factory=list)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    additional_params: Any = None

    async def completion(
        self, prompt: str, chat_history: list[Message]
    ) -> CompletionRequestBuilder:
        """A request builder holding this agent's configuration; its values can be overridden."""
        return (
            self.model.completion_request(prompt)
            .preamble(self.preamble)
            .messages(list(chat_history))
            .documents(list(self.static_context))
            .temperature(self.temperature)
            .max_tokens(self.max_tokens)
            .replace_additional_params(self.additional_params)
        )

    async def prompt(self, prompt: str) -> str:
        """Send ``prompt`` with no chat history and return the response text."""
        return await self.chat(prompt, [])

    async def chat(self, prompt: str, chat_history: list[Message]) -> str:
        """Send ``prompt`` with ``chat_history`` and return the response text.

        Raises :class:`PromptError` when the completion fails or when the model
        asks for a tool the agent does not have.
        """
        try:
            builder = await self.completion(prompt, chat_history)
            response = await builder.send()
        except CompletionError as exc:
            raise PromptError(exc) from exc

        choice = response.choice
        if isinstance(choice, MessageChoice):
            return choice.message
        if isinstance(choice, ToolCallChoice):
            error = _ToolNotFoundError(choice.name)
            raise PromptError(error) from error
        raise PromptError(CompletionError(f"unexpected model choice: {choice!r}"))


class AgentBuilder:
    """Configures and builds an :class:`Agent`; each step returns the builder."""

    def __init__(self, model: CompletionModel) -> None:
        self._model = model
        self._preamble: Optional[str] = None
        self._static_context: list[Document] = []
        self._temperature: Optional[float] = None
        self._max_tokens: Optional[int] = None
        self._additional_params: Any = None

    def preamble(self, preamble: str) -> "AgentBuilder":
        """Set the system prompt."""
        self._preamble = preamble
        return self

    def append_preamble(self, doc: str) -> "AgentBuilder":
        """Append a line to the system prompt."""
        self._preamble = f"{self._preamble or ''}\n{doc}"
        return self

    def context(self, doc: str) -> "AgentBuilder":
        """Add a context document that is sent with every prompt."""
        self._static_context.append(
            Document(id=f"static_doc_{len(self._static_context)}", text=doc)
        )
        return self

    def temperature(self, temperature: float) -> "AgentBuilder":
        """Set the temperature of the model."""
        self._temperature = temperature
        return self

    def max_tokens(self, max_tokens: int) -> "AgentBuilder":
        """Set the maximum number of tokens of the completion."""
        self._max_tokens = max_tokens
        return self

    def additional_params(self, params: Any) -> "AgentBuilder":
        """Set provider-specific parameters passed to the model."""
        self._additional_params = params
        return self

    def build(self) -> Agent:
        """Build the agent."""
        return Agent(
            model=self._model,
            preamble=self._preamble or "",
            static_context=list(self._static_context),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            additional_params=self._additional_params,
        )
"""Turning objects into the texts that an embedding model should embed.

An object is embeddable when it subclasses :class:`Embed`, or when it is a
dataclass decorated with :func:`embeddable` whose fields are marked with
:func:`embed_field`. Strings, numbers, booleans, JSON values and lists of
embeddable values are handled by :func:`embed_value` directly.
"""

from __future__ import annotations

import copy
import dataclasses
import json
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Callable, Optional

_EMBED_KEY = "embed_with"


class EmbedError(Exception):
    """Raised when an object cannot be turned into texts to embed."""


class TextEmbedder:
    """Accumulates the texts that need to be embedded."""

    def __init__(self) -> None:
        self.texts: list[str] = []

    def embed(self, text: str) -> None:
        """Add ``text`` to the texts to embed."""
        self.texts.append(text)


class Embed(ABC):
    """An object that adds the texts it should be embedded by to a :class:`TextEmbedder`."""

    @abstractmethod
    def embed(self, embedder: TextEmbedder) -> None:
        """Add this object's texts to ``embedder``; raise :class:`EmbedError` on failure."""


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        text = str(int(value))
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return text
    return format(Decimal(repr(value)), "f")


def embed_value(value: Any, embedder: TextEmbedder) -> None:
    """Add the texts of ``value`` to ``embedder``.

    Lists and tuples contribute each of their items in order; dictionaries and
    ``None`` are embedded as compact JSON.
    """
    if isinstance(value, Embed):
        value.embed(embedder)
    elif isinstance(value, str):
        embedder.embed(value)
    elif isinstance(value, bool):
        embedder.embed("true" if value else "false")
    elif isinstance(value, int):
        embedder.embed(str(value))
    elif isinstance(value, float):
        embedder.embed(_format_float(value))
    elif isinstance(value, (list, tuple)):
        for item in value:
            embed_value(item, embedder)
    elif value is None or isinstance(value, dict):
        try:
            embedder.embed(json.dumps(value, separators=(",", ":"), ensure_ascii=False))
        except (TypeError, ValueError) as exc:
            raise EmbedError(str(exc)) from exc
    else:
        raise TypeError(f"cannot embed a value of type {type(value).__name__}")


def to_texts(item: Any) -> list[str]:
    """Return the texts that need to be embedded for ``item``."""
    embedder = TextEmbedder()
    embed_value(item, embedder)
    return embedder.texts


def embed_field(*, embed_with: Optional[Callable[[TextEmbedder, Any], None]] = None) -> Any:
    """Mark a dataclass field as embedded.

    Without ``embed_with`` the field's value is embedded with :func:`embed_value`.
    With it, ``embed_with(embedder, value)`` is called with a copy of the value.
    """
    if embed_with is not None and not callable(embed_with):
        raise TypeError("embed_with must be callable")
    return dataclasses.field(metadata={_EMBED_KEY: embed_with})


def embeddable(cls: type) -> type:
    """Give a dataclass an ``embed`` method built from its marked fields.

    Plain marked fields are embedded first, in declaration order, then those
    with a custom ``embed_with`` function.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError("embeddable should only be used on dataclasses")

    basic: list[str] = []
    custom: list[tuple[str, Callable[[TextEmbedder, Any], None]]] = []
    for fld in dataclasses.fields(cls):
        if _EMBED_KEY not in fld.metadata:
            continue
        func = fld.metadata[_EMBED_KEY]
        if func is None:
            basic.append(fld.name)
        else:
            custom.append((fld.name, func))

    if not basic and not custom:
        raise TypeError(
            "Add at least one field marked with embed_field() or embed_field(embed_with=...)."
        )

    def embed(self: Any, embedder: TextEmbedder) -> None:
        for name in basic:
            embed_value(getattr(self, name), embedder)
        for name, func in custom:
            try:
                func(embedder, copy.copy(getattr(self, name)))
            except EmbedError:
                raise
            except Exception as exc:
                raise EmbedError(str(exc)) from exc

    embed.__doc__ = "Add the texts of the marked fields to ``embedder``."
    cls.embed = embed  # type: ignore[attr-defined]
    Embed.register(cls)
    return cls
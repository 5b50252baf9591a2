"""Helpers for combining JSON-like values."""

from __future__ import annotations

from typing import Any


def merge(a: Any, b: Any) -> Any:
    """Return ``a`` updated with the keys of ``b`` when both are objects.

    If either value is not a JSON object (a ``dict``), ``a`` is returned as is.
    Neither argument is modified.
    """
    if isinstance(a, dict) and isinstance(b, dict):
        merged = dict(a)
        merged.update(b)
        return merged
    return a


def merge_inplace(a: Any, b: Any) -> None:
    """Update ``a`` in place with the keys of ``b`` when both are objects."""
    if isinstance(a, dict) and isinstance(b, dict):
        a.update(b)
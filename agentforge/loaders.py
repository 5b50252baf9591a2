"""Loading files from disk by glob pattern or directory.

A :class:`FileLoader` is a one-shot iterator. Its items start out as paths, and
can be turned into file contents with :meth:`FileLoader.read` or into
``(path, content)`` pairs with :meth:`FileLoader.read_with_path`. Failures do not
stop iteration: a failed item is yielded as a :class:`FileLoaderError` instance,
and :meth:`FileLoader.ignore_errors` drops those.
"""

from __future__ import annotations

import glob
import os
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Union


class FileLoaderError(Exception):
    """An error met while locating or reading files."""


class _Stage(Enum):
    PATHS = "paths"
    CONTENTS = "contents"
    PATHS_WITH_CONTENTS = "paths with contents"


def _check_pattern(pattern: str) -> None:
    """Reject glob patterns with malformed wildcards or character classes."""
    for component in pattern.replace(os.sep, "/").split("/"):
        if "***" in component:
            raise FileLoaderError(
                "Pattern error: wildcards are either regular `*` or recursive `**`"
            )
        if "**" in component and component != "**":
            raise FileLoaderError(
                "Pattern error: recursive wildcards must form a single path component"
            )
    index = 0
    while index < len(pattern):
        if pattern[index] == "[":
            start = index + 1
            if start < len(pattern) and pattern[start] == "!":
                start += 1
            # The first character of a class may itself be ']'.
            close = pattern.find("]", start + 1)
            if start >= len(pattern) or close == -1:
                raise FileLoaderError("Pattern error: invalid range pattern")
            index = close
        index += 1


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileLoaderError(f"IO error: {exc}") from exc


class FileLoader:
    """A lazy sequence of files, their contents, or both, with errors kept in line."""

    def __init__(self, items: Iterable[Any], stage: _Stage = _Stage.PATHS) -> None:
        self._items = iter(items)
        self._stage = stage

    @classmethod
    def with_glob(cls, pattern: str) -> "FileLoader":
        """Loader over the paths matching ``pattern``; ``**`` matches any directories."""
        _check_pattern(pattern)
        matches = sorted(glob.glob(pattern, recursive=True))
        return cls(Path(match) for match in matches)

    @classmethod
    def with_dir(cls, directory: Union[str, os.PathLike]) -> "FileLoader":
        """Loader over the files directly inside ``directory`` (subdirectories skipped)."""
        try:
            with os.scandir(directory) as entries:
                paths = [Path(entry.path) for entry in entries]
        except OSError as exc:
            raise FileLoaderError(f"IO error: {exc}") from exc
        return cls(path for path in paths if path.is_file())

    def _require_paths(self, operation: str) -> None:
        if self._stage is not _Stage.PATHS:
            raise TypeError(f"{operation}() needs a loader of paths, not of {self._stage.value}")

    def read(self) -> "FileLoader":
        """Replace each path by the text of its file."""
        self._require_paths("read")

        def contents() -> Iterator[Any]:
            for item in self._items:
                if isinstance(item, FileLoaderError):
                    yield item
                    continue
                try:
                    yield _read_text(item)
                except FileLoaderError as exc:
                    yield exc

        return FileLoader(contents(), _Stage.CONTENTS)

    def read_with_path(self) -> "FileLoader":
        """Replace each path by a ``(path, text)`` pair."""
        self._require_paths("read_with_path")

        def pairs() -> Iterator[Any]:
            for item in self._items:
                if isinstance(item, FileLoaderError):
                    yield item
                    continue
                try:
                    yield (item, _read_text(item))
                except FileLoaderError as exc:
                    yield exc

        return FileLoader(pairs(), _Stage.PATHS_WITH_CONTENTS)

    def ignore_errors(self) -> "FileLoader":
        """Drop the items that are errors, keeping the successful ones."""
        return FileLoader(
            (item for item in self._items if not isinstance(item, FileLoaderError)),
            self._stage,
        )

    def __iter__(self) -> Iterator[Any]:
        return self._items
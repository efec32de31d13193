"""
Dot-path resolution over JSON values.

A path such as ``"user.posts.0.title"`` is split on ``.``; each segment
is looked up as a key when the current value is an object and as an
index when it is an array. Resolution never raises for a well-formed
path: anything that does not line up yields :data:`MISSING`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..errors import InvalidPath, MissingProperty, NotSizeable
from ..types import kind_of


class _Missing:
    """Marker for a path that resolves to nothing (distinct from null)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

# Plain decimal without sign or leading zeros
INDEX_PATTERN = re.compile(r"0|[1-9][0-9]*")


def split_path(path: str | int) -> list[str]:
    """
    Split a dot path into its segments.

    Non-negative ints are accepted as single-segment paths.

    Raises:
        InvalidPath: for empty paths, empty segments or non-string paths
    """
    if isinstance(path, int) and not isinstance(path, bool) and path >= 0:
        return [str(path)]
    if not isinstance(path, str):
        raise InvalidPath(
            f"Path must be a string, got {type(path).__name__}",
            actual=repr(path),
        )
    if not path:
        raise InvalidPath("Path cannot be empty", path=path)

    segments = path.split(".")
    if any(segment == "" for segment in segments):
        raise InvalidPath(
            "Path contains an empty segment",
            path=path,
            details={"hint": "Keys containing '.' are not addressable; use query() with bracket notation"},
        )
    return segments


def root_segment(path: str | int) -> str:
    """First segment of a path, the part interaction tracking cares about."""
    return split_path(path)[0]


class PathResolver:
    """
    Resolves dot paths against a focus value.

    Example:
        resolver = PathResolver()
        data = {"items": ["a", "b"]}

        resolver.resolve(data, "items.1")    # "b"
        resolver.exists(data, "items.01")    # False
        resolver.length(data, "items")       # 2
    """

    def resolve(self, focus: Any, path: str | int) -> Any:
        """
        Walk a path through the focus.

        Returns:
            The value found, or MISSING if any segment does not line up
        """
        current = focus
        for segment in split_path(path):
            current = self._step(current, segment)
            if current is MISSING:
                return MISSING
        return current

    def exists(self, focus: Any, path: str | int) -> bool:
        """True if the path resolves, even to null or another falsy value."""
        return self.resolve(focus, path) is not MISSING

    def require(self, focus: Any, path: str | int) -> Any:
        """Resolve a path, failing with MissingProperty when it is absent."""
        value = self.resolve(focus, path)
        if value is MISSING:
            raise MissingProperty(f"Property [{path}] does not exist", path=str(path))
        return value

    def length(self, focus: Any, path: str | int | None = None) -> int:
        """
        Count the direct members of an object or array.

        Without a path, counts the focus itself.

        Raises:
            MissingProperty: if the path does not resolve
            NotSizeable: if the value is neither an object nor an array
        """
        value = focus if path is None else self.require(focus, path)
        if isinstance(value, (Mapping, list, tuple)):
            return len(value)
        raise NotSizeable(
            f"Cannot count members of a {kind_of(value).value}",
            path=None if path is None else str(path),
            actual=value,
        )

    def _step(self, current: Any, segment: str) -> Any:
        if isinstance(current, Mapping):
            # Numeric-looking segments are still keys on objects
            return current.get(segment, MISSING)

        if isinstance(current, (list, tuple)):
            if not INDEX_PATTERN.fullmatch(segment):
                return MISSING
            index = int(segment)
            if index >= len(current):
                return MISSING
            return current[index]

        return MISSING

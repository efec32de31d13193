"""
Canonical value comparison.

Equality here is JSON equality, not Python equality: object key order
never matters, array order always does, and kinds must agree, so
``1 == True`` and ``{"a": 1} == {"a": True}`` are both false.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Iterable

from ..types import JsonKind, kind_of


def canonicalize(value: Any) -> Any:
    """
    Return a copy of a value with every object's keys in sorted order.

    Arrays keep their order. The input is never modified, and applying
    this twice gives the same result as applying it once.
    """
    if isinstance(value, Mapping):
        return {key: canonicalize(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]
    return value


def string_form(value: Any) -> str:
    """The text a value is searched as for substring containment."""
    if isinstance(value, str):
        return value
    return json.dumps(canonicalize(value), ensure_ascii=False)


class ValueMatcher:
    """
    Equality, type, containment and membership checks on JSON values.

    Example:
        matcher = ValueMatcher()
        matcher.equals({"a": 1, "b": 2}, {"b": 2, "a": 1})  # True
        matcher.equals([1, 2], [2, 1])                      # False
        matcher.contains([1, 2, 3], [1, 2])                 # True
        matcher.is_type("x", "string")                      # True
    """

    def equals(self, a: Any, b: Any) -> bool:
        return self._equal(canonicalize(a), canonicalize(b))

    def is_type(self, value: Any, kind: Any) -> bool:
        return kind_of(value) is JsonKind.coerce(kind)

    def contains(self, container: Any, needle: Any) -> bool:
        """
        Check whether a container holds a needle.

        Arrays hold their elements (an array needle requires every one of
        its elements), objects hold their keys, and any other value holds
        the substrings of its string form.
        """
        kind = kind_of(container)

        if kind is JsonKind.ARRAY:
            if isinstance(needle, (list, tuple)):
                return all(self.member(item, container) for item in needle)
            return self.member(needle, container)

        if kind is JsonKind.OBJECT:
            if isinstance(needle, (list, tuple)):
                return all(isinstance(key, str) and key in container for key in needle)
            return isinstance(needle, str) and needle in container

        return string_form(needle) in string_form(container)

    def is_in(self, value: Any, candidates: Iterable[Any]) -> bool:
        """
        For an array value, every candidate must appear in it; for any
        other value, the value must be one of the candidates.
        """
        candidates = list(candidates)
        if kind_of(value) is JsonKind.ARRAY:
            return all(self.member(candidate, value) for candidate in candidates)
        return self.member(value, candidates)

    def is_none_of(self, value: Any, candidates: Iterable[Any]) -> bool:
        """Negation of is_in: no candidate appears in an array value, or the value is not a candidate."""
        candidates = list(candidates)
        if kind_of(value) is JsonKind.ARRAY:
            return not any(self.member(candidate, value) for candidate in candidates)
        return not self.member(value, candidates)

    def member(self, needle: Any, items: Iterable[Any]) -> bool:
        return any(self.equals(needle, item) for item in items)

    def _equal(self, a: Any, b: Any) -> bool:
        kind = kind_of(a)
        if kind is not kind_of(b):
            return False

        if kind is JsonKind.OBJECT:
            # Both sides are canonical, so keys line up pairwise
            if list(a) != list(b):
                return False
            return all(self._equal(a[key], b[key]) for key in a)

        if kind is JsonKind.ARRAY:
            if len(a) != len(b):
                return False
            return all(self._equal(x, y) for x, y in zip(a, b))

        return a == b

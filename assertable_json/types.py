"""
JSON value kinds.

Data under test is plain Python: ``dict`` for objects, ``list`` (or
``tuple``) for arrays, and ``str``/``int``/``float``/``bool``/``None``
for scalars. Every comparison in the package dispatches on the kind
returned by :func:`kind_of` rather than on Python's own type rules,
so ``True`` is never mistaken for ``1``.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class JsonKind(str, Enum):
    """Runtime category of a JSON value."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"

    @classmethod
    def coerce(cls, descriptor: Any) -> JsonKind:
        """
        Turn a kind descriptor into a JsonKind.

        Accepts a JsonKind, its name ("string", "number", ...) or one of
        the Python types str, int, float, bool, dict, list and None.

        Raises:
            ValueError: if the descriptor names no known kind
        """
        if isinstance(descriptor, cls):
            return descriptor
        if isinstance(descriptor, str):
            try:
                return cls(descriptor.lower())
            except ValueError:
                raise ValueError(
                    f"Unknown JSON kind {descriptor!r}; "
                    f"expected one of {', '.join(k.value for k in cls)}"
                ) from None
        if descriptor is None or descriptor is type(None):
            return cls.NULL
        kind = _PYTHON_TYPES.get(descriptor) if isinstance(descriptor, type) else None
        if kind is None:
            raise ValueError(f"Cannot map {descriptor!r} to a JSON kind")
        return kind


_PYTHON_TYPES: dict[Any, JsonKind] = {
    str: JsonKind.STRING,
    int: JsonKind.NUMBER,
    float: JsonKind.NUMBER,
    bool: JsonKind.BOOLEAN,
    dict: JsonKind.OBJECT,
    list: JsonKind.ARRAY,
    tuple: JsonKind.ARRAY,
}


def kind_of(value: Any) -> JsonKind:
    """
    Classify a value.

    Raises:
        TypeError: for values that have no JSON representation
    """
    # bool before number: bool is an int subclass
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    raise TypeError(f"{type(value).__name__} is not a JSON value")

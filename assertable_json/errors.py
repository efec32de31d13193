"""
Assertion failures.

Every failed assertion raises a subclass of :class:`JsonAssertionError`,
which is itself an ``AssertionError`` so test runners report it as an
ordinary test failure. The exception carries the offending path and the
expected and actual values, and renders them in its message.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from .matching.schema import SchemaViolation


class ErrorKind(str, Enum):
    """Category of an assertion failure."""
    MISSING_PROPERTY = "missing_property"
    TYPE_MISMATCH = "type_mismatch"
    VALUE_MISMATCH = "value_mismatch"
    NOT_SIZEABLE = "not_sizeable"
    INVALID_PATH = "invalid_path"
    UNINTERACTED_PROPERTY = "uninteracted_property"
    SCHEMA_MISMATCH = "schema_mismatch"


class _NotGiven:
    def __repr__(self) -> str:
        return "<not given>"


NOT_GIVEN: Any = _NotGiven()


class JsonAssertionError(AssertionError):
    """
    Base class for assertion failures.

    Attributes:
        kind: Failure category
        message: Human-readable description of what failed
        path: The path that was evaluated, if any
        expected: What was expected (NOT_GIVEN when not applicable)
        actual: What was actually found (NOT_GIVEN when not applicable)
        details: Additional context for debugging
    """
    kind: ErrorKind = ErrorKind.VALUE_MISMATCH

    def __init__(
        self,
        message: str,
        path: str | None = None,
        expected: Any = NOT_GIVEN,
        actual: Any = NOT_GIVEN,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.expected = expected
        self.actual = actual
        self.details = details or {}

    def __str__(self) -> str:
        lines = [f"❌ {self.kind.value.replace('_', ' ').upper()}: {self.message}"]

        if self.path:
            lines.append(f"   Path: {self.path}")

        if self.expected is not NOT_GIVEN:
            lines.append(f"   Expected: {format_value(self.expected)}")

        if self.actual is not NOT_GIVEN:
            lines.append(f"   Actual:   {format_value(self.actual)}")

        for key, value in self.details.items():
            lines.append(f"   {key}: {format_value(value)}")

        return "\n".join(lines)


class MissingProperty(JsonAssertionError):
    """The path does not resolve to any value."""
    kind = ErrorKind.MISSING_PROPERTY


class TypeMismatch(JsonAssertionError):
    """The value's kind disagrees with the expected kind."""
    kind = ErrorKind.TYPE_MISMATCH


class ValueMismatch(JsonAssertionError):
    """An equality, size, range or membership condition failed."""
    kind = ErrorKind.VALUE_MISMATCH


class NotSizeable(JsonAssertionError):
    """A length was requested on a value with no cardinality."""
    kind = ErrorKind.NOT_SIZEABLE


class InvalidPath(JsonAssertionError, ValueError):
    """The path string is empty or malformed."""
    kind = ErrorKind.INVALID_PATH


class UninteractedProperty(JsonAssertionError):
    """Coverage verification found top-level keys that were never accessed."""
    kind = ErrorKind.UNINTERACTED_PROPERTY

    def __init__(self, uninteracted: Iterable[str], path: str | None = None):
        self.uninteracted = list(uninteracted)
        super().__init__(
            f"Unexpected properties were found: {', '.join(self.uninteracted)}",
            path=path,
            details={"uninteracted": self.uninteracted},
        )


class SchemaMismatch(JsonAssertionError):
    """One or more schema fields are missing or of the wrong kind."""
    kind = ErrorKind.SCHEMA_MISMATCH

    def __init__(self, violations: list[SchemaViolation], path: str | None = None):
        self.violations = list(violations)
        super().__init__(
            f"Schema validation failed with {len(self.violations)} violation(s)",
            path=path,
        )

    def __str__(self) -> str:
        lines = [super().__str__()]
        lines.extend(f"   - {violation}" for violation in self.violations)
        return "\n".join(lines)


def format_value(value: Any, max_length: int = 100) -> str:
    """Format a value for display, truncating if too long."""
    if value is None:
        return "null"

    if isinstance(value, str):
        formatted = repr(value)
    elif isinstance(value, (list, tuple, dict, bool, int, float)):
        try:
            formatted = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            formatted = repr(value)
    else:
        formatted = repr(value)

    if len(formatted) > max_length:
        return formatted[: max_length - 3] + "..."

    return formatted

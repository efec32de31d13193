"""
Structural schemas.

A schema maps a field name (or dot path) to the kind of value expected
there. A trailing ``?`` marks the field optional::

    {
        "id": "number",
        "name": str,
        "profile.avatar?": "string",
    }

There are no references or unions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..errors import InvalidPath, format_value
from ..paths.resolver import MISSING, PathResolver, split_path
from ..types import JsonKind, kind_of

OPTIONAL_MARKER = "?"


# ─────────────────────────────────────────────────────────────────────────────
# Schema Definition
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SchemaField:
    """One entry of a schema, with the optional marker already stripped."""
    path: str
    kind: JsonKind
    optional: bool = False

    @classmethod
    def parse(cls, key: str, descriptor: Any) -> SchemaField:
        if not isinstance(key, str):
            raise InvalidPath(f"Schema key must be a string, got {type(key).__name__}")
        optional = key.endswith(OPTIONAL_MARKER)
        path = key[: -len(OPTIONAL_MARKER)] if optional else key
        split_path(path)
        return cls(path=path, kind=JsonKind.coerce(descriptor), optional=optional)


@dataclass(frozen=True)
class SchemaSpec:
    """An ordered list of schema fields."""
    fields: tuple[SchemaField, ...] = ()

    @classmethod
    def from_mapping(cls, schema: Mapping[str, Any] | SchemaSpec) -> SchemaSpec:
        """
        Build a schema from a literal mapping.

        Raises:
            InvalidPath: if a key is not a usable path
            ValueError: if a descriptor names no known kind
        """
        if isinstance(schema, SchemaSpec):
            return schema
        return cls(tuple(SchemaField.parse(key, descriptor) for key, descriptor in schema.items()))

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


# ─────────────────────────────────────────────────────────────────────────────
# Violations
# ─────────────────────────────────────────────────────────────────────────────

class ViolationKind(str, Enum):
    """Why a field failed its schema entry."""
    MISSING_REQUIRED_FIELD = "missing_required_field"
    TYPE_MISMATCH = "type_mismatch"


@dataclass
class SchemaViolation:
    """A single schema violation with context."""
    path: str
    kind: ViolationKind
    message: str
    expected: JsonKind | None = None
    actual: Any = None

    def __str__(self) -> str:
        text = f"{self.path}: {self.message}"
        if self.kind is ViolationKind.TYPE_MISMATCH:
            text += f" (got {format_value(self.actual)})"
        return text


@dataclass
class SchemaResult:
    """Outcome of checking a value against a schema."""
    violations: list[SchemaViolation] = field(default_factory=list)
    checked: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.violations) == 0

    def add_violation(
        self,
        path: str,
        kind: ViolationKind,
        message: str,
        expected: JsonKind | None = None,
        actual: Any = None,
    ) -> None:
        self.violations.append(SchemaViolation(path, kind, message, expected, actual))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Schema matched"
        lines = [f"Schema validation failed with {len(self.violations)} violation(s):"]
        lines.extend(f"❌ {v}" for v in self.violations)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Checker
# ─────────────────────────────────────────────────────────────────────────────

def check_schema(
    focus: Any,
    schema: Mapping[str, Any] | SchemaSpec,
    resolver: PathResolver | None = None,
) -> SchemaResult:
    """
    Check every schema field against the focus.

    All fields are evaluated; the result lists every violation in schema
    order. ``checked`` lists the paths that were present.
    """
    spec = SchemaSpec.from_mapping(schema)
    resolver = resolver or PathResolver()
    result = SchemaResult()

    for entry in spec:
        value = resolver.resolve(focus, entry.path)

        if value is MISSING:
            if not entry.optional:
                result.add_violation(
                    entry.path,
                    ViolationKind.MISSING_REQUIRED_FIELD,
                    f"Required field {entry.path} is missing",
                    expected=entry.kind,
                )
            continue

        result.checked.append(entry.path)
        actual_kind = kind_of(value)
        if actual_kind is not entry.kind:
            result.add_violation(
                entry.path,
                ViolationKind.TYPE_MISMATCH,
                f"Expected {entry.path} to be of type {entry.kind.value} but was {actual_kind.value}",
                expected=entry.kind,
                actual=value,
            )

    return result

"""
Value matching.

This package provides canonical equality, kind checks, containment,
membership and schema checks for JSON values.

Usage:
    from assertable_json.matching import ValueMatcher, check_schema

    matcher = ValueMatcher()
    matcher.equals({"a": 1, "b": 2}, {"b": 2, "a": 1})   # True

    result = check_schema({"id": 5}, {"id": "number", "name?": "string"})
    if not result.is_valid:
        print(result)
"""

from .matcher import ValueMatcher, canonicalize, string_form
from .schema import (
    OPTIONAL_MARKER,
    SchemaField,
    SchemaResult,
    SchemaSpec,
    SchemaViolation,
    ViolationKind,
    check_schema,
)

__all__ = [
    # Matcher
    "ValueMatcher",
    "canonicalize",
    "string_form",
    # Schema
    "OPTIONAL_MARKER",
    "SchemaField",
    "SchemaSpec",
    "SchemaResult",
    "SchemaViolation",
    "ViolationKind",
    "check_schema",
]

"""
Typed data structures for check suites.

A check suite is a declarative assertion chain: a list of checks, each
naming one assertion operation and its arguments, applied in order to a
single JSON document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class CheckOp(str, Enum):
    """Supported check operators, one per assertion method."""
    HAS = "has"
    HAS_NESTED = "has_nested"
    HAS_ALL = "has_all"
    HAS_ANY = "has_any"
    HAS_VALUES = "has_values"
    HAS_MATCH = "has_match"
    MISSING = "missing"
    MISSING_ALL = "missing_all"
    COUNT = "count"
    COUNT_BETWEEN = "count_between"
    WHERE = "where"
    WHERE_NOT = "where_not"
    WHERE_ALL = "where_all"
    WHERE_TYPE = "where_type"
    WHERE_CONTAINS = "where_contains"
    WHERE_IN = "where_in"
    WHERE_NOT_IN = "where_not_in"
    MATCHES_SCHEMA = "matches_schema"
    IS_GREATER_THAN = "is_greater_than"
    IS_LESS_THAN = "is_less_than"
    IS_GREATER_OR_EQUAL = "is_greater_or_equal"
    IS_LESS_OR_EQUAL = "is_less_or_equal"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    IS_BETWEEN = "is_between"
    IS_POSITIVE = "is_positive"
    IS_NEGATIVE = "is_negative"
    IS_DIVISIBLE_BY = "is_divisible_by"
    IS_MULTIPLE_OF = "is_multiple_of"
    SCOPE = "scope"  # Nested checks on the value at path
    EACH = "each"  # Nested checks on every element (of path, or of the focus)
    FIRST = "first"  # Nested checks on the first member (of path, or of the focus)
    ETC = "etc"
    VERIFY_INTERACTED = "verify_interacted"


# Operators whose 'path' field is mandatory
PATH_REQUIRED_OPS = frozenset({
    CheckOp.HAS, CheckOp.HAS_NESTED, CheckOp.HAS_MATCH,
    CheckOp.MISSING, CheckOp.COUNT_BETWEEN,
    CheckOp.WHERE, CheckOp.WHERE_NOT, CheckOp.WHERE_CONTAINS,
    CheckOp.WHERE_IN, CheckOp.WHERE_NOT_IN,
    CheckOp.IS_GREATER_THAN, CheckOp.IS_LESS_THAN,
    CheckOp.IS_GREATER_OR_EQUAL, CheckOp.IS_LESS_OR_EQUAL,
    CheckOp.EQUALS, CheckOp.NOT_EQUALS, CheckOp.IS_BETWEEN,
    CheckOp.IS_POSITIVE, CheckOp.IS_NEGATIVE,
    CheckOp.IS_DIVISIBLE_BY, CheckOp.IS_MULTIPLE_OF,
    CheckOp.SCOPE,
})

# Operators that never take a path
PATHLESS_OPS = frozenset({
    CheckOp.HAS_ALL, CheckOp.HAS_ANY, CheckOp.HAS_VALUES, CheckOp.MISSING_ALL,
    CheckOp.WHERE_ALL, CheckOp.MATCHES_SCHEMA,
    CheckOp.ETC, CheckOp.VERIFY_INTERACTED,
})

# Operators whose 'value' field is mandatory
VALUE_REQUIRED_OPS = frozenset({
    CheckOp.HAS_ALL, CheckOp.HAS_ANY, CheckOp.HAS_VALUES, CheckOp.MISSING_ALL,
    CheckOp.COUNT, CheckOp.COUNT_BETWEEN,
    CheckOp.WHERE, CheckOp.WHERE_NOT, CheckOp.WHERE_ALL, CheckOp.WHERE_TYPE,
    CheckOp.WHERE_CONTAINS, CheckOp.WHERE_IN, CheckOp.WHERE_NOT_IN,
    CheckOp.MATCHES_SCHEMA,
    CheckOp.IS_GREATER_THAN, CheckOp.IS_LESS_THAN,
    CheckOp.IS_GREATER_OR_EQUAL, CheckOp.IS_LESS_OR_EQUAL,
    CheckOp.EQUALS, CheckOp.NOT_EQUALS, CheckOp.IS_BETWEEN,
    CheckOp.IS_DIVISIBLE_BY, CheckOp.IS_MULTIPLE_OF,
})

# Operators that carry nested 'checks'
NESTED_OPS = frozenset({CheckOp.SCOPE, CheckOp.EACH, CheckOp.FIRST})

# Value must be a [low, high] pair
RANGE_VALUE_OPS = frozenset({CheckOp.COUNT_BETWEEN, CheckOp.IS_BETWEEN})

# Value must be a list
LIST_VALUE_OPS = frozenset({
    CheckOp.HAS_ALL, CheckOp.HAS_ANY, CheckOp.HAS_VALUES, CheckOp.MISSING_ALL,
    CheckOp.WHERE_IN, CheckOp.WHERE_NOT_IN,
})

# Value must be a mapping
MAPPING_VALUE_OPS = frozenset({CheckOp.WHERE_ALL, CheckOp.MATCHES_SCHEMA})

# Value must be a number
NUMERIC_VALUE_OPS = frozenset({
    CheckOp.COUNT,
    CheckOp.IS_GREATER_THAN, CheckOp.IS_LESS_THAN,
    CheckOp.IS_GREATER_OR_EQUAL, CheckOp.IS_LESS_OR_EQUAL,
    CheckOp.EQUALS, CheckOp.NOT_EQUALS,
    CheckOp.IS_DIVISIBLE_BY, CheckOp.IS_MULTIPLE_OF,
})


# ─────────────────────────────────────────────────────────────────────────────
# Defaults
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class SuiteDefaults:
    """Suite-wide settings."""
    verify_interacted: bool = False  # Run verify_interacted() after the last check


# ─────────────────────────────────────────────────────────────────────────────
# Checks
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Check:
    """A single assertion in a suite."""
    id: str
    op: CheckOp
    path: str | int | None = None
    value: Any = None
    checks: list[Check] = field(default_factory=list)  # Only for scope/each/first


@dataclass
class CheckSuite:
    """Fully parsed and validated suite."""
    version: int
    name: str
    defaults: SuiteDefaults = field(default_factory=SuiteDefaults)
    checks: list[Check] = field(default_factory=list)

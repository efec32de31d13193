"""
assertable-json - Fluent assertions for JSON data

This package provides chainable assertions for verifying the shape and
content of JSON-like data in tests.

Subpackages:
    - paths: dot-path and JSONPath resolution
    - matching: canonical equality, kinds, containment and schemas
    - assertions: the AssertableJson context, scoping and coverage tracking
    - suites: declarative YAML check suites
    - reporting: suite run reports

Usage:
    from assertable_json import AssertableJson

    json = AssertableJson({"user": {"id": 1, "name": "Ada"}, "posts": []})

    (json
        .has("user", lambda user: user
            .where("id", 1)
            .matches_schema({"id": "number", "name": "string", "email?": "string"}))
        .count("posts", 0)
        .verify_interacted())
"""

__version__ = "0.1.0"

# Kinds and errors
from .types import JsonKind, kind_of
from .errors import (
    ErrorKind,
    InvalidPath,
    JsonAssertionError,
    MissingProperty,
    NotSizeable,
    SchemaMismatch,
    TypeMismatch,
    UninteractedProperty,
    ValueMismatch,
)

# Re-export paths for convenience
from .paths import MISSING, PathResolver, find_values

# Re-export matching for convenience
from .matching import (
    SchemaSpec,
    SchemaViolation,
    ValueMatcher,
    ViolationKind,
    canonicalize,
    check_schema,
)

# Re-export assertions for convenience
from .assertions import AssertableJson, InteractionTracker, ScopeEngine

# Re-export suites for convenience
from .suites import (
    CheckOp,
    CheckSuite,
    load_document,
    load_suite,
    load_suite_yaml,
    run_suite,
)

# Re-export reporting for convenience
from .reporting import Reporter, SuiteReport, SuiteStatus

__all__ = [
    # Package info
    "__version__",
    # Kinds
    "JsonKind",
    "kind_of",
    # Errors
    "ErrorKind",
    "JsonAssertionError",
    "MissingProperty",
    "TypeMismatch",
    "ValueMismatch",
    "NotSizeable",
    "InvalidPath",
    "UninteractedProperty",
    "SchemaMismatch",
    # Paths
    "MISSING",
    "PathResolver",
    "find_values",
    # Matching
    "ValueMatcher",
    "canonicalize",
    "check_schema",
    "SchemaSpec",
    "SchemaViolation",
    "ViolationKind",
    # Assertions
    "AssertableJson",
    "InteractionTracker",
    "ScopeEngine",
    # Suites
    "CheckOp",
    "CheckSuite",
    "load_suite",
    "load_suite_yaml",
    "load_document",
    "run_suite",
    # Reporting
    "Reporter",
    "SuiteReport",
    "SuiteStatus",
]

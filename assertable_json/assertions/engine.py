"""
Fluent assertions on JSON data.

:class:`AssertableJson` wraps a value and exposes chainable assertions.
Each assertion either returns the same context or raises a
:class:`~assertable_json.errors.JsonAssertionError`, so a chain stops
at its first failure.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, Iterable

from rich.console import Console

from ..errors import (
    MissingProperty,
    SchemaMismatch,
    TypeMismatch,
    ValueMismatch,
    format_value,
)
from ..matching.matcher import ValueMatcher, canonicalize
from ..matching.schema import SchemaSpec, check_schema
from ..paths.jsonpath import find_values, root_field
from ..paths.resolver import MISSING, PathResolver
from ..types import JsonKind, kind_of
from .scope import Callback, ScopeEngine
from .tracker import InteractionTracker

logger = logging.getLogger(__name__)

Path = str | int


class AssertableJson:
    """
    Assertion context bound to a JSON value.

    Components:
    - PathResolver: dot-path lookups
    - ValueMatcher: canonical equality, kinds, containment
    - InteractionTracker: which top-level keys were inspected
    - ScopeEngine: child contexts for nested values

    Example:
        json = AssertableJson({
            "user": {"id": 1, "name": "Ada", "roles": ["admin"]},
            "meta": {"page": 1},
        })

        (json
            .has("user", lambda user: user
                .where("id", 1)
                .where_type("string", "name")
                .where_contains("roles", "admin")
                .etc())
            .where("meta.page", 1)
            .verify_interacted())
    """

    def __init__(
        self,
        data: Any,
        root: Any = MISSING,
        *,
        resolver: PathResolver | None = None,
        matcher: ValueMatcher | None = None,
        scopes: ScopeEngine | None = None,
    ):
        self._json = data
        self._root = data if root is MISSING else root
        self.resolver = resolver or PathResolver()
        self.matcher = matcher or ValueMatcher()
        self.scopes = scopes or ScopeEngine()
        self._tracker = InteractionTracker(data)

    @classmethod
    def from_json(cls, text: str | bytes) -> AssertableJson:
        """Parse JSON text and wrap the result."""
        return cls(json.loads(text))

    def spawn(self, value: Any) -> AssertableJson:
        """New context on a sub-value, sharing components but not interactions."""
        return AssertableJson(
            value,
            root=self._root,
            resolver=self.resolver,
            matcher=self.matcher,
            scopes=self.scopes,
        )

    @property
    def json(self) -> Any:
        return self._json

    @property
    def root(self) -> Any:
        return self._root

    @property
    def interacted(self) -> frozenset[str]:
        return self._tracker.interacted

    def __repr__(self) -> str:
        return f"AssertableJson({format_value(self._json)})"

    # ─────────────────────────────────────────────────────────────────────
    # Queries (never assert, never record)
    # ─────────────────────────────────────────────────────────────────────

    def get(self, path: Path, default: Any = None) -> Any:
        value = self.resolver.resolve(self._json, path)
        return default if value is MISSING else value

    def exists(self, path: Path) -> bool:
        return self.resolver.exists(self._json, path)

    def length(self, path: Path | None = None) -> int:
        return self.resolver.length(self._json, path)

    def query(self, expression: str) -> list[Any]:
        """Values matched by a JSONPath expression."""
        return find_values(self._json, expression)

    # ─────────────────────────────────────────────────────────────────────
    # Presence and size
    # ─────────────────────────────────────────────────────────────────────

    def has(
        self,
        path: Path,
        length: int | Callback | None = None,
        callback: Callback | None = None,
    ) -> AssertableJson:
        """
        Assert that a path exists.

        has(path)                    - the path resolves
        has(path, callback)          - and scope into it
        has(path, n)                 - and it has n members
        has(path, n, callback)       - and run callback on its first member
        """
        if callable(length) and callback is None:
            length, callback = None, length

        if not self.exists(path):
            raise MissingProperty(f"Property [{path}] does not exist", path=str(path))

        if length is not None:
            self.count(path, length)
        self._record(path)

        if callback is not None:
            if length is not None:
                return self.scope(path, lambda member: member.first(callback))
            return self.scope(path, callback)

        return self

    def has_nested(self, path: Path) -> AssertableJson:
        if not self.exists(path):
            raise MissingProperty(f"Expected JSON to have nested key {path}", path=str(path))
        self._record(path)
        return self

    def has_all(self, paths: Path | Iterable[Path]) -> AssertableJson:
        if isinstance(paths, (str, int)):
            return self.has(paths)
        for path in paths:
            self.has(path)
        return self

    def has_any(self, paths: Path | Iterable[Path]) -> AssertableJson:
        if isinstance(paths, (str, int)):
            return self.has(paths)
        paths = list(paths)
        present = [path for path in paths if self.exists(path)]
        if not present:
            raise MissingProperty(
                f"None of properties [{', '.join(str(p) for p in paths)}] exist",
            )
        for path in present:
            self._record(path)
        return self

    def has_values(self, values: Iterable[Any]) -> AssertableJson:
        """Assert that each value appears among the focus's direct members."""
        members = self._members("has_values()")
        for value in values:
            if not self.matcher.member(value, members):
                raise ValueMismatch(
                    f"Expected JSON to have value {format_value(value)}",
                    expected=value,
                    actual=members,
                )
        return self

    def missing(self, path: Path) -> AssertableJson:
        value = self.resolver.resolve(self._json, path)
        if value is not MISSING:
            raise ValueMismatch(
                f"Property [{path}] was found while it was expected to be missing",
                path=str(path),
                actual=value,
            )
        return self

    def missing_all(self, paths: Path | Iterable[Path]) -> AssertableJson:
        if isinstance(paths, (str, int)):
            return self.missing(paths)
        for path in paths:
            self.missing(path)
        return self

    def count(self, path_or_length: Path, length: int | None = None) -> AssertableJson:
        """
        count(n)          - the focus itself has n members
        count(path, n)    - the value at path has n members
        """
        if length is None:
            if not isinstance(path_or_length, int) or isinstance(path_or_length, bool):
                raise TypeError(
                    f"count() needs a length; got {path_or_length!r} alone "
                    "(use count(path, n) to size a path)"
                )
            actual = self.length()
            if actual != path_or_length:
                raise ValueMismatch(
                    "Root level does not have the expected size",
                    expected=f"length == {path_or_length}",
                    actual=f"length {actual}",
                )
            return self

        path = path_or_length
        actual = self.length(path)
        if actual != length:
            raise ValueMismatch(
                f"Property [{path}] does not have the expected size",
                path=str(path),
                expected=f"length == {length}",
                actual=f"length {actual}",
                details={"difference": abs(actual - length)},
            )
        self._record(path)
        return self

    def count_between(self, path: Path, low: int, high: int) -> AssertableJson:
        actual = self.length(path)
        if not low <= actual <= high:
            raise ValueMismatch(
                f"Property [{path}] size is not between {low} and {high}",
                path=str(path),
                expected=f"{low} <= length <= {high}",
                actual=f"length {actual}",
            )
        self._record(path)
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Matching
    # ─────────────────────────────────────────────────────────────────────

    def where(self, path: Path, expected: Any) -> AssertableJson:
        """
        Assert that the value at a path equals expected, or that a
        predicate accepts it when expected is callable.
        """
        actual = self._require(path)

        if _is_predicate(expected, "where"):
            if not expected(actual):
                raise ValueMismatch(
                    f"Property [{path}] was marked as invalid using a closure",
                    path=str(path),
                    actual=actual,
                )
            self._record(path)
            return self

        if not self.matcher.equals(actual, expected):
            raise ValueMismatch(
                f"Property [{path}] does not match expected value",
                path=str(path),
                expected=canonicalize(expected),
                actual=canonicalize(actual),
                details=self._type_mismatch_hint(expected, actual),
            )
        self._record(path)
        logger.debug(f"Assertion passed: where [{path}]")
        return self

    def where_not(self, path: Path, unexpected: Any) -> AssertableJson:
        actual = self._require(path)

        if _is_predicate(unexpected, "where_not"):
            if unexpected(actual):
                raise ValueMismatch(
                    f"Property [{path}] was marked as invalid using a closure",
                    path=str(path),
                    actual=actual,
                )
        elif self.matcher.equals(actual, unexpected):
            raise ValueMismatch(
                f"Property [{path}] contains value that should be missing: {format_value(unexpected)}",
                path=str(path),
                actual=actual,
            )

        self._record(path)
        return self

    def where_all(self, bindings: Mapping[str, Any]) -> AssertableJson:
        for path, expected in bindings.items():
            self.where(path, expected)
        return self

    def where_type(self, kind: Any, path: Path | None = None) -> AssertableJson:
        """
        Assert the kind of the value at a path, or of the focus itself.

        kind is a JsonKind, a kind name ("string", "number", ...) or one of
        str, int, float, bool, dict, list, None.
        """
        expected = JsonKind.coerce(kind)

        if path is None:
            actual_kind = kind_of(self._json)
            if actual_kind is not expected:
                raise TypeMismatch(
                    f"Value is not of expected type [{expected.value}]",
                    expected=expected.value,
                    actual=actual_kind.value,
                )
            return self

        actual = self._require(path)
        actual_kind = kind_of(actual)
        if actual_kind is not expected:
            raise TypeMismatch(
                f"Property [{path}] is not of expected type [{expected.value}]",
                path=str(path),
                expected=expected.value,
                actual=actual_kind.value,
                details={"value": actual},
            )
        self._record(path)
        return self

    def where_all_type(self, kind: Any, paths: Iterable[Path]) -> AssertableJson:
        for path in paths:
            self.where_type(kind, path)
        return self

    def where_contains(self, path: Path, needle: Any) -> AssertableJson:
        """
        Arrays must contain the needle (every element of an array needle),
        objects must have it as a key, and other values must contain its
        string form as a substring.
        """
        actual = self._require(path)
        if not self.matcher.contains(actual, needle):
            details: dict[str, Any] = {}
            if isinstance(actual, (list, tuple)) and isinstance(needle, (list, tuple)):
                details["absent"] = [item for item in needle if not self.matcher.member(item, actual)]
            raise ValueMismatch(
                f"Property [{path}] does not contain {format_value(needle)}",
                path=str(path),
                expected=f"{kind_of(actual).value} containing {format_value(needle)}",
                actual=actual,
                details=details,
            )
        self._record(path)
        return self

    def where_in(self, path: Path, candidates: Iterable[Any]) -> AssertableJson:
        candidates = list(candidates)
        actual = self._require(path)
        if not self.matcher.is_in(actual, candidates):
            if isinstance(actual, (list, tuple)):
                message = f"Expected key `{path}` to contain values {format_value(candidates)}"
            else:
                message = f"Expected {path} to be one of {format_value(candidates)}"
            raise ValueMismatch(message, path=str(path), expected=candidates, actual=actual)
        self._record(path)
        return self

    def where_not_in(self, path: Path, candidates: Iterable[Any]) -> AssertableJson:
        candidates = list(candidates)
        actual = self._require(path)
        if not self.matcher.is_none_of(actual, candidates):
            if isinstance(actual, (list, tuple)):
                message = f"Expected key `{path}` to not contain any of {format_value(candidates)}"
            else:
                message = f"Expected {path} to not be one of {format_value(candidates)}"
            raise ValueMismatch(message, path=str(path), expected=candidates, actual=actual)
        self._record(path)
        return self

    def matches_schema(self, schema: Mapping[str, Any] | SchemaSpec) -> AssertableJson:
        """
        Assert the focus against a schema of path -> kind; keys ending in
        ``?`` are optional. Every violation is reported, not just the first.
        """
        result = check_schema(self._json, schema, self.resolver)
        for path in result.checked:
            self._record(path)
        if not result.is_valid:
            raise SchemaMismatch(result.violations)
        return self

    def has_match(self, expression: str) -> AssertableJson:
        """Assert that a JSONPath expression matches at least one value."""
        if not self.query(expression):
            raise MissingProperty(f"No value matches JSONPath [{expression}]", path=expression)
        field = root_field(expression)
        if field is not None:
            self._tracker.record_key(field)
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Numeric
    # ─────────────────────────────────────────────────────────────────────

    def is_greater_than(self, path: Path, value: float) -> AssertableJson:
        return self._compare(path, lambda n: n > value, f"greater than {value}")

    def is_less_than(self, path: Path, value: float) -> AssertableJson:
        return self._compare(path, lambda n: n < value, f"less than {value}")

    def is_greater_or_equal(self, path: Path, value: float) -> AssertableJson:
        return self._compare(path, lambda n: n >= value, f"greater than or equal to {value}")

    def is_less_or_equal(self, path: Path, value: float) -> AssertableJson:
        return self._compare(path, lambda n: n <= value, f"less than or equal to {value}")

    def equals(self, path: Path, value: float) -> AssertableJson:
        return self._compare(path, lambda n: n == value, f"equal to {value}")

    def not_equals(self, path: Path, value: float) -> AssertableJson:
        return self._compare(path, lambda n: n != value, f"not equal to {value}")

    def is_between(self, path: Path, low: float, high: float) -> AssertableJson:
        return self._compare(path, lambda n: low <= n <= high, f"between {low} and {high}")

    def is_positive(self, path: Path) -> AssertableJson:
        return self._compare(path, lambda n: n > 0, "positive")

    def is_negative(self, path: Path) -> AssertableJson:
        return self._compare(path, lambda n: n < 0, "negative")

    def is_divisible_by(self, path: Path, divisor: float) -> AssertableJson:
        return self._compare(path, lambda n: _divides(divisor, n), f"divisible by {divisor}")

    def is_multiple_of(self, path: Path, factor: float) -> AssertableJson:
        return self._compare(path, lambda n: _divides(factor, n), f"a multiple of {factor}")

    # ─────────────────────────────────────────────────────────────────────
    # Scoping and flow
    # ─────────────────────────────────────────────────────────────────────

    def scope(self, path: Path, callback: Callback) -> AssertableJson:
        """Run callback on a fresh context bound to the value at path."""
        self.scopes.scope(self, path, callback)
        self._record(path)
        return self

    def each(self, callback: Callback) -> AssertableJson:
        return self.scopes.each(self, callback)

    def first(self, callback: Callback) -> AssertableJson:
        return self.scopes.first(self, callback)

    def when(self, condition: bool | Callable[[], bool], callback: Callback) -> AssertableJson:
        return self.scopes.when(self, condition, callback)

    def unless(self, condition: bool | Callable[[], bool], callback: Callback) -> AssertableJson:
        return self.scopes.unless(self, condition, callback)

    def tap(self, callback: Callback) -> AssertableJson:
        callback(self)
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Interaction tracking
    # ─────────────────────────────────────────────────────────────────────

    def etc(self) -> AssertableJson:
        """Mark every top-level key as inspected."""
        self._tracker.mark_all_interacted()
        return self

    def verify_interacted(self) -> AssertableJson:
        """Fail if any top-level key of an object focus was never inspected."""
        self._tracker.verify_interacted()
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Debugging
    # ─────────────────────────────────────────────────────────────────────

    def dump(self, console: Console | None = None) -> AssertableJson:
        """Pretty-print the focus."""
        console = console or Console()
        console.print_json(data=self._json, default=str)
        return self

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _require(self, path: Path) -> Any:
        return self.resolver.require(self._json, path)

    def _record(self, path: Path) -> None:
        self._tracker.record_access(path)

    def _members(self, operation: str) -> list[Any]:
        if isinstance(self._json, Mapping):
            return list(self._json.values())
        if isinstance(self._json, (list, tuple)):
            return list(self._json)
        raise TypeMismatch(
            f"{operation} requires an object or array",
            expected="object or array",
            actual=kind_of(self._json).value,
        )

    def _compare(self, path: Path, predicate: Callable[[Any], bool], condition: str) -> AssertableJson:
        actual = self._require(path)
        if kind_of(actual) is not JsonKind.NUMBER:
            raise TypeMismatch(
                f"Property [{path}] is not a number",
                path=str(path),
                expected="number",
                actual=actual,
            )
        if not predicate(actual):
            raise ValueMismatch(
                f"Property [{path}] is not {condition}",
                path=str(path),
                expected=condition,
                actual=actual,
            )
        self._record(path)
        return self

    def _type_mismatch_hint(self, expected: Any, actual: Any) -> dict[str, Any]:
        """Generate a hint if kinds don't match."""
        expected_kind, actual_kind = kind_of(expected), kind_of(actual)
        if expected_kind is not actual_kind:
            return {
                "hint": f"Type mismatch: expected {expected_kind.value}, got {actual_kind.value}"
            }
        return {}


def _is_predicate(expected: Any, operation: str) -> bool:
    """Callables are predicates; classes are rejected rather than called."""
    if isinstance(expected, type):
        raise TypeError(
            f"{operation}() compares values, got the type {expected.__name__}; "
            "use where_type() to check kinds"
        )
    return callable(expected)


def _divides(divisor: float, value: float) -> bool:
    if divisor == 0:
        return False
    if isinstance(divisor, int) and isinstance(value, int):
        return value % divisor == 0
    return math.isclose(math.remainder(value, divisor), 0.0, abs_tol=1e-9)

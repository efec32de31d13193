"""
Validation for check suite files.

This module checks raw parsed YAML against the suite format and reports
every problem it finds with a helpful message, before anything runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidPath
from ..matching.schema import SchemaSpec
from ..paths.jsonpath import compile_jsonpath
from ..paths.resolver import split_path
from ..types import JsonKind
from .models import (
    LIST_VALUE_OPS,
    MAPPING_VALUE_OPS,
    NESTED_OPS,
    NUMERIC_VALUE_OPS,
    PATH_REQUIRED_OPS,
    PATHLESS_OPS,
    RANGE_VALUE_OPS,
    VALUE_REQUIRED_OPS,
    CheckOp,
)


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "checks[0].checks[2].value"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of suite validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Suite validation passed"
        lines = [f"Suite validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Suite Validator
# ─────────────────────────────────────────────────────────────────────────────

class SuiteValidator:
    """Validates raw parsed YAML against the suite format."""

    REQUIRED_TOP_LEVEL = {"version", "name", "checks"}
    OPTIONAL_TOP_LEVEL = {"defaults"}
    CHECK_FIELDS = {"id", "op", "path", "value", "checks"}
    DEFAULT_FIELDS = {"verify_interacted"}
    VALID_OPS = {op.value for op in CheckOp}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()
        self.check_ids: set[str] = set()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_name()
        self._validate_defaults()
        self._validate_checks(self.data.get("checks"), "checks")

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your suite file"
            )

        for key in sorted(unknown, key=str):
            self.result.add_error(
                str(key),
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version < 1:
            self.result.add_error(
                "version",
                "Must be >= 1",
                value=version
            )

    def _validate_name(self) -> None:
        name = self.data.get("name")
        if not isinstance(name, str):
            self.result.add_error(
                "name",
                "Must be a string",
                value=name
            )
        elif not name.strip():
            self.result.add_error(
                "name",
                "Cannot be empty",
                suggestion="Provide a descriptive name for your suite"
            )

    def _validate_defaults(self) -> None:
        defaults = self.data.get("defaults")
        if defaults is None:
            return
        if not isinstance(defaults, dict):
            self.result.add_error(
                "defaults",
                "Must be an object",
                value=defaults
            )
            return

        for key in defaults:
            if key not in self.DEFAULT_FIELDS:
                self.result.add_error(
                    f"defaults.{key}",
                    "Unknown setting",
                    suggestion=f"Valid settings: {', '.join(sorted(self.DEFAULT_FIELDS))}"
                )

        verify = defaults.get("verify_interacted")
        if verify is not None and not isinstance(verify, bool):
            self.result.add_error(
                "defaults.verify_interacted",
                "Must be a boolean",
                value=verify
            )

    def _validate_checks(self, checks: Any, path: str) -> None:
        if not isinstance(checks, list):
            self.result.add_error(
                path,
                "Must be a list",
                value=checks
            )
            return

        if len(checks) == 0:
            self.result.add_error(
                path,
                "Must contain at least one check",
                suggestion="Add a check such as '- op: has' with a 'path'"
            )
            return

        for i, check in enumerate(checks):
            self._validate_check(f"{path}[{i}]", check)

    def _validate_check(self, path: str, check: Any) -> None:
        if not isinstance(check, dict):
            self.result.add_error(
                path,
                "Check must be an object",
                value=check
            )
            return

        for key in check:
            if key not in self.CHECK_FIELDS:
                self.result.add_error(
                    f"{path}.{key}",
                    "Unknown check field",
                    suggestion=f"Valid fields: {', '.join(sorted(self.CHECK_FIELDS))}"
                )

        check_id = check.get("id")
        if check_id is not None:
            if not isinstance(check_id, str) or not check_id:
                self.result.add_error(
                    f"{path}.id",
                    "Check id must be a non-empty string",
                    value=check_id
                )
            elif check_id in self.check_ids:
                self.result.add_error(
                    f"{path}.id",
                    "Duplicate check id",
                    value=check_id,
                    suggestion="Each check must have a unique id"
                )
            else:
                self.check_ids.add(check_id)

        op_name = check.get("op")
        if op_name not in self.VALID_OPS:
            self.result.add_error(
                f"{path}.op",
                "Invalid check operator",
                value=op_name,
                suggestion=f"Valid operators: {', '.join(sorted(self.VALID_OPS))}"
            )
            return

        op = CheckOp(op_name)
        self._validate_check_path(path, op, check)
        self._validate_check_value(path, op, check)

        if op in NESTED_OPS:
            self._validate_checks(check.get("checks"), f"{path}.checks")
        elif "checks" in check:
            self.result.add_error(
                f"{path}.checks",
                f"Operator '{op.value}' does not take nested checks",
                suggestion=f"Only {', '.join(sorted(o.value for o in NESTED_OPS))} take nested checks"
            )

    def _validate_check_path(self, path: str, op: CheckOp, check: dict) -> None:
        check_path = check.get("path")

        if check_path is None:
            if op in PATH_REQUIRED_OPS:
                self.result.add_error(
                    f"{path}.path",
                    f"Operator '{op.value}' requires a 'path' field"
                )
            return

        if op in PATHLESS_OPS:
            self.result.add_error(
                f"{path}.path",
                f"Operator '{op.value}' does not take a 'path' field",
                value=check_path
            )
            return

        if op is CheckOp.HAS_MATCH:
            try:
                compile_jsonpath(check_path)
            except InvalidPath as e:
                self.result.add_error(f"{path}.path", e.message, value=check_path)
            return

        try:
            split_path(check_path)
        except InvalidPath as e:
            self.result.add_error(
                f"{path}.path",
                e.message,
                value=check_path,
                suggestion="Use a dot path such as 'user.posts.0.title'"
            )

    def _validate_check_value(self, path: str, op: CheckOp, check: dict) -> None:
        if "value" not in check:
            if op in VALUE_REQUIRED_OPS:
                self.result.add_error(
                    f"{path}.value",
                    f"Operator '{op.value}' requires a 'value' field"
                )
            return

        value = check["value"]
        value_path = f"{path}.value"

        if op not in VALUE_REQUIRED_OPS:
            self.result.add_error(
                value_path,
                f"Operator '{op.value}' does not take a 'value' field",
                value=value
            )
        elif op in RANGE_VALUE_OPS:
            if not (isinstance(value, list) and len(value) == 2 and all(_is_number(v) for v in value)):
                self.result.add_error(
                    value_path,
                    "Must be a [low, high] pair of numbers",
                    value=value
                )
        elif op in LIST_VALUE_OPS:
            if not isinstance(value, list):
                self.result.add_error(value_path, "Must be a list", value=value)
        elif op in MAPPING_VALUE_OPS:
            if not isinstance(value, dict):
                self.result.add_error(value_path, "Must be an object", value=value)
            elif op is CheckOp.MATCHES_SCHEMA:
                try:
                    SchemaSpec.from_mapping(value)
                except (InvalidPath, ValueError) as e:
                    self.result.add_error(
                        value_path,
                        f"Invalid schema: {getattr(e, 'message', e)}",
                        suggestion=f"Kinds are: {', '.join(k.value for k in JsonKind)}"
                    )
        elif op in NUMERIC_VALUE_OPS:
            if not _is_number(value):
                self.result.add_error(value_path, "Must be a number", value=value)
            elif op is CheckOp.COUNT and not isinstance(value, int):
                self.result.add_error(value_path, "Must be an integer", value=value)
        elif op is CheckOp.WHERE_TYPE:
            try:
                JsonKind.coerce(value)
            except ValueError:
                self.result.add_error(
                    value_path,
                    "Unknown kind",
                    value=value,
                    suggestion=f"Kinds are: {', '.join(k.value for k in JsonKind)}"
                )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

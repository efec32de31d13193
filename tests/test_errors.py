from __future__ import annotations

from assertable_json.errors import (
    NOT_GIVEN,
    ErrorKind,
    InvalidPath,
    JsonAssertionError,
    MissingProperty,
    SchemaMismatch,
    UninteractedProperty,
    ValueMismatch,
    format_value,
)
from assertable_json.matching import SchemaViolation, ViolationKind


def test_all_failures_are_assertion_errors():
    for cls in (MissingProperty, ValueMismatch, InvalidPath):
        assert issubclass(cls, JsonAssertionError)
        assert issubclass(cls, AssertionError)
    assert issubclass(InvalidPath, ValueError)


def test_message_renders_path_expected_and_actual():
    error = ValueMismatch(
        "Property [a] does not match expected value",
        path="a",
        expected={"x": 1},
        actual="text",
        details={"hint": "Type mismatch: expected object, got string"},
    )
    text = str(error)
    assert text.startswith("❌ VALUE MISMATCH: Property [a] does not match expected value")
    assert "   Path: a" in text
    assert '   Expected: {"x": 1}' in text
    assert "   Actual:   'text'" in text
    assert "hint" in text


def test_unset_fields_are_omitted():
    error = MissingProperty("Property [a] does not exist")
    assert error.expected is NOT_GIVEN
    assert str(error) == "❌ MISSING PROPERTY: Property [a] does not exist"


def test_null_expected_is_rendered():
    error = ValueMismatch("mismatch", expected=None, actual=0)
    assert "   Expected: null" in str(error)


def test_uninteracted_property():
    error = UninteractedProperty(["b", "c"])
    assert error.kind is ErrorKind.UNINTERACTED_PROPERTY
    assert error.uninteracted == ["b", "c"]
    assert error.details == {"uninteracted": ["b", "c"]}


def test_schema_mismatch_lists_violations():
    violations = [
        SchemaViolation("id", ViolationKind.MISSING_REQUIRED_FIELD, "Required field id is missing"),
        SchemaViolation("age", ViolationKind.TYPE_MISMATCH, "Expected age to be of type number but was string", actual="x"),
    ]
    error = SchemaMismatch(violations)
    lines = str(error).splitlines()
    assert lines[0] == "❌ SCHEMA MISMATCH: Schema validation failed with 2 violation(s)"
    assert lines[-2] == "   - id: Required field id is missing"
    assert lines[-1] == "   - age: Expected age to be of type number but was string (got 'x')"


def test_format_value_truncates():
    assert format_value(None) == "null"
    assert format_value(True) == "true"
    assert format_value("x" * 200).endswith("...")
    assert len(format_value(list(range(100)))) == 100

from __future__ import annotations

import pytest
from rich.console import Console

from assertable_json import AssertableJson, JsonKind
from assertable_json.errors import (
    ErrorKind,
    InvalidPath,
    MissingProperty,
    NotSizeable,
    TypeMismatch,
    ValueMismatch,
)


# =============================================================================
# Presence
# =============================================================================


class TestHas:
    def test_nested_and_indexed_paths(self, assertable):
        assertable.has("user.profile.name.first").has("posts.0.title").has("stats")

    def test_missing_path(self, assertable):
        with pytest.raises(MissingProperty) as exc_info:
            assertable.has("user.nope")
        assert exc_info.value.message == "Property [user.nope] does not exist"
        assert exc_info.value.path == "user.nope"
        assert exc_info.value.kind is ErrorKind.MISSING_PROPERTY

    def test_null_value_is_present(self):
        AssertableJson({"deleted_at": None}).has("deleted_at")

    def test_with_length(self, assertable):
        assertable.has("posts", 2)
        with pytest.raises(ValueMismatch):
            assertable.has("posts", 3)

    def test_with_callback(self, assertable):
        seen = []
        assertable.has("user.settings", lambda settings: seen.append(settings.json["theme"]))
        assert seen == ["dark"]

    def test_with_length_and_callback_scopes_first_member(self, assertable):
        assertable.has("posts", 2, lambda post: post.where("id", 1).etc())

    def test_invalid_path(self, assertable):
        with pytest.raises(InvalidPath):
            assertable.has("user..profile")

    def test_has_nested(self, assertable):
        assertable.has_nested("user.settings.favorites.2")
        with pytest.raises(MissingProperty, match="nested key"):
            assertable.has_nested("user.settings.favorites.3")

    def test_has_all(self, assertable):
        assertable.has_all(["user", "posts.1", "stats.views"])
        assertable.has_all("stats")
        with pytest.raises(MissingProperty):
            assertable.has_all(["user", "nope"])

    def test_has_any(self, assertable):
        assertable.has_any(["nope", "stats"])
        with pytest.raises(MissingProperty):
            assertable.has_any(["nope", "also.nope"])

    def test_has_values(self):
        AssertableJson({"a": 1, "b": {"x": [1]}}).has_values([1, {"x": [1]}])
        AssertableJson(["a", "b"]).has_values(["b"])
        with pytest.raises(ValueMismatch):
            AssertableJson({"a": 1}).has_values([True])
        with pytest.raises(TypeMismatch):
            AssertableJson("text").has_values(["t"])


class TestMissing:
    def test_missing(self, assertable):
        assertable.missing("user.email").missing("posts.5").missing("stats.views.x")

    def test_present_value_fails(self, assertable):
        with pytest.raises(ValueMismatch, match="expected to be missing"):
            assertable.missing("stats.views")

    def test_null_is_not_missing(self):
        with pytest.raises(ValueMismatch):
            AssertableJson({"a": None}).missing("a")

    def test_missing_all(self, assertable):
        assertable.missing_all(["x", "y.z"])
        with pytest.raises(ValueMismatch):
            assertable.missing_all(["x", "posts"])


# =============================================================================
# Size
# =============================================================================


class TestCount:
    def test_count_root(self, assertable):
        assertable.count(3)
        with pytest.raises(ValueMismatch, match="Root level"):
            assertable.count(4)

    def test_count_path(self, assertable):
        assertable.count("posts", 2).count("user.profile", 7).count("user.profile.tags", 2)

    def test_count_mismatch_details(self, assertable):
        with pytest.raises(ValueMismatch) as exc_info:
            assertable.count("posts", 5)
        error = exc_info.value
        assert error.message == "Property [posts] does not have the expected size"
        assert error.expected == "length == 5"
        assert error.actual == "length 2"
        assert error.details == {"difference": 3}

    def test_string_is_not_sizeable(self, assertable):
        with pytest.raises(NotSizeable):
            assertable.count("user.settings.theme", 4)

    def test_count_needs_a_length(self, assertable):
        with pytest.raises(TypeError, match="needs a length"):
            assertable.count("posts")
        with pytest.raises(TypeError):
            assertable.count(True)

    def test_count_missing_path(self, assertable):
        with pytest.raises(MissingProperty):
            assertable.count("nope", 1)

    def test_count_between(self, assertable):
        assertable.count_between("user.profile.scores", 1, 3)
        with pytest.raises(ValueMismatch, match="not between 4 and 5"):
            assertable.count_between("user.profile.scores", 4, 5)


# =============================================================================
# Matching
# =============================================================================


class TestWhere:
    def test_scalar_values(self, assertable):
        (assertable
            .where("user.profile.age", 30)
            .where("user.profile.active", True)
            .where("user.profile.rating", 4.5)
            .where("posts.1.title", "Second Post"))

    def test_object_key_order_is_irrelevant(self, assertable):
        assertable.where("user.profile.name", {"last": "Doe", "first": "John"})

    def test_array_order_matters(self, assertable):
        with pytest.raises(ValueMismatch):
            assertable.where("user.profile.tags", ["python", "developer"])

    def test_bool_is_not_number(self):
        with pytest.raises(ValueMismatch) as exc_info:
            AssertableJson({"flag": True}).where("flag", 1)
        assert exc_info.value.details == {"hint": "Type mismatch: expected number, got boolean"}

    def test_mismatch_reports_canonical_values(self):
        with pytest.raises(ValueMismatch) as exc_info:
            AssertableJson({"o": {"b": 1, "a": 2}}).where("o", {"a": 3, "b": 1})
        error = exc_info.value
        assert error.message == "Property [o] does not match expected value"
        assert list(error.actual) == ["a", "b"]
        assert error.expected == {"a": 3, "b": 1}

    def test_predicate(self, assertable):
        assertable.where("user.profile.age", lambda age: age >= 18)
        with pytest.raises(ValueMismatch, match="closure"):
            assertable.where("user.profile.age", lambda age: age > 60)

    def test_missing_path(self, assertable):
        with pytest.raises(MissingProperty):
            assertable.where("user.profile.email", "x")

    def test_where_not(self, assertable):
        assertable.where_not("user.profile.age", 31).where_not("user.profile.age", lambda age: age < 0)
        with pytest.raises(ValueMismatch, match="should be missing"):
            assertable.where_not("user.profile.age", 30)

    def test_types_are_not_predicates(self):
        context = AssertableJson({"age": "thirty"})
        with pytest.raises(TypeError, match="where_type"):
            context.where("age", str)
        with pytest.raises(TypeError, match="where_type"):
            context.where("age", int)
        with pytest.raises(TypeError, match="where_type"):
            context.where_not("age", int)
        assert context.interacted == frozenset()

    def test_where_all(self, assertable):
        assertable.where_all({"user.profile.age": 30, "stats.likes": 25})
        with pytest.raises(ValueMismatch):
            assertable.where_all({"user.profile.age": 30, "stats.likes": 26})


class TestWhereType:
    def test_kinds(self, assertable):
        (assertable
            .where_type("string", "user.settings.theme")
            .where_type(JsonKind.NUMBER, "user.profile.age")
            .where_type(float, "user.profile.rating")
            .where_type(bool, "user.profile.active")
            .where_type(list, "posts")
            .where_type(dict, "stats"))

    def test_mismatch(self, assertable):
        with pytest.raises(TypeMismatch) as exc_info:
            assertable.where_type("number", "user.profile.active")
        assert exc_info.value.expected == "number"
        assert exc_info.value.actual == "boolean"

    def test_focus_without_path(self):
        AssertableJson(None).where_type("null")
        with pytest.raises(TypeMismatch):
            AssertableJson([1]).where_type("object")

    def test_unknown_kind(self, assertable):
        with pytest.raises(ValueError):
            assertable.where_type("integer", "user.profile.age")

    def test_where_all_type(self, assertable):
        assertable.where_all_type("number", ["stats.views", "stats.likes", "stats.multiplier"])
        with pytest.raises(TypeMismatch):
            assertable.where_all_type("string", ["user.settings.theme", "stats.views"])


class TestContainment:
    def test_array_contains(self, assertable):
        assertable.where_contains("user.profile.tags", "python")
        assertable.where_contains("user.profile.scores", [85, 95])

    def test_array_reports_absent_elements(self, assertable):
        with pytest.raises(ValueMismatch) as exc_info:
            assertable.where_contains("user.profile.scores", [85, 100, 101])
        assert exc_info.value.details == {"absent": [100, 101]}

    def test_object_contains_key(self, assertable):
        assertable.where_contains("user.settings", "theme")
        with pytest.raises(ValueMismatch):
            assertable.where_contains("user.settings", "language")

    def test_string_substring(self, assertable):
        assertable.where_contains("posts.0.title", "First")
        with pytest.raises(ValueMismatch):
            assertable.where_contains("posts.0.title", "Third")

    def test_where_in(self, assertable):
        assertable.where_in("user.settings.theme", ["light", "dark"])
        assertable.where_in("user.profile.scores", [85, 90])
        with pytest.raises(ValueMismatch, match="to be one of"):
            assertable.where_in("user.profile.age", [25, 35])
        with pytest.raises(ValueMismatch, match="to contain values"):
            assertable.where_in("user.profile.scores", [85, 100])

    def test_where_not_in(self, assertable):
        assertable.where_not_in("user.profile.age", [25, 35])
        assertable.where_not_in("user.profile.scores", [1, 2])
        with pytest.raises(ValueMismatch):
            assertable.where_not_in("user.profile.age", [30])
        with pytest.raises(ValueMismatch):
            assertable.where_not_in("user.profile.scores", [90, 1000])


# =============================================================================
# Numeric
# =============================================================================


class TestNumeric:
    def test_comparisons(self, assertable):
        (assertable
            .is_greater_than("stats.views", 50)
            .is_less_than("stats.likes", 50)
            .is_greater_or_equal("stats.views", 100)
            .is_less_or_equal("stats.views", 100)
            .equals("stats.multiplier", 2.5)
            .not_equals("stats.likes", 26)
            .is_between("user.profile.rating", 4, 5))

    def test_sign(self, assertable):
        assertable.is_positive("stats.views").is_negative("stats.dislikes")
        with pytest.raises(ValueMismatch, match="is not positive"):
            assertable.is_positive("user.profile.negative")

    def test_divisibility(self, assertable):
        assertable.is_divisible_by("stats.views", 5).is_multiple_of("stats.likes", 5)
        assertable.is_divisible_by("stats.multiplier", 0.5)
        with pytest.raises(ValueMismatch):
            assertable.is_divisible_by("stats.likes", 10)
        with pytest.raises(ValueMismatch):
            assertable.is_divisible_by("stats.views", 0)

    def test_failure_message(self, assertable):
        with pytest.raises(ValueMismatch) as exc_info:
            assertable.is_greater_than("stats.likes", 100)
        assert exc_info.value.message == "Property [stats.likes] is not greater than 100"
        assert exc_info.value.actual == 25

    def test_non_numbers(self, assertable):
        with pytest.raises(TypeMismatch, match="is not a number"):
            assertable.is_positive("user.settings.theme")
        with pytest.raises(TypeMismatch):
            assertable.is_positive("user.profile.active")

    def test_missing_path(self, assertable):
        with pytest.raises(MissingProperty):
            assertable.is_positive("stats.shares")


# =============================================================================
# JSONPath, construction, debugging
# =============================================================================


class TestMisc:
    def test_query_and_has_match(self, assertable):
        assert assertable.query("$.posts[*].id") == [1, 2]
        assertable.has_match("$.posts[*].title")
        assert "posts" in assertable.interacted
        with pytest.raises(MissingProperty):
            assertable.has_match("$.comments[*]")

    def test_dotted_keys_reachable_through_jsonpath(self):
        context = AssertableJson({"a.b": 1})
        assert not context.exists("a.b")
        assert context.query("$['a.b']") == [1]

    def test_from_json(self):
        context = AssertableJson.from_json('{"a": [1, 2]}')
        context.count("a", 2).verify_interacted()

    def test_get_and_length(self, assertable):
        assert assertable.get("posts.1.id") == 2
        assert assertable.get("posts.9", "fallback") == "fallback"
        assert assertable.length("posts") == 2
        assert assertable.length() == 3

    def test_dump(self):
        console = Console(record=True, width=80)
        AssertableJson({"a": 1}).dump(console)
        assert '"a": 1' in console.export_text()

    def test_error_is_assertion_error(self, assertable):
        with pytest.raises(AssertionError):
            assertable.where("stats.views", 99)

    def test_chain_stops_at_first_failure(self, assertable):
        calls = []
        with pytest.raises(MissingProperty):
            assertable.has("nope").tap(calls.append)
        assert calls == []

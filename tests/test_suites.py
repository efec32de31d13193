from __future__ import annotations

import json
import textwrap

import pytest

from assertable_json.reporting import CheckStatus, SuiteStatus
from assertable_json.suites import (
    CheckOp,
    load_document,
    load_suite,
    load_suite_yaml,
    run_suite,
)


def load(text: str):
    suite, result = load_suite_yaml(textwrap.dedent(text))
    assert result.is_valid, str(result)
    return suite


def errors_of(text: str) -> list[str]:
    suite, result = load_suite_yaml(textwrap.dedent(text))
    assert suite is None
    return [error.path for error in result.errors]


# =============================================================================
# Validation
# =============================================================================


class TestValidation:
    def test_missing_top_level_fields(self):
        assert errors_of("name: x\n") == ["checks", "version"]

    def test_unknown_top_level_field(self):
        assert "extra" in errors_of("""
            version: 1
            name: x
            extra: true
            checks:
              - op: has
                path: a
        """)

    def test_non_mapping_content(self):
        suite, result = load_suite_yaml("- a\n- b\n")
        assert suite is None
        assert "YAML object" in result.errors[0].message

    def test_invalid_yaml(self):
        suite, result = load_suite_yaml("version: [1\n")
        assert suite is None
        assert result.errors[0].message.startswith("Invalid YAML syntax")

    def test_errors_are_collected(self):
        paths = errors_of("""
            version: "one"
            name: ""
            checks:
              - op: bogus
              - op: where
              - op: count_between
                path: items
                value: [1]
              - op: has
                path: "a..b"
        """)
        assert paths == [
            "version",
            "name",
            "checks[0].op",
            "checks[1].path",
            "checks[1].value",
            "checks[2].value",
            "checks[3].path",
        ]

    def test_empty_checks(self):
        assert errors_of("""
            version: 1
            name: x
            checks: []
        """) == ["checks"]

    def test_duplicate_ids(self):
        assert errors_of("""
            version: 1
            name: x
            checks:
              - id: dup
                op: has
                path: a
              - id: dup
                op: has
                path: b
        """) == ["checks[1].id"]

    def test_nested_checks_rules(self):
        assert errors_of("""
            version: 1
            name: x
            checks:
              - op: scope
                path: user
              - op: has
                path: a
                checks:
                  - op: etc
        """) == ["checks[0].checks", "checks[1].checks"]

    def test_path_rules(self):
        assert errors_of("""
            version: 1
            name: x
            checks:
              - op: etc
                path: a
              - op: has_match
                path: "$.a["
        """) == ["checks[0].path", "checks[1].path"]

    def test_value_rules(self):
        assert errors_of("""
            version: 1
            name: x
            checks:
              - op: where_type
                path: a
                value: integer
              - op: matches_schema
                value: {id: integer}
              - op: is_positive
                path: a
                value: 1
              - op: is_greater_than
                path: a
                value: "10"
              - op: where_in
                path: a
                value: 1
        """) == [
            "checks[0].value",
            "checks[1].value",
            "checks[2].value",
            "checks[3].value",
            "checks[4].value",
        ]

    def test_count_value_must_be_an_integer(self):
        assert errors_of("""
            version: 1
            name: x
            checks:
              - op: count
                value: 2.5
        """) == ["checks[0].value"]

    def test_defaults(self):
        assert errors_of("""
            version: 1
            name: x
            defaults:
              verify_interacted: "yes"
              colour: red
            checks:
              - op: etc
        """) == ["defaults.colour", "defaults.verify_interacted"]


# =============================================================================
# Parsing and loading
# =============================================================================


class TestParsing:
    def test_auto_ids_skip_explicit_ids(self):
        suite = load("""
            version: 1
            name: ids
            checks:
              - op: has
                path: a
              - id: check-2
                op: has
                path: b
              - op: scope
                path: c
                checks:
                  - op: etc
        """)
        assert [check.id for check in suite.checks] == ["check-1", "check-2", "check-3"]
        assert suite.checks[2].checks[0].id == "check-4"
        assert suite.checks[2].op is CheckOp.SCOPE

    def test_defaults_parsed(self):
        suite = load("""
            version: 2
            name: d
            defaults:
              verify_interacted: true
            checks:
              - op: etc
        """)
        assert suite.version == 2
        assert suite.defaults.verify_interacted is True

    def test_load_suite_from_file(self, tmp_path):
        path = tmp_path / "suite.yaml"
        path.write_text("version: 1\nname: file\nchecks:\n  - op: has\n    path: a\n")
        suite, result = load_suite(path)
        assert result.is_valid
        assert suite.name == "file"

    def test_load_suite_missing_file(self, tmp_path):
        suite, result = load_suite(tmp_path / "nope.yaml")
        assert suite is None
        assert result.errors[0].message == "File not found"

    def test_load_document(self, tmp_path):
        json_path = tmp_path / "doc.json"
        json_path.write_text(json.dumps({"a": [1, 2]}))
        yaml_path = tmp_path / "doc.yml"
        yaml_path.write_text("a:\n  - 1\n  - 2\n")

        assert load_document(json_path)[0] == {"a": [1, 2]}
        assert load_document(yaml_path)[0] == {"a": [1, 2]}

    def test_non_utf8_files_are_reported(self, tmp_path):
        document = tmp_path / "doc.json"
        document.write_bytes(b'{"a": "\xff"}')
        data, result = load_document(document)
        assert data is None
        assert result.errors[0].message.startswith("File is not valid UTF-8")

        suite_file = tmp_path / "suite.yaml"
        suite_file.write_bytes(b"version: 1\nname: \xff\nchecks: []\n")
        suite, result = load_suite(suite_file)
        assert suite is None
        assert result.errors[0].message.startswith("File is not valid UTF-8")

    def test_load_document_invalid_json(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("{not json")
        data, result = load_document(path)
        assert data is None
        assert result.errors[0].message.startswith("Invalid JSON")


# =============================================================================
# Running
# =============================================================================


USER_SUITE = """
    version: 1
    name: user response
    defaults:
      verify_interacted: true
    checks:
      - id: user
        op: scope
        path: user
        checks:
          - op: where
            path: id
            value: 1
          - op: where_type
            path: name
            value: string
          - op: where_contains
            path: roles
            value: admin
      - id: meta-schema
        op: matches_schema
        value:
          meta.page: number
          meta.cursor?: string
      - id: posts
        op: each
        path: posts
        checks:
          - op: is_positive
            path: id
          - op: has
            path: title
      - id: post-count
        op: count_between
        path: posts
        value: [1, 5]
"""


@pytest.fixture
def response() -> dict:
    return {
        "user": {"id": 1, "name": "Ada", "roles": ["admin", "dev"]},
        "meta": {"page": 1},
        "posts": [{"id": 1, "title": "a"}, {"id": 2, "title": "b"}],
    }


class TestRunner:
    def test_passing_suite(self, response):
        report = run_suite(load(USER_SUITE), response)
        assert report.passed
        assert report.status is SuiteStatus.PASSED
        assert [c.check_id for c in report.checks][-1] == "_verify_interacted"
        assert report.passed_checks == 5

    def test_failure_aborts_chain(self, response):
        response["user"]["id"] = 2
        report = run_suite(load(USER_SUITE), response)

        assert report.status is SuiteStatus.FAILED
        first = report.get_check("user")
        assert first.status is CheckStatus.FAILED
        assert first.failure_message == "Property [id] does not match expected value"
        assert first.failure_details["kind"] == "value_mismatch"
        assert first.expected_value == 1
        assert first.actual_value == 2

        skipped = [c for c in report.checks if c.status is CheckStatus.SKIPPED]
        assert len(skipped) == 4
        assert skipped[0].skip_reason == "chain aborted at 'user'"
        assert report.aborted_by == "user"

    def test_schema_failure_lists_violations(self, response):
        response["meta"] = {"page": "1", "cursor": 5}
        report = run_suite(load(USER_SUITE), response)
        record = report.get_check("meta-schema")
        assert record.status is CheckStatus.FAILED
        assert record.failure_details["kind"] == "schema_mismatch"
        assert len(record.failure_details["violations"]) == 2

    def test_uninteracted_key_fails_coverage(self, response):
        response["debug"] = True
        report = run_suite(load(USER_SUITE), response)
        record = report.get_check("_verify_interacted")
        assert record.status is CheckStatus.FAILED
        assert record.failure_details["uninteracted"] == ["debug"]

    def test_scoped_checks_do_not_cover_parent_keys(self):
        suite = load("""
            version: 1
            name: coverage
            defaults:
              verify_interacted: true
            checks:
              - op: scope
                path: a
                checks:
                  - op: has
                    path: x
        """)
        assert run_suite(suite, {"a": {"x": 1, "y": 2}}).passed
        assert not run_suite(suite, {"a": {"x": 1}, "b": 2}).passed

    def test_count_without_path_and_first(self):
        suite = load("""
            version: 1
            name: array root
            checks:
              - op: count
                value: 2
              - op: first
                checks:
                  - op: where
                    path: id
                    value: 1
              - op: each
                checks:
                  - op: where_type
                    value: object
        """)
        assert run_suite(suite, [{"id": 1}, {"id": 2}]).passed

    def test_unexpected_exception_is_error(self):
        suite = load("""
            version: 1
            name: bad data
            checks:
              - id: kind
                op: where
                path: a
                value: 1
              - op: etc
        """)
        report = run_suite(suite, {"a": {1, 2}})
        assert report.status is SuiteStatus.ERROR
        assert report.get_check("kind").error_message.startswith("TypeError")
        assert report.checks[1].status is CheckStatus.SKIPPED

    def test_has_match_and_numeric_ops(self, response):
        suite = load("""
            version: 1
            name: numbers
            checks:
              - op: has_match
                path: "$.posts[*].title"
              - op: is_between
                path: meta.page
                value: [1, 3]
              - op: is_divisible_by
                path: posts.1.id
                value: 2
              - op: where_in
                path: user.name
                value: [Ada, Grace]
              - op: missing
                path: user.email
        """)
        assert run_suite(suite, response).passed

"""
Suite execution.

Runs a parsed CheckSuite against a document as one assertion chain: the
first failing check aborts the chain and the remaining checks are
recorded as skipped.
"""

from __future__ import annotations

import logging
from typing import Any

from ..assertions.engine import AssertableJson
from ..errors import NOT_GIVEN, JsonAssertionError, SchemaMismatch
from ..reporting import Reporter, SuiteReport
from .models import Check, CheckOp, CheckSuite

logger = logging.getLogger(__name__)

COVERAGE_CHECK_ID = "_verify_interacted"


def apply_check(context: AssertableJson, check: Check) -> AssertableJson:
    """Apply one check (and its nested checks) to a context."""
    op, path, value = check.op, check.path, check.value

    if op in _SIMPLE_PATH_VALUE:
        return getattr(context, op.value)(path, value)
    if op in _SIMPLE_PATH:
        return getattr(context, op.value)(path)
    if op in _SIMPLE_VALUE:
        return getattr(context, op.value)(value)

    if op is CheckOp.COUNT:
        return context.count(value) if path is None else context.count(path, value)
    if op is CheckOp.COUNT_BETWEEN:
        return context.count_between(path, value[0], value[1])
    if op is CheckOp.IS_BETWEEN:
        return context.is_between(path, value[0], value[1])
    if op is CheckOp.WHERE_TYPE:
        return context.where_type(value, path)
    if op is CheckOp.ETC:
        return context.etc()
    if op is CheckOp.VERIFY_INTERACTED:
        return context.verify_interacted()

    if op is CheckOp.SCOPE:
        return context.scope(path, lambda child: apply_checks(child, check.checks))
    if op is CheckOp.EACH:
        return _on_target(context, path, lambda target: target.each(
            lambda item: apply_checks(item, check.checks)))
    if op is CheckOp.FIRST:
        return _on_target(context, path, lambda target: target.first(
            lambda member: apply_checks(member, check.checks)))

    raise ValueError(f"Unknown check operator: {op}")


def apply_checks(context: AssertableJson, checks: list[Check]) -> AssertableJson:
    for check in checks:
        apply_check(context, check)
    return context


def run_suite(suite: CheckSuite, data: Any, reporter: Reporter | None = None) -> SuiteReport:
    """
    Run every check of a suite against data.

    Args:
        suite: The parsed suite
        data: The JSON document under test
        reporter: Optional reporter (one is created from the suite otherwise)

    Returns:
        The completed SuiteReport
    """
    reporter = reporter or Reporter.from_suite(suite)
    reporter.start_run()
    context = AssertableJson(data)
    aborted_by: str | None = None

    checks = list(suite.checks)
    if suite.defaults.verify_interacted:
        checks.append(Check(id=COVERAGE_CHECK_ID, op=CheckOp.VERIFY_INTERACTED))
        reporter.add_check(checks[-1])

    for check in checks:
        if aborted_by is not None:
            reporter.skip_check(check.id, reason=f"chain aborted at '{aborted_by}'")
            continue

        logger.debug(f"Running check {check.id} ({check.op.value})")
        reporter.start_check(check.id)
        try:
            apply_check(context, check)
        except JsonAssertionError as e:
            reporter.complete_check_failure(
                check.id,
                failure_message=e.message,
                expected_value=_given(e.expected),
                actual_value=_given(e.actual),
                failure_details=_failure_details(e),
            )
            aborted_by = check.id
        except Exception as e:
            reporter.complete_check_error(check.id, f"{type(e).__name__}: {e}")
            aborted_by = check.id
        else:
            reporter.complete_check_success(check.id)

    return reporter.finish_run()


def _on_target(context: AssertableJson, path: Any, action) -> AssertableJson:
    if path is None:
        action(context)
        return context
    return context.scope(path, action)


def _given(value: Any) -> Any:
    return None if value is NOT_GIVEN else value


def _failure_details(error: JsonAssertionError) -> dict[str, Any]:
    details = {"kind": error.kind.value, **error.details}
    if error.path:
        details["path"] = error.path
    if isinstance(error, SchemaMismatch):
        details["violations"] = [str(v) for v in error.violations]
    return details


_SIMPLE_PATH_VALUE = frozenset({
    CheckOp.WHERE, CheckOp.WHERE_NOT, CheckOp.WHERE_CONTAINS,
    CheckOp.WHERE_IN, CheckOp.WHERE_NOT_IN,
    CheckOp.IS_GREATER_THAN, CheckOp.IS_LESS_THAN,
    CheckOp.IS_GREATER_OR_EQUAL, CheckOp.IS_LESS_OR_EQUAL,
    CheckOp.EQUALS, CheckOp.NOT_EQUALS,
    CheckOp.IS_DIVISIBLE_BY, CheckOp.IS_MULTIPLE_OF,
})

_SIMPLE_PATH = frozenset({
    CheckOp.HAS, CheckOp.HAS_NESTED, CheckOp.HAS_MATCH, CheckOp.MISSING,
    CheckOp.IS_POSITIVE, CheckOp.IS_NEGATIVE,
})

_SIMPLE_VALUE = frozenset({
    CheckOp.HAS_ALL, CheckOp.HAS_ANY, CheckOp.HAS_VALUES, CheckOp.MISSING_ALL,
    CheckOp.WHERE_ALL, CheckOp.MATCHES_SCHEMA,
})

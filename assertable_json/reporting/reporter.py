"""
Reporter for building and managing suite reports.

This module provides the Reporter class which constructs suite reports
from check suite runs.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from .models import (
    CheckRecord,
    CheckStatus,
    SuiteReport,
    compute_suite_hash,
)

if TYPE_CHECKING:
    from ..suites.models import Check, CheckSuite


class Reporter:
    """
    Builds and manages suite reports.

    Example:
        suite, _ = load_suite("checks/user.yaml")
        reporter = Reporter.from_suite(suite)

        reporter.start_run()
        reporter.start_check("has-user")
        reporter.complete_check_success("has-user")

        report = reporter.finish_run()
        print(report.summary())
    """

    def __init__(self, report: SuiteReport):
        """
        Initialize with a SuiteReport.

        Use Reporter.from_suite() for the typical case.
        """
        self.report = report

    @classmethod
    def from_suite(cls, suite: CheckSuite, run_id: str | None = None) -> Reporter:
        """
        Create a Reporter from a parsed CheckSuite.

        Args:
            suite: The parsed suite to create a report for
            run_id: Optional custom run ID (auto-generated if not provided)

        Returns:
            Reporter instance with one pending record per top-level check
        """
        report = SuiteReport(
            suite_name=suite.name,
            suite_version=suite.version,
            suite_hash=compute_suite_hash(suite_to_dict(suite)),
        )

        if run_id:
            report.run_id = run_id

        reporter = cls(report)
        for check in suite.checks:
            reporter.add_check(check)
        return reporter

    def add_check(self, check: Check) -> CheckRecord:
        """Add a pending record for a check."""
        record = CheckRecord(
            check_id=check.id,
            op=check.op.value,
            path=None if check.path is None else str(check.path),
            expected_value=check.value,
        )
        self.report.add_check(record)
        return record

    def start_run(self) -> None:
        """Mark the run as started."""
        self.report.start()

    def finish_run(self) -> SuiteReport:
        """
        Mark the run as completed and return the final report.

        Returns:
            The completed SuiteReport with summary stats
        """
        self.report.complete()
        return self.report

    def start_check(self, check_id: str) -> CheckRecord | None:
        check = self.report.get_check(check_id)
        if check:
            check.start()
        return check

    def complete_check_success(self, check_id: str, actual_value: Any = None) -> CheckRecord | None:
        check = self.report.get_check(check_id)
        if check:
            check.actual_value = actual_value
            check.finish(CheckStatus.PASSED)
        return check

    def complete_check_failure(
        self,
        check_id: str,
        failure_message: str,
        expected_value: Any = None,
        actual_value: Any = None,
        failure_details: dict[str, Any] | None = None,
    ) -> CheckRecord | None:
        """
        Mark a check as failed.

        Args:
            check_id: The ID of the check
            failure_message: Human-readable failure description
            expected_value: What was expected
            actual_value: What was actually found
            failure_details: Additional context (kind, hints, violations)

        Returns:
            The CheckRecord, or None if the check is not in the report
        """
        check = self.report.get_check(check_id)
        if check:
            check.expected_value = expected_value if expected_value is not None else check.expected_value
            check.actual_value = actual_value
            check.failure_message = failure_message
            check.failure_details = failure_details
            check.finish(CheckStatus.FAILED)
        return check

    def complete_check_error(self, check_id: str, error_message: str) -> CheckRecord | None:
        """Mark a check as errored (the check itself could not be evaluated)."""
        check = self.report.get_check(check_id)
        if check:
            check.error_message = error_message
            check.finish(CheckStatus.ERROR)
        return check

    def skip_check(self, check_id: str, reason: str | None = None) -> CheckRecord | None:
        """Mark a check that never ran because the chain broke earlier."""
        check = self.report.get_check(check_id)
        if check:
            check.skip_reason = reason
            check.finish(CheckStatus.SKIPPED)
        return check

    def save_json(self, path: str | Path) -> None:
        """
        Save the report to a JSON file.

        Args:
            path: Path to save the JSON file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.report.to_json())

    def get_summary(self) -> str:
        """Get a human-readable summary of the run."""
        return self.report.summary()


def suite_to_dict(suite: CheckSuite) -> dict[str, Any]:
    """Convert a CheckSuite to a dict for hashing."""
    return {
        "version": suite.version,
        "name": suite.name,
        "defaults": {
            "verify_interacted": suite.defaults.verify_interacted,
        },
        "checks": [_check_to_dict(check) for check in suite.checks],
    }


def _check_to_dict(check: Check) -> dict[str, Any]:
    return {
        "id": check.id,
        "op": check.op.value,
        "path": check.path,
        "value": check.value,
        "checks": [_check_to_dict(child) for child in check.checks],
    }

"""
Report data models for suite runs.

A suite runs as one assertion chain, so a report is mostly a record of
how far the chain got: every check before the break passed, the check
at the break failed or errored, and everything after it was skipped.
"""

from __future__ import annotations

import hashlib
import json
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class CheckStatus(str, Enum):
    """Where a single check ended up in the chain."""
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"

    @property
    def breaks_chain(self) -> bool:
        return self in (CheckStatus.FAILED, CheckStatus.ERROR)


class SuiteStatus(str, Enum):
    """Overall outcome, decided by the check that broke the chain (if any)."""
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass
class CheckRecord:
    """One top-level check of a suite and what became of it."""
    check_id: str
    op: str
    path: str | None = None
    status: CheckStatus = CheckStatus.PENDING

    started_at: datetime | None = None
    ended_at: datetime | None = None
    duration_ms: float | None = None

    expected_value: Any = None
    actual_value: Any = None

    # Set on a failure (assertion), an error (anything else) or a skip
    failure_message: str | None = None
    failure_details: dict[str, Any] | None = None
    error_message: str | None = None
    skip_reason: str | None = None

    def start(self) -> None:
        self.status = CheckStatus.RUNNING
        self.started_at = datetime.now(timezone.utc)

    def finish(self, status: CheckStatus) -> None:
        """Settle the check; skipped checks never started, so carry no timing."""
        self.status = status
        self.ended_at = datetime.now(timezone.utc)
        if self.started_at:
            self.duration_ms = (self.ended_at - self.started_at).total_seconds() * 1000

    @property
    def outcome(self) -> str | None:
        """The one line explaining a non-passing check."""
        if self.status is CheckStatus.ERROR:
            return f"Error: {self.error_message}"
        if self.status is CheckStatus.SKIPPED:
            return f"Skipped: {self.skip_reason}" if self.skip_reason else "Skipped"
        return self.failure_message

    def to_dict(self) -> dict[str, Any]:
        return {
            "check_id": self.check_id,
            "op": self.op,
            "path": self.path,
            "status": self.status.value,
            "started_at": _isoformat(self.started_at),
            "ended_at": _isoformat(self.ended_at),
            "duration_ms": self.duration_ms,
            "expected_value": _jsonable(self.expected_value),
            "actual_value": _jsonable(self.actual_value),
            "failure_message": self.failure_message,
            "failure_details": _jsonable(self.failure_details),
            "error_message": self.error_message,
            "skip_reason": self.skip_reason,
        }


@dataclass
class SuiteReport:
    """
    Record of one suite run.

    Checks are kept in chain order. ``aborted_by`` names the first check
    that failed or errored; the suite status follows from that check.
    """
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None
    duration_ms: float | None = None

    suite_name: str = ""
    suite_version: int = 1
    suite_hash: str = ""

    status: SuiteStatus = SuiteStatus.PENDING
    checks: list[CheckRecord] = field(default_factory=list)
    aborted_by: str | None = None
    counts: Counter = field(default_factory=Counter)

    def start(self) -> None:
        self.status = SuiteStatus.RUNNING
        self.started_at = datetime.now(timezone.utc)

    def complete(self) -> None:
        """Close the run: tally statuses and find where the chain broke."""
        self.ended_at = datetime.now(timezone.utc)
        self.duration_ms = (self.ended_at - self.started_at).total_seconds() * 1000
        self.counts = Counter(check.status for check in self.checks)

        breaker = next((check for check in self.checks if check.status.breaks_chain), None)
        if breaker is None:
            self.aborted_by = None
            self.status = SuiteStatus.PASSED
        else:
            self.aborted_by = breaker.check_id
            self.status = SuiteStatus.ERROR if breaker.status is CheckStatus.ERROR else SuiteStatus.FAILED

    @property
    def passed(self) -> bool:
        return self.status == SuiteStatus.PASSED

    @property
    def total_checks(self) -> int:
        return len(self.checks)

    @property
    def passed_checks(self) -> int:
        return self.counts[CheckStatus.PASSED]

    @property
    def failed_checks(self) -> int:
        return self.counts[CheckStatus.FAILED]

    @property
    def error_checks(self) -> int:
        return self.counts[CheckStatus.ERROR]

    @property
    def skipped_checks(self) -> int:
        return self.counts[CheckStatus.SKIPPED]

    def add_check(self, check: CheckRecord) -> None:
        self.checks.append(check)

    def get_check(self, check_id: str) -> CheckRecord | None:
        return next((check for check in self.checks if check.check_id == check_id), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "started_at": _isoformat(self.started_at),
            "ended_at": _isoformat(self.ended_at),
            "duration_ms": self.duration_ms,
            "suite_name": self.suite_name,
            "suite_version": self.suite_version,
            "suite_hash": self.suite_hash,
            "status": self.status.value,
            "aborted_by": self.aborted_by,
            "summary": {
                "total": self.total_checks,
                "passed": self.passed_checks,
                "failed": self.failed_checks,
                "errors": self.error_checks,
                "skipped": self.skipped_checks,
            },
            "checks": [check.to_dict() for check in self.checks],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def summary(self) -> str:
        """Text summary: header, tallies, then one line per check in chain order."""
        rule, thin = "═" * 59, "─" * 59
        duration = f"{self.duration_ms:.0f}ms" if self.duration_ms is not None else "N/A"
        lines = [
            rule,
            f"  Suite Report: {self.suite_name}",
            rule,
            f"  Run ID:     {self.run_id}",
            f"  Status:     {_SUITE_ICONS.get(self.status, '❓')} {self.status.value.upper()}",
            f"  Duration:   {duration}",
        ]
        if self.aborted_by is not None:
            lines.append(f"  Broken at:  [{self.aborted_by}]")
        lines += [
            thin,
            f"  Checks: {self.passed_checks} passed, {self.failed_checks} failed, "
            f"{self.error_checks} errors, {self.skipped_checks} skipped",
            thin,
        ]

        for check in self.checks:
            target = f" {check.path}" if check.path is not None else ""
            lines.append(f"  {_CHECK_ICONS.get(check.status, '❓')} [{check.check_id}] {check.op}{target}")
            if check.outcome:
                lines.append(f"      └─ {check.outcome}")

        lines.append(rule)
        return "\n".join(lines)


def compute_suite_hash(suite_dict: dict[str, Any]) -> str:
    """
    Fingerprint a suite definition so reports can tell edited suites apart.

    Returns:
        First 12 hex characters of the SHA-256 of the canonical JSON form
    """
    serialized = json.dumps(suite_dict, sort_keys=True, default=str)
    return hashlib.sha256(serialized.encode()).hexdigest()[:12]


def _isoformat(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment else None


def _jsonable(value: Any) -> Any:
    """Values that json cannot encode (sets, custom objects) are stored as str()."""
    if value is None:
        return None
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


_SUITE_ICONS = {
    SuiteStatus.PENDING: "⏳",
    SuiteStatus.RUNNING: "🔄",
    SuiteStatus.PASSED: "✅",
    SuiteStatus.FAILED: "❌",
    SuiteStatus.ERROR: "⚠️",
}

_CHECK_ICONS = {
    CheckStatus.PENDING: "⏳",
    CheckStatus.RUNNING: "🔄",
    CheckStatus.PASSED: "✅",
    CheckStatus.FAILED: "❌",
    CheckStatus.ERROR: "⚠️",
    CheckStatus.SKIPPED: "⏭️",
}

"""
Reporting for Suite Runs

This package provides reporting capabilities for capturing complete
records of check suite runs.

Features:
    - Run metadata (ID, timestamp, suite name, version and hash)
    - Per-check records with timing
    - Expected/actual values and failure messages
    - JSON serialization
    - Human-readable summaries

Usage:
    from assertable_json.suites import load_suite
    from assertable_json.reporting import Reporter

    suite, _ = load_suite("checks/user.yaml")
    reporter = Reporter.from_suite(suite)

    reporter.start_run()
    reporter.start_check("has-user")
    reporter.complete_check_failure(
        "has-user",
        failure_message="Property [user] does not exist",
    )

    report = reporter.finish_run()
    print(report.summary())
    reporter.save_json("reports/run.json")
"""

# Models
from .models import (
    CheckRecord,
    CheckStatus,
    SuiteReport,
    SuiteStatus,
    compute_suite_hash,
)

# Reporter
from .reporter import Reporter, suite_to_dict

__all__ = [
    # Models
    "CheckRecord",
    "CheckStatus",
    "SuiteReport",
    "SuiteStatus",
    "compute_suite_hash",
    # Reporter
    "Reporter",
    "suite_to_dict",
]

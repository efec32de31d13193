"""
Check Suites

This package loads, validates and runs declarative YAML check suites:
assertion chains written as data instead of code.

Usage:
    from assertable_json.suites import load_suite, load_document, run_suite

    suite, result = load_suite("checks/user.yaml")
    if not result.is_valid:
        print(result)

    data, _ = load_document("responses/user.json")
    report = run_suite(suite, data)
    print(report.summary())
"""

# Public API
from .loader import load_document, load_suite, load_suite_yaml
from .runner import apply_check, apply_checks, run_suite

# Models
from .models import Check, CheckOp, CheckSuite, SuiteDefaults

# Validation
from .validation import SuiteValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_suite",
    "load_suite_yaml",
    "load_document",
    # Runner
    "run_suite",
    "apply_check",
    "apply_checks",
    # Models
    "Check",
    "CheckOp",
    "CheckSuite",
    "SuiteDefaults",
    # Validation
    "SuiteValidator",
    "ValidationError",
    "ValidationResult",
]

"""
Suite parser.

This module converts validated YAML data into typed CheckSuite structures.
"""

from __future__ import annotations

from typing import Any

from .models import Check, CheckOp, CheckSuite, SuiteDefaults


class SuiteParser:
    """Parses and converts validated YAML to a typed CheckSuite."""

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self._counter = 0
        self._explicit_ids = set(_explicit_ids(data.get("checks", [])))

    def parse(self) -> CheckSuite:
        """Convert validated data to a typed CheckSuite."""
        return CheckSuite(
            version=self.data["version"],
            name=self.data["name"],
            defaults=self._parse_defaults(),
            checks=self._parse_checks(self.data["checks"]),
        )

    def _parse_defaults(self) -> SuiteDefaults:
        defaults = self.data.get("defaults") or {}
        return SuiteDefaults(
            verify_interacted=defaults.get("verify_interacted", False),
        )

    def _parse_checks(self, checks: list[dict]) -> list[Check]:
        return [self._parse_check(check) for check in checks]

    def _parse_check(self, check: dict) -> Check:
        check_id = check.get("id") or self._next_id()
        return Check(
            id=check_id,
            op=CheckOp(check["op"]),
            path=check.get("path"),
            value=check.get("value"),
            checks=self._parse_checks(check.get("checks", [])),
        )

    def _next_id(self) -> str:
        """Generate check-N, skipping ids the suite already uses."""
        while True:
            self._counter += 1
            candidate = f"check-{self._counter}"
            if candidate not in self._explicit_ids:
                return candidate


def _explicit_ids(checks: list[dict]):
    for check in checks:
        if check.get("id"):
            yield check["id"]
        yield from _explicit_ids(check.get("checks", []))

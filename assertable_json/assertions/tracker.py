"""
Interaction tracking.

Records which top-level keys of a focus were touched by an assertion so
that a test can demand it looked at everything. Only the first segment
of a path counts: checking ``user.profile.age`` acknowledges ``user``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import UninteractedProperty
from ..paths.resolver import root_segment


class InteractionTracker:
    """
    Interacted-key bookkeeping for one focus value.

    Each assertion context owns its own tracker; scoped contexts start
    with an empty one.
    """

    def __init__(self, focus: Any):
        self._focus = focus
        self._interacted: set[str] = set()

    @property
    def interacted(self) -> frozenset[str]:
        return frozenset(self._interacted)

    def record_access(self, path: str | int) -> None:
        self._interacted.add(root_segment(path))

    def record_key(self, key: str) -> None:
        """Record an already-extracted top-level key."""
        self._interacted.add(key)

    def mark_all_interacted(self) -> None:
        if isinstance(self._focus, Mapping):
            self._interacted.update(self._focus.keys())

    def uninteracted(self) -> list[str]:
        """Top-level keys never touched, in the focus's key order."""
        if not isinstance(self._focus, Mapping):
            return []
        return [key for key in self._focus if key not in self._interacted]

    def verify_interacted(self) -> None:
        """
        Raises:
            UninteractedProperty: listing every key that was never touched
        """
        remaining = self.uninteracted()
        if remaining:
            raise UninteractedProperty(remaining)

"""
Scoped assertion contexts.

Scoping binds a fresh context to a sub-value, hands it to a callback and
then returns control to the caller's context. The child has its own
interaction bookkeeping; nothing it does is visible to the parent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable

from ..errors import MissingProperty, TypeMismatch
from ..types import kind_of

if TYPE_CHECKING:
    from .engine import AssertableJson

logger = logging.getLogger(__name__)

Callback = Callable[["AssertableJson"], Any]


class ScopeEngine:
    """Creates child contexts and dispatches callbacks to them."""

    def scope(self, context: AssertableJson, path: str | int, callback: Callback) -> AssertableJson:
        """
        Run a callback against the value at a path.

        Raises:
            MissingProperty: if the path does not resolve
        """
        value = context.resolver.require(context.json, path)
        logger.debug(f"Entering scope [{path}]")
        callback(context.spawn(value))
        return context

    def each(self, context: AssertableJson, callback: Callback) -> AssertableJson:
        """
        Run a callback against every element of an array focus, in order.

        Raises:
            TypeMismatch: if the focus is not an array
        """
        focus = context.json
        if not isinstance(focus, (list, tuple)):
            raise TypeMismatch(
                "each() requires an array",
                expected="array",
                actual=kind_of(focus).value,
            )
        for index, element in enumerate(focus):
            logger.debug(f"Entering element {index}")
            callback(context.spawn(element))
        return context

    def first(self, context: AssertableJson, callback: Callback) -> AssertableJson:
        """
        Run a callback against the first element of an array focus, or the
        first value of an object focus.

        Raises:
            MissingProperty: if the focus is empty
            TypeMismatch: if the focus is a scalar
        """
        focus = context.json
        if isinstance(focus, Mapping):
            members = list(focus.values())
        elif isinstance(focus, (list, tuple)):
            members = list(focus)
        else:
            raise TypeMismatch(
                "first() requires an object or array",
                expected="object or array",
                actual=kind_of(focus).value,
            )
        if not members:
            raise MissingProperty(f"Cannot scope into the first member of an empty {kind_of(focus).value}")
        callback(context.spawn(members[0]))
        return context

    def when(self, context: AssertableJson, condition: Any, callback: Callback) -> AssertableJson:
        if _evaluate(condition):
            callback(context)
        return context

    def unless(self, context: AssertableJson, condition: Any, callback: Callback) -> AssertableJson:
        if not _evaluate(condition):
            callback(context)
        return context


def _evaluate(condition: Any) -> bool:
    return bool(condition() if callable(condition) else condition)

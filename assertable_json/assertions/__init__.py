"""
Fluent Assertions for JSON Data

This package provides the assertion context and the pieces it is
composed of.

Supported assertions:
    - has / has_all / has_any / missing: presence of dot paths
    - count / count_between: size of objects and arrays
    - where / where_not / where_type / where_contains / where_in: values
    - matches_schema: field kinds with optional fields
    - is_greater_than / is_between / is_divisible_by ...: numbers
    - scope / each / first / when / unless: nested assertions
    - etc / verify_interacted: coverage of top-level keys

Usage:
    from assertable_json.assertions import AssertableJson

    data = {"results": [{"id": 1}, {"id": 2}], "total": 2}

    (AssertableJson(data)
        .count("results", 2)
        .has("results", lambda results: results.each(
            lambda item: item.where_type("number", "id")))
        .where("total", 2)
        .verify_interacted())
"""

# Engine
from .engine import AssertableJson

# Components
from .scope import ScopeEngine
from .tracker import InteractionTracker

__all__ = [
    # Engine
    "AssertableJson",
    # Components
    "ScopeEngine",
    "InteractionTracker",
]

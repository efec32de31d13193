from __future__ import annotations

import pytest

from assertable_json import AssertableJson


@pytest.fixture
def document() -> dict:
    return {
        "user": {
            "profile": {
                "negative": -1,
                "name": {"first": "John", "last": "Doe"},
                "age": 30,
                "tags": ["developer", "python"],
                "scores": [85, 90, 95],
                "active": True,
                "rating": 4.5,
            },
            "settings": {
                "notifications": True,
                "theme": "dark",
                "favorites": [1, 2, 3],
            },
        },
        "posts": [
            {"id": 1, "title": "First Post", "comments": 5},
            {"id": 2, "title": "Second Post", "comments": 10},
        ],
        "stats": {"views": 100, "likes": 25, "dislikes": -5, "multiplier": 2.5},
    }


@pytest.fixture
def assertable(document) -> AssertableJson:
    return AssertableJson(document)

"""
Path resolution.

Dot paths (``"user.posts.0.title"``) are resolved by PathResolver;
JSONPath expressions (``"$.posts[*].title"``) by the jsonpath helpers.

Usage:
    from assertable_json.paths import PathResolver, MISSING

    resolver = PathResolver()
    value = resolver.resolve(data, "user.name")
    if value is MISSING:
        ...
"""

from .jsonpath import compile_jsonpath, find_values, root_field
from .resolver import INDEX_PATTERN, MISSING, PathResolver, root_segment, split_path

__all__ = [
    # Dot paths
    "PathResolver",
    "MISSING",
    "INDEX_PATTERN",
    "split_path",
    "root_segment",
    # JSONPath
    "compile_jsonpath",
    "find_values",
    "root_field",
]

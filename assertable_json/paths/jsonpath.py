"""
JSONPath queries.

Dot paths cover the common case; JSONPath expressions (``$.posts[*].id``,
``$['key.with.dots']``) reach what dot paths cannot. Expressions are
evaluated with jsonpath-ng.
"""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import JSONPath, Child, Fields, Root, This

from ..errors import InvalidPath


def compile_jsonpath(expression: str) -> JSONPath:
    """
    Parse a JSONPath expression.

    Raises:
        InvalidPath: if the expression cannot be parsed
    """
    if not isinstance(expression, str) or not expression.strip():
        raise InvalidPath("JSONPath expression cannot be empty", path=str(expression))
    try:
        return parse_jsonpath(expression)
    except (JsonPathLexerError, JsonPathParserError) as e:
        raise InvalidPath(
            "Invalid JSONPath expression",
            path=expression,
            details={"error": str(e)},
        ) from e
    except Exception as e:
        raise InvalidPath(
            "Failed to parse JSONPath",
            path=expression,
            details={"error": f"{type(e).__name__}: {e}"},
        ) from e


def find_values(data: Any, expression: str) -> list[Any]:
    """Evaluate an expression and return every matched value, in match order."""
    return [match.value for match in compile_jsonpath(expression).find(data)]


def root_field(expression: str) -> str | None:
    """
    Name of the first field an expression descends into.

    ``$.user.name`` gives ``"user"``; expressions that start with a
    wildcard, a union or recursive descent give None.
    """
    return _leftmost_field(compile_jsonpath(expression))


def _leftmost_field(node: JSONPath) -> str | None:
    if isinstance(node, Child):
        field = _leftmost_field(node.left)
        if field is not None:
            return field
        # Root/This on the left carries no name; anything else ends the walk
        if isinstance(node.left, (Root, This)):
            return _leftmost_field(node.right)
        return None
    if isinstance(node, Fields) and len(node.fields) == 1 and node.fields[0] != "*":
        return node.fields[0]
    return None

"""
JSONPath extraction over decoded SSE payloads.
The query grammar is delegated to jsonpath-ng; this module only adapts its
results and guarantees that evaluation failures never escape.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Iterable, Protocol

from jsonpath_ng.jsonpath import JSONPath
from jsonpath_ng.ext import parse as parse_jsonpath

logger = logging.getLogger(__name__)


class PathEvaluator(Protocol):
    """Anything able to resolve a path expression against a JSON value."""

    def evaluate(self, data: Any, path: str) -> Any | None: ...


@lru_cache(maxsize=128)
def _compile(path: str) -> JSONPath:
    return parse_jsonpath(path)


class JsonPathEvaluator:
    """
    Default evaluator backed by jsonpath-ng (extended grammar with filters).

    Results are unwrapped: no match gives None, a single match gives the
    matched value itself and several matches give a list of values in
    document order.
    """

    def evaluate(self, data: Any, path: str) -> Any | None:
        matches = _compile(path).find(data)
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0].value
        return [m.value for m in matches]


_DEFAULT_EVALUATOR = JsonPathEvaluator()


def extract_by_path(data: Any, path: str, evaluator: PathEvaluator | None = None) -> Any | None:
    """
    Extract a value from a decoded payload using a JSONPath expression.

    Args:
        data: Any JSON value (object, array or scalar).
        path: JSONPath expression, e.g. "$.response.candidates[0].content.parts[0].text".
        evaluator: Optional evaluator; defaults to the jsonpath-ng backed one.

    Returns:
        The extracted value, or None when nothing matched, the match was a
        JSON null, or the evaluator failed.
    """
    ev = evaluator or _DEFAULT_EVALUATOR
    try:
        return ev.evaluate(data, path)
    except Exception as e:
        logger.warning("JSONPath extraction failed for %r: %r", path, e)
        return None


def extract_from_multiple(
    values: Iterable[Any],
    path: str,
    evaluator: PathEvaluator | None = None,
) -> list[Any]:
    """Apply extract_by_path to each value in order, dropping absent results."""
    results: list[Any] = []
    for value in values:
        extracted = extract_by_path(value, path, evaluator)
        if extracted is not None:
            results.append(extracted)
    return results

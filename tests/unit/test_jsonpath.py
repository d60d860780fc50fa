import logging
from typing import Any

from sse_merge._jsonpath import JsonPathEvaluator, extract_by_path, extract_from_multiple


class FakeEvaluator:
    """Evaluador determinista: busca la clave literal en dicts."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, str]] = []

    def evaluate(self, data: Any, path: str) -> Any:
        self.calls.append((data, path))
        if path == "boom":
            raise RuntimeError("evaluator exploded")
        if isinstance(data, dict):
            return data.get(path)
        return None


def test_extract_simple_field() -> None:
    assert extract_by_path({"x": 1}, "$.x") == 1


def test_extract_nested_index_path() -> None:
    data = {"parts": [{"text": "hi"}]}

    assert extract_by_path(data, "$.parts[0].text") == "hi"


def test_extract_gemini_style_path() -> None:
    data = {"response": {"candidates": [{"content": {"parts": [{"text": "Hola"}]}}]}}

    assert extract_by_path(data, "$.response.candidates[0].content.parts[0].text") == "Hola"


def test_extract_returns_object_values() -> None:
    assert extract_by_path({"x": {"y": 5}}, "$.x") == {"y": 5}


def test_extract_no_match_is_none() -> None:
    assert extract_by_path({"a": 1}, "$.b") is None


def test_extract_null_match_is_absent() -> None:
    assert extract_by_path({"a": None}, "$.a") is None


def test_extract_multiple_matches_returns_list() -> None:
    data = {"choices": [{"delta": {"content": "a"}}, {"delta": {"content": "b"}}]}

    assert extract_by_path(data, "$.choices[*].delta.content") == ["a", "b"]


def test_extract_from_array_and_scalar_roots() -> None:
    assert extract_by_path([10, 20], "$[1]") == 20
    assert extract_by_path("plain", "$") == "plain"


def test_extract_malformed_expression_is_none(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="sse_merge._jsonpath"):
        assert extract_by_path({"a": 1}, "$.[[") is None

    assert "JSONPath extraction failed" in caplog.text


def test_extract_blank_expression_is_none() -> None:
    assert extract_by_path({"a": 1}, "   ") is None


def test_extract_uses_injected_evaluator() -> None:
    fake = FakeEvaluator()

    assert extract_by_path({"k": "v"}, "k", fake) == "v"
    assert fake.calls == [({"k": "v"}, "k")]


def test_extract_swallows_evaluator_exceptions() -> None:
    assert extract_by_path({"k": "v"}, "boom", FakeEvaluator()) is None


def test_extract_from_multiple_filters_absent_and_keeps_order() -> None:
    values = [{"x": "a"}, {"y": 1}, {"x": "b"}, {"x": None}, {"x": "c"}]

    assert extract_from_multiple(values, "$.x") == ["a", "b", "c"]


def test_json_path_evaluator_direct() -> None:
    ev = JsonPathEvaluator()

    assert ev.evaluate({"a": {"b": 2}}, "$.a.b") == 2
    assert ev.evaluate({"a": {}}, "$.a.b") is None

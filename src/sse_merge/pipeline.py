"""
Parse -> extract -> merge pipeline over a complete SSE transcript.
Every run ends in a PipelineSuccess or a PipelineFailure; nothing is raised.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Union

from sse_merge._jsonpath import PathEvaluator, extract_by_path
from sse_merge._merge import merge_extracted_values
from sse_merge._sse import parse_sse_messages


class FailureReason(str, enum.Enum):
    NO_MESSAGES = "no_messages"
    NO_MATCHES = "no_matches"


@dataclass(frozen=True, slots=True)
class PipelineSuccess:
    merged_text: str
    extracted_values: tuple[Any, ...]
    message_count: int

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        """Structured form for logging or JSON output."""
        return {
            "success": True,
            "result": self.merged_text,
            "extracted_values": list(self.extracted_values),
            "message_count": self.message_count,
        }


@dataclass(frozen=True, slots=True)
class PipelineFailure:
    reason: FailureReason
    message_count: int
    json_path: str = ""

    @property
    def success(self) -> bool:
        return False

    @property
    def error(self) -> str:
        if self.reason is FailureReason.NO_MESSAGES:
            return "No valid SSE messages found"
        return f"No values found for JSONPath: {self.json_path}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": False,
            "reason": self.reason.value,
            "error": self.error,
            "message_count": self.message_count,
        }


PipelineOutcome = Union[PipelineSuccess, PipelineFailure]


def process_sse(
    text: str,
    json_path: str,
    *,
    evaluator: PathEvaluator | None = None,
    separator: str = "",
) -> PipelineOutcome:
    """
    Extract json_path from every SSE message in text and merge the values.

    Args:
        text: Raw SSE transcript.
        json_path: JSONPath expression applied to each message payload.
        evaluator: Optional path evaluator (defaults to jsonpath-ng).
        separator: Text placed between merged values.

    Returns:
        PipelineSuccess with the merged text, or PipelineFailure with
        NO_MESSAGES when nothing parsed and NO_MATCHES when the path
        matched no message.
    """
    messages = parse_sse_messages(text)

    if not messages:
        return PipelineFailure(reason=FailureReason.NO_MESSAGES, message_count=0, json_path=json_path)

    extracted: list[Any] = []
    for message in messages:
        value = extract_by_path(message.data, json_path, evaluator)
        if value is not None:
            extracted.append(value)

    if not extracted:
        return PipelineFailure(
            reason=FailureReason.NO_MATCHES,
            message_count=len(messages),
            json_path=json_path,
        )

    return PipelineSuccess(
        merged_text=merge_extracted_values(extracted, separator),
        extracted_values=tuple(extracted),
        message_count=len(messages),
    )


def process_sse_multiple_paths(
    text: str,
    json_paths: Iterable[str],
    *,
    evaluator: PathEvaluator | None = None,
    separator: str = "",
) -> dict[str, PipelineOutcome]:
    """Run process_sse once per path; a repeated path keeps its last result."""
    results: dict[str, PipelineOutcome] = {}
    for path in json_paths:
        results[path] = process_sse(text, path, evaluator=evaluator, separator=separator)
    return results

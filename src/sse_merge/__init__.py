from __future__ import annotations

from sse_merge._errors import EmptyInputError, SSEMergeError, TranscriptFetchError
from sse_merge._jsonpath import JsonPathEvaluator, PathEvaluator, extract_by_path, extract_from_multiple
from sse_merge._merge import merge_extracted_values
from sse_merge._sse import ParsedMessage, extract_sse_json_strings, parse_sse_messages
from sse_merge.pipeline import (
    FailureReason,
    PipelineFailure,
    PipelineOutcome,
    PipelineSuccess,
    process_sse,
    process_sse_multiple_paths,
)

__all__ = [
    "EmptyInputError",
    "FailureReason",
    "JsonPathEvaluator",
    "ParsedMessage",
    "PathEvaluator",
    "PipelineFailure",
    "PipelineOutcome",
    "PipelineSuccess",
    "SSEMergeError",
    "TranscriptFetchError",
    "extract_by_path",
    "extract_from_multiple",
    "extract_sse_json_strings",
    "merge_extracted_values",
    "parse_sse_messages",
    "process_sse",
    "process_sse_multiple_paths",
]

__version__ = "0.1.0"

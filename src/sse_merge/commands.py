"""
User-facing merge commands wiring a TextSource, the pipeline, a ResultSink
and the path history together.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from sse_merge._jsonpath import PathEvaluator
from sse_merge.pipeline import PipelineOutcome, process_sse, process_sse_multiple_paths
from sse_merge.preferences import PreferenceStore
from sse_merge.sinks import ResultSink
from sse_merge.sources import TextSource

logger = logging.getLogger(__name__)

# Recibe (default, recientes) y retorna el path elegido o None si se cancela.
PathPrompt = Callable[[str, Sequence[str]], Optional[str]]


def path_choices(default_path: str, recent_paths: Iterable[str]) -> list[str]:
    """Default path first, then recent paths that differ from it."""
    return [default_path, *(p for p in recent_paths if p != default_path)]


def resolve_json_path(
    store: PreferenceStore,
    json_path: str | None = None,
    prompt: PathPrompt | None = None,
) -> str | None:
    """
    Pick the JSONPath for a merge.

    An explicit json_path wins. Otherwise the prompt callback is offered the
    default path and the recent ones; without a prompt the default is used.
    Returns None when the prompt was cancelled.
    """
    if json_path:
        return json_path
    if prompt is None:
        return store.default_json_path
    chosen = prompt(store.default_json_path, store.get_recent_paths())
    return chosen or None


def _run(
    source: TextSource,
    sink: ResultSink,
    store: PreferenceStore,
    json_path: str,
    evaluator: PathEvaluator | None,
    separator: str,
) -> PipelineOutcome:
    text = source.read_text()
    outcome = process_sse(text, json_path, evaluator=evaluator, separator=separator)
    logger.debug("Pipeline outcome for %r: %s", json_path, outcome.to_dict())
    sink.show(outcome, json_path)
    if outcome.success:
        store.save_recent_path(json_path)
    return outcome


def merge(
    source: TextSource,
    sink: ResultSink,
    store: PreferenceStore,
    *,
    json_path: str | None = None,
    prompt: PathPrompt | None = None,
    evaluator: PathEvaluator | None = None,
    separator: str = "",
) -> PipelineOutcome | None:
    """
    Merge a transcript with an explicit or prompted JSONPath.

    Returns:
        The pipeline outcome, or None if the path prompt was cancelled.

    Raises:
        EmptyInputError: If the source has no text.
    """
    path = resolve_json_path(store, json_path, prompt)
    if path is None:
        return None
    return _run(source, sink, store, path, evaluator, separator)


def quick_merge(
    source: TextSource,
    sink: ResultSink,
    store: PreferenceStore,
    *,
    evaluator: PathEvaluator | None = None,
    separator: str = "",
) -> PipelineOutcome:
    """Merge using the last used JSONPath without asking."""
    return _run(source, sink, store, store.get_last_used_path(), evaluator, separator)


def merge_multiple(
    source: TextSource,
    json_paths: Sequence[str],
    *,
    evaluator: PathEvaluator | None = None,
    separator: str = "",
) -> dict[str, PipelineOutcome]:
    return process_sse_multiple_paths(
        source.read_text(), json_paths, evaluator=evaluator, separator=separator
    )

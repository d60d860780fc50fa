"""
Result sinks: how a pipeline outcome is presented to the user.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO

from sse_merge.pipeline import PipelineOutcome, PipelineSuccess


class ResultSink(Protocol):
    def show(self, outcome: PipelineOutcome, json_path: str) -> None: ...


def summary_line(outcome: PipelineSuccess) -> str:
    return (
        f"Merged {len(outcome.extracted_values)} values from {outcome.message_count} messages"
    )


@dataclass(slots=True)
class ConsoleSink:
    """Merged text on stdout; status and errors on stderr."""

    out: TextIO | None = None
    err: TextIO | None = None

    def show(self, outcome: PipelineOutcome, json_path: str) -> None:
        out = self.out if self.out is not None else sys.stdout
        err = self.err if self.err is not None else sys.stderr

        if not isinstance(outcome, PipelineSuccess):
            err.write(f"SSE Merge: {outcome.error}\n")
            return

        out.write(outcome.merged_text)
        if not outcome.merged_text.endswith("\n"):
            out.write("\n")
        err.write(f"SSE Merge: {summary_line(outcome)} ({json_path})\n")


@dataclass(slots=True)
class FileSink:
    """Writes the merged text to a new file; failures go to stderr."""

    path: Path
    err: TextIO | None = None

    def show(self, outcome: PipelineOutcome, json_path: str) -> None:
        err = self.err if self.err is not None else sys.stderr

        if not isinstance(outcome, PipelineSuccess):
            err.write(f"SSE Merge: {outcome.error}\n")
            return

        target = Path(self.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(outcome.merged_text, encoding="utf-8")
        err.write(f"SSE Merge: {summary_line(outcome)} -> {target}\n")


@dataclass(slots=True)
class JsonSink:
    out: TextIO | None = None

    def show(self, outcome: PipelineOutcome, json_path: str) -> None:
        out = self.out if self.out is not None else sys.stdout
        payload = {"json_path": json_path, **outcome.to_dict()}
        out.write(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
        out.write("\n")

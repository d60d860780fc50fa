"""
Text sources: where a raw SSE transcript comes from.
Each source returns the complete, already-buffered text.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO

from sse_merge._client import TranscriptHttpClient
from sse_merge._errors import EmptyInputError


class TextSource(Protocol):
    def read_text(self) -> str: ...


def _require_text(text: str, origin: str) -> str:
    if not text or not text.strip():
        raise EmptyInputError(f"{origin} is empty")
    return text


@dataclass(frozen=True, slots=True)
class StringSource:
    text: str
    label: str = "Input"

    def read_text(self) -> str:
        return _require_text(self.text, self.label)


@dataclass(frozen=True, slots=True)
class FileSource:
    """
    Reads a transcript file, optionally restricted to an inclusive,
    1-based line range (the command-line counterpart of an editor selection).
    """

    path: Path
    start_line: int | None = None
    end_line: int | None = None

    def read_text(self) -> str:
        text = Path(self.path).read_text(encoding="utf-8", errors="replace")
        if self.start_line is None and self.end_line is None:
            return _require_text(text, f"File {self.path}")

        lines = text.split("\n")
        start = max((self.start_line or 1) - 1, 0)
        end = self.end_line if self.end_line is not None else len(lines)
        selected = "\n".join(lines[start:end])
        return _require_text(selected, f"Selection {start + 1}:{end} of {self.path}")


@dataclass(slots=True)
class StdinSource:
    stream: TextIO | None = None

    def read_text(self) -> str:
        stream = self.stream if self.stream is not None else sys.stdin
        return _require_text(stream.read(), "Standard input")


@dataclass(slots=True)
class UrlSource:
    url: str
    client: TranscriptHttpClient

    def read_text(self) -> str:
        return _require_text(self.client.get_text(self.url), f"Response from {self.url}")


def parse_line_range(value: str) -> tuple[int | None, int | None]:
    """
    Parse "A:B", "A:" or ":B" into an inclusive 1-based line range.

    Raises:
        ValueError: If the range is malformed or empty.
    """
    if ":" not in value:
        raise ValueError(f"Invalid line range {value!r}, expected START:END")
    raw_start, raw_end = value.split(":", 1)
    try:
        start = int(raw_start) if raw_start.strip() else None
        end = int(raw_end) if raw_end.strip() else None
    except ValueError:
        raise ValueError(f"Invalid line range {value!r}, expected integers") from None
    if (start is not None and start < 1) or (end is not None and end < 1):
        raise ValueError(f"Invalid line range {value!r}, lines start at 1")
    if start is not None and end is not None and end < start:
        raise ValueError(f"Invalid line range {value!r}, end before start")
    return start, end

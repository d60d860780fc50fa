from __future__ import annotations
from dataclasses import dataclass
from typing import Any


class SSEMergeError(RuntimeError):
    """Base error of the library's host-integration layer."""


class EmptyInputError(SSEMergeError):
    """A text source produced no text to process."""


@dataclass(slots=True)
class TranscriptFetchError(SSEMergeError):
    """
    HTTP error raised while downloading a transcript.

    The body is kept so a captured error page can still be inspected.
    """
    status_code: int
    message: str
    body: str | None = None

    def __str__(self) -> str:
        parts = [f"TranscriptFetchError(status_code={self.status_code}"]
        parts.append(f", message={self.message!r}")
        if self.body:
            parts.append(f", body={len(self.body)} chars")
        parts.append(")")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Dict form for structured logging."""
        return {
            "status_code": self.status_code,
            "message": self.message,
            "body": self.body,
        }

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

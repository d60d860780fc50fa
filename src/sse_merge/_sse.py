"""
Line-oriented parser for Server-Sent Events (SSE) transcripts.
Recognizes only 'data:' lines and decodes their payloads as JSON.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"


def _reject_constant(name: str) -> Any:
    # NaN, Infinity y -Infinity no son JSON válido.
    raise ValueError(f"Invalid JSON constant: {name}")


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """
    A single SSE 'data:' line whose payload decoded as valid JSON.
    Keeps the decoded value together with the trimmed source line.
    """

    data: Any
    raw: str


def _iter_data_lines(text: str) -> list[tuple[str, str]]:
    # (trimmed line, trimmed payload) para cada línea data: con contenido
    if not isinstance(text, str):
        return []

    pairs: list[tuple[str, str]] = []
    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed or not trimmed.startswith(DATA_PREFIX):
            continue
        payload = trimmed[len(DATA_PREFIX):].strip()
        if not payload:
            continue
        pairs.append((trimmed, payload))
    return pairs


def parse_sse_messages(text: str) -> list[ParsedMessage]:
    """
    Parse an SSE transcript into JSON messages, one per valid 'data:' line.

    Lines that do not start with 'data:' are ignored. Payloads that are not
    valid JSON are skipped with a warning, so malformed input yields fewer
    messages instead of an exception.

    Args:
        text: The complete raw transcript.

    Returns:
        Parsed messages in line order.
    """
    messages: list[ParsedMessage] = []

    for raw, payload in _iter_data_lines(text):
        try:
            data = json.loads(payload, parse_constant=_reject_constant)
        except (ValueError, RecursionError):
            logger.warning("Failed to parse SSE JSON: %s", payload)
            continue
        messages.append(ParsedMessage(data=data, raw=raw))

    return messages


def extract_sse_json_strings(text: str) -> list[str]:
    """
    Return the raw, non-empty payload strings of every 'data:' line.

    No JSON decoding is attempted, so sentinel payloads such as '[DONE]'
    are kept.
    """
    return [payload for _, payload in _iter_data_lines(text)]

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from sse_merge._errors import TranscriptFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout_s: float = 120.0
    debug: bool = False


SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie", "x-api-key"})


def _redact_headers(headers: dict[str, Any]) -> dict[str, Any]:
    return {
        k: ("***REDACTED***" if k.lower() in SENSITIVE_HEADERS else v)
        for k, v in headers.items()
    }


class TranscriptHttpClient:
    """
    Thin httpx wrapper used to download captured SSE transcripts.
    - GET with optional headers
    - Structured error on non-2xx responses
    - Optional request/response debug logging
    """

    def __init__(self, *, config: HttpConfig, transport: httpx.BaseTransport | None = None) -> None:
        self._config = config

        def _log_request(request: httpx.Request) -> None:
            if not self._config.debug:
                return
            logger.warning("HTTPX REQUEST %s %s", request.method, request.url)
            logger.warning("HTTPX REQUEST headers=%s", _redact_headers(dict(request.headers)))

        def _log_response(response: httpx.Response) -> None:
            if not self._config.debug:
                return
            req = response.request
            logger.warning("HTTPX RESPONSE %s %s -> %s", req.method, req.url, response.status_code)
            logger.warning("HTTPX RESPONSE headers=%s", dict(response.headers))

        hooks: dict[str, list[Callable[..., Any]]] = {"request": [_log_request], "response": [_log_response]}

        self._client = httpx.Client(
            timeout=httpx.Timeout(config.timeout_s),
            event_hooks=hooks,
            transport=transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> TranscriptHttpClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def raise_for_status(resp: httpx.Response) -> None:
        """Raise TranscriptFetchError unless the status is 2xx."""
        if 200 <= resp.status_code < 300:
            return

        body_text: str | None = None
        try:
            body_text = resp.text
        except Exception:
            body_text = None

        message = getattr(resp, "reason_phrase", "") or "HTTP error"
        if body_text and body_text.strip() and len(body_text) <= 200:
            message = f"{message}: {body_text.strip()}"

        raise TranscriptFetchError(status_code=resp.status_code, message=message, body=body_text)

    def get_text(self, url: str, *, headers: dict[str, str] | None = None) -> str:
        """
        Download url and return the fully buffered body as text.

        Raises:
            TranscriptFetchError: On a non-2xx status or a transport failure.
        """
        try:
            resp = self._client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise TranscriptFetchError(status_code=0, message=f"Request to {url} failed: {e}") from e
        self.raise_for_status(resp)
        return resp.text

"""Shared HTTP transport for every AI backend.

All three backends follow the same shape: build a JSON body, POST it once
with a fixed timeout, pull the text out of one path in the JSON reply.
``BackendRequest`` captures the per-backend parts and
``HTTPTextGenerator`` executes any of them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from ...utils.errors import RequestFailedError
from ...utils.logging import LogEventNames

log = structlog.get_logger()


@dataclass(frozen=True)
class BackendRequest:
    """A single generation request, ready to send.

    Attributes:
        backend: Backend name used in logs and error messages
        url: Endpoint to POST to
        body: JSON request body
        response_path: Keys and indexes leading to the text in the reply
        timeout: Request timeout in seconds
        headers: Extra HTTP headers (credentials, API version)
    """

    backend: str
    url: str
    body: Mapping[str, Any]
    response_path: Sequence[str | int]
    timeout: float
    headers: Mapping[str, str] = field(default_factory=dict)


def extract_text(data: Any, path: Sequence[str | int]) -> str | None:
    """Follow ``path`` through decoded JSON.

    Returns:
        The string found at the path, or None if any step is missing or
        the final value is not a string
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current if isinstance(current, str) else None


class HTTPTextGenerator:
    """TextGenerator backed by httpx.

    Example:
        generator = HTTPTextGenerator()
        text = generator.generate(request)

    A client passed in is reused and left open; otherwise a client is
    opened and closed around each call.
    """

    def __init__(self, client: httpx.Client | None = None) -> None:
        self._client = client

    @contextmanager
    def _session(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
        else:
            with httpx.Client() as client:
                yield client

    def generate(self, request: BackendRequest) -> str:
        """Send the request once and return the text at its response path.

        Raises:
            RequestFailedError: On any transport, status or decoding failure
        """
        log.debug(LogEventNames.LLM_REQUEST_START, backend=request.backend, url=request.url)

        try:
            with self._session() as client:
                response = client.post(
                    request.url,
                    json=dict(request.body),
                    headers={"Content-Type": "application/json", **request.headers},
                    timeout=request.timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.info(
                LogEventNames.LLM_REQUEST_ERROR,
                backend=request.backend,
                status_code=status,
            )
            raise RequestFailedError(f"{request.backend} request failed with HTTP {status}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.info(
                LogEventNames.LLM_REQUEST_ERROR,
                backend=request.backend,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise RequestFailedError(f"{request.backend} request failed: {e}") from e
        except ValueError as e:
            log.info(
                LogEventNames.LLM_REQUEST_ERROR,
                backend=request.backend,
                error="malformed_json",
            )
            raise RequestFailedError(f"{request.backend} returned malformed JSON") from e

        text = extract_text(data, request.response_path)
        if text is None:
            path = ".".join(str(key) for key in request.response_path)
            log.info(
                LogEventNames.LLM_REQUEST_ERROR,
                backend=request.backend,
                error="missing_field",
                path=path,
            )
            raise RequestFailedError(f"{request.backend} response has no text at {path}")

        log.debug(LogEventNames.LLM_REQUEST_COMPLETE, backend=request.backend, chars=len(text))
        return text

    def probe(self, url: str, timeout: float) -> bool:
        """GET ``url`` and report whether it answered with a 2xx status."""
        try:
            with self._session() as client:
                response = client.get(url, timeout=timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.debug(LogEventNames.PROBE_FAILED, url=url, error=str(e))
            return False
        return response.is_success

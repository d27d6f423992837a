"""
Transports used by the presenter to resolve input, in-process or over HTTP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError

from .clock import Clock, SystemClock
from .errors import ParseError
from .resolver import resolve
from .schemas import ResolvedTimeOut

logger = logging.getLogger(__name__)

API_UNAVAILABLE = "API unavailable"


@dataclass(frozen=True)
class Outcome:
    """Result of one resolution request: exactly one of result/error is set."""

    result: Optional[ResolvedTimeOut] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Transport(Protocol):
    def fetch(self, text: Optional[str]) -> Outcome: ...


# PUBLIC_INTERFACE
class LocalTransport:
    """Resolve in-process, without a server."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()

    def fetch(self, text: Optional[str]) -> Outcome:
        try:
            resolved = resolve(text, self._clock)
        except ParseError as exc:
            return Outcome(error=str(exc))
        return Outcome(result=ResolvedTimeOut.from_resolved(resolved))


# PUBLIC_INTERFACE
class HttpTransport:
    """
    Resolve through the HTTP API.

    Empty input goes to /api/now, anything else to /api/parse?q=. An `error`
    body is passed through verbatim; network failures and malformed bodies
    become API_UNAVAILABLE.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_base_url(cls, base_url: str, timeout: float = 5.0) -> "HttpTransport":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch(self, text: Optional[str]) -> Outcome:
        try:
            if text:
                response = self._client.get("/api/parse", params={"q": text})
            else:
                response = self._client.get("/api/now")
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Epoch API request failed: %s", exc)
            return Outcome(error=API_UNAVAILABLE)

        if isinstance(data, dict) and "error" in data:
            return Outcome(error=str(data["error"]))
        try:
            return Outcome(result=ResolvedTimeOut.model_validate(data))
        except ValidationError as exc:
            logger.warning("Unexpected Epoch API response: %s", exc)
            return Outcome(error=API_UNAVAILABLE)

"""
Provider Geocoder — HTTP Transport
===================================
The only place the package touches the network.

Providers depend on the :class:`HttpTransport` abstraction, so tests can
hand them a mock and callers can swap in their own client.  The default
:class:`RequestsTransport` uses a :class:`requests.Session`.

Transport failures (DNS, connection reset, timeout) surface as
:class:`~shared.python.exceptions.TransportError`; HTTP status codes are
returned untouched and interpreted by the provider.  Nothing here
retries.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

import requests
from requests.structures import CaseInsensitiveDict

from shared.python.exceptions import TransportError

logger = logging.getLogger("provider_geocoder.transport")


@dataclass(frozen=True)
class HttpResponse:
    """Raw response handed back to a provider.

    Attributes:
        status_code: HTTP status code.
        body: Undecoded response body.
        url: Final URL, including the encoded query string.
        headers: Response headers, looked up case-insensitively.
    """

    status_code: int
    body: bytes
    url: str = ""
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers))

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpTransport(ABC):
    """Abstract synchronous HTTP client used by every HTTP provider."""

    @abstractmethod
    def send_request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        """Send one request and return the raw response.

        Args:
            method: HTTP verb, e.g. ``"GET"``.
            url: Absolute URL without query string.
            headers: Extra request headers.
            params: Query-string parameters to encode onto *url*.

        Raises:
            TransportError: On any network-level failure.
        """


class RequestsTransport(HttpTransport):
    """:class:`HttpTransport` backed by :mod:`requests`.

    Args:
        timeout: Per-request timeout in seconds.
        session: Existing session to reuse; a new one is created if omitted.
        user_agent: Default ``User-Agent`` header for every request.
    """

    def __init__(
        self,
        timeout: float = 10,
        session: requests.Session | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()
        if user_agent:
            self._session.headers["User-Agent"] = user_agent

    def send_request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers or {}),
                params=dict(params or {}),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.debug("Transport failure for %s %s: %s", method, url, exc)
            raise TransportError(f"HTTP request to '{url}' failed: {exc}") from exc

        logger.debug("%s %s → %d", method, response.url, response.status_code)
        return HttpResponse(
            status_code=response.status_code,
            body=response.content,
            url=response.url,
            headers=response.headers,
        )

    def close(self) -> None:
        self._session.close()

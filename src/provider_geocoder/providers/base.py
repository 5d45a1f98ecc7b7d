"""
Provider Geocoder — Provider Contract
=====================================
Every geocoding service is adapted behind the same two-method interface:
``geocode_query(GeocodeQuery)`` and ``reverse_query(ReverseQuery)``, both
returning an :class:`~provider_geocoder.collection.AddressCollection`.

Design Pattern:
    Template Method — the public query methods check the provider's
    capability flags first and only then call the subclass hooks
    ``_geocode`` / ``_reverse``.  A provider that structurally cannot
    answer a query therefore raises
    :class:`~shared.python.exceptions.UnsupportedOperation` before any
    network call is made.

Capability flags:
    supports_street_addresses   Free-text addresses and place names.
    supports_ip_addresses       IPv4/IPv6 literals.
    supports_reverse            Coordinate lookups.

Classes:
    Provider               Abstract contract and capability enforcement.
    AbstractHttpProvider   Provider that talks to an HTTP API through an
                           :class:`~provider_geocoder.transport.HttpTransport`.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from shared.python.exceptions import (
    InvalidCredentials,
    InvalidServerResponse,
    QuotaExceeded,
    UnsupportedOperation,
)
from shared.python.validators import Validators
from provider_geocoder.collection import AddressCollection
from provider_geocoder.query import DEFAULT_RESULT_LIMIT, GeocodeQuery, ReverseQuery
from provider_geocoder.transport import HttpTransport, RequestsTransport

logger = logging.getLogger("provider_geocoder.providers")


class Provider(ABC):
    """Abstract base for all geocoding providers.

    Subclasses set :attr:`name` and the capability flags, and implement
    :meth:`_geocode` (and :meth:`_reverse` when ``supports_reverse``).
    """

    #: Registry name of the provider, e.g. ``"nominatim"``.
    name: str = ""

    supports_street_addresses: bool = True
    supports_ip_addresses: bool = False
    supports_reverse: bool = True

    # ------------------------------------------------------------------
    # Public contract
    # ------------------------------------------------------------------

    def geocode_query(self, query: GeocodeQuery) -> AddressCollection:
        """Geocode a free-text query.

        Returns:
            The matching addresses in provider order; empty when nothing
            matched.

        Raises:
            UnsupportedOperation: If the query is an IP address and the
                provider does not handle IPs, or a street address and
                the provider only handles IPs.
            InvalidServerResponse: If the provider payload cannot be parsed.
            TransportError: If the HTTP call fails.
        """
        is_ip = Validators.is_ip_address(query.text)
        if is_ip and not self.supports_ip_addresses:
            raise UnsupportedOperation(
                f"The {self.name} provider does not support IP addresses."
            )
        if not is_ip and not self.supports_street_addresses:
            raise UnsupportedOperation(
                f"The {self.name} provider does not support street addresses."
            )
        results = self._geocode(query)
        logger.debug("%s: %d result(s) for %r", self.name, len(results), query.text)
        return results

    def reverse_query(self, query: ReverseQuery) -> AddressCollection:
        """Reverse-geocode a position.

        Raises:
            UnsupportedOperation: If the provider cannot reverse-geocode.
            InvalidServerResponse: If the provider payload cannot be parsed.
            TransportError: If the HTTP call fails.
        """
        if not self.supports_reverse:
            raise UnsupportedOperation(
                f"The {self.name} provider is not able to do reverse geocoding."
            )
        results = self._reverse(query)
        logger.debug(
            "%s: %d result(s) for (%s, %s)",
            self.name,
            len(results),
            query.coordinates.latitude,
            query.coordinates.longitude,
        )
        return results

    def geocode(
        self,
        text: str,
        limit: int = DEFAULT_RESULT_LIMIT,
        locale: str | None = None,
    ) -> AddressCollection:
        """Shortcut for ``geocode_query(GeocodeQuery(text, limit, locale))``."""
        return self.geocode_query(GeocodeQuery(text, limit=limit, locale=locale))

    def reverse(
        self,
        latitude: float,
        longitude: float,
        limit: int = DEFAULT_RESULT_LIMIT,
        locale: str | None = None,
    ) -> AddressCollection:
        """Shortcut for ``reverse_query(ReverseQuery.from_coordinates(...))``."""
        query = ReverseQuery.from_coordinates(latitude, longitude)
        return self.reverse_query(query.with_limit(limit).with_locale(locale))

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _geocode(self, query: GeocodeQuery) -> AddressCollection:
        """Run a geocode query whose capability has already been checked."""

    def _reverse(self, query: ReverseQuery) -> AddressCollection:
        raise UnsupportedOperation(
            f"The {self.name} provider is not able to do reverse geocoding."
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class AbstractHttpProvider(Provider):
    """Provider that fetches JSON from an HTTP API.

    Args:
        transport: HTTP client; a :class:`RequestsTransport` is created
            when omitted.
    """

    def __init__(self, transport: HttpTransport | None = None) -> None:
        self.transport: HttpTransport = transport or RequestsTransport()

    def _get_parsed_response(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        """GET *url* and return the body text after checking the status.

        Raises:
            InvalidCredentials: On HTTP 401 or 403.
            QuotaExceeded: On HTTP 429.
            InvalidServerResponse: On any other status ``>= 300`` or an
                empty body.
            TransportError: Propagated from the transport.
        """
        logger.debug("%s: GET %s params=%s", self.name, url, dict(params or {}))
        response = self.transport.send_request("GET", url, headers=headers, params=params)
        query_url = response.url or url
        status = response.status_code

        if status in (401, 403):
            raise InvalidCredentials(
                f"Request to the {self.name} provider was refused ({status}): invalid credentials."
            )
        if status == 429:
            retry_after = response.headers.get("Retry-After", "")
            raise QuotaExceeded(self.name, int(retry_after) if retry_after.isdigit() else None)
        if status >= 300:
            raise InvalidServerResponse.create(query_url, status)

        body = response.text
        if not body.strip():
            raise InvalidServerResponse.empty_response(query_url)
        return body

    def _get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Like :meth:`_get_parsed_response` but decode the body as JSON.

        Raises:
            InvalidServerResponse: If the body is not valid JSON.
        """
        body = self._get_parsed_response(url, params=params, headers=headers)
        try:
            return json.loads(body)
        except ValueError as exc:
            raise InvalidServerResponse.create(url) from exc

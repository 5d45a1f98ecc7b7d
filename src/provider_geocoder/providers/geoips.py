"""
Provider Geocoder — GeoIPs
===========================
IP geolocation through the GeoIPs API.  Handles IPv4 literals only: street
addresses, IPv6 and reverse queries all raise
:class:`~shared.python.exceptions.UnsupportedOperation` without touching
the network.
"""

from __future__ import annotations

import logging
from typing import Any

from shared.python.exceptions import (
    InvalidArgument,
    InvalidCredentials,
    InvalidServerResponse,
    QuotaExceeded,
    UnsupportedOperation,
)
from shared.python.validators import Validators
from provider_geocoder.builder import AddressBuilder
from provider_geocoder.collection import AddressCollection
from provider_geocoder.models import Address, Country
from provider_geocoder.providers.base import AbstractHttpProvider
from provider_geocoder.query import GeocodeQuery
from provider_geocoder.transport import HttpTransport

logger = logging.getLogger("provider_geocoder.providers.geoips")

ENDPOINT_URL = "http://api.geoips.com/ip/{ip}/key/{api_key}/output/json/timezone/true/"

LOCALHOST_IPS = ("127.0.0.1",)


def localhost_address(provided_by: str | None = None) -> Address:
    """Fixed result returned for loopback addresses."""
    return Address(
        locality="localhost",
        country=Country(name="localhost"),
        provided_by=provided_by,
    )


class GeoIPs(AbstractHttpProvider):
    """IP-only geocoder backed by GeoIPs.

    Args:
        api_key: GeoIPs API key.
        transport: HTTP client; defaults to a new :class:`RequestsTransport`.

    Raises:
        InvalidArgument: If *api_key* is empty.
    """

    name = "geoips"

    supports_street_addresses = False
    supports_ip_addresses = True
    supports_reverse = False

    def __init__(self, api_key: str, transport: HttpTransport | None = None) -> None:
        if not api_key:
            raise InvalidArgument("An API key is required to use the GeoIPs provider.")
        super().__init__(transport)
        self.api_key = api_key

    def _geocode(self, query: GeocodeQuery) -> AddressCollection:
        ip = query.text
        if Validators.is_ipv6_address(ip):
            raise UnsupportedOperation(f"The {self.name} provider does not support IPv6 addresses.")
        if ip in LOCALHOST_IPS:
            return AddressCollection([localhost_address(self.name)])

        url = ENDPOINT_URL.format(ip=ip, api_key=self.api_key)
        data = self._get_json(url)
        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, dict) or "status" not in response:
            raise InvalidServerResponse.create(url)

        status = response["status"]
        if status == "Bad Request":
            raise InvalidServerResponse(
                f"The {self.name} provider rejected the query: {response.get('message', status)}"
            )
        if status == "Forbidden":
            if response.get("message") == "Limit Exceeded":
                raise QuotaExceeded(self.name)
            raise InvalidCredentials("API Key provided is not valid.")

        return AddressCollection([self._response_to_location(response)])

    def _response_to_location(self, response: dict[str, Any]) -> Address:
        builder = AddressBuilder(self.name)
        builder.set_coordinates(response.get("latitude"), response.get("longitude"))
        builder.add_admin_level(1, response.get("region_name"), response.get("region_code"))
        builder.add_admin_level(2, response.get("county_name"))
        builder.set_locality(response.get("city_name"))
        builder.set_country(response.get("country_name"))
        builder.set_country_code(response.get("country_code"))
        builder.set_timezone(response.get("timezone"))
        try:
            return builder.build()
        except InvalidArgument as exc:
            raise InvalidServerResponse(
                f"The {self.name} provider returned invalid values: {exc.message}"
            ) from exc

"""
Provider Geocoder — OIORest
============================
Danish address lookup through the OIORest service.  Street addresses only:
IP addresses and reverse queries raise
:class:`~shared.python.exceptions.UnsupportedOperation`.
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import quote

from shared.python.exceptions import InvalidArgument, InvalidServerResponse
from provider_geocoder.builder import AddressBuilder
from provider_geocoder.collection import AddressCollection
from provider_geocoder.models import Address
from provider_geocoder.providers.base import AbstractHttpProvider
from provider_geocoder.query import GeocodeQuery

logger = logging.getLogger("provider_geocoder.providers.oiorest")

ENDPOINT_URL = "http://geo.oiorest.dk/adresser/{address}.json"

# "Vesterbrogade 1, 1620 København V" → "Vesterbrogade,1,1620"
_ADDRESS_PATTERN = re.compile(r"([a-zæøå]+) (\d+), (\d{4}) ([a-zæøå ])+", re.IGNORECASE)


def format_address(address: str) -> str:
    """Rewrite a Danish address into the comma-separated form OIORest expects."""
    return _ADDRESS_PATTERN.sub(r"\1,\2,\3", address)


class OIORest(AbstractHttpProvider):
    """Geocoder for Danish street addresses."""

    name = "oio_rest"

    supports_reverse = False

    def _geocode(self, query: GeocodeQuery) -> AddressCollection:
        url = ENDPOINT_URL.format(address=quote(format_address(query.text), safe=","))
        data = self._get_json(url)
        if not isinstance(data, dict):
            raise InvalidServerResponse.create(url)
        if not data:
            return AddressCollection([])
        return AddressCollection([self._data_to_location(data)])

    def _data_to_location(self, data: dict[str, Any]) -> Address:
        def nested(key: str, child: str) -> Any:
            value = data.get(key)
            return value.get(child) if isinstance(value, dict) else None

        builder = AddressBuilder(self.name)
        builder.set_coordinates(nested("wgs84koordinat", "bredde"), nested("wgs84koordinat", "længde"))
        builder.set_street_number(data.get("husnr"))
        builder.set_street_name(nested("vejnavn", "navn"))
        builder.set_locality(nested("postnummer", "navn"))
        builder.set_postal_code(nested("postnummer", "nr"))
        builder.set_sub_locality(nested("kommune", "navn"))
        builder.add_admin_level(1, nested("region", "navn"))
        builder.set_country("Denmark")
        builder.set_country_code("DK")
        builder.set_timezone("Europe/Copenhagen")
        try:
            return builder.build()
        except InvalidArgument as exc:
            raise InvalidServerResponse(
                f"The {self.name} provider returned invalid values: {exc.message}"
            ) from exc

"""
Provider Geocoder — Yandex
===========================
Adapter for the Yandex Geocoder HTTP API.

Yandex nests address details several levels deep inside each
``GeoObject`` (``AddressDetails → Country → AdministrativeArea → ...``)
with a different depth depending on the kind of object found, so the
adapter flattens every object to its leaf keys before reading them.

Reference:
    https://yandex.com/dev/maps/geocoder/
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from shared.python.exceptions import InvalidServerResponse
from provider_geocoder.builder import AddressBuilder
from provider_geocoder.collection import AddressCollection
from provider_geocoder.models import Address
from provider_geocoder.providers.base import AbstractHttpProvider
from provider_geocoder.query import GeocodeQuery, ReverseQuery
from provider_geocoder.transport import HttpTransport

logger = logging.getLogger("provider_geocoder.providers.yandex")

ENDPOINT_URL = "https://geocode-maps.yandex.ru/1.x/"

_ADMIN_LEVEL_KEYS = ("AdministrativeAreaName", "SubAdministrativeAreaName")


@dataclass(frozen=True)
class YandexAddress(Address):
    """Yandex result with its match precision.

    Attributes:
        precision: ``"exact"``, ``"number"``, ``"near"``, ``"street"``, ``"other"``.
        name: Short name of the found object.
    """

    precision: str | None = None
    name: str | None = None

    def with_precision(self, precision: str | None) -> "YandexAddress":
        return self._replace(precision=precision)

    def with_name(self, name: str | None) -> "YandexAddress":
        return self._replace(name=name)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"precision": self.precision, "name": self.name})
        return data


def _flatten(node: Any, flat: dict[str, Any]) -> dict[str, Any]:
    """Collect every leaf ``key: value`` of a nested payload; later keys win."""
    if isinstance(node, dict):
        for key, value in node.items():
            if isinstance(value, (dict, list)):
                _flatten(value, flat)
            else:
                flat[key] = value
    elif isinstance(node, list):
        for item in node:
            _flatten(item, flat)
    return flat


class Yandex(AbstractHttpProvider):
    """Geocoder backed by the Yandex Geocoder API.

    Args:
        toponym: Kind of toponym to prefer for reverse geocoding
                 (``"house"``, ``"street"``, ``"locality"``...).
        api_key: Yandex API key, sent as ``apikey`` when given.
        transport: HTTP client; defaults to a new :class:`RequestsTransport`.
    """

    name = "yandex"

    def __init__(
        self,
        toponym: str | None = None,
        api_key: str | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        super().__init__(transport)
        self.toponym = toponym
        self.api_key = api_key

    def _geocode(self, query: GeocodeQuery) -> AddressCollection:
        return self._execute_query({"geocode": query.text}, query.locale, query.limit)

    def _reverse(self, query: ReverseQuery) -> AddressCollection:
        coordinates = query.coordinates
        # Yandex expects "longitude,latitude"
        params = {"geocode": f"{coordinates.longitude:f},{coordinates.latitude:f}"}
        if self.toponym is not None:
            params["kind"] = self.toponym
        return self._execute_query(params, query.locale, query.limit)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _execute_query(self, params: dict[str, Any], locale: str | None, limit: int) -> AddressCollection:
        params["format"] = "json"
        params["results"] = limit
        if locale is not None:
            params["lang"] = locale.replace("_", "-")
        if self.api_key:
            params["apikey"] = self.api_key

        data = self._get_json(ENDPOINT_URL, params=params)
        if not isinstance(data, dict):
            raise InvalidServerResponse.create(ENDPOINT_URL)
        if not data or "error" in data:
            return AddressCollection([])

        try:
            collection = data["response"]["GeoObjectCollection"]
            found = collection["metaDataProperty"]["GeocoderResponseMetaData"].get("found")
            members = collection.get("featureMember") or []
        except (KeyError, TypeError, AttributeError) as exc:
            raise InvalidServerResponse(
                f"The {self.name} provider returned an unexpected payload: {exc}"
            ) from exc

        if str(found) == "0":
            return AddressCollection([])

        return AddressCollection(self._member_to_location(member) for member in members)

    def _member_to_location(self, member: dict[str, Any]) -> YandexAddress:
        try:
            flat = _flatten(member["GeoObject"], {})
            builder = AddressBuilder(self.name)

            lower, upper = flat.get("lowerCorner"), flat.get("upperCorner")
            if lower and upper:
                west, south = lower.split(" ")
                east, north = upper.split(" ")
                builder.set_bounds(south, west, north, east)

            pos = flat.get("pos")
            if pos:
                longitude, latitude = pos.split(" ")
                builder.set_coordinates(latitude, longitude)

            for level, key in enumerate(_ADMIN_LEVEL_KEYS, start=1):
                builder.add_admin_level(level, flat.get(key))

            builder.set_street_number(flat.get("PremiseNumber"))
            builder.set_street_name(flat.get("ThoroughfareName"))
            builder.set_sub_locality(flat.get("DependentLocalityName"))
            builder.set_locality(flat.get("LocalityName"))
            builder.set_country(flat.get("CountryName"))
            builder.set_country_code(flat.get("CountryNameCode"))

            location = builder.build(YandexAddress)
        except (KeyError, AttributeError, TypeError, ValueError) as exc:
            raise InvalidServerResponse(
                f"The {self.name} provider returned a malformed GeoObject: {exc}"
            ) from exc

        return location.with_precision(flat.get("precision")).with_name(flat.get("name"))

"""
Provider Geocoder — Google Maps
================================
Adapter for the Google Maps Geocoding API.

Requires an API key with the Geocoding API enabled.  Never commit the key
to version control — pass it from an environment variable instead (the
CLI reads ``GEOCODER_API_KEY``).

Reference:
    https://developers.google.com/maps/documentation/geocoding
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from shared.python.exceptions import (
    InvalidArgument,
    InvalidCredentials,
    InvalidServerResponse,
    QuotaExceeded,
)
from provider_geocoder.builder import AddressBuilder
from provider_geocoder.collection import AddressCollection
from provider_geocoder.models import AdminLevel, AdminLevelCollection, Address
from provider_geocoder.providers.base import AbstractHttpProvider
from provider_geocoder.query import GeocodeQuery, ReverseQuery
from provider_geocoder.transport import HttpTransport

logger = logging.getLogger("provider_geocoder.providers.google_maps")

GEOCODE_ENDPOINT_URL = "https://maps.googleapis.com/maps/api/geocode/json"

_QUOTA_STATUSES = ("OVER_QUERY_LIMIT", "OVER_DAILY_LIMIT")


@dataclass(frozen=True)
class GoogleAddress(Address):
    """Google Maps result with Google-specific metadata.

    Attributes:
        place_id: Stable Google place identifier.
        formatted_address: Human-readable address.
        location_type: Precision of the position, e.g. ``"ROOFTOP"``.
        result_type: Google ``types`` of the result.
        partial_match: ``True`` when Google matched only part of the query.
        sub_locality_levels: ``sublocality_level_1..5`` components.
    """

    place_id: str | None = None
    formatted_address: str | None = None
    location_type: str | None = None
    result_type: tuple[str, ...] = ()
    partial_match: bool = False
    sub_locality_levels: AdminLevelCollection = field(default_factory=AdminLevelCollection)

    def with_place_id(self, place_id: str | None) -> "GoogleAddress":
        return self._replace(place_id=place_id)

    def with_formatted_address(self, formatted_address: str | None) -> "GoogleAddress":
        return self._replace(formatted_address=formatted_address)

    def with_location_type(self, location_type: str | None) -> "GoogleAddress":
        return self._replace(location_type=location_type)

    def with_result_type(self, result_type: list[str] | tuple[str, ...]) -> "GoogleAddress":
        return self._replace(result_type=tuple(result_type))

    def with_partial_match(self, partial_match: bool) -> "GoogleAddress":
        return self._replace(partial_match=bool(partial_match))

    def with_sub_locality_levels(self, levels: AdminLevelCollection) -> "GoogleAddress":
        return self._replace(sub_locality_levels=levels)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "placeId": self.place_id,
                "formattedAddress": self.formatted_address,
                "locationType": self.location_type,
                "resultType": list(self.result_type),
                "partialMatch": self.partial_match,
                "subLocalityLevels": self.sub_locality_levels.to_list(),
            }
        )
        return data


class GoogleMaps(AbstractHttpProvider):
    """Geocoder backed by the Google Maps Geocoding API.

    Args:
        api_key: Your Google Maps Geocoding API key.
        region: Default region bias (ccTLD, e.g. ``"fr"``).
        transport: HTTP client; defaults to a new :class:`RequestsTransport`.

    Raises:
        InvalidArgument: If *api_key* is empty.

    Supported ``GeocodeQuery.data`` keys:
        region      Overrides the default region bias.
        components  Component filter string, e.g. ``"country:FR"``.
    """

    name = "google_maps"

    def __init__(
        self,
        api_key: str,
        region: str | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        if not api_key:
            raise InvalidArgument("An API key is required to use the Google Maps provider.")
        super().__init__(transport)
        self.api_key = api_key
        self.region = region

    def _geocode(self, query: GeocodeQuery) -> AddressCollection:
        params: dict[str, Any] = {"address": query.text}
        region = query.get_data("region", self.region)
        if region:
            params["region"] = region
        components = query.get_data("components")
        if components:
            params["components"] = components
        return self._execute_query(params, query.locale, query.limit)

    def _reverse(self, query: ReverseQuery) -> AddressCollection:
        coordinates = query.coordinates
        params = {"latlng": f"{coordinates.latitude},{coordinates.longitude}"}
        return self._execute_query(params, query.locale, query.limit)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _execute_query(self, params: dict[str, Any], locale: str | None, limit: int) -> AddressCollection:
        params["key"] = self.api_key
        if locale:
            params["language"] = locale

        data = self._get_json(GEOCODE_ENDPOINT_URL, params=params)
        if not isinstance(data, dict):
            raise InvalidServerResponse.create(GEOCODE_ENDPOINT_URL)

        status = data.get("status", "UNKNOWN")
        if status == "ZERO_RESULTS":
            return AddressCollection([])
        if status == "REQUEST_DENIED":
            raise InvalidCredentials(
                f"Google geocoding request denied — check your API key. {data.get('error_message', '')}".strip()
            )
        if status in _QUOTA_STATUSES:
            raise QuotaExceeded(self.name)
        if status != "OK" or not isinstance(data.get("results"), list):
            raise InvalidServerResponse(
                f"Google geocoding returned status {status!r}: {data.get('error_message', 'no details')}"
            )

        return AddressCollection(
            self._result_to_location(result) for result in data["results"][:limit]
        )

    def _result_to_location(self, result: dict[str, Any]) -> GoogleAddress:
        try:
            builder = AddressBuilder(self.name)
            geometry = result["geometry"]
            location = geometry["location"]
            builder.set_coordinates(location.get("lat"), location.get("lng"))

            # Google only sends "bounds" for areas; fall back to the viewport
            box = geometry.get("bounds") or geometry.get("viewport")
            if box:
                builder.set_bounds(
                    box["southwest"]["lat"],
                    box["southwest"]["lng"],
                    box["northeast"]["lat"],
                    box["northeast"]["lng"],
                )

            sub_locality_levels: list[AdminLevel] = []
            for component in result.get("address_components") or []:
                types = component.get("types") or []
                long_name = component.get("long_name")
                short_name = component.get("short_name")
                for component_type in types:
                    self._update_builder(builder, component_type, long_name, short_name)
                    if component_type.startswith("sublocality_level_"):
                        level = int(component_type.rsplit("_", 1)[1])
                        if long_name and all(s.level != level for s in sub_locality_levels):
                            sub_locality_levels.append(AdminLevel(level, long_name, short_name))

            address = builder.build(GoogleAddress)
            address = (
                address.with_place_id(result.get("place_id"))
                .with_formatted_address(result.get("formatted_address"))
                .with_location_type(geometry.get("location_type"))
                .with_result_type(result.get("types") or [])
                .with_partial_match(result.get("partial_match", False))
                .with_sub_locality_levels(AdminLevelCollection(sub_locality_levels))
            )
        except (KeyError, AttributeError, TypeError, ValueError) as exc:
            raise InvalidServerResponse(
                f"The {self.name} provider returned a malformed result: {exc}"
            ) from exc

        return address

    @staticmethod
    def _update_builder(builder: AddressBuilder, component_type: str, long_name: Any, short_name: Any) -> None:
        if component_type == "postal_code":
            builder.set_postal_code(long_name)
        elif component_type == "locality":
            builder.set_locality(long_name)
        elif component_type.startswith("administrative_area_level_"):
            level = int(component_type.rsplit("_", 1)[1])
            if 1 <= level <= AdminLevelCollection.MAX_LEVEL_DEPTH:
                builder.add_admin_level(level, long_name, short_name)
        elif component_type == "sublocality":
            builder.set_sub_locality(long_name)
        elif component_type == "street_number":
            builder.set_street_number(long_name)
        elif component_type == "route":
            builder.set_street_name(long_name)
        elif component_type == "country":
            builder.set_country(long_name)
            builder.set_country_code(short_name)

"""
Provider Geocoder — Nominatim
==============================
Adapter for the OpenStreetMap Nominatim API (search, reverse and lookup).

Must comply with the Nominatim Usage Policy: a descriptive ``User-Agent``
is mandatory, so the constructor refuses an empty one.

Reference:
    https://nominatim.org/release-docs/develop/api/Search/
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from shared.python.exceptions import InvalidArgument, InvalidServerResponse
from provider_geocoder.builder import AddressBuilder
from provider_geocoder.collection import AddressCollection
from provider_geocoder.models import Address
from provider_geocoder.providers.base import AbstractHttpProvider
from provider_geocoder.query import GeocodeQuery, ReverseQuery
from provider_geocoder.transport import HttpTransport

logger = logging.getLogger("provider_geocoder.providers.nominatim")

OSM_ROOT_URL = "https://nominatim.openstreetmap.org"

_ADMIN_LEVEL_TAGS = ("state", "county")
_LOCALITY_TAGS = ("city", "town", "village", "hamlet")


@dataclass(frozen=True)
class NominatimAddress(Address):
    """Nominatim result with its OSM identifiers.

    Attributes:
        attribution: Licence string returned with the result.
        osm_id: OSM node/way/relation id.
        osm_type: ``"node"``, ``"way"`` or ``"relation"``.
        display_name: Full formatted address.
        category: Main OSM tag key (forward and lookup results only).
        type: Main OSM tag value (forward and lookup results only).
    """

    attribution: str | None = None
    osm_id: int | None = None
    osm_type: str | None = None
    display_name: str | None = None
    category: str | None = None
    type: str | None = None

    def with_attribution(self, attribution: str | None) -> "NominatimAddress":
        return self._replace(attribution=attribution)

    def with_osm_id(self, osm_id: int | None) -> "NominatimAddress":
        return self._replace(osm_id=osm_id)

    def with_osm_type(self, osm_type: str | None) -> "NominatimAddress":
        return self._replace(osm_type=osm_type)

    def with_display_name(self, display_name: str | None) -> "NominatimAddress":
        return self._replace(display_name=display_name)

    def with_category(self, category: str | None) -> "NominatimAddress":
        return self._replace(category=category)

    def with_type(self, type: str | None) -> "NominatimAddress":
        return self._replace(type=type)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "attribution": self.attribution,
                "osmId": self.osm_id,
                "osmType": self.osm_type,
                "displayName": self.display_name,
                "category": self.category,
                "type": self.type,
            }
        )
        return data


class Nominatim(AbstractHttpProvider):
    """Geocoder backed by a Nominatim server.

    Args:
        user_agent: Identifies your application to Nominatim.  Use a
                    descriptive name (e.g. ``"my-company-geocoder/1.0"``).
        root_url: Base URL of the Nominatim server.
        referer: Optional ``Referer`` header.
        transport: HTTP client; defaults to a new :class:`RequestsTransport`.

    Raises:
        InvalidArgument: If *user_agent* is empty.

    Supported ``GeocodeQuery.data`` keys:
        countrycodes  ISO code or list of codes to restrict results to.
        viewbox       ``[x1, y1, x2, y2]`` preferred area.
        bounded       ``True`` to restrict results to the viewbox.

    Supported ``ReverseQuery.data`` keys:
        zoom          Level of detail, 0-18 (default 18).
    """

    name = "nominatim"

    def __init__(
        self,
        user_agent: str,
        root_url: str = OSM_ROOT_URL,
        referer: str = "",
        transport: HttpTransport | None = None,
    ) -> None:
        if not user_agent or not user_agent.strip():
            raise InvalidArgument("The User-Agent must be set to use the Nominatim provider.")
        super().__init__(transport)
        self.root_url = root_url.rstrip("/")
        self.user_agent = user_agent
        self.referer = referer

    @classmethod
    def with_openstreetmap_server(
        cls,
        user_agent: str,
        referer: str = "",
        transport: HttpTransport | None = None,
    ) -> "Nominatim":
        return cls(user_agent, OSM_ROOT_URL, referer, transport)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _geocode(self, query: GeocodeQuery) -> AddressCollection:
        params: dict[str, Any] = {
            "format": "jsonv2",
            "q": query.text,
            "addressdetails": 1,
            "limit": query.limit,
        }

        countrycodes = query.get_data("countrycodes")
        if countrycodes is not None:
            if isinstance(countrycodes, str):
                countrycodes = [countrycodes]
            params["countrycodes"] = ",".join(code.lower() for code in countrycodes)

        viewbox = query.get_data("viewbox")
        if viewbox is not None and len(viewbox) == 4:
            params["viewbox"] = ",".join(str(v) for v in viewbox)
            if query.get_data("bounded") is True:
                params["bounded"] = 1

        url = f"{self.root_url}/search"
        places = self._execute_query(url, params, query.locale)
        if not isinstance(places, list):
            raise InvalidServerResponse.create(url)

        return AddressCollection(self._place_to_location(place, reverse=False) for place in places)

    def _reverse(self, query: ReverseQuery) -> AddressCollection:
        params = {
            "format": "jsonv2",
            "lat": query.coordinates.latitude,
            "lon": query.coordinates.longitude,
            "addressdetails": 1,
            "zoom": query.get_data("zoom", 18),
        }
        place = self._execute_query(f"{self.root_url}/reverse", params, query.locale)
        # Nominatim answers an unmatched position with {"error": "Unable to geocode"}
        if not isinstance(place, dict) or not place or "error" in place:
            return AddressCollection([])

        return AddressCollection([self._place_to_location(place, reverse=True)])

    def lookup_query(self, osm_ids: str | Iterable[str], locale: str | None = None) -> AddressCollection:
        """Look up OSM objects by id (e.g. ``"R146656"`` or ``["N240109189", "W50637691"]``).

        Raises:
            InvalidServerResponse: If the payload is not a list of objects.
        """
        if not isinstance(osm_ids, str):
            osm_ids = ",".join(osm_ids)
        url = f"{self.root_url}/lookup"
        # lookup does not support jsonv2
        places = self._execute_query(
            url, {"format": "json", "osm_ids": osm_ids, "addressdetails": 1}, locale
        )
        if not isinstance(places, list):
            raise InvalidServerResponse.create(url)

        locations = []
        for place in places:
            if not isinstance(place, dict):
                raise InvalidServerResponse.create(url)
            place = {**place, "boundingbox": None, "category": place.get("class")}
            locations.append(self._place_to_location(place, reverse=False))
        return AddressCollection(locations)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _execute_query(self, url: str, params: dict[str, Any], locale: str | None) -> Any:
        if locale is not None:
            params["accept-language"] = locale

        headers = {"User-Agent": self.user_agent}
        if self.referer:
            headers["Referer"] = self.referer

        return self._get_json(url, params=params, headers=headers)

    def _place_to_location(self, place: dict[str, Any], reverse: bool) -> NominatimAddress:
        try:
            details = place.get("address") or {}
            builder = AddressBuilder(self.name)

            for level, tag in enumerate(_ADMIN_LEVEL_TAGS, start=1):
                builder.add_admin_level(level, details.get(tag))

            # keep the first postal code when several are listed
            postcode = details.get("postcode")
            if postcode:
                postcode = str(postcode).split(";")[0]
            builder.set_postal_code(postcode)

            for tag in _LOCALITY_TAGS:
                if details.get(tag):
                    builder.set_locality(details[tag])
                    break

            builder.set_street_name(details.get("road") or details.get("pedestrian"))
            builder.set_street_number(details.get("house_number"))
            builder.set_sub_locality(details.get("suburb"))
            builder.set_country(details.get("country"))
            country_code = details.get("country_code")
            builder.set_country_code(country_code.upper() if country_code else None)

            builder.set_coordinates(place.get("lat"), place.get("lon"))

            # Nominatim order: [south, north, west, east]
            bbox = place.get("boundingbox")
            if bbox and len(bbox) == 4:
                builder.set_bounds(bbox[0], bbox[2], bbox[1], bbox[3])

            location = builder.build(NominatimAddress)
            osm_id = place.get("osm_id")
            location = (
                location.with_attribution(place.get("licence"))
                .with_osm_id(int(osm_id) if osm_id is not None else None)
                .with_osm_type(place.get("osm_type"))
                .with_display_name(place.get("display_name"))
            )
            if not reverse:
                location = location.with_category(place.get("category")).with_type(place.get("type"))
        except (AttributeError, TypeError, ValueError) as exc:
            raise InvalidServerResponse(
                f"The {self.name} provider returned a malformed place: {exc}"
            ) from exc

        return location

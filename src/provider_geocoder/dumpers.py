"""
Provider Geocoder — Dumpers
============================
Serialise a single :class:`~provider_geocoder.models.Address` to a text
format.

Classes:
    Dumper    Abstract base: ``dump(address) -> str``.
    Wkt       Well-Known Text point, e.g. ``POINT(2.388911 48.863151)``.
    GeoJson   GeoJSON Feature with the address fields as properties.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Iterable

from provider_geocoder.models import Address, Coordinates

_POSITION_KEYS = ("latitude", "longitude", "bounds")


class Dumper(ABC):
    """Abstract base for address serialisers."""

    @abstractmethod
    def dump(self, address: Address) -> str:
        """Return the text representation of *address*."""


class Wkt(Dumper):
    """Format an address position as a WKT ``POINT``.

    Longitude comes first and both values use six fixed decimals.  An
    address without coordinates is written as ``POINT(0.000000 0.000000)``.
    """

    def dump(self, address: Address) -> str:
        coordinates = address.coordinates or Coordinates()
        return f"POINT({coordinates.longitude:f} {coordinates.latitude:f})"


class GeoJson(Dumper):
    """Format an address as a GeoJSON Feature.

    The geometry is a ``Point`` (``null`` when the address has no
    coordinates).  ``properties`` holds every non-empty field of
    :meth:`Address.to_dict` except the position keys; the bounding box,
    when present, is written under ``bounds``.
    """

    def feature(self, address: Address, extra_props: dict[str, Any] | None = None) -> dict[str, Any]:
        """Build the Feature dict for *address*.

        Args:
            address: The address to convert.
            extra_props: Additional properties merged over the address
                         fields (e.g. columns carried from an input CSV).
        """
        properties = {
            key: value
            for key, value in address.to_dict().items()
            if key not in _POSITION_KEYS and value not in (None, [], "")
        }
        if address.provided_by:
            properties["providedBy"] = address.provided_by
        if extra_props:
            properties.update(extra_props)

        geometry = None
        if address.coordinates is not None:
            geometry = {
                "type": "Point",
                "coordinates": [address.coordinates.longitude, address.coordinates.latitude],
            }

        feature: dict[str, Any] = {"type": "Feature", "geometry": geometry, "properties": properties}
        if address.bounds is not None:
            feature["bounds"] = address.bounds.to_dict()
        return feature

    def feature_collection(self, addresses: Iterable[Address]) -> dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [self.feature(address) for address in addresses],
        }

    def dump(self, address: Address) -> str:
        return json.dumps(self.feature(address))

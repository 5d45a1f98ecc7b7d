"""
Provider Geocoder — Address Builder
====================================
Incremental constructor that collects the partial, possibly-missing fields
of a provider payload and emits an immutable :class:`~provider_geocoder.models.Address`
(or a provider-specific subclass) when :meth:`AddressBuilder.build` is
called.

Every setter is last-write-wins and tolerant of missing input: ``None``,
``""`` and whitespace-only strings are all stored as "unset".  Value-type
invariants (coordinate ranges, bounds order, admin-level range) are only
checked in :meth:`~AddressBuilder.build`, so a builder never raises while
a payload is being walked.

Usage::

    builder = AddressBuilder("nominatim")
    builder.set_coordinates(place["lat"], place["lon"])
    builder.set_locality(place["address"].get("city"))
    builder.add_admin_level(1, place["address"].get("state"))
    location = builder.build(NominatimAddress).with_osm_id(int(place["osm_id"]))
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from shared.python.exceptions import InvalidArgument
from provider_geocoder.models import (
    AdminLevel,
    AdminLevelCollection,
    Address,
    Bounds,
    Coordinates,
    Country,
)

logger = logging.getLogger("provider_geocoder.builder")

AddressT = TypeVar("AddressT", bound=Address)


def clean_text(value: Any) -> str | None:
    """Translate a raw payload value into the canonical optional string.

    ``None`` and blank strings become ``None``; numbers are converted with
    ``str()``; strings are stripped.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return str(value)


class AddressBuilder:
    """Accumulates address fields and builds an immutable address.

    Setters return the builder so calls can be chained.

    Args:
        provided_by: Name of the provider feeding the builder; copied to
            :attr:`Address.provided_by`.
    """

    def __init__(self, provided_by: str | None = None) -> None:
        self.provided_by = provided_by
        self._coordinates: tuple[Any, Any] | None = None
        self._bounds: tuple[Any, Any, Any, Any] | None = None
        self._street_number: str | None = None
        self._street_name: str | None = None
        self._sub_locality: str | None = None
        self._locality: str | None = None
        self._postal_code: str | None = None
        self._admin_levels: dict[int, tuple[str, str | None]] = {}
        self._country: str | None = None
        self._country_code: str | None = None
        self._timezone: str | None = None

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_coordinates(self, latitude: Any, longitude: Any) -> "AddressBuilder":
        """Set the position; either value missing clears it."""
        if clean_text(latitude) is None or clean_text(longitude) is None:
            self._coordinates = None
        else:
            self._coordinates = (latitude, longitude)
        return self

    def set_bounds(self, south: Any, west: Any, north: Any, east: Any) -> "AddressBuilder":
        """Set the bounding rectangle; any missing edge clears it."""
        edges = (south, west, north, east)
        if any(clean_text(edge) is None for edge in edges):
            self._bounds = None
        else:
            self._bounds = edges
        return self

    def set_street_number(self, street_number: Any) -> "AddressBuilder":
        self._street_number = clean_text(street_number)
        return self

    def set_street_name(self, street_name: Any) -> "AddressBuilder":
        self._street_name = clean_text(street_name)
        return self

    def set_sub_locality(self, sub_locality: Any) -> "AddressBuilder":
        self._sub_locality = clean_text(sub_locality)
        return self

    def set_locality(self, locality: Any) -> "AddressBuilder":
        self._locality = clean_text(locality)
        return self

    def set_postal_code(self, postal_code: Any) -> "AddressBuilder":
        self._postal_code = clean_text(postal_code)
        return self

    def add_admin_level(self, level: int, name: Any, code: Any = None) -> "AddressBuilder":
        """Record an administrative tier.

        A blank *name* leaves the level unset.  Adding the same level
        twice keeps the last value.
        """
        name = clean_text(name)
        if name is None:
            self._admin_levels.pop(level, None)
            return self
        self._admin_levels[level] = (name, clean_text(code))
        return self

    def set_country(self, country: Any) -> "AddressBuilder":
        self._country = clean_text(country)
        return self

    def set_country_code(self, country_code: Any) -> "AddressBuilder":
        self._country_code = clean_text(country_code)
        return self

    def set_timezone(self, timezone: Any) -> "AddressBuilder":
        self._timezone = clean_text(timezone)
        return self

    # ------------------------------------------------------------------
    # Presence checks
    # ------------------------------------------------------------------

    def has_coordinates(self) -> bool:
        return self._coordinates is not None

    def has_bounds(self) -> bool:
        return self._bounds is not None

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self, target: type[AddressT] = Address) -> AddressT:  # type: ignore[assignment]
        """Construct *target* from the accumulated fields.

        Args:
            target: :class:`Address` or any subclass of it.  Fields that
                only the subclass defines keep their defaults and are set
                afterwards with the subclass's ``with_*`` helpers.

        Returns:
            A new, immutable instance of *target*.

        Raises:
            InvalidArgument: If *target* is not an :class:`Address` type,
                or a value-type invariant is violated (coordinates out of
                range, inverted bounds, admin level outside ``1..5``).
        """
        if not isinstance(target, type) or not issubclass(target, Address):
            raise InvalidArgument(
                f"Cannot build {target!r}: target must be Address or a subclass of it."
            )

        coordinates = None
        if self._coordinates is not None:
            coordinates = Coordinates(*self._coordinates)

        bounds = None
        if self._bounds is not None:
            bounds = Bounds(*self._bounds)

        admin_levels = AdminLevelCollection(
            AdminLevel(level, name, code)
            for level, (name, code) in self._admin_levels.items()
        )

        location = target(
            coordinates=coordinates,
            bounds=bounds,
            street_number=self._street_number,
            street_name=self._street_name,
            postal_code=self._postal_code,
            locality=self._locality,
            sub_locality=self._sub_locality,
            admin_levels=admin_levels,
            country=Country(self._country, self._country_code),
            timezone=self._timezone,
            provided_by=self.provided_by,
        )
        logger.debug("Built %s from %s", target.__name__, self.provided_by or "builder")
        return location

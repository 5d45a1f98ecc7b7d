"""
Provider Geocoder — Result Model
=================================
The normalized, immutable data model every provider maps its response
into.

Classes:
    Coordinates           A WGS84 latitude/longitude pair.
    Bounds                A south/west/north/east bounding rectangle.
    AdminLevel            One administrative tier (1 = highest, 5 = lowest).
    AdminLevelCollection  Ordered, unique-by-level container of up to five tiers.
    Country               Country name and ISO code, both optional.
    Address               The normalized location record.

Absence:
    ``None`` is the only representation of "not present in the source
    data".  ``Address.coordinates`` and ``Address.bounds`` are ``None``
    when the provider did not supply them, so callers test presence with
    ``address.coordinates is None`` rather than comparing against a
    ``(0, 0)`` sentinel.  :meth:`Address.to_dict` keeps every key and
    emits ``None`` for absent values.

Objects are built once (usually through
:class:`~provider_geocoder.builder.AddressBuilder`) and never mutated.
Provider-specific variants subclass :class:`Address` and attach their own
fields through ``with_*`` copy helpers.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from shared.python.exceptions import (
    AdminLevelCapacityError,
    EmptyCollection,
    InvalidArgument,
    OutOfBounds,
)
from shared.python.validators import MAX_ADMIN_LEVEL, Validators


def _to_float(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise InvalidArgument(f"{label} must be a number, got {value!r}.")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{label} must be a number, got {value!r}.") from exc


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 coordinate pair.

    ``Coordinates()`` is the ``(0, 0)`` default.  It is a valid position,
    not a marker for "unknown"; an address without coordinates stores
    ``None`` instead.

    Attributes:
        latitude: Decimal degrees in ``[-90, 90]``.
        longitude: Decimal degrees in ``[-180, 180]``.

    Raises:
        InvalidArgument: If either value is not numeric or is out of range.
    """

    latitude: float = 0.0
    longitude: float = 0.0

    def __post_init__(self) -> None:
        latitude = _to_float(self.latitude, "Latitude")
        longitude = _to_float(self.longitude, "Longitude")
        Validators.assert_latitude(latitude)
        Validators.assert_longitude(longitude)
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", longitude)

    def to_tuple(self) -> tuple[float, float]:
        """Return ``(latitude, longitude)``."""
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class Bounds:
    """A bounding rectangle in geographic coordinates.

    All four edges are required; a provider that only supplies some of
    them has no bounds, which :class:`Address` stores as ``None``.

    Attributes:
        south: Southern latitude edge.
        west: Western longitude edge.
        north: Northern latitude edge.
        east: Eastern longitude edge.

    Raises:
        InvalidArgument: If an edge is out of range, or if
            ``south > north`` or ``west > east``.
    """

    south: float
    west: float
    north: float
    east: float

    def __post_init__(self) -> None:
        edges = {}
        for name in ("south", "west", "north", "east"):
            edges[name] = _to_float(getattr(self, name), name.capitalize())
        Validators.assert_bounds_ordered(**edges)
        for name, value in edges.items():
            object.__setattr__(self, name, value)

    def to_dict(self) -> dict[str, float]:
        """Serialise to ``{"south", "west", "north", "east"}``."""
        return {
            "south": self.south,
            "west": self.west,
            "north": self.north,
            "east": self.east,
        }


@dataclass(frozen=True)
class AdminLevel:
    """One administrative division (state, county, district...).

    Attributes:
        level: Tier number, 1 (highest) to 5 (lowest).
        name: Display name of the division.
        code: Optional short code (e.g. ``"IDF"``), ``None`` if unknown.
    """

    level: int
    name: str
    code: str | None = None

    def __post_init__(self) -> None:
        Validators.assert_admin_level(self.level)
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgument(
                f"Administrative level {self.level} requires a non-empty name."
            )

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "name": self.name, "code": self.code}

    def __str__(self) -> str:
        return self.name


class AdminLevelCollection:
    """Ordered collection of :class:`AdminLevel`, unique by level.

    Iteration follows insertion order, which is not necessarily ascending
    level order.  The collection is immutable: :meth:`add` returns a new
    collection.  Two collections compare equal when they hold the same
    ``(level, name, code)`` triples, whatever their order.

    Args:
        admin_levels: Initial levels.

    Raises:
        InvalidArgument: If two entries share a level.
        AdminLevelCapacityError: If more than five levels are supplied.

    Example::

        levels = AdminLevelCollection().add(1, "Île-de-France", "IDF").add(2, "Paris")
        levels.get(2).name   # "Paris"
    """

    __slots__ = ("_levels",)

    MAX_LEVEL_DEPTH = MAX_ADMIN_LEVEL

    def __init__(self, admin_levels: Iterable[AdminLevel] = ()) -> None:
        levels: list[AdminLevel] = []
        seen: set[int] = set()
        for admin_level in admin_levels:
            if not isinstance(admin_level, AdminLevel):
                raise InvalidArgument(
                    f"Expected an AdminLevel, got {type(admin_level).__name__}."
                )
            if len(levels) >= self.MAX_LEVEL_DEPTH:
                raise AdminLevelCapacityError(self.MAX_LEVEL_DEPTH)
            if admin_level.level in seen:
                raise InvalidArgument(
                    f"Administrative level {admin_level.level} is defined twice."
                )
            seen.add(admin_level.level)
            levels.append(admin_level)
        self._levels: tuple[AdminLevel, ...] = tuple(levels)

    def add(self, level: int, name: str, code: str | None = None) -> "AdminLevelCollection":
        """Return a new collection with one more level appended.

        Raises:
            AdminLevelCapacityError: If the collection already holds five levels.
            InvalidArgument: If *level* is out of range or already present.
        """
        if len(self._levels) >= self.MAX_LEVEL_DEPTH:
            raise AdminLevelCapacityError(self.MAX_LEVEL_DEPTH)
        return AdminLevelCollection(self._levels + (AdminLevel(level, name, code),))

    def get(self, level: int) -> AdminLevel:
        """Return the entry for *level*.

        Raises:
            InvalidArgument: If *level* is not in ``1..5``.
            OutOfBounds: If no entry exists for *level*.
        """
        Validators.assert_admin_level(level)
        for admin_level in self._levels:
            if admin_level.level == level:
                return admin_level
        raise OutOfBounds(f"Administrative level {level} is not set for this address.")

    def has(self, level: int) -> bool:
        return any(admin_level.level == level for admin_level in self._levels)

    def first(self) -> AdminLevel:
        if not self._levels:
            raise EmptyCollection("The administrative level collection is empty.")
        return self._levels[0]

    def count(self) -> int:
        return len(self._levels)

    def all(self) -> list[AdminLevel]:
        return list(self._levels)

    def slice(self, offset: int, length: int | None = None) -> list[AdminLevel]:
        if offset < 0 or (length is not None and length < 0):
            raise InvalidArgument(
                f"Slice offset and length must not be negative, got {offset}, {length}."
            )
        end = None if length is None else offset + length
        return list(self._levels[offset:end])

    def to_list(self) -> list[dict[str, Any]]:
        """Serialise to a list of ``{"level", "name", "code"}`` dicts."""
        return [admin_level.to_dict() for admin_level in self._levels]

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[AdminLevel]:
        return iter(self._levels)

    def __contains__(self, level: object) -> bool:
        return any(admin_level.level == level for admin_level in self._levels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdminLevelCollection):
            return NotImplemented
        return frozenset(self._levels) == frozenset(other._levels)

    def __hash__(self) -> int:
        return hash(frozenset(self._levels))

    def __repr__(self) -> str:
        return f"AdminLevelCollection({list(self._levels)!r})"


@dataclass(frozen=True)
class Country:
    """A country name and ISO 3166-1 code; either may be ``None``."""

    name: str | None = None
    code: str | None = None

    def __str__(self) -> str:
        return self.name or ""


# ---------------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Address:
    """A normalized geocoding result.

    Attributes:
        coordinates: Position of the result, ``None`` if not supplied.
        bounds: Bounding rectangle, ``None`` if not supplied.
        street_number: House number as a string.
        street_name: Street or road name.
        postal_code: Postal or ZIP code.
        locality: City, town or village.
        sub_locality: District, suburb or neighbourhood.
        admin_levels: Administrative tiers, possibly empty.
        country: Country name/code, both possibly ``None``.
        timezone: IANA timezone name.
        provided_by: Name of the provider that produced this result.
    """

    coordinates: Coordinates | None = None
    bounds: Bounds | None = None
    street_number: str | None = None
    street_name: str | None = None
    postal_code: str | None = None
    locality: str | None = None
    sub_locality: str | None = None
    admin_levels: AdminLevelCollection = field(default_factory=AdminLevelCollection)
    country: Country = field(default_factory=Country)
    timezone: str | None = None
    provided_by: str | None = None

    @property
    def latitude(self) -> float | None:
        return None if self.coordinates is None else self.coordinates.latitude

    @property
    def longitude(self) -> float | None:
        return None if self.coordinates is None else self.coordinates.longitude

    def _replace(self, **changes: Any) -> Any:
        """Return a copy of this address with *changes* applied."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Return the flat key/value projection of this address.

        Keys are fixed: ``latitude``, ``longitude``, ``bounds``,
        ``streetNumber``, ``streetName``, ``postalCode``, ``locality``,
        ``subLocality``, ``adminLevels``, ``country``, ``countryCode`` and
        ``timezone``.  Absent values are ``None``, never ``""`` or ``0``.
        """
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "bounds": None if self.bounds is None else self.bounds.to_dict(),
            "streetNumber": self.street_number,
            "streetName": self.street_name,
            "postalCode": self.postal_code,
            "locality": self.locality,
            "subLocality": self.sub_locality,
            "adminLevels": self.admin_levels.to_list(),
            "country": self.country.name,
            "countryCode": self.country.code,
            "timezone": self.timezone,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Address":
        """Rebuild an address from the projection produced by :meth:`to_dict`.

        Missing keys are treated as absent.
        """
        latitude, longitude = data.get("latitude"), data.get("longitude")
        coordinates = None
        if latitude is not None and longitude is not None:
            coordinates = Coordinates(latitude, longitude)

        bounds_data = data.get("bounds")
        bounds = Bounds(**bounds_data) if bounds_data else None

        admin_levels = AdminLevelCollection(
            AdminLevel(int(item["level"]), item["name"], item.get("code"))
            for item in data.get("adminLevels") or []
        )
        return cls(
            coordinates=coordinates,
            bounds=bounds,
            street_number=data.get("streetNumber"),
            street_name=data.get("streetName"),
            postal_code=data.get("postalCode"),
            locality=data.get("locality"),
            sub_locality=data.get("subLocality"),
            admin_levels=admin_levels,
            country=Country(data.get("country"), data.get("countryCode")),
            timezone=data.get("timezone"),
        )

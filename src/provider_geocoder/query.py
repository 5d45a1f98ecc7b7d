"""
Provider Geocoder — Queries
============================
Immutable request objects passed to a provider.

Classes:
    GeocodeQuery   Free-text lookup (street address, place name or IP).
    ReverseQuery   Coordinate lookup.

Both carry a result ``limit``, an optional ``locale`` (e.g. ``"fr"``) and
a ``data`` mapping for provider-specific options such as Nominatim's
``countrycodes``.  The ``with_*`` helpers return modified copies.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from shared.python.exceptions import InvalidArgument
from provider_geocoder.models import Coordinates

DEFAULT_RESULT_LIMIT = 5


def _check_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgument(f"Result limit must be a positive integer, got {limit!r}.")


@dataclass(frozen=True)
class GeocodeQuery:
    """A free-text geocoding request.

    Attributes:
        text: The address, place name or IP address to look up.
        limit: Maximum number of results wanted.
        locale: Preferred response language, ``None`` for the provider default.
        data: Provider-specific options.

    Raises:
        InvalidArgument: If *text* is blank or *limit* is not positive.
    """

    text: str
    limit: int = DEFAULT_RESULT_LIMIT
    locale: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise InvalidArgument("Geocode query text must not be empty.")
        object.__setattr__(self, "text", self.text.strip())
        _check_limit(self.limit)

    @classmethod
    def create(cls, text: str) -> "GeocodeQuery":
        return cls(text)

    def with_limit(self, limit: int) -> "GeocodeQuery":
        return dataclasses.replace(self, limit=limit)

    def with_locale(self, locale: str | None) -> "GeocodeQuery":
        return dataclasses.replace(self, locale=locale)

    def with_data(self, key: str, value: Any) -> "GeocodeQuery":
        return dataclasses.replace(self, data={**self.data, key: value})

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


@dataclass(frozen=True)
class ReverseQuery:
    """A reverse-geocoding request for a position.

    Attributes:
        coordinates: Position to look up.
        limit: Maximum number of results wanted.
        locale: Preferred response language, ``None`` for the provider default.
        data: Provider-specific options (e.g. Nominatim ``zoom``).
    """

    coordinates: Coordinates
    limit: int = DEFAULT_RESULT_LIMIT
    locale: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.coordinates, Coordinates):
            raise InvalidArgument(
                f"Reverse query requires Coordinates, got {type(self.coordinates).__name__}."
            )
        _check_limit(self.limit)

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float) -> "ReverseQuery":
        return cls(Coordinates(latitude, longitude))

    def with_limit(self, limit: int) -> "ReverseQuery":
        return dataclasses.replace(self, limit=limit)

    def with_locale(self, locale: str | None) -> "ReverseQuery":
        return dataclasses.replace(self, locale=locale)

    def with_data(self, key: str, value: Any) -> "ReverseQuery":
        return dataclasses.replace(self, data={**self.data, key: value})

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

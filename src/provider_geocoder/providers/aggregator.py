"""
Provider Geocoder — Provider Aggregator
========================================
Holds several providers registered by name and forwards queries to the
one currently selected, so callers can switch services without touching
their own code::

    geocoder = ProviderAggregator()
    geocoder.register_providers([
        Nominatim.with_openstreetmap_server("my-app/1.0"),
        GeoIPs(api_key=os.environ["GEOIPS_KEY"]),
    ])
    geocoder.using("geoips").geocode("74.200.247.59")
"""

from __future__ import annotations

import logging
from typing import Iterable

from shared.python.exceptions import InvalidArgument, ProviderNotRegistered
from provider_geocoder.collection import AddressCollection
from provider_geocoder.providers.base import Provider
from provider_geocoder.query import DEFAULT_RESULT_LIMIT, GeocodeQuery, ReverseQuery

logger = logging.getLogger("provider_geocoder.providers.aggregator")


class ProviderAggregator:
    """Registry of providers keyed by :attr:`Provider.name`.

    The first registered provider is used until :meth:`using` selects
    another one.
    """

    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}
        self._current: Provider | None = None

    def register_provider(self, provider: Provider) -> "ProviderAggregator":
        """Add *provider*, replacing any provider registered under the same name.

        Raises:
            InvalidArgument: If *provider* is not a :class:`Provider` or has no name.
        """
        if not isinstance(provider, Provider):
            raise InvalidArgument(f"Expected a Provider, got {type(provider).__name__}.")
        if not provider.name:
            raise InvalidArgument(f"{provider.__class__.__name__} does not declare a name.")
        self._providers[provider.name] = provider
        logger.debug("Registered provider %s", provider.name)
        return self

    def register_providers(self, providers: Iterable[Provider]) -> "ProviderAggregator":
        for provider in providers:
            self.register_provider(provider)
        return self

    def using(self, name: str) -> "ProviderAggregator":
        """Select the provider used by subsequent queries.

        Raises:
            ProviderNotRegistered: If no provider is registered under *name*.
        """
        if name not in self._providers:
            raise ProviderNotRegistered(name, list(self._providers))
        self._current = self._providers[name]
        return self

    def get_providers(self) -> dict[str, Provider]:
        return dict(self._providers)

    def get_provider(self) -> Provider:
        """Return the selected provider, defaulting to the first registered.

        Raises:
            ProviderNotRegistered: If nothing is registered.
        """
        if self._current is None:
            if not self._providers:
                raise ProviderNotRegistered("default")
            self._current = next(iter(self._providers.values()))
        return self._current

    # ------------------------------------------------------------------
    # Delegation
    # ------------------------------------------------------------------

    def geocode_query(self, query: GeocodeQuery) -> AddressCollection:
        return self.get_provider().geocode_query(query)

    def reverse_query(self, query: ReverseQuery) -> AddressCollection:
        return self.get_provider().reverse_query(query)

    def geocode(self, text: str, limit: int = DEFAULT_RESULT_LIMIT, locale: str | None = None) -> AddressCollection:
        return self.get_provider().geocode(text, limit=limit, locale=locale)

    def reverse(
        self,
        latitude: float,
        longitude: float,
        limit: int = DEFAULT_RESULT_LIMIT,
        locale: str | None = None,
    ) -> AddressCollection:
        return self.get_provider().reverse(latitude, longitude, limit=limit, locale=locale)

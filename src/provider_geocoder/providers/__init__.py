"""
Provider adapters.

Each adapter maps one service's payload into the shared result model via
:class:`~provider_geocoder.builder.AddressBuilder`.  ``PROVIDER_NAMES``
lists the registry names in the order the CLI offers them.
"""

from provider_geocoder.providers.aggregator import ProviderAggregator
from provider_geocoder.providers.base import AbstractHttpProvider, Provider
from provider_geocoder.providers.geoips import GeoIPs
from provider_geocoder.providers.google_maps import GoogleAddress, GoogleMaps
from provider_geocoder.providers.nominatim import Nominatim, NominatimAddress
from provider_geocoder.providers.oiorest import OIORest
from provider_geocoder.providers.yandex import Yandex, YandexAddress

PROVIDER_NAMES = (
    Nominatim.name,
    GoogleMaps.name,
    Yandex.name,
    GeoIPs.name,
    OIORest.name,
)

__all__ = [
    "Provider",
    "AbstractHttpProvider",
    "ProviderAggregator",
    "Nominatim",
    "NominatimAddress",
    "GoogleMaps",
    "GoogleAddress",
    "Yandex",
    "YandexAddress",
    "GeoIPs",
    "OIORest",
    "PROVIDER_NAMES",
]

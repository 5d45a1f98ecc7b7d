"""
Provider Geocoder
==================
A uniform geocoding layer over many address-lookup and IP-geolocation
services.  Every provider maps its own payload into one normalized,
immutable result model.

Public API::

    from provider_geocoder import AddressBuilder, AddressCollection, Wkt
    from provider_geocoder.providers import Nominatim

    results = Nominatim.with_openstreetmap_server("my-app/1.0").geocode("10 rue de Rivoli, Paris")
    Wkt().dump(results.first())
"""

from provider_geocoder.builder import AddressBuilder
from provider_geocoder.collection import AddressCollection
from provider_geocoder.dumpers import Dumper, GeoJson, Wkt
from provider_geocoder.models import (
    AdminLevel,
    AdminLevelCollection,
    Address,
    Bounds,
    Coordinates,
    Country,
)
from provider_geocoder.query import GeocodeQuery, ReverseQuery
from provider_geocoder.transport import HttpResponse, HttpTransport, RequestsTransport

# Address is the normalized "Location" record.
Location = Address

__all__ = [
    "Address",
    "Location",
    "AddressBuilder",
    "AddressCollection",
    "AdminLevel",
    "AdminLevelCollection",
    "Bounds",
    "Coordinates",
    "Country",
    "GeocodeQuery",
    "ReverseQuery",
    "Dumper",
    "Wkt",
    "GeoJson",
    "HttpTransport",
    "HttpResponse",
    "RequestsTransport",
]
__version__ = "1.0.0"

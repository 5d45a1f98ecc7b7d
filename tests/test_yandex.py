"""
Tests — Yandex Provider
========================
Unit tests for :class:`~provider_geocoder.providers.yandex.Yandex`.

All HTTP calls are mocked via the ``responses`` library.
"""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest
import responses as rsps_lib

from provider_geocoder.providers.yandex import ENDPOINT_URL, Yandex, YandexAddress
from shared.python.exceptions import InvalidServerResponse


def _geo_object() -> dict:
    """A Yandex GeoObject for 10 avenue Gambetta, Paris."""
    return {
        "GeoObject": {
            "metaDataProperty": {
                "GeocoderMetaData": {
                    "kind": "house",
                    "text": "France, Île-de-France, Paris, Avenue Gambetta, 10",
                    "precision": "exact",
                    "AddressDetails": {
                        "Country": {
                            "AddressLine": "Île-de-France, Paris, Avenue Gambetta, 10",
                            "CountryNameCode": "FR",
                            "CountryName": "France",
                            "AdministrativeArea": {
                                "AdministrativeAreaName": "Île-de-France",
                                "SubAdministrativeArea": {
                                    "SubAdministrativeAreaName": "Paris",
                                    "Locality": {
                                        "LocalityName": "Paris",
                                        "DependentLocality": {
                                            "DependentLocalityName": "20e Arrondissement",
                                            "Thoroughfare": {
                                                "ThoroughfareName": "Avenue Gambetta",
                                                "Premise": {"PremiseNumber": "10"},
                                            },
                                        },
                                    },
                                },
                            },
                        },
                    },
                },
            },
            "description": "Paris, Île-de-France, France",
            "name": "Avenue Gambetta, 10",
            "boundedBy": {
                "Envelope": {
                    "lowerCorner": "2.387112 48.861962",
                    "upperCorner": "2.391218 48.864664",
                },
            },
            "Point": {"pos": "2.389165 48.863313"},
        },
    }


def _payload(members: list[dict], found: str = "1") -> dict:
    return {
        "response": {
            "GeoObjectCollection": {
                "metaDataProperty": {
                    "GeocoderResponseMetaData": {"request": "query", "found": found, "results": "5"},
                },
                "featureMember": members,
            },
        },
    }


def _params() -> dict[str, list[str]]:
    return parse_qs(urlparse(rsps_lib.calls[0].request.url).query)


class TestYandex:
    @rsps_lib.activate
    def test_geo_object_mapping(self) -> None:
        rsps_lib.add(rsps_lib.GET, ENDPOINT_URL, json=_payload([_geo_object()]), status=200)
        address = Yandex().geocode("10 avenue Gambetta, Paris").first()

        assert isinstance(address, YandexAddress)
        assert address.latitude == pytest.approx(48.863313)
        assert address.longitude == pytest.approx(2.389165)
        assert address.bounds is not None
        assert address.bounds.south == pytest.approx(48.861962)
        assert address.bounds.west == pytest.approx(2.387112)
        assert address.bounds.north == pytest.approx(48.864664)
        assert address.bounds.east == pytest.approx(2.391218)
        assert address.street_number == "10"
        assert address.street_name == "Avenue Gambetta"
        assert address.sub_locality == "20e Arrondissement"
        assert address.locality == "Paris"
        assert address.admin_levels.get(1).name == "Île-de-France"
        assert address.admin_levels.get(2).name == "Paris"
        assert address.country.code == "FR"
        assert address.precision == "exact"
        assert address.name == "Avenue Gambetta, 10"
        assert address.provided_by == "yandex"

    @rsps_lib.activate
    def test_request_parameters(self) -> None:
        rsps_lib.add(rsps_lib.GET, ENDPOINT_URL, json=_payload([]), status=200)
        Yandex(api_key="secret").geocode("Paris", limit=2, locale="fr_FR")
        params = _params()
        assert params["geocode"] == ["Paris"]
        assert params["format"] == ["json"]
        assert params["results"] == ["2"]
        assert params["lang"] == ["fr-FR"]
        assert params["apikey"] == ["secret"]

    @rsps_lib.activate
    def test_reverse_sends_longitude_first(self) -> None:
        rsps_lib.add(rsps_lib.GET, ENDPOINT_URL, json=_payload([_geo_object()]), status=200)
        Yandex(toponym="house").reverse(48.863313, 2.389165)
        params = _params()
        assert params["geocode"] == ["2.389165,48.863313"]
        assert params["kind"] == ["house"]

    @rsps_lib.activate
    def test_nothing_found_is_empty(self) -> None:
        rsps_lib.add(rsps_lib.GET, ENDPOINT_URL, json=_payload([], found="0"), status=200)
        assert Yandex().geocode("zzz-nowhere").is_empty()

    @rsps_lib.activate
    def test_error_payload_is_empty(self) -> None:
        rsps_lib.add(rsps_lib.GET, ENDPOINT_URL, json={"error": {"status": "400"}}, status=200)
        assert Yandex().geocode("Paris").is_empty()

    @rsps_lib.activate
    def test_unexpected_payload_is_invalid(self) -> None:
        rsps_lib.add(rsps_lib.GET, ENDPOINT_URL, json={"response": {}}, status=200)
        with pytest.raises(InvalidServerResponse):
            Yandex().geocode("Paris")

    @rsps_lib.activate
    def test_geo_object_without_point_has_no_coordinates(self) -> None:
        member = _geo_object()
        del member["GeoObject"]["Point"]
        rsps_lib.add(rsps_lib.GET, ENDPOINT_URL, json=_payload([member]), status=200)
        address = Yandex().geocode("Avenue Gambetta").first()
        assert address.coordinates is None
        assert address.bounds is not None
        assert address.street_name == "Avenue Gambetta"

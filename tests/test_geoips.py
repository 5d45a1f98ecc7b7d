"""
Tests — GeoIPs Provider
========================
Unit tests for :class:`~provider_geocoder.providers.geoips.GeoIPs`.
"""

from __future__ import annotations

import pytest
import responses as rsps_lib

from provider_geocoder.providers.geoips import ENDPOINT_URL, GeoIPs
from shared.python.exceptions import (
    InvalidArgument,
    InvalidCredentials,
    InvalidServerResponse,
    QuotaExceeded,
    UnsupportedOperation,
)

IP = "66.147.244.214"
URL = ENDPOINT_URL.format(ip=IP, api_key="secret")


def _geoips_hit() -> dict:
    return {
        "response": {
            "status": "Propper Request",
            "message": "Success",
            "notes": "The following results has been returned",
            "ip": IP,
            "owner": "BLUEHOST INC.",
            "continent_name": "NORTH AMERICA",
            "continent_code": "NA",
            "country_name": "UNITED STATES",
            "country_code": "US",
            "region_name": "UTAH",
            "region_code": "UT",
            "county_name": "UTAH",
            "city_name": "PROVO",
            "latitude": "40.3402",
            "longitude": "-111.6073",
            "timezone": "MST",
        }
    }


@pytest.fixture()
def provider() -> GeoIPs:
    return GeoIPs(api_key="secret")


class TestGeoIPs:
    def test_api_key_required(self) -> None:
        with pytest.raises(InvalidArgument):
            GeoIPs(api_key="")

    def test_localhost_needs_no_network(self, provider: GeoIPs) -> None:
        address = provider.geocode("127.0.0.1").first()
        assert address.locality == "localhost"
        assert address.country.name == "localhost"
        assert address.coordinates is None

    def test_ipv6_is_unsupported(self, provider: GeoIPs) -> None:
        with pytest.raises(UnsupportedOperation, match="IPv6"):
            provider.geocode("::1")

    @rsps_lib.activate
    def test_ip_mapping(self, provider: GeoIPs) -> None:
        rsps_lib.add(rsps_lib.GET, URL, json=_geoips_hit(), status=200)
        address = provider.geocode(IP).first()

        assert address.latitude == pytest.approx(40.3402)
        assert address.longitude == pytest.approx(-111.6073)
        assert address.locality == "PROVO"
        assert address.admin_levels.get(1).name == "UTAH"
        assert address.admin_levels.get(1).code == "UT"
        assert address.admin_levels.get(2).name == "UTAH"
        assert address.country.name == "UNITED STATES"
        assert address.country.code == "US"
        assert address.timezone == "MST"
        assert address.street_name is None
        assert address.postal_code is None

    @rsps_lib.activate
    def test_bad_request(self, provider: GeoIPs) -> None:
        rsps_lib.add(
            rsps_lib.GET, URL, json={"response": {"status": "Bad Request", "message": "Error in the URI"}}, status=200
        )
        with pytest.raises(InvalidServerResponse):
            provider.geocode(IP)

    @rsps_lib.activate
    def test_invalid_key(self, provider: GeoIPs) -> None:
        rsps_lib.add(
            rsps_lib.GET, URL, json={"response": {"status": "Forbidden", "message": "Not Authorized"}}, status=200
        )
        with pytest.raises(InvalidCredentials):
            provider.geocode(IP)

    @rsps_lib.activate
    def test_limit_exceeded(self, provider: GeoIPs) -> None:
        rsps_lib.add(
            rsps_lib.GET, URL, json={"response": {"status": "Forbidden", "message": "Limit Exceeded"}}, status=200
        )
        with pytest.raises(QuotaExceeded):
            provider.geocode(IP)

    @rsps_lib.activate
    def test_payload_without_status(self, provider: GeoIPs) -> None:
        rsps_lib.add(rsps_lib.GET, URL, json={"unexpected": True}, status=200)
        with pytest.raises(InvalidServerResponse):
            provider.geocode(IP)

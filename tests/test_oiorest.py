"""
Tests — OIORest Provider
=========================
Unit tests for :class:`~provider_geocoder.providers.oiorest.OIORest`.
"""

from __future__ import annotations

import pytest
import responses as rsps_lib

from provider_geocoder.providers.oiorest import OIORest, format_address
from shared.python.exceptions import UnsupportedOperation

URL = "http://geo.oiorest.dk/adresser/Vesterbrogade,1,1620.json"


def _oiorest_hit() -> dict:
    return {
        "id": "0a3f50a0-75eb-32b8-e044-0003ba298018",
        "husnr": "1",
        "etrs89koordinat": {"øst": "724411.08", "nord": "6175794.08"},
        "wgs84koordinat": {"bredde": "55.6753", "længde": "12.5637"},
        "vejnavn": {"kode": "8151", "navn": "Vesterbrogade"},
        "postnummer": {"nr": "1620", "navn": "København V"},
        "kommune": {"kode": "0101", "navn": "København"},
        "region": {"kode": "1084", "navn": "Region Hovedstaden"},
    }


class TestFormatAddress:
    def test_danish_address_is_rewritten(self) -> None:
        assert format_address("Vesterbrogade 1, 1620 København V") == "Vesterbrogade,1,1620"

    def test_other_text_is_unchanged(self) -> None:
        assert format_address("Tagensvej") == "Tagensvej"


class TestOIORest:
    @rsps_lib.activate
    def test_address_mapping(self) -> None:
        rsps_lib.add(rsps_lib.GET, URL, json=_oiorest_hit(), status=200)
        address = OIORest().geocode("Vesterbrogade 1, 1620 København V").first()

        assert address.latitude == pytest.approx(55.6753)
        assert address.longitude == pytest.approx(12.5637)
        assert address.street_number == "1"
        assert address.street_name == "Vesterbrogade"
        assert address.postal_code == "1620"
        assert address.locality == "København V"
        assert address.sub_locality == "København"
        assert address.admin_levels.get(1).name == "Region Hovedstaden"
        assert address.country.name == "Denmark"
        assert address.country.code == "DK"
        assert address.timezone == "Europe/Copenhagen"
        assert address.provided_by == "oio_rest"

    @rsps_lib.activate
    def test_no_match_is_empty(self) -> None:
        rsps_lib.add(rsps_lib.GET, URL, json={}, status=200)
        assert OIORest().geocode("Vesterbrogade 1, 1620 København V").is_empty()

    def test_ip_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedOperation):
            OIORest().geocode("88.189.221.10")

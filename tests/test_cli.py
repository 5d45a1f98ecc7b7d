"""
Tests — CLI
============
Tests for the ``provider-geocode`` Click command.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
import pytest
import responses as rsps_lib
from click.testing import CliRunner

from provider_geocoder.cli import build_provider, main
from provider_geocoder.providers import GeoIPs, GoogleMaps, Nominatim, OIORest, Yandex
from provider_geocoder.transport import RequestsTransport

SEARCH_URL = "https://nominatim.openstreetmap.org/search"


@pytest.fixture()
def address_csv(tmp_path: Path) -> Path:
    path = tmp_path / "addresses.csv"
    path.write_text("address,name\n\"10 avenue Gambetta, Paris\",Gambetta\n", encoding="utf-8")
    return path


class TestBuildProvider:
    @pytest.mark.parametrize(
        "name,expected",
        [("nominatim", Nominatim), ("yandex", Yandex), ("oio_rest", OIORest)],
    )
    def test_keyless_providers(self, name: str, expected: type) -> None:
        assert isinstance(build_provider(name, RequestsTransport(), "test/1.0", None), expected)

    @pytest.mark.parametrize("name,expected", [("google_maps", GoogleMaps), ("geoips", GeoIPs)])
    def test_keyed_providers(self, name: str, expected: type) -> None:
        assert isinstance(build_provider(name, RequestsTransport(), "test/1.0", "secret"), expected)

    @pytest.mark.parametrize("name", ["google_maps", "geoips"])
    def test_missing_api_key(self, name: str) -> None:
        with pytest.raises(click.UsageError):
            build_provider(name, RequestsTransport(), "test/1.0", None)


class TestCli:
    @rsps_lib.activate
    def test_writes_geojson(self, tmp_path: Path, address_csv: Path) -> None:
        rsps_lib.add(
            rsps_lib.GET,
            SEARCH_URL,
            json=[{"lat": "48.8631", "lon": "2.3889", "address": {"city": "Paris"}}],
            status=200,
        )
        output = tmp_path / "out.geojson"
        result = CliRunner().invoke(
            main,
            ["-i", str(address_csv), "-o", str(output), "--extra-cols", "name", "--user-agent", "test/1.0"],
        )

        assert result.exit_code == 0, result.output
        assert "Done: 1/1 queries geocoded." in result.output
        feature = json.loads(output.read_text(encoding="utf-8"))["features"][0]
        assert feature["properties"]["name"] == "Gambetta"
        assert rsps_lib.calls[0].request.headers["User-Agent"] == "test/1.0"

    def test_missing_column_exits_with_error(self, tmp_path: Path, address_csv: Path) -> None:
        result = CliRunner().invoke(
            main,
            ["-i", str(address_csv), "-o", str(tmp_path / "out.geojson"), "--query-col", "street"],
        )
        assert result.exit_code == 1
        assert "Column 'street' not found" in result.output

    def test_google_without_key_is_usage_error(self, tmp_path: Path, address_csv: Path) -> None:
        result = CliRunner().invoke(
            main,
            ["-i", str(address_csv), "-o", str(tmp_path / "out.geojson"), "--provider", "google_maps"],
            env={"GEOCODER_API_KEY": None},
        )
        assert result.exit_code == 2
        assert "GEOCODER_API_KEY" in result.output

    def test_unknown_provider_rejected(self, tmp_path: Path, address_csv: Path) -> None:
        result = CliRunner().invoke(
            main,
            ["-i", str(address_csv), "-o", str(tmp_path / "out.geojson"), "--provider", "bing"],
        )
        assert result.exit_code == 2

"""
Tests — Address Builder
========================
Unit tests for :class:`~provider_geocoder.builder.AddressBuilder`.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from provider_geocoder.builder import AddressBuilder, clean_text
from provider_geocoder.models import Address, Coordinates
from provider_geocoder.providers.nominatim import NominatimAddress
from shared.python.exceptions import InvalidArgument


@dataclass(frozen=True)
class _RankedAddress(Address):
    rank: int | None = None

    def with_rank(self, rank: int) -> "_RankedAddress":
        return self._replace(rank=rank)


class TestCleanText:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values_are_absent(self, value: object) -> None:
        assert clean_text(value) is None

    def test_numbers_become_strings(self) -> None:
        assert clean_text(10) == "10"

    def test_strings_are_stripped(self) -> None:
        assert clean_text("  Paris ") == "Paris"


class TestAddressBuilder:
    def test_only_coordinates_leaves_everything_else_absent(self) -> None:
        address = AddressBuilder().set_coordinates(48.8631507, 2.3889114).build()
        assert address.coordinates == Coordinates(48.8631507, 2.3889114)
        assert address.street_name is None
        assert address.postal_code is None
        assert address.timezone is None
        data = address.to_dict()
        assert data["streetName"] is None
        assert data["postalCode"] is None
        assert data["bounds"] is None

    def test_empty_strings_are_stored_as_absent(self) -> None:
        builder = AddressBuilder()
        builder.set_street_name("").set_locality("  ").set_country_code(None)
        address = builder.build()
        assert address.street_name is None
        assert address.locality is None
        assert address.country.code is None

    def test_last_write_wins(self) -> None:
        builder = AddressBuilder()
        builder.set_locality("Lyon").set_locality("Paris")
        builder.add_admin_level(1, "Old").add_admin_level(1, "New", "NW")
        address = builder.build()
        assert address.locality == "Paris"
        assert address.admin_levels.get(1).name == "New"
        assert address.admin_levels.count() == 1

    def test_missing_coordinate_component_unsets(self) -> None:
        builder = AddressBuilder().set_coordinates(1.0, 2.0)
        builder.set_coordinates(None, 2.0)
        assert not builder.has_coordinates()
        assert builder.build().coordinates is None

    def test_partial_bounds_are_ignored(self) -> None:
        builder = AddressBuilder().set_bounds(1.0, None, 2.0, 3.0)
        assert not builder.has_bounds()
        assert builder.build().bounds is None

    def test_full_build(self) -> None:
        builder = AddressBuilder("test")
        builder.set_coordinates("48.8631507", "2.3889114")
        builder.set_bounds("48.8630431", "2.3888015", "48.8632583", "2.3890213")
        builder.set_street_number(10)
        builder.set_street_name("Avenue Gambetta")
        builder.set_postal_code("75020")
        builder.set_locality("Paris")
        builder.set_sub_locality("Paris 20e Arrondissement")
        builder.add_admin_level(1, "Île-de-France", "IDF")
        builder.add_admin_level(2, "Paris")
        builder.set_country("France")
        builder.set_country_code("FR")
        builder.set_timezone("Europe/Paris")
        address = builder.build()

        assert address.street_number == "10"
        assert address.bounds is not None
        assert address.bounds.north == pytest.approx(48.8632583)
        assert address.admin_levels.get(1).code == "IDF"
        assert address.country.name == "France"
        assert address.provided_by == "test"

    def test_build_variant_then_with(self) -> None:
        address = AddressBuilder().set_locality("Paris").build(_RankedAddress)
        ranked = address.with_rank(3)
        assert isinstance(ranked, _RankedAddress)
        assert ranked.locality == "Paris"
        assert ranked.rank == 3
        assert address.rank is None

    def test_same_fields_build_any_variant(self) -> None:
        builder = AddressBuilder().set_locality("Berlin")
        assert type(builder.build()) is Address
        assert type(builder.build(NominatimAddress)) is NominatimAddress
        assert builder.build(NominatimAddress).locality == "Berlin"

    def test_build_rejects_non_address_target(self) -> None:
        with pytest.raises(InvalidArgument):
            AddressBuilder().build(dict)  # type: ignore[arg-type]

    def test_invalid_admin_level_fails_at_build(self) -> None:
        builder = AddressBuilder().add_admin_level(6, "Too deep")
        with pytest.raises(InvalidArgument):
            builder.build()

    def test_out_of_range_coordinates_fail_at_build(self) -> None:
        builder = AddressBuilder().set_coordinates(123.0, 0.0)
        with pytest.raises(InvalidArgument):
            builder.build()

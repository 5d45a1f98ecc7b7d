"""
Tests — Result Model
=====================
Unit tests for the value types in :mod:`provider_geocoder.models`.

Test classes:
    TestCoordinates            Range validation and the (0, 0) default.
    TestBounds                 Edge ordering and serialisation.
    TestAdminLevelCollection   Capacity, uniqueness, lookup and equality.
    TestAddress                Absent fields and the flat projection.
"""

from __future__ import annotations

import dataclasses

import pytest

from provider_geocoder.models import (
    AdminLevel,
    AdminLevelCollection,
    Address,
    Bounds,
    Coordinates,
    Country,
)
from shared.python.exceptions import (
    AdminLevelCapacityError,
    EmptyCollection,
    InvalidArgument,
    OutOfBounds,
)


# ---------------------------------------------------------------------------
# Coordinates / Bounds
# ---------------------------------------------------------------------------


class TestCoordinates:
    def test_default_is_origin(self) -> None:
        assert Coordinates().to_tuple() == (0.0, 0.0)

    def test_numeric_strings_are_converted(self) -> None:
        coords = Coordinates("48.8631507", "2.3889114")
        assert coords.latitude == pytest.approx(48.8631507)
        assert isinstance(coords.longitude, float)

    @pytest.mark.parametrize("lat,lon", [(90.1, 0), (-91, 0), (0, 180.5), (0, -181)])
    def test_out_of_range_raises(self, lat: float, lon: float) -> None:
        with pytest.raises(InvalidArgument):
            Coordinates(lat, lon)

    def test_not_a_number_raises(self) -> None:
        with pytest.raises(InvalidArgument):
            Coordinates("north", 2.0)

    def test_is_immutable(self) -> None:
        coords = Coordinates(1.0, 2.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            coords.latitude = 3.0  # type: ignore[misc]


class TestBounds:
    def test_valid_bounds(self) -> None:
        bounds = Bounds(48.81, 2.22, 48.90, 2.47)
        assert bounds.to_dict() == {"south": 48.81, "west": 2.22, "north": 48.90, "east": 2.47}

    def test_degenerate_point_bounds_allowed(self) -> None:
        assert Bounds(10, 20, 10, 20).south == 10.0

    def test_south_north_inverted_raises(self) -> None:
        with pytest.raises(InvalidArgument):
            Bounds(south=52.0, west=-1.0, north=51.0, east=0.0)

    def test_west_east_inverted_raises(self) -> None:
        with pytest.raises(InvalidArgument):
            Bounds(south=51.0, west=1.0, north=52.0, east=-1.0)


# ---------------------------------------------------------------------------
# AdminLevel / AdminLevelCollection
# ---------------------------------------------------------------------------


class TestAdminLevelCollection:
    def test_add_and_get(self) -> None:
        levels = AdminLevelCollection().add(1, "Île-de-France", "IDF").add(2, "Paris", "75")
        assert levels.get(1) == AdminLevel(1, "Île-de-France", "IDF")
        assert levels.get(2).code == "75"
        assert len(levels) == 2

    def test_add_returns_new_collection(self) -> None:
        empty = AdminLevelCollection()
        levels = empty.add(1, "Bavaria")
        assert empty.count() == 0
        assert levels.count() == 1

    def test_five_levels_then_capacity_error(self) -> None:
        levels = AdminLevelCollection()
        for level in range(1, 6):
            levels = levels.add(level, f"Level {level}")
        assert levels.count() == 5
        with pytest.raises(AdminLevelCapacityError):
            levels.add(3, "Sixth")

    def test_six_levels_in_constructor_raises(self) -> None:
        items = [AdminLevel(level, f"L{level}") for level in range(1, 6)]
        with pytest.raises(AdminLevelCapacityError):
            AdminLevelCollection(items + [AdminLevel(1, "again")])

    def test_duplicate_level_raises(self) -> None:
        levels = AdminLevelCollection().add(2, "County")
        with pytest.raises(InvalidArgument):
            levels.add(2, "Other county")

    @pytest.mark.parametrize("level", [0, 6, -1])
    def test_level_out_of_range_raises(self, level: int) -> None:
        with pytest.raises(InvalidArgument):
            AdminLevelCollection().add(level, "Nowhere")

    def test_blank_name_raises(self) -> None:
        with pytest.raises(InvalidArgument):
            AdminLevel(1, "  ")

    def test_get_missing_level_raises_out_of_bounds(self) -> None:
        levels = AdminLevelCollection().add(1, "State")
        assert not levels.has(4)
        with pytest.raises(OutOfBounds):
            levels.get(4)

    def test_iteration_keeps_insertion_order(self) -> None:
        levels = AdminLevelCollection().add(3, "District").add(1, "State")
        assert [level.level for level in levels] == [3, 1]
        assert levels.first().name == "District"

    def test_first_on_empty_raises(self) -> None:
        with pytest.raises(EmptyCollection):
            AdminLevelCollection().first()

    def test_equality_ignores_order(self) -> None:
        a = AdminLevelCollection().add(1, "State", "ST").add(2, "County")
        b = AdminLevelCollection().add(2, "County").add(1, "State", "ST")
        assert a == b
        assert hash(a) == hash(b)
        assert a != AdminLevelCollection().add(1, "State")

    def test_to_list(self) -> None:
        levels = AdminLevelCollection().add(1, "State", "ST")
        assert levels.to_list() == [{"level": 1, "name": "State", "code": "ST"}]


# ---------------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------------


class TestAddress:
    def test_defaults_are_absent(self) -> None:
        address = Address()
        assert address.coordinates is None
        assert address.bounds is None
        assert address.street_name is None
        assert address.country == Country()
        assert address.admin_levels.count() == 0

    def test_to_dict_keys_and_nulls(self) -> None:
        address = Address(coordinates=Coordinates(48.86, 2.38))
        data = address.to_dict()
        assert list(data) == [
            "latitude", "longitude", "bounds", "streetNumber", "streetName",
            "postalCode", "locality", "subLocality", "adminLevels",
            "country", "countryCode", "timezone",
        ]
        assert data["latitude"] == 48.86
        assert data["bounds"] is None
        assert data["streetName"] is None
        assert data["postalCode"] is None
        assert data["adminLevels"] == []
        assert data["country"] is None

    def test_from_dict_round_trip(self) -> None:
        address = Address(
            coordinates=Coordinates(48.8631507, 2.3889114),
            bounds=Bounds(48.8630, 2.3888, 48.8633, 2.3890),
            street_number="10",
            street_name="Avenue Gambetta",
            postal_code="75020",
            locality="Paris",
            sub_locality="20e Arrondissement",
            admin_levels=AdminLevelCollection().add(1, "Île-de-France").add(2, "Paris"),
            country=Country("France", "FR"),
            timezone="Europe/Paris",
        )
        assert Address.from_dict(address.to_dict()) == address

    def test_from_dict_without_position(self) -> None:
        address = Address.from_dict({"locality": "Berlin"})
        assert address.coordinates is None
        assert address.locality == "Berlin"

from __future__ import annotations

import pytest

from job_triage.config import Coordinate
from job_triage.geo import (
    CITY_COORDINATES,
    UNKNOWN_DISTANCE_KM,
    GeoResolver,
    haversine_km,
)


def test_haversine_mons_to_brussels() -> None:
    d = haversine_km(CITY_COORDINATES["mons"], CITY_COORDINATES["bruxelles"])
    assert 50 < d < 60


def test_haversine_is_zero_for_same_point() -> None:
    c = Coordinate(50.0, 4.0)
    assert haversine_km(c, c) == pytest.approx(0.0)


def test_remote_location_is_zero_distance() -> None:
    geo = GeoResolver()
    assert geo.distance_from_home("Full remote / Télétravail") == 0.0


def test_unknown_location_is_out_of_range() -> None:
    geo = GeoResolver()
    assert geo.distance_from_home("Quelque part") == UNKNOWN_DISTANCE_KM
    assert geo.distance_from_home("") == UNKNOWN_DISTANCE_KM


def test_resolve_is_case_insensitive_and_matches_substrings() -> None:
    geo = GeoResolver()
    assert geo.resolve("NAMUR") == CITY_COORDINATES["namur"]
    assert geo.resolve("Lidl - Mons (Hainaut)") == CITY_COORDINATES["mons"]


def test_first_table_entry_wins_when_several_cities_match() -> None:
    geo = GeoResolver()
    assert geo.resolve("Bruxelles - Zaventem") == CITY_COORDINATES["bruxelles"]


def test_custom_city_table() -> None:
    home = Coordinate(50.0, 4.0)
    geo = GeoResolver(home=home, cities={"Testville": Coordinate(50.1349, 4.0)})

    assert geo.distance_from_home("testville") == pytest.approx(15.0, abs=0.1)
    assert geo.distance_from_home("Mons") == UNKNOWN_DISTANCE_KM


def test_distance_grows_with_remoteness_from_home() -> None:
    geo = GeoResolver()

    mons = geo.distance_from_home("Mons")
    brussels = geo.distance_from_home("Bruxelles")
    antwerp = geo.distance_from_home("Antwerpen")

    assert mons <= brussels <= antwerp
    assert mons == pytest.approx(8.96, abs=0.1)
    assert antwerp < UNKNOWN_DISTANCE_KM

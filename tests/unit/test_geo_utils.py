from __future__ import annotations

import math
from datetime import timedelta

import pytest

from src.domain.algorithms.geo_utils import (
    distance,
    estimated_travel_time,
    format_travel_time,
    haversine_distance_km,
)
from src.domain.models.geo import GeoPoint

FCA = GeoPoint(latitude=-22.5565835, longitude=-47.4216307)
RODEIO = GeoPoint(latitude=-22.619852, longitude=-47.377685)


def _reference_km(a: GeoPoint, b: GeoPoint) -> float:
    # Independent oracle: arcsin form of the haversine formula.
    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    dphi = phi2 - phi1
    dlmb = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    return 2 * 6371.0 * math.asin(math.sqrt(h))


def test_distance_zero_for_identical_points() -> None:
    assert distance(FCA, FCA) == 0.0
    assert haversine_distance_km(RODEIO, RODEIO) == 0.0


def test_distance_is_symmetric() -> None:
    assert distance(FCA, RODEIO) == distance(RODEIO, FCA)


def test_distance_matches_corrected_haversine_for_route_termini() -> None:
    expected = round(_reference_km(FCA, RODEIO) * 1.25, 2)

    d = distance(FCA, RODEIO)

    assert d == expected
    # Roughly 8.4 km as the crow flies, ~10.4 km by road.
    assert 10.0 < d < 11.0


@pytest.mark.parametrize(
    ("a", "b"),
    [
        (GeoPoint(latitude=0.0, longitude=0.0), GeoPoint(latitude=1.0, longitude=0.0)),
        (GeoPoint(latitude=-22.58, longitude=-47.40), FCA),
        (
            GeoPoint(latitude=10.123, longitude=20.456),
            GeoPoint(latitude=-5.5, longitude=33.3),
        ),
    ],
)
def test_distance_is_rounded_to_two_decimals_and_non_negative(
    a: GeoPoint, b: GeoPoint
) -> None:
    d = distance(a, b)
    assert d >= 0.0
    assert round(d, 2) == d
    assert abs(d - _reference_km(a, b) * 1.25) <= 0.005 + 1e-9


def test_estimated_travel_time_basic() -> None:
    assert estimated_travel_time(10.0, 40.0) == timedelta(minutes=15)


@pytest.mark.parametrize(
    ("distance_km", "speed_kmh"),
    [(None, 40.0), (10.0, 0.0), (10.0, -5.0), (10.0, None), (10.0, math.nan)],
)
def test_estimated_travel_time_indeterminate(distance_km, speed_kmh) -> None:
    assert estimated_travel_time(distance_km, speed_kmh) is None


def test_estimated_travel_time_monotonic() -> None:
    near = estimated_travel_time(5.0, 40.0)
    far = estimated_travel_time(10.0, 40.0)
    faster = estimated_travel_time(10.0, 60.0)
    assert near is not None and far is not None and faster is not None
    assert near < far
    assert faster < far


@pytest.mark.parametrize(
    ("value", "label"),
    [
        (None, "Indefinido"),
        (timedelta(minutes=15), "15 min"),
        (timedelta(seconds=29), "0 min"),
        (timedelta(hours=1, minutes=5), "1 h 05 min"),
        (timedelta(hours=2, minutes=30), "2 h 30 min"),
    ],
)
def test_format_travel_time(value: timedelta | None, label: str) -> None:
    assert format_travel_time(value) == label

"""Tests for the haversine distance helpers."""

from __future__ import annotations

import math
import random

import numpy as np
import pytest
from unittest.mock import patch

from trip_analytics import config
from trip_analytics.geo import haversine_km, haversine_km_matrix, positions_to_array
from trip_analytics.models import GeoPoint


def _random_points(count: int, seed: int = 1234) -> list[GeoPoint]:
    rng = random.Random(seed)
    return [
        GeoPoint(rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0))
        for _ in range(count)
    ]


def _law_of_cosines_km(a: GeoPoint, b: GeoPoint) -> float:
    """Independent great-circle formula used to cross-check the haversine."""
    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)
    cos_c = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(phi2) * math.cos(dlon)
    return 6371.0 * math.acos(min(1.0, max(-1.0, cos_c)))


def test_identity_is_zero():
    for point in _random_points(50):
        assert haversine_km(point, point) == 0.0


def test_symmetry():
    points = _random_points(40)
    for a, b in zip(points, reversed(points)):
        assert haversine_km(a, b) == pytest.approx(haversine_km(b, a), abs=1e-9)


def test_triangle_inequality():
    points = _random_points(30, seed=99)
    for a in points[:10]:
        for b in points[10:20]:
            for c in points[20:]:
                assert haversine_km(a, c) <= haversine_km(a, b) + haversine_km(b, c) + 1e-9


def test_known_value_matches_independent_formula():
    a = GeoPoint(-34.0128416, 18.690535)
    b = GeoPoint(-34.0, 18.7)
    distance = haversine_km(a, b)
    assert round(distance, 2) == round(_law_of_cosines_km(a, b), 2)
    assert distance == pytest.approx(1.67, abs=0.01)


def test_quarter_meridian():
    # Equator to pole is a quarter of the circumference.
    distance = haversine_km(GeoPoint(0.0, 0.0), GeoPoint(90.0, 0.0))
    assert distance == pytest.approx(math.pi * 6371.0 / 2, rel=1e-12)


def test_antipodal_points_do_not_produce_nan():
    distance = haversine_km(GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0))
    assert not math.isnan(distance)
    assert distance == pytest.approx(math.pi * 6371.0, rel=1e-9)


def test_custom_radius_scales_distance():
    a, b = GeoPoint(10.0, 10.0), GeoPoint(11.0, 12.0)
    assert haversine_km(a, b, radius_km=1.0) * 6371.0 == pytest.approx(haversine_km(a, b))


def test_matrix_matches_scalar_kernel():
    sources = _random_points(6, seed=5)
    targets = _random_points(9, seed=6)
    matrix = haversine_km_matrix(positions_to_array(sources), positions_to_array(targets))
    assert matrix.shape == (6, 9)
    for i, src in enumerate(sources):
        for j, dst in enumerate(targets):
            assert matrix[i, j] == pytest.approx(haversine_km(src, dst), rel=1e-12, abs=1e-9)


def test_matrix_handles_empty_inputs():
    matrix = haversine_km_matrix([], [(1.0, 2.0)])
    assert matrix.shape == (0, 1)
    assert positions_to_array([]).shape == (0, 2)


def test_matrix_rejects_malformed_arrays():
    with pytest.raises(ValueError):
        haversine_km_matrix(np.array([1.0, 2.0, 3.0]), [(0.0, 0.0)])


def test_default_radius_fixed_at_import():
    a, b = GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)
    before = haversine_km(a, b)
    with patch.object(config, "EARTH_RADIUS_KM", 1.0):
        assert haversine_km(a, b) == before
    assert haversine_km(a, b, radius_km=1.0) * config.EARTH_RADIUS_KM == pytest.approx(before)

"""Tests for the fail-fast input checks."""

from __future__ import annotations

import math
from datetime import datetime

import pytest

from trip_analytics.errors import (
    DuplicatePointOfInterestError,
    InvalidCoordinateError,
    InvalidInputError,
    InvalidSampleError,
)
from trip_analytics.models import GeoPoint, VehicleSample
from trip_analytics.validation import (
    validate_geo_point,
    validate_points_of_interest,
    validate_sample,
    validate_trip,
)

from conftest import make_poi, make_sample


@pytest.mark.parametrize(
    "lat, lon",
    [(90.0, 180.0), (-90.0, -180.0), (0.0, 0.0), (-33.93, 18.86)],
)
def test_valid_coordinates_pass(lat, lon):
    validate_geo_point(GeoPoint(lat, lon))


@pytest.mark.parametrize(
    "lat, lon",
    [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.1), (0.0, -200.0), (math.nan, 0.0), (0.0, math.inf)],
)
def test_invalid_coordinates_rejected(lat, lon):
    with pytest.raises(InvalidCoordinateError):
        validate_geo_point(GeoPoint(lat, lon))


def test_errors_share_input_error_base():
    with pytest.raises(InvalidInputError):
        validate_geo_point(GeoPoint(100.0, 0.0))
    with pytest.raises(ValueError):
        validate_geo_point(GeoPoint(100.0, 0.0))


@pytest.mark.parametrize("heading", [-0.1, 360.0, math.nan])
def test_heading_out_of_range(heading):
    with pytest.raises(InvalidSampleError):
        validate_sample(make_sample(0.0, 0.0, heading=heading))


@pytest.mark.parametrize("speed", [-1.0, math.inf])
def test_speed_out_of_range(speed):
    with pytest.raises(InvalidSampleError):
        validate_sample(make_sample(0.0, 0.0, speed=speed))


def test_naive_timestamp_rejected():
    sample = VehicleSample(GeoPoint(0.0, 0.0), datetime(2025, 1, 1, 8, 0), 0.0, 10.0)
    with pytest.raises(InvalidSampleError, match="timezone-aware"):
        validate_sample(sample)


def test_validate_trip_reports_offending_index():
    trip = [make_sample(0.0, 0.0), make_sample(0.0, 0.1), make_sample(95.0, 0.0)]
    with pytest.raises(InvalidCoordinateError, match=r"sample\[2\]"):
        validate_trip(trip)


def test_empty_inputs_are_valid():
    validate_trip([])
    validate_points_of_interest([])


def test_duplicate_point_ids_rejected():
    points = [make_poi(1, 0.0, 0.0), make_poi(2, 1.0, 1.0), make_poi(1, 2.0, 2.0)]
    with pytest.raises(DuplicatePointOfInterestError):
        validate_points_of_interest(points)


def test_point_coordinates_checked():
    with pytest.raises(InvalidCoordinateError, match="'bad'"):
        validate_points_of_interest([make_poi("bad", 0.0, 181.0)])

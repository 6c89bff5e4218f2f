"""Global pytest fixtures & helpers.

Adds project root to path and provides factories for samples and points of
interest so individual test modules stay focused on behaviour.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from trip_analytics.models import GeoPoint, PointOfInterest, VehicleSample

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


# --- Factory helpers -------------------------------------------------
def make_sample(lat, lon, speed=0.0, *, seconds=0, heading=0.0):
    return VehicleSample(
        position=GeoPoint(lat, lon),
        timestamp=BASE_TIME + timedelta(seconds=seconds),
        heading=heading,
        speed=speed,
    )


def make_trip(coords_and_speeds, step_seconds=10):
    return [
        make_sample(lat, lon, speed, seconds=idx * step_seconds)
        for idx, (lat, lon, speed) in enumerate(coords_and_speeds)
    ]


def make_poi(poi_id, lat, lon, name=None):
    return PointOfInterest(id=poi_id, name=name or f"Store {poi_id}", position=GeoPoint(lat, lon))


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def three_sample_trip():
    return make_trip([(0.0, 0.0, 10.0), (0.0, 1.0, 40.0), (1.0, 1.0, 20.0)])


@pytest.fixture
def stellenbosch_trip():
    return make_trip(
        [
            (-33.9321, 18.8602, 0.0),
            (-33.9335, 18.8650, 35.0),
            (-33.9350, 18.8710, 52.5),
            (-33.9362, 18.8780, 61.0),
            (-33.9380, 18.8850, 44.0),
        ]
    )


@pytest.fixture
def stellenbosch_stores():
    return [
        make_poi("s1", -33.9000, 18.8000, "Checkers Die Boord"),
        make_poi("s2", -33.9365, 18.8775, "Pick n Pay Eikestad"),
        make_poi("s3", -34.0000, 18.9500, "Spar Somerset"),
    ]

"""Fail-fast precondition checks for samples and points of interest.

The engine trusts its inputs by default. These helpers let a caller (or the
service, when ``validate_inputs`` is enabled) reject out-of-range data before
any computation starts, so a result is never built from corrupt records.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, Sequence

from .errors import (
    DuplicatePointOfInterestError,
    InvalidCoordinateError,
    InvalidSampleError,
)
from .models import GeoPoint, PointOfInterest, VehicleSample


def validate_geo_point(point: GeoPoint, *, label: str = "point") -> None:
    """Raise ``InvalidCoordinateError`` when ``point`` lies outside the globe."""

    lat = point.latitude
    lon = point.longitude
    if not _is_finite_number(lat) or not -90.0 <= lat <= 90.0:
        raise InvalidCoordinateError(f"{label}: latitude {lat!r} outside [-90, 90]")
    if not _is_finite_number(lon) or not -180.0 <= lon <= 180.0:
        raise InvalidCoordinateError(f"{label}: longitude {lon!r} outside [-180, 180]")


def validate_sample(sample: VehicleSample, *, index: int | None = None) -> None:
    """Check one sample's position, heading, speed and timestamp."""

    label = "sample" if index is None else f"sample[{index}]"
    validate_geo_point(sample.position, label=label)
    if not _is_finite_number(sample.heading) or not 0.0 <= sample.heading < 360.0:
        raise InvalidSampleError(f"{label}: heading {sample.heading!r} outside [0, 360)")
    if not _is_finite_number(sample.speed) or sample.speed < 0:
        raise InvalidSampleError(f"{label}: speed {sample.speed!r} must be >= 0")
    ts = sample.timestamp
    if not isinstance(ts, datetime):
        raise InvalidSampleError(
            f"{label}: timestamp must be a datetime, got {type(ts).__name__}"
        )
    if ts.tzinfo is None or ts.utcoffset() is None:
        raise InvalidSampleError(f"{label}: timestamp {ts.isoformat()} is not timezone-aware")


def validate_trip(trip: Sequence[VehicleSample]) -> None:
    """Validate every sample of ``trip``; an empty trip is valid."""

    for index, sample in enumerate(trip):
        validate_sample(sample, index=index)


def validate_points_of_interest(points: Iterable[PointOfInterest]) -> None:
    """Validate coordinates and identifier uniqueness of ``points``."""

    seen: set[int | str] = set()
    for poi in points:
        validate_geo_point(poi.position, label=f"point of interest {poi.id!r}")
        if poi.id in seen:
            raise DuplicatePointOfInterestError(
                f"Duplicate point of interest id {poi.id!r}"
            )
        seen.add(poi.id)


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


__all__ = [
    "validate_geo_point",
    "validate_sample",
    "validate_trip",
    "validate_points_of_interest",
]

"""Immutable value records exchanged with the analytics engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple, Optional, Sequence


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class VehicleSample:
    """One telemetry record captured along a trip."""

    position: GeoPoint
    timestamp: datetime
    heading: float  # degrees, [0, 360)
    speed: float  # km/h


@dataclass(frozen=True, slots=True)
class PointOfInterest:
    id: int | str
    name: str
    position: GeoPoint


Trip = Sequence[VehicleSample]


@dataclass(frozen=True, slots=True)
class PathMetrics:
    """Distance covered and peak recorded speed for a trip."""

    total_distance_km: float = 0.0
    max_speed_kmh: float = 0.0


@dataclass(frozen=True, slots=True)
class ClosestMatch:
    """Point of interest nearest to any sample of a trip.

    ``distance_km`` is ``math.inf`` and the other fields are ``None`` when
    there was nothing to compare (no samples or no points of interest).
    """

    point: Optional[PointOfInterest] = None
    distance_km: float = math.inf
    first_timestamp: Optional[datetime] = None
    sample_index: Optional[int] = None

    @property
    def matched(self) -> bool:
        """Return ``True`` when a point of interest was selected."""

        return self.point is not None


class TripAnalysis(NamedTuple):
    """Composed result of one analysis call."""

    path_metrics: PathMetrics
    closest_match: ClosestMatch


__all__ = [
    "GeoPoint",
    "VehicleSample",
    "PointOfInterest",
    "Trip",
    "PathMetrics",
    "ClosestMatch",
    "TripAnalysis",
]

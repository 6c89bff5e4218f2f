"""Trip analytics engine package."""

from .models import (
    ClosestMatch,
    GeoPoint,
    PathMetrics,
    PointOfInterest,
    TripAnalysis,
    VehicleSample,
)
from .errors import InvalidInputError, TripAnalyticsError
from .geo import haversine_km
from .nearest import find_closest_point
from .path_metrics import compute_path_metrics
from .services import TripAnalyticsConfig, TripAnalyticsService, analyze_trip

__all__ = [
    "GeoPoint",
    "VehicleSample",
    "PointOfInterest",
    "PathMetrics",
    "ClosestMatch",
    "TripAnalysis",
    "TripAnalyticsError",
    "InvalidInputError",
    "haversine_km",
    "compute_path_metrics",
    "find_closest_point",
    "TripAnalyticsConfig",
    "TripAnalyticsService",
    "analyze_trip",
]

"""Service layer package.

Exports the high-level service consumed by ingestion / presentation layers.
"""

from .analytics_service import TripAnalyticsConfig, TripAnalyticsService, analyze_trip

__all__ = ["TripAnalyticsConfig", "TripAnalyticsService", "analyze_trip"]

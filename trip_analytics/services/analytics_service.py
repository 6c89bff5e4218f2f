"""Trip analytics service.

Composes the path metrics aggregation and the nearest point-of-interest
search over one trip. Both steps are pure functions (see `path_metrics` and
`nearest`), so the service only adds configuration, optional input checks and
logging around them.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import logging
from typing import Iterable, Sequence

from ..config import (
    CONCURRENT_AGGREGATIONS,
    NEAREST_MATCH_STRATEGY,
    NEAREST_MAX_WORKERS,
    PEAK_SPEED_INCLUDE_FIRST_SAMPLE,
    VALIDATE_INPUTS,
)
from ..errors import InvalidInputError
from ..models import (
    ClosestMatch,
    PathMetrics,
    PointOfInterest,
    TripAnalysis,
    VehicleSample,
)
from ..nearest import find_closest_point
from ..path_metrics import compute_path_metrics
from ..validation import validate_points_of_interest, validate_trip


@dataclass(slots=True)
class TripAnalyticsConfig:
    include_first_sample_speed: bool = PEAK_SPEED_INCLUDE_FIRST_SAMPLE
    match_strategy: str = NEAREST_MATCH_STRATEGY
    max_workers: int = NEAREST_MAX_WORKERS
    validate_inputs: bool = VALIDATE_INPUTS
    concurrent_aggregations: bool = CONCURRENT_AGGREGATIONS
    logger: logging.Logger | None = field(default=None, repr=False)


class TripAnalyticsService:
    def __init__(self, config: TripAnalyticsConfig | None = None):
        self.config = config or TripAnalyticsConfig()
        if self.config.max_workers <= 0:
            raise ValueError("max_workers must be positive")
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def analyze(
        self,
        trip: Sequence[VehicleSample],
        points: Iterable[PointOfInterest],
    ) -> TripAnalysis:
        """Return path metrics and the closest point of interest for ``trip``.

        Raises:
            InvalidInputError: ``validate_inputs`` is enabled and a sample or
                point of interest breaks a precondition. Nothing is computed
                in that case.
        """

        poi_list = list(points)
        if self.config.validate_inputs:
            self._validate(trip, poi_list)

        if self.config.concurrent_aggregations:
            with ThreadPoolExecutor(max_workers=2) as executor:
                metrics_future = executor.submit(self._path_metrics, trip)
                match_future = executor.submit(self._closest_match, trip, poi_list)
                metrics = metrics_future.result()
                match = match_future.result()
        else:
            metrics = self._path_metrics(trip)
            match = self._closest_match(trip, poi_list)

        if match.matched:
            self._log.info(
                "Analysed trip of %d samples: %.2f km, peak %.1f km/h, "
                "closest point=%s at %.3f km",
                len(trip),
                metrics.total_distance_km,
                metrics.max_speed_kmh,
                match.point.name,
                match.distance_km,
            )
        else:
            self._log.info(
                "Analysed trip of %d samples: %.2f km, peak %.1f km/h, no point matched",
                len(trip),
                metrics.total_distance_km,
                metrics.max_speed_kmh,
            )
        return TripAnalysis(path_metrics=metrics, closest_match=match)

    def _validate(
        self, trip: Sequence[VehicleSample], points: Sequence[PointOfInterest]
    ) -> None:
        try:
            validate_trip(trip)
            validate_points_of_interest(points)
        except InvalidInputError as exc:
            self._log.warning("Rejected trip analysis input: %s", exc)
            raise

    def _path_metrics(self, trip: Sequence[VehicleSample]) -> PathMetrics:
        return compute_path_metrics(
            trip, include_first_sample_speed=self.config.include_first_sample_speed
        )

    def _closest_match(
        self, trip: Sequence[VehicleSample], points: Sequence[PointOfInterest]
    ) -> ClosestMatch:
        return find_closest_point(
            trip,
            points,
            strategy=self.config.match_strategy,
            max_workers=self.config.max_workers,
        )


def analyze_trip(
    trip: Sequence[VehicleSample],
    points: Iterable[PointOfInterest],
    *,
    config: TripAnalyticsConfig | None = None,
) -> TripAnalysis:
    """Convenience wrapper running a one-off ``TripAnalyticsService``."""

    return TripAnalyticsService(config).analyze(trip, points)


__all__ = ["TripAnalyticsConfig", "TripAnalyticsService", "analyze_trip"]

"""Distance and peak-speed aggregation over an ordered trip.

Pure transformation: given the samples of one trip it returns a
``PathMetrics`` record. Sample order is trusted as capture order and is never
re-sorted.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .config import PEAK_SPEED_INCLUDE_FIRST_SAMPLE
from .geo import haversine_km
from .models import PathMetrics, VehicleSample

LOGGER = logging.getLogger(__name__)


def compute_path_metrics(
    trip: Sequence[VehicleSample],
    *,
    include_first_sample_speed: bool | None = None,
) -> PathMetrics:
    """Return total distance (km) and peak speed (km/h) for ``trip``.

    Distance sums the great-circle legs between consecutive samples. Peak
    speed is read from each sample's own ``speed`` over the same range as the
    legs, i.e. from the second sample on, so a lone sample reports 0 km/h.
    Pass ``include_first_sample_speed=True`` to also consider the first
    sample; ``None`` uses ``PEAK_SPEED_INCLUDE_FIRST_SAMPLE``.
    """

    if include_first_sample_speed is None:
        include_first_sample_speed = PEAK_SPEED_INCLUDE_FIRST_SAMPLE

    total_distance = 0.0
    max_speed = 0.0
    if include_first_sample_speed and trip:
        max_speed = max(max_speed, trip[0].speed)
    for i in range(1, len(trip)):
        previous = trip[i - 1]
        current = trip[i]
        total_distance += haversine_km(previous.position, current.position)
        max_speed = max(max_speed, current.speed)

    LOGGER.debug(
        "Path metrics over %d samples: %.3f km, peak %.1f km/h",
        len(trip),
        total_distance,
        max_speed,
    )
    return PathMetrics(total_distance_km=total_distance, max_speed_kmh=max_speed)


__all__ = ["compute_path_metrics"]

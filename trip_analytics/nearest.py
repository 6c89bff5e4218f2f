"""Nearest point-of-interest search over a trip.

The search scans the full (point of interest, sample) cross product, points
of interest in the outer position and samples in the inner one. A pair only
replaces the best-so-far when it is strictly closer, so ties always resolve
to the first pair in that order. Every strategy below honours the same rule.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from functools import reduce
import logging
import math
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import (
    NEAREST_MATCH_STRATEGIES,
    NEAREST_MATCH_STRATEGY,
    NEAREST_MAX_WORKERS,
    NEAREST_VECTORIZE_MIN_PAIRS,
)
from .geo import haversine_km, haversine_km_matrix, positions_to_array
from .models import ClosestMatch, PointOfInterest, VehicleSample

LOGGER = logging.getLogger(__name__)

Pair = Tuple[PointOfInterest, int, VehicleSample]


class _Best(NamedTuple):
    """Accumulator carried through the fold."""

    distance_km: float
    point: Optional[PointOfInterest]
    timestamp: Optional[datetime]
    sample_index: Optional[int]


_NO_MATCH = _Best(math.inf, None, None, None)


def find_closest_point(
    trip: Sequence[VehicleSample],
    points: Iterable[PointOfInterest],
    *,
    strategy: str | None = None,
    max_workers: int | None = None,
) -> ClosestMatch:
    """Return the point of interest closest to any sample of ``trip``.

    Args:
        trip: Ordered samples; may be empty.
        points: Points of interest in their ingestion order; may be empty.
        strategy: ``"sequential"``, ``"vectorized"``, ``"parallel"`` or
            ``"auto"``. ``None`` uses ``NEAREST_MATCH_STRATEGY``.
        max_workers: Thread count for the parallel strategy. ``None`` uses
            ``NEAREST_MAX_WORKERS``.

    Returns:
        The matched point, its distance in km, the timestamp and index of the
        first sample achieving it. With no samples or no points of interest
        the match is empty and the distance is ``math.inf``.

    Raises:
        ValueError: Unknown ``strategy`` or a non-positive worker count.
    """

    workers = max_workers if max_workers is not None else NEAREST_MAX_WORKERS
    if workers <= 0:
        raise ValueError("max_workers must be positive")
    poi_list = list(points)
    pair_count = len(poi_list) * len(trip)
    resolved = _resolve_strategy(strategy or NEAREST_MATCH_STRATEGY, pair_count)
    LOGGER.debug(
        "Nearest match: %d points x %d samples using %s strategy",
        len(poi_list),
        len(trip),
        resolved,
    )
    if pair_count == 0:
        best = _NO_MATCH
    elif resolved == "sequential":
        best = _match_sequential(trip, poi_list)
    elif resolved == "vectorized":
        best = _match_vectorized(trip, poi_list)
    else:
        best = _match_parallel(trip, poi_list, workers)
    return ClosestMatch(
        point=best.point,
        distance_km=best.distance_km,
        first_timestamp=best.timestamp,
        sample_index=best.sample_index,
    )


def _resolve_strategy(strategy: str, pair_count: int) -> str:
    normalized = strategy.strip().lower()
    if normalized not in NEAREST_MATCH_STRATEGIES:
        raise ValueError(
            f"Unknown nearest match strategy {strategy!r}; "
            f"expected one of {sorted(NEAREST_MATCH_STRATEGIES)}"
        )
    if normalized == "auto":
        if pair_count >= NEAREST_VECTORIZE_MIN_PAIRS:
            return "vectorized"
        return "sequential"
    return normalized


# ---------------------------------------------------------------------------
# Sequential fold
# ---------------------------------------------------------------------------
def _pairs(trip: Sequence[VehicleSample], points: Sequence[PointOfInterest]) -> Iterator[Pair]:
    for poi in points:
        for index, sample in enumerate(trip):
            yield poi, index, sample


def _keep_closer(best: _Best, pair: Pair) -> _Best:
    poi, index, sample = pair
    distance = haversine_km(sample.position, poi.position)
    if distance < best.distance_km:
        return _Best(distance, poi, sample.timestamp, index)
    return best


def _match_sequential(
    trip: Sequence[VehicleSample], points: Sequence[PointOfInterest]
) -> _Best:
    return reduce(_keep_closer, _pairs(trip, points), _NO_MATCH)


# ---------------------------------------------------------------------------
# Vectorised and parallel kernels
# ---------------------------------------------------------------------------
def _first_minimum(matrix: NDArray[np.float64]) -> Tuple[float, int, int]:
    """Return ``(distance, row, col)`` of the first minimum in row-major order."""

    # NaN never wins a strict comparison in the fold; mirror that here.
    cleaned = np.where(np.isnan(matrix), np.inf, matrix)
    flat_index = int(np.argmin(cleaned))
    row, col = divmod(flat_index, cleaned.shape[1])
    return float(cleaned[row, col]), row, col


def _match_vectorized(
    trip: Sequence[VehicleSample], points: Sequence[PointOfInterest]
) -> _Best:
    matrix = haversine_km_matrix(
        positions_to_array([p.position for p in points]),
        positions_to_array([s.position for s in trip]),
    )
    distance, row, col = _first_minimum(matrix)
    return _to_best(distance, points[row], trip, col)


def _match_parallel(
    trip: Sequence[VehicleSample],
    points: Sequence[PointOfInterest],
    max_workers: int,
) -> _Best:
    chunks = _contiguous_chunks(len(points), max_workers)
    if len(chunks) == 1:
        return _match_vectorized(trip, points)
    sample_positions = positions_to_array([s.position for s in trip])
    poi_positions = positions_to_array([p.position for p in points])

    def score_chunk(bounds: Tuple[int, int]) -> Tuple[float, int, int]:
        start, end = bounds
        matrix = haversine_km_matrix(poi_positions[start:end], sample_positions)
        distance, row, col = _first_minimum(matrix)
        return distance, start + row, col

    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        # map() yields in submission order, which is point-of-interest order.
        chunk_results: List[Tuple[float, int, int]] = list(
            executor.map(score_chunk, chunks)
        )

    best_distance, best_row, best_col = math.inf, -1, -1
    for distance, row, col in chunk_results:
        if distance < best_distance:
            best_distance, best_row, best_col = distance, row, col
    if best_row < 0:
        return _NO_MATCH
    return _to_best(best_distance, points[best_row], trip, best_col)


def _contiguous_chunks(count: int, parts: int) -> List[Tuple[int, int]]:
    """Split ``range(count)`` into at most ``parts`` ordered ``(start, end)`` spans."""

    if count <= 0:
        return []
    parts = max(1, min(parts, count))
    size = math.ceil(count / parts)
    return [(start, min(start + size, count)) for start in range(0, count, size)]


def _to_best(
    distance: float,
    poi: PointOfInterest,
    trip: Sequence[VehicleSample],
    sample_index: int,
) -> _Best:
    if not distance < math.inf:
        return _NO_MATCH
    return _Best(distance, poi, trip[sample_index].timestamp, sample_index)


__all__ = ["find_closest_point"]

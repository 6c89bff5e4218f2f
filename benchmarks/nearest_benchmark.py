"""Benchmark the nearest point-of-interest strategies on synthetic trips."""

from __future__ import annotations

import argparse
import logging
import random
import statistics
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from trip_analytics.models import (  # noqa: E402
    ClosestMatch,
    GeoPoint,
    PointOfInterest,
    VehicleSample,
)
from trip_analytics.nearest import find_closest_point  # noqa: E402

STRATEGIES = ("sequential", "vectorized", "parallel")


@dataclass(slots=True)
class StrategySummary:
    """Aggregated timings (milliseconds) for one strategy."""

    strategy: str
    iterations: int
    mean_ms: float
    worst_ms: float
    match_id: int | str | None


def _build_trip(sample_count: int, seed: int) -> List[VehicleSample]:
    """Generate a wandering trip starting near Stellenbosch."""

    rng = random.Random(seed)
    start = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
    lat, lon = -33.93, 18.86
    samples: List[VehicleSample] = []
    for idx in range(sample_count):
        lat += rng.uniform(-2e-4, 2e-4)
        lon += rng.uniform(-2e-4, 2e-4)
        samples.append(
            VehicleSample(
                position=GeoPoint(lat, lon),
                timestamp=start + timedelta(seconds=idx),
                heading=rng.uniform(0.0, 359.9),
                speed=rng.uniform(0.0, 120.0),
            )
        )
    return samples


def _build_points(point_count: int, seed: int) -> List[PointOfInterest]:
    rng = random.Random(seed + 1)
    return [
        PointOfInterest(
            id=idx,
            name=f"Store {idx}",
            position=GeoPoint(rng.uniform(-34.2, -33.6), rng.uniform(18.4, 19.2)),
        )
        for idx in range(point_count)
    ]


def _time_strategy(
    strategy: str,
    trip: Sequence[VehicleSample],
    points: Sequence[PointOfInterest],
    iterations: int,
    workers: int,
) -> tuple[List[float], ClosestMatch]:
    durations: List[float] = []
    match = ClosestMatch()
    for _ in range(iterations):
        start = time.perf_counter()
        match = find_closest_point(trip, points, strategy=strategy, max_workers=workers)
        durations.append(time.perf_counter() - start)
    return durations, match


def run_benchmark(
    sample_count: int,
    point_count: int,
    iterations: int,
    *,
    workers: int = 4,
    seed: int = 7,
) -> List[StrategySummary]:
    """Time every strategy on the same inputs and confirm they agree."""

    if sample_count <= 0 or point_count <= 0:
        raise ValueError("sample and point counts must be positive")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    trip = _build_trip(sample_count, seed)
    points = _build_points(point_count, seed)
    summaries: List[StrategySummary] = []
    for strategy in STRATEGIES:
        durations, match = _time_strategy(strategy, trip, points, iterations, workers)
        summaries.append(
            StrategySummary(
                strategy=strategy,
                iterations=iterations,
                mean_ms=statistics.fmean(durations) * 1000.0,
                worst_ms=max(durations) * 1000.0,
                match_id=match.point.id if match.point else None,
            )
        )
    winners = {summary.match_id for summary in summaries}
    if len(winners) > 1:
        logging.warning("Strategies disagree on the closest point: %s", sorted(map(str, winners)))
    return summaries


def _format_summary(summary: StrategySummary) -> Dict[str, object]:
    return {
        "strategy": summary.strategy,
        "iterations": summary.iterations,
        "mean_ms": summary.mean_ms,
        "worst_ms": summary.worst_ms,
        "match_id": summary.match_id,
    }


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the benchmark utility."""

    parser = argparse.ArgumentParser(
        description="Benchmark nearest point-of-interest strategies",
    )
    parser.add_argument("--samples", type=int, default=5000, help="Samples in the synthetic trip")
    parser.add_argument("--points", type=int, default=200, help="Points of interest to match against")
    parser.add_argument("--iterations", type=int, default=3, help="Number of repetitions for averaging")
    parser.add_argument("--workers", type=int, default=4, help="Threads for the parallel strategy")
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )
    args = _parse_args()
    summaries = run_benchmark(
        args.samples, args.points, args.iterations, workers=args.workers
    )
    for summary in summaries:
        formatted = _format_summary(summary)
        for key, value in formatted.items():
            if isinstance(value, float):
                print(f"{key}: {value:.3f}")
            else:
                print(f"{key}: {value}")
        print()


if __name__ == "__main__":
    main()

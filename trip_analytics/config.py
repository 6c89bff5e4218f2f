"""Central configuration for the trip analytics engine.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Every setting can be overridden through an environment
variable (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_str(key: str, default: str, allowed: frozenset[str]) -> str:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    return normalized if normalized in allowed else default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
# Mean Earth radius (km) used by the haversine distance.
EARTH_RADIUS_KM = _env_float("TRIP_EARTH_RADIUS_KM", 6371.0)


# ---------------------------------------------------------------------------
# Path metrics
# ---------------------------------------------------------------------------
# Peak speed is taken from the second sample onwards by default, so a
# single-sample trip reports 0 km/h. Set to True to include the first sample.
PEAK_SPEED_INCLUDE_FIRST_SAMPLE = _env_bool("PEAK_SPEED_INCLUDE_FIRST_SAMPLE", False)


# ---------------------------------------------------------------------------
# Input checks
# ---------------------------------------------------------------------------
# Samples and points of interest are expected to arrive already validated.
# Enable to fail fast with InvalidInputError on out-of-range values.
VALIDATE_INPUTS = _env_bool("TRIP_VALIDATE_INPUTS", False)


# ---------------------------------------------------------------------------
# Nearest point-of-interest matching
# ---------------------------------------------------------------------------
NEAREST_MATCH_STRATEGIES = frozenset({"sequential", "vectorized", "parallel", "auto"})

# Evaluation mode for the nearest-match search. Every mode reports the
# first-in-order pair on ties.
NEAREST_MATCH_STRATEGY = _env_str(
    "NEAREST_MATCH_STRATEGY", "sequential", NEAREST_MATCH_STRATEGIES
)

# With the "auto" strategy, switch to the numpy kernel at this many
# (point, sample) pairs.
NEAREST_VECTORIZE_MIN_PAIRS = _env_int("NEAREST_VECTORIZE_MIN_PAIRS", 50_000)

# Threads used by the "parallel" strategy.
NEAREST_MAX_WORKERS = _env_int("NEAREST_MAX_WORKERS", 4)


# ---------------------------------------------------------------------------
# Service behaviour
# ---------------------------------------------------------------------------
# Run the path metrics and the nearest match on two threads.
CONCURRENT_AGGREGATIONS = _env_bool("CONCURRENT_AGGREGATIONS", False)

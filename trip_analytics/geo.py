"""Great-circle distance helpers."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .config import EARTH_RADIUS_KM
from .models import GeoPoint

DistanceMatrix = NDArray[np.float64]
LatLon = tuple[float, float]


def haversine_km(a: GeoPoint, b: GeoPoint, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Return the haversine surface distance between ``a`` and ``b`` in km.

    Inputs are assumed to lie within valid latitude/longitude ranges. The
    haversine term is clamped to ``[0, 1]`` so rounding never yields NaN.
    The default radius is read from ``EARTH_RADIUS_KM`` once, at import time.
    """

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lon / 2) ** 2
    )
    h = min(max(h, 0.0), 1.0)
    return 2 * radius_km * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_km_matrix(
    sources: Sequence[LatLon] | NDArray[np.float64],
    targets: Sequence[LatLon] | NDArray[np.float64],
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> DistanceMatrix:
    """Return pairwise haversine distances as a ``(len(sources), len(targets))`` matrix.

    Both inputs are ``(lat, lon)`` pairs in degrees. Rows follow ``sources``
    order and columns follow ``targets`` order.
    The default radius is read from ``EARTH_RADIUS_KM`` once, at import time.
    """

    src = _as_latlon_array(sources)
    dst = _as_latlon_array(targets)
    if len(src) == 0 or len(dst) == 0:
        return np.zeros((len(src), len(dst)), dtype=float)

    src_rad = np.radians(src)
    dst_rad = np.radians(dst)
    phi1 = src_rad[:, 0][:, np.newaxis]
    phi2 = dst_rad[:, 0][np.newaxis, :]
    # Degree differences first, matching the scalar kernel.
    delta_lat = np.radians(dst[:, 0][np.newaxis, :] - src[:, 0][:, np.newaxis])
    delta_lon = np.radians(dst[:, 1][np.newaxis, :] - src[:, 1][:, np.newaxis])

    h = (
        np.sin(delta_lat / 2) ** 2
        + np.cos(phi1) * np.cos(phi2) * np.sin(delta_lon / 2) ** 2
    )
    np.clip(h, 0.0, 1.0, out=h)
    return 2 * radius_km * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def positions_to_array(points: Sequence[GeoPoint]) -> NDArray[np.float64]:
    """Convert ``GeoPoint`` values into an ``(n, 2)`` lat/lon array."""

    return _as_latlon_array([(p.latitude, p.longitude) for p in points])


def _as_latlon_array(points: Sequence[LatLon] | NDArray[np.float64]) -> NDArray[np.float64]:
    array = np.asarray(points, dtype=float)
    if array.size == 0:
        return np.zeros((0, 2), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError("Expected an array of (lat, lon) pairs")
    return array


__all__ = ["haversine_km", "haversine_km_matrix", "positions_to_array"]

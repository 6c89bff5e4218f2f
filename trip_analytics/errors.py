"""Central error types used across the analytics engine."""

from __future__ import annotations


class TripAnalyticsError(RuntimeError):
    """Base error for trip analytics failures."""


class InvalidInputError(TripAnalyticsError, ValueError):
    """Raised when supplied samples or points of interest break a precondition."""


class InvalidCoordinateError(InvalidInputError):
    """Raised when a latitude or longitude is out of range or not finite."""


class InvalidSampleError(InvalidInputError):
    """Raised when a sample carries an unusable heading, speed or timestamp."""


class DuplicatePointOfInterestError(InvalidInputError):
    """Raised when two points of interest share the same identifier."""


__all__ = [
    "TripAnalyticsError",
    "InvalidInputError",
    "InvalidCoordinateError",
    "InvalidSampleError",
    "DuplicatePointOfInterestError",
]

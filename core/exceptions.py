#!/usr/bin/env python3
"""
Domain exceptions for the recommendation engine.

The web layer maps these onto HTTP status codes; the engine itself only
raises them at its outer boundaries (request validation, weight
construction, per-center aggregation).
"""


class RecommendationError(Exception):
    """Base exception for recommendation engine errors."""
    pass


class InvalidRequestError(RecommendationError, ValueError):
    """Raised when a recommendation request fails validation."""
    pass


class InvalidCoordinateError(InvalidRequestError):
    """Raised when a latitude or longitude is out of range."""
    pass


class InvalidWeightsError(RecommendationError, ValueError):
    """Raised when a weight set does not sum to 1.0."""
    pass


class ScoringError(RecommendationError):
    """Raised when a center cannot be scored at all."""

    def __init__(self, message: str, center_id=None):
        super().__init__(message)
        self.center_id = center_id


class AllModulesFailedError(ScoringError):
    """Raised when every scoring module failed for a center."""
    pass


class ScoringTimeoutError(ScoringError):
    """Raised when a center's scoring did not finish before its deadline."""
    pass


class CenterNotFoundError(RecommendationError):
    """Raised when a center id does not resolve to a known center."""
    pass

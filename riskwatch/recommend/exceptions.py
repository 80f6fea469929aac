"""Recommendation-layer exceptions."""

from __future__ import annotations


class RecommendationError(Exception):
    """Base exception for recommendation errors."""


class UnknownCategoryError(RecommendationError):
    """A finding category has no recommendation template configured."""


class InvalidTransitionError(RecommendationError):
    """A recommendation status change that the workflow does not allow."""

"""Recommendation generation — templates, localization, drafting, workflow."""

from riskwatch.recommend.drafter import Draft, RecommendationDrafter
from riskwatch.recommend.exceptions import (
    InvalidTransitionError,
    RecommendationError,
    UnknownCategoryError,
)
from riskwatch.recommend.generator import SEVERITY_PRIORITY, RecommendationGenerator
from riskwatch.recommend.lifecycle import complete, prioritize, start, transition
from riskwatch.recommend.templates import (
    CATEGORY_ACTIONS,
    DEFAULT_TEMPLATES,
    RecommendationTemplate,
)

__all__ = [
    "CATEGORY_ACTIONS",
    "DEFAULT_TEMPLATES",
    "SEVERITY_PRIORITY",
    "Draft",
    "InvalidTransitionError",
    "RecommendationDrafter",
    "RecommendationError",
    "RecommendationGenerator",
    "RecommendationTemplate",
    "UnknownCategoryError",
    "complete",
    "prioritize",
    "start",
    "transition",
]

"""Recommendation status workflow and ordering helpers."""

from __future__ import annotations

from collections.abc import Iterable

from riskwatch.core.types import PRIORITY_RANK, Recommendation, RecommendationStatus
from riskwatch.recommend.exceptions import InvalidTransitionError

_ALLOWED: dict[RecommendationStatus, frozenset[RecommendationStatus]] = {
    RecommendationStatus.PENDING: frozenset(
        {RecommendationStatus.IN_PROGRESS, RecommendationStatus.COMPLETED}
    ),
    RecommendationStatus.IN_PROGRESS: frozenset({RecommendationStatus.COMPLETED}),
    RecommendationStatus.COMPLETED: frozenset(),
}


def transition(rec: Recommendation, status: RecommendationStatus) -> Recommendation:
    """Return a copy of *rec* moved to *status*.

    Raises:
        InvalidTransitionError: the move goes backwards or leaves COMPLETED.
    """
    if status == rec.status:
        return rec
    if status not in _ALLOWED[rec.status]:
        raise InvalidTransitionError(
            f"Cannot move recommendation {rec.id} from {rec.status} to {status}"
        )
    return rec.model_copy(update={"status": status})


def start(rec: Recommendation) -> Recommendation:
    return transition(rec, RecommendationStatus.IN_PROGRESS)


def complete(rec: Recommendation) -> Recommendation:
    return transition(rec, RecommendationStatus.COMPLETED)


def prioritize(recs: Iterable[Recommendation]) -> list[Recommendation]:
    """Highest priority first; ties keep creation order."""
    return sorted(recs, key=lambda r: (-PRIORITY_RANK[r.priority], r.created_at))

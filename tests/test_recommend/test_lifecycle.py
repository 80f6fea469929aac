"""Tests for recommendation status transitions and ordering."""

from __future__ import annotations

import pytest

from riskwatch.core.types import (
    Priority,
    Recommendation,
    RecommendationStatus,
    RecommendationType,
    ThreatCategory,
)
from riskwatch.recommend.exceptions import InvalidTransitionError
from riskwatch.recommend.lifecycle import complete, prioritize, start, transition


def _rec(priority: Priority = Priority.MEDIUM, created_at: float = 0.0) -> Recommendation:
    return Recommendation(
        finding_id="f-1",
        category=ThreatCategory.FRAUD,
        type=RecommendationType.INVESTIGATION,
        title="Investigation Required",
        description="d",
        priority=priority,
        created_at=created_at,
    )


class TestTransitions:
    def test_pending_to_in_progress_to_completed(self) -> None:
        rec = _rec()
        started = start(rec)
        done = complete(started)
        assert started.status == RecommendationStatus.IN_PROGRESS
        assert done.status == RecommendationStatus.COMPLETED
        assert rec.status == RecommendationStatus.PENDING

    def test_pending_straight_to_completed(self) -> None:
        assert complete(_rec()).status == RecommendationStatus.COMPLETED

    def test_same_status_is_noop(self) -> None:
        rec = _rec()
        assert transition(rec, RecommendationStatus.PENDING) is rec

    def test_completed_is_terminal(self) -> None:
        done = complete(_rec())
        with pytest.raises(InvalidTransitionError):
            start(done)
        with pytest.raises(InvalidTransitionError):
            transition(done, RecommendationStatus.PENDING)

    def test_no_going_back_to_pending(self) -> None:
        with pytest.raises(InvalidTransitionError):
            transition(start(_rec()), RecommendationStatus.PENDING)


class TestPrioritize:
    def test_priority_then_creation(self) -> None:
        low = _rec(Priority.LOW, 1.0)
        urgent = _rec(Priority.URGENT, 3.0)
        high_old = _rec(Priority.HIGH, 2.0)
        high_new = _rec(Priority.HIGH, 4.0)

        ordered = prioritize([low, high_new, urgent, high_old])

        assert [r.id for r in ordered] == [urgent.id, high_old.id, high_new.id, low.id]

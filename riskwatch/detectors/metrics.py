"""Rule-based detectors for per-entity metric snapshots.

Each ``MetricRuleDetector`` wraps one configured rule. A rule fires when
every one of its conditions holds against the snapshot; the finding's
confidence is the mean weight of those conditions.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

import structlog

from riskwatch.core.config import MetricRuleConfig, RuleConditionConfig
from riskwatch.core.types import Finding, MetricSnapshot, Unit
from riskwatch.detectors.base import Detector

logger = structlog.stdlib.get_logger()


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _greater_than(observed: Any, expected: Any) -> bool:
    a, b = _as_number(observed), _as_number(expected)
    return a is not None and b is not None and a > b


def _less_than(observed: Any, expected: Any) -> bool:
    a, b = _as_number(observed), _as_number(expected)
    return a is not None and b is not None and a < b


def _between(observed: Any, expected: Any) -> bool:
    if not isinstance(expected, (list, tuple)) or len(expected) != 2:
        return False
    a = _as_number(observed)
    lo, hi = _as_number(expected[0]), _as_number(expected[1])
    return a is not None and lo is not None and hi is not None and lo <= a <= hi


def _contains(observed: Any, expected: Any) -> bool:
    return str(expected).lower() in str(observed).lower()


def _matches_regex(observed: Any, expected: Any) -> bool:
    try:
        return re.search(str(expected), str(observed)) is not None
    except re.error:
        logger.warning("metric_rule_bad_regex", pattern=str(expected))
        return False


OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "equals": lambda observed, expected: observed == expected,
    "not_equals": lambda observed, expected: observed != expected,
    "greater_than": _greater_than,
    "less_than": _less_than,
    "between": _between,
    "contains": _contains,
    "matches_regex": _matches_regex,
}


def evaluate_condition(condition: RuleConditionConfig, metrics: dict[str, Any]) -> bool:
    """Check one condition; a missing metric never satisfies it."""
    if condition.field not in metrics:
        return False
    op = OPERATORS.get(condition.operator)
    if op is None:
        raise ValueError(f"Unknown rule operator: {condition.operator!r}")
    return op(metrics[condition.field], condition.value)


class MetricRuleDetector(Detector):
    """Evaluates one MetricRuleConfig against MetricSnapshot units."""

    def __init__(self, rule: MetricRuleConfig) -> None:
        super().__init__(rule.id, rule.category)
        for condition in rule.conditions:
            if condition.operator not in OPERATORS:
                raise ValueError(
                    f"Rule {rule.id!r} uses unknown operator {condition.operator!r}"
                )
        self._rule = rule

    @property
    def rule(self) -> MetricRuleConfig:
        return self._rule

    def supports(self, unit: Unit) -> bool:
        return isinstance(unit, MetricSnapshot)

    async def classify(self, unit: Unit) -> Finding | None:
        if not isinstance(unit, MetricSnapshot) or not self._rule.conditions:
            return None

        evidence: list[str] = []
        for condition in self._rule.conditions:
            if not evaluate_condition(condition, unit.metrics):
                return None
            evidence.append(
                f"{condition.field}={unit.metrics[condition.field]!r}"
                f" ({condition.operator} {condition.value!r})"
            )

        weights = [c.weight for c in self._rule.conditions]
        confidence = round(sum(weights) / len(weights), 4)

        return Finding(
            unit_id=unit.id,
            detector_id=self.detector_id,
            category=self.category,
            kind=self._rule.kind,
            severity=self._rule.severity,
            confidence=confidence,
            title=self._rule.name,
            description=self._rule.description,
            evidence=tuple(evidence),
            affected_entity_ids=frozenset({unit.entity_id}),
            metadata={
                "rule_id": self._rule.id,
                "observed": {
                    c.field: unit.metrics[c.field] for c in self._rule.conditions
                },
                "expected": {c.field: c.value for c in self._rule.conditions},
            },
        )

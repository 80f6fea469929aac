"""Tests for metric rule detectors and condition operators."""

from __future__ import annotations

import pytest

from riskwatch.core.config import MetricRuleConfig, RuleConditionConfig
from riskwatch.core.types import (
    Communication,
    FindingKind,
    MetricSnapshot,
    Severity,
    ThreatCategory,
)
from riskwatch.detectors.metrics import MetricRuleDetector, evaluate_condition


# ── Helpers ─────────────────────────────────────────────────────


def _cond(field: str, operator: str, value: object, weight: float = 1.0) -> RuleConditionConfig:
    return RuleConditionConfig(field=field, operator=operator, value=value, weight=weight)


def _rule(*conditions: RuleConditionConfig, **kw: object) -> MetricRuleConfig:
    defaults: dict[str, object] = {
        "id": "late_and_sick",
        "name": "Late and Sick",
        "description": "Frequent late arrivals with sick leave",
        "category": ThreatCategory.ATTENDANCE_ANOMALY,
        "severity": Severity.MEDIUM,
        "conditions": list(conditions),
    }
    defaults.update(kw)
    return MetricRuleConfig(**defaults)  # type: ignore[arg-type]


def _snapshot(**metrics: object) -> MetricSnapshot:
    return MetricSnapshot(entity_id="emp-7", metrics=metrics)  # type: ignore[arg-type]


# ── evaluate_condition ─────────────────────────────────────────


class TestEvaluateCondition:
    @pytest.mark.parametrize(
        ("operator", "value", "observed", "expected"),
        [
            ("greater_than", 3, 4, True),
            ("greater_than", 3, 3, False),
            ("less_than", 70, 65.5, True),
            ("less_than", 70, 70, False),
            ("equals", "remote", "remote", True),
            ("not_equals", "remote", "office", True),
            ("between", [5, 10], 5, True),
            ("between", [5, 10], 11, False),
            ("between", 5, 7, False),
            ("contains", "ABS", "unexplained absence", True),
            ("matches_regex", r"^night-\d+$", "night-3", True),
            ("matches_regex", "[unclosed", "anything", False),
            ("greater_than", 3, "not a number", False),
            ("greater_than", 0, True, False),
        ],
    )
    def test_operators(
        self, operator: str, value: object, observed: object, expected: bool
    ) -> None:
        assert evaluate_condition(_cond("m", operator, value), {"m": observed}) is expected

    def test_missing_metric_is_false(self) -> None:
        assert evaluate_condition(_cond("sickDays", "greater_than", 8), {}) is False

    def test_unknown_operator_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown rule operator"):
            evaluate_condition(_cond("m", "roughly", 1), {"m": 1})


# ── MetricRuleDetector ─────────────────────────────────────────


class TestMetricRuleDetector:
    async def test_all_conditions_hold(self) -> None:
        detector = MetricRuleDetector(_rule(
            _cond("lateArrivals", "greater_than", 3, weight=0.7),
            _cond("sickDays", "greater_than", 8, weight=0.8),
        ))
        unit = _snapshot(lateArrivals=5, sickDays=10)

        finding = await detector.classify(unit)

        assert finding is not None
        assert finding.unit_id == unit.id
        assert finding.detector_id == "late_and_sick"
        assert finding.kind == FindingKind.ANOMALY
        assert finding.category == ThreatCategory.ATTENDANCE_ANOMALY
        assert finding.severity == Severity.MEDIUM
        assert finding.confidence == 0.75
        assert finding.title == "Late and Sick"
        assert finding.affected_entity_ids == frozenset({"emp-7"})
        assert finding.evidence == (
            "lateArrivals=5 (greater_than 3)",
            "sickDays=10 (greater_than 8)",
        )
        assert finding.metadata["rule_id"] == "late_and_sick"
        assert finding.metadata["observed"] == {"lateArrivals": 5, "sickDays": 10}
        assert finding.metadata["expected"] == {"lateArrivals": 3, "sickDays": 8}

    async def test_one_condition_fails(self) -> None:
        detector = MetricRuleDetector(_rule(
            _cond("lateArrivals", "greater_than", 3),
            _cond("sickDays", "greater_than", 8),
        ))
        assert await detector.classify(_snapshot(lateArrivals=5, sickDays=2)) is None

    async def test_missing_metric(self) -> None:
        detector = MetricRuleDetector(_rule(_cond("performanceScore", "less_than", 70)))
        assert await detector.classify(_snapshot(lateArrivals=9)) is None

    async def test_rule_without_conditions_never_fires(self) -> None:
        detector = MetricRuleDetector(_rule())
        assert await detector.classify(_snapshot(anything=1)) is None

    async def test_threat_kind_rule(self) -> None:
        detector = MetricRuleDetector(_rule(
            _cond("failedLogins", "greater_than", 10),
            kind=FindingKind.THREAT,
            category=ThreatCategory.CUSTOM_RULE,
            severity=Severity.HIGH,
        ))
        finding = await detector.classify(_snapshot(failedLogins=25))
        assert finding is not None
        assert finding.kind == FindingKind.THREAT
        assert finding.confidence == 1.0

    def test_unknown_operator_rejected_at_init(self) -> None:
        with pytest.raises(ValueError, match="unknown operator"):
            MetricRuleDetector(_rule(_cond("m", "approximately", 1)))

    async def test_supports_only_snapshots(self) -> None:
        detector = MetricRuleDetector(_rule(_cond("m", "greater_than", 1)))
        comm = Communication(content="hello")
        assert detector.supports(comm) is False
        assert detector.supports(_snapshot(m=2)) is True
        assert await detector.classify(comm) is None

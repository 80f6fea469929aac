"""Tests for riskwatch/risk/aggregator.py — scoring policies, tiers, grades."""

from __future__ import annotations

from itertools import combinations

import pytest

from riskwatch.core.types import (
    AggregationPolicy,
    ComplianceGrade,
    Finding,
    RiskTier,
    Severity,
    ThreatCategory,
    severity_rank,
)
from riskwatch.risk.aggregator import (
    aggregate,
    aggregate_metrics,
    compliance_grade,
    deduction_for,
    normalized_average_score,
    risk_points,
    risk_tier,
    score_findings,
    weighted_deduction_score,
)

# ── Helpers ──────────────────────────────────────────────────────


def _finding(
    severity: Severity = Severity.MEDIUM,
    confidence: float = 0.8,
    category: ThreatCategory = ThreatCategory.FRAUD,
) -> Finding:
    return Finding(category=category, severity=severity, confidence=confidence)


# ── Scoring policies ─────────────────────────────────────────────


class TestWeightedDeduction:
    def test_single_high_finding(self) -> None:
        findings = [_finding(Severity.HIGH, 0.9, ThreatCategory.HARASSMENT)]
        assert weighted_deduction_score(findings) == 90.0

    def test_deductions_per_severity(self) -> None:
        assert deduction_for(Severity.LOW) == 5.0
        assert deduction_for(Severity.MEDIUM) == 10.0
        assert deduction_for(Severity.HIGH) == 10.0
        assert deduction_for(Severity.CRITICAL) == 20.0

    def test_strict_mode_doubles_high(self) -> None:
        assert deduction_for(Severity.HIGH, strict=True) == 20.0
        assert deduction_for(Severity.MEDIUM, strict=True) == 10.0
        findings = [_finding(Severity.HIGH)]
        assert weighted_deduction_score(findings, strict=True) == 80.0

    def test_floored_at_zero(self) -> None:
        findings = [_finding(Severity.CRITICAL) for _ in range(8)]
        assert weighted_deduction_score(findings) == 0.0

    def test_empty_is_perfect(self) -> None:
        assert weighted_deduction_score([]) == 100.0


class TestNormalizedAverage:
    def test_single_high_finding(self) -> None:
        findings = [_finding(Severity.HIGH, 0.9, ThreatCategory.HARASSMENT)]
        assert normalized_average_score(findings) == 20.0

    def test_mixed_severities(self) -> None:
        # mean weight (1 + 5) / 2 = 3 → 100 - 60
        findings = [_finding(Severity.LOW), _finding(Severity.CRITICAL)]
        assert normalized_average_score(findings) == 40.0

    def test_empty_is_perfect(self) -> None:
        assert normalized_average_score([]) == 100.0

    def test_score_findings_dispatch(self) -> None:
        findings = [_finding(Severity.HIGH)]
        assert score_findings(findings, AggregationPolicy.WEIGHTED_DEDUCTION) == 90.0
        assert score_findings(findings, AggregationPolicy.NORMALIZED_AVERAGE) == 20.0

    def test_unknown_policy_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown aggregation policy"):
            score_findings([], "median")  # type: ignore[arg-type]


class TestZeroConfidence:
    def test_zero_confidence_never_moves_score(self) -> None:
        findings = [_finding(Severity.CRITICAL, confidence=0.0)]
        for policy in AggregationPolicy:
            assert score_findings(findings, policy) == 100.0

    def test_zero_confidence_not_contributing(self) -> None:
        kept = _finding(Severity.LOW, 0.5)
        dropped = _finding(Severity.HIGH, 0.0)
        verdict = aggregate([kept, dropped])
        assert verdict.contributing_findings == (kept.id,)
        assert verdict.score == 95.0


# ── Tiers & grades ───────────────────────────────────────────────


class TestRiskTier:
    def test_mixed_findings_sum_to_low_tier(self) -> None:
        findings = [
            _finding(Severity.CRITICAL, 0.8, ThreatCategory.FRAUD),
            _finding(Severity.MEDIUM, 0.65, ThreatCategory.BURNOUT),
        ]
        points = risk_points(findings)
        assert points == pytest.approx(5.3)
        assert risk_tier(points) == RiskTier.LOW

    @pytest.mark.parametrize(
        ("points", "expected"),
        [
            (14.999, RiskTier.LOW),
            (15.0, RiskTier.MEDIUM),
            (29.999, RiskTier.MEDIUM),
            (30.0, RiskTier.HIGH),
            (49.999, RiskTier.HIGH),
            (50.0, RiskTier.CRITICAL),
            (120.0, RiskTier.CRITICAL),
        ],
    )
    def test_boundaries(self, points: float, expected: RiskTier) -> None:
        assert risk_tier(points) == expected

    def test_accumulated_points_reach_medium(self) -> None:
        # 3 × (5 × 1.0) = 15 exactly
        findings = [_finding(Severity.CRITICAL, 1.0) for _ in range(3)]
        assert aggregate(findings).tier == RiskTier.MEDIUM


class TestComplianceGrade:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (100.0, ComplianceGrade.A),
            (90.0, ComplianceGrade.A),
            (89.99, ComplianceGrade.B),
            (80.0, ComplianceGrade.B),
            (70.0, ComplianceGrade.C),
            (60.0, ComplianceGrade.D),
            (59.9, ComplianceGrade.F),
            (0.0, ComplianceGrade.F),
        ],
    )
    def test_boundaries(self, score: float, expected: ComplianceGrade) -> None:
        assert compliance_grade(score) == expected


# ── aggregate() ──────────────────────────────────────────────────


class TestAggregate:
    def test_single_harassment_finding(self) -> None:
        findings = [_finding(Severity.HIGH, 0.9, ThreatCategory.HARASSMENT)]
        verdict = aggregate(findings, now=1000.0)
        assert verdict.score == 90.0
        assert verdict.grade == ComplianceGrade.A
        assert verdict.tier == RiskTier.LOW
        assert verdict.policy == AggregationPolicy.WEIGHTED_DEDUCTION
        assert verdict.risk_points == pytest.approx(3.6)
        assert verdict.computed_at == 1000.0

    def test_empty_set(self) -> None:
        verdict = aggregate([])
        assert verdict.score == 100.0
        assert verdict.tier == RiskTier.LOW
        assert verdict.grade == ComplianceGrade.A
        assert verdict.contributing_findings == ()

    def test_deterministic(self) -> None:
        findings = [_finding(Severity.HIGH, 0.7), _finding(Severity.LOW, 0.4)]
        first = aggregate(findings, now=1.0)
        second = aggregate(findings, now=1.0)
        assert first == second

    def test_monotonic_when_adding_findings(self) -> None:
        findings = [_finding(Severity.MEDIUM, 0.6)]
        before = aggregate(findings)
        after = aggregate([*findings, _finding(Severity.LOW, 0.3)])
        assert after.score <= before.score
        assert after.risk_points >= before.risk_points

    @pytest.mark.parametrize("policy", list(AggregationPolicy))
    @pytest.mark.parametrize("strict", [False, True])
    @pytest.mark.parametrize(
        ("lower", "higher"),
        list(combinations(sorted(Severity, key=severity_rank), 2)),
    )
    def test_raising_severity_never_raises_score(
        self,
        policy: AggregationPolicy,
        strict: bool,
        lower: Severity,
        higher: Severity,
    ) -> None:
        assert severity_rank(lower) < severity_rank(higher)
        assert score_findings([_finding(higher)], policy, strict) <= score_findings(
            [_finding(lower)], policy, strict
        )
        others = [_finding(Severity.MEDIUM, 0.5), _finding(Severity.LOW, 0.9)]
        assert score_findings([*others, _finding(higher)], policy, strict) <= (
            score_findings([*others, _finding(lower)], policy, strict)
        )

    def test_normalized_policy(self) -> None:
        verdict = aggregate(
            [_finding(Severity.HIGH)], policy=AggregationPolicy.NORMALIZED_AVERAGE
        )
        assert verdict.score == 20.0
        assert verdict.grade == ComplianceGrade.F


class TestAggregateMetrics:
    def test_anomalies_precede_threats(self) -> None:
        anomaly = _finding(Severity.MEDIUM, 0.7, ThreatCategory.ATTENDANCE_ANOMALY)
        threat = _finding(Severity.HIGH, 0.9, ThreatCategory.FRAUD)
        verdict = aggregate_metrics([anomaly], [threat])
        assert verdict.contributing_findings == (anomaly.id, threat.id)
        assert verdict.policy == AggregationPolicy.NORMALIZED_AVERAGE
        # mean weight (2 + 4) / 2 = 3 → 40
        assert verdict.score == 40.0

    def test_no_anomalies(self) -> None:
        verdict = aggregate_metrics([], [])
        assert verdict.score == 100.0
        assert verdict.tier == RiskTier.LOW

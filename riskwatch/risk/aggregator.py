"""Pure aggregation functions — finding sets in, RiskVerdict out.

Two scoring policies coexist and callers pick one per subsystem:

- weighted deduction: start at 100, subtract a fixed penalty per finding.
- normalized average: 100 minus the mean severity weight as a share of
  the maximum weight.

Independently of the score, every verdict carries the operational tier
(accumulated ``severity weight × confidence`` risk points) and the
compliance letter grade derived from the score.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

from riskwatch.core.types import (
    AggregationPolicy,
    ComplianceGrade,
    Finding,
    RiskTier,
    RiskVerdict,
    Severity,
)

MAX_SCORE = 100.0

SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 4,
    Severity.CRITICAL: 5,
}
MAX_SEVERITY_WEIGHT = max(SEVERITY_WEIGHTS.values())

DEDUCTIONS: dict[Severity, float] = {
    Severity.LOW: 5.0,
    Severity.MEDIUM: 10.0,
    Severity.HIGH: 10.0,
    Severity.CRITICAL: 20.0,
}
STRICT_HIGH_DEDUCTION = 20.0

# Inclusive lower bounds, highest first.
TIER_BOUNDARIES: tuple[tuple[float, RiskTier], ...] = (
    (50.0, RiskTier.CRITICAL),
    (30.0, RiskTier.HIGH),
    (15.0, RiskTier.MEDIUM),
)

GRADE_BOUNDARIES: tuple[tuple[float, ComplianceGrade], ...] = (
    (90.0, ComplianceGrade.A),
    (80.0, ComplianceGrade.B),
    (70.0, ComplianceGrade.C),
    (60.0, ComplianceGrade.D),
)


def _scoring(findings: Sequence[Finding]) -> list[Finding]:
    """Findings that may move a score — zero-confidence ones never do."""
    return [f for f in findings if f.confidence > 0.0]


def severity_weight(severity: Severity) -> int:
    return SEVERITY_WEIGHTS[severity]


def deduction_for(severity: Severity, strict: bool = False) -> float:
    """Penalty subtracted from the score for one finding."""
    if strict and severity == Severity.HIGH:
        return STRICT_HIGH_DEDUCTION
    return DEDUCTIONS[severity]


def weighted_deduction_score(findings: Sequence[Finding], strict: bool = False) -> float:
    """100 minus a fixed per-severity penalty per finding, floored at 0."""
    score = MAX_SCORE
    for finding in _scoring(findings):
        score -= deduction_for(finding.severity, strict)
    return max(score, 0.0)


def normalized_average_score(findings: Sequence[Finding]) -> float:
    """100 minus the mean severity weight as a percentage of the maximum."""
    scored = _scoring(findings)
    if not scored:
        return MAX_SCORE
    mean_weight = sum(SEVERITY_WEIGHTS[f.severity] for f in scored) / len(scored)
    return round(MAX_SCORE - (mean_weight / MAX_SEVERITY_WEIGHT) * MAX_SCORE, 2)


def score_findings(
    findings: Sequence[Finding],
    policy: AggregationPolicy,
    strict: bool = False,
) -> float:
    """Dispatch to the named scoring policy."""
    if policy == AggregationPolicy.WEIGHTED_DEDUCTION:
        return weighted_deduction_score(findings, strict)
    if policy == AggregationPolicy.NORMALIZED_AVERAGE:
        return normalized_average_score(findings)
    raise ValueError(f"Unknown aggregation policy: {policy!r}")


def risk_points(findings: Sequence[Finding]) -> float:
    """Sum of ``severity weight × confidence`` across findings."""
    return round(
        sum(SEVERITY_WEIGHTS[f.severity] * f.confidence for f in findings),
        6,
    )


def risk_tier(points: float) -> RiskTier:
    """Operational tier: ≥50 critical, ≥30 high, ≥15 medium, else low."""
    for lower, tier in TIER_BOUNDARIES:
        if points >= lower:
            return tier
    return RiskTier.LOW


def compliance_grade(score: float) -> ComplianceGrade:
    """Letter grade: ≥90 A, ≥80 B, ≥70 C, ≥60 D, else F."""
    for lower, grade in GRADE_BOUNDARIES:
        if score >= lower:
            return grade
    return ComplianceGrade.F


def aggregate(
    findings: Sequence[Finding],
    policy: AggregationPolicy = AggregationPolicy.WEIGHTED_DEDUCTION,
    strict: bool = False,
    now: float | None = None,
) -> RiskVerdict:
    """Convert one ordered finding set into a RiskVerdict.

    Score, tier and grade depend only on *findings* (and their order);
    *now* only stamps ``computed_at``.
    """
    score = score_findings(findings, policy, strict)
    points = risk_points(findings)
    return RiskVerdict(
        score=score,
        tier=risk_tier(points),
        grade=compliance_grade(score),
        policy=policy,
        risk_points=points,
        contributing_findings=tuple(f.id for f in _scoring(findings)),
        computed_at=time.time() if now is None else now,
    )


def aggregate_metrics(
    anomalies: Sequence[Finding],
    threats: Sequence[Finding],
    policy: AggregationPolicy = AggregationPolicy.NORMALIZED_AVERAGE,
    strict: bool = False,
    now: float | None = None,
) -> RiskVerdict:
    """Metrics-monitoring variant: anomalies first, then threats."""
    return aggregate([*anomalies, *threats], policy=policy, strict=strict, now=now)

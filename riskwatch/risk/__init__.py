"""Risk aggregation — scoring policies, tiers, grades and compliance reports."""

from riskwatch.risk.aggregator import (
    SEVERITY_WEIGHTS,
    aggregate,
    aggregate_metrics,
    compliance_grade,
    normalized_average_score,
    risk_points,
    risk_tier,
    score_findings,
    weighted_deduction_score,
)
from riskwatch.risk.report import ComplianceReport, compliance_report

__all__ = [
    "SEVERITY_WEIGHTS",
    "ComplianceReport",
    "aggregate",
    "aggregate_metrics",
    "compliance_grade",
    "compliance_report",
    "normalized_average_score",
    "risk_points",
    "risk_tier",
    "score_findings",
    "weighted_deduction_score",
]

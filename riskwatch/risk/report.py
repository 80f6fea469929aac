"""Compliance report summary built on top of the aggregator."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from pydantic import BaseModel, Field

from riskwatch.core.types import AggregationPolicy, Finding, RiskVerdict
from riskwatch.risk.aggregator import aggregate


class ComplianceReport(BaseModel):
    """Verdict plus finding breakdowns for compliance reporting."""

    verdict: RiskVerdict
    total_findings: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    by_severity: dict[str, int] = Field(default_factory=dict)
    by_locale: dict[str, int] = Field(default_factory=dict)


def compliance_report(
    findings: Sequence[Finding],
    policy: AggregationPolicy = AggregationPolicy.WEIGHTED_DEDUCTION,
    strict: bool = False,
    now: float | None = None,
) -> ComplianceReport:
    """Summarise *findings* by category, severity and locale."""
    return ComplianceReport(
        verdict=aggregate(findings, policy=policy, strict=strict, now=now),
        total_findings=len(findings),
        by_category=dict(Counter(f.category.value for f in findings)),
        by_severity=dict(Counter(f.severity.value for f in findings)),
        by_locale=dict(Counter(f.locale for f in findings)),
    )

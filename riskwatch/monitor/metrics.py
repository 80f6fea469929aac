"""PipelineMetrics — running counts over analysis passes.

Aggregates:
- Findings per category and severity
- Notifications per status, kind and channel (plus delivery failures)
- Recommendations per status and priority
- Pass and warning totals
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from riskwatch.core.types import (
    Finding,
    Notification,
    PassWarning,
    Recommendation,
    RiskVerdict,
)


@dataclass
class VerdictSample:
    """Score and tier of one completed pass."""

    score: float
    tier: str
    grade: str
    computed_at: float


@dataclass
class PipelineMetrics:
    """Collects counters from pipeline passes.

    Usage::

        metrics = PipelineMetrics()
        pipeline = AnalysisPipeline(..., metrics=metrics)

        # Query at any time:
        summary = metrics.summary()
    """

    max_verdict_samples: int = 1_000
    passes: int = 0
    findings_by_category: Counter[str] = field(default_factory=Counter)
    findings_by_severity: Counter[str] = field(default_factory=Counter)
    notifications_by_status: Counter[str] = field(default_factory=Counter)
    notifications_by_kind: Counter[str] = field(default_factory=Counter)
    notifications_by_channel: Counter[str] = field(default_factory=Counter)
    undelivered: int = 0
    recommendations_by_status: Counter[str] = field(default_factory=Counter)
    recommendations_by_priority: Counter[str] = field(default_factory=Counter)
    warnings_by_component: Counter[str] = field(default_factory=Counter)
    verdicts: list[VerdictSample] = field(default_factory=list)

    def record_findings(self, findings: Iterable[Finding]) -> None:
        for f in findings:
            self.findings_by_category[f.category.value] += 1
            self.findings_by_severity[f.severity.value] += 1

    def record_notifications(self, notifications: Iterable[Notification]) -> None:
        for n in notifications:
            self.notifications_by_status[n.status.value] += 1
            self.notifications_by_kind[n.kind.value] += 1
            self.notifications_by_channel[n.channel.value] += 1
            if not n.delivered:
                self.undelivered += 1

    def record_recommendations(self, recommendations: Iterable[Recommendation]) -> None:
        for r in recommendations:
            self.recommendations_by_status[r.status.value] += 1
            self.recommendations_by_priority[r.priority.value] += 1

    def record_warnings(self, warnings: Iterable[PassWarning]) -> None:
        for w in warnings:
            self.warnings_by_component[w.component] += 1

    def record_verdict(self, verdict: RiskVerdict) -> None:
        self.passes += 1
        self.verdicts.append(VerdictSample(
            score=verdict.score,
            tier=verdict.tier.value,
            grade=verdict.grade.value,
            computed_at=verdict.computed_at,
        ))
        if len(self.verdicts) > self.max_verdict_samples:
            self.verdicts = self.verdicts[-self.max_verdict_samples:]

    @property
    def average_score(self) -> float:
        if not self.verdicts:
            return 100.0
        return sum(v.score for v in self.verdicts) / len(self.verdicts)

    def summary(self) -> dict[str, object]:
        """Plain-dict snapshot suitable for logging or JSON output."""
        return {
            "passes": self.passes,
            "average_score": round(self.average_score, 2),
            "findings_by_category": dict(self.findings_by_category),
            "findings_by_severity": dict(self.findings_by_severity),
            "notifications_by_status": dict(self.notifications_by_status),
            "notifications_by_kind": dict(self.notifications_by_kind),
            "notifications_by_channel": dict(self.notifications_by_channel),
            "undelivered": self.undelivered,
            "recommendations_by_status": dict(self.recommendations_by_status),
            "recommendations_by_priority": dict(self.recommendations_by_priority),
            "warnings_by_component": dict(self.warnings_by_component),
        }

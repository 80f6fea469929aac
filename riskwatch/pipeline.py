"""AnalysisPipeline — detector bank → aggregator → recommendations → alerts."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable, Sequence

import structlog
from pydantic import BaseModel, Field

from riskwatch.core.config import AggregationConfig, RecommendationsConfig
from riskwatch.core.types import (
    Finding,
    FindingKind,
    MetricSnapshot,
    Notification,
    NotificationPolicy,
    PassWarning,
    Recommendation,
    RiskVerdict,
    Unit,
)
from riskwatch.detectors.bank import DetectorBank
from riskwatch.monitor.dispatcher import AlertDispatcher
from riskwatch.monitor.metrics import PipelineMetrics
from riskwatch.recommend.generator import RecommendationGenerator
from riskwatch.risk.aggregator import aggregate, aggregate_metrics

logger = structlog.stdlib.get_logger()


class PassResult(BaseModel):
    """Everything one analysis pass produced, handed to persistence as-is."""

    unit_id: str
    findings: list[Finding] = Field(default_factory=list)
    verdict: RiskVerdict
    recommendations: list[Recommendation] = Field(default_factory=list)
    notifications: list[Notification] = Field(default_factory=list)
    warnings: list[PassWarning] = Field(default_factory=list)


class AnalysisPipeline:
    """Runs one unit of input through the whole risk pipeline.

    The pipeline holds no state between passes; detector registry, templates
    and recipient policies are passed in and treated as read-only.

    Partial failures (a detector, a draft, a channel) become warnings on the
    result. ``UnknownCategoryError`` propagates. Cancellation is logged and
    re-raised unchanged, so ``asyncio.timeout`` and ``Task.cancel`` behave as
    usual and no truncated result is ever returned.

    Usage::

        pipeline = AnalysisPipeline(bank, generator, dispatcher)
        result = await pipeline.run(communication, policies)
    """

    def __init__(
        self,
        bank: DetectorBank,
        generator: RecommendationGenerator,
        dispatcher: AlertDispatcher,
        aggregation: AggregationConfig | None = None,
        recommendations: RecommendationsConfig | None = None,
        metrics: PipelineMetrics | None = None,
    ) -> None:
        self._bank = bank
        self._generator = generator
        self._dispatcher = dispatcher
        self._aggregation = aggregation or AggregationConfig()
        self._recommendations = recommendations or RecommendationsConfig()
        self._metrics = metrics

    async def run(
        self,
        unit: Unit,
        policies: Sequence[NotificationPolicy],
        enabled: Iterable[str] | None = None,
    ) -> PassResult:
        """Analyze *unit*, score it, plan remediation and notify recipients."""
        started = time.monotonic()
        try:
            result = await self._run(unit, policies, enabled)
        except asyncio.CancelledError:
            logger.warning("analysis_cancelled", unit_id=unit.id)
            raise

        if self._metrics is not None:
            self._record(self._metrics, result)

        logger.info(
            "analysis_pass_complete",
            unit_id=unit.id,
            findings=len(result.findings),
            score=result.verdict.score,
            tier=result.verdict.tier.value,
            grade=result.verdict.grade.value,
            recommendations=len(result.recommendations),
            notifications=len(result.notifications),
            warnings=len(result.warnings),
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return result

    def score(self, unit: Unit, findings: Sequence[Finding]) -> RiskVerdict:
        """Aggregate with the policy configured for the unit's subsystem."""
        cfg = self._aggregation
        if isinstance(unit, MetricSnapshot):
            anomalies = [f for f in findings if f.kind == FindingKind.ANOMALY]
            threats = [f for f in findings if f.kind == FindingKind.THREAT]
            return aggregate_metrics(
                anomalies, threats, policy=cfg.metrics_policy, strict=cfg.strict
            )
        return aggregate(findings, policy=cfg.communication_policy, strict=cfg.strict)

    async def _run(
        self,
        unit: Unit,
        policies: Sequence[NotificationPolicy],
        enabled: Iterable[str] | None,
    ) -> PassResult:
        detection = await self._bank.analyze(unit, enabled)
        warnings = list(detection.warnings)
        findings = detection.findings

        verdict = self.score(unit, findings)

        recommendations: list[Recommendation] = []
        notifications: list[Notification] = []
        for finding in findings:
            rec = await self._generator.generate(finding, warnings=warnings)
            recommendations.append(rec)

            dispatched = await self._dispatcher.on_finding(finding, policies)
            notifications.extend(dispatched.notifications)
            warnings.extend(dispatched.warnings)

            if self._recommendations.announce:
                announced = await self._dispatcher.on_recommendation(
                    finding, rec, policies
                )
                notifications.extend(announced.notifications)
                warnings.extend(announced.warnings)

        return PassResult(
            unit_id=unit.id,
            findings=findings,
            verdict=verdict,
            recommendations=recommendations,
            notifications=notifications,
            warnings=warnings,
        )

    @staticmethod
    def _record(metrics: PipelineMetrics, result: PassResult) -> None:
        metrics.record_findings(result.findings)
        metrics.record_recommendations(result.recommendations)
        metrics.record_notifications(result.notifications)
        metrics.record_warnings(result.warnings)
        metrics.record_verdict(result.verdict)

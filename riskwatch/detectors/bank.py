"""DetectorBank — runs registered detectors against one unit of input."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence

import structlog
from pydantic import BaseModel, Field

from riskwatch.core.types import Finding, PassWarning, Unit
from riskwatch.detectors.base import Detector

logger = structlog.stdlib.get_logger()


class DetectionResult(BaseModel):
    """Findings in registration order plus any recovered detector failures."""

    findings: list[Finding] = Field(default_factory=list)
    warnings: list[PassWarning] = Field(default_factory=list)


class DetectorBank:
    """Fixed, ordered list of independent detectors.

    A failing detector contributes no finding and a warning; it never aborts
    the rest of the pass. Cancellation is not a failure and propagates.

    Usage::

        bank = DetectorBank([fraud, harassment, burnout])
        result = await bank.analyze(communication, enabled={"fraud"})
    """

    def __init__(self, detectors: Sequence[Detector], concurrent: bool = False) -> None:
        seen: set[str] = set()
        for detector in detectors:
            if detector.detector_id in seen:
                raise ValueError(f"Duplicate detector id: {detector.detector_id!r}")
            seen.add(detector.detector_id)
        self._detectors: tuple[Detector, ...] = tuple(detectors)
        self._concurrent = concurrent

    @property
    def detectors(self) -> tuple[Detector, ...]:
        return self._detectors

    @property
    def detector_ids(self) -> list[str]:
        return [d.detector_id for d in self._detectors]

    def select(self, unit: Unit, enabled: Iterable[str] | None = None) -> list[Detector]:
        """Detectors that are enabled and support *unit*, in registration order."""
        allowed = set(enabled) if enabled is not None else None
        return [
            d
            for d in self._detectors
            if (allowed is None or d.detector_id in allowed) and d.supports(unit)
        ]

    async def analyze(
        self,
        unit: Unit,
        enabled: Iterable[str] | None = None,
    ) -> DetectionResult:
        """Run every selected detector and collect non-null findings."""
        selected = self.select(unit, enabled)

        if self._concurrent:
            outcomes = await asyncio.gather(
                *(self._run_one(d, unit) for d in selected)
            )
        else:
            outcomes = [await self._run_one(d, unit) for d in selected]

        result = DetectionResult()
        for finding, warning in outcomes:
            if finding is not None:
                result.findings.append(finding)
            if warning is not None:
                result.warnings.append(warning)

        logger.info(
            "detection_pass_complete",
            unit_id=unit.id,
            detectors=len(selected),
            findings=len(result.findings),
            warnings=len(result.warnings),
        )
        return result

    async def _run_one(
        self,
        detector: Detector,
        unit: Unit,
    ) -> tuple[Finding | None, PassWarning | None]:
        try:
            return await detector.classify(unit), None
        except Exception as exc:
            logger.exception(
                "detector_failed",
                detector=detector.detector_id,
                unit_id=unit.id,
            )
            return None, PassWarning(
                component="detector_bank",
                source=detector.detector_id,
                message=f"{type(exc).__name__}: {exc}",
            )

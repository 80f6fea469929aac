"""Classifier-backed detectors for email and chat communications."""

from __future__ import annotations

import structlog

from riskwatch.classifier.classifier import Classifier
from riskwatch.classifier.prompts import CATEGORY_PROMPTS, CategoryPrompt
from riskwatch.core.types import Communication, Finding, ThreatCategory, Unit
from riskwatch.detectors.base import Detector
from riskwatch.detectors.locale import detect_locale

logger = structlog.stdlib.get_logger()

# Minimum confidence a classifier result needs to surface as a Finding.
DEFAULT_GATES: dict[ThreatCategory, float] = {
    ThreatCategory.FRAUD: 0.6,
    ThreatCategory.HARASSMENT: 0.7,
    ThreatCategory.BURNOUT: 0.6,
    ThreatCategory.INFO_LEAKAGE: 0.7,
    ThreatCategory.DISSATISFACTION: 0.6,
}

# (category, detector id, finding title) in registration order.
COMMUNICATION_DETECTORS: tuple[tuple[ThreatCategory, str, str], ...] = (
    (ThreatCategory.FRAUD, "fraud", "Potential Fraud Detected"),
    (ThreatCategory.HARASSMENT, "harassment", "Potential Harassment Detected"),
    (ThreatCategory.BURNOUT, "burnout", "Employee Burnout Indicators"),
    (ThreatCategory.INFO_LEAKAGE, "information_leakage", "Potential Information Leakage"),
    (ThreatCategory.DISSATISFACTION, "dissatisfaction", "Employee Dissatisfaction Detected"),
)


class ClassifierDetector(Detector):
    """Runs one category prompt through the classifier and gates the result.

    Classifier errors propagate to the DetectorBank, which records them as
    warnings and carries on with the remaining detectors.
    """

    def __init__(
        self,
        detector_id: str,
        category: ThreatCategory,
        classifier: Classifier,
        title: str,
        gate: float,
        prompt: CategoryPrompt | None = None,
    ) -> None:
        super().__init__(detector_id, category)
        self._classifier = classifier
        self._title = title
        self._gate = gate
        self._prompt = prompt or CATEGORY_PROMPTS[category]

    @property
    def gate(self) -> float:
        return self._gate

    def supports(self, unit: Unit) -> bool:
        return isinstance(unit, Communication)

    async def classify(self, unit: Unit) -> Finding | None:
        if not isinstance(unit, Communication):
            return None

        locale = unit.locale or detect_locale(unit.content)
        instructions = f"{self._prompt.instructions()}\nLanguage: {locale}"
        result = await self._classifier.classify(
            instructions, unit.content, persona=self._prompt.persona
        )

        if not result.flagged:
            return None
        # Inclusive gate: a result at exactly the gate is kept.
        if result.confidence < self._gate:
            logger.debug(
                "finding_gated",
                detector=self.detector_id,
                confidence=result.confidence,
                gate=self._gate,
            )
            return None

        return Finding(
            unit_id=unit.id,
            detector_id=self.detector_id,
            category=self.category,
            severity=result.severity,
            confidence=result.confidence,
            title=self._title,
            description=result.explanation,
            evidence=tuple(result.evidence),
            affected_entity_ids=frozenset(unit.participants),
            locale=locale,
            metadata={
                "channel_kind": unit.channel_kind.value,
                "source_id": unit.source_id,
                "context": dict(unit.context),
            },
        )


def build_communication_detectors(
    classifier: Classifier,
    gates: dict[ThreatCategory, float] | None = None,
) -> list[ClassifierDetector]:
    """Create the five communication detectors in registration order."""
    merged = {**DEFAULT_GATES, **(gates or {})}
    return [
        ClassifierDetector(
            detector_id=detector_id,
            category=category,
            classifier=classifier,
            title=title,
            gate=merged[category],
        )
        for category, detector_id, title in COMMUNICATION_DETECTORS
    ]

"""Convenience factory for wiring the default detector bank."""

from __future__ import annotations

from riskwatch.classifier.classifier import Classifier
from riskwatch.core.config import DetectorsConfig
from riskwatch.detectors.bank import DetectorBank
from riskwatch.detectors.base import Detector
from riskwatch.detectors.communication import build_communication_detectors
from riskwatch.detectors.metrics import MetricRuleDetector


def build_detector_bank(
    classifier: Classifier | None,
    config: DetectorsConfig,
) -> DetectorBank:
    """Build a bank of communication detectors followed by metric rules.

    Communication detectors are only registered when a classifier is given;
    disabled metric rules are skipped.
    """
    detectors: list[Detector] = []

    if classifier is not None:
        detectors.extend(
            build_communication_detectors(classifier, config.confidence_gates)
        )

    for rule in config.metric_rules:
        if rule.enabled:
            detectors.append(MetricRuleDetector(rule))

    return DetectorBank(detectors, concurrent=config.concurrent)

"""Detector bank — locale tagging, communication and metric detectors."""

from riskwatch.detectors.bank import DetectionResult, DetectorBank
from riskwatch.detectors.base import Detector
from riskwatch.detectors.communication import (
    DEFAULT_GATES,
    ClassifierDetector,
    build_communication_detectors,
)
from riskwatch.detectors.factory import build_detector_bank
from riskwatch.detectors.locale import DEFAULT_LOCALE, detect_locale
from riskwatch.detectors.metrics import MetricRuleDetector, evaluate_condition

__all__ = [
    "DEFAULT_GATES",
    "DEFAULT_LOCALE",
    "ClassifierDetector",
    "DetectionResult",
    "Detector",
    "DetectorBank",
    "MetricRuleDetector",
    "build_communication_detectors",
    "build_detector_bank",
    "detect_locale",
    "evaluate_condition",
]

"""Pure functions that convert findings into AlertMessage objects."""

from __future__ import annotations

from riskwatch.core.types import AlertKind, Finding, Recommendation, Severity
from riskwatch.monitor.types import AlertMessage


def _label(finding: Finding) -> str:
    return finding.category.value.lower().replace("_", " ")


def _fields(finding: Finding) -> dict[str, str]:
    return {
        "category": finding.category.value,
        "severity": finding.severity.value,
        "confidence": f"{finding.confidence:.2f}",
        "detector": finding.detector_id,
    }


def format_threat_detected(finding: Finding) -> AlertMessage:
    """A new finding was produced."""
    return AlertMessage(
        kind=AlertKind.THREAT_DETECTED,
        severity=finding.severity,
        finding_id=finding.id,
        title=f"New {finding.category.value} Threat Detected",
        message=(
            f"A {finding.severity.value.lower()} severity {_label(finding)}"
            f" threat has been detected: {finding.title}"
        ),
        fields=_fields(finding),
    )


def format_severity_change(finding: Finding, old_severity: Severity) -> AlertMessage:
    """A finding was re-rated; *finding* carries the new severity."""
    fields = _fields(finding)
    fields["old_severity"] = old_severity.value
    return AlertMessage(
        kind=AlertKind.SEVERITY_CHANGE,
        severity=finding.severity,
        finding_id=finding.id,
        title="Threat Severity Changed",
        message=(
            f"Threat severity has changed from {old_severity.value}"
            f" to {finding.severity.value}: {finding.title}"
        ),
        fields=fields,
    )


def format_recommendation_available(
    finding: Finding,
    recommendation: Recommendation,
) -> AlertMessage:
    """A recommendation was generated for *finding*."""
    fields = _fields(finding)
    fields["recommendation"] = recommendation.title
    fields["priority"] = recommendation.priority.value
    return AlertMessage(
        kind=AlertKind.RECOMMENDATION_AVAILABLE,
        severity=finding.severity,
        finding_id=finding.id,
        title="New Recommendations Available",
        message=f"New recommendations are available for the threat: {finding.title}",
        fields=fields,
    )

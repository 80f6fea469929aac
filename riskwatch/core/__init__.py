"""Core module — config, types, logging."""

from riskwatch.core.config import Settings, get_settings, load_settings, reset_settings
from riskwatch.core.logging import setup_logging
from riskwatch.core.types import (
    Channel,
    Communication,
    Finding,
    MetricSnapshot,
    Notification,
    NotificationPolicy,
    Recommendation,
    RiskTier,
    RiskVerdict,
    Severity,
    ThreatCategory,
)

__all__ = [
    "Channel",
    "Communication",
    "Finding",
    "MetricSnapshot",
    "Notification",
    "NotificationPolicy",
    "Recommendation",
    "RiskTier",
    "RiskVerdict",
    "Settings",
    "Severity",
    "ThreatCategory",
    "get_settings",
    "load_settings",
    "reset_settings",
    "setup_logging",
]

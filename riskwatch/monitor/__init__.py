"""Alerting subsystem — delivery channels, formatting, dispatch and metrics."""

from riskwatch.monitor.channels import (
    DeliveryChannel,
    EmailChannel,
    InAppChannel,
    PushChannel,
    SmsChannel,
)
from riskwatch.monitor.dispatcher import AlertDispatcher, passes_threshold
from riskwatch.monitor.exceptions import AlertError, DeliveryError, InvalidPolicyError
from riskwatch.monitor.factory import create_alert_stack
from riskwatch.monitor.formatters import (
    format_recommendation_available,
    format_severity_change,
    format_threat_detected,
)
from riskwatch.monitor.metrics import PipelineMetrics
from riskwatch.monitor.notifications import mark_read, unread_count
from riskwatch.monitor.types import AlertMessage, DispatchResult

__all__ = [
    "AlertDispatcher",
    "AlertError",
    "AlertMessage",
    "DeliveryChannel",
    "DeliveryError",
    "DispatchResult",
    "EmailChannel",
    "InAppChannel",
    "InvalidPolicyError",
    "PipelineMetrics",
    "PushChannel",
    "SmsChannel",
    "create_alert_stack",
    "format_recommendation_available",
    "format_severity_change",
    "format_threat_detected",
    "mark_read",
    "passes_threshold",
    "unread_count",
]

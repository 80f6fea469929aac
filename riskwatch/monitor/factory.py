"""Convenience factory for wiring the alerting stack."""

from __future__ import annotations

from riskwatch.core.config import AlertsConfig
from riskwatch.monitor.channels import (
    DeliveryChannel,
    EmailChannel,
    InAppChannel,
    PushChannel,
    SmsChannel,
)
from riskwatch.monitor.dispatcher import AlertDispatcher


def create_alert_stack(config: AlertsConfig) -> AlertDispatcher:
    """Build a dispatcher with every channel enabled in *config*."""
    channels: list[DeliveryChannel] = []

    if config.email.enabled:
        channels.append(EmailChannel(config.email))

    if config.push.enabled:
        channels.append(PushChannel(config.push))

    if config.sms.enabled:
        channels.append(SmsChannel(config.sms))

    if config.in_app:
        channels.append(InAppChannel())

    return AlertDispatcher(channels=channels)

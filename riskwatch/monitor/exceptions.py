"""Alerting exceptions."""

from __future__ import annotations


class AlertError(Exception):
    """Base exception for alert dispatch errors."""


class DeliveryError(AlertError):
    """A channel could not deliver a notification."""


class InvalidPolicyError(AlertError):
    """A recipient policy has no actionable channel enabled."""

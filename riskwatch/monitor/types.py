"""Domain types for the alerting subsystem."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from riskwatch.core.types import AlertKind, Notification, PassWarning, Severity


class AlertMessage(BaseModel):
    """Formatted alert ready for fan-out to recipients and channels."""

    kind: AlertKind
    severity: Severity
    finding_id: str
    title: str
    message: str = ""
    fields: dict[str, str] = Field(default_factory=dict)
    timestamp: float = Field(default_factory=time.time)


class DispatchResult(BaseModel):
    """Notifications created for one alert plus recovered failures."""

    notifications: list[Notification] = Field(default_factory=list)
    warnings: list[PassWarning] = Field(default_factory=list)
    suppressed: list[str] = Field(default_factory=list)

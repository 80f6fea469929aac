"""Central alert dispatcher — per-recipient severity gating and channel fan-out."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from riskwatch.core.logging import DECISION_LOGGER_NAME
from riskwatch.core.types import (
    Channel,
    Finding,
    Notification,
    NotificationPolicy,
    PassWarning,
    Recommendation,
    Severity,
    severity_rank,
)
from riskwatch.monitor.channels import DeliveryChannel
from riskwatch.monitor.exceptions import DeliveryError, InvalidPolicyError
from riskwatch.monitor.formatters import (
    format_recommendation_available,
    format_severity_change,
    format_threat_detected,
)
from riskwatch.monitor.types import AlertMessage, DispatchResult

# Dedicated structured logger for decision records.
decision_logger = structlog.get_logger(DECISION_LOGGER_NAME)

logger = structlog.get_logger(__name__)


def passes_threshold(severity: Severity, policy: NotificationPolicy) -> bool:
    """Whether an alert of *severity* reaches the recipient's minimum."""
    return severity_rank(severity) >= severity_rank(policy.minimum_severity)


class AlertDispatcher:
    """Routes alerts to recipients according to their notification policies.

    - Every (alert, recipient) decision is logged via *decision_logger*.
    - Below-threshold alerts are suppressed with no Notification record.
    - A recipient with no enabled channel is skipped with a warning.
    - One Notification is recorded per enabled channel; a delivery failure
      marks it undelivered and never stops other channels or recipients.
    - No deduplication: dispatching the same finding twice notifies twice.
    """

    def __init__(self, channels: Iterable[DeliveryChannel] | None = None) -> None:
        self._channels: dict[Channel, DeliveryChannel] = {}
        for ch in channels or []:
            self._channels[ch.channel] = ch

    @property
    def channels(self) -> dict[Channel, DeliveryChannel]:
        return dict(self._channels)

    # ── Entry points ────────────────────────────────────────────

    async def on_finding(
        self,
        finding: Finding,
        policies: Sequence[NotificationPolicy],
    ) -> DispatchResult:
        return await self.dispatch(format_threat_detected(finding), policies)

    async def on_severity_change(
        self,
        finding: Finding,
        old_severity: Severity,
        policies: Sequence[NotificationPolicy],
    ) -> DispatchResult:
        return await self.dispatch(format_severity_change(finding, old_severity), policies)

    async def on_recommendation(
        self,
        finding: Finding,
        recommendation: Recommendation,
        policies: Sequence[NotificationPolicy],
    ) -> DispatchResult:
        msg = format_recommendation_available(finding, recommendation)
        return await self.dispatch(msg, policies)

    # ── Internal routing ────────────────────────────────────────

    async def dispatch(
        self,
        msg: AlertMessage,
        policies: Sequence[NotificationPolicy],
    ) -> DispatchResult:
        """Fan *msg* out to every recipient whose policy admits it."""
        result = DispatchResult()
        for policy in policies:
            try:
                await self._dispatch_recipient(msg, policy, result)
            except InvalidPolicyError as exc:
                logger.warning(
                    "recipient_skipped",
                    recipient_id=policy.recipient_id,
                    reason=str(exc),
                )
                result.warnings.append(PassWarning(
                    component="alert_dispatcher",
                    source=policy.recipient_id,
                    message=f"InvalidPolicyError: {exc}",
                ))
            except Exception as exc:
                logger.exception(
                    "recipient_dispatch_error",
                    recipient_id=policy.recipient_id,
                    finding_id=msg.finding_id,
                )
                result.warnings.append(PassWarning(
                    component="alert_dispatcher",
                    source=policy.recipient_id,
                    message=f"{type(exc).__name__}: {exc}",
                ))
        return result

    async def _dispatch_recipient(
        self,
        msg: AlertMessage,
        policy: NotificationPolicy,
        result: DispatchResult,
    ) -> None:
        if not passes_threshold(msg.severity, policy):
            self._log_decision(msg, policy, [], suppressed=True)
            result.suppressed.append(policy.recipient_id)
            return

        enabled = policy.enabled_channels()
        if not enabled:
            self._log_decision(msg, policy, [], suppressed=True)
            raise InvalidPolicyError(
                f"recipient {policy.recipient_id} has no channel enabled"
            )

        self._log_decision(msg, policy, enabled, suppressed=False)
        for channel in enabled:
            delivered = False
            try:
                delivered = await self._deliver(channel, policy.recipient_id, msg)
            except DeliveryError as exc:
                logger.warning(
                    "delivery_failed",
                    channel=channel.value,
                    recipient_id=policy.recipient_id,
                    reason=str(exc),
                )
                result.warnings.append(PassWarning(
                    component="alert_dispatcher",
                    source=f"{policy.recipient_id}:{channel.value}",
                    message=f"DeliveryError: {exc}",
                ))
            result.notifications.append(Notification(
                recipient_id=policy.recipient_id,
                finding_id=msg.finding_id,
                channel=channel,
                kind=msg.kind,
                title=msg.title,
                message=msg.message,
                delivered=delivered,
            ))

    async def _deliver(self, channel: Channel, recipient_id: str, msg: AlertMessage) -> bool:
        """Send through one channel; any failure surfaces as DeliveryError."""
        ch = self._channels.get(channel)
        if ch is None:
            raise DeliveryError(f"no delivery channel configured for {channel.value}")
        try:
            ok = await ch.send(recipient_id, msg.title, msg.message)
        except Exception as exc:
            logger.exception(
                "channel_dispatch_error",
                channel=type(ch).__name__,
                title=msg.title,
            )
            raise DeliveryError(f"{channel.value} delivery raised: {exc}") from exc
        if not ok:
            raise DeliveryError(f"{channel.value} delivery was rejected")
        return True

    def _log_decision(
        self,
        msg: AlertMessage,
        policy: NotificationPolicy,
        channels: list[Channel],
        suppressed: bool,
    ) -> None:
        decision_logger.info(
            "decision",
            kind=msg.kind.value,
            severity=msg.severity.value,
            finding_id=msg.finding_id,
            recipient_id=policy.recipient_id,
            minimum_severity=policy.minimum_severity.value,
            channels=[c.value for c in channels],
            suppressed=suppressed,
            fields=msg.fields,
        )

    # ── Lifecycle ───────────────────────────────────────────────

    async def close(self) -> None:
        for ch in self._channels.values():
            try:
                await ch.close()
            except Exception:
                logger.exception("channel_close_error", channel=type(ch).__name__)

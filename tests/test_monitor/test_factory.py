"""Tests for the alerting factory — wiring logic with various config combinations."""

from __future__ import annotations

from riskwatch.core.config import AlertsConfig, GatewayConfig
from riskwatch.core.types import Channel
from riskwatch.monitor.channels import EmailChannel, InAppChannel, PushChannel, SmsChannel
from riskwatch.monitor.dispatcher import AlertDispatcher
from riskwatch.monitor.factory import create_alert_stack


# ── Helpers ─────────────────────────────────────────────────────


def _alerts(**kw: object) -> AlertsConfig:
    defaults: dict[str, object] = {}
    defaults.update(kw)
    return AlertsConfig(**defaults)  # type: ignore[arg-type]


def _gateway() -> GatewayConfig:
    return GatewayConfig(enabled=True, endpoint="https://gateway.test/send")


# ── Config Combinations ────────────────────────────────────────


class TestFactoryWiring:
    def test_defaults_only_in_app(self) -> None:
        disp = create_alert_stack(_alerts())
        assert isinstance(disp, AlertDispatcher)
        assert list(disp.channels) == [Channel.IN_APP]
        assert isinstance(disp.channels[Channel.IN_APP], InAppChannel)

    def test_nothing_enabled(self) -> None:
        disp = create_alert_stack(_alerts(in_app=False))
        assert disp.channels == {}

    def test_all_gateways_enabled(self) -> None:
        disp = create_alert_stack(
            _alerts(email=_gateway(), push=_gateway(), sms=_gateway())
        )
        chans = disp.channels
        assert isinstance(chans[Channel.EMAIL], EmailChannel)
        assert isinstance(chans[Channel.PUSH], PushChannel)
        assert isinstance(chans[Channel.SMS], SmsChannel)
        assert Channel.IN_APP in chans

    def test_disabled_gateway_skipped(self) -> None:
        disp = create_alert_stack(
            _alerts(email=_gateway(), sms=GatewayConfig(enabled=False))
        )
        assert Channel.EMAIL in disp.channels
        assert Channel.SMS not in disp.channels

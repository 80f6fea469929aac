"""Delivery channels — HTTP gateways for email, push and SMS, plus in-app."""

from __future__ import annotations

import abc
from collections import defaultdict

import aiohttp
import structlog

from riskwatch.core.config import GatewayConfig
from riskwatch.core.types import Channel

logger = structlog.get_logger(__name__)

_SMS_MAX_CHARS = 160


class DeliveryChannel(abc.ABC):
    """Base class for notification delivery channels."""

    channel: Channel

    @abc.abstractmethod
    async def send(self, recipient_id: str, title: str, message: str) -> bool:
        """Deliver one notification. Returns True on success."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release resources (HTTP sessions, etc.)."""


class GatewayChannel(DeliveryChannel):
    """Posts a JSON payload to a configured delivery gateway."""

    def __init__(self, config: GatewayConfig) -> None:
        self._endpoint = config.endpoint
        self._api_key = config.api_key.get_secret_value()
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_secs)
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            headers = {}
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._session = aiohttp.ClientSession(headers=headers, timeout=self._timeout)
        return self._session

    @abc.abstractmethod
    def _payload(self, recipient_id: str, title: str, message: str) -> dict[str, object]:
        """Gateway-specific request body."""

    async def send(self, recipient_id: str, title: str, message: str) -> bool:
        payload = self._payload(recipient_id, title, message)
        name = self.channel.value.lower()
        try:
            session = self._get_session()
            async with session.post(self._endpoint, json=payload) as resp:
                if resp.status in (200, 201, 202, 204):
                    return True
                body = await resp.text()
                logger.warning(
                    f"{name}_send_failed",
                    recipient_id=recipient_id,
                    status=resp.status,
                    body=body[:200],
                )
                return False
        except Exception:
            logger.exception(f"{name}_send_error", recipient_id=recipient_id)
            return False

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None


class EmailChannel(GatewayChannel):
    """Transactional email gateway."""

    channel = Channel.EMAIL

    def _payload(self, recipient_id: str, title: str, message: str) -> dict[str, object]:
        return {"to": recipient_id, "subject": title, "text": message}


class PushChannel(GatewayChannel):
    """Mobile / web push gateway."""

    channel = Channel.PUSH

    def _payload(self, recipient_id: str, title: str, message: str) -> dict[str, object]:
        return {
            "recipient": recipient_id,
            "notification": {"title": title, "body": message},
        }


class SmsChannel(GatewayChannel):
    """SMS gateway — title and message squeezed into one segment."""

    channel = Channel.SMS

    def _payload(self, recipient_id: str, title: str, message: str) -> dict[str, object]:
        text = f"{title}: {message}"
        if len(text) > _SMS_MAX_CHARS:
            text = text[: _SMS_MAX_CHARS - 1] + "…"
        return {"to": recipient_id, "body": text}


class InAppChannel(DeliveryChannel):
    """In-memory inbox; the persisted Notification is the in-app message."""

    channel = Channel.IN_APP

    def __init__(self) -> None:
        self._inbox: dict[str, list[tuple[str, str]]] = defaultdict(list)

    def inbox(self, recipient_id: str) -> list[tuple[str, str]]:
        return list(self._inbox.get(recipient_id, []))

    async def send(self, recipient_id: str, title: str, message: str) -> bool:
        self._inbox[recipient_id].append((title, message))
        return True

    async def close(self) -> None:
        self._inbox.clear()

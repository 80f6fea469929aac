"""Async chat-completions client — the transport behind classification and drafting."""

from __future__ import annotations

from types import TracebackType

import httpx
import structlog

from riskwatch.classifier.exceptions import (
    ClassifierUnavailableError,
    MalformedClassifierResponseError,
)
from riskwatch.core.config import ClassifierConfig, get_settings

logger = structlog.stdlib.get_logger()


class ChatClient:
    """Thin wrapper over an OpenAI-compatible ``/chat/completions`` endpoint.

    Usage::

        async with ChatClient(config) as chat:
            text = await chat.complete(system, prompt, temperature=0.3)
    """

    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self._config = config or get_settings().classifier
        self._http: httpx.AsyncClient | None = None

    @property
    def connected(self) -> bool:
        """Whether the HTTP client is active."""
        return self._http is not None and not self._http.is_closed

    async def connect(self) -> None:
        """Create the httpx async client."""
        headers = {"Content-Type": "application/json"}
        api_key = self._config.api_key.get_secret_value()
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._http = httpx.AsyncClient(
            base_url=self._config.base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(self._config.timeout_secs),
        )

    async def close(self) -> None:
        """Close the httpx async client."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def complete(self, system: str, prompt: str, temperature: float) -> str:
        """Send one system + user exchange and return the assistant text."""
        if self._http is None:
            await self.connect()
        http = self._http
        if http is None:
            raise ClassifierUnavailableError("HTTP client not connected")

        payload = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": temperature,
        }

        try:
            response = await http.post("/chat/completions", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ClassifierUnavailableError(
                f"classifier returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ClassifierUnavailableError(
                f"classifier request failed: {exc}"
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedClassifierResponseError(
                "classifier returned invalid JSON"
            ) from exc

        content = _extract_content(body)
        if content is None:
            logger.warning(
                "classifier_response_missing_content",
                keys=list(body.keys()) if isinstance(body, dict) else None,
            )
            raise MalformedClassifierResponseError(
                "classifier response has no message content"
            )
        return content

    async def __aenter__(self) -> ChatClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()


def _extract_content(body: object) -> str | None:
    """Pull ``choices[0].message.content`` out of a completions body."""
    if not isinstance(body, dict):
        return None
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None

"""Classifier contract and the chat-backed implementation."""

from __future__ import annotations

import abc
import json
import re

import structlog
from pydantic import BaseModel, Field, ValidationError

from riskwatch.classifier.client import ChatClient
from riskwatch.classifier.exceptions import MalformedClassifierResponseError
from riskwatch.classifier.prompts import RESPONSE_FORMAT, SYSTEM_SUFFIX
from riskwatch.core.types import Severity

logger = structlog.stdlib.get_logger()

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class ClassificationResult(BaseModel):
    """Structured answer from the classifier collaborator."""

    flagged: bool
    confidence: float = Field(ge=0.0, le=1.0)
    severity: Severity
    explanation: str = ""
    evidence: list[str] = Field(default_factory=list)


class Classifier(abc.ABC):
    """Black-box classifier: category instructions + content → result."""

    @abc.abstractmethod
    async def classify(
        self, instructions: str, content: str, persona: str | None = None
    ) -> ClassificationResult:
        """Classify *content* under *instructions*.

        *persona*, when given, replaces the classifier's default system persona.

        Raises:
            ClassifierUnavailableError: the collaborator could not be reached.
            MalformedClassifierResponseError: the answer broke the contract.
        """


def parse_json_object(text: str) -> dict[str, object]:
    """Decode a JSON object, tolerating a surrounding Markdown code fence."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        stripped = match.group(1)
    try:
        data = json.loads(stripped)
    except ValueError as exc:
        raise MalformedClassifierResponseError("response is not valid JSON") from exc
    if not isinstance(data, dict):
        raise MalformedClassifierResponseError("response is not a JSON object")
    return data


class LLMClassifier(Classifier):
    """Classifier that asks a chat-completions model and validates its JSON."""

    def __init__(
        self,
        chat: ChatClient,
        persona: str = "You are an expert compliance analyst.",
        temperature: float = 0.3,
    ) -> None:
        self._chat = chat
        self._persona = persona
        self._temperature = temperature

    async def classify(
        self, instructions: str, content: str, persona: str | None = None
    ) -> ClassificationResult:
        system = (persona or self._persona) + SYSTEM_SUFFIX
        prompt = (
            f"{instructions}\n\n"
            f'Communication: "{content}"\n\n'
            f"{RESPONSE_FORMAT}"
        )
        text = await self._chat.complete(system, prompt, self._temperature)
        data = parse_json_object(text)
        if isinstance(data.get("severity"), str):
            data["severity"] = str(data["severity"]).upper()
        try:
            return ClassificationResult.model_validate(data)
        except ValidationError as exc:
            logger.debug("classifier_validation_failed", errors=exc.error_count())
            raise MalformedClassifierResponseError(
                "response does not match the classification schema"
            ) from exc

"""Optional AI drafting of recommendation prose."""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError

from riskwatch.classifier.classifier import parse_json_object
from riskwatch.classifier.client import ChatClient
from riskwatch.classifier.exceptions import MalformedClassifierResponseError
from riskwatch.core.types import Finding
from riskwatch.recommend.templates import RecommendationTemplate

_SYSTEM = (
    "You are an expert in threat mitigation and organizational security."
    " Generate actionable recommendations and respond only with valid JSON."
)


class Draft(BaseModel):
    """Free-text description and steps returned by the drafter."""

    description: str = Field(min_length=1)
    steps: list[str] = Field(min_length=1)


class RecommendationDrafter:
    """Asks the chat collaborator to tailor a template to one finding."""

    def __init__(self, chat: ChatClient, temperature: float = 0.4) -> None:
        self._chat = chat
        self._temperature = temperature

    async def draft(
        self,
        finding: Finding,
        template: RecommendationTemplate,
        locale: str,
    ) -> Draft:
        """Return tailored prose; raises ClassifierError subclasses on failure."""
        steps = "\n".join(f"- {s}" for s in template.steps)
        prompt = (
            "Based on the following threat detection, generate actionable"
            " recommendations to address the issue.\n\n"
            f"Threat Type: {finding.category.value}\n"
            f"Severity: {finding.severity.value}\n"
            f"Description: {finding.description}\n"
            f"Confidence: {finding.confidence}\n"
            f"Language: {locale}\n\n"
            f"Start from this plan: {template.title}\n{steps}\n\n"
            "Respond with a JSON object containing:\n"
            "- description: string\n"
            "- steps: array of strings\n"
            f"Write the text in language '{locale}'."
        )
        text = await self._chat.complete(_SYSTEM, prompt, self._temperature)
        data = parse_json_object(text)
        try:
            return Draft.model_validate(data)
        except ValidationError as exc:
            raise MalformedClassifierResponseError(
                "draft does not match the recommendation schema"
            ) from exc

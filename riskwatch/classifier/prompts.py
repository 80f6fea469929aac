"""Category instruction prompts for communication classification."""

from __future__ import annotations

from dataclasses import dataclass

from riskwatch.core.types import ThreatCategory


@dataclass(frozen=True)
class CategoryPrompt:
    """Persona and indicator checklist for one threat category.

    The persona belongs in the system message; ``instructions`` renders only
    the focus and checklist for the user turn.
    """

    persona: str
    focus: str
    indicators: tuple[str, ...]

    def instructions(self) -> str:
        """Render the category-specific instruction block."""
        checklist = "\n".join(f"- {item}" for item in self.indicators)
        return (
            f"Analyze the following communication for {self.focus}.\n"
            f"Look for:\n{checklist}"
        )


CATEGORY_PROMPTS: dict[ThreatCategory, CategoryPrompt] = {
    ThreatCategory.FRAUD: CategoryPrompt(
        persona="You are an expert fraud detection AI.",
        focus="potential fraud indicators",
        indicators=(
            "Unusual transaction requests",
            "Pressure tactics or urgency",
            "Requests for sensitive information",
            "Suspicious links or attachments",
            "Impersonation attempts",
        ),
    ),
    ThreatCategory.HARASSMENT: CategoryPrompt(
        persona="You are an expert harassment detection AI.",
        focus="potential harassment or bullying",
        indicators=(
            "Inappropriate language or slurs",
            "Personal attacks or insults",
            "Threats or intimidation",
            "Discriminatory content",
            "Unwanted advances",
        ),
    ),
    ThreatCategory.BURNOUT: CategoryPrompt(
        persona="You are an expert in detecting employee burnout.",
        focus="potential employee burnout indicators",
        indicators=(
            "Expressions of exhaustion or overwhelm",
            "Negative sentiment about work",
            "Mention of excessive workload",
            "Signs of stress or anxiety",
            "Decreased engagement or motivation",
        ),
    ),
    ThreatCategory.INFO_LEAKAGE: CategoryPrompt(
        persona="You are an expert in detecting information leakage.",
        focus="potential information leakage",
        indicators=(
            "Sharing of sensitive company data",
            "Customer information being shared inappropriately",
            "Confidential business information",
            "Personal data of employees or clients",
            "Intellectual property being shared",
        ),
    ),
    ThreatCategory.DISSATISFACTION: CategoryPrompt(
        persona="You are an expert in detecting employee dissatisfaction.",
        focus="potential employee dissatisfaction",
        indicators=(
            "Negative sentiment about company or management",
            "Expressions of frustration or anger",
            "Mention of wanting to leave or quit",
            "Complaints about work environment",
            "Lack of engagement or enthusiasm",
        ),
    ),
}

RESPONSE_FORMAT = (
    "Respond only with a JSON object containing:\n"
    "- flagged: boolean\n"
    "- confidence: number (0-1)\n"
    '- severity: "LOW", "MEDIUM", "HIGH", or "CRITICAL"\n'
    "- explanation: string\n"
    "- evidence: array of strings"
)

SYSTEM_SUFFIX = " Analyze communications and respond only with valid JSON."

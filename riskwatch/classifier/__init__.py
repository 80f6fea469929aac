"""Language-model classifier collaborator — transport, prompts, contract."""

from riskwatch.classifier.classifier import (
    ClassificationResult,
    Classifier,
    LLMClassifier,
    parse_json_object,
)
from riskwatch.classifier.client import ChatClient
from riskwatch.classifier.exceptions import (
    ClassifierError,
    ClassifierUnavailableError,
    MalformedClassifierResponseError,
)
from riskwatch.classifier.prompts import CATEGORY_PROMPTS, CategoryPrompt

__all__ = [
    "CATEGORY_PROMPTS",
    "CategoryPrompt",
    "ChatClient",
    "ClassificationResult",
    "Classifier",
    "ClassifierError",
    "ClassifierUnavailableError",
    "LLMClassifier",
    "MalformedClassifierResponseError",
    "parse_json_object",
]

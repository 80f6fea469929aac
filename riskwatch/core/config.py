"""Pydantic settings loaded from YAML configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, SecretStr

from riskwatch.core.types import (
    AggregationPolicy,
    FindingKind,
    Severity,
    ThreatCategory,
)

_settings: Settings | None = None

_DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


class ClassifierConfig(BaseModel):
    """Chat-completions endpoint used for classification and drafting."""

    base_url: str = "https://api.openai.com/v1"
    api_key: SecretStr = SecretStr("")
    model: str = "gpt-4o-mini"
    timeout_secs: float = 30.0
    temperature: float = 0.3
    drafting_temperature: float = 0.4


class RuleConditionConfig(BaseModel):
    """One condition of a metric rule."""

    field: str
    operator: str = "greater_than"
    value: Any = None
    weight: float = Field(default=1.0, ge=0.0, le=1.0)


class MetricRuleConfig(BaseModel):
    """Threshold / analysis rule evaluated against metric snapshots."""

    id: str
    name: str
    description: str = ""
    category: ThreatCategory = ThreatCategory.CUSTOM_RULE
    kind: FindingKind = FindingKind.ANOMALY
    severity: Severity = Severity.MEDIUM
    enabled: bool = True
    conditions: list[RuleConditionConfig] = Field(default_factory=list)


def _default_metric_rules() -> list[MetricRuleConfig]:
    return [
        MetricRuleConfig(
            id="irregular_attendance",
            name="Irregular Attendance Pattern",
            description="Irregular clock-in/clock-out patterns detected",
            category=ThreatCategory.ATTENDANCE_ANOMALY,
            severity=Severity.MEDIUM,
            conditions=[
                RuleConditionConfig(
                    field="lateArrivals", operator="greater_than", value=3, weight=0.7
                ),
            ],
        ),
        MetricRuleConfig(
            id="excessive_sick_leave",
            name="Excessive Sick Leave",
            description="Excessive sick leave pattern detected",
            category=ThreatCategory.LEAVE_ANOMALY,
            severity=Severity.HIGH,
            conditions=[
                RuleConditionConfig(
                    field="sickDays", operator="greater_than", value=8, weight=0.8
                ),
            ],
        ),
        MetricRuleConfig(
            id="performance_decline",
            name="Performance Decline",
            description="Significant performance decline detected",
            category=ThreatCategory.PERFORMANCE_ANOMALY,
            severity=Severity.MEDIUM,
            conditions=[
                RuleConditionConfig(
                    field="performanceScore", operator="less_than", value=70, weight=0.9
                ),
            ],
        ),
    ]


class DetectorsConfig(BaseModel):
    """Detector bank configuration."""

    # Detector ids to run; None runs every registered detector.
    enabled: list[str] | None = None
    confidence_gates: dict[ThreatCategory, float] = {
        ThreatCategory.FRAUD: 0.6,
        ThreatCategory.HARASSMENT: 0.7,
        ThreatCategory.BURNOUT: 0.6,
        ThreatCategory.INFO_LEAKAGE: 0.7,
        ThreatCategory.DISSATISFACTION: 0.6,
    }
    concurrent: bool = False
    metric_rules: list[MetricRuleConfig] = Field(default_factory=_default_metric_rules)


class AggregationConfig(BaseModel):
    """Scoring policy per subsystem."""

    communication_policy: AggregationPolicy = AggregationPolicy.WEIGHTED_DEDUCTION
    metrics_policy: AggregationPolicy = AggregationPolicy.NORMALIZED_AVERAGE
    strict: bool = False


class RecommendationsConfig(BaseModel):
    """Recommendation generator configuration."""

    default_locale: str = "en"
    use_drafter: bool = False
    announce: bool = False


class GatewayConfig(BaseModel):
    """HTTP delivery gateway for one notification channel."""

    enabled: bool = False
    endpoint: str = ""
    api_key: SecretStr = SecretStr("")
    timeout_secs: float = 10.0


class AlertsConfig(BaseModel):
    """Notification channel configuration."""

    email: GatewayConfig = GatewayConfig()
    push: GatewayConfig = GatewayConfig()
    sms: GatewayConfig = GatewayConfig()
    in_app: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"
    decision_log_path: str | None = None


class Settings(BaseModel):
    """Root settings container."""

    classifier: ClassifierConfig = ClassifierConfig()
    detectors: DetectorsConfig = DetectorsConfig()
    aggregation: AggregationConfig = AggregationConfig()
    recommendations: RecommendationsConfig = RecommendationsConfig()
    alerts: AlertsConfig = AlertsConfig()
    logging: LoggingConfig = LoggingConfig()


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file and cache globally.

    Args:
        path: Path to YAML config. Defaults to config/settings.yaml.

    Returns:
        Parsed Settings instance.
    """
    global _settings  # noqa: PLW0603

    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if isinstance(raw, dict):
                data = raw

    _settings = Settings(**data)
    return _settings


def get_settings() -> Settings:
    """Return the cached settings, loading defaults if not yet loaded."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings  # noqa: PLW0603
    _settings = None

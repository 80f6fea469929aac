"""Tests for riskwatch/core/config.py — YAML loading, defaults, SecretStr."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from riskwatch.core.config import (
    AggregationConfig,
    ClassifierConfig,
    DetectorsConfig,
    GatewayConfig,
    LoggingConfig,
    Settings,
    get_settings,
    load_settings,
    reset_settings,
)
from riskwatch.core.types import AggregationPolicy, Severity, ThreatCategory


@pytest.fixture(autouse=True)
def _clean_settings() -> None:
    """Reset the global settings cache before each test."""
    reset_settings()


class TestDefaults:
    """Settings should have sensible defaults when no YAML is provided."""

    def test_default_classifier_config(self) -> None:
        cfg = ClassifierConfig()
        assert cfg.temperature == 0.3
        assert cfg.drafting_temperature == 0.4
        assert cfg.api_key.get_secret_value() == ""

    def test_all_detectors_enabled_by_default(self) -> None:
        assert DetectorsConfig().enabled is None

    def test_default_confidence_gates(self) -> None:
        gates = DetectorsConfig().confidence_gates
        assert gates[ThreatCategory.FRAUD] == 0.6
        assert gates[ThreatCategory.HARASSMENT] == 0.7
        assert gates[ThreatCategory.BURNOUT] == 0.6
        assert gates[ThreatCategory.INFO_LEAKAGE] == 0.7
        assert gates[ThreatCategory.DISSATISFACTION] == 0.6

    def test_default_metric_rules(self) -> None:
        rules = {r.id: r for r in DetectorsConfig().metric_rules}
        assert set(rules) == {
            "irregular_attendance",
            "excessive_sick_leave",
            "performance_decline",
        }
        assert rules["excessive_sick_leave"].severity == Severity.HIGH
        assert rules["irregular_attendance"].conditions[0].value == 3

    def test_default_aggregation(self) -> None:
        cfg = AggregationConfig()
        assert cfg.communication_policy == AggregationPolicy.WEIGHTED_DEDUCTION
        assert cfg.metrics_policy == AggregationPolicy.NORMALIZED_AVERAGE
        assert cfg.strict is False

    def test_default_logging_config(self) -> None:
        cfg = LoggingConfig()
        assert cfg.level == "INFO"
        assert cfg.format == "json"

    def test_default_settings(self) -> None:
        s = Settings()
        assert s.recommendations.default_locale == "en"
        assert s.alerts.in_app is True
        assert s.alerts.email.enabled is False


class TestYamlLoading:
    """Settings should load correctly from YAML files."""

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        config_data = {
            "classifier": {"api_key": "sk-test", "model": "local-model"},
            "detectors": {
                "concurrent": True,
                "confidence_gates": {"FRAUD": 0.8},
            },
            "aggregation": {"communication_policy": "normalized_average", "strict": True},
            "alerts": {"email": {"enabled": True, "endpoint": "https://mail.test/send"}},
            "logging": {"level": "DEBUG", "format": "console"},
        }
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(config_data))

        settings = load_settings(config_file)

        assert settings.classifier.api_key.get_secret_value() == "sk-test"
        assert settings.classifier.model == "local-model"
        assert settings.detectors.concurrent is True
        assert settings.detectors.confidence_gates == {ThreatCategory.FRAUD: 0.8}
        assert settings.aggregation.communication_policy == (
            AggregationPolicy.NORMALIZED_AVERAGE
        )
        assert settings.aggregation.strict is True
        assert settings.alerts.email.enabled is True
        assert settings.logging.level == "DEBUG"

    def test_load_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.classifier.temperature == 0.3

    def test_load_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        settings = load_settings(config_file)
        assert settings.recommendations.default_locale == "en"

    def test_partial_yaml_merges_with_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump({"recommendations": {"default_locale": "es"}}))

        settings = load_settings(config_file)
        assert settings.recommendations.default_locale == "es"
        assert settings.recommendations.announce is False
        assert settings.classifier.temperature == 0.3

    def test_get_settings_caches(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump({"logging": {"level": "WARNING"}}))
        loaded = load_settings(config_file)
        assert get_settings() is loaded


class TestSecretStr:
    """Sensitive fields should use SecretStr to prevent leaking."""

    def test_secret_str_repr_does_not_leak(self) -> None:
        cfg = GatewayConfig(api_key="super-secret")  # type: ignore[arg-type]
        assert "super-secret" not in repr(cfg)
        assert "**********" in repr(cfg)

    def test_classifier_key_hidden(self) -> None:
        cfg = ClassifierConfig(api_key="sk-abc")  # type: ignore[arg-type]
        assert "sk-abc" not in repr(cfg)
        assert cfg.api_key.get_secret_value() == "sk-abc"

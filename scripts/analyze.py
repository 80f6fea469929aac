#!/usr/bin/env python3
"""Run one analysis pass over a communication or metric snapshot.

Usage::

    # Analyze a communication with recipient policies
    python scripts/analyze.py --unit message.json --policies recipients.yaml

    # Metric snapshot, console logs, only the attendance rule
    python scripts/analyze.py --unit snapshot.json --policies recipients.yaml \\
        --enable irregular_attendance --log-format console

The unit file holds one JSON object: a communication (``content`` key) or a
metric snapshot (``entity_id`` + ``metrics`` keys). The policies file is a
YAML or JSON list of notification policies.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from riskwatch.classifier.classifier import LLMClassifier
from riskwatch.classifier.client import ChatClient
from riskwatch.core.config import load_settings
from riskwatch.core.logging import setup_logging
from riskwatch.core.types import Communication, MetricSnapshot, NotificationPolicy, Unit
from riskwatch.detectors.factory import build_detector_bank
from riskwatch.monitor.factory import create_alert_stack
from riskwatch.monitor.metrics import PipelineMetrics
from riskwatch.pipeline import AnalysisPipeline
from riskwatch.recommend.drafter import RecommendationDrafter
from riskwatch.recommend.generator import RecommendationGenerator

logger = structlog.get_logger(__name__)


def load_unit(path: Path) -> Unit:
    """Parse a unit of input from a JSON file."""
    data: dict[str, Any] = json.loads(path.read_text())
    if "content" in data:
        return Communication.model_validate(data)
    return MetricSnapshot.model_validate(data)


def load_policies(path: Path | None) -> list[NotificationPolicy]:
    """Parse recipient notification policies from YAML (or JSON)."""
    if path is None:
        return []
    raw = yaml.safe_load(path.read_text()) or []
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a list of policies")
    return [NotificationPolicy.model_validate(item) for item in raw]


async def run(args: argparse.Namespace) -> int:
    """Wire components from settings and run one pass."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level, fmt=args.log_format)

    try:
        unit = load_unit(args.unit)
        policies = load_policies(args.policies)
    except (OSError, ValueError, ValidationError) as exc:
        logger.error("input_invalid", error=str(exc))
        return 2

    chat = ChatClient(settings.classifier)
    classifier = LLMClassifier(chat, temperature=settings.classifier.temperature)
    bank = build_detector_bank(classifier, settings.detectors)

    drafter = None
    if settings.recommendations.use_drafter:
        drafter = RecommendationDrafter(
            chat, temperature=settings.classifier.drafting_temperature
        )
    generator = RecommendationGenerator(
        default_locale=settings.recommendations.default_locale,
        drafter=drafter,
    )

    dispatcher = create_alert_stack(settings.alerts)
    metrics = PipelineMetrics()
    pipeline = AnalysisPipeline(
        bank=bank,
        generator=generator,
        dispatcher=dispatcher,
        aggregation=settings.aggregation,
        recommendations=settings.recommendations,
        metrics=metrics,
    )

    enabled = args.enable or settings.detectors.enabled
    try:
        result = await pipeline.run(unit, policies, enabled=enabled)
    finally:
        await dispatcher.close()
        await chat.close()

    print(result.model_dump_json(indent=2))
    logger.info("metrics_summary", **metrics.summary())
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one riskwatch analysis pass")
    parser.add_argument("--unit", type=Path, required=True, help="Unit of input (JSON)")
    parser.add_argument("--policies", type=Path, default=None, help="Recipient policies")
    parser.add_argument("--config", default=None, help="Path to settings.yaml")
    parser.add_argument(
        "--enable",
        action="append",
        default=None,
        help="Detector id to enable (repeatable); defaults to settings",
    )
    parser.add_argument("--log-level", default=None, help="Log level override")
    parser.add_argument("--log-format", default=None, choices=["json", "console"])
    args = parser.parse_args()

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()

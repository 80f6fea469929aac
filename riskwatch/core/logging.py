"""Structured logging setup using structlog.

Two streams are configured:

- the application stream on stderr (JSON or console, per settings);
- the ``decision_log`` stream carrying one record per alert routing
  decision, optionally written as JSON lines to its own file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from riskwatch.core.config import get_settings

DECISION_LOGGER_NAME = "decision_log"

# Chatty client libraries, capped at WARNING unless DEBUG is requested.
_QUIET_LOGGERS = ("httpx", "httpcore", "aiohttp.access")


def _formatter(renderer: structlog.types.Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def _attach_decision_log(path: Path) -> None:
    """Send decision records to *path* as JSON lines, and nowhere else."""
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))

    decision_logger = logging.getLogger(DECISION_LOGGER_NAME)
    decision_logger.handlers.clear()
    decision_logger.addHandler(handler)
    decision_logger.setLevel(logging.INFO)
    decision_logger.propagate = False


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog with JSON or console renderer.

    Args:
        level: Log level override (e.g. "DEBUG"). Uses config if None.
        fmt: Renderer format override ("json" or "console"). Uses config if None.
    """
    settings = get_settings().logging
    log_level = getattr(logging, (level or settings.level).upper(), logging.INFO)
    log_format = fmt or settings.format

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(renderer))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if settings.decision_log_path:
        _attach_decision_log(Path(settings.decision_log_path))

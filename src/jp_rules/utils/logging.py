"""Structured logging setup (structlog)."""

from __future__ import annotations

import logging
import sys
from typing import Any, List, Optional

import structlog

from jp_rules.config.settings import LoggingSettings


def configure_logging(settings: Optional[LoggingSettings] = None, **overrides: Any) -> None:
    """
    Configure structlog from LoggingSettings.

    ``overrides`` replace individual settings fields (e.g. log_level="DEBUG").
    Output goes to stderr so stdout stays free for command results.
    """
    settings = settings or LoggingSettings()
    if overrides:
        settings = LoggingSettings.model_validate({**settings.model_dump(), **overrides})

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.log_format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, settings.log_level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

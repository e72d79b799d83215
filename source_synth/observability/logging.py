"""
Structured logging for source config synthesis.

JSON lines in production, colored console output elsewhere. Context bound
with ``log_context`` (e.g. a batch_id) is merged into every event logged
by the tasks running inside it, so the per-identifier events of one
``synthesize_batch`` call can be grouped in a log aggregator.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from source_synth.config.settings import get_settings

# Unparseable model output can run to several thousand characters
RAW_RESPONSE_LIMIT = 500

# Per-request INFO noise from the Ollama transport
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def truncate_raw_response(
    logger: WrappedLogger, method_name: str, event_dict: EventDict,
) -> EventDict:
    """Shorten the ``raw_response`` attached to generation failures."""
    raw = event_dict.get("raw_response")
    if isinstance(raw, str) and len(raw) > RAW_RESPONSE_LIMIT:
        event_dict["raw_response"] = f"{raw[:RAW_RESPONSE_LIMIT]}... ({len(raw)} chars)"
    return event_dict


def setup_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        log_level: Overrides ``Settings.log_level``.
        json_logs: Overrides the environment-based choice (JSON in production).

    Usage:
        setup_logging()
        synthesizer = SourceConfigSynthesizer(analyzer=html_analyzer)
    """
    settings = get_settings()
    level = log_level or settings.log_level
    if json_logs is None:
        json_logs = settings.is_production

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        truncate_raw_response,
    ]
    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (service modules bind identifier/platform on it)."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """
    Bind context variables for the duration of a block.

    Values that were bound before the block are restored on exit, so nesting
    a batch inside a caller's own request context does not wipe it.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield

"""Observability layer - structured logging."""

from source_synth.observability.logging import (
    get_logger,
    log_context,
    setup_logging,
    truncate_raw_response,
)

__all__ = ["get_logger", "log_context", "setup_logging", "truncate_raw_response"]

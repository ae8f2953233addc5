"""Public observability primitives: structured logging and correlation context."""

from fixture_foundry.observability.logging import (
    LoggingConfig,
    correlation_scope,
    get_correlation_context,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "LoggingConfig",
    "correlation_scope",
    "get_correlation_context",
    "setup_logging",
    "shutdown_logging",
]

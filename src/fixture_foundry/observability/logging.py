"""Structured logging setup for generation runs.

Library modules only ever call ``structlog.get_logger(__name__)``; nothing is
configured at import time. Applications (and test harnesses) opt in through
``setup_logging`` and undo it with ``shutdown_logging``.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Final

import structlog

from fixture_foundry.config.schema import LOG_FORMATS, GenerationConfig

_DEFAULT_LOG_FILENAME: Final[str] = "fixture_foundry.jsonl"

_ACTIVE_LOCK = threading.Lock()
_ACTIVE_SINK: IO[str] | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Configuration for structlog output."""

    level: int | str = "INFO"
    log_format: str = "json"
    log_dir: Path | str | None = None
    log_filename: str = _DEFAULT_LOG_FILENAME
    stream: IO[str] | None = None

    @classmethod
    def from_generation_config(
        cls, config: GenerationConfig, **overrides: Any
    ) -> LoggingConfig:
        return cls(level=config.log_level, log_format=config.log_format, **overrides)


def setup_logging(config: LoggingConfig | GenerationConfig | None = None) -> None:
    """Configure structlog globally; replaces any earlier setup."""
    if config is None:
        config = LoggingConfig()
    elif isinstance(config, GenerationConfig):
        config = LoggingConfig.from_generation_config(config)

    level = _parse_log_level(config.level)
    if config.log_format not in LOG_FORMATS:
        raise ValueError(f"unsupported log format {config.log_format!r}")

    shutdown_logging()
    sink = _open_sink(config)

    renderer: Any
    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(file=sink),
        cache_logger_on_first_use=False,
    )


def shutdown_logging() -> None:
    """Restore structlog defaults and close any file sink opened by ``setup_logging``."""
    global _ACTIVE_SINK
    with _ACTIVE_LOCK:
        sink, _ACTIVE_SINK = _ACTIVE_SINK, None
    structlog.reset_defaults()
    if sink is not None:
        sink.flush()
        sink.close()


def get_correlation_context() -> dict[str, Any]:
    """Return the fields currently bound to every log event in this context."""
    return dict(structlog.contextvars.get_contextvars())


@contextmanager
def correlation_scope(**fields: str | None) -> Iterator[None]:
    """Temporarily bind correlation fields for log events in scope.

    ``None`` values are ignored so callers can pass optional identifiers through.
    """
    bound: dict[str, str] = {}
    for key, value in fields.items():
        if value is None:
            continue
        key_name = key.strip()
        if not key_name:
            raise ValueError("correlation key must not be empty")
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"correlation value for {key_name!r} must be a non-empty string")
        bound[key_name] = value.strip()
    with structlog.contextvars.bound_contextvars(**bound):
        yield


def _open_sink(config: LoggingConfig) -> IO[str]:
    global _ACTIVE_SINK
    if config.log_dir is None:
        return config.stream if config.stream is not None else sys.stderr

    filename = config.log_filename.strip()
    if not filename or Path(filename).name != filename:
        raise ValueError("log_filename must be a bare file name")
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    sink = (log_dir / filename).open("a", encoding="utf-8")
    with _ACTIVE_LOCK:
        _ACTIVE_SINK = sink
    return sink


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    parsed = logging.getLevelName(value.strip().upper())
    if isinstance(parsed, int):
        return parsed
    raise ValueError(f"unsupported logging level {value!r}")


__all__ = [
    "LoggingConfig",
    "correlation_scope",
    "get_correlation_context",
    "setup_logging",
    "shutdown_logging",
]

"""Stable constants shared across compilation, generation, and assembly."""

from __future__ import annotations

from typing import Final

# Bounds of fixed-width signed integer representations.
INT8_MIN: Final[int] = -(2**7)
INT8_MAX: Final[int] = 2**7 - 1
INT16_MIN: Final[int] = -(2**15)
INT16_MAX: Final[int] = 2**15 - 1
INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# Upper bound used by ``Size`` when no maximum is declared.
SIZE_UNBOUNDED_MAX: Final[int] = INT32_MAX

# Forward/backward margins applied to "now" when temporal bounds are evaluated.
FUTURE_MARGIN_SECONDS: Final[int] = 3
FUTURE_OR_PRESENT_MARGIN_SECONDS: Final[int] = 2
PAST_MARGIN_SECONDS: Final[int] = 1

# Container size range used when no size is declared.
DEFAULT_CONTAINER_MIN_SIZE: Final[int] = 0
DEFAULT_CONTAINER_MAX_SIZE: Final[int] = 3

CONFIG_SCHEMA_VERSION: Final[int] = 1

__all__ = [
    "CONFIG_SCHEMA_VERSION",
    "DEFAULT_CONTAINER_MAX_SIZE",
    "DEFAULT_CONTAINER_MIN_SIZE",
    "FUTURE_MARGIN_SECONDS",
    "FUTURE_OR_PRESENT_MARGIN_SECONDS",
    "INT16_MAX",
    "INT16_MIN",
    "INT32_MAX",
    "INT32_MIN",
    "INT64_MAX",
    "INT64_MIN",
    "INT8_MAX",
    "INT8_MIN",
    "PAST_MARGIN_SECONDS",
    "SIZE_UNBOUNDED_MAX",
]

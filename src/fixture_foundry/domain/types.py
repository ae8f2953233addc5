"""Value kinds and fixed-width integer classification."""

from __future__ import annotations

from enum import Enum, StrEnum

from fixture_foundry import constants


class ValueKind(StrEnum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    CONTAINER = "container"
    TEMPORAL = "temporal"


class IntegerWidth(Enum):
    """Destination integer representation used for silent range clamping."""

    INT8 = (8, constants.INT8_MIN, constants.INT8_MAX)
    INT16 = (16, constants.INT16_MIN, constants.INT16_MAX)
    INT32 = (32, constants.INT32_MIN, constants.INT32_MAX)
    INT64 = (64, constants.INT64_MIN, constants.INT64_MAX)
    UNBOUNDED = (None, None, None)

    def __init__(self, bits: int | None, min_value: int | None, max_value: int | None) -> None:
        self.bits = bits
        self.min_value = min_value
        self.max_value = max_value

    @property
    def is_fixed(self) -> bool:
        return self.bits is not None

    @classmethod
    def for_bits(cls, bits: int | None) -> IntegerWidth:
        if bits is None:
            return cls.UNBOUNDED
        for member in cls:
            if member.bits == bits:
                return member
        raise ValueError(f"unsupported integer width: {bits} bits (expected 8, 16, 32 or 64)")


__all__ = ["IntegerWidth", "ValueKind"]

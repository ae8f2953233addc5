"""Integer-kind constraint compilation.

Bounds are kept in four independent slots, one closed sub-range per sign, and
updated in a fixed order:

1. ``Digits`` seeds symmetric magnitude bounds.
2. ``Min`` / ``DecimalMin`` merge into the lower slot of their sign.
3. ``Max`` / ``DecimalMax`` merge into the upper slot of their sign.
4. Sign-only constraints clamp, never loosen.
5. Fixed-width destinations narrow the result to their representable range.

All arithmetic is on Python ``int`` so declared bounds beyond 64 bits survive
until the width clamp.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal

from fixture_foundry.domain.constraints import (
    ConstraintSet,
    DecimalMax,
    DecimalMin,
    DeclaredConstraint,
    Digits,
    Max,
    Min,
    Negative,
    NegativeOrZero,
    Positive,
    PositiveOrZero,
    as_constraint_set,
)
from fixture_foundry.domain.envelopes import IntegerEnvelope
from fixture_foundry.domain.types import IntegerWidth


@dataclass(slots=True)
class _IntegerSlots:
    positive_min: int | None = None
    positive_max: int | None = None
    negative_min: int | None = None
    negative_max: int | None = None

    def merge_min(self, value: int) -> None:
        if value >= 0:
            self.positive_min = _merge(min, self.positive_min, value)
        else:
            self.negative_min = _merge(min, self.negative_min, value)

    def merge_max(self, value: int) -> None:
        if value > 0:
            self.positive_max = _merge(max, self.positive_max, value)
        else:
            self.negative_max = _merge(max, self.negative_max, value)

    def is_unset(self) -> bool:
        return (
            self.positive_min is None
            and self.positive_max is None
            and self.negative_min is None
            and self.negative_max is None
        )


def _merge(pick: Callable[[int, int], int], current: int | None, value: int) -> int:
    return value if current is None else pick(current, value)


def _lower_integer(value: Decimal, *, inclusive: bool) -> int:
    """Smallest integer admitted by a decimal lower bound."""
    if value == value.to_integral_value():
        return int(value) if inclusive else int(value) + 1
    return math.ceil(value)


def _upper_integer(value: Decimal, *, inclusive: bool) -> int:
    """Largest integer admitted by a decimal upper bound."""
    if value == value.to_integral_value():
        return int(value) if inclusive else int(value) - 1
    return math.floor(value)


def _clamp(value: int | None, lower: int, upper: int) -> int | None:
    if value is None:
        return None
    return max(lower, min(upper, value))


def compile_integer_constraint(
    constraints: ConstraintSet | Iterable[DeclaredConstraint],
    *,
    width: IntegerWidth = IntegerWidth.UNBOUNDED,
) -> IntegerEnvelope | None:
    """Merge integer constraints into an ``IntegerEnvelope``; ``None`` when none apply."""
    declared = as_constraint_set(constraints)
    slots = _IntegerSlots()

    digits = declared.find(Digits)
    if digits is not None and digits.integer_digits == 0:
        # No integer digits: zero is the only representable value.
        slots.positive_min = 0
        slots.positive_max = 0
    elif digits is not None:
        floor = 10 ** (digits.integer_digits - 1) if digits.integer_digits > 1 else 1
        slots.positive_min = floor
        slots.positive_max = 10**digits.integer_digits - 1
        slots.negative_max = -slots.positive_min
        slots.negative_min = -slots.positive_max

    minimum = declared.find(Min)
    if minimum is not None:
        slots.merge_min(minimum.value)

    decimal_min = declared.find(DecimalMin)
    if decimal_min is not None:
        slots.merge_min(_lower_integer(decimal_min.value, inclusive=decimal_min.inclusive))

    maximum = declared.find(Max)
    if maximum is not None:
        slots.merge_max(maximum.value)

    decimal_max = declared.find(DecimalMax)
    if decimal_max is not None:
        slots.merge_max(_upper_integer(decimal_max.value, inclusive=decimal_max.inclusive))

    if declared.has(Negative):
        if slots.negative_max is None or slots.negative_max >= 0:
            slots.negative_max = -1

    if declared.has(NegativeOrZero):
        if slots.negative_max is None or slots.negative_max >= 0:
            slots.negative_max = 0

    if declared.has(Positive):
        if slots.positive_min is None or slots.positive_min < 0:
            slots.positive_min = 1

    if declared.has(PositiveOrZero):
        if slots.positive_min is None or slots.positive_min < 0:
            slots.positive_min = 0

    lower, upper = width.min_value, width.max_value
    if lower is not None and upper is not None:
        slots.positive_min = _clamp(slots.positive_min, lower, upper)
        slots.positive_max = _clamp(slots.positive_max, lower, upper)
        slots.negative_min = _clamp(slots.negative_min, lower, upper)
        slots.negative_max = _clamp(slots.negative_max, lower, upper)

    if slots.is_unset():
        return None

    # Inverted sub-ranges collapse onto their upper bound.
    if (
        slots.positive_min is not None
        and slots.positive_max is not None
        and slots.positive_min > slots.positive_max
    ):
        slots.positive_min = slots.positive_max
    if (
        slots.negative_min is not None
        and slots.negative_max is not None
        and slots.negative_min > slots.negative_max
    ):
        slots.negative_min = slots.negative_max

    return IntegerEnvelope(
        positive_min=slots.positive_min,
        positive_max=slots.positive_max,
        negative_min=slots.negative_min,
        negative_max=slots.negative_max,
    )


__all__ = ["compile_integer_constraint"]

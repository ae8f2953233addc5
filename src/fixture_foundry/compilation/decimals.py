"""Decimal-kind constraint compilation.

Bounds are merged into a single ``[min, max]`` interval with explicit inclusivity
and then split by sign. A domain that straddles zero is partitioned into
``[0, max]`` and ``[min, 0)`` so the two sub-ranges never share a value.
"""

from __future__ import annotations

from collections.abc import Iterable
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
from fixture_foundry.domain.envelopes import DecimalEnvelope

_ZERO = Decimal(0)


@dataclass(slots=True)
class _Interval:
    min: Decimal | None = None
    min_inclusive: bool | None = None
    max: Decimal | None = None
    max_inclusive: bool | None = None

    def tighten_min(self, value: Decimal, *, inclusive: bool) -> None:
        if (
            self.min is None
            or value > self.min
            or (value == self.min and not inclusive)
        ):
            self.min = value
            self.min_inclusive = inclusive

    def tighten_max(self, value: Decimal, *, inclusive: bool) -> None:
        if (
            self.max is None
            or value < self.max
            or (value == self.max and not inclusive)
        ):
            self.max = value
            self.max_inclusive = inclusive


def digits_magnitude(integer_digits: int, fraction_digits: int) -> Decimal:
    """Largest magnitude with the given digit counts, e.g. ``(3, 2) -> 999.99``."""
    integer_part = "9" * integer_digits or "0"
    if fraction_digits > 0:
        return Decimal(f"{integer_part}.{'9' * fraction_digits}")
    return Decimal(integer_part)


def compile_decimal_constraint(
    constraints: ConstraintSet | Iterable[DeclaredConstraint],
) -> DecimalEnvelope | None:
    """Merge decimal constraints into a ``DecimalEnvelope``; ``None`` when none apply."""
    declared = as_constraint_set(constraints)
    interval = _Interval()
    scale: int | None = None

    minimum = declared.find(Min)
    if minimum is not None:
        interval.min = Decimal(minimum.value)
        interval.min_inclusive = True

    maximum = declared.find(Max)
    if maximum is not None:
        interval.max = Decimal(maximum.value)
        interval.max_inclusive = True

    decimal_min = declared.find(DecimalMin)
    if decimal_min is not None:
        interval.tighten_min(decimal_min.value, inclusive=decimal_min.inclusive)

    decimal_max = declared.find(DecimalMax)
    if decimal_max is not None:
        interval.tighten_max(decimal_max.value, inclusive=decimal_max.inclusive)

    if declared.has(Positive):
        if (
            interval.min is None
            or interval.min < _ZERO
            or (interval.min == _ZERO and interval.min_inclusive)
        ):
            interval.min = _ZERO
            interval.min_inclusive = False

    if declared.has(PositiveOrZero):
        if interval.min is None or interval.min < _ZERO:
            interval.min = _ZERO
            interval.min_inclusive = True

    if declared.has(Negative):
        if (
            interval.max is None
            or interval.max > _ZERO
            or (interval.max == _ZERO and interval.max_inclusive)
        ):
            interval.max = _ZERO
            interval.max_inclusive = False

    if declared.has(NegativeOrZero):
        if interval.max is None or interval.max > _ZERO:
            interval.max = _ZERO
            interval.max_inclusive = True

    digits = declared.find(Digits)
    if digits is not None:
        magnitude = digits_magnitude(digits.integer_digits, digits.fraction_digits)
        if interval.max is None or magnitude < interval.max:
            interval.max = magnitude
            interval.max_inclusive = True
        if interval.min is None or -magnitude > interval.min:
            interval.min = -magnitude
            interval.min_inclusive = True
        scale = digits.fraction_digits

    if interval.min is None and interval.max is None:
        return None

    if interval.min is not None and interval.max is not None and interval.min >= interval.max:
        # Inverted or single-point bounds collapse onto the closed point at max.
        interval.min = interval.max
        interval.min_inclusive = True
        interval.max_inclusive = True

    return _split_by_sign(interval, scale)


def _split_by_sign(interval: _Interval, scale: int | None) -> DecimalEnvelope:
    low, high = interval.min, interval.max
    negative_min = low is not None and low < _ZERO

    if high is not None and high == _ZERO:
        # Non-positive domain: only the negative side survives, capped at zero.
        return DecimalEnvelope(
            negative_min=low if negative_min else None,
            negative_min_inclusive=interval.min_inclusive if negative_min else None,
            negative_max=_ZERO,
            negative_max_inclusive=interval.max_inclusive,
            scale=scale,
        )

    if negative_min and high is not None and high > _ZERO:
        return DecimalEnvelope(
            positive_min=_ZERO,
            positive_min_inclusive=True,
            positive_max=high,
            positive_max_inclusive=interval.max_inclusive,
            negative_min=low,
            negative_min_inclusive=interval.min_inclusive,
            negative_max=_ZERO,
            negative_max_inclusive=False,
            scale=scale,
        )

    positive_min = low is not None and low >= _ZERO
    positive_max = high is not None and high >= _ZERO
    negative_max = high is not None and high < _ZERO
    return DecimalEnvelope(
        positive_min=low if positive_min else None,
        positive_min_inclusive=interval.min_inclusive if positive_min else None,
        positive_max=high if positive_max else None,
        positive_max_inclusive=interval.max_inclusive if positive_max else None,
        negative_min=low if negative_min else None,
        negative_min_inclusive=interval.min_inclusive if negative_min else None,
        negative_max=high if negative_max else None,
        negative_max_inclusive=interval.max_inclusive if negative_max else None,
        scale=scale,
    )


__all__ = ["compile_decimal_constraint", "digits_magnitude"]

"""Immutable generation envelopes, one per value kind.

An envelope is the compiled, internally consistent range/flag structure a value
generator must honor. Absent bounds mean "open on that side".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from fixture_foundry.domain.constraints import Pattern


@dataclass(frozen=True, slots=True)
class StringEnvelope:
    min_length: int | None = None
    max_length: int | None = None
    digits: bool = False
    not_null: bool = False
    not_blank: bool = False
    pattern: Pattern | None = None
    email: bool = False


@dataclass(frozen=True, slots=True)
class IntegerEnvelope:
    """Two independent closed sub-ranges, one per sign."""

    positive_min: int | None = None
    positive_max: int | None = None
    negative_min: int | None = None
    negative_max: int | None = None


@dataclass(frozen=True, slots=True)
class DecimalRange:
    """One sign side of a decimal envelope with explicit inclusivity."""

    min: Decimal | None
    min_inclusive: bool | None
    max: Decimal | None
    max_inclusive: bool | None

    def contains(self, value: Decimal) -> bool:
        if self.min is not None:
            if value < self.min or (value == self.min and self.min_inclusive is False):
                return False
        if self.max is not None:
            if value > self.max or (value == self.max and self.max_inclusive is False):
                return False
        return True


@dataclass(frozen=True, slots=True)
class DecimalEnvelope:
    positive_min: Decimal | None = None
    positive_min_inclusive: bool | None = None
    positive_max: Decimal | None = None
    positive_max_inclusive: bool | None = None
    negative_min: Decimal | None = None
    negative_min_inclusive: bool | None = None
    negative_max: Decimal | None = None
    negative_max_inclusive: bool | None = None
    scale: int | None = None

    @property
    def positive(self) -> DecimalRange | None:
        if self.positive_min is None and self.positive_max is None:
            return None
        return DecimalRange(
            self.positive_min,
            self.positive_min_inclusive,
            self.positive_max,
            self.positive_max_inclusive,
        )

    @property
    def negative(self) -> DecimalRange | None:
        if self.negative_min is None and self.negative_max is None:
            return None
        return DecimalRange(
            self.negative_min,
            self.negative_min_inclusive,
            self.negative_max,
            self.negative_max_inclusive,
        )

    def sides(self) -> tuple[DecimalRange, ...]:
        return tuple(side for side in (self.positive, self.negative) if side is not None)


@dataclass(frozen=True, slots=True)
class ContainerEnvelope:
    min_size: int | None = None
    max_size: int | None = None
    not_empty: bool = False


@dataclass(frozen=True, slots=True)
class TemporalBound:
    """A bound expressed relative to the instant it is evaluated at."""

    offset: timedelta = timedelta(0)

    def __call__(self, now: datetime) -> datetime:
        return now + self.offset


@dataclass(frozen=True, slots=True)
class TemporalEnvelope:
    min_bound: TemporalBound | None = None
    max_bound: TemporalBound | None = None

    def evaluate(self, now: datetime | None = None) -> tuple[datetime | None, datetime | None]:
        """Resolve both bounds against ``now`` (current UTC time by default)."""
        instant = now if now is not None else datetime.now(UTC)
        lower = self.min_bound(instant) if self.min_bound is not None else None
        upper = self.max_bound(instant) if self.max_bound is not None else None
        return lower, upper


Envelope = StringEnvelope | IntegerEnvelope | DecimalEnvelope | ContainerEnvelope | TemporalEnvelope

__all__ = [
    "ContainerEnvelope",
    "DecimalEnvelope",
    "DecimalRange",
    "Envelope",
    "IntegerEnvelope",
    "StringEnvelope",
    "TemporalBound",
    "TemporalEnvelope",
]

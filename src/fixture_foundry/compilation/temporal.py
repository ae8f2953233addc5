"""Temporal-kind constraint compilation.

"Now" moves between compilation and generation, so bounds are compiled to
``TemporalBound`` offsets and resolved against the instant of generation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta

from fixture_foundry import constants
from fixture_foundry.domain.constraints import (
    ConstraintSet,
    DeclaredConstraint,
    Future,
    FutureOrPresent,
    Past,
    PastOrPresent,
    as_constraint_set,
)
from fixture_foundry.domain.envelopes import TemporalBound, TemporalEnvelope


@dataclass(frozen=True, slots=True)
class TemporalMargins:
    """Safety margins keeping generated instants on the right side of "now"."""

    future: timedelta = timedelta(seconds=constants.FUTURE_MARGIN_SECONDS)
    future_or_present: timedelta = timedelta(seconds=constants.FUTURE_OR_PRESENT_MARGIN_SECONDS)
    past: timedelta = timedelta(seconds=constants.PAST_MARGIN_SECONDS)

    def __post_init__(self) -> None:
        if self.future <= timedelta(0) or self.past <= timedelta(0):
            raise ValueError("future and past margins must be > 0")
        if self.future_or_present < timedelta(0):
            raise ValueError("future_or_present margin must be >= 0")


DEFAULT_MARGINS = TemporalMargins()


def compile_temporal_constraint(
    constraints: ConstraintSet | Iterable[DeclaredConstraint],
    *,
    margins: TemporalMargins = DEFAULT_MARGINS,
) -> TemporalEnvelope | None:
    declared = as_constraint_set(constraints)

    min_bound: TemporalBound | None = None
    if declared.has(Future):
        min_bound = TemporalBound(margins.future)
    elif declared.has(FutureOrPresent):
        min_bound = TemporalBound(margins.future_or_present)

    max_bound: TemporalBound | None = None
    if declared.has(Past):
        max_bound = TemporalBound(-margins.past)
    elif declared.has(PastOrPresent):
        max_bound = TemporalBound()

    if min_bound is None and max_bound is None:
        return None

    return TemporalEnvelope(min_bound=min_bound, max_bound=max_bound)


__all__ = ["DEFAULT_MARGINS", "TemporalMargins", "compile_temporal_constraint"]

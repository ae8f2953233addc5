"""
fixture-foundry — unit tests for container and temporal constraint compilation

Purpose
- Validate container size envelopes and deferred temporal bounds with margins.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from fixture_foundry.compilation.containers import compile_container_constraint
from fixture_foundry.compilation.temporal import (
    DEFAULT_MARGINS,
    TemporalMargins,
    compile_temporal_constraint,
)
from fixture_foundry.domain.constraints import (
    Future,
    FutureOrPresent,
    NotEmpty,
    NotNull,
    Past,
    PastOrPresent,
    Size,
)
from fixture_foundry.domain.envelopes import ContainerEnvelope, TemporalBound, TemporalEnvelope

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


def test_container_without_size_or_not_empty_yields_no_envelope() -> None:
    assert compile_container_constraint([]) is None
    assert compile_container_constraint([NotNull()]) is None


def test_container_size_and_not_empty() -> None:
    assert compile_container_constraint([Size(2, 4)]) == ContainerEnvelope(2, 4, False)
    assert compile_container_constraint([NotEmpty()]) == ContainerEnvelope(not_empty=True)
    assert compile_container_constraint([Size(0, 3), NotEmpty()]) == ContainerEnvelope(
        0, 3, True
    )


def test_temporal_without_constraints_yields_no_envelope() -> None:
    assert compile_temporal_constraint([NotNull()]) is None


@pytest.mark.parametrize(
    ("declared", "lower", "upper"),
    [
        ([Future()], NOW + timedelta(seconds=3), None),
        ([FutureOrPresent()], NOW + timedelta(seconds=2), None),
        ([Past()], None, NOW - timedelta(seconds=1)),
        ([PastOrPresent()], None, NOW),
        ([Future(), FutureOrPresent()], NOW + timedelta(seconds=3), None),
        ([Past(), PastOrPresent()], None, NOW - timedelta(seconds=1)),
    ],
)
def test_temporal_bounds_resolve_against_now(
    declared: list[object],
    lower: datetime | None,
    upper: datetime | None,
) -> None:
    envelope = compile_temporal_constraint(declared)  # type: ignore[arg-type]

    assert envelope is not None
    assert envelope.evaluate(NOW) == (lower, upper)


def test_past_bound_is_strictly_before_now() -> None:
    envelope = compile_temporal_constraint([Past()])

    assert envelope is not None
    assert envelope.max_bound is not None
    assert envelope.max_bound(NOW) < NOW


def test_bounds_are_deferred_until_evaluation() -> None:
    envelope = compile_temporal_constraint([Future()])
    assert envelope is not None

    later = NOW + timedelta(days=1)
    assert envelope.evaluate(later)[0] == later + timedelta(seconds=3)


def test_evaluate_defaults_to_current_utc_time() -> None:
    envelope = compile_temporal_constraint([FutureOrPresent()])
    assert envelope is not None

    before = datetime.now(UTC)
    lower, upper = envelope.evaluate()

    assert upper is None
    assert lower is not None
    assert lower >= before + timedelta(seconds=2)


def test_custom_margins_are_applied() -> None:
    margins = TemporalMargins(
        future=timedelta(seconds=30),
        future_or_present=timedelta(0),
        past=timedelta(seconds=5),
    )

    envelope = compile_temporal_constraint([Future(), Past()], margins=margins)

    assert envelope == TemporalEnvelope(
        min_bound=TemporalBound(timedelta(seconds=30)),
        max_bound=TemporalBound(timedelta(seconds=-5)),
    )


def test_temporal_margins_reject_non_positive_strict_margins() -> None:
    with pytest.raises(ValueError, match="must be > 0"):
        TemporalMargins(past=timedelta(0))
    with pytest.raises(ValueError, match=">= 0"):
        TemporalMargins(future_or_present=timedelta(seconds=-1))


def test_default_margins_order() -> None:
    assert DEFAULT_MARGINS.future > DEFAULT_MARGINS.future_or_present
    assert DEFAULT_MARGINS.past == timedelta(seconds=1)

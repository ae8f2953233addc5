"""
fixture-foundry — unit tests for decimal constraint compilation

Purpose
- Validate bound precedence, inclusivity tracking, digit magnitudes, and the
  zero-straddle split into disjoint sign sub-ranges.
"""

from __future__ import annotations

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from fixture_foundry.compilation.decimals import compile_decimal_constraint, digits_magnitude
from fixture_foundry.domain.constraints import (
    DecimalMax,
    DecimalMin,
    DeclaredConstraint,
    Digits,
    Max,
    Min,
    Negative,
    NegativeOrZero,
    NotNull,
    Positive,
    PositiveOrZero,
)
from fixture_foundry.domain.envelopes import DecimalEnvelope, DecimalRange


def test_no_bounds_yields_no_envelope() -> None:
    assert compile_decimal_constraint([]) is None
    assert compile_decimal_constraint([NotNull()]) is None


def test_zero_straddle_splits_into_disjoint_sub_ranges() -> None:
    envelope = compile_decimal_constraint([DecimalMin("-2"), DecimalMax("3")])

    assert envelope == DecimalEnvelope(
        positive_min=Decimal(0),
        positive_min_inclusive=True,
        positive_max=Decimal(3),
        positive_max_inclusive=True,
        negative_min=Decimal(-2),
        negative_min_inclusive=True,
        negative_max=Decimal(0),
        negative_max_inclusive=False,
    )
    positive, negative = envelope.positive, envelope.negative
    assert positive is not None and negative is not None
    assert positive.contains(Decimal(0))
    assert not negative.contains(Decimal(0))


def test_straddle_keeps_declared_exclusivity_on_outer_bounds() -> None:
    envelope = compile_decimal_constraint(
        [DecimalMin("-2", inclusive=False), DecimalMax("3", inclusive=False)]
    )

    assert envelope is not None
    assert envelope.negative_min_inclusive is False
    assert envelope.positive_max_inclusive is False
    assert envelope.positive_min_inclusive is True
    assert envelope.negative_max_inclusive is False


def test_positive_only_domain_routes_to_positive_side() -> None:
    envelope = compile_decimal_constraint([DecimalMin("1.5"), DecimalMax("4.25")])

    assert envelope == DecimalEnvelope(
        positive_min=Decimal("1.5"),
        positive_min_inclusive=True,
        positive_max=Decimal("4.25"),
        positive_max_inclusive=True,
    )


def test_negative_only_domain_routes_to_negative_side() -> None:
    envelope = compile_decimal_constraint([Min(-10), Max(-1)])

    assert envelope == DecimalEnvelope(
        negative_min=Decimal(-10),
        negative_min_inclusive=True,
        negative_max=Decimal(-1),
        negative_max_inclusive=True,
    )


def test_max_of_zero_yields_non_positive_domain() -> None:
    envelope = compile_decimal_constraint([DecimalMin("-5"), DecimalMax("0")])

    assert envelope == DecimalEnvelope(
        negative_min=Decimal(-5),
        negative_min_inclusive=True,
        negative_max=Decimal(0),
        negative_max_inclusive=True,
    )


def test_decimal_min_overrides_min_only_when_tighter() -> None:
    looser = compile_decimal_constraint([Min(5), DecimalMin("3")])
    tighter = compile_decimal_constraint([Min(5), DecimalMin("7.5")])
    equal_exclusive = compile_decimal_constraint([Min(5), DecimalMin("5", inclusive=False)])

    assert looser is not None and tighter is not None and equal_exclusive is not None
    assert (looser.positive_min, looser.positive_min_inclusive) == (Decimal(5), True)
    assert (tighter.positive_min, tighter.positive_min_inclusive) == (Decimal("7.5"), True)
    assert (equal_exclusive.positive_min, equal_exclusive.positive_min_inclusive) == (
        Decimal(5),
        False,
    )


def test_decimal_max_overrides_max_only_when_tighter() -> None:
    envelope = compile_decimal_constraint([Max(10), DecimalMax("12")])
    exclusive = compile_decimal_constraint([Max(10), DecimalMax("10", inclusive=False)])

    assert envelope is not None and exclusive is not None
    assert (envelope.positive_max, envelope.positive_max_inclusive) == (Decimal(10), True)
    assert (exclusive.positive_max, exclusive.positive_max_inclusive) == (Decimal(10), False)


def test_positive_without_prior_bound_is_exclusive_zero_floor() -> None:
    envelope = compile_decimal_constraint([Positive()])

    assert envelope == DecimalEnvelope(positive_min=Decimal(0), positive_min_inclusive=False)


def test_positive_never_loosens_a_tighter_existing_bound() -> None:
    envelope = compile_decimal_constraint([DecimalMin("5"), Positive()])

    assert envelope is not None
    assert (envelope.positive_min, envelope.positive_min_inclusive) == (Decimal(5), True)


def test_positive_tightens_inclusive_zero_floor() -> None:
    envelope = compile_decimal_constraint([DecimalMin("0"), Positive()])

    assert envelope is not None
    assert envelope.positive_min_inclusive is False


def test_positive_or_zero_is_inclusive_zero_floor() -> None:
    envelope = compile_decimal_constraint([PositiveOrZero()])

    assert envelope == DecimalEnvelope(positive_min=Decimal(0), positive_min_inclusive=True)


def test_negative_clamps_track_inclusivity() -> None:
    strict = compile_decimal_constraint([Negative()])
    lenient = compile_decimal_constraint([NegativeOrZero()])

    assert strict == DecimalEnvelope(negative_max=Decimal(0), negative_max_inclusive=False)
    assert lenient == DecimalEnvelope(negative_max=Decimal(0), negative_max_inclusive=True)


def test_digits_magnitude_and_scale() -> None:
    assert digits_magnitude(3, 2) == Decimal("999.99")
    assert digits_magnitude(0, 2) == Decimal("0.99")
    assert digits_magnitude(4, 0) == Decimal(9999)

    envelope = compile_decimal_constraint([Digits(3, 2)])
    assert envelope is not None
    assert envelope.scale == 2
    assert envelope.positive_max == Decimal("999.99")
    assert envelope.negative_min == Decimal("-999.99")


def test_digits_only_tighten_existing_bounds() -> None:
    envelope = compile_decimal_constraint([DecimalMin("1"), DecimalMax("50"), Digits(4, 1)])

    assert envelope is not None
    assert envelope.positive_min == Decimal(1)
    assert envelope.positive_max == Decimal(50)
    assert envelope.scale == 1


def test_contradictory_bounds_resolve_to_a_closed_point() -> None:
    envelope = compile_decimal_constraint([DecimalMin("10"), DecimalMax("2")])

    assert envelope == DecimalEnvelope(
        positive_min=Decimal(2),
        positive_min_inclusive=True,
        positive_max=Decimal(2),
        positive_max_inclusive=True,
    )


def test_equal_bounds_with_an_exclusive_side_keep_the_shared_value() -> None:
    envelope = compile_decimal_constraint([DecimalMin("3"), DecimalMax("3", inclusive=False)])

    assert envelope is not None and envelope.positive is not None
    assert envelope.positive.contains(Decimal(3))


def test_positive_with_negative_or_zero_keeps_a_satisfiable_side() -> None:
    envelope = compile_decimal_constraint([Positive(), NegativeOrZero()])

    assert envelope == DecimalEnvelope(negative_max=Decimal(0), negative_max_inclusive=True)


def _member(side: DecimalRange) -> Decimal:
    if side.min is not None and side.max is not None:
        return (side.min + side.max) / 2
    if side.min is not None:
        return side.min + 1
    if side.max is not None:
        return side.max - 1
    return Decimal(0)


_DECIMALS = st.decimals(min_value=-1000, max_value=1000, allow_nan=False, places=2)
_DECIMAL_CONSTRAINTS = st.lists(
    st.one_of(
        st.builds(Min, st.integers(-1000, 1000)),
        st.builds(Max, st.integers(-1000, 1000)),
        st.builds(DecimalMin, _DECIMALS, st.booleans()),
        st.builds(DecimalMax, _DECIMALS, st.booleans()),
        st.builds(Digits, st.integers(0, 5), st.integers(0, 3)),
        st.sampled_from([Positive(), PositiveOrZero(), Negative(), NegativeOrZero()]),
    ),
    max_size=6,
)


@settings(max_examples=200, derandomize=True, deadline=None)
@given(declared=_DECIMAL_CONSTRAINTS, candidate=_DECIMALS)
def test_sign_sub_ranges_are_ordered_and_never_share_a_value(
    declared: list[DeclaredConstraint],
    candidate: Decimal,
) -> None:
    envelope = compile_decimal_constraint(declared)
    if envelope is None:
        return

    for side in envelope.sides():
        if side.min is not None and side.max is not None:
            assert side.min <= side.max

    positive, negative = envelope.positive, envelope.negative
    if positive is not None and negative is not None:
        assert not (positive.contains(candidate) and negative.contains(candidate))
        assert not (positive.contains(Decimal(0)) and negative.contains(Decimal(0)))


@settings(max_examples=300, derandomize=True, deadline=None)
@given(declared=_DECIMAL_CONSTRAINTS)
def test_every_produced_side_admits_at_least_one_value(
    declared: list[DeclaredConstraint],
) -> None:
    envelope = compile_decimal_constraint(declared)
    if envelope is None:
        return

    for side in envelope.sides():
        assert side.contains(_member(side)), side

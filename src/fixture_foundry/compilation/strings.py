"""String-kind constraint compilation."""

from __future__ import annotations

from collections.abc import Iterable

from fixture_foundry.domain.constraints import (
    ConstraintSet,
    DeclaredConstraint,
    Digits,
    Email,
    NotBlank,
    NotEmpty,
    NotNull,
    Pattern,
    Size,
    as_constraint_set,
)
from fixture_foundry.domain.envelopes import StringEnvelope


def compile_string_constraint(
    constraints: ConstraintSet | Iterable[DeclaredConstraint],
) -> StringEnvelope | None:
    """Merge string constraints into a ``StringEnvelope``; ``None`` when none apply."""
    declared = as_constraint_set(constraints)

    min_length: int | None = None
    max_length: int | None = None
    digits = False
    not_null = declared.has(NotNull)
    not_blank = declared.has(NotBlank)
    email = declared.has(Email)

    if not_blank or declared.has(NotEmpty):
        min_length = 1

    size = declared.find(Size)
    if size is not None:
        # A blank/empty floor of 1 is only replaced by a stricter declared minimum.
        if min_length is None or size.min > 1:
            min_length = size.min
        max_length = size.max

    digits_constraint = declared.find(Digits)
    if digits_constraint is not None:
        digits = True
        not_blank = True
        if max_length is None or max_length > digits_constraint.integer_digits:
            max_length = digits_constraint.integer_digits

    pattern = declared.find(Pattern)

    if (
        min_length is None
        and max_length is None
        and not digits
        and not not_null
        and not not_blank
        and pattern is None
        and not email
    ):
        return None

    if min_length is not None and max_length is not None and min_length > max_length:
        min_length = max_length

    return StringEnvelope(
        min_length=min_length,
        max_length=max_length,
        digits=digits,
        not_null=not_null,
        not_blank=not_blank,
        pattern=pattern,
        email=email,
    )


__all__ = ["compile_string_constraint"]

"""Container-kind constraint compilation."""

from __future__ import annotations

from collections.abc import Iterable

from fixture_foundry.domain.constraints import (
    ConstraintSet,
    DeclaredConstraint,
    NotEmpty,
    Size,
    as_constraint_set,
)
from fixture_foundry.domain.envelopes import ContainerEnvelope


def compile_container_constraint(
    constraints: ConstraintSet | Iterable[DeclaredConstraint],
) -> ContainerEnvelope | None:
    declared = as_constraint_set(constraints)
    not_empty = declared.has(NotEmpty)
    size = declared.find(Size)

    if size is None and not not_empty:
        return None

    return ContainerEnvelope(
        min_size=size.min if size is not None else None,
        max_size=size.max if size is not None else None,
        not_empty=not_empty,
    )


__all__ = ["compile_container_constraint"]

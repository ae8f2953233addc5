"""Dispatch declared constraints to the per-kind compilers.

Compilation is a pure function of ``(kind, constraint set, width, margins)``, so
results are memoized process-wide and safe to share between threads.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog

from fixture_foundry.compilation.containers import compile_container_constraint
from fixture_foundry.compilation.decimals import compile_decimal_constraint
from fixture_foundry.compilation.integers import compile_integer_constraint
from fixture_foundry.compilation.strings import compile_string_constraint
from fixture_foundry.compilation.temporal import (
    DEFAULT_MARGINS,
    TemporalMargins,
    compile_temporal_constraint,
)
from fixture_foundry.domain.constraints import (
    ConstraintSet,
    DeclaredConstraint,
    as_constraint_set,
)
from fixture_foundry.domain.types import IntegerWidth, ValueKind

if TYPE_CHECKING:
    from fixture_foundry.config.schema import GenerationConfig
    from fixture_foundry.domain.envelopes import Envelope

_CACHE_SIZE = 4096


def _compile(
    kind: ValueKind,
    constraints: ConstraintSet,
    width: IntegerWidth,
    margins: TemporalMargins,
) -> Envelope | None:
    if kind is ValueKind.STRING:
        return compile_string_constraint(constraints)
    if kind is ValueKind.INTEGER:
        return compile_integer_constraint(constraints, width=width)
    if kind is ValueKind.DECIMAL:
        return compile_decimal_constraint(constraints)
    if kind is ValueKind.CONTAINER:
        return compile_container_constraint(constraints)
    if kind is ValueKind.TEMPORAL:
        return compile_temporal_constraint(constraints, margins=margins)
    raise ValueError(f"unsupported value kind: {kind!r}")


_compile_cached = lru_cache(maxsize=_CACHE_SIZE)(_compile)


def compile_constraints(
    kind: ValueKind | str,
    constraints: ConstraintSet | Iterable[DeclaredConstraint],
    *,
    width: IntegerWidth = IntegerWidth.UNBOUNDED,
    margins: TemporalMargins = DEFAULT_MARGINS,
    cached: bool = True,
) -> Envelope | None:
    """Compile one property's declared constraints for the given value kind."""
    resolved_kind = ValueKind(kind)
    declared = as_constraint_set(constraints)
    if cached:
        return _compile_cached(resolved_kind, declared, width, margins)
    return _compile(resolved_kind, declared, width, margins)


def clear_compilation_cache() -> None:
    _compile_cached.cache_clear()


class ConstraintCompiler:
    """Configured entry point for envelope compilation."""

    def __init__(
        self,
        *,
        margins: TemporalMargins = DEFAULT_MARGINS,
        cached: bool = True,
        logger: Any | None = None,
    ) -> None:
        self._margins = margins
        self._cached = cached
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    @classmethod
    def from_config(
        cls, config: GenerationConfig, *, logger: Any | None = None
    ) -> ConstraintCompiler:
        return cls(margins=config.temporal_margins(), logger=logger)

    @property
    def margins(self) -> TemporalMargins:
        return self._margins

    def compile(
        self,
        kind: ValueKind | str,
        constraints: ConstraintSet | Iterable[DeclaredConstraint],
        *,
        width: IntegerWidth = IntegerWidth.UNBOUNDED,
    ) -> Envelope | None:
        envelope = compile_constraints(
            kind,
            constraints,
            width=width,
            margins=self._margins,
            cached=self._cached,
        )
        self._logger.debug(
            "constraint_envelope_compiled",
            kind=ValueKind(kind).value,
            width=width.name,
            constrained=envelope is not None,
        )
        return envelope

    def compile_property(
        self,
        owner: type,
        property_name: str,
        kind: ValueKind | str,
        constraints: ConstraintSet | Iterable[DeclaredConstraint],
        *,
        width: IntegerWidth = IntegerWidth.UNBOUNDED,
    ) -> Envelope | None:
        """Compile with the owning type and property bound into log context."""
        with structlog.contextvars.bound_contextvars(
            target=owner.__qualname__, property=property_name
        ):
            return self.compile(kind, constraints, width=width)


__all__ = ["ConstraintCompiler", "clear_compilation_cache", "compile_constraints"]

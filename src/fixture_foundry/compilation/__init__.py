"""Constraint compilation: declared constraints to per-kind generation envelopes."""

from fixture_foundry.compilation.compiler import (
    ConstraintCompiler,
    clear_compilation_cache,
    compile_constraints,
)
from fixture_foundry.compilation.containers import compile_container_constraint
from fixture_foundry.compilation.decimals import compile_decimal_constraint, digits_magnitude
from fixture_foundry.compilation.integers import compile_integer_constraint
from fixture_foundry.compilation.strings import compile_string_constraint
from fixture_foundry.compilation.temporal import (
    DEFAULT_MARGINS,
    TemporalMargins,
    compile_temporal_constraint,
)

__all__ = [
    "DEFAULT_MARGINS",
    "ConstraintCompiler",
    "TemporalMargins",
    "clear_compilation_cache",
    "compile_constraints",
    "compile_container_constraint",
    "compile_decimal_constraint",
    "compile_integer_constraint",
    "compile_string_constraint",
    "compile_temporal_constraint",
    "digits_magnitude",
]

"""Domain primitives: declared constraints, envelopes, and value kinds."""

from fixture_foundry.domain.constraints import (
    ConstraintSet,
    DecimalMax,
    DecimalMin,
    DeclaredConstraint,
    Digits,
    Email,
    Future,
    FutureOrPresent,
    Max,
    Min,
    Negative,
    NegativeOrZero,
    NotBlank,
    NotEmpty,
    NotNull,
    Past,
    PastOrPresent,
    Pattern,
    Positive,
    PositiveOrZero,
    Size,
    as_constraint_set,
)
from fixture_foundry.domain.envelopes import (
    ContainerEnvelope,
    DecimalEnvelope,
    DecimalRange,
    Envelope,
    IntegerEnvelope,
    StringEnvelope,
    TemporalBound,
    TemporalEnvelope,
)
from fixture_foundry.domain.sheets import (
    load_constraint_sheet,
    parse_constraint,
    parse_constraint_sheet,
    parse_constraints,
)
from fixture_foundry.domain.types import IntegerWidth, ValueKind

__all__ = [
    "ConstraintSet",
    "ContainerEnvelope",
    "DecimalEnvelope",
    "DecimalMax",
    "DecimalMin",
    "DecimalRange",
    "DeclaredConstraint",
    "Digits",
    "Email",
    "Envelope",
    "Future",
    "FutureOrPresent",
    "IntegerEnvelope",
    "IntegerWidth",
    "Max",
    "Min",
    "Negative",
    "NegativeOrZero",
    "NotBlank",
    "NotEmpty",
    "NotNull",
    "Past",
    "PastOrPresent",
    "Pattern",
    "Positive",
    "PositiveOrZero",
    "Size",
    "StringEnvelope",
    "TemporalBound",
    "TemporalEnvelope",
    "ValueKind",
    "as_constraint_set",
    "load_constraint_sheet",
    "parse_constraint",
    "parse_constraint_sheet",
    "parse_constraints",
]

"""Declared validity constraints as a closed set of immutable variants.

Each variant is a frozen dataclass; a property's declaration is any iterable of
them. Construction validates the single constraint in isolation and raises
``ConstraintDeclarationError`` when it is malformed. Conflicts between several
constraints are never an error here; the compiler resolves them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TypeVar

from fixture_foundry.constants import SIZE_UNBOUNDED_MAX
from fixture_foundry.errors import ConstraintDeclarationError

TConstraint = TypeVar("TConstraint", bound="DeclaredConstraint")


def _fail(variant: str, message: str) -> ConstraintDeclarationError:
    return ConstraintDeclarationError(f"{variant}: {message}")


def _as_int(value: object, variant: str, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(variant, f"{field_name} must be an integer, got {type(value).__name__}")
    return value


def _as_decimal(value: object, variant: str) -> Decimal:
    if isinstance(value, bool):
        raise _fail(variant, "value must be a decimal literal, got bool")
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float, str)):
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise _fail(variant, f"value is not a decimal literal: {value!r}") from exc
    else:
        raise _fail(variant, f"value must be a decimal literal, got {type(value).__name__}")
    if not parsed.is_finite():
        raise _fail(variant, f"value must be finite, got {value!r}")
    return parsed


class DeclaredConstraint:
    """Marker base for every declared constraint variant."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class NotNull(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class NotBlank(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class NotEmpty(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class Size(DeclaredConstraint):
    min: int = 0
    max: int = SIZE_UNBOUNDED_MAX

    def __post_init__(self) -> None:
        minimum = _as_int(self.min, "Size", "min")
        maximum = _as_int(self.max, "Size", "max")
        if minimum < 0:
            raise _fail("Size", f"min must be >= 0, got {minimum}")
        if maximum < 0:
            raise _fail("Size", f"max must be >= 0, got {maximum}")
        if minimum > maximum:
            raise _fail("Size", f"min ({minimum}) must not exceed max ({maximum})")


@dataclass(frozen=True, slots=True)
class Pattern(DeclaredConstraint):
    regex: str
    flags: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.regex, str):
            raise _fail("Pattern", f"regex must be a string, got {type(self.regex).__name__}")
        flags = int(self.flags)
        try:
            re.compile(self.regex, flags)
        except re.error as exc:
            raise _fail("Pattern", f"invalid regex {self.regex!r}: {exc}") from exc
        object.__setattr__(self, "flags", flags)


@dataclass(frozen=True, slots=True)
class Email(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class Digits(DeclaredConstraint):
    integer_digits: int
    fraction_digits: int = 0

    def __post_init__(self) -> None:
        integer = _as_int(self.integer_digits, "Digits", "integer_digits")
        fraction = _as_int(self.fraction_digits, "Digits", "fraction_digits")
        if integer < 0 or fraction < 0:
            raise _fail("Digits", "digit counts must be >= 0")


@dataclass(frozen=True, slots=True)
class Min(DeclaredConstraint):
    value: int

    def __post_init__(self) -> None:
        _as_int(self.value, "Min", "value")


@dataclass(frozen=True, slots=True)
class Max(DeclaredConstraint):
    value: int

    def __post_init__(self) -> None:
        _as_int(self.value, "Max", "value")


@dataclass(frozen=True, slots=True)
class DecimalMin(DeclaredConstraint):
    value: Decimal
    inclusive: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _as_decimal(self.value, "DecimalMin"))


@dataclass(frozen=True, slots=True)
class DecimalMax(DeclaredConstraint):
    value: Decimal
    inclusive: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _as_decimal(self.value, "DecimalMax"))


@dataclass(frozen=True, slots=True)
class Positive(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class PositiveOrZero(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class Negative(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class NegativeOrZero(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class Future(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class FutureOrPresent(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class Past(DeclaredConstraint):
    pass


@dataclass(frozen=True, slots=True)
class PastOrPresent(DeclaredConstraint):
    pass


class ConstraintSet:
    """Immutable, hashable view over the constraints declared on one property.

    Lookup is by variant type; when a variant is declared more than once the
    first declaration wins. Equality and hashing compare the effective
    declarations (the first one of each variant) and ignore their order.
    """

    __slots__ = ("_effective", "_items")

    def __init__(self, constraints: Iterable[DeclaredConstraint] = ()) -> None:
        items: list[DeclaredConstraint] = []
        for constraint in constraints:
            if not isinstance(constraint, DeclaredConstraint):
                raise ConstraintDeclarationError(
                    f"expected a declared constraint, got {type(constraint).__name__}"
                )
            if constraint not in items:
                items.append(constraint)
        self._items = tuple(items)
        effective: dict[type[DeclaredConstraint], DeclaredConstraint] = {}
        for constraint in self._items:
            effective.setdefault(type(constraint), constraint)
        self._effective = frozenset(effective.values())

    @classmethod
    def of(cls, *constraints: DeclaredConstraint) -> ConstraintSet:
        return cls(constraints)

    def find(self, variant: type[TConstraint]) -> TConstraint | None:
        for constraint in self._items:
            if type(constraint) is variant:
                return constraint  # type: ignore[return-value]
        return None

    def has(self, variant: type[DeclaredConstraint]) -> bool:
        return self.find(variant) is not None

    def __iter__(self) -> Iterator[DeclaredConstraint]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return self._effective == other._effective

    def __hash__(self) -> int:
        return hash(self._effective)

    def __repr__(self) -> str:
        return f"ConstraintSet({list(self._items)!r})"


def as_constraint_set(constraints: ConstraintSet | Iterable[DeclaredConstraint]) -> ConstraintSet:
    if isinstance(constraints, ConstraintSet):
        return constraints
    return ConstraintSet(constraints)


__all__ = [
    "ConstraintSet",
    "DecimalMax",
    "DecimalMin",
    "DeclaredConstraint",
    "Digits",
    "Email",
    "Future",
    "FutureOrPresent",
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
    "as_constraint_set",
]

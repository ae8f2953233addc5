"""Parse declarative constraint sheets (YAML / JSON-like payloads) into variants.

A sheet maps property names to constraint lists. Each list entry is either a bare
variant name (``"not_null"``) or a single-key mapping carrying parameters
(``{"size": {"min": 1, "max": 5}}``, ``{"min": 3}``).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, Final

import yaml

from fixture_foundry.domain import constraints as c
from fixture_foundry.domain.constraints import ConstraintSet, DeclaredConstraint
from fixture_foundry.errors import ConstraintDeclarationError

_CAMEL_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

_MARKERS: Final[dict[str, type[DeclaredConstraint]]] = {
    "not_null": c.NotNull,
    "not_blank": c.NotBlank,
    "not_empty": c.NotEmpty,
    "email": c.Email,
    "positive": c.Positive,
    "positive_or_zero": c.PositiveOrZero,
    "negative": c.Negative,
    "negative_or_zero": c.NegativeOrZero,
    "future": c.Future,
    "future_or_present": c.FutureOrPresent,
    "past": c.Past,
    "past_or_present": c.PastOrPresent,
}

_RE_FLAGS: Final[dict[str, int]] = {
    "case_insensitive": re.IGNORECASE,
    "multiline": re.MULTILINE,
    "dotall": re.DOTALL,
    "comments": re.VERBOSE,
    "unicode_case": re.UNICODE,
}


def _normalize_name(raw: str) -> str:
    return _CAMEL_CASE_BOUNDARY.sub(r"\1_\2", raw.strip()).lower().replace("-", "_")


def _as_params(value: object, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConstraintDeclarationError(f"{name} parameters must be a mapping")
    return {str(key): item for key, item in value.items()}


def _scalar_or_params(value: object, name: str, key: str) -> dict[str, Any]:
    if isinstance(value, Mapping):
        return _as_params(value, name)
    return {key: value}


def _pattern_flags(raw: object) -> int:
    if raw is None:
        return 0
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, Sequence):
        raise ConstraintDeclarationError("pattern flags must be a list of flag names")
    flags = 0
    for item in raw:
        flag_name = _normalize_name(str(item))
        if flag_name not in _RE_FLAGS:
            raise ConstraintDeclarationError(f"unknown pattern flag: {item!r}")
        flags |= _RE_FLAGS[flag_name]
    return flags


def _inclusive_flag(params: Mapping[str, Any], name: str) -> bool:
    raw = params.get("inclusive", True)
    if not isinstance(raw, bool):
        raise ConstraintDeclarationError(f"{name}.inclusive must be a boolean, got {raw!r}")
    return raw


def _build_size(value: object) -> DeclaredConstraint:
    params = _as_params(value, "size")
    return c.Size(**params)


def _build_pattern(value: object) -> DeclaredConstraint:
    params = _scalar_or_params(value, "pattern", "regex")
    return c.Pattern(
        regex=params.get("regex", params.get("regexp")),
        flags=_pattern_flags(params.get("flags")),
    )


def _build_digits(value: object) -> DeclaredConstraint:
    params = _scalar_or_params(value, "digits", "integer")
    return c.Digits(
        integer_digits=params.get("integer", params.get("integer_digits")),
        fraction_digits=params.get("fraction", params.get("fraction_digits", 0)),
    )


def _build_min(value: object) -> DeclaredConstraint:
    return c.Min(_scalar_or_params(value, "min", "value").get("value"))


def _build_max(value: object) -> DeclaredConstraint:
    return c.Max(_scalar_or_params(value, "max", "value").get("value"))


def _build_decimal_min(value: object) -> DeclaredConstraint:
    params = _scalar_or_params(value, "decimal_min", "value")
    return c.DecimalMin(params.get("value"), _inclusive_flag(params, "decimal_min"))


def _build_decimal_max(value: object) -> DeclaredConstraint:
    params = _scalar_or_params(value, "decimal_max", "value")
    return c.DecimalMax(params.get("value"), _inclusive_flag(params, "decimal_max"))


_BUILDERS: Final[dict[str, Callable[[object], DeclaredConstraint]]] = {
    "size": _build_size,
    "pattern": _build_pattern,
    "digits": _build_digits,
    "min": _build_min,
    "max": _build_max,
    "decimal_min": _build_decimal_min,
    "decimal_max": _build_decimal_max,
}


def parse_constraint(entry: object) -> DeclaredConstraint:
    """Parse one sheet entry into a declared constraint variant."""
    if isinstance(entry, DeclaredConstraint):
        return entry
    if isinstance(entry, str):
        name = _normalize_name(entry)
        if name in _MARKERS:
            return _MARKERS[name]()
        raise ConstraintDeclarationError(f"unknown or parameterized constraint: {entry!r}")
    if isinstance(entry, Mapping):
        if len(entry) != 1:
            raise ConstraintDeclarationError(
                f"constraint mapping must have exactly one key, got {sorted(map(str, entry))}"
            )
        ((raw_name, value),) = entry.items()
        name = _normalize_name(str(raw_name))
        if name in _MARKERS:
            if value not in (None, True, {}):
                raise ConstraintDeclarationError(f"{raw_name} takes no parameters")
            return _MARKERS[name]()
        builder = _BUILDERS.get(name)
        if builder is None:
            raise ConstraintDeclarationError(f"unknown constraint: {raw_name!r}")
        try:
            return builder(value)
        except TypeError as exc:
            raise ConstraintDeclarationError(f"invalid parameters for {raw_name}: {exc}") from exc
    raise ConstraintDeclarationError(f"unsupported constraint entry type: {type(entry).__name__}")


def parse_constraints(payload: object) -> ConstraintSet:
    """Parse a list of sheet entries into a ``ConstraintSet``."""
    if payload is None:
        return ConstraintSet()
    if isinstance(payload, (str, Mapping)) or not isinstance(payload, Sequence):
        payload = [payload]
    return ConstraintSet(parse_constraint(entry) for entry in payload)


def parse_constraint_sheet(payload: object) -> dict[str, ConstraintSet]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConstraintDeclarationError("constraint sheet must map property names to lists")
    properties = payload.get("properties", payload)
    if not isinstance(properties, Mapping):
        raise ConstraintDeclarationError("'properties' must be a mapping")
    return {str(name): parse_constraints(entries) for name, entries in properties.items()}


def load_constraint_sheet(path: str | Path) -> dict[str, ConstraintSet]:
    """Load a YAML constraint sheet from disk."""
    sheet_path = Path(path)
    try:
        with sheet_path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise ConstraintDeclarationError(
            f"failed to read constraint sheet {sheet_path.as_posix()}: {exc}"
        ) from exc
    except yaml.YAMLError as exc:
        raise ConstraintDeclarationError(
            f"invalid YAML in {sheet_path.as_posix()}: {exc}"
        ) from exc
    return parse_constraint_sheet(payload)


__all__ = [
    "load_constraint_sheet",
    "parse_constraint",
    "parse_constraint_sheet",
    "parse_constraints",
]

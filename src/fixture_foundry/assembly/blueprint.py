"""Construction blueprints: a target type's primary constructor parameters.

A ``Blueprint`` is immutable and derived once per target type. It carries the
ordered parameters with optional/nullable flags and a factory that constructs
the target from a name-to-value binding map.
"""

from __future__ import annotations

import inspect
import re
import types
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Final

from fixture_foundry.errors import FixtureFoundryError

_OPTIONAL_STRING_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(typing\.)?Optional\[|(^|\|)\s*None\s*(\||$)"
)
_BINDABLE_KINDS: Final = frozenset(
    {
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
        inspect.Parameter.KEYWORD_ONLY,
    }
)


class BlueprintDiscoveryError(FixtureFoundryError):
    """Raised when a target's construction parameters cannot be determined."""


@dataclass(frozen=True, slots=True)
class ConstructionParameter:
    name: str
    annotation: Any = None
    optional: bool = False
    nullable: bool = False
    property_name: str = ""
    positional_only: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("construction parameter name must not be empty")
        if not self.property_name:
            object.__setattr__(self, "property_name", self.name)


Factory = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True, slots=True)
class Blueprint:
    target: type
    parameters: tuple[ConstructionParameter, ...]
    factory: Factory = field(compare=False)

    def __post_init__(self) -> None:
        names = [parameter.name for parameter in self.parameters]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate construction parameter names for {self.target!r}")

    @classmethod
    def for_callable(
        cls,
        target: type,
        parameters: tuple[ConstructionParameter, ...],
        constructor: Callable[..., Any] | None = None,
    ) -> Blueprint:
        """Blueprint whose factory calls ``constructor`` (the target by default)."""
        return cls(target, parameters, _CallByName(constructor or target, parameters))

    def parameter(self, name: str) -> ConstructionParameter | None:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def construct(self, bindings: Mapping[str, Any]) -> Any:
        return self.factory(bindings)


class _CallByName:
    """Invoke a constructor with exactly the supplied bindings.

    Positional-only parameters are passed positionally, up to the first one
    that is not bound.
    """

    __slots__ = ("_constructor", "_positional")

    def __init__(
        self,
        constructor: Callable[..., Any],
        parameters: tuple[ConstructionParameter, ...],
    ) -> None:
        self._constructor = constructor
        self._positional = tuple(p.name for p in parameters if p.positional_only)

    def __call__(self, bindings: Mapping[str, Any]) -> Any:
        keywords = dict(bindings)
        args: list[Any] = []
        for name in self._positional:
            if name not in keywords:
                break
            args.append(keywords.pop(name))
        return self._constructor(*args, **keywords)


def is_nullable(annotation: Any) -> bool:
    """Whether ``annotation`` admits ``None`` (``X | None``, ``Optional[X]``, ``None``)."""
    if annotation is None or annotation is type(None):
        return True
    if isinstance(annotation, str):
        return bool(_OPTIONAL_STRING_PATTERN.search(annotation))
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return is_nullable(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        return any(arg is type(None) for arg in typing.get_args(annotation))
    return False


def is_constructible(target: object) -> bool:
    """Whether ``target`` is a concrete class with a usable primary constructor."""
    if not isinstance(target, type):
        return False
    if inspect.isabstract(target):
        return False
    if getattr(target, "_is_protocol", False):
        return False
    if issubclass(target, Enum) or target is type(None):
        return False
    return True


def _resolve_hints(target: type) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    for owner in (target, target.__init__):
        try:
            resolved = typing.get_type_hints(owner, include_extras=True)
        except (NameError, TypeError, AttributeError):
            # Unresolvable forward references: fall back to raw annotations.
            continue
        for key, value in resolved.items():
            hints.setdefault(key, value)
    return hints


@lru_cache(maxsize=512)
def discover_blueprint(target: type) -> Blueprint:
    """Derive a blueprint from the target's ``__init__`` signature and type hints."""
    try:
        signature = inspect.signature(target)
        hints = _resolve_hints(target)
    except Exception as exc:
        raise BlueprintDiscoveryError(
            f"cannot inspect constructor of {getattr(target, '__qualname__', target)!r}: {exc}"
        ) from exc

    parameters: list[ConstructionParameter] = []
    for parameter in signature.parameters.values():
        if parameter.kind not in _BINDABLE_KINDS:
            continue
        annotation = hints.get(parameter.name, parameter.annotation)
        if annotation is inspect.Parameter.empty:
            annotation = None
            nullable = False
        else:
            nullable = is_nullable(annotation)
        parameters.append(
            ConstructionParameter(
                name=parameter.name,
                annotation=annotation,
                optional=parameter.default is not inspect.Parameter.empty,
                nullable=nullable,
                positional_only=parameter.kind is inspect.Parameter.POSITIONAL_ONLY,
            )
        )
    return Blueprint.for_callable(target, tuple(parameters))


__all__ = [
    "Blueprint",
    "BlueprintDiscoveryError",
    "ConstructionParameter",
    "Factory",
    "discover_blueprint",
    "is_constructible",
    "is_nullable",
]

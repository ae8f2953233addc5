"""Assemble instances by binding generated property values to constructor parameters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from fixture_foundry.assembly.blueprint import (
    Blueprint,
    BlueprintDiscoveryError,
    ConstructionParameter,
    discover_blueprint,
    is_constructible,
)
from fixture_foundry.assembly.combinator import ObjectCombinator
from fixture_foundry.assembly.results import AssemblyResult

_LOGGER = structlog.get_logger(__name__)


def should_bind(parameter: ConstructionParameter, value: Any) -> bool:
    """A parameter is bound when it has a value, has no default, or admits ``None``."""
    return value is not None or not parameter.optional or parameter.nullable


def bind_parameters(
    blueprint: Blueprint,
    values: Mapping[str, Any],
) -> dict[str, Any]:
    """Build the binding set for ``blueprint`` from per-property ``values``.

    Optional, non-nullable parameters without a value are left out so the
    target's own default applies.
    """
    bindings: dict[str, Any] = {}
    for parameter in blueprint.parameters:
        value = values.get(parameter.property_name)
        if should_bind(parameter, value):
            bindings[parameter.name] = value
    return bindings


def assemble(
    blueprint: Blueprint,
    resolved: Mapping[str, Any],
    *,
    logger: Any | None = None,
) -> AssemblyResult:
    """Construct one instance from a blueprint and per-property value sources.

    ``resolved`` maps property names to plain values or ``Arbitrary`` sources;
    each source is evaluated at most once for this call.
    """
    log = logger if logger is not None else _LOGGER
    if not is_constructible(blueprint.target):
        return AssemblyResult.not_introspected(
            f"{blueprint.target!r} is abstract or not constructible"
        )

    combinator = ObjectCombinator(
        resolved,
        lambda values: blueprint.construct(bind_parameters(blueprint, values)),
    )
    try:
        instance = combinator.combine()
    except Exception as exc:  # noqa: BLE001 - surfaced as a FAILED result
        log.warning(
            "assembly_construction_failed",
            target=blueprint.target.__qualname__,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return AssemblyResult.failed(exc)
    return AssemblyResult.constructed(instance)


class PrimaryConstructorIntrospector:
    """Generate instances through a type's primary constructor (``__init__``)."""

    def __init__(self, *, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    def match(self, target: object) -> bool:
        return is_constructible(target)

    def blueprint_for(self, target: type) -> Blueprint | None:
        try:
            return discover_blueprint(target)
        except BlueprintDiscoveryError as exc:
            self._logger.warning(
                "assembly_blueprint_discovery_failed",
                target=getattr(target, "__qualname__", repr(target)),
                error=str(exc),
            )
            return None

    def introspect(self, target: object, properties: Mapping[str, Any]) -> AssemblyResult:
        if not isinstance(target, type) or not is_constructible(target):
            return AssemblyResult.not_introspected(f"{target!r} is abstract or not constructible")

        blueprint = self.blueprint_for(target)
        if blueprint is None:
            return AssemblyResult.not_introspected(
                f"construction parameters of {target.__qualname__} could not be discovered"
            )

        with structlog.contextvars.bound_contextvars(target=target.__qualname__):
            return assemble(blueprint, properties, logger=self._logger)


INSTANCE = PrimaryConstructorIntrospector()

__all__ = [
    "INSTANCE",
    "PrimaryConstructorIntrospector",
    "assemble",
    "bind_parameters",
    "should_bind",
]

"""Object assembly: bind per-property values to a type's construction parameters."""

from fixture_foundry.assembly.blueprint import (
    Blueprint,
    BlueprintDiscoveryError,
    ConstructionParameter,
    discover_blueprint,
    is_constructible,
    is_nullable,
)
from fixture_foundry.assembly.combinator import Arbitrary, ObjectCombinator, ResolvedProperties
from fixture_foundry.assembly.introspector import (
    PrimaryConstructorIntrospector,
    assemble,
    bind_parameters,
    should_bind,
)
from fixture_foundry.assembly.results import NOT_INTROSPECTED, AssemblyResult, AssemblyStatus

__all__ = [
    "NOT_INTROSPECTED",
    "Arbitrary",
    "AssemblyResult",
    "AssemblyStatus",
    "Blueprint",
    "BlueprintDiscoveryError",
    "ConstructionParameter",
    "ObjectCombinator",
    "PrimaryConstructorIntrospector",
    "ResolvedProperties",
    "assemble",
    "bind_parameters",
    "discover_blueprint",
    "is_constructible",
    "is_nullable",
    "should_bind",
]

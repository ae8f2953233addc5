"""
fixture-foundry — constraint-compliant test fixture generation.

Purpose
- Compile declared validity constraints into generation envelopes per value kind.
- Assemble generated property values into instances through primary constructors.

Import boundary rules
- No side effects at import time (no config loading, no logging setup).
"""

from fixture_foundry.assembly import (
    AssemblyResult,
    AssemblyStatus,
    Blueprint,
    ConstructionParameter,
    PrimaryConstructorIntrospector,
    assemble,
    discover_blueprint,
)
from fixture_foundry.compilation import ConstraintCompiler, compile_constraints
from fixture_foundry.domain import ValueKind
from fixture_foundry.errors import ConstraintDeclarationError, FixtureFoundryError

__version__ = "0.3.0"

__all__ = [
    "AssemblyResult",
    "AssemblyStatus",
    "Blueprint",
    "ConstraintCompiler",
    "ConstraintDeclarationError",
    "ConstructionParameter",
    "FixtureFoundryError",
    "PrimaryConstructorIntrospector",
    "ValueKind",
    "__version__",
    "assemble",
    "compile_constraints",
    "discover_blueprint",
]

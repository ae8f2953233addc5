"""Public error types."""

from __future__ import annotations


class FixtureFoundryError(Exception):
    """Base class for fixture-foundry errors."""


class ConstraintDeclarationError(FixtureFoundryError, ValueError):
    """Raised when a single declared constraint is malformed.

    Combinations of well-formed constraints are never rejected; they are merged.
    """

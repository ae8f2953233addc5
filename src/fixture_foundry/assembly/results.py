"""Assembly outcomes as an explicit sum type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class AssemblyStatus(StrEnum):
    CONSTRUCTED = "constructed"
    NOT_INTROSPECTED = "not_introspected"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class AssemblyResult:
    """Outcome of one assembly call.

    ``NOT_INTROSPECTED`` means this strategy cannot build the target and the
    caller should fall back to another one. ``FAILED`` means the target was
    supported but construction raised; ``error`` carries the exception.
    """

    status: AssemblyStatus
    value: Any = None
    reason: str | None = None
    error: BaseException | None = None

    @classmethod
    def constructed(cls, value: Any) -> AssemblyResult:
        return cls(AssemblyStatus.CONSTRUCTED, value=value)

    @classmethod
    def not_introspected(cls, reason: str | None = None) -> AssemblyResult:
        if reason is None:
            return NOT_INTROSPECTED
        return cls(AssemblyStatus.NOT_INTROSPECTED, reason=reason)

    @classmethod
    def failed(cls, error: BaseException) -> AssemblyResult:
        return cls(AssemblyStatus.FAILED, reason=str(error), error=error)

    @property
    def is_constructed(self) -> bool:
        return self.status is AssemblyStatus.CONSTRUCTED

    @property
    def is_not_introspected(self) -> bool:
        return self.status is AssemblyStatus.NOT_INTROSPECTED

    def unwrap(self) -> Any:
        """Return the constructed value or raise ``LookupError``/the construction error."""
        if self.status is AssemblyStatus.CONSTRUCTED:
            return self.value
        if self.error is not None:
            raise self.error
        raise LookupError(self.reason or "target was not introspected")


NOT_INTROSPECTED = AssemblyResult(AssemblyStatus.NOT_INTROSPECTED)

__all__ = ["NOT_INTROSPECTED", "AssemblyResult", "AssemblyStatus"]

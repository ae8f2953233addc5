"""Container size sampling."""

from __future__ import annotations

from dataclasses import dataclass

from fixture_foundry import constants
from fixture_foundry.domain.envelopes import ContainerEnvelope
from fixture_foundry.generation import randoms


@dataclass(frozen=True, slots=True)
class ContainerSizeInfo:
    """Resolved element-count range for one container property."""

    min_size: int = constants.DEFAULT_CONTAINER_MIN_SIZE
    max_size: int = constants.DEFAULT_CONTAINER_MAX_SIZE

    def __post_init__(self) -> None:
        if self.min_size < 0:
            raise ValueError(f"min_size must be >= 0, got {self.min_size}")
        if self.min_size > self.max_size:
            raise ValueError(
                f"min_size ({self.min_size}) must not exceed max_size ({self.max_size})"
            )

    def with_min_size(self, min_size: int | None) -> ContainerSizeInfo:
        if min_size is None:
            return self
        return ContainerSizeInfo(min_size, max(min_size, self.max_size))

    def with_max_size(self, max_size: int | None) -> ContainerSizeInfo:
        if max_size is None:
            return self
        return ContainerSizeInfo(min(self.min_size, max_size), max_size)

    def random_size(self) -> int:
        if self.min_size == self.max_size:
            return self.min_size
        return randoms.next_int(self.min_size, self.max_size)

    @classmethod
    def from_envelope(
        cls,
        envelope: ContainerEnvelope | None,
        *,
        default: ContainerSizeInfo | None = None,
    ) -> ContainerSizeInfo:
        """Resolve an envelope against defaults, folding ``not_empty`` into ``min_size >= 1``."""
        info = default if default is not None else cls()
        if envelope is None:
            return info
        # Size.max is applied first so an explicit minimum can widen the default maximum.
        info = info.with_max_size(envelope.max_size).with_min_size(envelope.min_size)
        if envelope.not_empty and info.min_size < 1:
            info = info.with_min_size(1)
        return info


def sample_container_size(envelope: ContainerEnvelope) -> int:
    """Draw one size from a resolved envelope, uniformly over ``[min_size, max_size]``.

    ``not_empty`` is not consulted here; fold it into ``min_size`` beforehand
    (see ``ContainerSizeInfo.from_envelope``).
    """
    if envelope.min_size is None or envelope.max_size is None:
        raise ValueError("container envelope must have resolved min_size and max_size")
    if envelope.min_size == envelope.max_size:
        return envelope.min_size
    return randoms.next_int(envelope.min_size, envelope.max_size)


__all__ = ["ContainerSizeInfo", "sample_container_size"]

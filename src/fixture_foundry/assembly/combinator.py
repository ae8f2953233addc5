"""Compose per-property value sources into whole objects.

A property source is either a plain value, reused as-is, or an ``Arbitrary``
wrapping a zero-argument generator. Each ``combine()`` call evaluates every
referenced ``Arbitrary`` at most once, however many times the builder reads it,
and never reuses a value produced for a previous call.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Arbitrary(Generic[T]):
    """Deferred generator for one property value."""

    __slots__ = ("_supplier",)

    def __init__(self, supplier: Callable[[], T]) -> None:
        if not callable(supplier):
            raise TypeError(f"supplier must be callable, got {type(supplier).__name__}")
        self._supplier = supplier

    def sample(self) -> T:
        return self._supplier()

    def map(self, transform: Callable[[T], Any]) -> Arbitrary[Any]:
        return Arbitrary(lambda: transform(self.sample()))

    def __repr__(self) -> str:
        return f"Arbitrary({self._supplier!r})"


class ResolvedProperties(Mapping[str, Any]):
    """Read-through memo over property sources, scoped to one ``combine()`` call."""

    __slots__ = ("_resolved", "_sources")

    def __init__(self, sources: Mapping[str, Any]) -> None:
        self._sources = sources
        self._resolved: dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        if name in self._resolved:
            return self._resolved[name]
        source = self._sources[name]
        value = source.sample() if isinstance(source, Arbitrary) else source
        self._resolved[name] = value
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    @property
    def evaluated(self) -> frozenset[str]:
        return frozenset(self._resolved)


class ObjectCombinator(Generic[T]):
    """Builds one object per ``combine()`` from named property sources."""

    __slots__ = ("_builder", "_sources")

    def __init__(
        self,
        properties: Mapping[str, Any],
        builder: Callable[[Mapping[str, Any]], T],
    ) -> None:
        self._sources = dict(properties)
        self._builder = builder

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(self._sources)

    def combine(self) -> T:
        return self._builder(ResolvedProperties(self._sources))


__all__ = ["Arbitrary", "ObjectCombinator", "ResolvedProperties"]

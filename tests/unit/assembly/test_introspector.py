"""
fixture-foundry — unit tests for primary-constructor assembly

Purpose
- Validate the bind/omit decision for optional and nullable parameters, the
  not-introspected fallback, and exactly-once property evaluation.

What this test file should cover
- Required parameters are always bound; optional non-nullable unresolved ones
  are omitted so the target default applies.
- Nullable parameters are bound to ``None`` when unresolved.
- Abstract / undiscoverable targets yield the sentinel and never raise.
- Construction errors surface as ``FAILED`` results.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Optional
from unittest import mock

import pytest
from structlog.testing import capture_logs

from fixture_foundry.assembly.blueprint import (
    Blueprint,
    BlueprintDiscoveryError,
    ConstructionParameter,
    discover_blueprint,
)
from fixture_foundry.assembly.combinator import Arbitrary
from fixture_foundry.assembly.introspector import (
    PrimaryConstructorIntrospector,
    assemble,
    bind_parameters,
    should_bind,
)
from fixture_foundry.assembly.results import NOT_INTROSPECTED, AssemblyStatus

_UNSET = object()


class Person:
    def __init__(self, name: str, age: object = _UNSET) -> None:
        self.name = name
        self.age = age


class NullablePerson:
    def __init__(self, name: str, age: int | None = 30) -> None:
        self.name = name
        self.age = age


class Shape(abc.ABC):
    @abc.abstractmethod
    def area(self) -> float: ...


@dataclass
class Order:
    order_id: int
    note: Optional[str] = None  # noqa: UP007
    quantity: int = 1


class Exploding:
    def __init__(self, value: int) -> None:
        raise RuntimeError(f"cannot build with {value}")


class MalformedHint:
    def __init__(self, value: "int |") -> None:  # noqa: F722
        self.value = value


def test_should_bind_truth_table() -> None:
    required = ConstructionParameter("name")
    optional = ConstructionParameter("age", optional=True)
    nullable = ConstructionParameter("age", optional=True, nullable=True)

    assert should_bind(required, None)
    assert should_bind(optional, 4)
    assert not should_bind(optional, None)
    assert should_bind(nullable, None)


def test_optional_unresolved_parameter_is_left_to_its_default() -> None:
    blueprint = Blueprint.for_callable(
        Person,
        (ConstructionParameter("name"), ConstructionParameter("age", optional=True)),
    )

    result = assemble(blueprint, {"name": "Ada"})

    assert result.status is AssemblyStatus.CONSTRUCTED
    assert result.value.name == "Ada"
    assert result.value.age is _UNSET
    assert bind_parameters(blueprint, {"name": "Ada"}) == {"name": "Ada"}


def test_nullable_unresolved_parameter_is_bound_to_none() -> None:
    blueprint = Blueprint.for_callable(
        Person,
        (
            ConstructionParameter("name"),
            ConstructionParameter("age", optional=True, nullable=True),
        ),
    )

    result = assemble(blueprint, {"name": "Ada"})

    assert result.is_constructed
    assert result.value.age is None
    assert bind_parameters(blueprint, {"name": "Ada"}) == {"name": "Ada", "age": None}


def test_resolved_value_for_optional_parameter_is_bound() -> None:
    blueprint = discover_blueprint(Person)

    result = assemble(blueprint, {"name": "Ada", "age": 36})

    assert result.unwrap().age == 36


def test_parameters_are_matched_by_property_name() -> None:
    blueprint = Blueprint.for_callable(
        Person,
        (ConstructionParameter("name", property_name="full_name"),),
    )

    result = assemble(blueprint, {"full_name": "Grace Hopper", "name": "ignored"})

    assert result.unwrap().name == "Grace Hopper"


def test_custom_factory_receives_exact_binding_set() -> None:
    seen: list[dict[str, object]] = []

    def factory(bindings: object) -> str:
        seen.append(dict(bindings))  # type: ignore[call-overload]
        return "built"

    blueprint = Blueprint(
        Person,
        (
            ConstructionParameter("name"),
            ConstructionParameter("age", optional=True),
            ConstructionParameter("nickname", optional=True, nullable=True),
        ),
        factory,
    )

    assert assemble(blueprint, {"name": "Linus"}).unwrap() == "built"
    assert seen == [{"name": "Linus", "nickname": None}]


def test_each_property_is_evaluated_exactly_once_per_call() -> None:
    calls = {"name": 0, "age": 0}

    def supply(key: str, value: object) -> Arbitrary[object]:
        def supplier() -> object:
            calls[key] += 1
            return value

        return Arbitrary(supplier)

    blueprint = Blueprint(
        Person,
        (ConstructionParameter("name"), ConstructionParameter("age", optional=True)),
        lambda bindings: Person(**bindings),
    )
    sources = {"name": supply("name", "Ada"), "age": supply("age", 36)}

    first = assemble(blueprint, sources)
    second = assemble(blueprint, sources)

    assert first.unwrap() is not second.unwrap()
    assert calls == {"name": 2, "age": 2}


def test_abstract_target_returns_sentinel_without_raising() -> None:
    blueprint = Blueprint(Shape, (), lambda bindings: Shape())  # type: ignore[abstract]

    result = assemble(blueprint, {})

    assert result.status is AssemblyStatus.NOT_INTROSPECTED
    assert result.is_not_introspected


def test_construction_error_is_reported_as_failed_result() -> None:
    blueprint = discover_blueprint(Exploding)

    with capture_logs() as logs:
        result = assemble(blueprint, {"value": 3})

    assert result.status is AssemblyStatus.FAILED
    assert isinstance(result.error, RuntimeError)
    assert logs[0]["event"] == "assembly_construction_failed"
    assert logs[0]["log_level"] == "warning"
    assert logs[0]["error_type"] == "RuntimeError"


def test_introspector_matches_only_concrete_classes() -> None:
    introspector = PrimaryConstructorIntrospector()

    assert introspector.match(Person)
    assert not introspector.match(Shape)
    assert not introspector.match(len)
    assert not introspector.match(AssemblyStatus)


def test_introspector_discovers_nullable_and_optional_flags() -> None:
    result = PrimaryConstructorIntrospector().introspect(Order, {"order_id": 7})

    assert result.is_constructed
    assert result.value == Order(order_id=7, note=None, quantity=1)

    blueprint = discover_blueprint(Order)
    note = blueprint.parameter("note")
    quantity = blueprint.parameter("quantity")
    assert note is not None and note.optional and note.nullable
    assert quantity is not None and quantity.optional and not quantity.nullable


def test_introspector_binds_nullable_default_explicitly() -> None:
    result = PrimaryConstructorIntrospector().introspect(NullablePerson, {"name": "Ada"})

    assert result.unwrap().age is None


def test_introspector_returns_sentinel_for_abstract_target() -> None:
    result = PrimaryConstructorIntrospector().introspect(Shape, {})

    assert result.is_not_introspected


def test_introspector_logs_and_degrades_when_discovery_fails() -> None:
    introspector = PrimaryConstructorIntrospector()

    with mock.patch(
        "fixture_foundry.assembly.introspector.discover_blueprint",
        side_effect=BlueprintDiscoveryError("no signature"),
    ), capture_logs() as logs:
        result = introspector.introspect(Person, {"name": "Ada"})

    assert result.is_not_introspected
    assert [entry["event"] for entry in logs] == ["assembly_blueprint_discovery_failed"]
    assert logs[0]["log_level"] == "warning"


def test_malformed_annotation_degrades_to_sentinel() -> None:
    with pytest.raises(BlueprintDiscoveryError, match="cannot inspect constructor"):
        discover_blueprint(MalformedHint)

    with capture_logs() as logs:
        result = PrimaryConstructorIntrospector().introspect(MalformedHint, {"value": 1})

    assert result.is_not_introspected
    assert [entry["event"] for entry in logs] == ["assembly_blueprint_discovery_failed"]


def test_default_sentinel_is_shared() -> None:
    assert NOT_INTROSPECTED.status is AssemblyStatus.NOT_INTROSPECTED
    assert NOT_INTROSPECTED.reason is None

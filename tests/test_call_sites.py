"""Tests for invoking and building call sites."""

from dataclasses import dataclass
from typing import Any

import pytest

from callwire.call_sites import (
    ConstantCallSite,
    ConstructorCallSite,
    DefaultConstructCallSite,
    ProviderExpression,
)
from callwire.compiler import CallSiteCompiler
from callwire.constructors import declared_constructors
from callwire.provider_call_sites import (
    FactoryCallSite,
    ScopedCallSite,
    ServiceProviderCallSite,
    ServicesCallSite,
    SingletonCallSite,
)
from tests.helpers import StubProvider


class ConstructionError(Exception):
    pass


@dataclass
class Engine:
    horsepower: int = 100


@dataclass
class Car:
    engine: Engine
    name: str


class PositionalOnly:
    def __init__(self, engine: Engine, /, name: str) -> None:
        self.engine = engine
        self.name = name


class KeywordOnly:
    def __init__(self, *, engine: Engine, name: str) -> None:
        self.engine = engine
        self.name = name


class ExplodingConstructor:
    def __init__(self, engine: Engine) -> None:
        msg = "engine failure"
        raise ConstructionError(msg)


class ExplodingDefault:
    def __init__(self) -> None:
        msg = "no default"
        raise ConstructionError(msg)


def _constructor_call_site(implementation_type: type[Any], *children: Any) -> ConstructorCallSite:
    (constructor,) = declared_constructors(implementation_type)
    return ConstructorCallSite(constructor, tuple(children))


class TestConstantCallSite:
    def test_invoke_returns_value_without_provider_interaction(self) -> None:
        provider = StubProvider()
        value = object()

        assert ConstantCallSite(value).invoke(provider) is value
        assert provider.requests == []

    def test_build_binds_value(self) -> None:
        value = object()
        provider_expr = ProviderExpression()

        source = ConstantCallSite(value).build(provider_expr)

        assert provider_expr.namespace[source] is value


class TestConstructorCallSite:
    def test_invoke_constructs_with_child_values(self) -> None:
        call_site = _constructor_call_site(
            Car,
            DefaultConstructCallSite(Engine),
            ConstantCallSite("roadster"),
        )

        car = call_site.invoke(StubProvider())

        assert car == Car(engine=Engine(), name="roadster")

    def test_rejects_misaligned_children(self) -> None:
        (constructor,) = declared_constructors(Car)

        with pytest.raises(ValueError, match="declares 2 parameters"):
            ConstructorCallSite(constructor, (ConstantCallSite("roadster"),))

    def test_build_inserts_conversion_per_argument(self) -> None:
        call_site = _constructor_call_site(
            Car,
            DefaultConstructCallSite(Engine),
            ConstantCallSite("roadster"),
        )
        provider_expr = ProviderExpression()

        source = call_site.build(provider_expr)

        assert source.count("_cast(") == 2
        assert "engine=" in source
        assert "name=" in source
        assert Engine in provider_expr.namespace.values()
        assert str in provider_expr.namespace.values()

    @pytest.mark.parametrize("implementation_type", [PositionalOnly, KeywordOnly])
    def test_invoke_and_compiled_respect_parameter_kinds(
        self,
        implementation_type: type[Any],
        compiler: CallSiteCompiler,
    ) -> None:
        call_site = _constructor_call_site(
            implementation_type,
            DefaultConstructCallSite(Engine),
            ConstantCallSite("roadster"),
        )
        provider = StubProvider()

        invoked = call_site.invoke(provider)
        compiled = compiler.compile(call_site)(provider)

        assert (invoked.engine, invoked.name) == (Engine(), "roadster")
        assert (compiled.engine, compiled.name) == (Engine(), "roadster")

    def test_invoke_surfaces_constructor_error(self) -> None:
        call_site = _constructor_call_site(ExplodingConstructor, DefaultConstructCallSite(Engine))

        with pytest.raises(ConstructionError, match="engine failure") as exc_info:
            call_site.invoke(StubProvider())

        assert type(exc_info.value) is ConstructionError

    def test_compiled_surfaces_constructor_error(self, compiler: CallSiteCompiler) -> None:
        call_site = _constructor_call_site(ExplodingConstructor, DefaultConstructCallSite(Engine))
        compiled = compiler.compile(call_site)

        with pytest.raises(ConstructionError, match="engine failure") as exc_info:
            compiled(StubProvider())

        assert type(exc_info.value) is ConstructionError


class TestDefaultConstructCallSite:
    def test_invoke_creates_new_instance_each_time(self) -> None:
        call_site = DefaultConstructCallSite(Engine)
        provider = StubProvider()

        first = call_site.invoke(provider)
        second = call_site.invoke(provider)

        assert first == Engine()
        assert first is not second

    def test_build_calls_type_without_arguments(self) -> None:
        provider_expr = ProviderExpression()

        source = DefaultConstructCallSite(Engine).build(provider_expr)

        assert source.endswith("()")
        assert provider_expr.namespace[source[:-2]] is Engine

    def test_invoke_surfaces_constructor_error(self, compiler: CallSiteCompiler) -> None:
        call_site = DefaultConstructCallSite(ExplodingDefault)

        with pytest.raises(ConstructionError, match="no default"):
            call_site.invoke(StubProvider())
        with pytest.raises(ConstructionError, match="no default"):
            compiler.compile(call_site)(StubProvider())


class TestProviderCallSites:
    def test_factory_receives_provider(self, compiler: CallSiteCompiler) -> None:
        received: list[Any] = []

        def factory(provider: Any) -> Engine:
            received.append(provider)
            return Engine(horsepower=250)

        call_site = FactoryCallSite(factory)
        provider = StubProvider()

        assert call_site.invoke(provider) == Engine(horsepower=250)
        assert compiler.compile(call_site)(provider) == Engine(horsepower=250)
        assert received == [provider, provider]

    def test_services_call_site_preserves_order(self, compiler: CallSiteCompiler) -> None:
        call_site = ServicesCallSite(
            Engine,
            (ConstantCallSite(Engine(1)), ConstantCallSite(Engine(2))),
        )
        provider = StubProvider()

        assert call_site.invoke(provider) == [Engine(1), Engine(2)]
        assert compiler.compile(call_site)(provider) == [Engine(1), Engine(2)]

    def test_service_provider_call_site_returns_provider(self, compiler: CallSiteCompiler) -> None:
        provider = StubProvider()

        assert ServiceProviderCallSite().invoke(provider) is provider
        assert compiler.compile(ServiceProviderCallSite())(provider) is provider

    def test_scoped_call_site_caches_in_provider(self, compiler: CallSiteCompiler) -> None:
        key = object()
        call_site = ScopedCallSite(key, DefaultConstructCallSite(Engine))
        provider = StubProvider()

        invoked = call_site.invoke(provider)
        compiled = compiler.compile(call_site)(provider)

        assert invoked is compiled
        assert provider.cache[key] is invoked

    def test_singleton_call_site_caches_in_root(self, compiler: CallSiteCompiler) -> None:
        key = object()
        call_site = SingletonCallSite(key, DefaultConstructCallSite(Engine))
        provider = StubProvider()

        first = compiler.compile(call_site)(provider)

        assert call_site.invoke(provider) is first
        assert provider.root.cache[key] is first

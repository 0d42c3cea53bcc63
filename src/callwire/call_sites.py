"""Call sites: execution plans for producing one service instance.

Every call site supports two operating modes. ``invoke`` runs the plan now
against a live provider. ``build`` renders the same computation as a Python
expression that ``CallSiteCompiler`` turns into a reusable function, so the
resolution walk happens once and the compiled function runs many times.

Call sites are immutable once built and safe to share between threads.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from inspect import Parameter
from typing import TYPE_CHECKING, Any, Protocol, cast

from callwire.constructors import ConstructorInfo

if TYPE_CHECKING:
    from callwire.protocol import ServiceProviderProtocol

_CAST_NAME = "_cast"


@dataclass(slots=True)
class ProviderExpression:
    """The provider operand of a call site being built.

    ``source`` is the Python expression naming the provider inside generated
    code. ``namespace`` collects the objects generated code refers to; it is
    shared by every expression derived from the same root expression.
    """

    source: str = "provider"
    namespace: dict[str, Any] = field(default_factory=dict)

    def bind(self, value: Any, *, prefix: str) -> str:
        """Bind ``value`` into the namespace and return the name referring to it.

        Args:
            value: Object referenced by generated code.
            prefix: Readable prefix of the generated name.

        """
        name = f"_{prefix}_{len(self.namespace)}"
        self.namespace[name] = value
        return name

    def bind_cast(self) -> str:
        """Return the name of ``typing.cast`` inside generated code."""
        self.namespace.setdefault(_CAST_NAME, cast)
        return _CAST_NAME

    def derive(self, source: str) -> ProviderExpression:
        """Return an expression for another provider sharing this namespace.

        Args:
            source: Python expression naming the other provider.

        """
        return ProviderExpression(source=source, namespace=self.namespace)


class CallSite(Protocol):
    """Protocol for an execution plan producing one service instance."""

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        """Produce the instance now.

        Args:
            provider: Provider the plan runs against.

        """

    def build(self, provider_expr: ProviderExpression) -> str:
        """Render the plan as a Python expression equivalent to ``invoke``.

        Args:
            provider_expr: Expression naming the provider in generated code.

        """


@dataclass(frozen=True, slots=True)
class ConstantCallSite:
    """Call site returning a precomputed value, such as a parameter default."""

    value: Any

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        return self.value

    def build(self, provider_expr: ProviderExpression) -> str:
        return provider_expr.bind(self.value, prefix="constant")


@dataclass(frozen=True, slots=True)
class ConstructorCallSite:
    """Call site invoking a chosen constructor with resolved arguments.

    ``parameter_call_sites`` holds exactly one child per formal parameter of
    ``constructor``, in declaration order.
    """

    constructor: ConstructorInfo
    parameter_call_sites: tuple[CallSite, ...]

    def __post_init__(self) -> None:
        if len(self.parameter_call_sites) != len(self.constructor.parameters):
            msg = (
                f"Constructor {self.constructor!r} declares "
                f"{len(self.constructor.parameters)} parameters but "
                f"{len(self.parameter_call_sites)} call sites were given."
            )
            raise ValueError(msg)

    @property
    def implementation_type(self) -> type[Any]:
        return self.constructor.implementation_type

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        values = [call_site.invoke(provider) for call_site in self.parameter_call_sites]
        args, kwargs = self.constructor.bind_arguments(values)
        return self.constructor.implementation_type(*args, **kwargs)

    def build(self, provider_expr: ProviderExpression) -> str:
        cast_name = provider_expr.bind_cast()
        type_name = provider_expr.bind(self.constructor.implementation_type, prefix="type")
        arguments: list[str] = []
        for parameter, call_site in zip(
            self.constructor.parameters,
            self.parameter_call_sites,
            strict=True,
        ):
            parameter_type_name = provider_expr.bind(parameter.parameter_type, prefix="param_type")
            value = f"{cast_name}({parameter_type_name}, {call_site.build(provider_expr)})"
            arguments.append(_argument_source(parameter.name, value, parameter.kind))
        return f"{type_name}({', '.join(arguments)})"


@dataclass(frozen=True, slots=True)
class DefaultConstructCallSite:
    """Call site constructing a type through its zero-argument construction path.

    Produced when a type has no injectable constructor or more than one.
    """

    implementation_type: type[Any]

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        return self.implementation_type()

    def build(self, provider_expr: ProviderExpression) -> str:
        return f"{provider_expr.bind(self.implementation_type, prefix='type')}()"


def build_sequence(call_sites: Sequence[CallSite], provider_expr: ProviderExpression) -> str:
    """Render call sites as a Python list expression, preserving order."""
    return f"[{', '.join(call_site.build(provider_expr) for call_site in call_sites)}]"


def _argument_source(name: str, value: str, kind: Any) -> str:
    if kind is Parameter.POSITIONAL_ONLY:
        return value
    return f"{name}={value}"

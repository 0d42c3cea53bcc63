"""Constructor discovery for implementation types.

A class declares one constructor per ``typing.overload`` of its ``__init__``,
or a single constructor described by its call signature when it has no
overloads. Python has no access modifiers, so every declared constructor is
public and a constructor is injectable when it declares at least one formal
parameter.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, get_type_hints

from typing_extensions import get_overloads

_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ConstructorParameter:
    """A formal parameter of a constructor."""

    name: str
    """The parameter name, used for keyword arguments."""
    kind: Any
    """The ``inspect.Parameter`` kind."""
    parameter_type: Any
    """The declared type used as the dependency contract."""
    default: Any = Parameter.empty
    """The declared default value, or ``Parameter.empty``."""

    @property
    def has_default(self) -> bool:
        """Return whether the parameter declares a default value."""
        return self.default is not Parameter.empty


@dataclass(frozen=True, slots=True)
class ConstructorInfo:
    """A constructor signature of an implementation type."""

    implementation_type: type[Any]
    """The class constructed by calling it with bound arguments."""
    parameters: tuple[ConstructorParameter, ...]
    """Formal parameters in declaration order."""

    def bind_arguments(self, values: Sequence[Any]) -> tuple[list[Any], dict[str, Any]]:
        """Split positionally aligned values into call arguments.

        Positional-only parameters are passed positionally, every other
        parameter by keyword.

        Args:
            values: One value per formal parameter, in declaration order.

        """
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter, value in zip(self.parameters, values, strict=True):
            if parameter.kind is Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value
        return args, kwargs

    def __repr__(self) -> str:
        parameters = ", ".join(parameter.name for parameter in self.parameters)
        return f"{self.implementation_type.__qualname__}({parameters})"


def declared_constructors(implementation_type: type[Any]) -> list[ConstructorInfo]:
    """Return every constructor signature the class declares.

    Args:
        implementation_type: Class whose constructors are listed.

    """
    initializer = implementation_type.__init__
    overloads = get_overloads(initializer) if inspect.isfunction(initializer) else []
    if overloads:
        return [
            ConstructorInfo(
                implementation_type=implementation_type,
                parameters=_formal_parameters(
                    signature=inspect.signature(overload),
                    hint_sources=(overload,),
                    skip_first_parameter=True,
                ),
            )
            for overload in overloads
        ]

    try:
        signature = inspect.signature(implementation_type)
    except (TypeError, ValueError):
        # builtins without introspectable signatures
        return []
    # the signature comes from __new__ when __init__ is not overridden
    declaring_function = (
        implementation_type.__new__ if initializer is object.__init__ else initializer
    )
    return [
        ConstructorInfo(
            implementation_type=implementation_type,
            parameters=_formal_parameters(
                signature=signature,
                hint_sources=(declaring_function, implementation_type),
                skip_first_parameter=False,
            ),
        ),
    ]


def injectable_constructors(implementation_type: type[Any]) -> list[ConstructorInfo]:
    """Return the constructors eligible for dependency-driven selection.

    Args:
        implementation_type: Class whose constructors are filtered.

    """
    return [
        constructor
        for constructor in declared_constructors(implementation_type)
        if is_injectable(constructor)
    ]


def is_injectable(constructor: ConstructorInfo) -> bool:
    """Return whether a constructor declares at least one formal parameter."""
    return len(constructor.parameters) != 0


def _formal_parameters(
    *,
    signature: inspect.Signature,
    hint_sources: tuple[Callable[..., Any] | type[Any], ...],
    skip_first_parameter: bool,
) -> tuple[ConstructorParameter, ...]:
    parameters = tuple(signature.parameters.values())
    if skip_first_parameter and parameters:
        parameters = parameters[1:]

    hints = _resolved_type_hints(hint_sources)
    return tuple(
        ConstructorParameter(
            name=parameter.name,
            kind=parameter.kind,
            parameter_type=_parameter_type(parameter, hints),
            default=parameter.default,
        )
        for parameter in parameters
        if parameter.kind not in _VARIADIC_KINDS
    )


def _resolved_type_hints(
    sources: tuple[Callable[..., Any] | type[Any], ...],
) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    for source in sources:
        try:
            source_hints = get_type_hints(source, include_extras=True)
        except (AttributeError, NameError, TypeError):
            continue
        for name, hint in source_hints.items():
            hints.setdefault(name, hint)
    hints.pop("return", None)
    return hints


def _parameter_type(parameter: Parameter, hints: dict[str, Any]) -> Any:
    # class annotations never type an unannotated parameter
    if parameter.annotation is Parameter.empty:
        return Any
    return hints.get(parameter.name, parameter.annotation)

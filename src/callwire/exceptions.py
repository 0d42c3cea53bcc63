from __future__ import annotations

from typing import Any

from callwire.type_checks import is_runtime_class


def _type_name(service_type: Any) -> str:
    if isinstance(service_type, str):
        return service_type
    if is_runtime_class(service_type):
        return service_type.__qualname__
    return repr(service_type)


class CallwireError(Exception):
    """Base class of the errors raised while registering or resolving services.

    Failures raised by a constructor or factory are never wrapped in it; they
    reach the caller as raised.
    """


class CallwireInvalidRegistrationError(CallwireError):
    """Signal an invalid service registration.

    Raised by ``ServiceDescriptor`` and the ``ServiceCollection.add_*`` helpers
    when a registration names zero or several of implementation type, instance
    and factory, when the implementation type is not a class, or when an
    instance registration is given a non-singleton lifetime.
    """


class CallwireUnresolvedDependencyError(CallwireError):
    """Signal that a constructor parameter could not be resolved.

    Raised while building a constructor call site when the provider has no
    registration for a parameter's declared type and the parameter declares no
    default value.

    Typical fixes include registering the parameter type, giving the parameter
    a default value, or registering a factory for the implementation type.
    """

    def __init__(self, service_type: Any, implementation_type: type[Any]) -> None:
        self.service_type = service_type
        self.implementation_type = implementation_type
        super().__init__(
            f"Unable to resolve service for type '{_type_name(service_type)}' "
            f"while attempting to activate '{_type_name(implementation_type)}'.",
        )


class CallwireServiceNotRegisteredError(CallwireError):
    """Signal that a requested contract type has no registration.

    Raised by ``ServiceProvider.resolve``. Use ``ServiceProvider.get_service``
    when a missing registration should produce ``None`` instead.
    """

    def __init__(self, service_type: Any) -> None:
        self.service_type = service_type
        super().__init__(f"No service for type '{_type_name(service_type)}' has been registered.")


class CallwireCircularDependencyError(CallwireError):
    """Signal a contract type that depends on itself.

    Raised by ``ServiceProvider.get_service_call_site`` when a contract type is
    requested again while its own call site is still being built.
    """

    def __init__(self, service_type: Any) -> None:
        self.service_type = service_type
        super().__init__(
            f"A circular dependency was detected for the service of type "
            f"'{_type_name(service_type)}'.",
        )

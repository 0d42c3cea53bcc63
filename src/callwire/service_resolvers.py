from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, cast

from callwire.call_sites import (
    CallSite,
    ConstantCallSite,
    ConstructorCallSite,
    DefaultConstructCallSite,
)
from callwire.constructors import injectable_constructors
from callwire.exceptions import CallwireUnresolvedDependencyError
from callwire.lifetime import Lifetime
from callwire.provider_call_sites import FactoryCallSite

if TYPE_CHECKING:
    from callwire.descriptors import ServiceDescriptor, ServiceFactory
    from callwire.protocol import ServiceProviderProtocol

logger = logging.getLogger(__name__)


class ServiceResolver(Protocol):
    """Protocol for building the call site of a single registration."""

    @property
    def descriptor(self) -> ServiceDescriptor:
        """Return the registration this resolver builds call sites for."""

    @property
    def lifetime(self) -> Lifetime:
        """Return the lifetime of the registration."""

    def create_call_site(
        self,
        provider: ServiceProviderProtocol,
        in_progress: set[Any],
    ) -> CallSite:
        """Build the call site producing an instance of the registration.

        Args:
            provider: Provider used to resolve dependencies recursively.
            in_progress: Contract types currently being resolved on this call path.

        """


class _DescriptorResolver:
    __slots__ = ("_descriptor",)

    def __init__(self, descriptor: ServiceDescriptor) -> None:
        self._descriptor = descriptor

    @property
    def descriptor(self) -> ServiceDescriptor:
        return self._descriptor

    @property
    def lifetime(self) -> Lifetime:
        return self._descriptor.lifetime

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._descriptor!r})"


class ConstructorServiceResolver(_DescriptorResolver):
    """Builds call sites for registrations constructed from an implementation type.

    When exactly one injectable constructor
    exists, its parameters are resolved through the provider and a
    ``ConstructorCallSite`` is built. With no injectable constructor, or more
    than one, the type is constructed through its zero-argument path. There is no
    fallback to another constructor when the selected one fails to resolve.
    """

    __slots__ = ()

    @property
    def implementation_type(self) -> type[Any]:
        return cast("type[Any]", self._descriptor.implementation_type)

    def create_call_site(
        self,
        provider: ServiceProviderProtocol,
        in_progress: set[Any],
    ) -> CallSite:
        """Build the call site for the implementation type.

        Args:
            provider: Provider used to resolve constructor parameters recursively.
            in_progress: Contract types currently being resolved, forwarded unchanged.

        Raises:
            CallwireUnresolvedDependencyError: A parameter type is not resolvable
                and declares no default value.

        """
        implementation_type = self.implementation_type
        constructors = injectable_constructors(implementation_type)

        if len(constructors) != 1:
            logger.debug(
                "Default-constructing '%s': %d injectable constructors",
                implementation_type.__qualname__,
                len(constructors),
            )
            return DefaultConstructCallSite(implementation_type)

        constructor = constructors[0]
        parameter_call_sites: list[CallSite] = []
        for parameter in constructor.parameters:
            call_site = provider.get_service_call_site(parameter.parameter_type, in_progress)
            if call_site is None and parameter.has_default:
                call_site = ConstantCallSite(parameter.default)
            if call_site is None:
                raise CallwireUnresolvedDependencyError(
                    parameter.parameter_type,
                    implementation_type,
                )
            parameter_call_sites.append(call_site)

        logger.debug("Selected constructor %r", constructor)
        return ConstructorCallSite(constructor, tuple(parameter_call_sites))


class InstanceServiceResolver(_DescriptorResolver):
    """Builds call sites for registrations holding a preexisting instance."""

    __slots__ = ()

    def create_call_site(
        self,
        provider: ServiceProviderProtocol,
        in_progress: set[Any],
    ) -> CallSite:
        return ConstantCallSite(self._descriptor.instance)


class FactoryServiceResolver(_DescriptorResolver):
    """Builds call sites for registrations produced by a factory."""

    __slots__ = ()

    def create_call_site(
        self,
        provider: ServiceProviderProtocol,
        in_progress: set[Any],
    ) -> CallSite:
        return FactoryCallSite(cast("ServiceFactory", self._descriptor.factory))


def resolver_for(descriptor: ServiceDescriptor) -> ServiceResolver:
    """Return the resolver matching how a registration produces instances.

    Args:
        descriptor: Validated registration.

    """
    if descriptor.implementation_type is not None:
        return ConstructorServiceResolver(descriptor)
    if descriptor.factory is not None:
        return FactoryServiceResolver(descriptor)
    return InstanceServiceResolver(descriptor)

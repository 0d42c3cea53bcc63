from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar, overload

from callwire.call_sites import CallSite
from callwire.compiler import CallSiteCompiler, CompiledCallSite
from callwire.descriptors import ServiceCollection, ServiceDescriptor
from callwire.exceptions import (
    CallwireCircularDependencyError,
    CallwireServiceNotRegisteredError,
)
from callwire.lifetime import Lifetime
from callwire.provider_call_sites import (
    ScopedCallSite,
    ServiceProviderCallSite,
    ServicesCallSite,
    SingletonCallSite,
)
from callwire.service_resolvers import resolver_for
from callwire.type_checks import services_item_type

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ServiceProvider:
    """Resolve registered services through call sites.

    Requesting a contract type builds its call site tree once, turns it into an
    accessor and caches the accessor per contract type. Accessors are compiled
    functions by default; pass ``compile_call_sites=False`` to run call sites
    through ``invoke`` instead.

    ``create_scope`` returns a child provider that shares registrations,
    accessors and singletons with the root but owns its own scoped instances.

    Special contract types:

    - ``ServiceProvider`` resolves to the provider performing the resolution.
    - ``list[T]`` resolves to one instance per registration of ``T``, in
      registration order.
    """

    def __init__(
        self,
        services: ServiceCollection,
        *,
        compile_call_sites: bool = True,
    ) -> None:
        """Initialize a root provider over a registration table.

        Args:
            services: Registration table. Registrations added after the first
                resolution of a contract type do not affect that contract type.
            compile_call_sites: Compile call sites into functions instead of
                invoking them directly.

        """
        self._services = services
        self._compile_call_sites = compile_call_sites
        self._root: ServiceProvider = self
        self._compiler = CallSiteCompiler()
        self._realized_services: dict[Any, CompiledCallSite | None] = {}
        self._resolved_services: dict[object, Any] = {}
        self._lock = threading.RLock()

    @property
    def root(self) -> ServiceProvider:
        """Return the root provider owning singleton instances."""
        return self._root

    @property
    def is_root(self) -> bool:
        """Return whether this provider is the root provider."""
        return self._root is self

    def create_scope(self) -> ServiceProvider:
        """Create a child provider with its own scoped instances."""
        root = self._root
        scope = ServiceProvider(root._services, compile_call_sites=root._compile_call_sites)
        scope._root = root
        scope._compiler = root._compiler
        scope._realized_services = root._realized_services
        return scope

    @overload
    def get_service(self, service_type: type[T]) -> T | None: ...

    @overload
    def get_service(self, service_type: Any) -> Any: ...

    def get_service(self, service_type: Any) -> Any:
        """Resolve a contract type, returning ``None`` when it is not registered.

        Args:
            service_type: Contract type to resolve.

        """
        accessor = self._realize_service(service_type)
        if accessor is None:
            return None
        return accessor(self)

    @overload
    def resolve(self, service_type: type[T]) -> T: ...

    @overload
    def resolve(self, service_type: Any) -> Any: ...

    def resolve(self, service_type: Any) -> Any:
        """Resolve a contract type.

        Args:
            service_type: Contract type to resolve.

        Raises:
            CallwireServiceNotRegisteredError: The contract type has no registration.
            CallwireUnresolvedDependencyError: A constructor parameter cannot be resolved.
            CallwireCircularDependencyError: The contract type depends on itself.

        """
        accessor = self._realize_service(service_type)
        if accessor is None:
            raise CallwireServiceNotRegisteredError(service_type)
        return accessor(self)

    def resolve_all(self, service_type: type[T]) -> list[T]:
        """Resolve one instance per registration of a contract type.

        Args:
            service_type: Contract type to resolve.

        """
        return self.resolve(list[service_type])  # type: ignore[valid-type]

    def get_service_call_site(
        self,
        service_type: Any,
        in_progress: set[Any],
    ) -> CallSite | None:
        """Build the call site for a contract type, or return ``None`` when unregistered.

        ``service_type`` is tracked in ``in_progress`` while its call site is
        being built.

        Args:
            service_type: Contract type to resolve.
            in_progress: Contract types currently being resolved on this call path.

        Raises:
            CallwireCircularDependencyError: ``service_type`` is already in progress.

        """
        if service_type in in_progress:
            raise CallwireCircularDependencyError(service_type)

        in_progress.add(service_type)
        try:
            return self._create_call_site(service_type, in_progress)
        finally:
            in_progress.discard(service_type)

    def get_or_create_service(self, key: object, create: Callable[[], Any]) -> Any:
        """Return the instance cached under ``key``, creating it on first use.

        Args:
            key: Cache key identifying the registration.
            create: Callable producing the instance when it is not cached yet.

        """
        with self._lock:
            if key in self._resolved_services:
                return self._resolved_services[key]
            instance = create()
            self._resolved_services[key] = instance
            return instance

    def _realize_service(self, service_type: Any) -> CompiledCallSite | None:
        realized_services = self._realized_services
        if service_type in realized_services:
            return realized_services[service_type]

        call_site = self.get_service_call_site(service_type, set())
        accessor: CompiledCallSite | None
        if call_site is None:
            accessor = None
        elif self._compile_call_sites:
            accessor = self._compiler.compile(call_site)
        else:
            accessor = call_site.invoke
        logger.debug("Realized service %r: %r", service_type, call_site)
        return realized_services.setdefault(service_type, accessor)

    def _create_call_site(self, service_type: Any, in_progress: set[Any]) -> CallSite | None:
        if service_type is ServiceProvider:
            return ServiceProviderCallSite()

        item_type = services_item_type(service_type)
        if item_type is not None:
            return ServicesCallSite(
                item_type,
                tuple(
                    self._create_descriptor_call_site(descriptor, in_progress)
                    for descriptor in self._services.find_all(item_type)
                ),
            )

        descriptor = self._services.find_last(service_type)
        if descriptor is None:
            return None
        return self._create_descriptor_call_site(descriptor, in_progress)

    def _create_descriptor_call_site(
        self,
        descriptor: ServiceDescriptor,
        in_progress: set[Any],
    ) -> CallSite:
        call_site = resolver_for(descriptor).create_call_site(self, in_progress)
        if descriptor.lifetime is Lifetime.SCOPED:
            return ScopedCallSite(descriptor, call_site)
        if descriptor.lifetime is Lifetime.SINGLETON:
            return SingletonCallSite(descriptor, call_site)
        return call_site

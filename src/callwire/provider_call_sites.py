"""Call sites created by the provider around registrations.

These wrap the call sites built by service resolvers with lifetime caching,
or produce values the provider owns itself: factories, ``list[T]`` requests
and the provider instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from callwire.call_sites import CallSite, ProviderExpression, build_sequence

if TYPE_CHECKING:
    from callwire.descriptors import ServiceFactory
    from callwire.protocol import ServiceProviderProtocol


@dataclass(frozen=True, slots=True)
class FactoryCallSite:
    """Call site calling a registered factory with the resolving provider."""

    factory: ServiceFactory

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        return self.factory(provider)

    def build(self, provider_expr: ProviderExpression) -> str:
        factory_name = provider_expr.bind(self.factory, prefix="factory")
        return f"{factory_name}({provider_expr.source})"


@dataclass(frozen=True, slots=True)
class ServicesCallSite:
    """Call site producing a list with one instance per registration of ``item_type``."""

    item_type: Any
    service_call_sites: tuple[CallSite, ...]

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        return [call_site.invoke(provider) for call_site in self.service_call_sites]

    def build(self, provider_expr: ProviderExpression) -> str:
        return build_sequence(self.service_call_sites, provider_expr)


@dataclass(frozen=True, slots=True)
class ServiceProviderCallSite:
    """Call site returning the provider the plan runs against."""

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        return provider

    def build(self, provider_expr: ProviderExpression) -> str:
        return provider_expr.source


@dataclass(frozen=True, slots=True)
class ScopedCallSite:
    """Call site caching its instance in the provider it runs against.

    ``key`` identifies the registration, so every call site built for the same
    registration shares one instance per scope.
    """

    key: object
    service_call_site: CallSite

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        return provider.get_or_create_service(
            self.key,
            lambda: self.service_call_site.invoke(provider),
        )

    def build(self, provider_expr: ProviderExpression) -> str:
        key_name = provider_expr.bind(self.key, prefix="key")
        inner = self.service_call_site.build(provider_expr)
        return f"{provider_expr.source}.get_or_create_service({key_name}, lambda: {inner})"


@dataclass(frozen=True, slots=True)
class SingletonCallSite:
    """Call site caching its instance in the root provider.

    The wrapped call site runs against the root provider, so a singleton never
    captures instances owned by a child scope.
    """

    key: object
    service_call_site: CallSite

    def invoke(self, provider: ServiceProviderProtocol) -> Any:
        root = provider.root
        return root.get_or_create_service(
            self.key,
            lambda: self.service_call_site.invoke(root),
        )

    def build(self, provider_expr: ProviderExpression) -> str:
        key_name = provider_expr.bind(self.key, prefix="key")
        root_expr = provider_expr.derive(f"{provider_expr.source}.root")
        inner = self.service_call_site.build(root_expr)
        return f"{root_expr.source}.get_or_create_service({key_name}, lambda: {inner})"

from callwire.call_sites import (
    CallSite,
    ConstantCallSite,
    ConstructorCallSite,
    DefaultConstructCallSite,
    ProviderExpression,
)
from callwire.compiler import CallSiteCompiler
from callwire.constructors import ConstructorInfo, ConstructorParameter, injectable_constructors
from callwire.descriptors import ServiceCollection, ServiceDescriptor
from callwire.exceptions import (
    CallwireCircularDependencyError,
    CallwireError,
    CallwireInvalidRegistrationError,
    CallwireServiceNotRegisteredError,
    CallwireUnresolvedDependencyError,
)
from callwire.lifetime import Lifetime
from callwire.provider import ServiceProvider
from callwire.service_resolvers import ConstructorServiceResolver, resolver_for

__all__ = [
    "CallSite",
    "CallSiteCompiler",
    "CallwireCircularDependencyError",
    "CallwireError",
    "CallwireInvalidRegistrationError",
    "CallwireServiceNotRegisteredError",
    "CallwireUnresolvedDependencyError",
    "ConstantCallSite",
    "ConstructorCallSite",
    "ConstructorInfo",
    "ConstructorParameter",
    "ConstructorServiceResolver",
    "DefaultConstructCallSite",
    "Lifetime",
    "ProviderExpression",
    "ServiceCollection",
    "ServiceDescriptor",
    "ServiceProvider",
    "injectable_constructors",
    "resolver_for",
]

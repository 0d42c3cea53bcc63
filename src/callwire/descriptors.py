from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from callwire.exceptions import CallwireInvalidRegistrationError
from callwire.lifetime import Lifetime
from callwire.type_checks import is_runtime_class

ServiceFactory = Callable[[Any], Any]
"""A callable receiving the resolving provider and returning the service instance."""

_UNSET: Any = object()


@dataclass(frozen=True, eq=False, kw_only=True)
class ServiceDescriptor:
    """A registration of one implementation for a contract type.

    Exactly one of ``implementation_type``, ``instance`` or ``factory`` is set.
    Descriptors compare and hash by identity, so two registrations of the same
    implementation are still distinct cache keys.
    """

    service_type: Any
    """The contract type requested by callers."""
    lifetime: Lifetime
    """How long produced instances are reused."""
    implementation_type: type[Any] | None = None
    """The class constructed to satisfy the contract."""
    instance: Any = _UNSET
    """A preexisting instance returned for the contract."""
    factory: ServiceFactory | None = None
    """A callable producing the instance from the resolving provider."""

    def __post_init__(self) -> None:
        if not isinstance(self.lifetime, Lifetime):
            msg = f"Lifetime '{self.lifetime!r}' for '{self.service_type!r}' is not a Lifetime."
            raise CallwireInvalidRegistrationError(msg)
        provided = [
            self.implementation_type is not None,
            self.instance is not _UNSET,
            self.factory is not None,
        ]
        if provided.count(True) != 1:
            msg = (
                f"Registration for '{self.service_type!r}' must specify exactly one of "
                "implementation type, instance or factory."
            )
            raise CallwireInvalidRegistrationError(msg)
        if self.implementation_type is not None and not is_runtime_class(self.implementation_type):
            msg = (
                f"Implementation '{self.implementation_type!r}' registered for "
                f"'{self.service_type!r}' is not a class."
            )
            raise CallwireInvalidRegistrationError(msg)
        if self.factory is not None and not callable(self.factory):
            msg = f"Factory registered for '{self.service_type!r}' is not callable."
            raise CallwireInvalidRegistrationError(msg)
        if self.has_instance and self.lifetime is not Lifetime.SINGLETON:
            msg = f"Instance registered for '{self.service_type!r}' must use the singleton lifetime."
            raise CallwireInvalidRegistrationError(msg)

    @property
    def has_instance(self) -> bool:
        """Return whether this descriptor holds a preexisting instance."""
        return self.instance is not _UNSET

    def __repr__(self) -> str:
        if self.implementation_type is not None:
            target = f"implementation_type={self.implementation_type!r}"
        elif self.factory is not None:
            target = f"factory={self.factory!r}"
        else:
            target = f"instance={self.instance!r}"
        return (
            f"ServiceDescriptor(service_type={self.service_type!r}, "
            f"lifetime={self.lifetime.value}, {target})"
        )


class ServiceCollection:
    """Holds all service descriptors registered for a provider.

    Each contract type maps to its registrations in registration order. The most
    recent registration wins for single-service resolution; all of them are
    returned for ``list[T]`` requests.
    """

    def __init__(self) -> None:
        self._descriptors_by_type: dict[Any, list[ServiceDescriptor]] = {}

    def add(self, descriptor: ServiceDescriptor) -> ServiceCollection:
        """Add a service descriptor to the collection.

        Args:
            descriptor: Validated registration to append.

        """
        self._descriptors_by_type.setdefault(descriptor.service_type, []).append(descriptor)
        return self

    def add_type(
        self,
        service_type: Any,
        implementation_type: type[Any] | None = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> ServiceCollection:
        """Register a class constructed through its constructor.

        Args:
            service_type: Contract type requested by callers.
            implementation_type: Class to construct. Defaults to ``service_type``.
            lifetime: Reuse policy for constructed instances.

        """
        return self.add(
            ServiceDescriptor(
                service_type=service_type,
                implementation_type=(
                    service_type if implementation_type is None else implementation_type
                ),
                lifetime=lifetime,
            ),
        )

    def add_transient(
        self,
        service_type: Any,
        implementation_type: type[Any] | None = None,
    ) -> ServiceCollection:
        """Register a class constructed anew for every request."""
        return self.add_type(service_type, implementation_type, lifetime=Lifetime.TRANSIENT)

    def add_scoped(
        self,
        service_type: Any,
        implementation_type: type[Any] | None = None,
    ) -> ServiceCollection:
        """Register a class constructed once per scope."""
        return self.add_type(service_type, implementation_type, lifetime=Lifetime.SCOPED)

    def add_singleton(
        self,
        service_type: Any,
        implementation_type: type[Any] | None = None,
    ) -> ServiceCollection:
        """Register a class constructed once for the root provider."""
        return self.add_type(service_type, implementation_type, lifetime=Lifetime.SINGLETON)

    def add_instance(self, service_type: Any, instance: Any) -> ServiceCollection:
        """Register a preexisting instance.

        Args:
            service_type: Contract type requested by callers.
            instance: Object returned for every request.

        """
        return self.add(
            ServiceDescriptor(
                service_type=service_type,
                instance=instance,
                lifetime=Lifetime.SINGLETON,
            ),
        )

    def add_factory(
        self,
        service_type: Any,
        factory: ServiceFactory,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> ServiceCollection:
        """Register a factory receiving the resolving provider.

        Args:
            service_type: Contract type requested by callers.
            factory: Callable producing the instance.
            lifetime: Reuse policy for produced instances.

        """
        return self.add(
            ServiceDescriptor(
                service_type=service_type,
                factory=factory,
                lifetime=lifetime,
            ),
        )

    def find_last(self, service_type: Any) -> ServiceDescriptor | None:
        """Get the most recent registration for a contract type, if any."""
        descriptors = self._descriptors_by_type.get(service_type)
        if not descriptors:
            return None
        return descriptors[-1]

    def find_all(self, service_type: Any) -> list[ServiceDescriptor]:
        """Get every registration for a contract type in registration order."""
        return list(self._descriptors_by_type.get(service_type, ()))

    def __contains__(self, service_type: object) -> bool:
        return bool(self._descriptors_by_type.get(service_type))

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        for descriptors in self._descriptors_by_type.values():
            yield from descriptors

    def __len__(self) -> int:
        return sum(len(descriptors) for descriptors in self._descriptors_by_type.values())

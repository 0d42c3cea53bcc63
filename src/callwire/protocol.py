from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from callwire.call_sites import CallSite


class ServiceProviderProtocol(Protocol):
    """Protocol for the provider that owns call sites and drives resolution."""

    @property
    def root(self) -> ServiceProviderProtocol:
        """Return the root provider owning singleton instances."""

    def get_service_call_site(
        self,
        service_type: Any,
        in_progress: set[Any],
    ) -> CallSite | None:
        """Build the call site for a contract type, or return ``None`` when unregistered.

        Args:
            service_type: Contract type to resolve.
            in_progress: Contract types currently being resolved on this call path.

        """

    def get_or_create_service(self, key: object, create: Callable[[], Any]) -> Any:
        """Return the instance cached under ``key``, creating it on first use.

        Args:
            key: Cache key identifying the registration.
            create: Callable producing the instance when it is not cached yet.

        """

    def get_service(self, service_type: Any) -> Any:
        """Resolve a contract type, returning ``None`` when it is not registered.

        Args:
            service_type: Contract type to resolve.

        """

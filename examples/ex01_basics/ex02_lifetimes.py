"""Lifetimes: transient, scoped and singleton registrations.

Transient services are constructed on every request, scoped services once per
scope, and singletons once for the root provider and all of its scopes.
"""

from __future__ import annotations

from callwire import ServiceCollection, ServiceProvider


class RequestId:
    pass


class Clock:
    pass


class Handler:
    pass


def main() -> None:
    services = ServiceCollection()
    services.add_transient(Handler)
    services.add_scoped(RequestId)
    services.add_singleton(Clock)
    provider = ServiceProvider(services)

    print(f"transient_same={provider.resolve(Handler) is provider.resolve(Handler)}")
    # => transient_same=False

    first_scope = provider.create_scope()
    second_scope = provider.create_scope()
    same_in_scope = first_scope.resolve(RequestId) is first_scope.resolve(RequestId)
    same_across_scopes = first_scope.resolve(RequestId) is second_scope.resolve(RequestId)
    print(f"scoped_same_in_scope={same_in_scope}")  # => scoped_same_in_scope=True
    print(f"scoped_same_across_scopes={same_across_scopes}")  # => scoped_same_across_scopes=False

    print(f"singleton_same={first_scope.resolve(Clock) is provider.resolve(Clock)}")
    # => singleton_same=True


if __name__ == "__main__":
    main()

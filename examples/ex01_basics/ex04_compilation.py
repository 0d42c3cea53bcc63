"""Compilation: inspect the function generated for a call site.

The provider compiles every call site tree into a plain Python function the
first time a contract type is requested. ``CallSiteCompiler.render`` shows the
generated source.
"""

from __future__ import annotations

from callwire import CallSiteCompiler, ServiceCollection, ServiceProvider


class Settings:
    pass


class Repository:
    def __init__(self, settings: Settings, table: str = "users") -> None:
        self.settings = settings
        self.table = table


def main() -> None:
    services = ServiceCollection()
    services.add_singleton(Settings)
    services.add_transient(Repository)
    provider = ServiceProvider(services)

    call_site = provider.get_service_call_site(Repository, set())
    assert call_site is not None
    code, _ = CallSiteCompiler().render(call_site)

    print(code.splitlines()[0])  # => def resolve_service(provider):
    print(f"uses_root_cache={'provider.root.get_or_create_service' in code}")
    # => uses_root_cache=True

    repository = provider.resolve(Repository)
    print(f"table={repository.table}")  # => table=users


if __name__ == "__main__":
    main()

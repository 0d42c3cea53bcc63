"""Quickstart: constructor wiring from type hints.

Register plain classes, resolve only the top-level service, and see how
callwire builds the whole dependency chain from constructor annotations.
"""

from __future__ import annotations

from callwire import ServiceCollection, ServiceProvider


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    services = ServiceCollection()
    services.add_singleton(Database)
    services.add_transient(UserRepository)
    services.add_transient(UserService)
    provider = ServiceProvider(services)

    service = provider.resolve(UserService)

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database


if __name__ == "__main__":
    main()

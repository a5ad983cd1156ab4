"""Quickstart: describe components as data, get wired singletons back.

Map identifiers to classes, ask for the top-level component, and let
confwire build its dependencies from constructor annotations.
"""

from __future__ import annotations

from confwire import Container, class_id


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
    container = Container(
        {
            class_id(Database): Database,
            "users": UserService,
        },
    )
    service = container.get("users")

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database
    print(f"same_instance={container.get('users') is service}")  # => same_instance=True
    print(
        f"database_shared={service.repository.database is container.get(class_id(Database))}",
    )  # => database_shared=True


if __name__ == "__main__":
    main()

"""Recipes: constructor arguments, properties and method calls.

A recipe mapping names the class, lists constructor arguments under
``"__init__()"``, assigns properties with ``"$name"`` keys and calls methods
with ``"name()"`` keys, in the order they are written.
"""

from __future__ import annotations

from confwire import Container


class Transport:
    def __init__(self, host: str, port: int = 25) -> None:
        self.host = host
        self.port = port


class Mailer:
    sender: str = "root@localhost"

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self.filters: list[str] = []

    def add_filters(self, *names: str) -> None:
        self.filters.extend(names)


def main() -> None:
    container = Container(
        {
            "transport": {
                "class": "__main__.Transport",
                "__init__()": {"host": "smtp.example.com"},
            },
            "mailer": {
                "class": Mailer,
                "__init__()": ["transport"],
                "$sender": "noreply@example.com",
                "add_filters()": ["spam", "virus"],
            },
        },
    )
    mailer = container.get("mailer")

    print(f"transport={mailer.transport.host}:{mailer.transport.port}")  # => transport=smtp.example.com:25
    print(f"sender={mailer.sender}")  # => sender=noreply@example.com
    print(f"filters={','.join(mailer.filters)}")  # => filters=spam,virus
    print(f"transport_shared={mailer.transport is container.get('transport')}")  # => transport_shared=True


if __name__ == "__main__":
    main()

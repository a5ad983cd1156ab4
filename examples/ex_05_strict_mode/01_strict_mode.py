"""Strict mode: verify resolved values against declared types.

With ``strict_mode=True`` every property and parameter value is checked
against its annotation before it is used. Primitives must match exactly,
objects must be instances of the declared class.
"""

from __future__ import annotations

from confwire import Container, TypeMismatchError


class Pool:
    size: int = 1

    def __init__(self, name: str) -> None:
        self.name = name


def main() -> None:
    config = {
        "pool": {"class": Pool, "__init__()": ["main"], "$size": "10"},
    }

    relaxed = Container(config)
    print(f"relaxed_size={relaxed.get('pool').size!r}")  # => relaxed_size='10'

    strict = Container(config, strict_mode=True)
    try:
        strict.get("pool")
    except TypeMismatchError as error:
        print(f"expected={error.expected} given={error.given}")  # => expected=int given=str


if __name__ == "__main__":
    main()

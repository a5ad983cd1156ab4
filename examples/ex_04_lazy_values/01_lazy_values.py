"""Lazy values: functions in the configuration run at build time.

A plain function (or lambda) given as a value is called with the container
when the value is needed. Its result is used verbatim.
"""

from __future__ import annotations

from confwire import Container, IContainer


class Settings:
    def __init__(self, dsn: str = "sqlite://") -> None:
        self.dsn = dsn


class Engine:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


def engine_dsn(container: IContainer) -> str:
    return container.get("settings").dsn.upper()


def main() -> None:
    container = Container(
        {
            "settings": {"class": Settings, "__init__()": ["postgres://db"]},
            "engine": {"class": Engine, "__init__()": [engine_dsn]},
            "echo": {"class": Engine, "__init__()": [lambda c: f"{c.has('engine')}"]},
        },
    )

    print(f"dsn={container.get('engine').dsn}")  # => dsn=POSTGRES://DB
    print(f"echo={container.get('echo').dsn}")  # => echo=True


if __name__ == "__main__":
    main()

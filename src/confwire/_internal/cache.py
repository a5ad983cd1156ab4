from __future__ import annotations

from typing import Any


class InstanceCache:
    """Hold the singleton built for each identifier.

    Entries are written once and never replaced or evicted; callers serialize
    the check-and-create path.
    """

    __slots__ = ("_instances",)

    def __init__(self) -> None:
        self._instances: dict[str, Any] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def get(self, identifier: str) -> Any:
        return self._instances[identifier]

    def add(self, identifier: str, instance: Any) -> None:
        if identifier in self._instances:
            msg = f"Identifier '{identifier}' is already cached"
            raise RuntimeError(msg)
        self._instances[identifier] = instance

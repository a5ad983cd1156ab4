from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IContainer(ABC):
    """Interface for container-like objects.

    Lazy values in a configuration receive an ``IContainer`` so they can pull
    other components without depending on the concrete container class.
    """

    @abstractmethod
    def get(self, id: str) -> Any:  # noqa: A002
        """Return the component registered under ``id``.

        Raises:
            NotFoundError: When nothing is configured for ``id``.
            ContainerError: When the component exists but cannot be built.

        """

    @abstractmethod
    def has(self, id: str) -> bool:  # noqa: A002
        """Return whether ``id`` can be satisfied. Never raises."""

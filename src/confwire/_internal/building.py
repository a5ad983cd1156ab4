from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from itertools import count

from confwire.exceptions import CircularReferenceError

_building_ids = count()


class BuildingSet:
    """Track the classes under construction in the current execution context.

    A class stays in the set while its constructor arguments are resolved, it
    is instantiated and its member directives run, whichever identifier it is
    built for. The chain lives in a context variable, so threads and asyncio
    tasks resolving concurrently never observe each other's entries.
    """

    __slots__ = ("_chain",)

    def __init__(self) -> None:
        self._chain: ContextVar[tuple[str, ...]] = ContextVar(
            f"confwire_building_{next(_building_ids)}",
            default=(),
        )

    def __contains__(self, class_name: object) -> bool:
        return class_name in self._chain.get()

    def __len__(self) -> int:
        return len(self._chain.get())

    @property
    def class_names(self) -> tuple[str, ...]:
        return self._chain.get()

    @contextmanager
    def building(self, class_name: str) -> Iterator[None]:
        """Mark ``class_name`` as under construction for the duration of the block.

        Raises:
            CircularReferenceError: When ``class_name`` is already being built.

        """
        chain = self._chain.get()
        if class_name in chain:
            raise CircularReferenceError((*chain, class_name))

        token = self._chain.set((*chain, class_name))
        try:
            yield
        finally:
            self._chain.reset(token)

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Union

from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from confwire.container_interface import IContainer

CLASS_KEY = "class"
"""Recipe key naming the class to instantiate."""

CONSTRUCTOR_KEY = "__init__()"
"""Recipe key holding the constructor argument list."""

PROPERTY_SIGIL = "$"
"""Prefix of recipe keys that assign a public property."""

METHOD_MARKER = "()"
"""Suffix of recipe keys that call a public method."""

ClassRef: TypeAlias = Union[str, type]
"""A dotted class path (``"package.module.Class"``) or the class object itself."""

Arguments: TypeAlias = Union[Sequence[Any], Mapping[str, Any]]
"""Positional argument list, or a mapping from parameter name to raw value."""

Recipe: TypeAlias = Union[ClassRef, Mapping[str, Any]]
"""A bare class reference or a structured recipe mapping."""

LazyValue: TypeAlias = Callable[["IContainer"], Any]
"""A function invoked with the container whose return value is used verbatim."""


def class_id(cls: type) -> str:
    """Return the identifier auto-wiring uses for ``cls``.

    The identifier is the dotted import path of the class, for example
    ``"myapp.storage.Database"``. Register a component under this key to have
    it injected into every parameter annotated with ``cls``.
    """
    return f"{cls.__module__}.{cls.__qualname__}"

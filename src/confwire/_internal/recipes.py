from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from confwire._internal.type_checks import is_constructible, is_runtime_class, locate_class
from confwire.exceptions import ContainerError, NotFoundError
from confwire.types import (
    CLASS_KEY,
    CONSTRUCTOR_KEY,
    METHOD_MARKER,
    PROPERTY_SIGIL,
    Recipe,
    class_id,
)


class DirectiveKind(enum.Enum):
    """What a member directive does to a freshly built instance."""

    PROPERTY = "property"
    METHOD = "method"


@dataclass(frozen=True, slots=True)
class MemberDirective:
    """A single property assignment or method call taken from a recipe."""

    kind: DirectiveKind
    name: str
    value: Any


@dataclass(frozen=True, slots=True)
class ClassRecipe:
    """A parsed recipe: the class to build and what to do with it."""

    identifier: str
    cls: type[Any]
    arguments: Sequence[Any] | Mapping[str, Any] = ()
    directives: tuple[MemberDirective, ...] = field(default=())

    @property
    def class_name(self) -> str:
        return class_id(self.cls)


class RecipeRegistry:
    """Read-only map from identifiers to recipes.

    The registry snapshots the configuration at construction time. Recipes are
    parsed on demand, when an identifier is first built.
    """

    __slots__ = ("_config",)

    def __init__(self, config: Mapping[str, Recipe]) -> None:
        if not isinstance(config, Mapping):
            msg = f"Configuration must be a mapping, got '{type(config).__name__}'!"
            raise ContainerError(msg)

        for key in config:
            if not isinstance(key, str):
                msg = f"Configuration keys must be strings, got {key!r}!"
                raise ContainerError(msg)

        self._config: Mapping[str, Recipe] = MappingProxyType(dict(config))

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._config

    def __iter__(self) -> Iterator[str]:
        return iter(self._config)

    def __len__(self) -> int:
        return len(self._config)

    def raw(self, identifier: str) -> Recipe:
        """Return the configured recipe for ``identifier`` unparsed.

        Raises:
            NotFoundError: When ``identifier`` has no entry.

        """
        try:
            return self._config[identifier]
        except KeyError:
            msg = f"Component '{identifier}' is not defined!"
            raise NotFoundError(msg, identifier) from None

    def class_ref(self, identifier: str) -> str | type[Any]:
        """Return the class name (or class) the recipe of ``identifier`` builds.

        Raises:
            NotFoundError: When the entry is missing or does not name a class.

        """
        recipe = self.raw(identifier)
        if isinstance(recipe, str) or is_runtime_class(recipe):
            return recipe
        if not isinstance(recipe, Mapping):
            msg = f"Component '{identifier}' define error!"
            raise NotFoundError(msg, identifier)
        if CLASS_KEY not in recipe:
            msg = f"Class not defined in component '{identifier}'!"
            raise NotFoundError(msg, identifier)

        class_ref = recipe[CLASS_KEY]
        if not isinstance(class_ref, str) and not is_runtime_class(class_ref):
            msg = f"Class name must be a string in component '{identifier}'!"
            raise NotFoundError(msg, identifier)
        return class_ref

    def target_class(self, identifier: str) -> type[Any]:
        """Locate the constructible class the recipe of ``identifier`` builds.

        Raises:
            NotFoundError: When the class is unknown or cannot be instantiated.

        """
        class_ref = self.class_ref(identifier)
        if isinstance(class_ref, str):
            try:
                cls = locate_class(class_ref)
            except Exception as e:
                msg = f"Class '{class_ref}' could not be imported!"
                raise NotFoundError(msg, identifier) from e
        else:
            cls = class_ref
        if cls is None:
            msg = f"Class '{class_ref}' not found!"
            raise NotFoundError(msg, identifier)
        if not is_constructible(cls):
            msg = f"Class '{class_id(cls)}' not instantiable!"
            raise NotFoundError(msg, identifier)
        return cls

    def recipe(self, identifier: str) -> ClassRecipe:
        """Parse the recipe of ``identifier``.

        Raises:
            NotFoundError: When the recipe names no constructible class.
            ContainerError: When the recipe carries an unknown key or a
                malformed argument list.

        """
        cls = self.target_class(identifier)
        raw = self._config[identifier]
        if not isinstance(raw, Mapping):
            return ClassRecipe(identifier=identifier, cls=cls)

        arguments: Sequence[Any] | Mapping[str, Any] = ()
        directives: list[MemberDirective] = []
        for key, value in raw.items():
            if key == CLASS_KEY:
                continue
            if key == CONSTRUCTOR_KEY:
                arguments = _argument_list(value, f"constructor of component '{identifier}'")
            elif isinstance(key, str) and key.startswith(PROPERTY_SIGIL):
                directives.append(
                    MemberDirective(DirectiveKind.PROPERTY, key[len(PROPERTY_SIGIL) :], value),
                )
            elif isinstance(key, str) and key.endswith(METHOD_MARKER):
                name = key[: -len(METHOD_MARKER)]
                directives.append(
                    MemberDirective(
                        DirectiveKind.METHOD,
                        name,
                        _argument_list(value, f"method '{name}' of component '{identifier}'"),
                    ),
                )
            else:
                msg = f"Unknown param '{key}' in component '{identifier}'!"
                raise ContainerError(msg)

        return ClassRecipe(
            identifier=identifier,
            cls=cls,
            arguments=arguments,
            directives=tuple(directives),
        )


def _argument_list(value: Any, where: str) -> Sequence[Any] | Mapping[str, Any]:
    if isinstance(value, Mapping):
        for name in value:
            if not isinstance(name, str):
                msg = f"Argument names of {where} must be strings, got {name!r}!"
                raise ContainerError(msg)
        return value
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return value
    msg = f"Arguments of {where} must be a list or a mapping, got '{type(value).__name__}'!"
    raise ContainerError(msg)

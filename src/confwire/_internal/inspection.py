from __future__ import annotations

import inspect
import types
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    ClassVar,
    Final,
    NewType,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from confwire._internal.type_checks import is_runtime_class
from confwire.exceptions import ContainerError
from confwire.types import class_id

_MISSING = object()
_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_NONE_TYPE = type(None)


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Information about a constructor/method parameter."""

    name: str
    kind: inspect._ParameterKind
    declared_type: type[Any] | None
    nullable: bool
    has_default: bool
    default: Any = None

    @property
    def accepts_position(self) -> bool:
        return self.kind is not inspect.Parameter.KEYWORD_ONLY


@dataclass(frozen=True, slots=True)
class PropertyInfo:
    """Information about a public attribute targeted by a property directive."""

    name: str
    declared_type: type[Any] | None
    nullable: bool
    writable: bool


def type_name(declared_type: type[Any] | None) -> str:
    """Return the name used for ``declared_type`` in error messages."""
    if declared_type is None:
        return "untyped"
    if declared_type is _NONE_TYPE:
        return "None"
    if declared_type.__module__ == "builtins":
        return declared_type.__qualname__
    return class_id(declared_type)


def normalize_annotation(annotation: Any) -> tuple[type[Any] | None, bool]:
    """Reduce an annotation to a single checkable class and a nullability flag.

    ``Annotated`` metadata is dropped, ``NewType`` is unwrapped, generic aliases
    collapse to their origin and ``X | None`` becomes ``(X, True)``. Annotations
    without a single runtime class (``Any``, ``TypeVar``, ``Literal``) yield
    ``(None, nullable)``.

    Raises:
        TypeError: For unions of more than one non-``None`` member.

    """
    if annotation is inspect.Parameter.empty or annotation is Any:
        return None, False
    if annotation is None or annotation is _NONE_TYPE:
        return _NONE_TYPE, True
    if isinstance(annotation, TypeVar):
        return None, False
    if isinstance(annotation, NewType):
        return normalize_annotation(annotation.__supertype__)

    origin = get_origin(annotation)
    if origin is Annotated or origin is Final:
        return normalize_annotation(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        members = [arg for arg in args if arg is not _NONE_TYPE]
        if len(members) != 1:
            msg = f"union annotation '{annotation}' does not name a single type"
            raise TypeError(msg)
        declared_type, _ = normalize_annotation(members[0])
        return declared_type, len(members) != len(args)
    if origin is not None:
        return (origin, False) if is_runtime_class(origin) else (None, False)
    if is_runtime_class(annotation):
        return annotation, False
    return None, False


class TypeInspector:
    """Describe constructors, methods and properties of constructible classes.

    Results are cached per class, so repeated builds of the same class read
    its signatures only once.
    """

    def __init__(self) -> None:
        self._parameters_cache: dict[tuple[type[Any], str | None], tuple[ParameterInfo, ...]] = {}
        self._class_hints_cache: dict[type[Any], dict[str, Any]] = {}
        self._variadics_cache: dict[tuple[type[Any], str | None], tuple[bool, bool]] = {}

    def parameters(self, cls: type[Any], method_name: str | None = None) -> tuple[ParameterInfo, ...]:
        """Return the ordered parameters of the constructor or of ``method_name``.

        ``self``/``cls`` and variadic parameters are omitted.

        Args:
            cls: Class whose constructor or method is inspected.
            method_name: Method to inspect, or None for the constructor.

        Raises:
            ContainerError: When annotations cannot be evaluated or a parameter
                is annotated with a union of several types.

        """
        cache_key = (cls, method_name)
        cached = self._parameters_cache.get(cache_key)
        if cached is not None:
            return cached

        where = _describe(cls, method_name)
        target, skip_first = self._get_callable(cls, method_name)
        try:
            signature = inspect.signature(target, eval_str=True)
        except (NameError, SyntaxError) as e:
            msg = f"Cannot evaluate annotations of {where}: {e}"
            raise ContainerError(msg) from e
        except (ValueError, TypeError):
            # Some builtin and extension types expose no signature.
            signature = inspect.Signature()

        parameters = list(signature.parameters.values())
        if skip_first and parameters:
            parameters = parameters[1:]

        result = tuple(
            self._parameter_info(parameter, where)
            for parameter in parameters
            if parameter.kind not in _VARIADIC_KINDS
        )
        self._parameters_cache[cache_key] = result
        return result

    def variadics(self, cls: type[Any], method_name: str | None = None) -> tuple[bool, bool]:
        """Return whether the constructor or method declares ``*args`` and ``**kwargs``."""
        cache_key = (cls, method_name)
        cached = self._variadics_cache.get(cache_key)
        if cached is not None:
            return cached

        target, _ = self._get_callable(cls, method_name)
        try:
            kinds = {p.kind for p in inspect.signature(target).parameters.values()}
        except (ValueError, TypeError):
            result = (True, True)
        else:
            result = (
                inspect.Parameter.VAR_POSITIONAL in kinds,
                inspect.Parameter.VAR_KEYWORD in kinds,
            )
        self._variadics_cache[cache_key] = result
        return result

    def has_public_method(self, cls: type[Any], name: str) -> bool:
        if name.startswith("_"):
            return False
        member = inspect.getattr_static(cls, name, _MISSING)
        if isinstance(member, (staticmethod, classmethod)):
            return True
        return member is not _MISSING and inspect.isroutine(member)

    def property_info(self, cls: type[Any], name: str, instance: object = None) -> PropertyInfo | None:
        """Return the public property ``name`` of ``cls``, or None if there is none.

        Properties are found among class annotations (including inherited ones),
        ``property`` descriptors, plain class attributes and, when ``instance`` is
        given, attributes the constructor stored on the instance.

        Args:
            cls: Class that should expose the property.
            name: Attribute name without the property sigil.
            instance: Built instance, used to find attributes set in ``__init__``.

        """
        if name.startswith("_"):
            return None

        where = f"property '{name}' of class '{class_id(cls)}'"
        member = inspect.getattr_static(cls, name, _MISSING)
        hints = self._class_hints(cls)

        if isinstance(member, property):
            annotation = self._property_annotation(member, where)
            writable = member.fset is not None
        elif name in hints:
            if get_origin(hints[name]) is ClassVar:
                return None
            annotation = hints[name]
            writable = True
        elif member is not _MISSING:
            if inspect.isroutine(member) or isinstance(member, (staticmethod, classmethod)):
                return None
            annotation = inspect.Parameter.empty
            writable = True
        elif name in getattr(instance, "__dict__", {}):
            annotation = inspect.Parameter.empty
            writable = True
        else:
            return None

        declared_type, nullable = _normalize(annotation, where)
        return PropertyInfo(name=name, declared_type=declared_type, nullable=nullable, writable=writable)

    def _class_hints(self, cls: type[Any]) -> dict[str, Any]:
        cached = self._class_hints_cache.get(cls)
        if cached is not None:
            return cached

        try:
            hints = get_type_hints(cls)
        except (NameError, TypeError) as e:
            msg = f"Cannot evaluate annotations of class '{class_id(cls)}': {e}"
            raise ContainerError(msg) from e
        self._class_hints_cache[cls] = hints
        return hints

    def _property_annotation(self, member: property, where: str) -> Any:
        accessor = member.fget if member.fget is not None else member.fset
        if accessor is None:
            return inspect.Parameter.empty
        try:
            hints = get_type_hints(accessor)
        except (NameError, TypeError) as e:
            msg = f"Cannot evaluate annotations of {where}: {e}"
            raise ContainerError(msg) from e
        if "return" in hints:
            return hints["return"]
        setter_hints = [value for key, value in hints.items() if key != "return"]
        return setter_hints[0] if setter_hints else inspect.Parameter.empty

    def _parameter_info(self, parameter: inspect.Parameter, where: str) -> ParameterInfo:
        declared_type, nullable = _normalize(parameter.annotation, f"parameter '{parameter.name}' of {where}")
        has_default = parameter.default is not inspect.Parameter.empty
        return ParameterInfo(
            name=parameter.name,
            kind=parameter.kind,
            declared_type=declared_type,
            nullable=nullable,
            has_default=has_default,
            default=parameter.default if has_default else None,
        )

    def _get_callable(self, cls: type[Any], method_name: str | None) -> tuple[Any, bool]:
        if method_name is None:
            return cls, False

        member = inspect.getattr_static(cls, method_name)
        if isinstance(member, staticmethod):
            return member.__func__, False
        target = getattr(cls, method_name)
        # Class access already binds classmethods and builtin class methods.
        return target, not (inspect.ismethod(target) or inspect.isbuiltin(target))


def _normalize(annotation: Any, where: str) -> tuple[type[Any] | None, bool]:
    try:
        return normalize_annotation(annotation)
    except TypeError as e:
        msg = f"Unsupported type of {where}: {e}"
        raise ContainerError(msg) from e


def _describe(cls: type[Any], method_name: str | None) -> str:
    return f"method '{method_name or '__init__'}' of class '{class_id(cls)}'"

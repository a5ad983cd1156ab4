from __future__ import annotations

import inspect
import logging
import threading
import types
from collections.abc import Mapping, Sequence
from typing import Any

from confwire._internal.autoregistration import AutoInstantiationPolicy
from confwire._internal.building import BuildingSet
from confwire._internal.cache import InstanceCache
from confwire._internal.inspection import ParameterInfo, TypeInspector, type_name
from confwire._internal.recipes import DirectiveKind, MemberDirective, RecipeRegistry
from confwire._internal.strict import StrictTypeChecker
from confwire._internal.type_checks import is_dotted_path, locate_class
from confwire.container_interface import IContainer
from confwire.exceptions import (
    ConfwireError,
    ContainerError,
    MissingParameterError,
    NotFoundError,
)
from confwire.types import Arguments, LazyValue, Recipe, class_id

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Build and cache components described by a configuration mapping.

    Each key of ``config`` is an identifier; each value is a recipe: either a
    class (or its dotted import path) or a mapping such as::

        {
            "class": "myapp.mail.Mailer",
            "__init__()": ["myapp.mail.Transport", 25],
            "$sender": "noreply@example.com",
            "add_filter()": ["myapp.mail.SpamFilter"],
        }

    ``"__init__()"`` holds constructor arguments, ``"$name"`` keys assign
    public properties and ``"name()"`` keys call public methods, in recipe
    order. Argument lists are positional sequences or mappings from parameter
    name to value.

    Every raw value is resolved before use: a configured identifier becomes
    its component, the dotted path of a concrete class not in the
    configuration becomes a fresh instance of it, a plain function is called
    with the container and its result is used verbatim, and anything else is
    a literal. Parameters without an explicit argument are auto-wired from
    their annotation: a parameter annotated with ``Database`` receives the
    component configured under ``class_id(Database)``, then its default, then
    a fresh ``Database()``.

    Every identifier is built at most once; later ``get`` calls return the
    cached instance.
    """

    def __init__(self, config: Mapping[str, Recipe], strict_mode: bool = False) -> None:  # noqa: FBT001, FBT002
        """Initialize a container over a snapshot of ``config``.

        Args:
            config: Mapping from identifiers to recipes. Later changes to the
                mapping are not seen by the container.
            strict_mode: Verify every resolved property and parameter value
                against its declared type, and make ``has`` confirm that the
                configured class can be instantiated.

        Raises:
            ContainerError: When ``config`` is not a mapping or has a
                non-string key.

        """
        self._registry = RecipeRegistry(config)
        self._strict_mode = strict_mode
        self._instances = InstanceCache()
        self._inspector = TypeInspector()
        self._checker = StrictTypeChecker() if strict_mode else None
        self._auto_instantiation_policy = AutoInstantiationPolicy()
        self._building = BuildingSet()
        self._lock = threading.RLock()

    @property
    def strict_mode(self) -> bool:
        return self._strict_mode

    def has(self, id: str) -> bool:  # noqa: A002
        """Return whether ``id`` is cached or configured.

        In strict mode the configured recipe must also name a class that can
        be located and instantiated. Never raises.
        """
        return self._has(id, strict=self._strict_mode)

    def get(self, id: str) -> Any:  # noqa: A002
        """Return the component for ``id``, building it on first use.

        Raises:
            NotFoundError: When ``id`` is not configured, or its recipe names
                no class that can be located and instantiated.
            ContainerError: When the component cannot be built or wired.

        """
        if not isinstance(id, str):
            msg = f"Component identifier must be a string, got {id!r}!"
            raise NotFoundError(msg)

        if id in self._instances:
            return self._instances.get(id)

        with self._lock:
            if id in self._instances:
                return self._instances.get(id)

            recipe = self._registry.recipe(id)
            instance = self._build(id, recipe.cls, recipe.arguments, recipe.directives)
            self._instances.add(id, instance)
            logger.debug("Cached component '%s' (%s)", id, recipe.class_name)
            return instance

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(components={len(self._registry)}, "
            f"built={len(self._instances)}, strict_mode={self._strict_mode})"
        )

    def _has(self, id: object, *, strict: bool) -> bool:  # noqa: A002
        if not isinstance(id, str):
            return False
        if id in self._instances:
            return True
        if id not in self._registry:
            return False
        if strict:
            try:
                self._registry.target_class(id)
            except NotFoundError:
                return False
        return True

    def _build(
        self,
        key: str,
        cls: type[Any],
        arguments: Arguments,
        directives: Sequence[MemberDirective],
    ) -> Any:
        class_name = class_id(cls)
        with self._building.building(class_name):
            args, kwargs = self._resolve_arguments(cls, None, arguments)

            logger.debug("Instantiating '%s' for '%s'", class_name, key)
            try:
                instance = cls(*args, **kwargs)
            except ConfwireError:
                raise
            except Exception as e:
                msg = f"Instantiate class '{class_name}' error!"
                raise ContainerError(msg) from e

            for directive in directives:
                if directive.kind is DirectiveKind.PROPERTY:
                    self._set_property(instance, cls, directive)
                else:
                    self._call_method(instance, cls, directive)

        return instance

    def _auto_instantiate(self, cls: type[Any]) -> Any:
        logger.debug("Auto-instantiating unconfigured class '%s'", class_id(cls))
        return self._build(class_id(cls), cls, (), ())

    def _set_property(self, instance: Any, cls: type[Any], directive: MemberDirective) -> None:
        name = directive.name
        prop = self._inspector.property_info(cls, name, instance)
        if prop is None:
            msg = f"Property '{name}' not defined in class '{class_id(cls)}' or not public!"
            raise ContainerError(msg)
        if not prop.writable:
            msg = f"Property '{name}' in class '{class_id(cls)}' is read-only!"
            raise ContainerError(msg)

        value = self._resolve_value(directive.value)
        if self._checker is not None:
            self._checker.check_property(cls, prop, value)

        try:
            setattr(instance, name, value)
        except ConfwireError:
            raise
        except Exception as e:
            msg = f"Set property '{name}' in class '{class_id(cls)}' error!"
            raise ContainerError(msg) from e

    def _call_method(self, instance: Any, cls: type[Any], directive: MemberDirective) -> None:
        name = directive.name
        if not self._inspector.has_public_method(cls, name):
            msg = f"Method '{name}' not defined in class '{class_id(cls)}' or not public!"
            raise ContainerError(msg)

        args, kwargs = self._resolve_arguments(cls, name, directive.value)
        try:
            getattr(instance, name)(*args, **kwargs)
        except ConfwireError:
            raise
        except Exception as e:
            msg = f"Call method '{name}' in class '{class_id(cls)}' error!"
            raise ContainerError(msg) from e

    def _resolve_arguments(
        self,
        cls: type[Any],
        method_name: str | None,
        arguments: Arguments,
    ) -> tuple[list[Any], dict[str, Any]]:
        """Match recipe arguments to the parameters of a constructor or method.

        Positional-only parameters are passed positionally, the rest by
        keyword, unless surplus positional arguments go to ``*args``.
        """
        method_label = method_name or "__init__"
        parameters = self._inspector.parameters(cls, method_name)
        var_positional, var_keyword = self._inspector.variadics(cls, method_name)

        if isinstance(arguments, Mapping):
            positional: Sequence[Any] = ()
            named = dict(arguments)
        else:
            positional = arguments
            named = {}

        positional_parameters = [p for p in parameters if p.accepts_position]
        surplus = list(positional[len(positional_parameters) :])
        if surplus and not var_positional:
            msg = (
                f"Method '{method_label}' in class '{class_id(cls)}' takes "
                f"{len(positional_parameters)} positional arguments but {len(positional)} were given!"
            )
            raise ContainerError(msg)

        unknown = [name for name in named if name not in {p.name for p in parameters}]
        if unknown and not var_keyword:
            msg = (
                f"Method '{method_label}' in class '{class_id(cls)}' has no "
                f"parameters named {', '.join(repr(name) for name in unknown)}!"
            )
            raise ContainerError(msg)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        position = 0
        for parameter in parameters:
            supplied = True
            raw: Any = None
            if parameter.accepts_position and position < len(positional):
                raw = positional[position]
            elif parameter.name in named:
                raw = named.pop(parameter.name)
            else:
                supplied = False
            if parameter.accepts_position:
                position += 1

            value = self._resolve_parameter(cls, method_label, parameter, raw, supplied=supplied)
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY or (
                surplus and parameter.accepts_position
            ):
                args.append(value)
            else:
                kwargs[parameter.name] = value

        args.extend(self._resolve_value(raw) for raw in surplus)
        kwargs.update((name, self._resolve_value(raw)) for name, raw in named.items())
        return args, kwargs

    def _resolve_parameter(
        self,
        cls: type[Any],
        method_name: str,
        parameter: ParameterInfo,
        raw: Any,
        *,
        supplied: bool,
    ) -> Any:
        # Precedence: explicit argument, configured type, default, fresh instance.
        declared_type = parameter.declared_type
        if supplied:
            value = self._resolve_value(raw)
        elif declared_type is not None and self._has(class_id(declared_type), strict=False):
            value = self.get(class_id(declared_type))
        elif parameter.has_default:
            return parameter.default
        elif declared_type is not None and self._auto_instantiation_policy.is_eligible_concrete(
            declared_type,
        ):
            return self._auto_instantiate(declared_type)
        else:
            msg = (
                f"Method '{method_name}' in class '{class_id(cls)}' required param "
                f"'{parameter.name}' ({type_name(declared_type)})!"
            )
            raise MissingParameterError(msg)

        if self._checker is not None:
            self._checker.check_parameter(cls, method_name, parameter, value)
        return value

    def _resolve_value(self, raw: Any) -> Any:
        if isinstance(raw, str):
            if self._has(raw, strict=False):
                return self.get(raw)
            cls = self._locate_unconfigured_class(raw)
            return raw if cls is None else self._auto_instantiate(cls)

        if isinstance(raw, types.FunctionType):
            return self._evaluate_lazy(raw)
        return raw

    def _evaluate_lazy(self, lazy: LazyValue) -> Any:
        name = getattr(lazy, "__qualname__", repr(lazy))
        logger.debug("Evaluating lazy value %s", name)
        try:
            return lazy(self)
        except ConfwireError:
            raise
        except Exception as e:
            msg = f"Lazy value '{name}' error!"
            raise ContainerError(msg) from e

    def _locate_unconfigured_class(self, raw: str) -> type[Any] | None:
        if not is_dotted_path(raw):
            return None
        try:
            cls = locate_class(raw)
        except Exception as e:
            msg = f"Importing '{raw}' error!"
            raise ContainerError(msg) from e
        if cls is None or not self._auto_instantiation_policy.is_eligible_concrete(cls):
            return None
        return cls

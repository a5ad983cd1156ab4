from __future__ import annotations

import importlib
import inspect
import logging
import sys
import types
from enum import Enum
from typing import Any, TypeGuard

logger = logging.getLogger(__name__)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_constructible(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a class the container may instantiate.

    Abstract classes, protocols, enums and metaclasses are rejected.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    if not is_runtime_class(candidate):
        return False
    if inspect.isabstract(candidate):
        return False
    if getattr(candidate, "_is_protocol", False):
        return False
    if issubclass(candidate, (type, Enum)):
        return False
    return True


def is_dotted_path(value: str) -> bool:
    """Return true when value looks like ``package.module.Name``."""
    parts = value.split(".")
    return len(parts) > 1 and all(part.isidentifier() for part in parts)


def _names_module(module_name: str, missing: str) -> bool:
    return module_name == missing or module_name.startswith(f"{missing}.")


def locate_class(path: str) -> type[Any] | None:
    """Import and return the class named by a dotted path, or None.

    The longest importable module prefix wins, so nested classes such as
    ``"package.module.Outer.Inner"`` are found as well. Only a missing module
    or attribute means "not found"; other import-time errors propagate.

    Args:
        path: Dotted import path of the class.

    """
    if not is_dotted_path(path):
        return None

    parts = path.split(".")
    for split_at in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split_at])
        module = sys.modules.get(module_name)
        if module is None:
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as exc:
                if exc.name is not None and not _names_module(module_name, exc.name):
                    # A dependency of an existing module is missing.
                    raise
                continue

        target: Any = module
        for attribute in parts[split_at:]:
            target = getattr(target, attribute, None)
            if target is None:
                logger.debug("Module %r has no attribute path %r", module_name, path)
                return None
        return target if is_runtime_class(target) else None

    return None


__all__ = ["is_constructible", "is_dotted_path", "is_runtime_class", "locate_class"]

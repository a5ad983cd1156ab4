from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from confwire._internal.inspection import ParameterInfo, PropertyInfo, type_name
from confwire.exceptions import TypeMismatchError
from confwire.types import class_id

# Runtime kinds of primitive values. A primitive passes a check against a
# primitive declared type only when both map to the same kind.
PRIMITIVE_KINDS: Mapping[type[Any], str] = MappingProxyType(
    {
        bool: "bool",
        int: "int",
        float: "float",
        complex: "complex",
        str: "str",
        bytes: "bytes",
        list: "list",
        tuple: "tuple",
        dict: "dict",
        set: "set",
        frozenset: "frozenset",
        type(None): "None",
    },
)


class StrictTypeChecker:
    """Verify resolved values against declared property and parameter types.

    Objects must be instances of the declared class. Primitives must have
    exactly the declared kind, so ``True`` is rejected for ``int`` and ``1``
    for ``float``. Values for undeclared types are always accepted.
    """

    __slots__ = ()

    def mismatch(self, declared_type: type[Any] | None, nullable: bool, value: Any) -> str | None:  # noqa: FBT001
        """Return the expected type name when ``value`` does not fit, else None.

        Args:
            declared_type: Normalized declared type, or None when undeclared.
            nullable: Whether ``None`` is an accepted value.
            value: Resolved value to verify.

        """
        if declared_type is None:
            return None
        if value is None and nullable:
            return None

        expected_kind = PRIMITIVE_KINDS.get(declared_type)
        given_kind = PRIMITIVE_KINDS.get(type(value))
        if expected_kind is not None and given_kind is not None:
            return None if expected_kind == given_kind else expected_kind

        try:
            matches = isinstance(value, declared_type)
        except TypeError:
            # Non runtime-checkable protocols and similar cannot be verified.
            return None
        return None if matches else type_name(declared_type)

    def check_property(self, cls: type[Any], prop: PropertyInfo, value: Any) -> None:
        """Raise ``TypeMismatchError`` when ``value`` does not fit ``prop``."""
        expected = self.mismatch(prop.declared_type, prop.nullable, value)
        if expected is None:
            return

        given = _given_type_name(value)
        msg = (
            f"Property '{prop.name}' in class '{class_id(cls)}' type error "
            f"(required '{expected}', but given '{given}')!"
        )
        raise TypeMismatchError(msg, expected=expected, given=given)

    def check_parameter(
        self,
        cls: type[Any],
        method_name: str,
        parameter: ParameterInfo,
        value: Any,
    ) -> None:
        """Raise ``TypeMismatchError`` when ``value`` does not fit ``parameter``."""
        expected = self.mismatch(parameter.declared_type, parameter.nullable, value)
        if expected is None:
            return

        given = _given_type_name(value)
        msg = (
            f"Parameter '{parameter.name}' in method '{method_name}' of class "
            f"'{class_id(cls)}' type error (required '{expected}', but given '{given}')!"
        )
        raise TypeMismatchError(msg, expected=expected, given=given)


def _given_type_name(value: Any) -> str:
    kind = PRIMITIVE_KINDS.get(type(value))
    return kind if kind is not None else type_name(type(value))

from __future__ import annotations

import collections.abc
import enum
import inspect
from typing import Any, Protocol

import pytest

from confwire._internal.inspection import ParameterInfo, PropertyInfo
from confwire._internal.strict import PRIMITIVE_KINDS, StrictTypeChecker
from confwire.exceptions import TypeMismatchError
from confwire.types import class_id


class Animal:
    pass


class Dog(Animal):
    pass


class Level(enum.IntEnum):
    LOW = 1


class Greeter(Protocol):
    def greet(self) -> str: ...


@pytest.mark.parametrize(
    ("declared_type", "nullable", "value"),
    [
        (None, False, "anything"),
        (int, False, 1),
        (bool, False, True),
        (float, False, 1.5),
        (str, False, "text"),
        (list, False, [1]),
        (dict, False, {}),
        (tuple, False, (1,)),
        (int, True, None),
        (type(None), True, None),
        (Animal, False, Dog()),
        (object, False, 1),
        (collections.abc.Sequence, False, [1]),
        (collections.abc.Callable, False, len),
        (int, False, Level.LOW),
        (Greeter, False, "not checkable"),
    ],
)
def test_accepts(
    checker: StrictTypeChecker,
    declared_type: Any,
    nullable: bool,  # noqa: FBT001
    value: Any,
) -> None:
    assert checker.mismatch(declared_type, nullable, value) is None


@pytest.mark.parametrize(
    ("declared_type", "value", "expected"),
    [
        (int, "1", "int"),
        (int, True, "int"),
        (int, 1.0, "int"),
        (float, 1, "float"),
        (str, b"x", "str"),
        (list, (1,), "list"),
        (int, None, "int"),
        (Dog, Animal(), class_id(Dog)),
        (Animal, "dog", class_id(Animal)),
    ],
)
def test_rejects(
    checker: StrictTypeChecker,
    declared_type: Any,
    value: Any,
    expected: str,
) -> None:
    assert checker.mismatch(declared_type, False, value) == expected  # noqa: FBT003


def test_kind_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        PRIMITIVE_KINDS[object] = "object"  # type: ignore[index]


def test_check_property(checker: StrictTypeChecker) -> None:
    prop = PropertyInfo(name="age", declared_type=int, nullable=False, writable=True)

    checker.check_property(Dog, prop, 3)
    with pytest.raises(TypeMismatchError) as exc_info:
        checker.check_property(Dog, prop, "3")

    assert exc_info.value.expected == "int"
    assert exc_info.value.given == "str"
    assert "Property 'age'" in str(exc_info.value)


def test_check_parameter(checker: StrictTypeChecker) -> None:
    parameter = ParameterInfo(
        name="owner",
        kind=inspect.Parameter.POSITIONAL_OR_KEYWORD,
        declared_type=Animal,
        nullable=False,
        has_default=False,
    )

    checker.check_parameter(Dog, "adopt", parameter, Dog())
    with pytest.raises(TypeMismatchError) as exc_info:
        checker.check_parameter(Dog, "adopt", parameter, 5)

    assert exc_info.value.expected == class_id(Animal)
    assert exc_info.value.given == "int"
    assert "method 'adopt'" in str(exc_info.value)

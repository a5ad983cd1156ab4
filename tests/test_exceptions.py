"""Tests for the error hierarchy and failure handling."""

from __future__ import annotations

from typing import Any

import pytest

from confwire import (
    CircularReferenceError,
    ConfwireError,
    Container,
    ContainerError,
    MissingParameterError,
    NotFoundError,
    TypeMismatchError,
    class_id,
)


class CycleX:
    def __init__(self, y: CycleY) -> None:
        self.y = y


class CycleY:
    def __init__(self, x: CycleX) -> None:
        self.x = x


class Upstream:
    def __init__(self, downstream: Downstream) -> None:
        self.downstream = downstream


class Downstream:
    def __init__(self, upstream) -> None:  # noqa: ANN001
        self.upstream = upstream


class Node:
    peer: Any = None


class Exploding:
    def __init__(self) -> None:
        msg = "boom"
        raise ValueError(msg)


class Flaky:
    fail = True

    def __init__(self) -> None:
        if type(self).fail:
            msg = "not yet"
            raise RuntimeError(msg)


class Guarded:
    def __init__(self) -> None:
        self._level = 0

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int) -> None:
        if value < 0:
            msg = "negative"
            raise ValueError(msg)
        self._level = value

    def start(self) -> None:
        msg = "cannot start"
        raise OSError(msg)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_type",
        [
            NotFoundError,
            ContainerError,
            CircularReferenceError,
            MissingParameterError,
            TypeMismatchError,
        ],
    )
    def test_all_errors_share_base(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, ConfwireError)

    @pytest.mark.parametrize(
        "error_type",
        [CircularReferenceError, MissingParameterError, TypeMismatchError],
    )
    def test_wiring_errors_are_container_errors(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, ContainerError)

    def test_not_found_is_distinct_from_container_error(self) -> None:
        assert not issubclass(NotFoundError, ContainerError)
        assert not issubclass(ContainerError, NotFoundError)


class TestCircularReference:
    def test_constructor_cycle_is_reported(self) -> None:
        container = Container(
            {
                "X": class_id(CycleX),
                "Y": {"class": class_id(CycleY), "__init__()": ["X"]},
            },
        )

        with pytest.raises(CircularReferenceError) as exc_info:
            container.get("Y")

        chain = exc_info.value.chain
        assert chain[0] == class_id(CycleY)
        assert chain[-1] == class_id(CycleY)
        assert class_id(CycleX) in chain
        assert "Circular reference" in str(exc_info.value)

    def test_registered_constructor_cycle(self) -> None:
        container = Container({class_id(CycleX): CycleX, class_id(CycleY): CycleY})

        with pytest.raises(CircularReferenceError) as exc_info:
            container.get(class_id(CycleX))

        assert exc_info.value.chain == (class_id(CycleX), class_id(CycleY), class_id(CycleX))

    def test_property_cycle_is_reported(self) -> None:
        container = Container(
            {
                "a": {"class": Node, "$peer": "b"},
                "b": {"class": Node, "$peer": "a"},
            },
        )

        with pytest.raises(CircularReferenceError):
            container.get("a")

    def test_lazy_self_reference_is_reported(self) -> None:
        container = Container({"a": {"class": Node, "$peer": lambda c: c.get("a")}})

        with pytest.raises(CircularReferenceError):
            container.get("a")

    def test_cycle_through_untyped_parameter_is_reported(self) -> None:
        container = Container(
            {
                "X": Upstream,
                "Y": {"class": Downstream, "__init__()": ["X"]},
            },
        )

        with pytest.raises(CircularReferenceError) as exc_info:
            container.get("Y")

        assert exc_info.value.chain == (class_id(Downstream), class_id(Upstream), class_id(Downstream))

    def test_cycle_through_class_registered_under_another_identifier(self) -> None:
        recipe = {"class": Downstream, "__init__()": ["X"]}
        container = Container({"X": Upstream, "Y": recipe, class_id(Downstream): recipe})

        with pytest.raises(CircularReferenceError) as exc_info:
            container.get("Y")

        assert exc_info.value.chain == (class_id(Downstream), class_id(Upstream), class_id(Downstream))

    def test_same_class_nested_under_two_identifiers_is_a_cycle(self) -> None:
        container = Container(
            {
                "parent": {"class": Node, "$peer": "child"},
                "child": Node,
            },
        )

        with pytest.raises(CircularReferenceError):
            container.get("parent")

    def test_same_class_under_two_identifiers_built_separately(self) -> None:
        container = Container({"first": Node, "second": Node})

        assert container.get("first") is not container.get("second")

    def test_building_set_is_empty_after_failure(self) -> None:
        container = Container({class_id(CycleX): CycleX, class_id(CycleY): CycleY})

        with pytest.raises(CircularReferenceError):
            container.get(class_id(CycleX))

        assert len(container._building) == 0
        with pytest.raises(CircularReferenceError):
            container.get(class_id(CycleY))


class TestWrapping:
    def test_constructor_failure_is_wrapped(self) -> None:
        container = Container({"exploding": Exploding})

        with pytest.raises(ContainerError) as exc_info:
            container.get("exploding")

        assert class_id(Exploding) in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_failed_build_can_be_retried(self) -> None:
        Flaky.fail = True
        container = Container({"flaky": Flaky})

        with pytest.raises(ContainerError):
            container.get("flaky")

        Flaky.fail = False
        try:
            assert isinstance(container.get("flaky"), Flaky)
        finally:
            Flaky.fail = True

    def test_setter_failure_is_wrapped(self) -> None:
        container = Container({"guarded": {"class": Guarded, "$level": -1}})

        with pytest.raises(ContainerError, match="Set property 'level'") as exc_info:
            container.get("guarded")

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_setter_accepts_valid_value(self) -> None:
        container = Container({"guarded": {"class": Guarded, "$level": 3}})

        assert container.get("guarded").level == 3

    def test_method_failure_is_wrapped(self) -> None:
        container = Container({"guarded": {"class": Guarded, "start()": []}})

        with pytest.raises(ContainerError, match="Call method 'start'") as exc_info:
            container.get("guarded")

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_lazy_value_failure_is_wrapped(self) -> None:
        def broken(_: Any) -> Any:
            msg = "lazy"
            raise KeyError(msg)

        container = Container({"node": {"class": Node, "$peer": broken}})

        with pytest.raises(ContainerError, match="Lazy value") as exc_info:
            container.get("node")

        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_nothing_is_cached_after_failure(self) -> None:
        container = Container({"guarded": {"class": Guarded, "start()": []}})

        with pytest.raises(ContainerError):
            container.get("guarded")

        assert len(container._instances) == 0

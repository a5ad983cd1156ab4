from confwire.container import Container
from confwire.container_interface import IContainer
from confwire.exceptions import (
    CircularReferenceError,
    ConfwireError,
    ContainerError,
    MissingParameterError,
    NotFoundError,
    TypeMismatchError,
)
from confwire.types import (
    CLASS_KEY,
    CONSTRUCTOR_KEY,
    METHOD_MARKER,
    PROPERTY_SIGIL,
    LazyValue,
    Recipe,
    class_id,
)

__all__ = [
    "CLASS_KEY",
    "CONSTRUCTOR_KEY",
    "METHOD_MARKER",
    "PROPERTY_SIGIL",
    "CircularReferenceError",
    "ConfwireError",
    "Container",
    "ContainerError",
    "IContainer",
    "LazyValue",
    "MissingParameterError",
    "NotFoundError",
    "Recipe",
    "TypeMismatchError",
    "class_id",
]

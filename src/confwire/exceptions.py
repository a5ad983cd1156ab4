from __future__ import annotations


class ConfwireError(Exception):
    """Represent a base class for all confwire-specific failures.

    Catch this type when you want to handle any confwire error path without
    matching each concrete exception class individually.
    """


class NotFoundError(ConfwireError):
    """Signal that nothing exists to satisfy a request.

    Raised by ``Container.get`` when the identifier has no configuration entry,
    when its recipe does not name a class, or when the named class cannot be
    located or is not constructible (abstract classes, protocols, builtins).

    Typical fixes include adding the identifier to the configuration mapping
    and checking the dotted path of the configured class.
    """

    def __init__(self, message: str, identifier: str | None = None) -> None:
        super().__init__(message)
        self.identifier = identifier


class ContainerError(ConfwireError):
    """Signal that a component exists but cannot be built or wired.

    Raised for malformed recipes, circular references, missing required
    parameters, strict-mode type mismatches, inaccessible members, and for
    exceptions raised by the target's own constructor, setter, or method. The
    original failure, if any, is available as ``__cause__``.
    """


class CircularReferenceError(ContainerError):
    """Signal a component that (transitively) requires itself.

    ``chain`` lists the classes under construction, outermost first, ending
    with the class that was requested again.

    Typical fixes include breaking the cycle with a property or method
    directive, or deferring one side with a closure.
    """

    def __init__(self, chain: tuple[str, ...]) -> None:
        self.chain = chain
        super().__init__(f"Circular reference detected: {' -> '.join(chain)}!")


class MissingParameterError(ContainerError):
    """Signal a required parameter that no argument, registration or default satisfies."""


class TypeMismatchError(ContainerError):
    """Signal a strict-mode value whose runtime type differs from the declared one."""

    def __init__(self, message: str, expected: str, given: str) -> None:
        super().__init__(message)
        self.expected = expected
        self.given = given

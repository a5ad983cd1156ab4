"""Errors: missing components and components that cannot be built.

``NotFoundError`` means nothing is configured for an identifier or its class
cannot be found. ``ContainerError`` means the component exists but cannot be
wired, for example because of a circular reference.
"""

from __future__ import annotations

from confwire import CircularReferenceError, Container, NotFoundError, class_id


class Left:
    def __init__(self, right: Right) -> None:
        self.right = right


class Right:
    def __init__(self, left: Left) -> None:
        self.left = left


def main() -> None:
    container = Container(
        {
            class_id(Left): Left,
            class_id(Right): Right,
            "broken": "__main__.DoesNotExist",
        },
    )

    print(f"has_missing={container.has('missing')}")  # => has_missing=False
    try:
        container.get("missing")
    except NotFoundError as error:
        print(f"not_found={error.identifier}")  # => not_found=missing

    try:
        container.get("broken")
    except NotFoundError as error:
        print(error)  # => Class '__main__.DoesNotExist' not found!

    try:
        container.get(class_id(Left))
    except CircularReferenceError as error:
        print("cycle=" + ">".join(name.rsplit(".", 1)[-1] for name in error.chain))  # => cycle=Left>Right>Left


if __name__ == "__main__":
    main()

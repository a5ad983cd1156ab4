"""Auto-wiring: parameters are filled from their annotations.

A parameter without an explicit argument receives the component configured
under ``class_id(annotation)``. Without one, its default is used, and without
a default the annotated class is built on the spot. Explicit arguments always
take precedence.
"""

from __future__ import annotations

from confwire import Container, class_id


class Clock:
    name = "system"


class FrozenClock(Clock):
    name = "frozen"


class Metrics:
    pass


class Scheduler:
    def __init__(self, clock: Clock, metrics: Metrics, interval: int = 60) -> None:
        self.clock = clock
        self.metrics = metrics
        self.interval = interval


def main() -> None:
    container = Container(
        {
            class_id(Clock): FrozenClock,
            "scheduler": Scheduler,
            "fast_scheduler": {
                "class": Scheduler,
                "__init__()": {"clock": "__main__.Clock", "interval": 5},
            },
        },
    )
    scheduler = container.get("scheduler")
    fast = container.get("fast_scheduler")

    print(f"clock={scheduler.clock.name}")  # => clock=frozen
    print(f"metrics={type(scheduler.metrics).__name__}")  # => metrics=Metrics
    print(f"interval={scheduler.interval}")  # => interval=60
    print(f"fast_clock_shared={fast.clock is scheduler.clock}")  # => fast_clock_shared=True
    print(f"fast_interval={fast.interval}")  # => fast_interval=5


if __name__ == "__main__":
    main()

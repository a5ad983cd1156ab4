from __future__ import annotations

import datetime
import decimal
import pathlib
import uuid
from dataclasses import dataclass
from typing import Any, TypeGuard

from confwire._internal.type_checks import is_constructible


@dataclass(frozen=True, slots=True)
class AutoInstantiationPolicy:
    """Internal policy for building classes that have no configuration entry.

    Applies to dotted class paths found among raw values and to parameter
    annotations that name no registered identifier. Builtins and common value
    types are never auto-instantiated, so ``x: int`` or ``"datetime.date"`` are
    left alone.
    """

    ignored_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_eligible_concrete(self, candidate: object) -> TypeGuard[type[Any]]:
        """Return true when a candidate can be instantiated without a recipe.

        Args:
            candidate: Value being checked for eligibility or runtime type constraints.

        """
        if not is_constructible(candidate):
            return False
        if candidate.__module__ == "builtins":
            return False
        return not issubclass(candidate, self.ignored_base_types)

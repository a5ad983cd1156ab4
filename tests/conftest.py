"""Shared pytest fixtures for confwire tests."""

import pytest

from confwire._internal.inspection import TypeInspector
from confwire._internal.strict import StrictTypeChecker


@pytest.fixture()
def inspector() -> TypeInspector:
    """TypeInspector instance."""
    return TypeInspector()


@pytest.fixture()
def checker() -> StrictTypeChecker:
    """StrictTypeChecker instance."""
    return StrictTypeChecker()

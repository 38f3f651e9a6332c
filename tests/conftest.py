"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass

from edndata import Reader, datatype
from edndata.config import ReaderSettings


@pytest.fixture
def reader():
    """Fresh Reader with built-in tags and default limits."""
    return Reader(ReaderSettings(builtin_tags=True, max_depth=256))


@datatype
@dataclass(frozen=True, order=True)
class FixturePoint:
    x: int
    y: int


@pytest.fixture
def point_cls():
    return FixturePoint

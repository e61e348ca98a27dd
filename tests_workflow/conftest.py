"""Shared pytest fixtures for piste_planner workflow tests.

Workflow tests drive the same sequence the game runs on a level load:
share link -> seed -> generated level -> geometry -> queries -> teardown.
Keep conftest.py minimal.
"""

import pytest

from piste_planner.generators.level_generator import LevelGenerator
from piste_planner.geometry.level_geometry import LevelGeometry

@pytest.fixture
def generator() -> LevelGenerator:
    return LevelGenerator()


@pytest.fixture
def geometry() -> LevelGeometry:
    """One geometry engine reused across level loads, as in the game."""
    return LevelGeometry()

"""Shared pytest fixtures for piste_planner tests.

Provides reusable levels and geometry for all tests. Hand-built levels use
explicit values so expected geometry can be worked out on paper:

    straight_level: 40x60 green, piste_width 0.5
        half = floor(40 * 0.5 / 2) = 10, so every row spans x in [10, 30]
        around a centre of 20.
    cliff_level: 40x60 red, straight, piste_width 0.4, cliffs on both sides
        half = 8, rows span [12, 28], leaving room for cliff bands.
"""

import pytest

from piste_planner.generators.level_generator import LevelGenerator
from piste_planner.geometry.level_geometry import LevelGeometry
from piste_planner.model.catalog import get_level
from piste_planner.model.level import (
    AccessPath,
    LevelDescriptor,
    Side,
    SteepZone,
    WinchAnchor,
)


# =============================================================================
# LEVEL FIXTURES
# =============================================================================


@pytest.fixture
def straight_level() -> LevelDescriptor:
    """Plain green run: straight piste, no hazards."""
    return LevelDescriptor(
        id=900,
        name="Le Test Droit",
        width=40,
        height=60,
        difficulty="green",
        target_coverage=80,
        time_limit=300,
        piste_shape="straight",
        piste_width=0.5,
    )


@pytest.fixture
def cliff_level() -> LevelDescriptor:
    """Red run with cliffs on both sides and no service roads."""
    return LevelDescriptor(
        id=901,
        name="La Falaise de Test",
        width=40,
        height=60,
        difficulty="red",
        target_coverage=80,
        time_limit=300,
        piste_shape="straight",
        piste_width=0.4,
        has_dangerous_boundaries=True,
    )


@pytest.fixture
def steep_level() -> LevelDescriptor:
    """Red run with one dangerous zone, its service road and a winch anchor."""
    return LevelDescriptor(
        id=902,
        name="Le Mur de Test",
        width=40,
        height=60,
        difficulty="red",
        target_coverage=80,
        time_limit=300,
        piste_shape="straight",
        piste_width=0.4,
        steep_zones=[SteepZone(start_y=0.4, end_y=0.6, slope=35)],
        access_paths=[AccessPath(start_y=0.3, end_y=0.7, side=Side.LEFT)],
        winch_anchors=[WinchAnchor(y=0.2)],
        has_winch=True,
        has_dangerous_boundaries=True,
    )


@pytest.fixture
def black_level() -> LevelDescriptor:
    """Authored black run: serpentine, three zones, three roads, cliffs."""
    return get_level(6)


# =============================================================================
# GEOMETRY / GENERATOR FIXTURES
# =============================================================================


@pytest.fixture
def geometry() -> LevelGeometry:
    """Fresh, empty geometry engine."""
    return LevelGeometry()


@pytest.fixture
def straight_geometry(straight_level: LevelDescriptor) -> LevelGeometry:
    geometry = LevelGeometry()
    geometry.generate(level=straight_level)
    return geometry


@pytest.fixture
def cliff_geometry(cliff_level: LevelDescriptor) -> LevelGeometry:
    geometry = LevelGeometry()
    geometry.generate(level=cliff_level)
    return geometry


@pytest.fixture
def generator() -> LevelGenerator:
    return LevelGenerator()

"""Geometry engine: descriptor in, per-row geometry and point queries out.

- LevelGeometry: Owns all geometry of the active level
- GeometryLifecycle: empty -> generated -> empty per level load
"""

from piste_planner.geometry.level_geometry import LevelGeometry
from piste_planner.geometry.lifecycle import GeometryLifecycle

__all__ = [
    "LevelGeometry",
    "GeometryLifecycle",
]

"""Data model classes for levels and their geometry.

Separates the level description (what the run is) from its geometry (where
things are):
- LevelDescriptor: Authored or generated run, plain data
- SteepZone, WinchAnchor, AccessPath: Fractional level features
- PathRow, CliffSegment, AccessPathCurve, ...: Geometry records (tiles/pixels)
- ValidationIssue: Reasons a candidate level was rejected
- LEVELS: Authored campaign catalog
"""

from piste_planner.model.level import (
    AccessPath,
    BonusObjective,
    Difficulty,
    HazardType,
    LevelDescriptor,
    ObstacleType,
    PisteShape,
    PisteVariation,
    Rank,
    Side,
    SlalomGates,
    SpecialFeature,
    SteepZone,
    Weather,
    WildlifeSpawn,
    WinchAnchor,
)
from piste_planner.model.geometry_records import (
    AccessEntryZone,
    AccessPathCurve,
    AccessPathRect,
    CliffSegment,
    EdgeBuffer,
    EdgePoint,
    EdgeSnapshot,
    PathRow,
    Rect,
    SteepZoneRect,
)
from piste_planner.model.validation_issue import ValidationIssue
from piste_planner.model.catalog import LEVELS, get_level

__all__ = [
    "LevelDescriptor",
    "Difficulty",
    "Rank",
    "PisteShape",
    "Weather",
    "Side",
    "SpecialFeature",
    "ObstacleType",
    "HazardType",
    "SteepZone",
    "WinchAnchor",
    "AccessPath",
    "PisteVariation",
    "SlalomGates",
    "BonusObjective",
    "WildlifeSpawn",
    "PathRow",
    "EdgePoint",
    "EdgeBuffer",
    "EdgeSnapshot",
    "CliffSegment",
    "Rect",
    "AccessPathRect",
    "AccessEntryZone",
    "AccessPathCurve",
    "SteepZoneRect",
    "ValidationIssue",
    "LEVELS",
    "get_level",
]

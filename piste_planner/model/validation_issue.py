"""ValidationIssue - Reasons a level candidate was rejected.

Issues are values, not exceptions: the validators return a list of them and
the generator treats a non-empty list as a signal to retry with the next seed.

Structural issues (descriptor fields only):
- DimensionOutOfBounds, InvalidCoverage
- InvalidSteepZone, OverlappingSteepZones
- WinchAnchorInSteepZone, MissingWinchAnchors
- MissingAccessPath, UnexpectedAccessPath
- EmptyParkFeatures, ContradictoryFeatures

Spatial issues (require built geometry):
- PisteTooNarrow, HalfpipeTooNarrow, TooFewGroomableTiles, SpawnBlocked
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue(ABC):
    """Abstract base class for validation issues.

    Subclasses store the offending values and compute message as property.
    Use isinstance() to check the issue type.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable description of the issue."""

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class DimensionOutOfBounds(ValidationIssue):
    """Level width or height outside the sane range.

    Attributes:
        dimension: "width" or "height"
        value: Actual size in tiles
        min_value, max_value: Allowed range (inclusive)
    """

    dimension: str
    value: int
    min_value: int
    max_value: int

    @property
    def message(self) -> str:
        return f"Level {self.dimension} {self.value} outside [{self.min_value}, {self.max_value}] tiles"


@dataclass(frozen=True)
class InvalidCoverage(ValidationIssue):
    coverage: float

    @property
    def message(self) -> str:
        return f"Target coverage {self.coverage}% must be in (0, 100]"


@dataclass(frozen=True)
class InvalidSteepZone(ValidationIssue):
    """Steep zone with start_y >= end_y."""

    index: int
    start_y: float
    end_y: float

    @property
    def message(self) -> str:
        return f"Steep zone {self.index} is empty or inverted ({self.start_y:.2f} -> {self.end_y:.2f})"


@dataclass(frozen=True)
class OverlappingSteepZones(ValidationIssue):
    first_index: int
    second_index: int

    @property
    def message(self) -> str:
        return f"Steep zones {self.first_index} and {self.second_index} overlap"


@dataclass(frozen=True)
class WinchAnchorInSteepZone(ValidationIssue):
    """Winch anchor placed inside a steep zone (inclusive bounds)."""

    anchor_y: float
    zone_index: int

    @property
    def message(self) -> str:
        return f"Winch anchor at {self.anchor_y:.2f} lies inside steep zone {self.zone_index}"


@dataclass(frozen=True)
class MissingWinchAnchors(ValidationIssue):
    dangerous_zone_count: int

    @property
    def message(self) -> str:
        return f"Winch level with {self.dangerous_zone_count} dangerous steep zone(s) has no anchors"


@dataclass(frozen=True)
class MissingAccessPath(ValidationIssue):
    """Dangerous steep zone without any service road."""

    zone_index: int
    slope: float

    @property
    def message(self) -> str:
        return f"Steep zone {self.zone_index} ({self.slope:.0f}°) needs an access path"


@dataclass(frozen=True)
class UnexpectedAccessPath(ValidationIssue):
    count: int

    @property
    def message(self) -> str:
        return f"{self.count} access path(s) on a level without cliffs or steep zones"


@dataclass(frozen=True)
class EmptyParkFeatures(ValidationIssue):
    @property
    def message(self) -> str:
        return "Park level has no special features"


@dataclass(frozen=True)
class ContradictoryFeatures(ValidationIssue):
    """Special features combined with steep zones, winch or cliffs."""

    conflict: str

    @property
    def message(self) -> str:
        return f"Park features cannot be combined with {self.conflict}"


@dataclass(frozen=True)
class PisteTooNarrow(ValidationIssue):
    row: int
    width_tiles: float
    min_tiles: float

    @property
    def message(self) -> str:
        return f"Piste row {self.row} is {self.width_tiles:.1f} tiles wide (min {self.min_tiles})"


@dataclass(frozen=True)
class HalfpipeTooNarrow(ValidationIssue):
    row: int
    width_tiles: float
    min_tiles: float

    @property
    def message(self) -> str:
        return f"Halfpipe row {self.row} is {self.width_tiles:.1f} tiles wide (min {self.min_tiles})"


@dataclass(frozen=True)
class TooFewGroomableTiles(ValidationIssue):
    count: int
    min_count: int

    @property
    def message(self) -> str:
        return f"Only {self.count} groomable tiles (min {self.min_count})"


@dataclass(frozen=True)
class SpawnBlocked(ValidationIssue):
    """Groomer spawn point is off piste or inside a cliff avoid area.

    Attributes:
        tile_x, tile_y: Spawn tile
        reason: "off_piste" or "cliff"
    """

    tile_x: int
    tile_y: int
    reason: str

    @property
    def message(self) -> str:
        where = "off the piste" if self.reason == "off_piste" else "inside a cliff area"
        return f"Spawn point ({self.tile_x}, {self.tile_y}) is {where}"

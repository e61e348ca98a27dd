"""Geometry records - Per-level geometry produced by LevelGeometry.

Tile units for the piste path, pixel units for everything else:
- PathRow: piste centre and width for one row (tiles)
- EdgeBuffer / EdgeSnapshot: working list of piste edge points while walking
  rows, and the immutable copy a cliff segment owns
- CliffSegment: one continuous cliff band along one side of the piste
- Rect / AccessPathRect / SteepZoneRect: axis-aligned regions (closed intervals)
- AccessEntryZone: band where a service road meets the piste
- AccessPathCurve: switchback road centerline with left/right edges

An EdgeBuffer is reused and cleared between segments, so it cannot be used
for lookups; the only way to get a lookup is EdgeBuffer.snapshot().
"""

from dataclasses import dataclass, field
from math import floor

import numpy as np
from shapely.geometry import LineString, Polygon, box

from piste_planner.constants import CliffConfig
from piste_planner.core.seeded_rng import position_noise
from piste_planner.model.level import Side


def _read_only(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class PathRow:
    """Piste corridor for one row.

    Attributes:
        center_x: Corridor centre in tiles
        width: Corridor width in tiles
    """

    center_x: float
    width: float

    @property
    def left(self) -> float:
        return self.center_x - self.width / 2

    @property
    def right(self) -> float:
        return self.center_x + self.width / 2

    def contains(self, tile_x: float, buffer: float = 0.0) -> bool:
        """Closed interval test against the corridor widened by buffer tiles."""
        half = self.width / 2 + buffer
        return self.center_x - half <= tile_x <= self.center_x + half


@dataclass(frozen=True)
class EdgePoint:
    y: float
    x: float


class EdgeSnapshot:
    """Immutable copy of a run of edge points, ordered by y (pixels)."""

    def __init__(self, points: list[EdgePoint]):
        if not points:
            raise ValueError("EdgeSnapshot needs at least one point")
        self._ys = _read_only([p.y for p in points])
        self._xs = _read_only([p.x for p in points])

    @property
    def ys(self) -> np.ndarray:
        return self._ys

    @property
    def xs(self) -> np.ndarray:
        return self._xs

    @property
    def min_x(self) -> float:
        return float(self._xs.min())

    @property
    def max_x(self) -> float:
        return float(self._xs.max())

    def x_at(self, y: float) -> float:
        """Edge x at y, linearly interpolated and clamped at both ends."""
        return float(np.interp(y, self._ys, self._xs))

    def __len__(self) -> int:
        return len(self._ys)


class EdgeBuffer:
    """Mutable working list of edge points for the run currently being walked."""

    def __init__(self):
        self._points: list[EdgePoint] = []
        self.start_y: float | None = None

    def append(self, y: float, x: float) -> None:
        if self.start_y is None:
            self.start_y = y
        self._points.append(EdgePoint(y=y, x=x))

    def clear(self) -> None:
        self._points.clear()
        self.start_y = None

    @property
    def is_open(self) -> bool:
        return self.start_y is not None

    def snapshot(self) -> EdgeSnapshot:
        """Independent copy; later clears or appends do not affect it."""
        return EdgeSnapshot(list(self._points))

    def __len__(self) -> int:
        return len(self._points)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned pixel rectangle, closed on all four bounds."""

    start_y: float
    end_y: float
    left_x: float
    right_x: float

    def contains(self, x: float, y: float) -> bool:
        return self.start_y <= y <= self.end_y and self.left_x <= x <= self.right_x

    def to_box(self) -> Polygon:
        return box(self.left_x, self.start_y, self.right_x, self.end_y)


@dataclass(frozen=True)
class AccessPathRect(Rect):
    """Collision exemption rectangle for one leg of a service road."""

    side: Side = Side.LEFT
    path_index: int = 0


@dataclass(frozen=True)
class AccessEntryZone:
    """Band (pixels) around the point where a service road meets the piste."""

    y: float
    side: Side
    start_y: float
    end_y: float

    def covers(self, y: float, clearance: float = 0.0) -> bool:
        return self.start_y - clearance <= y <= self.end_y + clearance


@dataclass(frozen=True, eq=False)
class AccessPathCurve:
    """Render-facing switchback road.

    Attributes:
        centerline: (N, 2) array of x, y pixel points from entry to exit
        left_edge: (N, 2) centerline offset by +normal * road_width / 2
        right_edge: (N, 2) centerline offset by -normal * road_width / 2
        road_width: Road width in pixels
        side: Side of the piste the road runs on
        path_index: Index into the level's access_paths
    """

    centerline: np.ndarray
    left_edge: np.ndarray
    right_edge: np.ndarray
    road_width: float
    side: Side
    path_index: int

    @property
    def footprint(self) -> Polygon:
        """Road surface as a shapely polygon."""
        return LineString(self.centerline).buffer(self.road_width / 2)


@dataclass(frozen=True, eq=False)
class CliffSegment:
    """Continuous cliff band along one side of the piste.

    The band at pixel row y lies offset pixels away from the piste edge and is
    extent pixels thick, plus a per-row variation that only ever pushes it
    away from the piste.

    Attributes:
        side: Side of the piste
        start_y, end_y: Pixel row range (closed)
        offset: Gap between piste edge and cliff (pixels)
        extent: Cliff band thickness (pixels)
        edges: Owned snapshot of the piste edge along the segment
        tile_size: Tile size in pixels
    """

    side: Side
    start_y: float
    end_y: float
    offset: float
    extent: float
    edges: EdgeSnapshot
    tile_size: int

    @property
    def max_variation(self) -> float:
        """Upper bound of the per-row variation (pixels)."""
        return 0.5 * self.tile_size * CliffConfig.ROW_VARIATION_TILES

    def edge_lookup(self, y: float) -> float:
        return self.edges.x_at(y)

    def row_variation(self, tile_y: float) -> float:
        noise = position_noise(self.start_y * 0.01 + (tile_y * 0.3 + 55) * 127.1)
        return abs(noise - 0.5) * self.tile_size * CliffConfig.ROW_VARIATION_TILES

    def bounds_at(self, y: float) -> tuple[float, float]:
        """(cliff_start, cliff_end) pixel x range of the band at row y."""
        tile_y = floor(y / self.tile_size) * self.tile_size
        edge = self.edge_lookup(tile_y)
        variation = self.row_variation(tile_y)
        inner = CliffConfig.ROW_VARIATION_INNER_SHARE
        if self.side == Side.LEFT:
            cliff_end = edge - self.offset - variation * inner
            return cliff_end - self.extent - variation, cliff_end
        cliff_start = edge + self.offset + variation * inner
        return cliff_start, cliff_start + self.extent + variation

    def contains(self, x: float, y: float) -> bool:
        if y < self.start_y or y > self.end_y:
            return False
        cliff_start, cliff_end = self.bounds_at(y)
        return cliff_start <= x <= cliff_end

    def avoid_rect(self, margin: float) -> Rect:
        """Bounding rectangle of the whole band, padded by margin pixels."""
        reach = self.offset + self.extent + self.max_variation * (1 + CliffConfig.ROW_VARIATION_INNER_SHARE)
        if self.side == Side.LEFT:
            left_x = self.edges.min_x - reach
            right_x = self.edges.max_x - self.offset
        else:
            left_x = self.edges.min_x + self.offset
            right_x = self.edges.max_x + reach
        return Rect(
            start_y=self.start_y - margin,
            end_y=self.end_y + margin,
            left_x=left_x - margin,
            right_x=right_x + margin,
        )

    def tiles(self, world_width: float) -> list[tuple[float, float]]:
        """Render-only tile positions (pixels) of the band.

        Roughly 30% of the tiles along the band's rims are omitted for a
        ragged look. Physics queries use bounds_at, never this list.
        """
        ts = self.tile_size
        rim = CliffConfig.EDGE_TILE_DEPTH_TILES * ts
        result = []
        y = floor(self.start_y / ts) * ts
        while y <= self.end_y:
            cliff_start, cliff_end = self.bounds_at(y)
            x = max(0, floor(cliff_start / ts) * ts)
            while x <= cliff_end and x < world_width:
                on_rim = x - cliff_start < rim or cliff_end - x < rim
                noise = position_noise(x * 0.7 + y * 1.3 + self.start_y)
                if not (on_rim and noise > CliffConfig.EDGE_TILE_SKIP_THRESHOLD):
                    result.append((x, y))
                x += ts
            y += ts
        return result


@dataclass(frozen=True, eq=False)
class SteepZoneRect(Rect):
    """Steep zone in pixels, for the physics collaborator.

    The rectangle spans the piste corridor over the zone's row range; per-row
    bounds follow the piste and are shrunk inward by a small margin.

    Attributes:
        slope: Slope angle in degrees
        first_row: Tile row of the first entry in row_lefts / row_rights
        row_lefts, row_rights: Per-row pixel bounds (inward margin applied)
        tile_size: Tile size in pixels
    """

    slope: float = 0.0
    first_row: int = 0
    row_lefts: np.ndarray = field(default_factory=lambda: _read_only([]))
    row_rights: np.ndarray = field(default_factory=lambda: _read_only([]))
    tile_size: int = 16

    def bounds_at(self, y: float) -> tuple[float, float]:
        """(left_x, right_x) at pixel row y; the full rect when no rows are known."""
        if len(self.row_lefts) == 0:
            return self.left_x, self.right_x
        idx = int(y // self.tile_size) - self.first_row
        idx = min(max(idx, 0), len(self.row_lefts) - 1)
        return float(self.row_lefts[idx]), float(self.row_rights[idx])

    def contains(self, x: float, y: float) -> bool:
        if y < self.start_y or y > self.end_y:
            return False
        left_x, right_x = self.bounds_at(y)
        return left_x <= x <= right_x

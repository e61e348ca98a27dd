"""LevelGeometry - Per-row geometry and point queries for one level.

Turns any LevelDescriptor (authored or generated, no special-casing) into:
- piste_path: one PathRow per row (tiles)
- access_entry_zones, access_path_curves, access_path_rects: service roads
- cliff_segments: cliff bands of dangerous levels
- steep_zone_rects: steep zones in pixels, spanning the piste

Build order matters: cliffs subtract the service road areas, so roads are
built before cliffs. generate() clears everything first; reset() tears down.

Queries are total and never raise. Before generation, is_in_piste answers
True for non-boundary rows so early callers are not blocked.

Example:
    geometry = LevelGeometry()
    geometry.generate(level=level, tile_size=16)
    geometry.is_in_piste(tile_x=20, tile_y=30, level=level)
    geometry.reset()
"""

import logging
from math import floor
from typing import Optional

import numpy as np

from piste_planner.constants import GeometryConfig
from piste_planner.core.piste_shapes import piste_profile
from piste_planner.geometry.access_path_builder import build_access_paths, build_entry_zones
from piste_planner.geometry.cliff_builder import build_cliff_segments
from piste_planner.geometry.lifecycle import GeometryLifecycle
from piste_planner.model.geometry_records import (
    AccessEntryZone,
    AccessPathCurve,
    AccessPathRect,
    CliffSegment,
    PathRow,
    Rect,
    SteepZoneRect,
)
from piste_planner.model.level import LevelDescriptor

logger = logging.getLogger(__name__)


class LevelGeometry:
    """Geometry engine for one active level.

    Attributes:
        piste_path: One PathRow per level row (tiles)
        cliff_segments: Cliff bands (pixels)
        access_entry_zones: Road/piste junction bands (pixels)
        access_path_curves: Render curves, order-matched to level.access_paths
        access_path_rects: Collision exemption rectangles (pixels)
        steep_zone_rects: Steep zones for the physics collaborator (pixels)
        tile_size: Tile size used by the last generate()
    """

    def __init__(self):
        self.lifecycle = GeometryLifecycle()
        self.tile_size = GeometryConfig.TILE_SIZE_PX
        self.piste_path: list[PathRow] = []
        self.cliff_segments: list[CliffSegment] = []
        self.access_entry_zones: list[AccessEntryZone] = []
        self.access_path_curves: list[AccessPathCurve] = []
        self.access_path_rects: list[AccessPathRect] = []
        self.steep_zone_rects: list[SteepZoneRect] = []

    @property
    def is_generated(self) -> bool:
        return self.lifecycle.is_generated

    def _clear(self) -> None:
        self.piste_path = []
        self.cliff_segments = []
        self.access_entry_zones = []
        self.access_path_curves = []
        self.access_path_rects = []
        self.steep_zone_rects = []

    def reset(self) -> None:
        """Empty every collection (level teardown)."""
        self._clear()
        self.lifecycle.teardown()

    def generate(self, level: LevelDescriptor, tile_size: int = GeometryConfig.TILE_SIZE_PX) -> None:
        """Build all geometry for a level, replacing whatever was there."""
        self._clear()
        self.tile_size = tile_size

        self.piste_path = self._build_piste_path(level)
        self.access_entry_zones = build_entry_zones(level, tile_size)
        self.access_path_curves, self.access_path_rects = build_access_paths(
            level=level,
            piste_path=self.piste_path,
            tile_size=tile_size,
        )
        self.cliff_segments = build_cliff_segments(
            level=level,
            piste_path=self.piste_path,
            entry_zones=self.access_entry_zones,
            access_rects=self.access_path_rects,
            tile_size=tile_size,
        )
        self.steep_zone_rects = self._build_steep_zone_rects(level)

        self.lifecycle.build()
        logger.info(
            f"Generated geometry for level {level.id} ({level.width}x{level.height}): "
            f"{len(self.cliff_segments)} cliff segments, {len(self.access_path_curves)} access paths, "
            f"{len(self.steep_zone_rects)} steep zones"
        )

    # ==========================================================================
    # Builders
    # ==========================================================================

    @staticmethod
    def _build_piste_path(level: LevelDescriptor) -> list[PathRow]:
        centers, widths = piste_profile(
            shape=level.piste_shape,
            width=level.width,
            height=level.height,
            piste_width=level.piste_width or GeometryConfig.DEFAULT_PISTE_WIDTH,
            variation=level.piste_variation,
        )
        return [PathRow(center_x=float(c), width=float(w)) for c, w in zip(centers, widths)]

    def _build_steep_zone_rects(self, level: LevelDescriptor) -> list[SteepZoneRect]:
        ts = self.tile_size
        world_height = level.height * ts
        margin = ts * GeometryConfig.STEEP_ZONE_INWARD_MARGIN_TILES
        rects = []
        for zone in level.steep_zones:
            start_y = zone.start_y * world_height
            end_y = zone.end_y * world_height
            first_row = max(0, floor(zone.start_y * level.height))
            last_row = min(len(self.piste_path) - 1, floor(zone.end_y * level.height))
            rows = self.piste_path[first_row : last_row + 1]
            if not rows:
                continue
            lefts = np.array([r.left * ts for r in rows])
            rights = np.array([r.right * ts for r in rows])
            row_lefts = lefts + margin
            row_rights = rights - margin
            row_lefts.setflags(write=False)
            row_rights.setflags(write=False)
            rects.append(
                SteepZoneRect(
                    start_y=start_y,
                    end_y=end_y,
                    left_x=float(lefts.min()),
                    right_x=float(rights.max()),
                    slope=zone.slope,
                    first_row=first_row,
                    row_lefts=row_lefts,
                    row_rights=row_rights,
                    tile_size=ts,
                )
            )
        return rects

    # ==========================================================================
    # Queries
    # ==========================================================================

    def path_edges(self, row: PathRow) -> tuple[float, float]:
        """(left, right) pixel edges of a piste row."""
        return row.left * self.tile_size, row.right * self.tile_size

    @staticmethod
    def _is_boundary_row(tile_y: int, level: LevelDescriptor) -> bool:
        return (
            tile_y < GeometryConfig.BOUNDARY_TOP_ROWS
            or tile_y >= level.height - GeometryConfig.BOUNDARY_BOTTOM_ROWS
        )

    def _row(self, tile_y: int) -> Optional[PathRow]:
        if 0 <= tile_y < len(self.piste_path):
            return self.piste_path[tile_y]
        return None

    def is_in_piste(self, tile_x: float, tile_y: float, level: LevelDescriptor) -> bool:
        """Tile membership in the piste corridor (closed interval).

        Boundary rows are never piste; a row without path data is treated as
        piste. Fractional rows resolve to the row they fall in.
        """
        tile_y = floor(tile_y)
        if self._is_boundary_row(tile_y, level):
            return False
        row = self._row(tile_y)
        if row is None:
            return True
        return row.contains(tile_x)

    def is_near_piste(self, tile_x: float, tile_y: float, level: LevelDescriptor, buffer: float) -> bool:
        """Tile within buffer tiles of the piste corridor (packed snow shoulder)."""
        tile_y = floor(tile_y)
        if self._is_boundary_row(tile_y, level):
            return False
        row = self._row(tile_y)
        if row is None:
            return True
        return row.contains(tile_x, buffer=buffer)

    def is_on_cliff(self, x: float, y: float) -> bool:
        return any(segment.contains(x, y) for segment in self.cliff_segments)

    def is_on_access_path(self, x: float, y: float) -> bool:
        return any(rect.contains(x, y) for rect in self.access_path_rects)

    def steep_zone_at(self, x: float, y: float) -> Optional[SteepZoneRect]:
        """Steep zone containing the pixel point, using per-row piste bounds."""
        for rect in self.steep_zone_rects:
            if rect.contains(x, y):
                return rect
        return None

    def get_cliff_avoid_rects(self, margin: float) -> list[Rect]:
        """One bounding rectangle per cliff segment, padded outward by margin pixels."""
        return [segment.avoid_rect(margin) for segment in self.cliff_segments]

    def groomable_tile_count(self, level: LevelDescriptor) -> int:
        """Number of integer tiles for which is_in_piste holds."""
        if not self.piste_path:
            return 0
        first = GeometryConfig.BOUNDARY_TOP_ROWS
        last = min(len(self.piste_path), level.height - GeometryConfig.BOUNDARY_BOTTOM_ROWS)
        if last <= first:
            return 0
        centers = np.array([r.center_x for r in self.piste_path[first:last]])
        halves = np.array([r.width / 2 for r in self.piste_path[first:last]])
        xs = np.arange(level.width)
        inside = (xs[None, :] >= (centers - halves)[:, None]) & (xs[None, :] <= (centers + halves)[:, None])
        return int(inside.sum())

    def __repr__(self) -> str:
        return (
            f"LevelGeometry(state={self.lifecycle.get_state_name()}, rows={len(self.piste_path)}, "
            f"cliffs={len(self.cliff_segments)}, roads={len(self.access_path_curves)})"
        )

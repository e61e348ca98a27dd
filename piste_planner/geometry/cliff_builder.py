"""Cliff builder - Cliff bands along the piste edges of dangerous levels.

Walks the piste rows top to bottom, one EdgeBuffer per side. A row carries a
cliff on a side when:
- the piste edge leaves at least one tile of room to the world edge
- no service road entry zone (plus clearance) or road rectangle is on that side
- on avalanche levels, the row is outside the avalanche band (15%-65% of height)

Each unbroken run of cliff rows becomes one CliffSegment that owns a snapshot
of its edge points; the buffer is then cleared and reused for the next run.
Offset and extent come from position noise keyed on the run's start row,
scaled to the difficulty's tile ranges.
"""

import logging

from piste_planner.constants import CliffConfig, GeometryConfig
from piste_planner.core.seeded_rng import position_noise
from piste_planner.model.geometry_records import (
    AccessEntryZone,
    AccessPathRect,
    CliffSegment,
    EdgeBuffer,
    PathRow,
)
from piste_planner.model.level import LevelDescriptor, Side

logger = logging.getLogger(__name__)


def _noise(seed: float) -> float:
    return position_noise(seed * 127.1)


def _tile_ranges(level: LevelDescriptor) -> tuple[tuple[float, float], tuple[float, float]]:
    difficulty = level.difficulty.value
    offset = CliffConfig.OFFSET_TILES.get(difficulty, CliffConfig.DEFAULT_OFFSET_TILES)
    extent = CliffConfig.EXTENT_TILES.get(difficulty, CliffConfig.DEFAULT_EXTENT_TILES)
    return offset, extent


def _is_access_row(
    y_px: float,
    side: Side,
    entry_zones: list[AccessEntryZone],
    access_rects: list[AccessPathRect],
    tile_size: int,
) -> bool:
    clearance = tile_size * CliffConfig.ACCESS_CLEARANCE_TILES
    if any(z.side == side and z.covers(y_px, clearance) for z in entry_zones):
        return True
    return any(r.side == side and r.start_y <= y_px <= r.end_y for r in access_rects)


def finalize_segment(
    buffer: EdgeBuffer,
    end_y: float,
    side: Side,
    level: LevelDescriptor,
    tile_size: int,
) -> CliffSegment | None:
    """Turn the buffered run into a segment, or None when it is too short.

    The segment receives a snapshot; the caller is free to clear the buffer.
    """
    if len(buffer) < CliffConfig.MIN_SEGMENT_POINTS:
        return None

    start_y = buffer.start_y
    (offset_lo, offset_hi), (extent_lo, extent_hi) = _tile_ranges(level)
    offset = tile_size * (offset_lo + _noise(start_y * 0.5 + 77) * (offset_hi - offset_lo))
    extent = tile_size * (extent_lo + _noise(start_y * 0.3 + 99) * (extent_hi - extent_lo))

    return CliffSegment(
        side=side,
        start_y=start_y,
        end_y=end_y,
        offset=offset,
        extent=extent,
        edges=buffer.snapshot(),
        tile_size=tile_size,
    )


def build_cliff_segments(
    level: LevelDescriptor,
    piste_path: list[PathRow],
    entry_zones: list[AccessEntryZone],
    access_rects: list[AccessPathRect],
    tile_size: int,
) -> list[CliffSegment]:
    """Cliff segments for a level (empty unless it has dangerous boundaries).

    Args:
        level: Level being built
        piste_path: One PathRow per level row
        entry_zones: Service road entry zones (must already be built)
        access_rects: Service road rectangles (must already be built)
        tile_size: Tile size in pixels

    Returns:
        Segments in the order their runs finished.
    """
    if not level.has_dangerous_boundaries:
        return []

    world_width = level.width * tile_size
    world_height = level.height * tile_size
    band_top = world_height * CliffConfig.AVALANCHE_FREE_BAND[0]
    band_bottom = world_height * CliffConfig.AVALANCHE_FREE_BAND[1]
    room = tile_size * CliffConfig.MIN_ROOM_TILES

    first_row = GeometryConfig.BOUNDARY_TOP_ROWS
    last_row = level.height - GeometryConfig.BOUNDARY_BOTTOM_ROWS - 1

    buffers = {Side.LEFT: EdgeBuffer(), Side.RIGHT: EdgeBuffer()}
    segments: list[CliffSegment] = []

    def close_run(side: Side, end_y: float) -> None:
        segment = finalize_segment(buffers[side], end_y, side, level, tile_size)
        if segment is not None:
            segments.append(segment)
            logger.debug(f"Cliff segment {side.value}: y {segment.start_y:.0f}-{segment.end_y:.0f}")
        buffers[side].clear()

    for y in range(first_row, last_row + 1):
        if y >= len(piste_path):
            break
        row = piste_path[y]
        y_px = y * tile_size
        left_edge = row.left * tile_size
        right_edge = row.right * tile_size
        in_avalanche_band = level.has_avalanche and band_top <= y_px <= band_bottom

        for side, edge, has_room in (
            (Side.LEFT, left_edge, left_edge > room),
            (Side.RIGHT, right_edge, right_edge < world_width - room),
        ):
            is_cliff = (
                has_room
                and not in_avalanche_band
                and not _is_access_row(y_px, side, entry_zones, access_rects, tile_size)
            )
            if is_cliff:
                buffers[side].append(y=y_px, x=edge)
            elif buffers[side].is_open:
                close_run(side, (y - 1) * tile_size)

    for side in (Side.LEFT, Side.RIGHT):
        if buffers[side].is_open:
            close_run(side, last_row * tile_size)

    return segments

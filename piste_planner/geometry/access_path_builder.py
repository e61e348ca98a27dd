"""Access path builder - Switchback service roads beside the piste.

For each declared access path the road leaves the piste edge at the bottom of
the section (entry, end_y), zig-zags off-piste and rejoins the piste edge at
the top (exit, start_y):
- 3 turns alternating between an outer x (12 tiles out) and an inner x
  (2 tiles out), each leg eased in x (ease-in-out quad) and linear in y
- 12 points per leg, then a final leg back to the exit point
- left/right road edges from the centerline normals at a 5 tile road width
- one collision rectangle per centerline leg, padded by 1.2 road widths

Entry zones mark the +/- 8 tile band around both ends of each road, where
cliffs must stay clear.
"""

import logging

import numpy as np

from piste_planner.constants import AccessPathConfig, GeometryConfig
from piste_planner.model.geometry_records import (
    AccessEntryZone,
    AccessPathCurve,
    AccessPathRect,
    PathRow,
)
from piste_planner.model.level import AccessPath, LevelDescriptor, Side

logger = logging.getLogger(__name__)


def ease_in_out_quad(t: np.ndarray) -> np.ndarray:
    return np.where(t < 0.5, 2 * t * t, 1 - (-2 * t + 2) ** 2 / 2)


def build_entry_zones(level: LevelDescriptor, tile_size: int) -> list[AccessEntryZone]:
    """Two zones per access path: one at the entry, one at the exit."""
    world_height = level.height * tile_size
    half_height = tile_size * AccessPathConfig.ENTRY_ZONE_HALF_HEIGHT_TILES
    zones = []
    for path in level.access_paths:
        for y in (path.end_y * world_height, path.start_y * world_height):
            zones.append(AccessEntryZone(y=y, side=path.side, start_y=y - half_height, end_y=y + half_height))
    return zones


def _piste_edge_px(
    piste_path: list[PathRow],
    row: int,
    side: Side,
    level: LevelDescriptor,
    tile_size: int,
) -> float:
    if 0 <= row < len(piste_path):
        path_row = piste_path[row]
    else:
        path_row = PathRow(center_x=level.width / 2, width=level.width * GeometryConfig.DEFAULT_PISTE_WIDTH)
    edge = path_row.left if side == Side.LEFT else path_row.right
    return edge * tile_size


def switchback_centerline(
    entry: tuple[float, float],
    exit_: tuple[float, float],
    outer_x: float,
    inner_x: float,
) -> np.ndarray:
    """Centerline points from entry to exit as an (N, 2) array of x, y."""
    steps = AccessPathConfig.STEPS_PER_LEG
    turns = AccessPathConfig.NUM_TURNS
    entry_x, entry_y = entry
    exit_x, exit_y = exit_
    leg_height = (entry_y - exit_y) / (turns + 1)

    progress = np.arange(1, steps + 1) / steps
    eased = ease_in_out_quad(progress)

    points = [np.array([[entry_x, entry_y]])]
    prev_x, prev_y = entry_x, entry_y
    targets = [
        (outer_x if t % 2 == 0 else inner_x, entry_y - (t + 0.5) * leg_height)
        for t in range(turns + 1)
    ]
    targets.append((exit_x, exit_y))
    for target_x, target_y in targets:
        xs = prev_x + (target_x - prev_x) * eased
        ys = prev_y + (target_y - prev_y) * progress
        points.append(np.column_stack([xs, ys]))
        prev_x, prev_y = xs[-1], ys[-1]
    return np.vstack(points)


def road_edges(centerline: np.ndarray, road_width: float) -> tuple[np.ndarray, np.ndarray]:
    """Left and right road edges from central-difference normals."""
    nxt = np.vstack([centerline[1:], centerline[-1:]])
    prv = np.vstack([centerline[:1], centerline[:-1]])
    delta = (nxt - prv) / 2
    length = np.hypot(delta[:, 0], delta[:, 1])
    length[length == 0] = 1
    half = road_width / 2
    normal = np.column_stack([-delta[:, 1] / length * half, delta[:, 0] / length * half])
    return centerline + normal, centerline - normal


def leg_rects(centerline: np.ndarray, road_width: float, side: Side, path_index: int) -> list[AccessPathRect]:
    margin = road_width * AccessPathConfig.RECT_MARGIN_FACTOR
    rects = []
    for (x1, y1), (x2, y2) in zip(centerline[:-1], centerline[1:]):
        rects.append(
            AccessPathRect(
                start_y=float(min(y1, y2) - margin),
                end_y=float(max(y1, y2) + margin),
                left_x=float(min(x1, x2) - margin),
                right_x=float(max(x1, x2) + margin),
                side=side,
                path_index=path_index,
            )
        )
    return rects


def build_access_path(
    level: LevelDescriptor,
    path: AccessPath,
    path_index: int,
    piste_path: list[PathRow],
    tile_size: int,
) -> tuple[AccessPathCurve, list[AccessPathRect]]:
    """Render curve and collision rectangles for one access path."""
    world_width = level.width * tile_size
    world_height = level.height * tile_size
    road_width = tile_size * AccessPathConfig.ROAD_WIDTH_TILES
    extent = tile_size * AccessPathConfig.ROAD_EXTENT_TILES
    inner_offset = tile_size * AccessPathConfig.INNER_OFFSET_TILES
    world_margin = tile_size * AccessPathConfig.WORLD_MARGIN_TILES

    entry_y = path.end_y * world_height
    exit_y = path.start_y * world_height
    entry_x = _piste_edge_px(piste_path, int(path.end_y * level.height), path.side, level, tile_size)
    exit_x = _piste_edge_px(piste_path, int(path.start_y * level.height), path.side, level, tile_size)

    if path.side == Side.LEFT:
        outer_x = max(world_margin, min(entry_x, exit_x) - extent)
        inner_x = min(entry_x, exit_x) - inner_offset
    else:
        outer_x = min(world_width - world_margin, max(entry_x, exit_x) + extent)
        inner_x = max(entry_x, exit_x) + inner_offset

    centerline = switchback_centerline(
        entry=(entry_x, entry_y),
        exit_=(exit_x, exit_y),
        outer_x=outer_x,
        inner_x=inner_x,
    )
    left_edge, right_edge = road_edges(centerline, road_width)
    for array in (centerline, left_edge, right_edge):
        array.setflags(write=False)

    curve = AccessPathCurve(
        centerline=centerline,
        left_edge=left_edge,
        right_edge=right_edge,
        road_width=road_width,
        side=path.side,
        path_index=path_index,
    )
    rects = leg_rects(centerline, road_width, path.side, path_index)
    logger.debug(f"Access path {path_index} ({path.side.value}): {len(centerline)} points, {len(rects)} rects")
    return curve, rects


def build_access_paths(
    level: LevelDescriptor,
    piste_path: list[PathRow],
    tile_size: int,
) -> tuple[list[AccessPathCurve], list[AccessPathRect]]:
    """Curves (order-matched to level.access_paths) and all collision rectangles."""
    curves: list[AccessPathCurve] = []
    rects: list[AccessPathRect] = []
    for index, path in enumerate(level.access_paths):
        curve, path_rects = build_access_path(
            level=level,
            path=path,
            path_index=index,
            piste_path=piste_path,
            tile_size=tile_size,
        )
        curves.append(curve)
        rects.extend(path_rects)
    return curves, rects

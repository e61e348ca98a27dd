"""Validators - Structural and spatial checks for level candidates.

Centralizes all level validation. Each check returns Optional[ValidationIssue]
(or a list for checks that can fail more than once):
- None / [] if valid
- ValidationIssue objects if invalid (the generator retries with the next seed)

Design Principles:
- No exceptions for expected validation failures
- Structural checks read only the descriptor
- Spatial checks build the level's geometry and inspect it
"""

from piste_planner.constants import BalanceConfig, ValidationConfig
from piste_planner.geometry.level_geometry import LevelGeometry
from piste_planner.model.level import LevelDescriptor, SpecialFeature
from piste_planner.model.validation_issue import (
    ContradictoryFeatures,
    DimensionOutOfBounds,
    EmptyParkFeatures,
    HalfpipeTooNarrow,
    InvalidCoverage,
    InvalidSteepZone,
    MissingAccessPath,
    MissingWinchAnchors,
    OverlappingSteepZones,
    PisteTooNarrow,
    SpawnBlocked,
    TooFewGroomableTiles,
    UnexpectedAccessPath,
    ValidationIssue,
    WinchAnchorInSteepZone,
)


def is_dangerous_slope(slope: float) -> bool:
    """Steep enough to slide without a winch."""
    return slope >= BalanceConfig.SLIDE_SLOPE_THRESHOLD


# ==========================================================================
# Structural checks
# ==========================================================================


def validate_dimensions(level: LevelDescriptor) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for dimension, value, (lo, hi) in (
        ("width", level.width, ValidationConfig.WIDTH_BOUNDS),
        ("height", level.height, ValidationConfig.HEIGHT_BOUNDS),
    ):
        if not lo <= value <= hi:
            issues.append(DimensionOutOfBounds(dimension=dimension, value=value, min_value=lo, max_value=hi))
    return issues


def validate_coverage(level: LevelDescriptor) -> ValidationIssue | None:
    if not 0 < level.target_coverage <= 100:
        return InvalidCoverage(coverage=level.target_coverage)
    return None


def validate_steep_zones(level: LevelDescriptor) -> list[ValidationIssue]:
    """Zones must be non-empty and pairwise non-overlapping (touching is allowed)."""
    issues: list[ValidationIssue] = []
    for index, zone in enumerate(level.steep_zones):
        if zone.start_y >= zone.end_y:
            issues.append(InvalidSteepZone(index=index, start_y=zone.start_y, end_y=zone.end_y))

    ordered = sorted(enumerate(level.steep_zones), key=lambda item: item[1].start_y)
    for (prev_index, prev), (index, zone) in zip(ordered, ordered[1:]):
        if zone.start_y < prev.end_y:
            issues.append(OverlappingSteepZones(first_index=prev_index, second_index=index))
    return issues


def validate_winch_anchors(level: LevelDescriptor) -> list[ValidationIssue]:
    """Anchors must lie outside every steep zone (zone bounds inclusive)."""
    issues: list[ValidationIssue] = []
    for anchor in level.winch_anchors:
        for index, zone in enumerate(level.steep_zones):
            if zone.contains(anchor.y):
                issues.append(WinchAnchorInSteepZone(anchor_y=anchor.y, zone_index=index))

    dangerous = [z for z in level.steep_zones if is_dangerous_slope(z.slope)]
    if level.has_winch and dangerous and not level.winch_anchors:
        issues.append(MissingWinchAnchors(dangerous_zone_count=len(dangerous)))
    return issues


def validate_access_paths(level: LevelDescriptor) -> list[ValidationIssue]:
    """Every dangerous zone needs a road spanning it; no roads without a reason."""
    issues: list[ValidationIssue] = []
    for index, zone in enumerate(level.steep_zones):
        if not is_dangerous_slope(zone.slope):
            continue
        covered = any(p.start_y <= zone.start_y and p.end_y >= zone.end_y for p in level.access_paths)
        if not covered:
            issues.append(MissingAccessPath(zone_index=index, slope=zone.slope))

    if level.access_paths and not level.steep_zones and not level.has_dangerous_boundaries:
        issues.append(UnexpectedAccessPath(count=len(level.access_paths)))
    return issues


def validate_features(level: LevelDescriptor) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if level.is_park and not level.special_features:
        issues.append(EmptyParkFeatures())
    if level.special_features:
        if level.steep_zones:
            issues.append(ContradictoryFeatures(conflict="steep zones"))
        if level.has_winch:
            issues.append(ContradictoryFeatures(conflict="a winch"))
        if level.has_dangerous_boundaries:
            issues.append(ContradictoryFeatures(conflict="cliffs"))
    return issues


def validate_structure(level: LevelDescriptor) -> list[ValidationIssue]:
    """All descriptor-only checks."""
    issues = validate_dimensions(level)
    coverage_issue = validate_coverage(level)
    if coverage_issue:
        issues.append(coverage_issue)
    issues.extend(validate_steep_zones(level))
    issues.extend(validate_winch_anchors(level))
    issues.extend(validate_access_paths(level))
    issues.extend(validate_features(level))
    return issues


# ==========================================================================
# Spatial checks
# ==========================================================================


def validate_piste_width(level: LevelDescriptor, geometry: LevelGeometry) -> list[ValidationIssue]:
    """Groomer must fit every row; halfpipe rows need room for walls and floor."""
    issues: list[ValidationIssue] = []
    min_tiles = ValidationConfig.MIN_PISTE_WIDTH_TILES
    for y, row in enumerate(geometry.piste_path):
        if row.width < min_tiles:
            issues.append(PisteTooNarrow(row=y, width_tiles=row.width, min_tiles=min_tiles))
            break

    if SpecialFeature.HALFPIPE in level.special_features:
        min_tiles = ValidationConfig.MIN_HALFPIPE_WIDTH_TILES
        for y, row in enumerate(geometry.piste_path):
            if row.width < min_tiles:
                issues.append(HalfpipeTooNarrow(row=y, width_tiles=row.width, min_tiles=min_tiles))
                break
    return issues


def validate_groomable_area(level: LevelDescriptor, geometry: LevelGeometry) -> ValidationIssue | None:
    count = geometry.groomable_tile_count(level)
    if count < ValidationConfig.MIN_GROOMABLE_TILES:
        return TooFewGroomableTiles(count=count, min_count=ValidationConfig.MIN_GROOMABLE_TILES)
    return None


def spawn_tile(level: LevelDescriptor, geometry: LevelGeometry) -> tuple[int, int]:
    """Groomer spawn tile: 90% down the run, at the piste centre."""
    spawn_y = min(
        level.height - ValidationConfig.SPAWN_BOTTOM_MARGIN_ROWS,
        int(level.height * ValidationConfig.SPAWN_HEIGHT_FRACTION),
    )
    if 0 <= spawn_y < len(geometry.piste_path):
        spawn_x = int(geometry.piste_path[spawn_y].center_x)
    else:
        spawn_x = level.width // 2
    return spawn_x, spawn_y


def validate_spawn(level: LevelDescriptor, geometry: LevelGeometry) -> ValidationIssue | None:
    """Spawn must be on the piste and outside every cliff band."""
    tile_x, tile_y = spawn_tile(level, geometry)
    if not geometry.is_in_piste(tile_x, tile_y, level):
        return SpawnBlocked(tile_x=tile_x, tile_y=tile_y, reason="off_piste")
    ts = geometry.tile_size
    if geometry.is_on_cliff((tile_x + 0.5) * ts, (tile_y + 0.5) * ts):
        return SpawnBlocked(tile_x=tile_x, tile_y=tile_y, reason="cliff")
    return None


def validate_geometry(level: LevelDescriptor, geometry: LevelGeometry) -> list[ValidationIssue]:
    """All checks that need built geometry."""
    issues = validate_piste_width(level, geometry)
    for issue in (validate_groomable_area(level, geometry), validate_spawn(level, geometry)):
        if issue:
            issues.append(issue)
    return issues


def validate_level(level: LevelDescriptor) -> list[ValidationIssue]:
    """Structural plus spatial validation. Empty list means valid."""
    geometry = LevelGeometry()
    geometry.generate(level=level)
    issues = validate_structure(level) + validate_geometry(level, geometry)
    geometry.reset()
    return issues

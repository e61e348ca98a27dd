"""Time budget - Fair, deterministic time limits for a level.

The limit is derived from the area that must be groomed:
- width x height x target coverage, divided by the groom rate
- weighted by the calibrated navigation overhead
- scaled by difficulty (easy levels get more slack)
- plus fixed time per service road and for winch setup
- floored at the minimum and rounded up to the granularity

Tutorial levels are untimed and return 0.
"""

from math import ceil

from piste_planner.constants import TimeBudgetConfig
from piste_planner.model.level import Difficulty, LevelDescriptor


def compute_time_limit(level: LevelDescriptor) -> int:
    """Time limit in seconds for a level.

    Total for every descriptor and monotonically non-decreasing in width,
    height, target coverage, number of access paths and the winch flag.

    Returns:
        0 for tutorial levels, otherwise a multiple of GRANULARITY_S that is
        at least the difficulty's minimum.
    """
    if level.difficulty == Difficulty.TUTORIAL:
        return 0

    difficulty = level.difficulty.value
    tiles_to_groom = level.width * level.height * (level.target_coverage / 100)
    groom_seconds = tiles_to_groom / TimeBudgetConfig.GROOM_RATE * TimeBudgetConfig.NAV_OVERHEAD

    scaled = groom_seconds * TimeBudgetConfig.DIFFICULTY_SCALE[difficulty]
    scaled += len(level.access_paths) * TimeBudgetConfig.ACCESS_PATH_TIME_S
    if level.has_winch:
        scaled += TimeBudgetConfig.WINCH_TIME_S

    floor_s = TimeBudgetConfig.MIN_TIME_LIMIT_S.get(difficulty, TimeBudgetConfig.DEFAULT_MIN_TIME_LIMIT_S)
    return _round_up(max(scaled, floor_s))


def area_time_floor(width: int, height: int, piste_width: float) -> int:
    """Area-proportional floor used for generated levels (+30s per 500 piste tiles)."""
    piste_tiles = width * height * piste_width
    raw = piste_tiles / TimeBudgetConfig.AREA_TILES_PER_STEP * TimeBudgetConfig.GRANULARITY_S
    return _round_up(max(raw, TimeBudgetConfig.DEFAULT_MIN_TIME_LIMIT_S))


def speed_run_target(time_limit: int) -> int:
    """Target seconds for the speed run bonus objective."""
    return round(time_limit * TimeBudgetConfig.SPEED_RUN_FACTOR)


def _round_up(seconds: float) -> int:
    granularity = TimeBudgetConfig.GRANULARITY_S
    return int(ceil(seconds / granularity) * granularity)

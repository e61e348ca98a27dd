"""Core foundation for deterministic level generation.

- SeededRNG: Per-call random source, seed codes and the daily seed
- piste_profile: Per-row piste centre and width for each named shape
- compute_time_limit: Time budget from the groomable area
- ShareParams: (seed code, rank) pair crossing the share boundary
"""

from piste_planner.core.seeded_rng import (
    SeededRNG,
    code_to_seed,
    daily_seed,
    position_noise,
    random_seed,
    seed_to_code,
)
from piste_planner.core.piste_shapes import piste_profile
from piste_planner.core.share_params import (
    ShareParams,
    build_share_message,
    build_share_url,
    parse_share_params,
)
from piste_planner.core.time_budget import (
    area_time_floor,
    compute_time_limit,
    speed_run_target,
)

__all__ = [
    # Seeded RNG
    "SeededRNG",
    "seed_to_code",
    "code_to_seed",
    "daily_seed",
    "random_seed",
    "position_noise",
    # Piste shapes
    "piste_profile",
    # Time budget
    "compute_time_limit",
    "area_time_floor",
    "speed_run_target",
    # Share params
    "ShareParams",
    "build_share_url",
    "build_share_message",
    "parse_share_params",
]

"""Level generation from a seed and a rank.

- LevelGenerator: Deterministic generator with validation and retry
- generate_piste_name: Rank-themed French piste names
- validate_level: Structural and spatial checks
"""

from piste_planner.generators.level_generator import (
    GenerationResult,
    LevelGenerator,
    generate_daily_run,
    rank_seed,
)
from piste_planner.generators.piste_names import generate_piste_name
from piste_planner.generators.validators import (
    validate_geometry,
    validate_level,
    validate_structure,
)

__all__ = [
    "LevelGenerator",
    "GenerationResult",
    "rank_seed",
    "generate_daily_run",
    "generate_piste_name",
    "validate_level",
    "validate_structure",
    "validate_geometry",
]

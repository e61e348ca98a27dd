"""Render a generated level to an interactive HTML preview.

Developer utility: generates the level for a (seed code, rank) pair, or the
day's daily run, exactly as the game would, builds its geometry and writes a
Plotly chart.

Usage:
    python scripts/render_level_preview.py K7Q2 --rank black --output preview.html
    python scripts/render_level_preview.py --daily --rank red
"""

import argparse
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from piste_planner.core.seeded_rng import code_to_seed, seed_to_code
from piste_planner.generators.level_generator import GenerationResult, LevelGenerator
from piste_planner.geometry.level_geometry import LevelGeometry
from piste_planner.model.level import Rank
from piste_planner.ui.level_preview import LevelPreview

logger = logging.getLogger(__name__)


def load_level(
    rank: Rank,
    seed_code: Optional[str] = None,
    daily: bool = False,
    when: Optional[date | datetime] = None,
) -> GenerationResult:
    """Level the game serves for a share code, or for the daily run of a rank."""
    generator = LevelGenerator()
    if daily:
        return generator.generate_daily_run(rank=rank, when=when)
    if not seed_code:
        raise ValueError("Provide a seed code or daily=True")
    return generator.generate_valid_level(seed=code_to_seed(seed_code), rank=rank)


def render_level_preview(result: GenerationResult, rank: Rank, output: Path) -> None:
    """Build geometry for a generated level and render it to an HTML file."""
    level = result.level
    if not result.is_valid:
        for issue in result.issues:
            logger.warning(f"Unresolved issue: {issue.message}")

    geometry = LevelGeometry()
    geometry.generate(level=level)
    fig = LevelPreview().render(level=level, geometry=geometry)
    fig.write_html(output)

    print(f"Level: {level.name} ({rank.value}), seed {seed_to_code(result.used_seed)}, {result.attempts} attempt(s)")
    print(f"Size: {level.width}x{level.height}, time limit {level.time_limit}s, coverage {level.target_coverage}%")
    print(f"Preview written to {output}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a generated piste to an HTML preview")
    parser.add_argument("seed_code", nargs="?", help="Base-36 seed code, e.g. K7Q2")
    parser.add_argument("--daily", action="store_true", help="Use today's daily run for the rank")
    parser.add_argument("--rank", choices=[r.value for r in Rank], default=Rank.GREEN.value)
    parser.add_argument("--output", type=Path, default=Path("level_preview.html"))
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.daily and not args.seed_code:
        parser.error("Provide a seed code or --daily")

    rank = Rank(args.rank)
    result = load_level(rank=rank, seed_code=args.seed_code, daily=args.daily)
    render_level_preview(result=result, rank=rank, output=args.output)


if __name__ == "__main__":
    main()

"""Workflow tests for loading levels the way the game does.

Each test runs the full level-load sequence on one reused LevelGeometry:
1. Resolve (seed code, rank) from a share link or the daily seed
2. Generate and validate the level
3. Build geometry and answer per-frame queries
4. Tear down before the next level
"""

from datetime import date

import pytest

from piste_planner.constants import SeedConfig, ValidationConfig
from piste_planner.core.seeded_rng import code_to_seed, daily_seed, seed_to_code
from piste_planner.core.share_params import build_share_url, parse_share_params
from piste_planner.generators.level_generator import LevelGenerator, rank_seed
from piste_planner.generators.validators import spawn_tile
from piste_planner.geometry.level_geometry import LevelGeometry
from piste_planner.model.catalog import LEVELS
from piste_planner.model.level import Rank

BASE_URL = "https://example.org/play"


class TestShareLinkWorkflow:
    """A shared link reproduces exactly the level the sender played."""

    @pytest.mark.parametrize("rank", list(Rank))
    def test_share_link_round_trip(self, generator: LevelGenerator, rank: Rank) -> None:
        sent = generator.generate_valid_level(seed=code_to_seed("K7Q2"), rank=rank)
        url = build_share_url(base_url=BASE_URL, seed_code=seed_to_code(sent.used_seed), rank=rank)

        params = parse_share_params(url)
        received = LevelGenerator().generate_valid_level(seed=code_to_seed(params.seed_code), rank=params.rank)

        assert received.used_seed == sent.used_seed
        assert received.level == sent.level

    def test_daily_runs_differ_per_rank(self, generator: LevelGenerator) -> None:
        day = date(2026, 3, 1)
        results = {rank: generator.generate_daily_run(rank=rank, when=day) for rank in Rank}
        assert len({result.used_seed for result in results.values()}) == len(Rank)
        for rank, result in results.items():
            assert result.is_valid
            offset = (result.used_seed - rank_seed(daily_seed(day), rank)) & SeedConfig.SEED_MASK
            assert offset < generator.max_attempts


class TestLevelLoadWorkflow:
    """Generate -> query -> reset, level after level, on one geometry engine."""

    def test_campaign_playthrough(self, geometry: LevelGeometry) -> None:
        for level in LEVELS:
            geometry.generate(level=level)
            assert geometry.is_generated
            assert len(geometry.access_path_curves) == len(level.access_paths)
            assert len(geometry.steep_zone_rects) == len(level.steep_zones)
            if not level.has_dangerous_boundaries:
                assert geometry.cliff_segments == []

            tile_x, tile_y = spawn_tile(level, geometry)
            assert geometry.is_in_piste(tile_x=tile_x, tile_y=tile_y, level=level)
            ts = geometry.tile_size
            assert not geometry.is_on_cliff((tile_x + 0.5) * ts, (tile_y + 0.5) * ts)

            geometry.reset()
            assert not geometry.is_generated
            assert geometry.cliff_segments == []

    @pytest.mark.parametrize("rank", list(Rank))
    def test_generated_runs_back_to_back(self, generator: LevelGenerator, geometry: LevelGeometry, rank: Rank) -> None:
        """Loading the next level without a reset leaves nothing from the previous one."""
        for seed in range(1, 6):
            result = generator.generate_valid_level(seed=seed, rank=rank)
            level = result.level
            geometry.generate(level=level)
            assert len(geometry.piste_path) == level.height
            assert len(geometry.access_path_curves) == len(level.access_paths)
            if not level.has_dangerous_boundaries:
                assert geometry.cliff_segments == []
            if result.is_valid:
                assert geometry.groomable_tile_count(level) >= ValidationConfig.MIN_GROOMABLE_TILES

    def test_physics_queries_on_black_run(self, generator: LevelGenerator, geometry: LevelGeometry) -> None:
        """The middle of every steep zone reports a zone with the right slope."""
        level = generator.generate_valid_level(seed=2026, rank=Rank.BLACK).level
        geometry.generate(level=level)
        assert geometry.steep_zone_rects
        slopes = {zone.slope for zone in level.steep_zones}
        for rect in geometry.steep_zone_rects:
            y = (rect.start_y + rect.end_y) / 2
            left_x, right_x = rect.bounds_at(y)
            if left_x > right_x:
                continue
            found = geometry.steep_zone_at((left_x + right_x) / 2, y)
            assert found is not None
            assert found.slope in slopes
            assert not geometry.steep_zone_at(-1.0, y)

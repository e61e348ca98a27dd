"""Tests for the developer scripts under scripts/.

The scripts are not part of the installed package, so they are loaded from
their file path.
"""

import importlib.util
from datetime import date
from pathlib import Path

import pytest

from piste_planner.core.seeded_rng import code_to_seed
from piste_planner.generators.level_generator import LevelGenerator
from piste_planner.model.level import Rank

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "render_level_preview.py"


@pytest.fixture(scope="module")
def preview_script():
    """render_level_preview.py loaded as a module."""
    spec = importlib.util.spec_from_file_location("render_level_preview", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestLoadLevel:
    """The script must render the same level the game serves."""

    @pytest.mark.parametrize("rank", list(Rank))
    def test_daily_matches_daily_run(self, preview_script, rank: Rank) -> None:
        day = date(2026, 10, 19)
        served = LevelGenerator().generate_daily_run(rank=rank, when=day)
        loaded = preview_script.load_level(rank=rank, daily=True, when=day)
        assert loaded.used_seed == served.used_seed
        assert loaded.level.to_dict() == served.level.to_dict()

    def test_seed_code(self, preview_script) -> None:
        served = LevelGenerator().generate_valid_level(seed=code_to_seed("K7Q2"), rank=Rank.BLACK)
        loaded = preview_script.load_level(rank=Rank.BLACK, seed_code="K7Q2")
        assert loaded.level == served.level

    def test_requires_seed_or_daily(self, preview_script) -> None:
        with pytest.raises(ValueError):
            preview_script.load_level(rank=Rank.RED)


class TestRenderLevelPreview:
    """Tests for writing the HTML preview."""

    def test_writes_html(self, preview_script, tmp_path: Path) -> None:
        output = tmp_path / "preview.html"
        result = preview_script.load_level(rank=Rank.RED, seed_code="K7Q2")
        preview_script.render_level_preview(result=result, rank=Rank.RED, output=output)
        assert output.exists()
        assert "plotly" in output.read_text(encoding="utf-8").lower()

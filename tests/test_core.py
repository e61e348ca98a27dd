"""Unit tests for piste_planner core modules.

Tests cover:
- SeededRNG determinism and helper semantics
- Seed codes (base-36) and the daily seed
- Piste shape profiles
- Time budget formula
- Share link parameters
"""

from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from piste_planner.constants import GeometryConfig, TimeBudgetConfig
from piste_planner.core.piste_shapes import piste_profile
from piste_planner.core.seeded_rng import (
    SeededRNG,
    code_to_seed,
    daily_seed,
    position_noise,
    random_seed,
    seed_to_code,
)
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
from piste_planner.model.catalog import get_level
from piste_planner.model.level import (
    AccessPath,
    LevelDescriptor,
    PisteShape,
    PisteVariation,
    Rank,
    Side,
)


# =============================================================================
# SEEDED RNG
# =============================================================================


class TestSeededRNG:
    """Tests for SeededRNG helpers."""

    def test_same_seed_same_sequence(self) -> None:
        a = SeededRNG(12345)
        b = SeededRNG(12345)
        assert [a.frac() for _ in range(20)] == [b.frac() for _ in range(20)]

    def test_different_seeds_differ(self) -> None:
        a = SeededRNG(1)
        b = SeededRNG(2)
        assert [a.frac() for _ in range(5)] != [b.frac() for _ in range(5)]

    def test_from_code_matches_decoded_seed(self) -> None:
        a = SeededRNG.from_code("K7Q2")
        b = SeededRNG(code_to_seed("K7Q2"))
        assert a.seed == b.seed
        assert a.code == "K7Q2"
        assert a.integer_in_range(0, 1000) == b.integer_in_range(0, 1000)

    def test_seed_reduced_to_32_bits(self) -> None:
        rng = SeededRNG(2**32 + 7)
        assert rng.seed == 7

    def test_frac_in_unit_interval(self) -> None:
        rng = SeededRNG(99)
        values = [rng.frac() for _ in range(500)]
        assert all(0.0 <= v < 1.0 for v in values)

    @given(seed=st.integers(min_value=0, max_value=2**32 - 1), lo=st.integers(-50, 50), hi=st.integers(-50, 50))
    @settings(max_examples=100)
    def test_integer_in_range_inclusive(self, seed: int, lo: int, hi: int) -> None:
        """Result lies within the range even when the bounds are reversed."""
        value = SeededRNG(seed).integer_in_range(lo, hi)
        assert min(lo, hi) <= value <= max(lo, hi)

    def test_integer_in_range_hits_both_ends(self) -> None:
        rng = SeededRNG(7)
        values = {rng.integer_in_range(1, 3) for _ in range(200)}
        assert values == {1, 2, 3}

    def test_degenerate_range(self) -> None:
        rng = SeededRNG(7)
        assert all(rng.integer_in_range(5, 5) == 5 for _ in range(10))

    def test_chance_extremes(self) -> None:
        rng = SeededRNG(3)
        assert not any(rng.chance(0.0) for _ in range(100))
        assert all(rng.chance(1.0) for _ in range(100))

    def test_pick_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            SeededRNG(1).pick([])

    def test_pick_returns_member(self) -> None:
        items = ["a", "b", "c"]
        rng = SeededRNG(5)
        assert all(rng.pick(items) in items for _ in range(50))

    def test_shuffle_leaves_input_untouched(self) -> None:
        items = list(range(10))
        shuffled = SeededRNG(42).shuffle(items)
        assert items == list(range(10))
        assert sorted(shuffled) == items

    def test_shuffle_deterministic(self) -> None:
        items = list(range(10))
        assert SeededRNG(42).shuffle(items) == SeededRNG(42).shuffle(items)

    def test_sign(self) -> None:
        rng = SeededRNG(11)
        assert {rng.sign() for _ in range(100)} == {-1, 1}

    def test_random_seed_is_32_bit(self) -> None:
        assert 0 <= random_seed() <= 0xFFFFFFFF

    def test_position_noise_range_and_determinism(self) -> None:
        values = [position_noise(v * 0.37) for v in range(200)]
        assert all(0.0 <= v < 1.0 for v in values)
        assert position_noise(12.5) == position_noise(12.5)


# =============================================================================
# SEED CODES
# =============================================================================


class TestSeedCodes:
    """Tests for seed_to_code / code_to_seed."""

    @pytest.mark.parametrize(
        "seed, code",
        [
            (0, "0000"),
            (35, "000Z"),
            (36, "0010"),
            (0xFFFFFFFF, "1Z141Z3"),
        ],
    )
    def test_known_codes(self, seed: int, code: str) -> None:
        assert seed_to_code(seed) == code

    @given(seed=st.integers(min_value=0, max_value=0xFFFFFFFF))
    def test_round_trip(self, seed: int) -> None:
        assert code_to_seed(seed_to_code(seed)) == seed

    def test_code_at_least_four_chars(self) -> None:
        assert len(seed_to_code(1)) == 4

    def test_negative_seed_uses_absolute_value(self) -> None:
        assert seed_to_code(-36) == seed_to_code(36)

    def test_case_insensitive(self) -> None:
        assert code_to_seed("k7q2") == code_to_seed("K7Q2")

    def test_garbage_characters_dropped(self) -> None:
        assert code_to_seed("K7-Q2!") == code_to_seed("K7Q2")

    def test_empty_code_decodes_to_zero(self) -> None:
        assert code_to_seed("") == 0
        assert code_to_seed("---") == 0

    def test_oversized_code_reduced_to_32_bits(self) -> None:
        assert 0 <= code_to_seed("ZZZZZZZZZZZZ") <= 0xFFFFFFFF


class TestDailySeed:
    """Tests for daily_seed."""

    def test_same_day_same_seed(self) -> None:
        assert daily_seed(date(2026, 3, 1)) == daily_seed(date(2026, 3, 1))

    def test_different_days_differ(self) -> None:
        assert daily_seed(date(2026, 3, 1)) != daily_seed(date(2026, 3, 2))

    def test_datetime_and_date_agree(self) -> None:
        assert daily_seed(datetime(2026, 3, 1, 23, 59)) == daily_seed(date(2026, 3, 1))

    def test_aware_datetime_uses_utc_day(self) -> None:
        """22:00 at UTC-5 on March 1st is already March 2nd in UTC."""
        local = datetime(2026, 3, 1, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert daily_seed(local) == daily_seed(date(2026, 3, 2))

    def test_djb2_of_prefixed_date(self) -> None:
        value = 5381
        for char in "LAB20260301":
            value = (value * 33 + ord(char)) & 0xFFFFFFFF
        assert daily_seed(date(2026, 3, 1)) == value

    def test_daily_rng(self) -> None:
        assert SeededRNG.daily(date(2026, 3, 1)).seed == daily_seed(date(2026, 3, 1))


# =============================================================================
# PISTE SHAPES
# =============================================================================


class TestPisteProfile:
    """Tests for piste_profile."""

    @pytest.mark.parametrize("shape", list(PisteShape))
    def test_one_entry_per_row(self, shape: PisteShape) -> None:
        centers, widths = piste_profile(shape=shape, width=40, height=60, piste_width=0.4)
        assert len(centers) == 60
        assert len(widths) == 60

    @pytest.mark.parametrize("shape", list(PisteShape))
    def test_minimum_width(self, shape: PisteShape) -> None:
        _, widths = piste_profile(shape=shape, width=20, height=40, piste_width=0.2)
        assert widths.min() >= GeometryConfig.MIN_PATH_WIDTH_TILES

    @pytest.mark.parametrize("shape", list(PisteShape))
    def test_centre_keeps_side_margin(self, shape: PisteShape) -> None:
        width = 40
        half = 10  # floor(40 * 0.5 / 2)
        centers, _ = piste_profile(shape=shape, width=width, height=80, piste_width=0.5)
        margin = GeometryConfig.SIDE_MARGIN_TILES
        assert centers.min() >= half + margin - 1e-9
        assert centers.max() <= width - half - margin + 1e-9

    def test_straight_is_constant(self) -> None:
        centers, widths = piste_profile(shape=PisteShape.STRAIGHT, width=40, height=60, piste_width=0.5)
        assert np.all(centers == 20)
        assert np.all(widths == 20)

    def test_wide_is_two_and_a_half_half_widths(self) -> None:
        _, widths = piste_profile(shape=PisteShape.WIDE, width=40, height=30, piste_width=0.4)
        assert np.all(widths == 20)  # half = 8, 8 * 2.5

    def test_gentle_curve_sways(self) -> None:
        centers, _ = piste_profile(shape=PisteShape.GENTLE_CURVE, width=60, height=60, piste_width=0.3)
        assert centers.max() - centers.min() > 5

    def test_serpentine_pinches_width(self) -> None:
        _, widths = piste_profile(shape=PisteShape.SERPENTINE, width=60, height=80, piste_width=0.5)
        assert widths.min() < widths.max()

    def test_variation_ignored_for_straight(self) -> None:
        variation = PisteVariation(freq_offset=0.4, amp_scale=1.3, phase=1.0, width_phase=2.0)
        plain = piste_profile(shape=PisteShape.STRAIGHT, width=40, height=60, piste_width=0.5)
        varied = piste_profile(shape=PisteShape.STRAIGHT, width=40, height=60, piste_width=0.5, variation=variation)
        assert np.array_equal(plain[0], varied[0])
        assert np.array_equal(plain[1], varied[1])

    def test_variation_changes_winding(self) -> None:
        variation = PisteVariation(freq_offset=0.4, amp_scale=1.2, phase=1.0, width_phase=2.0)
        plain, _ = piste_profile(shape=PisteShape.WINDING, width=50, height=60, piste_width=0.4)
        varied, _ = piste_profile(shape=PisteShape.WINDING, width=50, height=60, piste_width=0.4, variation=variation)
        assert not np.array_equal(plain, varied)


# =============================================================================
# TIME BUDGET
# =============================================================================


def _level(**overrides) -> LevelDescriptor:
    params = dict(
        id=950,
        name="Le Chrono",
        width=40,
        height=60,
        difficulty="blue",
        target_coverage=80,
        time_limit=0,
    )
    params.update(overrides)
    return LevelDescriptor(**params)


class TestTimeBudget:
    """Tests for compute_time_limit and helpers."""

    def test_tutorial_is_untimed(self) -> None:
        assert compute_time_limit(get_level(0)) == 0

    def test_small_level_hits_floor(self) -> None:
        # 40 * 60 * 0.8 / 14.0625 * 0.3 * 1.3 = 53.2s, below the 60s floor
        assert compute_time_limit(_level(difficulty="green")) == 60

    def test_authored_black_level(self) -> None:
        # 50 * 90 * 0.75 / 14.0625 * 0.3 * 0.75 = 54s, + 3 roads * 10s + 15s winch = 99s -> 120s
        assert compute_time_limit(get_level(6)) == 120

    @pytest.mark.parametrize("difficulty", ["green", "blue", "red", "black", "park"])
    def test_multiple_of_granularity(self, difficulty: str) -> None:
        limit = compute_time_limit(_level(difficulty=difficulty, width=80, height=120, target_coverage=90))
        assert limit % TimeBudgetConfig.GRANULARITY_S == 0
        assert limit >= TimeBudgetConfig.MIN_TIME_LIMIT_S[difficulty]

    def test_access_paths_and_winch_add_time(self) -> None:
        base = _level(width=100, height=120, difficulty="red")
        extra = _level(
            width=100,
            height=120,
            difficulty="red",
            has_winch=True,
            access_paths=[AccessPath(start_y=0.2, end_y=0.5, side=Side.LEFT)],
        )
        assert compute_time_limit(extra) >= compute_time_limit(base)

    @given(
        width=st.integers(10, 120),
        height=st.integers(15, 150),
        coverage=st.integers(1, 99),
        difficulty=st.sampled_from(["green", "blue", "red", "black", "park"]),
    )
    @settings(max_examples=100)
    def test_monotonic(self, width: int, height: int, coverage: int, difficulty: str) -> None:
        """Growing any size input never shortens the time limit."""
        base = compute_time_limit(_level(width=width, height=height, target_coverage=coverage, difficulty=difficulty))
        assert compute_time_limit(_level(width=width + 1, height=height, target_coverage=coverage,
                                         difficulty=difficulty)) >= base
        assert compute_time_limit(_level(width=width, height=height + 1, target_coverage=coverage,
                                         difficulty=difficulty)) >= base
        assert compute_time_limit(_level(width=width, height=height, target_coverage=coverage + 1,
                                         difficulty=difficulty)) >= base

    def test_area_floor(self) -> None:
        # 40 * 60 * 0.5 = 1200 tiles -> 72s -> 90s
        assert area_time_floor(width=40, height=60, piste_width=0.5) == 90
        assert area_time_floor(width=10, height=15, piste_width=0.3) == 60

    def test_speed_run_target(self) -> None:
        assert speed_run_target(300) == 180
        assert speed_run_target(90) == 54


# =============================================================================
# SHARE PARAMS
# =============================================================================


class TestShareParams:
    """Tests for share links."""

    def test_build_url(self) -> None:
        url = build_share_url(base_url="https://example.org/play", seed_code="K7Q2", rank=Rank.RED)
        assert url == "https://example.org/play?seed=K7Q2&rank=red"

    def test_parse_query_string(self) -> None:
        assert parse_share_params("seed=K7Q2&rank=black") == ShareParams(seed_code="K7Q2", rank=Rank.BLACK)

    def test_parse_leading_question_mark(self) -> None:
        assert parse_share_params("?seed=K7Q2&rank=blue") == ShareParams(seed_code="K7Q2", rank=Rank.BLUE)

    def test_parse_full_url_round_trip(self) -> None:
        url = build_share_url(base_url="https://example.org/play", seed_code="00A3", rank=Rank.BLUE)
        assert parse_share_params(url) == ShareParams(seed_code="00A3", rank=Rank.BLUE)

    def test_code_upper_cased(self) -> None:
        assert parse_share_params("seed=k7q2&rank=red").seed_code == "K7Q2"

    def test_missing_seed_returns_none(self) -> None:
        assert parse_share_params("rank=red") is None
        assert parse_share_params("seed=&rank=red") is None
        assert parse_share_params("") is None

    def test_unknown_rank_falls_back_to_green(self) -> None:
        assert parse_share_params("seed=K7Q2&rank=purple").rank == Rank.GREEN
        assert parse_share_params("seed=K7Q2").rank == Rank.GREEN

    def test_message(self) -> None:
        message = build_share_message(
            base_url="https://example.org/play",
            seed_code="K7Q2",
            rank=Rank.BLACK,
            piste_name="Le Couloir Maudit",
        )
        first_line, second_line = message.split("\n")
        assert first_line == "https://example.org/play?seed=K7Q2&rank=black"
        assert "Le Couloir Maudit" in second_line
        assert "Black" in second_line
        assert "[K7Q2]" in second_line

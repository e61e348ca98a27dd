"""Level generator - Deterministic daily run levels from a seed and a rank.

Every decision draws from one SeededRNG owned by the call, so the same
(seed, rank) pair always produces the same LevelDescriptor:
- park or regular level (green ranks sometimes get a terrain park)
- size, piste shape and variation, weather and night
- steep zones with rank-scaled slopes, winch anchors outside every zone
- service roads around dangerous zones, cliffs by per-rank chance
- obstacles, wildlife, slalom gates, bonus objectives
- coverage, time limit, French piste name, briefing speaker

Candidates are validated; an invalid candidate is a retry signal. Attempt k
uses seed (seed + k) mod 2^32, and the seed that produced the returned level
is reported back.

Example:
    generator = LevelGenerator()
    result = generator.generate_valid_level(seed=code_to_seed("K7Q2"), rank=Rank.RED)
    level, used_seed = result.level, result.used_seed
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from math import pi
from typing import Optional

from piste_planner.constants import (
    RANK_CONFIGS,
    BalanceConfig,
    GeneratorConfig,
    NameConfig,
    ParkConfig,
    RankConfig,
    SeedConfig,
)
from piste_planner.core.seeded_rng import SeededRNG, daily_seed
from piste_planner.core.time_budget import area_time_floor, compute_time_limit, speed_run_target
from piste_planner.generators.piste_names import generate_piste_name
from piste_planner.generators.validators import is_dangerous_slope, validate_level
from piste_planner.model.level import (
    AccessPath,
    BonusObjective,
    Difficulty,
    HazardType,
    LevelDescriptor,
    ObstacleType,
    PisteShape,
    PisteVariation,
    Rank,
    Side,
    SlalomGates,
    SpecialFeature,
    SteepZone,
    Weather,
    WildlifeSpawn,
    WinchAnchor,
)
from piste_planner.model.validation_issue import ValidationIssue

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of generate_valid_level.

    Attributes:
        level: First valid candidate, or the one with fewest issues
        used_seed: Seed that produced level (may differ from the input seed)
        issues: Remaining validation issues (empty when valid)
        attempts: Number of candidates generated
    """

    level: LevelDescriptor
    used_seed: int
    issues: list[ValidationIssue] = field(default_factory=list)
    attempts: int = 1

    @property
    def is_valid(self) -> bool:
        return not self.issues


def rank_seed(base_seed: int, rank: Rank) -> int:
    """Rank-specific seed derived from a shared base seed."""
    rank = Rank(rank)
    mixed = base_seed * SeedConfig.RANK_SEED_MULTIPLIER + rank.index * SeedConfig.RANK_SEED_STRIDE
    return mixed & SeedConfig.SEED_MASK


class LevelGenerator:
    """Generates levels from (seed, rank).

    Stateless per call: all mutable state lives in the call's own RNG.

    Args:
        rank_configs: Per-rank tuning data, keyed by rank value
        max_attempts: Retry budget of generate_valid_level
    """

    def __init__(
        self,
        rank_configs: Optional[dict[str, RankConfig]] = None,
        max_attempts: int = GeneratorConfig.MAX_GENERATION_ATTEMPTS,
    ):
        self.rank_configs = rank_configs if rank_configs is not None else RANK_CONFIGS
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.max_attempts = max_attempts

    def config_for(self, rank: Rank) -> RankConfig:
        rank = Rank(rank)
        if rank.value not in self.rank_configs:
            raise ValueError(f"No generator config for rank {rank.value!r}")
        return self.rank_configs[rank.value]

    # ==========================================================================
    # Entry points
    # ==========================================================================

    def generate(self, seed: int, rank: Rank) -> LevelDescriptor:
        """One candidate level, deterministic in (seed, rank). Not validated."""
        rank = Rank(rank)
        cfg = self.config_for(rank)
        rng = SeededRNG(seed)
        if rng.chance(cfg.park_chance):
            return self._generate_park_level(rng, rank)
        return self._generate_regular_level(rng, cfg, rank)

    def generate_valid_level(self, seed: int, rank: Rank) -> GenerationResult:
        """First candidate that passes validation, retrying with successive seeds.

        If the retry budget is exhausted, the candidate with the fewest issues
        is returned together with its seed and issues.
        """
        best: Optional[GenerationResult] = None
        for attempt in range(self.max_attempts):
            try_seed = (seed + attempt) & SeedConfig.SEED_MASK
            level = self.generate(seed=try_seed, rank=rank)
            issues = validate_level(level)
            if not issues:
                if attempt:
                    logger.info(f"Seed {seed} rejected, seed {try_seed} valid after {attempt + 1} attempts")
                return GenerationResult(level=level, used_seed=try_seed, issues=[], attempts=attempt + 1)
            logger.debug(f"Seed {try_seed} rejected: {'; '.join(i.message for i in issues)}")
            if best is None or len(issues) < len(best.issues):
                best = GenerationResult(level=level, used_seed=try_seed, issues=issues)

        best.attempts = self.max_attempts
        logger.warning(
            f"No valid level for seed {seed} ({Rank(rank).value}) after {self.max_attempts} attempts, "
            f"returning seed {best.used_seed} with {len(best.issues)} issue(s)"
        )
        return best

    def generate_daily_run(self, rank: Rank, when: Optional[date | datetime] = None) -> GenerationResult:
        """Today's (or the given UTC day's) level for a rank."""
        return self.generate_valid_level(seed=rank_seed(daily_seed(when), rank), rank=rank)

    # ==========================================================================
    # Level kinds
    # ==========================================================================

    def _generate_regular_level(self, rng: SeededRNG, cfg: RankConfig, rank: Rank) -> LevelDescriptor:
        width = rng.integer_in_range(*cfg.width_range)
        height = rng.integer_in_range(*cfg.height_range)
        piste_width = rng.real_in_range(*cfg.piste_width_range)
        piste_shape = PisteShape(rng.pick(cfg.shapes))
        piste_variation = PisteVariation(
            freq_offset=rng.real_in_range(*GeneratorConfig.VARIATION_FREQ_RANGE),
            amp_scale=rng.real_in_range(*GeneratorConfig.VARIATION_AMP_RANGE),
            phase=rng.real_in_range(0, pi * 2),
            width_phase=rng.real_in_range(0, pi * 2),
        )
        weather = Weather(rng.pick(cfg.weather_pool))
        is_night = rng.chance(cfg.night_chance)
        target_coverage = rng.integer_in_range(*cfg.coverage_range)

        steep_zones = self._generate_steep_zones(rng, cfg)
        has_winch = cfg.has_winch or any(z.slope >= BalanceConfig.TUMBLE_SLOPE_THRESHOLD for z in steep_zones)
        winch_anchors = self._generate_winch_anchors(rng, steep_zones) if has_winch else []
        access_paths = self._generate_access_paths(rng, steep_zones)
        has_dangerous_boundaries = rng.chance(cfg.dangerous_boundary_chance)
        hazards = [HazardType.AVALANCHE] if cfg.has_avalanche else []
        obstacles = self._generate_obstacles(rng, rank, has_dangerous_boundaries, bool(hazards))
        wildlife = self._generate_wildlife(rng)

        slalom_gates = None
        if rng.chance(cfg.slalom_chance):
            slalom_gates = SlalomGates(count=rng.integer_in_range(*cfg.slalom_count), width=cfg.slalom_width)

        level = LevelDescriptor(
            id=self._level_id(rng),
            name=generate_piste_name(rng, rank),
            name_key=f"rank_{rank.value}",
            width=width,
            height=height,
            difficulty=Difficulty(rank.value),
            target_coverage=target_coverage,
            time_limit=0,
            piste_shape=piste_shape,
            piste_width=piste_width,
            piste_variation=piste_variation,
            steep_zones=steep_zones,
            winch_anchors=winch_anchors,
            access_paths=access_paths,
            has_winch=has_winch,
            is_night=is_night,
            weather=weather,
            has_dangerous_boundaries=has_dangerous_boundaries,
            obstacles=obstacles,
            hazards=hazards,
            wildlife=wildlife,
            slalom_gates=slalom_gates,
        )
        level.time_limit = max(compute_time_limit(level), area_time_floor(width, height, piste_width))
        level.bonus_objectives = self._generate_bonus_objectives(rng, rank, has_winch, level.time_limit)
        self._assign_briefing(rng, level)
        logger.info(f"Generated {level!r} from seed {rng.seed} ({rng.code})")
        return level

    def _generate_park_level(self, rng: SeededRNG, rank: Rank) -> LevelDescriptor:
        width = rng.integer_in_range(*ParkConfig.WIDTH_RANGE)
        height = rng.integer_in_range(*ParkConfig.HEIGHT_RANGE)
        piste_width = rng.real_in_range(*ParkConfig.PISTE_WIDTH_RANGE)
        piste_shape = PisteShape(rng.pick(ParkConfig.SHAPES))
        piste_variation = PisteVariation(
            freq_offset=rng.real_in_range(*ParkConfig.VARIATION_FREQ_RANGE),
            amp_scale=rng.real_in_range(*ParkConfig.VARIATION_AMP_RANGE),
            phase=rng.real_in_range(0, pi * 2),
            width_phase=rng.real_in_range(0, pi * 2),
        )

        feature_roll = rng.frac()
        combo = next(features for threshold, features in ParkConfig.FEATURE_COMBOS if feature_roll < threshold)
        special_features = [SpecialFeature(f) for f in combo]
        lane_alternation = rng.chance(0.5)
        target_coverage = min(ParkConfig.MAX_COVERAGE, rng.integer_in_range(*ParkConfig.COVERAGE_RANGE))
        wildlife = self._generate_wildlife(rng)

        bonus_objectives = [
            BonusObjective(type="precision_grooming", target=rng.integer_in_range(*ParkConfig.PRECISION_TARGET_RANGE))
        ]
        if SpecialFeature.HALFPIPE in special_features:
            bonus_objectives.append(
                BonusObjective(type="pipe_mastery", target=rng.integer_in_range(*ParkConfig.PIPE_MASTERY_RANGE))
            )

        level = LevelDescriptor(
            id=self._level_id(rng),
            name=generate_piste_name(rng, rank, is_park=True),
            name_key="rank_park",
            width=width,
            height=height,
            difficulty=Difficulty.PARK,
            target_coverage=target_coverage,
            time_limit=0,
            piste_shape=piste_shape,
            piste_width=piste_width,
            piste_variation=piste_variation,
            special_features=special_features,
            lane_alternation=lane_alternation,
            wildlife=wildlife,
            bonus_objectives=bonus_objectives,
        )
        level.time_limit = max(compute_time_limit(level), area_time_floor(width, height, piste_width))
        self._assign_briefing(rng, level)
        logger.info(f"Generated park {level!r} from seed {rng.seed} ({rng.code})")
        return level

    # ==========================================================================
    # Parts
    # ==========================================================================

    @staticmethod
    def _level_id(rng: SeededRNG) -> int:
        return GeneratorConfig.LEVEL_ID_BASE + rng.seed % GeneratorConfig.LEVEL_ID_SPAN

    @staticmethod
    def _generate_steep_zones(rng: SeededRNG, cfg: RankConfig) -> list[SteepZone]:
        """Zones with random spacing inside the steep band, at least STEEP_MIN_GAP apart."""
        count = cfg.steep_zone_count
        if count == 0:
            return []

        band_start, band_end = GeneratorConfig.STEEP_BAND
        min_gap = GeneratorConfig.STEEP_MIN_GAP
        heights = [rng.real_in_range(*GeneratorConfig.STEEP_HEIGHT_RANGE) for _ in range(count)]
        slack = max(0.0, (band_end - band_start) - sum(heights) - min_gap * (count - 1))

        # Slack is split over the gaps before, between and after the zones
        weights = [rng.real_in_range(0.1, 1.0) for _ in range(count + 1)]
        weight_sum = sum(weights)

        zones = []
        y = band_start
        for i in range(count):
            y += weights[i] / weight_sum * slack + (min_gap if i > 0 else 0.0)
            start_y = min(y, band_end)
            end_y = min(start_y + heights[i], band_end)
            slope = rng.integer_in_range(*cfg.slope_range)
            zones.append(SteepZone(start_y=start_y, end_y=end_y, slope=slope))
            y = end_y
        return zones

    @staticmethod
    def _largest_gap_midpoint(steep_zones: list[SteepZone]) -> float:
        edges = [0.0]
        for zone in sorted(steep_zones, key=lambda z: z.start_y):
            edges.extend([zone.start_y, zone.end_y])
        edges.append(1.0)
        gaps = [(edges[i + 1] - edges[i], edges[i]) for i in range(0, len(edges), 2)]
        size, start = max(gaps)
        return start + size / 2

    def _generate_winch_anchors(self, rng: SeededRNG, steep_zones: list[SteepZone]) -> list[WinchAnchor]:
        """One anchor above each dangerous zone, else 1-2 random anchors.

        A candidate inside any zone is redrawn; after WINCH_RESHUFFLE_ATTEMPTS it
        falls back to the middle of the largest zone-free gap.
        """
        dangerous = [z for z in steep_zones if is_dangerous_slope(z.slope)]
        if dangerous:
            lead = GeneratorConfig.WINCH_ANCHOR_LEAD
            candidates = [max(GeneratorConfig.WINCH_ANCHOR_MIN_Y, z.start_y - lead) for z in dangerous]
        else:
            count = rng.integer_in_range(1, 2)
            candidates = [rng.real_in_range(*GeneratorConfig.WINCH_RANDOM_RANGE) for _ in range(count)]

        anchors = []
        for y in candidates:
            for _ in range(GeneratorConfig.WINCH_RESHUFFLE_ATTEMPTS):
                if not any(z.contains(y) for z in steep_zones):
                    break
                y = rng.real_in_range(*GeneratorConfig.WINCH_RANDOM_RANGE)
            else:
                if any(z.contains(y) for z in steep_zones):
                    y = self._largest_gap_midpoint(steep_zones)
            anchors.append(WinchAnchor(y=y))
        return anchors

    @staticmethod
    def _generate_access_paths(rng: SeededRNG, steep_zones: list[SteepZone]) -> list[AccessPath]:
        """One service road per dangerous zone, alternating sides."""
        low, high = GeneratorConfig.ACCESS_Y_BOUNDS
        paths = []
        for i, zone in enumerate(z for z in steep_zones if is_dangerous_slope(z.slope)):
            margin = rng.real_in_range(*GeneratorConfig.ACCESS_MARGIN_RANGE)
            paths.append(
                AccessPath(
                    start_y=max(low, zone.start_y - margin),
                    end_y=min(high, zone.end_y + margin),
                    side=Side.LEFT if i % 2 == 0 else Side.RIGHT,
                )
            )
        return paths

    @staticmethod
    def _generate_obstacles(
        rng: SeededRNG,
        rank: Rank,
        has_dangerous_boundaries: bool,
        has_avalanche: bool,
    ) -> list[ObstacleType]:
        obstacles = [ObstacleType.TREES]
        if rank != Rank.GREEN:
            obstacles.append(ObstacleType.ROCKS)
        if rank == Rank.BLACK and rng.chance(GeneratorConfig.PYLON_CHANCE):
            obstacles.append(ObstacleType.PYLONS)
        if has_dangerous_boundaries:
            obstacles.append(ObstacleType.CLIFFS)
        if has_avalanche:
            obstacles.append(ObstacleType.AVALANCHE_ZONES)
        return obstacles

    @staticmethod
    def _generate_wildlife(rng: SeededRNG) -> list[WildlifeSpawn]:
        species_count = rng.integer_in_range(*GeneratorConfig.WILDLIFE_SPECIES_RANGE)
        species = rng.shuffle(NameConfig.WILDLIFE_POOL)[:species_count]
        return [
            WildlifeSpawn(type=animal, count=rng.integer_in_range(*GeneratorConfig.WILDLIFE_COUNT_RANGE))
            for animal in species
        ]

    @staticmethod
    def _generate_bonus_objectives(
        rng: SeededRNG,
        rank: Rank,
        has_winch: bool,
        time_limit: int,
    ) -> list[BonusObjective]:
        objectives = []
        if rng.chance(0.5):
            objectives.append(
                BonusObjective(type="fuel_efficiency", target=rng.integer_in_range(*GeneratorConfig.FUEL_TARGET_RANGE))
            )
        if rng.chance(0.3):
            objectives.append(BonusObjective(type="flawless", target=0))
        if rng.chance(0.4):
            objectives.append(BonusObjective(type="speed_run", target=speed_run_target(time_limit)))
        if has_winch and rng.chance(0.5):
            objectives.append(
                BonusObjective(type="winch_mastery", target=rng.integer_in_range(*GeneratorConfig.WINCH_MASTERY_RANGE))
            )
        if rank != Rank.GREEN and rng.chance(0.3):
            objectives.append(
                BonusObjective(
                    type="precision_grooming",
                    target=rng.integer_in_range(*GeneratorConfig.PRECISION_TARGET_RANGE),
                )
            )
        return objectives[: GeneratorConfig.MAX_BONUS_OBJECTIVES]

    @staticmethod
    def _assign_briefing(rng: SeededRNG, level: LevelDescriptor) -> None:
        """Pick the briefing speaker from the level's character, variant from the RNG."""
        if len(level.steep_zones) >= 2 or level.has_avalanche:
            speaker = NameConfig.SPEAKER_HAZARDS
        elif level.is_night or level.weather == Weather.STORM:
            speaker = NameConfig.SPEAKER_COLD
        elif level.difficulty in (Difficulty.GREEN, Difficulty.BLUE, Difficulty.PARK):
            speaker = NameConfig.SPEAKER_EASY
        else:
            speaker = NameConfig.SPEAKER_DEFAULT

        dialogue = NameConfig.DIALOGUE_KEYS[speaker]
        variant = rng.integer_in_range(1, GeneratorConfig.BRIEFING_VARIANTS)
        level.intro_speaker = speaker
        level.intro_dialogue = dialogue if variant == 1 else f"{dialogue}{variant}"


def generate_daily_run(rank: Rank, when: Optional[date | datetime] = None) -> GenerationResult:
    """Daily run level for a rank with the default generator."""
    return LevelGenerator().generate_daily_run(rank=rank, when=when)

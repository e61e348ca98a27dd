"""Configuration constants for Piste Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    GeometryConfig: Tile size and piste path framing
    CliffConfig: Cliff band offsets, extents and organic variation
    AccessPathConfig: Service road switchback parameters
    BalanceConfig: Slope thresholds shared with the physics collaborator
    TimeBudgetConfig: Time limit formula constants
    SeedConfig: Seed code alphabet and daily seed prefix
    GeneratorConfig: Level generator bounds and retry budget
    RankConfig / RANK_CONFIGS: Per-rank generation tuning data
    ValidationConfig: Structural and spatial validation thresholds
    NameConfig: Briefing speakers and park names
    PreviewConfig: Level preview colors and dimensions
"""

from dataclasses import dataclass


class GeometryConfig:
    """Piste path framing (tiles unless stated otherwise)."""

    # Default tile size in pixels (matches the game's rendering grid)
    TILE_SIZE_PX = 16

    # Rows never traversable regardless of computed path
    BOUNDARY_TOP_ROWS = 3
    BOUNDARY_BOTTOM_ROWS = 2

    # Horizontal margin kept between the piste and the world edge
    SIDE_MARGIN_TILES = 3

    # Narrowest piste row the path generator will emit
    MIN_PATH_WIDTH_TILES = 6

    DEFAULT_PISTE_WIDTH = 0.5

    # Steep zone per-row bounds are shrunk by this much for leniency
    STEEP_ZONE_INWARD_MARGIN_TILES = 0.5


class CliffConfig:
    """Cliff band geometry (tiles, scaled by difficulty)."""

    # (min, max) gap between piste edge and cliff band
    OFFSET_TILES = {
        "red": (1.5, 3.0),
        "black": (1.0, 2.5),
    }
    DEFAULT_OFFSET_TILES = (1.5, 3.0)

    # (min, max) thickness of the cliff band
    EXTENT_TILES = {
        "red": (3.0, 5.0),
        "black": (3.5, 6.0),
    }
    DEFAULT_EXTENT_TILES = (3.0, 5.0)

    # Per-row variation budget (fraction of a tile), always pushed off-piste
    ROW_VARIATION_TILES = 1.0
    ROW_VARIATION_INNER_SHARE = 0.3

    # A run of cliff rows needs at least this many edge points to become a segment
    MIN_SEGMENT_POINTS = 2

    # Piste edge must leave this much room to the world edge for a cliff
    MIN_ROOM_TILES = 1

    # Rows this close to an access entry zone stay cliff-free
    ACCESS_CLEARANCE_TILES = 2

    # Avalanche levels keep this band (fraction of height) free for hazard zones
    AVALANCHE_FREE_BAND = (0.15, 0.65)

    # Render-only: chance an edge tile is dropped for a ragged boundary
    EDGE_TILE_SKIP_THRESHOLD = 0.7
    EDGE_TILE_DEPTH_TILES = 1.5


class AccessPathConfig:
    """Service road switchback geometry (tiles)."""

    ROAD_WIDTH_TILES = 5
    ROAD_EXTENT_TILES = 12
    INNER_OFFSET_TILES = 2
    WORLD_MARGIN_TILES = 3
    NUM_TURNS = 3
    STEPS_PER_LEG = 12

    # Collision rects are padded by this multiple of the road width
    RECT_MARGIN_FACTOR = 1.2

    # Half-height of the cliff-free band where the road meets the piste
    ENTRY_ZONE_HALF_HEIGHT_TILES = 8


class BalanceConfig:
    """Slope thresholds (degrees) shared with the physics collaborator."""

    # Above this slope the groomer slides without a winch
    SLIDE_SLOPE_THRESHOLD = 30

    # Above this slope the groomer tumbles; a winch becomes mandatory
    TUMBLE_SLOPE_THRESHOLD = 40


assert BalanceConfig.SLIDE_SLOPE_THRESHOLD < BalanceConfig.TUMBLE_SLOPE_THRESHOLD


class TimeBudgetConfig:
    """Time limit formula constants."""

    GROOMER_SPEED_PX_S = 150
    TILE_SIZE_PX = GeometryConfig.TILE_SIZE_PX
    GROOM_WIDTH_PX = 24

    # Tiles groomed per second, approximately 14 tiles^2/s
    GROOM_RATE = (GROOMER_SPEED_PX_S / TILE_SIZE_PX) * (GROOM_WIDTH_PX / TILE_SIZE_PX)

    # Calibrated share of time actually spent grooming vs navigating
    NAV_OVERHEAD = 0.3

    DIFFICULTY_SCALE = {
        "green": 1.3,
        "blue": 1.0,
        "park": 1.5,
        "red": 0.9,
        "black": 0.75,
    }

    ACCESS_PATH_TIME_S = 10
    WINCH_TIME_S = 15

    # Per-difficulty floor (all non-tutorial difficulties currently share 60s)
    MIN_TIME_LIMIT_S = {
        "green": 60,
        "blue": 60,
        "park": 60,
        "red": 60,
        "black": 60,
    }
    DEFAULT_MIN_TIME_LIMIT_S = 60
    GRANULARITY_S = 30

    SPEED_RUN_FACTOR = 0.6

    # Generated levels: +30s per 500 piste tiles
    AREA_TILES_PER_STEP = 500


assert set(TimeBudgetConfig.DIFFICULTY_SCALE) == set(TimeBudgetConfig.MIN_TIME_LIMIT_S)


class SeedConfig:
    """Seed code alphabet and daily seed parameters."""

    BASE36_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    CODE_MIN_LENGTH = 4
    SEED_MASK = 0xFFFFFFFF
    DAILY_PREFIX = "LAB"

    # Rank seed derivation: (base * MULTIPLIER + rank_index * RANK_STRIDE) mod 2^32
    RANK_SEED_MULTIPLIER = 31
    RANK_SEED_STRIDE = 7919


assert len(SeedConfig.BASE36_CHARS) == 36


class GeneratorConfig:
    """Level generator identity, retry budget and steep zone layout."""

    # Generated level ids live above the authored catalog
    LEVEL_ID_BASE = 100
    LEVEL_ID_SPAN = 1000

    MAX_GENERATION_ATTEMPTS = 10

    # Steep zones are laid out in this band of the level height
    STEEP_BAND = (0.15, 0.85)
    STEEP_MIN_GAP = 0.08
    STEEP_HEIGHT_RANGE = (0.08, 0.18)

    # Access paths extend this far beyond the steep zone they bypass
    ACCESS_MARGIN_RANGE = (0.03, 0.08)
    ACCESS_Y_BOUNDS = (0.05, 0.95)

    # Winch anchors sit this far above the zone they serve
    WINCH_ANCHOR_LEAD = 0.05
    WINCH_ANCHOR_MIN_Y = 0.05
    WINCH_RANDOM_RANGE = (0.2, 0.7)
    WINCH_RESHUFFLE_ATTEMPTS = 8

    # Piste variation for regular levels
    VARIATION_FREQ_RANGE = (-0.5, 0.5)
    VARIATION_AMP_RANGE = (0.7, 1.3)

    # Bonus objectives (at most MAX_BONUS_OBJECTIVES per level)
    MAX_BONUS_OBJECTIVES = 3
    FUEL_TARGET_RANGE = (45, 65)
    WINCH_MASTERY_RANGE = (2, 5)
    PRECISION_TARGET_RANGE = (60, 75)

    WILDLIFE_SPECIES_RANGE = (2, 4)
    WILDLIFE_COUNT_RANGE = (1, 3)

    PYLON_CHANCE = 0.4

    BRIEFING_VARIANTS = 2


@dataclass(frozen=True)
class RankConfig:
    """Per-rank generation tuning data.

    Attributes:
        width_range, height_range: Level size bounds (tiles)
        piste_width_range: Nominal corridor width as fraction of level width
        shapes: Allowed piste shapes
        steep_zone_count: Number of steep zones per regular level
        slope_range: Steep zone slope bounds (degrees)
        has_winch: Whether regular levels always carry a winch
        has_avalanche: Whether regular levels carry the avalanche hazard
        dangerous_boundary_chance: Probability of cliff boundaries
        weather_pool: Weighted weather pool (duplicates add weight)
        night_chance: Probability of a night level
        park_chance: Probability of a park level instead of a regular one
        coverage_range: Target coverage bounds (percent)
        slalom_chance, slalom_count, slalom_width: Slalom gate parameters
    """

    width_range: tuple[int, int]
    height_range: tuple[int, int]
    piste_width_range: tuple[float, float]
    shapes: tuple[str, ...]
    steep_zone_count: int
    slope_range: tuple[int, int]
    has_winch: bool
    has_avalanche: bool
    dangerous_boundary_chance: float
    weather_pool: tuple[str, ...]
    night_chance: float
    park_chance: float
    coverage_range: tuple[int, int]
    slalom_chance: float
    slalom_count: tuple[int, int]
    slalom_width: int


RANK_CONFIGS = {
    "green": RankConfig(
        width_range=(28, 38),
        height_range=(35, 50),
        piste_width_range=(0.6, 0.75),
        shapes=("straight", "gentle_curve", "wide"),
        steep_zone_count=0,
        slope_range=(0, 0),
        has_winch=False,
        has_avalanche=False,
        dangerous_boundary_chance=0.0,
        weather_pool=("clear",),
        night_chance=0.0,
        park_chance=0.3,
        coverage_range=(75, 80),
        slalom_chance=0.0,
        slalom_count=(0, 0),
        slalom_width=5,
    ),
    "blue": RankConfig(
        width_range=(30, 42),
        height_range=(40, 55),
        piste_width_range=(0.5, 0.65),
        shapes=("straight", "gentle_curve", "winding"),
        steep_zone_count=1,
        slope_range=(25, 30),
        has_winch=False,
        has_avalanche=False,
        dangerous_boundary_chance=0.0,
        weather_pool=("clear",),
        night_chance=0.0,
        park_chance=0.0,
        coverage_range=(80, 85),
        slalom_chance=0.3,
        slalom_count=(4, 6),
        slalom_width=6,
    ),
    "red": RankConfig(
        width_range=(32, 48),
        height_range=(45, 60),
        piste_width_range=(0.4, 0.55),
        shapes=("gentle_curve", "winding", "serpentine"),
        steep_zone_count=2,
        slope_range=(30, 40),
        has_winch=True,
        has_avalanche=False,
        dangerous_boundary_chance=0.25,
        weather_pool=("clear", "clear", "light_snow"),
        night_chance=0.0,
        park_chance=0.0,
        coverage_range=(78, 84),
        slalom_chance=0.5,
        slalom_count=(5, 7),
        slalom_width=5,
    ),
    "black": RankConfig(
        width_range=(35, 55),
        height_range=(50, 70),
        piste_width_range=(0.3, 0.45),
        shapes=("winding", "serpentine"),
        steep_zone_count=3,
        slope_range=(35, 50),
        has_winch=True,
        has_avalanche=True,
        dangerous_boundary_chance=0.5,
        weather_pool=("clear", "light_snow", "storm"),
        night_chance=0.35,
        park_chance=0.0,
        coverage_range=(70, 80),
        slalom_chance=0.7,
        slalom_count=(6, 8),
        slalom_width=5,
    ),
}
RANKS = list(RANK_CONFIGS.keys())


class ParkConfig:
    """Park level generation parameters."""

    WIDTH_RANGE = (25, 40)
    HEIGHT_RANGE = (45, 60)
    PISTE_WIDTH_RANGE = (0.5, 0.8)
    SHAPES = ("straight", "wide", "gentle_curve")
    COVERAGE_RANGE = (90, 96)
    MAX_COVERAGE = 95

    # Cumulative frac thresholds -> feature combination
    FEATURE_COMBOS = (
        (0.25, ("halfpipe", "kickers")),
        (0.50, ("kickers", "rails")),
        (0.70, ("halfpipe", "kickers", "rails")),
        (0.85, ("kickers",)),
        (1.00, ("rails", "kickers")),
    )

    # Gentler curves than regular levels
    VARIATION_FREQ_RANGE = (-0.3, 0.3)
    VARIATION_AMP_RANGE = (0.5, 0.8)

    PRECISION_TARGET_RANGE = (65, 75)
    PIPE_MASTERY_RANGE = (75, 85)


assert ParkConfig.FEATURE_COMBOS[-1][0] == 1.0


class ValidationConfig:
    """Structural and spatial validation thresholds."""

    WIDTH_BOUNDS = (10, 120)
    HEIGHT_BOUNDS = (15, 150)

    # Groomer must fit on every row
    MIN_PISTE_WIDTH_TILES = 4
    # 3 wall tiles each side + 3 floor tiles minimum
    MIN_HALFPIPE_WIDTH_TILES = 9
    MIN_GROOMABLE_TILES = 20

    # Groomer spawns at 90% of the height, at the piste centre
    SPAWN_HEIGHT_FRACTION = 0.9
    SPAWN_BOTTOM_MARGIN_ROWS = 8


class NameConfig:
    """Briefing speakers and dialogue keys for generated levels."""

    SPEAKER_HAZARDS = "Thierry"
    SPEAKER_COLD = "Marie"
    SPEAKER_EASY = "Émilie"
    SPEAKER_DEFAULT = "Jean-Pierre"

    DIALOGUE_KEYS = {
        "Thierry": "dailyRunBriefingThierry",
        "Marie": "dailyRunBriefingMarie",
        "Émilie": "dailyRunBriefingEmilie",
        "Jean-Pierre": "dailyRunBriefingJP",
    }

    PARK_NAMES = [
        "Le Snowpark",
        "L'Évasion",
        "Le Tremplin",
        "La Rampe",
        "Le Boardercross",
        "Les Modules",
        "Le Slopestyle",
    ]

    WILDLIFE_POOL = ["bunny", "marmot", "chamois", "bird", "fox"]


class PreviewConfig:
    """Level preview chart styling."""

    DEFAULT_WIDTH = 600
    DEFAULT_HEIGHT = 900

    PISTE_COLOR = "#E0F2FE"
    PISTE_EDGE_COLOR = "#0EA5E9"
    CLIFF_COLOR = "#57534E"
    ROAD_COLOR = "#A16207"
    STEEP_COLOR = "#EF4444"
    WINCH_COLOR = "#F59E0B"
    STEEP_OPACITY = 0.25

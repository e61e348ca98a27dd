"""LevelDescriptor - The description of one ski run.

A LevelDescriptor is created once (authored in the catalog, or generated at
run start) and treated as read-only afterwards. It is plain data: the
geometry engine turns it into per-row geometry, the time budget calculator
turns it into a time limit.

Used by:
- LevelGenerator (produces descriptors from a seed and rank)
- LevelGeometry (builds piste, cliffs, service roads, steep zones)
- validators (structural checks before a generated level is accepted)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Difficulty(Enum):
    """Difficulty tier of a run."""

    TUTORIAL = "tutorial"
    GREEN = "green"
    BLUE = "blue"
    RED = "red"
    BLACK = "black"
    PARK = "park"


class Rank(Enum):
    """Daily run rank a level is generated for."""

    GREEN = "green"
    BLUE = "blue"
    RED = "red"
    BLACK = "black"

    @property
    def index(self) -> int:
        return list(Rank).index(self)


class PisteShape(Enum):
    """Named horizontal profile of the piste corridor."""

    STRAIGHT = "straight"
    GENTLE_CURVE = "gentle_curve"
    WINDING = "winding"
    SERPENTINE = "serpentine"
    WIDE = "wide"


class Weather(Enum):
    CLEAR = "clear"
    LIGHT_SNOW = "light_snow"
    STORM = "storm"


class Side(Enum):
    """Side of the piste a service road or cliff sits on."""

    LEFT = "left"
    RIGHT = "right"


class SpecialFeature(Enum):
    """Terrain park features."""

    KICKERS = "kickers"
    RAILS = "rails"
    HALFPIPE = "halfpipe"


class ObstacleType(Enum):
    TREES = "trees"
    ROCKS = "rocks"
    PYLONS = "pylons"
    JUMPS = "jumps"
    RAILS = "rails"
    CLIFFS = "cliffs"
    AVALANCHE_ZONES = "avalanche_zones"
    SNOW_DRIFTS = "snow_drifts"


class HazardType(Enum):
    AVALANCHE = "avalanche"


def _check_fraction(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class SteepZone:
    """A band of the piste with an elevated slope.

    Attributes:
        start_y: Start of the band as fraction of level height
        end_y: End of the band as fraction of level height
        slope: Slope angle in degrees
    """

    start_y: float
    end_y: float
    slope: float

    def __post_init__(self) -> None:
        _check_fraction("SteepZone.start_y", self.start_y)
        _check_fraction("SteepZone.end_y", self.end_y)

    def contains(self, y: float) -> bool:
        """True if the fractional y lies in the closed zone range."""
        return self.start_y <= y <= self.end_y

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SteepZone":
        return cls(start_y=data["start_y"], end_y=data["end_y"], slope=data["slope"])


@dataclass(frozen=True)
class WinchAnchor:
    """Winch tether point, as fraction of level height."""

    y: float

    def __post_init__(self) -> None:
        _check_fraction("WinchAnchor.y", self.y)


@dataclass(frozen=True)
class AccessPath:
    """Service road bypassing a dangerous section.

    Attributes:
        start_y: Top of the road (exit back onto the piste), fraction of height
        end_y: Bottom of the road (entry from the piste), fraction of height
        side: Side of the piste the road runs on
    """

    start_y: float
    end_y: float
    side: Side

    def __post_init__(self) -> None:
        _check_fraction("AccessPath.start_y", self.start_y)
        _check_fraction("AccessPath.end_y", self.end_y)
        if not isinstance(self.side, Side):
            object.__setattr__(self, "side", Side(self.side))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccessPath":
        return cls(start_y=data["start_y"], end_y=data["end_y"], side=Side(data["side"]))


@dataclass(frozen=True)
class PisteVariation:
    """Per-level perturbation applied on top of the named piste shape.

    Attributes:
        freq_offset: Added to the shape's number of half-waves
        amp_scale: Multiplier on the shape's lateral amplitude
        phase: Phase shift of the centerline (radians)
        width_phase: Phase shift of the width modulation (radians)
    """

    freq_offset: float = 0.0
    amp_scale: float = 1.0
    phase: float = 0.0
    width_phase: float = 0.0


@dataclass(frozen=True)
class SlalomGates:
    count: int
    width: int


@dataclass(frozen=True)
class BonusObjective:
    type: str
    target: int


@dataclass(frozen=True)
class WildlifeSpawn:
    type: str
    count: int


@dataclass
class LevelDescriptor:
    """A ski run, authored or generated.

    Fractional fields (piste_width, steep zone / anchor / access path
    positions) are in [0, 1] of the level width or height. Enum fields accept
    their string values on construction.

    Attributes:
        id: Level id (generated levels use ids >= 100)
        name: Display name
        width, height: Level size in tiles
        difficulty: Difficulty tier
        target_coverage: Percent of piste that must be groomed
        time_limit: Seconds (0 = untimed)
        piste_shape: Named horizontal profile
        piste_width: Nominal corridor width as fraction of width
        steep_zones: Non-overlapping steep bands
        winch_anchors: Tether points, never inside a steep zone
        access_paths: Service roads (only with cliffs or steep zones)

    Example:
        level = LevelDescriptor(id=1, name="Le Pré", width=40, height=60,
                                difficulty="green", target_coverage=80, time_limit=300)
    """

    id: int
    name: str
    width: int
    height: int
    difficulty: Difficulty
    target_coverage: float
    time_limit: int
    piste_shape: PisteShape = PisteShape.STRAIGHT
    piste_width: float = 0.5
    steep_zones: list[SteepZone] = field(default_factory=list)
    winch_anchors: list[WinchAnchor] = field(default_factory=list)
    access_paths: list[AccessPath] = field(default_factory=list)
    has_winch: bool = False
    is_night: bool = False
    weather: Weather = Weather.CLEAR
    has_dangerous_boundaries: bool = False
    special_features: list[SpecialFeature] = field(default_factory=list)
    lane_alternation: bool = False
    obstacles: list[ObstacleType] = field(default_factory=list)
    hazards: list[HazardType] = field(default_factory=list)
    name_key: str = ""
    piste_variation: Optional[PisteVariation] = None
    slalom_gates: Optional[SlalomGates] = None
    bonus_objectives: list[BonusObjective] = field(default_factory=list)
    wildlife: list[WildlifeSpawn] = field(default_factory=list)
    intro_dialogue: Optional[str] = None
    intro_speaker: Optional[str] = None
    is_tutorial: bool = False

    def __post_init__(self) -> None:
        """Coerce enum values and validate fractional fields."""
        self.difficulty = Difficulty(self.difficulty)
        self.piste_shape = PisteShape(self.piste_shape)
        self.weather = Weather(self.weather)
        self.special_features = [SpecialFeature(f) for f in self.special_features]
        self.obstacles = [ObstacleType(o) for o in self.obstacles]
        self.hazards = [HazardType(h) for h in self.hazards]
        _check_fraction("piste_width", self.piste_width)

    @property
    def is_park(self) -> bool:
        return self.difficulty == Difficulty.PARK

    @property
    def has_avalanche(self) -> bool:
        return HazardType.AVALANCHE in self.hazards

    def is_in_steep_zone(self, y: float) -> bool:
        """True if the fractional y falls inside any steep zone."""
        return any(zone.contains(y) for zone in self.steep_zones)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible view (enums as their string values)."""
        return {
            "id": self.id,
            "name": self.name,
            "name_key": self.name_key,
            "width": self.width,
            "height": self.height,
            "difficulty": self.difficulty.value,
            "target_coverage": self.target_coverage,
            "time_limit": self.time_limit,
            "piste_shape": self.piste_shape.value,
            "piste_width": self.piste_width,
            "steep_zones": [{"start_y": z.start_y, "end_y": z.end_y, "slope": z.slope} for z in self.steep_zones],
            "winch_anchors": [{"y": a.y} for a in self.winch_anchors],
            "access_paths": [
                {"start_y": p.start_y, "end_y": p.end_y, "side": p.side.value} for p in self.access_paths
            ],
            "has_winch": self.has_winch,
            "is_night": self.is_night,
            "weather": self.weather.value,
            "has_dangerous_boundaries": self.has_dangerous_boundaries,
            "special_features": [f.value for f in self.special_features],
            "lane_alternation": self.lane_alternation,
            "obstacles": [o.value for o in self.obstacles],
            "hazards": [h.value for h in self.hazards],
            "piste_variation": (
                {
                    "freq_offset": self.piste_variation.freq_offset,
                    "amp_scale": self.piste_variation.amp_scale,
                    "phase": self.piste_variation.phase,
                    "width_phase": self.piste_variation.width_phase,
                }
                if self.piste_variation
                else None
            ),
            "slalom_gates": (
                {"count": self.slalom_gates.count, "width": self.slalom_gates.width} if self.slalom_gates else None
            ),
            "bonus_objectives": [{"type": b.type, "target": b.target} for b in self.bonus_objectives],
            "wildlife": [{"type": w.type, "count": w.count} for w in self.wildlife],
            "intro_dialogue": self.intro_dialogue,
            "intro_speaker": self.intro_speaker,
            "is_tutorial": self.is_tutorial,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LevelDescriptor":
        """Create LevelDescriptor from dictionary (inverse of to_dict)."""
        variation = data.get("piste_variation")
        gates = data.get("slalom_gates")
        return cls(
            id=data["id"],
            name=data["name"],
            name_key=data.get("name_key", ""),
            width=data["width"],
            height=data["height"],
            difficulty=Difficulty(data["difficulty"]),
            target_coverage=data["target_coverage"],
            time_limit=data["time_limit"],
            piste_shape=PisteShape(data.get("piste_shape", PisteShape.STRAIGHT.value)),
            piste_width=data.get("piste_width", 0.5),
            steep_zones=[SteepZone.from_dict(z) for z in data.get("steep_zones", [])],
            winch_anchors=[WinchAnchor(y=a["y"]) for a in data.get("winch_anchors", [])],
            access_paths=[AccessPath.from_dict(p) for p in data.get("access_paths", [])],
            has_winch=data.get("has_winch", False),
            is_night=data.get("is_night", False),
            weather=Weather(data.get("weather", Weather.CLEAR.value)),
            has_dangerous_boundaries=data.get("has_dangerous_boundaries", False),
            special_features=data.get("special_features", []),
            lane_alternation=data.get("lane_alternation", False),
            obstacles=data.get("obstacles", []),
            hazards=data.get("hazards", []),
            piste_variation=PisteVariation(**variation) if variation else None,
            slalom_gates=SlalomGates(**gates) if gates else None,
            bonus_objectives=[BonusObjective(**b) for b in data.get("bonus_objectives", [])],
            wildlife=[WildlifeSpawn(**w) for w in data.get("wildlife", [])],
            intro_dialogue=data.get("intro_dialogue"),
            intro_speaker=data.get("intro_speaker"),
            is_tutorial=data.get("is_tutorial", False),
        )

    def __repr__(self) -> str:
        return (
            f"LevelDescriptor({self.id}, {self.name!r}, {self.difficulty.value}, "
            f"{self.width}x{self.height}, {self.piste_shape.value})"
        )

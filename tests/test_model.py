"""Unit tests for piste_planner model classes.

Tests cover:
- LevelDescriptor construction, enum coercion and serialization
- Fractional field validation
- Geometry records (PathRow, EdgeBuffer / EdgeSnapshot, Rect)
- Validation issue messages
- Authored catalog invariants
"""

import numpy as np
import pytest

from piste_planner.generators.validators import validate_level
from piste_planner.model.catalog import LEVELS, get_level
from piste_planner.model.geometry_records import (
    AccessEntryZone,
    EdgeBuffer,
    EdgeSnapshot,
    PathRow,
    Rect,
)
from piste_planner.model.level import (
    AccessPath,
    BonusObjective,
    Difficulty,
    HazardType,
    LevelDescriptor,
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
from piste_planner.model.validation_issue import (
    MissingAccessPath,
    SpawnBlocked,
    ValidationIssue,
    WinchAnchorInSteepZone,
)


# =============================================================================
# LEVEL DESCRIPTOR
# =============================================================================


class TestLevelDescriptor:
    """Tests for LevelDescriptor."""

    def test_string_enums_coerced(self, straight_level: LevelDescriptor) -> None:
        assert straight_level.difficulty is Difficulty.GREEN
        assert straight_level.piste_shape is PisteShape.STRAIGHT
        assert straight_level.weather is Weather.CLEAR

    def test_unknown_enum_value_raises(self) -> None:
        with pytest.raises(ValueError):
            LevelDescriptor(
                id=1, name="X", width=30, height=40, difficulty="purple", target_coverage=80, time_limit=60
            )

    def test_piste_width_must_be_fraction(self) -> None:
        with pytest.raises(ValueError):
            LevelDescriptor(
                id=1, name="X", width=30, height=40, difficulty="green", target_coverage=80, time_limit=60,
                piste_width=1.5,
            )

    def test_is_park(self) -> None:
        assert get_level(3).is_park
        assert not get_level(1).is_park

    def test_has_avalanche(self) -> None:
        assert get_level(7).has_avalanche
        assert get_level(7).hazards == [HazardType.AVALANCHE]
        assert not get_level(6).has_avalanche

    def test_is_in_steep_zone_closed(self, steep_level: LevelDescriptor) -> None:
        assert steep_level.is_in_steep_zone(0.4)
        assert steep_level.is_in_steep_zone(0.5)
        assert steep_level.is_in_steep_zone(0.6)
        assert not steep_level.is_in_steep_zone(0.39)

    def test_dict_round_trip(self) -> None:
        level = LevelDescriptor(
            id=321,
            name="Le Couloir Maudit",
            name_key="rank_black",
            width=45,
            height=60,
            difficulty="black",
            target_coverage=75,
            time_limit=180,
            piste_shape="serpentine",
            piste_width=0.35,
            piste_variation=PisteVariation(freq_offset=0.2, amp_scale=1.1, phase=0.5, width_phase=1.5),
            steep_zones=[SteepZone(start_y=0.2, end_y=0.35, slope=42)],
            winch_anchors=[WinchAnchor(y=0.15)],
            access_paths=[AccessPath(start_y=0.15, end_y=0.4, side="right")],
            has_winch=True,
            is_night=True,
            weather="storm",
            has_dangerous_boundaries=True,
            obstacles=["trees", "cliffs"],
            hazards=["avalanche"],
            slalom_gates=SlalomGates(count=6, width=5),
            bonus_objectives=[BonusObjective(type="flawless", target=0)],
            wildlife=[WildlifeSpawn(type="chamois", count=2)],
            intro_dialogue="dailyRunBriefingThierry",
            intro_speaker="Thierry",
        )
        restored = LevelDescriptor.from_dict(level.to_dict())
        assert restored == level
        assert restored.access_paths[0].side is Side.RIGHT

    def test_park_dict_round_trip(self) -> None:
        level = get_level(3)
        restored = LevelDescriptor.from_dict(level.to_dict())
        assert restored.special_features == [SpecialFeature.KICKERS, SpecialFeature.RAILS]
        assert restored == level

    def test_repr(self, straight_level: LevelDescriptor) -> None:
        assert "green" in repr(straight_level)
        assert "40x60" in repr(straight_level)


class TestLevelFeatures:
    """Tests for the small frozen feature records."""

    @pytest.mark.parametrize("value", [-0.1, 1.1])
    def test_steep_zone_rejects_out_of_range(self, value: float) -> None:
        with pytest.raises(ValueError):
            SteepZone(start_y=value, end_y=0.5, slope=30)

    def test_winch_anchor_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            WinchAnchor(y=1.2)

    def test_access_path_side_coerced(self) -> None:
        assert AccessPath(start_y=0.1, end_y=0.3, side="left").side is Side.LEFT

    def test_access_path_bad_side(self) -> None:
        with pytest.raises(ValueError):
            AccessPath(start_y=0.1, end_y=0.3, side="up")

    def test_frozen(self) -> None:
        zone = SteepZone(start_y=0.1, end_y=0.2, slope=30)
        with pytest.raises(AttributeError):
            zone.slope = 45

    def test_rank_index(self) -> None:
        assert [r.index for r in Rank] == [0, 1, 2, 3]


# =============================================================================
# GEOMETRY RECORDS
# =============================================================================


class TestPathRow:
    """Tests for PathRow."""

    def test_edges(self) -> None:
        row = PathRow(center_x=20.0, width=10.0)
        assert row.left == 15.0
        assert row.right == 25.0

    def test_contains_closed(self) -> None:
        row = PathRow(center_x=20.0, width=10.0)
        assert row.contains(15.0)
        assert row.contains(25.0)
        assert not row.contains(25.01)

    def test_contains_with_buffer(self) -> None:
        row = PathRow(center_x=20.0, width=10.0)
        assert not row.contains(27.0)
        assert row.contains(27.0, buffer=2.0)


class TestEdgeBuffers:
    """Tests for EdgeBuffer and EdgeSnapshot."""

    def test_snapshot_survives_clear(self) -> None:
        buffer = EdgeBuffer()
        buffer.append(y=0.0, x=100.0)
        buffer.append(y=16.0, x=110.0)
        snapshot = buffer.snapshot()
        buffer.clear()
        buffer.append(y=500.0, x=5.0)
        assert len(snapshot) == 2
        assert snapshot.x_at(8.0) == pytest.approx(105.0)

    def test_buffer_state(self) -> None:
        buffer = EdgeBuffer()
        assert not buffer.is_open
        buffer.append(y=32.0, x=1.0)
        assert buffer.is_open
        assert buffer.start_y == 32.0
        buffer.clear()
        assert not buffer.is_open
        assert len(buffer) == 0

    def test_snapshot_read_only(self) -> None:
        buffer = EdgeBuffer()
        buffer.append(y=0.0, x=1.0)
        snapshot = buffer.snapshot()
        with pytest.raises(ValueError):
            snapshot.xs[0] = 5.0

    def test_x_at_clamps(self) -> None:
        buffer = EdgeBuffer()
        buffer.append(y=16.0, x=100.0)
        buffer.append(y=32.0, x=120.0)
        snapshot = buffer.snapshot()
        assert snapshot.x_at(0.0) == 100.0
        assert snapshot.x_at(999.0) == 120.0
        assert snapshot.min_x == 100.0
        assert snapshot.max_x == 120.0

    def test_empty_snapshot_raises(self) -> None:
        with pytest.raises(ValueError):
            EdgeSnapshot([])


class TestRects:
    """Tests for Rect and AccessEntryZone."""

    def test_rect_closed(self) -> None:
        rect = Rect(start_y=0.0, end_y=10.0, left_x=0.0, right_x=20.0)
        assert rect.contains(0.0, 0.0)
        assert rect.contains(20.0, 10.0)
        assert not rect.contains(20.5, 5.0)

    def test_rect_to_box(self) -> None:
        polygon = Rect(start_y=0.0, end_y=10.0, left_x=0.0, right_x=20.0).to_box()
        assert polygon.area == pytest.approx(200.0)
        assert np.allclose(polygon.bounds, (0.0, 0.0, 20.0, 10.0))

    def test_entry_zone_clearance(self) -> None:
        zone = AccessEntryZone(y=100.0, side=Side.LEFT, start_y=90.0, end_y=110.0)
        assert zone.covers(95.0)
        assert not zone.covers(115.0)
        assert zone.covers(115.0, clearance=5.0)


# =============================================================================
# VALIDATION ISSUES
# =============================================================================


class TestValidationIssues:
    """Tests for issue messages."""

    def test_issue_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            ValidationIssue()

    def test_messages_mention_values(self) -> None:
        assert "0.45" in WinchAnchorInSteepZone(anchor_y=0.45, zone_index=1).message
        assert "35" in MissingAccessPath(zone_index=0, slope=35).message
        issue = SpawnBlocked(tile_x=20, tile_y=54, reason="cliff")
        assert str(issue) == issue.message


# =============================================================================
# CATALOG
# =============================================================================


class TestCatalog:
    """Invariants every authored level must hold."""

    def test_ids_unique_and_below_generated_range(self) -> None:
        ids = [level.id for level in LEVELS]
        assert ids == sorted(set(ids))
        assert max(ids) < 100

    def test_get_level(self) -> None:
        assert get_level(6).name == "Piste Noire - La Verticale"

    def test_get_unknown_level_raises(self) -> None:
        with pytest.raises(KeyError):
            get_level(42)

    @pytest.mark.parametrize("level", LEVELS, ids=lambda level: f"level{level.id}")
    def test_anchors_outside_steep_zones(self, level: LevelDescriptor) -> None:
        for anchor in level.winch_anchors:
            assert not level.is_in_steep_zone(anchor.y)

    @pytest.mark.parametrize("level", LEVELS, ids=lambda level: f"level{level.id}")
    def test_passes_validation(self, level: LevelDescriptor) -> None:
        assert validate_level(level) == []

    def test_only_tutorial_is_tutorial(self) -> None:
        assert [level.id for level in LEVELS if level.is_tutorial] == [0]

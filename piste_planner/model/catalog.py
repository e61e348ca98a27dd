"""Catalog - Authored campaign levels.

Authored levels are static LevelDescriptor literals and go through the same
geometry pipeline as generated ones. Ids 0-8; generated levels use ids >= 100.
"""

from piste_planner.model.level import (
    AccessPath,
    LevelDescriptor,
    Side,
    SteepZone,
    WinchAnchor,
)

LEVELS: list[LevelDescriptor] = [
    LevelDescriptor(
        id=0,
        name="Tutoriel - Premiers Pas",
        name_key="tutorialName",
        width=15,
        height=20,
        difficulty="tutorial",
        target_coverage=40,
        time_limit=900,
        piste_shape="straight",
        piste_width=0.7,
        intro_dialogue="tutorialIntro",
        is_tutorial=True,
    ),
    LevelDescriptor(
        id=1,
        name="Piste Verte - Les Marmottes",
        name_key="level1Name",
        width=40,
        height=60,
        difficulty="green",
        target_coverage=80,
        time_limit=300,
        piste_shape="straight",
        piste_width=0.6,
        obstacles=["trees"],
        intro_dialogue="jeanPierreIntro",
    ),
    LevelDescriptor(
        id=2,
        name="Piste Bleue - Le Chamois",
        name_key="level2Name",
        width=50,
        height=70,
        difficulty="blue",
        target_coverage=85,
        time_limit=240,
        piste_shape="gentle_curve",
        piste_width=0.5,
        steep_zones=[SteepZone(start_y=0.4, end_y=0.6, slope=25)],
        obstacles=["trees", "rocks"],
        intro_dialogue="level2Intro",
    ),
    LevelDescriptor(
        id=3,
        name="Snowpark - Air Zone",
        name_key="level3Name",
        width=45,
        height=50,
        difficulty="park",
        target_coverage=90,
        time_limit=300,
        piste_shape="wide",
        piste_width=0.7,
        special_features=["kickers", "rails"],
        obstacles=["jumps", "rails"],
        intro_dialogue="level3Intro",
    ),
    LevelDescriptor(
        id=4,
        name="Piste Rouge - L'Aigle",
        name_key="level4Name",
        width=55,
        height=80,
        difficulty="red",
        target_coverage=80,
        time_limit=280,
        piste_shape="winding",
        piste_width=0.35,
        steep_zones=[
            SteepZone(start_y=0.2, end_y=0.35, slope=35),
            SteepZone(start_y=0.55, end_y=0.7, slope=40),
        ],
        access_paths=[
            AccessPath(start_y=0.15, end_y=0.4, side=Side.LEFT),
            AccessPath(start_y=0.45, end_y=0.75, side=Side.RIGHT),
        ],
        winch_anchors=[WinchAnchor(y=0.15), WinchAnchor(y=0.5)],
        has_winch=True,
        obstacles=["trees", "rocks", "pylons"],
        intro_dialogue="level4Intro",
    ),
    LevelDescriptor(
        id=5,
        name="Half-pipe - Le Tube",
        name_key="level5Name",
        width=20,
        height=60,
        difficulty="park",
        target_coverage=95,
        time_limit=360,
        piste_shape="straight",
        piste_width=0.8,
        special_features=["halfpipe"],
        intro_dialogue="level5Intro",
    ),
    LevelDescriptor(
        id=6,
        name="Piste Noire - La Verticale",
        name_key="level6Name",
        width=50,
        height=90,
        difficulty="black",
        target_coverage=75,
        time_limit=360,
        piste_shape="serpentine",
        piste_width=0.3,
        steep_zones=[
            SteepZone(start_y=0.1, end_y=0.25, slope=45),
            SteepZone(start_y=0.35, end_y=0.5, slope=50),
            SteepZone(start_y=0.65, end_y=0.8, slope=45),
        ],
        access_paths=[
            AccessPath(start_y=0.0, end_y=0.35, side=Side.LEFT),
            AccessPath(start_y=0.25, end_y=0.6, side=Side.RIGHT),
            AccessPath(start_y=0.5, end_y=0.85, side=Side.LEFT),
        ],
        # Last anchor sits below the third zone, not on its lower edge
        winch_anchors=[WinchAnchor(y=0.05), WinchAnchor(y=0.3), WinchAnchor(y=0.55), WinchAnchor(y=0.85)],
        has_winch=True,
        is_night=True,
        has_dangerous_boundaries=True,
        obstacles=["trees", "rocks", "cliffs"],
        intro_dialogue="level6Intro",
    ),
    LevelDescriptor(
        id=7,
        name="Zone Avalanche - Col Dangereux",
        name_key="level7Name",
        width=60,
        height=70,
        difficulty="black",
        target_coverage=70,
        time_limit=300,
        piste_shape="winding",
        piste_width=0.35,
        steep_zones=[
            SteepZone(start_y=0.15, end_y=0.3, slope=40),
            SteepZone(start_y=0.5, end_y=0.65, slope=45),
        ],
        access_paths=[
            AccessPath(start_y=0.05, end_y=0.4, side=Side.LEFT),
            AccessPath(start_y=0.35, end_y=0.75, side=Side.RIGHT),
        ],
        winch_anchors=[WinchAnchor(y=0.1), WinchAnchor(y=0.4), WinchAnchor(y=0.7)],
        has_winch=True,
        weather="light_snow",
        has_dangerous_boundaries=True,
        obstacles=["avalanche_zones"],
        hazards=["avalanche"],
        intro_dialogue="thierryWarning",
    ),
    LevelDescriptor(
        id=8,
        name="Tempête - Récupération",
        name_key="level8Name",
        width=60,
        height=80,
        difficulty="red",
        target_coverage=85,
        time_limit=420,
        piste_shape="gentle_curve",
        piste_width=0.5,
        steep_zones=[SteepZone(start_y=0.3, end_y=0.45, slope=35)],
        access_paths=[AccessPath(start_y=0.25, end_y=0.5, side=Side.LEFT)],
        winch_anchors=[WinchAnchor(y=0.2), WinchAnchor(y=0.6)],
        has_winch=True,
        weather="storm",
        has_dangerous_boundaries=True,
        obstacles=["trees", "rocks", "snow_drifts"],
        intro_dialogue="level8Intro",
    ),
]


def get_level(level_id: int) -> LevelDescriptor:
    """Authored level by id.

    Raises:
        KeyError: If no authored level has this id.
    """
    for level in LEVELS:
        if level.id == level_id:
            return level
    raise KeyError(f"No authored level with id {level_id}")

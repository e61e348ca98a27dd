"""Developer-facing views of generated levels.

- level_preview.py: LevelPreview, a Plotly top-down chart of one level's geometry
"""

from piste_planner.ui.level_preview import LevelPreview

__all__ = [
    "LevelPreview",
]

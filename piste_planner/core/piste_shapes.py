"""Piste shape functions - Per-row centerline and width of the piste corridor.

Each named shape is a horizontal profile as a function of progress down the
run (p = row / height):
- straight: constant centre
- gentle_curve: one full sine sway, 15% of width
- winding: 1.5 sine sways, 20% of width, width breathing with the sway
- serpentine: two full sways, 25% of width, width pinched at the turns
- wide: straight, 2.5x the nominal half-width

A PisteVariation shifts the number of half-waves, scales the amplitude and
shifts the phase of centre and width, so generated levels of the same shape
do not look identical. Computation is vectorized over all rows with numpy.
"""

from math import floor
from typing import Optional

import numpy as np

from piste_planner.constants import GeometryConfig
from piste_planner.model.level import PisteShape, PisteVariation

# shape -> (half-waves over the run, lateral amplitude as fraction of width)
SHAPE_WAVES = {
    PisteShape.STRAIGHT: (0.0, 0.0),
    PisteShape.GENTLE_CURVE: (2.0, 0.15),
    PisteShape.WINDING: (3.0, 0.2),
    PisteShape.SERPENTINE: (4.0, 0.25),
    PisteShape.WIDE: (0.0, 0.0),
}


def piste_profile(
    shape: PisteShape,
    width: int,
    height: int,
    piste_width: float,
    variation: Optional[PisteVariation] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute piste centre and width for every row.

    Args:
        shape: Named horizontal profile
        width: Level width in tiles
        height: Level height in tiles
        piste_width: Nominal corridor width as fraction of level width
        variation: Optional per-level perturbation of the shape

    Returns:
        Tuple (center_x, row_width) of float arrays of length height, in tiles.
        Centres are clamped to keep SIDE_MARGIN_TILES between the nominal
        corridor and the world edge; widths are floored and at least
        MIN_PATH_WIDTH_TILES.
    """
    half = floor(width * piste_width / 2)
    progress = np.arange(height, dtype=float) / max(height, 1)

    waves, amplitude = SHAPE_WAVES[shape]
    phase = 0.0
    width_phase = 0.0
    if variation is not None and waves > 0:
        waves += variation.freq_offset
        amplitude *= variation.amp_scale
        phase = variation.phase
        width_phase = variation.width_phase

    center = width / 2 + np.sin(progress * np.pi * waves + phase) * (width * amplitude)

    if shape == PisteShape.WINDING:
        factor = 0.8 + 0.2 * np.cos(progress * np.pi * waves + width_phase)
    elif shape == PisteShape.SERPENTINE:
        factor = 0.7 + 0.3 * np.abs(np.cos(progress * np.pi * waves + width_phase))
    elif shape == PisteShape.WIDE:
        factor = np.full(height, 1.25)
    else:
        factor = np.ones(height)
    row_width = half * 2 * factor

    margin = GeometryConfig.SIDE_MARGIN_TILES
    center = np.maximum(half + margin, np.minimum(width - half - margin, center))
    row_width = np.maximum(GeometryConfig.MIN_PATH_WIDTH_TILES, np.floor(row_width))
    return center, row_width

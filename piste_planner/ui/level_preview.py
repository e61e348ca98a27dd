"""LevelPreview - Plotly top-down chart of one level's geometry.

Renders, in pixel coordinates with y growing downhill:
- Piste corridor (filled) and its edges
- Cliff bands and the merged cliff avoid area
- Service road footprints
- Steep zones (per-row bounds)
- Winch anchors at the piste centre

Used by scripts/render_level_preview.py to eyeball generated levels.
"""

import logging
from typing import Optional

import plotly.graph_objects as go
from shapely.geometry import Polygon
from shapely.ops import unary_union

from piste_planner.constants import PreviewConfig
from piste_planner.geometry.level_geometry import LevelGeometry
from piste_planner.model.level import LevelDescriptor

logger = logging.getLogger(__name__)

# Padding (pixels) applied to cliff avoid rects in the preview
AVOID_MARGIN_PX = 16


class LevelPreview:
    """Renders a generated level as a Plotly figure.

    Example:
        geometry = LevelGeometry()
        geometry.generate(level=level)
        fig = LevelPreview(width=600, height=900).render(level=level, geometry=geometry)
        fig.write_html("preview.html")
    """

    def __init__(
        self,
        width: int = PreviewConfig.DEFAULT_WIDTH,
        height: int = PreviewConfig.DEFAULT_HEIGHT,
    ) -> None:
        self.width = width
        self.height = height

    def render(
        self,
        level: LevelDescriptor,
        geometry: LevelGeometry,
        title: Optional[str] = None,
    ) -> go.Figure:
        """Render all geometry of a level.

        Args:
            level: Level the geometry was generated for
            geometry: Generated geometry (must not be empty)
            title: Optional chart title, defaults to the level name

        Returns:
            Plotly Figure object.
        """
        if not geometry.is_generated:
            raise ValueError("Geometry must be generated before rendering a preview")

        fig = go.Figure()
        self._add_piste(fig=fig, geometry=geometry)
        self._add_steep_zones(fig=fig, geometry=geometry)
        self._add_access_paths(fig=fig, geometry=geometry)
        self._add_cliffs(fig=fig, level=level, geometry=geometry)
        self._add_winch_anchors(fig=fig, level=level, geometry=geometry)

        ts = geometry.tile_size
        fig.update_layout(
            title=dict(text=title or f"{level.name} ({level.difficulty.value})", x=0.5),
            xaxis=dict(
                title="x (px)",
                range=[0, level.width * ts],
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.3)",
            ),
            yaxis=dict(
                title="y (px)",
                range=[level.height * ts, 0],
                scaleanchor="x",
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.3)",
            ),
            showlegend=True,
            width=self.width,
            height=self.height,
            margin=dict(l=50, r=30, t=50, b=50),
            plot_bgcolor="white",
        )
        logger.debug(f"Rendered preview for level {level.id} with {len(fig.data)} traces")
        return fig

    def _add_piste(self, fig: go.Figure, geometry: LevelGeometry) -> None:
        ts = geometry.tile_size
        ys = [(y + 0.5) * ts for y in range(len(geometry.piste_path))]
        edges = [geometry.path_edges(row=row) for row in geometry.piste_path]
        lefts = [left for left, _ in edges]
        rights = [right for _, right in edges]

        fig.add_trace(
            go.Scatter(
                x=lefts + rights[::-1],
                y=ys + ys[::-1],
                fill="toself",
                fillcolor=PreviewConfig.PISTE_COLOR,
                line=dict(color=PreviewConfig.PISTE_EDGE_COLOR, width=1),
                name="Piste",
                hoverinfo="skip",
            )
        )

    def _add_steep_zones(self, fig: go.Figure, geometry: LevelGeometry) -> None:
        ts = geometry.tile_size
        color = f"rgba{self._hex_to_rgba(hex_color=PreviewConfig.STEEP_COLOR, alpha=PreviewConfig.STEEP_OPACITY)}"
        for index, rect in enumerate(geometry.steep_zone_rects):
            ys = [(rect.first_row + i + 0.5) * ts for i in range(len(rect.row_lefts))]
            fig.add_trace(
                go.Scatter(
                    x=list(rect.row_lefts) + list(rect.row_rights)[::-1],
                    y=ys + ys[::-1],
                    fill="toself",
                    fillcolor=color,
                    line=dict(color=PreviewConfig.STEEP_COLOR, width=1),
                    name=f"Steep {rect.slope:.0f}°",
                    legendgroup="steep",
                    showlegend=index == 0,
                    hovertemplate=f"Slope: {rect.slope:.0f}°<extra></extra>",
                )
            )

    def _add_access_paths(self, fig: go.Figure, geometry: LevelGeometry) -> None:
        for curve in geometry.access_path_curves:
            for index, polygon in enumerate(self._polygons(curve.footprint)):
                xs, ys = polygon.exterior.xy
                fig.add_trace(
                    go.Scatter(
                        x=list(xs),
                        y=list(ys),
                        fill="toself",
                        fillcolor=PreviewConfig.ROAD_COLOR,
                        line=dict(color=PreviewConfig.ROAD_COLOR, width=1),
                        name=f"Access path {curve.path_index} ({curve.side.value})",
                        legendgroup=f"road{curve.path_index}",
                        showlegend=index == 0,
                        hoverinfo="skip",
                    )
                )

    def _add_cliffs(self, fig: go.Figure, level: LevelDescriptor, geometry: LevelGeometry) -> None:
        ts = geometry.tile_size
        for index, segment in enumerate(geometry.cliff_segments):
            tiles = segment.tiles(world_width=level.width * ts)
            if not tiles:
                continue
            fig.add_trace(
                go.Scatter(
                    x=[x + ts / 2 for x, _ in tiles],
                    y=[y + ts / 2 for _, y in tiles],
                    mode="markers",
                    marker=dict(symbol="square", size=6, color=PreviewConfig.CLIFF_COLOR),
                    name="Cliffs",
                    legendgroup="cliffs",
                    showlegend=index == 0,
                    hoverinfo="skip",
                )
            )

        rects = geometry.get_cliff_avoid_rects(margin=AVOID_MARGIN_PX)
        if not rects:
            return
        avoid_area = unary_union([rect.to_box() for rect in rects])
        for index, polygon in enumerate(self._polygons(avoid_area)):
            xs, ys = polygon.exterior.xy
            fig.add_trace(
                go.Scatter(
                    x=list(xs),
                    y=list(ys),
                    mode="lines",
                    line=dict(color=PreviewConfig.CLIFF_COLOR, width=1, dash="dot"),
                    name="Cliff avoid area",
                    legendgroup="avoid",
                    showlegend=index == 0,
                    hoverinfo="skip",
                )
            )

    def _add_winch_anchors(self, fig: go.Figure, level: LevelDescriptor, geometry: LevelGeometry) -> None:
        if not level.winch_anchors or not geometry.piste_path:
            return
        ts = geometry.tile_size
        xs, ys = [], []
        for anchor in level.winch_anchors:
            row = min(int(anchor.y * level.height), len(geometry.piste_path) - 1)
            xs.append(geometry.piste_path[row].center_x * ts)
            ys.append(anchor.y * level.height * ts)

        fig.add_trace(
            go.Scatter(
                x=xs,
                y=ys,
                mode="markers",
                marker=dict(symbol="diamond", size=10, color=PreviewConfig.WINCH_COLOR),
                name="Winch anchors",
                hovertemplate="Anchor y: %{y:.0f}px<extra></extra>",
            )
        )

    @staticmethod
    def _polygons(geometry) -> list[Polygon]:
        """Flatten a Polygon or MultiPolygon into its polygons."""
        if geometry.is_empty:
            return []
        if geometry.geom_type == "Polygon":
            return [geometry]
        return list(geometry.geoms)

    def _hex_to_rgba(self, hex_color: str, alpha: float) -> tuple:
        """Convert hex color to RGBA tuple."""
        hex_color = hex_color.lstrip("#")
        r = int(hex_color[0:2], 16)
        g = int(hex_color[2:4], 16)
        b = int(hex_color[4:6], 16)
        return (r, g, b, alpha)

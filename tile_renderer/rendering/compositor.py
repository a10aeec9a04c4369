"""
Compositing: stacking order and per-variant paint rules.

Shapes are painted lowest stacking priority first. The sort is stable, so
shapes with the same priority keep their classification order. Each variant
has one painter in ``PAINTERS``; styles come from the tables in
``tile_renderer.constants``.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..calculations.viewport import CanvasScene
from ..constants import (
    BORDER_COLOR,
    BORDER_LINEWIDTH,
    RAILWAY_BASE_COLOR,
    RAILWAY_BASE_LINEWIDTH,
    RAILWAY_DASH_COLOR,
    RAILWAY_DASH_LINEWIDTH,
    RAILWAY_DASH_PATTERN,
    ROAD_COLOR,
    ROAD_EDGE_COLOR,
    ROAD_EDGE_LINEWIDTH,
    ROAD_LINEWIDTH,
    TERRAIN_COLORS,
    TERRAIN_LINEWIDTH,
    WATERWAY_COLOR,
    WATERWAY_LINEWIDTH,
)
from ..shapes import Border, Railway, Road, Settlement, Shape, Terrain, Waterway
from .surface import DrawingSurface, StrokeStyle, TextStyle

logger = logging.getLogger("tile_renderer.rendering.compositor")

TERRAIN_STROKES = {
    category: StrokeStyle(color, TERRAIN_LINEWIDTH)
    for category, color in TERRAIN_COLORS.items()
}
RAILWAY_BASE_STROKE = StrokeStyle(RAILWAY_BASE_COLOR, RAILWAY_BASE_LINEWIDTH)
RAILWAY_DASH_STROKE = StrokeStyle(RAILWAY_DASH_COLOR, RAILWAY_DASH_LINEWIDTH, RAILWAY_DASH_PATTERN)
BORDER_STROKE = StrokeStyle(BORDER_COLOR, BORDER_LINEWIDTH)
WATERWAY_STROKE = StrokeStyle(WATERWAY_COLOR, WATERWAY_LINEWIDTH)
ROAD_EDGE_STROKE = StrokeStyle(ROAD_EDGE_COLOR, ROAD_EDGE_LINEWIDTH)
ROAD_STROKE = StrokeStyle(ROAD_COLOR, ROAD_LINEWIDTH)
DEFAULT_LABEL_STYLE = TextStyle()


def order_shapes(shapes: Iterable[Shape]) -> List[Shape]:
    """Stable sort by stacking priority, lowest first."""
    return sorted(shapes, key=lambda shape: shape.stack_priority)


def _paint_terrain(shape: Terrain, surface: DrawingSurface, label_style: TextStyle) -> None:
    if shape.is_area:
        surface.fill_polygon(shape.points, TERRAIN_COLORS[shape.category])
    else:
        surface.draw_path(shape.points, TERRAIN_STROKES[shape.category])


def _paint_railway(shape: Railway, surface: DrawingSurface, label_style: TextStyle) -> None:
    surface.draw_path(shape.points, RAILWAY_BASE_STROKE)
    surface.draw_path(shape.points, RAILWAY_DASH_STROKE)


def _paint_settlement(shape: Settlement, surface: DrawingSurface, label_style: TextStyle) -> None:
    if not shape.should_render:
        return
    x, y = shape.points[0]
    surface.draw_text(shape.name, (float(x), float(y)), label_style)


def _paint_border(shape: Border, surface: DrawingSurface, label_style: TextStyle) -> None:
    surface.draw_path(shape.points, BORDER_STROKE)


def _paint_waterway(shape: Waterway, surface: DrawingSurface, label_style: TextStyle) -> None:
    if shape.is_area:
        surface.fill_polygon(shape.points, WATERWAY_COLOR)
    else:
        surface.draw_path(shape.points, WATERWAY_STROKE)


def _paint_road(shape: Road, surface: DrawingSurface, label_style: TextStyle) -> None:
    # Area roads (pedestrian squares and the like) are not drawn.
    if shape.is_area:
        return
    surface.draw_path(shape.points, ROAD_EDGE_STROKE)
    surface.draw_path(shape.points, ROAD_STROKE)


PAINTERS: Dict[type, Callable[[Shape, DrawingSurface, TextStyle], None]] = {
    Terrain: _paint_terrain,
    Railway: _paint_railway,
    Settlement: _paint_settlement,
    Border: _paint_border,
    Waterway: _paint_waterway,
    Road: _paint_road,
}


def paint_shape(
    shape: Shape,
    surface: DrawingSurface,
    label_style: Optional[TextStyle] = None
) -> None:
    """
    Paint one shape onto ``surface`` following its variant's rules.

    Shapes without points are skipped.

    Args:
        shape: Shape with canvas-pixel points
        surface: Drawing surface receiving the calls
        label_style: Text style for settlement labels
    """
    if shape.points.size == 0:
        return
    PAINTERS[type(shape)](shape, surface, label_style or DEFAULT_LABEL_STYLE)


def composite(
    scene: CanvasScene,
    surface: DrawingSurface,
    label_style: Optional[TextStyle] = None
) -> List[Shape]:
    """
    Paint a fitted scene in stacking order.

    Args:
        scene: Shapes already fitted to canvas pixels
        surface: Drawing surface receiving the calls
        label_style: Text style for settlement labels

    Returns:
        The shapes in the order they were painted

    Example:
        >>> scene = fit_scene(classify_features(features), 800, 600)
        >>> surface = MatplotlibSurface(800, 600)
        >>> painted = composite(scene, surface)
    """
    ordered = order_shapes(scene.shapes)
    for shape in ordered:
        paint_shape(shape, surface, label_style)

    hidden = sum(1 for shape in ordered if isinstance(shape, Settlement) and not shape.should_render)
    logger.info(f"Composited {len(ordered)} shapes")
    if hidden:
        logger.debug(f"Skipped {hidden} unlabelled settlements")

    return ordered

"""
Rendering subsystem for TileRenderer.

This module paints fitted shapes onto a raster canvas. It owns the stacking
order and the per-variant paint rules, and delegates rasterization, text
rendering and image encoding to Matplotlib (Agg backend).

Main Classes:
    TileChart: Runs a complete render pass and saves the tile
    MatplotlibSurface: Pixel-space drawing surface backed by a Figure

Key Features:
    - Stable stacking-priority ordering (ties keep classification order)
    - Fill/stroke rules per shape variant from static style tables
    - Hidden settlements and empty shapes are skipped without error
    - Any object implementing DrawingSurface can receive a tile

Coordinate System:
    - Canvas pixels, origin at the top-left, y increasing downward
    - Stroke widths and label sizes are given in pixels

Example:
    >>> from tile_renderer.rendering import TileChart
    >>> from tile_renderer import Config
    >>>
    >>> chart = TileChart(Config())
    >>> surface = chart.render(features)
    >>> chart.save_chart("tile.png")
"""

from .surface import DrawingSurface, MatplotlibSurface, StrokeStyle, TextStyle
from .compositor import PAINTERS, composite, order_shapes, paint_shape
from .chart import TileChart

__all__ = [
    "DrawingSurface",
    "MatplotlibSurface",
    "StrokeStyle",
    "TextStyle",
    "PAINTERS",
    "composite",
    "order_shapes",
    "paint_shape",
    "TileChart",
]

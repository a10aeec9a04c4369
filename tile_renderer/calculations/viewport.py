"""
Viewport fitting: planar Mercator metres to canvas pixels.

The fit is a uniform scale plus translation with a vertical flip (northing
grows upward, canvas rows grow downward). It writes into each shape's point
buffer, so it must run exactly once per shape. The staged scene types make
that structural: ``fit_scene`` takes the shapes out of a ``ProjectedScene``
and hands them back inside a ``CanvasScene``; the compositor only accepts
the latter.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional

import numpy as np

from ..shapes import Shape

logger = logging.getLogger("tile_renderer.calculations.viewport")


class ViewportParams(NamedTuple):
    """Translation and uniform scale that map projected extent to the canvas."""

    min_x: float
    min_y: float
    scale: float


@dataclass
class ProjectedScene:
    """Shapes whose points are still in projected (Mercator) units."""

    shapes: List[Shape] = field(default_factory=list)

    def release(self) -> List[Shape]:
        """Hand the shapes over to the caller, leaving this scene empty."""
        shapes, self.shapes = self.shapes, []
        return shapes

    def __len__(self) -> int:
        return len(self.shapes)


@dataclass(frozen=True)
class CanvasScene:
    """Shapes whose points are canvas pixels, ready for compositing."""

    shapes: tuple
    width: float
    height: float
    viewport: ViewportParams

    def __len__(self) -> int:
        return len(self.shapes)


def apply_viewport(
    shapes: Iterable[Shape],
    min_x: float,
    min_y: float,
    scale: float,
    canvas_height: float,
) -> None:
    """
    Transform every point of every shape into canvas pixels, in place.

    x' = (x - min_x) * scale
    y' = canvas_height - (y - min_y) * scale

    Applying this twice to the same shape corrupts its coordinates; prefer
    ``fit_scene``.

    Args:
        shapes: Shapes whose points are in projected units
        min_x: Projected x mapped to the canvas left edge
        min_y: Projected y mapped to the canvas bottom edge
        scale: Pixels per projected unit
        canvas_height: Canvas height in pixels
    """
    for shape in shapes:
        points = shape.points
        if points.size == 0:
            continue
        points[:, 0] -= min_x
        points[:, 0] *= scale
        points[:, 1] -= min_y
        points[:, 1] *= scale
        np.subtract(canvas_height, points[:, 1], out=points[:, 1])


def compute_viewport(shapes: Iterable[Shape], width: float, height: float) -> ViewportParams:
    """
    Compute the fit parameters for a set of projected shapes.

    The scale is the largest uniform scale that keeps the bounding box of all
    points inside ``width`` x ``height``. When the extent is zero along one
    axis the other axis decides; when there are no points or the extent is a
    single position the scale is 1.0.

    Args:
        shapes: Shapes whose points are in projected units
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        ViewportParams(min_x, min_y, scale)

    Example:
        >>> params = compute_viewport(scene.shapes, 800, 600)
        >>> print(f"scale={params.scale:.6f} px/m")
    """
    arrays = [shape.points for shape in shapes if shape.points.size]
    if not arrays:
        logger.debug("No points to fit; using identity viewport")
        return ViewportParams(0.0, 0.0, 1.0)

    stacked = np.concatenate(arrays)
    min_x, min_y = stacked.min(axis=0)
    max_x, max_y = stacked.max(axis=0)
    span_x = max_x - min_x
    span_y = max_y - min_y

    if span_x > 0 and span_y > 0:
        scale = min(width / span_x, height / span_y)
    elif span_x > 0:
        scale = width / span_x
    elif span_y > 0:
        scale = height / span_y
    else:
        scale = 1.0

    logger.debug(
        f"Viewport extent x=[{min_x:.1f}, {max_x:.1f}] y=[{min_y:.1f}, {max_y:.1f}] "
        f"scale={scale:.6g}"
    )
    return ViewportParams(float(min_x), float(min_y), float(scale))


def fit_scene(
    scene: ProjectedScene,
    width: float,
    height: float,
    viewport: Optional[ViewportParams] = None,
) -> CanvasScene:
    """
    Move the shapes of ``scene`` onto a canvas of ``width`` x ``height`` pixels.

    The projected scene is emptied, so fitting it a second time transforms
    nothing.

    Args:
        scene: Projected shapes from the classifier
        width: Canvas width in pixels
        height: Canvas height in pixels
        viewport: Precomputed fit parameters (default: compute_viewport)

    Returns:
        CanvasScene holding the same shapes in classification order
    """
    shapes = scene.release()
    if viewport is None:
        viewport = compute_viewport(shapes, width, height)

    apply_viewport(shapes, viewport.min_x, viewport.min_y, viewport.scale, height)
    logger.debug(f"Fitted {len(shapes)} shapes to {width}x{height} canvas")

    return CanvasScene(shapes=tuple(shapes), width=width, height=height, viewport=viewport)

"""
Projection, classification and viewport fitting for TileRenderer.

This module turns decoded feature records into canvas-space shapes:
- Mercator projection of lon/lat coordinates (Cartopy)
- Classification of property codes into shape variants
- Viewport fitting of projected shapes onto a pixel canvas

Main Functions:
    From projection module:
        - project, project_coordinates, lon_to_x, lat_to_y

    From classifier module:
        - classify: One feature record to one shape
        - classify_features: Feature records to a ProjectedScene

    From viewport module:
        - compute_viewport: Fit parameters for a canvas size
        - apply_viewport: In-place pixel transform of shape points
        - fit_scene: ProjectedScene to CanvasScene

Example:
    >>> from tile_renderer.calculations import classify_features, fit_scene
    >>>
    >>> scene = classify_features(features)
    >>> canvas_scene = fit_scene(scene, 800, 600)
"""

from .projection import (
    project,
    project_coordinates,
    lon_to_x,
    lat_to_y
)
from .viewport import (
    ViewportParams,
    ProjectedScene,
    CanvasScene,
    apply_viewport,
    compute_viewport,
    fit_scene
)
from .classifier import (
    classify,
    classify_features,
    is_border,
    is_settlement,
    terrain_category
)

__all__ = [
    "project",
    "project_coordinates",
    "lon_to_x",
    "lat_to_y",
    "ViewportParams",
    "ProjectedScene",
    "CanvasScene",
    "apply_viewport",
    "compute_viewport",
    "fit_scene",
    "classify",
    "classify_features",
    "is_border",
    "is_settlement",
    "terrain_category",
]

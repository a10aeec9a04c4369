"""
TileRenderer - Render classified map features into layered raster tiles.

This package classifies decoded vector features (points, lines, polygons with
property codes) into typed shapes, projects them with a Mercator projection,
fits them to a pixel canvas, and composites them in a fixed stacking order
with Matplotlib.

Quick Start:
    >>> from tile_renderer import render_features_file
    >>>
    >>> # Render one feature document
    >>> render_features_file("examples/sample_features.yaml", "tile.png")

    >>> # Batch processing
    >>> from tile_renderer import BatchTileRenderer
    >>>
    >>> batch = BatchTileRenderer(["a.yaml", "b.yaml"], output_dir="tiles")
    >>> result = batch.render_tiles(parallel=True)

Advanced Usage:
    >>> from tile_renderer import Config, TileChart
    >>> from tile_renderer.calculations import classify_features, fit_scene
    >>> from tile_renderer.rendering import MatplotlibSurface, composite
    >>>
    >>> scene = classify_features(features)
    >>> canvas_scene = fit_scene(scene, 800, 600)
    >>> surface = MatplotlibSurface(800, 600)
    >>> composite(canvas_scene, surface)
    >>> surface.save("tile.png")
"""

__version__ = "0.1.0"

# Initialize logging with default settings
from .logging_config import setup_logging
setup_logging()

# Core constants and configuration
from .constants import PropertyCode, TerrainCategory
from .config import Config

# Feature records
from .data import Coordinate, FeatureRecord, GeometryKind, load_features

# Shapes
from .shapes import Border, Railway, Road, Settlement, Shape, Terrain, Waterway

# Pipeline stages
from . import calculations
from .calculations import classify, classify_features, fit_scene

# Rendering components
from .rendering import MatplotlibSurface, TileChart, composite

# User-facing API
from .api import render_features, render_features_file

# Batch processing
from .batch import BatchTileRenderer

# Exceptions
from .exceptions import (
    TileRendererError,
    FeatureLoadError,
    RenderError,
    InvalidParameterError
)

__all__ = [
    # Version info
    "__version__",

    # Constants and config
    "PropertyCode",
    "TerrainCategory",
    "Config",

    # Feature records
    "Coordinate",
    "FeatureRecord",
    "GeometryKind",
    "load_features",

    # Shapes
    "Border",
    "Railway",
    "Road",
    "Settlement",
    "Shape",
    "Terrain",
    "Waterway",

    # Pipeline
    "calculations",
    "classify",
    "classify_features",
    "fit_scene",
    "MatplotlibSurface",
    "TileChart",
    "composite",

    # User-facing API
    "render_features",
    "render_features_file",
    "BatchTileRenderer",

    # Exceptions
    "TileRendererError",
    "FeatureLoadError",
    "RenderError",
    "InvalidParameterError",
]

"""
Orchestration module for complete tile rendering.

This module provides the TileChart class that runs one render pass: it
classifies feature records, fits them to the canvas, composites them in
stacking order on a Matplotlib surface, and saves the result.
"""

import logging
from typing import Iterable, List, Optional

from ..calculations.classifier import classify_features
from ..calculations.viewport import ViewportParams, compute_viewport, fit_scene
from ..config import Config
from ..data.features import FeatureRecord
from ..shapes import Shape
from .compositor import composite
from .surface import MatplotlibSurface, TextStyle

logger = logging.getLogger("tile_renderer.rendering.chart")


class TileChart:
    """
    Orchestrate one tile render pass.

    The rendering workflow:
    1. Classify features into shapes (projected coordinates)
    2. Compute the viewport for the configured canvas size
    3. Fit shapes to canvas pixels (exactly once)
    4. Composite shapes in stacking order onto a MatplotlibSurface

    Attributes:
        config: Configuration object with canvas and label settings
        surface: MatplotlibSurface (None until render called)
        viewport: ViewportParams used for the last render
        painted_shapes: Shapes in the order they were painted

    Example:
        >>> from tile_renderer.rendering import TileChart
        >>> from tile_renderer.data import load_features
        >>>
        >>> chart = TileChart(Config(canvas_width=512, canvas_height=512))
        >>> chart.render(load_features("examples/sample_features.yaml"))
        >>> chart.save_chart("tile.png")
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize TileChart orchestrator.

        Args:
            config: Configuration object (default: creates new Config instance)
        """
        self.config = config if config is not None else Config()

        self.surface: Optional[MatplotlibSurface] = None
        self.viewport: Optional[ViewportParams] = None
        self.painted_shapes: List[Shape] = []

        logger.info(
            f"Initialized TileChart: {self.config.canvas_width}x{self.config.canvas_height}px"
        )

    @property
    def label_style(self) -> TextStyle:
        return TextStyle(
            color=self.config.label_color,
            size=self.config.label_font_size,
            weight=self.config.label_font_weight,
        )

    def render(self, features: Iterable[FeatureRecord]) -> MatplotlibSurface:
        """
        Render feature records onto a fresh surface.

        Args:
            features: Feature records in source order

        Returns:
            The MatplotlibSurface holding the tile
        """
        width = self.config.canvas_width
        height = self.config.canvas_height

        scene = classify_features(features)
        self.viewport = compute_viewport(scene.shapes, width, height)
        canvas_scene = fit_scene(scene, width, height, self.viewport)

        if self.surface is not None:
            self.surface.close()
        self.surface = MatplotlibSurface(
            width,
            height,
            dpi=self.config.default_dpi,
            background_color=self.config.background_color,
        )

        self.painted_shapes = composite(canvas_scene, self.surface, self.label_style)
        logger.info("Tile rendering complete")

        return self.surface

    def save_chart(self, output_path: str, dpi: Optional[int] = None) -> str:
        """
        Save rendered tile to file.

        Args:
            output_path: Path or string for output file
            dpi: Optional DPI override (uses config.default_dpi if None);
                a different DPI scales the saved image

        Returns:
            Path to saved file

        Raises:
            ValueError: If the tile has not been rendered yet
        """
        if self.surface is None:
            raise ValueError("Tile has not been rendered yet. Call render() first.")

        if dpi is not None and dpi != self.surface.dpi:
            logger.info(f"Saving {output_path} at dpi={dpi} (canvas dpi={self.surface.dpi})")
            self.surface.fig.savefig(str(output_path), dpi=dpi, facecolor=self.surface.background_color)
            return str(output_path)

        return self.surface.save(output_path)

    def close(self) -> None:
        """Release the Matplotlib figure of the last render."""
        if self.surface is not None:
            self.surface.close()
            self.surface = None

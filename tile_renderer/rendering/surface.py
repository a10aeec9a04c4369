"""
Drawing surfaces for the compositor.

The compositor only issues three calls (stroke a path, fill a polygon, draw
text); anything that implements ``DrawingSurface`` can receive a tile. The
Matplotlib surface rasterizes with the Agg backend on a full-bleed axes in
pixel space, origin at the top-left corner.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Tuple, Union

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Polygon

logger = logging.getLogger("tile_renderer.rendering.surface")

POINTS_PER_INCH = 72.0


@dataclass(frozen=True)
class StrokeStyle:
    """Line color, width in pixels and optional on/off dash lengths in pixels."""

    color: str
    width: float
    dashes: Optional[Tuple[float, ...]] = None


@dataclass(frozen=True)
class TextStyle:
    color: str = "black"
    size: float = 12.0
    weight: str = "bold"


class DrawingSurface(Protocol):
    """Minimal raster target used by the compositor."""

    def draw_path(self, points: np.ndarray, style: StrokeStyle) -> None:
        ...

    def fill_polygon(self, points: np.ndarray, color: str) -> None:
        ...

    def draw_text(self, text: str, anchor: Tuple[float, float], style: TextStyle) -> None:
        ...


class MatplotlibSurface:
    """
    Pixel-space Matplotlib canvas.

    Widths and font sizes are given in pixels and converted to points for the
    configured DPI, so a 2.0 stroke is two pixels wide in the saved PNG. Each
    draw call gets a higher zorder than the previous one: the raster order is
    the call order, whatever the artist type.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        dpi: Figure resolution
        fig: Matplotlib Figure (no pyplot state; safe to use from threads)
        ax: Full-bleed axes with y pointing down

    Example:
        >>> surface = MatplotlibSurface(800, 600, dpi=100)
        >>> surface.fill_polygon(np.array([[0, 0], [100, 0], [100, 100]]), "lightblue")
        >>> surface.save("tile.png")
    """

    def __init__(
        self,
        width: int,
        height: int,
        dpi: int = 100,
        background_color: str = "white"
    ):
        self.width = width
        self.height = height
        self.dpi = dpi
        self.background_color = background_color
        self._points_per_pixel = POINTS_PER_INCH / float(dpi)
        self._zorder = 0

        self.fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(self.fig)
        self.fig.patch.set_facecolor(background_color)

        self.ax = self.fig.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_facecolor(background_color)
        self.ax.set_axis_off()
        self.ax.set_autoscale_on(False)

        logger.debug(f"Created surface: {width}x{height}px, dpi={dpi}")

    def _next_zorder(self) -> int:
        self._zorder += 1
        return self._zorder

    def _to_points(self, pixels: float) -> float:
        return pixels * self._points_per_pixel

    def draw_path(self, points: np.ndarray, style: StrokeStyle) -> None:
        points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(points) == 0:
            return

        linestyle = "solid"
        if style.dashes:
            # Matplotlib scales dash lengths by the line width
            width = max(style.width, 1e-6)
            linestyle = (0, tuple(d / width for d in style.dashes))

        self.ax.plot(
            points[:, 0],
            points[:, 1],
            color=style.color,
            linewidth=self._to_points(style.width),
            linestyle=linestyle,
            solid_capstyle="butt",
            zorder=self._next_zorder(),
        )

    def fill_polygon(self, points: np.ndarray, color: str) -> None:
        points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(points) == 0:
            return

        patch = Polygon(
            points,
            closed=True,
            facecolor=color,
            edgecolor="none",
            zorder=self._next_zorder(),
        )
        self.ax.add_patch(patch)

    def draw_text(self, text: str, anchor: Tuple[float, float], style: TextStyle) -> None:
        x, y = anchor
        self.ax.text(
            float(x),
            float(y),
            text,
            color=style.color,
            fontsize=self._to_points(style.size),
            fontweight=style.weight,
            ha="left",
            va="top",
            zorder=self._next_zorder(),
        )

    def to_array(self) -> np.ndarray:
        """Rasterize and return the canvas as an (height, width, 4) uint8 array."""
        self.fig.canvas.draw()
        return np.asarray(self.fig.canvas.buffer_rgba()).copy()

    def save(self, output_path: Union[str, Path]) -> str:
        """
        Write the canvas to an image file (format from the suffix).

        Args:
            output_path: Destination path

        Returns:
            Path to saved file as a string
        """
        output_path = str(output_path)
        self.fig.savefig(output_path, dpi=self.dpi, facecolor=self.background_color)

        try:
            file_size = os.path.getsize(output_path)
            logger.info(f"Tile saved: {output_path} ({file_size / 1024:.1f} KB)")
        except OSError:
            logger.info(f"Tile saved: {output_path}")

        return output_path

    def close(self) -> None:
        self.ax.clear()
        self.fig.clear()

    @property
    def draw_calls(self) -> int:
        return self._zorder

"""
Main API module for TileRenderer package.

This module provides simplified user-facing functions that run the whole
pipeline (classification, viewport fit, compositing) in a single call.

Example:
    >>> from tile_renderer import render_features_file
    >>>
    >>> # Render a feature document to PNG
    >>> render_features_file("examples/sample_features.yaml", "tile.png")

    >>> # Interactive use (returns figure and axes)
    >>> fig, ax = render_features(features)
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from .config import Config
from .data import FeatureRecord, load_features
from .exceptions import InvalidParameterError, RenderError
from .rendering import TileChart

logger = logging.getLogger(__name__)


def render_features(
    features: Iterable[FeatureRecord],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None
) -> Union[str, Tuple[Figure, Axes]]:
    """
    Render feature records into a tile.

    Args:
        features: Feature records in source order
        output_path: Output file path; if None, returns (fig, ax) for interactive use
        config: Optional Config object; if None, uses default configuration

    Returns:
        If output_path provided: path to saved tile
        If output_path is None: tuple of (figure, axes)

    Raises:
        InvalidParameterError: If the configuration is invalid
        RenderError: If rendering or saving fails

    Example:
        >>> path = render_features(features, "tile.png", Config(canvas_width=512))
        >>> print(f"Tile saved to {path}")
    """
    if config is None:
        config = Config()
        logger.debug("Using default configuration")

    try:
        config.validate()
    except ValueError as e:
        raise InvalidParameterError(f"Invalid configuration: {e}") from e

    features = list(features)
    logger.info(f"Rendering tile with {len(features)} features")

    chart = TileChart(config=config)
    try:
        surface = chart.render(features)
    except Exception as e:
        chart.close()
        raise RenderError(f"Failed to render tile: {e}") from e

    if output_path is None:
        return surface.fig, surface.ax

    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        saved = chart.save_chart(str(output_path))
    except Exception as e:
        raise RenderError(f"Failed to save tile to {output_path}: {e}") from e
    finally:
        chart.close()

    return saved


def render_features_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[Config] = None
) -> Union[str, Tuple[Figure, Axes]]:
    """
    Load a feature document and render it.

    Args:
        input_path: YAML/JSON feature document
        output_path: Output file path; if None, returns (fig, ax)
        config: Optional Config object

    Returns:
        Same as render_features

    Raises:
        FileNotFoundError: If the feature document does not exist
        FeatureLoadError: If the document is malformed
        InvalidParameterError: If the configuration is invalid
        RenderError: If rendering or saving fails
    """
    features = load_features(input_path)
    return render_features(features, output_path=output_path, config=config)

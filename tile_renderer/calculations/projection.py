"""
Geographic to planar projection for tile rendering.

Features arrive as longitude/latitude pairs; the classifier projects them
with a forward Mercator projection on the WGS84 ellipsoid before the
viewport fit turns the planar metres into canvas pixels.
"""

import logging
from typing import Sequence, Tuple

import cartopy.crs as ccrs
import numpy as np

logger = logging.getLogger("tile_renderer.calculations.projection")

# Mercator diverges at the poles; clamp so every valid latitude stays finite.
LATITUDE_LIMIT = 89.5

MERCATOR = ccrs.Mercator()
GEODETIC = ccrs.Geodetic()


def project_coordinates(coordinates: Sequence[Tuple[float, float]]) -> np.ndarray:
    """
    Project lon/lat coordinates into Mercator metres.

    Args:
        coordinates: Ordered (longitude, latitude) pairs in degrees

    Returns:
        Float array of shape (N, 2) holding (x, y) in input order. Empty
        input yields an array of shape (0, 2).

    Example:
        >>> points = project_coordinates([(0.0, 0.0), (1.0, 1.0)])
        >>> points.shape
        (2, 2)
    """
    if len(coordinates) == 0:
        return np.empty((0, 2), dtype=np.float64)

    lonlat = np.asarray(coordinates, dtype=np.float64).reshape(-1, 2)
    lats = np.clip(lonlat[:, 1], -LATITUDE_LIMIT, LATITUDE_LIMIT)

    projected = MERCATOR.transform_points(GEODETIC, lonlat[:, 0], lats)
    return np.ascontiguousarray(projected[:, :2], dtype=np.float64)


def project(coordinate: Tuple[float, float]) -> Tuple[float, float]:
    """Project a single (longitude, latitude) pair to (x, y)."""
    x, y = project_coordinates([coordinate])[0]
    return float(x), float(y)


def lon_to_x(longitude: float) -> float:
    """Mercator easting in metres for a longitude in degrees."""
    return project((longitude, 0.0))[0]


def lat_to_y(latitude: float) -> float:
    """Mercator northing in metres for a latitude in degrees."""
    return project((0.0, latitude))[1]

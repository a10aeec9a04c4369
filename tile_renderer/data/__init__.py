"""
Feature records and the feature source for TileRenderer.

Main Classes:
    FeatureRecord: One decoded map feature (geometry, coordinates, codes, label)
    Coordinate: Longitude/latitude pair in degrees
    GeometryKind: Point, Line or Polygon

Example:
    >>> from tile_renderer.data import load_features
    >>>
    >>> features = load_features("examples/sample_features.yaml")
"""

from .features import (
    Coordinate,
    FeatureRecord,
    GeometryKind,
    feature_from_dict,
    load_features,
)

__all__ = [
    "Coordinate",
    "FeatureRecord",
    "GeometryKind",
    "feature_from_dict",
    "load_features",
]

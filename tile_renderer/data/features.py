"""
Feature records consumed by the classification pipeline.

A FeatureRecord is one decoded map feature: its geometry kind, the ordered
lon/lat coordinates, the unordered set of property codes, and an optional
label. Records are produced upstream; ``load_features`` reads them from a
small YAML/JSON document so the CLI and batch renderer have a source.

Document layout::

    features:
      - geometry: Polygon
        coordinates: [[8.54, 47.37], [8.55, 47.37], [8.55, 47.38]]
        codes: [NWATER]
      - geometry: Point
        coordinates: [[8.54, 47.37]]
        codes: [PCITY]
        label: Zurich
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple, Union

import yaml

from ..constants import MAX_PROPERTY_CODE, PropertyCode
from ..exceptions import FeatureLoadError

logger = logging.getLogger("tile_renderer.data.features")


class Coordinate(NamedTuple):
    """Geographic position in degrees."""

    longitude: float
    latitude: float


class GeometryKind(Enum):
    POINT = "Point"
    LINE = "Line"
    POLYGON = "Polygon"

    @classmethod
    def parse(cls, value: Union[str, "GeometryKind"]) -> "GeometryKind":
        """Parse 'Point', 'Line'/'LineString' or 'Polygon' (any case)."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        aliases = {
            "point": cls.POINT,
            "line": cls.LINE,
            "linestring": cls.LINE,
            "polygon": cls.POLYGON,
        }
        if normalized not in aliases:
            raise ValueError(
                f"Unknown geometry kind '{value}'. Expected Point, Line or Polygon"
            )
        return aliases[normalized]


@dataclass(frozen=True)
class FeatureRecord:
    """One classified-to-be map feature.

    Attributes:
        geometry: Geometry kind of the feature.
        coordinates: Ordered lon/lat coordinates.
        codes: Unordered set of property codes (unsigned 16-bit).
        label: Optional display label (used for settlement names).
    """

    geometry: GeometryKind
    coordinates: Tuple[Coordinate, ...]
    codes: FrozenSet[int]
    label: Optional[str] = None


def _parse_code(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"Invalid property code: {raw!r}")
    if isinstance(raw, int):
        if not 0 <= raw <= MAX_PROPERTY_CODE:
            raise ValueError(f"Property code {raw} outside 0..{MAX_PROPERTY_CODE}")
        return raw
    if isinstance(raw, str):
        try:
            return int(PropertyCode[raw.strip().upper()])
        except KeyError:
            raise ValueError(f"Unknown property code name '{raw}'") from None
    raise ValueError(f"Invalid property code: {raw!r}")


def _parse_coordinate(raw: Any) -> Coordinate:
    if isinstance(raw, dict):
        return Coordinate(float(raw["longitude"]), float(raw["latitude"]))
    if isinstance(raw, (list, tuple)) and len(raw) >= 2:
        return Coordinate(float(raw[0]), float(raw[1]))
    raise ValueError(f"Invalid coordinate: {raw!r}")


def feature_from_dict(data: Dict[str, Any]) -> FeatureRecord:
    """
    Build a FeatureRecord from a plain mapping.

    Args:
        data: Mapping with 'geometry', 'coordinates', 'codes' and optional 'label'

    Returns:
        FeatureRecord

    Raises:
        ValueError: If a field is missing or malformed
        KeyError: If a required key is missing
    """
    geometry = GeometryKind.parse(data["geometry"])
    coordinates = tuple(_parse_coordinate(c) for c in data.get("coordinates") or [])
    codes = frozenset(_parse_code(c) for c in data.get("codes") or [])
    label = data.get("label")
    if label is not None:
        label = str(label)
    return FeatureRecord(geometry=geometry, coordinates=coordinates, codes=codes, label=label)


def load_features(path: Union[str, Path]) -> List[FeatureRecord]:
    """
    Load feature records from a YAML or JSON document.

    Args:
        path: Path to a .yaml, .yml or .json file

    Returns:
        Records in document order

    Raises:
        FileNotFoundError: If the file does not exist
        FeatureLoadError: If the format is unsupported or a record is malformed

    Example:
        >>> features = load_features("examples/sample_features.yaml")
        >>> print(f"Loaded {len(features)} features")
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Feature file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            if path.suffix in ['.yaml', '.yml']:
                document = yaml.safe_load(f)
            elif path.suffix == '.json':
                document = json.load(f)
            else:
                raise FeatureLoadError(
                    f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json"
                )
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise FeatureLoadError(f"Could not parse {path}: {e}") from e

    if isinstance(document, dict):
        raw_features = document.get("features", [])
    elif isinstance(document, list):
        raw_features = document
    elif document is None:
        raw_features = []
    else:
        raise FeatureLoadError(f"{path}: expected a mapping with 'features' or a list")

    records = []
    for index, raw in enumerate(raw_features):
        if not isinstance(raw, dict):
            raise FeatureLoadError(f"{path}: feature {index} is not a mapping")
        try:
            records.append(feature_from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            raise FeatureLoadError(f"{path}: feature {index} is invalid: {e}") from e

    logger.info(f"Loaded {len(records)} features from {path}")
    return records

"""
Feature classification: property codes to shape variants.

Every feature maps to exactly one shape. The checks run in a fixed order and
the first match wins:

1. Border      - boundary=administrative together with admin_level=2
2. Settlement  - a Point carrying a place size from city down to hamlet
3. Road        - any highway tag
4. Waterway    - any waterway tag
5. Railway     - any railway tag
6. Terrain     - category from TERRAIN_RULES, Unknown when nothing matches

Terrain rules are resolved in table order, not in the (arbitrary) iteration
order of the feature's code set: the first rule that matches any code wins.
"""

import logging
from collections import Counter
from typing import Callable, FrozenSet, Iterable, Tuple

from ..constants import (
    HIGHWAY_CODES,
    RAILWAY_CODES,
    WATERWAY_CODES,
    PropertyCode,
    TerrainCategory,
)
from ..data.features import FeatureRecord, GeometryKind
from ..shapes import Border, Railway, Road, Settlement, Shape, Terrain, Waterway
from .projection import project_coordinates
from .viewport import ProjectedScene

logger = logging.getLogger("tile_renderer.calculations.classifier")


def _in_range(low: PropertyCode, high: PropertyCode) -> Callable[[int], bool]:
    return lambda code: low <= code <= high


def _one_of(*codes: PropertyCode) -> Callable[[int], bool]:
    members = frozenset(codes)
    return lambda code: code in members


TERRAIN_RULES: Tuple[Tuple[Callable[[int], bool], TerrainCategory], ...] = (
    # natural=*
    (_in_range(PropertyCode.NFELL, PropertyCode.NWETLAND), TerrainCategory.PLAIN),
    (_one_of(PropertyCode.NWOOD, PropertyCode.NTREE_ROW), TerrainCategory.FOREST),
    (_in_range(PropertyCode.NBARE_ROCK, PropertyCode.NSCREE), TerrainCategory.MOUNTAINS),
    (_one_of(PropertyCode.NBEACH, PropertyCode.NSAND), TerrainCategory.DESERT),
    (_one_of(PropertyCode.NWATER), TerrainCategory.WATER),
    # landuse=*, boundary=forest, building=*, amenity=*
    (_one_of(PropertyCode.LFOREST, PropertyCode.LORCHARD, PropertyCode.BFOREST),
     TerrainCategory.FOREST),
    (_one_of(
        PropertyCode.LRESIDENTIAL,
        PropertyCode.LCEMETERY,
        PropertyCode.LINDUSTRIAL,
        PropertyCode.LCOMMERCIAL,
        PropertyCode.LSQUARE,
        PropertyCode.LCONSTRUCTION,
        PropertyCode.LMILITARY,
        PropertyCode.LQUARRY,
        PropertyCode.LBROWNFIELD,
        PropertyCode.BUILDING,
        PropertyCode.AMENITY,
    ), TerrainCategory.RESIDENTIAL),
    (_one_of(
        PropertyCode.LFARM,
        PropertyCode.LMEADOW,
        PropertyCode.LGRASS,
        PropertyCode.LGREENFIELD,
        PropertyCode.LRECREATION_GROUND,
        PropertyCode.LWINTER_SPORTS,
        PropertyCode.LALLOTMENTS,
    ), TerrainCategory.PLAIN),
    (_one_of(PropertyCode.LRESERVOIR, PropertyCode.LBASIN), TerrainCategory.WATER),
)


def is_border(feature: FeatureRecord) -> bool:
    """
    Check for an administrative boundary at admin level 2.

    Both marker codes must be present; their order in the record is
    irrelevant. The scan stops as soon as both have been seen.
    """
    # https://wiki.openstreetmap.org/wiki/Key:admin_level
    found_boundary = False
    found_level = False

    for code in feature.codes:
        if code == PropertyCode.BADMINISTRATIVE:
            found_boundary = True
        elif code == PropertyCode.A2:
            found_level = True

        if found_boundary and found_level:
            return True

    return False


def is_settlement(feature: FeatureRecord) -> bool:
    """A Point whose codes include a place size between city and hamlet."""
    # https://wiki.openstreetmap.org/wiki/Key:place
    if feature.geometry is not GeometryKind.POINT:
        return False

    return any(PropertyCode.PCITY <= code <= PropertyCode.PHAMLET for code in feature.codes)


def terrain_category(codes: FrozenSet[int]) -> TerrainCategory:
    """Resolve the terrain category for a code set, Unknown when nothing matches."""
    for matches, category in TERRAIN_RULES:
        if any(matches(code) for code in codes):
            return category
    return TerrainCategory.UNKNOWN


def classify(feature: FeatureRecord) -> Shape:
    """
    Turn one feature record into its shape variant.

    Args:
        feature: Feature record with lon/lat coordinates

    Returns:
        Shape whose points are the projected coordinates, in record order

    Example:
        >>> shape = classify(FeatureRecord(GeometryKind.POLYGON, coords, frozenset({PropertyCode.NWATER})))
        >>> shape.category
        <TerrainCategory.WATER: 'water'>
    """
    points = project_coordinates(feature.coordinates)
    is_polygon = feature.geometry is GeometryKind.POLYGON
    codes = feature.codes

    if is_border(feature):
        return Border(points)

    if is_settlement(feature):
        return Settlement.labelled(points, feature.label)

    if not codes.isdisjoint(HIGHWAY_CODES):
        return Road(points, is_polygon)

    if not codes.isdisjoint(WATERWAY_CODES):
        return Waterway(points, is_polygon)

    if not codes.isdisjoint(RAILWAY_CODES):
        return Railway(points)

    return Terrain(points, terrain_category(codes), is_polygon)


def classify_features(features: Iterable[FeatureRecord]) -> ProjectedScene:
    """
    Classify a sequence of features into a projected scene.

    Shapes keep the input order, which later decides ties in stacking
    priority.

    Args:
        features: Feature records from the feature source

    Returns:
        ProjectedScene ready for the viewport fit
    """
    shapes = [classify(feature) for feature in features]

    counts = Counter(type(shape).__name__ for shape in shapes)
    unknown = sum(
        1 for shape in shapes
        if isinstance(shape, Terrain) and shape.category is TerrainCategory.UNKNOWN
    )
    logger.info(f"Classified {len(shapes)} features")
    logger.debug(f"Shape counts: {dict(counts)}")
    if unknown:
        logger.debug(f"{unknown} terrain features fell back to Unknown")

    return ProjectedScene(shapes)

import itertools

import numpy as np
import pytest

from conftest import make_feature
from tile_renderer.calculations import classify, classify_features, terrain_category
from tile_renderer.calculations.classifier import is_border, is_settlement
from tile_renderer.calculations.projection import project_coordinates
from tile_renderer.constants import PropertyCode, TerrainCategory
from tile_renderer.data import GeometryKind
from tile_renderer.shapes import Border, Railway, Road, Settlement, Terrain, Waterway

PLACE_CODES = [
    PropertyCode.PCITY,
    PropertyCode.PTOWN,
    PropertyCode.PVILLAGE,
    PropertyCode.PHAMLET,
]


def test_point_city_with_label_is_visible_settlement():
    feature = make_feature(GeometryKind.POINT, [PropertyCode.PCITY], label="Springfield")

    shape = classify(feature)

    assert isinstance(shape, Settlement)
    assert shape.should_render is True
    assert shape.name == "Springfield"
    assert shape.stack_priority == 60
    assert shape.points.shape == (1, 2)


@pytest.mark.parametrize("label", ["", None])
def test_unlabelled_settlement_is_hidden(label):
    feature = make_feature(GeometryKind.POINT, [PropertyCode.PVILLAGE], label=label)

    shape = classify(feature)

    assert isinstance(shape, Settlement)
    assert shape.should_render is False
    assert shape.name == "Unknown"


@pytest.mark.parametrize("code", PLACE_CODES)
def test_every_place_size_gives_settlement(code):
    assert isinstance(classify(make_feature(GeometryKind.POINT, [code], label="x")), Settlement)


@pytest.mark.parametrize("code", [PropertyCode.PLOCALITY, PropertyCode.NWATER, PropertyCode.NAME])
def test_point_without_place_size_is_not_settlement(code):
    feature = make_feature(GeometryKind.POINT, [code], label="x")
    assert not is_settlement(feature)
    assert not isinstance(classify(feature), Settlement)


def test_place_code_on_polygon_is_not_settlement():
    feature = make_feature(GeometryKind.POLYGON, [PropertyCode.PCITY], label="x")
    assert not isinstance(classify(feature), Settlement)


def test_water_polygon_is_water_terrain():
    shape = classify(make_feature(GeometryKind.POLYGON, [PropertyCode.NWATER]))

    assert isinstance(shape, Terrain)
    assert shape.category is TerrainCategory.WATER
    assert shape.stack_priority == 40
    assert shape.is_area is True


@pytest.mark.parametrize("codes", list(itertools.permutations(
    [PropertyCode.BADMINISTRATIVE, PropertyCode.A2, PropertyCode.NWATER]
)))
def test_border_needs_both_markers_in_any_order(codes):
    feature = make_feature(GeometryKind.LINE, codes)

    shape = classify(feature)

    assert isinstance(shape, Border)
    assert shape.stack_priority == 30


@pytest.mark.parametrize("codes", [
    [PropertyCode.BADMINISTRATIVE],
    [PropertyCode.A2],
    [PropertyCode.BADMINISTRATIVE, PropertyCode.A4],
])
def test_single_border_marker_is_not_border(codes):
    feature = make_feature(GeometryKind.LINE, codes)
    assert not is_border(feature)
    assert not isinstance(classify(feature), Border)


def test_border_takes_precedence_over_terrain():
    feature = make_feature(
        GeometryKind.POLYGON,
        [PropertyCode.NWOOD, PropertyCode.A2, PropertyCode.BADMINISTRATIVE],
    )
    assert isinstance(classify(feature), Border)


@pytest.mark.parametrize("code, category", [
    (PropertyCode.NFELL, TerrainCategory.PLAIN),
    (PropertyCode.NHEATH, TerrainCategory.PLAIN),
    (PropertyCode.NWETLAND, TerrainCategory.PLAIN),
    (PropertyCode.NWOOD, TerrainCategory.FOREST),
    (PropertyCode.NTREE_ROW, TerrainCategory.FOREST),
    (PropertyCode.NBARE_ROCK, TerrainCategory.MOUNTAINS),
    (PropertyCode.NSCREE, TerrainCategory.MOUNTAINS),
    (PropertyCode.NBEACH, TerrainCategory.DESERT),
    (PropertyCode.NSAND, TerrainCategory.DESERT),
    (PropertyCode.NWATER, TerrainCategory.WATER),
    (PropertyCode.LFOREST, TerrainCategory.FOREST),
    (PropertyCode.LRESIDENTIAL, TerrainCategory.RESIDENTIAL),
    (PropertyCode.BUILDING, TerrainCategory.RESIDENTIAL),
    (PropertyCode.LFARM, TerrainCategory.PLAIN),
    (PropertyCode.LRESERVOIR, TerrainCategory.WATER),
    (PropertyCode.NPEAK, TerrainCategory.UNKNOWN),
])
def test_terrain_categories(code, category):
    assert terrain_category(frozenset({int(code)})) is category


def test_no_codes_falls_back_to_unknown():
    shape = classify(make_feature(GeometryKind.POLYGON, []))

    assert isinstance(shape, Terrain)
    assert shape.category is TerrainCategory.UNKNOWN
    assert shape.stack_priority == 8


def test_terrain_resolution_follows_rule_table_order():
    # Plain is declared before Water, whatever order the codes arrive in
    codes = frozenset({int(PropertyCode.NWATER), int(PropertyCode.NWETLAND)})
    assert terrain_category(codes) is TerrainCategory.PLAIN


def test_line_terrain_is_not_area():
    shape = classify(make_feature(GeometryKind.LINE, [PropertyCode.NTREE_ROW], [(0, 0), (1, 1)]))
    assert isinstance(shape, Terrain)
    assert shape.is_area is False


@pytest.mark.parametrize("code, shape_type, priority", [
    (PropertyCode.HPRIMARY, Road, 50),
    (PropertyCode.WRIVER, Waterway, 40),
    (PropertyCode.RRAIL, Railway, 45),
])
def test_feature_type_tags(code, shape_type, priority):
    shape = classify(make_feature(GeometryKind.LINE, [code], [(0, 0), (1, 1)]))

    assert isinstance(shape, shape_type)
    assert shape.stack_priority == priority
    assert shape.is_area is False


def test_polygon_waterway_and_road_are_areas():
    assert classify(make_feature(GeometryKind.POLYGON, [PropertyCode.WCANAL])).is_area is True
    assert classify(make_feature(GeometryKind.POLYGON, [PropertyCode.HROAD])).is_area is True


def test_points_are_projected_in_order():
    coords = [(8.5, 47.3), (8.6, 47.3), (8.6, 47.4)]
    shape = classify(make_feature(GeometryKind.LINE, [PropertyCode.NWOOD], coords))

    np.testing.assert_allclose(shape.points, project_coordinates(coords))


def test_empty_coordinates_give_empty_shape():
    shape = classify(make_feature(GeometryKind.LINE, [PropertyCode.RRAIL], []))
    assert isinstance(shape, Railway)
    assert shape.points.shape == (0, 2)


def test_classify_features_keeps_input_order_and_count():
    features = [
        make_feature(GeometryKind.POLYGON, [PropertyCode.NWATER]),
        make_feature(GeometryKind.POINT, [PropertyCode.PTOWN], label=""),
        make_feature(GeometryKind.LINE, [PropertyCode.HMOTORWAY]),
    ]

    scene = classify_features(features)

    assert [type(s) for s in scene.shapes] == [Terrain, Settlement, Road]
    assert len(scene) == 3

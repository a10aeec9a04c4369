import json

import pytest

from tile_renderer.constants import PropertyCode
from tile_renderer.data import Coordinate, GeometryKind, load_features
from tile_renderer.data.features import feature_from_dict
from tile_renderer.exceptions import FeatureLoadError


def test_load_yaml_document(feature_document):
    features = load_features(feature_document)

    assert [f.geometry for f in features] == [
        GeometryKind.POLYGON,
        GeometryKind.LINE,
        GeometryKind.POINT,
    ]
    assert features[0].codes == frozenset({int(PropertyCode.NWATER)})
    assert features[0].coordinates[1] == Coordinate(8.60, 47.30)
    assert features[2].label == "Springfield"
    assert features[1].label is None


def test_load_json_list_with_numeric_codes(tmp_path):
    path = tmp_path / "tile.json"
    path.write_text(json.dumps([
        {"geometry": "LineString", "coordinates": [[0, 0], [1, 1]], "codes": [602, "wriver"]},
        {"geometry": "point", "coordinates": [{"longitude": 3, "latitude": 4}], "codes": []},
    ]))

    features = load_features(path)

    assert features[0].geometry is GeometryKind.LINE
    assert features[0].codes == frozenset({602, int(PropertyCode.WRIVER)})
    assert features[1].coordinates == (Coordinate(3.0, 4.0),)
    assert features[1].codes == frozenset()


def test_empty_document_has_no_features(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_features(path) == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_features(tmp_path / "nope.yaml")


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "tile.txt"
    path.write_text("features: []")
    with pytest.raises(FeatureLoadError, match="Unsupported"):
        load_features(path)


def test_malformed_yaml(tmp_path):
    path = tmp_path / "tile.yaml"
    path.write_text("features: [unclosed")
    with pytest.raises(FeatureLoadError, match="Could not parse"):
        load_features(path)


@pytest.mark.parametrize("feature", [
    {"geometry": "Circle", "coordinates": [], "codes": []},
    {"coordinates": [], "codes": []},
    {"geometry": "Point", "coordinates": [[1]], "codes": []},
    {"geometry": "Point", "coordinates": [[1, 2]], "codes": ["NOT_A_CODE"]},
    {"geometry": "Point", "coordinates": [[1, 2]], "codes": [70000]},
    {"geometry": "Point", "coordinates": [[1, 2]], "codes": [True]},
])
def test_invalid_feature_reports_index(tmp_path, feature):
    path = tmp_path / "tile.json"
    valid = {"geometry": "Point", "coordinates": [[1, 2]], "codes": ["PCITY"]}
    path.write_text(json.dumps({"features": [valid, feature]}))

    with pytest.raises(FeatureLoadError, match="feature 1"):
        load_features(path)


def test_non_mapping_feature(tmp_path):
    path = tmp_path / "tile.yaml"
    path.write_text("features:\n  - just a string\n")
    with pytest.raises(FeatureLoadError, match="not a mapping"):
        load_features(path)


def test_feature_from_dict_stringifies_label():
    record = feature_from_dict({"geometry": "Point", "coordinates": [[0, 0]], "codes": ["PTOWN"], "label": 42})
    assert record.label == "42"

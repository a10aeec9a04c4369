import os

os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib

matplotlib.use("Agg", force=True)

import pytest

from tile_renderer.data import Coordinate, FeatureRecord, GeometryKind


class RecordingSurface:
    """DrawingSurface that records every call instead of rasterizing."""

    def __init__(self):
        self.calls = []

    def draw_path(self, points, style):
        self.calls.append(("path", points.copy(), style))

    def fill_polygon(self, points, color):
        self.calls.append(("fill", points.copy(), color))

    def draw_text(self, text, anchor, style):
        self.calls.append(("text", text, anchor, style))

    @property
    def kinds(self):
        return [call[0] for call in self.calls]


def make_feature(geometry, codes, coordinates=None, label=None):
    if coordinates is None:
        if geometry is GeometryKind.POINT:
            coordinates = [(8.5, 47.3)]
        else:
            coordinates = [(8.5, 47.3), (8.6, 47.3), (8.6, 47.4), (8.5, 47.3)]
    return FeatureRecord(
        geometry=geometry,
        coordinates=tuple(Coordinate(*c) for c in coordinates),
        codes=frozenset(int(c) for c in codes),
        label=label,
    )


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def feature_document(tmp_path):
    path = tmp_path / "features.yaml"
    path.write_text(
        "features:\n"
        "  - geometry: Polygon\n"
        "    coordinates: [[8.50, 47.30], [8.60, 47.30], [8.60, 47.40], [8.50, 47.30]]\n"
        "    codes: [NWATER]\n"
        "  - geometry: Line\n"
        "    coordinates: [[8.50, 47.35], [8.60, 47.36]]\n"
        "    codes: [HPRIMARY]\n"
        "  - geometry: Point\n"
        "    coordinates: [[8.55, 47.35]]\n"
        "    codes: [PCITY]\n"
        "    label: Springfield\n",
        encoding="utf-8",
    )
    return path

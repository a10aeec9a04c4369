"""
Drawable shape variants produced by the classifier.

The variant set is closed: Terrain, Railway, Settlement, Border, Waterway and
Road. Every variant exposes the same surface (``points``, ``is_area`` and
``stack_priority``); painting is handled by the compositor's painter table,
so adding a variant means adding a classifier rule and a painter.

Points are a float array of shape (N, 2) owned by the shape. The array is
written in place exactly once, by the viewport fit; everything else about a
shape is fixed at construction.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Union

import numpy as np

from .constants import (
    BORDER_PRIORITY,
    RAILWAY_PRIORITY,
    ROAD_PRIORITY,
    SETTLEMENT_PRIORITY,
    TERRAIN_PRIORITIES,
    UNKNOWN_SETTLEMENT_NAME,
    WATERWAY_PRIORITY,
    TerrainCategory,
)


def _owned_points(points) -> np.ndarray:
    # Always copy: the viewport fit writes into this buffer.
    return np.array(points, dtype=np.float64).reshape(-1, 2)


@dataclass(frozen=True, eq=False)
class Terrain:
    """Area or line feature of the landscape (plain, forest, water, ...)."""

    points: np.ndarray
    category: TerrainCategory = TerrainCategory.UNKNOWN
    is_area: bool = True

    def __post_init__(self):
        object.__setattr__(self, "points", _owned_points(self.points))

    @property
    def stack_priority(self) -> int:
        return TERRAIN_PRIORITIES[self.category]


@dataclass(frozen=True, eq=False)
class Railway:
    points: np.ndarray
    is_area: bool = field(default=False, init=False)

    stack_priority: ClassVar[int] = RAILWAY_PRIORITY

    def __post_init__(self):
        object.__setattr__(self, "points", _owned_points(self.points))


@dataclass(frozen=True, eq=False)
class Settlement:
    """Populated place drawn as a text label at its first point.

    A settlement without a label keeps its geometry but is never painted;
    ``should_render`` is False and ``name`` holds a placeholder.
    """

    points: np.ndarray
    name: str = UNKNOWN_SETTLEMENT_NAME
    should_render: bool = False
    is_area: bool = field(default=False, init=False)

    stack_priority: ClassVar[int] = SETTLEMENT_PRIORITY

    def __post_init__(self):
        object.__setattr__(self, "points", _owned_points(self.points))

    @classmethod
    def labelled(cls, points, label) -> "Settlement":
        """Build a settlement, hiding it when ``label`` is None or empty."""
        if label:
            return cls(points, str(label), True)
        return cls(points, UNKNOWN_SETTLEMENT_NAME, False)


@dataclass(frozen=True, eq=False)
class Border:
    points: np.ndarray
    is_area: bool = field(default=False, init=False)

    stack_priority: ClassVar[int] = BORDER_PRIORITY

    def __post_init__(self):
        object.__setattr__(self, "points", _owned_points(self.points))


@dataclass(frozen=True, eq=False)
class Waterway:
    points: np.ndarray
    is_area: bool = False

    stack_priority: ClassVar[int] = WATERWAY_PRIORITY

    def __post_init__(self):
        object.__setattr__(self, "points", _owned_points(self.points))


@dataclass(frozen=True, eq=False)
class Road:
    points: np.ndarray
    is_area: bool = False

    stack_priority: ClassVar[int] = ROAD_PRIORITY

    def __post_init__(self):
        object.__setattr__(self, "points", _owned_points(self.points))


Shape = Union[Terrain, Railway, Settlement, Border, Waterway, Road]

SHAPE_TYPES = (Terrain, Railway, Settlement, Border, Waterway, Road)

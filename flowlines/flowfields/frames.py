"""
Bounds predicates for SamplerConfig.get_is_position_in_bounds.

Each factory returns a function position -> bool describing the region in
which lines may be seeded and grown.
"""
from typing import Callable, Tuple

from shapely.geometry import Point
from shapely.prepared import prep

from ..geometry import Vector2

BoundsFunction = Callable[[Vector2], bool]


def rectangle_frame(width: float, height: float, scale: Tuple[float, float] = (1.0, 1.0)) -> BoundsFunction:
    """Centered rectangle covering scale of the canvas along each axis."""
    offset_x = (1 - scale[0]) / 2 * width
    offset_y = (1 - scale[1]) / 2 * height

    def in_bounds(position: Vector2) -> bool:
        return (
            offset_x <= position.x < width - offset_x
            and offset_y <= position.y < height - offset_y
        )

    return in_bounds


def circle_frame(width: float, height: float, scale: float = 1.0) -> BoundsFunction:
    """Centered circle, scale = 1 touches the shorter canvas side."""
    center = Vector2(width / 2, height / 2)
    radius = min(width, height) / 2 * scale

    def in_bounds(position: Vector2) -> bool:
        return position.dist(center) < radius

    return in_bounds


def polygon_frame(geometry) -> BoundsFunction:
    """
    Any shapely geometry used as a mask, e.g. a Polygon or a buffered
    Point.
    """
    prepared = prep(geometry)

    def in_bounds(position: Vector2) -> bool:
        return prepared.contains(Point(position.x, position.y))

    return in_bounds

import math
from typing import Callable, Tuple

from ..geometry import Vector2

FieldFunction = Callable[[Vector2], float]


def constant_field(angle: float = 0.0) -> FieldFunction:
    return lambda position: angle


def radial_field(
    width: float,
    height: float,
    center_offset: Tuple[float, float] = (0.5, 0.5),
    curve_factor: float = 1.0,
) -> FieldFunction:
    """
    Spiral around a center given in normalized canvas coordinates.

    The direction points away from the center and turns by
    pi * curve_factor per unit of normalized distance.
    """
    center = Vector2(*center_offset)

    def field_function(position: Vector2) -> float:
        p = Vector2(position.x / width, position.y / height).sub(center)
        return math.atan2(p.y, p.x) + math.pi * p.mag() * curve_factor

    return field_function

import math
from typing import Iterable, Optional

from .matrix import Matrix3x2
from .vector2 import Vector2


class MBR:
    """
    Minimum bounding rectangle.

    An empty MBR has min = +inf and max = -inf and is not valid() until a
    point is added.
    """

    def __init__(self, points: Optional[Iterable[Vector2]] = None):
        self.min = Vector2(math.inf, math.inf)
        self.max = Vector2(-math.inf, -math.inf)
        for p in points or ():
            self.add(p)

    def __repr__(self):
        return f"MBR(min={self.min!r}, max={self.max!r})"

    def valid(self) -> bool:
        return self.min.x <= self.max.x and self.min.y <= self.max.y

    def size(self) -> Vector2:
        return Vector2(self.max.x - self.min.x, self.max.y - self.min.y)

    def center(self) -> Vector2:
        return self.min.add(self.max).scale(0.5)

    def add(self, p: Vector2) -> "MBR":
        """Expands the box so it contains p."""
        self.min = Vector2(min(p.x, self.min.x), min(p.y, self.min.y))
        self.max = Vector2(max(p.x, self.max.x), max(p.y, self.max.y))
        return self

    def contains(self, p: Vector2, r: float = 0.0) -> bool:
        """Whether the box contains point p, or touches the circle (p, r)."""
        return (
            p.x + r >= self.min.x
            and p.y + r >= self.min.y
            and p.x - r < self.max.x
            and p.y - r < self.max.y
        )

    def point_dist(self, p: Vector2) -> float:
        dx = max(self.min.x - p.x, 0.0, p.x - self.max.x)
        dy = max(self.min.y - p.y, 0.0, p.y - self.max.y)
        return math.sqrt(dx * dx + dy * dy)

    def intersects(self, other: "MBR") -> bool:
        minx = max(other.min.x, self.min.x)
        maxx = min(other.max.x, self.max.x)
        if minx >= maxx:
            return False
        miny = max(other.min.y, self.min.y)
        maxy = min(other.max.y, self.max.y)
        return miny < maxy

    def intersection(self, other: "MBR") -> "MBR":
        """Overlap of both boxes; not valid() when they are disjoint."""
        ret = MBR()
        ret.min = Vector2(max(other.min.x, self.min.x), max(other.min.y, self.min.y))
        ret.max = Vector2(min(other.max.x, self.max.x), min(other.max.y, self.max.y))
        return ret

    def union(self, other: "MBR") -> "MBR":
        ret = MBR()
        ret.min = Vector2(min(other.min.x, self.min.x), min(other.min.y, self.min.y))
        ret.max = Vector2(max(other.max.x, self.max.x), max(other.max.y, self.max.y))
        return ret

    def transform(self, matrix: Matrix3x2) -> "MBR":
        # only the two stored corners are mapped, so a rotation does not
        # give a tight box
        return MBR([matrix.apply_point(self.min), matrix.apply_point(self.max)])

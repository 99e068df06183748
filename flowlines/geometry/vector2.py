import math
from typing import Optional, Tuple

import numpy as np


def det3(t00, t01, t02, t10, t11, t12, t20, t21, t22) -> float:
    """Determinant of a 3x3 matrix given row by row."""
    return (
        t00 * (t11 * t22 - t12 * t21)
        + t01 * (t12 * t20 - t10 * t22)
        + t02 * (t10 * t21 - t11 * t20)
    )


class Vector2:
    """
    A 2D point / vector.

    Every operation returns a new vector, the receiver is left untouched.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    def __repr__(self):
        return f"Vector2({self.x!r}, {self.y!r})"

    def __eq__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.sub(other)

    def __mul__(self, alpha: float) -> "Vector2":
        return self.scale(alpha)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def array(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def clone(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def mag(self) -> float:
        return math.sqrt(self.dot(self))

    def add(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x + v.x, self.y + v.y)

    def sub(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x - v.x, self.y - v.y)

    def dist(self, q: "Vector2") -> float:
        return math.hypot(self.x - q.x, self.y - q.y)

    def dot(self, q: "Vector2") -> float:
        return self.x * q.x + self.y * q.y

    def scale(self, alpha: float) -> "Vector2":
        return Vector2(self.x * alpha, self.y * alpha)

    def rotate(self, angle: float) -> "Vector2":
        """Returns this vector rotated by angle radians."""
        c, s = math.cos(angle), math.sin(angle)
        return Vector2(c * self.x - s * self.y, s * self.x + c * self.y)

    def mix(self, q: "Vector2", alpha: float) -> "Vector2":
        """this * (1 - alpha) + q * alpha"""
        return Vector2(
            self.x * (1 - alpha) + q.x * alpha,
            self.y * (1 - alpha) + q.y * alpha,
        )

    def normalize(self) -> Optional["Vector2"]:
        """Unit vector along this one, or None for the zero vector."""
        m = self.mag()
        if m == 0.0:
            return None
        return self.scale(1.0 / m)

    def angle_between(self, v: "Vector2") -> Optional[float]:
        """Unsigned angle to v in [0, pi], None if either vector is zero."""
        m = self.mag() * v.mag()
        if m == 0.0:
            return None
        return math.acos(min(max(self.dot(v) / m, -1.0), 1.0))

    def signed_angle(self, v: "Vector2") -> Optional[float]:
        """
        Signed angle such that rotating this vector by it makes it
        colinear with v.
        """
        a = self.angle_between(v)
        if a is None:
            return None
        if Vector2(0, 0).orient(self, v) > 0:
            return -a
        return a

    def dist_segment(self, p: "Vector2", q: "Vector2") -> float:
        """Distance to the line segment pq."""
        s = p.dist(q)
        # degenerate segment: distance to its (single) point
        if s < 0.00001:
            return self.dist(p)
        v = q.sub(p).scale(1.0 / s)
        u = self.sub(p)
        d = u.dot(v)
        if d < 0:
            return self.dist(p)
        if d > s:
            return self.dist(q)
        return p.mix(q, d / s).dist(self)

    def orient(self, p: "Vector2", q: "Vector2") -> int:
        """Orientation of triangle (self, p, q): 1, -1 or 0 when colinear."""
        d = det3(1, 1, 1, self.x, p.x, q.x, self.y, p.y, q.y)
        return (d > 0) - (d < 0)


def vec2(x: float = 0.0, y: float = 0.0) -> Vector2:
    return Vector2(x, y)

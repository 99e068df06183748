import sys
from typing import Optional, Tuple

from .vector2 import Vector2


class Ray2:
    """A parametric ray p + t * v."""

    def __init__(self, p: Vector2, v: Vector2):
        self.p = p
        self.v = v

    def point(self, t: float) -> Vector2:
        return self.p.add(self.v.scale(t))

    def intersect_ray(self, other: "Ray2") -> Optional[Tuple[float, float]]:
        """
        Intersection with another ray.

        Returns
        -------
        (t, u): the parameters of the intersection point along this ray and
        along other, or None when the rays are parallel.
        """
        p_0, v_0 = self.p.x, self.v.x
        p_1, v_1 = self.p.y, self.v.y
        P_0, V_0 = other.p.x, other.v.x
        P_1, V_1 = other.p.y, other.v.y
        den = v_0 * V_1 - v_1 * V_0
        if abs(den) <= sys.float_info.epsilon:
            return None
        t = (V_1 * (P_0 - p_0) + p_1 * V_0 - P_1 * V_0) / den
        u = (v_1 * (P_0 - p_0) + p_1 * v_0 - P_1 * v_0) / den
        return t, u

    def intersect_segment(self, a: Vector2, b: Vector2) -> Optional[float]:
        """
        Parameter t of the intersection with segment ab.

        None when the ray and segment are parallel, -1.0 when they do not
        meet with t > 0. Callers should treat both as a miss.
        """
        result = self.intersect_ray(Ray2(a, b.sub(a)))
        if result is None:
            return None
        t, u = result
        if t > 0 and 0 <= u <= 1:
            return t
        return -1.0

from typing import List, Sequence

from .vector2 import Vector2


class CatmullRom:
    """
    Catmull-Rom spline through a sequence of control points.

    point(u) evaluates the segment between control points int(u) + 1 and
    int(u) + 2, indices wrap around the control point list.
    """

    def __init__(self, control_points: Sequence[Vector2] = (), tension: float = 0.5):
        self.control_points: List[Vector2] = list(control_points)
        self.tension = tension

    @property
    def tension(self) -> float:
        return self._tau

    @tension.setter
    def tension(self, t: float) -> None:
        self._tau = 0.5 if t is None else float(t)

    def _blend_factors(self, u: float):
        u1 = u
        u2 = u * u
        u3 = u2 * u
        tau = self.tension
        return (
            -tau * u1 + 2 * tau * u2 - tau * u3,
            1 + (tau - 3) * u2 + (2 - tau) * u3,
            tau * u1 + (3 - 2 * tau) * u2 + (tau - 2) * u3,
            -tau * u2 + tau * u3,
        )

    def point(self, u: float) -> Vector2:
        i = int(u)
        u = u - i
        n = len(self.control_points)
        p0, p1, p2, p3 = (self.control_points[(i + k) % n] for k in range(4))
        b0, b1, b2, b3 = self._blend_factors(u)
        return Vector2(
            p0.x * b0 + p1.x * b1 + p2.x * b2 + p3.x * b3,
            p0.y * b0 + p1.y * b1 + p2.y * b2 + p3.y * b3,
        )

import math
from typing import Optional

from .vector2 import Vector2

_DET_TOL = 1e-12


class Matrix3x2:
    """
    Affine 2D transform stored column-wise: (a, b) first column,
    (c, d) second column, (e, f) translation.
    """

    __slots__ = ("a", "b", "c", "d", "e", "f")

    def __init__(self, a=1.0, b=0.0, c=0.0, d=1.0, e=0.0, f=0.0):
        self.a, self.b, self.c, self.d, self.e, self.f = a, b, c, d, e, f

    def __repr__(self):
        return "Matrix3x2({a}, {b}, {c}, {d}, {e}, {f})".format(
            a=self.a, b=self.b, c=self.c, d=self.d, e=self.e, f=self.f
        )

    def __matmul__(self, m: "Matrix3x2") -> "Matrix3x2":
        return self.mult(m)

    # ---- builders ----
    @staticmethod
    def translate(dx: float = 0.0, dy: float = 0.0) -> "Matrix3x2":
        return Matrix3x2(1, 0, 0, 1, dx, dy)

    @staticmethod
    def scale(sx: float = 1.0, sy: float = 1.0) -> "Matrix3x2":
        return Matrix3x2(sx, 0, 0, sy)

    @staticmethod
    def shear(sx: float = 0.0, sy: float = 0.0) -> "Matrix3x2":
        return Matrix3x2(1, sx, sy, 1)

    @staticmethod
    def rotate(angle: float = 0.0) -> "Matrix3x2":
        s, c = math.sin(angle), math.cos(angle)
        return Matrix3x2(c, s, -s, c)

    # ---- application ----
    def apply(self, p: Vector2) -> Vector2:
        return self.apply_point(p)

    def apply_point(self, p: Vector2) -> Vector2:
        return Vector2(
            self.a * p.x + self.c * p.y + self.e,
            self.b * p.x + self.d * p.y + self.f,
        )

    def apply_vector(self, v: Vector2) -> Vector2:
        """Like apply_point but ignores the translation."""
        return Vector2(self.a * v.x + self.c * v.y, self.b * v.x + self.d * v.y)

    def mult(self, m: "Matrix3x2") -> "Matrix3x2":
        """Returns self * m, i.e. m is applied first."""
        return Matrix3x2(
            self.a * m.a + self.c * m.b,
            self.b * m.a + self.d * m.b,
            self.a * m.c + self.c * m.d,
            self.b * m.c + self.d * m.d,
            self.a * m.e + self.c * m.f + self.e,
            self.b * m.e + self.d * m.f + self.f,
        )

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> Optional["Matrix3x2"]:
        """Inverse transform, or None when the matrix is singular."""
        a, b, c, d, e, f = self.a, self.b, self.c, self.d, self.e, self.f
        det = a * d - b * c
        if abs(det) <= _DET_TOL:
            return None
        det = 1.0 / det
        return Matrix3x2(
            d * det,
            -b * det,
            -c * det,
            a * det,
            (c * f - d * e) * det,
            (b * e - a * f) * det,
        )

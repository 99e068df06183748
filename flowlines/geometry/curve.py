import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .binary_heap import BinaryHeap
from .catmull_rom import CatmullRom
from .mbr import MBR
from .vector2 import Vector2


def arc_length(points: Sequence[Vector2]) -> List[float]:
    """Cumulative length of the polyline up to each point, starting at 0."""
    if not points:
        return []
    per = [0.0]
    r = 0.0
    q = points[0]
    for p in points[1:]:
        r += p.dist(q)
        per.append(r)
        q = p
    return per


class Curve(list):
    """
    A polyline stored as a list of Vector2.

    Whether the curve is closed is a convention of the caller; methods that
    care take a `closed` flag.
    """

    @classmethod
    def from_array(cls, points: np.ndarray) -> "Curve":
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        return cls(Vector2(x, y) for x, y in points)

    @classmethod
    def circle(cls, origin: Vector2, radius: float = 10.0, segments: int = 10) -> "Curve":
        """Regular polygon with `segments` vertices around origin."""
        return cls(
            origin.add(Vector2(radius, 0).rotate(i * 2 * math.pi / segments))
            for i in range(segments)
        )

    def to_array(self) -> np.ndarray:
        return np.array([[p.x, p.y] for p in self], dtype=float).reshape(-1, 2)

    def arc_length(self) -> List[float]:
        return arc_length(self)

    def perimeter(self) -> float:
        per = self.arc_length()
        return per[-1] if per else 0.0

    def area(self) -> float:
        """Signed shoelace area, positive for counter-clockwise winding."""
        s = 0.0
        n = len(self)
        for i in range(n):
            j = (i + 1) % n
            s += self[i].x * self[j].y
            s -= self[i].y * self[j].x
        return 0.5 * s

    def centroid(self) -> Optional[Vector2]:
        """Mean of the vertices, None for an empty curve."""
        if not self:
            return None
        n = len(self)
        return Vector2(sum(p.x for p in self) / n, sum(p.y for p in self) / n)

    def mbr(self) -> MBR:
        return MBR(self)

    def contains(self, point: Vector2) -> bool:
        """Even-odd test, the curve is treated as a closed polygon."""
        if not self:
            return False
        x, y = point.x, point.y
        x0, y0 = self[-1].x, self[-1].y
        inside = False
        for p in self:
            x1, y1 = p.x, p.y
            if (y1 > y) != (y0 > y) and x < (x0 - x1) * (y - y1) / (y0 - y1) + x1:
                inside = not inside
            x0, y0 = x1, y1
        return inside

    def subsample(self, tol: float = 0.0, count: float = math.inf) -> "Curve":
        """
        Douglas-Peucker simplification.

        Parameters
        ----------
        tol: float
            Vertices closer than tol to their simplified span are dropped.
        count: int
            Maximum number of vertices kept, in Douglas-Peucker order.
        """
        rank = douglas_peucker_rank(self, tol)
        return Curve(p for p, k in zip(self, rank) if k is not None and k < count)

    def chaikin(self, closed: bool = False) -> "Curve":
        """One pass of Chaikin corner cutting."""
        n = len(self)
        if n < 2:
            return Curve(p.clone() for p in self)
        r = Curve()
        q, start = (self[-1], 0) if closed else (self[0], 1)
        for i in range(start, n):
            p = self[i]
            e = p.sub(q)
            # open curves keep their first and last vertex
            r.append(q.add(e.scale(0.25)) if closed or i != 1 else q)
            r.append(q.add(e.scale(0.75)) if closed or i + 1 < n else p)
            q = p
        return r

    def resample(self, n: int, closed: bool = False) -> "Curve":
        """Returns n points evenly spaced by arc length."""
        if n < 2:
            raise ValueError(f"resample needs n >= 2, got {n}")
        if not self:
            return Curve()
        pts = list(self)
        if closed:
            n += 1
            pts.append(pts[0])
        if len(pts) == 1:
            return Curve(pts[0].clone() for _ in range(n))

        per = arc_length(pts)
        dlen = per[-1] / (n - 1)
        r = Curve([pts[0].clone()])
        j = 0
        for i in range(1, n):
            d = dlen * i
            while j + 1 < len(pts) - 1 and per[j + 1] < d:
                j += 1
            rate = per[j + 1] - per[j]
            alpha = 0.0 if rate == 0 else (d - per[j]) / rate
            r.append(pts[j].mix(pts[j + 1], alpha))
        if closed:
            r.pop()
        return r

    def spline_resample(self, n: int, closed: bool = False, tension: float = 0.5) -> "Curve":
        """
        Samples n points of the Catmull-Rom spline through this curve's
        vertices, uniformly in parameter space. Open curves repeat their
        end vertices so the spline interpolates them.
        """
        if n < 2:
            raise ValueError(f"spline_resample needs n >= 2, got {n}")
        if not self:
            return Curve()
        if closed:
            control = list(self)
            f = len(self) / (n - 1)
        else:
            control = [self[0]] + list(self) + [self[-1]]
            f = (len(self) - 1) / (n - 1)
        cr = CatmullRom(control, tension=tension)
        return Curve(cr.point(i * f) for i in range(n))


@dataclass
class _DPItem:
    """A span of the polyline and its vertex farthest from the chord."""
    first: int
    last: int
    farthest: int
    dist: float


def _dp_item(first: int, last: int, poly: Sequence[Vector2]) -> _DPItem:
    dist = 0.0
    farthest = first + 1
    a, b = poly[first], poly[last]
    for i in range(first + 1, last):
        d = poly[i].dist_segment(a, b)
        if d > dist:
            dist = d
            farthest = i
    return _DPItem(first, last, farthest, dist)


def douglas_peucker_rank(poly: Sequence[Vector2], tol: float) -> List[Optional[int]]:
    """
    Rank of every vertex in Douglas-Peucker inclusion order.

    If vertex i has rank k it is the (k+1)-th vertex a simplification would
    include. The end points get ranks 0 and 1, vertices closer than tol to
    their span are left as None.
    """
    n = len(poly)
    r: List[Optional[int]] = [None] * n
    if n == 0:
        return r
    r[0] = 0
    r[n - 1] = 1
    if n <= 2:
        return r

    # largest distance first
    pq = BinaryHeap(lambda item: -item.dist)
    pq.push(_dp_item(0, n - 1, poly))

    rank = 2
    while pq.size() > 0:
        item = pq.pop()
        if item.dist < tol:
            break
        r[item.farthest] = rank
        rank += 1
        if item.farthest > item.first + 1:
            pq.push(_dp_item(item.first, item.farthest, poly))
        if item.last > item.farthest + 1:
            pq.push(_dp_item(item.farthest, item.last, poly))
    return r

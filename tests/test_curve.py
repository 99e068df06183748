import math

import numpy as np
import pytest

from flowlines.geometry import BinaryHeap, CatmullRom, Curve, Vector2, arc_length, douglas_peucker_rank


def random_walk(n=60, seed=1):
    rng = np.random.default_rng(seed)
    steps = rng.normal(size=(n, 2))
    return Curve.from_array(np.cumsum(steps, axis=0))


def square():
    return Curve([Vector2(0, 0), Vector2(1, 0), Vector2(1, 1), Vector2(0, 1)])


class TestBinaryHeap:

    def test_pops_in_score_order(self):
        heap = BinaryHeap(lambda x: x)
        for v in [5, 3, 8, 1, 9, 2, 7]:
            heap.push(v)
        assert heap.size() == 7
        assert [heap.pop() for _ in range(7)] == [1, 2, 3, 5, 7, 8, 9]
        assert len(heap) == 0

    def test_negated_score_gives_max_heap(self):
        heap = BinaryHeap(lambda x: -x)
        for v in [4, 10, 1]:
            heap.push(v)
        assert heap.pop() == 10

    def test_remove(self):
        heap = BinaryHeap(lambda x: x)
        for v in [5, 3, 8, 1, 9, 2, 7]:
            heap.push(v)
        heap.remove(3)
        heap.remove(7)
        heap.remove(42)
        assert [heap.pop() for _ in range(heap.size())] == [1, 2, 5, 8, 9]

    def test_remove_last_element(self):
        heap = BinaryHeap(lambda x: x)
        heap.push(1)
        heap.push(2)
        heap.remove(2)
        assert heap.size() == 1
        assert heap.pop() == 1

    def test_pop_empty_raises(self):
        with pytest.raises(IndexError):
            BinaryHeap(lambda x: x).pop()


class TestMeasures:

    def test_arc_length(self):
        points = [Vector2(0, 0), Vector2(1, 0), Vector2(1, 1)]
        assert arc_length(points) == [0.0, 1.0, 2.0]
        assert arc_length([]) == []

    def test_perimeter(self):
        assert Curve([Vector2(0, 0), Vector2(3, 4)]).perimeter() == pytest.approx(5)
        assert Curve([Vector2(1, 1)]).perimeter() == 0
        assert Curve().perimeter() == 0

    def test_area_sign_follows_winding(self):
        assert square().area() == pytest.approx(1)
        assert Curve(reversed(square())).area() == pytest.approx(-1)

    def test_centroid(self):
        assert square().centroid() == Vector2(0.5, 0.5)
        assert Curve().centroid() is None

    def test_mbr(self):
        box = square().mbr()
        assert (box.min, box.max) == (Vector2(0, 0), Vector2(1, 1))

    def test_contains(self):
        assert square().contains(Vector2(0.5, 0.5))
        assert not square().contains(Vector2(1.5, 0.5))
        assert not Curve().contains(Vector2(0, 0))

    def test_circle(self):
        c = Curve.circle(Vector2(1, 1), radius=1, segments=4)
        assert len(c) == 4
        assert c[1].x == pytest.approx(1)
        assert c[1].y == pytest.approx(2)
        assert c.area() == pytest.approx(2)

    def test_array_conversion(self):
        arr = np.array([[0.0, 1.0], [2.0, 3.0]])
        c = Curve.from_array(arr)
        assert c == [Vector2(0, 1), Vector2(2, 3)]
        assert np.array_equal(c.to_array(), arr)
        assert Curve().to_array().shape == (0, 2)


class TestSubsample:
    """Douglas-Peucker rank based simplification."""

    def test_collinear_points_reduce_to_end_points(self):
        c = Curve(Vector2(i, 0) for i in range(5))
        assert c.subsample(0.001) == [Vector2(0, 0), Vector2(4, 0)]

    def test_short_curves(self):
        assert Curve([Vector2(0, 0)]).subsample(1) == [Vector2(0, 0)]
        two = Curve([Vector2(0, 0), Vector2(1, 1)])
        assert two.subsample(10) == two
        assert Curve().subsample() == []

    def test_count_keeps_farthest_first(self):
        zigzag = Curve([Vector2(0, 0), Vector2(1, 1), Vector2(2, 0), Vector2(3, 1), Vector2(4, 0)])
        assert zigzag.subsample(count=3) == [Vector2(0, 0), Vector2(1, 1), Vector2(4, 0)]
        assert zigzag.subsample(count=2) == [Vector2(0, 0), Vector2(4, 0)]

    def test_zero_tolerance_keeps_everything_off_the_chord(self):
        c = random_walk()
        assert len(c.subsample(0)) == len(c)

    def test_rank(self):
        r = douglas_peucker_rank([Vector2(0, 0), Vector2(1, 5), Vector2(2, 0)], 1)
        assert r == [0, 2, 1]
        assert douglas_peucker_rank([], 1) == []

    def test_larger_tolerance_never_keeps_more(self):
        c = random_walk()
        counts = [len(c.subsample(tol)) for tol in (0.1, 0.5, 1.0, 2.0, 5.0)]
        assert counts == sorted(counts, reverse=True)
        assert counts[-1] >= 2

    def test_idempotent(self):
        c = random_walk()
        once = c.subsample(1.0)
        assert once.subsample(1.0) == once

    def test_end_points_always_kept(self):
        c = random_walk()
        s = c.subsample(100.0)
        assert s == [c[0], c[-1]]


class TestChaikin:

    def test_open_curve_keeps_end_points(self):
        c = Curve([Vector2(0, 0), Vector2(4, 0), Vector2(4, 4)])
        assert c.chaikin() == [Vector2(0, 0), Vector2(3, 0), Vector2(4, 1), Vector2(4, 4)]

    def test_closed_curve_cuts_every_corner(self):
        r = square().chaikin(closed=True)
        assert len(r) == 8
        assert r[0] == Vector2(0, 0.75)
        assert r[1] == Vector2(0, 0.25)
        assert Vector2(0, 0) not in r

    def test_degenerate(self):
        assert Curve([Vector2(1, 2)]).chaikin() == [Vector2(1, 2)]


class TestResample:

    def test_evenly_spaced(self):
        r = Curve([Vector2(0, 0), Vector2(10, 0)]).resample(5)
        assert [p.x for p in r] == pytest.approx([0, 2.5, 5, 7.5, 10])

    @pytest.mark.parametrize("n", [2, 7, 50])
    def test_open_keeps_end_points(self, n):
        c = random_walk()
        r = c.resample(n)
        assert len(r) == n
        assert r[0] == c[0]
        assert r[-1].x == pytest.approx(c[-1].x)
        assert r[-1].y == pytest.approx(c[-1].y)

    def test_spacing_along_polyline(self):
        c = Curve([Vector2(0, 0), Vector2(2, 0), Vector2(2, 2)])
        r = c.resample(5)
        assert r[2].x == pytest.approx(2)
        assert r[2].y == pytest.approx(0)
        assert r[3].y == pytest.approx(1)

    def test_closed(self):
        r = square().resample(4, closed=True)
        assert len(r) == 4
        for p, q in zip(r, square()):
            assert p.x == pytest.approx(q.x)
            assert p.y == pytest.approx(q.y)

    def test_too_few_points_requested(self):
        with pytest.raises(ValueError):
            square().resample(1)


class TestSplineResample:

    def test_open_interpolates_control_points(self):
        c = Curve([Vector2(0, 0), Vector2(1, 2), Vector2(3, 1), Vector2(4, 4)])
        r = c.spline_resample(7)
        assert len(r) == 7
        for k, p in ((0, c[0]), (2, c[1]), (4, c[2]), (6, c[3])):
            assert r[k].x == pytest.approx(p.x)
            assert r[k].y == pytest.approx(p.y)

    def test_straight_line_stays_straight(self):
        c = Curve(Vector2(i, 0) for i in range(4))
        r = c.spline_resample(13, tension=0.3)
        assert all(p.y == pytest.approx(0) for p in r)
        assert [p.x for p in r] == sorted(p.x for p in r)

    def test_closed_returns_to_start(self):
        r = square().spline_resample(9, closed=True)
        assert r[0].x == pytest.approx(r[-1].x)
        assert r[0].y == pytest.approx(r[-1].y)

    def test_too_few_points_requested(self):
        with pytest.raises(ValueError):
            square().spline_resample(1)


def test_catmull_rom_segment_ends():
    pts = [Vector2(0, 0), Vector2(1, 0), Vector2(2, 1), Vector2(3, 3)]
    cr = CatmullRom(pts, tension=0.5)
    assert cr.point(0) == pts[1]
    end = cr.point(0.999999)
    assert end.x == pytest.approx(pts[2].x, abs=1e-4)
    assert end.y == pytest.approx(pts[2].y, abs=1e-4)
    cr.tension = None
    assert cr.tension == 0.5
    assert math.isfinite(cr.point(0.5).x)

import math

import numpy as np
import pytest

from flowlines import FlowField, Vector2
from flowlines.flowfields import (
    Arrow,
    Grid,
    GridField,
    PotentialField,
    angle_lerp,
    constant_field,
    radial_field,
    random_potential_field,
)
from flowlines.geometry import Curve


def test_constant_field():
    assert constant_field(1.2)(Vector2(3, 4)) == 1.2


def test_radial_field():
    field = radial_field(1024, 1024)
    assert field(Vector2(768, 512)) == pytest.approx(math.pi / 4)
    assert field(Vector2(512, 256)) == pytest.approx(-math.pi / 4)
    assert field(Vector2(512, 512)) == 0


def test_radial_field_without_curl():
    field = radial_field(100, 100, center_offset=(0, 0), curve_factor=0)
    assert field(Vector2(50, 50)) == pytest.approx(math.pi / 4)


class TestAngleLerp:

    def test_plain(self):
        assert angle_lerp(0, math.pi / 2, 0.5) == pytest.approx(math.pi / 4)

    def test_takes_the_short_way(self):
        assert angle_lerp(0.1, 2 * math.pi - 0.1, 0.5) == pytest.approx(0, abs=1e-12)

    def test_equal_angles(self):
        assert angle_lerp(1.0, 1.0, 0.3) == 1.0


class TestGridField:

    def test_default_angle(self):
        g = GridField(100, 100, 10)
        assert (g.nx, g.ny) == (10, 10)
        assert g.get_field(35, 47) == pytest.approx(math.pi / 4)

    def test_set_cell(self):
        g = GridField(100, 100, 10)
        g.set_cell(2, 3, 1.0)
        assert g.get_field(20, 30) == pytest.approx(1.0)
        g.set_cell(-1, 0, 2.0)
        g.set_cell(10, 0, 2.0)
        assert g.get_cell(-5, -5) == pytest.approx(math.pi / 4)
        assert g.get_cell(99, 0) == pytest.approx(math.pi / 4)

    def test_interpolates_between_cells(self):
        g = GridField(100, 100, 10, default_angle=0.0)
        g.set_cell(1, 0, math.pi / 2)
        assert g.get_field(5, 0) == pytest.approx(math.pi / 4)

    def test_clone_is_independent(self):
        g = GridField(100, 100, 10)
        copy = g.clone()
        copy.set_cell(0, 0, 0.0)
        assert g.get_cell(0, 0) == pytest.approx(math.pi / 4)

    def test_invalid_geometry(self):
        with pytest.raises(ValueError):
            GridField(100, 100, 0)
        with pytest.raises(ValueError):
            GridField(1, 1, 10)

    def test_curve_follows_field(self):
        g = GridField(100, 100, 10, default_angle=0.0)
        curve = g.get_curve(Vector2(0, 50), 5, 4)
        assert [p.x for p in curve] == pytest.approx([5, 10, 15, 20])
        assert all(p.y == pytest.approx(50) for p in curve)

    def test_advect_curve(self):
        g = GridField(100, 100, 10, default_angle=0.0)
        moved = g.advect_curve(Curve([Vector2(0, 0), Vector2(3, 7)]), 2, 5)
        assert [p.x for p in moved] == pytest.approx([10, 13])
        assert [p.y for p in moved] == pytest.approx([0, 7])

    def test_as_flow_field_function(self):
        g = GridField(100, 100, 10)
        g.set_cell(2, 3, 1.0)
        ff = FlowField(g.field_function()).initialize(100, 100, 10)
        assert ff.sample(Vector2(20, 30)).angle == pytest.approx(1.0)


def test_arrow_end():
    end = Arrow(Vector2(1, 1), math.pi / 2, 2).end
    assert end.x == pytest.approx(1)
    assert end.y == pytest.approx(3)


class TestPotentialField:

    @pytest.fixture
    def grid(self):
        return Grid(0.0, 10.0, 11, 0.0, 10.0, 11)

    def test_grid_validation(self):
        with pytest.raises(ValueError):
            Grid(0, 10, 1, 0, 10, 11)
        with pytest.raises(ValueError):
            Grid(10, 0, 11, 0, 10, 11)

    def test_grid_covering(self):
        x, y = Grid.covering(200, 100, 50).linspaces()
        assert len(x) == len(y) == 50
        assert (x[-1], y[-1]) == (200, 100)

    def test_free_stream_direction(self, grid):
        pf = PotentialField(grid)
        pf.add_free_stream(u_inf=1.0)
        assert pf.field_function()(Vector2(3.3, 4.1)) == pytest.approx(0)

        pf.add_free_stream(u_inf=-1.0, v_inf=2.0)
        assert pf.free_stream == (0.0, 2.0)
        assert pf.field_function()(Vector2(3.3, 4.1)) == pytest.approx(math.pi / 2)

    def test_grid_given_as_dict(self):
        pf = PotentialField(dict(x_start=0, x_end=10, no_points_x=11, y_start=0, y_end=10, no_points_y=11))
        assert pf.u.shape == (11, 11)

    def test_vortex_direction(self, grid):
        pf = PotentialField(grid)
        pf.add_vortex(1.0, 5.0, 5.0)
        assert pf.field_function()(Vector2(7, 5)) == pytest.approx(-math.pi / 2)

    def test_extrapolates_outside_grid(self, grid):
        pf = PotentialField(grid)
        pf.add_free_stream(v_inf=-1.0)
        assert pf.field_function()(Vector2(12, 5)) == pytest.approx(-math.pi / 2)

    def test_reset_reaccumulates(self, grid):
        pf = PotentialField(grid, core_radius=0.5)
        pf.add_vortex(2.0, 3.0, 4.0)
        pf.add_source_sink(-1.0, 6.0, 6.0)
        pf.add_doublet(0.5, 2.0, 8.0)
        pf.add_free_stream(0.3, 0.1)
        u, v, psi = pf.u.copy(), pf.v.copy(), pf.psi.copy()
        pf.reset()
        assert np.allclose(pf.u, u)
        assert np.allclose(pf.v, v)
        assert np.allclose(pf.psi, psi)

    def test_random_field(self, grid):
        pf = random_potential_field(grid, n_vort=3, n_source_sink=2, rng=np.random.default_rng(0))
        assert len(pf.vortices) == 3
        assert len(pf.sources_sinks) == 2
        assert np.all(np.isfinite(pf.u))

    def test_random_counts(self, grid):
        pf = random_potential_field(grid, core_radius=1.0, rng=np.random.default_rng(1))
        assert 1 <= len(pf.vortices) < 20
        assert 1 <= len(pf.sources_sinks) < 20

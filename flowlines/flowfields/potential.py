import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from ..geometry import Vector2

logger = logging.getLogger(__name__)

_EPS = 1e-12


@dataclass
class Grid:
    x_start: float
    x_end: float
    no_points_x: int
    y_start: float
    y_end: float
    no_points_y: int

    def __post_init__(self) -> None:
        if self.no_points_x < 2 or self.no_points_y < 2:
            raise ValueError("grid needs at least 2 points per axis")
        if not (self.x_end > self.x_start and self.y_end > self.y_start):
            raise ValueError("grid extents must be increasing")

    @classmethod
    def covering(cls, width: float, height: float, no_points: int = 100) -> "Grid":
        """Grid over the flow field domain [0, width] x [0, height]."""
        return cls(0.0, width, no_points, 0.0, height, no_points)

    def linspaces(self) -> Tuple[np.ndarray, np.ndarray]:
        x = np.linspace(self.x_start, self.x_end, self.no_points_x)
        y = np.linspace(self.y_start, self.y_end, self.no_points_y)
        return x, y


class PotentialField:
    """
    Potential flow (psi, u, v) on a Cartesian mesh, built by superposing
    sources/sinks, doublets, vortices and a uniform free stream.

    Parameters
    ----------
    grid : Grid or dict
        Mesh bounds and resolution.
    core_radius : float, optional
        Soft-core regularization length. If > 0, all singular contributions
        use r^2 := dx^2 + dy^2 + core_radius^2.
    """

    def __init__(self, grid, core_radius: float = 0.0):
        self.grid = grid if isinstance(grid, Grid) else Grid(**grid)
        self.x, self.y = self.grid.linspaces()
        self.X, self.Y = np.meshgrid(self.x, self.y, indexing="xy")

        self.sources_sinks: List[Tuple[float, float, float]] = []
        self.doublets: List[Tuple[float, float, float]] = []
        self.vortices: List[Tuple[float, float, float]] = []
        self.free_stream = (0.0, 0.0)

        self.psi = np.zeros_like(self.X, dtype=float)
        self.u = np.zeros_like(self.X, dtype=float)
        self.v = np.zeros_like(self.X, dtype=float)

        self.core_radius = float(core_radius)

    # ---- helpers ----
    def _r2_dx_dy(self, x0: float, y0: float):
        dx = self.X - x0
        dy = self.Y - y0
        r2 = dx * dx + dy * dy + self.core_radius * self.core_radius
        r2 = np.maximum(r2, _EPS)
        return r2, dx, dy

    def reset(self) -> None:
        """Zero the fields and re-accumulate all stored elements."""
        self.psi.fill(0.0)
        self.u.fill(0.0)
        self.v.fill(0.0)
        for (x0, y0, s) in self.sources_sinks:
            self._acc_source_sink(x0, y0, s)
        for (x0, y0, s) in self.doublets:
            self._acc_doublet(x0, y0, s)
        for (x0, y0, s) in self.vortices:
            self._acc_vortex(x0, y0, s)
        self._acc_free_stream(*self.free_stream)

    # ---- add elements ----
    def add_source_sink(self, strength: float, x: float, y: float) -> None:
        """Source for strength > 0, sink for strength < 0."""
        self.sources_sinks.append((x, y, strength))
        self._acc_source_sink(x, y, strength)

    def _acc_source_sink(self, x: float, y: float, s: float) -> None:
        r2, dx, dy = self._r2_dx_dy(x, y)
        self.psi += s / (2 * np.pi) * np.arctan2(dy, dx)
        self.u += s / (2 * np.pi) * dx / r2
        self.v += s / (2 * np.pi) * dy / r2

    def add_doublet(self, strength: float, x: float, y: float) -> None:
        self.doublets.append((x, y, strength))
        self._acc_doublet(x, y, strength)

    def _acc_doublet(self, x: float, y: float, s: float) -> None:
        r2, dx, dy = self._r2_dx_dy(x, y)
        self.psi += -s / (2 * np.pi) * dy / r2
        self.u += -s / (2 * np.pi) * ((dx * dx - dy * dy) / (r2 * r2))
        self.v += -s / (2 * np.pi) * (2 * dx * dy / (r2 * r2))

    def add_vortex(self, strength: float, x: float, y: float) -> None:
        """Vortex, positive strength turns clockwise in y-up coordinates."""
        self.vortices.append((x, y, strength))
        self._acc_vortex(x, y, strength)

    def _acc_vortex(self, x: float, y: float, g: float) -> None:
        r2, dx, dy = self._r2_dx_dy(x, y)
        self.psi += g / (4 * np.pi) * np.log(r2)
        self.u += g / (2 * np.pi) * dy / r2
        self.v += -g / (2 * np.pi) * dx / r2

    def add_free_stream(self, u_inf: float = 0.0, v_inf: float = 0.0) -> None:
        self.free_stream = (self.free_stream[0] + u_inf, self.free_stream[1] + v_inf)
        self._acc_free_stream(u_inf, v_inf)

    def _acc_free_stream(self, u_inf: float, v_inf: float) -> None:
        self.psi += u_inf * self.Y - v_inf * self.X
        self.u += u_inf
        self.v += v_inf

    # ---- field function ----
    def build_interpolators(self):
        """RegularGridInterpolators for u and v, queried as (y, x)."""
        u_i = RegularGridInterpolator((self.y, self.x), self.u, bounds_error=False, fill_value=None)
        v_i = RegularGridInterpolator((self.y, self.x), self.v, bounds_error=False, fill_value=None)
        return u_i, v_i

    def field_function(self) -> Callable[[Vector2], float]:
        """
        Direction of the velocity as a position -> angle function.

        The interpolators are built once, later changes to the field need a
        new call.
        """
        u_i, v_i = self.build_interpolators()

        def angle_at(position: Vector2) -> float:
            point = [position.y, position.x]
            return float(np.arctan2(v_i(point).item(), u_i(point).item()))

        return angle_at


def random_potential_field(
    grid,
    n_vort: int = -1,
    n_source_sink: int = -1,
    v_strength: float = 50.0,
    ss_strength: float = 5.0,
    core_radius: float = 0.0,
    rng: Optional[np.random.Generator] = None,
) -> PotentialField:
    """
    A potential field with randomly placed elements. Negative counts pick
    a random count between 1 and 19.
    """
    if rng is None:
        rng = np.random.default_rng()
    pf = PotentialField(grid, core_radius=core_radius)
    g = pf.grid

    if n_vort < 0:
        n_vort = int(rng.integers(1, 20))
    if n_source_sink < 0:
        n_source_sink = int(rng.integers(1, 20))

    for _ in range(n_vort):
        x, y = rng.uniform(g.x_start, g.x_end), rng.uniform(g.y_start, g.y_end)
        pf.add_vortex(rng.uniform(-v_strength, v_strength), x, y)

    for _ in range(n_source_sink):
        x, y = rng.uniform(g.x_start, g.x_end), rng.uniform(g.y_start, g.y_end)
        pf.add_source_sink(rng.uniform(-ss_strength, ss_strength), x, y)

    logger.debug("Random potential field with %d vortices and %d sources/sinks", n_vort, n_source_sink)
    return pf

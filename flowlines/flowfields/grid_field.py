import math
from typing import Callable

from ..geometry import Curve, Vector2

_TAU = 2 * math.pi


def _sign(x: float) -> float:
    return (x > 0) - (x < 0)


def short_angle_dist(a0: float, a1: float) -> float:
    """Signed difference a1 - a0 taken the short way around the circle."""
    da = _sign(a1 - a0) * (abs(a1 - a0) % _TAU)
    return _sign(a1 - a0) * ((2 * abs(da)) % _TAU) - da


def angle_lerp(a0: float, a1: float, t: float) -> float:
    return a0 + short_angle_dist(a0, a1) * t


class Arrow:
    """A directed segment of `length` starting at origin."""

    def __init__(self, origin: Vector2, angle: float = 0.0, length: float = 10.0):
        self.origin = origin
        self.angle = angle
        self.length = length

    @property
    def end(self) -> Vector2:
        return self.origin.add(Vector2(1, 0).rotate(self.angle).scale(self.length))


class GridField:
    """
    A direction field stored as one angle per grid cell.

    Reads between cell corners interpolate the angles bilinearly along the
    shortest arc.
    """

    def __init__(self, width: float, height: float, cell_size: float, default_angle: float = math.pi * 0.25):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.nx = round(width / cell_size)
        self.ny = round(height / cell_size)
        if self.nx <= 0 or self.ny <= 0:
            raise ValueError(f"grid of {width}x{height} with cell size {cell_size} has no cells")
        self.grid = [[default_angle] * self.ny for _ in range(self.nx)]

    def clone(self) -> "GridField":
        copy = GridField(self.width, self.height, self.cell_size)
        copy.grid = [list(column) for column in self.grid]
        return copy

    def get_cell(self, ix: int, iy: int) -> float:
        ix = min(self.nx - 1, max(0, ix))
        iy = min(self.ny - 1, max(0, iy))
        return self.grid[ix][iy]

    def set_cell(self, ix: int, iy: int, angle: float) -> None:
        # writes outside the grid are ignored
        if 0 <= ix < self.nx and 0 <= iy < self.ny:
            self.grid[ix][iy] = angle

    def get_cell_index(self, x: float, y: float):
        return math.floor(x / self.cell_size), math.floor(y / self.cell_size)

    def get_field(self, x: float, y: float) -> float:
        ix, iy = self.get_cell_index(x, y)
        alphax = (x % self.cell_size) / self.cell_size
        alphay = (y % self.cell_size) / self.cell_size
        return angle_lerp(
            angle_lerp(self.get_cell(ix, iy), self.get_cell(ix + 1, iy), alphax),
            angle_lerp(self.get_cell(ix, iy + 1), self.get_cell(ix + 1, iy + 1), alphax),
            alphay,
        )

    def field_function(self) -> Callable[[Vector2], float]:
        """The field as a position -> angle function for FlowField."""
        return lambda position: self.get_field(position.x, position.y)

    def get_curve(self, origin: Vector2, step_length: float, num_steps: int) -> Curve:
        """Follows the field from origin for num_steps fixed-length steps."""
        curve = Curve()
        current = origin
        for _ in range(num_steps):
            current = Arrow(current, self.get_field(current.x, current.y), step_length).end
            curve.append(current)
        return curve

    def advect_curve(self, curve: Curve, step_length: float, num_steps: int) -> Curve:
        """Moves every vertex of curve num_steps steps along the field."""
        moved = Curve()
        for p in curve:
            for _ in range(num_steps):
                p = Arrow(p, self.get_field(p.x, p.y), step_length).end
            moved.append(p)
        return moved

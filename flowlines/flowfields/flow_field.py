import logging
import math
from typing import Callable, Iterable, List, Optional, Tuple

from ..geometry import Vector2
from .sample import FlowFieldSample

logger = logging.getLogger(__name__)

FieldFunction = Callable[[Vector2], float]


def _zero_field(position: Vector2) -> float:
    return 0.0


class FlowField:
    """
    Sample store over a rectangular domain with a uniform grid index.

    Samples live in one append-only list, their index is their identity.
    Every grid cell holds the indices of the samples whose position falls
    into it, so proximity queries only look at a few cells.

    Parameters
    ----------
    field_function: callable
        Maps a position to the field direction there [rad].
    """

    def __init__(self, field_function: Optional[FieldFunction] = None):
        self.field_function: FieldFunction = field_function or _zero_field
        self.width = 0.0
        self.height = 0.0
        self.cell_size = 1.0
        self.nx = 0
        self.ny = 0
        self.samples: List[FlowFieldSample] = []
        self.cells: List[List[List[int]]] = []

    def __len__(self):
        return len(self.samples)

    def set_field_function(self, field_function: FieldFunction) -> "FlowField":
        self.field_function = field_function
        return self

    def initialize(self, width: float, height: float, cell_size: float) -> "FlowField":
        """Sets the domain and grid geometry and drops all samples."""
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        if width < 0 or height < 0:
            raise ValueError(f"domain size must be non-negative, got {width} x {height}")
        self.width = float(width)
        self.height = float(height)
        self.cell_size = float(cell_size)
        self.nx = math.ceil(width / cell_size)
        self.ny = math.ceil(height / cell_size)
        logger.debug(
            "Initialized %gx%g flow field with %dx%d cells of size %g",
            self.width, self.height, self.nx, self.ny, self.cell_size,
        )
        return self.clear()

    def clear(self) -> "FlowField":
        """Drops all samples, keeps the geometry."""
        self.samples = []
        self.cells = [[[] for _ in range(self.ny)] for _ in range(self.nx)]
        return self

    def clone(self) -> "FlowField":
        copy = FlowField(self.field_function)
        copy.width, copy.height, copy.cell_size = self.width, self.height, self.cell_size
        copy.nx, copy.ny = self.nx, self.ny
        copy.samples = list(self.samples)
        copy.cells = [[list(cell) for cell in column] for column in self.cells]
        return copy

    def get_is_position_in_bounds(self, position: Vector2) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def sample(self, position: Vector2) -> FlowFieldSample:
        """Evaluates the field at position. Nothing is stored."""
        angle = self.field_function(position)
        if not math.isfinite(angle):
            raise ValueError(f"field function returned {angle} at ({position.x}, {position.y})")
        return FlowFieldSample(position, angle)

    def add_samples(self, samples: Iterable[FlowFieldSample]) -> "FlowField":
        for sample in samples:
            self.add_sample(sample)
        return self

    def add_sample(self, sample: FlowFieldSample) -> "FlowField":
        ix, iy = self._cell_index_in_grid(sample)
        self.samples.append(sample)
        self.cells[ix][iy].append(len(self.samples) - 1)
        return self

    def get_line_samples(self, line_id: int) -> List[FlowFieldSample]:
        return [s for s in self.samples if s.line_id == line_id]

    # ---- proximity queries ----
    def get_containing_cell_index(self, position: Vector2) -> Tuple[int, int]:
        return (
            math.floor(position.x / self.cell_size),
            math.floor(position.y / self.cell_size),
        )

    def _cell_index_in_grid(self, position: Vector2) -> Tuple[int, int]:
        # negative indices would silently wrap around the cell lists
        ix, iy = self.get_containing_cell_index(position)
        if not (0 <= ix < self.nx and 0 <= iy < self.ny):
            raise ValueError(
                f"position ({position.x}, {position.y}) lies outside the "
                f"{self.width}x{self.height} grid"
            )
        return ix, iy

    def get_containing_cell(self, position: Vector2) -> List[int]:
        ix, iy = self._cell_index_in_grid(position)
        return self.cells[ix][iy]

    def get_samples_in_cell(self, position: Vector2) -> List[FlowFieldSample]:
        return [self.samples[i] for i in self.get_containing_cell(position)]

    def get_neighboring_samples(self, position: Vector2, radius: int = 1) -> List[FlowFieldSample]:
        """
        Samples of every cell within `radius` cells (Chebyshev distance) of
        the cell containing position. This over-approximates a circle.
        """
        x, y = self.get_containing_cell_index(position)
        samples = []
        for i in range(max(x - radius, 0), min(x + radius, self.nx - 1) + 1):
            column = self.cells[i]
            for j in range(max(y - radius, 0), min(y + radius, self.ny - 1) + 1):
                samples.extend(self.samples[k] for k in column[j])
        return samples

    def get_closest_sample(self, position: Vector2, radius: int = 1) -> Optional[FlowFieldSample]:
        """Closest sample among the neighbouring cells, or None."""
        closest = None
        closest_distance = math.inf
        for sample in self.get_neighboring_samples(position, radius):
            distance = sample.dist(position)
            if distance < closest_distance:
                closest = sample
                closest_distance = distance
        return closest

    def get_closest_sample_within_radius(
        self, position: Vector2, radius: float
    ) -> Optional[FlowFieldSample]:
        """Closest sample strictly closer than radius, or None."""
        # widen the cell search to cover the radius, then filter exactly
        cell_radius = math.ceil(radius / self.cell_size)
        closest = self.get_closest_sample(position, cell_radius)
        if closest is not None and closest.dist(position) < radius:
            return closest
        return None

import math

from ..geometry import Vector2

DEFAULT_SAMPLE_LENGTH = 10.0
DEFAULT_SAMPLE_WIDTH = 2.0


class FlowFieldSample(Vector2):
    """
    A point of a streamline together with the field direction there.

    Parameters
    ----------
    position: Vector2
        Where the field was sampled.
    angle: float
        Field direction at position [rad].
    length: float
        Step length used to reach the next sample of the line.
    width: float
        Thickness of the line at this sample.
    """

    __slots__ = ("angle", "length", "width", "line_id")

    def __init__(
        self,
        position: Vector2,
        angle: float,
        length: float = DEFAULT_SAMPLE_LENGTH,
        width: float = DEFAULT_SAMPLE_WIDTH,
        line_id: int = 0,
    ):
        super().__init__(position.x, position.y)
        self.angle = float(angle)
        self.length = float(length)
        self.width = float(width)
        self.line_id = line_id

    def __repr__(self):
        return (
            f"FlowFieldSample(({self.x!r}, {self.y!r}), angle={self.angle!r}, "
            f"length={self.length!r}, width={self.width!r}, line_id={self.line_id!r})"
        )

    @property
    def position(self) -> Vector2:
        return Vector2(self.x, self.y)

    def set_line_id(self, line_id: int) -> "FlowFieldSample":
        self.line_id = line_id
        return self

    def set_angle(self, angle: float) -> "FlowFieldSample":
        self.angle = float(angle)
        return self

    def set_length(self, length: float) -> "FlowFieldSample":
        self.length = float(length)
        return self

    def set_width(self, width: float) -> "FlowFieldSample":
        self.width = float(width)
        return self

    def get_vector(self) -> Vector2:
        """Step of `length` along `angle`."""
        return Vector2(self.length * math.cos(self.angle), self.length * math.sin(self.angle))

    def get_end_point(self) -> Vector2:
        return self.add(self.get_vector())

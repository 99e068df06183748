from .sample import FlowFieldSample, DEFAULT_SAMPLE_LENGTH, DEFAULT_SAMPLE_WIDTH
from .flow_field import FlowField
from .sampling import (
    SamplerConfig,
    SamplingResult,
    StopReason,
    SeedResult,
    SeedProbe,
    CommittedLine,
    StreamlineSampler,
    bounds_check,
    get_next_starting_position,
    sample_flow_field_line,
    iter_flow_field_lines,
    sample_flow_field,
    sample_grid,
)
from .fields import constant_field, radial_field
from .grid_field import GridField, Arrow, angle_lerp
from .potential import Grid, PotentialField, random_potential_field
from .frames import rectangle_frame, circle_frame, polygon_frame
from .styling import LinesConfig, line_step_length, line_step_width, line_step_color

__all__ = [
    "FlowFieldSample", "DEFAULT_SAMPLE_LENGTH", "DEFAULT_SAMPLE_WIDTH",
    "FlowField",
    "SamplerConfig", "SamplingResult", "StopReason", "SeedResult", "SeedProbe",
    "CommittedLine", "StreamlineSampler",
    "bounds_check", "get_next_starting_position", "sample_flow_field_line", "iter_flow_field_lines",
    "sample_flow_field", "sample_grid",
    "constant_field", "radial_field",
    "GridField", "Arrow", "angle_lerp",
    "Grid", "PotentialField", "random_potential_field",
    "rectangle_frame", "circle_frame", "polygon_frame",
    "LinesConfig", "line_step_length", "line_step_width", "line_step_color",
]

from dataclasses import dataclass
from functools import partial
from typing import Sequence

from .flow_field import FlowField
from .sample import FlowFieldSample
from .sampling import SamplerConfig

# number of distinct widths handed out across lines
SIZES = 100


@dataclass
class LinesConfig:
    """Look of the generated lines, from which the sampler is configured."""
    max_count: int = 250
    min_thickness: float = 2.0
    max_thickness: float = 20.0
    segment_length: float = 5.0
    distance_factor: float = 1.0
    palette: Sequence[str] = ("#FF0000", "#00FF00", "#0000FF")

    def __post_init__(self) -> None:
        if self.max_count < 0:
            raise ValueError("max_count must be non-negative")
        if not 0 < self.min_thickness <= self.max_thickness:
            raise ValueError("thickness range must satisfy 0 < min_thickness <= max_thickness")
        if self.segment_length <= 0:
            raise ValueError("segment_length must be positive")
        if self.distance_factor <= 0:
            raise ValueError("distance_factor must be positive")
        if not self.palette:
            raise ValueError("palette must hold at least one color")

    @property
    def cell_size(self) -> float:
        return self.max_thickness

    def sampler_config(self, **kwargs) -> SamplerConfig:
        """SamplerConfig with spacing and step callbacks derived from this config."""
        return SamplerConfig(
            max_line_count=self.max_count,
            d_sep=self.max_thickness,
            d_test=self.max_thickness * self.distance_factor,
            get_sample_step_length=partial(line_step_length, config=self),
            get_sample_step_width=partial(line_step_width, config=self),
            get_sample_step_color=partial(line_step_color, config=self),
            **kwargs,
        )

    def initialize(self, flow_field: FlowField, width: float, height: float) -> FlowField:
        return flow_field.initialize(width, height, self.cell_size)


def line_step_length(sample: FlowFieldSample, config: LinesConfig) -> float:
    return config.segment_length


def line_step_width(sample: FlowFieldSample, config: LinesConfig) -> float:
    """Width picked per line from a hash of its id, constant along the line."""
    size_ratio = (sample.line_id + 17) * 19 % SIZES / SIZES
    return config.min_thickness + (config.max_thickness - config.min_thickness) * size_ratio


def line_step_color(sample: FlowFieldSample, config: LinesConfig) -> str:
    return config.palette[sample.line_id % len(config.palette)]

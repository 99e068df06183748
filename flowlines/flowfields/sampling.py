"""
Evenly spaced streamline placement.

Lines are seeded next to already placed samples and grown forward and
backward along the field until they leave the domain, come closer than
d_test to another line or run out of steps.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional

import numpy as np
from tqdm import tqdm

from ..geometry import Curve, Vector2
from .flow_field import FlowField
from .sample import FlowFieldSample

logger = logging.getLogger(__name__)

SampleFunction = Callable[[FlowFieldSample], float]
BoundsFunction = Callable[[Vector2], bool]

MAX_LINE_STEPS = 200
# random positions tried for the first seed when the center is outside the frame
MAX_FIRST_SEED_ATTEMPTS = 100


def default_step_length(sample: FlowFieldSample) -> float:
    return sample.length


def default_step_width(sample: FlowFieldSample) -> float:
    return sample.width


@dataclass
class SamplerConfig:
    """
    Parameters of a sampling run.

    get_sample_step_color is only read by renderers, placement ignores it.
    get_is_position_in_bounds narrows the flow field's rectangle check when
    set, e.g. with a circular frame. random_seed only affects where the very
    first seed is placed.
    """
    max_line_count: int = 10
    d_sep: float = 10.0
    d_test: float = 5.0
    get_sample_step_length: SampleFunction = default_step_length
    get_sample_step_width: SampleFunction = default_step_width
    get_sample_step_color: Optional[Callable[[FlowFieldSample], str]] = None
    get_is_position_in_bounds: Optional[BoundsFunction] = None
    max_steps: int = MAX_LINE_STEPS
    seed_jitter: float = 20.0
    random_seed: Optional[int] = None
    progress: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        if self.max_line_count < 0:
            raise ValueError(f"max_line_count must be non-negative, got {self.max_line_count}")
        if not self.d_sep > 0:
            raise ValueError(f"d_sep must be positive, got {self.d_sep}")
        if not self.d_test > 0:
            raise ValueError(f"d_test must be positive, got {self.d_test}")
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")
        if self.seed_jitter < 0:
            raise ValueError(f"seed_jitter must be non-negative, got {self.seed_jitter}")


class StopReason(Enum):
    MAX_LINES = "max_lines"
    NO_SEED = "no_seed"


@dataclass
class SeedResult:
    success: bool
    position: Optional[Vector2]
    current_sample_index: int
    check_direction: int = 1


@dataclass
class SeedProbe:
    """A tested seed candidate, recorded in debug mode."""
    origin: Vector2
    position: Vector2
    accepted: bool


@dataclass
class CommittedLine:
    line_id: int
    seed: Vector2
    forward: List[FlowFieldSample]
    backward: List[FlowFieldSample]

    @property
    def samples(self) -> List[FlowFieldSample]:
        """Samples in insertion order: forward pass, then backward pass."""
        return self.forward + self.backward

    @property
    def curve(self) -> Curve:
        """The line as a polyline from its backward end to its forward end."""
        return Curve(list(reversed(self.backward)) + self.forward)


@dataclass
class SamplingResult:
    line_count: int
    sample_count: int
    stop_reason: StopReason
    lines: List[CommittedLine] = field(default_factory=list)
    probes: List[SeedProbe] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """True when the line budget was used up before seeds ran out."""
        return self.stop_reason is StopReason.MAX_LINES

    @property
    def curves(self) -> List[Curve]:
        return [line.curve for line in self.lines]


def bounds_check(flow_field: FlowField, get_is_position_in_bounds: Optional[BoundsFunction] = None) -> BoundsFunction:
    """
    The flow field's rectangle check, narrowed by an optional frame.

    A frame reaching past the canvas never lets a position leave the grid.
    """
    if get_is_position_in_bounds is None:
        return flow_field.get_is_position_in_bounds
    return lambda position: (
        flow_field.get_is_position_in_bounds(position) and get_is_position_in_bounds(position)
    )


def get_next_starting_position(
    flow_field: FlowField,
    d_sep: float,
    d_test: float,
    current_sample_index: int = 0,
    check_direction: int = 1,
    get_is_position_in_bounds: Optional[BoundsFunction] = None,
    probes: Optional[List[SeedProbe]] = None,
) -> SeedResult:
    """
    Scans the placed samples from current_sample_index for a free seed.

    Each sample is probed at d_sep + sample.width along the normal of its
    direction, the side alternating between probes. The returned index and
    side let the next search resume at the sample that just succeeded,
    probing its other side.
    """
    in_bounds = bounds_check(flow_field, get_is_position_in_bounds)
    samples = flow_field.samples

    while current_sample_index < len(samples):
        sample = samples[current_sample_index]
        angle = sample.angle + math.pi / 2 * check_direction
        distance = d_sep + sample.width
        position = Vector2(
            sample.x + math.cos(angle) * distance,
            sample.y + math.sin(angle) * distance,
        )

        current_sample_index += 1
        check_direction *= -1

        accepted = (
            in_bounds(position)
            and flow_field.get_closest_sample_within_radius(position, d_test) is None
        )
        if probes is not None:
            probes.append(SeedProbe(sample.position, position, accepted))
            logger.debug("Seed probe %d at (%.3f, %.3f): %s",
                         current_sample_index - 1, position.x, position.y,
                         "accepted" if accepted else "rejected")
        if accepted:
            return SeedResult(True, position, current_sample_index - 1, check_direction)

    return SeedResult(False, None, current_sample_index, check_direction)


def sample_flow_field_line(
    flow_field: FlowField,
    line_id: int,
    start_position: Vector2,
    config: SamplerConfig,
    angle_offset: float = 0.0,
    initial_offset: Optional[Vector2] = None,
) -> List[FlowFieldSample]:
    """
    Grows one pass of a streamline from start_position + initial_offset.

    The returned samples are not added to the flow field, so the pass never
    stops on its own samples.
    """
    in_bounds = bounds_check(flow_field, config.get_is_position_in_bounds)
    position = start_position if initial_offset is None else start_position.add(initial_offset)
    samples: List[FlowFieldSample] = []

    attempts = 0
    while (
        attempts < config.max_steps
        and in_bounds(position)
        and flow_field.get_closest_sample_within_radius(position, config.d_test) is None
    ):
        attempts += 1
        sample = flow_field.sample(position).set_line_id(line_id)

        width = config.get_sample_step_width(sample)
        length = config.get_sample_step_length(sample)
        if not (math.isfinite(length) and length > 0):
            raise ValueError(f"step length must be positive and finite, got {length}")
        if not (math.isfinite(width) and width > 0):
            raise ValueError(f"step width must be positive and finite, got {width}")
        sample.set_length(length).set_width(width)

        angle = sample.angle + angle_offset
        position = Vector2(
            position.x + math.cos(angle) * sample.length,
            position.y + math.sin(angle) * sample.length,
        )
        samples.append(sample)

    return samples


class StreamlineSampler:
    """
    Places streamlines into a flow field one at a time.

    Iterating the sampler seeds, grows and commits lines lazily, yielding a
    CommittedLine after each commit; a caller may stop between lines and keep
    the partial result. run() drives the iteration to the end.
    """

    def __init__(self, flow_field: FlowField, config: Optional[SamplerConfig] = None):
        self.flow_field = flow_field
        self.config = config or SamplerConfig()
        self.rng = np.random.default_rng(self.config.random_seed)
        self.line_index = 0
        self.stop_reason: Optional[StopReason] = None
        self.lines: List[CommittedLine] = []
        self.probes: List[SeedProbe] = []

    def _first_seed(self) -> SeedResult:
        # an empty field starts at the (jittered) domain center
        if self.flow_field.samples:
            return self._next_seed(0, 1)

        ff = self.flow_field
        in_bounds = bounds_check(ff, self.config.get_is_position_in_bounds)
        center = Vector2(ff.width / 2, ff.height / 2)
        jx, jy = self.rng.uniform(0.0, self.config.seed_jitter, size=2)
        candidates = [center.add(Vector2(jx, jy)), center]
        # a frame that excludes the center, e.g. a ring, gets random positions
        for x, y in self.rng.uniform((0.0, 0.0), (ff.width, ff.height), size=(MAX_FIRST_SEED_ATTEMPTS, 2)):
            candidates.append(Vector2(x, y))

        for position in candidates:
            if in_bounds(position):
                return SeedResult(True, position, 0, 1)

        logger.info("No position inside the frame found for the first seed")
        return SeedResult(False, None, 0, 1)

    def _next_seed(self, index: int, check_direction: int) -> SeedResult:
        c = self.config
        return get_next_starting_position(
            self.flow_field,
            c.d_sep,
            c.d_test,
            index,
            check_direction,
            c.get_is_position_in_bounds,
            self.probes if c.debug else None,
        )

    def _grow_line(self, line_id: int, seed: Vector2) -> CommittedLine:
        forward = sample_flow_field_line(self.flow_field, line_id, seed, self.config)
        # the backward pass starts one step behind the seed so the seed
        # itself is not sampled twice
        backward = []
        if forward:
            backward = sample_flow_field_line(
                self.flow_field,
                line_id,
                seed,
                self.config,
                angle_offset=math.pi,
                initial_offset=forward[0].get_vector().rotate(math.pi),
            )
        return CommittedLine(line_id, seed, forward, backward)

    def __iter__(self) -> Iterator[CommittedLine]:
        max_lines = self.config.max_line_count
        if max_lines == 0:
            self.stop_reason = StopReason.MAX_LINES
            return

        seed = self._first_seed()
        while seed.success:
            line = self._grow_line(self.line_index, seed.position)
            self.flow_field.add_samples(line.forward)
            self.flow_field.add_samples(line.backward)
            self.lines.append(line)
            self.line_index += 1
            logger.debug("Committed line %d with %d samples",
                         line.line_id, len(line.forward) + len(line.backward))
            yield line

            if self.line_index >= max_lines:
                self.stop_reason = StopReason.MAX_LINES
                return
            seed = self._next_seed(seed.current_sample_index, seed.check_direction)

        self.stop_reason = StopReason.NO_SEED
        logger.info("No free seed position left after %d lines (%d samples scanned)",
                    self.line_index, seed.current_sample_index)

    def run(self) -> SamplingResult:
        iterator = iter(self)
        if self.config.progress:
            iterator = tqdm(iterator, total=self.config.max_line_count, desc="Sampling", unit="line")
        for _ in iterator:
            pass

        result = SamplingResult(
            line_count=len(self.lines),
            sample_count=sum(len(line.forward) + len(line.backward) for line in self.lines),
            stop_reason=self.stop_reason,
            lines=list(self.lines),
            probes=list(self.probes),
        )
        logger.info("Placed %d lines with %d samples (%s)",
                    result.line_count, result.sample_count, result.stop_reason.value)
        return result


def iter_flow_field_lines(flow_field: FlowField, config: Optional[SamplerConfig] = None) -> Iterator[CommittedLine]:
    """Yields each line right after it was committed to flow_field."""
    yield from StreamlineSampler(flow_field, config)


def sample_flow_field(flow_field: FlowField, config: Optional[SamplerConfig] = None, **kwargs) -> SamplingResult:
    """
    Fills flow_field with evenly spaced streamlines.

    Keyword arguments build a SamplerConfig when config is not given.
    Running out of seed positions is the normal way a run ends; the result
    says which limit stopped it.
    """
    if config is None:
        config = SamplerConfig(**kwargs)
    elif kwargs:
        raise TypeError("pass either a SamplerConfig or keyword arguments, not both")
    return StreamlineSampler(flow_field, config).run()


def sample_grid(flow_field: FlowField, length: float, width: float) -> FlowField:
    """
    Places one sample on every interior grid node, for inspecting the field
    without running the sampler.
    """
    for x in range(1, flow_field.nx - 1):
        for y in range(1, flow_field.ny - 1):
            position = Vector2(x * flow_field.cell_size, y * flow_field.cell_size)
            flow_field.add_sample(flow_field.sample(position).set_length(length).set_width(width))
    return flow_field

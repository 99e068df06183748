from .geometry import Curve, Matrix3x2, MBR, Ray2, Vector2, vec2
from .flowfields import (
    FlowField,
    FlowFieldSample,
    LinesConfig,
    SamplerConfig,
    SamplingResult,
    StopReason,
    sample_flow_field,
)
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    "Curve", "Matrix3x2", "MBR", "Ray2", "Vector2", "vec2",
    "FlowField", "FlowFieldSample", "LinesConfig", "SamplerConfig",
    "SamplingResult", "StopReason", "sample_flow_field",
    "setup_logging",
]

from .vector2 import Vector2, vec2, det3
from .matrix import Matrix3x2
from .mbr import MBR
from .ray2 import Ray2
from .binary_heap import BinaryHeap
from .catmull_rom import CatmullRom
from .curve import Curve, arc_length, douglas_peucker_rank

__all__ = [
    "Vector2",
    "vec2",
    "det3",
    "Matrix3x2",
    "MBR",
    "Ray2",
    "BinaryHeap",
    "CatmullRom",
    "Curve",
    "arc_length",
    "douglas_peucker_rank",
]

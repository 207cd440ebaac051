"""Core modules for wire3d."""

from .config import World
from .point import Point
from .point_list import PointList
from .segment import DanglingSegmentError, Segment
from .shape import Shape

__all__ = ["DanglingSegmentError", "Point", "PointList", "Segment", "Shape", "World"]

"""wire3d - Wireframe 3D shapes with perspective projection.

Build shapes from points and segments, transform them, project them with a
simple pinhole camera and stroke them onto any drawing surface.
"""

__version__ = "0.1.0"

from .core.config import World
from .core.point import Point
from .core.point_list import PointList
from .core.segment import DanglingSegmentError, Segment
from .core.shape import Shape
from .io import ShapeFormatError, load_any, load_shape, save_shape
from .primitives import get_primitive, list_primitives
from .render.surface import RecordingSurface, Surface
from .scene import Scene, Transform3D

__all__ = [
    "DanglingSegmentError",
    "Point",
    "PointList",
    "RecordingSurface",
    "Scene",
    "Segment",
    "Shape",
    "ShapeFormatError",
    "Surface",
    "Transform3D",
    "World",
    "get_primitive",
    "list_primitives",
    "load_any",
    "load_shape",
    "save_shape",
]

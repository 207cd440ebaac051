"""Reading and writing shapes."""

from .cloud import load_xyz, parse_xyz
from .files import load_any
from .mesh import MeshLoader, load_mesh_shape
from .serialize import ShapeFormatError, dumps, load_shape, loads, save_shape

__all__ = [
    "MeshLoader",
    "ShapeFormatError",
    "dumps",
    "load_any",
    "load_mesh_shape",
    "load_shape",
    "load_xyz",
    "loads",
    "parse_xyz",
    "save_shape",
]

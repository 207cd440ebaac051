"""Scene management for arranging several shapes.

This module provides data structures for placing shape files and
primitives in one scene, each with its own position, rotation and scale.
"""

from .transform import Transform3D
from .scene import Scene, ShapePlacement

__all__ = [
    "Transform3D",
    "Scene",
    "ShapePlacement",
]

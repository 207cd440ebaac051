"""Procedural wireframe primitives."""

from .shapes import (
    PRIMITIVES,
    box,
    build_primitive,
    circle,
    cone,
    cylinder,
    get_primitive,
    grid_plane,
    list_primitives,
    pyramid,
    random_inner_box,
    random_inner_sphere,
    random_surface_box,
    random_surface_sphere,
    sphere,
    spring,
    torus,
    torus_knot,
)

__all__ = [
    "PRIMITIVES",
    "box",
    "build_primitive",
    "circle",
    "cone",
    "cylinder",
    "get_primitive",
    "grid_plane",
    "list_primitives",
    "pyramid",
    "random_inner_box",
    "random_inner_sphere",
    "random_surface_box",
    "random_surface_sphere",
    "sphere",
    "spring",
    "torus",
    "torus_knot",
]

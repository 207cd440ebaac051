"""Procedural shape generators.

Every generator builds a Shape using only the public construction API
(points plus segments by index). Shapes are centered on the origin unless
stated otherwise; the y-axis is the "up" axis of cylinders, cones and
springs.
"""

from __future__ import annotations

import inspect
import math
from typing import Any, Callable

import numpy as np

from ..core import rand
from ..core.point_list import PointList
from ..core.shape import Shape

TAU = 2 * math.pi


def _circle_points(radius: float, res: int) -> PointList:
    """``res`` points on a circle in the xz plane."""
    points = PointList()
    for i in range(res):
        t = TAU * i / res
        points.add_xyz(math.cos(t) * radius, 0.0, math.sin(t) * radius)
    return points


def _add_ring(shape: Shape, ring: PointList, connect: bool) -> None:
    """Append ``ring`` to ``shape``, closing it into a loop when ``connect`` is set."""
    start = len(shape.points)
    shape.points.extend(ring)
    if connect:
        shape.connect_sequential(start=start, closed=True)


def _connect_rings(shape: Shape, rings: int, res: int, wrap: bool = False) -> None:
    """Join point ``j`` of each ring to point ``j`` of the next one."""
    for i in range(rings - 1):
        for j in range(res):
            shape.add_segment_by_index(i * res + j, (i + 1) * res + j)
    if wrap:
        last = rings - 1
        for j in range(res):
            shape.add_segment_by_index(last * res + j, j)


def box(w: float, h: float, d: float) -> Shape:
    """Box outline: 8 corners, 12 edges."""
    shape = Shape()
    for x, y, z in [
        (-1, -1, -1), (-1, 1, -1), (1, 1, -1), (1, -1, -1),
        (-1, -1, 1), (-1, 1, 1), (1, 1, 1), (1, -1, 1),
    ]:
        shape.add_xyz(x, y, z)
    for i, j in [
        (0, 1), (1, 2), (2, 3), (3, 0),  # back face
        (4, 5), (5, 6), (6, 7), (7, 4),  # front face
        (0, 4), (1, 5), (2, 6), (3, 7),  # edges between them
    ]:
        shape.add_segment_by_index(i, j)
    shape.scale(w / 2, h / 2, d / 2)
    return shape


def circle(radius: float, res: int = 32) -> Shape:
    """Closed circle in the xz plane."""
    shape = Shape()
    _add_ring(shape, _circle_points(radius, res), connect=True)
    return shape


def cone(
    height: float,
    radius0: float,
    radius1: float,
    slices: int = 2,
    res: int = 32,
    show_slices: bool = True,
    show_long: bool = True,
) -> Shape:
    """Cone made of circular slices, radius going from ``radius0`` (top) to ``radius1``.

    Args:
        height: Distance between the first and last slice
        radius0: Radius of the first slice (at y = -height/2)
        radius1: Radius of the last slice (at y = height/2)
        slices: Number of circular slices (at least 2)
        res: Points per slice
        show_slices: Draw the circles
        show_long: Draw the lines running along the cone
    """
    if slices < 2:
        raise ValueError(f"A cone needs at least 2 slices, got {slices}")
    shape = Shape()
    for i in range(slices):
        t = i / (slices - 1)
        ring = _circle_points(radius0 + (radius1 - radius0) * t, res)
        ring.translate_y(t * height - height / 2)
        _add_ring(shape, ring, show_slices)
    if show_long:
        _connect_rings(shape, slices, res)
    return shape


def cylinder(
    height: float,
    radius: float,
    slices: int = 2,
    res: int = 32,
    show_slices: bool = True,
    show_long: bool = True,
) -> Shape:
    """Cylinder made of circular slices."""
    return cone(height, radius, radius, slices, res, show_slices, show_long)


def pyramid(height: float, base_radius: float, sides: int = 4) -> Shape:
    """Pyramid with a regular polygon base, apex at y = -height/2."""
    return cone(height, 0.0, base_radius, 2, sides, True, True)


def grid_plane(w: float, d: float, rows: int = 10, cols: int = 10) -> Shape:
    """Flat ``w x d`` grid on the xz plane."""
    shape = Shape()
    for z in range(cols + 1):
        for x in range(rows + 1):
            shape.add_xyz(float(x), 0.0, float(z))
    for z in range(cols + 1):
        for x in range(rows + 1):
            index = x + z * (rows + 1)
            if x < rows:
                shape.add_segment_by_index(index, index + 1)
            if z < cols:
                shape.add_segment_by_index(index, index + rows + 1)
    shape.scale(w / rows, 1.0, d / cols)
    shape.translate(-w / 2, 0.0, -d / 2)
    return shape


def sphere(
    radius: float,
    long: int = 16,
    lat: int = 32,
    show_long: bool = True,
    show_lat: bool = True,
) -> Shape:
    """Sphere of ``long + 1`` latitude rings with ``lat`` points each.

    Args:
        radius: Sphere radius
        long: Number of bands between the poles
        lat: Points per ring
        show_long: Draw meridians (pole to pole)
        show_lat: Draw the latitude rings
    """
    shape = Shape()
    for i in range(long + 1):
        a = i / long * math.pi
        ring = _circle_points(math.sin(a), lat)
        ring.translate_y(math.cos(a))
        _add_ring(shape, ring, show_lat)
    if show_long:
        _connect_rings(shape, long + 1, lat)
    shape.uni_scale(radius)
    return shape


def spring(height: float, r0: float, r1: float, turns: float = 5.0, res: int = 32) -> Shape:
    """Helix from y = height/2 down to -height/2, radius going from ``r0`` to ``r1``.

    Args:
        height: Total height
        r0: Starting radius
        r1: Ending radius
        turns: Number of turns
        res: Points per turn
    """
    shape = Shape()
    total_angle = TAU * turns
    count = int(math.floor(turns * res + 1e-9)) + 1
    for i in range(count):
        a = i * TAU / res
        t = a / total_angle if total_angle else 0.0
        radius = r0 + (r1 - r0) * t
        shape.add_xyz(
            math.cos(a) * radius,
            height / 2 + (-height / 2 - height / 2) * t,
            math.sin(a) * radius,
        )
    shape.connect_sequential()
    return shape


def torus(
    r1: float,
    r2: float,
    arc: float = TAU,
    slices: int = 32,
    res: int = 16,
    show_slices: bool = True,
    show_long: bool = True,
) -> Shape:
    """Torus around the y-axis made of circular slices.

    Args:
        r1: Distance from the center to the center of the tube
        r2: Radius of the tube
        arc: Sweep around the y-axis; a full turn closes the ring
        slices: Number of tube cross-sections
        res: Points per cross-section
        show_slices: Draw the cross-sections
        show_long: Draw the lines running around the ring
    """
    shape = Shape()
    for i in range(slices):
        ring = _circle_points(r2, res)
        ring.rotate_x(math.pi / 2)
        ring.translate_x(r1)
        ring.rotate_y(i / slices * arc)
        _add_ring(shape, ring, show_slices)
    if show_long:
        _connect_rings(shape, slices, res, wrap=arc >= TAU)
    return shape


def torus_knot(p: float = 2.0, q: float = 3.0, r1: float = 100.0, r2: float = 40.0, res: float = 0.02) -> Shape:
    """Closed (p, q) torus knot.

    Args:
        p: Turns around the axis of rotational symmetry
        q: Turns around the tube
        r1: Major radius
        r2: Minor radius, also the overall scale
        res: Parameter step in radians
    """
    shape = Shape()
    count = math.ceil(TAU / res)
    for i in range(count):
        t = i * res
        r = math.cos(q * t) + r1 / r2
        shape.add_xyz(
            r * math.cos(p * t) * r2,
            -math.sin(q * t) * r2,
            r * math.sin(p * t) * r2,
        )
    shape.connect_sequential(closed=True)
    return shape


def random_inner_box(w: float, h: float, d: float, count: int = 1000, rng: np.random.Generator | None = None) -> Shape:
    """Point-only shape filling a box."""
    shape = Shape()
    for _ in range(count):
        shape.add_random_point_in_box(w, h, d, rng)
    return shape


def random_surface_box(w: float, h: float, d: float, count: int = 1000, rng: np.random.Generator | None = None) -> Shape:
    """Point-only shape on the faces of a box, density proportional to face area."""
    shape = Shape()
    surface = (d * h + w * d + w * h) * 2
    # left/right
    for _ in range(int(count * d * h / surface)):
        shape.add_xyz(-w / 2, rand.uniform(-h / 2, h / 2, rng), rand.uniform(-d / 2, d / 2, rng))
        shape.add_xyz(w / 2, rand.uniform(-h / 2, h / 2, rng), rand.uniform(-d / 2, d / 2, rng))
    # top/bottom
    for _ in range(int(count * w * d / surface)):
        shape.add_xyz(rand.uniform(-w / 2, w / 2, rng), -h / 2, rand.uniform(-d / 2, d / 2, rng))
        shape.add_xyz(rand.uniform(-w / 2, w / 2, rng), h / 2, rand.uniform(-d / 2, d / 2, rng))
    # front/back
    for _ in range(int(count * w * h / surface)):
        shape.add_xyz(rand.uniform(-w / 2, w / 2, rng), rand.uniform(-h / 2, h / 2, rng), -d / 2)
        shape.add_xyz(rand.uniform(-w / 2, w / 2, rng), rand.uniform(-h / 2, h / 2, rng), d / 2)
    return shape


def random_inner_sphere(radius: float, count: int = 1000, rng: np.random.Generator | None = None) -> Shape:
    """Point-only shape filling a sphere."""
    shape = Shape()
    for _ in range(count):
        shape.add_random_point_in_sphere(radius, rng)
    return shape


def random_surface_sphere(radius: float, count: int = 1000, rng: np.random.Generator | None = None) -> Shape:
    """Point-only shape on the surface of a sphere."""
    shape = Shape()
    for _ in range(count):
        shape.add_random_point_on_sphere(radius, rng)
    return shape


# Primitive registry
PRIMITIVES: dict[str, Callable[..., Shape]] = {
    "box": box,
    "circle": circle,
    "cone": cone,
    "cylinder": cylinder,
    "grid": grid_plane,
    "pyramid": pyramid,
    "sphere": sphere,
    "spring": spring,
    "torus": torus,
    "torus-knot": torus_knot,
    "random-inner-box": random_inner_box,
    "random-surface-box": random_surface_box,
    "random-inner-sphere": random_inner_sphere,
    "random-surface-sphere": random_surface_sphere,
}


def get_primitive(name: str) -> Callable[..., Shape]:
    """Get a generator function by name.

    Raises:
        ValueError: If primitive name is unknown
    """
    if name not in PRIMITIVES:
        raise ValueError(f"Unknown primitive: {name}. Available: {list(PRIMITIVES.keys())}")

    return PRIMITIVES[name]


def build_primitive(name: str, params: dict[str, Any] | None = None) -> Shape:
    """Build a primitive by name with keyword parameters."""
    return get_primitive(name)(**(params or {}))


def list_primitives() -> list[dict]:
    """List all primitives with their parameters and descriptions.

    Returns:
        List of dicts with 'name', 'params' and 'description' keys
    """
    result = []
    for name, func in PRIMITIVES.items():
        params = [
            p.name for p in inspect.signature(func).parameters.values()
            if p.name != "rng"
        ]
        doc = inspect.getdoc(func) or ""
        result.append({
            "name": name,
            "params": params,
            "description": doc.splitlines()[0] if doc else "",
        })
    return result

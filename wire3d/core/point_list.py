"""Ordered, owning collections of 3D points.

The PointList is the unit of bulk transformation: every transform delegates
to each of its points in order. Insertion order is iteration and rendering
order. A PointList owns its points; copy-returning methods (``translated``,
``culled``...) deep-copy them first.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Literal, Sequence

import numpy as np
from numpy.typing import NDArray

from . import point as _point
from .noise import perlin3
from .point import Point, lerp_point
from ..render.shading import shaded_color

if TYPE_CHECKING:
    from .config import World
    from ..render.surface import Surface

Axis = Literal["x", "y", "z"]
_AXES = {"x": 0, "y": 1, "z": 2}


class PointList:
    """An ordered list of Points.

    Supports ``len()``, iteration and integer indexing (negative indexes count
    from the end). Out-of-range indexes raise ``IndexError``.
    """

    def __init__(self, points: Iterable[Point] | None = None):
        self._points: list[Point] = list(points) if points is not None else []

    def __len__(self) -> int:
        """Return number of points."""
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __contains__(self, point: object) -> bool:
        return any(p is point for p in self._points)

    def get(self, index: int) -> Point:
        """Return the point at ``index``; negative indexes go back from the end."""
        return self._points[index]

    def first(self) -> Point:
        return self._points[0]

    def last(self) -> Point:
        return self._points[-1]

    def index_of(self, point: Point) -> int:
        """Return the position of ``point`` in this list, matched by identity.

        Raises:
            ValueError: If the point is not in this list
        """
        for i, p in enumerate(self._points):
            if p is point:
                return i
        raise ValueError(f"{point!r} is not in this point list")

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add(self, point: Point) -> None:
        self._points.append(point)

    def add_xyz(self, x: float, y: float, z: float) -> Point:
        """Create a point, append it and return it."""
        point = Point(x, y, z)
        self._points.append(point)
        return point

    def extend(self, points: Iterable[Point]) -> None:
        """Append points by reference."""
        self._points.extend(points)

    def add_random_point_in_box(self, w: float, h: float, d: float, rng: np.random.Generator | None = None) -> None:
        self.add(_point.random_point_in_box(w, h, d, rng))

    def add_random_point_on_sphere(self, radius: float, rng: np.random.Generator | None = None) -> None:
        self.add(_point.random_point_on_sphere(radius, rng))

    def add_random_point_in_sphere(self, radius: float, rng: np.random.Generator | None = None) -> None:
        self.add(_point.random_point_in_sphere(radius, rng))

    def add_random_point_in_circle(self, radius: float, rng: np.random.Generator | None = None) -> None:
        self.add(_point.random_point_in_circle(radius, rng))

    def add_random_point_in_rectangle(self, w: float, d: float, rng: np.random.Generator | None = None) -> None:
        self.add(_point.random_point_in_rectangle(w, d, rng))

    def add_random_point_on_cylinder(self, height: float, radius: float, rng: np.random.Generator | None = None) -> None:
        self.add(_point.random_point_on_cylinder(height, radius, rng))

    def add_random_point_in_cylinder(self, height: float, radius: float, rng: np.random.Generator | None = None) -> None:
        self.add(_point.random_point_in_cylinder(height, radius, rng))

    def add_random_point_on_torus(
        self, radius1: float, radius2: float, arc: float = 2 * math.pi, rng: np.random.Generator | None = None
    ) -> None:
        self.add(_point.random_point_on_torus(radius1, radius2, arc, rng))

    def add_random_point_in_torus(
        self, radius1: float, radius2: float, arc: float = 2 * math.pi, rng: np.random.Generator | None = None
    ) -> None:
        self.add(_point.random_point_in_torus(radius1, radius2, arc, rng))

    def clone(self) -> PointList:
        """Return a deep copy of this list."""
        return PointList(p.clone() for p in self._points)

    # -------------------------------------------------------------------------
    # Geometry (numpy bridge)
    # -------------------------------------------------------------------------

    def to_numpy(self) -> NDArray[np.float64]:
        """Export coordinates as an Nx3 array."""
        if not self._points:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([p.as_tuple() for p in self._points], dtype=np.float64)

    def set_from_numpy(self, arr: NDArray[np.float64]) -> None:
        """Write an Nx3 array back into the existing points, in order.

        Raises:
            ValueError: If the array shape does not match this list
        """
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (len(self._points), 3):
            raise ValueError(
                f"Expected array of shape ({len(self._points)}, 3), got {arr.shape}"
            )
        for p, (x, y, z) in zip(self._points, arr.tolist()):
            p.x, p.y, p.z = x, y, z

    @property
    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Return (min_xyz, max_xyz) bounding box."""
        if not self._points:
            raise ValueError("Empty point list has no bounds")
        arr = self.to_numpy()
        return arr.min(axis=0), arr.max(axis=0)

    @property
    def center(self) -> NDArray[np.float64]:
        """Return center point of bounding box."""
        min_pt, max_pt = self.bounds
        return (min_pt + max_pt) / 2

    @property
    def size(self) -> NDArray[np.float64]:
        """Return size of bounding box (width, height, depth)."""
        min_pt, max_pt = self.bounds
        return max_pt - min_pt

    def center_at_origin(self) -> None:
        """Translate in place so the bounding-box center sits at the origin."""
        if not self._points:
            return
        cx, cy, cz = self.center.tolist()
        self.translate(-cx, -cy, -cz)

    # -------------------------------------------------------------------------
    # Culling and ordering
    # -------------------------------------------------------------------------

    def cull(self, predicate: Callable[[Point], bool]) -> None:
        """Keep only points satisfying ``predicate``, in place, preserving order."""
        self._points = [p for p in self._points if predicate(p)]

    def culled(self, predicate: Callable[[Point], bool]) -> PointList:
        p1 = self.clone()
        p1.cull(predicate)
        return p1

    def cull_box(self, min_xyz: Sequence[float], max_xyz: Sequence[float]) -> None:
        """Keep only points inside the axis-aligned box (bounds inclusive)."""
        self.cull(box_predicate(min_xyz, max_xyz))

    def sort_by_axis(self, axis: Axis, ascending: bool = True) -> None:
        """Stable sort in place by one coordinate."""
        if axis not in _AXES:
            raise ValueError(f"Unknown axis: {axis!r}. Expected one of {list(_AXES)}")
        self._points.sort(key=lambda p: getattr(p, axis), reverse=not ascending)

    # -------------------------------------------------------------------------
    # Projection and rendering
    # -------------------------------------------------------------------------

    def project(self, world: World) -> None:
        for p in self._points:
            p.project(world)

    def render_points(self, surface: Surface, world: World, radius: float) -> None:
        """Project and draw a filled circle at each visible point.

        The circle radius is ``radius`` times the point's projected scale, and
        its alpha is attenuated by fog and water level.
        """
        self.project(world)
        for p in self._points:
            if not p.visible(world) or not p.is_projected_finite():
                continue
            surface.save()
            try:
                surface.set_source_color(*shaded_color(world, p.y, p.z))
                surface.fill_circle(p.px, p.py, radius * p.scaling)
            finally:
                surface.restore()

    # -------------------------------------------------------------------------
    # Transform in place
    # -------------------------------------------------------------------------

    def translate_x(self, tx: float) -> None:
        for p in self._points:
            p.translate_x(tx)

    def translate_y(self, ty: float) -> None:
        for p in self._points:
            p.translate_y(ty)

    def translate_z(self, tz: float) -> None:
        for p in self._points:
            p.translate_z(tz)

    def translate(self, tx: float, ty: float, tz: float) -> None:
        for p in self._points:
            p.translate(tx, ty, tz)

    def rotate_x(self, angle: float) -> None:
        for p in self._points:
            p.rotate_x(angle)

    def rotate_y(self, angle: float) -> None:
        for p in self._points:
            p.rotate_y(angle)

    def rotate_z(self, angle: float) -> None:
        for p in self._points:
            p.rotate_z(angle)

    def rotate(self, rx: float, ry: float, rz: float) -> None:
        for p in self._points:
            p.rotate(rx, ry, rz)

    def scale_x(self, scale: float) -> None:
        for p in self._points:
            p.scale_x(scale)

    def scale_y(self, scale: float) -> None:
        for p in self._points:
            p.scale_y(scale)

    def scale_z(self, scale: float) -> None:
        for p in self._points:
            p.scale_z(scale)

    def scale(self, sx: float, sy: float, sz: float) -> None:
        for p in self._points:
            p.scale(sx, sy, sz)

    def uni_scale(self, scale: float) -> None:
        for p in self._points:
            p.uni_scale(scale)

    def randomize_x(self, amount: float, rng: np.random.Generator | None = None) -> None:
        for p in self._points:
            p.randomize_x(amount, rng)

    def randomize_y(self, amount: float, rng: np.random.Generator | None = None) -> None:
        for p in self._points:
            p.randomize_y(amount, rng)

    def randomize_z(self, amount: float, rng: np.random.Generator | None = None) -> None:
        for p in self._points:
            p.randomize_z(amount, rng)

    def randomize(self, amount: float, rng: np.random.Generator | None = None) -> None:
        for p in self._points:
            p.randomize(amount, rng)

    def push(self, center: Point, radius: float) -> None:
        """Push points out of a sphere onto its surface.

        Every point closer than ``radius`` to ``center`` is moved along its
        direction from ``center`` until it lies exactly ``radius`` away. A
        point sitting exactly on ``center`` has no direction and stays put.
        """
        for p in self._points:
            dist = p.distance(center)
            if dist == 0 or dist >= radius:
                continue
            p.translate(-center.x, -center.y, -center.z)
            p.uni_scale(radius / dist)
            p.translate(center.x, center.y, center.z)

    def noisify(self, origin: Point, scale: float, offset: float, seed: int = 0) -> None:
        """Perturb points radially with coherent noise.

        Each point is scaled about the coordinate origin by
        ``1 + offset * noise(origin + point * scale)``. ``origin`` shifts the
        sample position in the noise field, so animating it makes the surface
        flow.
        """
        if not self._points:
            return
        arr = self.to_numpy()
        n = perlin3(
            origin.x + arr[:, 0] * scale,
            origin.y + arr[:, 1] * scale,
            origin.z + arr[:, 2] * scale,
            seed,
        )
        for p, value in zip(self._points, n.tolist()):
            p.uni_scale(1.0 + value * offset)

    def normalize(self) -> None:
        """Normalize every point to unit length (fails on a zero-length point)."""
        for p in self._points:
            p.normalize()

    def lerp(self, t: float, other: PointList) -> PointList:
        """Return a new list interpolated point by point towards ``other``.

        Raises:
            ValueError: If the lists differ in length
        """
        if len(other) != len(self):
            raise ValueError(
                f"Cannot interpolate point lists of different lengths ({len(self)} vs {len(other)})"
            )
        return PointList(lerp_point(t, a, b) for a, b in zip(self._points, other))

    # -------------------------------------------------------------------------
    # Transform and return new
    # -------------------------------------------------------------------------

    def translated_x(self, tx: float) -> PointList:
        p1 = self.clone()
        p1.translate_x(tx)
        return p1

    def translated_y(self, ty: float) -> PointList:
        p1 = self.clone()
        p1.translate_y(ty)
        return p1

    def translated_z(self, tz: float) -> PointList:
        p1 = self.clone()
        p1.translate_z(tz)
        return p1

    def translated(self, tx: float, ty: float, tz: float) -> PointList:
        p1 = self.clone()
        p1.translate(tx, ty, tz)
        return p1

    def rotated_x(self, angle: float) -> PointList:
        p1 = self.clone()
        p1.rotate_x(angle)
        return p1

    def rotated_y(self, angle: float) -> PointList:
        p1 = self.clone()
        p1.rotate_y(angle)
        return p1

    def rotated_z(self, angle: float) -> PointList:
        p1 = self.clone()
        p1.rotate_z(angle)
        return p1

    def rotated(self, rx: float, ry: float, rz: float) -> PointList:
        p1 = self.clone()
        p1.rotate(rx, ry, rz)
        return p1

    def scaled_x(self, scale: float) -> PointList:
        p1 = self.clone()
        p1.scale_x(scale)
        return p1

    def scaled_y(self, scale: float) -> PointList:
        p1 = self.clone()
        p1.scale_y(scale)
        return p1

    def scaled_z(self, scale: float) -> PointList:
        p1 = self.clone()
        p1.scale_z(scale)
        return p1

    def scaled(self, sx: float, sy: float, sz: float) -> PointList:
        p1 = self.clone()
        p1.scale(sx, sy, sz)
        return p1

    def uni_scaled(self, scale: float) -> PointList:
        p1 = self.clone()
        p1.uni_scale(scale)
        return p1

    def randomized_x(self, amount: float, rng: np.random.Generator | None = None) -> PointList:
        p1 = self.clone()
        p1.randomize_x(amount, rng)
        return p1

    def randomized_y(self, amount: float, rng: np.random.Generator | None = None) -> PointList:
        p1 = self.clone()
        p1.randomize_y(amount, rng)
        return p1

    def randomized_z(self, amount: float, rng: np.random.Generator | None = None) -> PointList:
        p1 = self.clone()
        p1.randomize_z(amount, rng)
        return p1

    def randomized(self, amount: float, rng: np.random.Generator | None = None) -> PointList:
        p1 = self.clone()
        p1.randomize(amount, rng)
        return p1

    def __repr__(self) -> str:
        return f"PointList({len(self)} points)"


def box_predicate(min_xyz: Sequence[float], max_xyz: Sequence[float]) -> Callable[[Point], bool]:
    """Return a predicate accepting points inside an inclusive axis-aligned box."""
    min_x, min_y, min_z = min_xyz
    max_x, max_y, max_z = max_xyz

    def inside(p: Point) -> bool:
        return (
            min_x <= p.x <= max_x and
            min_y <= p.y <= max_y and
            min_z <= p.z <= max_z
        )

    return inside

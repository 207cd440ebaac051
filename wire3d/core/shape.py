"""Wireframe shapes.

A Shape owns a PointList and an ordered list of Segments connecting some of
those points. Segments are index pairs into ``shape.points``, and every
operation that removes or reorders points remaps or drops the segments that
depend on them, so a shape never holds a segment pointing at a missing point.

Aliasing:
    :meth:`Shape.add_shape` appends the *same* Point objects to this shape
    instead of copying them. After ``a.add_shape(b)``, transforming either
    ``a`` or ``b`` moves the shared points in both. Use ``a.add_shape(b.clone())``
    when the shapes must stay independent.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from .point import Point, lerp_point
from .point_list import Axis, PointList, box_predicate
from .segment import Segment

if TYPE_CHECKING:
    from .config import World
    from ..render.surface import Surface

logger = logging.getLogger(__name__)

# Absorbs floating point error when a length is an exact multiple of max_length.
_SUBDIVIDE_TOLERANCE = 1e-9


class Shape:
    """Points plus the segments that connect them.

    Attributes:
        points: The owned points, in insertion order
        segments: Edges as index pairs into ``points``, in drawing order
    """

    def __init__(
        self,
        points: PointList | Iterable[Point] | None = None,
        segments: Iterable[Segment] | None = None,
    ):
        if isinstance(points, PointList):
            self.points = points
        else:
            self.points = PointList(points)
        self.segments: list[Segment] = []
        for seg in segments or ():
            self._check_indices(seg.a, seg.b)
            self.segments.append(seg)

    def __repr__(self) -> str:
        return f"Shape({len(self.points)} points, {len(self.segments)} segments)"

    def _check_indices(self, i: int, j: int) -> None:
        n = len(self.points)
        if not (0 <= i < n and 0 <= j < n):
            raise IndexError(
                f"Segment index out of range: ({i}, {j}), shape has {n} points"
            )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_point(self, point: Point) -> Point:
        self.points.add(point)
        return point

    def add_xyz(self, x: float, y: float, z: float) -> Point:
        return self.points.add_xyz(x, y, z)

    def add_random_point_in_box(self, w: float, h: float, d: float, rng: np.random.Generator | None = None) -> None:
        self.points.add_random_point_in_box(w, h, d, rng)

    def add_random_point_on_sphere(self, radius: float, rng: np.random.Generator | None = None) -> None:
        self.points.add_random_point_on_sphere(radius, rng)

    def add_random_point_in_sphere(self, radius: float, rng: np.random.Generator | None = None) -> None:
        self.points.add_random_point_in_sphere(radius, rng)

    def add_random_point_in_circle(self, radius: float, rng: np.random.Generator | None = None) -> None:
        self.points.add_random_point_in_circle(radius, rng)

    def add_random_point_in_rectangle(self, w: float, d: float, rng: np.random.Generator | None = None) -> None:
        self.points.add_random_point_in_rectangle(w, d, rng)

    def add_random_point_on_cylinder(self, height: float, radius: float, rng: np.random.Generator | None = None) -> None:
        self.points.add_random_point_on_cylinder(height, radius, rng)

    def add_random_point_in_cylinder(self, height: float, radius: float, rng: np.random.Generator | None = None) -> None:
        self.points.add_random_point_in_cylinder(height, radius, rng)

    def add_random_point_on_torus(
        self, radius1: float, radius2: float, arc: float = 2 * math.pi, rng: np.random.Generator | None = None
    ) -> None:
        self.points.add_random_point_on_torus(radius1, radius2, arc, rng)

    def add_random_point_in_torus(
        self, radius1: float, radius2: float, arc: float = 2 * math.pi, rng: np.random.Generator | None = None
    ) -> None:
        self.points.add_random_point_in_torus(radius1, radius2, arc, rng)

    def add_segment(self, a: Point, b: Point) -> Segment:
        """Connect two points that already belong to this shape.

        Raises:
            ValueError: If either point is not one of this shape's points
        """
        seg = Segment(self.points.index_of(a), self.points.index_of(b))
        self.segments.append(seg)
        return seg

    def add_segment_by_index(self, i: int, j: int) -> Segment:
        """Connect the points at indices ``i`` and ``j``.

        Raises:
            IndexError: If either index is outside ``[0, len(points))``
        """
        self._check_indices(i, j)
        seg = Segment(i, j)
        self.segments.append(seg)
        return seg

    def connect_sequential(self, start: int = 0, closed: bool = False) -> None:
        """Chain the points from ``start`` to the end with segments."""
        n = len(self.points)
        for i in range(start, n - 1):
            self.add_segment_by_index(i, i + 1)
        if closed and n - start > 2:
            self.add_segment_by_index(n - 1, start)

    def add_shape(self, other: Shape) -> None:
        """Merge ``other`` into this shape by reference.

        ``other``'s points are appended as the same objects (not copies) and
        its segments are re-indexed onto this shape's point list. Transforms
        applied to either shape afterwards move the shared points in both.
        """
        offset = len(self.points)
        merged = [seg.offset(offset) for seg in other.segments]
        self.points.extend(list(other.points))
        self.segments.extend(merged)

    def clone(self) -> Shape:
        """Return a deep copy of this shape.

        Segments are positional, so each cloned segment connects the cloned
        points at the same indices as the original.
        """
        return Shape(
            self.points.clone(),
            [Segment(seg.a, seg.b) for seg in self.segments],
        )

    def remove_segment(self, segment: Segment) -> None:
        """Remove ``segment`` (matched by identity).

        Raises:
            ValueError: If the segment is not part of this shape
        """
        for i, seg in enumerate(self.segments):
            if seg is segment:
                del self.segments[i]
                return
        raise ValueError("Segment is not part of this shape")

    def segment_points(self, segment: Segment) -> tuple[Point, Point]:
        return segment.endpoints(self.points)

    # -------------------------------------------------------------------------
    # Culling, splitting and resampling
    # -------------------------------------------------------------------------

    def _keep(self, keep: Sequence[bool]) -> None:
        """Drop points whose flag is False and remap or drop their segments."""
        remap: dict[int, int] = {}
        kept: list[Point] = []
        for i, (p, k) in enumerate(zip(self.points, keep)):
            if k:
                remap[i] = len(kept)
                kept.append(p)
        before = len(self.segments)
        self.segments = [
            Segment(remap[seg.a], remap[seg.b])
            for seg in self.segments
            if seg.a in remap and seg.b in remap
        ]
        removed_points = len(self.points) - len(kept)
        self.points = PointList(kept)
        if removed_points:
            logger.debug(
                f"Removed {removed_points} points and {before - len(self.segments)} segments"
            )

    def cull(self, predicate: Callable[[Point], bool]) -> None:
        """Keep only points satisfying ``predicate``, in place.

        Segments touching a removed point are removed too.
        """
        self._keep([bool(predicate(p)) for p in self.points])

    def culled(self, predicate: Callable[[Point], bool]) -> Shape:
        s1 = self.clone()
        s1.cull(predicate)
        return s1

    def cull_box(self, min_xyz: Sequence[float], max_xyz: Sequence[float]) -> None:
        """Remove points outside an axis-aligned box (bounds inclusive)."""
        self.cull(box_predicate(min_xyz, max_xyz))

    def split(self, predicate: Callable[[Point], bool]) -> Shape:
        """Move the points satisfying ``predicate`` into a new shape.

        The returned shape gets the matching points (the same objects) and
        every segment whose two endpoints match. This shape keeps the other
        points and the segments whose two endpoints do not match. Segments
        crossing the boundary are dropped from both.
        """
        flags = [bool(predicate(p)) for p in self.points]
        inside = Shape()
        remap: dict[int, int] = {}
        for i, (p, f) in enumerate(zip(self.points, flags)):
            if f:
                remap[i] = len(inside.points)
                inside.points.add(p)
        inside.segments = [
            Segment(remap[seg.a], remap[seg.b])
            for seg in self.segments
            if seg.a in remap and seg.b in remap
        ]
        self._keep([not f for f in flags])
        return inside

    def subdivide(self, max_length: float) -> None:
        """Break every segment longer than ``max_length`` into equal pieces.

        A segment of length ``L`` becomes a chain of ``ceil(L / max_length)``
        segments, so no piece is longer than ``max_length``. The new interior
        points are appended to the point list and the chain takes the place
        of the original segment in the segment list.
        """
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")
        new_segments: list[Segment] = []
        added = 0
        for seg in self.segments:
            pa, pb = seg.endpoints(self.points)
            length = pa.distance(pb)
            if length <= max_length:
                new_segments.append(seg)
                continue
            count = math.ceil(length / max_length - _SUBDIVIDE_TOLERANCE)
            prev = seg.a
            for k in range(1, count):
                self.points.add(lerp_point(k / count, pa, pb))
                index = len(self.points) - 1
                new_segments.append(Segment(prev, index))
                prev = index
                added += 1
            new_segments.append(Segment(prev, seg.b))
        self.segments = new_segments
        logger.debug(f"Subdivided shape: {added} points added")

    def thin_points(self, take: int, skip: int) -> None:
        """Keep ``take`` points, drop ``skip`` points, and repeat.

        Segments touching a dropped point are removed.
        """
        if take < 1 or skip < 0:
            raise ValueError(f"Invalid thinning pattern: take={take}, skip={skip}")
        period = take + skip
        self._keep([i % period < take for i in range(len(self.points))])

    def center(self) -> None:
        """Translate in place so the bounding-box center sits at the origin."""
        self.points.center_at_origin()

    def sort_points_by_axis(self, axis: Axis, ascending: bool = True) -> None:
        """Stable-sort the points by one coordinate, keeping segments attached."""
        if axis not in ("x", "y", "z"):
            raise ValueError(f"Unknown axis: {axis!r}. Expected one of ['x', 'y', 'z']")
        order = sorted(
            range(len(self.points)),
            key=lambda i: getattr(self.points[i], axis),
            reverse=not ascending,
        )
        position = {old: new for new, old in enumerate(order)}
        self.points = PointList(self.points[i] for i in order)
        self.segments = [Segment(position[s.a], position[s.b]) for s in self.segments]

    # -------------------------------------------------------------------------
    # Projection and rendering
    # -------------------------------------------------------------------------

    def project(self, world: World) -> None:
        self.points.project(world)

    def stroke(self, surface: Surface, world: World, line_width: float | None = None) -> None:
        """Project every point once, then stroke every segment in order.

        Args:
            surface: Target drawing surface
            world: Camera, clipping and shading settings
            line_width: Base width; the surface's current width if None
        """
        if line_width is not None:
            surface.set_line_width(line_width)
        self.points.project(world)
        for seg in self.segments:
            seg.stroke(surface, self.points, world)

    def render_points(self, surface: Surface, world: World, radius: float) -> None:
        """Draw a filled circle at each visible point."""
        self.points.render_points(surface, world, radius)

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    @property
    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        return self.points.bounds

    def stats(self) -> dict:
        """Return statistics about the shape."""
        stats: dict = {
            "num_points": len(self.points),
            "num_segments": len(self.segments),
        }
        if len(self.points):
            min_pt, max_pt = self.points.bounds
            stats.update({
                "bounds_min": min_pt.tolist(),
                "bounds_max": max_pt.tolist(),
                "size": (max_pt - min_pt).tolist(),
                "center": ((min_pt + max_pt) / 2).tolist(),
            })
        if self.segments:
            lengths = [seg.length(self.points) for seg in self.segments]
            stats["total_length"] = float(sum(lengths))
            stats["max_segment_length"] = float(max(lengths))
        return stats

    # -------------------------------------------------------------------------
    # Transform in place
    # -------------------------------------------------------------------------

    def translate_x(self, tx: float) -> None:
        self.points.translate_x(tx)

    def translate_y(self, ty: float) -> None:
        self.points.translate_y(ty)

    def translate_z(self, tz: float) -> None:
        self.points.translate_z(tz)

    def translate(self, tx: float, ty: float, tz: float) -> None:
        self.points.translate(tx, ty, tz)

    def rotate_x(self, angle: float) -> None:
        self.points.rotate_x(angle)

    def rotate_y(self, angle: float) -> None:
        self.points.rotate_y(angle)

    def rotate_z(self, angle: float) -> None:
        self.points.rotate_z(angle)

    def rotate(self, rx: float, ry: float, rz: float) -> None:
        self.points.rotate(rx, ry, rz)

    def scale_x(self, scale: float) -> None:
        self.points.scale_x(scale)

    def scale_y(self, scale: float) -> None:
        self.points.scale_y(scale)

    def scale_z(self, scale: float) -> None:
        self.points.scale_z(scale)

    def scale(self, sx: float, sy: float, sz: float) -> None:
        self.points.scale(sx, sy, sz)

    def uni_scale(self, scale: float) -> None:
        self.points.uni_scale(scale)

    def randomize_x(self, amount: float, rng: np.random.Generator | None = None) -> None:
        self.points.randomize_x(amount, rng)

    def randomize_y(self, amount: float, rng: np.random.Generator | None = None) -> None:
        self.points.randomize_y(amount, rng)

    def randomize_z(self, amount: float, rng: np.random.Generator | None = None) -> None:
        self.points.randomize_z(amount, rng)

    def randomize(self, amount: float, rng: np.random.Generator | None = None) -> None:
        self.points.randomize(amount, rng)

    def push(self, center: Point, radius: float) -> None:
        self.points.push(center, radius)

    def noisify(self, origin: Point, scale: float, offset: float, seed: int = 0) -> None:
        self.points.noisify(origin, scale, offset, seed)

    def normalize(self) -> None:
        self.points.normalize()

    # -------------------------------------------------------------------------
    # Transform and return new
    # -------------------------------------------------------------------------

    def translated_x(self, tx: float) -> Shape:
        s1 = self.clone()
        s1.translate_x(tx)
        return s1

    def translated_y(self, ty: float) -> Shape:
        s1 = self.clone()
        s1.translate_y(ty)
        return s1

    def translated_z(self, tz: float) -> Shape:
        s1 = self.clone()
        s1.translate_z(tz)
        return s1

    def translated(self, tx: float, ty: float, tz: float) -> Shape:
        s1 = self.clone()
        s1.translate(tx, ty, tz)
        return s1

    def rotated_x(self, angle: float) -> Shape:
        s1 = self.clone()
        s1.rotate_x(angle)
        return s1

    def rotated_y(self, angle: float) -> Shape:
        s1 = self.clone()
        s1.rotate_y(angle)
        return s1

    def rotated_z(self, angle: float) -> Shape:
        s1 = self.clone()
        s1.rotate_z(angle)
        return s1

    def rotated(self, rx: float, ry: float, rz: float) -> Shape:
        s1 = self.clone()
        s1.rotate(rx, ry, rz)
        return s1

    def scaled_x(self, scale: float) -> Shape:
        s1 = self.clone()
        s1.scale_x(scale)
        return s1

    def scaled_y(self, scale: float) -> Shape:
        s1 = self.clone()
        s1.scale_y(scale)
        return s1

    def scaled_z(self, scale: float) -> Shape:
        s1 = self.clone()
        s1.scale_z(scale)
        return s1

    def scaled(self, sx: float, sy: float, sz: float) -> Shape:
        s1 = self.clone()
        s1.scale(sx, sy, sz)
        return s1

    def uni_scaled(self, scale: float) -> Shape:
        s1 = self.clone()
        s1.uni_scale(scale)
        return s1

    def randomized_x(self, amount: float, rng: np.random.Generator | None = None) -> Shape:
        s1 = self.clone()
        s1.randomize_x(amount, rng)
        return s1

    def randomized_y(self, amount: float, rng: np.random.Generator | None = None) -> Shape:
        s1 = self.clone()
        s1.randomize_y(amount, rng)
        return s1

    def randomized_z(self, amount: float, rng: np.random.Generator | None = None) -> Shape:
        s1 = self.clone()
        s1.randomize_z(amount, rng)
        return s1

    def randomized(self, amount: float, rng: np.random.Generator | None = None) -> Shape:
        s1 = self.clone()
        s1.randomize(amount, rng)
        return s1

"""Line segments between points of a shape.

A Segment does not own or hold its endpoints. It stores two indices into the
point list of the shape it belongs to, so removing or reordering points can be
checked and remapped instead of leaving stale references behind.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..render.shading import shaded_color

if TYPE_CHECKING:
    from .config import World
    from .point import Point
    from .point_list import PointList
    from ..render.surface import Surface


class DanglingSegmentError(IndexError):
    """A segment refers to a point index that does not exist."""


@dataclass(eq=False)
class Segment:
    """An edge between the points at indices ``a`` and ``b``."""

    a: int
    b: int

    def endpoints(self, points: PointList) -> tuple[Point, Point]:
        """Resolve both indices against ``points``.

        Raises:
            DanglingSegmentError: If either index is outside the list
        """
        n = len(points)
        if not (0 <= self.a < n and 0 <= self.b < n):
            raise DanglingSegmentError(
                f"Segment ({self.a}, {self.b}) refers outside a list of {n} points"
            )
        return points[self.a], points[self.b]

    def length(self, points: PointList) -> float:
        pa, pb = self.endpoints(points)
        return pa.distance(pb)

    def offset(self, n: int) -> Segment:
        """Return a new segment with both indices shifted by ``n``."""
        return Segment(self.a + n, self.b + n)

    def stroke(self, surface: Surface, points: PointList, world: World) -> None:
        """Draw this segment from its endpoints' cached projections.

        Nothing is drawn unless both endpoints are inside the clip range and
        have finite projections. The line width is the surface's current
        width, scaled by the mean projected scale of the endpoints when
        ``world.scale_line_width`` is set, and the color alpha is attenuated
        at the segment midpoint. Width and color are restored afterwards.
        """
        pa, pb = self.endpoints(points)
        line_width = surface.get_line_width()
        if not _should_draw(pa, pb, world):
            return
        scale = (pa.scaling + pb.scaling) / 2 if world.scale_line_width else 1.0
        surface.save()
        try:
            surface.set_source_color(*shaded_color(world, (pa.y + pb.y) / 2, (pa.z + pb.z) / 2))
            surface.set_line_width(line_width * scale)
            surface.move_to(pa.px, pa.py)
            surface.line_to(pb.px, pb.py)
            surface.stroke()
        finally:
            surface.restore()
            surface.set_line_width(line_width)


def _should_draw(pa: Point, pb: Point, world: World) -> bool:
    return (
        pa.visible(world) and pb.visible(world) and
        pa.is_projected_finite() and pb.is_projected_finite() and
        math.isfinite(pa.scaling) and math.isfinite(pb.scaling)
    )

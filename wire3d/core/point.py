"""3D points and random point generators.

A Point is a mutable 3D coordinate plus a cache of its last projection
(``px``, ``py`` and ``scaling``), which is only meaningful after
:meth:`Point.project` has been called with the current World.

Points compare by identity: two points built from the same coordinates are
different points. Shapes rely on this to know which points their segments
connect.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from . import rand

if TYPE_CHECKING:
    from .config import World


@dataclass(eq=False)
class Point:
    """A 3D point with a cached 2D projection.

    Attributes:
        x, y, z: World coordinates
        px, py: Screen position from the last projection
        scaling: Perspective scale factor from the last projection
    """

    x: float
    y: float
    z: float
    px: float = 0.0
    py: float = 0.0
    scaling: float = 0.0

    def clone(self) -> Point:
        """Return an independent copy of this point (projection cache included)."""
        return Point(self.x, self.y, self.z, self.px, self.py, self.scaling)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    # -------------------------------------------------------------------------
    # Projection
    # -------------------------------------------------------------------------

    def project(self, world: World) -> None:
        """Project this point using the world's camera.

        Writes ``px``, ``py`` and ``scaling``. A point lying exactly on the
        camera plane (``camera.z + z == 0``) gets ``scaling = inf`` and
        ``px = py = nan``; such a point is never drawn.
        """
        camera = world.camera
        depth = camera.z + self.z
        if depth == 0:
            self.scaling = math.inf
            self.px = math.nan
            self.py = math.nan
            return
        scale = camera.focal_length / depth
        self.px = camera.x + self.x * scale
        self.py = camera.y + self.y * scale
        self.scaling = scale

    def visible(self, world: World) -> bool:
        """Return True if this point lies within the world's clip range."""
        return world.is_visible(self.z)

    def is_projected_finite(self) -> bool:
        return math.isfinite(self.px) and math.isfinite(self.py)

    # -------------------------------------------------------------------------
    # Measurement
    # -------------------------------------------------------------------------

    def distance(self, other: Point) -> float:
        """Return the distance from this point to another point."""
        dx = other.x - self.x
        dy = other.y - self.y
        dz = other.z - self.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def magnitude(self) -> float:
        """Return the distance from the origin."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> None:
        """Scale this point to unit length, in place.

        Raises:
            ValueError: If the point is at the origin
        """
        mag = self.magnitude()
        if mag == 0:
            raise ValueError("Cannot normalize a zero-length point")
        self.x /= mag
        self.y /= mag
        self.z /= mag

    def normalized(self) -> Point:
        p = self.clone()
        p.normalize()
        return p

    # -------------------------------------------------------------------------
    # Transform in place
    # -------------------------------------------------------------------------

    def translate_x(self, tx: float) -> None:
        self.x += tx

    def translate_y(self, ty: float) -> None:
        self.y += ty

    def translate_z(self, tz: float) -> None:
        self.z += tz

    def translate(self, tx: float, ty: float, tz: float) -> None:
        self.x += tx
        self.y += ty
        self.z += tz

    def rotate_x(self, angle: float) -> None:
        """Rotate around the x-axis by ``angle`` radians, in place."""
        c = math.cos(angle)
        s = math.sin(angle)
        y = c * self.y + s * self.z
        z = c * self.z - s * self.y
        self.y = y
        self.z = z

    def rotate_y(self, angle: float) -> None:
        """Rotate around the y-axis by ``angle`` radians, in place."""
        c = math.cos(angle)
        s = math.sin(angle)
        x = c * self.x + s * self.z
        z = c * self.z - s * self.x
        self.x = x
        self.z = z

    def rotate_z(self, angle: float) -> None:
        """Rotate around the z-axis by ``angle`` radians, in place."""
        c = math.cos(angle)
        s = math.sin(angle)
        y = c * self.y + s * self.x
        x = c * self.x - s * self.y
        self.y = y
        self.x = x

    def rotate(self, rx: float, ry: float, rz: float) -> None:
        """Rotate around x, then y, then z. The order matters."""
        self.rotate_x(rx)
        self.rotate_y(ry)
        self.rotate_z(rz)

    def scale_x(self, scale: float) -> None:
        self.x *= scale

    def scale_y(self, scale: float) -> None:
        self.y *= scale

    def scale_z(self, scale: float) -> None:
        self.z *= scale

    def scale(self, sx: float, sy: float, sz: float) -> None:
        self.x *= sx
        self.y *= sy
        self.z *= sz

    def uni_scale(self, scale: float) -> None:
        self.x *= scale
        self.y *= scale
        self.z *= scale

    def randomize_x(self, amount: float, rng: np.random.Generator | None = None) -> None:
        self.x += rand.uniform(-amount, amount, rng)

    def randomize_y(self, amount: float, rng: np.random.Generator | None = None) -> None:
        self.y += rand.uniform(-amount, amount, rng)

    def randomize_z(self, amount: float, rng: np.random.Generator | None = None) -> None:
        self.z += rand.uniform(-amount, amount, rng)

    def randomize(self, amount: float, rng: np.random.Generator | None = None) -> None:
        """Offset each axis by a uniform random amount in ``[-amount, amount)``."""
        self.x += rand.uniform(-amount, amount, rng)
        self.y += rand.uniform(-amount, amount, rng)
        self.z += rand.uniform(-amount, amount, rng)

    # -------------------------------------------------------------------------
    # Transform and return new
    # -------------------------------------------------------------------------

    def translated_x(self, tx: float) -> Point:
        p = self.clone()
        p.translate_x(tx)
        return p

    def translated_y(self, ty: float) -> Point:
        p = self.clone()
        p.translate_y(ty)
        return p

    def translated_z(self, tz: float) -> Point:
        p = self.clone()
        p.translate_z(tz)
        return p

    def translated(self, tx: float, ty: float, tz: float) -> Point:
        p = self.clone()
        p.translate(tx, ty, tz)
        return p

    def rotated_x(self, angle: float) -> Point:
        p = self.clone()
        p.rotate_x(angle)
        return p

    def rotated_y(self, angle: float) -> Point:
        p = self.clone()
        p.rotate_y(angle)
        return p

    def rotated_z(self, angle: float) -> Point:
        p = self.clone()
        p.rotate_z(angle)
        return p

    def rotated(self, rx: float, ry: float, rz: float) -> Point:
        p = self.clone()
        p.rotate(rx, ry, rz)
        return p

    def scaled_x(self, scale: float) -> Point:
        p = self.clone()
        p.scale_x(scale)
        return p

    def scaled_y(self, scale: float) -> Point:
        p = self.clone()
        p.scale_y(scale)
        return p

    def scaled_z(self, scale: float) -> Point:
        p = self.clone()
        p.scale_z(scale)
        return p

    def scaled(self, sx: float, sy: float, sz: float) -> Point:
        p = self.clone()
        p.scale(sx, sy, sz)
        return p

    def uni_scaled(self, scale: float) -> Point:
        p = self.clone()
        p.uni_scale(scale)
        return p

    def randomized_x(self, amount: float, rng: np.random.Generator | None = None) -> Point:
        p = self.clone()
        p.randomize_x(amount, rng)
        return p

    def randomized_y(self, amount: float, rng: np.random.Generator | None = None) -> Point:
        p = self.clone()
        p.randomize_y(amount, rng)
        return p

    def randomized_z(self, amount: float, rng: np.random.Generator | None = None) -> Point:
        p = self.clone()
        p.randomize_z(amount, rng)
        return p

    def randomized(self, amount: float, rng: np.random.Generator | None = None) -> Point:
        p = self.clone()
        p.randomize(amount, rng)
        return p

    def __repr__(self) -> str:
        return f"Point({self.x:.4g}, {self.y:.4g}, {self.z:.4g})"


def lerp_point(t: float, p0: Point, p1: Point) -> Point:
    """Return a new point interpolated between ``p0`` (t=0) and ``p1`` (t=1)."""
    return Point(
        p0.x + (p1.x - p0.x) * t,
        p0.y + (p1.y - p0.y) * t,
        p0.z + (p1.z - p0.z) * t,
    )


# -----------------------------------------------------------------------------
# Random point generators
# -----------------------------------------------------------------------------

def random_point_in_box(
    w: float, h: float, d: float, rng: np.random.Generator | None = None
) -> Point:
    """Random point inside an origin-centered ``w x h x d`` box."""
    return Point(
        rand.uniform(-w / 2, w / 2, rng),
        rand.uniform(-h / 2, h / 2, rng),
        rand.uniform(-d / 2, d / 2, rng),
    )


def _sphere_direction(rng: np.random.Generator | None) -> tuple[float, float, float]:
    # Uniform on the unit sphere: uniform height, uniform longitude.
    u = rand.uniform(-1.0, 1.0, rng)
    t = rand.angle(rng)
    r = math.sqrt(1 - u * u)
    return r * math.cos(t), r * math.sin(t), u


def random_point_on_sphere(radius: float, rng: np.random.Generator | None = None) -> Point:
    """Random point on the surface of an origin-centered sphere."""
    x, y, z = _sphere_direction(rng)
    return Point(x * radius, y * radius, z * radius)


def random_point_in_sphere(radius: float, rng: np.random.Generator | None = None) -> Point:
    """Random point inside an origin-centered sphere (uniform by volume)."""
    x, y, z = _sphere_direction(rng)
    r = math.pow(float(rand.get_rng(rng).random()), 1.0 / 3.0) * radius
    return Point(x * r, y * r, z * r)


def random_point_in_circle(radius: float, rng: np.random.Generator | None = None) -> Point:
    """Random point inside a circle on the xz plane (y = 0)."""
    r = math.sqrt(float(rand.get_rng(rng).random())) * radius
    a = rand.angle(rng)
    return Point(math.cos(a) * r, 0.0, math.sin(a) * r)


def random_point_in_rectangle(w: float, d: float, rng: np.random.Generator | None = None) -> Point:
    """Random point inside an origin-centered ``w x d`` rectangle on the xz plane."""
    return Point(rand.uniform(-w / 2, w / 2, rng), 0.0, rand.uniform(-d / 2, d / 2, rng))


def random_point_on_cylinder(
    height: float, radius: float, rng: np.random.Generator | None = None
) -> Point:
    """Random point on the side of a y-axis cylinder."""
    a = rand.angle(rng)
    return Point(
        math.cos(a) * radius,
        rand.uniform(-height / 2, height / 2, rng),
        math.sin(a) * radius,
    )


def random_point_in_cylinder(
    height: float, radius: float, rng: np.random.Generator | None = None
) -> Point:
    """Random point inside a y-axis cylinder (uniform by volume)."""
    r = math.sqrt(float(rand.get_rng(rng).random())) * radius
    a = rand.angle(rng)
    return Point(
        math.cos(a) * r,
        rand.uniform(-height / 2, height / 2, rng),
        math.sin(a) * r,
    )


def random_point_on_torus(
    radius1: float,
    radius2: float,
    arc: float = 2 * math.pi,
    rng: np.random.Generator | None = None,
) -> Point:
    """Random point on the surface of a torus around the y-axis.

    Args:
        radius1: Distance from the torus center to the center of the tube
        radius2: Radius of the tube
        arc: Range of the angle around the tube
        rng: Optional random generator
    """
    t = rand.uniform(0.0, arc, rng)
    p = Point(math.cos(t) * radius2 + radius1, math.sin(t) * radius2, 0.0)
    p.rotate_y(rand.angle(rng))
    return p


def random_point_in_torus(
    radius1: float,
    radius2: float,
    arc: float = 2 * math.pi,
    rng: np.random.Generator | None = None,
) -> Point:
    """Random point inside a torus around the y-axis.

    ``arc`` limits both the angle around the tube and the sweep around the
    y-axis, so values below ``2*pi`` give a partial ring.
    """
    t = rand.uniform(0.0, arc, rng)
    r2 = radius2 * math.sqrt(float(rand.get_rng(rng).random()))
    p = Point(math.cos(t) * r2 + radius1, math.sin(t) * r2, 0.0)
    p.rotate_y(rand.uniform(0.0, arc, rng))
    return p

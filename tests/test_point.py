"""Tests for Point and the random point generators."""

import math

import numpy as np
import pytest

from wire3d.core.config import World
from wire3d.core.point import (
    Point,
    lerp_point,
    random_point_in_box,
    random_point_in_circle,
    random_point_in_cylinder,
    random_point_in_sphere,
    random_point_in_torus,
    random_point_on_cylinder,
    random_point_on_sphere,
    random_point_on_torus,
)


def assert_point(p, expected, atol=1e-9):
    np.testing.assert_allclose(p.as_tuple(), expected, atol=atol)


class TestPointBasics:
    """Test construction, copies and measurement."""

    def test_points_compare_by_identity(self):
        """Two points with the same coordinates are different points."""
        a = Point(1, 2, 3)
        b = Point(1, 2, 3)
        assert a != b
        assert a == a

    def test_clone_is_independent(self):
        """Test that a clone does not share state with its source."""
        p = Point(1, 2, 3)
        c = p.clone()
        c.translate(10, 10, 10)
        assert p.as_tuple() == (1, 2, 3)
        assert c.as_tuple() == (11, 12, 13)

    def test_distance_and_magnitude(self):
        assert Point(0, 0, 0).distance(Point(3, 4, 0)) == 5.0
        assert Point(3, 4, 0).magnitude() == 5.0

    def test_normalize(self):
        p = Point(3, 4, 0)
        p.normalize()
        assert_point(p, (0.6, 0.8, 0.0))

    def test_normalize_zero_raises(self):
        """A point at the origin has no direction."""
        with pytest.raises(ValueError):
            Point(0, 0, 0).normalize()

    def test_normalized_leaves_original(self):
        p = Point(0, 0, 2)
        n = p.normalized()
        assert n.as_tuple() == (0, 0, 1)
        assert p.as_tuple() == (0, 0, 2)

    def test_lerp_point(self):
        """Test interpolation between two points."""
        p = lerp_point(0.25, Point(0, 0, 0), Point(4, 8, -4))
        assert p.as_tuple() == (1, 2, -1)


class TestPointProjection:
    """Test perspective projection and visibility."""

    def test_projection_formula(self):
        """scaling = f / (z + cz), screen = center + coord * scaling."""
        world = World()
        world.camera.focal_length = 300
        world.camera.x = 400
        world.camera.y = 300
        world.camera.z = 200

        p = Point(10, 20, 100)
        p.project(world)

        assert p.scaling == pytest.approx(1.0)
        assert p.px == pytest.approx(410)
        assert p.py == pytest.approx(320)

    def test_projection_of_scaled_corner(self):
        """Box corner scaled by (2, 1, 1), camera z = 10, focal length 100."""
        world = World()
        world.camera.focal_length = 100
        world.camera.z = 10

        p = Point(1, 1, 1)
        p.scale(2, 1, 1)
        p.project(world)

        assert p.scaling == pytest.approx(100 / 11)
        assert p.px == pytest.approx(18.1818, abs=1e-3)
        assert p.py == pytest.approx(9.0909, abs=1e-3)

    def test_projection_on_camera_plane(self):
        """Zero depth gives an infinite scale and no screen position."""
        world = World()
        world.camera.z = 5

        p = Point(1, 1, -5)
        p.project(world)

        assert math.isinf(p.scaling)
        assert math.isnan(p.px) and math.isnan(p.py)
        assert not p.is_projected_finite()

    def test_visibility_uses_inclusive_clip_range(self):
        """Test the near and far planes are both visible."""
        world = World()
        world.clip.near = 100
        world.clip.far = 1000

        assert Point(0, 0, 100).visible(world)
        assert not Point(0, 0, 99.9).visible(world)
        assert Point(0, 0, 1000).visible(world)
        assert not Point(0, 0, 1000.1).visible(world)

    def test_visibility_includes_camera_offset(self):
        world = World()
        world.camera.z = 50
        assert Point(0, 0, 50).visible(world)
        assert not Point(0, 0, 49).visible(world)


class TestPointTransforms:
    """Test in-place and copy-returning transforms."""

    def test_rotate_x_quarter_turn(self):
        p = Point(0, 1, 0)
        p.rotate_x(math.pi / 2)
        assert_point(p, (0, 0, -1))

    def test_rotate_y_quarter_turn(self):
        p = Point(1, 0, 0)
        p.rotate_y(math.pi / 2)
        assert_point(p, (0, 0, -1))

    def test_rotate_z_quarter_turn(self):
        p = Point(1, 0, 0)
        p.rotate_z(math.pi / 2)
        assert_point(p, (0, 1, 0))

    def test_rotations_compose(self):
        """Two eighth turns equal one quarter turn."""
        a = Point(1, 2, 3)
        b = a.clone()
        a.rotate_x(math.pi / 4)
        a.rotate_x(math.pi / 4)
        b.rotate_x(math.pi / 2)
        assert_point(a, b.as_tuple())

    def test_rotate_applies_x_then_y_then_z(self):
        a = Point(1, 2, 3)
        b = a.clone()
        a.rotate(0.3, -0.7, 1.1)
        b.rotate_x(0.3)
        b.rotate_y(-0.7)
        b.rotate_z(1.1)
        assert_point(a, b.as_tuple())

    def test_rotation_preserves_length(self):
        p = Point(1, -2, 5)
        before = p.magnitude()
        p.rotate(1.0, 2.0, 3.0)
        assert p.magnitude() == pytest.approx(before)

    def test_identity_transforms(self):
        """Zero translation and rotation and unit scale change nothing."""
        p = Point(1.5, -2.5, 3.5)
        p.translate(0, 0, 0)
        p.rotate(0, 0, 0)
        p.scale(1, 1, 1)
        p.uni_scale(1)
        assert p.as_tuple() == (1.5, -2.5, 3.5)

    def test_scale_per_axis(self):
        p = Point(1, 2, 3)
        p.scale(2, 3, 4)
        assert p.as_tuple() == (2, 6, 12)

    def test_copy_variants_leave_original(self):
        p = Point(1, 2, 3)
        assert p.translated(1, 1, 1).as_tuple() == (2, 3, 4)
        assert p.scaled_y(2).as_tuple() == (1, 4, 3)
        assert p.uni_scaled(2).as_tuple() == (2, 4, 6)
        assert_point(p.rotated_z(math.pi), (-1, -2, 3))
        assert p.as_tuple() == (1, 2, 3)

    def test_randomize_stays_in_range(self):
        rng = np.random.default_rng(1)
        for _ in range(50):
            p = Point(0, 0, 0)
            p.randomize(2.0, rng)
            assert all(-2.0 <= v < 2.0 for v in p.as_tuple())

    def test_randomize_is_reproducible_with_seed(self):
        a = Point(0, 0, 0).randomized(5.0, np.random.default_rng(42))
        b = Point(0, 0, 0).randomized(5.0, np.random.default_rng(42))
        assert a.as_tuple() == b.as_tuple()


class TestRandomPoints:
    """Test the random point generators."""

    @pytest.fixture
    def rng(self):
        return np.random.default_rng(1234)

    def test_in_box(self, rng):
        for _ in range(100):
            p = random_point_in_box(10, 20, 30, rng)
            assert abs(p.x) <= 5 and abs(p.y) <= 10 and abs(p.z) <= 15

    def test_on_sphere(self, rng):
        for _ in range(100):
            assert random_point_on_sphere(50, rng).magnitude() == pytest.approx(50)

    def test_in_sphere(self, rng):
        for _ in range(100):
            assert random_point_in_sphere(50, rng).magnitude() <= 50 + 1e-9

    def test_in_circle_is_flat(self, rng):
        for _ in range(100):
            p = random_point_in_circle(10, rng)
            assert p.y == 0
            assert math.hypot(p.x, p.z) <= 10 + 1e-9

    def test_on_cylinder(self, rng):
        for _ in range(100):
            p = random_point_on_cylinder(40, 10, rng)
            assert math.hypot(p.x, p.z) == pytest.approx(10)
            assert abs(p.y) <= 20

    def test_in_cylinder(self, rng):
        for _ in range(100):
            p = random_point_in_cylinder(40, 10, rng)
            assert math.hypot(p.x, p.z) <= 10 + 1e-9
            assert abs(p.y) <= 20

    def test_on_torus(self, rng):
        """Every point lies on the tube surface."""
        for _ in range(100):
            p = random_point_on_torus(100, 20, rng=rng)
            ring = math.hypot(p.x, p.z)
            assert math.hypot(ring - 100, p.y) == pytest.approx(20)

    def test_in_torus_partial_arc(self, rng):
        """A quarter arc keeps the tube angle and the sweep in the first quadrant."""
        for _ in range(200):
            p = random_point_in_torus(100, 20, arc=math.pi / 2, rng=rng)
            ring = math.hypot(p.x, p.z)
            assert math.hypot(ring - 100, p.y) <= 20 + 1e-9
            assert p.y >= 0
            assert ring >= 100 - 1e-9

"""Tests for PointList."""

import math

import numpy as np
import pytest

from wire3d.core.config import World
from wire3d.core.point import Point
from wire3d.core.point_list import PointList
from wire3d.render.surface import RecordingSurface


def make_list(*coords):
    return PointList(Point(*c) for c in coords)


class TestPointListBasics:
    """Test container behaviour."""

    def test_create_empty(self):
        assert len(PointList()) == 0

    def test_indexing(self):
        """Test positive and negative indexes."""
        points = make_list((0, 0, 0), (1, 0, 0), (2, 0, 0))
        assert points[0].x == 0
        assert points[-1].x == 2
        assert points.first() is points[0]
        assert points.last() is points[2]

    def test_index_out_of_range(self):
        points = make_list((0, 0, 0))
        with pytest.raises(IndexError):
            points.get(1)

    def test_index_of_uses_identity(self):
        """A point with equal coordinates is not a member."""
        points = make_list((1, 2, 3))
        assert points.index_of(points[0]) == 0
        with pytest.raises(ValueError):
            points.index_of(Point(1, 2, 3))

    def test_add_xyz_returns_point(self):
        points = PointList()
        p = points.add_xyz(1, 2, 3)
        assert p in points
        assert len(points) == 1

    def test_clone_is_deep(self):
        points = make_list((1, 1, 1), (2, 2, 2))
        copy = points.clone()
        copy.translate_x(10)
        assert points[0].x == 1
        assert copy[0].x == 11
        assert copy[0] is not points[0]


class TestPointListGeometry:
    """Test the numpy bridge and bounding box helpers."""

    def test_to_numpy(self):
        points = make_list((0, 1, 2), (3, 4, 5))
        np.testing.assert_array_equal(points.to_numpy(), [[0, 1, 2], [3, 4, 5]])

    def test_to_numpy_empty(self):
        assert PointList().to_numpy().shape == (0, 3)

    def test_set_from_numpy(self):
        points = make_list((0, 0, 0), (1, 1, 1))
        first = points[0]
        points.set_from_numpy(np.array([[5, 6, 7], [8, 9, 10]]))
        assert first.as_tuple() == (5, 6, 7)
        assert points[1].as_tuple() == (8, 9, 10)

    def test_set_from_numpy_shape_mismatch(self):
        points = make_list((0, 0, 0))
        with pytest.raises(ValueError):
            points.set_from_numpy(np.zeros((2, 3)))

    def test_bounds(self):
        points = make_list((0, 0, 0), (10, 20, 30), (5, 10, 15))
        min_pt, max_pt = points.bounds
        np.testing.assert_array_equal(min_pt, [0, 0, 0])
        np.testing.assert_array_equal(max_pt, [10, 20, 30])
        np.testing.assert_array_equal(points.center, [5, 10, 15])
        np.testing.assert_array_equal(points.size, [10, 20, 30])

    def test_bounds_empty_raises(self):
        with pytest.raises(ValueError):
            PointList().bounds

    def test_center_at_origin(self):
        points = make_list((10, 10, 10), (20, 30, 40))
        points.center_at_origin()
        np.testing.assert_array_equal(points.center, [0, 0, 0])


class TestPointListCulling:
    """Test culling and sorting."""

    def test_cull_preserves_order(self):
        points = make_list(*[(x, 0, 0) for x in range(10)])
        points.cull(lambda p: p.x % 2 == 0)
        assert [p.x for p in points] == [0, 2, 4, 6, 8]

    def test_culled_leaves_original(self):
        points = make_list(*[(x, 0, 0) for x in range(5)])
        kept = points.culled(lambda p: p.x > 2)
        assert len(kept) == 2
        assert len(points) == 5

    def test_cull_box_is_inclusive(self):
        points = make_list((0, 0, 0), (1, 1, 1), (2, 2, 2))
        points.cull_box((0, 0, 0), (1, 1, 1))
        assert len(points) == 2

    def test_sort_by_axis_is_stable(self):
        a, b, c = Point(1, 0, 0), Point(0, 0, 0), Point(1, 0, 1)
        points = PointList([a, b, c])
        points.sort_by_axis("x")
        assert list(points) == [b, a, c]
        points.sort_by_axis("z", ascending=False)
        assert list(points)[0] is c

    def test_sort_by_unknown_axis(self):
        with pytest.raises(ValueError):
            make_list((0, 0, 0)).sort_by_axis("w")


class TestPointListEffects:
    """Test push, noisify, normalize and lerp."""

    def test_push_moves_points_to_surface(self):
        points = make_list((1, 0, 0), (0, -2, 0), (10, 0, 0))
        points.push(Point(0, 0, 0), 5)
        np.testing.assert_allclose(points.to_numpy(), [[5, 0, 0], [0, -5, 0], [10, 0, 0]])

    def test_push_around_offset_center(self):
        points = make_list((11, 0, 0))
        points.push(Point(10, 0, 0), 3)
        np.testing.assert_allclose(points.to_numpy(), [[13, 0, 0]])

    def test_push_leaves_center_point(self):
        points = make_list((0, 0, 0))
        points.push(Point(0, 0, 0), 5)
        assert points[0].as_tuple() == (0, 0, 0)

    def test_noisify_zero_offset(self):
        points = make_list((0.3, 0.7, 1.1), (2.5, -1.5, 0.25))
        before = points.to_numpy()
        points.noisify(Point(0, 0, 0), 0.1, 0.0)
        np.testing.assert_array_equal(points.to_numpy(), before)

    def test_noisify_on_lattice_points(self):
        """Noise vanishes on integer sample positions."""
        points = make_list((1, 2, 3), (-4, 5, 6))
        before = points.to_numpy()
        points.noisify(Point(0, 0, 0), 1.0, 10.0)
        np.testing.assert_allclose(points.to_numpy(), before)

    def test_noisify_is_radial(self):
        """Each point moves along its direction from the origin."""
        points = make_list((0.3, 0.6, 0.9), (1.7, -0.4, 2.2))
        before = points.to_numpy()
        points.noisify(Point(0.5, 0.5, 0.5), 1.3, 0.5, seed=7)
        after = points.to_numpy()
        for b, a in zip(before, after):
            ratio = a / b
            np.testing.assert_allclose(ratio, ratio[0])

    def test_normalize(self):
        points = make_list((3, 0, 0), (0, 0, -2))
        points.normalize()
        np.testing.assert_allclose(points.to_numpy(), [[1, 0, 0], [0, 0, -1]])

    def test_lerp(self):
        a = make_list((0, 0, 0), (10, 10, 10))
        b = make_list((10, 0, 0), (20, 10, 10))
        mid = a.lerp(0.5, b)
        np.testing.assert_allclose(mid.to_numpy(), [[5, 0, 0], [15, 10, 10]])

    def test_lerp_length_mismatch(self):
        with pytest.raises(ValueError):
            make_list((0, 0, 0)).lerp(0.5, make_list((0, 0, 0), (1, 1, 1)))


class TestPointListTransforms:
    """Test bulk transforms delegate to each point."""

    def test_translate_and_scale(self):
        points = make_list((1, 2, 3), (4, 5, 6))
        points.translate(1, 1, 1)
        points.scale(2, 1, 1)
        np.testing.assert_array_equal(points.to_numpy(), [[4, 3, 4], [10, 6, 7]])

    def test_rotated_returns_copy(self):
        points = make_list((1, 0, 0))
        turned = points.rotated_z(math.pi / 2)
        np.testing.assert_allclose(turned.to_numpy(), [[0, 1, 0]], atol=1e-12)
        assert points[0].as_tuple() == (1, 0, 0)


class TestRenderPoints:
    """Test point rendering through the drawing contract."""

    def test_fill_circle_for_visible_points(self):
        world = World.centered(200, 200, camera_z=300)
        points = make_list((0, 0, 0), (10, 0, 0), (0, 0, -250))
        surface = RecordingSurface()

        points.render_points(surface, world, radius=2.0)

        fills = surface.named("fill_circle")
        assert len(fills) == 2
        _, x, y, r, color = fills[0]
        assert (x, y, r) == pytest.approx((100, 100, 2.0))
        assert color == (0.0, 0.0, 0.0, 1.0)
        assert fills[1][1] == pytest.approx(110)

    def test_state_restored_after_each_point(self):
        world = World.centered(200, 200, camera_z=300)
        surface = RecordingSurface()
        make_list((0, 0, 0)).render_points(surface, world, 1.0)
        names = [c[0] for c in surface.calls]
        assert names == ["save", "set_source_color", "fill_circle", "restore"]

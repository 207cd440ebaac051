"""Tests for mesh import."""

import numpy as np
import pytest
import trimesh

from wire3d.io.files import load_any
from wire3d.io.mesh import MeshLoader, load_mesh_shape


@pytest.fixture
def box_mesh() -> trimesh.Trimesh:
    """A 2x2x2 box centered at the origin."""
    return trimesh.creation.box(extents=[2, 2, 2])


class TestMeshLoader:
    """Test converting meshes to wireframes."""

    def test_from_trimesh(self, box_mesh):
        loader = MeshLoader.from_trimesh(box_mesh)
        assert loader.num_vertices == 8
        # 12 box edges plus one diagonal per face
        assert loader.num_edges == 18
        np.testing.assert_allclose(loader.size, [2, 2, 2])
        np.testing.assert_allclose(loader.center, [0, 0, 0])

    def test_to_shape(self, box_mesh):
        shape = MeshLoader.from_trimesh(box_mesh).to_shape()

        assert len(shape.points) == 8
        assert len(shape.segments) == 18
        for seg in shape.segments:
            pa, pb = shape.segment_points(seg)
            assert pa.distance(pb) > 0

        min_pt, max_pt = shape.bounds
        np.testing.assert_allclose(min_pt, [-1, -1, -1])
        np.testing.assert_allclose(max_pt, [1, 1, 1])

    def test_to_shape_does_not_modify_mesh(self, box_mesh):
        loader = MeshLoader.from_trimesh(box_mesh)
        before = loader.mesh.vertices.copy()
        loader.to_shape()
        np.testing.assert_array_equal(loader.mesh.vertices, before)

    def test_stats(self, box_mesh):
        stats = MeshLoader.from_trimesh(box_mesh).stats()
        assert stats["num_faces"] == 12
        assert stats["num_edges"] == 18
        assert stats["size"] == pytest.approx([2, 2, 2])

    def test_load_file(self, tmp_path, box_mesh):
        path = tmp_path / "box.stl"
        box_mesh.export(str(path))

        shape = load_mesh_shape(path)
        assert len(shape.points) == 8
        assert len(shape.segments) == 18
        assert len(load_any(path).points) == 8

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MeshLoader(tmp_path / "missing.stl")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "model.abc"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported format"):
            MeshLoader(path)

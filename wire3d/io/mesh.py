"""Mesh import using trimesh.

Loads 3D models from common formats (STL, OBJ, PLY, etc.) and turns them
into wireframe shapes: one point per vertex, one segment per unique edge.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import trimesh

from ..core.shape import Shape
from ..core.segment import Segment

if TYPE_CHECKING:
    from numpy.typing import NDArray


class MeshLoader:
    """Load a mesh and convert it to a wireframe Shape."""

    SUPPORTED_FORMATS = {".stl", ".obj", ".ply", ".off", ".glb", ".gltf"}

    def __init__(self, path: str | Path):
        """Load a mesh from file.

        Args:
            path: Path to mesh file (STL, OBJ, PLY, etc.)
        """
        self.path = Path(path)

        if not self.path.exists():
            raise FileNotFoundError(f"Mesh file not found: {self.path}")

        if self.path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {self.path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        mesh = trimesh.load_mesh(str(self.path))

        # Handle scenes (multiple meshes) by concatenating
        if isinstance(mesh, trimesh.Scene):
            meshes = [
                geom for geom in mesh.geometry.values()
                if isinstance(geom, trimesh.Trimesh)
            ]
            if not meshes:
                raise ValueError("No valid meshes found in scene")
            mesh = trimesh.util.concatenate(meshes)
        self._mesh = mesh

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> MeshLoader:
        """Wrap an in-memory mesh."""
        loader = cls.__new__(cls)
        loader.path = Path("<memory>")
        loader._mesh = mesh
        return loader

    @property
    def mesh(self) -> trimesh.Trimesh:
        """Return the loaded trimesh object."""
        return self._mesh

    @property
    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Return (min, max) bounding box coordinates."""
        return self._mesh.bounds[0], self._mesh.bounds[1]

    @property
    def size(self) -> NDArray[np.float64]:
        """Return size of bounding box (x, y, z)."""
        return self._mesh.bounds[1] - self._mesh.bounds[0]

    @property
    def center(self) -> NDArray[np.float64]:
        """Return center of bounding box."""
        return (self._mesh.bounds[0] + self._mesh.bounds[1]) / 2

    @property
    def num_vertices(self) -> int:
        return len(self._mesh.vertices)

    @property
    def num_edges(self) -> int:
        """Return number of unique edges (the segments of the wireframe)."""
        return len(self._mesh.edges_unique)

    def to_shape(self, merge_vertices: bool = True) -> Shape:
        """Build a wireframe shape from the mesh.

        Args:
            merge_vertices: Merge coincident vertices first, so faces that
                share a corner also share a point

        Returns:
            Shape with one point per vertex and one segment per unique edge
        """
        mesh = self._mesh
        if merge_vertices:
            mesh = mesh.copy()
            mesh.merge_vertices()

        shape = Shape()
        for x, y, z in np.asarray(mesh.vertices, dtype=np.float64).tolist():
            shape.add_xyz(x, y, z)
        shape.segments = [Segment(int(a), int(b)) for a, b in mesh.edges_unique]
        return shape

    def stats(self) -> dict:
        """Return statistics about the mesh."""
        return {
            "path": str(self.path),
            "num_vertices": self.num_vertices,
            "num_edges": self.num_edges,
            "num_faces": len(self._mesh.faces),
            "bounds_min": self.bounds[0].tolist(),
            "bounds_max": self.bounds[1].tolist(),
            "size": self.size.tolist(),
        }

    def __repr__(self) -> str:
        return (
            f"MeshLoader({self.path.name}, "
            f"{self.num_vertices} vertices, "
            f"{self.num_edges} edges)"
        )


def load_mesh_shape(path: str | Path) -> Shape:
    """Convenience function to load a mesh file straight into a Shape."""
    return MeshLoader(path).to_shape()

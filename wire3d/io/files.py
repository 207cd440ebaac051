"""Pick a shape loader from the file extension."""

from __future__ import annotations

from pathlib import Path

from ..core.shape import Shape
from .cloud import load_xyz
from .mesh import MeshLoader, load_mesh_shape
from .serialize import load_shape


def load_any(path: str | Path) -> Shape:
    """Load a shape from a point cloud (.xyz), a mesh file or shape text.

    Any extension that is neither ``.xyz`` nor a supported mesh format is
    read as the plain-text shape format.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".xyz":
        return load_xyz(path)
    if suffix in MeshLoader.SUPPORTED_FORMATS:
        return load_mesh_shape(path)
    return load_shape(path)

"""Placement transforms for shapes in a scene.

Transform3D stores position, rotation and uniform scale and converts them to
a 4x4 homogeneous matrix. Rotation angles are radians and follow the same
convention as :meth:`wire3d.core.point.Point.rotate`: X first, then Y, then
Z, so a transform and the equivalent chain of Shape calls agree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field
from scipy.spatial.transform import Rotation

if TYPE_CHECKING:
    from ..core.shape import Shape


class Transform3D(BaseModel):
    """3D transformation: scale, then rotate, then translate.

    Attributes:
        position: XYZ translation
        rotation: XYZ angles in radians (applied X, then Y, then Z)
        scale: Uniform scale factor
    """

    position: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="XYZ translation"
    )
    rotation: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        description="XYZ rotation in radians"
    )
    scale: float = Field(
        default=1.0,
        gt=0.0,
        description="Uniform scale factor"
    )

    model_config = {"frozen": False}

    def rotation_matrix(self) -> NDArray[np.float64]:
        """Return the 3x3 rotation matrix.

        Point.rotate_x turns y towards z, the opposite sense of a
        right-handed rotation about X, hence the negated X angle.
        """
        rx, ry, rz = self.rotation
        return Rotation.from_euler('xyz', (-rx, ry, rz)).as_matrix()

    def to_matrix(self) -> NDArray[np.float64]:
        """Convert to a 4x4 homogeneous matrix built as T @ R @ S."""
        s = np.eye(4, dtype=np.float64)
        s[0, 0] = s[1, 1] = s[2, 2] = self.scale

        r = np.eye(4, dtype=np.float64)
        r[:3, :3] = self.rotation_matrix()

        t = np.eye(4, dtype=np.float64)
        t[:3, 3] = self.position

        return t @ r @ s

    def apply_to_points(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the transformation to an Nx3 array of points.

        Returns:
            Transformed Nx3 array
        """
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        homogeneous = np.hstack([points, np.ones((len(points), 1))])
        return (self.to_matrix() @ homogeneous.T).T[:, :3]

    def apply_to_shape(self, shape: Shape) -> None:
        """Transform a shape's points in place."""
        if len(shape.points) == 0:
            return
        shape.points.set_from_numpy(self.apply_to_points(shape.points.to_numpy()))

    def is_identity(self) -> bool:
        return np.allclose(self.to_matrix(), np.eye(4))

    @classmethod
    def identity(cls) -> Transform3D:
        """Return identity transform (no transformation)."""
        return cls()

    def __repr__(self) -> str:
        return (
            f"Transform3D(pos={self.position}, "
            f"rot={self.rotation}, scale={self.scale:.2f})"
        )

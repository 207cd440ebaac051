"""Scene and shape placement data structures.

A Scene holds the world settings (camera, clipping, fog, water, color) and a
list of placements. Each placement refers to a shape file or a named
primitive and positions it with a Transform3D. Scenes are saved as JSON.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from ..core.config import World
from ..core.shape import Shape
from ..io.files import load_any
from ..primitives.shapes import build_primitive, get_primitive
from .transform import Transform3D

if TYPE_CHECKING:
    from ..render.surface import Surface

logger = logging.getLogger(__name__)


class ShapePlacement(BaseModel):
    """A single shape with its placement in the scene.

    The shape comes either from ``source_path`` (shape text, ``.xyz`` point
    cloud or mesh file) or from ``primitive`` plus ``params``; exactly one of
    the two must be given.
    """

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4())[:8],
        description="Unique identifier for this placement"
    )
    name: str = Field(default="", description="Display name for the shape")
    source_path: str | None = Field(
        default=None,
        description="Path to a shape, point cloud or mesh file"
    )
    primitive: str | None = Field(default=None, description="Name of a registered primitive")
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments for the primitive"
    )
    transform: Transform3D = Field(
        default_factory=Transform3D,
        description="Position, rotation, and scale"
    )

    # Drawing settings (override the world defaults)
    color: tuple[float, float, float, float] | None = Field(
        default=None,
        description="RGBA stroke color (0-1 range), world color if unset"
    )
    line_width: float | None = Field(default=None, gt=0, description="Base line width")
    point_radius: float | None = Field(
        default=None,
        gt=0,
        description="Draw points with this radius instead of stroking segments"
    )
    visible: bool = Field(default=True, description="Whether the shape is drawn")

    # Untransformed source shape (not serialized)
    _shape: Shape | None = PrivateAttr(default=None)

    model_config = {"frozen": False}

    @model_validator(mode="after")
    def _check_source(self) -> ShapePlacement:
        if (self.source_path is None) == (self.primitive is None):
            raise ValueError("A placement needs exactly one of source_path or primitive")
        return self

    def get_absolute_path(self, base_dir: Path | None = None) -> Path:
        """Resolve the source path to an absolute path.

        Args:
            base_dir: Base directory for relative paths
        """
        if self.source_path is None:
            raise ValueError(f"Placement '{self.name}' has no source path")
        path = Path(self.source_path)
        if path.is_absolute():
            return path
        if base_dir is not None:
            return (base_dir / path).resolve()
        return path.resolve()

    def build_shape(self, base_dir: Path | None = None) -> Shape:
        """Return a fresh, transformed copy of this placement's shape.

        The source is loaded (or generated) once and cached; every call
        clones the cache before applying the transform.
        """
        if self._shape is None:
            if self.primitive is not None:
                self._shape = build_primitive(self.primitive, self.params)
            else:
                self._shape = load_any(self.get_absolute_path(base_dir))
            logger.debug(f"Built source for '{self.name}': {self._shape!r}")

        shape = self._shape.clone()
        self.transform.apply_to_shape(shape)
        return shape

    def world_for(self, world: World) -> World:
        """Return the world to draw this placement with."""
        if self.color is None:
            return world
        return world.model_copy(update={"color": self.color})


class Scene(BaseModel):
    """A scene containing multiple shapes drawn together."""

    name: str = Field(default="Untitled Scene", description="Scene name")
    version: str = Field(default="1.0", description="Scene file version")

    world: World = Field(default_factory=World, description="Camera and shading settings")

    placements: list[ShapePlacement] = Field(
        default_factory=list,
        description="Shapes with their placements"
    )

    # Directory that relative source paths are resolved against
    _base_dir: Path | None = PrivateAttr(default=None)

    model_config = {"frozen": False}

    def add_file(
        self,
        source_path: str | Path,
        name: str | None = None,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        rotation: tuple[float, float, float] = (0.0, 0.0, 0.0),
        scale: float = 1.0,
        **kwargs: Any,
    ) -> ShapePlacement:
        """Add a shape file to the scene.

        Args:
            source_path: Path to the shape, point cloud or mesh file
            name: Display name (defaults to filename)
            position: XYZ translation
            rotation: XYZ rotation in radians
            scale: Uniform scale factor
            **kwargs: Additional ShapePlacement fields

        Returns:
            The created ShapePlacement
        """
        path = Path(source_path)
        placement = ShapePlacement(
            source_path=str(path),
            name=name or path.stem,
            transform=Transform3D(position=position, rotation=rotation, scale=scale),
            **kwargs,
        )
        self.placements.append(placement)
        return placement

    def add_primitive(
        self,
        primitive: str,
        params: dict[str, Any] | None = None,
        name: str | None = None,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        rotation: tuple[float, float, float] = (0.0, 0.0, 0.0),
        scale: float = 1.0,
        **kwargs: Any,
    ) -> ShapePlacement:
        """Add a generated primitive to the scene.

        Raises:
            ValueError: If the primitive name is unknown
        """
        get_primitive(primitive)
        placement = ShapePlacement(
            primitive=primitive,
            params=params or {},
            name=name or primitive,
            transform=Transform3D(position=position, rotation=rotation, scale=scale),
            **kwargs,
        )
        self.placements.append(placement)
        return placement

    def remove_placement(self, placement_id: str) -> bool:
        """Remove a placement by ID.

        Returns:
            True if the placement was removed, False if not found
        """
        for i, placement in enumerate(self.placements):
            if placement.id == placement_id:
                self.placements.pop(i)
                return True
        return False

    def get_placement(self, placement_id: str) -> ShapePlacement | None:
        for placement in self.placements:
            if placement.id == placement_id:
                return placement
        return None

    def build_shapes(self) -> list[tuple[ShapePlacement, Shape]]:
        """Build the transformed shape of every visible placement, in order."""
        return [
            (placement, placement.build_shape(self._base_dir))
            for placement in self.placements
            if placement.visible
        ]

    def render(self, surface: Surface) -> int:
        """Draw every visible placement onto a surface.

        Placements with a ``point_radius`` draw their points; the others
        stroke their segments.

        Returns:
            Number of placements drawn
        """
        built = self.build_shapes()
        for placement, shape in built:
            world = placement.world_for(self.world)
            if placement.point_radius is not None:
                shape.render_points(surface, world, placement.point_radius)
            else:
                surface.save()
                try:
                    shape.stroke(surface, world, placement.line_width)
                finally:
                    surface.restore()
        logger.info(f"Rendered {len(built)} shapes from scene '{self.name}'")
        return len(built)

    def save(self, path: str | Path) -> None:
        """Save scene to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> Scene:
        """Load scene from a JSON file.

        Relative source paths are resolved against the file's directory.
        """
        path = Path(path)
        with open(path) as f:
            data = json.load(f)

        scene = cls.model_validate(data)
        scene._base_dir = path.parent.resolve()
        return scene

    def __repr__(self) -> str:
        return f"Scene('{self.name}', {len(self.placements)} placements)"

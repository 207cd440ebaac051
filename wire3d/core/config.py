"""World configuration for wire3d.

This module defines the camera, clipping, fog and water-level settings used by
projection and shading. A ``World`` is always passed explicitly to the
functions that need it; there is no module-level world. Worlds can be loaded
from JSON files or constructed programmatically, and may be mutated freely
between frames.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class CameraParams(BaseModel):
    """Perspective camera.

    ``x`` and ``y`` are the screen position of the vanishing point (usually
    the canvas center); ``z`` is the distance added to every point's depth.
    """

    focal_length: float = Field(default=300.0, gt=0, description="Focal length in screen units")
    x: float = Field(default=0.0, description="Projection center X on the canvas")
    y: float = Field(default=0.0, description="Projection center Y on the canvas")
    z: float = Field(default=0.0, description="Camera distance added to point depth")


class ClipParams(BaseModel):
    """Near/far clipping range, measured on ``point.z + camera.z``."""

    near: float = Field(default=100.0, description="Nearest visible depth (inclusive)")
    far: float = Field(default=100000.0, description="Farthest visible depth (inclusive)")


class FogParams(BaseModel):
    """Depth fog: fully opaque at ``near``, fully transparent at ``far``."""

    enabled: bool = Field(default=False, description="Enable depth fog")
    near: float = Field(default=400.0, description="Depth where fog starts")
    far: float = Field(default=1200.0, description="Depth where objects fade out completely")


class WaterParams(BaseModel):
    """Water-level fade: fully opaque at ``top``, fully transparent at ``bottom``.

    Heights are raw point ``y`` values, so with the usual y-down convention
    ``bottom`` is greater than ``top``.
    """

    enabled: bool = Field(default=False, description="Enable water-level fade")
    top: float = Field(default=0.0, description="Height where fading starts")
    bottom: float = Field(default=200.0, description="Height where objects disappear")


class World(BaseModel):
    """Everything projection and shading need to know about the scene."""

    camera: CameraParams = Field(default_factory=CameraParams)
    clip: ClipParams = Field(default_factory=ClipParams)
    fog: FogParams = Field(default_factory=FogParams)
    water: WaterParams = Field(default_factory=WaterParams)

    color: tuple[float, float, float, float] = Field(
        default=(0.0, 0.0, 0.0, 1.0),
        description="Base stroke/fill color as RGBA (0-1 range)"
    )
    scale_line_width: bool = Field(
        default=True,
        description="Scale stroke width by the projected scale of each segment"
    )

    model_config = {"frozen": False, "validate_assignment": True}

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
        if any(c < 0.0 or c > 1.0 for c in value):
            raise ValueError(f"Color components must be in [0, 1], got {value}")
        return value

    def set_rgb(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        """Set the base drawing color."""
        self.color = (r, g, b, a)

    def is_visible(self, z: float) -> bool:
        """Return True if an object at depth ``z`` lies inside the clip range."""
        depth = z + self.camera.z
        return self.clip.near <= depth <= self.clip.far

    @classmethod
    def centered(
        cls,
        width: float,
        height: float,
        camera_z: float = 0.0,
        **kwargs,
    ) -> World:
        """Create a World projecting onto the center of a ``width x height`` canvas."""
        world = cls(**kwargs)
        world.camera.x = width / 2
        world.camera.y = height / 2
        world.camera.z = camera_z
        return world

    @classmethod
    def from_file(cls, path: Path | str) -> World:
        """Load a world from a JSON file."""
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_file(self, path: Path | str) -> None:
        """Save this world to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @classmethod
    def default(cls) -> World:
        """Create a default world."""
        return cls()

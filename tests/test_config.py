"""Tests for World configuration."""

import pytest
from pydantic import ValidationError

from wire3d.core.config import World


class TestWorld:
    """Test World defaults, validation and persistence."""

    def test_defaults(self):
        world = World.default()
        assert world.camera.focal_length == 300.0
        assert world.clip.near == 100.0
        assert world.clip.far == 100000.0
        assert not world.fog.enabled
        assert not world.water.enabled
        assert world.color == (0.0, 0.0, 0.0, 1.0)
        assert world.scale_line_width

    def test_centered(self):
        world = World.centered(800, 600, camera_z=500)
        assert (world.camera.x, world.camera.y, world.camera.z) == (400, 300, 500)

    def test_worlds_are_independent(self):
        """Each world owns its own camera."""
        a = World()
        b = World()
        a.camera.z = 100
        assert b.camera.z == 0

    def test_invalid_color(self):
        with pytest.raises(ValidationError):
            World(color=(2.0, 0.0, 0.0, 1.0))

    def test_set_rgb_validates(self):
        world = World()
        with pytest.raises(ValidationError):
            world.set_rgb(2.0, 0.0, 0.0)
        world.set_rgb(1.0, 0.5, 0.0, 0.25)
        assert world.color == (1.0, 0.5, 0.0, 0.25)

    def test_invalid_focal_length(self):
        with pytest.raises(ValidationError):
            World(camera={"focal_length": 0})

    def test_is_visible(self):
        world = World()
        world.camera.z = 50
        assert world.is_visible(50)
        assert not world.is_visible(49)

    def test_file_roundtrip(self, tmp_path):
        world = World.centered(640, 480, camera_z=900)
        world.fog.enabled = True
        world.set_rgb(0.2, 0.4, 0.6)

        path = tmp_path / "world.json"
        world.to_file(path)
        loaded = World.from_file(path)

        assert loaded == world

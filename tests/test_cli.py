"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from wire3d.cli import _parse_params, main
from wire3d.core.config import World
from wire3d.io.serialize import load_shape
from wire3d.scene import Scene

TRIANGLE = "3\n0 -10 0\n10 10 0\n-10 10 0\n3\n0 1\n1 2\n2 0\n"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def triangle_file(tmp_path):
    path = tmp_path / "triangle.txt"
    path.write_text(TRIANGLE)
    return path


class TestParams:
    """Test key=value parsing."""

    def test_values_read_as_json(self):
        params = _parse_params(("w=2", "r=1.5", "show_long=false", "label=abc"))
        assert params == {"w": 2, "r": 1.5, "show_long": False, "label": "abc"}


class TestPrimitiveCommands:
    """Test the primitive and primitives commands."""

    def test_primitives_lists_names(self, runner):
        result = runner.invoke(main, ["primitives"])
        assert result.exit_code == 0
        assert "torus" in result.output
        assert "sphere" in result.output

    def test_primitive_to_text(self, runner, tmp_path):
        out = tmp_path / "box.txt"
        result = runner.invoke(
            main, ["primitive", "box", "-o", str(out), "-p", "w=2", "-p", "h=2", "-p", "d=2"]
        )
        assert result.exit_code == 0, result.output
        shape = load_shape(out)
        assert len(shape.points) == 8
        assert len(shape.segments) == 12

    def test_primitive_to_png(self, runner, tmp_path):
        out = tmp_path / "torus.png"
        result = runner.invoke(
            main, ["primitive", "torus", "-o", str(out), "-p", "r1=200", "-p", "r2=50", "-r", "30", "0", "0"]
        )
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_unknown_primitive(self, runner, tmp_path):
        result = runner.invoke(main, ["primitive", "blob", "-o", str(tmp_path / "x.txt")])
        assert result.exit_code != 0
        assert "Unknown primitive" in result.output

    def test_bad_param(self, runner, tmp_path):
        result = runner.invoke(main, ["primitive", "box", "-o", str(tmp_path / "x.txt"), "-p", "w"])
        assert result.exit_code == 2


class TestShapeCommands:
    """Test render, info and convert."""

    def test_info(self, runner, triangle_file):
        result = runner.invoke(main, ["info", str(triangle_file)])
        assert result.exit_code == 0, result.output
        assert "Points" in result.output
        assert "Segments" in result.output

    def test_info_bad_file(self, runner, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("oops\n")
        result = runner.invoke(main, ["info", str(path)])
        assert result.exit_code != 0
        assert "Error loading" in result.output

    def test_render(self, runner, triangle_file, tmp_path):
        out = tmp_path / "tri.png"
        result = runner.invoke(main, ["render", str(triangle_file), "-o", str(out), "--width", "200", "--height", "200"])
        assert result.exit_code == 0, result.output
        assert out.exists()

    def test_render_points(self, runner, triangle_file, tmp_path):
        out = tmp_path / "tri.png"
        result = runner.invoke(main, ["render", str(triangle_file), "-o", str(out), "--points", "3"])
        assert result.exit_code == 0, result.output
        assert "3 points" in result.output

    def test_convert_xyz(self, runner, tmp_path):
        cloud = tmp_path / "cloud.xyz"
        cloud.write_text("3\nsample\nC 0 0 0\nO 1 0 0\nH 0 1 0\n")
        out = tmp_path / "cloud.txt"

        result = runner.invoke(main, ["convert", str(cloud), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert len(load_shape(out).points) == 3

    def test_convert_subdivide(self, runner, triangle_file, tmp_path):
        out = tmp_path / "fine.txt"
        result = runner.invoke(main, ["convert", str(triangle_file), "-o", str(out), "--subdivide", "5"])
        assert result.exit_code == 0, result.output
        shape = load_shape(out)
        assert max(seg.length(shape.points) for seg in shape.segments) <= 5


class TestSceneCommands:
    """Test scene rendering and config generation."""

    def test_render_scene(self, runner, tmp_path, triangle_file):
        scene = Scene(world=World.centered(200, 200, camera_z=400))
        scene.add_file(triangle_file.name)
        scene.add_primitive("sphere", {"radius": 50, "long": 4, "lat": 8})
        scene_path = tmp_path / "scene.json"
        scene.save(scene_path)
        out = tmp_path / "scene.png"

        result = runner.invoke(main, ["render", str(scene_path), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "Rendered 2 shapes" in result.output
        assert out.exists()

    def test_info_scene(self, runner, tmp_path):
        scene = Scene(name="Demo")
        scene.add_primitive("box", {"w": 1, "h": 1, "d": 1})
        scene_path = tmp_path / "demo.json"
        scene.save(scene_path)

        result = runner.invoke(main, ["info", str(scene_path)])

        assert result.exit_code == 0, result.output
        assert "Demo" in result.output

    def test_init_config(self, runner, tmp_path):
        out = tmp_path / "world.json"
        result = runner.invoke(main, ["init-config", "-o", str(out), "--width", "640", "--height", "480"])
        assert result.exit_code == 0, result.output
        world = World.from_file(out)
        assert (world.camera.x, world.camera.y) == (320, 240)

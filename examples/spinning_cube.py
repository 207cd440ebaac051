#!/usr/bin/env python3
"""Example: Render a few frames of a spinning, fogged cube.

This script demonstrates the basic workflow for wire3d:
1. Build a shape from a primitive
2. Configure the camera and fog
3. Transform, project and stroke it onto a surface, once per frame

Run with: python examples/spinning_cube.py
"""

import math
from pathlib import Path

import trimesh

from wire3d import World
from wire3d.io.mesh import MeshLoader
from wire3d.primitives import box, grid_plane
from wire3d.render.matplotlib_surface import MatplotlibSurface


def create_mesh_cube(size: float = 150.0):
    """Build the same cube through trimesh, including face diagonals."""
    return MeshLoader.from_trimesh(trimesh.creation.box(extents=[size, size, size])).to_shape()


def main():
    out_dir = Path("frames")
    frames = 12

    world = World.centered(600, 600, camera_z=700)
    world.fog.enabled = True
    world.fog.near = 500
    world.fog.far = 1000

    print("wire3d - Spinning Cube Example")
    print("=" * 40)

    cube = box(300, 300, 300)
    cube.subdivide(50)
    floor = grid_plane(800, 800, rows=16, cols=16)
    floor.translate_y(250)
    inner = create_mesh_cube()

    print(f"   Cube: {len(cube.points)} points, {len(cube.segments)} segments")
    print(f"   Floor: {len(floor.points)} points, {len(floor.segments)} segments")

    for frame in range(frames):
        angle = frame / frames * math.pi / 2
        surface = MatplotlibSurface(600, 600, line_width=1.5)

        floor.stroke(surface, world)
        cube.rotated(angle * 0.5, angle, 0).stroke(surface, world)
        inner.rotated(0, -angle, angle).stroke(surface, world, line_width=0.75)

        path = out_dir / f"frame_{frame:03d}.png"
        surface.save_png(path)
        print(f"   Saved {path} ({surface.num_strokes} strokes)")

    print("\nDone!")


if __name__ == "__main__":
    main()

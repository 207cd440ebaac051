"""Command-line interface for wire3d.

Usage:
    wire3d render shape.txt -o out.png [options]
    wire3d info model.stl
    wire3d convert cloud.xyz -o cloud.txt
    wire3d primitive torus -o torus.png -p r1=200 -p r2=50
    wire3d primitives
    wire3d init-config
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.config import World
from .core.shape import Shape
from .io.files import load_any
from .io.serialize import save_shape
from .primitives.shapes import build_primitive, list_primitives
from .scene import Scene

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False)],
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """wire3d - Wireframe 3D shapes rendered in perspective."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


def _is_scene_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() == ".json"


def _parse_params(values: tuple[str, ...]) -> dict:
    """Turn ``key=value`` strings into keyword arguments.

    Values are read as JSON where possible (numbers, booleans), otherwise
    kept as strings.
    """
    params = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got {item!r}", param_hint="--param")
        try:
            params[key] = json.loads(raw)
        except json.JSONDecodeError:
            params[key] = raw
    return params


def _fit(shape: Shape, max_size: float) -> None:
    """Center a shape on the origin and scale it so its largest side is ``max_size``."""
    if max_size <= 0 or len(shape.points) == 0:
        return
    shape.center()
    largest = float(shape.points.size.max())
    if largest > 0:
        shape.uni_scale(max_size / largest)


def _make_world(config: str | None, width: int, height: int, distance: float) -> World:
    world = World.from_file(config) if config else World.default()
    world.camera.x = width / 2
    world.camera.y = height / 2
    world.camera.z = distance
    return world


def _draw_shape(
    shape: Shape,
    output: str,
    world: World,
    width: int,
    height: int,
    line_width: float,
    point_radius: float | None,
) -> None:
    from .render.matplotlib_surface import MatplotlibSurface

    surface = MatplotlibSurface(width, height, line_width=line_width)
    if point_radius:
        shape.render_points(surface, world, point_radius)
    else:
        shape.stroke(surface, world)
    surface.save_png(output)
    console.print(f"[green]Saved {surface.num_strokes:,} strokes, {surface.num_fills:,} points to {output}[/green]")


def _stats_table(shape: Shape, title: str | None = None) -> Table:
    stats = shape.stats()

    table = Table(title=title)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Points", f"{stats['num_points']:,}")
    table.add_row("Segments", f"{stats['num_segments']:,}")
    if "bounds_min" in stats:
        table.add_row(
            "Bounds (min)",
            f"({stats['bounds_min'][0]:.2f}, {stats['bounds_min'][1]:.2f}, {stats['bounds_min'][2]:.2f})"
        )
        table.add_row(
            "Bounds (max)",
            f"({stats['bounds_max'][0]:.2f}, {stats['bounds_max'][1]:.2f}, {stats['bounds_max'][2]:.2f})"
        )
        table.add_row(
            "Size",
            f"{stats['size'][0]:.2f} x {stats['size'][1]:.2f} x {stats['size'][2]:.2f}"
        )
    if "total_length" in stats:
        table.add_row("Total length", f"{stats['total_length']:.2f}")
        table.add_row("Longest segment", f"{stats['max_segment_length']:.2f}")
    return table


@main.command()
@click.argument("source", type=click.Path(exists=True))
@click.option(
    "--output", "-o",
    type=click.Path(),
    required=True,
    help="Output PNG path",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="World settings file (camera, clipping, fog, water)",
)
@click.option("--width", type=int, default=800, help="Image width in pixels")
@click.option("--height", type=int, default=800, help="Image height in pixels")
@click.option(
    "--distance", "-d",
    type=float,
    default=800.0,
    help="Camera distance from the shape center",
)
@click.option(
    "--rotate", "-r",
    type=(float, float, float),
    default=(0.0, 0.0, 0.0),
    help="Rotation around X, Y and Z in degrees",
)
@click.option(
    "--max-size",
    type=float,
    default=400.0,
    help="Center and scale the shape to this size (0 keeps it as is; ignored for scenes)",
)
@click.option("--line-width", type=float, default=1.0, help="Base stroke width in pixels")
@click.option(
    "--points", "point_radius",
    type=float,
    default=None,
    help="Draw points with this radius instead of segments",
)
def render(
    source: str,
    output: str,
    config: str | None,
    width: int,
    height: int,
    distance: float,
    rotate: tuple[float, float, float],
    max_size: float,
    line_width: float,
    point_radius: float | None,
) -> None:
    """Render a shape, point cloud, mesh or scene to a PNG image.

    SOURCE: Shape text file, .xyz point cloud, mesh (STL/OBJ/...) or .json scene
    """
    from .render.matplotlib_surface import MatplotlibSurface

    try:
        if _is_scene_file(source):
            scene = Scene.load(source)
            surface = MatplotlibSurface(width, height, line_width=line_width)
            with console.status("Rendering scene..."):
                count = scene.render(surface)
            surface.save_png(output)
            console.print(f"[green]Rendered {count} shapes to {output}[/green]")
            return

        with console.status("Loading shape..."):
            shape = load_any(source)
        _fit(shape, max_size)
        shape.rotate(*(math.radians(a) for a in rotate))

        world = _make_world(config, width, height, distance)
        _draw_shape(shape, output, world, width, height, line_width, point_radius)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()


@main.command()
@click.argument("source", type=click.Path(exists=True))
def info(source: str) -> None:
    """Show information about a shape file or scene.

    SOURCE: Shape text file, .xyz point cloud, mesh (STL/OBJ/...) or .json scene
    """
    path = Path(source)

    console.print(f"\n[bold]{'Scene' if _is_scene_file(path) else 'Shape'} Info: {path.name}[/bold]\n")

    try:
        if _is_scene_file(path):
            scene = Scene.load(path)

            console.print(f"[cyan]Scene name:[/cyan] {scene.name}")
            console.print(f"[cyan]Placements:[/cyan] {len(scene.placements)}")
            console.print()

            table = Table(title="Placements")
            table.add_column("Name", style="cyan")
            table.add_column("Source", style="white")
            table.add_column("Position", style="green")
            table.add_column("Rotation (rad)", style="yellow")
            table.add_column("Scale", style="magenta")
            table.add_column("Status", style="dim")

            for placement in scene.placements:
                pos = placement.transform.position
                rot = placement.transform.rotation
                table.add_row(
                    placement.name,
                    placement.source_path or f"primitive:{placement.primitive}",
                    f"({pos[0]:.1f}, {pos[1]:.1f}, {pos[2]:.1f})",
                    f"({rot[0]:.2f}, {rot[1]:.2f}, {rot[2]:.2f})",
                    f"{placement.transform.scale:.2f}",
                    "" if placement.visible else "hidden",
                )
            console.print(table)

        else:
            shape = load_any(path)
            console.print(_stats_table(shape))

    except Exception as e:
        console.print(f"[red]Error loading: {e}[/red]")
        raise click.Abort()


@main.command()
@click.argument("source", type=click.Path(exists=True))
@click.option(
    "--output", "-o",
    type=click.Path(),
    required=True,
    help="Output shape text file",
)
@click.option("--center", is_flag=True, help="Center the shape on the origin")
@click.option(
    "--subdivide",
    type=float,
    default=None,
    help="Split segments longer than this length",
)
def convert(source: str, output: str, center: bool, subdivide: float | None) -> None:
    """Convert a point cloud or mesh to the shape text format.

    SOURCE: Shape text file, .xyz point cloud or mesh (STL/OBJ/...)
    """
    try:
        shape = load_any(source)
        if center:
            shape.center()
        if subdivide is not None:
            shape.subdivide(subdivide)
        save_shape(shape, output)
        console.print(
            f"[green]Saved {len(shape.points):,} points, "
            f"{len(shape.segments):,} segments to {output}[/green]"
        )
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()


@main.command()
@click.argument("name")
@click.option(
    "--output", "-o",
    type=click.Path(),
    required=True,
    help="Output path: .png renders the shape, anything else saves shape text",
)
@click.option(
    "--param", "-p", "params",
    multiple=True,
    help="Generator parameter as key=value (repeatable)",
)
@click.option(
    "--rotate", "-r",
    type=(float, float, float),
    default=(0.0, 0.0, 0.0),
    help="Rotation around X, Y and Z in degrees",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for the random generators",
)
@click.option("--distance", "-d", type=float, default=800.0, help="Camera distance when rendering")
def primitive(
    name: str,
    output: str,
    params: tuple[str, ...],
    rotate: tuple[float, float, float],
    seed: int | None,
    distance: float,
) -> None:
    """Generate a primitive shape.

    NAME: Primitive name (see 'wire3d primitives')
    """
    from .core import rand

    try:
        kwargs = _parse_params(params)
        if seed is not None:
            rand.seed(seed)
        shape = build_primitive(name, kwargs)
        shape.rotate(*(math.radians(a) for a in rotate))

        if Path(output).suffix.lower() == ".png":
            world = _make_world(None, 800, 800, distance)
            _draw_shape(shape, output, world, 800, 800, 1.0, None)
        else:
            save_shape(shape, output)
            console.print(f"[green]Saved {name}: {len(shape.points):,} points, {len(shape.segments):,} segments to {output}[/green]")
    except click.BadParameter:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()


@main.command()
def primitives() -> None:
    """List available primitives."""
    console.print("\n[bold]Available Primitives[/bold]\n")

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Parameters", style="green")
    table.add_column("Description", style="white")

    for prim in list_primitives():
        table.add_row(prim["name"], ", ".join(prim["params"]), prim["description"])

    console.print(table)


@main.command()
@click.option(
    "--output", "-o",
    type=click.Path(),
    default="wire3d_world.json",
    help="Output path for world settings file",
)
@click.option("--width", type=int, default=800, help="Canvas width the camera is centered on")
@click.option("--height", type=int, default=800, help="Canvas height the camera is centered on")
@click.option("--distance", "-d", type=float, default=800.0, help="Camera distance")
def init_config(output: str, width: int, height: int, distance: float) -> None:
    """Generate a default world settings file."""
    try:
        world = World.centered(width, height, camera_z=distance)
        world.to_file(output)
        console.print(f"[green]Created config file: {output}[/green]")
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()

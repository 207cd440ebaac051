"""Import of .xyz point-cloud files.

XYZ files come from chemistry. The first line may hold the vertex count and
the second a comment; every other line is::

    [element] x y z

The element label is optional and ignored, and numbers may use any float
notation. Valid lines::

    C 0 1 2
    Fe -0.432 0.457 10
    H     1.23e23    2.34E-12    -0.23e-45
    34.765   45.987  -98.123

Lines with only two numbers are accepted too, with z = 0.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Iterable

from ..core.shape import Shape
from .serialize import ShapeFormatError

logger = logging.getLogger(__name__)

_FLOAT = r"([-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)"
_LINE = re.compile(rf"^\s*(?:[A-Za-z][A-Za-z0-9]*\s+)?{_FLOAT}\s+{_FLOAT}(?:\s+{_FLOAT})?\s*$")

# Lines allowed to hold a count or a comment instead of data.
HEADER_LINES = 2

# Rotation mapping the usual z-up convention of point clouds onto wire3d's.
XYZ_ORIENTATION = (-math.pi / 2, math.pi, 0.0)


def parse_xyz(lines: Iterable[str]) -> Shape:
    """Parse .xyz lines into a point-only shape, without re-orienting it.

    Raises:
        ShapeFormatError: If a line after the header cannot be parsed
    """
    shape = Shape()
    for num, line in enumerate(lines, start=1):
        match = _LINE.match(line)
        if match:
            x, y, z = match.groups()
            shape.add_xyz(float(x), float(y), float(z) if z is not None else 0.0)
        elif num > HEADER_LINES and line.strip():
            raise ShapeFormatError(f"Line {num}: could not parse {line.rstrip()!r}")
    return shape


def load_xyz(path: str | Path) -> Shape:
    """Load an .xyz file as a point-only shape.

    The cloud is centered on its bounding box and rotated by
    ``XYZ_ORIENTATION`` to match the scene's axes.

    Raises:
        FileNotFoundError: If the file does not exist
        ShapeFormatError: If a data line cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Point cloud not found: {path}")
    with open(path) as f:
        try:
            shape = parse_xyz(f)
        except ShapeFormatError as e:
            raise ShapeFormatError(f"{path}: {e}") from e

    shape.center()
    shape.rotate(*XYZ_ORIENTATION)
    logger.info(f"Loaded {len(shape.points):,} points from {path.name}")
    return shape

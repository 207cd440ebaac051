"""Plain-text shape persistence.

File format::

    <number of points>
    x y z
    ...
    <number of segments>
    indexA indexB
    ...

Indices are 0-based positions in the point list. A triangle::

    3
    0 -10 0
    10 10 0
    -10 10 0
    3
    0 1
    1 2
    2 0
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from ..core.shape import Shape

logger = logging.getLogger(__name__)


class ShapeFormatError(ValueError):
    """Raised when shape text cannot be parsed."""


def dumps(shape: Shape) -> str:
    """Serialize a shape to text.

    Floats are written with ``repr`` so loading gives back identical values.
    """
    lines = [str(len(shape.points))]
    lines.extend(f"{p.x!r} {p.y!r} {p.z!r}" for p in shape.points)
    lines.append(str(len(shape.segments)))
    lines.extend(f"{seg.a} {seg.b}" for seg in shape.segments)
    return "\n".join(lines) + "\n"


def save_shape(shape: Shape, path: str | Path) -> None:
    """Write a shape to a text file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(dumps(shape))
    logger.debug(f"Saved {shape!r} to {path}")


def _numbered(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    # Blank lines are ignored so trailing newlines do not matter.
    for num, line in enumerate(lines, start=1):
        line = line.strip()
        if line:
            yield num, line


def _next(it: Iterator[tuple[int, str]], what: str) -> tuple[int, str]:
    try:
        return next(it)
    except StopIteration:
        raise ShapeFormatError(f"Unexpected end of input, expected {what}") from None


def _parse_count(it: Iterator[tuple[int, str]], what: str) -> int:
    num, line = _next(it, what)
    try:
        count = int(line)
    except ValueError:
        raise ShapeFormatError(f"Line {num}: expected {what}, got {line!r}") from None
    if count < 0:
        raise ShapeFormatError(f"Line {num}: {what} must not be negative, got {count}")
    return count


def loads(text: str) -> Shape:
    """Parse shape text.

    Raises:
        ShapeFormatError: If a count is not an integer, a line is malformed or
            missing, or a segment index is out of range. No partial shape is
            returned.
    """
    it = _numbered(text.splitlines())
    shape = Shape()

    num_points = _parse_count(it, "point count")
    for _ in range(num_points):
        num, line = _next(it, "point coordinates")
        fields = line.split()
        if len(fields) != 3:
            raise ShapeFormatError(f"Line {num}: expected 'x y z', got {line!r}")
        try:
            x, y, z = (float(v) for v in fields)
        except ValueError:
            raise ShapeFormatError(f"Line {num}: invalid coordinates {line!r}") from None
        shape.add_xyz(x, y, z)

    num_segments = _parse_count(it, "segment count")
    for _ in range(num_segments):
        num, line = _next(it, "segment indices")
        fields = line.split()
        if len(fields) != 2:
            raise ShapeFormatError(f"Line {num}: expected 'indexA indexB', got {line!r}")
        try:
            i, j = (int(v) for v in fields)
        except ValueError:
            raise ShapeFormatError(f"Line {num}: invalid indices {line!r}") from None
        if not (0 <= i < num_points and 0 <= j < num_points):
            raise ShapeFormatError(
                f"Line {num}: segment index out of range ({i}, {j}), "
                f"must be from 0 to {num_points - 1}"
            )
        shape.add_segment_by_index(i, j)

    return shape


def load_shape(path: str | Path) -> Shape:
    """Load a shape from a text file.

    Raises:
        FileNotFoundError: If the file does not exist
        ShapeFormatError: If the contents cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Shape file not found: {path}")
    with open(path) as f:
        text = f.read()
    try:
        shape = loads(text)
    except ShapeFormatError as e:
        raise ShapeFormatError(f"{path}: {e}") from e
    logger.debug(f"Loaded {shape!r} from {path}")
    return shape

"""The drawing contract.

The pipeline never rasterizes anything itself. It issues a small set of
canvas-style calls to a :class:`Surface`, and any 2D target that implements
them (cairo context, matplotlib figure, SVG writer, recorder...) can be
drawn on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class Surface(ABC):
    """Abstract 2D drawing surface."""

    @abstractmethod
    def move_to(self, x: float, y: float) -> None:
        """Start a new sub-path at (x, y)."""

    @abstractmethod
    def line_to(self, x: float, y: float) -> None:
        """Extend the current path with a straight line to (x, y)."""

    @abstractmethod
    def stroke(self) -> None:
        """Stroke the current path with the current width and color, then clear it."""

    @abstractmethod
    def set_line_width(self, width: float) -> None:
        pass

    @abstractmethod
    def get_line_width(self) -> float:
        pass

    @abstractmethod
    def fill_circle(self, x: float, y: float, radius: float) -> None:
        """Fill a circle with the current color."""

    @abstractmethod
    def save(self) -> None:
        """Push a snapshot of the graphics state (line width, color)."""

    @abstractmethod
    def restore(self) -> None:
        """Pop the last snapshot taken by :meth:`save`."""

    @abstractmethod
    def set_source_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        pass


@dataclass
class GraphicsState:
    """Line width and RGBA color, as saved and restored by surfaces."""

    line_width: float = 1.0
    color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)


class StatefulSurface(Surface):
    """Surface base class that keeps the graphics state stack for subclasses."""

    def __init__(self, line_width: float = 1.0) -> None:
        self.state = GraphicsState(line_width=line_width)
        self._stack: list[GraphicsState] = []

    def set_line_width(self, width: float) -> None:
        self.state.line_width = width

    def get_line_width(self) -> float:
        return self.state.line_width

    def set_source_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self.state.color = (r, g, b, a)

    def save(self) -> None:
        self._stack.append(GraphicsState(self.state.line_width, self.state.color))

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() called without a matching save()")
        self.state = self._stack.pop()


class RecordingSurface(StatefulSurface):
    """A surface that records every drawing call instead of rendering.

    Each call is stored in :attr:`calls` as a tuple ``(name, *args)``.
    Strokes and fills also record the line width and color in effect, which
    makes it easy to check what the pipeline would have drawn.
    """

    def __init__(self, line_width: float = 1.0) -> None:
        super().__init__(line_width)
        self.calls: list[tuple[Any, ...]] = []

    def move_to(self, x: float, y: float) -> None:
        self.calls.append(("move_to", x, y))

    def line_to(self, x: float, y: float) -> None:
        self.calls.append(("line_to", x, y))

    def stroke(self) -> None:
        self.calls.append(("stroke", self.state.line_width, self.state.color))

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self.calls.append(("fill_circle", x, y, radius, self.state.color))

    def set_line_width(self, width: float) -> None:
        super().set_line_width(width)
        self.calls.append(("set_line_width", width))

    def set_source_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        super().set_source_color(r, g, b, a)
        self.calls.append(("set_source_color", r, g, b, a))

    def save(self) -> None:
        super().save()
        self.calls.append(("save",))

    def restore(self) -> None:
        super().restore()
        self.calls.append(("restore",))

    def named(self, name: str) -> list[tuple[Any, ...]]:
        """Return only the recorded calls with the given name."""
        return [c for c in self.calls if c[0] == name]

    def clear(self) -> None:
        self.calls.clear()

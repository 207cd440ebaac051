"""Matplotlib raster backend for the drawing contract."""

from __future__ import annotations

import logging
from pathlib import Path

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle

from .surface import StatefulSurface

logger = logging.getLogger(__name__)


class MatplotlibSurface(StatefulSurface):
    """Draw onto a matplotlib figure using canvas coordinates.

    The axes fill the whole figure, with the origin at the top-left corner,
    y growing downwards and one unit per pixel. Line widths are given in
    pixels (the figure uses 72 dpi, where a point equals a pixel).
    """

    DPI = 72

    def __init__(
        self,
        width: int = 800,
        height: int = 800,
        background: tuple[float, float, float] = (1.0, 1.0, 1.0),
        line_width: float = 1.0,
    ):
        """Create an empty canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            background: RGB background color (0-1 range)
            line_width: Initial stroke width in pixels
        """
        super().__init__(line_width)
        self.width = width
        self.height = height
        self.background = background

        self._fig = Figure(figsize=(width / self.DPI, height / self.DPI), dpi=self.DPI)
        self._canvas = FigureCanvasAgg(self._fig)
        self._ax = self._fig.add_axes((0.0, 0.0, 1.0, 1.0))
        self._ax.set_xlim(0, width)
        self._ax.set_ylim(height, 0)
        self._ax.set_axis_off()
        self._fig.patch.set_facecolor(background)

        # Sub-paths of the current path, each a list of (x, y)
        self._path: list[list[tuple[float, float]]] = []
        self.num_strokes = 0
        self.num_fills = 0

    @property
    def figure(self) -> Figure:
        return self._fig

    def move_to(self, x: float, y: float) -> None:
        self._path.append([(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._path:
            self._path.append([(x, y)])
            return
        self._path[-1].append((x, y))

    def stroke(self) -> None:
        for sub in self._path:
            if len(sub) < 2:
                continue
            xs, ys = zip(*sub)
            self._ax.add_line(Line2D(
                xs, ys,
                linewidth=self.state.line_width,
                color=self.state.color,
                solid_capstyle="round",
                solid_joinstyle="round",
            ))
            self.num_strokes += 1
        self._path = []

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        self._ax.add_patch(Circle((x, y), radius, facecolor=self.state.color, linewidth=0))
        self.num_fills += 1

    def clear(self) -> None:
        """Remove everything drawn so far."""
        for artist in list(self._ax.lines) + list(self._ax.patches):
            artist.remove()
        self._path = []
        self.num_strokes = 0
        self.num_fills = 0

    def save_png(self, path: str | Path) -> None:
        """Render the canvas to a PNG file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._fig.savefig(path, dpi=self.DPI, facecolor=self.background)
        logger.info(f"Wrote {self.width}x{self.height} image to {path}")

    def __repr__(self) -> str:
        return (
            f"MatplotlibSurface({self.width}x{self.height}, "
            f"{self.num_strokes} strokes, {self.num_fills} fills)"
        )

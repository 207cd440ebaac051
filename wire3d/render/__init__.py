"""Drawing contract and shading.

The matplotlib backend lives in :mod:`wire3d.render.matplotlib_surface` and
is imported on demand.
"""

from .shading import fog_amount, shade_factor, shaded_color, water_amount
from .surface import RecordingSurface, Surface

__all__ = [
    "RecordingSurface",
    "Surface",
    "fog_amount",
    "shade_factor",
    "shaded_color",
    "water_amount",
]

"""Depth fog and water-level shading.

Both effects produce an attenuation factor in [0, 1] that multiplies the
alpha channel of the world's base color right before a draw call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.config import World


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def map_range(value: float, src_min: float, src_max: float, dst_min: float, dst_max: float) -> float:
    """Linearly map ``value`` from one range to another (no clamping)."""
    if src_max == src_min:
        return dst_min if value <= src_min else dst_max
    return dst_min + (value - src_min) * (dst_max - dst_min) / (src_max - src_min)


def fog_amount(world: World, z: float) -> float:
    """Opacity left after depth fog for an object at ``z``.

    1 at ``fog.near`` (and closer), 0 at ``fog.far`` (and beyond). Always 1
    when fog is disabled.
    """
    if not world.fog.enabled:
        return 1.0
    f = map_range(z + world.camera.z, world.fog.near, world.fog.far, 1.0, 0.0)
    return clamp(f, 0.0, 1.0)


def water_amount(world: World, y: float) -> float:
    """Opacity left after the water-level fade for an object at height ``y``."""
    if not world.water.enabled:
        return 1.0
    f = map_range(y, world.water.top, world.water.bottom, 1.0, 0.0)
    return clamp(f, 0.0, 1.0)


def shade_factor(world: World, y: float, z: float) -> float:
    """Combined attenuation: the stronger of fog and water wins."""
    return min(fog_amount(world, z), water_amount(world, y))


def shaded_color(world: World, y: float, z: float) -> tuple[float, float, float, float]:
    """Return the world color with its alpha attenuated for an object at (y, z)."""
    r, g, b, a = world.color
    return (r, g, b, a * shade_factor(world, y, z))

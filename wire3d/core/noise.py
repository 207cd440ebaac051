"""Coherent 3D gradient noise.

Vectorised Perlin noise on an integer lattice. Lattice gradients come from a
cascaded Wang hash of the cell coordinates and the seed, so no permutation
table has to be stored and any seed gives a different but repeatable field.
Output lies roughly in [-1, 1] and is exactly 0 on lattice points.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

# The 12 edge-midpoint gradients of a cube, padded to 16 entries.
_GRADIENTS = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    [1, 1, 0], [-1, 1, 0], [0, -1, 1], [0, -1, -1],
], dtype=np.float64)


def _hash_wang(key: NDArray) -> NDArray[np.uint32]:
    """Wang hash, vectorised over uint32."""
    k = np.asarray(key, dtype=np.uint32)
    k = (k ^ np.uint32(61)) ^ (k >> np.uint32(16))
    k = k * np.uint32(9)
    k = k ^ (k >> np.uint32(4))
    k = k * np.uint32(0x27D4EB2D)
    k = k ^ (k >> np.uint32(15))
    return k


def _to_uint32(cell: NDArray[np.int64]) -> NDArray[np.uint32]:
    return (cell & 0xFFFFFFFF).astype(np.uint32)


def _hash4d(x: NDArray, y: NDArray, z: NDArray, seed: int) -> NDArray[np.uint32]:
    """Cascaded hash: hash(x ^ hash(y ^ hash(z ^ hash(seed))))."""
    s = _hash_wang(np.array([seed & 0xFFFFFFFF], dtype=np.uint32))
    h = _hash_wang(_to_uint32(z) ^ s)
    h = _hash_wang(_to_uint32(y) ^ h)
    return _hash_wang(_to_uint32(x) ^ h)


def _fade(t: NDArray) -> NDArray:
    """Perlin's quintic fade curve."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _grad(h: NDArray[np.uint32], dx: NDArray, dy: NDArray, dz: NDArray) -> NDArray:
    g = _GRADIENTS[h & np.uint32(15)]
    return g[..., 0] * dx + g[..., 1] * dy + g[..., 2] * dz


def _lerp(t: NDArray, a: NDArray, b: NDArray) -> NDArray:
    return a + t * (b - a)


def perlin3(x: ArrayLike, y: ArrayLike, z: ArrayLike, seed: int = 0) -> NDArray[np.float64]:
    """Evaluate 3D Perlin noise at the given coordinates.

    Args:
        x, y, z: Coordinates (scalars or broadcastable arrays)
        seed: Selects the noise field

    Returns:
        Array of noise values in roughly [-1, 1], broadcast shape of the inputs
    """
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    out_shape = x.shape
    x = np.atleast_1d(x).ravel()
    y = np.atleast_1d(y).ravel()
    z = np.atleast_1d(z).ravel()

    ix = np.floor(x).astype(np.int64)
    iy = np.floor(y).astype(np.int64)
    iz = np.floor(z).astype(np.int64)
    fx = x - ix
    fy = y - iy
    fz = z - iz

    u = _fade(fx)
    v = _fade(fy)
    w = _fade(fz)

    n000 = _grad(_hash4d(ix, iy, iz, seed), fx, fy, fz)
    n100 = _grad(_hash4d(ix + 1, iy, iz, seed), fx - 1.0, fy, fz)
    n010 = _grad(_hash4d(ix, iy + 1, iz, seed), fx, fy - 1.0, fz)
    n110 = _grad(_hash4d(ix + 1, iy + 1, iz, seed), fx - 1.0, fy - 1.0, fz)
    n001 = _grad(_hash4d(ix, iy, iz + 1, seed), fx, fy, fz - 1.0)
    n101 = _grad(_hash4d(ix + 1, iy, iz + 1, seed), fx - 1.0, fy, fz - 1.0)
    n011 = _grad(_hash4d(ix, iy + 1, iz + 1, seed), fx, fy - 1.0, fz - 1.0)
    n111 = _grad(_hash4d(ix + 1, iy + 1, iz + 1, seed), fx - 1.0, fy - 1.0, fz - 1.0)

    x00 = _lerp(u, n000, n100)
    x10 = _lerp(u, n010, n110)
    x01 = _lerp(u, n001, n101)
    x11 = _lerp(u, n011, n111)
    y0 = _lerp(v, x00, x10)
    y1 = _lerp(v, x01, x11)
    return _lerp(w, y0, y1).reshape(out_shape)


def noise3(x: float, y: float, z: float, seed: int = 0) -> float:
    """Scalar convenience wrapper around :func:`perlin3`."""
    return float(perlin3(x, y, z, seed))

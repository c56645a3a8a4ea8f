"""
Uniform Packing

Converts kernel tuples into float32 numpy arrays ready for upload.
Pure data only - nothing here touches a GL context.

Matrices stay column-major, so they upload with transpose=False
(uniformMatrix4fv / moderngl `uniform.write(arr.tobytes())`).
"""

from __future__ import annotations
from typing import Sequence
import numpy as np

from ..core.math3d import Mat4


# Unit quad, 4 vertices x (x, y, z), drawn as a triangle fan
UNIT_QUAD = np.array([
    0.0, 0.0, 0.0,
    0.0, 1.0, 0.0,
    1.0, 1.0, 0.0,
    1.0, 0.0, 0.0,
], dtype=np.float32)
UNIT_QUAD.setflags(write=False)


def pack_mat4(m: Mat4) -> np.ndarray:
    """Mat4 -> float32 array of shape (16,), column-major order preserved."""
    arr = np.asarray(m, dtype=np.float32)
    if arr.shape != (16,):
        raise ValueError(f"expected 16 matrix components, got shape {arr.shape}")
    return arr


def pack_vertex_colors(rgba: Sequence[float], count: int) -> np.ndarray:
    """Repeat one RGBA colour for `count` vertices -> float32 (4*count,)."""
    color = np.asarray(rgba, dtype=np.float32)
    if color.shape != (4,):
        raise ValueError(f"expected RGBA colour, got shape {color.shape}")
    if count < 0:
        raise ValueError("vertex count must be non-negative")
    return np.tile(color, count)

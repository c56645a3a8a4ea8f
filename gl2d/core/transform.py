# gl2d/core/transform.py
"""
TransformStack - nested coordinate frames flattened into one matrix.

Each nesting level owns one frame (a Mat4). Local transforms right-multiply
into the top frame. resolve() returns frame0 . frame1 . ... . frameN.

Cumulative products are cached per level. A validity counter tracks how many
cache entries are still correct, so resolve() only recomputes the stale
suffix:

    cache[0] = frames[0]
    cache[i] = cache[i-1] . frames[i]

Mutating the top frame stales at most the top entry; push/pop never stale
the entries below them.
"""

from __future__ import annotations
import logging
import numbers
from typing import List, Optional, Sequence, Tuple, Union

from .math3d import (
    Mat4, Vec3,
    as_mat4, as_vec3,
    mat_identity, mat_multiply,
    mat_translation, mat_scaling,
    mat_rotation_x, mat_rotation_y, mat_rotation_z,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _xyz(x: Union[Number, Sequence[Number]], y: Optional[Number], z: Optional[Number]) -> Vec3:
    """Accept either (x, y, z) scalars or a single 3-sequence."""
    if isinstance(x, numbers.Real):
        return as_vec3((x, 0.0 if y is None else y, 0.0 if z is None else z))
    if y is not None or z is not None:
        raise TypeError("pass either three scalars or one 3-sequence")
    return as_vec3(x)


class TransformStack:
    """Stack of frames with a lazily repaired cumulative-product cache."""

    def __init__(self, base: Optional[Sequence[float]] = None):
        self._frames: List[Mat4] = []
        self._cache: List[Mat4] = []
        self._valid: int = 0
        self.clear(base)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Index of the top frame. 0 means only the base frame exists."""
        return len(self._frames) - 1

    @property
    def top(self) -> Mat4:
        return self._frames[-1]

    @property
    def frames(self) -> Tuple[Mat4, ...]:
        return tuple(self._frames)

    @property
    def valid_up_to(self) -> int:
        """Number of leading cache entries known to be correct."""
        return self._valid

    def clear(self, base: Optional[Sequence[float]] = None) -> TransformStack:
        """Drop every frame and start over from base (or identity)."""
        self._cache = []
        if base is not None:
            self._frames = [as_mat4(base)]
            self._valid = 0
        else:
            identity = mat_identity()
            self._frames = [identity]
            self._cache.append(identity)
            self._valid = 1
        return self

    def _invalidate_top(self):
        # Entries below the top don't depend on it; only cache[depth] goes stale.
        if self._valid > self.depth:
            self._valid = self.depth

    def _apply(self, local: Mat4):
        self._frames[-1] = mat_multiply(self._frames[-1], local)
        self._invalidate_top()

    # -------------------------------------------------------------------------
    # Stack
    # -------------------------------------------------------------------------

    def push(self, matrix: Optional[Sequence[float]] = None) -> TransformStack:
        self._frames.append(mat_identity() if matrix is None else as_mat4(matrix))
        # A pop may have left a cache entry at this index from the old frame.
        self._invalidate_top()
        return self

    def pop(self) -> TransformStack:
        if self.depth == 0:
            logger.debug("pop() at depth 0 ignored")
            return self
        self._frames.pop()
        return self

    def set_identity(self) -> TransformStack:
        self._frames[-1] = mat_identity()
        self._invalidate_top()
        return self

    # -------------------------------------------------------------------------
    # Local transforms (right-multiplied into the top frame)
    # -------------------------------------------------------------------------

    def translate(self, x, y=None, z=None) -> TransformStack:
        tx, ty, tz = _xyz(x, y, z)
        self._apply(mat_translation(tx, ty, tz))
        return self

    def scale(self, x, y=None, z=None) -> TransformStack:
        sx, sy, sz = _xyz(x, y, z)
        self._apply(mat_scaling(sx, sy, sz))
        return self

    def rotate_axis_angle(self, angle_degrees: float, axis_weights: Sequence[float]) -> TransformStack:
        """
        Rotate by angle_degrees, once per nonzero axis weight.

        The weights are not a normalized axis. Each nonzero weight applies a
        single-axis rotation whose 2x2 block is scaled by that weight, always
        in the order Z, Y, X.
        """
        wx, wy, wz = as_vec3(axis_weights)
        if wz:
            self._frames[-1] = mat_multiply(self._frames[-1], mat_rotation_z(angle_degrees, wz))
        if wy:
            self._frames[-1] = mat_multiply(self._frames[-1], mat_rotation_y(angle_degrees, wy))
        if wx:
            self._frames[-1] = mat_multiply(self._frames[-1], mat_rotation_x(angle_degrees, wx))
        self._invalidate_top()
        return self

    def rotate_euler(self, angles_degrees: Sequence[float]) -> TransformStack:
        """Rotate about X, then Y, then Z, each by its own angle."""
        ax, ay, az = as_vec3(angles_degrees)
        self.rotate_axis_angle(ax, (1.0, 0.0, 0.0))
        self.rotate_axis_angle(ay, (0.0, 1.0, 0.0))
        self.rotate_axis_angle(az, (0.0, 0.0, 1.0))
        return self

    def rotate(self, angle, x: Number = 0.0, y: Number = 0.0, z: Number = 0.0) -> TransformStack:
        """
        Overloaded rotate.

        rotate(angle, x, y, z) -> rotate_axis_angle(angle, (x, y, z))
        rotate((ax, ay, az))   -> rotate_euler((ax, ay, az))
        """
        if isinstance(angle, numbers.Real):
            return self.rotate_axis_angle(angle, (x, y, z))
        return self.rotate_euler(angle)

    # -------------------------------------------------------------------------
    # Resolve
    # -------------------------------------------------------------------------

    def resolve(self) -> Mat4:
        """Net matrix of all active frames, repairing only stale cache entries."""
        depth = self.depth
        if depth == 0:
            return self._frames[0]

        if self._valid > depth + 1:
            # Popped below previously cached levels
            del self._cache[depth + 1:]
            self._valid = depth + 1
        elif self._valid < depth + 1:
            start = self._valid
            del self._cache[start:]
            for i in range(start, depth + 1):
                if i == 0:
                    self._cache.append(self._frames[0])
                else:
                    self._cache.append(mat_multiply(self._cache[i - 1], self._frames[i]))
            self._valid = depth + 1
            logger.debug("resolve repaired cache entries %d..%d", start, depth)

        return self._cache[depth]

    def __repr__(self) -> str:
        return f"TransformStack(depth={self.depth}, valid_up_to={self._valid})"

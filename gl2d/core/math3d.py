# gl2d/core/math3d.py
"""
Vector and matrix kernel for the 2D-over-GL transform pipeline.

Everything here is a pure function over plain tuples:
- Vec3 / Vec4: 3 or 4 floats
- Mat4: 16 floats, column-major (column c, row r -> index c*4 + r)

Every function returns a new tuple; nothing is mutated in place, so results
can be cached and shared freely. Upload to GPU via gl2d.render.uniforms.
"""

from __future__ import annotations
import math
from typing import Iterable, Optional, Tuple

Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]
Mat4 = Tuple[float, ...]

EPSILON = 1e-7

IDENTITY: Mat4 = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)

ZERO_VEC3: Vec3 = (0.0, 0.0, 0.0)


# =============================================================================
# Coercion
# =============================================================================

def as_vec3(values: Iterable[float]) -> Vec3:
    v = tuple(float(c) for c in values)
    if len(v) != 3:
        raise ValueError(f"Vec3 needs 3 components, got {len(v)}")
    return v


def as_mat4(values: Iterable[float]) -> Mat4:
    m = tuple(float(c) for c in values)
    if len(m) != 16:
        raise ValueError(f"Mat4 needs 16 components, got {len(m)}")
    return m


# =============================================================================
# Vector Operations
# =============================================================================

def vec_length(v: Vec3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def vec_normalize(v: Vec3) -> Vec3:
    """Unit vector along v, or the zero vector when v has no length."""
    d = vec_length(v)
    if d == 0:
        return ZERO_VEC3
    return (v[0] / d, v[1] / d, v[2] / d)


def vec_dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vec_cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - b[1] * a[2],
        a[2] * b[0] - b[2] * a[0],
        a[0] * b[1] - b[0] * a[1],
    )


def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_subtract(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(v: Vec3, k: float) -> Vec3:
    return (v[0] * k, v[1] * k, v[2] * k)


def vec_angle(a: Vec3, b: Vec3) -> float:
    """
    Angle between a and b in radians.

    Not guarded against zero-length input: the result is NaN in that case,
    as it would be with IEEE division. Callers check lengths first.
    """
    denom = vec_length(a) * vec_length(b)
    if denom == 0:
        return math.nan
    cos_theta = vec_dot(a, b) / denom
    if cos_theta > 1.0 or cos_theta < -1.0:
        # acos raises outside [-1, 1]; rounding can land just past the edge
        cos_theta = max(-1.0, min(1.0, cos_theta))
    return math.acos(cos_theta)


def vec_equal(a: Optional[Vec3], b: Optional[Vec3]) -> bool:
    """Component-wise equality within EPSILON. Two missing vectors compare equal."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return (
        abs(a[0] - b[0]) < EPSILON
        and abs(a[1] - b[1]) < EPSILON
        and abs(a[2] - b[2]) < EPSILON
    )


# =============================================================================
# Matrix Constructors
# =============================================================================

def mat_identity() -> Mat4:
    return IDENTITY


def mat_translation(x: float, y: float, z: float) -> Mat4:
    return (
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        float(x), float(y), float(z), 1.0,
    )


def mat_scaling(x: float, y: float, z: float) -> Mat4:
    return (
        float(x), 0.0, 0.0, 0.0,
        0.0, float(y), 0.0, 0.0,
        0.0, 0.0, float(z), 0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def _sin_cos(angle_degrees: float) -> Tuple[float, float]:
    # Negated angle: positive angles turn clockwise on a y-down pixel grid.
    rad = -angle_degrees * (math.pi / 180.0)
    return math.sin(rad), math.cos(rad)


def mat_rotation_x(angle_degrees: float, weight: float = 1.0) -> Mat4:
    """Rotation about X. The 2x2 rotation block is multiplied by weight."""
    s, c = _sin_cos(angle_degrees)
    s *= weight
    c *= weight
    return (
        1.0, 0.0, 0.0, 0.0,
        0.0, c,   -s,  0.0,
        0.0, s,   c,   0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def mat_rotation_y(angle_degrees: float, weight: float = 1.0) -> Mat4:
    """Rotation about Y. The 2x2 rotation block is multiplied by weight."""
    s, c = _sin_cos(angle_degrees)
    s *= weight
    c *= weight
    return (
        c,   0.0, s,   0.0,
        0.0, 1.0, 0.0, 0.0,
        -s,  0.0, c,   0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def mat_rotation_z(angle_degrees: float, weight: float = 1.0) -> Mat4:
    """Rotation about Z. The 2x2 rotation block is multiplied by weight."""
    s, c = _sin_cos(angle_degrees)
    s *= weight
    c *= weight
    return (
        c,   -s,  0.0, 0.0,
        s,   c,   0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def mat_perspective(fov_y_degrees: float, aspect: float, near: float, far: float) -> Mat4:
    """Symmetric perspective projection (OpenGL clip conventions)."""
    y_fac = math.tan(fov_y_degrees * math.pi / 360.0)
    x_fac = y_fac * aspect
    dz = far - near
    return (
        1.0 / x_fac, 0.0, 0.0, 0.0,
        0.0, 1.0 / y_fac, 0.0, 0.0,
        0.0, 0.0, -(far + near) / dz, -1.0,
        0.0, 0.0, -(2.0 * far * near) / dz, 0.0,
    )


# =============================================================================
# Matrix Operations
# =============================================================================

def mat_multiply(a: Mat4, b: Mat4) -> Mat4:
    """
    Compose a and b as a . b: b is applied first, then a.

    mat_transform_point3(mat_multiply(a, b), p)
        == mat_transform_point3(a, mat_transform_point3(b, p))
    """
    out = []
    for col in range(4):
        b0 = b[col * 4]
        b1 = b[col * 4 + 1]
        b2 = b[col * 4 + 2]
        b3 = b[col * 4 + 3]
        for row in range(4):
            out.append(a[row] * b0 + a[4 + row] * b1 + a[8 + row] * b2 + a[12 + row] * b3)
    return tuple(out)


def mat_transform_point4(m: Mat4, p: Vec4) -> Vec4:
    x, y, z, w = p
    return (
        m[0] * x + m[4] * y + m[8] * z + m[12] * w,
        m[1] * x + m[5] * y + m[9] * z + m[13] * w,
        m[2] * x + m[6] * y + m[10] * z + m[14] * w,
        m[3] * x + m[7] * y + m[11] * z + m[15] * w,
    )


def mat_transform_point3(m: Mat4, p: Vec3) -> Vec3:
    """Affine apply with w = 1. No homogeneous divide."""
    x, y, z = p
    return (
        m[0] * x + m[4] * y + m[8] * z + m[12],
        m[1] * x + m[5] * y + m[9] * z + m[13],
        m[2] * x + m[6] * y + m[10] * z + m[14],
    )


def mat_transpose(m: Mat4) -> Mat4:
    return (
        m[0], m[4], m[8], m[12],
        m[1], m[5], m[9], m[13],
        m[2], m[6], m[10], m[14],
        m[3], m[7], m[11], m[15],
    )


def _block_products(m: Mat4) -> Tuple[float, ...]:
    """2x2 minors of the first and last column pairs: (a0..a5, b0..b5)."""
    return (
        m[0] * m[5] - m[1] * m[4],
        m[0] * m[6] - m[2] * m[4],
        m[0] * m[7] - m[3] * m[4],
        m[1] * m[6] - m[2] * m[5],
        m[1] * m[7] - m[3] * m[5],
        m[2] * m[7] - m[3] * m[6],
        m[8] * m[13] - m[9] * m[12],
        m[8] * m[14] - m[10] * m[12],
        m[8] * m[15] - m[11] * m[12],
        m[9] * m[14] - m[10] * m[13],
        m[9] * m[15] - m[11] * m[13],
        m[10] * m[15] - m[11] * m[14],
    )


def _det_from_products(p: Tuple[float, ...]) -> float:
    a0, a1, a2, a3, a4, a5, b0, b1, b2, b3, b4, b5 = p
    return a0 * b5 - a1 * b4 + a2 * b3 + a3 * b2 - a4 * b1 + a5 * b0


def mat_determinant(m: Mat4) -> float:
    return _det_from_products(_block_products(m))


def mat_inverse(m: Mat4) -> Optional[Mat4]:
    """
    Inverse of m, or None when m is singular (determinant exactly zero).

    Uses the same twelve block products as mat_determinant.
    """
    p = _block_products(m)
    det = _det_from_products(p)
    if det == 0:
        return None

    a0, a1, a2, a3, a4, a5, b0, b1, b2, b3, b4, b5 = p
    inv_det = 1.0 / det

    adj = (
        m[5] * b5 - m[6] * b4 + m[7] * b3,
        -m[1] * b5 + m[2] * b4 - m[3] * b3,
        m[13] * a5 - m[14] * a4 + m[15] * a3,
        -m[9] * a5 + m[10] * a4 - m[11] * a3,

        -m[4] * b5 + m[6] * b2 - m[7] * b1,
        m[0] * b5 - m[2] * b2 + m[3] * b1,
        -m[12] * a5 + m[14] * a2 - m[15] * a1,
        m[8] * a5 - m[10] * a2 + m[11] * a1,

        m[4] * b4 - m[5] * b2 + m[7] * b0,
        -m[0] * b4 + m[1] * b2 - m[3] * b0,
        m[12] * a4 - m[13] * a2 + m[15] * a0,
        -m[8] * a4 + m[9] * a2 - m[11] * a0,

        -m[4] * b3 + m[5] * b1 - m[6] * b0,
        m[0] * b3 - m[1] * b1 + m[2] * b0,
        -m[12] * a3 + m[13] * a1 - m[14] * a0,
        m[8] * a3 - m[9] * a1 + m[10] * a0,
    )
    return tuple(c * inv_det for c in adj)

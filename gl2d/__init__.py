# gl2d/__init__.py
"""
gl2d - Canvas-2D style transforms for a GL pipeline.

Core components:
- math3d: Vec3/Vec4/Mat4 kernel (pure functions over tuples)
- TransformStack: nested frames with a lazily repaired product cache
- Canvas2DContext: canvas-shaped drawing state emitting draw commands
- uniforms: float32 packing for GPU upload
"""

from .core.math3d import (
    Vec3, Vec4, Mat4,
    EPSILON, IDENTITY,
    as_vec3, as_mat4,
    vec_length, vec_normalize, vec_dot, vec_cross,
    vec_add, vec_subtract, vec_scale, vec_angle, vec_equal,
    mat_identity, mat_translation, mat_scaling,
    mat_rotation_x, mat_rotation_y, mat_rotation_z,
    mat_perspective,
    mat_multiply, mat_transform_point4, mat_transform_point3,
    mat_transpose, mat_determinant, mat_inverse,
)
from .core.transform import TransformStack
from .canvas.color import ColorParseError, parse_color
from .canvas.context import Canvas2DContext, CanvasConfig, FillRectCommand
from .render.uniforms import UNIT_QUAD, pack_mat4, pack_vertex_colors

__version__ = "0.1.0"

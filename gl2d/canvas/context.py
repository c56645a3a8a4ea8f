# gl2d/canvas/context.py
"""
Canvas2DContext - Canvas-2D-shaped drawing state over a TransformStack.

Translates canvas calls (translate/rotate/scale/save/restore, fill and
stroke styles) into transform-stack operations, and turns fillRect into a
FillRectCommand: pure data a renderer can upload and draw. No GL objects
are created or referenced here.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union
import logging
import numpy as np

from ..core.math3d import Mat4
from ..core.transform import TransformStack
from ..render.uniforms import UNIT_QUAD, pack_mat4, pack_vertex_colors
from .color import RGBA, parse_color

logger = logging.getLogger(__name__)

ColorLike = Union[str, Sequence[float]]


@dataclass
class CanvasConfig:
    # Canvas y grows downward; GL y grows upward.
    flip_y: bool = True
    # z factor for scale(x, y); 0 flattens everything onto the z=0 plane.
    z_scale: float = 0.0
    default_fill: RGBA = (0.0, 0.0, 0.0, 1.0)
    default_stroke: RGBA = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class FillRectCommand:
    """
    One filled rectangle, ready for a renderer.

    matrix uploads as the model matrix (column-major, transpose=False);
    positions is the unit quad it is applied to.
    """
    matrix: np.ndarray      # (16,) float32
    positions: np.ndarray   # (12,) float32, 4 vertices x xyz
    colors: np.ndarray      # (16,) float32, 4 vertices x rgba
    vertex_count: int = 4
    primitive: str = "triangle_fan"


@dataclass
class Canvas2DContext:
    """Drawing state for one canvas. Not thread-safe; one per drawing context."""

    config: CanvasConfig = field(default_factory=CanvasConfig)
    base: Optional[Sequence[float]] = None

    transform: TransformStack = field(init=False)
    _fill: RGBA = field(init=False)
    _stroke: RGBA = field(init=False)
    _saved: List[Tuple[RGBA, RGBA]] = field(init=False, default_factory=list)

    def __post_init__(self):
        self.transform = TransformStack(self.base)
        self._fill = self.config.default_fill
        self._stroke = self.config.default_stroke

    # -------------------------------------------------------------------------
    # Styles
    # -------------------------------------------------------------------------

    @property
    def fill_style(self) -> RGBA:
        return self._fill

    @fill_style.setter
    def fill_style(self, value: ColorLike):
        self._fill = parse_color(value)

    @property
    def stroke_style(self) -> RGBA:
        return self._stroke

    @stroke_style.setter
    def stroke_style(self, value: ColorLike):
        self._stroke = parse_color(value)

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def _y(self, y: float) -> float:
        return -y if self.config.flip_y else y

    def translate(self, x: float, y: float):
        self.transform.translate(x, self._y(y), 0.0)

    def rotate(self, angle_degrees: float):
        self.transform.rotate_euler((0.0, 0.0, angle_degrees))

    def scale(self, x: float, y: float):
        self.transform.scale(x, y, self.config.z_scale)

    def save(self):
        self.transform.push()
        self._saved.append((self._fill, self._stroke))

    def restore(self):
        if not self._saved:
            logger.debug("restore() without matching save() ignored")
            return
        self._fill, self._stroke = self._saved.pop()
        self.transform.pop()

    def current_matrix(self) -> Mat4:
        return self.transform.resolve()

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def fill_rect(self, x: float, y: float, width: float, height: float) -> FillRectCommand:
        """Build the draw command for a filled rect. The stack is left as it was."""
        stack = self.transform
        stack.push()
        try:
            stack.translate(x, self._y(y), 0.0)
            stack.scale(width, self._y(height), 1.0)
            model = stack.resolve()
        finally:
            stack.pop()

        return FillRectCommand(
            matrix=pack_mat4(model),
            positions=UNIT_QUAD,
            colors=pack_vertex_colors(self._fill, 4),
        )

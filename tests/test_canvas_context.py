import numpy as np
import pytest

from gl2d.canvas.color import ColorParseError, parse_color
from gl2d.canvas.context import Canvas2DContext, CanvasConfig, FillRectCommand
from gl2d.core.math3d import IDENTITY, mat_transform_point3
from gl2d.render.uniforms import UNIT_QUAD


def close(a, b, tol=1e-6):
    return len(a) == len(b) and all(abs(x - y) < tol for x, y in zip(a, b))


# -----------------------------------------------------------------------------
# Colours
# -----------------------------------------------------------------------------

def test_parse_rgb():
    assert parse_color("rgb(255, 0, 0)") == (1.0, 0.0, 0.0, 1.0)
    assert parse_color("rgb(0,51,255)") == (0.0, 0.2, 1.0, 1.0)


def test_parse_rgba_keeps_alpha():
    assert parse_color("rgba(0, 255, 0, 0.5)") == (0.0, 1.0, 0.0, 0.5)


def test_parse_sequence_is_already_normalised():
    assert parse_color((0.25, 0.5, 0.75)) == (0.25, 0.5, 0.75, 1.0)
    assert parse_color([0.1, 0.2, 0.3, 0.4]) == (0.1, 0.2, 0.3, 0.4)


@pytest.mark.parametrize("bad", ["#fff", "red", "rgb(1, 2)", "rgba(1,2,3,4,5)", "", (1.0, 2.0)])
def test_parse_rejects(bad):
    with pytest.raises(ColorParseError):
        parse_color(bad)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_color("rgb(1..2, 3, 4)")


# -----------------------------------------------------------------------------
# Context
# -----------------------------------------------------------------------------

def test_defaults():
    ctx = Canvas2DContext()
    assert ctx.fill_style == (0.0, 0.0, 0.0, 1.0)
    assert ctx.stroke_style == (0.0, 0.0, 0.0, 1.0)
    assert ctx.current_matrix() == IDENTITY


def test_style_setters_parse():
    ctx = Canvas2DContext()
    ctx.fill_style = "rgb(255, 255, 255)"
    ctx.stroke_style = "rgba(0, 0, 255, 0.25)"
    assert ctx.fill_style == (1.0, 1.0, 1.0, 1.0)
    assert ctx.stroke_style == (0.0, 0.0, 1.0, 0.25)


def test_translate_flips_y():
    ctx = Canvas2DContext()
    ctx.translate(10, 20)
    assert close(mat_transform_point3(ctx.current_matrix(), (0.0, 0.0, 0.0)), (10.0, -20.0, 0.0))


def test_translate_without_flip():
    ctx = Canvas2DContext(config=CanvasConfig(flip_y=False))
    ctx.translate(10, 20)
    assert close(mat_transform_point3(ctx.current_matrix(), (0.0, 0.0, 0.0)), (10.0, 20.0, 0.0))


def test_rotate_is_about_z():
    ctx = Canvas2DContext()
    ctx.rotate(90)
    assert close(mat_transform_point3(ctx.current_matrix(), (1.0, 0.0, 5.0)), (0.0, 1.0, 5.0))


def test_scale_flattens_z_by_default():
    ctx = Canvas2DContext()
    ctx.scale(2, 3)
    assert close(mat_transform_point3(ctx.current_matrix(), (1.0, 1.0, 1.0)), (2.0, 3.0, 0.0))

    keep_z = Canvas2DContext(config=CanvasConfig(z_scale=1.0))
    keep_z.scale(2, 3)
    assert close(mat_transform_point3(keep_z.current_matrix(), (1.0, 1.0, 1.0)), (2.0, 3.0, 1.0))


def test_save_restore():
    ctx = Canvas2DContext()
    ctx.translate(5, 5)
    before = ctx.current_matrix()

    ctx.save()
    ctx.fill_style = "rgb(255, 0, 0)"
    ctx.translate(100, 0)
    ctx.rotate(45)
    assert ctx.transform.depth == 1
    assert ctx.current_matrix() != before

    ctx.restore()
    assert ctx.transform.depth == 0
    assert ctx.current_matrix() == before
    assert ctx.fill_style == (0.0, 0.0, 0.0, 1.0)


def test_restore_without_save_is_noop():
    ctx = Canvas2DContext()
    ctx.translate(1, 1)
    before = ctx.current_matrix()
    ctx.restore()
    assert ctx.transform.depth == 0
    assert ctx.current_matrix() == before


def test_base_matrix():
    base = (
        2.0, 0.0, 0.0, 0.0,
        0.0, 2.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    )
    ctx = Canvas2DContext(base=base)
    ctx.translate(1, 0)
    assert close(mat_transform_point3(ctx.current_matrix(), (0.0, 0.0, 0.0)), (2.0, 0.0, 0.0))


def test_fill_rect_command():
    ctx = Canvas2DContext()
    ctx.fill_style = "rgba(255, 0, 0, 0.5)"
    cmd = ctx.fill_rect(10, 20, 30, 40)

    assert isinstance(cmd, FillRectCommand)
    assert cmd.vertex_count == 4
    assert cmd.primitive == "triangle_fan"
    assert cmd.matrix.dtype == np.float32
    assert cmd.matrix.shape == (16,)
    assert np.array_equal(cmd.positions, UNIT_QUAD)
    assert np.allclose(cmd.colors, [1.0, 0.0, 0.0, 0.5] * 4)

    model = tuple(float(v) for v in cmd.matrix)
    # Unit quad corners land on the rect's corners (canvas y points down)
    assert close(mat_transform_point3(model, (0.0, 0.0, 0.0)), (10.0, -20.0, 0.0))
    assert close(mat_transform_point3(model, (1.0, 1.0, 0.0)), (40.0, -60.0, 0.0))


def test_fill_rect_leaves_stack_untouched():
    ctx = Canvas2DContext()
    ctx.save()
    ctx.translate(3, 4)
    depth = ctx.transform.depth
    before = ctx.current_matrix()

    ctx.fill_rect(0, 0, 10, 10)
    ctx.fill_rect(5, 5, 1, 1)

    assert ctx.transform.depth == depth
    assert ctx.current_matrix() == before


def test_fill_rect_follows_current_transform():
    ctx = Canvas2DContext()
    ctx.translate(100, 0)
    cmd = ctx.fill_rect(0, 0, 1, 1)
    model = tuple(float(v) for v in cmd.matrix)
    assert close(mat_transform_point3(model, (0.0, 0.0, 0.0)), (100.0, 0.0, 0.0))

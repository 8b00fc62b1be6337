import pytest
from hypothesis import given
from hypothesis import strategies as st

from headlessfbo.blend import (
    blend_over,
    blend_over_opaque,
    clamp,
    clip_line_to_bounds,
    mono_from_rgb,
    over_alpha,
)

byte = st.integers(min_value=0, max_value=255)
coord = st.floats(min_value=-100, max_value=100, allow_nan=False)


def test_clip_inside_line_unchanged():
    assert clip_line_to_bounds(1.0, 2.0, 5.0, 7.0, 9.0, 9.0) == (1.0, 2.0, 5.0, 7.0)


def test_clip_horizontal_line_to_box():
    assert clip_line_to_bounds(-10.0, 5.0, 20.0, 5.0, 9.0, 9.0) == (0.0, 5.0, 9.0, 5.0)


def test_clip_vertical_line_reversed():
    assert clip_line_to_bounds(3.0, 30.0, 3.0, -4.0, 9.0, 9.0) == (3.0, 9.0, 3.0, 0.0)


@pytest.mark.parametrize(
    "line",
    [
        (-5.0, -5.0, -1.0, -1.0),
        (20.0, 0.0, 30.0, 5.0),
        (0.0, 12.0, 9.0, 15.0),
        (-3.0, 4.0, -3.0, 4.0),
    ],
)
def test_clip_outside_line_rejected(line):
    assert clip_line_to_bounds(*line, 9.0, 9.0) is None


@given(coord, coord, coord, coord)
def test_clipped_endpoints_lie_in_box(x0, y0, x1, y1):
    result = clip_line_to_bounds(x0, y0, x1, y1, 20.0, 10.0)
    if result is not None:
        cx0, cy0, cx1, cy1 = result
        eps = 1e-6
        for x in (cx0, cx1):
            assert -eps <= x <= 20.0 + eps
        for y in (cy0, cy1):
            assert -eps <= y <= 10.0 + eps


def test_clamp():
    assert clamp(-4, 0, 10) == 0
    assert clamp(14, 0, 10) == 10
    assert clamp(6, 0, 10) == 6


@given(byte, byte)
def test_opaque_blend_extremes(src, dst):
    assert blend_over_opaque(src, dst, 255) == src
    assert blend_over_opaque(src, dst, 0) == dst


@given(byte, byte, byte)
def test_opaque_blend_between_inputs(src, dst, alpha):
    result = blend_over_opaque(src, dst, alpha)
    assert min(src, dst) <= result <= max(src, dst)
    assert blend_over_opaque(src, src, alpha) == src


@given(byte, byte)
def test_over_alpha_bounds(src_alpha, dst_alpha):
    out = over_alpha(src_alpha, dst_alpha)
    assert src_alpha <= out <= 255
    assert over_alpha(255, dst_alpha) == 255
    assert over_alpha(0, dst_alpha) == dst_alpha


@given(byte, byte, st.integers(min_value=1, max_value=255))
def test_blend_over_transparent_destination_gives_source(src, dst, src_alpha):
    out_alpha = over_alpha(src_alpha, 0)
    assert blend_over(src, dst, src_alpha, 0, out_alpha, 255 - src_alpha) == src


@given(byte, byte, byte, byte)
def test_blend_over_stays_a_byte(src, dst, src_alpha, dst_alpha):
    out_alpha = over_alpha(src_alpha, dst_alpha)
    result = blend_over(src, dst, src_alpha, dst_alpha, out_alpha, 255 - src_alpha)
    assert 0 <= result <= 255


def test_blend_over_zero_alpha_is_zero():
    assert blend_over(200, 100, 0, 0, 0, 255) == 0


@given(byte, byte, byte)
def test_mono_is_largest_component(r, g, b):
    m = mono_from_rgb(r, g, b)
    assert m in (r, g, b)
    assert m >= r and m >= g and m >= b
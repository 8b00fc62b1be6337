import pytest
from hypothesis import given
from hypothesis import strategies as st

from headlessfbo.pixels import Color, PixelFormat, Pixels

KNOWN_FORMATS = [f for f in PixelFormat if f is not PixelFormat.UNKNOWN]
byte = st.integers(min_value=0, max_value=255)
colors = st.builds(Color, byte, byte, byte, byte)


def test_channel_counts():
    assert PixelFormat.RGBA.channels() == 4
    assert PixelFormat.GRAY.channels() == 1
    assert PixelFormat.RGB.channels() == PixelFormat.BGR.channels()


@pytest.mark.parametrize("fmt", KNOWN_FORMATS)
def test_buffer_size_matches_channels(fmt):
    p = Pixels(5, 3, fmt)
    assert len(p.data) == 5 * 3 * fmt.channels()
    assert p.num_channels() == fmt.channels()
    assert all(b == 0 for b in p.data)


def test_default_color_is_opaque_white():
    assert Color() == Color(255, 255, 255, 255)


@pytest.mark.parametrize("bad", [-1, 256])
def test_color_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        Color(bad, 0, 0)


@pytest.mark.parametrize("size", [(0, 4), (4, 0), (-2, 3)])
def test_invalid_size_raises(size):
    with pytest.raises(ValueError):
        Pixels(size[0], size[1], PixelFormat.RGBA)


def test_unknown_format_raises():
    with pytest.raises(ValueError):
        Pixels(2, 2, PixelFormat.UNKNOWN)


@given(colors)
@pytest.mark.parametrize("fmt", [PixelFormat.RGBA, PixelFormat.BGRA])
def test_alpha_formats_round_trip(fmt, color):
    p = Pixels(3, 2, fmt)
    p.set_color(2, 1, color)
    assert p.get_color(2, 1) == color


@given(colors)
@pytest.mark.parametrize("fmt", [PixelFormat.RGB, PixelFormat.BGR])
def test_opaque_formats_drop_alpha(fmt, color):
    p = Pixels(2, 2, fmt)
    p.set_color(1, 0, color)
    assert p.get_color(1, 0) == Color(color.r, color.g, color.b, 255)


@given(colors)
def test_gray_alpha_stores_brightness_and_alpha(color):
    p = Pixels(2, 2, PixelFormat.GRAY_ALPHA)
    p.set_color(0, 1, color)
    m = max(color.r, color.g, color.b)
    assert p.get_color(0, 1) == Color(m, m, m, color.a)


def test_bgra_byte_order():
    p = Pixels(1, 1, PixelFormat.BGRA)
    p.set_color(0, 0, Color(1, 2, 3, 4))
    assert bytes(p.data) == bytes([3, 2, 1, 4])


def test_rgb_byte_order_at_offset():
    p = Pixels(2, 2, PixelFormat.RGB)
    p.set_color(1, 1, Color(10, 20, 30))
    start = p.offset(1, 1)
    assert bytes(p.data[start:start + 3]) == bytes([10, 20, 30])
    assert bytes(p.data[:start]) == bytes(start)


def test_gray_uses_largest_component():
    p = Pixels(1, 1, PixelFormat.GRAY)
    p.set_color(0, 0, Color(10, 200, 30))
    assert p.data[0] == 200


@pytest.mark.parametrize("fmt", KNOWN_FORMATS)
def test_fill_sets_every_pixel(fmt):
    p = Pixels(4, 3, fmt)
    c = Color(40, 80, 120, 160)
    p.fill(c)
    expected = p.get_color(0, 0)
    assert all(p.get_color(x, y) == expected for x in range(4) for y in range(3))
    assert bytes(p.data) == p.encode(c) * 12


def test_copy_is_independent():
    p = Pixels(2, 2, PixelFormat.RGBA)
    p.fill(Color(1, 2, 3, 4))
    q = p.copy()
    assert q == p
    q.set_color(0, 0, Color(9, 9, 9, 9))
    assert q != p
    assert p.get_color(0, 0) == Color(1, 2, 3, 4)


@pytest.mark.parametrize("xy", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_out_of_range_access_raises(xy):
    p = Pixels(3, 2, PixelFormat.RGB)
    with pytest.raises(IndexError):
        p.get_color(*xy)
    with pytest.raises(IndexError):
        p.set_color(*xy, Color())
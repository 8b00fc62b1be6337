"""Line clipping and 8-bit colour compositing primitives."""

from __future__ import annotations


def _clip_test(p: float, q: float, u1: float, u2: float) -> tuple[float, float] | None:
    if p == 0.0:
        return (u1, u2) if q >= 0.0 else None
    r = q / p
    if p < 0.0:
        if r > u2:
            return None
        if r > u1:
            u1 = r
    else:
        if r < u1:
            return None
        if r < u2:
            u2 = r
    return u1, u2


def clip_line_to_bounds(
    x0: float, y0: float, x1: float, y1: float, max_x: float, max_y: float
) -> tuple[float, float, float, float] | None:
    """Clip a segment to the box [0, max_x] x [0, max_y].

    Returns the clipped endpoints, or None when the segment misses the box.
    """
    dx = x1 - x0
    dy = y1 - y0
    bounds: tuple[float, float] | None = (0.0, 1.0)
    for p, q in ((-dx, x0), (dx, max_x - x0), (-dy, y0), (dy, max_y - y0)):
        bounds = _clip_test(p, q, *bounds)
        if bounds is None:
            return None
    u1, u2 = bounds
    if u2 < 1.0:
        x1 = x0 + u2 * dx
        y1 = y0 + u2 * dy
    if u1 > 0.0:
        x0 = x0 + u1 * dx
        y0 = y0 + u1 * dy
    return x0, y0, x1, y1


def clamp(value: int, min_value: int, max_value: int) -> int:
    """Limit ``value`` to the range [min_value, max_value]."""
    if value < min_value:
        return min_value
    if value > max_value:
        return max_value
    return value


def blend_over_opaque(src: int, dst: int, src_alpha: int) -> int:
    """Composite a source channel over an opaque destination channel."""
    return (src * src_alpha + dst * (255 - src_alpha) + 127) // 255


def over_alpha(src_alpha: int, dst_alpha: int) -> int:
    """Alpha of a source composited over a destination."""
    return src_alpha + (dst_alpha * (255 - src_alpha) + 127) // 255


def blend_over(
    src: int,
    dst: int,
    src_alpha: int,
    dst_alpha: int,
    out_alpha: int,
    inv_src_alpha: int,
) -> int:
    """Composite a source channel over a translucent destination channel."""
    if out_alpha == 0:
        return 0
    dst_premultiplied = (dst * dst_alpha * inv_src_alpha + 127) // 255
    out_premultiplied = src * src_alpha + dst_premultiplied
    return min((out_premultiplied + out_alpha // 2) // out_alpha, 255)


def mono_from_rgb(r: int, g: int, b: int) -> int:
    """Grey level of an RGB colour: its largest component."""
    return max(r, g, b)
"""A CPU-only canvas that rasterises primitive shapes into a pixel buffer."""

from __future__ import annotations

import math

from .blend import (
    blend_over,
    blend_over_opaque,
    clamp,
    clip_line_to_bounds,
    over_alpha,
)
from .pixels import Color, PixelFormat, Pixels

_ALPHA_FORMATS = frozenset({PixelFormat.RGBA, PixelFormat.BGRA, PixelFormat.GRAY_ALPHA})


def _lround(value: float) -> int:
    """Round half away from zero."""
    rounded = math.floor(abs(value) + 0.5)
    return -rounded if value < 0 else rounded


def _colour_channels(fmt: PixelFormat, color: Color) -> tuple[int, ...]:
    """The non-alpha channel values of ``color`` in the order ``fmt`` stores them."""
    if fmt in (PixelFormat.RGB, PixelFormat.RGBA):
        return (color.r, color.g, color.b)
    if fmt in (PixelFormat.BGR, PixelFormat.BGRA):
        return (color.b, color.g, color.r)
    return (color.brightness,)


class HeadlessFbo:
    """Draws points, lines and shapes straight into a :class:`Pixels` buffer."""

    def __init__(self) -> None:
        self._pixels: Pixels | None = None
        self._w = 0
        self._h = 0
        self._pixel_format = PixelFormat.UNKNOWN
        self._fill = True
        self._alpha_blending = False
        self._color = Color()

    # -- state ---------------------------------------------------------

    def allocate(self, width: int, height: int, pixel_format: PixelFormat) -> None:
        """Allocate a zeroed buffer; invalid sizes or an unknown format are ignored."""
        if width <= 0 or height <= 0 or pixel_format is PixelFormat.UNKNOWN:
            return
        self._pixels = Pixels(width, height, pixel_format)
        self._w = width
        self._h = height
        self._pixel_format = pixel_format

    def is_allocated(self) -> bool:
        """Whether a pixel buffer exists."""
        return self._pixels is not None

    def set_color(self, color: Color) -> None:
        """Set the colour used by subsequent drawing calls."""
        if not isinstance(color, Color):
            raise TypeError(f"expected a Color, got {type(color).__name__}")
        self._color = color

    def clear(self, color: Color) -> None:
        """Fill the whole buffer with ``color``."""
        if self._pixels is not None:
            self._pixels.fill(color)

    def read_pixels(self) -> Pixels | None:
        """A copy of the current buffer, or None when nothing is allocated."""
        return None if self._pixels is None else self._pixels.copy()

    def set_from_pixels(
        self, pixels: Pixels, width: int, height: int, pixel_format: PixelFormat
    ) -> None:
        """Replace the buffer with a copy of ``pixels``.

        Invalid sizes or an unknown format are ignored; a buffer that does not
        match the given size and format raises ValueError.
        """
        if width <= 0 or height <= 0 or pixel_format is PixelFormat.UNKNOWN:
            return
        if (
            pixels.width != width
            or pixels.height != height
            or pixels.pixel_format is not pixel_format
        ):
            raise ValueError(
                f"{pixels!r} does not match {width}x{height} {pixel_format}"
            )
        self._pixels = pixels.copy()
        self._w = width
        self._h = height
        self._pixel_format = pixel_format

    def set_fill(self) -> None:
        """Draw shapes filled."""
        self._fill = True

    def set_no_fill(self) -> None:
        """Draw shapes as outlines."""
        self._fill = False

    def enable_alpha_blending(self) -> None:
        """Composite the draw colour over existing pixels."""
        self._alpha_blending = True

    def disable_alpha_blending(self) -> None:
        """Overwrite existing pixels with the draw colour."""
        self._alpha_blending = False

    def width(self) -> int:
        """Buffer width, 0 when nothing is allocated."""
        return 0 if self._pixels is None else self._pixels.width

    def height(self) -> int:
        """Buffer height, 0 when nothing is allocated."""
        return 0 if self._pixels is None else self._pixels.height

    # -- low-level writing ---------------------------------------------

    def _write_point(self, x: float, y: float) -> None:
        px, py = int(x), int(y)
        if self._pixels is None or px < 0 or py < 0 or px >= self._w or py >= self._h:
            return
        self._write_span(px, py, 1)

    def _write_span(self, x: int, y: int, span: int) -> None:
        pixels = self._pixels
        if span <= 0 or pixels is None:
            return
        fmt = self._pixel_format
        color = self._color
        channels = fmt.channels()
        start = pixels.offset(x, y)
        end = start + span * channels
        data = pixels.data

        if self._alpha_blending and color.a == 0:
            return
        if not self._alpha_blending or color.a == 255:
            data[start:end] = pixels.encode(color) * span
            return

        src_alpha = color.a
        inv_src_alpha = 255 - src_alpha
        values = _colour_channels(fmt, color)
        if fmt in _ALPHA_FORMATS:
            alpha_index = channels - 1
            for pos in range(start, end, channels):
                dst_alpha = data[pos + alpha_index]
                out_alpha = over_alpha(src_alpha, dst_alpha)
                for i, src in enumerate(values):
                    data[pos + i] = blend_over(
                        src, data[pos + i], src_alpha, dst_alpha, out_alpha, inv_src_alpha
                    )
                data[pos + alpha_index] = out_alpha
        else:
            for pos in range(start, end, channels):
                for i, src in enumerate(values):
                    data[pos + i] = blend_over_opaque(src, data[pos + i], src_alpha)

    def _write_line(self, x1: int, y1: int, x2: int, y2: int) -> None:
        steep = abs(y2 - y1) > abs(x2 - x1)
        if steep:
            x1, y1 = y1, x1
            x2, y2 = y2, x2
        if x1 > x2:
            x1, x2 = x2, x1
            y1, y2 = y2, y1
        dx = x2 - x1
        dy = abs(y2 - y1)
        err = dx // 2
        ystep = 1 if y1 < y2 else -1
        y = y1
        for x in range(x1, x2 + 1):
            if steep:
                self._write_point(y, x)
            else:
                self._write_point(x, y)
            err -= dy
            if err < 0:
                y += ystep
                err += dx

    def _write_line_h(self, x: int, y: int, span: int) -> None:
        if self._pixels is None or span <= 0 or y < 0 or y >= self._h:
            return
        start = x
        end = start + span - 1
        if end < 0 or start >= self._w:
            return
        start = max(start, 0)
        end = min(end, self._w - 1)
        self._write_span(start, y, end - start + 1)

    def _write_line_v(self, x: int, y: int, span: int) -> None:
        if self._pixels is None or span <= 0 or x < 0 or x >= self._w:
            return
        start = y
        end = start + span - 1
        if end < 0 or start >= self._h:
            return
        start = max(start, 0)
        end = min(end, self._h - 1)
        for row in range(start, end + 1):
            self._write_span(x, row, 1)

    def _circle_helper(self, x0: int, y0: int, r: int, corners: int) -> None:
        f = 1 - r
        ddf_x = 1
        ddf_y = -2 * r
        x = 0
        y = r
        while x < y:
            if f >= 0:
                y -= 1
                ddf_y += 2
                f += ddf_y
            x += 1
            ddf_x += 2
            f += ddf_x
            if corners & 0x4:
                self._write_point(x0 + x, y0 + y)
                self._write_point(x0 + y, y0 + x)
            if corners & 0x2:
                self._write_point(x0 + x, y0 - y)
                self._write_point(x0 + y, y0 - x)
            if corners & 0x8:
                self._write_point(x0 - y, y0 + x)
                self._write_point(x0 - x, y0 + y)
            if corners & 0x1:
                self._write_point(x0 - y, y0 - x)
                self._write_point(x0 - x, y0 - y)

    def _fill_circle_helper(self, x0: int, y0: int, r: int, corners: int, delta: int) -> None:
        f = 1 - r
        ddf_x = 1
        ddf_y = -2 * r
        x = 0
        y = r
        px = x
        py = y
        delta += 1
        while x < y:
            if f >= 0:
                y -= 1
                ddf_y += 2
                f += ddf_y
            x += 1
            ddf_x += 2
            f += ddf_x
            # These checks avoid drawing some columns twice.
            if x < y + 1:
                if corners & 1:
                    self._write_line_v(x0 + x, y0 - y, 2 * y + delta)
                if corners & 2:
                    self._write_line_v(x0 - x, y0 - y, 2 * y + delta)
            if y != py:
                if corners & 1:
                    self._write_line_v(x0 + py, y0 - px, 2 * px + delta)
                if corners & 2:
                    self._write_line_v(x0 - py, y0 - px, 2 * px + delta)
                py = y
            px = x

    # -- shapes --------------------------------------------------------

    def draw_point(self, x: float, y: float) -> None:
        """Set a single pixel."""
        self._write_point(x, y)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Draw a line segment, clipped to the buffer."""
        if self._pixels is None or self._w == 0 or self._h == 0:
            return
        clipped = clip_line_to_bounds(
            float(x1), float(y1), float(x2), float(y2), float(self._w - 1), float(self._h - 1)
        )
        if clipped is None:
            return
        cx1, cy1, cx2, cy2 = clipped
        x_max = self._w - 1
        y_max = self._h - 1
        ix1 = clamp(_lround(cx1), 0, x_max)
        iy1 = clamp(_lround(cy1), 0, y_max)
        ix2 = clamp(_lround(cx2), 0, x_max)
        iy2 = clamp(_lround(cy2), 0, y_max)

        if ix1 == ix2:
            top, bottom = sorted((iy1, iy2))
            self._write_line_v(ix1, top, bottom - top + 1)
        elif iy1 == iy2:
            left, right = sorted((ix1, ix2))
            self._write_line_h(left, iy1, right - left + 1)
        else:
            self._write_line(ix1, iy1, ix2, iy2)

    def draw_rectangle(self, x: float, y: float, w: float, h: float) -> None:
        """Draw a rectangle; negative sizes extend left or up."""
        if w < 0:
            x += w
            w = -w
        if h < 0:
            y += h
            h = -h
        x0 = math.floor(x)
        y0 = math.floor(y)
        x1 = math.ceil(x + w)
        y1 = math.ceil(y + h)
        span_w = x1 - x0
        span_h = y1 - y0
        if span_w <= 0 or span_h <= 0:
            return
        if self._fill:
            for row in range(y0, y1):
                self._write_line_h(x0, row, span_w)
        else:
            self._write_line_h(x0, y0, span_w)
            self._write_line_h(x0, y1 - 1, span_w)
            self._write_line_v(x0, y0, span_h)
            self._write_line_v(x1 - 1, y0, span_h)

    def draw_square(self, x: float, y: float, d: float) -> None:
        """Draw a square with its corner at (x, y)."""
        self.draw_rectangle(x, y, d, d)

    def draw_square_centered(self, x: float, y: float, d: float) -> None:
        """Draw a square centred on (x, y)."""
        self.draw_rectangle(x - d / 2, y - d / 2, d, d)

    def draw_triangle(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float
    ) -> None:
        """Draw a triangle through three points."""
        if not self._fill:
            self.draw_line(x1, y1, x2, y2)
            self.draw_line(x2, y2, x3, y3)
            self.draw_line(x3, y3, x1, y1)
            return
        if self._pixels is None or self._w == 0 or self._h == 0:
            return

        area2 = (x2 - x1) * (y3 - y1) - (y2 - y1) * (x3 - x1)
        if abs(area2) <= 1e-6:
            def dist2(ax: float, ay: float, bx: float, by: float) -> float:
                return (bx - ax) ** 2 + (by - ay) ** 2

            d12 = dist2(x1, y1, x2, y2)
            d23 = dist2(x2, y2, x3, y3)
            d31 = dist2(x3, y3, x1, y1)
            if d12 >= d23 and d12 >= d31:
                self.draw_line(x1, y1, x2, y2)
            elif d23 >= d31:
                self.draw_line(x2, y2, x3, y3)
            else:
                self.draw_line(x3, y3, x1, y1)
            return

        y_start = math.floor(min(y1, y2, y3))
        y_end = math.ceil(max(y1, y2, y3))
        if y_end <= 0 or y_start >= self._h:
            return
        y_start = max(y_start, 0)
        y_end = min(y_end, self._h)
        if y_start >= y_end:
            return

        edges = ((x1, y1, x2, y2), (x2, y2, x3, y3), (x3, y3, x1, y1))
        for row in range(y_start, y_end):
            scan_y = row + 0.5
            hits = [
                ax + (scan_y - ay) / (by - ay) * (bx - ax)
                for ax, ay, bx, by in edges
                if ay != by and min(ay, by) <= scan_y < max(ay, by)
            ]
            if len(hits) < 2:
                continue
            x_start = math.floor(min(hits))
            x_end = math.floor(max(hits))
            self._write_line_h(x_start, row, x_end - x_start + 1)

    def draw_circle(self, x: float, y: float, r: float) -> None:
        """Draw a circle centred on (x, y)."""
        if r <= 0:
            r = 0
        if self._fill:
            self._write_line_v(int(x), int(y - r), int(2 * r + 1))
            self._fill_circle_helper(int(x), int(y), int(r), 3, 0)
            return

        f = int(1 - r)
        ddf_x = 1
        ddf_y = int(-2 * r)
        cx = 0
        cy = int(r)
        self._write_point(x, y + r)
        self._write_point(x, y - r)
        self._write_point(x + r, y)
        self._write_point(x - r, y)
        while cx < cy:
            if f >= 0:
                cy -= 1
                ddf_y += 2
                f += ddf_y
            cx += 1
            ddf_x += 2
            f += ddf_x
            self._write_point(x + cx, y + cy)
            self._write_point(x - cx, y + cy)
            self._write_point(x + cx, y - cy)
            self._write_point(x - cx, y - cy)
            self._write_point(x + cy, y + cx)
            self._write_point(x - cy, y + cx)
            self._write_point(x + cy, y - cx)
            self._write_point(x - cy, y - cx)

    def draw_rect_rounded(self, x: float, y: float, w: float, h: float, r: float) -> None:
        """Draw a rectangle whose corners are rounded with radius ``r``."""
        w = max(w, 0)
        h = max(h, 0)
        r = max(r, 0)
        max_radius = int(min(w, h) / 2)
        if r > max_radius:
            r = max_radius

        if self._fill:
            self.draw_rectangle(x + r, y, w - 2 * r, h)
            delta = int(h - 2 * r - 1)
            self._fill_circle_helper(int(x + w - r - 1), int(y + r), int(r), 1, delta)
            self._fill_circle_helper(int(x + r), int(y + r), int(r), 2, delta)
        else:
            self._write_line_h(int(x + r), int(y), int(w - 2 * r))
            self._write_line_h(int(x + r), int(y + h - 1), int(w - 2 * r))
            self._write_line_v(int(x), int(y + r), int(h - 2 * r))
            self._write_line_v(int(x + w - 1), int(y + r), int(h - 2 * r))
            ri = int(r)
            self._circle_helper(int(x + r), int(y + r), ri, 1)
            self._circle_helper(int(x + w - r - 1), int(y + r), ri, 2)
            self._circle_helper(int(x + w - r - 1), int(y + h - r - 1), ri, 4)
            self._circle_helper(int(x + r), int(y + h - r - 1), ri, 8)

    def draw_ellipse(self, x: float, y: float, w: float, h: float) -> None:
        """Draw an ellipse centred on (x, y) with width ``w`` and height ``h``."""
        w = max(w, 0)
        h = max(h, 0)
        x0 = int(x - w / 2.0)
        y0 = int(y + h / 2.0)
        x1 = int(x + w / 2.0)
        y1 = int(y - h / 2.0)
        a = abs(x1 - x0)
        b = abs(y1 - y0)
        b1 = b & 1
        dx = 4 * (1 - a) * b * b
        dy = 4 * (b1 + 1) * a * a
        err = dx + dy + b1 * a * a

        if x0 > x1:
            x0 = x1
            x1 += a
        if y0 > y1:
            y0 = y1
        y0 += (b + 1) // 2
        y1 = y0 - b1
        a *= 8 * a
        b1 = 8 * b * b

        while True:
            if self._fill:
                self._write_line_v(x1, y1, y0 - y1)
                if x0 != x1:
                    self._write_line_v(x0, y1, y0 - y1)
            else:
                self.draw_point(x1, y0)
                self.draw_point(x0, y0)
                self.draw_point(x0, y1)
                self.draw_point(x1, y1)
            e2 = 2 * err
            if e2 >= dx:
                x0 += 1
                x1 -= 1
                dx += b1
                err += dx
            if e2 <= dy:
                y0 += 1
                y1 -= 1
                dy += a
                err += dy
            if x0 > x1:
                break

        # Finish the tips of very flat ellipses.
        while y0 - y1 < b:
            y0 += 1
            self.draw_point(x0 - 1, y0)
            y1 -= 1
            self.draw_point(x0 - 1, y1)
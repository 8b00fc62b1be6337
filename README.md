# headlessfbo

Draw points, lines, rectangles, triangles, circles, rounded rectangles and
ellipses straight into a pixel buffer that lives in memory. No GPU, no window
and no graphics context are needed. The buffer is an ordinary Python object
whose raw bytes you can read back and hand to whatever needs them.

The package has no dependencies beyond the standard library.

## Installation

```
pip install headlessfbo
```

To run the test suite, install the test extra and run pytest:

```
pip install "headlessfbo[test]"
pytest tests
```

## Quick start

```python
from headlessfbo.canvas import HeadlessFbo
from headlessfbo.pixels import Color, PixelFormat

fbo = HeadlessFbo()
fbo.allocate(200, 200, PixelFormat.RGBA)
fbo.clear(Color(0, 0, 0, 0))

fbo.set_color(Color(0, 255, 0))
fbo.draw_triangle(0, 200, 100, 0, 200, 200)

fbo.enable_alpha_blending()
fbo.set_color(Color(0, 0, 255, 127))
fbo.draw_rectangle(50, 50, 100, 100)

fbo.set_no_fill()
fbo.set_color(Color(255, 255, 255, 127))
fbo.draw_circle(100, 100, 50)
fbo.draw_rect_rounded(20, 20, 160, 50, 30)
fbo.draw_ellipse(100, 160, 100, 40)

pixels = fbo.read_pixels()
print(pixels.get_color(100, 100))
```

## Modules

- `headlessfbo.pixels` – `PixelFormat`, `Color` and `Pixels`.
- `headlessfbo.canvas` – `HeadlessFbo`, the drawing surface.
- `headlessfbo.blend` – integer compositing and line clipping helpers.

## Pixel formats and colours

`PixelFormat` lists the layouts: `RGB`, `BGR`, `RGBA`, `BGRA`, `GRAY`,
`GRAY_ALPHA` and `UNKNOWN`. `PixelFormat.channels()` gives the number of bytes
per pixel (0 for `UNKNOWN`). Gray formats store the largest of the red, green
and blue components of a colour.

`Color(r, g, b, a)` is an immutable 8-bit colour; every component defaults to
255, so `Color()` is opaque white. A component outside 0..255 raises
`ValueError`. `Color.brightness` is the largest of `r`, `g` and `b`.

## Drawing

`HeadlessFbo` starts unallocated. `allocate(width, height, pixel_format)`
creates a zeroed buffer; a width or height of 0 or less, or
`PixelFormat.UNKNOWN`, is ignored and leaves the canvas as it was.
`is_allocated()`, `width()` and `height()` report the current state (the sizes
are 0 until a buffer exists).

Drawing state:

- `set_color(color)` picks the colour for following shapes; anything other
  than a `Color` raises `TypeError`.
- `set_fill()` / `set_no_fill()` switch between filled shapes and outlines.
  Filling is on by default.
- `enable_alpha_blending()` / `disable_alpha_blending()` choose whether the
  colour's alpha is composited "over" the existing pixels or the colour is
  written as it is. Blending is off by default. With blending on, a fully
  transparent colour draws nothing and a fully opaque one is written directly.
  Formats without an alpha channel treat the destination as opaque.
- `clear(color)` fills the whole buffer with one colour.

Shapes:

- `draw_point(x, y)` – coordinates are truncated to integers.
- `draw_line(x1, y1, x2, y2)` – clipped to the buffer, endpoints rounded half
  away from zero.
- `draw_rectangle(x, y, w, h)` – negative sizes extend left or up.
- `draw_square(x, y, d)` and `draw_square_centered(x, y, d)`.
- `draw_triangle(x1, y1, x2, y2, x3, y3)` – a filled triangle with
  (near-)zero area is drawn as its longest edge.
- `draw_circle(x, y, r)` – centred on (x, y).
- `draw_rect_rounded(x, y, w, h, r)` – the radius is limited to half the
  shorter side.
- `draw_ellipse(x, y, w, h)` – centred on (x, y).

Anything drawn outside the buffer is clipped. Drawing before `allocate` does
nothing.

## Working with pixels

`read_pixels()` returns an independent copy of the buffer as a `Pixels`
object, or `None` when nothing is allocated.
`set_from_pixels(pixels, width, height, pixel_format)` replaces the buffer
with a copy of `pixels`; invalid sizes or an unknown format are ignored, and a
`Pixels` whose size or format differs from the arguments raises `ValueError`.

`Pixels(width, height, pixel_format)` stores pixels row by row in a
`bytearray` available as `data`, alongside `width`, `height` and
`pixel_format`. It offers `num_channels()`, `get_color(x, y)`,
`set_color(x, y, color)`, `fill(color)`, `copy()`, `offset(x, y)` (the index of
a pixel's first byte; out-of-range coordinates raise `IndexError`) and
`encode(color)` (the bytes of a colour in the buffer's format). Two `Pixels`
compare equal when size, format and data match.

## Blending helpers

`headlessfbo.blend` holds the integer arithmetic behind the canvas:
`blend_over_opaque`, `blend_over`, `over_alpha`, `mono_from_rgb`,
`clip_line_to_bounds` (returns the clipped endpoints, or `None` when the
segment misses the box) and `clamp`.

## What it does not do

The package only draws into memory. It does not show the buffer on screen and
does not read or write image files; to view or save a drawing, pass
`Pixels.data` to an imaging library of your choice.
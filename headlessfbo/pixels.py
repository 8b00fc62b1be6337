"""CPU-side pixel storage used by the headless canvas."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from enum import Enum


class PixelFormat(Enum):
    """Channel layout of a pixel buffer."""

    RGB = "rgb"
    BGR = "bgr"
    RGBA = "rgba"
    BGRA = "bgra"
    GRAY = "gray"
    GRAY_ALPHA = "gray_alpha"
    UNKNOWN = "unknown"

    def channels(self) -> int:
        """Number of bytes each pixel takes in this format."""
        return _CHANNELS[self]


_CHANNELS = {
    PixelFormat.RGB: 3,
    PixelFormat.BGR: 3,
    PixelFormat.RGBA: 4,
    PixelFormat.BGRA: 4,
    PixelFormat.GRAY: 1,
    PixelFormat.GRAY_ALPHA: 2,
    PixelFormat.UNKNOWN: 0,
}


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour; the default is opaque white."""

    r: int = 255
    g: int = 255
    b: int = 255
    a: int = 255

    def __post_init__(self) -> None:
        for name, value in zip("rgba", astuple(self)):
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"colour component {name}={value!r} is not in 0..255")

    @property
    def brightness(self) -> int:
        """The largest of the red, green and blue components."""
        return max(self.r, self.g, self.b)


class Pixels:
    """A width x height block of 8-bit pixels stored row by row."""

    def __init__(self, width: int, height: int, pixel_format: PixelFormat) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid pixel buffer size {width}x{height}")
        if pixel_format is PixelFormat.UNKNOWN:
            raise ValueError("pixel format must be known")
        self.width = width
        self.height = height
        self.pixel_format = pixel_format
        self.data = bytearray(width * height * pixel_format.channels())

    def num_channels(self) -> int:
        """Bytes per pixel."""
        return self.pixel_format.channels()

    def offset(self, x: int, y: int) -> int:
        """Index into ``data`` of the first byte of pixel (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return (y * self.width + x) * self.num_channels()

    def encode(self, color: Color) -> bytes:
        """The bytes that represent ``color`` in this buffer's format."""
        fmt = self.pixel_format
        if fmt is PixelFormat.RGB:
            return bytes((color.r, color.g, color.b))
        if fmt is PixelFormat.BGR:
            return bytes((color.b, color.g, color.r))
        if fmt is PixelFormat.RGBA:
            return bytes((color.r, color.g, color.b, color.a))
        if fmt is PixelFormat.BGRA:
            return bytes((color.b, color.g, color.r, color.a))
        if fmt is PixelFormat.GRAY:
            return bytes((color.brightness,))
        return bytes((color.brightness, color.a))

    def get_color(self, x: int, y: int) -> Color:
        """The colour stored at (x, y)."""
        start = self.offset(x, y)
        px = self.data[start:start + self.num_channels()]
        fmt = self.pixel_format
        if fmt is PixelFormat.RGB:
            return Color(px[0], px[1], px[2])
        if fmt is PixelFormat.BGR:
            return Color(px[2], px[1], px[0])
        if fmt is PixelFormat.RGBA:
            return Color(px[0], px[1], px[2], px[3])
        if fmt is PixelFormat.BGRA:
            return Color(px[2], px[1], px[0], px[3])
        if fmt is PixelFormat.GRAY:
            return Color(px[0], px[0], px[0])
        return Color(px[0], px[0], px[0], px[1])

    def set_color(self, x: int, y: int, color: Color) -> None:
        """Store ``color`` at (x, y)."""
        start = self.offset(x, y)
        self.data[start:start + self.num_channels()] = self.encode(color)

    def fill(self, color: Color) -> None:
        """Set every pixel to ``color``."""
        self.data[:] = self.encode(color) * (self.width * self.height)

    def copy(self) -> Pixels:
        """An independent copy of this buffer."""
        other = Pixels(self.width, self.height, self.pixel_format)
        other.data[:] = self.data
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pixels):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.pixel_format is other.pixel_format
            and self.data == other.data
        )

    def __repr__(self) -> str:
        return f"Pixels({self.width}, {self.height}, {self.pixel_format})"
"""Raster images of 8-bit channels with simple processing operations."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

_LUT_LARGE = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
_LUT_SMALL = "@%#*+=-:. "


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_W_RED = _f32(0.299)
_W_GREEN = _f32(0.587)
_W_BLUE = _f32(0.114)


def _u8(value: float) -> int:
    """Truncate to an unsigned byte the way an integer cast does."""
    return int(value) & 0xFF


@dataclass
class Image:
    """An image of width x height pixels with interleaved byte channels."""

    width: int = 100
    height: int = 100
    component_count: int = 4
    data: Optional[bytearray] = field(default=None)

    def __post_init__(self) -> None:
        if self.data is None:
            self.data = bytearray(self.width * self.height * self.component_count)
        else:
            self.data = bytearray(self.data)

    @classmethod
    def from_color(cls, color: Sequence[float]) -> "Image":
        """A single RGBA pixel from a colour with components in [0, 1]."""
        return cls(1, 1, 4, [_u8(c * 255) for c in color[:4]])

    def _pixels(self) -> Iterator[memoryview]:
        cc = self.component_count
        view = memoryview(self.data)
        for start in range(0, len(self.data) - cc + 1, cc):
            yield view[start:start + cc]

    def _expand_to_rgba(self, alpha_of) -> None:
        rgba = bytearray()
        for pixel in self._pixels():
            rgba.extend(pixel[:3])
            rgba.append(alpha_of(pixel))
        self.data = rgba
        self.component_count = 4

    def multiply(self, color: Sequence[float]) -> None:
        """Scale channels by an RGBA colour; RGB images gain an alpha channel."""
        r, g, b, a = color
        if self.component_count == 4:
            for pixel in self._pixels():
                pixel[0] = _u8(pixel[0] * r)
                pixel[1] = _u8(pixel[1] * g)
                pixel[2] = _u8(pixel[2] * b)
                pixel[3] = _u8(pixel[3] * a)
        elif self.component_count == 3:
            scaled = bytearray()
            for pixel in self._pixels():
                scaled.extend((_u8(pixel[0] * r), _u8(pixel[1] * g),
                               _u8(pixel[2] * b), _u8(255 * a)))
            self.data = scaled
            self.component_count = 4

    def generate_alpha(self, alpha: int = 255) -> None:
        """Set every alpha value, adding an alpha channel to RGB images."""
        if self.component_count == 4:
            for pixel in self._pixels():
                pixel[3] = alpha
        elif self.component_count == 3:
            self._expand_to_rgba(lambda _pixel: alpha)

    def generate_alpha_from_luminance(self) -> None:
        """Set alpha to the pixel luminance, adding alpha to RGB images."""
        def luminance(pixel) -> int:
            return _u8(0.299 * pixel[0] + 0.587 * pixel[1] + 0.114 * pixel[2])

        if self.component_count == 4:
            for pixel in self._pixels():
                pixel[3] = luminance(pixel)
        elif self.component_count == 3:
            self._expand_to_rgba(luminance)

    def compute_index(self, x: int, y: int, component: int) -> int:
        return component + (x + y * self.width) * self.component_count

    def get_value(self, x: int, y: int, component: int) -> int:
        return self.data[self.compute_index(x, y, component)]

    def set_value(self, x: int, y: int, component: int, value: int) -> None:
        self.data[self.compute_index(x, y, component)] = value

    def set_gray(self, x: int, y: int, value: int) -> None:
        """Write the same value into the first three channels of a pixel."""
        index = self.compute_index(x, y, 0)
        self.data[index:index + 3] = bytes((value, value, value))

    def set_normalized_value(self, x: int, y: int, value: float,
                             component: Optional[int] = None) -> None:
        """Store a value from [0, 1]; without a component, into RGB."""
        byte = _u8(max(0.0, min(1.0, value)) * 255)
        if component is None:
            index = self.compute_index(x, y, 0)
            self.data[index:index + 3] = bytes((byte, byte, byte))
        else:
            self.data[self.compute_index(x, y, component)] = byte

    def get_lumi_value(self, x: int, y: int) -> int:
        """Luminance of a pixel as a byte."""
        cc = self.component_count
        if cc == 1:
            return self.get_value(x, y, 0)
        if cc == 2:
            half = _f32(0.5)
            return _u8(_f32(_f32(self.get_value(x, y, 0) * half)
                            + _f32(self.get_value(x, y, 1) * half)))
        if cc in (3, 4):
            red = _f32(self.get_value(x, y, 0) * _W_RED)
            green = _f32(self.get_value(x, y, 1) * _W_GREEN)
            blue = _f32(self.get_value(x, y, 2) * _W_BLUE)
            return _u8(_f32(_f32(red + green) + blue))
        return 0

    def _linear(self, a: int, b: int, alpha: float) -> int:
        return _u8(a * (1.0 - alpha) + b * alpha)

    def sample(self, x: float, y: float, component: int) -> int:
        """Bilinear sample at normalised coordinates."""
        sx = x * (self.width - 1)
        sy = y * (self.height - 1)
        fx, fy = int(math.floor(sx)), int(math.floor(sy))
        cx, cy = int(math.ceil(sx)), int(math.ceil(sy))
        alpha = sx - fx
        beta = sy - fy
        top = self._linear(self.get_value(fx, fy, component),
                           self.get_value(cx, fy, component), alpha)
        bottom = self._linear(self.get_value(fx, cy, component),
                              self.get_value(cx, cy, component), alpha)
        return self._linear(top, bottom, beta)

    def to_code(self, var_name: str = "myImage", padding: bool = False) -> str:
        """Render the image as an initialiser listing its bytes."""
        parts = [f"Image {var_name} {{{self.width},{self.height},{self.component_count},\n",
                 "              {"]
        last = len(self.data) - 1
        for i, value in enumerate(self.data):
            if i % 30 == 0:
                parts.append("\n              ")
            parts.append(f"{value:>3}" if padding else str(value))
            parts.append("," if i < last else "\n")
        parts.append("          }};\n")
        return "".join(parts)

    def to_ascii_art(self, small_table: bool = True) -> str:
        """Character rendering sampling every fourth pixel, top row first."""
        lut = _LUT_SMALL if small_table else _LUT_LARGE
        lines = []
        for y in range(0, self.height, 4):
            row = []
            for x in range(0, self.width, 4):
                value = self.get_lumi_value(x, self.height - 1 - y)
                char = lut[min(value * len(lut) // 255, len(lut) - 1)]
                row.append(char * 2)
            lines.append("".join(row) + "\n")
        return "".join(lines)

    def filter(self, kernel) -> "Image":
        """Convolve with a kernel exposing width, height and get_value(x, y)."""
        result = Image(self.width, self.height, self.component_count)
        hw = kernel.width // 2
        hh = kernel.height // 2
        for y in range(hh, self.height - hh):
            for x in range(hw, self.width - hw):
                for c in range(self.component_count):
                    conv = sum(
                        self.get_value(x + u - hw, y + v - hh, c) * kernel.get_value(u, v)
                        for u in range(kernel.height)
                        for v in range(kernel.width)
                    )
                    result.set_value(x, y, c, _u8(abs(conv)))
        return result

    def to_grayscale(self) -> "Image":
        """Single-channel image of the luminance values."""
        return Image(self.width, self.height, 1,
                     [self.get_lumi_value(x, y)
                      for y in range(self.height) for x in range(self.width)])

    @classmethod
    def gen_test_image(cls, width: int, height: int) -> "Image":
        """Colour bars on the left two thirds, a grey ramp on the right."""
        part_y1 = height // 3
        part_y2 = height * 2 // 3
        part_x1 = width // 3
        part_x2 = width * 2 // 3
        result = cls(width, height, 4)
        for y in range(height):
            for x in range(width):
                if x < part_x2:
                    rgb = [y < part_y1, part_y1 <= y < part_y2, y >= part_y2]
                    if x >= part_x1:
                        rgb = [not v for v in rgb]
                    values = [255 if v else 0 for v in rgb]
                else:
                    level = _u8(255 * ((y >= part_y1) * 0.5 + (y >= part_y2) * 0.5))
                    values = [level] * 3
                index = result.compute_index(x, y, 0)
                result.data[index:index + 4] = bytes(values + [255])
        return result

    def crop(self, bl_x: int, bl_y: int, tr_x: int, tr_y: int) -> "Image":
        """The region [bl_x, tr_x) x [bl_y, tr_y)."""
        data = bytearray()
        for y in range(bl_y, tr_y):
            data.extend(self.data[self.compute_index(bl_x, y, 0):self.compute_index(tr_x, y, 0)])
        return Image(tr_x - bl_x, tr_y - bl_y, self.component_count, data)

    def resample(self, new_width: int) -> "Image":
        """Bilinear resampling to a new width, keeping the aspect ratio."""
        new_height = int(new_width * self.height / self.width)
        return Image(new_width, new_height, self.component_count,
                     [self.sample(x / new_width, y / new_height, c)
                      for y in range(new_height)
                      for x in range(new_width)
                      for c in range(self.component_count)])

    def crop_to_aspect_and_resample(self, new_width: int, new_height: int) -> "Image":
        """Centre-crop to the target aspect, then box-filter down to its size."""
        if new_width == self.width and new_height == self.height:
            return Image(self.width, self.height, self.component_count, self.data)

        aspect = self.width / self.height
        new_aspect = new_width / new_height
        start_x = int(self.width * ((1.0 - new_aspect / aspect) / 2.0)) if aspect > new_aspect else 0
        start_y = int(self.height * ((1.0 - aspect / new_aspect) / 2.0)) if aspect < new_aspect else 0
        span_x = self.width - 2 * start_x
        span_y = self.height - 2 * start_y
        reduction = span_x // new_width
        if reduction == 0:
            raise ValueError("target size exceeds the cropped source size")

        cc = self.component_count
        result = Image(new_width, new_height, cc)
        for y in range(new_height):
            for x in range(new_width):
                totals = [0] * cc
                for dy in range(reduction):
                    for dx in range(reduction):
                        sx = int(start_x + x / new_width * span_x + dx)
                        sy = int(start_y + y / new_height * span_y + dy)
                        for c in range(cc):
                            totals[c] += self.get_value(sx, sy, c)
                for c, total in enumerate(totals):
                    result.set_value(x, y, c, _u8(total // (reduction * reduction)))
        return result

    def _rows(self) -> list[bytes]:
        row_len = self.width * self.component_count
        if row_len == 0:
            return []
        return [bytes(self.data[start:start + row_len])
                for start in range(0, len(self.data), row_len)]

    def flip_horizontal(self) -> "Image":
        """Mirror the rows top to bottom."""
        return Image(self.width, self.height, self.component_count,
                     b"".join(reversed(self._rows())))

    def flip_vertical(self) -> "Image":
        """Mirror the columns left to right."""
        cc = self.component_count
        data = bytearray()
        for row in self._rows():
            pixels = [row[i:i + cc] for i in range(0, len(row), cc)]
            data.extend(b"".join(reversed(pixels)))
        return Image(self.width, self.height, cc, data)
"""Two-dimensional scalar fields with sampling, arithmetic and distance transforms."""

from __future__ import annotations

import math
import operator
import struct
from typing import BinaryIO, Callable, Iterable, Iterator, Optional, Union

from vistools.image import Image
from vistools.rand import Random

FLT_MAX = 3.4028234663852886e38
FLT_MIN = 1.1754943508222875e-38

_D1 = 1.0
_D2 = 1.4142135624

_HEADER = struct.Struct("<QQ")

_shared_random: Optional[Random] = None


def _shared() -> Random:
    global _shared_random
    if _shared_random is None:
        _shared_random = Random()
    return _shared_random


def _norm_coord(i: int, count: int) -> float:
    return i / (count - 1.0) if count > 1 else 0.0


def _cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize3(v):
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    return (v[0] / length, v[1] / length, v[2] / length)


Operand = Union["Grid2D", float, int]


class Grid2D:
    """A width x height grid of float values stored row by row."""

    def __init__(self, width: int, height: int,
                 data: Optional[Iterable[float]] = None) -> None:
        self.width = int(width)
        self.height = int(height)
        if data is None:
            self.data = [0.0] * (self.width * self.height)
        else:
            self.data = [float(v) for v in data]
            if len(self.data) != self.width * self.height:
                raise ValueError("size mismatch")

    @classmethod
    def from_image(cls, image: Image) -> "Grid2D":
        """Grid of the first channel of an image, scaled to [0, 1]."""
        cc = image.component_count
        count = len(image.data) // cc
        return cls(image.width, image.height,
                   (image.data[i * cc] / 255.0 for i in range(count)))

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> "Grid2D":
        """Read a grid written by save()."""
        header = stream.read(_HEADER.size)
        if len(header) != _HEADER.size:
            raise ValueError("truncated grid header")
        width, height = _HEADER.unpack(header)
        count = width * height
        payload = stream.read(4 * count)
        if len(payload) != 4 * count:
            raise ValueError("truncated grid data")
        return cls(width, height, struct.unpack(f"<{count}f", payload))

    def save(self, stream: BinaryIO) -> None:
        """Write the dimensions and single-precision values to a binary stream."""
        stream.write(_HEADER.pack(self.width, self.height))
        stream.write(struct.pack(f"<{len(self.data)}f", *self.data))

    @classmethod
    def gen_random(cls, width: int, height: int,
                   seed: Optional[int] = None) -> "Grid2D":
        """Grid of uniform values in [0, 1); a shared generator without a seed."""
        rng = Random(seed) if seed is not None else _shared()
        return cls(width, height, (rng.rand01() for _ in range(width * height)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid2D):
            return NotImplemented
        return (self.width, self.height, self.data) == (other.width, other.height, other.data)

    def __repr__(self) -> str:
        return f"Grid2D({self.width}, {self.height})"

    def __str__(self) -> str:
        parts = []
        for i, value in enumerate(self.data):
            parts.append(f"{value:g}")
            if i % self.width == self.width - 1 and i != 0:
                parts.append("\n")
            else:
                parts.append(", ")
        return "".join(parts)

    def to_byte_array(self) -> bytes:
        """Grey RGB bytes, three per value."""
        out = bytearray()
        for value in self.data:
            byte = int(value * 255) & 0xFF
            out.extend((byte, byte, byte))
        return bytes(out)

    def _index(self, x: int, y: int) -> int:
        return x + y * self.width

    def set_value(self, x: int, y: int, value: float) -> None:
        self.data[self._index(x, y)] = float(value)

    def get_value(self, x: int, y: int) -> float:
        return self.data[self._index(x, y)]

    def get_value_normalized(self, x: float, y: float) -> float:
        """Nearest value below normalised coordinates."""
        return self.data[self._index(int(x * self.width), int(y * self.height))]

    def _corners(self, x: float, y: float):
        x = max(min(x, 1.0), 0.0)
        y = max(min(y, 1.0), 0.0)
        sx = x * (self.width - 1)
        sy = y * (self.height - 1)
        fx, cx = int(math.floor(sx)), int(math.ceil(sx))
        fy, cy = int(math.floor(sy)), int(math.ceil(sy))
        values = (
            self.get_value(fx, fy),
            self.get_value(cx, fy),
            self.get_value(fx, cy),
            self.get_value(cx, cy),
        )
        return sx - math.floor(sx), sy - math.floor(sy), values

    def sample(self, x: float, y: float) -> float:
        """Bilinear sample at normalised coordinates, clamped to [0, 1]."""
        alpha, beta, (va, vb, vc, vd) = self._corners(x, y)
        return ((va * (1.0 - alpha) + vb * alpha) * (1.0 - beta)
                + (vc * (1.0 - alpha) + vd * alpha) * beta)

    def normal(self, x: float, y: float) -> tuple[float, float, float]:
        """Unit surface normal of the grid read as a height field."""
        _, _, (va, vb, vc, vd) = self._corners(x, y)
        w, h = self.width, self.height
        n1 = _cross((1.0 / w, vb - va, 0.0), (0.0, vc - va, 1.0 / h))
        n2 = _cross((-1.0 / w, vc - vd, 0.0), (0.0, vb - vd, -1.0 / h))
        return _normalize3(((n1[0] + n2[0]) / 2.0,
                            (n1[1] + n2[1]) / 2.0,
                            (n1[2] + n2[2]) / 2.0))

    def _norm_coords(self, width: int, height: int) -> Iterator[tuple[float, float]]:
        for y in range(height):
            ny = _norm_coord(y, height)
            for x in range(width):
                yield _norm_coord(x, width), ny

    def _combine(self, other: Operand, op: Callable[[float, float], float]) -> "Grid2D":
        if not isinstance(other, Grid2D):
            return Grid2D(self.width, self.height, (op(v, other) for v in self.data))

        mw = max(self.width, other.width)
        mh = max(self.height, other.height)
        if (other.width, other.height) == (self.width, self.height):
            return Grid2D(mw, mh, (op(a, b) for a, b in zip(self.data, other.data)))

        coords = self._norm_coords(mw, mh)
        # When the other grid is the larger one, its values come first.
        if (mw, mh) == (self.width, self.height):
            values = (op(a, other.sample(nx, ny)) for a, (nx, ny) in zip(self.data, coords))
        elif (mw, mh) == (other.width, other.height):
            values = (op(b, self.sample(nx, ny)) for b, (nx, ny) in zip(other.data, coords))
        else:
            values = (op(other.sample(nx, ny), self.sample(nx, ny)) for nx, ny in coords)
        return Grid2D(mw, mh, values)

    def __add__(self, other: Operand) -> "Grid2D":
        return self._combine(other, operator.add)

    def __sub__(self, other: Operand) -> "Grid2D":
        return self._combine(other, operator.sub)

    def __mul__(self, other: Operand) -> "Grid2D":
        return self._combine(other, operator.mul)

    def __truediv__(self, other: Operand) -> "Grid2D":
        if not isinstance(other, Grid2D):
            return self * (1.0 / other)
        return self._combine(other, operator.truediv)

    def normalize(self, max_val: float = 1.0) -> None:
        """Rescale values in place to span [0, max_val]."""
        if not self.data:
            return
        low = min(self.data)
        high = max(self.data)
        if high == low:
            raise ValueError("cannot normalize a constant grid")
        scale = max_val / (high - low)
        self.data = [(v - low) * scale for v in self.data]

    def max_value(self) -> tuple[int, int]:
        """Position of the first largest value above the smallest positive float."""
        best = FLT_MIN
        pos = (0, 0)
        for i, value in enumerate(self.data):
            if best < value:
                best = value
                pos = (i % self.width, i // self.width)
        return pos

    def min_value(self) -> tuple[int, int]:
        """Position of the first smallest value."""
        best = FLT_MAX
        pos = (0, 0)
        for i, value in enumerate(self.data):
            if best > value:
                best = value
                pos = (i % self.width, i // self.width)
        return pos

    def fill(self, value: float) -> None:
        self.data = [float(value)] * (self.width * self.height)

    def to_signed_distance(self, threshold: float) -> "Grid2D":
        """Signed distance to the threshold contour, negative below it."""
        w, h = self.width, self.height
        idx = self._index
        inside = [v >= threshold for v in self.data]
        result = Grid2D(w, h, [FLT_MAX] * (w * h))
        r = result.data
        nearest: list[Optional[tuple[int, int]]] = [None] * (w * h)

        for y in range(1, h - 1):
            for x in range(1, w - 1):
                i = idx(x, y)
                if (inside[idx(x - 1, y)] != inside[i] or inside[idx(x + 1, y)] != inside[i]
                        or inside[idx(x, y + 1)] != inside[i]
                        or inside[idx(x, y - 1)] != inside[i]):
                    r[i] = 0.0
                    nearest[i] = (x, y)

        def relax(x: int, y: int, nx: int, ny: int, step: float) -> None:
            i = idx(x, y)
            j = idx(nx, ny)
            if r[j] + step < r[i]:
                nearest[i] = nearest[j]
                px, py = nearest[i]
                r[i] = math.sqrt((x - px) ** 2 + (y - py) ** 2)

        for y in range(1, h - 1):
            for x in range(1, w - 1):
                relax(x, y, x - 1, y - 1, _D2)
                relax(x, y, x, y - 1, _D1)
                relax(x, y, x + 1, y - 1, _D2)
                relax(x, y, x - 1, y, _D1)

        for y in range(h - 2, 0, -1):
            for x in range(w - 2, 0, -1):
                relax(x, y, x + 1, y, _D1)
                relax(x, y, x - 1, y + 1, _D2)
                relax(x, y, x, y + 1, _D1)
                relax(x, y, x + 1, y + 1, _D2)

        result.data = [v if ins else -v for v, ins in zip(r, inside)]
        return result
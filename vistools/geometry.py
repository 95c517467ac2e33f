"""Primitive types and vertex-list conversions for line and triangle drawing."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterator, Sequence

DEFAULT_COMPONENTS = 7


class LineDrawType(Enum):
    """How a vertex list is joined into lines."""

    LIST = "list"
    STRIP = "strip"
    LOOP = "loop"


class TrisDrawType(Enum):
    """How a vertex list is joined into triangles."""

    LIST = "list"
    STRIP = "strip"
    FAN = "fan"


def _vertices(data: Sequence[float], comp_count: int) -> list[list[float]]:
    """Split interleaved floats into whole vertices, dropping a partial tail."""
    if comp_count <= 0:
        raise ValueError("comp_count must be positive")
    count = len(data) // comp_count
    return [list(data[start:start + comp_count])
            for start in range(0, count * comp_count, comp_count)]


def _edges(v0, v1, v2) -> Iterator[list[float]]:
    """The three edges of a triangle as consecutive vertex pairs."""
    yield from (v0, v1, v1, v2, v2, v0)


def _flatten(vertices) -> list[float]:
    return [value for vertex in vertices for value in vertex]


def triangles_to_lines(data: Sequence[float], comp_count: int) -> list[float]:
    """Edge list of independent triangles; empty if the data is not whole triangles."""
    if comp_count <= 0:
        raise ValueError("comp_count must be positive")
    if len(data) % (3 * comp_count) != 0:
        return []
    verts = _vertices(data, comp_count)
    triangles = zip(verts[0::3], verts[1::3], verts[2::3])
    return _flatten(edge for tri in triangles for edge in _edges(*tri))


def triangle_strip_to_lines(data: Sequence[float], comp_count: int) -> list[float]:
    """Edge list of a triangle strip, keeping the alternating winding."""
    verts = _vertices(data, comp_count)
    if len(verts) < 3:
        return []

    def triangles():
        for i in range(2, len(verts)):
            if i % 2 == 0:
                yield verts[i - 2], verts[i - 1], verts[i]
            else:
                yield verts[i - 1], verts[i - 2], verts[i]

    return _flatten(edge for tri in triangles() for edge in _edges(*tri))


def triangle_fan_to_lines(data: Sequence[float], comp_count: int) -> list[float]:
    """Edge list of a triangle fan around its first vertex."""
    verts = _vertices(data, comp_count)
    if len(verts) < 3:
        return []
    center = verts[0]
    return _flatten(edge
                    for v1, v2 in zip(verts[1:-1], verts[2:])
                    for edge in _edges(center, v1, v2))


def wireframe(data: Sequence[float], draw_type: TrisDrawType,
              comp_count: int = DEFAULT_COMPONENTS) -> list[float]:
    """Line-list vertices outlining the triangles of the given primitive type."""
    converters = {
        TrisDrawType.LIST: triangles_to_lines,
        TrisDrawType.STRIP: triangle_strip_to_lines,
        TrisDrawType.FAN: triangle_fan_to_lines,
    }
    return converters[TrisDrawType(draw_type)](data, comp_count)


def point_sprite_disk(resolution: int = 64) -> bytes:
    """RGBA texture of a white disk whose alpha fades linearly to the rim."""
    if resolution < 0:
        raise ValueError("resolution must not be negative")
    out = bytearray()
    for y in range(resolution):
        ny = 2.0 * y / resolution - 1.0
        for x in range(resolution):
            nx = 2.0 * x / resolution - 1.0
            alpha = max(0, int((1.0 - math.hypot(nx, ny)) * 255))
            out.extend((255, 255, 255, alpha & 0xFF))
    return bytes(out)
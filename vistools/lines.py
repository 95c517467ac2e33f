"""Triangulation of thick lines into screen-aligned quads."""

from __future__ import annotations

import math
from typing import Sequence, Union

from vistools.geometry import LineDrawType

Vec3 = tuple[float, float, float]

_COMPONENTS = 7


def _sub(a, b) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _add(a, b) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _dot(a, b) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a, b) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(v) -> Vec3:
    """Unit vector along v; a zero vector stays zero."""
    length = math.sqrt(_dot(v, v))
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def _framebuffer_dims(framebuffer_size) -> tuple[int, int]:
    if hasattr(framebuffer_size, "width"):
        width, height = framebuffer_size.width, framebuffer_size.height
    else:
        width, height = framebuffer_size
    if width <= 0 or height <= 0:
        raise ValueError("framebuffer size must be positive")
    return width, height


def _separation(side_perp: Vec3, c_perp: Vec3, scale: Vec3) -> Vec3:
    sep = _add(side_perp, c_perp)
    divisor = max(1.0, _dot(sep, c_perp))
    return tuple(s / divisor * k for s, k in zip(sep, scale))  # type: ignore[return-value]


def triangulate_segment(p0: Sequence[float], p1: Sequence[float], c1: Sequence[float],
                        p2: Sequence[float], c2: Sequence[float], p3: Sequence[float],
                        thickness: float, view_dir: Sequence[float],
                        framebuffer_size) -> list[float]:
    """Two triangles covering the segment p1-p2, mitred towards p0 and p3.

    Returns six interleaved vertices of seven floats (position, RGBA colour).
    """
    width, height = _framebuffer_dims(framebuffer_size)
    scale = (2.0 / width * thickness, 2.0 / height * thickness, 1.0 * thickness)

    p_dir = _normalize(_sub(p1, p0))
    c_dir = _normalize(_sub(p2, p1))
    n_dir = _normalize(_sub(p3, p2))
    view = _normalize(view_dir)

    p_perp = _cross(p_dir, view)
    c_perp = _cross(c_dir, view)
    n_perp = _cross(n_dir, view)

    p_sep = _separation(p_perp, c_perp, scale)
    n_sep = _separation(n_perp, c_perp, scale)

    start_color = list(c1[:4])
    end_color = list(c2[:4])
    corners = [
        (_add(p1, p_sep), start_color),
        (_add(p2, n_sep), end_color),
        (_sub(p1, p_sep), start_color),
        (_add(p2, n_sep), end_color),
        (_sub(p2, n_sep), end_color),
        (_sub(p1, p_sep), start_color),
    ]
    return [value for position, color in corners for value in (*position, *color)]


def _split(data: Sequence[float]) -> list[tuple[Vec3, list[float]]]:
    count = len(data) // _COMPONENTS
    vertices = []
    for start in range(0, count * _COMPONENTS, _COMPONENTS):
        chunk = data[start:start + _COMPONENTS]
        vertices.append(((chunk[0], chunk[1], chunk[2]), list(chunk[3:7])))
    return vertices


def thick_lines(data: Sequence[float], draw_type: LineDrawType, thickness: float,
                view_dir: Sequence[float], framebuffer_size) -> list[float]:
    """Triangle-list vertices for lines given as (x, y, z, r, g, b, a) vertices."""
    draw_type = LineDrawType(draw_type)
    verts = _split(data)
    n = len(verts)
    out: list[float] = []

    def emit(i0: int, i1: int, i2: int, i3: int, p0=None, p3=None) -> None:
        out.extend(triangulate_segment(
            verts[i0][0] if p0 is None else p0,
            verts[i1][0], verts[i1][1],
            verts[i2][0], verts[i2][1],
            verts[i3][0] if p3 is None else p3,
            thickness, view_dir, framebuffer_size))

    if draw_type is LineDrawType.LIST:
        if n % 2:
            raise ValueError("a line list needs an even number of vertices")
        for i in range(0, n, 2):
            i1, i2 = i, i + 1
            p1, p2 = verts[i1][0], verts[i2][0]
            p0, p3 = p1, p2
            if i1 >= 2 and p1 == verts[i1 - 1][0]:
                p0 = verts[i - 2][0]
            if i2 + 2 < n and p2 == verts[i2 + 1][0]:
                p3 = verts[i + 2][0]
            emit(i1, i1, i2, i2, p0=p0, p3=p3)
    elif draw_type is LineDrawType.STRIP:
        for i in range(max(0, n - 1)):
            i0 = 0 if i == 0 else i - 1
            i2 = i + 1
            i3 = i2 if i == n - 2 else i2 + 1
            emit(i0, i, i2, i3)
    else:
        for i in range(n):
            i0 = 0 if i == 0 else i - 1
            i2 = (i + 1) % n
            i3 = i2 if i == n - 1 else (i2 + 1) % n
            emit(i0, i, i2, i3)
    return out
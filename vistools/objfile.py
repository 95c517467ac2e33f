"""Reader for the triangle subset of Wavefront OBJ meshes."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable, Union

Vec3 = tuple[float, float, float]
Triangle = tuple[int, int, int]

_WHITESPACE = " \t\n\v\f\r"
_LEADING_INT = re.compile(r"[+-]?\d+")
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _leading_int(token: str) -> int:
    """Integer at the start of a token, 0 when there is none."""
    match = _LEADING_INT.match(token)
    return int(match.group()) if match else 0


def _leading_float(token: str) -> float:
    """Number at the start of a token, 0.0 when there is none."""
    match = _LEADING_FLOAT.match(token)
    return float(match.group()) if match else 0.0


def _add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(v: Vec3) -> Vec3:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        return (math.nan, math.nan, math.nan)
    return (v[0] / length, v[1] / length, v[2] / length)


@dataclass
class ObjFile:
    """Vertices, triangle indices and per-vertex normals of a mesh."""

    indices: list[Triangle] = field(default_factory=list)
    vertices: list[Vec3] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)

    @classmethod
    def parse(cls, lines: Iterable[str], normalize: bool = False) -> "ObjFile":
        """Build a mesh from OBJ text lines.

        Only triangular faces are kept. With ``normalize`` the mesh is centred
        on the origin and scaled so that its largest extent is 1.
        """
        mesh = cls()
        low: list[float] = [0.0, 0.0, 0.0]
        high: list[float] = [0.0, 0.0, 0.0]

        for raw in lines:
            line = raw.strip(_WHITESPACE)
            if len(line) < 2:
                continue
            if line[0] == "f":
                tokens = line[1:].split()
                if len(tokens) != 3:
                    continue
                a, b, c = (_leading_int(t) - 1 for t in tokens)
                mesh.indices.append((a, b, c))
            elif line[0] == "v":
                if line[1] == "n":
                    tokens = line[2:].split()
                    if len(tokens) != 3:
                        continue
                    x, y, z = (_leading_float(t) for t in tokens)
                    mesh.normals.append((x, y, z))
                else:
                    tokens = line[1:].split()
                    if len(tokens) != 3:
                        continue
                    vertex = tuple(_leading_float(t) for t in tokens)
                    if not mesh.vertices:
                        low = list(vertex)
                        high = list(vertex)
                    else:
                        low = [min(l, v) for l, v in zip(low, vertex)]
                        high = [max(h, v) for h, v in zip(high, vertex)]
                    mesh.vertices.append(vertex)  # type: ignore[arg-type]

        if normalize and mesh.vertices:
            center = tuple((h + l) / 2.0 for h, l in zip(high, low))
            max_size = max(h - l for h, l in zip(high, low))
            if max_size == 0.0:
                raise ValueError("cannot normalize a mesh without extent")
            mesh.vertices = [
                tuple((v - c) / max_size for v, c in zip(vertex, center))  # type: ignore[misc]
                for vertex in mesh.vertices
            ]

        mesh._compute_normals()
        return mesh

    @classmethod
    def load(cls, path: Union[str, PathLike], normalize: bool = False) -> "ObjFile":
        """Read a mesh from an OBJ file."""
        with open(path, encoding="utf-8", errors="replace") as handle:
            return cls.parse(handle, normalize)

    def _compute_normals(self) -> None:
        count = len(self.vertices)
        normals = list(self.normals[:count])
        normals.extend([(0.0, 0.0, 0.0)] * (count - len(normals)))
        for triangle in self.indices:
            if any(not 0 <= i < count for i in triangle):
                raise ValueError(f"face {triangle} refers to a missing vertex")
            v0, v1, v2 = (self.vertices[i] for i in triangle)
            face_normal = _cross(_sub(v1, v0), _sub(v2, v0))
            for i in triangle:
                normals[i] = _add(normals[i], face_normal)
        self.normals = [_normalize(n) for n in normals]
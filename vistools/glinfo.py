"""Graphics error codes, framebuffer dimensions and texture format tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

NO_ERROR = 0
INVALID_ENUM = 0x0500
INVALID_VALUE = 0x0501
INVALID_OPERATION = 0x0502
OUT_OF_MEMORY = 0x0505
INVALID_FRAMEBUFFER_OPERATION = 0x0506

UNSIGNED_BYTE = 0x1401
FLOAT = 0x1406
HALF_FLOAT = 0x140B

RED = 0x1903
RG = 0x8227
RGB = 0x1907
RGBA = 0x1908

R8 = 0x8229
RG8 = 0x822B
RGB8 = 0x8051
RGBA8 = 0x8058
R16F = 0x822D
RG16F = 0x822F
RGB16F = 0x881B
RGBA16F = 0x881A
R32F = 0x822E
RG32F = 0x8230
RGB32F = 0x8815
RGBA32F = 0x8814

_ERROR_NAMES = {
    NO_ERROR: "GL_NO_ERROR",
    INVALID_ENUM: "GL_INVALID_ENUM",
    INVALID_VALUE: "GL_INVALID_VALUE",
    INVALID_OPERATION: "GL_INVALID_OPERATION",
    INVALID_FRAMEBUFFER_OPERATION: "GL_INVALID_FRAMEBUFFER_OPERATION",
    OUT_OF_MEMORY: "GL_OUT_OF_MEMORY",
}

_FORMATS = {1: RED, 2: RG, 3: RGB, 4: RGBA}


class GLException(Exception):
    """Raised when the graphics layer reports a failure."""


@dataclass(frozen=True)
class Dimensions:
    """Width and height of a window or framebuffer in pixels."""

    width: int
    height: int

    def aspect(self) -> float:
        return self.width / self.height


class GLDataType(Enum):
    BYTE = "byte"
    HALF = "half"
    FLOAT = "float"


@dataclass(frozen=True)
class TexInfo:
    """Internal format, pixel type and pixel format of a texture upload."""

    internal_format: int = 0
    type: int = 0
    format: int = 0


_TYPES = {
    GLDataType.BYTE: UNSIGNED_BYTE,
    GLDataType.HALF: HALF_FLOAT,
    GLDataType.FLOAT: FLOAT,
}

_INTERNAL_FORMATS = {
    GLDataType.BYTE: {1: R8, 2: RG8, 3: RGB8, 4: RGBA8},
    GLDataType.HALF: {1: R16F, 2: RG16F, 3: RGB16F, 4: RGBA16F},
    GLDataType.FLOAT: {1: R32F, 2: RG32F, 3: RGB32F, 4: RGBA32F},
}


def error_string(code: int) -> str:
    """Symbolic name of an error code."""
    return _ERROR_NAMES.get(code, "Unknown Error")


def texture_format(data_type: GLDataType, component_count: int) -> TexInfo:
    """Upload parameters for a data type and channel count.

    An unsupported channel count leaves the formats at 0.
    """
    return TexInfo(
        internal_format=_INTERNAL_FORMATS[data_type].get(component_count, 0),
        type=_TYPES[data_type],
        format=_FORMATS.get(component_count, 0),
    )
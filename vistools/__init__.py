"""Images, scalar grids, OBJ meshes, random numbers and line/triangle geometry helpers."""

__version__ = "0.1.0"
__all__ = ["rand", "image", "grid2d", "objfile", "glinfo", "geometry", "lines"]
# vistools

Small, dependency-free helpers for visualization code. Everything works on
plain Python data: lists of floats, `bytearray` pixel buffers and tuples.

## Modules

- `vistools.rand`
  - `Mt19937(seed=5489)`: the standard 32-bit Mersenne Twister; `next_u32()`
    returns the next 32-bit output.
  - `Random(seed=None)`: single-precision uniform values from a Mersenne
    Twister (a random seed when none is given): `rand01()` in [0, 1),
    `rand005()` in [0, 0.5), `rand051()` in [0.5, 1), `rand11()` in [-1, 1),
    `rand0_pi()` in [0, 2π). `rand(a, b)` returns a value in [a, b), an `int`
    when both bounds are integers. `shuffle(items)` shuffles a mutable
    sequence in place.
- `vistools.image`
  - `Image(width=100, height=100, component_count=4, data=None)`: a raster of
    interleaved 8-bit channels held in a `bytearray`. `Image.from_color(rgba)`
    builds a single RGBA pixel from a colour in [0, 1].
  - Pixel access: `compute_index`, `get_value`, `set_value`, `set_gray`,
    `set_normalized_value`, `get_lumi_value`, bilinear `sample`.
  - Alpha and colour: `multiply`, `generate_alpha`,
    `generate_alpha_from_luminance` (RGB images gain an alpha channel),
    `to_grayscale`.
  - Geometry: `crop`, `resample`, `crop_to_aspect_and_resample` (raises
    `ValueError` when the target is larger than the cropped source),
    `flip_horizontal` (rows top to bottom), `flip_vertical` (columns left to
    right).
  - `filter(kernel)` convolves with any kernel that has `width`, `height` and
    `get_value(x, y)`, such as a `Grid2D`.
  - `to_code(var_name="myImage", padding=False)` lists the bytes as an
    initialiser; `to_ascii_art(small_table=True)` draws every fourth pixel as
    characters; `Image.gen_test_image(width, height)` makes a colour-bar
    pattern.
- `vistools.grid2d`
  - `Grid2D(width, height, data=None)`: a row-major grid of floats (raises
    `ValueError` when the data does not fit the size).
    `Grid2D.from_image(image)` reads the first channel scaled to [0, 1];
    `Grid2D.gen_random(width, height, seed=None)` fills it with uniform values.
  - `get_value`, `set_value`, `get_value_normalized`, bilinear `sample(x, y)`
    and `normal(x, y)` at normalised, clamped coordinates; `fill`.
  - `+`, `-`, `*`, `/` with a number or another grid; grids of different
    sizes are combined at the larger size by sampling the smaller one.
  - `normalize(max_val=1.0)` rescales in place (raises `ValueError` for a
    constant grid); `max_value()` and `min_value()` return `(x, y)` positions.
  - `to_signed_distance(threshold)` gives the distance to the threshold
    contour, negative below it; `to_byte_array()` gives grey RGB bytes.
  - `save(stream)` and `Grid2D.from_stream(stream)` write and read a binary
    form: two little-endian 64-bit dimensions, then 32-bit floats.
- `vistools.objfile`
  - `ObjFile.parse(lines, normalize=False)` and
    `ObjFile.load(path, normalize=False)` read `v`, `vn` and triangular `f`
    records into `vertices`, `indices` (zero-based) and `normals`. Per-vertex
    normals are accumulated from the faces and normalised. With `normalize`
    the mesh is centred and scaled so its largest extent is 1. A face that
    refers to a missing vertex raises `ValueError`.
- `vistools.glinfo`
  - `error_string(code)`, `texture_format(data_type, component_count)`
    returning a `TexInfo(internal_format, type, format)`, the `GLDataType`
    enum (`BYTE`, `HALF`, `FLOAT`), the numeric constants they use,
    `Dimensions(width, height)` with `aspect()`, and `GLException`.
- `vistools.geometry`
  - `LineDrawType` (`LIST`, `STRIP`, `LOOP`) and `TrisDrawType` (`LIST`,
    `STRIP`, `FAN`).
  - `triangles_to_lines`, `triangle_strip_to_lines`, `triangle_fan_to_lines`
    and `wireframe(data, draw_type, comp_count=7)` turn triangle vertices
    into a line list of each triangle's three edges.
  - `point_sprite_disk(resolution=64)` returns RGBA bytes of a white disk
    whose alpha fades to the rim.
- `vistools.lines`
  - `triangulate_segment(p0, p1, c1, p2, c2, p3, thickness, view_dir,
    framebuffer_size)` returns two triangles covering the segment p1–p2,
    mitred towards its neighbours.
  - `thick_lines(data, draw_type, thickness, view_dir, framebuffer_size)`
    expands a line list, strip or loop of `(x, y, z, r, g, b, a)` vertices
    into a triangle list. `framebuffer_size` is a `(width, height)` pair or a
    `Dimensions`.

Vertex data for the geometry functions is a flat list of floats, `comp_count`
values per vertex (position, then colour, then a normal where there is one).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from vistools.image import Image
from vistools.grid2d import Grid2D

img = Image.gen_test_image(90, 60)
gray = img.to_grayscale()
print(gray.to_ascii_art(True))

field = Grid2D.from_image(gray)
sdf = field.to_signed_distance(0.5)
print(sdf.max_value(), sdf.min_value())
```

## What it does not do

vistools opens no window and draws nothing: it has no graphics context,
shader programs, buffers, textures or framebuffers, and no input handling or
animation loop. The geometry and line functions only produce the vertex
lists that such a renderer would draw. Images are not read from or written to
image files; `Image.to_code` and `Grid2D.save` are the only ways out besides
the raw bytes.
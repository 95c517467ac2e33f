import io
import math
import struct
import statistics

import pytest

from vistools.grid2d import FLT_MAX, Grid2D
from vistools.image import Image


def make_grid():
    return Grid2D(3, 2, [0.5, 0.25, 0.75, 1.0, 0.125, 0.0])


def test_size_mismatch_raises():
    with pytest.raises(ValueError):
        Grid2D(2, 2, [1.0, 2.0, 3.0])


def test_default_is_zero_filled():
    g = Grid2D(3, 4)
    assert g.data == [0.0] * 12


def test_set_and_get_value():
    g = Grid2D(3, 3)
    g.set_value(2, 1, 0.75)
    assert g.get_value(2, 1) == 0.75
    assert g.data[2 + 1 * 3] == 0.75


def test_get_value_normalized_picks_cell():
    g = make_grid()
    assert g.get_value_normalized(0.7, 0.6) == g.get_value(2, 1)
    assert g.get_value_normalized(0.0, 0.0) == g.get_value(0, 0)


def test_str_format():
    assert str(Grid2D(2, 2, [1, 2, 3, 4])) == "1, 2\n3, 4\n"


def test_to_byte_array():
    assert Grid2D(2, 1, [0.0, 1.0]).to_byte_array() == b"\x00\x00\x00\xff\xff\xff"


def test_sample_corners_match_values():
    g = make_grid()
    assert g.sample(0.0, 0.0) == g.get_value(0, 0)
    assert g.sample(1.0, 0.0) == g.get_value(2, 0)
    assert g.sample(1.0, 1.0) == g.get_value(2, 1)


def test_sample_clamps():
    g = make_grid()
    assert g.sample(-3.0, -1.0) == g.sample(0.0, 0.0)
    assert g.sample(5.0, 2.0) == g.sample(1.0, 1.0)


def test_sample_center_of_2x2_is_mean():
    values = [0.25, 0.5, 0.75, 1.0]
    g = Grid2D(2, 2, values)
    assert g.sample(0.5, 0.5) == pytest.approx(statistics.mean(values))


def test_normal_of_flat_grid():
    g = Grid2D(4, 4)
    g.fill(0.5)
    assert g.normal(0.3, 0.6) == pytest.approx((0.0, -1.0, 0.0))


def test_normal_is_unit_length():
    g = Grid2D.gen_random(5, 5, seed=3)
    n = g.normal(0.4, 0.7)
    assert math.sqrt(sum(c * c for c in n)) == pytest.approx(1.0)


def test_from_image_uses_first_channel():
    img = Image(2, 1, 3, [255, 10, 10, 0, 200, 200])
    g = Grid2D.from_image(img)
    assert (g.width, g.height) == (2, 1)
    assert g.data == [1.0, 0.0]


def test_save_and_load_round_trip():
    g = make_grid()
    buf = io.BytesIO()
    g.save(buf)
    raw = buf.getvalue()
    assert raw[:16] == struct.pack("<QQ", 3, 2)
    assert len(raw) == 16 + 4 * 6
    buf.seek(0)
    assert Grid2D.from_stream(buf) == g


def test_from_stream_truncated():
    with pytest.raises(ValueError):
        Grid2D.from_stream(io.BytesIO(struct.pack("<QQ", 2, 2) + b"\x00" * 4))
    with pytest.raises(ValueError):
        Grid2D.from_stream(io.BytesIO(b"\x01"))


def test_gen_random_seeded_is_deterministic():
    a = Grid2D.gen_random(4, 3, seed=42)
    b = Grid2D.gen_random(4, 3, seed=42)
    assert a == b
    assert all(0.0 <= v < 1.0 for v in a.data)
    assert len(a.data) == 12


def test_scalar_arithmetic_round_trips():
    g = make_grid()
    assert (g + 1.0) - 1.0 == g
    assert (g * 2.0) / 2.0 == g


def test_grid_arithmetic_same_size():
    a = make_grid()
    b = Grid2D(3, 2, [0.25] * 6)
    assert (a + b).data == [v + 0.25 for v in a.data]
    assert a + b == b + a
    assert (a - a).data == [0.0] * 6
    assert (a * b) == (b * a)


def test_grid_arithmetic_different_sizes():
    big = Grid2D(3, 3)
    small = Grid2D(2, 2)
    small.fill(1.0)
    for result in (big + small, small + big):
        assert (result.width, result.height) == (3, 3)
        assert result.data == [1.0] * 9


def test_grid_arithmetic_mixed_dims_takes_max():
    wide = Grid2D(4, 2)
    wide.fill(2.0)
    tall = Grid2D(2, 4)
    tall.fill(3.0)
    result = wide * tall
    assert (result.width, result.height) == (4, 4)
    assert result.data == [6.0] * 16


def test_normalize():
    g = make_grid()
    g.normalize(2.0)
    assert min(g.data) == 0.0
    assert max(g.data) == pytest.approx(2.0)


def test_normalize_constant_raises():
    g = Grid2D(2, 2)
    g.fill(0.5)
    with pytest.raises(ValueError):
        g.normalize()


def test_max_and_min_positions():
    g = Grid2D(4, 3)
    g.fill(0.5)
    g.set_value(3, 1, 0.9)
    g.set_value(1, 2, 0.1)
    assert g.max_value() == (3, 1)
    assert g.min_value() == (1, 2)


def test_max_value_of_negative_grid_is_origin():
    g = Grid2D(3, 3)
    g.fill(-1.0)
    g.set_value(2, 2, -0.5)
    assert g.max_value() == (0, 0)


def test_fill():
    g = Grid2D(2, 3)
    g.fill(0.25)
    assert g.data == [0.25] * 6


def test_signed_distance_signs_and_ordering():
    g = Grid2D(7, 7)
    for y in range(7):
        for x in range(3):
            g.set_value(x, y, 1.0)
    d = g.to_signed_distance(0.5)
    for y in range(1, 6):
        assert d.get_value(2, y) == 0.0
        assert d.get_value(1, y) > 0.0
        assert d.get_value(5, y) < 0.0
        assert abs(d.get_value(5, y)) > abs(d.get_value(4, y))
    assert abs(d.get_value(0, 0)) == FLT_MAX
    assert d.get_value(6, 3) == -FLT_MAX
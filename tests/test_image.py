import pytest

from vistools.image import Image


class _Kernel:
    def __init__(self, width, height, values):
        self.width = width
        self.height = height
        self._values = values

    def get_value(self, x, y):
        return self._values[x + y * self.width]


def _ramp(width, height, cc=1):
    return Image(width, height, cc, [(i * 7) % 256 for i in range(width * height * cc)])


def test_default_image_size():
    image = Image()
    assert (image.width, image.height, image.component_count) == (100, 100, 4)
    assert len(image.data) == 40000
    assert not any(image.data)


def test_from_color():
    assert Image.from_color((1.0, 0.0, 0.0, 1.0)).data == bytearray([255, 0, 0, 255])
    assert Image.from_color((0.5, 0.5, 0.5, 0.5)).data == bytearray([127] * 4)


def test_compute_index_and_round_trip():
    image = Image(3, 2, 4)
    assert image.compute_index(1, 1, 2) == 2 + (1 + 3) * 4
    image.set_value(2, 1, 3, 99)
    assert image.get_value(2, 1, 3) == 99


def test_set_gray_sets_three_channels():
    image = Image(2, 2, 4)
    image.set_gray(1, 0, 42)
    assert [image.get_value(1, 0, c) for c in range(4)] == [42, 42, 42, 0]


def test_set_normalized_value_clamps():
    image = Image(1, 1, 4)
    image.set_normalized_value(0, 0, 2.0)
    assert list(image.data[:3]) == [255, 255, 255]
    image.set_normalized_value(0, 0, -1.0, 3)
    assert image.get_value(0, 0, 3) == 0


def test_multiply_identity_rgba():
    image = _ramp(3, 3, 4)
    before = bytearray(image.data)
    image.multiply((1.0, 1.0, 1.0, 1.0))
    assert image.data == before


def test_multiply_rgb_adds_alpha():
    image = Image(2, 1, 3, [10, 20, 30, 40, 50, 60])
    image.multiply((1.0, 1.0, 1.0, 1.0))
    assert image.component_count == 4
    assert image.data == bytearray([10, 20, 30, 255, 40, 50, 60, 255])


def test_generate_alpha_rgb():
    image = Image(2, 1, 3, [1, 2, 3, 4, 5, 6])
    image.generate_alpha(9)
    assert image.component_count == 4
    assert image.data == bytearray([1, 2, 3, 9, 4, 5, 6, 9])


def test_generate_alpha_from_luminance_black():
    image = Image(1, 1, 4, [0, 0, 0, 200])
    image.generate_alpha_from_luminance()
    assert image.data == bytearray([0, 0, 0, 0])


def test_grayscale_of_single_channel_is_identity():
    image = _ramp(4, 3)
    gray = image.to_grayscale()
    assert gray.component_count == 1
    assert gray.data == image.data


def test_test_image_bars():
    image = Image.gen_test_image(3, 3)
    assert [image.get_value(0, 0, c) for c in range(4)] == [255, 0, 0, 255]
    assert [image.get_value(1, 0, c) for c in range(4)] == [0, 255, 255, 255]
    assert [image.get_value(2, 0, c) for c in range(3)] == [0, 0, 0]
    assert image.get_value(2, 1, 0) == 127
    assert image.get_value(2, 2, 0) == 255


def test_crop_region():
    image = _ramp(4, 4)
    part = image.crop(1, 1, 3, 3)
    assert (part.width, part.height) == (2, 2)
    assert list(part.data) == [image.get_value(x, y, 0) for y in (1, 2) for x in (1, 2)]
    assert image.crop(0, 0, 4, 4) == image


def test_flips_are_involutions():
    image = _ramp(5, 3, 3)
    assert image.flip_horizontal().flip_horizontal() == image
    assert image.flip_vertical().flip_vertical() == image


def test_flip_horizontal_moves_rows():
    image = _ramp(3, 4)
    flipped = image.flip_horizontal()
    assert flipped.get_value(1, 3, 0) == image.get_value(1, 0, 0)


def test_flip_vertical_moves_columns():
    image = _ramp(3, 4, 2)
    flipped = image.flip_vertical()
    assert flipped.get_value(2, 1, 1) == image.get_value(0, 1, 1)


def test_sample_corners():
    image = _ramp(4, 4)
    assert image.sample(0.0, 0.0, 0) == image.get_value(0, 0, 0)
    assert image.sample(1.0, 1.0, 0) == image.get_value(3, 3, 0)


def test_resample_constant_image():
    image = Image(8, 4, 1, [77] * 32)
    small = image.resample(4)
    assert (small.width, small.height) == (4, 2)
    assert set(small.data) == {77}


def test_crop_to_aspect_same_size_copies():
    image = _ramp(4, 4)
    copy = image.crop_to_aspect_and_resample(4, 4)
    assert copy == image
    assert copy.data is not image.data


def test_crop_to_aspect_box_average():
    image = _ramp(4, 4)
    small = image.crop_to_aspect_and_resample(2, 2)
    blocks = [[image.get_value(x, y, 0) for y in (by, by + 1) for x in (bx, bx + 1)]
              for by in (0, 2) for bx in (0, 2)]
    assert list(small.data) == [sum(b) // 4 for b in blocks]


def test_crop_to_aspect_too_large_raises():
    with pytest.raises(ValueError):
        _ramp(2, 2).crop_to_aspect_and_resample(4, 4)


def test_to_code_plain_and_padded():
    image = Image(2, 1, 1, [1, 2])
    assert image.to_code("img") == "Image img {2,1,1,\n              {\n              1,2\n          }};\n"
    assert "  1,  2\n" in image.to_code("img", True)


def test_ascii_art_tables():
    black = Image(4, 4, 1)
    assert black.to_ascii_art() == "@@\n"
    assert black.to_ascii_art(False) == "$$\n"
    white = Image(4, 4, 1, [255] * 16)
    assert white.to_ascii_art() == "  \n"


def test_filter_identity_kernel():
    image = _ramp(5, 5)
    kernel = _Kernel(3, 3, [0, 0, 0, 0, 1, 0, 0, 0, 0])
    filtered = image.filter(kernel)
    for y in range(1, 4):
        for x in range(1, 4):
            assert filtered.get_value(x, y, 0) == image.get_value(x, y, 0)
    assert filtered.get_value(0, 0, 0) == 0
    assert filtered.get_value(4, 4, 0) == 0
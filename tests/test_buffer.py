import struct

import pytest

from pixelui.buffer import DOTTED, SOLID, BitmapBuffer
from pixelui.colors import OPACITY_MAX, PixelFormat, argb_join, color_flags, rgb_split

WHITE = 0xFFFF
BLACK = 0x0000


def make(width, height, fmt=PixelFormat.RGB565, data=None):
    return BitmapBuffer(fmt, width, height, data)


def set_coords(buf):
    return {
        (i % buf.width, i // buf.width)
        for i, value in enumerate(buf.data)
        if value
    }


def test_new_buffer_is_blank():
    buf = make(4, 3)
    assert buf.data == [0] * 12
    assert buf.clipping_rect == (0, 4, 0, 3)
    assert buf.data_size == 24


def test_wrong_data_length_rejected():
    with pytest.raises(ValueError):
        make(2, 2, data=[1, 2, 3])


def test_draw_and_get_pixel():
    buf = make(4, 4)
    buf.draw_pixel(1, 2, 0x1234)
    assert buf.get_pixel(1, 2) == 0x1234
    assert buf.data[2 * 4 + 1] == 0x1234


def test_pixel_outside_clip_ignored():
    buf = make(4, 4)
    buf.set_clipping_rect(1, 3, 1, 3)
    buf.draw_pixel(0, 0, 0x1234)
    assert buf.get_pixel(0, 0) is None
    assert buf.data == [0] * 16
    buf.reset()
    assert buf.clipping_rect == (0, 4, 0, 4)


def test_offset_shifts_drawing():
    buf = make(5, 5)
    buf.set_offset(2, 3)
    buf.draw_pixel(0, 0, 0x00AA)
    buf.clear_offset()
    assert buf.get_pixel(2, 3) == 0x00AA
    assert set_coords(buf) == {(2, 3)}


def test_clear_fills_with_color():
    buf = make(3, 2)
    buf.clear(color_flags(0x4321))
    assert buf.data == [0x4321] * 6


def test_solid_filled_rect_clipped():
    buf = make(4, 4)
    buf.draw_solid_filled_rect(2, 2, 5, 5, color_flags(WHITE))
    expected = {(x, y) for x in range(2, 4) for y in range(2, 4)}
    assert set_coords(buf) == expected


def test_solid_filled_rect_negative_width():
    buf = make(6, 1)
    buf.draw_solid_filled_rect(5, 0, -3, 1, color_flags(WHITE))
    assert set_coords(buf) == {(2, 0), (3, 0), (4, 0)}


def test_alpha_pixel_extremes():
    buf = make(2, 1)
    buf.clear(color_flags(WHITE))
    buf.draw_alpha_pixel(0, 0, OPACITY_MAX, BLACK)
    buf.draw_alpha_pixel(1, 0, 0, BLACK)
    assert buf.data == [BLACK, WHITE]


def test_alpha_pixel_blends_between():
    buf = make(1, 1)
    buf.clear(color_flags(WHITE))
    buf.draw_alpha_pixel(0, 0, 8, BLACK)
    r, g, b = rgb_split(buf.data[0])
    assert 0 < r < 0x1F
    assert 0 < g < 0x3F
    assert 0 < b < 0x1F


def test_horizontal_line_opacity():
    buf = make(4, 2)
    buf.draw_horizontal_line(0, 0, 4, SOLID, color_flags(WHITE), 0)
    buf.draw_horizontal_line(0, 1, 4, SOLID, color_flags(WHITE), 15)
    assert buf.data == [WHITE] * 4 + [0] * 4


def test_horizontal_dotted_line():
    buf = make(4, 1)
    buf.draw_horizontal_line(0, 0, 4, DOTTED, color_flags(WHITE))
    assert buf.data == [WHITE, 0, WHITE, 0]


def test_vertical_dotted_line_starts_inverted_on_even_row():
    buf = make(1, 4)
    buf.draw_vertical_line(0, 0, 4, DOTTED, color_flags(WHITE))
    assert buf.data == [0, WHITE, 0, WHITE]


def test_draw_line_horizontal():
    buf = make(10, 10)
    buf.draw_line(0, 2, 5, 2, SOLID, color_flags(WHITE))
    assert set_coords(buf) == {(x, 2) for x in range(6)}


def test_draw_line_diagonal():
    buf = make(10, 10)
    buf.draw_line(0, 0, 3, 3, SOLID, color_flags(WHITE))
    assert set_coords(buf) == {(i, i) for i in range(4)}


def test_draw_line_rejected_outside():
    buf = make(10, 10)
    buf.draw_line(-5, -5, -1, -8, SOLID, color_flags(WHITE))
    assert buf.data == [0] * 100


def test_draw_rect_border_only():
    buf = make(5, 5)
    buf.draw_rect(0, 0, 5, 5, flags=color_flags(WHITE))
    border = {(x, y) for x in range(5) for y in range(5) if x in (0, 4) or y in (0, 4)}
    assert set_coords(buf) == border


def test_draw_solid_rect_border_only():
    buf = make(5, 5)
    buf.draw_solid_rect(0, 0, 5, 5, 1, color_flags(WHITE))
    border = {(x, y) for x in range(5) for y in range(5) if x in (0, 4) or y in (0, 4)}
    assert set_coords(buf) == border


def test_filled_rect_opaque_black():
    buf = make(4, 4)
    buf.clear(color_flags(WHITE))
    buf.draw_filled_rect(1, 1, 2, 2, SOLID, color_flags(BLACK), 0)
    inside = {(x, y) for x in (1, 2) for y in (1, 2)}
    for y in range(4):
        for x in range(4):
            expected = BLACK if (x, y) in inside else WHITE
            assert buf.get_pixel(x, y) == expected


def test_filled_rect_fully_transparent():
    buf = make(3, 3)
    buf.clear(color_flags(WHITE))
    buf.draw_filled_rect(0, 0, 3, 3, SOLID, color_flags(BLACK), 15)
    assert buf.data == [WHITE] * 9


def test_invert_rect_black_to_white_and_round_trip():
    buf = make(2, 2, data=[0, 0x1234, 0xABCD, 0x0F0F])
    original = list(buf.data)
    buf.invert_rect(0, 0, 1, 1)
    assert buf.data[0] == WHITE
    buf.invert_rect(0, 0, 1, 1)
    buf.invert_rect(0, 0, 2, 2)
    buf.invert_rect(0, 0, 2, 2)
    assert buf.data == original


def test_flips_round_trip():
    buf = make(3, 2, data=[1, 2, 3, 4, 5, 6])
    assert buf.horizontal_flip().data == [3, 2, 1, 6, 5, 4]
    assert buf.vertical_flip().data == [4, 5, 6, 1, 2, 3]
    assert buf.horizontal_flip().horizontal_flip().data == buf.data
    assert buf.vertical_flip().vertical_flip().data == buf.data


def test_invert_mask():
    buf = make(3, 1, data=[0, 5, OPACITY_MAX])
    inverted = buf.invert_mask()
    assert inverted.data[0] == OPACITY_MAX
    assert inverted.data[2] == 0
    assert inverted.invert_mask().data == buf.data


def test_draw_bitmap_copy():
    dest = make(4, 4)
    src = make(2, 2, data=[1, 2, 3, 4])
    dest.draw_bitmap(1, 1, src)
    assert dest.get_pixel(1, 1) == 1
    assert dest.get_pixel(2, 1) == 2
    assert dest.get_pixel(1, 2) == 3
    assert dest.get_pixel(2, 2) == 4
    assert len(set_coords(dest)) == 4


def test_draw_bitmap_clipped_left():
    dest = make(3, 1)
    src = make(3, 1, data=[5, 6, 7])
    dest.draw_bitmap(-1, 0, src)
    assert dest.data == [6, 7, 0]


def test_draw_bitmap_none_does_nothing():
    dest = make(2, 2)
    dest.draw_bitmap(0, 0, None)
    assert dest.data == [0] * 4


def test_draw_bitmap_alpha_source():
    dest = make(2, 1)
    dest.clear(color_flags(WHITE))
    src = make(
        2, 1, PixelFormat.ARGB4444, data=[argb_join(0xF, 0, 0, 0), argb_join(0, 0, 0, 0)]
    )
    dest.draw_bitmap(0, 0, src)
    assert dest.data == [BLACK, WHITE]


def test_draw_scaled_bitmap_doubles():
    dest = make(4, 4)
    src = make(2, 2, data=[1, 2, 3, 4])
    dest.draw_scaled_bitmap(src, 0, 0, 4, 4)
    assert dest.data == [1, 1, 2, 2, 1, 1, 2, 2, 3, 3, 4, 4, 3, 3, 4, 4]


def test_draw_bitmap_unit_scale_matches_copy():
    src = make(2, 2, data=[1, 2, 3, 4])
    a = make(3, 3)
    b = make(3, 3)
    a.draw_bitmap(1, 0, src)
    b.draw_bitmap(1, 0, src, scale=1.0)
    assert a.data == b.data


def test_draw_mask():
    dest = make(2, 1)
    dest.clear(color_flags(WHITE))
    mask = make(2, 1, data=[OPACITY_MAX, 0])
    dest.draw_mask(0, 0, mask, color_flags(BLACK))
    assert dest.data == [BLACK, WHITE]


def test_draw_mask_none():
    dest = make(2, 1)
    dest.draw_mask(0, 0, None, color_flags(WHITE))
    assert dest.data == [0, 0]


def test_draw_mask_bitmap_uniform_source():
    dest = make(2, 1)
    mask = make(2, 1, data=[OPACITY_MAX, OPACITY_MAX])
    src = make(2, 2, data=[0x1234] * 4)
    dest.draw_mask_bitmap(0, 0, mask, src)
    assert dest.data == [0x1234, 0x1234]


def test_draw_bitmap_pattern():
    dest = make(2, 1)
    dest.clear(color_flags(WHITE))
    pattern = struct.pack("<HH", 2, 1) + bytes([0xFF, 0x00])
    dest.draw_bitmap_pattern(0, 0, pattern, color_flags(BLACK))
    assert dest.data == [BLACK, WHITE]


def test_draw_bitmap_pattern_offset():
    dest = make(2, 1)
    dest.clear(color_flags(WHITE))
    pattern = struct.pack("<HH", 2, 1) + bytes([0x00, 0xFF])
    dest.draw_bitmap_pattern(0, 0, pattern, color_flags(BLACK), offset=1, width=1)
    assert dest.data == [BLACK, WHITE]
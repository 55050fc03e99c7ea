import math

import pytest

from pixelui.buffer import BitmapBuffer
from pixelui.colors import PixelFormat, color_flags
from pixelui.shapes import draw_circle, draw_filled_circle, draw_filled_triangle

RED = 0xF800
FLAGS = color_flags(RED)


def _buffer(w, h):
    return BitmapBuffer(PixelFormat.RGB565, w, h)


def _colored(buf):
    return {(i % buf.width, i // buf.width) for i, v in enumerate(buf.data) if v}


def test_flat_triangle_is_a_line():
    buf = _buffer(10, 6)
    draw_filled_triangle(buf, 2, 3, 7, 3, 4, 3, FLAGS)
    assert _colored(buf) == {(x, 3) for x in range(2, 8)}
    assert buf.get_pixel(2, 3) == RED


def test_triangle_covers_vertices_and_rows():
    buf = _buffer(16, 16)
    draw_filled_triangle(buf, 2, 2, 12, 4, 5, 12, FLAGS)
    colored = _colored(buf)
    for vertex in [(2, 2), (12, 4), (5, 12)]:
        assert vertex in colored
    rows = {y for _, y in colored}
    assert rows == set(range(2, 13))
    for row in rows:
        xs = sorted(x for x, y in colored if y == row)
        assert xs == list(range(xs[0], xs[-1] + 1))
    assert all(2 <= x <= 12 for x, _ in colored)


@pytest.mark.parametrize(
    "order",
    [(0, 1, 2), (1, 2, 0), (2, 0, 1), (2, 1, 0), (0, 2, 1), (1, 0, 2)],
)
def test_triangle_independent_of_vertex_order(order):
    points = [(2, 2), (12, 4), (5, 12)]
    reference = _buffer(16, 16)
    draw_filled_triangle(reference, 2, 2, 12, 4, 5, 12, FLAGS)
    buf = _buffer(16, 16)
    coords = [c for i in order for c in points[i]]
    draw_filled_triangle(buf, *coords, FLAGS)
    assert buf.data == reference.data


def test_circle_outline():
    buf = _buffer(21, 21)
    draw_circle(buf, 10, 10, 5, FLAGS)
    colored = _colored(buf)
    for point in [(15, 10), (5, 10), (10, 15), (10, 5)]:
        assert point in colored
    assert (10, 10) not in colored
    assert all(abs(math.hypot(x - 10, y - 10) - 5) < 1 for x, y in colored)
    assert colored == {(20 - x, y) for x, y in colored}
    assert colored == {(x, 20 - y) for x, y in colored}


def test_circle_clipped_at_edges():
    buf = _buffer(8, 8)
    draw_circle(buf, 0, 0, 5, FLAGS)
    colored = _colored(buf)
    assert (5, 0) in colored
    assert (0, 5) in colored
    assert all(x < 8 and y < 8 for x, y in colored)


def test_filled_circle():
    buf = _buffer(21, 21)
    draw_filled_circle(buf, 10, 10, 5, FLAGS)
    colored = _colored(buf)
    assert (10, 10) in colored
    assert (5, 10) in colored
    assert (15, 10) not in colored
    assert all(math.hypot(x - 10, y - 10) <= 6 for x, y in colored)


def test_filled_circle_radius_zero_draws_nothing():
    buf = _buffer(5, 5)
    draw_filled_circle(buf, 2, 2, 0, FLAGS)
    assert _colored(buf) == set()
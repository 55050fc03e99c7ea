"""Filled triangles and circles drawn onto a :class:`BitmapBuffer`."""

from __future__ import annotations

from .buffer import SOLID, BitmapBuffer
from .colors import color_val


def _tdiv(n: int, d: int) -> int:
    q = abs(n) // abs(d)
    return q if (n < 0) == (d < 0) else -q


def draw_filled_triangle(
    buffer: BitmapBuffer,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    flags: int = 0,
    opacity: int = 0,
) -> None:
    """Fill the triangle with the given corners, one horizontal span per row."""
    if y0 > y1:
        x0, y0, x1, y1 = x1, y1, x0, y0
    if y1 > y2:
        x1, y1, x2, y2 = x2, y2, x1, y1
    if y0 > y1:
        x0, y0, x1, y1 = x1, y1, x0, y0

    if y0 == y2:
        a = min(x0, x1, x2)
        b = max(x0, x1, x2)
        buffer.draw_horizontal_line(a, y0, b - a + 1, SOLID, flags, opacity)
        return

    dx01, dy01 = x1 - x0, y1 - y0
    dx02, dy02 = x2 - x0, y2 - y0
    dx12, dy12 = x2 - x1, y2 - y1
    sa = sb = 0
    last = y1 if y1 == y2 else y1 - 1

    y = y0
    while y <= last:
        a = x0 + _tdiv(sa, dy01)
        b = x0 + _tdiv(sb, dy02)
        sa += dx01
        sb += dx02
        if a > b:
            a, b = b, a
        buffer.draw_horizontal_line(a, y, b - a + 1, SOLID, flags, opacity)
        y += 1

    sa = dx12 * (y - y1)
    sb = dx02 * (y - y0)
    while y <= y2:
        a = x1 + _tdiv(sa, dy12)
        b = x0 + _tdiv(sb, dy02)
        sa += dx12
        sb += dx02
        if a > b:
            a, b = b, a
        buffer.draw_horizontal_line(a, y, b - a + 1, SOLID, flags, opacity)
        y += 1


def draw_circle(buffer: BitmapBuffer, x: int, y: int, radius: int, flags: int = 0) -> None:
    """Draw the outline of a circle with the midpoint algorithm."""
    x1 = radius
    y1 = 0
    decision = 1 - x1
    color = color_val(flags)
    while y1 <= x1:
        for px, py in (
            (x1, y1), (y1, x1), (-x1, y1), (-y1, x1),
            (-x1, -y1), (-y1, -x1), (x1, -y1), (y1, -x1),
        ):
            buffer.draw_pixel(px + x, py + y, color)
        y1 += 1
        if decision <= 0:
            decision += 2 * y1 + 1
        else:
            x1 -= 1
            decision += 2 * (y1 - x1) + 1


def draw_filled_circle(
    buffer: BitmapBuffer, x: int, y: int, radius: int, flags: int = 0
) -> None:
    """Fill a disc with horizontal spans."""
    imax = _tdiv(radius * 707, 1000) + 1
    sqmax = radius * radius + _tdiv(radius, 2)
    x1 = radius
    buffer.draw_solid_horizontal_line(x - radius, y, radius * 2, flags)
    for i in range(1, imax + 1):
        if i * i + x1 * x1 > sqmax:
            if x1 > imax:
                buffer.draw_solid_horizontal_line(x - i + 1, y + x1, (i - 1) * 2, flags)
                buffer.draw_solid_horizontal_line(x - i + 1, y - x1, (i - 1) * 2, flags)
            x1 -= 1
        buffer.draw_solid_horizontal_line(x - x1, y + i, x1 * 2, flags)
        buffer.draw_solid_horizontal_line(x - x1, y - i, x1 * 2, flags)
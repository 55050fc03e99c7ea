"""Small integer and text helpers shared by the drawing code."""

from __future__ import annotations

from typing import TypeVar, Union

T = TypeVar("T")
Text = Union[str, bytes]


def _trunc_div(n: int, d: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(n) // abs(d)
    return q if (n < 0) == (d < 0) else -q


def limit(vmin: T, x: T, vmax: T) -> T:
    """Clamp ``x`` into ``[vmin, vmax]``."""
    return min(max(vmin, x), vmax)


def div_round_closest(n: int, d: int) -> int:
    """Divide ``n`` by ``d`` rounding to the nearest integer; zero when ``d`` is zero."""
    if d == 0:
        return 0
    half = _trunc_div(d, 2)
    if (n < 0) != (d < 0):
        return _trunc_div(n - half, d)
    return _trunc_div(n + half, d)


def mult_div_round_closest(v: int, n: int, d: int) -> int:
    """Compute ``v * n / d`` rounded to the nearest integer."""
    if n == d:
        return v
    return div_round_closest(v * n, d)


def mod(k: int, n: int) -> int:
    """Remainder of ``k / n`` shifted into the positive range for a positive ``n``."""
    r = k - n * _trunc_div(k, n)
    return r + n if r < 0 else r


def align32(n: int) -> int:
    """Round ``n`` up to the next multiple of four."""
    rest = n & 3
    return n + 4 - rest if rest else n


def sgn(a):
    """Return 1, -1 or 0 according to the sign of ``a``."""
    if a > 0:
        return 1
    if a < 0:
        return -1
    return 0


def _code(text: Text, index: int) -> int:
    item = text[index]
    return item if isinstance(item, int) else ord(item)


def text_at_index(val: Text, idx: int) -> Text:
    """Return entry ``idx`` of a table of fixed-width strings.

    The first character of ``val`` holds the width of every entry; entries are
    cut short at the first NUL character.
    """
    length = _code(val, 0)
    start = 1 + idx * length
    chunk = val[start:start + length]
    nul = b"\0" if isinstance(val, bytes) else "\0"
    return chunk.split(nul, 1)[0]


def find_next_line(text: Text) -> int | None:
    """Index of the next line break, skipping those that form part of a two-byte glyph.

    A newline preceded by a 0xFE or 0xFF lead character is the second half of a
    wide glyph and does not end the line. Returns ``None`` when no break exists.
    """
    newline = b"\n" if isinstance(text, bytes) else "\n"
    start = 0
    while True:
        pos = text.find(newline, start)
        if pos < 0:
            return None
        if pos == start or _code(text, pos - 1) < 0xFE:
            return pos
        start = pos + 1
"""Formatting of fixed-point numbers for display."""

from __future__ import annotations

_AFFIX_MAX = 16


def format_number(
    val: int,
    precision: int = 0,
    length: int = 0,
    leading_zero: bool = False,
    prefix: str | None = None,
    suffix: str | None = None,
) -> str:
    """Render ``val`` as text, optionally as a fixed-point number.

    ``precision`` is the number of digits after the decimal point; the value
    is taken as already scaled. With ``leading_zero``, or once the decimal
    point has been placed, the digits are padded with zeros up to ``length``
    digits. A ``prefix`` longer than sixteen characters is left out and a
    ``suffix`` is cut to sixteen characters. ``precision`` takes precedence
    over ``leading_zero`` when both are given.
    """
    if precision < 0:
        raise ValueError("precision must not be negative")
    if precision:
        mode = precision
    elif leading_zero:
        mode = 0
    else:
        mode = -1

    negative = val < 0
    val = abs(val)
    chars: list[str] = []
    digits = 0
    while True:
        chars.append(str(val % 10))
        digits += 1
        val //= 10
        if mode != 0 and digits == mode:
            mode = 0
            chars.append(".")
            if val == 0:
                chars.append("0")
        if not (val != 0 or mode > 0 or (mode == 0 and digits < length)):
            break
    if negative:
        chars.append("-")

    text = "".join(reversed(chars))
    if prefix and len(prefix) <= _AFFIX_MAX:
        text = prefix + text
    if suffix:
        text += suffix[:_AFFIX_MAX]
    return text
"""Pixel formats and colour packing helpers."""

from __future__ import annotations

from enum import IntEnum

OPACITY_MAX = 0x0F
"""Full opacity on the 4-bit alpha scale."""


class PixelFormat(IntEnum):
    """Layout of a 16-bit pixel."""

    RGB565 = 0
    ARGB4444 = 1


def rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into an RGB565 pixel."""
    return (((r & 0xFF) >> 3) << 11) | (((g & 0xFF) >> 2) << 5) | ((b & 0xFF) >> 3)


def argb(a: int, r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into an ARGB4444 pixel."""
    return (
        (((a & 0xFF) >> 4) << 12)
        | (((r & 0xFF) >> 4) << 8)
        | (((g & 0xFF) >> 4) << 4)
        | ((b & 0xFF) >> 4)
    )


def rgb_split(color: int) -> tuple[int, int, int]:
    """Split an RGB565 pixel into its 5-, 6- and 5-bit channels."""
    return (color >> 11) & 0x1F, (color >> 5) & 0x3F, color & 0x1F


def rgb_join(r: int, g: int, b: int) -> int:
    """Pack 5-, 6- and 5-bit channels into an RGB565 pixel."""
    return ((r << 11) + (g << 5) + b) & 0xFFFF


def argb_split(color: int) -> tuple[int, int, int, int]:
    """Split an ARGB4444 pixel into its four 4-bit channels."""
    return (color >> 12) & 0x0F, (color >> 8) & 0x0F, (color >> 4) & 0x0F, color & 0x0F


def argb_join(a: int, r: int, g: int, b: int) -> int:
    """Pack four 4-bit channels into an ARGB4444 pixel."""
    return ((a << 12) + (r << 8) + (g << 4) + b) & 0xFFFF


def color_val(flags: int) -> int:
    """Extract the 16-bit colour carried in the upper half of drawing flags."""
    return (flags >> 16) & 0xFFFF


def color_flags(color: int) -> int:
    """Place a 16-bit colour in the upper half of drawing flags."""
    return (color & 0xFFFF) << 16
"""Pie and annulus sectors selected by angle."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from .buffer import BitmapBuffer
from .colors import color_val


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass
class Slope:
    """A direction from the centre: which half it lies in and its scaled slope.

    Angles run clockwise from straight up; ``left`` marks the left half and
    ``value`` is the cotangent times one hundred.
    """

    left: bool
    value: int

    @classmethod
    def from_angle(cls, angle: int) -> "Slope":
        """The slope of ``angle`` degrees."""
        if angle < 0:
            angle += 360
        if angle > 360:
            angle %= 360
        radians = _f32(angle * (math.pi / 180.0))
        if angle == 0:
            return cls(False, 100000)
        if angle == 360:
            return cls(True, 100000)
        ratio = _f32(_f32(_f32(math.cos(radians)) * 100) / _f32(math.sin(radians)))
        if angle >= 180:
            return cls(True, int(-ratio))
        return cls(False, int(ratio))

    def is_between(self, start: "Slope", end: "Slope") -> bool:
        """Whether this direction lies in the sector from ``start`` to ``end``."""
        value = self.value
        if self.left:
            if start.left:
                if end.left:
                    if end.value > start.value:
                        return start.value <= value <= end.value
                    return value <= end.value or value >= start.value
                return value >= start.value
            if end.left:
                return value <= end.value
            return end.value > start.value
        if start.left:
            if end.left:
                return start.value > end.value
            return value >= end.value
        if end.left:
            return value <= start.value
        if end.value < start.value:
            return end.value <= value <= start.value
        return value <= start.value or value >= end.value

    def invert_vertical(self) -> "Slope":
        """Mirror top to bottom in place."""
        self.value = -self.value
        return self

    def invert_horizontal(self) -> "Slope":
        """Mirror left to right in place."""
        self.left = not self.left
        return self


def _point_slope(x1: int, y1: int) -> Slope:
    return Slope(False, 99000 if x1 == 0 else y1 * 100 // x1)


def draw_annulus_sector(
    buffer: BitmapBuffer,
    x: int,
    y: int,
    internal_radius: int,
    external_radius: int,
    start_angle: int,
    end_angle: int,
    flags: int = 0,
) -> None:
    """Fill the part of a ring between two angles."""
    if end_angle == start_angle:
        end_angle += 1
    start = Slope.from_angle(start_angle)
    end = Slope.from_angle(end_angle)
    color = color_val(flags)
    x += buffer.offset_x
    y += buffer.offset_y
    internal = internal_radius * internal_radius
    external = external_radius * external_radius
    for y1 in range(external_radius + 1):
        for x1 in range(external_radius + 1):
            dist = x1 * x1 + y1 * y1
            if not internal <= dist <= external:
                continue
            slope = _point_slope(x1, y1)
            if slope.is_between(start, end):
                buffer.draw_pixel_abs(x + x1, y - y1, color)
            if slope.invert_vertical().is_between(start, end):
                buffer.draw_pixel_abs(x + x1, y + y1, color)
            if slope.invert_horizontal().is_between(start, end):
                buffer.draw_pixel_abs(x - x1, y + y1, color)
            if slope.invert_vertical().is_between(start, end):
                buffer.draw_pixel_abs(x - x1, y - y1, color)


def draw_pattern_pie(
    buffer: BitmapBuffer,
    x: int,
    y: int,
    img: bytes,
    flags: int,
    start_angle: int,
    end_angle: int,
) -> None:
    """Blend ``flags``' colour through an 8-bit alpha pattern, limited to a sector.

    ``img`` starts with little-endian 16-bit width and height followed by one
    alpha byte per pixel.
    """
    if end_angle == start_angle:
        end_angle += 1
    start = Slope.from_angle(start_angle)
    end = Slope.from_angle(end_angle)
    color = color_val(flags)
    width, height = struct.unpack_from("<HH", img)
    q = img[4:]
    w2 = width // 2
    h2 = height // 2
    for y1 in range(h2 - 1, -1, -1):
        for x1 in range(w2 - 1, -1, -1):
            slope = _point_slope(x1, y1)
            if slope.is_between(start, end):
                buffer.draw_alpha_pixel(
                    x + w2 + x1, y + h2 - y1, q[(h2 - y1) * width + w2 + x1] >> 4, color
                )
            if slope.invert_vertical().is_between(start, end):
                buffer.draw_alpha_pixel(
                    x + w2 + x1, y + h2 + y1, q[(h2 + y1) * width + w2 + x1] >> 4, color
                )
            if slope.invert_horizontal().is_between(start, end):
                buffer.draw_alpha_pixel(
                    x + w2 - x1, y + h2 + y1, q[(h2 + y1) * width + w2 - x1] >> 4, color
                )
            if slope.invert_vertical().is_between(start, end):
                buffer.draw_alpha_pixel(
                    x + w2 - x1, y + h2 - y1, q[(h2 - y1) * width + w2 - x1] >> 4, color
                )
"""A 16-bit pixel surface with clipping, offsets and primitive drawing operations."""

from __future__ import annotations

import struct
from typing import Optional, Sequence

from .colors import (
    OPACITY_MAX,
    PixelFormat,
    argb,
    argb_join,
    argb_split,
    color_val,
    rgb_join,
    rgb_split,
)
from .helpers import sgn

SOLID = 0xFF
DOTTED = 0x55
STASHED = 0x33

_Clip = Optional[tuple]


def _lb_max(values: Sequence[float]) -> float:
    return max([0.0, *values])


def _lb_min(values: Sequence[float]) -> float:
    return min([1.0, *values])


class BitmapBuffer:
    """A rectangular buffer of 16-bit pixels stored row by row.

    Coordinates given to the drawing methods are shifted by the current offset
    and limited to the clipping rectangle; the ``*_abs`` methods skip both.
    """

    def __init__(self, fmt, width: int, height: int, data=None):
        self.fmt = PixelFormat(fmt)
        self.width = width
        self.height = height
        if data is None:
            data = [0] * (width * height)
        elif len(data) != width * height:
            raise ValueError(
                f"expected {width * height} pixels, got {len(data)}"
            )
        self.data = data if isinstance(data, list) else list(data)
        self.xmin = 0
        self.xmax = width
        self.ymin = 0
        self.ymax = height
        self.offset_x = 0
        self.offset_y = 0

    # --- state -----------------------------------------------------------

    def set_clipping_rect(self, xmin: int, xmax: int, ymin: int, ymax: int) -> None:
        self.xmin, self.xmax, self.ymin, self.ymax = xmin, xmax, ymin, ymax

    def clear_clipping_rect(self) -> None:
        self.set_clipping_rect(0, self.width, 0, self.height)

    @property
    def clipping_rect(self) -> tuple[int, int, int, int]:
        """The clipping rectangle as ``(xmin, xmax, ymin, ymax)``."""
        return self.xmin, self.xmax, self.ymin, self.ymax

    def set_offset(self, offset_x: int, offset_y: int) -> None:
        self.offset_x = offset_x
        self.offset_y = offset_y

    def clear_offset(self) -> None:
        self.set_offset(0, 0)

    def reset(self) -> None:
        """Drop the offset and restore the full clipping rectangle."""
        self.clear_offset()
        self.clear_clipping_rect()

    @property
    def data_size(self) -> int:
        """Size of the pixel data in bytes."""
        return self.width * self.height * 2

    # --- low level -------------------------------------------------------

    def _index(self, x: int, y: int) -> int:
        return y * self.width + x

    def _put(self, index: int, value: int) -> None:
        if 0 <= index < len(self.data):
            self.data[index] = value & 0xFFFF

    def _blend(self, index: int, opacity: int, color: int) -> None:
        opacity &= 0xFF
        if opacity == OPACITY_MAX:
            self._put(index, color)
        elif opacity != 0:
            if not 0 <= index < len(self.data):
                return
            bg_weight = (OPACITY_MAX - opacity) & 0xFF
            red, green, blue = rgb_split(color)
            bg_red, bg_green, bg_blue = rgb_split(self.data[index])
            r = ((bg_red * bg_weight + red * opacity) // OPACITY_MAX) & 0xFFFF
            g = ((bg_green * bg_weight + green * opacity) // OPACITY_MAX) & 0xFFFF
            b = ((bg_blue * bg_weight + blue * opacity) // OPACITY_MAX) & 0xFFFF
            self._put(index, rgb_join(r, g, b))

    def _clip(self, x: int, y: int, w: int, h: int) -> _Clip:
        if h < 0:
            y += h
            h = -h
        if w < 0:
            x += w
            w = -w
        if x >= self.xmax or y >= self.ymax:
            return None
        if y < self.ymin:
            h += y - self.ymin
            y = self.ymin
        if x < self.xmin:
            w += x - self.xmin
            x = self.xmin
        if y + h > self.ymax:
            h = self.ymax - y
        if x + w > self.xmax:
            w = self.xmax - x
        if h > 0 and w > 0:
            return x, y, w, h
        return None

    # --- pixels ----------------------------------------------------------

    def get_pixel(self, x: int, y: int) -> int | None:
        """Pixel at ``(x, y)`` after offset, or ``None`` when it is clipped."""
        clipped = self._clip(x + self.offset_x, y + self.offset_y, 1, 1)
        if clipped is None:
            return None
        return self.data[self._index(clipped[0], clipped[1])]

    def draw_pixel(self, x: int, y: int, value: int) -> None:
        clipped = self._clip(x + self.offset_x, y + self.offset_y, 1, 1)
        if clipped is not None:
            self.draw_pixel_abs(clipped[0], clipped[1], value)

    def draw_pixel_abs(self, x: int, y: int, value: int) -> None:
        self._put(self._index(x, y), value)

    def draw_alpha_pixel(self, x: int, y: int, opacity: int, color: int) -> None:
        clipped = self._clip(x + self.offset_x, y + self.offset_y, 1, 1)
        if clipped is not None:
            self.draw_alpha_pixel_abs(clipped[0], clipped[1], opacity, color)

    def draw_alpha_pixel_abs(self, x: int, y: int, opacity: int, color: int) -> None:
        self._blend(self._index(x, y), opacity, color)

    def clear(self, flags: int = 0) -> None:
        self.draw_solid_filled_rect(
            0, 0, self.width - self.offset_x, self.height - self.offset_y, flags
        )

    # --- lines -----------------------------------------------------------

    def _horizontal_line_abs(
        self, x: int, y: int, w: int, pat: int, flags: int, opacity: int
    ) -> None:
        index = self._index(x, y)
        color = color_val(flags)
        opacity = (0x0F - opacity) & 0xFF
        pat &= 0xFF
        for _ in range(w):
            if pat == SOLID:
                self._blend(index, opacity, color)
            elif pat & 1:
                self._blend(index, opacity, color)
                pat = (pat >> 1) | 0x80
            else:
                pat >>= 1
            index += 1

    def draw_horizontal_line(
        self,
        x: int,
        y: int,
        w: int,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        clipped = self._clip(x + self.offset_x, y + self.offset_y, w, 1)
        if clipped is not None:
            cx, cy, cw, _ = clipped
            self._horizontal_line_abs(cx, cy, cw, pat, flags, opacity)

    def draw_vertical_line(
        self,
        x: int,
        y: int,
        h: int,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        clipped = self._clip(x + self.offset_x, y + self.offset_y, 1, h)
        if clipped is None:
            return
        x, y, _, h = clipped
        opacity = (0x0F - opacity) & 0xFF
        color = color_val(flags)
        pat &= 0xFF
        if pat == SOLID:
            for row in range(y, y + h):
                self.draw_alpha_pixel_abs(x, row, opacity, color)
            return
        if pat == DOTTED and y % 2 == 0:
            pat = ~pat & 0xFF
        for row in range(y, y + h):
            if pat & 1:
                self.draw_alpha_pixel_abs(x, row, opacity, color)
                pat = (pat >> 1) | 0x80
            else:
                pat >>= 1

    def draw_solid_horizontal_line(self, x: int, y: int, w: int, flags: int) -> None:
        self.draw_solid_filled_rect(x, y, w, 1, flags)

    def draw_solid_vertical_line(self, x: int, y: int, h: int, flags: int) -> None:
        self.draw_solid_filled_rect(x, y, 1, h, flags)

    def _liang_barsky(self, x1: int, y1: int, x2: int, y2: int):
        p1 = float(-(x2 - x1))
        p2 = -p1
        p3 = float(-(y2 - y1))
        p4 = -p3
        q1 = float(x1 - self.xmin)
        q2 = float(self.xmax - x1)
        q3 = float(y1 - self.ymin)
        q4 = float(self.ymax - y1)

        if (
            (p1 == 0 and q1 < 0)
            or (p2 == 0 and q2 < 0)
            or (p3 == 0 and q3 < 0)
            or (p4 == 0 and q4 < 0)
        ):
            return None

        negatives: list[float] = []
        positives: list[float] = []
        if p1 != 0:
            r1, r2 = q1 / p1, q2 / p2
            if p1 < 0:
                negatives.append(r1)
                positives.append(r2)
            else:
                negatives.append(r2)
                positives.append(r1)
        if p3 != 0:
            r3, r4 = q3 / p3, q4 / p4
            if p3 < 0:
                negatives.append(r3)
                positives.append(r4)
            else:
                negatives.append(r4)
                positives.append(r3)

        rn1 = _lb_max(negatives)
        rn2 = _lb_min(positives)
        if rn1 > rn2:
            return None
        return (
            int(x1 + p2 * rn1),
            int(y1 + p4 * rn1),
            int(x1 + p2 * rn2),
            int(y1 + p4 * rn2),
        )

    def draw_line(
        self, x1: int, y1: int, x2: int, y2: int, pat: int, flags: int
    ) -> None:
        """Draw a patterned line with Bresenham's algorithm after clipping it."""
        clipped = self._liang_barsky(
            x1 + self.offset_x,
            y1 + self.offset_y,
            x2 + self.offset_x,
            y2 + self.offset_y,
        )
        if clipped is None:
            return
        x1, y1, x2, y2 = clipped
        color = color_val(flags)
        dx, dy = x2 - x1, y2 - y1
        dxabs, dyabs = abs(dx), abs(dy)
        sdx, sdy = sgn(dx), sgn(dy)
        ex = dyabs >> 1
        ey = dxabs >> 1
        px, py = x1, y1

        if dxabs >= dyabs:
            for _ in range(dxabs + 1):
                if (1 << (px % 8)) & pat:
                    self.draw_pixel_abs(px, py, color)
                ey += dyabs
                if ey >= dxabs:
                    ey -= dxabs
                    py += sdy
                px += sdx
        else:
            for _ in range(dyabs + 1):
                if (1 << (py % 8)) & pat:
                    self.draw_pixel_abs(px, py, color)
                ex += dxabs
                if ex >= dyabs:
                    ex -= dyabs
                    px += sdx
                py += sdy

    # --- rectangles ------------------------------------------------------

    def draw_rect(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        thickness: int = 1,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        for i in range(thickness):
            self.draw_vertical_line(x + i, y, h, pat, flags, opacity)
            self.draw_vertical_line(x + w - 1 - i, y, h, pat, flags, opacity)
            self.draw_horizontal_line(x, y + h - 1 - i, w, pat, flags, opacity)
            self.draw_horizontal_line(x, y + i, w, pat, flags, opacity)

    def draw_solid_rect(
        self, x: int, y: int, w: int, h: int, thickness: int = 1, flags: int = 0
    ) -> None:
        self.draw_solid_filled_rect(x, y, thickness, h, flags)
        self.draw_solid_filled_rect(x + w - thickness, y, thickness, h, flags)
        self.draw_solid_filled_rect(x, y, w, thickness, flags)
        self.draw_solid_filled_rect(x, y + h - thickness, w, thickness, flags)

    def draw_solid_filled_rect(
        self, x: int, y: int, w: int, h: int, flags: int = 0
    ) -> None:
        clipped = self._clip(x + self.offset_x, y + self.offset_y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        color = color_val(flags)
        for row in range(y, y + h):
            start = self._index(x, row)
            for index in range(start, start + w):
                self._put(index, color)

    def draw_filled_rect(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        clipped = self._clip(x + self.offset_x, y + self.offset_y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        if pat != SOLID:
            for row in range(y, y + h):
                self._horizontal_line_abs(x, row, w, pat, flags, opacity)
            return
        r, g, b = rgb_split(color_val(flags))
        color_argb = argb((OPACITY_MAX - opacity) << 4, r << 3, g << 2, b << 3)
        scratch = BitmapBuffer(
            PixelFormat.ARGB4444, w, h, [color_argb] * (w * h)
        )
        self._draw_bitmap_abs(x, y, scratch, 0, 0, w, h, 0)

    def invert_rect(self, x: int, y: int, w: int, h: int, flags: int = 0) -> None:
        clipped = self._clip(x + self.offset_x, y + self.offset_y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        red, green, blue = rgb_split(color_val(flags))
        for row in range(y, y + h):
            start = self._index(x, row)
            for index in range(start, start + w):
                bg_red, bg_green, bg_blue = rgb_split(self.data[index])
                self._put(
                    index,
                    rgb_join(
                        0x1F + red - bg_red,
                        0x3F + green - bg_green,
                        0x1F + blue - bg_blue,
                    ),
                )

    # --- bitmaps ---------------------------------------------------------

    def draw_bitmap(
        self,
        x: int,
        y: int,
        bmp: "BitmapBuffer | None",
        srcx: int = 0,
        srcy: int = 0,
        srcw: int = 0,
        srch: int = 0,
        scale: float = 0,
    ) -> None:
        """Copy (and blend, for ARGB4444 sources) part of ``bmp``, optionally scaled."""
        if bmp is None:
            return
        x += self.offset_x
        y += self.offset_y
        if x >= self.xmax or y >= self.ymax:
            return
        self._draw_bitmap_abs(x, y, bmp, srcx, srcy, srcw, srch, scale)

    def draw_scaled_bitmap(
        self, bitmap: "BitmapBuffer | None", x: int, y: int, w: int, h: int
    ) -> None:
        """Draw ``bitmap`` scaled to fit and centred in the given box."""
        if bitmap is None or not bitmap.width or not bitmap.height:
            return
        vscale = h / bitmap.height
        hscale = w / bitmap.width
        scale = min(vscale, hscale)
        xshift = int((w - bitmap.width * scale) / 2)
        yshift = int((h - bitmap.height * scale) / 2)
        self.draw_bitmap(x + xshift, y + yshift, bitmap, 0, 0, 0, 0, scale)

    def _draw_bitmap_abs(
        self,
        x: int,
        y: int,
        bmp: "BitmapBuffer",
        srcx: int,
        srcy: int,
        srcw: int,
        srch: int,
        scale: float,
    ) -> None:
        bmpw, bmph = bmp.width, bmp.height
        if srcw == 0:
            srcw = bmpw
        if srch == 0:
            srch = bmph
        if srcx + srcw > bmpw:
            srcw = bmpw - srcx
        if srcy + srch > bmph:
            srch = bmph - srcy

        if scale == 0:
            if x < self.xmin:
                srcw += x - self.xmin
                srcx -= x - self.xmin
                x = self.xmin
            if y < self.ymin:
                srch += y - self.ymin
                srcy -= y - self.ymin
                y = self.ymin
            if x + srcw > self.xmax:
                srcw = self.xmax - x
            if y + srch > self.ymax:
                srch = self.ymax - y
        else:
            if x < self.xmin:
                srcw = int(srcw + (x - self.xmin) / scale)
                srcx = int(srcx - (x - self.xmin) / scale)
                x = self.xmin
            if y < self.ymin:
                srch = int(srch + (y - self.ymin) / scale)
                srcy = int(srcy - (y - self.ymin) / scale)
                y = self.ymin
            if x + srcw * scale > self.xmax:
                srcw = int((self.xmax - x) / scale)
            if y + srch * scale > self.ymax:
                srch = int((self.ymax - y) / scale)

        if srcw <= 0 or srch <= 0:
            return

        src_alpha = bmp.fmt == PixelFormat.ARGB4444

        if scale == 0:
            for i in range(srch):
                src_row = (srcy + i) * bmpw + srcx
                dest_row = self._index(x, y + i)
                for j in range(srcw):
                    value = bmp.data[src_row + j]
                    if src_alpha:
                        a, r, g, b = argb_split(value)
                        self._blend(dest_row + j, a, rgb_join(r << 1, g << 2, b << 1))
                    else:
                        self._put(dest_row + j, value)
            return

        scaledw = int(srcw * scale)
        scaledh = int(srch * scale)
        if x + scaledw > self.width:
            scaledw = self.width - x
        if y + scaledh > self.height:
            scaledh = self.height - y

        dest_alpha = self.fmt == PixelFormat.ARGB4444
        for i in range(scaledh):
            dest_row = self._index(x, y + i)
            src_row = (srcy + int(i / scale)) * bmpw + srcx
            for j in range(scaledw):
                value = bmp.data[src_row + int(j / scale)]
                index = dest_row + j
                if dest_alpha:
                    if src_alpha:
                        self._put(index, value)
                    else:
                        r, g, b = rgb_split(value)
                        self._put(index, argb_join(0xF, r >> 1, g >> 2, b >> 1))
                elif src_alpha:
                    a, r, g, b = argb_split(value)
                    self._blend(index, a, rgb_join(r << 1, g << 2, b << 1))
                else:
                    self._put(index, value)

    def _clip_mask(self, x: int, y: int, width: int, height: int, offset_x: int):
        if x + width > self.xmax:
            width = self.xmax - x
        if x < self.xmin:
            width += x - self.xmin
            offset_x -= x - self.xmin
            x = self.xmin
        if (
            y >= self.ymax
            or x >= self.xmax
            or width <= 0
            or x + width < self.xmin
            or y + height < self.ymin
        ):
            return None
        return x, width, offset_x

    def draw_mask(
        self,
        x: int,
        y: int,
        mask: "BitmapBuffer | None",
        flags: int,
        offset_x: int = 0,
        width: int = 0,
    ) -> None:
        """Blend ``flags``' colour through the opacities held in the low bytes of ``mask``."""
        if mask is None:
            return
        x += self.offset_x
        y += self.offset_y
        if not width or width > mask.width:
            width = mask.width
        clipped = self._clip_mask(x, y, width, mask.height, offset_x)
        if clipped is None:
            return
        x, width, offset_x = clipped
        color = color_val(flags)
        for row in range(mask.height):
            if y + row < self.ymin or y + row >= self.ymax:
                continue
            dest = self._index(x, y + row)
            src = mask._index(offset_x, row)
            for col in range(width):
                self._blend(dest + col, mask.data[src + col] & 0xFF, color)

    def draw_mask_bitmap(
        self,
        x: int,
        y: int,
        mask: "BitmapBuffer | None",
        src: "BitmapBuffer | None",
        offset_x: int = 0,
        offset_y: int = 0,
        width: int = 0,
        height: int = 0,
    ) -> None:
        """Blend pixels of ``src`` through the opacities held in ``mask``."""
        if mask is None or src is None:
            return
        x += self.offset_x
        y += self.offset_y
        if not width or width > mask.width:
            width = mask.width
        if not height or height > mask.height:
            height = mask.height
        clipped = self._clip_mask(x, y, width, height, offset_x)
        if clipped is None:
            return
        x, width, offset_x = clipped
        for row in range(height):
            if y + row < self.ymin or y + row >= self.ymax:
                continue
            dest = self._index(x, y + row)
            mask_row = mask._index(offset_x, offset_y + row)
            for col in range(width):
                # the source pixel is read with row and column exchanged
                color = src.data[src._index(row, col)]
                self._blend(dest + col, mask.data[mask_row + col] & 0xFF, color)

    def draw_bitmap_pattern(
        self,
        x: int,
        y: int,
        pattern: bytes,
        flags: int,
        offset: int = 0,
        width: int = 0,
    ) -> None:
        """Blend ``flags``' colour through an 8-bit alpha pattern.

        ``pattern`` starts with little-endian 16-bit width and height followed
        by one alpha byte per pixel.
        """
        x += self.offset_x
        y += self.offset_y
        bmpw, bmph = struct.unpack_from("<HH", pattern)
        srcx, srcy = offset, 0
        srcw = width if width != 0 else bmpw
        srch = bmph
        if srcx + srcw > bmpw:
            srcw = bmpw - srcx
        if srcy + srch > bmph:
            srch = bmph - srcy
        if x < self.xmin:
            srcw += x - self.xmin
            srcx -= x - self.xmin
            x = self.xmin
        if y < self.ymin:
            srch += y - self.ymin
            srcy -= y - self.ymin
            y = self.ymin
        if x + srcw > self.xmax:
            srcw = self.xmax - x
        if y + srch > self.ymax:
            srch = self.ymax - y
        if srcw <= 0 or srch <= 0:
            return
        color = color_val(flags)
        for i in range(srch):
            src_row = 4 + (srcy + i) * bmpw + srcx
            dest_row = self._index(x, y + i)
            for j in range(srcw):
                self._blend(dest_row + j, pattern[src_row + j] >> 4, color)

    # --- transforms ------------------------------------------------------

    def _rows(self) -> list[list[int]]:
        w = self.width
        return [self.data[row * w:(row + 1) * w] for row in range(self.height)]

    def horizontal_flip(self) -> "BitmapBuffer":
        """A new buffer mirrored left to right."""
        data = [value for row in self._rows() for value in reversed(row)]
        return BitmapBuffer(self.fmt, self.width, self.height, data)

    def vertical_flip(self) -> "BitmapBuffer":
        """A new buffer mirrored top to bottom."""
        data = [value for row in reversed(self._rows()) for value in row]
        return BitmapBuffer(self.fmt, self.width, self.height, data)

    def invert_mask(self) -> "BitmapBuffer":
        """A new buffer whose opacities are ``OPACITY_MAX`` minus the originals."""
        data = [(OPACITY_MAX - (value & 0xFF)) & 0xFFFF for value in self.data]
        return BitmapBuffer(self.fmt, self.width, self.height, data)
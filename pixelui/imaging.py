"""Loading bitmaps, masks and fonts from files and memory."""

from __future__ import annotations

import io
import os
import struct

from PIL import Image, UnidentifiedImageError

from .buffer import BitmapBuffer
from .colors import OPACITY_MAX, PixelFormat, argb, argb_split, rgb, rgb_split
from .files import get_file_extension
from .helpers import limit

_WINDIB_HEADERS = (40, 56, 64, 108, 124)
_OS2_V1_HEADER = 12
_IMAGE_FORMATS = ["PNG", "JPEG"]


class ImageError(ValueError):
    """Image data that cannot be decoded."""


def _u16(raw: bytes, pos: int) -> int:
    if pos + 2 > len(raw):
        raise ImageError("BMP header is truncated")
    return struct.unpack_from("<H", raw, pos)[0]


def _u32(raw: bytes, pos: int) -> int:
    if pos + 4 > len(raw):
        raise ImageError("BMP header is truncated")
    return struct.unpack_from("<I", raw, pos)[0]


def _parse_bmp(raw: bytes) -> BitmapBuffer:
    size = len(raw)
    if size < 14:
        raise ImageError("file too small for a BMP header")
    if raw[:2] != b"BM":
        raise ImageError("missing BMP signature")
    fsize = _u32(raw, 2)
    hsize = _u32(raw, 10)

    header_len = limit(4, (hsize - 14) & 0xFFFFFFFF, 32)
    if 14 + header_len > size:
        raise ImageError("BMP header is truncated")
    header = raw[14:14 + header_len]
    ihsize = _u32(header, 0)
    if ihsize + 14 > hsize:
        raise ImageError("invalid BMP info header size")
    if fsize == 14 or fsize == ihsize + 14:
        fsize = size - 2
    if fsize <= hsize:
        raise ImageError("declared BMP size is smaller than its header")

    if ihsize in _WINDIB_HEADERS:
        width, height = _u32(header, 4), _u32(header, 8)
        rest = 12
    elif ihsize == _OS2_V1_HEADER:
        width, height = _u16(header, 4), _u16(header, 6)
        rest = 8
    else:
        raise ImageError(f"unsupported BMP info header size {ihsize}")
    if _u16(header, rest) != 1:
        raise ImageError("BMP must have exactly one plane")
    depth = _u16(header, rest + 2)
    if width > 0xFFFF or height > 0xFFFF:
        raise ImageError("BMP dimensions out of range")

    palette: list[int] = []
    if depth == 4:
        start = hsize - 64
        if start < 0 or start + 64 > size:
            raise ImageError("BMP palette is missing")
        palette = [raw[start + 4 * i] for i in range(16)]

    if depth not in (1, 4, 16, 32):
        raise ImageError(f"unsupported BMP depth {depth}")

    bmp = BitmapBuffer(PixelFormat.RGB565, width, height)
    data = bmp.data
    pos = hsize

    if depth == 16:
        if pos + width * height * 2 > size:
            raise ImageError("BMP pixel data is truncated")
        for i in range(height - 1, -1, -1):
            row = struct.unpack_from(f"<{width}H", raw, pos)
            data[i * width:(i + 1) * width] = row
            pos += width * 2

    elif depth == 32:
        if pos + width * height * 4 > size:
            raise ImageError("BMP pixel data is truncated")
        has_alpha = False
        total = width * height
        for i in range(height - 1, -1, -1):
            for j in range(width):
                pixel = struct.unpack_from("<I", raw, pos)[0]
                pos += 4
                a = pixel & 0xFF
                r = (pixel >> 24) & 0xFF
                g = (pixel >> 16) & 0xFF
                b = (pixel >> 8) & 0xFF
                index = i * width + j
                if not has_alpha and a == 0xFF:
                    data[index] = rgb(r, g, b)
                    continue
                if not has_alpha:
                    has_alpha = True
                    bmp.fmt = PixelFormat.ARGB4444
                    for k in range(index, total):
                        tmp = data[k]
                        data[k] = (
                            ((tmp >> 1) & 0x0F)
                            + (((tmp >> 7) & 0x0F) << 4)
                            + (((tmp >> 12) & 0x0F) << 8)
                        )
                data[index] = argb(a, r, g, b)

    elif depth == 4:
        row_size = ((4 * width + 31) // 32) * 4
        for i in range(height - 1, -1, -1):
            if pos + row_size > size:
                raise ImageError("BMP pixel data is truncated")
            row = raw[pos:pos + row_size]
            pos += row_size
            for j in range(width):
                index = (row[j // 2] >> (0 if j & 1 else 4)) & 0x0F
                val = palette[index]
                data[i * width + j] = rgb(val, val, val)

    return bmp


def load_bmp(path: str | os.PathLike) -> BitmapBuffer:
    """Read a BMP file of depth 1, 4, 16 or 32 into a bitmap.

    32-bit files switch to ARGB4444 as soon as a pixel that is not fully
    opaque is met; 4-bit files are read as greys from the palette.
    """
    with open(path, "rb") as handle:
        raw = handle.read()
    return _parse_bmp(raw)


def _channels(im: Image.Image) -> int:
    if im.mode == "P":
        return 4 if "transparency" in im.info else 3
    return len(im.getbands())


def _open_image(source) -> Image.Image:
    try:
        im = Image.open(source, formats=_IMAGE_FORMATS)
        im.load()
    except (UnidentifiedImageError, SyntaxError, struct.error) as exc:
        raise ImageError(f"cannot decode image: {exc}") from exc
    return im


def _from_image(im: Image.Image) -> BitmapBuffer:
    channels = _channels(im)
    rgba = im.convert("RGBA")
    return convert_rgba(rgba.tobytes(), rgba.width, rgba.height, channels)


def load_image(path: str | os.PathLike) -> BitmapBuffer:
    """Decode a PNG or JPEG file into a bitmap."""
    with open(path, "rb") as handle:
        with _open_image(handle) as im:
            return _from_image(im)


def load_image_bytes(data: bytes) -> BitmapBuffer:
    """Decode PNG or JPEG data held in memory into a bitmap."""
    with _open_image(io.BytesIO(data)) as im:
        return _from_image(im)


def load_bitmap(path: str | os.PathLike) -> BitmapBuffer:
    """Load a bitmap, choosing the BMP reader by the ``.bmp`` extension."""
    name = os.fspath(path)
    if get_file_extension(name) == ".bmp":
        return load_bmp(name)
    return load_image(name)


def convert_rgba(img: bytes, width: int, height: int, channels: int) -> BitmapBuffer:
    """Convert RGBA bytes to ARGB4444 when the source had four channels, else RGB565."""
    if len(img) != width * height * 4:
        raise ValueError(f"expected {width * height * 4} bytes, got {len(img)}")
    quads = [img[i:i + 4] for i in range(0, len(img), 4)]
    if channels == 4:
        data = [argb(a, r, g, b) for r, g, b, a in quads]
        fmt = PixelFormat.ARGB4444
    else:
        data = [rgb(r, g, b) for r, g, b, _ in quads]
        fmt = PixelFormat.RGB565
    return BitmapBuffer(fmt, width, height, data)


def _with_low_byte(pixel: int, value: int) -> int:
    return (pixel & 0xFF00) | (value & 0xFF)


def load_mask(path: str | os.PathLike) -> BitmapBuffer:
    """Load a bitmap and store in each pixel's low byte the inverted brightness as opacity."""
    bitmap = load_bitmap(path)
    data = bitmap.data
    if bitmap.fmt == PixelFormat.ARGB4444:
        for k, pixel in enumerate(data):
            _, r, g, b = argb_split(pixel)
            data[k] = _with_low_byte(pixel, OPACITY_MAX - (r + g + b) // 3)
    else:
        for k, pixel in enumerate(data):
            r, g, b = rgb_split(pixel)
            level = ((r >> 1) + (g >> 2) + (b >> 1)) // 3
            data[k] = _with_low_byte(pixel, OPACITY_MAX - level)
    return bitmap


def load_8bit_mask(lbm: bytes) -> BitmapBuffer:
    """Build a mask from a width byte, a height byte and one 8-bit alpha per pixel."""
    if len(lbm) < 2:
        raise ImageError("mask header needs two bytes")
    width, height = lbm[0], lbm[1]
    pixels = lbm[2:2 + width * height]
    if len(pixels) != width * height:
        raise ImageError("mask data is truncated")
    return BitmapBuffer(PixelFormat.RGB565, width, height, [p >> 4 for p in pixels])


def _on_background(mask: BitmapBuffer, foreground: int, background: int) -> BitmapBuffer:
    result = BitmapBuffer(PixelFormat.RGB565, mask.width, mask.height)
    result.clear(background)
    result.draw_mask(0, 0, mask, foreground)
    return result


def load_mask_on_background(
    path: str | os.PathLike, foreground: int, background: int
) -> BitmapBuffer:
    """Render the mask in ``path`` in the foreground colour over the background colour."""
    return _on_background(load_mask(path), foreground, background)


def load_8bit_mask_on_background(
    lbm: bytes, foreground: int, background: int
) -> BitmapBuffer:
    """Render an 8-bit mask in the foreground colour over the background colour."""
    return _on_background(load_8bit_mask(lbm), foreground, background)


def load_font(data: bytes) -> tuple[bytes, int, int]:
    """Decode an image held in memory to one grey byte per pixel.

    Returns the pixels with the width and the height.
    """
    with _open_image(io.BytesIO(data)) as im:
        if im.mode in ("L", "LA"):
            grey = im.getchannel("L").tobytes()
            return grey, im.width, im.height
        rgb_im = im.convert("RGB")
        raw = rgb_im.tobytes()
        grey = bytes(
            (raw[i] * 77 + raw[i + 1] * 150 + raw[i + 2] * 29) >> 8
            for i in range(0, len(raw), 3)
        )
        return grey, rgb_im.width, rgb_im.height
"""Run-length encoded bitmaps.

In the encoding a byte that repeats the byte before it is followed by a count
of further copies. After such a run the next byte starts afresh.
"""

from __future__ import annotations

import struct
from typing import Iterator

from .buffer import BitmapBuffer


def _next_byte(source: Iterator[int]) -> int:
    byte = next(source, None)
    if byte is None:
        raise ValueError("run-length data ends before the destination is full")
    return byte


def rle_decode(src: bytes, dest_size: int) -> bytes:
    """Decode ``src`` until ``dest_size`` bytes have been produced.

    Raises ``ValueError`` when a run would overflow the destination or when
    ``src`` runs out too early.
    """
    source = iter(src)
    out = bytearray()
    prev: int | None = None
    while len(out) < dest_size:
        byte = _next_byte(source)
        out.append(byte)
        if prev is not None and byte == prev:
            count = _next_byte(source)
            if len(out) + count > dest_size:
                raise ValueError("run overflows the destination")
            out.extend(bytes((byte,)) * count)
            prev = None
        else:
            prev = byte
    return bytes(out)


def rle_header(data: bytes) -> tuple[int, int]:
    """Width and height stored as little-endian 16-bit values at the start of ``data``."""
    if len(data) < 4:
        raise ValueError("run-length bitmap header needs four bytes")
    width, height = struct.unpack_from("<HH", data)
    return width, height


def load_rle_bitmap(fmt, rle_data: bytes) -> BitmapBuffer:
    """Build a bitmap from a header and run-length encoded 16-bit pixels."""
    width, height = rle_header(rle_data)
    pixels = width * height
    raw = rle_decode(rle_data[4:], pixels * 2)
    data = list(struct.unpack(f"<{pixels}H", raw))
    return BitmapBuffer(fmt, width, height, data)
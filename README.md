# pixelui

A small drawing library for in-memory 16-bit pixel buffers in RGB565 or
ARGB4444 format. It offers a `BitmapBuffer` with a clipping rectangle and a
drawing offset, and around it lines, rectangles, triangles, circles, annulus
sectors and pie patterns, alpha masks, run-length encoded bitmaps, number
formatting, and loading of BMP, PNG and JPEG images.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Quick start

```python
from pixelui.colors import PixelFormat, rgb, color_flags
from pixelui.buffer import BitmapBuffer
from pixelui.shapes import draw_filled_circle

buf = BitmapBuffer(PixelFormat.RGB565, 64, 32)
red = color_flags(rgb(0xFF, 0, 0))

buf.clear(color_flags(rgb(0, 0, 0)))
buf.draw_solid_rect(0, 0, 64, 32, 1, red)
draw_filled_circle(buf, 32, 16, 10, red)

print(hex(buf.get_pixel(32, 16)))
```

Drawing methods take their colour in "flags": a 16-bit pixel value placed in
the upper half of an integer by `color_flags` and read back by `color_val`.
Opacities are on a 4-bit scale, `0` to `OPACITY_MAX` (15).

## Modules

- `pixelui.colors`: `PixelFormat` (`RGB565`, `ARGB4444`), `OPACITY_MAX`,
  packing of 8-bit channels (`rgb`, `argb`), splitting and joining of native
  channels (`rgb_split`, `rgb_join`, `argb_split`, `argb_join`), and
  `color_val` / `color_flags`.
- `pixelui.buffer`: `BitmapBuffer(fmt, width, height, data=None)` holding its
  pixels as a flat list in `data`. It has `set_clipping_rect`,
  `clear_clipping_rect`, `clipping_rect`, `set_offset`, `clear_offset`,
  `reset`, `get_pixel`, `draw_pixel`, `draw_alpha_pixel` (and the `*_abs`
  variants that ignore offset and clipping), `clear`, `draw_horizontal_line`,
  `draw_vertical_line`, `draw_solid_horizontal_line`,
  `draw_solid_vertical_line`, `draw_line` (patterned, Liang-Barsky clipped),
  `draw_rect`, `draw_solid_rect`, `draw_solid_filled_rect`, `draw_filled_rect`,
  `invert_rect`, `draw_bitmap` (optionally scaled), `draw_scaled_bitmap`,
  `draw_mask`, `draw_mask_bitmap`, `draw_bitmap_pattern`, and the
  `horizontal_flip`, `vertical_flip` and `invert_mask` copies. Line patterns
  `SOLID`, `DOTTED` and `STASHED` are defined here.
- `pixelui.shapes`: `draw_filled_triangle`, `draw_circle`, `draw_filled_circle`.
- `pixelui.sectors`: `Slope`, `draw_annulus_sector`, `draw_pattern_pie`.
- `pixelui.rle`: `rle_decode`, `rle_header` and `load_rle_bitmap` for
  run-length encoded bitmaps with a little-endian width/height header.
- `pixelui.numbers`: `format_number` for fixed-point values with optional
  leading zeros, prefix and suffix.
- `pixelui.imaging`: `load_bitmap` (BMP by the `.bmp` extension, otherwise
  PNG/JPEG), `load_bmp`, `load_image`, `load_image_bytes`, `convert_rgba`,
  `load_mask`, `load_8bit_mask`, `load_mask_on_background`,
  `load_8bit_mask_on_background` and `load_font` (grey bytes with width and
  height). Undecodable data raises `ImageError`, a `ValueError`.
- `pixelui.files`: `get_file_extension`, `is_extension_matching`, `nocase_key`,
  `iter_dir` and `list_matching_files` for picking files by extension.
- `pixelui.helpers`: `limit`, `div_round_closest`, `mult_div_round_closest`,
  `mod`, `align32`, `sgn`, `text_at_index` and `find_next_line`.

## Errors

Loaders raise rather than return an empty result: a missing file gives an
`OSError`, truncated or unsupported image data an `ImageError`, and
`rle_decode` a `ValueError` when a run overflows or the data ends early. BMP
files of depth 1 are accepted but their pixels are left at zero.
`list_matching_files` returns what it gathered if the folder cannot be read.
Drawing outside the clipping rectangle or the buffer is silently dropped.

## What it does not do

pixelui only draws into buffers in memory. It has no text or font rendering,
no widgets or windows, no input handling, and no way to show a buffer on a
screen; to view a result, convert `BitmapBuffer.data` yourself.
"""Drawing on in-memory 16-bit RGB565 and ARGB4444 pixel buffers, with shapes, masks, RLE bitmaps and image loading."""

__version__ = "0.1.0"
"""pixelcanvas: strided pixel canvases with aliasing sub-views.

Packages:
    - raster/: Canvas (fill, sub-views, PPM/PNG export), PPM encoding, patterns
    - utils/: broadcast vector arithmetic, packed colors, atomic I/O,
      logging, config validation

Architecture layers (strict one-way dependency):
    scripts/ → pixelcanvas/raster/ → pixelcanvas/utils/

Key invariants:
    - Pixel (x, y) lives at data[y * stride + x], stride >= width
    - Sub-views alias their parent's storage and never own it
    - Packed colors are R | G << 8 | B << 16 | 0xFF << 24
    - YAML-only configs
"""

__version__ = "0.3.0"

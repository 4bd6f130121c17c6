"""Raster layer: canvases, PPM encoding and patterns.

Usage:
    from pixelcanvas.raster import Canvas, draw_checkerboard
"""

from .canvas import (
    BufferSpan,
    Canvas,
    CanvasBoundsError,
    CanvasError,
    CoordinateError,
    identity,
)
from .patterns import draw_checkerboard
from .ppm import encode_ppm, ppm_header

__all__ = [
    'BufferSpan',
    'Canvas',
    'CanvasBoundsError',
    'CanvasError',
    'CoordinateError',
    'identity',
    'draw_checkerboard',
    'encode_ppm',
    'ppm_header',
]

"""Packed 32-bit colors and named palettes.

Provides:
    - encode_rgb() / decode_rgb(): pack and unpack one color
    - encode_rgb_array() / decode_rgb_array(): vectorized numpy forms
    - parse_hex_color(): '#RRGGBB' text → packed color
    - RED, GREEN, BLUE and the GRUVBOX_DARK palette

Packed layout (little-endian byte order inside a uint32):
    bits  0-7   red
    bits  8-15  green
    bits 16-23  blue
    bits 24-31  0xFF (constant, not consumed as alpha anywhere)

Decoding discards the top byte, so any uint32 decodes to a valid triple.

Usage:
    from pixelcanvas.utils import color
    bg = color.GRUVBOX_DARK['bg']
    canvas.save_as_ppm("out.ppm", color.decode_rgb)
"""

from typing import Dict, Tuple

import numpy as np

# Constant high byte written by encode_rgb
OPAQUE = 0xFF000000


def _check_channel(name: str, value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"Channel {name}={value} out of range [0, 255]")
    return value


def encode_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into a 32-bit color.

    Parameters
    ----------
    r, g, b : int
        Channel values in [0, 255]

    Returns
    -------
    int
        ``r | (g << 8) | (b << 16) | (0xFF << 24)``

    Raises
    ------
    ValueError
        If a channel is outside [0, 255]
    """
    r = _check_channel('r', int(r))
    g = _check_channel('g', int(g))
    b = _check_channel('b', int(b))
    return r | (g << 8) | (b << 16) | OPAQUE


def decode_rgb(color: int) -> Tuple[int, int, int]:
    """Unpack a 32-bit color into ``(r, g, b)``, discarding the top byte."""
    color = int(color)
    return (
        color & 0xFF,
        (color >> 8) & 0xFF,
        (color >> 16) & 0xFF,
    )


def encode_rgb_array(rgb: np.ndarray) -> np.ndarray:
    """Pack an (..., 3) uint8 array into (...) uint32 colors.

    Parameters
    ----------
    rgb : np.ndarray
        Channels in the last axis, values in [0, 255]

    Returns
    -------
    np.ndarray
        uint32 array with the channel axis removed
    """
    rgb = np.asarray(rgb)
    if rgb.shape[-1:] != (3,):
        raise ValueError(f"Expected shape (..., 3), got {rgb.shape}")
    if rgb.size and (rgb.min() < 0 or rgb.max() > 255):
        raise ValueError("Channel values out of range [0, 255]")
    c = rgb.astype(np.uint32)
    return c[..., 0] | (c[..., 1] << 8) | (c[..., 2] << 16) | np.uint32(OPAQUE)


def decode_rgb_array(colors: np.ndarray) -> np.ndarray:
    """Unpack (...) packed colors into an (..., 3) uint8 array.

    Notes
    -----
    Vectorized twin of decode_rgb; Canvas.save_as_ppm uses it when the
    storage is numpy and the mapping is decode_rgb.
    """
    c = np.asarray(colors).astype(np.uint32)
    out = np.empty(c.shape + (3,), dtype=np.uint8)
    out[..., 0] = c & 0xFF
    out[..., 1] = (c >> 8) & 0xFF
    out[..., 2] = (c >> 16) & 0xFF
    return out


def parse_hex_color(hex_str: str) -> int:
    """Parse '#RRGGBB' or 'RRGGBB' (case-insensitive) into a packed color.

    Raises
    ------
    ValueError
        If the text is not six hex digits
    """
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        raise ValueError(f"Expected '#RRGGBB', got {hex_str!r}")
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
    except ValueError as e:
        raise ValueError(f"Invalid hex color {hex_str!r}") from e
    return encode_rgb(r, g, b)


def to_hex(color: int) -> str:
    """Packed color → '#rrggbb'."""
    return '#{:02x}{:02x}{:02x}'.format(*decode_rgb(color))


RED = encode_rgb(255, 0, 0)
GREEN = encode_rgb(0, 255, 0)
BLUE = encode_rgb(0, 0, 255)

# Gruvbox dark, stored as packed words (0xFF | B | G | R)
GRUVBOX_DARK: Dict[str, int] = {
    'bg': 0xFF282828,
    'fg': 0xFFB2DBEB,
    'red': 0xFF3449FB,
    'green': 0xFF26BBB8,
    'yellow': 0xFF2FBDFA,
    'blue': 0xFF98A583,
    'purple': 0xFF9B86D3,
    'aqua': 0xFF7CC08E,
    'gray': 0xFF748392,
    'orange': 0xFF1980FE,
}

"""Binary PPM (P6) encoding.

Wire format:
    "P6\\n"
    "<width> <height>\\n"
    "255\\n"
    <width*height pixels, row-major, 3 raw bytes each: R, G, B>

No comments in the header, no trailing newline after the pixel data.
Decoding is out of scope; tests read files back with Pillow.
"""

from typing import Any, Tuple

import numpy as np

MAXVAL = 255


def ppm_header(width: int, height: int, maxval: int = MAXVAL) -> bytes:
    """Header bytes, e.g. ``b"P6\\n2 1\\n255\\n"``."""
    return f"P6\n{int(width)} {int(height)}\n{int(maxval)}\n".encode('ascii')


def check_rgb(rgb: Any) -> Tuple[int, int, int]:
    """Validate a mapped pixel: exactly three ints in [0, 255].

    Raises
    ------
    ValueError
        Wrong channel count or a channel out of range
    """
    try:
        r, g, b = rgb
    except (TypeError, ValueError) as e:
        raise ValueError(f"Pixel mapping must return (r, g, b), got {rgb!r}") from e
    channels = []
    for name, c in zip("rgb", (r, g, b)):
        try:
            ic = int(c)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Channel {name}={c!r} is not an integer") from e
        if ic != c:
            raise ValueError(f"Channel {name}={c!r} is not an integer")
        if not 0 <= ic <= MAXVAL:
            raise ValueError(f"Channel {name}={ic} out of range [0, {MAXVAL}]")
        channels.append(ic)
    return tuple(channels)


def encode_ppm(rgb: np.ndarray) -> bytes:
    """Encode an (H, W, 3) uint8 array as a complete P6 file.

    Raises
    ------
    ValueError
        If the array is not (H, W, 3) uint8
    """
    rgb = np.asarray(rgb)
    if rgb.ndim != 3 or rgb.shape[2] != 3 or rgb.dtype != np.uint8:
        raise ValueError(f"Expected (H, W, 3) uint8 array, got {rgb.shape} {rgb.dtype}")
    height, width = rgb.shape[:2]
    return ppm_header(width, height) + np.ascontiguousarray(rgb).tobytes()

"""Strided pixel canvas with aliasing sub-views and PPM export.

A Canvas is a view over a linear buffer: ``width`` pixels per row,
``height`` rows, and ``stride`` elements between the starts of consecutive
rows. Pixel (x, y) lives at ``data[y * stride + x]``.

Provides:
    - Canvas.fill(): bulk write of the visible width × height region
    - Canvas.subcanvas_view(): non-owning window onto a rectangle
    - Canvas.checked_subcanvas_view(): same, rejecting out-of-bounds rects
    - Canvas.save_as_ppm() / save_as_png(): export through a pixel → RGB map
    - BufferSpan: offset window used to alias non-numpy storage

Ownership:
    - Canvas.blank() owns a fresh numpy buffer
    - Canvas(data=...) borrows whatever indexable storage the caller passes
    - Sub-views never own: numpy storage is aliased with a slice view,
      anything else through BufferSpan. The parent's buffer must outlive
      every view derived from it; nothing here tracks that.

Bounds:
    subcanvas_view() trusts the caller to keep the rectangle inside the
    parent. Writes outside it land in the parent's padding or in later rows
    (numpy raises only past the end of the buffer). Use
    checked_subcanvas_view() for untrusted coordinates.

Not thread-safe: views share storage with their parent without locking.

Usage:
    from pixelcanvas.raster.canvas import Canvas
    from pixelcanvas.utils import color

    canvas = Canvas.blank(4, 4)
    canvas.fill(color.GRUVBOX_DARK['bg'])
    canvas.subcanvas_view((1, 1), (2, 2)).fill(color.GRUVBOX_DARK['fg'])
    canvas.save_as_ppm("out.ppm", color.decode_rgb)
"""

import logging
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from ..utils import color as color_utils
from ..utils import fs
from . import ppm

logger = logging.getLogger(__name__)


def identity(value: Any) -> Any:
    """Default coordinate extractor and pixel mapping: returns its input."""
    return value


# ============================================================================
# EXCEPTIONS
# ============================================================================

class CanvasError(Exception):
    """Base class for canvas precondition failures."""


class CoordinateError(CanvasError, ValueError):
    """Coordinate extractor returned something other than two unsigned ints."""


class CanvasBoundsError(CanvasError, IndexError):
    """Rectangle does not lie inside the parent canvas."""


# ============================================================================
# NON-OWNING STORAGE
# ============================================================================

class BufferSpan:
    """Window ``[start, stop)`` onto another indexable buffer.

    Reads and writes go straight to the base buffer, so a span over a list
    aliases it the way a numpy slice aliases its array. Spans over spans
    collapse onto the original base.

    Parameters
    ----------
    base : Any
        Indexable, item-assignable storage (list, array.array, bytearray)
    start : int
        First element of the window in ``base``
    stop : int
        One past the last element; clamped to ``len(base)``
    """

    __slots__ = ('base', 'start', 'stop')

    def __init__(self, base: Any, start: int, stop: int):
        if isinstance(base, BufferSpan):
            start += base.start
            stop += base.start
            limit = base.stop
            base = base.base
        else:
            limit = len(base)
        self.base = base
        self.start = start
        self.stop = max(start, min(stop, limit))

    def __len__(self) -> int:
        return self.stop - self.start

    def _translate(self, key):
        if isinstance(key, slice):
            lo, hi, step = key.indices(len(self))
            return slice(self.start + lo, self.start + hi, step)
        if key < 0:
            key += len(self)
        if not 0 <= key < len(self):
            raise IndexError(f"BufferSpan index {key} out of range [0, {len(self)})")
        return self.start + key

    def __getitem__(self, key):
        return self.base[self._translate(key)]

    def __setitem__(self, key, value):
        target = self._translate(key)
        if isinstance(target, slice):
            # A length mismatch would resize the base list under every view
            indices = range(target.start, target.stop, target.step)
            values = list(value)
            if len(values) != len(indices):
                raise ValueError(
                    f"Cannot assign {len(values)} values to a BufferSpan slice "
                    f"of length {len(indices)}"
                )
            for i, v in zip(indices, values):
                self.base[i] = v
            return
        self.base[target] = value

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.start, self.stop):
            yield self.base[i]

    def __repr__(self):
        return f"BufferSpan({type(self.base).__name__}, start={self.start}, stop={self.stop})"


def _borrow(data: Any, start: int, stop: int) -> Any:
    """Non-owning reference to ``data[start:stop]``."""
    if isinstance(data, np.ndarray):
        # Basic slicing never copies
        return data[start:stop]
    return BufferSpan(data, start, stop)


# ============================================================================
# CANVAS
# ============================================================================

class Canvas:
    """Rectangular pixel grid over linear storage.

    Parameters
    ----------
    data : Any, optional
        Indexable storage of at least ``stride * (height - 1) + width``
        elements. None gives an empty tuple (only valid for zero height).
    width : int
        Pixels per row
    height : int
        Number of rows
    stride : int, optional
        Elements between row starts, default ``width``

    Raises
    ------
    ValueError
        If a dimension is negative or ``stride < width``

    Notes
    -----
    ``Canvas()`` is the empty sentinel returned for degenerate sub-views.
    The buffer size is not checked against the geometry.
    """

    __slots__ = ('data', 'width', 'height', 'stride')

    def __init__(
        self,
        data: Any = None,
        width: int = 0,
        height: int = 0,
        stride: Optional[int] = None
    ):
        if stride is None:
            stride = width
        width, height, stride = int(width), int(height), int(stride)
        if width < 0 or height < 0:
            raise ValueError(f"Canvas dimensions must be non-negative, got {width}x{height}")
        if stride < width:
            raise ValueError(f"Canvas stride {stride} is smaller than width {width}")
        self.data = () if data is None else data
        self.width = width
        self.height = height
        self.stride = stride

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        stride: Optional[int] = None,
        dtype: Any = np.uint32,
        fill: Any = 0
    ) -> 'Canvas':
        """Owning canvas over a new numpy buffer of ``stride * height`` elements.

        Padding columns (``stride > width``) are initialized to ``fill`` too.
        """
        if stride is None:
            stride = width
        data = np.full(int(stride) * int(height), fill, dtype=dtype)
        return cls(data, width, height, stride)

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)."""
        return (self.width, self.height)

    def __bool__(self) -> bool:
        return self.width > 0 and self.height > 0

    def __repr__(self):
        return (
            f"Canvas(width={self.width}, height={self.height}, stride={self.stride}, "
            f"data={type(self.data).__name__})"
        )

    def offset(self, x: int, y: int) -> int:
        """Linear index of pixel (x, y)."""
        return y * self.stride + x

    def pixel(self, x: int, y: int) -> Any:
        """Raw read of pixel (x, y); unchecked."""
        return self.data[y * self.stride + x]

    def set_pixel(self, x: int, y: int, value: Any) -> None:
        """Raw write of pixel (x, y); unchecked."""
        self.data[y * self.stride + x] = value

    def rows(self) -> Iterator[Sequence[Any]]:
        """Yield each visible row as a sequence of ``width`` values.

        Rows of numpy storage are views; other storage yields lists.
        """
        for y in range(self.height):
            start = y * self.stride
            if isinstance(self.data, np.ndarray):
                yield self.data[start:start + self.width]
            else:
                yield [self.data[start + x] for x in range(self.width)]

    # ------------------------------------------------------------------
    # Fill
    # ------------------------------------------------------------------

    def fill(self, value: Any) -> None:
        """Write ``value`` into every visible pixel.

        Walks row starts ``0, stride, 2*stride, ...`` and writes ``width``
        elements per row; padding columns are left untouched.
        """
        if self.width == 0:
            return
        numpy_backed = isinstance(self.data, np.ndarray)
        cursor = 0
        for _ in range(self.height):
            if numpy_backed:
                self.data[cursor:cursor + self.width] = value
            else:
                # Element-wise: slice assignment would resize a short list
                for i in range(cursor, cursor + self.width):
                    self.data[i] = value
            cursor += self.stride

    # ------------------------------------------------------------------
    # Sub-views
    # ------------------------------------------------------------------

    def subcanvas_view(
        self,
        p1: Any,
        p2: Any,
        getxy: Callable[[Any], Any] = identity
    ) -> 'Canvas':
        """Non-owning view of the rectangle spanned by two points.

        Parameters
        ----------
        p1, p2 : Any
            Corner points, in any order
        getxy : Callable[[Any], Any]
            Maps a point to an (x, y) pair, default identity

        Returns
        -------
        Canvas
            View with ``width = x2 - x1 + 1``, ``height = y2 - y1 + 1`` and
            the parent's stride, aliasing the parent's storage from
            ``y1 * stride + x1`` up to the parent's ``height * stride``.
            Identical corners give the empty ``Canvas()``.

        Raises
        ------
        CoordinateError
            If ``getxy`` does not return two non-negative integers
        CanvasBoundsError
            If the rectangle is wider than the parent's stride, which no
            strided view can represent

        Notes
        -----
        Both corners are inclusive. The rectangle is not otherwise checked
        against the parent's width/height.
        """
        x1, y1 = _extract_xy(getxy, p1)
        x2, y2 = _extract_xy(getxy, p2)
        if x1 == x2 and y1 == y2:
            return Canvas()
        if x1 > x2:
            x1, x2 = x2, x1
        if y1 > y2:
            y1, y2 = y2, y1
        if x2 - x1 + 1 > self.stride:
            raise CanvasBoundsError(
                f"Rectangle ({x1}, {y1})-({x2}, {y2}) is wider than the canvas "
                f"stride {self.stride}"
            )

        start = y1 * self.stride + x1
        view = Canvas(
            _borrow(self.data, start, self.height * self.stride),
            x2 - x1 + 1,
            y2 - y1 + 1,
            self.stride,
        )
        logger.debug(f"subcanvas_view ({x1}, {y1})-({x2}, {y2}) → {view.width}x{view.height}")
        return view

    def checked_subcanvas_view(
        self,
        p1: Any,
        p2: Any,
        getxy: Callable[[Any], Any] = identity
    ) -> 'Canvas':
        """subcanvas_view() that rejects rectangles outside this canvas.

        Raises
        ------
        CanvasBoundsError
            If either normalized corner falls outside
            ``[0, width) × [0, height)``
        CoordinateError
            As subcanvas_view()
        """
        for corner in (p1, p2):
            x, y = _extract_xy(getxy, corner)
            if x >= self.width or y >= self.height:
                raise CanvasBoundsError(
                    f"Corner ({x}, {y}) outside canvas {self.width}x{self.height}"
                )
        return self.subcanvas_view(p1, p2, getxy)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_rgb_array(self, pixel_to_rgb: Callable[[Any], Any] = identity) -> np.ndarray:
        """Map every visible pixel to channels.

        Returns
        -------
        np.ndarray
            (height, width, 3) uint8

        Raises
        ------
        ValueError
            If the mapping returns a channel outside [0, 255] or not
            exactly three channels
        """
        if (
            pixel_to_rgb is color_utils.decode_rgb
            and isinstance(self.data, np.ndarray)
            and self.width and self.height
        ):
            rows = np.stack([np.asarray(r) for r in self.rows()])
            return color_utils.decode_rgb_array(rows)

        out = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        for y, row in enumerate(self.rows()):
            for x, value in enumerate(row):
                out[y, x] = ppm.check_rgb(pixel_to_rgb(value))
        return out

    def save_as_ppm(
        self,
        path: Union[str, Path],
        pixel_to_rgb: Callable[[Any], Any] = identity,
        *,
        strict: bool = False
    ) -> None:
        """Serialize to a binary PPM (P6) file.

        Parameters
        ----------
        path : Union[str, Path]
            Output file
        pixel_to_rgb : Callable[[Any], Any]
            Maps a stored pixel to (r, g, b) in [0, 255], default identity
        strict : bool
            Re-raise I/O errors instead of logging them, default False

        Raises
        ------
        ValueError
            If the mapping yields an invalid channel (always raised)
        OSError
            On I/O failure, only when ``strict`` is True

        Notes
        -----
        Best effort by default: a file that cannot be opened or written is
        reported at ERROR level and the call returns normally. The handle
        is closed on every exit path.
        """
        payload = ppm.encode_ppm(self.to_rgb_array(pixel_to_rgb))
        path = Path(path)
        try:
            with open(path, 'wb') as out:
                out.write(payload)
        except OSError as e:
            if strict:
                raise
            logger.error(f"Could not write PPM {path}: {e}")
            return
        logger.info(f"Saved {self.width}x{self.height} PPM to {path}")

    def save_as_png(
        self,
        path: Union[str, Path],
        pixel_to_rgb: Callable[[Any], Any] = identity
    ) -> None:
        """Export to PNG (or any Pillow format by extension), atomically.

        Raises
        ------
        RuntimeError
            If Pillow cannot write the file
        """
        fs.atomic_save_image(self.to_rgb_array(pixel_to_rgb), path)
        logger.info(f"Saved {self.width}x{self.height} image to {path}")


def _extract_xy(getxy: Callable[[Any], Any], point: Any) -> Tuple[int, int]:
    """Apply the extractor and coerce its result to two unsigned ints."""
    xy = getxy(point)
    try:
        n = len(xy)
    except TypeError as e:
        raise CoordinateError(
            f"Coordinate extractor must return an (x, y) pair, got {type(xy).__name__}"
        ) from e
    if n != 2:
        raise CoordinateError(f"Coordinate extractor must return 2 values, got {n}")

    coords = []
    for axis, v in zip("xy", xy):
        try:
            iv = int(v)
        except (TypeError, ValueError) as e:
            raise CoordinateError(f"Coordinate {axis}={v!r} is not an integer") from e
        if iv != v or iv < 0:
            raise CoordinateError(f"Coordinate {axis}={v!r} is not an unsigned integer")
        coords.append(iv)
    return coords[0], coords[1]

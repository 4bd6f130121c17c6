"""Pattern drawing on top of Canvas sub-views.

Provides:
    - draw_checkerboard(): alternating square cells

Cells are filled through transient sub-views, one per cell, so the pattern
exercises the windowing path rather than writing pixels one at a time.
"""

import logging

from ..utils.vector import Vector
from .canvas import Canvas

logger = logging.getLogger(__name__)


def draw_checkerboard(canvas: Canvas, cell: int, even: int, odd: int) -> int:
    """Fill ``canvas`` with a checkerboard of ``cell``-pixel squares.

    Parameters
    ----------
    canvas : Canvas
        Target canvas
    cell : int
        Cell pitch in pixels, >= 1
    even : int
        Background color and color of cells where ``(i + j)`` is even
    odd : int
        Color of cells where ``(i + j)`` is odd

    Returns
    -------
    int
        Number of cells drawn

    Notes
    -----
    Cell (i, j) spans the inclusive rectangle ``(i, j) * cell`` to
    ``((i, j) + 1) * cell``, so neighbouring cells share their border
    pixel and later cells overwrite it. The grid has ``width // cell - 1`` columns
    and ``height // cell - 1`` rows; the last band stays in the background color.
    """
    if cell < 1:
        raise ValueError(f"cell must be >= 1, got {cell}")

    canvas.fill(even)

    cols = canvas.width // cell - 1
    rows = canvas.height // cell - 1
    drawn = 0
    for j in range(rows):
        for i in range(cols):
            p1 = Vector((i, j)) * cell
            p2 = (Vector((i, j)) + 1) * cell
            canvas.subcanvas_view(p1, p2).fill(even if (i + j) % 2 == 0 else odd)
            drawn += 1

    logger.debug(f"Checkerboard: {drawn} cells of {cell}px on {canvas.width}x{canvas.height}")
    return drawn

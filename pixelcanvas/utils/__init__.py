"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Broadcast arithmetic on coordinate tuples (vector)
    - Packed colors and palettes (color)
    - Atomic I/O and YAML loading (fs)
    - Unified logging (logging_config)
    - Config validation (validators)

No module in utils/ may import from raster/.

Convenience imports:
    from pixelcanvas.utils import vector, color, fs
    from pixelcanvas.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import logging_config
from . import validators
from . import vector

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'logging_config',
    'validators',
    'vector',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]

#!/usr/bin/env python3
"""Draw a checkerboard and save it as a binary PPM.

Renders the gruvbox checkerboard demo: fill the canvas with the background,
fill every cell through a sub-view, export with decode_rgb.

Settings come from a YAML file (configs/checkerboard.yaml by default);
command-line flags override individual keys.

Usage:
    # Defaults from configs/checkerboard.yaml
    python scripts/draw_checkerboard.py

    # Smaller board, also write a PNG
    python scripts/draw_checkerboard.py --size 200 --cell 20 \\
        --output outputs/board.ppm --png outputs/board.png

Exit codes:
    0  success
    2  invalid configuration
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pixelcanvas.raster import Canvas, draw_checkerboard
from pixelcanvas.utils import color, fs, logging_config, validators

DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "checkerboard.yaml"

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Draw a checkerboard into a PPM image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"YAML config (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument("--size", type=int, help="Canvas side length in pixels")
    parser.add_argument("--cell", type=int, help="Cell pitch in pixels")
    parser.add_argument("--output", type=Path, help="PPM output path")
    parser.add_argument("--png", dest="png_output", type=Path, help="Also write a PNG here")

    # Logging
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=str, help="Also log to this file")
    parser.add_argument("--json-logs", action="store_true", help="JSON lines in the log file")
    return parser.parse_args(argv)


def render(cfg: validators.CheckerboardConfig) -> Canvas:
    """Draw the board described by ``cfg`` and write its outputs.

    Returns
    -------
    Canvas
        The rendered canvas (owning)
    """
    canvas = Canvas.blank(cfg.size, cfg.size)
    cells = draw_checkerboard(canvas, cfg.cell, cfg.even_color, cfg.odd_color)
    logger.info(
        f"Drew {cells} cells ({color.to_hex(cfg.even_color)}/{color.to_hex(cfg.odd_color)}) "
        f"on {cfg.size}x{cfg.size}"
    )

    fs.ensure_dir(cfg.output.parent)
    canvas.save_as_ppm(cfg.output, color.decode_rgb)

    if cfg.png_output is not None:
        canvas.save_as_png(cfg.png_output, color.decode_rgb)
    return canvas


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)

    try:
        cfg = validators.load_checkerboard_config(
            args.config,
            size=args.size,
            cell=args.cell,
            output=args.output,
            png_output=args.png_output,
        )
    except validators.ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    log_kwargs = cfg.logging.as_kwargs()
    if args.verbose:
        log_kwargs['log_level'] = "DEBUG"
    if args.log_file:
        log_kwargs['log_file'] = args.log_file
    if args.json_logs:
        log_kwargs['json'] = True
    logging_config.setup_logging(**log_kwargs, context={"app": "checkerboard"})

    logger.info(f"Config: {args.config}")
    render(cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())

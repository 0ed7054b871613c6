"""
Entry point: impose scanned spreads described by a JSON config.

Usage:
    python -m zinefold zine.json out/
    python -m zinefold zine.json out/ -v --compositor magick

Exit status:
    0  every sheet side rendered
    1  one or more sheet sides failed to render
    2  configuration, measuring, layout or planning error
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from zinefold import __version__
from zinefold.controller import impose
from zinefold.core.errors import ImpositionError
from zinefold.loading import load_config
from zinefold.render import MagickCompositor, PillowCompositor, RasterCompositor

logger = logging.getLogger("zinefold")

EXIT_OK = 0
EXIT_RENDER_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zinefold",
        description="Impose scanned two-page spreads onto printable sheets",
    )
    parser.add_argument("config", type=Path, help="JSON config file")
    parser.add_argument("output_dir", type=Path, help="Directory for rendered sheet sides")
    parser.add_argument(
        "--compositor",
        choices=("pillow", "magick"),
        default="pillow",
        help="Raster backend (default: pillow)",
    )
    parser.add_argument(
        "--background",
        default=None,
        help="Canvas colour for the pillow backend (default: transparent)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _make_compositor(args: argparse.Namespace) -> RasterCompositor:
    if args.compositor == "magick":
        return MagickCompositor()
    return PillowCompositor(background=args.background)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        config = load_config(args.config)
        result = impose(config, args.output_dir, compositor=_make_compositor(args))
    except ImpositionError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return EXIT_ERROR

    logger.info(
        f"{result.sheet_count} sheet(s), {len(result.outputs)} side(s) written to "
        f"{args.output_dir}"
    )
    if result.failures:
        for failure in result.failures:
            logger.error(f"Failed: {failure}")
        return EXIT_RENDER_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

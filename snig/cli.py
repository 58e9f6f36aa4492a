"""Command line entry point.

Usage:
    snig --input photos/ --output public_html/ [--name "Summer 2024"]
"""

from __future__ import annotations

import argparse
from pathlib import Path

from loguru import logger

from snig import VERSION
from snig.config import (
    DEFAULT_DETAIL_SIZE,
    DEFAULT_SORT_BY,
    DEFAULT_THUMBNAIL_SIZE,
    SORT_KEYS,
    GalleryConfig,
    parse_force,
)
from snig.errors import ConfigError, SnigError
from snig.gallery import build_gallery
from snig.log import init_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snig",
        description="Build a static photo gallery from a directory of JPEGs.",
    )
    parser.add_argument("--input", required=True, type=Path, help="Directory with the source JPEGs")
    parser.add_argument("--output", required=True, type=Path, help="Directory the gallery is written to")
    parser.add_argument("--name", default="", help="Human-readable gallery name (default: input directory name)")
    parser.add_argument(
        "--th_size", "--th-size", dest="thumbnail_size", type=int, default=DEFAULT_THUMBNAIL_SIZE,
        help=f"Thumbnail size in pixels (default: {DEFAULT_THUMBNAIL_SIZE})",
    )
    parser.add_argument(
        "--detail_size", "--detail-size", dest="detail_size", type=int, default=DEFAULT_DETAIL_SIZE,
        help=f"Preview size in pixels (default: {DEFAULT_DETAIL_SIZE})",
    )
    parser.add_argument(
        "--sort_by", "--sort-by", dest="sort_by", type=str.lower, choices=SORT_KEYS, default=DEFAULT_SORT_BY,
        help=f"Sorting strategy (default: {DEFAULT_SORT_BY})",
    )
    parser.add_argument(
        "--force", action="append", default=[], metavar="resize|zip",
        help="Redo work even if output exists; repeatable or comma separated",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(args.verbose)

    config = GalleryConfig(
        input_dir=args.input,
        output_dir=args.output,
        name=args.name,
        thumbnail_size=args.thumbnail_size,
        detail_size=args.detail_size,
        sort_by=args.sort_by,
        force=parse_force(args.force),
    )
    try:
        build_gallery(config)
    except ConfigError as e:
        logger.error("{}", e)
        return 2
    except SnigError as e:
        logger.error("Error: {}", e)
        return 1

    print(f"\nDone! Gallery written to {config.output_dir}/")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

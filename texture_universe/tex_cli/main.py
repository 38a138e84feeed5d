#!/usr/bin/env python3
"""
sc4-texture: split a texture sheet into unique 128x128 tiles.

Commands:
    parse   Load, deduplicate, export unique tiles, write report.html
    info    Print the bounds of a PNG

Usage:
    sc4-texture parse --in terrain.png --out build/
    sc4-texture parse --in terrain.png --tile-size 64 --check-collisions -v
    sc4-texture info --in terrain.png
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from tex_core.config import TILE_SIZE, ParseSettings
from tex_dedup.image_set import ImageSet
from tex_io.errors import LoadError, ReportError
from tex_io.export import write_image_files
from tex_io.report import write_report
from tex_io.source import describe_image

EXIT_OK = 0
EXIT_LOAD_ERROR = 1


def setup_logger(name: str, log_file: Optional[Path] = None, level=logging.INFO) -> logging.Logger:
    """
    Setup logger for a CLI run.

    Args:
        name: Logger name ("" configures the root logger)
        log_file: Optional path to a log file
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers = []

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sc4-texture",
        description="Find the unique tiles of a texture sheet, up to rotation and mirroring.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Deduplicate tiles and write images + report")
    parse_cmd.add_argument("--in", dest="source", type=Path, required=True, help="Source PNG to load")
    parse_cmd.add_argument("--out", dest="output_dir", type=Path, default=Path("."),
                           help="Directory for images/ and report.html (default: current directory)")
    parse_cmd.add_argument("--tile-size", type=_positive_int, default=TILE_SIZE,
                           help=f"Tile edge length in pixels (default: {TILE_SIZE})")
    parse_cmd.add_argument("--check-collisions", action="store_true",
                           help="Verify pixels on every fingerprint match and log mismatches")
    parse_cmd.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    parse_cmd.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    info_cmd = subparsers.add_parser("info", help="Print image bounds")
    info_cmd.add_argument("--in", dest="source", type=Path, required=True, help="PNG to inspect")

    return parser


def run_parse(args: argparse.Namespace, logger: logging.Logger) -> int:
    settings = ParseSettings(
        tile_size=args.tile_size,
        output_dir=args.output_dir,
        check_collisions=args.check_collisions,
    )

    logger.info("=" * 60)
    logger.info(f"Source image: {args.source}")
    logger.info(f"Output dir:   {settings.output_dir}")
    logger.info(f"Tile size:    {settings.tile_size}")
    logger.info("=" * 60)

    image_set = ImageSet(args.source, settings)
    try:
        receipt = image_set.process()
    except LoadError:
        # Already logged by ImageSet.process(); no artifacts are written
        return EXIT_LOAD_ERROR

    export = write_image_files(image_set.proto_images, settings.images_dir)
    if not export.ok:
        logger.warning(f"{len(export.failures)} unique tile(s) could not be written")

    source_ref = os.path.relpath(Path(args.source).resolve(), settings.output_dir.resolve())
    try:
        write_report(image_set, settings.report_path, source_path=Path(source_ref).as_posix())
    except ReportError as e:
        logger.error("%s", e)

    logger.info(f"Texture cells:   {receipt.cells}")
    logger.info(f"Unique textures: {receipt.unique}")
    if settings.check_collisions:
        logger.info(f"Collisions:      {receipt.collisions}")
    return EXIT_OK


def run_info(args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        bounds = describe_image(args.source)
    except LoadError as e:
        logger.error("%s", e)
        return EXIT_LOAD_ERROR
    print(f"Image details: {bounds}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logger = setup_logger("", getattr(args, "log_file", None), level)

    if args.command == "parse":
        return run_parse(args, logger)
    return run_info(args, logger)


if __name__ == "__main__":
    sys.exit(main())

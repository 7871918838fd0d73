# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""Command line interface for Quadpress."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from PIL import Image

from quadpress import __version__
from quadpress.compress import compress
from quadpress.io import SUPPORTED_FORMATS, load_image, output_path, save_image
from quadpress.schema import DEFAULT_THRESHOLD, CompressionConfig

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='quadpress',
        description=f'Quadtree image compression {__version__}',
    )

    parser.add_argument(
        '-i', '--input',
        type=str,
        default='',
        help='Input file. Supported types: png, jpg, gif'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default='output',
        help='Output file name, without extension (default: output)'
    )

    parser.add_argument(
        '-f', '--format',
        type=str,
        default='',
        help='Format for the output file (png, jpg, gif). Defaults to the input format'
    )

    parser.add_argument(
        '-t', '--threshold',
        type=int,
        default=DEFAULT_THRESHOLD,
        help=f'Quality threshold (default: {DEFAULT_THRESHOLD})'
    )

    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help='Worker threads; 0 runs single-threaded (default: automatic)'
    )

    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print a JSON summary of the compression to stdout'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose logging'
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(message)s',
    )

    if not args.input:
        print("Missing input file parameter!", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    if args.format and args.format.lower() not in SUPPORTED_FORMATS:
        print(f"Invalid output file format! {args.format}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = CompressionConfig(threshold=args.threshold, workers=args.workers)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        pixels, input_format = load_image(args.input)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.error("Error decoding input image: %s", e)
        return 1

    height, width = pixels.shape[:2]
    logger.info("Image type: %s", input_format)
    logger.info("Resolution: %dx%d", width, height)
    logger.info("Threshold: %d", config.threshold)

    result = compress(pixels, config=config)
    logger.info(
        "Compression done! Took: %.3fs (%d regions)",
        result.elapsed_seconds, result.leaf_count,
    )

    out_format = args.format.lower() or input_format
    out_file = output_path(args.output, out_format)
    logger.info("Saving into %s ...", out_file)
    try:
        save_image(pixels, out_file, out_format)
    except (OSError, ValueError) as e:
        logger.error("Error encoding output file: %s", e)
        return 1

    if args.stats:
        print(result.to_json(indent=2))

    return 0


if __name__ == '__main__':
    sys.exit(main())

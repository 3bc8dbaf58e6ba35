"""
Command-line interface for SVG Ninja.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from svg_ninja.config import configure, load_settings
from svg_ninja.core.errors import SvgNinjaError
from svg_ninja.core.models import RawUpload, unwrap
from svg_ninja.pipeline import UploadPipeline, detect_svg_type
from svg_ninja.processing.dimensions import DimensionResolver
from svg_ninja.utils.io import load_svg_bytes, save_svg_bytes
from svg_ninja.utils.logger import get_logger, log_exception, setup_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="svg-ninja",
        description="Sanitize SVG and SVGZ files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration JSON file",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit log records as JSON lines",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file (rotated)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    clean = subparsers.add_parser("clean", help="Validate and clean an SVG/SVGZ file")
    clean.add_argument("input", type=str, help="SVG or SVGZ file to process")
    clean.add_argument(
        "--output", "-o",
        type=str,
        help="Where to write the result (defaults to overwriting the input)",
    )
    clean.add_argument(
        "--no-strip",
        action="store_true",
        help="Keep design-tool metadata and comments",
    )

    dimensions = subparsers.add_parser("dimensions", help="Print display and thumbnail size")
    dimensions.add_argument("input", type=str, help="SVG or SVGZ file")
    dimensions.add_argument("--json", action="store_true", help="Print JSON")

    check = subparsers.add_parser("check", help="Exit 0 if the file is a valid SVG/SVGZ")
    check.add_argument("input", type=str, help="SVG or SVGZ file")

    return parser.parse_args(argv)


def run_clean(args: argparse.Namespace, config: dict) -> int:
    overrides = {"admin_only": False}  # the command-line user owns the file
    if args.no_strip:
        overrides["strip_metadata"] = False

    pipeline = UploadPipeline(settings=configure(config, **overrides))
    input_path = Path(args.input)
    upload = RawUpload(load_svg_bytes(input_path), input_path.name)

    processed = unwrap(pipeline.process(upload))
    save_svg_bytes(processed.content, args.output or input_path)
    return 0


def run_dimensions(args: argparse.Namespace, config: dict) -> int:
    resolver = DimensionResolver(thumbnail_size=config["thumbnail_size"])
    dimensions = resolver.resolve(args.input)
    thumb = resolver.thumbnail(dimensions)

    if args.json:
        print(json.dumps({
            "width": dimensions.width,
            "height": dimensions.height,
            "default": dimensions.is_default,
            "thumbnail": {"width": thumb.width, "height": thumb.height},
        }))
    else:
        suffix = " (default)" if dimensions.is_default else ""
        print(f"{dimensions.width}x{dimensions.height}{suffix}, thumbnail {thumb.width}x{thumb.height}")
    return 0


def run_check(args: argparse.Namespace, config: dict) -> int:
    detected = detect_svg_type(Path(args.input).name, args.input)
    if detected is None:
        logger.error(f"{args.input}: not a valid SVG document")
        return 1
    print(f"{args.input}: {detected[1]} ({detected[0]})")
    return 0


COMMANDS = {
    "clean": run_clean,
    "dimensions": run_dimensions,
    "check": run_check,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_args(argv)

    try:
        config = load_settings(args.config)
    except (OSError, ValueError) as e:
        setup_logger("INFO")
        logger.error(f"Failed to load configuration: {e}")
        return 1

    setup_logger(
        "DEBUG" if args.verbose else config["log_level"],
        log_file=args.log_file,
        use_json=args.json_logs,
    )

    try:
        return COMMANDS[args.command](args, config)
    except SvgNinjaError as e:
        logger.error(f"{args.input}: {e}", extra={"kind": e.kind.value})
        return 1
    except OSError as e:
        log_exception(logger, e, context={"command": args.command, "input": args.input})
        return 1


if __name__ == "__main__":
    sys.exit(main())

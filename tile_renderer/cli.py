"""
Command-line interface for TileRenderer package.

Provides argparse-based CLI with subcommands for rendering a single tile,
batch rendering a directory of feature documents, and listing the
property-code table.

Usage:
    tile-renderer render --input features.yaml --output tile.png
    tile-renderer batch --input-dir tiles/ --output-dir out/ --parallel
    tile-renderer codes
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .api import render_features_file
from .batch import BatchTileRenderer
from .config import Config
from .constants import PropertyCode
from .exceptions import TileRendererError
from .logging_config import setup_logging

FEATURE_SUFFIXES = (".yaml", ".yml", ".json")


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments with verbose, quiet, log_file
    """
    if getattr(args, 'silent', False):
        verbosity = -2  # ERROR
    elif getattr(args, 'quiet', False):
        verbosity = -1  # WARNING
    elif getattr(args, 'verbose', False):
        verbosity = 1  # DEBUG
    else:
        verbosity = 0  # INFO

    setup_logging(verbosity=verbosity, log_file=getattr(args, 'log_file', None))


def load_config(config_path: Optional[str]) -> Config:
    """
    Load configuration from file, or defaults when no path is given.

    Exits with status 1 when the file cannot be loaded.
    """
    if config_path is None:
        return Config()

    try:
        return Config.load_from_file(config_path)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error loading config from {config_path}: {e}", file=sys.stderr)
        sys.exit(1)


def _apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    if getattr(args, "background_color", None) is not None:
        config.background_color = args.background_color
    if getattr(args, "width", None) is not None:
        config.canvas_width = args.width
    if getattr(args, "height", None) is not None:
        config.canvas_height = args.height
    if getattr(args, "dpi", None) is not None:
        config.default_dpi = args.dpi
    return config


def _cli_print(args: argparse.Namespace, *values: object, **kwargs) -> None:
    """Print unless --silent was provided."""
    if getattr(args, "silent", False):
        return
    print(*values, **kwargs)


def find_feature_files(input_dir: Path) -> List[Path]:
    """Feature documents directly inside ``input_dir``, sorted by name."""
    return sorted(
        p for p in Path(input_dir).iterdir()
        if p.is_file() and p.suffix.lower() in FEATURE_SUFFIXES
    )


def cmd_render(args: argparse.Namespace) -> int:
    """Handle 'render' subcommand."""
    _cli_print(args, f"Rendering tile: {args.input}")

    try:
        config = _apply_overrides(load_config(args.config), args)
        output_path = render_features_file(args.input, args.output, config)

        if getattr(args, "silent", False):
            print(str(output_path))
        else:
            print(f"Success! Tile saved to: {output_path}")
        return 0

    except (TileRendererError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_batch(args: argparse.Namespace) -> int:
    """Handle 'batch' subcommand."""
    input_dir = Path(args.input_dir)
    if not input_dir.is_dir():
        print(f"Error: input directory not found: {input_dir}", file=sys.stderr)
        return 1

    inputs = find_feature_files(input_dir)
    if not inputs:
        print(f"Error: no feature documents in {input_dir}", file=sys.stderr)
        return 1

    _cli_print(args, f"Rendering {len(inputs)} tiles from {input_dir}")

    try:
        config = _apply_overrides(load_config(args.config), args)
        batch = BatchTileRenderer(inputs, config=config, output_dir=Path(args.output_dir))
        result = batch.render_tiles(
            parallel=args.parallel,
            max_workers=args.workers,
            parallel_backend=args.backend,
            show_progress=not (getattr(args, "quiet", False) or getattr(args, "silent", False)),
        )
    except TileRendererError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    successful = len(result['successful_tiles'])
    total = successful + len(result['failed_tiles'])
    success_rate = successful / total * 100 if total > 0 else 0

    if getattr(args, "silent", False):
        print(str(args.output_dir))
    else:
        print("\nBatch rendering complete!")
        print(f"  Successful: {successful}/{total} ({success_rate:.1f}%)")
        print(f"  Total time: {result['total_time']:.1f}s")
        print(f"  Output directory: {args.output_dir}")

    if result['failed_tiles']:
        _cli_print(args, f"  Failed tiles: {result['failed_tiles']}")

    return 0 if successful > 0 else 1


def cmd_codes(args: argparse.Namespace) -> int:
    """Handle 'codes' subcommand: print the property-code table."""
    for code in PropertyCode:
        print(f"{code.value:5d}  {code.name}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="tile-renderer",
        description="Render classified map features into raster tiles",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    def _add_common_globalish_args(p: argparse.ArgumentParser) -> None:
        """Add args that users reasonably expect to work after subcommands too."""
        p.add_argument(
            "-v", "--verbose",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Enable DEBUG logging"
        )
        p.add_argument(
            "-q", "--quiet",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Suppress INFO logging (WARNING+ only)"
        )
        p.add_argument(
            "--silent",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Suppress most console output (prints only final output path(s))"
        )
        p.add_argument(
            "--background-color",
            type=str,
            default=argparse.SUPPRESS,
            help="Canvas background color (Matplotlib color spec, e.g. '#f2efe9' or 'white')",
        )
        p.add_argument(
            "--log-file",
            type=str,
            default=argparse.SUPPRESS,
            help="Write logs to file"
        )

    def _add_canvas_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", type=str, help="Config file path (YAML/JSON)")
        p.add_argument("--width", type=int, help="Override canvas width in pixels")
        p.add_argument("--height", type=int, help="Override canvas height in pixels")
        p.add_argument("--dpi", type=int, help="Override DPI setting")

    _add_common_globalish_args(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========================================================================
    # render subcommand
    # ========================================================================
    parser_render = subparsers.add_parser(
        "render",
        help="Render a single feature document to an image"
    )
    _add_common_globalish_args(parser_render)
    parser_render.add_argument(
        "--input",
        type=str,
        required=True,
        help="Feature document (YAML/JSON)"
    )
    parser_render.add_argument(
        "--output",
        type=str,
        required=True,
        help="Output image path"
    )
    _add_canvas_args(parser_render)
    parser_render.set_defaults(func=cmd_render)

    # ========================================================================
    # batch subcommand
    # ========================================================================
    parser_batch = subparsers.add_parser(
        "batch",
        help="Render every feature document in a directory"
    )
    _add_common_globalish_args(parser_batch)
    parser_batch.add_argument(
        "--input-dir",
        type=str,
        required=True,
        help="Directory containing .yaml/.yml/.json feature documents"
    )
    parser_batch.add_argument(
        "--output-dir",
        type=str,
        default="tiles",
        help="Output directory for tiles (default: tiles/)"
    )
    parser_batch.add_argument(
        "--parallel",
        action="store_true",
        help="Render tiles in parallel"
    )
    parser_batch.add_argument(
        "--workers",
        type=int,
        help="Number of parallel workers"
    )
    parser_batch.add_argument(
        "--backend",
        choices=["thread", "process"],
        default="thread",
        help="Parallel backend (default: thread)"
    )
    _add_canvas_args(parser_batch)
    parser_batch.set_defaults(func=cmd_batch)

    # ========================================================================
    # codes subcommand
    # ========================================================================
    parser_codes = subparsers.add_parser(
        "codes",
        help="List the property-code table"
    )
    parser_codes.set_defaults(func=cmd_codes)

    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    setup_logging_from_args(args)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

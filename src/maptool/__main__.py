"""
Command-line entry point for maptool.
Usage: python -m maptool [-gen_lua | -gen_cxx] [-v] [--root DIR]

Without a mode the Lua manifest is printed to stdout and nothing is written.
"""

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .errors import MapToolError
from .pipeline import GenerationMode, MapToolPipeline
from .settings import (
    DEFAULT_MARKER_FILE,
    DEFAULT_MAX_LEVELS,
    ConfigError,
    ToolSettings,
    find_project_root,
)
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="maptool",
        description="Generate the asset manifest or map-data module from Tiled maps.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-gen_lua",
        dest="mode",
        action="store_const",
        const=GenerationMode.MANIFEST,
        help="Write the Lua asset manifest",
    )
    mode.add_argument(
        "-gen_cxx",
        dest="mode",
        action="store_const",
        const=GenerationMode.MODULE,
        help="Write the C++ map-data header and source",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory to start the project root search from (default: current directory)",
    )
    parser.add_argument(
        "--marker",
        default=DEFAULT_MARKER_FILE,
        help=f"File identifying the project root (default: {DEFAULT_MARKER_FILE})",
    )
    parser.add_argument(
        "--max-levels",
        type=int,
        default=DEFAULT_MAX_LEVELS,
        help=f"Parent directories to search for the root (default: {DEFAULT_MAX_LEVELS})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    # Console logging until the project settings are known
    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(f"{__name__}.main")

    try:
        project_root = find_project_root(args.root, args.marker, args.max_levels)
        settings = ToolSettings(project_root)
        setup_logging(settings, verbose=args.verbose)
        logger.debug(f"Project root: {project_root}")

        validation = settings.validate()
        for warning in validation.warnings:
            logger.warning(warning)
        if not validation.is_valid:
            logger.error("Configuration validation failed:")
            for error in validation.errors:
                logger.error(f"  {error}")
            return 1

        pipeline = MapToolPipeline(settings.to_pipeline_config())
        if args.mode is None:
            buffer = io.StringIO()
            pipeline.generate_manifest(buffer)
            sys.stdout.write(buffer.getvalue())
            sys.stdout.flush()
        else:
            written = pipeline.run(args.mode)
            logger.info(f"Generated {', '.join(path.name for path in written)}")
        return 0

    except (MapToolError, ConfigError) as e:
        logger.error(str(e))
        return 1
    except Exception:
        logger.exception("Unhandled exception in main")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Main CLI entry point for yeson."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..cli.convert import json_to_yeson, yeson_to_json
from ..cli.inspect import inspect_file
from ..exceptions import YesonError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the yeson CLI."""
    parser = argparse.ArgumentParser(
        prog="yeson",
        description="yeson: compact binary serialization for dynamic values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  yeson --from-json data.json -o data.yeson    Encode a JSON document
  yeson --to-json data.yeson                   Print a yeson file as JSON
  yeson --to-json data.yeson -o data.json      Write a yeson file as JSON
  yeson --inspect data.yeson                   Show a per-value breakdown
  yeson --version                              Show version
        """,
    )

    command = parser.add_mutually_exclusive_group()
    command.add_argument(
        "--from-json",
        metavar="FILE",
        type=str,
        help="Encode a JSON file to yeson (requires -o)",
    )
    command.add_argument(
        "--to-json",
        metavar="FILE",
        type=str,
        help="Decode a yeson file to indented JSON",
    )
    command.add_argument(
        "--inspect",
        metavar="FILE",
        type=str,
        help="Show the header, type and size of every encoded value",
    )

    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        type=str,
        help="Output path for --from-json / --to-json",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"yeson {__version__}",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the yeson CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    input_arg = args.from_json or args.to_json or args.inspect
    if input_arg is None:
        # If no command specified, show help
        parser.print_help()
        return 0

    input_path = Path(input_arg)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else None

    try:
        if args.from_json:
            if output_path is None:
                print("Error: --from-json requires -o/--output", file=sys.stderr)
                return 1
            size = json_to_yeson(input_path, output_path)
            print(f"Wrote {size} bytes to {output_path}")
        elif args.to_json:
            text = yeson_to_json(input_path, output_path)
            if output_path is None:
                print(text)
        else:
            inspect_file(input_path)
    except (YesonError, OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""CLI entry point for pagelookup."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="pagelookup",
        description="Page lookup - quick search, backlinks and media usage over a wiki index",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="TOML configuration file")
    parser.add_argument("--index", type=Path, help="Index snapshot file (overrides config)")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline details to stderr",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    subparsers = parser.add_subparsers(dest="command", required=False)

    lookup_parser = subparsers.add_parser("lookup", help="Quick search for pages")
    commands.add_lookup_arguments(lookup_parser)

    backlinks_parser = subparsers.add_parser("backlinks", help="Pages linking to a page")
    commands.add_reference_arguments(backlinks_parser, "Page id")

    mediause_parser = subparsers.add_parser("mediause", help="Pages using a media file")
    commands.add_reference_arguments(mediause_parser, "Media id")

    return parser


def configure_logging(verbose: bool) -> None:
    """Route loguru output to stderr at the requested verbosity."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = Config.from_env_or_file(args.config)
        if args.index is not None:
            config.index_path = args.index

        if args.command == "lookup":
            commands.handle_lookup(args, config)
        elif args.command == "backlinks":
            commands.handle_backlinks(args, config)
        elif args.command == "mediause":
            commands.handle_mediause(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Backlink and media usage commands for pagelookup CLI."""

import json

from ...core.config import Config
from ...services import ServiceContainer


def add_reference_arguments(parser, id_help: str) -> None:
    """Add arguments for reference commands.

    Args:
        parser: Argument parser for the command.
        id_help: Help text for the positional id.
    """
    parser.add_argument("id", help=id_help)
    parser.add_argument(
        "--ignore-perms",
        action="store_true",
        help="Include hidden and read-protected pages",
    )


def handle_backlinks(args, config: Config) -> None:
    """Handle backlinks command."""
    with ServiceContainer(config) as services:
        pages = services.search.backlinks(args.id, ignore_permissions=args.ignore_perms)
    _print_pages(pages, f"Backlinks of {args.id}", args.json)


def handle_mediause(args, config: Config) -> None:
    """Handle mediause command."""
    with ServiceContainer(config) as services:
        pages = services.search.media_users(args.id, ignore_permissions=args.ignore_perms)
    _print_pages(pages, f"Pages using {args.id}", args.json)


def _print_pages(pages: list[str], title: str, as_json: bool) -> None:
    if as_json:
        print(json.dumps(pages, indent=2))
        return

    print(f"\n{title} ({len(pages)})")
    print("=" * 70)
    if not pages:
        print("No pages found.")
        return
    for page_id in pages:
        print(f"- {page_id}")

"""Quick search command for pagelookup CLI."""

import json

from ...core.config import Config
from ...core.types import RankedPage
from ...services import ServiceContainer


def add_lookup_arguments(parser) -> None:
    """Add arguments for the lookup command.

    Args:
        parser: Argument parser for the command.
    """
    parser.add_argument("query", help="Search query (supports ns:namespace)")
    parser.add_argument(
        "-n",
        "--in-ns",
        action="store_true",
        default=None,
        help="Match the namespace part of page ids as well",
    )
    parser.add_argument(
        "-t",
        "--in-title",
        action="store_true",
        default=None,
        help="Also match page titles",
    )
    parser.add_argument(
        "--after",
        help="Only pages modified at or after this time (epoch or date expression)",
    )
    parser.add_argument(
        "--before",
        help="Only pages modified at or before this time (epoch or date expression)",
    )


def handle_lookup(args, config: Config) -> None:
    """Handle lookup command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    with ServiceContainer(config) as services:
        results = services.search.page_lookup(
            args.query,
            in_namespace=args.in_ns,
            in_title=args.in_title,
            after=args.after,
            before=args.before,
        )

    if args.json:
        print(json.dumps([{"id": p.page_id, "title": p.title} for p in results], indent=2))
    else:
        _print_lookup_results(results)


def _print_lookup_results(results: list[RankedPage]) -> None:
    """Print lookup results in a formatted way."""
    print(f"\nPage Lookup Results ({len(results)})")
    print("=" * 70)

    if not results:
        print("No results found.")
        return

    for rank, page in enumerate(results, 1):
        print(f"{rank}. {page.page_id}")
        if page.title:
            print(f"   Title: {page.title}")

"""Deterministic ordering of lookup results.

Shallower pages rank first, so ``wiki`` comes before ``wiki:syntax``
which comes before ``wiki:syntax:tables``. Pages at the same depth are
ordered by their id.
"""

from typing import Mapping

from ..core.types import RankedPage
from .ids import namespace_depth


def page_sort_key(page_id: str) -> tuple[int, str]:
    """Sort key: namespace depth first, then the raw id."""
    return namespace_depth(page_id), page_id


def rank_pages(results: Mapping[str, str]) -> list[RankedPage]:
    """Order filtered results by depth, then id.

    Args:
        results: Mapping of page id to display title.

    Returns:
        RankedPage list in final display order.
    """
    return [
        RankedPage(page_id=page_id, title=results[page_id], depth=namespace_depth(page_id))
        for page_id in sorted(results, key=page_sort_key)
    ]

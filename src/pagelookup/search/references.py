"""Backlink and media-usage lookups.

Both queries read a single relation from the metadata index, drop pages
the user may not see and return the remaining page ids sorted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import Relation

if TYPE_CHECKING:
    from .filters import ResultFilter
    from .ports import IndexReader


class ReferenceLookup:
    """Find pages that reference a page or use a media file.

    Example:
        >>> refs = ReferenceLookup(index, ResultFilter(gate))
        >>> refs.backlinks("wiki:syntax")
        ['start', 'wiki:welcome']
    """

    def __init__(self, index: "IndexReader", result_filter: "ResultFilter"):
        self.index = index
        self.result_filter = result_filter

    def backlinks(self, page_id: str, ignore_permissions: bool = False) -> list[str]:
        """Pages that link to ``page_id``.

        Args:
            page_id: Target page.
            ignore_permissions: Include hidden and read-protected pages.
                Only an actual ``True`` bypasses the checks; non-existent
                pages are always dropped.

        Returns:
            Sorted list of page ids.
        """
        return self._lookup(Relation.REFERENCES, page_id, ignore_permissions)

    def media_users(self, media_id: str, ignore_permissions: bool = False) -> list[str]:
        """Pages that embed or link the media file ``media_id``.

        Args:
            media_id: Media file id.
            ignore_permissions: Include hidden and read-protected pages.
                Only an actual ``True`` bypasses the checks.

        Returns:
            Sorted list of page ids.
        """
        return self._lookup(Relation.MEDIA, media_id, ignore_permissions)

    def _lookup(self, relation: Relation, value: str, ignore_permissions: bool) -> list[str]:
        found = self.index.lookup_key(relation.value, value)
        if not found:
            return []

        if not isinstance(ignore_permissions, bool):
            logger.warning(
                f"Non-boolean ignore_permissions={ignore_permissions!r} "
                f"for {relation.value} lookup, applying permissions"
            )

        kept = self.result_filter.filter_access(found, ignore_permissions=ignore_permissions)
        logger.debug(f"{relation.value} lookup for {value!r}: {len(kept)} of {len(found)} pages")
        return sorted(kept)

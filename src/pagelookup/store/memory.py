"""In-memory metadata index and access gate.

The index is populated once from page records and is read-only afterwards;
it implements the IndexReader, HeadingSource and TimeSource ports.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from ..core.exceptions import PageLookupError
from ..core.types import AclLevel, Relation

if TYPE_CHECKING:
    from ..search.ports import TitleMatcher


@dataclass
class PageRecord:
    """Everything the index knows about one page.

    Attributes:
        page_id: Cleaned page id.
        title: First heading of the page.
        modified: Last modification as epoch seconds.
        exists: False for pages that were deleted but are still indexed.
        acl: Permission level of the current user on this page.
        references: Page ids this page links to.
        media: Media ids this page uses.
    """

    page_id: str
    title: str | None = None
    modified: float = 0.0
    exists: bool = True
    acl: AclLevel = AclLevel.READ
    references: list[str] = field(default_factory=list)
    media: list[str] = field(default_factory=list)


class InMemoryIndex:
    """Metadata index held in memory.

    Example:
        >>> index = InMemoryIndex([PageRecord("wiki:start", title="Welcome")])
        >>> index.lookup_key("title", "Welcome")
        {'wiki:start': 'Welcome'}
    """

    def __init__(self, records: Iterable[PageRecord] = ()):
        self._pages: dict[str, PageRecord] = {}
        # relation -> page id -> indexed values
        self._metadata: dict[str, dict[str, list[str]]] = {
            relation.value: {} for relation in Relation
        }
        for record in records:
            self._load(record)

    def _load(self, record: PageRecord) -> None:
        if record.page_id in self._pages:
            raise PageLookupError(f"Duplicate page in index: {record.page_id}")
        self._pages[record.page_id] = record
        if record.title:
            self._metadata[Relation.TITLE.value][record.page_id] = [record.title]
        if record.references:
            self._metadata[Relation.REFERENCES.value][record.page_id] = list(record.references)
        if record.media:
            self._metadata[Relation.MEDIA.value][record.page_id] = list(record.media)

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page_id: object) -> bool:
        return page_id in self._pages

    def get(self, page_id: str) -> PageRecord | None:
        """Return the record for a page, or None if it is not indexed."""
        return self._pages.get(page_id)

    def lookup_key(
        self,
        key: str,
        value: str,
        matcher: "TitleMatcher | None" = None,
    ) -> dict[str, str]:
        """Find pages whose ``key`` metadata matches ``value``.

        Args:
            key: Relation name.
            value: Value to look for.
            matcher: Optional predicate ``matcher(value, indexed)``; exact
                equality when omitted.

        Returns:
            Mapping of page id to the first indexed value that matched.
        """
        result: dict[str, str] = {}
        for page_id, indexed_values in self._metadata.get(key, {}).items():
            for indexed in indexed_values:
                matched = matcher(value, indexed) if matcher is not None else indexed == value
                if matched:
                    result[page_id] = indexed
                    break
        return result

    def list_all_pages(self) -> list[str]:
        """Return every indexed page id in load order."""
        return list(self._pages)

    def first_heading(self, page_id: str) -> str | None:
        """Return the page title, or None when unknown."""
        record = self._pages.get(page_id)
        return record.title if record else None

    def modification_time(self, page_id: str) -> float:
        """Return the last modification time of an indexed page.

        Raises:
            PageLookupError: If the page is not indexed.
        """
        record = self._pages.get(page_id)
        if record is None:
            raise PageLookupError(f"No modification time for unindexed page: {page_id}")
        return record.modified


class SnapshotAccessGate:
    """AccessGate answering from page records and a hidden-page pattern.

    A page is hidden when ``hidden_pages`` matches ``":" + page_id``
    (case-insensitive), so ``^:playground:`` hides a whole namespace.
    """

    def __init__(self, index: InMemoryIndex, hidden_pages: str = ""):
        self.index = index
        self._hidden = re.compile(hidden_pages, re.IGNORECASE) if hidden_pages else None

    def is_visible(self, page_id: str) -> bool:
        if self._hidden is None:
            return True
        return self._hidden.search(":" + page_id) is None

    def exists(self, page_id: str) -> bool:
        record = self.index.get(page_id)
        return record is not None and record.exists

    def acl_level(self, page_id: str) -> AclLevel:
        """Permission level on a page; NONE for unindexed pages."""
        record = self.index.get(page_id)
        return record.acl if record is not None else AclLevel.NONE

    def is_readable(self, page_id: str) -> bool:
        return self.acl_level(page_id) >= AclLevel.READ

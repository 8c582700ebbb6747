"""Candidate matching for page lookups.

Builds the unfiltered candidate set for a query: pages whose id contains
the cleaned query text, plus (optionally) pages whose title contains it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import Relation, StructuredQuery
from .ids import clean_id, in_namespace, strip_leading_namespace

if TYPE_CHECKING:
    from .ports import HeadingSource, IdCleaner, IndexReader, TitleMatcher


def title_contains(search: str, title: str) -> bool:
    """Case-insensitive substring test of ``search`` within ``title``."""
    return search.casefold() in title.casefold()


class MatchEngine:
    """Produce candidate pages for a structured query.

    Candidates are returned as an insertion-ordered mapping of page id to
    display title. A page found by more than one pass keeps the entry from
    the first pass that found it.

    Example:
        >>> engine = MatchEngine(index, index)
        >>> engine.match(parse_query("syntax", in_title=True))
        {'wiki:syntax': 'Formatting Syntax', ...}
    """

    def __init__(
        self,
        index: "IndexReader",
        headings: "HeadingSource",
        cleaner: "IdCleaner" = clean_id,
        title_matcher: "TitleMatcher" = title_contains,
    ):
        """Initialize the match engine.

        Args:
            index: Metadata index to read page ids and titles from.
            headings: Source of display titles for matched pages.
            cleaner: Canonicalization applied to the query text and scopes.
            title_matcher: Predicate used for title matching, called as
                ``title_matcher(search, title)``.
        """
        self.index = index
        self.headings = headings
        self.cleaner = cleaner
        self.title_matcher = title_matcher

    def match(self, query: StructuredQuery) -> dict[str, str]:
        """Find candidate pages for a query.

        Args:
            query: Parsed query.

        Returns:
            Mapping of page id to display title, in discovery order.
        """
        text = query.text
        cleaned = self.cleaner(text)
        pages: dict[str, str] = {}

        # An empty needle would match every page
        if text and cleaned:
            self._match_ids(cleaned, query.in_namespace, pages)
            if query.in_title:
                self._match_titles(cleaned, pages)
        else:
            logger.debug(f"Match: query {text!r} cleans to nothing, skipping")

        if query.namespace_scope is not None or query.excluded_namespaces:
            pages = self._apply_scope(query, pages)

        logger.debug(f"Match: {len(pages)} candidates for {text!r}")
        return pages

    def _match_ids(self, cleaned: str, full_id: bool, pages: dict[str, str]) -> None:
        for page_id in self.index.list_all_pages():
            key = page_id if full_id else strip_leading_namespace(page_id)
            if cleaned in key:
                self._add(page_id, pages)

    def _match_titles(self, cleaned: str, pages: dict[str, str]) -> None:
        found = self.index.lookup_key(Relation.TITLE.value, cleaned, self.title_matcher)
        logger.debug(f"Match: {len(found)} title matches for {cleaned!r}")
        for page_id in found:
            self._add(page_id, pages)

    def _add(self, page_id: str, pages: dict[str, str]) -> None:
        if page_id not in pages:
            pages[page_id] = self.headings.first_heading(page_id) or ""

    def _apply_scope(self, query: StructuredQuery, pages: dict[str, str]) -> dict[str, str]:
        scope = query.namespace_scope
        if scope is not None:
            namespace = self.cleaner(scope)
            pages = {
                page_id: title
                for page_id, title in pages.items()
                if in_namespace(page_id, namespace)
            }

        for excluded in query.excluded_namespaces:
            namespace = self.cleaner(excluded)
            if not namespace:
                continue
            pages = {
                page_id: title
                for page_id, title in pages.items()
                if not in_namespace(page_id, namespace)
            }

        return pages

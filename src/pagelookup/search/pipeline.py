"""Page lookup pipeline.

This module wires the lookup stages together:

1. **Parse**: split the raw query into namespace scope and terms
2. **Match**: collect pages whose id (or title) contains the query
3. **Filter**: drop hidden, missing, unreadable and out-of-range pages
4. **Rank**: order by namespace depth, then id

A caller-supplied override can replace the whole computation or
post-process its result.

Typical usage:

    from pagelookup.search.pipeline import PageLookupPipeline
    from pagelookup.store import load_snapshot

    index, gate = load_snapshot(Path("index.yaml"))
    pipeline = PageLookupPipeline(index, gate)

    pages = pipeline.lookup("ns:wiki syn", in_title=True, after="-1 month")
    links = pipeline.backlinks("wiki:syntax")

See Also:
    - `pagelookup.search.matching.MatchEngine`
    - `pagelookup.search.filters.ResultFilter`
    - `pagelookup.search.ranking.rank_pages`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import RankedPage, TimeBound
from .dates import resolve_date
from .filters import ResultFilter
from .ids import clean_id
from .matching import MatchEngine, title_contains
from .query import parse_query
from .ranking import rank_pages
from .references import ReferenceLookup

if TYPE_CHECKING:
    from .ports import (
        AccessGate,
        DateResolver,
        HeadingSource,
        IdCleaner,
        IndexReader,
        LookupOverride,
        TimeSource,
        TitleMatcher,
    )


@dataclass
class LookupRequest:
    """Parameters of a single page lookup.

    Overrides receive this object and may change it before calling the
    default computation.

    Attributes:
        query: Raw query text.
        in_namespace: Match the query against the full id.
        in_title: Also match page titles.
        after: Only pages modified at or after this bound.
        before: Only pages modified at or before this bound.
    """

    query: str
    in_namespace: bool = False
    in_title: bool = False
    after: TimeBound = None
    before: TimeBound = None


class PageLookupPipeline:
    """Quick search for pages by id and title.

    The pipeline holds no per-request state; one instance can serve any
    number of lookups as long as its collaborators allow concurrent reads.

    Example:
        >>> pipeline = PageLookupPipeline(index, gate)
        >>> [p.page_id for p in pipeline.lookup("b")]
        ['a:b', 'a:b:c']
    """

    def __init__(
        self,
        index: "IndexReader",
        gate: "AccessGate",
        headings: "HeadingSource | None" = None,
        times: "TimeSource | None" = None,
        cleaner: "IdCleaner" = clean_id,
        title_matcher: "TitleMatcher" = title_contains,
        date_resolver: "DateResolver" = resolve_date,
        override: "LookupOverride | None" = None,
    ):
        """Initialize the pipeline.

        Args:
            index: Metadata index reader.
            gate: Visibility, existence and permission checks.
            headings: Display titles. Defaults to ``index``.
            times: Modification times. Defaults to ``index``.
            cleaner: Canonicalization for query text.
            title_matcher: Title relevance predicate.
            date_resolver: Resolver for free-form time bounds.
            override: Optional hook replacing or wrapping the default lookup.
        """
        self.index = index
        self.gate = gate
        self.override = override
        self.match_engine = MatchEngine(
            index,
            headings if headings is not None else index,
            cleaner=cleaner,
            title_matcher=title_matcher,
        )
        self.result_filter = ResultFilter(
            gate,
            times if times is not None else index,
            date_resolver=date_resolver,
        )
        self.references = ReferenceLookup(index, self.result_filter)

    def lookup(
        self,
        query: str,
        in_namespace: bool = False,
        in_title: bool = False,
        after: TimeBound = None,
        before: TimeBound = None,
    ) -> list[RankedPage]:
        """Look up pages matching a query.

        By default only the id without its leading namespace is matched;
        ``in_namespace`` matches the full id and ``in_title`` adds title
        matches.

        Args:
            query: Raw query text, may contain ``ns:`` scopes.
            in_namespace: Match against the full page id.
            in_title: Also search page titles.
            after: Only pages modified at or after this time.
            before: Only pages modified at or before this time.

        Returns:
            Ranked pages, shallowest first.
        """
        request = LookupRequest(
            query=query,
            in_namespace=in_namespace,
            in_title=in_title,
            after=after,
            before=before,
        )
        if self.override is not None:
            logger.debug(f"Page lookup for {query!r} handed to override")
            return self.override(request, self.default_lookup)
        return self.default_lookup(request)

    def default_lookup(self, request: LookupRequest) -> list[RankedPage]:
        """Run parse, match, filter and rank for a request."""
        parsed = parse_query(
            request.query,
            in_title=request.in_title,
            in_namespace=request.in_namespace,
            after=request.after,
            before=request.before,
        )
        candidates = self.match_engine.match(parsed)
        filtered = self.result_filter.apply(candidates, parsed.after, parsed.before)
        ranked = rank_pages(filtered)

        logger.debug(
            f"Page lookup {request.query!r}: {len(candidates)} candidates, "
            f"{len(ranked)} results"
        )
        return ranked

    def backlinks(self, page_id: str, ignore_permissions: bool = False) -> list[str]:
        """Pages linking to ``page_id``, sorted."""
        return self.references.backlinks(page_id, ignore_permissions=ignore_permissions)

    def media_users(self, media_id: str, ignore_permissions: bool = False) -> list[str]:
        """Pages using the media file ``media_id``, sorted."""
        return self.references.media_users(media_id, ignore_permissions=ignore_permissions)

"""Port definitions for the page lookup pipeline.

This module defines the interfaces (ports) the lookup core depends on.
The core only reads through them; building or updating the index lives
elsewhere. Programming against these protocols keeps the pipeline testable
with in-memory fakes and lets the host application plug in its own index,
permission system and clock.

Protocols defined:
    - IndexReader: Key/value metadata index lookups and the page list
    - HeadingSource: First heading (display title) of a page
    - AccessGate: Visibility, existence and read-permission checks
    - TimeSource: Last modification time of a page
    - DateResolver: Free-form date expression to epoch seconds
    - IdCleaner: Raw text to canonical page id
    - TitleMatcher: Title relevance predicate
    - LookupOverride: Replacement or post-processing of a whole lookup

Usage:
    from pagelookup.search.ports import AccessGate

    class PublicWikiGate:
        def is_visible(self, page_id: str) -> bool:
            return not page_id.startswith("playground:")

        def exists(self, page_id: str) -> bool:
            return True

        def is_readable(self, page_id: str) -> bool:
            return True

    gate: AccessGate = PublicWikiGate()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from pagelookup.core.types import RankedPage
    from pagelookup.search.pipeline import LookupRequest


# (search, indexed_value) -> bool
TitleMatcher = Callable[[str, str], bool]


@runtime_checkable
class IndexReader(Protocol):
    """Read access to the metadata index.

    Example implementation: InMemoryIndex loaded from a snapshot file.
    """

    def lookup_key(
        self,
        key: str,
        value: str,
        matcher: TitleMatcher | None = None,
    ) -> dict[str, str]:
        """Find pages whose metadata ``key`` matches ``value``.

        Args:
            key: Relation name, e.g. ``relation_references`` or ``title``.
            value: Value to look for.
            matcher: Optional predicate called as ``matcher(value, indexed)``.
                Exact equality is used when omitted.

        Returns:
            Mapping of page id to the indexed value that matched.
        """
        ...

    def list_all_pages(self) -> Sequence[str]:
        """Return every page id known to the index."""
        ...


@runtime_checkable
class HeadingSource(Protocol):
    """Display titles for pages."""

    def first_heading(self, page_id: str) -> str | None:
        """Return the first heading of a page, or None if it has none."""
        ...


@runtime_checkable
class AccessGate(Protocol):
    """Page visibility and permission checks."""

    def is_visible(self, page_id: str) -> bool:
        """False for pages hidden from listings and search."""
        ...

    def exists(self, page_id: str) -> bool:
        """True when the page currently exists."""
        ...

    def is_readable(self, page_id: str) -> bool:
        """True when the current user holds at least read permission."""
        ...


@runtime_checkable
class TimeSource(Protocol):
    """Page modification times."""

    def modification_time(self, page_id: str) -> float:
        """Last modification of a page as epoch seconds."""
        ...


@runtime_checkable
class DateResolver(Protocol):
    """Free-form date/time expression resolution."""

    def __call__(self, expression: str) -> float | None:
        """Resolve an expression to epoch seconds, None if unparseable."""
        ...


@runtime_checkable
class IdCleaner(Protocol):
    """Canonicalization of raw text into a page id."""

    def __call__(self, raw: str) -> str:
        """Return the cleaned id, possibly empty."""
        ...


@runtime_checkable
class LookupOverride(Protocol):
    """Hook that may replace or post-process a page lookup.

    The override receives the request and the default computation. It can
    return its own result without calling ``default`` (short-circuit), or
    call ``default`` and adjust what it returns. The request may also be
    modified before it is handed to ``default``.

    Example:
        def only_wiki(request, default):
            return [p for p in default(request) if p.page_id.startswith("wiki:")]
    """

    def __call__(
        self,
        request: "LookupRequest",
        default: Callable[["LookupRequest"], list["RankedPage"]],
    ) -> list["RankedPage"]:
        ...

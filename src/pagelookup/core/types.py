"""Type definitions for pagelookup."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Union

NAMESPACE_SEPARATOR = ":"

# Epoch seconds, a datetime, a free-form date expression, or unset.
TimeBound = Union[int, float, str, datetime, None]


class AclLevel(IntEnum):
    """Permission levels a user can hold on a page."""

    NONE = 0
    READ = 1
    EDIT = 2
    CREATE = 4
    UPLOAD = 8
    DELETE = 16
    ADMIN = 255


class Relation(str, Enum):
    """Relation names stored in the metadata index."""

    TITLE = "title"
    REFERENCES = "relation_references"
    MEDIA = "relation_media"


@dataclass
class StructuredQuery:
    """A raw query split into namespace scope and highlight terms.

    Attributes:
        namespaces: Namespaces the query was scoped to (`ns:foo`, `@foo`).
        excluded_namespaces: Namespaces excluded (`-ns:foo`, `^foo`).
        highlight: Search terms and phrases, in query order.
        excluded_terms: Terms prefixed with `-`.
        in_title: Also match page titles.
        in_namespace: Match the full id instead of the id without its
            leading namespace.
        after: Only keep pages modified at or after this bound.
        before: Only keep pages modified at or before this bound.
    """

    namespaces: list[str] = field(default_factory=list)
    excluded_namespaces: list[str] = field(default_factory=list)
    highlight: list[str] = field(default_factory=list)
    excluded_terms: list[str] = field(default_factory=list)
    in_title: bool = False
    in_namespace: bool = False
    after: TimeBound = None
    before: TimeBound = None

    @property
    def namespace_scope(self) -> str | None:
        """First namespace the query was scoped to, if any."""
        return self.namespaces[0] if self.namespaces else None

    @property
    def text(self) -> str:
        """Highlight terms joined back into a single string."""
        return " ".join(self.highlight)

    @property
    def is_empty(self) -> bool:
        """True when the query carries neither terms nor a scope."""
        return not self.highlight and not self.namespaces


@dataclass(frozen=True)
class RankedPage:
    """A page in the final, ordered lookup result."""

    page_id: str
    title: str
    depth: int


def ranked_as_dict(pages: list[RankedPage]) -> dict[str, str]:
    """Convert ranked pages back into an ordered id -> title mapping."""
    return {page.page_id: page.title for page in pages}

"""Page lookup pipeline: query parsing, matching, filtering and ranking.

Typical usage:

    from pagelookup.search import PageLookupPipeline

    pipeline = PageLookupPipeline(index, gate)
    pages = pipeline.lookup("ns:wiki syntax", in_title=True)
"""

from .filters import ResultFilter, resolve_time_bound
from .ids import clean_id, get_namespace, in_namespace, namespace_depth, strip_leading_namespace
from .matching import MatchEngine, title_contains
from .pipeline import LookupRequest, PageLookupPipeline
from .query import parse_query
from .ranking import page_sort_key, rank_pages
from .references import ReferenceLookup

__all__ = [
    "PageLookupPipeline",
    "LookupRequest",
    "MatchEngine",
    "ResultFilter",
    "ReferenceLookup",
    "parse_query",
    "rank_pages",
    "page_sort_key",
    "resolve_time_bound",
    "title_contains",
    "clean_id",
    "get_namespace",
    "in_namespace",
    "namespace_depth",
    "strip_leading_namespace",
]

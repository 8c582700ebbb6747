"""Service layer for pagelookup.

This module provides the high-level entry points used by the CLI and by
host applications embedding the lookup core.

Example usage:

    from pagelookup.services import ServiceContainer

    with ServiceContainer(config) as services:
        pages = services.search.page_lookup("ns:wiki syntax", in_title=True)
        links = services.search.backlinks("wiki:syntax")
"""

from .container import ServiceContainer
from .search import SearchService

__all__ = [
    "ServiceContainer",
    "SearchService",
]

"""Search service for page lookups and reference queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import RankedPage, TimeBound

if TYPE_CHECKING:
    from .container import ServiceContainer


class SearchService:
    """Service for page search operations.

    This service provides a unified interface for:
    - Quick search of pages by id and title
    - Backlinks of a page
    - Pages using a media file

    Example:

        with ServiceContainer(config) as services:
            pages = services.search.page_lookup("syntax", in_title=True)
            links = services.search.backlinks("wiki:syntax")
            users = services.search.media_users("wiki:logo.png")
    """

    def __init__(self, container: "ServiceContainer"):
        """Initialize SearchService.

        Args:
            container: Service container with shared resources.
        """
        self._container = container

    def page_lookup(
        self,
        query: str,
        in_namespace: bool | None = None,
        in_title: bool | None = None,
        after: TimeBound = None,
        before: TimeBound = None,
    ) -> list[RankedPage]:
        """Quick search for pages.

        Args:
            query: Raw query text.
            in_namespace: Match the full id (default from config).
            in_title: Also match titles (default from config).
            after: Only pages modified at or after this time.
            before: Only pages modified at or before this time.

        Returns:
            Ranked pages, shallowest first.
        """
        defaults = self._container.config.lookup
        if in_namespace is None:
            in_namespace = defaults.in_namespace
        if in_title is None:
            in_title = defaults.in_title

        logger.debug(
            f"Page lookup: query={query!r}, in_namespace={in_namespace}, "
            f"in_title={in_title}, after={after!r}, before={before!r}"
        )

        results = self._container.pipeline.lookup(
            query,
            in_namespace=in_namespace,
            in_title=in_title,
            after=after,
            before=before,
        )

        logger.debug(f"Page lookup returned {len(results)} results")
        return results

    def backlinks(self, page_id: str, ignore_permissions: bool = False) -> list[str]:
        """Pages linking to ``page_id``, sorted by id."""
        logger.debug(f"Backlinks: page={page_id!r}, ignore_permissions={ignore_permissions!r}")
        return self._container.pipeline.backlinks(page_id, ignore_permissions=ignore_permissions)

    def media_users(self, media_id: str, ignore_permissions: bool = False) -> list[str]:
        """Pages using the media file ``media_id``, sorted by id."""
        logger.debug(f"Media usage: media={media_id!r}, ignore_permissions={ignore_permissions!r}")
        return self._container.pipeline.media_users(media_id, ignore_permissions=ignore_permissions)

"""Service container for dependency injection and lifecycle management."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from loguru import logger

from ..core.config import Config
from ..core.exceptions import IndexUnavailableError
from ..search.ids import clean_id
from ..search.pipeline import PageLookupPipeline
from ..store.snapshot import load_snapshot

if TYPE_CHECKING:
    from ..search.ports import LookupOverride
    from ..store.memory import InMemoryIndex, SnapshotAccessGate
    from .search import SearchService


class ServiceContainer:
    """Owns the index reader and hands out services built on it.

    The index snapshot is loaded on ``open()`` (or on entering the context
    manager) and released on ``close()``. Lookups never load or modify the
    index themselves.

    Usage as context manager (recommended):

        with ServiceContainer(config) as services:
            pages = services.search.page_lookup("syntax")

    Usage with injected collaborators (no snapshot file):

        services = ServiceContainer(config, index=my_index, gate=my_gate)
        services.search.backlinks("wiki:syntax")

    Attributes:
        config: Application configuration.
        search: SearchService instance.
    """

    def __init__(
        self,
        config: Config,
        index: "InMemoryIndex | None" = None,
        gate: "SnapshotAccessGate | None" = None,
        override: "LookupOverride | None" = None,
    ):
        """Initialize container with configuration.

        Args:
            config: Application configuration.
            index: Pre-built index; skips loading ``config.index_path``.
            gate: Access gate to use with a pre-built index.
            override: Optional page lookup override hook.
        """
        self.config = config
        self._override = override
        self._index = index
        self._gate = gate
        self._injected = index is not None

        # Lazy-initialized components
        self._pipeline: PageLookupPipeline | None = None
        self._search: SearchService | None = None

    @property
    def is_open(self) -> bool:
        """True when an index is available."""
        return self._index is not None

    def open(self) -> None:
        """Load the index snapshot if no index was injected."""
        if self._index is not None:
            return

        self._index, self._gate = load_snapshot(
            self.config.index_path,
            hidden_pages=self.config.lookup.hidden_pages,
        )
        logger.debug(f"ServiceContainer opened index {self.config.index_path}")

    def close(self) -> None:
        """Release the index and every service built on it."""
        self._pipeline = None
        self._search = None
        if not self._injected:
            self._index = None
            self._gate = None
            logger.debug("ServiceContainer closed")

    def __enter__(self) -> "ServiceContainer":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    # --- Component accessors ---

    @property
    def index(self) -> "InMemoryIndex":
        """Get the loaded index."""
        if self._index is None:
            raise IndexUnavailableError("Index not loaded; call open() first")
        return self._index

    @property
    def gate(self) -> "SnapshotAccessGate":
        """Get the access gate."""
        if self._gate is None:
            raise IndexUnavailableError("Access gate not available; call open() first")
        return self._gate

    @property
    def pipeline(self) -> PageLookupPipeline:
        """Get or create the lookup pipeline."""
        if self._pipeline is None:
            lookup = self.config.lookup
            cleaner = partial(
                clean_id,
                separator_char=lookup.separator_char,
                use_slash=lookup.use_slash,
            )
            self._pipeline = PageLookupPipeline(
                self.index,
                self.gate,
                cleaner=cleaner,
                override=self._override,
            )
        return self._pipeline

    # --- Service accessors ---

    @property
    def search(self) -> "SearchService":
        """Get or create SearchService."""
        if self._search is None:
            from .search import SearchService

            self._search = SearchService(self)
        return self._search

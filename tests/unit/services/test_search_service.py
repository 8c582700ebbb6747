"""Tests for SearchService and ServiceContainer."""

import pytest

from pagelookup.core.config import Config
from pagelookup.core.exceptions import IndexUnavailableError, SnapshotError
from pagelookup.core.types import RankedPage
from pagelookup.services import SearchService, ServiceContainer
from pagelookup.store import InMemoryIndex, PageRecord, SnapshotAccessGate


def ids(pages: list[RankedPage]) -> list[str]:
    return [page.page_id for page in pages]


class TestServiceContainer:
    """Tests for ServiceContainer lifecycle."""

    def test_context_manager_loads_and_releases(self, config: Config):
        """Entering loads the snapshot, leaving releases it."""
        container = ServiceContainer(config)
        assert container.is_open is False

        with container as services:
            assert services.is_open is True
            assert len(services.index) == 7

        assert container.is_open is False

    def test_index_before_open(self, config: Config):
        """Accessing the index before open() raises."""
        with pytest.raises(IndexUnavailableError):
            ServiceContainer(config).index

    def test_missing_snapshot(self, config: Config, tmp_path):
        """A missing snapshot surfaces as SnapshotError on open."""
        config.index_path = tmp_path / "missing.yaml"

        with pytest.raises(SnapshotError):
            ServiceContainer(config).open()

    def test_injected_index(self):
        """A pre-built index and gate are used without loading a file."""
        index = InMemoryIndex([PageRecord("wiki:page", title="Page")])
        container = ServiceContainer(Config(), index=index, gate=SnapshotAccessGate(index))

        assert ids(container.search.page_lookup("page")) == ["wiki:page"]

        container.close()
        assert container.index is index

    def test_search_is_cached(self, config: Config):
        """The same SearchService is returned on every access."""
        with ServiceContainer(config) as services:
            assert isinstance(services.search, SearchService)
            assert services.search is services.search


class TestSearchServicePageLookup:
    """Tests for SearchService.page_lookup."""

    def test_filters_hidden_missing_and_unreadable(self, config: Config):
        """Only visible, existing, readable pages are returned, ranked."""
        with ServiceContainer(config) as services:
            results = services.search.page_lookup("syntax")

        assert ids(results) == ["wiki:syntax", "wiki:syntax:tables"]
        assert results[0].title == "Formatting Syntax"

    def test_in_title(self, config: Config):
        """Title matches are merged in and ranked by depth."""
        with ServiceContainer(config) as services:
            results = services.search.page_lookup("welcome", in_title=True)

        assert ids(results) == ["start", "wiki:welcome"]

    def test_defaults_from_config(self, config: Config):
        """Unspecified flags fall back to the configured defaults."""
        config.lookup.in_title = True

        with ServiceContainer(config) as services:
            assert ids(services.search.page_lookup("welcome")) == ["start", "wiki:welcome"]
            assert ids(services.search.page_lookup("welcome", in_title=False)) == ["wiki:welcome"]

    def test_time_bounds(self, config: Config):
        """Time bounds accept epochs and date expressions."""
        with ServiceContainer(config) as services:
            assert ids(services.search.page_lookup("syntax", after=1700250000)) == [
                "wiki:syntax:tables"
            ]
            assert ids(
                services.search.page_lookup("syntax", before="2023-11-17T06:00:00+00:00")
            ) == ["wiki:syntax"]

    def test_override_hook(self, config: Config):
        """An override supplied to the container wraps page lookups."""

        def deepest_only(request, default):
            results = default(request)
            return results[-1:]

        with ServiceContainer(config, override=deepest_only) as services:
            assert ids(services.search.page_lookup("syntax")) == ["wiki:syntax:tables"]

    def test_separator_from_config(self, snapshot_path):
        """The configured separator char is used to clean queries."""
        config = Config(index_path=snapshot_path)
        config.lookup.separator_char = "-"
        snapshot_path.write_text("pages:\n  wiki:some-page: {title: Some}\n", encoding="utf-8")

        with ServiceContainer(config) as services:
            assert ids(services.search.page_lookup("Some Page")) == ["wiki:some-page"]


class TestSearchServiceReferences:
    """Tests for backlinks and media usage through the service."""

    def test_backlinks(self, config: Config):
        """Backlinks drop hidden, missing and unreadable pages."""
        with ServiceContainer(config) as services:
            assert services.search.backlinks("wiki:syntax") == [
                "start",
                "wiki:syntax:tables",
                "wiki:welcome",
            ]

    def test_backlinks_ignore_permissions(self, config: Config):
        """Ignoring permissions keeps hidden and unreadable pages, never missing ones."""
        with ServiceContainer(config) as services:
            assert services.search.backlinks("wiki:syntax", ignore_permissions=True) == [
                "playground:syntax",
                "private:notes",
                "start",
                "wiki:syntax:tables",
                "wiki:welcome",
            ]

    def test_backlinks_legacy_numeric_flag(self, config: Config):
        """A numeric ignore_permissions argument applies permissions."""
        with ServiceContainer(config) as services:
            assert services.search.backlinks("wiki:syntax", ignore_permissions=5) == (
                services.search.backlinks("wiki:syntax")
            )

    def test_media_users(self, config: Config):
        """Media usage is filtered and sorted."""
        with ServiceContainer(config) as services:
            assert services.search.media_users("wiki:logo.png") == ["wiki:syntax", "wiki:welcome"]
            assert services.search.media_users("wiki:unused.png") == []

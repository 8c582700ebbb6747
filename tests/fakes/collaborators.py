"""In-memory fakes for the lookup ports.

These fakes implement the collaborator protocols with plain dictionaries,
enabling fast unit tests of the pipeline stages.
"""

from __future__ import annotations

from typing import Callable


class FakeIndex:
    """In-memory IndexReader + HeadingSource + TimeSource.

    Example:
        >>> index = FakeIndex.from_pages("wiki:start", "wiki:syntax")
        >>> index.set_title("wiki:syntax", "Formatting Syntax")
        >>> index.add_relation("relation_references", "start", "wiki:syntax")
    """

    def __init__(self):
        """Initialize with an empty index."""
        self.pages: list[str] = []
        self.titles: dict[str, str] = {}
        self.mtimes: dict[str, float] = {}
        self.relations: dict[str, dict[str, str]] = {}
        self.heading_calls: list[str] = []

    @classmethod
    def from_pages(cls, *page_ids: str) -> "FakeIndex":
        """Create an index holding the given pages."""
        index = cls()
        index.pages.extend(page_ids)
        return index

    def set_title(self, page_id: str, title: str) -> None:
        self.titles[page_id] = title

    def set_mtime(self, page_id: str, mtime: float) -> None:
        self.mtimes[page_id] = mtime

    def add_relation(self, key: str, page_id: str, value: str) -> None:
        """Record that ``page_id`` has ``value`` under ``key``."""
        self.relations.setdefault(key, {})[page_id] = value

    def lookup_key(
        self,
        key: str,
        value: str,
        matcher: Callable[[str, str], bool] | None = None,
    ) -> dict[str, str]:
        if key == "title":
            entries = self.titles
        else:
            entries = self.relations.get(key, {})
        return {
            page_id: indexed
            for page_id, indexed in entries.items()
            if (matcher(value, indexed) if matcher else indexed == value)
        }

    def list_all_pages(self) -> list[str]:
        return list(self.pages)

    def first_heading(self, page_id: str) -> str | None:
        self.heading_calls.append(page_id)
        return self.titles.get(page_id)

    def modification_time(self, page_id: str) -> float:
        return self.mtimes[page_id]


class RecordingAccessGate:
    """AccessGate that allows everything except the configured pages.

    Records every check so tests can assert which checks ran.
    """

    def __init__(
        self,
        hidden: set[str] | None = None,
        missing: set[str] | None = None,
        unreadable: set[str] | None = None,
    ):
        self.hidden = hidden or set()
        self.missing = missing or set()
        self.unreadable = unreadable or set()
        self.calls: list[tuple[str, str]] = []

    def is_visible(self, page_id: str) -> bool:
        self.calls.append(("is_visible", page_id))
        return page_id not in self.hidden

    def exists(self, page_id: str) -> bool:
        self.calls.append(("exists", page_id))
        return page_id not in self.missing

    def is_readable(self, page_id: str) -> bool:
        self.calls.append(("is_readable", page_id))
        return page_id not in self.unreadable

    def checks(self, name: str) -> list[str]:
        """Page ids passed to the check called ``name``."""
        return [page_id for check, page_id in self.calls if check == name]


class FixedTimeSource:
    """TimeSource backed by a dictionary of epoch seconds."""

    def __init__(self, mtimes: dict[str, float]):
        self.mtimes = mtimes

    def modification_time(self, page_id: str) -> float:
        return self.mtimes[page_id]


class FailingIndexReader:
    """IndexReader whose every call raises, to test error propagation."""

    def __init__(self, error: Exception | None = None):
        self.error = error or ConnectionError("index unreachable")

    def lookup_key(self, key, value, matcher=None):
        raise self.error

    def list_all_pages(self):
        raise self.error

    def first_heading(self, page_id):
        raise self.error

    def modification_time(self, page_id):
        raise self.error

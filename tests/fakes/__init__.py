"""Test fakes for the lookup collaborators.

This module provides in-memory stand-ins for:
- The metadata index (pages, titles and relations)
- The access gate (visibility, existence, read permission)
- Page modification times

Example:
    from tests.fakes import FakeIndex, RecordingAccessGate

    index = FakeIndex.from_pages("a:b:c", "a:b", "x")
    gate = RecordingAccessGate(unreadable={"a:b"})
    pipeline = PageLookupPipeline(index, gate)
"""

from .collaborators import (
    FailingIndexReader,
    FakeIndex,
    FixedTimeSource,
    RecordingAccessGate,
)

__all__ = [
    "FakeIndex",
    "RecordingAccessGate",
    "FixedTimeSource",
    "FailingIndexReader",
]

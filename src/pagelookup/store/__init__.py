"""Read-only index and permission sources backed by a snapshot file."""

from .memory import InMemoryIndex, PageRecord, SnapshotAccessGate
from .snapshot import load_snapshot, parse_snapshot

__all__ = [
    "InMemoryIndex",
    "PageRecord",
    "SnapshotAccessGate",
    "load_snapshot",
    "parse_snapshot",
]

"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from pagelookup.core.config import Config
from pagelookup.store import InMemoryIndex, SnapshotAccessGate, load_snapshot

SAMPLE_SNAPSHOT = """\
pages:
  start:
    title: Welcome
    modified: 1700000000
    references: ["wiki:syntax", "wiki:welcome"]
  wiki:welcome:
    title: Welcome to the Wiki
    modified: 1700100000
    references: ["wiki:syntax"]
    media: ["wiki:logo.png"]
  wiki:syntax:
    title: Formatting Syntax
    modified: 1700200000
    media: ["wiki:logo.png", "wiki:tables.png"]
  wiki:syntax:tables:
    title: Tables
    modified: 1700300000
    references: ["wiki:syntax"]
  private:notes:
    title: Syntax Notes
    modified: 1700400000
    acl: none
    references: ["wiki:syntax"]
  playground:syntax:
    title: Sandbox
    modified: 1700500000
    references: ["wiki:syntax"]
    media: ["wiki:logo.png"]
  old:syntax:
    title: Old Syntax
    modified: 1600000000
    exists: false
    references: ["wiki:syntax"]
"""


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    """Provide a sample index snapshot file."""
    path = tmp_path / "index.yaml"
    path.write_text(SAMPLE_SNAPSHOT, encoding="utf-8")
    return path


@pytest.fixture
def snapshot(snapshot_path: Path) -> tuple[InMemoryIndex, SnapshotAccessGate]:
    """Provide the sample index with playground pages hidden."""
    return load_snapshot(snapshot_path, hidden_pages="^:playground:")


@pytest.fixture
def config(snapshot_path: Path) -> Config:
    """Provide a Config pointing at the sample snapshot."""
    cfg = Config()
    cfg.index_path = snapshot_path
    cfg.lookup.hidden_pages = "^:playground:"
    return cfg

"""Loading of index snapshot files.

A snapshot is a YAML (or JSON) document describing the pages of a wiki as
the metadata index sees them:

    pages:
      start:
        title: Welcome
        modified: 2024-03-01T09:30:00+00:00
        references: [wiki:syntax]
      wiki:syntax:
        title: Formatting Syntax
        modified: 1709285400
        acl: read
        media: [wiki:logo.png]
      playground:old:
        exists: false

``modified`` accepts epoch seconds or an ISO-8601 date/datetime. ``acl``
accepts a level name (none, read, edit, create, upload, delete, admin) or
its number and defaults to read.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from ..core.exceptions import SnapshotError
from ..core.types import AclLevel
from .memory import InMemoryIndex, PageRecord, SnapshotAccessGate

_RECORD_KEYS = {"title", "modified", "exists", "acl", "references", "media"}


def load_snapshot(
    path: Path,
    hidden_pages: str = "",
) -> tuple[InMemoryIndex, SnapshotAccessGate]:
    """Load a snapshot file into an index and a matching access gate.

    Args:
        path: Snapshot file (``.json`` is read as JSON, anything else as YAML).
        hidden_pages: Regular expression of hidden page ids.

    Returns:
        Tuple of (index, gate).

    Raises:
        SnapshotError: If the file cannot be read or is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(str(path), f"cannot read file ({e})") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotError(str(path), f"cannot parse file ({e})") from e

    index = parse_snapshot(data, source=str(path))
    logger.info(f"Loaded index snapshot {path} with {len(index)} pages")
    return index, SnapshotAccessGate(index, hidden_pages=hidden_pages)


def parse_snapshot(data: Any, source: str = "<snapshot>") -> InMemoryIndex:
    """Build an index from already-parsed snapshot data.

    Args:
        data: Parsed YAML/JSON document.
        source: Name used in error messages.

    Returns:
        Populated InMemoryIndex.

    Raises:
        SnapshotError: If the data does not follow the snapshot schema.
    """
    if data is None:
        return InMemoryIndex()
    if not isinstance(data, dict):
        raise SnapshotError(source, "top level must be a mapping")

    pages = data.get("pages") or {}
    if not isinstance(pages, dict):
        raise SnapshotError(source, "'pages' must be a mapping of page id to record")

    records = [_parse_record(str(page_id), fields or {}, source) for page_id, fields in pages.items()]
    return InMemoryIndex(records)


def _parse_record(page_id: str, fields: Any, source: str) -> PageRecord:
    if not isinstance(fields, dict):
        raise SnapshotError(source, f"record for {page_id!r} must be a mapping")

    unknown = set(fields) - _RECORD_KEYS
    if unknown:
        raise SnapshotError(source, f"unknown keys for {page_id!r}: {', '.join(sorted(unknown))}")

    title = fields.get("title")
    return PageRecord(
        page_id=page_id,
        title=str(title) if title is not None else None,
        modified=_parse_modified(fields.get("modified", 0), page_id, source),
        exists=bool(fields.get("exists", True)),
        acl=_parse_acl(fields.get("acl", AclLevel.READ), page_id, source),
        references=_parse_id_list(fields.get("references"), "references", page_id, source),
        media=_parse_id_list(fields.get("media"), "media", page_id, source),
    )


def _parse_modified(value: Any, page_id: str, source: str) -> float:
    # YAML turns unquoted timestamps into datetime/date objects already
    if isinstance(value, bool):
        raise SnapshotError(source, f"invalid modified time for {page_id!r}: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).timestamp()
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).timestamp()
        except ValueError:
            pass
    raise SnapshotError(source, f"invalid modified time for {page_id!r}: {value!r}")


def _parse_acl(value: Any, page_id: str, source: str) -> AclLevel:
    if isinstance(value, AclLevel):
        return value
    if isinstance(value, str):
        try:
            return AclLevel[value.strip().upper()]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return AclLevel(value)
        except ValueError:
            pass
    raise SnapshotError(source, f"invalid acl for {page_id!r}: {value!r}")


def _parse_id_list(value: Any, name: str, page_id: str, source: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise SnapshotError(source, f"'{name}' of {page_id!r} must be a list")
    return [str(item) for item in value]

"""Catalog module - Snapshot parsing, loading and the active catalog store."""

from __future__ import annotations

from statscope.catalog.loader import load_catalog, sort_snapshots
from statscope.catalog.parser import (
    TimestampPolicy,
    parse_filename_timestamp,
    parse_records,
    parse_snapshot_file,
)
from statscope.catalog.store import CatalogStore

__all__ = [
    "CatalogStore",
    "TimestampPolicy",
    "load_catalog",
    "parse_filename_timestamp",
    "parse_records",
    "parse_snapshot_file",
    "sort_snapshots",
]

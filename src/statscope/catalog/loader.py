"""Catalog loading from a directory of snapshot files."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from statscope.catalog.parser import TimestampPolicy, parse_snapshot_file
from statscope.core.constants import SNAPSHOT_FILE_SUFFIX
from statscope.core.exceptions import CatalogLoadError, SnapshotParseError
from statscope.core.schemas import Catalog, Snapshot

logger = logging.getLogger(__name__)


def sort_snapshots(snapshots: list[Snapshot]) -> list[Snapshot]:
    """Order snapshots newest first; equal timestamps fall back to file name."""
    by_name = sorted(snapshots, key=lambda s: s.name)
    return sorted(by_name, key=lambda s: s.timestamp, reverse=True)


def load_catalog(
    directory: Path | str,
    *,
    suffix: str = SNAPSHOT_FILE_SUFFIX,
    timestamp_policy: TimestampPolicy = "now",
) -> Catalog:
    """Load and parse every snapshot file in a directory.

    Subdirectories and files without the expected suffix are ignored. A file
    that fails to parse is logged and skipped; it never prevents the rest of
    the directory from loading.

    Args:
        directory: Flat directory holding snapshot files
        suffix: File suffix identifying snapshot files
        timestamp_policy: Fallback for file names without a timestamp

    Returns:
        Catalog sorted newest first (possibly empty)

    Raises:
        CatalogLoadError: If the directory itself cannot be listed
    """
    directory = Path(directory)
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise CatalogLoadError(
            f"Error reading directory {directory}: {e}", path=str(directory)
        ) from e

    now = datetime.now()
    snapshots: list[Snapshot] = []
    skipped = 0
    for entry in entries:
        if entry.is_dir() or not entry.name.endswith(suffix):
            continue
        try:
            snapshots.append(
                parse_snapshot_file(entry, timestamp_policy=timestamp_policy, now=now)
            )
        except SnapshotParseError as e:
            logger.warning(f"Failed to parse {entry}: {e}")
            skipped += 1

    logger.debug(f"Loaded {len(snapshots)} snapshots from {directory} ({skipped} skipped)")
    return Catalog(
        snapshots=tuple(sort_snapshots(snapshots)),
        source_dir=directory,
        loaded_at=now,
    )

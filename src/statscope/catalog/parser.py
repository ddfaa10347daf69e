"""Snapshot file parsing.

A snapshot file holds the output of `docker stats --no-stream --format '{{json .}}'`:
one JSON object per line. Its logical timestamp comes from the file name, e.g.
`2024-01-01_10-00-00_docker_stats.json`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Literal

from pydantic import ValidationError

from statscope.core.constants import FILENAME_TIMESTAMP_FORMAT
from statscope.core.exceptions import SnapshotParseError
from statscope.core.schemas import Record, Snapshot

logger = logging.getLogger(__name__)

TimestampPolicy = Literal["now", "mtime", "reject"]


def parse_filename_timestamp(filename: str) -> datetime | None:
    """Extract the leading `YYYY-MM-DD_HH-MM-SS` timestamp from a file name.

    The extension is ignored, so both `2024-01-01_10-00-00_x.json` and
    `2024-01-01_10-00-00.json` carry a timestamp.

    Returns:
        Parsed timestamp, or None when the name does not start with one
    """
    parts = Path(filename).stem.split("_")
    if len(parts) < 2:
        return None
    try:
        return datetime.strptime(f"{parts[0]}_{parts[1]}", FILENAME_TIMESTAMP_FORMAT)
    except ValueError:
        return None


def parse_records(lines: list[str], path: str) -> list[Record]:
    """Decode NDJSON lines into records, skipping blank lines.

    Raises:
        SnapshotParseError: On the first line that is not a valid record
    """
    records: list[Record] = []
    for line_num, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            records.append(Record.model_validate_json(line))
        except ValidationError as e:
            raise SnapshotParseError(
                f"Error parsing line {line_num} in {path}: {e.errors()[0]['msg']}",
                path=path,
                line=line_num,
            ) from e
    return records


def parse_snapshot_file(
    path: Path | str,
    *,
    timestamp_policy: TimestampPolicy = "now",
    now: datetime | None = None,
) -> Snapshot:
    """Parse one snapshot file.

    Args:
        path: Path to the NDJSON snapshot file
        timestamp_policy: What to do when the file name carries no timestamp:
            "now" uses the load time, "mtime" the file modification time,
            "reject" refuses the file
        now: Load time to use for the "now" policy (defaults to datetime.now())

    Returns:
        Parsed Snapshot

    Raises:
        SnapshotParseError: If the file cannot be read, a line fails to decode,
            or the name has no timestamp under the "reject" policy
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotParseError(f"Error reading file {path}: {e}", path=str(path)) from e

    records = parse_records(lines, str(path))

    timestamp = parse_filename_timestamp(path.name)
    inferred = timestamp is None
    if timestamp is None:
        if timestamp_policy == "reject":
            raise SnapshotParseError(
                f"File name {path.name} does not start with a YYYY-MM-DD_HH-MM-SS timestamp",
                path=str(path),
            )
        if timestamp_policy == "mtime":
            try:
                timestamp = datetime.fromtimestamp(path.stat().st_mtime)
            except OSError as e:
                raise SnapshotParseError(f"Error reading file {path}: {e}", path=str(path)) from e
        else:
            timestamp = now or datetime.now()
        logger.debug(f"No timestamp in {path.name}, using {timestamp_policy} fallback {timestamp}")

    return Snapshot(
        name=path.name,
        timestamp=timestamp,
        records=tuple(records),
        timestamp_inferred=inferred,
    )

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def _make_record(
    container_id: str,
    name: str = "",
    cpu: str = "0.00%",
    mem: str = "0.00%",
    **extra: str,
) -> dict[str, str]:
    record = {
        "BlockIO": "0B / 0B",
        "CPUPerc": cpu,
        "Container": container_id,
        "ID": container_id,
        "MemPerc": mem,
        "MemUsage": "10MiB / 1GiB",
        "Name": name,
        "NetIO": "1kB / 2kB",
        "PIDs": "3",
    }
    record.update(extra)
    return record


def _write_snapshot(directory: Path, filename: str, records: list[dict]) -> Path:
    path = directory / filename
    path.write_text("".join(json.dumps(r) + "\n" for r in records), encoding="utf-8")
    return path


@pytest.fixture
def make_record():
    """Factory for one docker stats record as the CLI emits it."""
    return _make_record


@pytest.fixture
def write_snapshot():
    """Writer for NDJSON snapshot files."""
    return _write_snapshot


@pytest.fixture
def stats_dir(tmp_path: Path) -> Path:
    """Directory holding three snapshots of two containers."""
    directory = tmp_path / "stats"
    directory.mkdir()
    _write_snapshot(
        directory,
        "2024-01-01_10-00-00_docker_stats.json",
        [
            _make_record("abc", "web", cpu="10.00%", mem="20.00%"),
            _make_record("def", "db", cpu="50.00%", mem="5.00%"),
        ],
    )
    _write_snapshot(
        directory,
        "2024-01-01_11-00-00_docker_stats.json",
        [
            _make_record("abc", "web", cpu="30.00%", mem="40.00%"),
            _make_record("def", "db", cpu="70.00%", mem="6.00%"),
        ],
    )
    _write_snapshot(
        directory,
        "2024-01-01_12-00-00_docker_stats.json",
        [_make_record("def", "db", cpu="60.00%", mem="7.00%")],
    )
    return directory

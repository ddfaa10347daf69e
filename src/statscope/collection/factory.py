"""Collector creation from configuration."""

from __future__ import annotations

from pathlib import Path

from statscope.collection.base import BaseCollector
from statscope.collection.command import CommandCollector
from statscope.collection.docker_collector import DockerStatsSnapshotCollector
from statscope.core.config import CollectionConfig


def create_collector(config: CollectionConfig, stats_dir: Path) -> BaseCollector | None:
    """Create the collector selected by `config.mode`.

    Returns:
        A collector, or None when collection is disabled
    """
    if config.mode == "command":
        return CommandCollector(
            config.command, cwd=config.cwd, timeout_seconds=config.timeout_seconds
        )
    if config.mode == "docker":
        return DockerStatsSnapshotCollector(stats_dir, timeout_seconds=config.timeout_seconds)
    return None

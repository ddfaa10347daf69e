"""Collection module - Producing new snapshot files.

Provides two collector implementations:
- CommandCollector: External command with a deadline
- DockerStatsSnapshotCollector: Local Docker daemon via the Docker SDK
"""

from __future__ import annotations

from statscope.collection.base import BaseCollector
from statscope.collection.command import CommandCollector
from statscope.collection.docker_collector import DockerStatsSnapshotCollector, stats_to_record
from statscope.collection.factory import create_collector

__all__ = [
    "BaseCollector",
    "CommandCollector",
    "DockerStatsSnapshotCollector",
    "create_collector",
    "stats_to_record",
]

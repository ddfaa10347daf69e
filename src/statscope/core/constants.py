"""Shared constants for statscope.

Centralized constants to avoid duplication and ensure consistency across modules.
"""

from __future__ import annotations

# Leading timestamp segment of snapshot file names (e.g. 2024-01-01_10-00-00_docker_stats.json)
FILENAME_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

# Rendering of Data Point timestamps in JSON and tables
DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Only files with this suffix are treated as snapshots
SNAPSHOT_FILE_SUFFIX = ".json"

# Suffix appended by the built-in Docker collector
SNAPSHOT_FILE_TAG = "docker_stats"

DEFAULT_REFRESH_INTERVAL_SECONDS = 300
DEFAULT_COLLECTION_TIMEOUT_SECONDS = 120
DEFAULT_PORT = 8080

"""Core module - configuration, schemas and errors."""

from __future__ import annotations

from statscope.core.config import CollectionConfig, ViewerConfig, load_config
from statscope.core.exceptions import (
    CatalogLoadError,
    CollectionError,
    EmptyCatalogError,
    SnapshotParseError,
    StatscopeError,
)
from statscope.core.schemas import (
    Catalog,
    CatalogOverview,
    ContainerDetails,
    ContainerSeries,
    ContainerSummary,
    DataPoint,
    Record,
    Snapshot,
    SnapshotInfo,
)
from statscope.core.units import format_percent, parse_percent

__all__ = [
    "Catalog",
    "CatalogLoadError",
    "CatalogOverview",
    "CollectionConfig",
    "CollectionError",
    "ContainerDetails",
    "ContainerSeries",
    "ContainerSummary",
    "DataPoint",
    "EmptyCatalogError",
    "format_percent",
    "load_config",
    "parse_percent",
    "Record",
    "Snapshot",
    "SnapshotInfo",
    "SnapshotParseError",
    "StatscopeError",
    "ViewerConfig",
]

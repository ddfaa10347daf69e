"""statscope - Container resource snapshot browser - Core package."""

from __future__ import annotations

from statscope.core.schemas import (
    Catalog,
    ContainerSeries,
    ContainerSummary,
    DataPoint,
    Record,
    Snapshot,
)

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "ContainerSeries",
    "ContainerSummary",
    "DataPoint",
    "Record",
    "Snapshot",
    "__version__",
]

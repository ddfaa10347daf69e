"""Pydantic schemas for statscope.

This module defines the data contracts shared by the catalog, the analysis
functions and the API: raw docker stats records, parsed snapshots, the
catalog, reconstructed container series and their summaries.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer, computed_field

from statscope.core.constants import DISPLAY_TIMESTAMP_FORMAT

DisplayTimestamp = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.strftime(DISPLAY_TIMESTAMP_FORMAT), return_type=str, when_used="json"
    ),
]


class Record(BaseModel):
    """One container's readings at one instant, as emitted by `docker stats`.

    All values are kept verbatim. Percentages still carry their trailing '%'.
    """

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    block_io: str = Field(default="", alias="BlockIO")
    cpu_perc: str = Field(default="", alias="CPUPerc")
    container: str = Field(default="", alias="Container")
    id: str = Field(default="", alias="ID")
    mem_perc: str = Field(default="", alias="MemPerc")
    mem_usage: str = Field(default="", alias="MemUsage")
    name: str = Field(default="", alias="Name")
    net_io: str = Field(default="", alias="NetIO")
    pids: str = Field(default="", alias="PIDs")


class Snapshot(BaseModel):
    """One parsed snapshot file.

    Attributes:
        name: File base name
        timestamp: Logical time of the snapshot, from the file name when possible
        records: Records in file order
        timestamp_inferred: True when the timestamp came from a fallback policy
    """

    model_config = {"frozen": True}

    name: str
    timestamp: DisplayTimestamp
    records: tuple[Record, ...] = ()
    timestamp_inferred: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def record_count(self) -> int:
        return len(self.records)


class Catalog(BaseModel):
    """Immutable set of loaded snapshots, newest first."""

    model_config = {"frozen": True}

    snapshots: tuple[Snapshot, ...] = ()
    source_dir: Path | None = None
    loaded_at: datetime = Field(default_factory=datetime.now)

    def __len__(self) -> int:
        return len(self.snapshots)

    def get(self, index: int) -> Snapshot | None:
        """Return the snapshot at a display index, or None when out of range."""
        if 0 <= index < len(self.snapshots):
            return self.snapshots[index]
        return None

    def find(self, name: str) -> Snapshot | None:
        """Return the snapshot loaded from the given file name."""
        for snapshot in self.snapshots:
            if snapshot.name == name:
                return snapshot
        return None

    @property
    def first_timestamp(self) -> datetime | None:
        """Timestamp of the oldest snapshot."""
        if not self.snapshots:
            return None
        return min(s.timestamp for s in self.snapshots)

    @property
    def last_timestamp(self) -> datetime | None:
        """Timestamp of the newest snapshot."""
        if not self.snapshots:
            return None
        return max(s.timestamp for s in self.snapshots)

    def container_ids(self) -> list[str]:
        """Sorted short IDs of every container seen in any snapshot."""
        return sorted({r.id for s in self.snapshots for r in s.records})


class SnapshotInfo(BaseModel):
    """Listing row for one snapshot."""

    index: int = Field(ge=0)
    name: str
    timestamp: DisplayTimestamp
    record_count: int = Field(ge=0)
    timestamp_inferred: bool = False


class DataPoint(BaseModel):
    """One container reading placed on the timeline of its snapshot."""

    timestamp: DisplayTimestamp
    cpu_perc: float = 0.0
    mem_perc: float = 0.0
    mem_usage: str = ""
    net_io: str = ""
    block_io: str = ""
    pids: str = ""


class ContainerSeries(BaseModel):
    """Historical data points of one container, oldest first."""

    container_id: str
    container_name: str = ""
    data: list[DataPoint] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.data)


class ContainerSummary(BaseModel):
    """Aggregate statistics over a container's full series.

    When `data_points` is 0 every statistic stays at its default and
    `is_empty` is true; callers must check it before trusting min/max.
    """

    container_id: str
    container_name: str = ""
    data_points: int = Field(default=0, ge=0)
    avg_cpu: float = 0.0
    max_cpu: float = 0.0
    min_cpu: float = 0.0
    avg_mem: float = 0.0
    max_mem: float = 0.0
    min_mem: float = 0.0
    first_seen: DisplayTimestamp | None = None
    last_seen: DisplayTimestamp | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        return self.data_points == 0


class ContainerDetails(BaseModel):
    """A container series together with its summary statistics."""

    series: ContainerSeries
    summary: ContainerSummary


class CatalogOverview(BaseModel):
    """Catalog-wide ranking and headline figures."""

    summaries: list[ContainerSummary] = Field(default_factory=list)
    total_files: int = Field(default=0, ge=0)
    first_timestamp: DisplayTimestamp | None = None
    last_timestamp: DisplayTimestamp | None = None
    highest_peak_cpu: ContainerSummary | None = None
    most_data_points: ContainerSummary | None = None
    loaded_at: DisplayTimestamp | None = None

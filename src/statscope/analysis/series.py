"""Per-container time series reconstruction across a catalog."""

from __future__ import annotations

from datetime import datetime

from statscope.core.schemas import Catalog, ContainerSeries, DataPoint, Record
from statscope.core.units import parse_percent


def to_data_point(record: Record, timestamp: datetime) -> DataPoint:
    """Place a record on the timeline of its snapshot, parsing its percentages."""
    return DataPoint(
        timestamp=timestamp,
        cpu_perc=parse_percent(record.cpu_perc),
        mem_perc=parse_percent(record.mem_perc),
        mem_usage=record.mem_usage,
        net_io=record.net_io,
        block_io=record.block_io,
        pids=record.pids,
    )


def sort_points(points: list[DataPoint]) -> list[DataPoint]:
    """Oldest first. The sort is stable, so equal timestamps keep scan order."""
    return sorted(points, key=lambda p: p.timestamp)


def build_container_series(catalog: Catalog, container_id: str) -> ContainerSeries:
    """Reconstruct one container's history from every snapshot in the catalog.

    The display name is the first non-empty name met while scanning the
    catalog in its own order. An unknown ID yields an empty series.

    Args:
        catalog: Catalog to scan
        container_id: Short container ID (the join key)

    Returns:
        ContainerSeries with data points sorted oldest first
    """
    points: list[DataPoint] = []
    name = ""
    for snapshot in catalog.snapshots:
        for record in snapshot.records:
            if record.id != container_id:
                continue
            points.append(to_data_point(record, snapshot.timestamp))
            if not name:
                name = record.name

    return ContainerSeries(container_id=container_id, container_name=name, data=sort_points(points))

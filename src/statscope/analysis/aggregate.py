"""Summary statistics over container series.

Every function here is a pure function of the catalog it receives; nothing is
cached between calls.
"""

from __future__ import annotations

from statscope.analysis.series import build_container_series, sort_points, to_data_point
from statscope.core.schemas import (
    Catalog,
    CatalogOverview,
    ContainerDetails,
    ContainerSeries,
    ContainerSummary,
    DataPoint,
)


def _stats(values: list[float]) -> tuple[float, float, float]:
    """Return (avg, max, min) with a linear scan seeded by the first value."""
    total = 0.0
    peak = values[0]
    low = values[0]
    for value in values:
        total += value
        if value > peak:
            peak = value
        if value < low:
            low = value
    return total / len(values), peak, low


def _summarize_points(
    container_id: str, container_name: str, points: list[DataPoint]
) -> ContainerSummary:
    if not points:
        return ContainerSummary(container_id=container_id, container_name=container_name)

    avg_cpu, max_cpu, min_cpu = _stats([p.cpu_perc for p in points])
    avg_mem, max_mem, min_mem = _stats([p.mem_perc for p in points])

    return ContainerSummary(
        container_id=container_id,
        container_name=container_name,
        data_points=len(points),
        avg_cpu=avg_cpu,
        max_cpu=max_cpu,
        min_cpu=min_cpu,
        avg_mem=avg_mem,
        max_mem=max_mem,
        min_mem=min_mem,
        first_seen=points[0].timestamp,
        last_seen=points[-1].timestamp,
    )


def summarize_series(series: ContainerSeries) -> ContainerSummary:
    """Compute summary statistics over one series (assumed oldest first).

    An empty series gives a summary with `data_points == 0` and every
    statistic at 0.0.
    """
    return _summarize_points(series.container_id, series.container_name, series.data)


def rank_summaries(summaries: list[ContainerSummary]) -> list[ContainerSummary]:
    """Order by average CPU, highest first; ties by container ID ascending."""
    return sorted(summaries, key=lambda s: (-s.avg_cpu, s.container_id))


def summarize_all(catalog: Catalog) -> list[ContainerSummary]:
    """Summarize every container found in the catalog in a single pass.

    Returns:
        One summary per container short ID, ranked by average CPU descending
    """
    grouped: dict[str, list[DataPoint]] = {}
    names: dict[str, str] = {}
    for snapshot in catalog.snapshots:
        for record in snapshot.records:
            grouped.setdefault(record.id, []).append(to_data_point(record, snapshot.timestamp))
            if not names.get(record.id):
                names[record.id] = record.name

    summaries = [
        _summarize_points(container_id, names[container_id], sort_points(points))
        for container_id, points in grouped.items()
    ]
    return rank_summaries(summaries)


def build_container_details(catalog: Catalog, container_id: str) -> ContainerDetails:
    """Return a container's series together with its summary."""
    series = build_container_series(catalog, container_id)
    return ContainerDetails(series=series, summary=summarize_series(series))


def build_overview(catalog: Catalog) -> CatalogOverview:
    """Build the catalog-wide ranking with its headline figures.

    `highest_peak_cpu` and `most_data_points` keep the first summary in
    ranking order when several share the top value.
    """
    summaries = summarize_all(catalog)

    highest_peak_cpu: ContainerSummary | None = None
    most_data_points: ContainerSummary | None = None
    for summary in summaries:
        if highest_peak_cpu is None or summary.max_cpu > highest_peak_cpu.max_cpu:
            highest_peak_cpu = summary
        if most_data_points is None or summary.data_points > most_data_points.data_points:
            most_data_points = summary

    return CatalogOverview(
        summaries=summaries,
        total_files=len(catalog),
        first_timestamp=catalog.first_timestamp,
        last_timestamp=catalog.last_timestamp,
        highest_peak_cpu=highest_peak_cpu,
        most_data_points=most_data_points,
        loaded_at=catalog.loaded_at,
    )

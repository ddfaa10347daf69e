"""Tabular export of series and summaries."""

from __future__ import annotations

import pandas as pd

from statscope.core.schemas import ContainerSeries, ContainerSummary

SUMMARY_COLUMNS = [
    "container_id",
    "container_name",
    "data_points",
    "avg_cpu",
    "max_cpu",
    "min_cpu",
    "avg_mem",
    "max_mem",
    "min_mem",
    "first_seen",
    "last_seen",
]

SERIES_COLUMNS = [
    "timestamp",
    "cpu_perc",
    "mem_perc",
    "mem_usage",
    "net_io",
    "block_io",
    "pids",
]


def summaries_to_dataframe(summaries: list[ContainerSummary]) -> pd.DataFrame:
    """Convert ranked summaries to a DataFrame, one row per container."""
    rows = [s.model_dump(mode="json", include=set(SUMMARY_COLUMNS)) for s in summaries]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def series_to_dataframe(series: ContainerSeries) -> pd.DataFrame:
    """Convert a container series to a DataFrame, one row per data point.

    The container identity is repeated on every row so frames from several
    containers can be concatenated.
    """
    rows = [p.model_dump(mode="json") for p in series.data]
    df = pd.DataFrame(rows, columns=SERIES_COLUMNS)
    df.insert(0, "container_name", series.container_name)
    df.insert(0, "container_id", series.container_id)
    return df

"""Analysis module - Series reconstruction, aggregation and export."""

from __future__ import annotations

from statscope.analysis.aggregate import (
    build_container_details,
    build_overview,
    rank_summaries,
    summarize_all,
    summarize_series,
)
from statscope.analysis.export import series_to_dataframe, summaries_to_dataframe
from statscope.analysis.series import build_container_series, sort_points, to_data_point

__all__ = [
    "build_container_details",
    "build_container_series",
    "build_overview",
    "rank_summaries",
    "series_to_dataframe",
    "sort_points",
    "summaries_to_dataframe",
    "summarize_all",
    "summarize_series",
    "to_data_point",
]

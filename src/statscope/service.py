"""Query surface over the active catalog.

Each method takes one catalog reference from the store and computes its
answer from that reference only, so a refresh in the middle of a query never
mixes two catalogs.
"""

from __future__ import annotations

from statscope.analysis.aggregate import build_container_details, build_overview, summarize_all
from statscope.analysis.series import build_container_series
from statscope.catalog.store import CatalogStore
from statscope.core.schemas import (
    CatalogOverview,
    ContainerDetails,
    ContainerSeries,
    ContainerSummary,
    Snapshot,
    SnapshotInfo,
)


class StatsService:
    """Read-only queries used by the API and the CLI."""

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    def list_snapshots(self) -> list[SnapshotInfo]:
        """Snapshots newest first, with their display index."""
        return [
            SnapshotInfo(
                index=i,
                name=s.name,
                timestamp=s.timestamp,
                record_count=s.record_count,
                timestamp_inferred=s.timestamp_inferred,
            )
            for i, s in enumerate(self.store.current.snapshots)
        ]

    def get_snapshot(self, index: int) -> Snapshot | None:
        return self.store.current.get(index)

    def find_snapshot(self, name: str) -> Snapshot | None:
        """Snapshot loaded from the given file name."""
        return self.store.current.find(name)

    def container_ids(self) -> list[str]:
        """Every container short ID in the catalog, sorted."""
        return self.store.current.container_ids()

    def container_series(self, container_id: str) -> ContainerSeries:
        return build_container_series(self.store.current, container_id)

    def container_details(self, container_id: str) -> ContainerDetails:
        return build_container_details(self.store.current, container_id)

    def container_summaries(self) -> list[ContainerSummary]:
        return summarize_all(self.store.current)

    def overview(self) -> CatalogOverview:
        return build_overview(self.store.current)

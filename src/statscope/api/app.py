"""JSON HTTP API over the active catalog."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException

from statscope import __version__
from statscope.core.schemas import (
    CatalogOverview,
    ContainerDetails,
    ContainerSeries,
    Snapshot,
    SnapshotInfo,
)
from statscope.service import StatsService


def create_app(service: StatsService) -> FastAPI:
    """Create the FastAPI application serving the query surface.

    Args:
        service: Query service bound to an initialized CatalogStore

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="statscope", version=__version__)
    app.state.service = service

    @app.get("/health", tags=["system"])
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "snapshots": len(service.store.current),
            "generation": service.store.generation,
        }

    @app.get("/api/snapshots", response_model=list[SnapshotInfo], tags=["snapshots"])
    def list_snapshots() -> list[SnapshotInfo]:
        return service.list_snapshots()

    @app.get("/api/snapshots/{index}", response_model=Snapshot, tags=["snapshots"])
    def get_snapshot(index: int) -> Snapshot:
        snapshot = service.get_snapshot(index)
        if snapshot is None:
            raise HTTPException(status_code=404, detail=f"No snapshot at index {index}")
        return snapshot

    @app.get("/api/snapshots/by-name/{name}", response_model=Snapshot, tags=["snapshots"])
    def find_snapshot(name: str) -> Snapshot:
        snapshot = service.find_snapshot(name)
        if snapshot is None:
            raise HTTPException(status_code=404, detail=f"No snapshot named {name}")
        return snapshot

    @app.get("/api/containers", response_model=list[str], tags=["containers"])
    def container_ids() -> list[str]:
        return service.container_ids()

    @app.get("/api/container/{container_id}", response_model=ContainerSeries, tags=["containers"])
    def container_series(container_id: str) -> ContainerSeries:
        return service.container_series(container_id)

    @app.get(
        "/api/container/{container_id}/stats",
        response_model=ContainerDetails,
        tags=["containers"],
    )
    def container_details(container_id: str) -> ContainerDetails:
        details = service.container_details(container_id)
        if details.summary.is_empty:
            raise HTTPException(
                status_code=404, detail="No historical data found for container"
            )
        return details

    @app.get("/api/summary", response_model=CatalogOverview, tags=["containers"])
    def summary() -> CatalogOverview:
        return service.overview()

    return app

"""DockerStatsSnapshotCollector - snapshot files from the local Docker daemon.

Takes one non-streaming stats sample of every running container through the
Docker SDK and writes it in the same NDJSON shape as
`docker stats --no-stream --format '{{json .}}'`, so the catalog loader cannot
tell the two sources apart.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import docker
import docker.errors

from statscope.collection.base import BaseCollector
from statscope.core.constants import (
    DEFAULT_COLLECTION_TIMEOUT_SECONDS,
    FILENAME_TIMESTAMP_FORMAT,
    SNAPSHOT_FILE_TAG,
)
from statscope.core.exceptions import CollectionError
from statscope.core.schemas import Record
from statscope.core.units import binary_size, decimal_size, format_percent

if TYPE_CHECKING:
    import docker.models.containers

logger = logging.getLogger(__name__)


def calculate_cpu_percent(stats: dict[str, Any]) -> float:
    """Calculate CPU percentage from cpu/precpu deltas, as the docker CLI does."""
    cpu_stats = stats.get("cpu_stats") or {}
    precpu_stats = stats.get("precpu_stats") or {}

    cpu_delta = (cpu_stats.get("cpu_usage") or {}).get("total_usage", 0) - (
        precpu_stats.get("cpu_usage") or {}
    ).get("total_usage", 0)
    system_delta = cpu_stats.get("system_cpu_usage", 0) - precpu_stats.get(
        "system_cpu_usage", 0
    )

    if system_delta > 0 and cpu_delta > 0:
        num_cpus = cpu_stats.get("online_cpus") or len(
            (cpu_stats.get("cpu_usage") or {}).get("percpu_usage") or []
        ) or 1
        return (cpu_delta / system_delta) * num_cpus * 100.0
    return 0.0


def calculate_memory(stats: dict[str, Any]) -> tuple[int, int]:
    """Return (usage, limit) in bytes, with inactive page cache excluded from usage."""
    memory_stats = stats.get("memory_stats") or {}
    usage = memory_stats.get("usage", 0)
    limit = memory_stats.get("limit", 0)
    detail = memory_stats.get("stats") or {}

    # cgroups v1 reports total_inactive_file, v2 reports inactive_file
    inactive = detail.get("total_inactive_file", detail.get("inactive_file", 0))
    if 0 < inactive < usage:
        usage -= inactive
    return usage, limit


def calculate_network(stats: dict[str, Any]) -> tuple[int, int]:
    """Return (rx, tx) bytes summed over all interfaces."""
    rx = tx = 0
    for iface in (stats.get("networks") or {}).values():
        rx += iface.get("rx_bytes", 0)
        tx += iface.get("tx_bytes", 0)
    return rx, tx


def calculate_blkio(stats: dict[str, Any]) -> tuple[int, int]:
    """Return (read, write) bytes from blkio_stats."""
    blkio_stats = stats.get("blkio_stats") or {}
    io_bytes = blkio_stats.get("io_service_bytes_recursive") or []

    read_bytes = 0
    write_bytes = 0
    for entry in io_bytes:
        op = entry.get("op", "").lower()
        value = entry.get("value", 0)
        if op == "read":
            read_bytes += value
        elif op == "write":
            write_bytes += value
    return read_bytes, write_bytes


def stats_to_record(short_id: str, name: str, stats: dict[str, Any]) -> Record:
    """Convert a Docker API stats payload into a docker-stats style record."""
    mem_usage, mem_limit = calculate_memory(stats)
    mem_percent = (mem_usage / mem_limit * 100.0) if mem_limit > 0 else 0.0
    net_rx, net_tx = calculate_network(stats)
    blk_read, blk_write = calculate_blkio(stats)
    pids = (stats.get("pids_stats") or {}).get("current", 0)

    return Record(
        block_io=f"{decimal_size(blk_read)} / {decimal_size(blk_write)}",
        cpu_perc=format_percent(calculate_cpu_percent(stats)),
        container=short_id,
        id=short_id,
        mem_perc=format_percent(mem_percent),
        mem_usage=f"{binary_size(mem_usage)} / {binary_size(mem_limit)}",
        name=name.lstrip("/"),
        net_io=f"{decimal_size(net_rx)} / {decimal_size(net_tx)}",
        pids=str(pids),
    )


class DockerStatsSnapshotCollector(BaseCollector):
    """Writes one snapshot file per call from the local Docker daemon.

    Example:
        ```python
        collector = DockerStatsSnapshotCollector(Path("stats"))
        path = collector.collect()
        ```
    """

    def __init__(
        self,
        output_dir: Path,
        client: docker.DockerClient | None = None,
        timeout_seconds: int = DEFAULT_COLLECTION_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the collector.

        Args:
            output_dir: Stats directory that receives snapshot files
            client: Docker client to use (defaults to docker.from_env())
            timeout_seconds: Docker API timeout per request
        """
        self.output_dir = Path(output_dir)
        self.timeout_seconds = timeout_seconds
        self._client = client

    @property
    def name(self) -> str:
        return "docker"

    def is_available(self) -> bool:
        """Check if Docker is available."""
        try:
            self._get_client().ping()
            return True
        except (docker.errors.DockerException, CollectionError):
            return False

    def _get_client(self) -> docker.DockerClient:
        if self._client is None:
            try:
                self._client = docker.from_env(timeout=self.timeout_seconds)
            except docker.errors.DockerException as e:
                raise CollectionError(f"Could not connect to Docker: {e}") from e
        return self._client

    def sample(self) -> list[Record]:
        """Take one stats sample of every running container."""
        client = self._get_client()
        try:
            containers = client.containers.list()
        except docker.errors.DockerException as e:
            raise CollectionError(f"Could not list containers: {e}") from e

        records: list[Record] = []
        for container in containers:
            record = self._sample_container(container)
            if record is not None:
                records.append(record)
        return records

    def _sample_container(
        self, container: docker.models.containers.Container
    ) -> Record | None:
        try:
            stats = container.stats(stream=False)
        except docker.errors.NotFound:
            logger.debug(f"Container {container.short_id} stopped before sampling")
            return None
        except docker.errors.APIError as e:
            logger.warning(f"Could not read stats for {container.short_id}: {e}")
            return None
        return stats_to_record(container.short_id, container.name, stats)

    def collect(self) -> Path:
        records = self.sample()
        timestamp = datetime.now().strftime(FILENAME_TIMESTAMP_FORMAT)
        path = self.output_dir / f"{timestamp}_{SNAPSHOT_FILE_TAG}.json"
        # Write under a non-snapshot name first so a concurrent load never sees a partial file
        partial = path.with_name(path.name + ".part")

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(partial, "w", encoding="utf-8") as f:
                for record in records:
                    f.write(record.model_dump_json(by_alias=True) + "\n")
            partial.replace(path)
        except OSError as e:
            raise CollectionError(
                f"Could not write snapshot {path}: {e}", {"path": str(path)}
            ) from e

        logger.info(f"Docker stats saved to {path} ({len(records)} containers)")
        return path

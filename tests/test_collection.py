"""Tests for snapshot collectors."""

import sys
from unittest.mock import MagicMock

import docker.errors
import psutil
import pytest

from statscope.catalog.parser import parse_snapshot_file
from statscope.collection.command import CommandCollector
from statscope.collection.docker_collector import (
    DockerStatsSnapshotCollector,
    calculate_cpu_percent,
    calculate_memory,
    stats_to_record,
)
from statscope.collection.factory import create_collector
from statscope.core.config import CollectionConfig
from statscope.core.exceptions import CollectionError


def create_mock_stats(
    memory_usage: int = 200 * 1024 * 1024,
    memory_limit: int = 1024 * 1024 * 1024,
    inactive_file: int = 0,
) -> dict:
    """Create a mock Docker stats response."""
    return {
        "memory_stats": {
            "usage": memory_usage,
            "limit": memory_limit,
            "stats": {"inactive_file": inactive_file},
        },
        "cpu_stats": {
            "cpu_usage": {"total_usage": 1_000_000_000},
            "system_cpu_usage": 10_000_000_000,
            "online_cpus": 2,
        },
        "precpu_stats": {
            "cpu_usage": {"total_usage": 900_000_000},
            "system_cpu_usage": 9_000_000_000,
        },
        "networks": {
            "eth0": {"rx_bytes": 1000, "tx_bytes": 2000},
            "eth1": {"rx_bytes": 200, "tx_bytes": 0},
        },
        "blkio_stats": {
            "io_service_bytes_recursive": [
                {"op": "Read", "value": 4096},
                {"op": "Write", "value": 1_500_000},
            ],
        },
        "pids_stats": {"current": 5},
    }


def is_running(pid: int) -> bool:
    """True if the process exists and is not a zombie waiting to be reaped."""
    try:
        return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
    except psutil.NoSuchProcess:
        return False


class TestCommandCollector:
    """Tests for CommandCollector."""

    def test_success(self, tmp_path):
        """Test that a zero exit status succeeds and runs in the configured directory."""
        collector = CommandCollector(
            ["sh", "-c", "echo saved; touch marker"], cwd=tmp_path, timeout_seconds=30
        )
        assert collector.collect() is None
        assert (tmp_path / "marker").exists()

    def test_non_zero_exit(self):
        """Test that a failing command raises CollectionError."""
        with pytest.raises(CollectionError) as exc_info:
            CommandCollector(["sh", "-c", "echo ssh failed >&2; exit 1"]).collect()
        assert exc_info.value.details["returncode"] == 1
        assert "ssh failed" in str(exc_info.value)

    def test_timeout(self):
        """Test that a hung command is reported as a timeout."""
        with pytest.raises(CollectionError, match="timed out"):
            CommandCollector(["sleep", "30"], timeout_seconds=0.5).collect()

    @pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")
    def test_timeout_kills_descendants(self, tmp_path):
        """Test that processes started by a timed-out command do not outlive it."""
        collector = CommandCollector(
            ["bash", "-c", "sleep 30 & echo $! > grandchild.pid; wait"],
            cwd=tmp_path,
            timeout_seconds=1,
        )
        with pytest.raises(CollectionError, match="timed out"):
            collector.collect()

        pid = int((tmp_path / "grandchild.pid").read_text())
        assert not is_running(pid)

    def test_missing_executable(self):
        """Test that a spawn failure is reported."""
        with pytest.raises(CollectionError):
            CommandCollector(["statscope-no-such-command"]).collect()

    def test_empty_command(self):
        """Test that an empty command is rejected."""
        with pytest.raises(ValueError):
            CommandCollector([])

    def test_is_available(self, tmp_path):
        """Test executable lookup on PATH and relative to the working directory."""
        assert CommandCollector(["sh", "run.sh"]).is_available() is True
        assert CommandCollector(["statscope-no-such-command"]).is_available() is False

        (tmp_path / "collect.sh").write_text("#!/bin/sh\n")
        assert CommandCollector(["./collect.sh"], cwd=tmp_path).is_available() is True
        assert CommandCollector(["./missing.sh"], cwd=tmp_path).is_available() is False

class TestDockerStatsConversion:
    """Tests for converting Docker API stats into records."""

    def test_cpu_percent(self):
        """Test the CPU delta computation."""
        # 0.1s of CPU over 1s of system time on 2 CPUs = 20%
        assert calculate_cpu_percent(create_mock_stats()) == pytest.approx(20.0)

    def test_cpu_percent_without_precpu(self):
        """Test that a missing previous sample gives 0%."""
        stats = create_mock_stats()
        stats["precpu_stats"] = {}
        stats["cpu_stats"]["system_cpu_usage"] = 0
        assert calculate_cpu_percent(stats) == 0.0

    def test_memory_excludes_inactive_cache(self):
        """Test that inactive page cache is not counted as usage."""
        usage, limit = calculate_memory(
            create_mock_stats(memory_usage=300 * 1024 * 1024, inactive_file=100 * 1024 * 1024)
        )
        assert usage == 200 * 1024 * 1024
        assert limit == 1024 * 1024 * 1024

    def test_stats_to_record(self):
        """Test the docker stats text rendering."""
        record = stats_to_record("abc123def456", "/web", create_mock_stats())

        assert record.id == "abc123def456"
        assert record.container == "abc123def456"
        assert record.name == "web"
        assert record.cpu_perc == "20.00%"
        assert record.mem_perc == "19.53%"
        assert record.mem_usage == "200MiB / 1GiB"
        assert record.net_io == "1.2kB / 2kB"
        assert record.block_io == "4.1kB / 1.5MB"
        assert record.pids == "5"


class TestDockerStatsSnapshotCollector:
    """Tests for DockerStatsSnapshotCollector with a mocked client."""

    def create_container(self, short_id: str, name: str, stats: dict | Exception):
        container = MagicMock()
        container.short_id = short_id
        container.name = name
        if isinstance(stats, Exception):
            container.stats.side_effect = stats
        else:
            container.stats.return_value = stats
        return container

    def test_collect_writes_parseable_snapshot(self, tmp_path):
        """Test that the written file loads back through the parser."""
        client = MagicMock()
        client.containers.list.return_value = [
            self.create_container("aaa", "web", create_mock_stats()),
            self.create_container("bbb", "db", create_mock_stats()),
        ]
        collector = DockerStatsSnapshotCollector(tmp_path / "stats", client=client)

        path = collector.collect()

        assert path.parent == tmp_path / "stats"
        assert path.name.endswith("_docker_stats.json")
        snapshot = parse_snapshot_file(path, timestamp_policy="reject")
        assert [r.id for r in snapshot.records] == ["aaa", "bbb"]
        assert snapshot.records[0].cpu_perc == "20.00%"
        assert not list((tmp_path / "stats").glob("*.part"))

    def test_stopped_container_skipped(self, tmp_path):
        """Test that a container vanishing mid-collection is skipped."""
        client = MagicMock()
        client.containers.list.return_value = [
            self.create_container("aaa", "web", docker.errors.NotFound("gone")),
            self.create_container("bbb", "db", create_mock_stats()),
        ]
        collector = DockerStatsSnapshotCollector(tmp_path, client=client)

        assert [r.id for r in collector.sample()] == ["bbb"]

    def test_daemon_error(self, tmp_path):
        """Test that a failing daemon raises CollectionError."""
        client = MagicMock()
        client.containers.list.side_effect = docker.errors.DockerException("daemon down")
        collector = DockerStatsSnapshotCollector(tmp_path, client=client)

        with pytest.raises(CollectionError):
            collector.collect()

    def test_is_available(self, tmp_path):
        """Test availability through ping."""
        client = MagicMock()
        assert DockerStatsSnapshotCollector(tmp_path, client=client).is_available() is True
        client.ping.side_effect = docker.errors.DockerException("no socket")
        assert DockerStatsSnapshotCollector(tmp_path, client=client).is_available() is False


class TestCreateCollector:
    """Tests for the collector factory."""

    def test_modes(self, tmp_path):
        """Test that each mode creates the matching collector."""
        assert create_collector(CollectionConfig(mode="none"), tmp_path) is None

        command = create_collector(
            CollectionConfig(mode="command", command=["sh", "x.sh"], timeout_seconds=9), tmp_path
        )
        assert isinstance(command, CommandCollector)
        assert command.command == ["sh", "x.sh"]
        assert command.timeout_seconds == 9

        docker_collector = create_collector(CollectionConfig(mode="docker"), tmp_path)
        assert isinstance(docker_collector, DockerStatsSnapshotCollector)
        assert docker_collector.output_dir == tmp_path

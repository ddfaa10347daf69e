"""Base collector abstract class for snapshot collection.

A collector produces new snapshot files in the stats directory. The refresh
worker runs it before each catalog reload.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class BaseCollector(ABC):
    """Abstract base class for snapshot collectors.

    Implementations:
    - CommandCollector: Runs an external command (e.g. a script that copies
      `docker stats` output from a remote host)
    - DockerStatsSnapshotCollector: Samples local containers through the Docker SDK
    """

    @abstractmethod
    def collect(self) -> Path | None:
        """Produce one new snapshot.

        Returns:
            Path of the written snapshot file when the collector knows it

        Raises:
            CollectionError: If collection fails or exceeds its deadline
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this collector can run on the current system.

        Returns:
            True if the collector's prerequisites are met
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this collector."""
        pass

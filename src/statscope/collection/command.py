"""Collection through an external command."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

import psutil

from statscope.collection.base import BaseCollector
from statscope.core.constants import DEFAULT_COLLECTION_TIMEOUT_SECONDS
from statscope.core.exceptions import CollectionError

logger = logging.getLogger(__name__)

TERMINATE_GRACE_SECONDS = 3.0


def terminate_process_tree(process: subprocess.Popen, grace_seconds: float) -> None:
    """Terminate a child process and every process it started.

    Descendants are listed before the parent is signalled; once the parent
    exits they are reparented and no longer reachable through it.
    Processes still alive after SIGTERM and `grace_seconds` get SIGKILL.
    """
    try:
        children = psutil.Process(process.pid).children(recursive=True)
    except psutil.NoSuchProcess:
        children = []

    for child in children:
        try:
            child.terminate()
        except psutil.NoSuchProcess:
            pass
    process.terminate()

    _, alive = psutil.wait_procs(children, timeout=grace_seconds)
    for child in alive:
        logger.debug(f"Killing collection subprocess {child.pid}")
        try:
            child.kill()
        except psutil.NoSuchProcess:
            pass
    try:
        process.wait(timeout=grace_seconds)
    except subprocess.TimeoutExpired:
        process.kill()


class CommandCollector(BaseCollector):
    """Runs an external command that drops snapshot files into the stats directory.

    When the command exceeds `timeout_seconds` it is terminated together with
    everything it started (e.g. an `ssh` spawned by a shell script), so a hung
    collector cannot stall later refreshes or pile up orphans.

    Example:
        ```python
        collector = CommandCollector(["bash", "run.sh"], timeout_seconds=60)
        collector.collect()
        ```
    """

    def __init__(
        self,
        command: list[str],
        cwd: Path | None = None,
        timeout_seconds: float = DEFAULT_COLLECTION_TIMEOUT_SECONDS,
    ) -> None:
        if not command:
            raise ValueError("Collection command must not be empty")
        self.command = list(command)
        self.cwd = cwd
        self.timeout_seconds = timeout_seconds

    @property
    def name(self) -> str:
        return "command"

    def is_available(self) -> bool:
        """Check that the command's executable can be found."""
        if "/" in self.command[0]:
            executable = Path(self.command[0])
            if not executable.is_absolute() and self.cwd is not None:
                executable = Path(self.cwd) / executable
            return executable.exists()
        return shutil.which(self.command[0]) is not None

    def collect(self) -> Path | None:
        logger.debug(f"Running collection command: {' '.join(self.command)}")
        try:
            process = subprocess.Popen(
                self.command,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise CollectionError(
                f"Could not run collection command: {e}", {"command": self.command}
            ) from e

        try:
            stdout, stderr = process.communicate(timeout=self.timeout_seconds)
        except subprocess.TimeoutExpired as e:
            terminate_process_tree(process, TERMINATE_GRACE_SECONDS)
            try:
                process.communicate(timeout=TERMINATE_GRACE_SECONDS)
            except subprocess.TimeoutExpired:
                logger.warning("Output of the timed-out collection command is still open")
            raise CollectionError(
                f"Collection command timed out after {self.timeout_seconds}s",
                {"command": self.command, "timeout_seconds": self.timeout_seconds},
            ) from e

        if process.returncode != 0:
            raise CollectionError(
                f"Collection command exited with status {process.returncode}: "
                f"{stderr.strip()}",
                {"command": self.command, "returncode": process.returncode},
            )

        if stdout.strip():
            logger.info(stdout.strip())
        return None

"""Configuration models and loading utilities.

Supports YAML and JSON configuration files with schema validation.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from statscope.core.constants import (
    DEFAULT_COLLECTION_TIMEOUT_SECONDS,
    DEFAULT_PORT,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    SNAPSHOT_FILE_SUFFIX,
)

logger = logging.getLogger(__name__)


class CollectionConfig(BaseModel):
    """How new snapshot files are produced before each refresh.

    Attributes:
        mode: "none" only reloads the directory, "command" runs an external
            command, "docker" samples the local Docker daemon
        command: Command for the "command" mode
        cwd: Working directory for the command
        timeout_seconds: Deadline for one collection step
    """

    mode: Literal["none", "command", "docker"] = Field(default="none")
    command: list[str] = Field(default_factory=lambda: ["bash", "run.sh"])
    cwd: Path | None = Field(default=None)
    timeout_seconds: int = Field(
        default=DEFAULT_COLLECTION_TIMEOUT_SECONDS, ge=1, description="Collection deadline"
    )


class ViewerConfig(BaseModel):
    """Top-level statscope configuration.

    This is the main configuration loaded from YAML/JSON files.
    """

    stats_dir: Path = Field(default=Path("./stats"), description="Directory of snapshot files")
    file_suffix: str = Field(default=SNAPSHOT_FILE_SUFFIX, min_length=1)
    timestamp_policy: Literal["now", "mtime", "reject"] = Field(
        default="now", description="Fallback for file names without a timestamp"
    )
    refresh_interval_seconds: int = Field(default=DEFAULT_REFRESH_INTERVAL_SECONDS, ge=1)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    collection: CollectionConfig = Field(default_factory=CollectionConfig)


_READERS = {".yaml": yaml.safe_load, ".yml": yaml.safe_load, ".json": json.load}


def load_config(path: Path | str) -> ViewerConfig:
    """Load and validate a statscope configuration file.

    A file that is empty or holds only comments gives the defaults.

    Args:
        path: Path to YAML or JSON configuration file

    Returns:
        Validated ViewerConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported
        pydantic.ValidationError: If config is invalid
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(
            f"Unsupported config format: {path.suffix}. Use .yaml, .yml, or .json"
        )
    with open(path, encoding="utf-8") as f:
        data = reader(f)

    config = ViewerConfig.model_validate(data or {})
    logger.debug(
        f"Loaded config from {path}: stats_dir={config.stats_dir}, "
        f"collection={config.collection.mode}"
    )
    return config

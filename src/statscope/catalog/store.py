"""Process-wide holder of the active catalog.

Readers take one catalog reference per query through `current`. Refreshes
build a complete new Catalog without holding the lock and publish it with a
single assignment, so a reader sees either the old or the new catalog, never
a mix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from statscope.core.exceptions import CatalogLoadError, EmptyCatalogError
from statscope.core.schemas import Catalog

logger = logging.getLogger(__name__)


class CatalogStore:
    """Owns the currently published Catalog.

    Example:
        ```python
        store = CatalogStore(lambda: load_catalog("stats/"))
        store.initialize()
        catalog = store.current
        ```
    """

    def __init__(self, loader: Callable[[], Catalog]) -> None:
        """Initialize the store.

        Args:
            loader: Zero-argument callable that loads a fresh Catalog
        """
        self._loader = loader
        self._catalog: Catalog | None = None
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def current(self) -> Catalog:
        """The published catalog."""
        catalog = self._catalog
        if catalog is None:
            raise RuntimeError("CatalogStore has not been initialized")
        return catalog

    @property
    def generation(self) -> int:
        """Number of catalogs published so far."""
        return self._generation

    def initialize(self) -> Catalog:
        """Perform the startup load.

        Raises:
            CatalogLoadError: If the snapshot directory cannot be read
            EmptyCatalogError: If no snapshot could be loaded
        """
        catalog = self._loader()
        if len(catalog) == 0:
            raise EmptyCatalogError(
                f"No snapshot files found in {catalog.source_dir}",
                {"path": str(catalog.source_dir)},
            )
        self._publish(catalog)
        logger.info(f"Loaded {len(catalog)} snapshot files")
        return catalog

    def refresh(self) -> bool:
        """Reload the catalog and publish it if it holds at least one snapshot.

        A failed or empty reload keeps the previous catalog.

        Returns:
            True if a new catalog was published
        """
        try:
            catalog = self._loader()
        except CatalogLoadError as e:
            logger.warning(f"Error refreshing snapshot files: {e}")
            return False

        if len(catalog) == 0:
            logger.warning(
                f"No snapshot files found in {catalog.source_dir}, keeping previous catalog"
            )
            return False

        self._publish(catalog)
        logger.info(f"Refreshed {len(catalog)} snapshot files")
        return True

    def _publish(self, catalog: Catalog) -> None:
        with self._lock:
            self._catalog = catalog
            self._generation += 1

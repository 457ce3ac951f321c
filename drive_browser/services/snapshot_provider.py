"""Process-wide, build-once holder of the loaded snapshot."""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from drive_browser.config import Settings
from drive_browser.database.ancestor_index import AncestorIndex
from drive_browser.database.item_store import ItemStore, LoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriveSnapshot:
    """Item store plus the ancestor index derived from it."""

    store: ItemStore
    index: AncestorIndex

    @property
    def version(self) -> str:
        return self.store.version


class SnapshotProvider:
    """
    Lazily loads the snapshot the first time it is needed.

    The build runs at most once: concurrent first callers wait on a lock and
    share the result. A failed load is remembered and re-raised on every call
    until reload() is used or the process restarts.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the provider. Nothing is read until get() is called.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self._lock = threading.Lock()
        self._snapshot: Optional[DriveSnapshot] = None
        self._error: Optional[LoadError] = None

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def error(self) -> Optional[LoadError]:
        return self._error

    def get(self) -> DriveSnapshot:
        """
        Get the loaded snapshot, building it on first use.

        Returns:
            DriveSnapshot

        Raises:
            LoadError: If the snapshot could not be loaded
        """
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._lock:
            if self._snapshot is None:
                if self._error is not None:
                    raise self._error
                self._snapshot = self._build()
            return self._snapshot

    def reload(self) -> DriveSnapshot:
        """
        Discard the current snapshot (or remembered failure) and load again.

        Returns:
            Freshly loaded DriveSnapshot
        """
        with self._lock:
            previous = self._snapshot
            self._snapshot = None
            self._error = None
            try:
                snapshot = self._build()
                self._snapshot = snapshot
            finally:
                if previous is not None:
                    previous.store.close()
        return snapshot

    def _build(self) -> DriveSnapshot:
        snapshot_path = self.settings.get_absolute_snapshot_path()
        logger.info(f"Loading snapshot: {snapshot_path}")

        try:
            store = ItemStore.load(
                snapshot_path,
                folder_kind=self.settings.folder_kind,
                columns=self.settings.get_snapshot_columns(),
                threads=self.settings.duckdb_threads,
                memory_limit=self.settings.duckdb_memory_limit
            )
        except LoadError as e:
            logger.error(f"Snapshot load failed: {e}")
            self._error = e
            raise

        try:
            index = AncestorIndex.build(store, self.settings.root_folder_id)
        except Exception:
            store.close()
            raise
        return DriveSnapshot(store=store, index=index)

    def close(self):
        """Release the loaded snapshot, if any."""
        with self._lock:
            if self._snapshot is not None:
                self._snapshot.store.close()
                self._snapshot = None

"""Folder-only parent lookup used to build breadcrumb chains."""

import logging
from typing import NamedTuple, Optional

from drive_browser.database.item_store import ItemStore

logger = logging.getLogger(__name__)


class AncestorEntry(NamedTuple):
    """A folder (or the root) as seen by the breadcrumb walk."""

    id: str
    name: str
    parent_id: Optional[str]


class AncestorIndex:
    """Read-only mapping of folder id -> AncestorEntry."""

    def __init__(self, entries: dict[str, AncestorEntry]):
        self._entries = entries

    @classmethod
    def build(cls, store: ItemStore, root_id: str) -> "AncestorIndex":
        """
        Derive the index from a loaded store.

        Args:
            store: Loaded item store
            root_id: Root folder id, always included

        Returns:
            AncestorIndex over every folder plus the root
        """
        df = store.folder_rows(root_id)

        entries = {}
        for row in df.iter_rows(named=True):
            # First occurrence wins if the snapshot repeats an id.
            if row["id"] is None or row["id"] in entries:
                continue
            entries[row["id"]] = AncestorEntry(row["id"], row["name"], row["parent_id"])

        logger.info(f"Ancestor index built with {len(entries):,} folders")
        return cls(entries)

    def lookup(self, folder_id: str) -> Optional[AncestorEntry]:
        return self._entries.get(folder_id)

    def __contains__(self, folder_id: object) -> bool:
        return folder_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

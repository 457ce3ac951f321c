"""Breadcrumb chain resolution over the ancestor index."""

import logging
from typing import Optional

from drive_browser.database.ancestor_index import AncestorIndex
from drive_browser.models.item import Breadcrumb

logger = logging.getLogger(__name__)


class BreadcrumbResolver:
    """Walks parent links from a folder up to the root."""

    def __init__(self, index: AncestorIndex, root_id: str, root_label: str):
        """
        Initialize the resolver.

        Args:
            index: Ancestor index of folders plus the root
            root_id: Configured root folder id
            root_label: Display name used for the root entry
        """
        self.index = index
        self.root_id = root_id
        self.root_label = root_label

    def resolve(self, folder_id: Optional[str]) -> list[Breadcrumb]:
        """
        Build the root-first breadcrumb chain for a folder.

        The walk stops at the root, at an empty parent, at an id the index does
        not know, or when it revisits a folder. In every case the ancestors found
        so far are returned; a broken chain is never an error.

        Args:
            folder_id: Target folder id

        Returns:
            Breadcrumbs from the root down to the target folder
        """
        root = Breadcrumb(id=self.root_id, name=self.root_label)
        if folder_id == self.root_id:
            return [root]

        # Collected target-first, reversed at the end.
        ancestors: list[Breadcrumb] = []
        visited: set[str] = set()
        current = folder_id

        while current and current != self.root_id:
            if current in visited:
                logger.warning(f"Parent cycle at folder {current} while resolving breadcrumbs for {folder_id}")
                break
            visited.add(current)

            entry = self.index.lookup(current)
            if entry is None:
                if current != folder_id:
                    logger.warning(f"Broken parent link to {current} while resolving breadcrumbs for {folder_id}")
                break

            ancestors.append(Breadcrumb(id=entry.id, name=entry.name))
            current = entry.parent_id

        ancestors.reverse()
        return [root] + ancestors

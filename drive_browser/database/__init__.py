"""Data layer for the Drive Browser."""

from drive_browser.database.item_store import ItemStore, LoadError
from drive_browser.database.ancestor_index import AncestorIndex, AncestorEntry

__all__ = ["ItemStore", "LoadError", "AncestorIndex", "AncestorEntry"]

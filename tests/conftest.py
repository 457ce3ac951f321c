"""Pytest configuration and fixtures."""

import pytest
import polars as pl
from pathlib import Path
import tempfile

from drive_browser.config import Settings
from drive_browser.database.item_store import ItemStore
from drive_browser.database.ancestor_index import AncestorIndex
from drive_browser.services.cache_service import CacheService
from drive_browser.services.snapshot_provider import DriveSnapshot
from tests.fixtures.generate_test_data import FOLDER_KIND, generate_drive_tree, write_snapshot

ROOT_ID = "root"
ROOT_LABEL = "Home"

SNAPSHOT_SCHEMA = {"i": pl.Utf8, "n": pl.Utf8, "m": pl.Utf8, "p": pl.Utf8}


def _row(item_id, name, kind, parent):
    return {"i": item_id, "n": name, "m": kind, "p": parent}


@pytest.fixture
def test_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def drive_rows():
    """A small drive tree with deep, broken and cyclic folder chains."""
    return [
        _row(ROOT_ID, "My Drive", FOLDER_KIND, None),
        _row("fA", "Alpha", FOLDER_KIND, ROOT_ID),
        _row("fX", "Report.pdf", "application/pdf", "fA"),
        _row("fB", "Beta", FOLDER_KIND, "fA"),
        _row("fBetaFile", "Beta", "text/plain", "fA"),
        _row("fZ", "Zeta", FOLDER_KIND, "fA"),
        _row("fAnnual", "Annual.pdf", "application/pdf", "fA"),
        _row("n1", "Notes.txt", "text/plain", "fA"),
        _row("n2", "Notes.txt", "text/plain", "fA"),
        _row("fC", "Gamma", FOLDER_KIND, "fB"),
        _row("pct", "100% done.txt", "text/plain", "fC"),
        _row("fOrphan", "Orphan", FOLDER_KIND, "missing-parent"),
        _row("fLost", "Lost", FOLDER_KIND, "fOrphan"),
        _row("cyc1", "Loop One", FOLDER_KIND, "cyc2"),
        _row("cyc2", "Loop Two", FOLDER_KIND, "cyc1"),
    ]


@pytest.fixture
def drive_snapshot_file(test_data_dir, drive_rows):
    """Parquet snapshot of the small drive tree."""
    df = pl.DataFrame(drive_rows, schema=SNAPSHOT_SCHEMA)
    return write_snapshot(df, test_data_dir / "data" / "drive_index.parquet")


@pytest.fixture
def large_snapshot_file(test_data_dir):
    """Parquet snapshot of a generated tree with many matching file names."""
    df = generate_drive_tree(root_id=ROOT_ID, num_folders=30, num_files=600)
    return write_snapshot(df, test_data_dir / "data" / "large_index.parquet")


@pytest.fixture
def make_settings():
    """Build isolated settings pointing at a snapshot file."""
    def _make(snapshot_path, **overrides) -> Settings:
        values = {
            "snapshot_path": str(snapshot_path),
            "root_folder_id": ROOT_ID,
            "root_label": ROOT_LABEL,
            "redis_enabled": False,
            "duckdb_threads": 1,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def settings(make_settings, drive_snapshot_file):
    return make_settings(drive_snapshot_file)


@pytest.fixture
def item_store(drive_snapshot_file):
    """Item store loaded from the small drive tree."""
    store = ItemStore.load(drive_snapshot_file, folder_kind=FOLDER_KIND, threads=1)
    yield store
    store.close()


@pytest.fixture
def ancestor_index(item_store):
    return AncestorIndex.build(item_store, ROOT_ID)


@pytest.fixture
def drive_snapshot(item_store, ancestor_index):
    return DriveSnapshot(store=item_store, index=ancestor_index)


@pytest.fixture
async def cache_service(settings):
    """Cache service with Redis disabled."""
    service = CacheService(settings)
    yield service
    if service.client:
        await service.close()

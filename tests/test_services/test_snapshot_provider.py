"""Tests for the snapshot provider."""

import threading
from concurrent.futures import ThreadPoolExecutor

import duckdb
import pytest
import polars as pl

from drive_browser.database import item_store as item_store_module
from drive_browser.database.item_store import LoadError
from drive_browser.services import snapshot_provider as snapshot_provider_module
from drive_browser.services.snapshot_provider import SnapshotProvider
from tests.fixtures.generate_test_data import FOLDER_KIND, write_snapshot


def test_get_loads_once(settings):
    """Test repeated calls return the same snapshot."""
    provider = SnapshotProvider(settings)
    assert not provider.loaded

    first = provider.get()
    second = provider.get()

    assert first is second
    assert provider.loaded
    assert "fA" in first.index
    provider.close()


def test_concurrent_first_calls_build_once(settings, monkeypatch):
    """Test concurrent first requests share a single load."""
    calls = []
    original_load = item_store_module.ItemStore.load.__func__
    gate = threading.Event()

    def counting_load(cls, *args, **kwargs):
        calls.append(1)
        gate.wait(timeout=5)
        return original_load(cls, *args, **kwargs)

    monkeypatch.setattr(item_store_module.ItemStore, "load", classmethod(counting_load))

    provider = SnapshotProvider(settings)
    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(provider.get) for _ in range(8)]
        gate.set()
        results = [f.result() for f in futures]

    assert len(calls) == 1
    assert all(r is results[0] for r in results)
    provider.close()


def test_load_failure_is_remembered(make_settings, test_data_dir):
    """Test a failed load keeps failing until reload."""
    snapshot_path = test_data_dir / "later.parquet"
    provider = SnapshotProvider(make_settings(snapshot_path))

    with pytest.raises(LoadError):
        provider.get()
    assert provider.error is not None

    df = pl.DataFrame(
        [{"i": "root", "n": "Root", "m": FOLDER_KIND, "p": None}],
        schema={"i": pl.Utf8, "n": pl.Utf8, "m": pl.Utf8, "p": pl.Utf8}
    )
    write_snapshot(df, snapshot_path)

    # Still failing: the first error sticks for the life of the provider.
    with pytest.raises(LoadError):
        provider.get()

    snapshot = provider.reload()
    assert provider.error is None
    assert snapshot.store.count() == 1
    assert provider.get() is snapshot
    provider.close()


def test_reload_replaces_snapshot(settings):
    provider = SnapshotProvider(settings)
    first = provider.get()
    second = provider.reload()

    assert second is not first
    assert second.store.count() > 0
    provider.close()


def test_fresh_providers_are_independent(settings):
    """Test each provider owns its own store."""
    a = SnapshotProvider(settings)
    b = SnapshotProvider(settings)
    assert a.get().store is not b.get().store
    a.close()
    b.close()


def test_failed_reload_closes_previous_store(make_settings, drive_snapshot_file):
    """Test the replaced store is closed even when the new load fails."""
    provider = SnapshotProvider(make_settings(drive_snapshot_file))
    first = provider.get()

    drive_snapshot_file.unlink()
    with pytest.raises(LoadError):
        provider.reload()

    assert not provider.loaded
    assert provider.error is not None
    with pytest.raises(duckdb.Error):
        first.store.count()


def test_index_build_failure_closes_store(settings, monkeypatch):
    """Test a store is closed when its ancestor index cannot be built."""
    closed = []
    original_close = item_store_module.ItemStore.close

    def recording_close(self):
        closed.append(self)
        original_close(self)

    def failing_build(cls, store, root_id):
        raise RuntimeError("index build failed")

    monkeypatch.setattr(item_store_module.ItemStore, "close", recording_close)
    monkeypatch.setattr(snapshot_provider_module.AncestorIndex, "build", classmethod(failing_build))

    provider = SnapshotProvider(settings)
    with pytest.raises(RuntimeError):
        provider.get()

    assert len(closed) == 1
    assert not provider.loaded

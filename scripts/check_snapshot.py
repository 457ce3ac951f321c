#!/usr/bin/env python3
"""
Check Snapshot

Loads the configured snapshot the same way the API does and prints what it
found. Use this to debug column naming or a broken parent chain.

Usage:
    python scripts/check_snapshot.py
    python scripts/check_snapshot.py --folder 1aB2cD3eF
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from drive_browser.config import get_settings
from drive_browser.database.item_store import LoadError
from drive_browser.services.breadcrumb_resolver import BreadcrumbResolver
from drive_browser.services.snapshot_provider import SnapshotProvider


def main():
    parser = argparse.ArgumentParser(description="Load the drive snapshot and report on it")
    parser.add_argument('--folder', help='Folder id to resolve breadcrumbs for')
    args = parser.parse_args()

    settings = get_settings()

    print("="*70)
    print("SNAPSHOT CHECK")
    print("="*70)
    print(f"  Snapshot: {settings.get_absolute_snapshot_path()}")
    print(f"  Columns:  {settings.get_snapshot_columns()}")
    print(f"  Root id:  {settings.root_folder_id}")

    provider = SnapshotProvider(settings)
    try:
        snapshot = provider.get()
    except LoadError as e:
        print(f"\n  ✗ Load failed: {e}")
        sys.exit(1)

    print(f"\n  ✓ Items:   {snapshot.store.count():,}")
    print(f"  ✓ Folders: {len(snapshot.index):,}")
    print(f"  ✓ Version: {snapshot.version}")

    root_children = snapshot.store.children_of(settings.root_folder_id)
    print(f"\n  Root folder has {len(root_children):,} direct children")
    if len(root_children) == 0:
        print("  ! Root id has no children; check ROOT_FOLDER_ID and the parent column")

    if args.folder:
        resolver = BreadcrumbResolver(snapshot.index, settings.root_folder_id, settings.root_label)
        chain = resolver.resolve(args.folder)
        print(f"\n  Breadcrumbs for {args.folder}:")
        print("    " + " > ".join(b.name for b in chain))

    provider.close()
    print("="*70)


if __name__ == "__main__":
    main()

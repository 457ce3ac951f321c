#!/usr/bin/env python3
"""
Create Sample Snapshot

Writes a synthetic drive index parquet file with the column layout the API
expects (i, n, m, p). Useful for local development without a real export.

Usage:
    # Default: 200 folders, 5,000 files into the configured snapshot path
    python scripts/create_sample_snapshot.py

    # Bigger tree to a specific file
    python scripts/create_sample_snapshot.py --folders 2000 --files 100000 --output /tmp/drive.parquet
"""

import sys
import argparse
import random
from pathlib import Path
import polars as pl

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from drive_browser.config import get_settings

FOLDER_NAMES = [
    "Projects", "Archive", "Photos", "Invoices", "Reports", "Drafts",
    "Scans", "Contracts", "Presentations", "Meetings", "Research", "Backups",
]

FILE_TYPES = [
    ("application/pdf", "pdf"),
    ("image/jpeg", "jpg"),
    ("text/plain", "txt"),
    ("video/mp4", "mp4"),
    ("application/vnd.google-apps.document", None),
    ("application/vnd.google-apps.spreadsheet", None),
]

FILE_STEMS = ["report", "notes", "summary", "scan", "photo", "budget", "minutes", "draft", "invoice"]


def create_sample_snapshot(
    output: Path,
    num_folders: int = 200,
    num_files: int = 5000,
    seed: int = 0
):
    """
    Generate a random drive tree and write it as parquet.

    Args:
        output: Destination parquet file
        num_folders: Folders below the root
        num_files: Files spread over all folders
        seed: Random seed
    """
    settings = get_settings()
    rng = random.Random(seed)
    root_id = settings.root_folder_id

    print(f"{'='*70}")
    print(f"CREATE SAMPLE SNAPSHOT")
    print(f"{'='*70}")
    print(f"Output:   {output}")
    print(f"Root id:  {root_id}")
    print(f"Folders:  {num_folders:,}")
    print(f"Files:    {num_files:,}")
    print(f"{'='*70}\n")

    rows = [{"i": root_id, "n": "Drive", "m": settings.folder_kind, "p": None}]
    folder_ids = [root_id]

    for i in range(num_folders):
        folder_id = f"fld{i:06d}"
        rows.append({
            "i": folder_id,
            "n": f"{rng.choice(FOLDER_NAMES)} {rng.randint(2010, 2025)}",
            "m": settings.folder_kind,
            "p": rng.choice(folder_ids),
        })
        folder_ids.append(folder_id)

    for i in range(num_files):
        kind, extension = rng.choice(FILE_TYPES)
        name = f"{rng.choice(FILE_STEMS)}_{i:06d}"
        if extension:
            name = f"{name}.{extension}"
        rows.append({
            "i": f"doc{i:07d}",
            "n": name.capitalize(),
            "m": kind,
            "p": rng.choice(folder_ids),
        })

    df = pl.DataFrame(rows, schema={"i": pl.Utf8, "n": pl.Utf8, "m": pl.Utf8, "p": pl.Utf8})

    output.parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(output, compression="snappy")

    size_mb = output.stat().st_size / (1024 * 1024)
    print(f"Written: {output} ({len(df):,} rows, {size_mb:.2f} MB)")
    print(f"\nBrowse it:")
    print(f"  API: http://localhost:8000/api/search?folderId=ROOT")
    print(f"{'='*70}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Create a synthetic drive index snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('--output', help='Output parquet file (defaults to the configured snapshot path)')
    parser.add_argument('--folders', type=int, default=200, help='Number of folders')
    parser.add_argument('--files', type=int, default=5000, help='Number of files')
    parser.add_argument('--seed', type=int, default=0, help='Random seed')

    args = parser.parse_args()

    if args.folders < 0 or args.files < 0:
        print("ERROR: --folders and --files must not be negative")
        sys.exit(1)

    output = Path(args.output) if args.output else get_settings().get_absolute_snapshot_path()

    create_sample_snapshot(
        output,
        num_folders=args.folders,
        num_files=args.files,
        seed=args.seed
    )


if __name__ == "__main__":
    main()

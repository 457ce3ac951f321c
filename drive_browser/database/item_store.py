"""In-memory item store loaded from a parquet snapshot of the drive tree."""

import logging
import time
from pathlib import Path
from typing import Optional, Union
import duckdb
import polars as pl

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "kind", "parent_id")

DEFAULT_COLUMNS = {
    "id": "i",
    "name": "n",
    "kind": "m",
    "parent_id": "p",
}


class LoadError(Exception):
    """Raised when a snapshot cannot be read into the item store."""


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class ItemStore:
    """Immutable collection of drive items held in an in-memory DuckDB table."""

    def __init__(
        self,
        conn: duckdb.DuckDBPyConnection,
        snapshot_path: Path,
        folder_kind: str,
        version: str
    ):
        """
        Wrap an already populated connection. Use ItemStore.load() instead.

        Args:
            conn: In-memory DuckDB connection holding the `items` table
            snapshot_path: Snapshot the table was read from
            folder_kind: Kind value that marks folder items
            version: Fingerprint of the snapshot file
        """
        self.conn = conn
        self.snapshot_path = snapshot_path
        self.folder_kind = folder_kind
        self.version = version

    @classmethod
    def load(
        cls,
        snapshot_path: Union[str, Path],
        folder_kind: str = "application/vnd.google-apps.folder",
        columns: Optional[dict[str, str]] = None,
        threads: int = 4,
        memory_limit: str = "2GB"
    ) -> "ItemStore":
        """
        Read a parquet snapshot into memory.

        Args:
            snapshot_path: Path to the parquet snapshot file
            folder_kind: Kind value that marks folder items
            columns: Mapping of item field -> snapshot column name
            threads: DuckDB worker threads
            memory_limit: DuckDB memory limit

        Returns:
            Loaded ItemStore

        Raises:
            LoadError: If the snapshot is missing, unreadable or lacks columns
        """
        snapshot_path = Path(snapshot_path)
        columns = {**DEFAULT_COLUMNS, **(columns or {})}

        if not snapshot_path.is_file():
            raise LoadError(f"Snapshot not found: {snapshot_path}")

        start = time.time()
        stat = snapshot_path.stat()
        version = f"{stat.st_mtime_ns:x}-{stat.st_size:x}"

        # Store order is the polars row index; extra snapshot columns are ignored.
        try:
            schema = pl.read_parquet_schema(snapshot_path)
            missing = [columns[field] for field in REQUIRED_FIELDS if columns[field] not in schema]
            if missing:
                raise LoadError(
                    f"Snapshot {snapshot_path} is missing required columns: {', '.join(missing)}"
                )

            frame = (
                pl.read_parquet(snapshot_path, columns=sorted(set(columns[f] for f in REQUIRED_FIELDS)))
                .select([pl.col(columns[field]).alias(field) for field in REQUIRED_FIELDS])
                .with_row_index("ord")
            )
        except (pl.exceptions.PolarsError, OSError) as e:
            raise LoadError(f"Could not read snapshot {snapshot_path}: {e}") from e

        conn = duckdb.connect(":memory:")
        try:
            conn.execute(f"SET threads TO {int(threads)}")
            conn.execute(f"SET memory_limit = {_quote_literal(memory_limit)}")

            conn.register("snapshot_frame", frame)
            conn.execute("""
                CREATE TABLE items AS
                SELECT
                    CAST(id AS VARCHAR) AS id,
                    COALESCE(CAST(name AS VARCHAR), '') AS name,
                    CAST(kind AS VARCHAR) AS kind,
                    CAST(parent_id AS VARCHAR) AS parent_id,
                    ord
                FROM snapshot_frame
                WHERE id IS NOT NULL
            """)
            conn.unregister("snapshot_frame")
            conn.execute("CREATE INDEX items_parent_idx ON items (parent_id)")
            conn.execute("CREATE INDEX items_id_idx ON items (id)")
        except duckdb.Error as e:
            conn.close()
            raise LoadError(f"Could not read snapshot {snapshot_path}: {e}") from e

        store = cls(conn, snapshot_path, folder_kind, version)
        duration = time.time() - start
        logger.info(f"Loaded {store.count():,} items from {snapshot_path} in {duration:.3f}s")
        return store

    def _query(self, query: str, params: list) -> pl.DataFrame:
        # A cursor per query keeps concurrent readers off a shared connection state.
        with self.conn.cursor() as cur:
            return cur.execute(query, params).pl()

    def count(self) -> int:
        """Total number of items in the store."""
        with self.conn.cursor() as cur:
            return cur.execute("SELECT COUNT(*) FROM items").fetchone()[0]

    def children_of(self, folder_id: str) -> pl.DataFrame:
        """
        Get the direct children of a folder.

        Folders sort before files, then by name; equal keys keep store order.

        Args:
            folder_id: Parent folder id

        Returns:
            Polars DataFrame with id, name, kind columns
        """
        return self._query(
            """
                SELECT id, name, kind
                FROM items
                WHERE parent_id = ?
                ORDER BY
                    CASE WHEN kind = ? THEN 0 ELSE 1 END,
                    name,
                    ord
            """,
            [folder_id, self.folder_kind],
        )

    def search(self, term: str, limit: int = 200) -> pl.DataFrame:
        """
        Find items whose name contains `term`, ignoring case.

        The term is matched literally; LIKE wildcards have no meaning here.

        Args:
            term: Substring to look for
            limit: Maximum results to return

        Returns:
            Polars DataFrame with id, name, kind, parent_id columns in store order
        """
        return self._query(
            f"""
                SELECT id, name, kind, parent_id
                FROM items
                WHERE contains(lower(name), lower(?))
                ORDER BY ord
                LIMIT {int(limit)}
            """,
            [term],
        )

    def folder_rows(self, root_id: str) -> pl.DataFrame:
        """
        Get the rows the ancestor index is built from.

        Args:
            root_id: Root folder id, included even when not tagged as a folder

        Returns:
            Polars DataFrame with id, name, parent_id columns
        """
        return self._query(
            """
                SELECT id, name, parent_id
                FROM items
                WHERE kind = ? OR id = ?
                ORDER BY ord
            """,
            [self.folder_kind, root_id],
        )

    def close(self):
        """Close database connection."""
        if self.conn:
            self.conn.close()
            logger.info("Item store connection closed")

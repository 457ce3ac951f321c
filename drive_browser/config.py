"""Configuration management for the Drive Browser API."""

from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # API Settings
    api_title: str = "Drive Browser API"
    api_version: str = "1.0.0"
    api_description: str = "Browse and search a snapshot of a cloud-drive archive"
    debug: bool = False

    # Snapshot Settings
    # Relative paths resolve against the project directory first, then the cwd.
    snapshot_path: str = "data/drive_index.parquet"
    eager_load: bool = False

    # Drive tree
    root_folder_id: str = "1QXot2uayhesa6XHFoi3bVvrtCQojCvxG"
    root_label: str = "Home"
    root_sentinel: str = "ROOT"
    folder_kind: str = "application/vnd.google-apps.folder"

    # Snapshot column names
    column_id: str = "i"
    column_name: str = "n"
    column_kind: str = "m"
    column_parent: str = "p"

    # Query Settings
    search_limit: int = 200

    # DuckDB Settings
    duckdb_threads: int = 4
    duckdb_memory_limit: str = "2GB"

    # Redis Settings
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_enabled: bool = False
    redis_ttl_default: int = 3600  # 1 hour
    redis_ttl_browse: int = 7200  # 2 hours
    redis_ttl_search: int = 3600  # 1 hour

    # CORS Settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Error payload
    error_message: str = "Server error."

    def get_snapshot_columns(self) -> dict[str, str]:
        """Map logical item fields to the column names used by the snapshot."""
        return {
            "id": self.column_id,
            "name": self.column_name,
            "kind": self.column_kind,
            "parent_id": self.column_parent,
        }

    def get_absolute_snapshot_path(self) -> Path:
        """
        Get absolute path to the snapshot file.

        If snapshot_path is absolute, it is used as-is. A relative path is
        resolved against the project directory when the file exists there,
        otherwise against the current working directory.

        Returns:
            Absolute path to the parquet snapshot
        """
        snapshot = Path(self.snapshot_path)

        if snapshot.is_absolute():
            return snapshot

        project_snapshot = Path(__file__).parent.parent / self.snapshot_path
        if project_snapshot.exists():
            return project_snapshot.resolve()

        return (Path.cwd() / self.snapshot_path).resolve()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

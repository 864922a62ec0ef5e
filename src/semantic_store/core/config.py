"""Configuration for the record store with pydantic-based settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path.home() / ".semantic_store"
DEFAULT_TABLE_DIR = "records_db"


class TableConfig(BaseSettings):
    """Configuration for the on-disk record table."""

    model_config = SettingsConfigDict(
        env_prefix="SEMANTIC_STORE_TABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mode: str = Field(
        default="persistent",
        description="Table mode: 'persistent' or 'ephemeral'",
    )
    path: Optional[str] = Field(
        default=None,
        description="Directory holding the table files (for persistent mode)",
    )

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str) -> str:
        """Validate table mode."""
        valid_modes = {"persistent", "ephemeral"}
        if v not in valid_modes:
            raise ValueError(f"mode must be one of {valid_modes}, got {v}")
        return v

    @model_validator(mode="after")
    def validate_mode_requirements(self) -> "TableConfig":
        """Fill in the default data directory for persistent mode."""
        if self.mode == "persistent" and not self.path:
            self.path = str(DEFAULT_DATA_DIR / DEFAULT_TABLE_DIR)
        return self

    def is_persistent_mode(self) -> bool:
        """Check if the table is stored on disk."""
        return self.mode == "persistent"


class EmbeddingConfig(BaseSettings):
    """Configuration for the sentence-embedding model."""

    model_config = SettingsConfigDict(
        env_prefix="SEMANTIC_STORE_EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    model_name: str = Field(
        default="all-MiniLM-L6-v2", description="sentence-transformers model name"
    )
    device: Optional[str] = Field(
        default=None, description="Torch device, e.g. 'cpu' or 'cuda' (auto if unset)"
    )
    normalize: bool = Field(
        default=True, description="L2-normalize vectors so cosine distance is in [0, 2]"
    )


class StoreConfig(BaseModel):
    """Configuration for the semantic record store.

    Attributes:
        embedding_dimension: Dimension of record vectors
        table_name: Name of the record table
        list_limit: Maximum number of records returned by list
        search_limit: Number of nearest records returned by search
        missing_update_policy: What update does for an unknown id
            - "create": silently insert a new record under that id
            - "reject": fail with RecordNotFoundError
        table: Record table configuration
        embedding: Embedding model configuration
    """

    embedding_dimension: int = Field(
        default=384, gt=0, description="Dimension of record vectors"
    )
    table_name: str = Field(
        default="records",
        min_length=3,
        max_length=63,
        description="Name of the record table",
    )
    list_limit: int = Field(
        default=500, gt=0, description="Maximum number of records returned by list"
    )
    search_limit: int = Field(
        default=10, gt=0, description="Number of nearest records returned by search"
    )
    missing_update_policy: Literal["create", "reject"] = Field(
        default="create", description="Behavior of update for an unknown id"
    )
    table: Optional[TableConfig] = Field(
        default=None, description="Record table configuration"
    )
    embedding: Optional[EmbeddingConfig] = Field(
        default=None, description="Embedding model configuration"
    )

    @model_validator(mode="after")
    def validate_nested(self) -> "StoreConfig":
        """Initialize nested configs from the environment when not provided."""
        if self.table is None:
            self.table = TableConfig()
        if self.embedding is None:
            self.embedding = EmbeddingConfig()
        return self


def get_table_config() -> TableConfig:
    """Get record table configuration from environment variables."""
    return TableConfig()


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    import os

    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "yes", "1", "on")

"""Factory functions for creating record tables from config."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from semantic_store.core.config import StoreConfig
    from semantic_store.core.storage.table import RecordTable


def open_record_table(config: "StoreConfig") -> "RecordTable":
    """Open the record table described by a store config.

    Args:
        config: Store configuration (table name, dimension, table settings)

    Returns:
        Record table instance (ChromaRecordTable, persistent or ephemeral)

    Raises:
        InitializationError: If the table cannot be opened or created
    """
    from semantic_store.core.storage.chroma import ChromaRecordTable

    return ChromaRecordTable.from_config(
        name=config.table_name,
        dimension=config.embedding_dimension,
        config=config.table,
    )

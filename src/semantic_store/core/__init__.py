"""Core components for the semantic record store."""

from semantic_store.core.config import EmbeddingConfig, StoreConfig, TableConfig
from semantic_store.core.models import Record, SearchHit
from semantic_store.core.store import SemanticStore

__all__ = [
    "SemanticStore",
    "StoreConfig",
    "EmbeddingConfig",
    "TableConfig",
    "Record",
    "SearchHit",
]

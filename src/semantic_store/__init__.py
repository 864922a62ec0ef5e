"""
Semantic Store

A local, embedded store of short text records, each indexed by a sentence
embedding of its content.

Features:
- Add, list, update and delete records addressed by an opaque id
- Semantic nearest-neighbor search with optional inclusive date bounds
- Persistent ChromaDB table created on first use
- Tagged-result service boundary with a one-time initialization gate
"""

from semantic_store.core.config import StoreConfig
from semantic_store.core.models import Record, SearchHit
from semantic_store.core.store import SemanticStore
from semantic_store.service import StoreService, StoreState

__version__ = "0.1.0"
__all__ = [
    "SemanticStore",
    "StoreConfig",
    "Record",
    "SearchHit",
    "StoreService",
    "StoreState",
]

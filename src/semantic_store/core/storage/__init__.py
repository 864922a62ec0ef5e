"""Storage backends for record data.

- RecordTable: Abstract interface for the persistent record table
- ChromaRecordTable: ChromaDB implementation
- Predicate: Structured filters for deletes and searches
"""

from semantic_store.core.storage.filters import Condition, Predicate
from semantic_store.core.storage.table import RecordTable
from semantic_store.core.storage.chroma import ChromaRecordTable
from semantic_store.core.storage.config import open_record_table

__all__ = [
    "Condition",
    "Predicate",
    "RecordTable",
    "ChromaRecordTable",
    "open_record_table",
]

"""ChromaDB record table implementation."""

import logging
from pathlib import Path
from typing import Any

import chromadb
from chromadb.api import ClientAPI
from chromadb.config import Settings

from semantic_store.core.config import TableConfig, get_table_config
from semantic_store.core.models import Record
from semantic_store.core.storage.filters import Predicate
from semantic_store.core.storage.table import RecordTable
from semantic_store.core.utils import now_ms
from semantic_store.exceptions import InitializationError, StorageError

logger = logging.getLogger(__name__)

SEED_RECORD_ID = "seed_record_init"
SEED_RECORD_TEXT = "seed_record_text_init"
SCAN_BATCH_SIZE = 1000


class ChromaRecordTable(RecordTable):
    """Record table stored in a ChromaDB collection (cosine space).

    The record id doubles as the Chroma document id and is also kept in
    the metadata so that deletes can be expressed as predicates.
    """

    def __init__(
        self,
        collection: chromadb.Collection,
        dimension: int,
        client: ClientAPI | None = None,
    ) -> None:
        self._collection: chromadb.Collection | None = collection
        self._dimension = dimension
        self._client = client

    @classmethod
    def open(
        cls,
        name: str = "records",
        dimension: int = 384,
        path: str | None = None,
        mode: str = "persistent",
        client: ClientAPI | None = None,
    ) -> "ChromaRecordTable":
        """Open the table if present, otherwise create it.

        A new table is shaped by writing one seed record and deleting it
        straight away, which fixes the vector dimension of the collection.

        Raises:
            InitializationError: On any I/O failure or dimension mismatch
        """
        try:
            if client is None:
                client = cls._create_client(mode, path)
            if name in cls._collection_names(client):
                logger.info("Opening existing table: %s", name)
                collection = client.get_collection(name=name)
                stored = (collection.metadata or {}).get("dimension")
                if stored is not None and int(stored) != dimension:
                    raise InitializationError(
                        f"Table {name} stores {stored}-dimensional vectors, "
                        f"expected {dimension}"
                    )
                return cls(collection, dimension, client)

            logger.info("Table %s not found, creating new table", name)
            collection = client.create_collection(
                name=name,
                metadata={"hnsw:space": "cosine", "dimension": dimension},
            )
            table = cls(collection, dimension, client)
            seed_vector = [1.0] + [0.0] * (dimension - 1)
            table.append(
                [
                    Record(
                        id=SEED_RECORD_ID,
                        text=SEED_RECORD_TEXT,
                        timestamp=now_ms(),
                        vector=seed_vector,
                    )
                ]
            )
            table.delete_where(Predicate.id_equals(SEED_RECORD_ID))
            logger.info("Table %s created from seed record", name)
            return table
        except InitializationError:
            raise
        except Exception as e:
            raise InitializationError(f"Failed to open record table {name}: {e}") from e

    @classmethod
    def from_config(
        cls, name: str, dimension: int, config: TableConfig | None = None
    ) -> "ChromaRecordTable":
        """Open the table described by a TableConfig (environment by default)."""
        if config is None:
            config = get_table_config()
        if config.is_persistent_mode():
            return cls.open(name=name, dimension=dimension, path=config.path, mode="persistent")
        return cls.open(name=name, dimension=dimension, mode="ephemeral")

    @staticmethod
    def _create_client(mode: str, path: str | None) -> ClientAPI:
        settings = Settings(anonymized_telemetry=False)
        if mode == "persistent" and path:
            Path(path).mkdir(parents=True, exist_ok=True)
            logger.info("Connecting to record table directory %s", path)
            return chromadb.PersistentClient(path=path, settings=settings)
        return chromadb.Client(settings=settings)

    @staticmethod
    def _collection_names(client: ClientAPI) -> list[str]:
        # Depending on the chromadb release this yields names or Collection objects.
        return [c if isinstance(c, str) else c.name for c in client.list_collections()]

    def get_collection(self) -> chromadb.Collection:
        if self._collection is None:
            raise StorageError("Record table is closed")
        return self._collection

    @property
    def dimension(self) -> int:
        return self._dimension

    def append(self, records: list[Record]) -> None:
        if not records:
            return
        for record in records:
            if record.vector is None or len(record.vector) != self._dimension:
                size = None if record.vector is None else len(record.vector)
                raise StorageError(
                    f"Record {record.id} has vector dimension {size}, "
                    f"table expects {self._dimension}"
                )
        collection = self.get_collection()
        try:
            collection.add(
                ids=[r.id for r in records],
                embeddings=[r.vector for r in records],
                documents=[r.text for r in records],
                metadatas=[r.to_metadata() for r in records],
            )
        except Exception as e:
            raise StorageError(f"Append failed: {e}") from e

    def delete_where(self, predicate: Predicate) -> None:
        collection = self.get_collection()
        try:
            collection.delete(where=predicate.to_where())
        except Exception as e:
            raise StorageError(f"Delete where {predicate} failed: {e}") from e

    def scan_all(self, limit: int | None = None) -> list[Record]:
        collection = self.get_collection()
        records: list[Record] = []
        offset = 0
        try:
            while limit is None or len(records) < limit:
                batch_size = SCAN_BATCH_SIZE
                if limit is not None:
                    batch_size = min(batch_size, limit - len(records))
                raw = collection.get(
                    limit=batch_size,
                    offset=offset,
                    include=["documents", "metadatas"],
                )
                ids = raw.get("ids") or []
                documents = raw.get("documents") or [None] * len(ids)
                metadatas = raw.get("metadatas") or [{}] * len(ids)
                records.extend(
                    Record.from_row(record_id, doc, meta)
                    for record_id, doc, meta in zip(ids, documents, metadatas)
                )
                if len(ids) < batch_size:
                    break
                offset += len(ids)
        except Exception as e:
            raise StorageError(f"Scan failed: {e}") from e
        return records

    def search_nearest(
        self,
        query_vector: list[float],
        limit: int,
        predicate: Predicate | None = None,
    ) -> list[tuple[Record, float]]:
        if len(query_vector) != self._dimension:
            raise StorageError(
                f"Query vector dimension {len(query_vector)}, "
                f"table expects {self._dimension}"
            )
        collection = self.get_collection()
        kwargs: dict[str, Any] = {
            "query_embeddings": [query_vector],
            "n_results": limit,
            "include": ["distances", "metadatas", "documents"],
        }
        if predicate is not None:
            kwargs["where"] = predicate.to_where()

        try:
            if collection.count() == 0:
                return []
            raw = collection.query(**kwargs)

            hits: list[tuple[Record, float]] = []
            if raw["ids"] and raw["ids"][0]:
                ids = raw["ids"][0]
                distances = raw["distances"][0] if raw.get("distances") else [0.0] * len(ids)
                documents = raw["documents"][0] if raw.get("documents") else [None] * len(ids)
                metadatas = raw["metadatas"][0] if raw.get("metadatas") else [{}] * len(ids)

                for record_id, dist, doc, meta in zip(ids, distances, documents, metadatas):
                    hits.append((Record.from_row(record_id, doc, meta), float(dist)))
        except Exception as e:
            raise StorageError(f"Search failed: {e}") from e

        hits.sort(key=lambda hit: hit[1])
        return hits

    def get(self, record_id: str) -> Record | None:
        collection = self.get_collection()
        try:
            raw = collection.get(
                ids=[record_id], include=["documents", "metadatas", "embeddings"]
            )
            if not raw["ids"]:
                return None
            embeddings = raw.get("embeddings")
            vector = embeddings[0] if embeddings is not None and len(embeddings) else None
            documents = raw.get("documents")
            metadatas = raw.get("metadatas")
            return Record.from_row(
                raw["ids"][0],
                documents[0] if documents else None,
                metadatas[0] if metadatas else None,
                vector,
            )
        except Exception as e:
            raise StorageError(f"Get {record_id} failed: {e}") from e

    def count(self) -> int:
        try:
            return self.get_collection().count()
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Count failed: {e}") from e

    def close(self) -> None:
        self._client = None
        self._collection = None

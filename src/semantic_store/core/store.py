"""Semantic record store combining an embedder with a record table."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from semantic_store.core.config import StoreConfig
from semantic_store.core.models import Record, SearchHit
from semantic_store.core.storage.filters import Predicate
from semantic_store.core.storage.table import RecordTable
from semantic_store.core.utils import generate_record_id, now_ms
from semantic_store.embedding.base import EmbeddingFunction
from semantic_store.exceptions import (
    InitializationError,
    RecordNotFoundError,
    RecordValidationError,
    StorageError,
)

logger = logging.getLogger(__name__)

DEMO_TOPICS = ("Mars", "Jupiter", "Saturn", "ancient ruins", "deep sea")


class SemanticStore:
    """Persistent collection of short texts indexed by their embeddings.

    Every write embeds the text and every search embeds the query. Rows are
    never modified in place: update deletes the old row and inserts a new
    one under the same id.

    The store is built once during an explicit initialization phase
    (``SemanticStore.open``) and then shared by every request handler.

    Example:
        store = SemanticStore.open(StoreConfig())

        item = store.add("buy milk")
        store.add("buy bread")
        hits = store.search("dairy")
        store.update(item.id, "buy oat milk")
        store.delete(item.id)
    """

    def __init__(
        self,
        embedding_func: EmbeddingFunction,
        table: RecordTable,
        config: StoreConfig | None = None,
        clock: Callable[[], int] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.config = config or StoreConfig()
        self._embedding_func = embedding_func
        self._table = table
        self._clock = clock or now_ms
        self._id_factory = id_factory or generate_record_id

    @classmethod
    def open(
        cls,
        config: StoreConfig | None = None,
        embedding_func: EmbeddingFunction | None = None,
        table: RecordTable | None = None,
        **kwargs: Any,
    ) -> "SemanticStore":
        """Load the embedding model and open the record table.

        Raises:
            InitializationError: If either step fails or the dimensions disagree
        """
        config = config or StoreConfig()
        if embedding_func is None:
            from semantic_store.embedding.default import DefaultEmbedding

            assert config.embedding is not None
            embedding_func = DefaultEmbedding.from_config(config.embedding)

        logger.info("Initializing embedding pipeline")
        try:
            embedding_func.load()
        except Exception as e:
            raise InitializationError(f"Failed to load embedding model: {e}") from e
        if embedding_func.dimension != config.embedding_dimension:
            raise InitializationError(
                f"Embedding model produces {embedding_func.dimension}-dimensional "
                f"vectors, store expects {config.embedding_dimension}"
            )

        if table is None:
            from semantic_store.core.storage.config import open_record_table

            table = open_record_table(config)
        elif table.dimension != config.embedding_dimension:
            raise InitializationError(
                f"Record table holds {table.dimension}-dimensional vectors, "
                f"store expects {config.embedding_dimension}"
            )
        logger.info("Record table ready")
        return cls(embedding_func, table, config=config, **kwargs)

    @property
    def embedding_func(self) -> EmbeddingFunction:
        return self._embedding_func

    @property
    def table(self) -> RecordTable:
        return self._table

    @staticmethod
    def _require_text(text: str) -> None:
        if not text or not text.strip():
            raise RecordValidationError("Text must not be empty")

    @staticmethod
    def _require_id(record_id: str) -> None:
        if not record_id:
            raise RecordValidationError("Record id must not be empty")

    def add(self, text: str) -> Record:
        """Embed and store a new record."""
        self._require_text(text)
        vector = self._embedding_func.embed(text)
        record = Record(
            id=self._id_factory(),
            text=text,
            timestamp=self._clock(),
            vector=vector,
        )
        self._table.append([record])
        logger.debug("Added record %s", record.id)
        return record

    def list_records(self, limit: int | None = None) -> list[Record]:
        """Return stored records, newest first."""
        records = self._table.scan_all()
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records[: limit or self.config.list_limit]

    def search(
        self,
        query: str,
        start_ms: int | None = None,
        end_ms: int | None = None,
        limit: int | None = None,
    ) -> list[SearchHit]:
        """Find the records closest in meaning to the query.

        Bounds are inclusive and applied literally, so start_ms > end_ms
        simply matches nothing. A blank query returns no results without
        touching the embedder.
        """
        if not query or not query.strip():
            return []
        vector = self._embedding_func.embed(query)
        predicate = Predicate.timestamp_between(start_ms, end_ms)
        hits = self._table.search_nearest(
            vector, limit or self.config.search_limit, predicate
        )
        return [SearchHit(record=record, distance=distance) for record, distance in hits]

    def update(self, record_id: str, text: str) -> Record:
        """Replace the text of a record, keeping its id.

        The old row is deleted and a new one appended. This is not atomic:
        if the append fails the previous row is written back before the
        error is raised.

        Raises:
            RecordNotFoundError: If the id is unknown and the store is
                configured with missing_update_policy="reject"
        """
        self._require_id(record_id)
        self._require_text(text)
        vector = self._embedding_func.embed(text)
        timestamp = self._clock()

        previous = self._table.get(record_id)
        if previous is None:
            if self.config.missing_update_policy == "reject":
                raise RecordNotFoundError(f"No record with id {record_id}")
            logger.debug("Update of unknown id %s creates a new record", record_id)

        record = Record(
            id=record_id,
            text=text,
            timestamp=timestamp,
            created_at=previous.created_at if previous else timestamp,
            vector=vector,
        )
        self._table.delete_where(Predicate.id_equals(record_id))
        logger.debug("Deleted old record %s", record_id)
        try:
            self._table.append([record])
        except StorageError:
            if previous is not None:
                self._restore(previous)
            raise
        logger.debug("Added updated record %s", record_id)
        return record

    def _restore(self, previous: Record) -> None:
        try:
            self._table.append([previous])
            logger.warning("Update of %s failed, previous record restored", previous.id)
        except StorageError:
            logger.error("Update of %s failed and the previous record was lost", previous.id)

    def delete(self, record_id: str) -> str:
        """Delete a record. Deleting an unknown id is not an error."""
        self._require_id(record_id)
        self._table.delete_where(Predicate.id_equals(record_id))
        logger.debug("Deleted record %s", record_id)
        return record_id

    def seed_demo(
        self,
        count: int = 100,
        days: int = 90,
        rng: random.Random | None = None,
    ) -> int:
        """Insert generated demo records spread over the last ``days`` days."""
        if count <= 0:
            raise RecordValidationError("count must be positive")
        rng = rng or random.Random()
        now = datetime.now(timezone.utc)
        logger.info("Generating %d demo records", count)

        texts = [
            f"Demo task {i + 1}: Explore {DEMO_TOPICS[i % len(DEMO_TOPICS)]} "
            f"with keyword {generate_record_id()[:6]}"
            for i in range(count)
        ]
        vectors = self._embedding_func.embed_batch(texts)

        records = []
        for text, vector in zip(texts, vectors):
            day = now - timedelta(days=rng.randrange(days))
            moment = day.replace(
                hour=rng.randrange(24),
                minute=rng.randrange(60),
                second=rng.randrange(60),
                microsecond=0,
            )
            timestamp = int(min(moment, now).timestamp() * 1000)
            records.append(
                Record(id=self._id_factory(), text=text, timestamp=timestamp, vector=vector)
            )

        self._table.append(records)
        logger.info("%d demo records added", len(records))
        return len(records)

    def stats(self) -> dict[str, Any]:
        """Get store statistics."""
        return {
            "total_records": self._table.count(),
            "dimension": self._table.dimension,
            "table_name": self.config.table_name,
        }

    def close(self) -> None:
        """Clean up resources."""
        self._table.close()

    def __enter__(self) -> "SemanticStore":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
        return None

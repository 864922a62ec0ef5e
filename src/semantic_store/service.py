"""Request/response boundary in front of the semantic record store.

The service owns the one-time initialization gate and turns every store
call into a tagged result (``success`` plus payload or ``error``) so that
nothing raises past this layer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum, auto
from typing import Any, Optional, TypeVar

from pydantic import BaseModel

from semantic_store.core.config import StoreConfig
from semantic_store.core.models import Record, SearchHit
from semantic_store.core.storage.table import RecordTable
from semantic_store.core.store import SemanticStore
from semantic_store.core.utils import date_end_ms, date_start_ms
from semantic_store.embedding.base import EmbeddingFunction
from semantic_store.exceptions import (
    InitializationError,
    NotReadyError,
    RecordValidationError,
    SemanticStoreError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreState(Enum):
    """Lifecycle of the initialization gate."""

    INITIALIZING = auto()
    READY = auto()
    FAILED = auto()


class RecordItem(BaseModel):
    id: str
    text: str
    timestamp: int
    created_at: int

    @classmethod
    def from_record(cls, record: Record) -> "RecordItem":
        return cls(**record.to_dict())


class SearchResultItem(RecordItem):
    score: float
    similarity: float

    @classmethod
    def from_hit(cls, hit: SearchHit) -> "SearchResultItem":
        return cls(**hit.to_dict())


class OperationResult(BaseModel):
    success: bool
    error: Optional[str] = None


class ItemResult(OperationResult):
    item: Optional[RecordItem] = None


class ItemsResult(OperationResult):
    items: Optional[list[RecordItem]] = None


class SearchResults(OperationResult):
    results: Optional[list[SearchResultItem]] = None


class DeleteResult(OperationResult):
    id: Optional[str] = None


class SeedResult(OperationResult):
    count: Optional[int] = None


def resolve_date_bounds(
    start_date: str | None, end_date: str | None
) -> tuple[int | None, int | None]:
    """Convert optional YYYY-MM-DD bounds to inclusive UTC millisecond bounds.

    Raises:
        RecordValidationError: If a date is malformed or start is after end
    """
    try:
        start_ms = date_start_ms(start_date) if start_date else None
        end_ms = date_end_ms(end_date) if end_date else None
    except ValueError as e:
        raise RecordValidationError(f"Dates must use the YYYY-MM-DD format: {e}") from e
    if start_ms is not None and end_ms is not None and start_ms > end_ms:
        raise RecordValidationError(
            f"Start date {start_date} is after end date {end_date}"
        )
    return start_ms, end_ms


class StoreService:
    """Asynchronous, never-raising facade over a SemanticStore.

    Example:
        service = StoreService()
        service.add_ready_listener(lambda: print("ready"))
        service.add_failure_listener(lambda msg: print("failed:", msg))
        await service.initialize()

        result = await service.add("buy milk")
        if result.success:
            print(result.item.id)
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        embedding_func: EmbeddingFunction | None = None,
        table: RecordTable | None = None,
        **store_kwargs: Any,
    ) -> None:
        self.config = config or StoreConfig()
        self._embedding_func = embedding_func
        self._table = table
        self._store_kwargs = store_kwargs
        self._store: SemanticStore | None = None
        self._state = StoreState.INITIALIZING
        self._started = False
        self._init_error: str | None = None
        self._ready_listeners: list[Callable[[], None]] = []
        self._failure_listeners: list[Callable[[str], None]] = []

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    @property
    def initialization_error(self) -> str | None:
        return self._init_error

    @property
    def store(self) -> SemanticStore | None:
        return self._store

    def add_ready_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback fired once the store is ready."""
        self._ready_listeners.append(callback)

    def add_failure_listener(self, callback: Callable[[str], None]) -> None:
        """Register a callback fired with the message if initialization fails."""
        self._failure_listeners.append(callback)

    async def initialize(self) -> bool:
        """Load the embedder and open the table, exactly once.

        Failure is terminal: later calls return False without retrying.
        """
        if self._started:
            return self.is_ready
        self._started = True

        try:
            self._store = await asyncio.to_thread(
                SemanticStore.open,
                self.config,
                self._embedding_func,
                self._table,
                **self._store_kwargs,
            )
        except Exception as e:
            message = str(e)
            self._state = StoreState.FAILED
            self._init_error = message
            logger.error("Failed to initialize store: %s", message)
            for callback in self._failure_listeners:
                try:
                    callback(message)
                except Exception:
                    logger.exception("Failure listener %r raised", callback)
            return False

        self._state = StoreState.READY
        logger.info("Store ready")
        for callback in self._ready_listeners:
            try:
                callback()
            except Exception:
                logger.exception("Ready listener %r raised", callback)
        return True

    def _require_store(self) -> SemanticStore:
        if self._state is StoreState.FAILED:
            raise InitializationError(f"Store initialization failed: {self._init_error}")
        if self._store is None:
            raise NotReadyError("Database or embedder not initialized.")
        return self._store

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(func, *args)

    async def add(self, text: str) -> ItemResult:
        try:
            store = self._require_store()
            record = await self._run(store.add, text)
        except SemanticStoreError as e:
            logger.error("Error adding record: %s", e)
            return ItemResult(success=False, error=str(e))
        return ItemResult(success=True, item=RecordItem.from_record(record))

    async def list_records(self) -> ItemsResult:
        try:
            store = self._require_store()
            records = await self._run(store.list_records)
        except SemanticStoreError as e:
            logger.error("Error listing records: %s", e)
            return ItemsResult(success=False, error=str(e), items=[])
        return ItemsResult(
            success=True, items=[RecordItem.from_record(r) for r in records]
        )

    async def search(
        self,
        query: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> SearchResults:
        try:
            store = self._require_store()
            if not query or not query.strip():
                return SearchResults(success=True, results=[])
            start_ms, end_ms = resolve_date_bounds(start_date, end_date)
            hits = await self._run(store.search, query, start_ms, end_ms)
        except SemanticStoreError as e:
            logger.error("Error searching records: %s", e)
            return SearchResults(success=False, error=str(e), results=[])
        return SearchResults(
            success=True, results=[SearchResultItem.from_hit(h) for h in hits]
        )

    async def update(self, record_id: str, text: str) -> ItemResult:
        try:
            store = self._require_store()
            record = await self._run(store.update, record_id, text)
        except SemanticStoreError as e:
            logger.error("Error updating record %s: %s", record_id, e)
            return ItemResult(success=False, error=str(e))
        return ItemResult(success=True, item=RecordItem.from_record(record))

    async def delete(self, record_id: str) -> DeleteResult:
        try:
            store = self._require_store()
            deleted = await self._run(store.delete, record_id)
        except SemanticStoreError as e:
            logger.error("Error deleting record %s: %s", record_id, e)
            return DeleteResult(success=False, error=str(e))
        return DeleteResult(success=True, id=deleted)

    async def seed_demo(self, count: int = 100) -> SeedResult:
        try:
            store = self._require_store()
            added = await self._run(store.seed_demo, count)
        except SemanticStoreError as e:
            logger.error("Error seeding demo data: %s", e)
            return SeedResult(success=False, error=str(e))
        return SeedResult(success=True, count=added)

    def close(self) -> None:
        if self._store is not None:
            self._store.close()

"""Record table interface for persistence and similarity search."""

from abc import ABC, abstractmethod

from semantic_store.core.models import Record
from semantic_store.core.storage.filters import Predicate


class RecordTable(ABC):
    """Abstract interface for record table backends.

    Rows are immutable: the only mutation paths are ``append`` and
    ``delete_where``. No uniqueness check is enforced on ``id``.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Vector dimension every row in the table shares."""
        ...

    @abstractmethod
    def append(self, records: list[Record]) -> None:
        """Add one or more records."""
        ...

    @abstractmethod
    def delete_where(self, predicate: Predicate) -> None:
        """Remove all records matching the predicate. No match is a no-op."""
        ...

    @abstractmethod
    def scan_all(self, limit: int | None = None) -> list[Record]:
        """Return up to ``limit`` records (all when omitted), unordered, without vectors."""
        ...

    @abstractmethod
    def search_nearest(
        self,
        query_vector: list[float],
        limit: int,
        predicate: Predicate | None = None,
    ) -> list[tuple[Record, float]]:
        """Return the closest records, ascending by distance."""
        ...

    @abstractmethod
    def get(self, record_id: str) -> Record | None:
        """Fetch one record, including its vector."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of live records."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Clean up resources."""
        ...

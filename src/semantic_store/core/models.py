"""Data models for stored records and search hits."""

from dataclasses import dataclass
from typing import Any

from semantic_store.core.utils import distance_to_similarity


@dataclass
class Record:
    """A stored text item.

    Attributes:
        id: Opaque unique identifier, the sole address for update/delete
        text: User-authored content
        timestamp: Milliseconds since epoch of the most recent write
        created_at: Milliseconds since epoch of the original creation
        vector: Embedding of text at last write; internal to the store
    """

    id: str
    text: str
    timestamp: int
    created_at: int | None = None
    vector: list[float] | None = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = self.timestamp

    def to_metadata(self) -> dict[str, Any]:
        """Scalar columns stored alongside the vector and text."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "created_at": self.created_at,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize for callers; the vector is never included."""
        return {
            "id": self.id,
            "text": self.text,
            "timestamp": self.timestamp,
            "created_at": self.created_at,
        }

    @classmethod
    def from_row(
        cls,
        record_id: str,
        document: str | None,
        metadata: dict[str, Any] | None,
        vector: Any = None,
    ) -> "Record":
        """Build a record from one table row."""
        metadata = metadata or {}
        timestamp = int(metadata.get("timestamp", 0))
        created_at = metadata.get("created_at")
        return cls(
            id=record_id,
            text=document or "",
            timestamp=timestamp,
            created_at=int(created_at) if created_at is not None else timestamp,
            vector=[float(x) for x in vector] if vector is not None else None,
        )


@dataclass
class SearchHit:
    """A record returned by semantic search with its raw distance."""

    record: Record
    distance: float

    @property
    def similarity(self) -> float:
        """Similarity in [0, 1] derived from the cosine distance."""
        return distance_to_similarity(self.distance)

    def to_dict(self) -> dict[str, Any]:
        data = self.record.to_dict()
        data["score"] = self.distance
        data["similarity"] = self.similarity
        return data

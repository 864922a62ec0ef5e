"""Tests for record models."""

from semantic_store.core.models import Record, SearchHit


class TestRecord:
    """Test cases for Record."""

    def test_created_at_defaults_to_timestamp(self) -> None:
        record = Record(id="r1", text="buy milk", timestamp=1000)
        assert record.created_at == 1000
        assert record.vector is None

    def test_to_dict_never_exposes_vector(self) -> None:
        record = Record(
            id="r1", text="buy milk", timestamp=2000, created_at=1000, vector=[0.1, 0.2]
        )
        data = record.to_dict()
        assert data == {
            "id": "r1",
            "text": "buy milk",
            "timestamp": 2000,
            "created_at": 1000,
        }
        assert "vector" not in record.to_metadata()

    def test_from_row(self) -> None:
        record = Record.from_row(
            "r1", "buy milk", {"timestamp": 2000, "created_at": 1000}, [0.5, 0.5]
        )
        assert record.id == "r1"
        assert record.text == "buy milk"
        assert record.timestamp == 2000
        assert record.created_at == 1000
        assert record.vector == [0.5, 0.5]

    def test_from_row_without_created_at(self) -> None:
        record = Record.from_row("r1", "buy milk", {"timestamp": 2000})
        assert record.created_at == 2000


class TestSearchHit:
    def test_similarity_and_dict(self) -> None:
        hit = SearchHit(record=Record(id="r1", text="buy milk", timestamp=1), distance=0.5)
        assert hit.similarity == 0.75
        data = hit.to_dict()
        assert data["score"] == 0.5
        assert data["similarity"] == 0.75
        assert data["id"] == "r1"

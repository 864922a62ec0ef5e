"""Tests for the ChromaDB record table."""

import chromadb
import pytest
from chromadb.config import Settings

from semantic_store.core.config import TableConfig
from semantic_store.core.models import Record
from semantic_store.core.storage import chroma
from semantic_store.core.storage.chroma import SEED_RECORD_ID, ChromaRecordTable
from semantic_store.core.storage.filters import Predicate
from semantic_store.exceptions import InitializationError, StorageError

from conftest import DIMENSION, unique_table_name


def unit(axis: int, dimension: int = DIMENSION) -> list[float]:
    vector = [0.0] * dimension
    vector[axis] = 1.0
    return vector


def make_record(record_id: str, timestamp: int, axis: int = 0) -> Record:
    return Record(id=record_id, text=f"text {record_id}", timestamp=timestamp, vector=unit(axis))


class TestOpen:
    def test_new_table_is_empty_and_shaped(self, table: ChromaRecordTable) -> None:
        assert table.count() == 0
        assert table.dimension == DIMENSION
        assert table.get(SEED_RECORD_ID) is None
        assert table.get_collection().metadata["dimension"] == DIMENSION

    def test_reopen_persistent_table_keeps_records(self, tmp_path) -> None:
        path = str(tmp_path / "records_db")
        name = unique_table_name()
        first = ChromaRecordTable.open(name=name, dimension=DIMENSION, path=path)
        first.append([make_record("r1", 1000)])

        second = ChromaRecordTable.open(name=name, dimension=DIMENSION, path=path)
        assert second.count() == 1
        assert second.get("r1").text == "text r1"

    def test_dimension_mismatch_on_reopen(self) -> None:
        client = chromadb.Client(Settings(anonymized_telemetry=False))
        name = unique_table_name()
        ChromaRecordTable.open(name=name, dimension=DIMENSION, client=client)
        with pytest.raises(InitializationError, match="expected 16"):
            ChromaRecordTable.open(name=name, dimension=16, client=client)

    def test_open_failure_is_initialization_error(self) -> None:
        with pytest.raises(InitializationError):
            ChromaRecordTable.open(name="x", dimension=DIMENSION, mode="ephemeral")

    def test_from_config(self, tmp_path) -> None:
        config = TableConfig(mode="persistent", path=str(tmp_path / "db"))
        table = ChromaRecordTable.from_config(unique_table_name(), DIMENSION, config)
        assert table.count() == 0
        assert (tmp_path / "db").is_dir()


class TestMutations:
    def test_append_and_get(self, table: ChromaRecordTable) -> None:
        table.append([make_record("r1", 1000, axis=2)])
        record = table.get("r1")
        assert record is not None
        assert record.timestamp == 1000
        assert record.created_at == 1000
        assert record.vector == pytest.approx(unit(2))

    def test_append_rejects_wrong_dimension(self, table: ChromaRecordTable) -> None:
        bad = Record(id="r1", text="bad", timestamp=1, vector=[1.0, 0.0])
        with pytest.raises(StorageError, match="dimension"):
            table.append([bad])
        assert table.count() == 0

    def test_append_rejects_missing_vector(self, table: ChromaRecordTable) -> None:
        with pytest.raises(StorageError):
            table.append([Record(id="r1", text="no vector", timestamp=1)])

    def test_delete_where_id(self, table: ChromaRecordTable) -> None:
        table.append([make_record("r1", 1000), make_record("r2", 2000)])
        table.delete_where(Predicate.id_equals("r1"))
        assert table.get("r1") is None
        assert table.get("r2") is not None

    def test_delete_missing_id_is_noop(self, table: ChromaRecordTable) -> None:
        table.append([make_record("r1", 1000)])
        table.delete_where(Predicate.id_equals("missing"))
        assert table.count() == 1

    def test_delete_where_timestamp_range(self, table: ChromaRecordTable) -> None:
        table.append([make_record(f"r{i}", i * 1000) for i in range(1, 5)])
        table.delete_where(Predicate.timestamp_between(2000, 3000))
        remaining = {r.id for r in table.scan_all()}
        assert remaining == {"r1", "r4"}

    def test_closed_table_raises(self, table: ChromaRecordTable) -> None:
        table.close()
        with pytest.raises(StorageError, match="closed"):
            table.scan_all()


class TestQueries:
    def test_scan_all_returns_every_record(self, table: ChromaRecordTable) -> None:
        table.append([make_record(f"r{i}", i) for i in range(5)])
        records = table.scan_all()
        assert {r.id for r in records} == {f"r{i}" for i in range(5)}
        assert all(r.vector is None for r in records)

    def test_scan_all_pages_through_batches(self, table: ChromaRecordTable, monkeypatch) -> None:
        monkeypatch.setattr(chroma, "SCAN_BATCH_SIZE", 2)
        table.append([make_record(f"r{i}", i) for i in range(5)])
        assert sorted(r.id for r in table.scan_all()) == [f"r{i}" for i in range(5)]
        assert len(table.scan_all(3)) == 3

    def test_malformed_row_raises_storage_error(self, table: ChromaRecordTable) -> None:
        table.get_collection().add(
            ids=["bad"],
            documents=["bad row"],
            embeddings=[unit(0)],
            metadatas=[{"id": "bad", "timestamp": "abc"}],
        )
        with pytest.raises(StorageError, match="Scan failed"):
            table.scan_all()
        with pytest.raises(StorageError, match="Search failed"):
            table.search_nearest(unit(0), 5)
        with pytest.raises(StorageError, match="Get bad failed"):
            table.get("bad")

    def test_search_empty_table(self, table: ChromaRecordTable) -> None:
        assert table.search_nearest(unit(0), 10) == []

    def test_search_ascending_distance(self, table: ChromaRecordTable) -> None:
        near = [0.9, 0.1] + [0.0] * (DIMENSION - 2)
        table.append(
            [
                make_record("far", 1, axis=1),
                Record(id="near", text="near", timestamp=2, vector=near),
                make_record("exact", 3, axis=0),
            ]
        )
        hits = table.search_nearest(unit(0), 3)
        assert [record.id for record, _ in hits] == ["exact", "near", "far"]
        distances = [distance for _, distance in hits]
        assert distances == sorted(distances)
        assert distances[0] == pytest.approx(0.0, abs=1e-5)

    def test_search_with_predicate(self, table: ChromaRecordTable) -> None:
        table.append([make_record("old", 1000), make_record("new", 5000)])
        hits = table.search_nearest(unit(0), 10, Predicate.timestamp_between(start_ms=2000))
        assert [record.id for record, _ in hits] == ["new"]

    def test_search_rejects_wrong_dimension(self, table: ChromaRecordTable) -> None:
        with pytest.raises(StorageError):
            table.search_nearest([1.0], 10)

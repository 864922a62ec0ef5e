"""Tests for record predicates."""

import pytest

from semantic_store.core.storage.filters import Condition, Predicate


class TestCondition:
    def test_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError, match="Unsupported predicate field"):
            Condition("text", "==", "milk")

    def test_id_supports_equality_only(self) -> None:
        with pytest.raises(ValueError):
            Condition("id", ">=", "abc")

    def test_value_types(self) -> None:
        with pytest.raises(ValueError):
            Condition("id", "==", 42)
        with pytest.raises(ValueError):
            Condition("timestamp", ">=", "1700000000000")
        with pytest.raises(ValueError):
            Condition("timestamp", ">=", True)

    def test_quotes_in_ids_are_not_interpolated(self) -> None:
        condition = Condition("id", "==", 'a" OR "1"="1')
        assert condition.to_where() == {"id": {"$eq": 'a" OR "1"="1'}}


class TestPredicate:
    def test_single_condition_where(self) -> None:
        assert Predicate.id_equals("abc").to_where() == {"id": {"$eq": "abc"}}

    def test_range_renders_and(self) -> None:
        predicate = Predicate.timestamp_between(10, 20)
        assert predicate is not None
        assert predicate.to_where() == {
            "$and": [{"timestamp": {"$gte": 10}}, {"timestamp": {"$lte": 20}}]
        }
        assert str(predicate) == "timestamp >= 10 AND timestamp <= 20"

    def test_open_ended_ranges(self) -> None:
        assert Predicate.timestamp_between(None, None) is None
        start_only = Predicate.timestamp_between(start_ms=5)
        assert start_only is not None
        assert start_only.to_where() == {"timestamp": {"$gte": 5}}
        end_only = Predicate.timestamp_between(end_ms=9)
        assert end_only is not None
        assert end_only.to_where() == {"timestamp": {"$lte": 9}}

    def test_empty_predicate_rejected(self) -> None:
        with pytest.raises(ValueError):
            Predicate(())

"""Shared test fixtures."""

import hashlib
import math
import sys
import uuid
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from semantic_store.core.config import StoreConfig, TableConfig  # noqa: E402
from semantic_store.core.storage.chroma import ChromaRecordTable  # noqa: E402
from semantic_store.core.store import SemanticStore  # noqa: E402
from semantic_store.embedding.base import EmbeddingFunction  # noqa: E402

DIMENSION = 8

# Words sharing an axis are treated as synonyms; others hash into the tail axes.
KEYWORD_AXES = {
    "milk": 0,
    "dairy": 0,
    "cheese": 0,
    "bread": 1,
    "bakery": 1,
    "car": 2,
    "garage": 2,
    "buy": 3,
}


class KeywordEmbedding(EmbeddingFunction):
    """Deterministic bag-of-keywords embedding with unit-length output."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0
        self.load_calls = 0

    @property
    def dimension(self) -> int:
        return DIMENSION

    def _load(self) -> None:
        self.load_calls += 1

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * DIMENSION
        for word in text.lower().split():
            axis = KEYWORD_AXES.get(word)
            if axis is None:
                digest = hashlib.md5(word.encode()).digest()
                axis = 4 + digest[0] % (DIMENSION - 4)
            vector[axis] += 1.0
        norm = math.sqrt(sum(x * x for x in vector)) or 1.0
        return [x / norm for x in vector]

    def _encode(self, texts: list[str]) -> list[list[float]]:
        self.calls += len(texts)
        return [self._vector(text) for text in texts]


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1) -> int:
        self.now += ms
        return self.now


def unique_table_name(prefix: str = "test_records") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def embedding() -> KeywordEmbedding:
    func = KeywordEmbedding()
    func.load()
    return func


@pytest.fixture
def table() -> ChromaRecordTable:
    return ChromaRecordTable.open(
        name=unique_table_name(), dimension=DIMENSION, mode="ephemeral"
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store_config() -> StoreConfig:
    return StoreConfig(
        embedding_dimension=DIMENSION,
        table_name=unique_table_name(),
        table=TableConfig(mode="ephemeral"),
    )


@pytest.fixture
def store(embedding, table, clock, store_config) -> SemanticStore:
    return SemanticStore(embedding, table, config=store_config, clock=clock)

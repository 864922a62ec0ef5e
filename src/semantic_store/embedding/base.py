"""Base embedding function interface."""

import threading
from abc import ABC, abstractmethod

from semantic_store.exceptions import EmbeddingError, UninitializedError


class EmbeddingFunction(ABC):
    """Abstract base class for embedding functions.

    Subclasses implement ``_encode`` and optionally ``_load``. The public
    ``embed``/``embed_batch`` methods refuse to run until ``load`` has been
    called once.
    """

    def __init__(self) -> None:
        self._loaded = False
        self._load_lock = threading.Lock()

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the dimension of the embedding."""
        ...

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Load the underlying model. Subsequent calls are no-ops."""
        with self._load_lock:
            if self._loaded:
                return
            self._load()
            self._loaded = True

    def _load(self) -> None:
        """Hook for subclasses that need to load a model."""

    @abstractmethod
    def _encode(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts."""
        ...

    def embed(self, text: str) -> list[float]:
        """Embed a single text string."""
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed multiple texts."""
        if not self._loaded:
            raise UninitializedError("Embedding pipeline not initialized.")
        try:
            return self._encode(texts)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Embedding failed: {e}") from e

"""Exception hierarchy for semantic-store."""


class SemanticStoreError(Exception):
    """Base exception for all semantic-store errors."""


class InitializationError(SemanticStoreError):
    """Embedder load or table open failed. The store is unusable afterwards."""


class NotReadyError(SemanticStoreError):
    """Operation invoked before initialization completed."""


# Embedding
class EmbeddingError(SemanticStoreError):
    """Inference failed for the given text."""


class UninitializedError(EmbeddingError):
    """Embedding model used before it was loaded."""


# Storage
class StorageError(SemanticStoreError):
    """Record table I/O, append, delete or search failed."""


class RecordNotFoundError(StorageError):
    """No live record exists for the requested id."""


# Validation
class RecordValidationError(SemanticStoreError):
    """Request rejected before reaching the store (empty text, bad dates)."""

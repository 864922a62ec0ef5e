"""Embedding function implementations."""

from semantic_store.embedding.base import EmbeddingFunction
from semantic_store.embedding.default import DefaultEmbedding

__all__ = ["EmbeddingFunction", "DefaultEmbedding"]

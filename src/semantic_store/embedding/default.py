"""Default embedding implementation using sentence-transformers."""

import logging

from semantic_store.core.config import EmbeddingConfig
from semantic_store.embedding.base import EmbeddingFunction

logger = logging.getLogger(__name__)


class DefaultEmbedding(EmbeddingFunction):
    """
    Default embedding using sentence-transformers.

    Uses the all-MiniLM-L6-v2 model by default (384 dimensions), with mean
    pooling and L2 normalization so that cosine distances fall in [0, 2].
    """

    def __init__(
        self,
        model_name: str = "all-MiniLM-L6-v2",
        device: str | None = None,
        normalize: bool = True,
    ) -> None:
        super().__init__()
        self._model_name = model_name
        self._device = device
        self._normalize = normalize
        self._model = None

    @classmethod
    def from_config(cls, config: EmbeddingConfig) -> "DefaultEmbedding":
        return cls(
            model_name=config.model_name,
            device=config.device,
            normalize=config.normalize,
        )

    @property
    def model_name(self) -> str:
        return self._model_name

    def _load(self) -> None:
        from sentence_transformers import SentenceTransformer

        logger.info("Loading embedding model %s", self._model_name)
        self._model = SentenceTransformer(self._model_name, device=self._device)
        logger.info("Embedding model loaded (dimension=%d)", self.dimension)

    @property
    def dimension(self) -> int:
        if self._model is None:
            raise RuntimeError("Embedding model not loaded")
        return self._model.get_sentence_embedding_dimension()

    def _encode(self, texts: list[str]) -> list[list[float]]:
        embeddings = self._model.encode(
            texts,
            convert_to_numpy=True,
            normalize_embeddings=self._normalize,
        )
        return embeddings.tolist()

"""
OpenAI embedding client.

Generates fixed-dimension embeddings for queries and chunk batches.

Dependencies: langchain_openai, rag_starter.core.exceptions
System role: Embedding generation adapter
"""

import logging

from langchain_openai import OpenAIEmbeddings

from rag_starter.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class OpenAIEmbeddingClient:
    """Generate embeddings using the OpenAI embeddings API."""

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimension: int = 1536,
    ) -> None:
        """
        Initialize embeddings client.

        Args:
            api_key: OpenAI API key
            model: Embedding model ID
            dimension: Expected vector length; requested explicitly from
                text-embedding-3 models, which support shortened outputs

        Raises:
            ValueError: When api_key is empty
        """
        if not api_key:
            raise ValueError("OpenAI api_key cannot be empty")

        extra = {"dimensions": dimension} if model.startswith("text-embedding-3") else {}
        self._embeddings = OpenAIEmbeddings(model=model, api_key=api_key, **extra)
        self._model = model
        self._dimension = dimension

    async def embed(self, text: str) -> list[float]:
        """
        Generate embedding for a single text.

        Args:
            text: Query or chunk text

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: When the API call fails or returns a wrong-sized vector
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embedding: {e}",
                details={"model": self._model},
            ) from e

        self._check_dimension(vector)
        return vector

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for many texts in one logical call.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per text, in input order

        Raises:
            EmbeddingError: When the API call fails or returns wrong-sized vectors
        """
        if not texts:
            return []

        try:
            vectors = await self._embeddings.aembed_documents(texts)
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embeddings batch: {e}",
                details={"model": self._model, "batch_size": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding count does not match input count",
                details={"expected": len(texts), "received": len(vectors)},
            )
        for vector in vectors:
            self._check_dimension(vector)

        logger.info(f"{__name__}:embed_batch - Embedded {len(texts)} texts")
        return vectors

    def _check_dimension(self, vector: list[float]) -> None:
        if len(vector) != self._dimension:
            raise EmbeddingError(
                "Embedding dimension mismatch",
                details={"expected": self._dimension, "received": len(vector)},
            )

"""
Pinecone vector store.

Wraps the Pinecone serverless index with upsert, similarity query,
metadata-filtered ID lookup, bulk delete, and index statistics.
Raw SDK matches are normalized into VectorMatch before leaving this module.

Dependencies: pinecone, rag_starter.boundary.vdb.vector_schemas, rag_starter.core.exceptions
System role: Production vector store (Pinecone)
"""

import logging
from typing import Any

from pinecone import Pinecone, ServerlessSpec

from rag_starter.boundary.vdb.vector_schemas import (
    ChunkMetadata,
    IndexStats,
    VectorMatch,
    VectorRecord,
)
from rag_starter.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

# Pinecone caps top_k at 10000 for ID-only queries and deletes at 1000 IDs per call
MAX_ID_QUERY_TOP_K = 10000
DELETE_BATCH_SIZE = 1000


def _get(obj: Any, key: str, default: Any = None) -> Any:
    """Read a field from an SDK response object or a plain dict."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


class PineconeVectorStore:
    """
    Pinecone vector store for chunk embeddings.

    Records are keyed by chunk ID and carry ChunkMetadata (including the raw
    chunk text) so retrieval never needs a second lookup.
    """

    def __init__(
        self,
        api_key: str,
        index_name: str = "rag-starter-kit",
        dimension: int = 1536,
        metric: str = "cosine",
        cloud: str = "aws",
        region: str = "us-east-1",
        namespace: str = "",
        upsert_batch_size: int = 100,
    ) -> None:
        """
        Initialize Pinecone client.

        Args:
            api_key: Pinecone API key
            index_name: Index name
            dimension: Embedding dimension (used when creating the index)
            metric: Similarity metric (used when creating the index)
            cloud: Serverless cloud provider
            region: Serverless region
            namespace: Namespace for all reads and writes
            upsert_batch_size: Records per upsert request

        Raises:
            ValueError: When api_key is empty
        """
        if not api_key:
            raise ValueError("Pinecone api_key cannot be empty")

        self._client = Pinecone(api_key=api_key)
        self._index_name = index_name
        self._dimension = dimension
        self._metric = metric
        self._cloud = cloud
        self._region = region
        self._namespace = namespace
        self._upsert_batch_size = upsert_batch_size
        self._index = None

    @property
    def index(self):
        """Index handle, opened on first use."""
        if self._index is None:
            self._index = self._client.Index(self._index_name)
        return self._index

    def ensure_index(self) -> bool:
        """
        Create the serverless index when it does not exist yet.

        Returns:
            bool: True when the index was created, False when it already existed

        Raises:
            VectorStoreError: If listing or creating indexes fails
        """
        try:
            existing = self._client.list_indexes().names()
            if self._index_name in existing:
                logger.info(f"{__name__}:ensure_index - Index '{self._index_name}' is ready")
                return False

            logger.info(
                f"{__name__}:ensure_index - Creating index '{self._index_name}'",
                extra={"dimension": self._dimension, "metric": self._metric, "region": self._region},
            )
            self._client.create_index(
                name=self._index_name,
                dimension=self._dimension,
                metric=self._metric,
                spec=ServerlessSpec(cloud=self._cloud, region=self._region),
            )
            return True

        except Exception as e:
            raise VectorStoreError(
                message="Failed to initialize Pinecone index",
                operation="ensure_index",
                details={"error": str(e), "index_name": self._index_name},
            ) from e

    def upsert(self, records: list[VectorRecord]) -> int:
        """
        Upsert vectors with metadata.

        Uses upsert for idempotency (deterministic chunk IDs).

        Args:
            records: Records to store

        Returns:
            int: Number of records written

        Raises:
            VectorStoreError: If any batch fails
        """
        try:
            for offset in range(0, len(records), self._upsert_batch_size):
                batch = records[offset : offset + self._upsert_batch_size]
                self.index.upsert(
                    vectors=[record.to_pinecone() for record in batch],
                    namespace=self._namespace,
                )
        except Exception as e:
            raise VectorStoreError(
                message="Failed to upsert vectors to Pinecone",
                operation="upsert",
                details={"error": str(e), "vector_count": len(records)},
            ) from e

        logger.info(f"{__name__}:upsert - Upserted {len(records)} vectors")
        return len(records)

    def query(
        self,
        vector: list[float],
        top_k: int = 5,
        filter: dict[str, Any] | None = None,
    ) -> list[VectorMatch]:
        """
        Query vectors by similarity with optional metadata filtering.

        Args:
            vector: Query embedding
            top_k: Number of matches to return
            filter: Pinecone metadata filter (omitted when empty)

        Returns:
            list[VectorMatch]: Matches in descending score order

        Raises:
            VectorStoreError: If the query fails
        """
        query_kwargs: dict[str, Any] = {
            "vector": vector,
            "top_k": top_k,
            "include_metadata": True,
            "namespace": self._namespace,
        }
        if filter:
            query_kwargs["filter"] = filter

        try:
            response = self.index.query(**query_kwargs)
        except Exception as e:
            raise VectorStoreError(
                message="Failed to query vectors from Pinecone",
                operation="query",
                details={"error": str(e), "top_k": top_k},
            ) from e

        return [self._normalize_match(match) for match in _get(response, "matches", None) or []]

    def find_ids(self, filter: dict[str, Any]) -> list[str]:
        """
        Find record IDs matching a metadata filter.

        Args:
            filter: Pinecone metadata filter, e.g. {"documentId": {"$eq": "..."}}

        Returns:
            list[str]: Matching record IDs

        Raises:
            VectorStoreError: If the lookup query fails
        """
        try:
            response = self.index.query(
                vector=self.probe_vector(),
                top_k=MAX_ID_QUERY_TOP_K,
                filter=filter,
                include_metadata=False,
                include_values=False,
                namespace=self._namespace,
            )
        except Exception as e:
            raise VectorStoreError(
                message="Failed to look up vector IDs in Pinecone",
                operation="find_ids",
                details={"error": str(e), "filter": filter},
            ) from e

        return [_get(match, "id") for match in _get(response, "matches", None) or []]

    def list_records(self, limit: int = 1000) -> list[VectorMatch]:
        """
        Enumerate up to ``limit`` records with metadata, in no meaningful order.

        Args:
            limit: Maximum records to return

        Returns:
            list[VectorMatch]: Records found by a probe query
        """
        return self.query(self.probe_vector(), top_k=limit)

    def delete_by_ids(self, ids: list[str]) -> int:
        """
        Delete vectors by chunk IDs.

        Args:
            ids: Chunk identifiers to delete

        Returns:
            int: Number of IDs submitted for deletion

        Raises:
            VectorStoreError: If a delete call fails
        """
        try:
            for offset in range(0, len(ids), DELETE_BATCH_SIZE):
                self.index.delete(
                    ids=ids[offset : offset + DELETE_BATCH_SIZE],
                    namespace=self._namespace,
                )
        except Exception as e:
            raise VectorStoreError(
                message="Failed to delete vectors from Pinecone",
                operation="delete",
                details={"error": str(e), "chunk_count": len(ids)},
            ) from e

        logger.info(f"{__name__}:delete_by_ids - Deleted {len(ids)} vectors")
        return len(ids)

    def stats(self) -> IndexStats:
        """
        Describe the index.

        Returns:
            IndexStats: Vector count, dimension, fullness, and namespace names

        Raises:
            VectorStoreError: If the stats call fails
        """
        try:
            raw = self.index.describe_index_stats()
        except Exception as e:
            raise VectorStoreError(
                message="Failed to get Pinecone index stats",
                operation="stats",
                details={"error": str(e)},
            ) from e

        return IndexStats(
            total_vectors=_get(raw, "total_vector_count", 0) or 0,
            dimension=_get(raw, "dimension", None) or self._dimension,
            index_fullness=_get(raw, "index_fullness", 0.0) or 0.0,
            namespaces=list((_get(raw, "namespaces", None) or {}).keys()),
        )

    def probe_vector(self) -> list[float]:
        """Non-zero unit vector used for filter-only and enumeration queries."""
        return [1.0] + [0.0] * (self._dimension - 1)

    @staticmethod
    def _normalize_match(match: Any) -> VectorMatch:
        """Convert an SDK match into the canonical VectorMatch shape."""
        return VectorMatch(
            id=_get(match, "id", ""),
            score=float(_get(match, "score", 0.0) or 0.0),
            metadata=ChunkMetadata.from_pinecone(
                _get(match, "metadata", None),
                match_text=_get(match, "text", "") or "",
            ),
        )

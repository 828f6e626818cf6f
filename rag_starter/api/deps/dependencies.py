"""
Dependency injection container.

Factory functions for FastAPI dependencies. Clients and the conversation
store are created lazily once per process and shared across requests.

Dependencies: rag_starter.configs, rag_starter.application, rag_starter.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from rag_starter.application.services import ChatService, DocumentService
from rag_starter.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._vector_store = None
        self._embedding_client = None
        self._chat_client = None
        self._conversation_store = None
        self._document_processor = None

    @property
    def vector_store(self):
        """Get cached Pinecone vector store."""
        if self._vector_store is None:
            from rag_starter.boundary.vdb import get_pinecone_store

            settings = get_settings()
            PineconeVectorStore = get_pinecone_store()
            self._vector_store = PineconeVectorStore(
                api_key=settings.vector_store.api_key,
                index_name=settings.vector_store.index_name,
                dimension=settings.openai.embedding_dimension,
                metric=settings.vector_store.metric,
                cloud=settings.vector_store.cloud,
                region=settings.vector_store.region,
                namespace=settings.vector_store.namespace,
                upsert_batch_size=settings.vector_store.upsert_batch_size,
            )
        return self._vector_store

    @property
    def embedding_client(self):
        """Get cached OpenAI embedding client."""
        if self._embedding_client is None:
            from rag_starter.boundary.llm import OpenAIEmbeddingClient

            settings = get_settings()
            self._embedding_client = OpenAIEmbeddingClient(
                api_key=settings.openai.api_key,
                model=settings.openai.embedding_model,
                dimension=settings.openai.embedding_dimension,
            )
        return self._embedding_client

    @property
    def chat_client(self):
        """Get cached OpenAI chat client."""
        if self._chat_client is None:
            from rag_starter.boundary.llm import OpenAIChatClient

            settings = get_settings()
            self._chat_client = OpenAIChatClient(
                api_key=settings.openai.api_key,
                model=settings.openai.model,
            )
        return self._chat_client

    @property
    def conversation_store(self):
        """Get the process-wide conversation store."""
        if self._conversation_store is None:
            from rag_starter.boundary.conversations import ConversationStore

            self._conversation_store = ConversationStore(
                capacity=get_settings().api.conversation_capacity,
            )
        return self._conversation_store

    @property
    def document_processor(self):
        """Get cached document processor."""
        if self._document_processor is None:
            from rag_starter.core.chunker import TextChunker
            from rag_starter.core.document_processing import DocumentProcessor

            chunking = get_settings().chunking
            self._document_processor = DocumentProcessor(
                chunker=TextChunker(chunk_size=chunking.chunk_size, overlap=chunking.chunk_overlap),
            )
        return self._document_processor

    def clear(self) -> None:
        """Clear all cached instances."""
        self._vector_store = None
        self._embedding_client = None
        self._chat_client = None
        self._conversation_store = None
        self._document_processor = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_document_service() -> DocumentService:
    """
    Get document service instance.

    Returns:
        DocumentService: Document service wired to the cached clients
    """
    cache = get_service_cache()
    return DocumentService(
        processor=cache.document_processor,
        embedding_client=cache.embedding_client,
        vector_store=cache.vector_store,
        max_upload_size_mb=get_settings().api.max_upload_size_mb,
    )


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Chat service sharing the process-wide conversation store
    """
    from rag_starter.core.answer_generator import AnswerGenerator
    from rag_starter.core.retriever import Retriever

    settings = get_settings()
    cache = get_service_cache()
    return ChatService(
        retriever=Retriever(
            embedding_client=cache.embedding_client,
            vector_store=cache.vector_store,
            top_k=settings.vector_store.top_k,
        ),
        answer_generator=AnswerGenerator(
            chat_client=cache.chat_client,
            answer_temperature=settings.openai.answer_temperature,
            stream_temperature=settings.openai.stream_temperature,
            max_tokens=settings.openai.max_tokens,
        ),
        conversation_store=cache.conversation_store,
    )

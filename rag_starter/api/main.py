"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, rag_starter.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from rag_starter import __version__
from rag_starter.api.deps.dependencies import get_service_cache
from rag_starter.api.error_handlers import register_exception_handlers
from rag_starter.configs import get_settings
from rag_starter.observability.logger import configure_logging
from rag_starter.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import chat_router, documents_router, health_router

API_PREFIX = "/api"

ENDPOINTS = {
    "health": "GET /api/health",
    "upload": "POST /api/documents/upload",
    "listDocuments": "GET /api/documents/list",
    "stats": "GET /api/documents/stats",
    "deleteDocument": "DELETE /api/documents/:documentId",
    "chat": "POST /api/chat/send",
    "history": "GET /api/chat/history/:conversationId",
    "newConversation": "POST /api/chat/conversation",
    "deleteConversation": "DELETE /api/chat/conversation/:conversationId",
    "conversations": "GET /api/chat/conversations",
    "search": "POST /api/chat/search",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")
    settings = get_settings()
    cache = get_service_cache()

    # Startup
    if settings.vector_store.api_key:
        logger.info("Ensuring Pinecone index exists...")
        await run_in_threadpool(cache.vector_store.ensure_index)
    else:
        logger.warning("PINECONE_API_KEY not set; skipping index initialization")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="RAG Starter Kit API",
        description="Document upload and retrieval-augmented chat over OpenAI and Pinecone",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Conversation-ID", "X-Correlation-ID"],
    )

    # Add observability middleware (correlation ID must wrap request logging)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app, debug=settings.debug)

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(documents_router, prefix=API_PREFIX)
    app.include_router(chat_router, prefix=API_PREFIX)

    @app.get("/", tags=["info"])
    async def root() -> dict:
        """Service info."""
        return {
            "message": "RAG Starter Kit API",
            "version": __version__,
            "documentation": "/docs",
        }

    @app.get(API_PREFIX, tags=["info"])
    async def api_info() -> dict:
        """Endpoint list."""
        return {
            "message": "RAG Starter Kit API",
            "version": __version__,
            "endpoints": ENDPOINTS,
        }

    return app


app = create_app()


def run() -> None:
    """Launch the API with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "rag_starter.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
    )


if __name__ == "__main__":
    run()

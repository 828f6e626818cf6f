"""Chat API endpoints.

Routes:
- POST /chat/send - Send a message; JSON answer or plain-text stream
- GET /chat/history/{conversation_id} - Conversation turns
- POST /chat/conversation - Start a conversation
- DELETE /chat/conversation/{conversation_id} - Delete a conversation
- GET /chat/conversations - List conversations
- POST /chat/search - Raw similarity search

Dependencies: rag_starter.application.services.chat_service
System role: Chat messaging HTTP API with streaming support
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from rag_starter.api.deps import get_chat_service
from rag_starter.application.services.chat_service import ChatService
from rag_starter.core.exceptions import CompletionError
from rag_starter.models.chat import (
    ChatRequest,
    ChatResponse,
    ConversationCreatedResponse,
    ConversationDeletedResponse,
    ConversationHistoryResponse,
    ConversationListResponse,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

CONVERSATION_ID_HEADER = "X-Conversation-ID"


@router.post("/send", response_model=ChatResponse)
async def send_message(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
):
    """Send a chat message answered from the indexed documents.

    With useStreaming the answer is returned as a chunked text/plain body and
    the conversation ID is sent in the X-Conversation-ID header. Failures
    before the first fragment are reported as regular JSON errors; a failure
    mid-stream ends the body early.

    Args:
        request: ChatRequest with message and optional conversation ID
        chat_service: Injected ChatService

    Returns:
        ChatResponse | StreamingResponse: Full answer or fragment stream
    """
    if not request.use_streaming:
        result = await chat_service.send_message(request.message, request.conversation_id)
        return ChatResponse(**result.model_dump())

    conversation_id = chat_service.resolve_conversation_id(request.conversation_id)
    logger.info(f"{__name__}:send_message - Streaming conversation_id={conversation_id}")

    stream = chat_service.stream_message(request.message, conversation_id)
    # Pull the first fragment now so validation and retrieval errors reach the exception handlers
    try:
        first_fragment = await anext(stream)
    except StopAsyncIteration:
        first_fragment = ""

    async def fragment_generator() -> AsyncGenerator[str, None]:
        if first_fragment:
            yield first_fragment
        try:
            async for fragment in stream:
                yield fragment
            logger.info(f"{__name__}:send_message - Stream completed for conversation_id={conversation_id}")
        except CompletionError as e:
            logger.error(f"{__name__}:send_message - Stream aborted: {e}")

    return StreamingResponse(
        fragment_generator(),
        media_type="text/plain",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
            CONVERSATION_ID_HEADER: conversation_id,
        },
    )


@router.get("/history/{conversation_id}", response_model=ConversationHistoryResponse)
async def get_history(
    conversation_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationHistoryResponse:
    """Get conversation turns; unknown IDs return an empty list."""
    return ConversationHistoryResponse(
        conversation=chat_service.get_history(conversation_id),
        conversation_id=conversation_id,
    )


@router.post("/conversation", response_model=ConversationCreatedResponse)
async def create_conversation(
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationCreatedResponse:
    """Start a new, empty conversation."""
    return ConversationCreatedResponse(conversation_id=chat_service.create_conversation())


@router.delete("/conversation/{conversation_id}", response_model=ConversationDeletedResponse)
async def delete_conversation(
    conversation_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationDeletedResponse:
    """
    Delete a conversation.

    Raises:
        ConversationNotFoundError: Unknown conversation ID (404)
    """
    chat_service.delete_conversation(conversation_id)
    return ConversationDeletedResponse()


@router.get("/conversations", response_model=ConversationListResponse)
async def list_conversations(
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationListResponse:
    """List stored conversations."""
    conversations = chat_service.list_conversations()
    return ConversationListResponse(conversations=conversations, total=len(conversations))


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> SearchResponse:
    """Raw similarity search over indexed chunks."""
    results = await chat_service.search(request.query, top_k=request.top_k)
    return SearchResponse(query=request.query, results=results)

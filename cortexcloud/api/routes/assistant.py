"""Assistant chat routes."""

from fastapi import APIRouter

from cortexcloud.api.deps import T_CurrentUser, T_Store
from cortexcloud.core.schemas import (
    ChatHistory,
    ChatMessagePublic,
    ChatReply,
    ChatRequest,
    ErrorResponse,
    Message,
)
from cortexcloud.services import assistant as assistant_service

router = APIRouter(
    prefix="/assistant", tags=["assistant"], responses={401: {"model": ErrorResponse}}
)


@router.post("/chat", response_model=ChatReply)
async def chat(store: T_Store, user: T_CurrentUser, payload: ChatRequest) -> ChatReply:
    """Answer a chat message and store both sides of the exchange."""
    reply = await assistant_service.chat(store, user, payload.message, payload.context)
    return ChatReply(message=ChatMessagePublic.model_validate(reply), response=reply.content)


@router.get("/history", response_model=ChatHistory)
async def history(store: T_Store, user: T_CurrentUser) -> ChatHistory:
    messages = await assistant_service.get_history(store, user)
    return ChatHistory(messages=[ChatMessagePublic.model_validate(m) for m in messages])


@router.delete("/history", response_model=Message)
async def clear_history(store: T_Store, user: T_CurrentUser) -> Message:
    await assistant_service.clear_history(store, user)
    return Message(message="Chat history cleared")

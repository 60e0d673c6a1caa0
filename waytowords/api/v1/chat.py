from fastapi import APIRouter, Depends, HTTPException

from waytowords.api.v1.schemas import (
    ChatHistoryResponseSchema,
    ChatMessageSchema,
    ChatRequestSchema,
    ChatResponseSchema,
)
from waytowords.application.ports.chat_history import ChatHistoryPort
from waytowords.application.use_cases.chat_reply import ChatReplyUseCase
from waytowords.domain.entities.chat import ChatMessage
from waytowords.wiring.dependencies import get_chat_history_store, get_chat_use_case

router = APIRouter()


@router.post("/chat", response_model=ChatResponseSchema)
def chat(
    req: ChatRequestSchema,
    uc: ChatReplyUseCase = Depends(get_chat_use_case),
):
    history = None
    if req.history is not None:
        history = [ChatMessage(id=m.id, author=m.author, text=m.text, time=m.time) for m in req.history]
    try:
        reply = uc.execute(
            user_id=req.user_id,
            message=req.message,
            topic=req.topic,
            cefr_level=req.cefr_level,
            history=history,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ChatResponseSchema(reply=reply.text, fallback=reply.fallback)


@router.get("/chat/history", response_model=ChatHistoryResponseSchema)
def get_history(
    user_id: str,
    topic: str | None = None,
    store: ChatHistoryPort = Depends(get_chat_history_store),
):
    return ChatHistoryResponseSchema(
        messages=[ChatMessageSchema(**m.to_dict()) for m in store.load(user_id, topic)],
    )


@router.delete("/chat/history", status_code=204)
def clear_history(
    user_id: str,
    topic: str | None = None,
    all_topics: bool = False,
    store: ChatHistoryPort = Depends(get_chat_history_store),
):
    if all_topics:
        store.clear_all(user_id)
    else:
        store.clear(user_id, topic)

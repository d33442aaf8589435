# app/routers/conversations.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from app.core.deps import get_responder, get_store
from app.core.errors import BotNotFoundError, ConversationNotFoundError
from app.db.models.conversation import Conversation
from app.db.store import MemStore
from app.schemas.chat import ChatIn, ChatOut, ConversationCreate, ConversationReplyOut
from app.services.chat import ChatResponder

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

# === Chat sin estado (no se guarda nada) ===
@router.post("/bots/{bot_id}/chat", response_model=ChatOut)
async def chat_route(
    bot_id: str,
    payload: ChatIn,
    responder: ChatResponder = Depends(get_responder),
):
    if not payload.message:
        raise HTTPException(status_code=400, detail="Message is required")
    try:
        response = await responder.respond(bot_id, payload.message)
        return {"response": response}
    except BotNotFoundError:
        raise HTTPException(status_code=404, detail="Bot not found")
    except Exception:
        log.exception("[CHAT] Error in bot chat")
        raise HTTPException(status_code=500, detail="Failed to process chat message")

# === Conversaciones con historial ===
@router.get("/bots/{bot_id}/conversations", response_model=List[Conversation])
async def list_conversations_route(bot_id: str, store: MemStore = Depends(get_store)):
    try:
        return store.list_conversations_by_bot(bot_id)
    except Exception:
        log.exception("[CHAT] Error fetching conversations")
        raise HTTPException(status_code=500, detail="Failed to fetch conversations")

@router.post(
    "/bots/{bot_id}/conversations",
    response_model=Conversation,
    status_code=status.HTTP_201_CREATED,
)
async def create_conversation_route(
    bot_id: str,
    payload: Optional[ConversationCreate] = None,
    store: MemStore = Depends(get_store),
):
    try:
        if not store.get_bot(bot_id):
            raise HTTPException(status_code=404, detail="Bot not found")
        return store.create_conversation(bot_id=bot_id, messages=payload.messages if payload else None)
    except HTTPException:
        raise
    except Exception:
        log.exception("[CHAT] Error creating conversation")
        raise HTTPException(status_code=500, detail="Failed to create conversation")

@router.get("/conversations/{conversation_id}", response_model=Conversation)
async def get_conversation_route(conversation_id: str, store: MemStore = Depends(get_store)):
    conv = store.get_conversation(conversation_id)
    if not conv:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conv

@router.post("/conversations/{conversation_id}/messages", response_model=ConversationReplyOut)
async def conversation_reply_route(
    conversation_id: str,
    payload: ChatIn,
    responder: ChatResponder = Depends(get_responder),
):
    if not payload.message:
        raise HTTPException(status_code=400, detail="Message is required")
    try:
        response, conv = await responder.reply_in_conversation(conversation_id, payload.message)
        return {"response": response, "conversation": conv}
    except ConversationNotFoundError:
        raise HTTPException(status_code=404, detail="Conversation not found")
    except BotNotFoundError:
        raise HTTPException(status_code=404, detail="Bot not found")
    except Exception:
        log.exception("[CHAT] Error in conversation reply")
        raise HTTPException(status_code=500, detail="Failed to process chat message")

@router.delete("/conversations/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation_route(conversation_id: str, store: MemStore = Depends(get_store)):
    if not store.delete_conversation(conversation_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from app.core.deps import get_store
from app.db.models.bot import Bot
from app.db.models.user import User
from app.db.store import MemStore
from app.middlewares.auth import current_user
from app.schemas.bot import BotCreate, BotUpdate
from app.services.bots import create_bot, list_bots, update_bot

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bots", tags=["bots"])

@router.get("", response_model=List[Bot])
async def list_bots_route(
    user: User = Depends(current_user),
    store: MemStore = Depends(get_store),
):
    try:
        return list_bots(store, owner_id=user.id)
    except Exception:
        log.exception("[BOTS] Error fetching bots")
        raise HTTPException(status_code=500, detail="Failed to fetch bots")

@router.post("", response_model=Bot, status_code=status.HTTP_201_CREATED)
async def create_bot_route(
    payload: BotCreate,
    user: User = Depends(current_user),
    store: MemStore = Depends(get_store),
):
    try:
        return create_bot(store, owner_id=user.id, payload=payload)
    except Exception:
        log.exception("[BOTS] Error creating bot")
        raise HTTPException(status_code=500, detail="Failed to create bot")

@router.get("/{bot_id}", response_model=Bot)
async def get_bot_route(bot_id: str, store: MemStore = Depends(get_store)):
    try:
        bot = store.get_bot(bot_id)
        if not bot:
            raise HTTPException(status_code=404, detail="Bot not found")
        return bot
    except HTTPException:
        raise
    except Exception:
        log.exception("[BOTS] Error fetching bot")
        raise HTTPException(status_code=500, detail="Failed to fetch bot")

@router.put("/{bot_id}", response_model=Bot)
async def update_bot_route(bot_id: str, payload: BotUpdate, store: MemStore = Depends(get_store)):
    try:
        bot = update_bot(store, bot_id, payload)
        if not bot:
            raise HTTPException(status_code=404, detail="Bot not found")
        return bot
    except HTTPException:
        raise
    except Exception:
        log.exception("[BOTS] Error updating bot")
        raise HTTPException(status_code=500, detail="Failed to update bot")

@router.delete("/{bot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bot_route(bot_id: str, store: MemStore = Depends(get_store)):
    try:
        # sin cascada: training data e integraciones quedan en el store
        if not store.delete_bot(bot_id):
            raise HTTPException(status_code=404, detail="Bot not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception:
        log.exception("[BOTS] Error deleting bot")
        raise HTTPException(status_code=500, detail="Failed to delete bot")

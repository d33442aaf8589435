from typing import List, Optional
from app.db.models.bot import Bot
from app.db.store import MemStore
from app.schemas.bot import BotCreate, BotUpdate

def list_bots(store: MemStore, owner_id: str) -> List[Bot]:
    return store.list_bots_by_owner(owner_id)

def create_bot(store: MemStore, owner_id: str, payload: BotCreate) -> Bot:
    name = payload.name.strip()
    return store.create_bot(
        name=name,
        description=(payload.description or "").strip() or None,
        status=payload.status,
        owner_id=owner_id,
    )

def update_bot(store: MemStore, bot_id: str, payload: BotUpdate) -> Optional[Bot]:
    # solo los campos que vinieron en el body
    return store.update_bot(bot_id, payload.model_dump(exclude_unset=True))

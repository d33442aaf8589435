from fastapi import Depends
from app.core.deps import get_settings, get_store
from app.core.config import Settings
from app.db.models.user import User
from app.db.store import MemStore
from app.services.users import get_or_create_default_user

async def current_user(
    store: MemStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> User:
    # Sin auth por ahora: todo corre como el usuario por defecto
    return get_or_create_default_user(store, settings.default_username)

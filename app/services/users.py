from app.db.models.user import User
from app.db.store import MemStore

def get_or_create_default_user(store: MemStore, username: str) -> User:
    u = store.get_user_by_username(username)
    if u:
        return u
    return store.create_user(username=username)

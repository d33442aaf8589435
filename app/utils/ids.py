from datetime import datetime, timezone
from uuid import uuid4

def new_id() -> str:
    return str(uuid4())

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

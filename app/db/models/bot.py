from datetime import datetime
from typing import Literal, Optional
from app.db.base import Base

BotStatus = Literal["draft", "training", "active", "paused"]

class Bot(Base):
    id: str
    name: str
    description: Optional[str] = None
    status: BotStatus = "draft"
    owner_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field
from app.db.base import Base

class ChatMessage(Base):
    role: Literal["system", "user", "assistant"]
    content: str

class Conversation(Base):
    id: str
    bot_id: str
    messages: List[ChatMessage] = Field(default_factory=list)
    started_at: datetime
    ended_at: Optional[datetime] = None

from typing import List, Optional
from pydantic import Field
from app.db.base import Base
from app.db.models.conversation import ChatMessage, Conversation

class ChatIn(Base):
    message: Optional[str] = Field(default=None, max_length=20_000)

class ChatOut(Base):
    response: str

class ConversationCreate(Base):
    messages: List[ChatMessage] = Field(default_factory=list)

class ConversationReplyOut(Base):
    response: str
    conversation: Conversation

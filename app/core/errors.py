# app/core/errors.py

class ObjectNotFoundError(Exception):
    """The requested object does not exist in storage (or the path is not an object path)."""

class StorageError(Exception):
    """The storage sidecar or the bucket answered with an unexpected error."""

class BotNotFoundError(Exception):
    def __init__(self, bot_id: str):
        super().__init__(f"Bot not found: {bot_id}")
        self.bot_id = bot_id

class ConversationNotFoundError(Exception):
    def __init__(self, conversation_id: str):
        super().__init__(f"Conversation not found: {conversation_id}")
        self.conversation_id = conversation_id

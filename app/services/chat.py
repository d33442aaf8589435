# app/services/chat.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from openai import AsyncOpenAI

from app.core.config import Settings
from app.core.errors import BotNotFoundError, ConversationNotFoundError
from app.db.models.bot import Bot
from app.db.models.conversation import ChatMessage, Conversation
from app.db.models.training_data import TrainingData
from app.db.store import MemStore

log = logging.getLogger(__name__)

NOT_CONFIGURED_REPLY = (
    "I'm sorry, but the OpenAI API key is not configured. "
    "Please contact the administrator to set up the API key."
)
EMPTY_REPLY = "I apologize, but I'm having trouble generating a response right now. Please try again."
ERROR_REPLY = (
    "I'm sorry, but I'm experiencing technical difficulties. "
    "Please try again later or contact support if the problem persists."
)
FALLBACK_REPLIES = frozenset({NOT_CONFIGURED_REPLY, EMPTY_REPLY, ERROR_REPLY})

# Reglas fijas del bot (se agregan siempre al final del system prompt)
BOT_CHARTER = (
    "You are designed to help with:\n"
    "- Answering frequently asked questions\n"
    "- Assisting with scheduling appointments\n"
    "- Providing information about products or services\n"
    "- Helping customers with general inquiries\n\n"
    "Please provide helpful, accurate, and professional responses. "
    "If you don't know something specific about the business, politely say so "
    "and offer to help find the information or connect them with a human representative."
)


# =========================
# Contexto
# =========================
def usable_training_data(training_data: List[TrainingData]) -> List[TrainingData]:
    return [d for d in training_data if d.processed and d.content]

def knowledge_base_block(training_data: List[TrainingData]) -> str:
    return "\n\n".join(
        f"From {d.file_name}:\n{d.content}" for d in usable_training_data(training_data)
    )

def build_system_prompt(bot: Bot, training_data: List[TrainingData]) -> str:
    parts = [f"You are {bot.name}, an AI assistant for small businesses. {bot.description or ''}".strip()]
    kb = knowledge_base_block(training_data)
    if kb:
        parts.append(
            "Use the following knowledge base to answer questions about the business:\n\n" + kb
        )
    parts.append(BOT_CHARTER)
    return "\n\n".join(parts)


# =========================
# Responder
# =========================
class ChatResponder:
    def __init__(self, store: MemStore, settings: Settings, client: Optional[Any] = None):
        self.store = store
        self.settings = settings
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.settings.openai_api_key)

    @property
    def client(self):
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.settings.openai_api_key)
        return self._client

    def _context_for(self, bot_id: str) -> str:
        bot = self.store.get_bot(bot_id)
        if bot is None:
            raise BotNotFoundError(bot_id)
        return build_system_prompt(bot, self.store.list_training_data_by_bot(bot_id))

    async def _complete(self, messages: List[Dict[str, str]]) -> str:
        if not self.configured:
            return NOT_CONFIGURED_REPLY
        try:
            resp = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=messages,
                max_tokens=self.settings.chat_max_tokens,
                temperature=self.settings.chat_temperature,
            )
            return resp.choices[0].message.content or EMPTY_REPLY
        except Exception as e:
            log.error(f"[CHAT] Error en OpenAI chat: {e!r}")
            return ERROR_REPLY

    async def respond(self, bot_id: str, message: str) -> str:
        """One-shot reply as the bot; nothing is persisted."""
        system_prompt = self._context_for(bot_id)
        return await self._complete([
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": message},
        ])

    async def reply_in_conversation(self, conversation_id: str, message: str) -> Tuple[str, Conversation]:
        """
        Append `message` to the conversation, answer with the whole history as
        context and store both turns (only the user turn when the
        reply is one of the fixed fallbacks).
        """
        conv = self.store.get_conversation(conversation_id)
        if conv is None:
            raise ConversationNotFoundError(conversation_id)
        system_prompt = self._context_for(conv.bot_id)

        user_turn = ChatMessage(role="user", content=message)
        answer = await self._complete(
            [{"role": "system", "content": system_prompt}]
            + [{"role": m.role, "content": m.content} for m in conv.messages if m.role != "system"]
            + [{"role": user_turn.role, "content": user_turn.content}]
        )
        new_turns = [user_turn]
        # los mensajes fijos de error no son respuestas del bot: no van al historial
        if answer not in FALLBACK_REPLIES:
            new_turns.append(ChatMessage(role="assistant", content=answer))

        # se relee después del await: otra respuesta pudo haber escrito mientras tanto
        current = self.store.get_conversation(conversation_id)
        if current is None:
            raise ConversationNotFoundError(conversation_id)
        updated = self.store.update_conversation(
            conversation_id, {"messages": current.messages + new_turns}
        )
        return answer, updated

"""
In-memory entity store.

One `Table` per entity type, keyed by id, with a filter-by-parent query.
Every read hands back a deep copy, so callers can't mutate stored rows;
the only way to change a row is through `update`.

Nothing here awaits: each operation runs to completion on the event loop
without interleaving, which is what keeps the store consistent without locks.
"""
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from app.db.base import Base
from app.db.models.bot import Bot
from app.db.models.conversation import ChatMessage, Conversation
from app.db.models.integration import Integration
from app.db.models.training_data import TrainingData
from app.db.models.user import User
from app.utils.ids import new_id, utcnow


T = TypeVar("T", bound=Base)


class Table(Generic[T]):
    def __init__(self, model: Type[T], foreign_key: Optional[str] = None, immutable: Iterable[str] = ("id",)):
        self.model = model
        self.foreign_key = foreign_key
        self.immutable = frozenset(immutable)
        self._rows: Dict[str, T] = {}

    def insert(self, row: T) -> T:
        self._rows[row.id] = row
        return row.model_copy(deep=True)

    def get(self, row_id: str) -> Optional[T]:
        row = self._rows.get(row_id)
        return row.model_copy(deep=True) if row is not None else None

    def all(self) -> List[T]:
        return [r.model_copy(deep=True) for r in self._rows.values()]

    def list_by(self, foreign_id: str) -> List[T]:
        if not self.foreign_key:
            raise TypeError(f"{self.model.__name__} has no parent key")
        return [
            r.model_copy(deep=True)
            for r in self._rows.values()
            if getattr(r, self.foreign_key) == foreign_id
        ]

    def update(self, row_id: str, partial: Dict[str, Any]) -> Optional[T]:
        row = self._rows.get(row_id)
        if row is None:
            return None
        data = row.model_dump()
        for key, value in partial.items():
            if key in self.model.model_fields and key not in self.immutable:
                data[key] = value
        updated = self.model.model_validate(data)
        self._rows[row_id] = updated
        return updated.model_copy(deep=True)

    def delete(self, row_id: str) -> bool:
        return self._rows.pop(row_id, None) is not None


class MemStore:
    def __init__(self):
        self.users: Table[User] = Table(User)
        self.bots: Table[Bot] = Table(Bot, foreign_key="owner_id", immutable=("id", "created_at"))
        self.training_data: Table[TrainingData] = Table(
            TrainingData, foreign_key="bot_id", immutable=("id", "bot_id", "uploaded_at")
        )
        self.conversations: Table[Conversation] = Table(
            Conversation, foreign_key="bot_id", immutable=("id", "bot_id", "started_at")
        )
        self.integrations: Table[Integration] = Table(Integration, foreign_key="bot_id", immutable=("id", "bot_id"))

    # ---- Users ----
    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.all() if u.username == username), None)

    def create_user(self, username: str, password: Optional[str] = None) -> User:
        return self.users.insert(User(id=new_id(), username=username, password=password))

    # ---- Bots ----
    def get_bot(self, bot_id: str) -> Optional[Bot]:
        return self.bots.get(bot_id)

    def list_bots_by_owner(self, owner_id: str) -> List[Bot]:
        return self.bots.list_by(owner_id)

    def create_bot(
        self,
        *,
        name: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
        owner_id: Optional[str] = None,
    ) -> Bot:
        now = utcnow()
        bot = Bot(
            id=new_id(),
            name=name,
            description=description or None,
            status=status or "draft",
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        return self.bots.insert(bot)

    def update_bot(self, bot_id: str, partial: Dict[str, Any]) -> Optional[Bot]:
        return self.bots.update(bot_id, {**partial, "updated_at": utcnow()})

    def delete_bot(self, bot_id: str) -> bool:
        return self.bots.delete(bot_id)

    # ---- Training data ----
    def get_training_data(self, training_data_id: str) -> Optional[TrainingData]:
        return self.training_data.get(training_data_id)

    def list_training_data_by_bot(self, bot_id: str) -> List[TrainingData]:
        return self.training_data.list_by(bot_id)

    def create_training_data(
        self,
        *,
        bot_id: str,
        file_name: str,
        file_url: str,
        file_size: Optional[int] = None,
        file_type: Optional[str] = None,
    ) -> TrainingData:
        row = TrainingData(
            id=new_id(),
            bot_id=bot_id,
            file_name=file_name,
            file_url=file_url,
            file_size=file_size or 0,
            file_type=file_type or "application/octet-stream",
            content=None,
            processed=False,
            uploaded_at=utcnow(),
        )
        return self.training_data.insert(row)

    def update_training_data(self, training_data_id: str, partial: Dict[str, Any]) -> Optional[TrainingData]:
        return self.training_data.update(training_data_id, partial)

    def delete_training_data(self, training_data_id: str) -> bool:
        return self.training_data.delete(training_data_id)

    # ---- Conversations ----
    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self.conversations.get(conversation_id)

    def list_conversations_by_bot(self, bot_id: str) -> List[Conversation]:
        return self.conversations.list_by(bot_id)

    def create_conversation(self, *, bot_id: str, messages: Optional[List[ChatMessage]] = None) -> Conversation:
        conv = Conversation(
            id=new_id(),
            bot_id=bot_id,
            messages=list(messages or []),
            started_at=utcnow(),
            ended_at=None,
        )
        return self.conversations.insert(conv)

    def update_conversation(self, conversation_id: str, partial: Dict[str, Any]) -> Optional[Conversation]:
        return self.conversations.update(conversation_id, partial)

    def delete_conversation(self, conversation_id: str) -> bool:
        return self.conversations.delete(conversation_id)

    # ---- Integrations ----
    def get_integration(self, integration_id: str) -> Optional[Integration]:
        return self.integrations.get(integration_id)

    def list_integrations_by_bot(self, bot_id: str) -> List[Integration]:
        return self.integrations.list_by(bot_id)

    def create_integration(
        self,
        *,
        bot_id: str,
        platform: str,
        config: Optional[Dict[str, Any]] = None,
        enabled: Optional[bool] = None,
    ) -> Integration:
        integration = Integration(
            id=new_id(),
            bot_id=bot_id,
            platform=platform,
            config=config or {},
            enabled=bool(enabled),
            connected_at=utcnow() if enabled else None,
        )
        return self.integrations.insert(integration)

    def update_integration(self, integration_id: str, partial: Dict[str, Any]) -> Optional[Integration]:
        partial = dict(partial)
        # connected_at lo maneja el store: se sella cada vez que se habilita
        partial.pop("connected_at", None)
        if partial.get("enabled"):
            partial["connected_at"] = utcnow()
        return self.integrations.update(integration_id, partial)

    def delete_integration(self, integration_id: str) -> bool:
        return self.integrations.delete(integration_id)

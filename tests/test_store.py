"""Tests for the in-memory entity store."""

from app.db.models.conversation import ChatMessage
from app.db.store import MemStore


class TestBots:
    """SUT: MemStore bot operations"""

    def test_status_defaults_to_draft(self, store: MemStore):
        """Should default status to draft when omitted."""
        bot = store.create_bot(name="Helper", owner_id="u1")
        assert bot.status == "draft"
        assert bot.description is None
        assert bot.created_at == bot.updated_at

    def test_keeps_given_status(self, store: MemStore):
        """Should keep an explicit status."""
        bot = store.create_bot(name="Helper", status="active", owner_id="u1")
        assert bot.status == "active"

    def test_ids_are_unique(self, store: MemStore):
        """Should generate a fresh id per record."""
        ids = {store.create_bot(name=f"b{i}").id for i in range(20)}
        assert len(ids) == 20

    def test_get_missing_returns_none(self, store: MemStore):
        """Absence is a result, not an error."""
        assert store.get_bot("nope") is None

    def test_update_merges_and_refreshes_updated_at(self, store: MemStore):
        """Should merge fields and bump updated_at."""
        bot = store.create_bot(name="Helper", description="old")
        updated = store.update_bot(bot.id, {"description": "new"})
        assert updated.name == "Helper"
        assert updated.description == "new"
        assert updated.updated_at >= bot.updated_at
        assert store.get_bot(bot.id).description == "new"

    def test_update_ignores_id_and_unknown_fields(self, store: MemStore):
        """Should not let a partial update change the id or add fields."""
        bot = store.create_bot(name="Helper")
        updated = store.update_bot(bot.id, {"id": "other", "color": "red", "name": "Renamed"})
        assert updated.id == bot.id
        assert updated.name == "Renamed"
        assert store.get_bot("other") is None

    def test_update_missing_returns_none(self, store: MemStore):
        """Should return None for an unknown id."""
        assert store.update_bot("nope", {"name": "x"}) is None

    def test_delete(self, store: MemStore):
        """Should return True once, then False."""
        bot = store.create_bot(name="Helper")
        assert store.delete_bot(bot.id) is True
        assert store.delete_bot(bot.id) is False
        assert store.get_bot(bot.id) is None

    def test_list_by_owner(self, store: MemStore):
        """Should only list the owner's bots, in insertion order."""
        a1 = store.create_bot(name="a1", owner_id="a")
        store.create_bot(name="b1", owner_id="b")
        a2 = store.create_bot(name="a2", owner_id="a")
        assert [b.id for b in store.list_bots_by_owner("a")] == [a1.id, a2.id]


class TestCopyOnRead:
    """SUT: MemStore read isolation"""

    def test_mutating_a_read_does_not_touch_the_store(self, store: MemStore):
        """Should hand out copies, not the stored rows."""
        bot = store.create_bot(name="Helper")
        snapshot = store.get_bot(bot.id)
        snapshot.name = "Mutated"
        assert store.get_bot(bot.id).name == "Helper"

    def test_nested_values_are_copied(self, store: MemStore):
        """Should deep-copy nested config maps."""
        integ = store.create_integration(bot_id="b1", platform="whatsapp", config={"phone": "1"})
        integ.config["phone"] = "2"
        assert store.get_integration(integ.id).config == {"phone": "1"}


class TestTrainingData:
    """SUT: MemStore training data operations"""

    def test_defaults(self, store: MemStore):
        """Should start unprocessed with no content."""
        row = store.create_training_data(bot_id="b1", file_name="a.txt", file_url="/objects/a")
        assert row.processed is False
        assert row.content is None
        assert row.error is None
        assert row.file_size == 0
        assert row.file_type == "application/octet-stream"

    def test_list_by_bot_never_leaks_other_bots(self, store: MemStore):
        """Rows created under bot B must never show up for bot A."""
        store.create_training_data(bot_id="A", file_name="a1.txt", file_url="/objects/1")
        store.create_training_data(bot_id="B", file_name="b1.txt", file_url="/objects/2")
        store.create_training_data(bot_id="A", file_name="a2.txt", file_url="/objects/3")

        rows = store.list_training_data_by_bot("A")
        assert [r.file_name for r in rows] == ["a1.txt", "a2.txt"]
        assert all(r.bot_id == "A" for r in rows)
        assert store.list_training_data_by_bot("C") == []

    def test_bot_id_is_immutable(self, store: MemStore):
        """Should not move a row to another bot through update."""
        row = store.create_training_data(bot_id="A", file_name="a.txt", file_url="/objects/1")
        store.update_training_data(row.id, {"bot_id": "B"})
        assert store.get_training_data(row.id).bot_id == "A"

    def test_delete_missing(self, store: MemStore):
        """Should return False for an unknown id."""
        assert store.delete_training_data("nope") is False


class TestIntegrations:
    """SUT: MemStore integration operations"""

    def test_defaults(self, store: MemStore):
        """Should default to disabled with empty config and no connectedAt."""
        integ = store.create_integration(bot_id="b1", platform="telegram")
        assert integ.enabled is False
        assert integ.config == {}
        assert integ.connected_at is None

    def test_created_enabled_is_stamped(self, store: MemStore):
        """Should stamp connected_at when created enabled."""
        integ = store.create_integration(bot_id="b1", platform="telegram", enabled=True)
        assert integ.connected_at is not None

    def test_enabling_stamps_connected_at(self, store: MemStore):
        """Should stamp connected_at when an update enables it and keep it on disable."""
        integ = store.create_integration(bot_id="b1", platform="telegram")
        enabled = store.update_integration(integ.id, {"enabled": True})
        assert enabled.connected_at is not None

        disabled = store.update_integration(integ.id, {"enabled": False})
        assert disabled.enabled is False
        assert disabled.connected_at == enabled.connected_at

    def test_delete_missing(self, store: MemStore):
        """Should return False for an unknown id."""
        assert store.delete_integration("nope") is False


class TestUsersAndConversations:
    """SUT: MemStore users and conversations"""

    def test_user_lookup(self, store: MemStore):
        """Should find users by id and by username."""
        user = store.create_user(username="default")
        assert store.get_user(user.id).username == "default"
        assert store.get_user_by_username("default").id == user.id
        assert store.get_user_by_username("other") is None

    def test_conversation_messages(self, store: MemStore):
        """Should store ordered messages and replace them on update."""
        conv = store.create_conversation(bot_id="b1")
        assert conv.messages == []
        assert conv.ended_at is None

        msgs = [ChatMessage(role="user", content="hi"), ChatMessage(role="assistant", content="hello")]
        updated = store.update_conversation(conv.id, {"messages": msgs})
        assert [m.content for m in updated.messages] == ["hi", "hello"]
        assert [c.id for c in store.list_conversations_by_bot("b1")] == [conv.id]

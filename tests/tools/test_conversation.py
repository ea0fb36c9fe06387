"""Tests for conversation sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sessioncache.tools.context import SessionContext
from sessioncache.tools.conversation import ConversationSession

if TYPE_CHECKING:
    from conftest import FakeClock


class TestConversationSessions:
    def test_create_is_not_persisted_until_saved(
        self, session_context: SessionContext, clock: FakeClock
    ) -> None:
        manager = session_context.conversations
        session = manager.create_session("chat-1")

        assert session.created_at == clock.now
        assert session.total_rounds == 0
        assert manager.load("chat-1") is None

    def test_add_round_and_persist(self, session_context: SessionContext, clock: FakeClock) -> None:
        manager = session_context.conversations
        session = manager.create_session("chat-1")
        clock.advance(5)

        manager.add_round(session, "What is X?", "X is Y.", "gemini-pro", ["a.py", "b.py"])
        manager.add_round(session, "And Z?", "Z too.", "gemini-pro", ["b.py", "c.py"])
        manager.save(session)

        loaded = manager.load("chat-1")
        assert isinstance(loaded, ConversationSession)
        assert loaded.total_rounds == 2
        assert [r.round_number for r in loaded.conversation_history] == [1, 2]
        assert loaded.conversation_history[0].model == "gemini-pro"
        assert loaded.context_files == ["a.py", "b.py", "c.py"]
        assert loaded.last_accessed_at == clock.now

    def test_get_or_create_resumes(self, session_context: SessionContext) -> None:
        manager = session_context.conversations
        session = manager.get_or_create("chat-1")
        manager.add_round(session, "q", "a", "m")
        manager.save(session)

        assert manager.get_or_create("chat-1").total_rounds == 1
        assert manager.get_or_create("chat-2").total_rounds == 0

    def test_expired_session_is_recreated(
        self, session_context: SessionContext, clock: FakeClock
    ) -> None:
        """ask-gemini keeps sessions for seven days."""
        manager = session_context.conversations
        session = manager.get_or_create("chat-1")
        manager.add_round(session, "q", "a", "m")
        manager.save(session)

        clock.advance(7 * 24 * 60 * 60 * 1000 + 1)

        assert manager.get_or_create("chat-1").total_rounds == 0


class TestConversationContext:
    def test_empty_history(self, session_context: SessionContext) -> None:
        manager = session_context.conversations
        assert manager.build_conversation_context(manager.create_session("c")) == ""

    def test_renders_last_rounds(self, session_context: SessionContext) -> None:
        manager = session_context.conversations
        session = manager.create_session("c")
        for i in range(1, 5):
            manager.add_round(session, f"q{i}", f"a{i}", "m")

        context = manager.build_conversation_context(session, max_rounds=2)

        assert context == (
            "# Conversation History\n\n"
            "[Round 3]\nUser: q3\nAssistant: a3\n\n"
            "[Round 4]\nUser: q4\nAssistant: a4"
        )

    def test_long_responses_are_clipped(self, session_context: SessionContext) -> None:
        manager = session_context.conversations
        session = manager.create_session("c")
        manager.add_round(session, "q", "x" * 501, "m")
        manager.add_round(session, "q", "y" * 500, "m")

        context = manager.build_conversation_context(session)

        assert "x" * 500 + "..." in context
        assert "x" * 501 not in context
        assert context.endswith("y" * 500)

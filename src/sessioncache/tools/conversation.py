"""Multi-turn Q&A sessions for the ask tool."""

from __future__ import annotations

from pydantic import BaseModel, Field

from sessioncache.tools.base import Round, ToolSessionData, ToolSessionManager

# Responses longer than this are clipped when replayed as context
_CONTEXT_RESPONSE_CHARS = 500


class ConversationRound(Round):
    model: str
    token_count: int | None = None


class ConversationMetadata(BaseModel):
    primary_topic: str | None = None
    tags: list[str] = Field(default_factory=list)


class ConversationSession(ToolSessionData):
    conversation_history: list[ConversationRound] = Field(default_factory=list)
    total_rounds: int = 0
    context_files: list[str] = Field(default_factory=list)
    metadata: ConversationMetadata = Field(default_factory=ConversationMetadata)


class ConversationSessionManager(ToolSessionManager[ConversationSession]):
    """Tracks conversation history so follow-up prompts can carry context."""

    def create_session(self, session_id: str) -> ConversationSession:
        now = self.now()
        return ConversationSession(session_id=session_id, created_at=now, last_accessed_at=now)

    def add_round(
        self,
        session: ConversationSession,
        user_prompt: str,
        response: str,
        model: str,
        context_files: list[str] | None = None,
    ) -> ConversationSession:
        """Append one exchange and merge newly referenced files (order kept, no dupes)."""
        now = self.now()
        session.conversation_history.append(
            ConversationRound(
                round_number=session.total_rounds + 1,
                timestamp=now,
                user_prompt=user_prompt,
                response=response,
                model=model,
            )
        )
        session.total_rounds += 1
        session.last_accessed_at = now
        if context_files:
            session.context_files = list(dict.fromkeys([*session.context_files, *context_files]))
        return session

    def build_conversation_context(self, session: ConversationSession, max_rounds: int = 3) -> str:
        """Render the last ``max_rounds`` exchanges for inclusion in a prompt.

        Returns an empty string for a session with no history.
        """
        if not session.conversation_history or max_rounds <= 0:
            return ""

        parts = []
        for rnd in session.conversation_history[-max_rounds:]:
            response = rnd.response
            if len(response) > _CONTEXT_RESPONSE_CHARS:
                response = response[:_CONTEXT_RESPONSE_CHARS] + "..."
            parts.append(
                f"[Round {rnd.round_number}]\nUser: {rnd.user_prompt}\nAssistant: {response}"
            )

        return "# Conversation History\n\n" + "\n\n".join(parts)

    def get_or_create(self, session_id: str) -> ConversationSession:
        return self.load(session_id) or self.create_session(session_id)

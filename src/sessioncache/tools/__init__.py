"""Tool session managers - typed session schemas layered on the store."""

from sessioncache.tools.brainstorm import (
    BrainstormSession,
    BrainstormSessionManager,
    Idea,
    IdeaDraft,
)
from sessioncache.tools.context import SessionContext
from sessioncache.tools.conversation import ConversationSession, ConversationSessionManager
from sessioncache.tools.review import (
    CommentDecision,
    ReviewComment,
    ReviewSession,
    ReviewSessionManager,
)

__all__ = [
    "BrainstormSession",
    "BrainstormSessionManager",
    "CommentDecision",
    "ConversationSession",
    "ConversationSessionManager",
    "Idea",
    "IdeaDraft",
    "ReviewComment",
    "ReviewSession",
    "ReviewSessionManager",
    "SessionContext",
]

"""Session context for tool handlers.

Single object that owns one store per tool namespace. Whatever composes the
tool handlers creates it once and passes it along; there are no module-level
manager instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sessioncache.config.constants import (
    BRAINSTORM_NAMESPACE,
    CONVERSATION_NAMESPACE,
    REVIEW_NAMESPACE,
)
from sessioncache.config.models import SessionCacheConfig
from sessioncache.store.namespace import Clock, NamespaceStore
from sessioncache.store.policy import resolve_namespace_config
from sessioncache.tools.brainstorm import BrainstormSession, BrainstormSessionManager
from sessioncache.tools.conversation import ConversationSession, ConversationSessionManager
from sessioncache.tools.review import ReviewSession, ReviewSessionManager


@dataclass
class SessionContext:
    """The three tool session managers, wired to stores under one base dir."""

    base_dir: Path
    conversations: ConversationSessionManager
    brainstorms: BrainstormSessionManager
    reviews: ReviewSessionManager

    @classmethod
    def create(
        cls,
        config: SessionCacheConfig | None = None,
        *,
        base_dir: Path | None = None,
        clock: Clock | None = None,
    ) -> SessionContext:
        """Factory to create the managers with effective namespace settings.

        Args:
            config: Loaded settings; built-in defaults when None.
            base_dir: Overrides ``config.storage.base_dir``.
            clock: Epoch-millisecond clock shared by stores and managers.
        """
        config = config or SessionCacheConfig()
        root = base_dir or config.storage.base_path

        def store(namespace: str, payload_type: type) -> NamespaceStore:  # type: ignore[type-arg]
            return NamespaceStore(
                resolve_namespace_config(namespace, settings=config),
                root,
                payload_type=payload_type,
                clock=clock,
                sweep_threshold=config.storage.sweep_threshold,
            )

        return cls(
            base_dir=root,
            conversations=ConversationSessionManager(
                store(CONVERSATION_NAMESPACE, ConversationSession), clock
            ),
            brainstorms=BrainstormSessionManager(
                store(BRAINSTORM_NAMESPACE, BrainstormSession), clock
            ),
            reviews=ReviewSessionManager(store(REVIEW_NAMESPACE, ReviewSession), clock),
        )

"""Iterative ideation sessions for the brainstorm tool.

Ideas keep a status so later rounds can build on what is still in play:

- active: freshly generated
- refined: reworked, still counted as active
- merged / discarded: dropped from ``active_ideas``
"""

from __future__ import annotations

import uuid
from typing import Literal

from pydantic import BaseModel, Field

from sessioncache.core.logging import get_logger
from sessioncache.tools.base import Round, ToolSessionData, ToolSessionManager

log = get_logger(__name__)

IdeaStatus = Literal["active", "refined", "merged", "discarded"]
RefinementAction = Literal["refined", "merged", "discarded"]

_INACTIVE: frozenset[str] = frozenset({"merged", "discarded"})


class IdeaDraft(BaseModel):
    """An idea as extracted from a response, before it gets an id."""

    name: str
    description: str
    feasibility: int | None = Field(default=None, ge=1, le=10)
    impact: int | None = Field(default=None, ge=1, le=10)
    innovation: int | None = Field(default=None, ge=1, le=10)


class Idea(IdeaDraft):
    idea_id: str
    status: IdeaStatus = "active"
    notes: str | None = None


class BrainstormRound(Round):
    ideas_generated: list[Idea] = Field(default_factory=list)


class Refinement(BaseModel):
    timestamp: int
    action: RefinementAction
    idea_ids: list[str]
    reason: str


class BrainstormSession(ToolSessionData):
    challenge: str
    methodology: str
    domain: str | None = None
    constraints: str | None = None
    rounds: list[BrainstormRound] = Field(default_factory=list)
    total_ideas: int = 0
    active_ideas: int = 0
    refinement_history: list[Refinement] = Field(default_factory=list)

    def ideas(self) -> list[Idea]:
        return [idea for rnd in self.rounds for idea in rnd.ideas_generated]


class BrainstormSessionManager(ToolSessionManager[BrainstormSession]):
    """Tracks generated ideas and refinement decisions across rounds."""

    def create_session(
        self,
        session_id: str,
        challenge: str,
        methodology: str,
        domain: str | None = None,
        constraints: str | None = None,
    ) -> BrainstormSession:
        now = self.now()
        return BrainstormSession(
            session_id=session_id,
            created_at=now,
            last_accessed_at=now,
            challenge=challenge,
            methodology=methodology,
            domain=domain,
            constraints=constraints,
        )

    def add_round(
        self,
        session: BrainstormSession,
        user_prompt: str,
        response: str,
        ideas: list[IdeaDraft],
    ) -> BrainstormSession:
        now = self.now()
        generated = [
            Idea(idea_id=f"idea-{uuid.uuid4()}", **draft.model_dump()) for draft in ideas
        ]
        session.rounds.append(
            BrainstormRound(
                round_number=len(session.rounds) + 1,
                timestamp=now,
                user_prompt=user_prompt,
                response=response,
                ideas_generated=generated,
            )
        )
        session.total_ideas += len(generated)
        session.active_ideas += len(generated)
        session.last_accessed_at = now
        return session

    def refine_ideas(
        self,
        session: BrainstormSession,
        action: RefinementAction,
        idea_ids: list[str],
        reason: str,
    ) -> BrainstormSession:
        """Record a refinement and update the status of the named ideas.

        An idea already merged or discarded is not subtracted from
        ``active_ideas`` a second time. Unknown ids are logged and skipped.
        """
        now = self.now()
        session.refinement_history.append(
            Refinement(timestamp=now, action=action, idea_ids=list(idea_ids), reason=reason)
        )

        wanted = set(idea_ids)
        found: set[str] = set()
        for idea in session.ideas():
            if idea.idea_id not in wanted:
                continue
            found.add(idea.idea_id)
            was_active = idea.status not in _INACTIVE
            idea.status = action
            if action in _INACTIVE and was_active:
                session.active_ideas -= 1

        for missing in sorted(wanted - found):
            log.debug("idea_not_found", session_id=session.session_id, idea_id=missing)

        session.last_accessed_at = now
        return session

    def build_ideas_context(self, session: BrainstormSession, active_only: bool = True) -> str:
        """Render earlier ideas as a markdown list for the next prompt."""
        ideas = session.ideas()
        if active_only:
            ideas = [idea for idea in ideas if idea.status not in _INACTIVE]
        if not ideas:
            return ""

        lines = []
        for idea in ideas:
            text = f"- **{idea.name}**: {idea.description}"
            if idea.status != "active":
                text += f" [{idea.status.upper()}]"
            scores = [
                f"{label}: {value}/10"
                for label, value in (
                    ("Feasibility", idea.feasibility),
                    ("Impact", idea.impact),
                    ("Innovation", idea.innovation),
                )
                if value
            ]
            if scores:
                text += f" ({', '.join(scores)})"
            lines.append(text)

        return "# Previously Generated Ideas\n\n" + "\n".join(lines)

    def get_or_create(
        self,
        session_id: str,
        challenge: str,
        methodology: str,
        domain: str | None = None,
        constraints: str | None = None,
    ) -> BrainstormSession:
        existing = self.load(session_id)
        if existing is not None:
            return existing
        return self.create_session(session_id, challenge, methodology, domain, constraints)

"""Iterative code review sessions.

The git state captured per round is produced elsewhere and stored as an
opaque mapping.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from sessioncache.core.logging import get_logger
from sessioncache.tools.base import Round, ToolSessionData, ToolSessionManager

log = get_logger(__name__)

Severity = Literal["critical", "important", "suggestion", "question"]
CommentStatus = Literal["pending", "accepted", "rejected", "modified", "deferred"]
ReviewScope = Literal["full", "changes-only", "focused"]
SessionState = Literal["active", "paused", "completed"]

GitState = dict[str, Any]


class LineRange(BaseModel):
    start: int
    end: int


class ReviewComment(BaseModel):
    id: str
    file_pattern: str
    line_range: LineRange | None = None
    severity: Severity
    comment: str
    round_generated: int
    status: CommentStatus = "pending"
    resolution: str | None = None


class CommentDecision(BaseModel):
    """A user's verdict on one earlier comment."""

    comment_id: str
    decision: CommentStatus
    notes: str | None = None


class ReviewRound(Round):
    files_reviewed: list[str] = Field(default_factory=list)
    comments_generated: list[ReviewComment] = Field(default_factory=list)
    git_state: GitState = Field(default_factory=dict)


class ReviewSession(ToolSessionData):
    git_state: GitState = Field(default_factory=dict)  # at session start
    current_git_state: GitState = Field(default_factory=dict)  # as of the latest round
    rounds: list[ReviewRound] = Field(default_factory=list)
    all_comments: list[ReviewComment] = Field(default_factory=list)
    files_tracked: list[str] = Field(default_factory=list)
    focus_files: list[str] | None = None
    review_scope: ReviewScope = "full"
    total_rounds: int = 0
    session_state: SessionState = "active"


class ReviewSessionManager(ToolSessionManager[ReviewSession]):
    """Tracks review rounds, comments and the decisions made on them."""

    def create_session(
        self,
        session_id: str,
        git_state: GitState,
        focus_files: list[str] | None = None,
    ) -> ReviewSession:
        now = self.now()
        return ReviewSession(
            session_id=session_id,
            created_at=now,
            last_accessed_at=now,
            git_state=dict(git_state),
            current_git_state=dict(git_state),
            focus_files=focus_files,
            review_scope="focused" if focus_files else "full",
        )

    def track_files(self, session: ReviewSession, files: list[str]) -> ReviewSession:
        session.files_tracked = list(dict.fromkeys([*session.files_tracked, *files]))
        return session

    def apply_comment_decisions(
        self,
        session: ReviewSession,
        decisions: list[CommentDecision],
    ) -> int:
        """Set status (and resolution notes) on earlier comments.

        Returns how many decisions matched a comment; unknown ids are logged
        and skipped.
        """
        by_id = {comment.id: comment for comment in session.all_comments}
        applied = 0
        for decision in decisions:
            comment = by_id.get(decision.comment_id)
            if comment is None:
                log.debug(
                    "comment_not_found",
                    session_id=session.session_id,
                    comment_id=decision.comment_id,
                )
                continue
            comment.status = decision.decision
            if decision.notes:
                comment.resolution = decision.notes
            applied += 1
        return applied

    def add_round(
        self,
        session: ReviewSession,
        user_prompt: str,
        response: str,
        comments: list[ReviewComment],
        files_reviewed: list[str],
        git_state: GitState,
    ) -> ReviewRound:
        now = self.now()
        rnd = ReviewRound(
            round_number=session.total_rounds + 1,
            timestamp=now,
            user_prompt=user_prompt,
            response=response,
            files_reviewed=list(files_reviewed),
            comments_generated=list(comments),
            git_state=dict(git_state),
        )
        session.rounds.append(rnd)
        session.all_comments.extend(rnd.comments_generated)
        session.current_git_state = dict(git_state)
        session.total_rounds += 1
        session.last_accessed_at = now
        self.track_files(session, files_reviewed)
        return rnd

    def pending_comments(self, session: ReviewSession) -> list[ReviewComment]:
        return [c for c in session.all_comments if c.status == "pending"]

    def get_or_create(
        self,
        session_id: str,
        git_state: GitState,
        focus_files: list[str] | None = None,
    ) -> ReviewSession:
        """Resume ``session_id`` (refreshing its current git state) or start a new one."""
        existing = self.load(session_id)
        if existing is not None:
            existing.current_git_state = dict(git_state)
            return existing
        return self.create_session(session_id, git_state, focus_files)

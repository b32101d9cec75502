"""Pydantic models for the GitHub payloads the action reads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Account(BaseModel):
    login: str | None = None


class RepoEvent(BaseModel):
    """Entry of ``GET /repos/{owner}/{repo}/events``."""

    id: str | None = None
    type: str | None = None
    actor: Account | None = None

    @property
    def actor_login(self) -> str | None:
        return self.actor.login if self.actor else None


class Collaborator(BaseModel):
    login: str


class PullRequestSnapshot(BaseModel):
    author_login: str
    existing_reviewer_logins: list[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> PullRequestSnapshot:
        user = data.get("user") or {}
        reviewers = data.get("requested_reviewers") or []
        return cls(
            author_login=user.get("login") or "",
            existing_reviewer_logins=[r["login"] for r in reviewers if r.get("login")],
        )


class SelectionStatus(str, Enum):
    max_reached = "max_reached"
    no_candidates = "no_candidates"
    dry_run = "dry_run"
    requested = "requested"


class SelectionOutcome(BaseModel):
    status: SelectionStatus
    reviewers: list[str] = Field(default_factory=list)


__all__ = [
    "Account",
    "Collaborator",
    "PullRequestSnapshot",
    "RepoEvent",
    "SelectionOutcome",
    "SelectionStatus",
]

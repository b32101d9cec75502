"""Reviewer selection: eligibility filtering, quota and random sampling.

Candidates come from exactly one source per run. Recent repository activity
is tried first; repository collaborators with push access are consulted only
when activity produced nobody eligible. A candidate is eligible when it is
not the pull request author, not a ``[bot]`` account, not already requested
and not explicitly excluded.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

import structlog

from .bot_detector import is_bot
from .config import ActionConfig
from .errors import CollaboratorFetchFailed, NotFound
from .reporter import Reporter
from .schemas import (
    Collaborator,
    PullRequestSnapshot,
    RepoEvent,
    SelectionOutcome,
    SelectionStatus,
)

logger = structlog.get_logger(__name__)

EVENTS_PAGE_SIZE = 100
COLLABORATORS_PAGE_SIZE = 100
MAX_CANDIDATES = 50


class ReviewerAPI(Protocol):
    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestSnapshot | None: ...

    def list_repo_events(self, owner: str, repo: str, per_page: int = ...) -> list[RepoEvent]: ...

    def list_collaborators(
        self, owner: str, repo: str, permission: str = ..., per_page: int = ...
    ) -> list[Collaborator]: ...

    def request_reviewers(self, owner: str, repo: str, number: int, reviewers: Sequence[str]) -> None: ...


def compute_quota(requested: int, existing: int, maximum: int | None) -> int:
    """Reviewers still allowed this run, never negative."""
    allowed = requested if maximum is None else min(requested, maximum - existing)
    return max(allowed, 0)


def collect_candidates(
    logins: Iterable[str | None],
    *,
    author: str,
    existing: Iterable[str],
    excluded: Iterable[str],
    limit: int | None = None,
) -> list[str]:
    """Eligible logins in first-seen order, deduplicated, capped at ``limit``."""
    skip = set(existing) | set(excluded)
    pool: list[str] = []
    seen: set[str] = set()
    for login in logins:
        if limit is not None and len(pool) >= limit:
            break
        if not login or login == author or is_bot(login):
            continue
        if login in skip or login in seen:
            continue
        seen.add(login)
        pool.append(login)
    return pool


def sample_reviewers(pool: Sequence[str], count: int, rng: random.Random) -> list[str]:
    """Draw ``count`` distinct logins uniformly (partial Fisher-Yates)."""
    items = list(pool)
    count = max(0, min(count, len(items)))
    for i in range(count):
        j = rng.randrange(i, len(items))
        items[i], items[j] = items[j], items[i]
    return items[:count]


@dataclass(slots=True)
class ReviewerSelector:
    """Pick reviewers for one pull request and request their review."""

    client: ReviewerAPI
    reporter: Reporter
    rng: random.Random = field(default_factory=random.Random)

    def select(self, config: ActionConfig, owner: str, repo: str) -> SelectionOutcome:
        number = config.pull_request_number
        pr = self.client.get_pull_request(owner, repo, number)
        if pr is None:
            raise NotFound(number)

        existing = len(pr.existing_reviewer_logins)
        maximum = config.max_reviewers
        if maximum is not None and existing >= maximum:
            self.reporter.info(
                f"PR #{number} already has {existing} reviewers (max: {maximum}), "
                "which meets the maximum. Not adding more reviewers."
            )
            return SelectionOutcome(status=SelectionStatus.max_reached)

        to_add = compute_quota(config.reviewers_to_request, existing, maximum)
        self.reporter.info(f"Will add {to_add} reviewers to PR: #{number}")

        pool = self._from_activity(config, pr, owner, repo)
        if not pool:
            self.reporter.info(
                "No eligible reviewers found in recent activity. "
                "Falling back to repository collaborators."
            )
            pool = self._from_collaborators(config, pr, owner, repo)

        if not pool:
            self.reporter.warning("Found no eligible reviewers to add.")
            return SelectionOutcome(status=SelectionStatus.no_candidates)

        reviewers = sample_reviewers(pool, to_add, self.rng)
        logger.info("reviewers_sampled", pr_number=number, pool_size=len(pool), selected=reviewers)

        if config.dry_run:
            self.reporter.info(
                "Dry run enabled. Skipping adding reviewers. "
                f"Would've added following users as reviewers: {', '.join(reviewers)}"
            )
            return SelectionOutcome(status=SelectionStatus.dry_run, reviewers=reviewers)

        if not reviewers:
            logger.info("no_reviewers_requested", pr_number=number, requested=to_add)
            return SelectionOutcome(status=SelectionStatus.requested)

        self.reporter.info(f"Adding following users as reviewers: {', '.join(reviewers)}")
        self.client.request_reviewers(owner, repo, number, reviewers)
        return SelectionOutcome(status=SelectionStatus.requested, reviewers=reviewers)

    def _from_activity(
        self, config: ActionConfig, pr: PullRequestSnapshot, owner: str, repo: str
    ) -> list[str]:
        events = self.client.list_repo_events(owner, repo, per_page=EVENTS_PAGE_SIZE)
        pool = collect_candidates(
            (event.actor_login for event in events),
            author=pr.author_login,
            existing=pr.existing_reviewer_logins,
            excluded=config.excluded_logins,
            limit=MAX_CANDIDATES,
        )
        logger.info("candidates_collected", source="activity", events=len(events), candidates=len(pool))
        if pool:
            self.reporter.info(
                f"Found {len(pool)} users from recent activity who are eligible to be reviewers."
            )
        return pool

    def _from_collaborators(
        self, config: ActionConfig, pr: PullRequestSnapshot, owner: str, repo: str
    ) -> list[str]:
        try:
            collaborators = self.client.list_collaborators(
                owner, repo, permission="push", per_page=COLLABORATORS_PAGE_SIZE
            )
        except Exception as e:
            failure = CollaboratorFetchFailed(str(e))
            logger.warning("collaborator_fetch_failed", error=failure.reason)
            self.reporter.warning(str(failure))
            return []

        pool = collect_candidates(
            (collaborator.login for collaborator in collaborators),
            author=pr.author_login,
            existing=pr.existing_reviewer_logins,
            excluded=config.excluded_logins,
            limit=MAX_CANDIDATES,
        )
        logger.info(
            "candidates_collected",
            source="collaborators",
            collaborators=len(collaborators),
            candidates=len(pool),
        )
        if pool:
            self.reporter.info(
                f"Found {len(pool)} collaborators who are eligible to be reviewers."
            )
        return pool


__all__ = [
    "COLLABORATORS_PAGE_SIZE",
    "EVENTS_PAGE_SIZE",
    "MAX_CANDIDATES",
    "ReviewerAPI",
    "ReviewerSelector",
    "collect_candidates",
    "compute_quota",
    "sample_reviewers",
]

from __future__ import annotations

from collections.abc import Sequence

import pytest

from auto_reviewers.schemas import Collaborator, PullRequestSnapshot, RepoEvent


class RecordingReporter:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.failed = False

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def set_failed(self, message: str) -> None:
        self.failed = True
        self.messages.append(("failed", message))

    def of(self, kind: str) -> list[str]:
        return [message for level, message in self.messages if level == kind]


class FakeClient:
    def __init__(
        self,
        *,
        pr: PullRequestSnapshot | None = None,
        actors: Sequence[str | None] = (),
        collaborators: Sequence[str] = (),
        collaborator_error: Exception | None = None,
    ) -> None:
        self.pr = pr
        self.events = [
            RepoEvent(actor=None) if login is None else RepoEvent(actor={"login": login})
            for login in actors
        ]
        self.collaborators = [Collaborator(login=login) for login in collaborators]
        self.collaborator_error = collaborator_error
        self.calls: list[tuple] = []
        self.requested: list[list[str]] = []
        self.closed = False

    def get_pull_request(self, owner, repo, number):
        self.calls.append(("get_pull_request", owner, repo, number))
        return self.pr

    def list_repo_events(self, owner, repo, per_page=100):
        self.calls.append(("list_repo_events", owner, repo, per_page))
        return self.events

    def list_collaborators(self, owner, repo, permission="push", per_page=100):
        self.calls.append(("list_collaborators", owner, repo, permission, per_page))
        if self.collaborator_error is not None:
            raise self.collaborator_error
        return self.collaborators

    def request_reviewers(self, owner, repo, number, reviewers):
        self.calls.append(("request_reviewers", owner, repo, number, list(reviewers)))
        self.requested.append(list(reviewers))

    def close(self) -> None:
        self.closed = True

    def called(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def make_client():
    def factory(author: str = "any", existing: Sequence[str] = (), **kwargs) -> FakeClient:
        pr = PullRequestSnapshot(author_login=author, existing_reviewer_logins=list(existing))
        return FakeClient(pr=pr, **kwargs)

    return factory

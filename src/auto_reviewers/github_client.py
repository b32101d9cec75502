"""GitHub REST API client."""

from __future__ import annotations

import weakref
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, NoReturn

import httpx
import structlog

from .schemas import Collaborator, PullRequestSnapshot, RepoEvent

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubAPIError(ValueError):
    """GitHub answered with an error status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def _handle_http_error(e: httpx.HTTPStatusError) -> NoReturn:
    """Extract GitHub error message and raise GitHubAPIError."""
    try:
        error_data = e.response.json()
        gh_message = error_data.get("message", "Unknown error")
    except Exception:
        gh_message = e.response.text or "Unknown error"

    status = e.response.status_code
    if status == 401:
        raise GitHubAPIError(f"Invalid GitHub token: {gh_message}", status) from e
    if status == 404:
        raise GitHubAPIError(f"Resource not found: {gh_message}", status) from e
    if status in (403, 429):
        raise GitHubAPIError(f"GitHub API rate limit exceeded: {gh_message}", status) from e
    raise GitHubAPIError(f"GitHub API error ({status}): {gh_message}", status) from e


@dataclass(slots=True, weakref_slot=True)
class GitHubClient:
    token: str
    base_url: str = DEFAULT_API_URL
    _client: httpx.Client = field(init=False, repr=False)
    _finalizer: weakref.finalize | None = field(init=False, repr=False, default=None)
    rate_limit_remaining: int = field(default=5000, init=False)
    rate_limit_reset: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        self._client = httpx.Client(timeout=10.0, headers=self._headers())
        self._finalizer = weakref.finalize(self, self._client.close)

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _update_rate_limits(self, response: httpx.Response) -> None:
        if "X-RateLimit-Remaining" in response.headers:
            self.rate_limit_remaining = int(response.headers["X-RateLimit-Remaining"])
        if "X-RateLimit-Reset" in response.headers:
            self.rate_limit_reset = int(response.headers["X-RateLimit-Reset"])

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: dict | None = None,
    ) -> httpx.Response:
        log = logger.bind(method=method, path=path)
        try:
            log.info("github_api_request")
            response = self._client.request(method, f"{self.base_url}{path}", params=params, json=payload)
            self._update_rate_limits(response)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.error("github_api_error", status=e.response.status_code)
            _handle_http_error(e)
        except httpx.RequestError as e:
            log.error("github_api_connection_failed", error=str(e))
            raise ValueError(f"GitHub API connection failed: {e}") from e
        log.info(
            "github_api_success",
            status=response.status_code,
            rate_limit_remaining=self.rate_limit_remaining,
        )
        return response

    def get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: dict | None = None) -> httpx.Response:
        return self._request("POST", path, payload=payload)

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestSnapshot | None:
        """Fetch a pull request; ``None`` when GitHub reports it missing."""
        try:
            response = self.get(f"/repos/{owner}/{repo}/pulls/{number}")
        except GitHubAPIError as e:
            if e.status_code == 404:
                return None
            raise
        data = response.json()
        if not data:
            return None
        return PullRequestSnapshot.from_api(data)

    def list_repo_events(self, owner: str, repo: str, per_page: int = 100) -> list[RepoEvent]:
        response = self.get(f"/repos/{owner}/{repo}/events", params={"per_page": per_page})
        return [RepoEvent.model_validate(item) for item in response.json() or []]

    def list_collaborators(
        self, owner: str, repo: str, permission: str = "push", per_page: int = 100
    ) -> list[Collaborator]:
        response = self.get(
            f"/repos/{owner}/{repo}/collaborators",
            params={"permission": permission, "per_page": per_page},
        )
        return [Collaborator.model_validate(item) for item in response.json() or []]

    def request_reviewers(self, owner: str, repo: str, number: int, reviewers: Sequence[str]) -> None:
        self.post(
            f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers",
            payload={"reviewers": list(reviewers)},
        )

    def close(self) -> None:
        if self._finalizer and self._finalizer.alive:
            self._finalizer.detach()
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["DEFAULT_API_URL", "GitHubAPIError", "GitHubClient"]

"""Configuration loading for the action."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import InvalidInput, MissingInput
from .github_client import DEFAULT_API_URL


@dataclass(frozen=True, slots=True)
class ActionConfig:
    """Validated action inputs, built once per run."""

    pull_request_number: int
    reviewers_to_request: int
    token: str = field(repr=False)
    max_reviewers: int | None = None
    excluded_logins: frozenset[str] = frozenset()
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class RunnerContext:
    """Values the Actions runner provides for every step."""

    repository: str | None = None
    api_url: str = DEFAULT_API_URL
    output_path: str | None = None
    log_level: str = "INFO"
    json_logs: bool = True


def get_input(env: Mapping[str, str], name: str) -> str:
    """Read an action input the way the runner exposes it (``INPUT_<NAME>``)."""
    candidates = [
        f"INPUT_{name.upper()}",
        f"INPUT_{name.upper().replace('-', '_')}",
    ]
    for key in candidates:
        value = env.get(key)
        if value is not None:
            return value.strip()
    return ""


INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(name: str, raw: str) -> int:
    # ASCII digits only; int() alone also takes "1_000" and non-Latin digits
    if not INTEGER_RE.fullmatch(raw):
        raise InvalidInput(name, raw)
    return int(raw)


def parse_excluded(raw: str) -> frozenset[str]:
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def load_action_config(env: Mapping[str, str]) -> ActionConfig:
    """Validate inputs in a fixed order; the first problem found is raised."""
    raw_pr = get_input(env, "pull-request-number")
    if not raw_pr:
        raise MissingInput("pull-request-number")
    pr_number = _parse_int("pull-request-number", raw_pr)

    token = get_input(env, "token")
    if not token:
        raise MissingInput("token")

    raw_count = get_input(env, "number-of-reviewers")
    if not raw_count:
        raise MissingInput("number-of-reviewers")
    count = _parse_int("number-of-reviewers", raw_count)

    raw_max = get_input(env, "max-number-of-reviewers")
    max_reviewers = _parse_int("max-number-of-reviewers", raw_max) if raw_max else None

    return ActionConfig(
        pull_request_number=pr_number,
        reviewers_to_request=count,
        token=token,
        max_reviewers=max_reviewers,
        excluded_logins=parse_excluded(get_input(env, "excluded-reviewers")),
        dry_run=get_input(env, "dry-run") == "true",
    )


def load_runner_context(env: Mapping[str, str]) -> RunnerContext:
    log_level = env.get("LOG_LEVEL", "INFO")
    if env.get("RUNNER_DEBUG") == "1":
        log_level = "DEBUG"
    return RunnerContext(
        repository=env.get("GITHUB_REPOSITORY"),
        api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        output_path=env.get("GITHUB_OUTPUT") or None,
        log_level=log_level,
        json_logs=env.get("GITHUB_ACTIONS") == "true",
    )


def parse_repository(value: str | None) -> tuple[str, str]:
    """Split ``owner/repo``."""
    if not value:
        raise ValueError("GITHUB_REPOSITORY is not set.")
    parts = value.split("/", 1)
    if len(parts) == 2 and parts[0].strip() and parts[1].strip():
        return parts[0].strip(), parts[1].strip()
    raise ValueError(
        f"Invalid GITHUB_REPOSITORY format: '{value}'. "
        "Expected format: 'owner/repo'"
    )


__all__ = [
    "ActionConfig",
    "RunnerContext",
    "get_input",
    "load_action_config",
    "load_runner_context",
    "parse_excluded",
    "parse_repository",
]

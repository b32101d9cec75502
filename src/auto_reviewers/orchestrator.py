"""Single entry point for one reviewer-assignment run."""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from pathlib import Path

import structlog

from .config import load_action_config, load_runner_context, parse_repository
from .github_client import GitHubClient
from .reporter import Reporter, write_reviewers_output
from .schemas import SelectionOutcome
from .selector import ReviewerAPI, ReviewerSelector

logger = structlog.get_logger(__name__)

ClientFactory = Callable[[str, str], ReviewerAPI]


def default_client_factory(token: str, api_url: str) -> ReviewerAPI:
    return GitHubClient(token=token, base_url=api_url)


def run(
    env: Mapping[str, str],
    reporter: Reporter,
    client_factory: ClientFactory = default_client_factory,
    rng: random.Random | None = None,
) -> SelectionOutcome | None:
    """Validate inputs, select reviewers and request them.

    Every failure ends up as a single ``reporter.set_failed`` call; the
    outcome is ``None`` in that case.
    """
    client: ReviewerAPI | None = None
    try:
        config = load_action_config(env)
        runner = load_runner_context(env)
        owner, repo = parse_repository(runner.repository)
        logger.info(
            "run_start",
            owner=owner,
            repo=repo,
            pr_number=config.pull_request_number,
            requested=config.reviewers_to_request,
            max_reviewers=config.max_reviewers,
            dry_run=config.dry_run,
        )

        client = client_factory(config.token, runner.api_url)
        selector = ReviewerSelector(client=client, reporter=reporter, rng=rng or random.Random())
        outcome = selector.select(config, owner, repo)

        if runner.output_path:
            write_reviewers_output(Path(runner.output_path), outcome.reviewers)
        logger.info("run_complete", status=outcome.status.value, reviewers=outcome.reviewers)
        return outcome
    except Exception as e:
        logger.error("run_failed", error=str(e), error_type=type(e).__name__)
        if str(e):
            reporter.set_failed(str(e))
        return None
    finally:
        close = getattr(client, "close", None)
        if callable(close):
            close()


__all__ = ["ClientFactory", "default_client_factory", "run"]

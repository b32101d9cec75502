"""CLI entry point."""

from __future__ import annotations

import os

from .config import load_runner_context
from .logging_config import configure_logging
from .orchestrator import run
from .reporter import ActionsReporter


def main() -> int:
    env = dict(os.environ)
    context = load_runner_context(env)
    configure_logging(context.log_level, json_logs=context.json_logs)
    reporter = ActionsReporter()
    run(env, reporter)
    return 1 if reporter.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())

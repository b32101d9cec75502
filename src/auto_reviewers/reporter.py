"""Operator-facing messages for the Actions log."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, TextIO
from uuid import uuid4

import structlog

logger = structlog.get_logger(__name__)


class Reporter(Protocol):
    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def set_failed(self, message: str) -> None: ...


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsReporter:
    """Write workflow commands to stdout, mirrored into the structured log."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self.failed = False

    def _write(self, line: str) -> None:
        self._stream.write(f"{line}\n")
        self._stream.flush()

    def info(self, message: str) -> None:
        logger.info("report_info", message=message)
        self._write(message)

    def warning(self, message: str) -> None:
        logger.warning("report_warning", message=message)
        self._write(f"::warning::{_escape_data(message)}")

    def set_failed(self, message: str) -> None:
        logger.error("report_failed", message=message)
        self.failed = True
        self._write(f"::error::{_escape_data(message)}")


def append_output(path: Path, key: str, value: str) -> None:
    """Append a step output using the heredoc delimiter format."""
    delimiter = f"ghadelimiter_{uuid4().hex}"
    while delimiter in value:
        delimiter = f"ghadelimiter_{uuid4().hex}"
    with path.open("a", encoding="utf-8") as fh:
        fh.write(f"{key}<<{delimiter}\n")
        fh.write(value)
        if not value.endswith("\n"):
            fh.write("\n")
        fh.write(f"{delimiter}\n")


def write_reviewers_output(path: Path, reviewers: Sequence[str]) -> None:
    append_output(path, "reviewers", ",".join(reviewers))


__all__ = ["ActionsReporter", "Reporter", "append_output", "write_reviewers_output"]

"""Bot detection for GitHub actors."""

from __future__ import annotations

BOT_MARKER = "[bot]"


def is_bot(login: str) -> bool:
    """Detect if GitHub login belongs to an app/bot account."""
    return BOT_MARKER in login


__all__ = ["BOT_MARKER", "is_bot"]

"""Errors raised while validating inputs and assigning reviewers."""

from __future__ import annotations


class ReviewerAssignmentError(ValueError):
    """Base class for failures with an operator-facing message."""


class MissingInput(ReviewerAssignmentError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Input '{name}' not supplied. Unable to continue.")


class InvalidInput(ReviewerAssignmentError):
    def __init__(self, name: str, raw_value: str) -> None:
        self.name = name
        self.raw_value = raw_value
        super().__init__(f"Invalid value for '{name}': {raw_value}")


class NotFound(ReviewerAssignmentError):
    def __init__(self, pr_number: int) -> None:
        self.pr_number = pr_number
        super().__init__(f"PR #{pr_number} not found.")


class CollaboratorFetchFailed(ReviewerAssignmentError):
    """Collaborator lookup failed; reported as a warning, never fatal."""

    def __init__(self, message: str) -> None:
        self.reason = message
        super().__init__(f"Failed to fetch collaborators: {message}")


__all__ = [
    "CollaboratorFetchFailed",
    "InvalidInput",
    "MissingInput",
    "NotFound",
    "ReviewerAssignmentError",
]

"""Workflow error taxonomy and transition result type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Failure categories surfaced past the service boundary."""

    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    COMMENT_REQUIRED = "comment_required"
    VALIDATION_FAILED = "validation_failed"
    PERSISTENCE_ERROR = "persistence_error"


class WorkflowError(Exception):
    """Base class for unexpected workflow failures raised by services."""

    category: ErrorCategory = ErrorCategory.PERSISTENCE_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(WorkflowError):
    """Workflow, transition, or content item does not exist."""

    category = ErrorCategory.NOT_FOUND


class ValidationFailedError(WorkflowError):
    """Workflow definition failed validation; carries every message."""

    category = ErrorCategory.VALIDATION_FAILED

    def __init__(self, errors: list[str]):
        super().__init__(f"Workflow validation failed: {', '.join(errors)}")
        self.errors = list(errors)


class PersistenceError(WorkflowError):
    """Underlying store failed."""

    category = ErrorCategory.PERSISTENCE_ERROR


@dataclass
class TransitionResult:
    """Outcome of a transition attempt.

    Expected denials (invalid transition, missing comment) are reported here
    rather than raised.
    """

    success: bool
    message: str
    category: ErrorCategory | None = None
    state: str | None = None

    @classmethod
    def ok(cls, message: str, state: str) -> TransitionResult:
        return cls(success=True, message=message, state=state)

    @classmethod
    def error(cls, category: ErrorCategory, message: str) -> TransitionResult:
        return cls(success=False, message=message, category=category)

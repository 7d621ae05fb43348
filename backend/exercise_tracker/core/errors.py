"""Error Hierarchy - tagged exceptions for every exercise-tracker failure mode.

Invariants:
    - Every error carries a kind (ErrorKind) and an http_status
    - Exactly one subclass per kind; callers inspect .kind, never object shape
    - normalize_error() is the single point that turns a failure into (status, text)
    - User-facing text never contains driver or SQL detail

Design Decisions:
    - Single hierarchy with ExerciseTrackerError base: one FastAPI handler catches all
    - Plain-text rendering: responses are short messages, not JSON envelopes
"""

from enum import Enum

INTERNAL_ERROR_TEXT = "Internal Server Error"
NOT_FOUND_TEXT = "not found"


class ErrorKind(str, Enum):
    """Failure kinds recognised by the error normalizer."""
    VALIDATION = "validation"
    UNIQUENESS = "uniqueness"
    NOT_FOUND = "not_found"
    STORE = "store"


class ExerciseTrackerError(Exception):
    """Base exception for all exercise-tracker errors."""

    def __init__(self, message: str, kind: ErrorKind, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.http_status = http_status


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(ExerciseTrackerError):
    """Input failed a data model rule."""
    def __init__(self, field: str, message: str):
        super().__init__(message, ErrorKind.VALIDATION, 400)
        self.field = field


class UniquenessError(ExerciseTrackerError):
    """Insert violated a uniqueness constraint."""
    def __init__(self, message: str):
        super().__init__(message, ErrorKind.UNIQUENESS, 400)


class NotFoundError(ExerciseTrackerError):
    """Referenced entity or route does not exist."""
    def __init__(self, resource_type: str | None = None, resource_id: str | None = None):
        if resource_type is None:
            message = NOT_FOUND_TEXT
        else:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(message, ErrorKind.NOT_FOUND, 404)
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(ExerciseTrackerError):
    """Store operation failed for a reason other than a constraint."""
    def __init__(self, message: str, operation: str = "unknown"):
        super().__init__(message, ErrorKind.STORE, 500)
        self.operation = operation


def normalize_error(exc: BaseException) -> tuple[int, str]:
    """Map any failure to the (status_code, text) pair sent to the client."""
    if not isinstance(exc, ExerciseTrackerError):
        return 500, INTERNAL_ERROR_TEXT
    if exc.kind in (ErrorKind.VALIDATION, ErrorKind.UNIQUENESS):
        return 400, exc.message
    if exc.kind is ErrorKind.NOT_FOUND:
        return 404, exc.message or NOT_FOUND_TEXT
    return exc.http_status, exc.message or INTERNAL_ERROR_TEXT

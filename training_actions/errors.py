"""Error kinds raised by the services.

Every failure carries a machine-distinguishable ``kind`` plus a short
``title`` and a human-readable ``message``; the HTTP layer maps the kind
to a status code.
"""
from typing import Optional


class TrainingActionError(Exception):
    kind = "internal_error"
    title = "Internal error."

    def __init__(self, message: str, title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if title is not None:
            self.title = title


class NotFoundError(TrainingActionError):
    kind = "not_found"
    title = "Not found."


class ValidationError(TrainingActionError):
    kind = "validation_error"
    title = "Validation error."


class ConflictError(TrainingActionError):
    kind = "conflict"
    title = "Conflict."


class InternalError(TrainingActionError):
    pass

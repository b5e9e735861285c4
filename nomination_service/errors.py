"""
Application error taxonomy.

Every error carries the HTTP status it maps to and a message that is safe to
return to the caller. Handlers translate these into response envelopes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class NominationError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(NominationError):
    """One or more field violations; the caller can correct and resubmit."""

    status_code = 400
    default_message = "Validation error"

    def __init__(self, errors: List[FieldError], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message)


class InvalidRequest(NominationError):
    """Malformed identifiers, pagination parameters or empty update payloads."""

    status_code = 400
    default_message = "Invalid request"


class NotFound(NominationError):
    status_code = 404
    default_message = "Nomination not found"


class DuplicateKey(NominationError):
    status_code = 409
    default_message = "Email already exists"


class StorageFault(NominationError):
    """Unexpected persistence failure. The message never includes the cause."""

    status_code = 500
    default_message = "Internal server error"

"""Errors raised by the front-desk core.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer answers with. All of them are local and synchronous; callers decide
how to present them.
"""
from typing import Optional


class ClinicError(Exception):
    """Base class for front-desk errors."""
    code = "CLINIC_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    """Raised when a required field is missing or empty."""
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ClinicError):
    """Raised when an id does not exist in the target collection."""
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, resource_id: int):
        super().__init__(f"{resource} {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class InvalidReferenceError(ClinicError):
    """Raised when a foreign id (e.g. doctor_id on a booking) does not resolve."""
    code = "INVALID_REFERENCE"
    status_code = 422


class StateMachineError(ClinicError):
    """Base for status-machine violations."""
    code = "STATE_ERROR"
    status_code = 409


class InvalidTransitionError(StateMachineError):
    """Raised when a queue entry is asked to skip or reverse a status."""
    code = "INVALID_TRANSITION"

    def __init__(self, current: str, intended: str):
        super().__init__(f"Cannot move from '{current}' to '{intended}'")
        self.current = current
        self.intended = intended


class InvalidStateError(StateMachineError):
    """Raised when an operation is not allowed in the record's current status."""
    code = "INVALID_STATE"

"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Every failure an appointment operation can report maps to exactly one of
these classes, so callers (and the HTTP layer) can tell them apart.
"""

from typing import Any, Dict, Optional


class AppointmentError(Exception):
    """Base class for failures reported by the scheduling core."""

    code = "appointment_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(AppointmentError):
    """A required field is missing, empty or malformed.

    Raised before the store is touched.
    """

    code = "validation_error"
    status_code = 400


class ConflictError(AppointmentError):
    """The requested date/time slot is already booked."""

    code = "conflict"
    status_code = 409


class NotFoundError(AppointmentError):
    """The operation targets an appointment id that does not exist."""

    code = "not_found"
    status_code = 404


class StoreError(AppointmentError):
    """The persistence layer failed. Surfaced as an opaque failure."""

    code = "store_error"
    status_code = 500

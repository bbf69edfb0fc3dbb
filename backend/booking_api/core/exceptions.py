"""
Error taxonomy for the booking service.

Services raise these; a single exception handler in main.py renders them as
`{message, error?, errors?}` JSON with the matching HTTP status.
"""

from typing import Optional

from fastapi import status


class BookingServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None, errors: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.error = error
        self.errors = errors or []

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error:
            body["error"] = self.error
        if self.errors:
            body["errors"] = [e.to_dict() for e in self.errors]
        return body


class ValidationError(BookingServiceError):
    """Malformed or incomplete client input, detected before persistence."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(BookingServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(BookingServiceError):
    """Store-level failure. Carries the driver's message in `error`."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

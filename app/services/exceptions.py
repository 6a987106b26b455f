"""
Domain errors raised by the crud and service layers.

Each error carries the HTTP status it maps to; the handlers registered in
``app.core.error_handlers`` turn them into ``{"detail": ...}`` responses.
"""

from fastapi import status


class CourtsideError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(CourtsideError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ForbiddenError(CourtsideError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized to perform this action"


class ConflictError(CourtsideError):
    # Slot taken, booking already cancelled, duplicate email...
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Conflict with the current state of the resource"


class ValidationError(CourtsideError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"

"""
Domain errors raised by services and mapped to HTTP responses in main.py.
"""

from fastapi import status


class RescueLinkError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(RescueLinkError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input data"


class AuthError(RescueLinkError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ConflictError(RescueLinkError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class DuplicateError(RescueLinkError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Duplicate request"


class NotFoundError(RescueLinkError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StateError(RescueLinkError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Operation not allowed in the current state"


class CapacityError(StateError):
    default_message = "This request already has all the volunteers it needs"


class ServerError(RescueLinkError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

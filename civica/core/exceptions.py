"""Domain errors raised by services and mapped to HTTP responses in civica.main."""
from fastapi import status


class ModerationError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class AuthorizationError(ModerationError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ModerationError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(ModerationError):
    """The comment or user is not in a state that allows the requested action."""

    status_code = status.HTTP_400_BAD_REQUEST

"""Error taxonomy shared by services and routes.

Services raise these; the exception handler registered in ``wikiprofile.main``
turns them into ``{"detail": ...}`` responses with the matching status code.
"""

from typing import Any

from fastapi import status


class WikiProfileError(Exception):
    """Base class for errors that end a request with a client-visible outcome."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, errors: list[Any] | None = None):
        self.detail = detail or self.default_detail
        self.errors = errors
        super().__init__(self.detail)


class ValidationError(WikiProfileError):
    """Malformed input: bad status or role value, weak password, taken username."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request data"


class UnauthenticatedError(WikiProfileError):
    """No valid identity on the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class ForbiddenError(WikiProfileError):
    """Authenticated, but not allowed to act on the target."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFoundError(WikiProfileError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"

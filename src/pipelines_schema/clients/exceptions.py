"""Exceptions raised by the Azure DevOps REST clients.

Each HTTP error status the clients care about has its own subclass so callers
can tell a rejected token apart from a missing organization or an outage.
"""
from typing import Optional


class DevOpsError(Exception):
    """Base exception for all Azure DevOps API errors."""
    status: Optional[int] = None
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.message = message or self.default_message
        self.status_code = status_code if status_code is not None else self.status
        super().__init__(self.message)


class AuthenticationError(DevOpsError):
    """The access token was rejected (401)."""
    status = 401
    default_message = "Authentication failed"


class AuthorizationError(DevOpsError):
    """The token is valid but not allowed to read the resource (403)."""
    status = 403
    default_message = "Authorization denied"


class NotFoundError(DevOpsError):
    """Unknown organization or endpoint (404)."""
    status = 404
    default_message = "Resource not found"


class RateLimitError(DevOpsError):
    """Too many requests (429)."""
    status = 429
    default_message = "Rate limit exceeded"


class ServerError(DevOpsError):
    """Azure DevOps failed to handle the request (5xx)."""
    status = 500
    default_message = "Server error"


_ERRORS_BY_STATUS = {
    error.status: error for error in (AuthenticationError, AuthorizationError, NotFoundError, RateLimitError)
}


def error_for_status(status_code: int, message: Optional[str] = None) -> DevOpsError:
    """Build the exception matching an HTTP error status."""
    if status_code >= 500:
        return ServerError(message, status_code=status_code)
    return _ERRORS_BY_STATUS.get(status_code, DevOpsError)(message, status_code=status_code)

"""Domain errors raised by the service layer.

Services never raise ``HTTPException``. The application registers a single
handler that maps each error class to its HTTP status code.
"""

from fastapi import status


class AdminPanelError(Exception):
    """Base class for all domain errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers = None

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail)
        self.detail = detail


class ValidationError(AdminPanelError):
    """Bad or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ValidationError):
    """Unique constraint violated, e.g. an email that is already registered."""


class AuthenticationError(AdminPanelError):
    """Bad credentials or an invalid, expired or missing token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class AuthorizationError(AdminPanelError):
    """Authenticated user may not act on the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AdminPanelError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(AdminPanelError):
    """Object storage upload or delete failed."""

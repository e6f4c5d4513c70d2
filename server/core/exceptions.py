"""Authentication exceptions.

Raised by the auth service and security primitives, and translated into
HTTP responses by ``server.exception_handlers``. Every error carries a
fixed, user-displayable ``message``.
"""

from fastapi import status


class AuthError(Exception):
    """Base exception for all authentication errors."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Raised when a required field is missing or empty."""

    def __init__(self, message: str = "Username and password are required"):
        super().__init__(message)


class ConflictError(AuthError):
    """Raised when registering a username that already exists."""

    def __init__(self, message: str = "Username already taken"):
        super().__init__(message)


class NotFoundError(AuthError):
    """Raised when no user matches the given username."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when the password does not match the stored hash."""

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a bearer token is invalid, expired, or malformed."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class InfrastructureError(AuthError):
    """Raised when the store is unreachable or a token cannot be signed.

    The public message is always generic; the cause is chained and logged.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Server error"):
        super().__init__(message)

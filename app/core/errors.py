"""Typed failures raised by strategies and services; the API layer maps them to responses."""


class AuthError(Exception):
    """Base for failures that carry an HTTP-equivalent status and a caller-safe message."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AuthError):
    """Required field missing or blank."""

    status_code = 400
    default_message = "name, email and password are required"


class UserAlreadyExistsError(AuthError):
    """Email already registered to another account."""

    status_code = 400
    default_message = "User already exists"


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password; the message never says which."""

    status_code = 401
    default_message = "Invalid credentials"


class InvalidMasterKeyError(AuthError):
    """Supplied master key does not match the configured one (or none is configured)."""

    status_code = 401
    default_message = "Invalid master key"


class UnauthenticatedError(AuthError):
    """No valid bearer token on a protected route."""

    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(AuthError):
    """Authenticated, but the role or ownership check failed."""

    status_code = 403
    default_message = "Access denied: insufficient permissions"


class NotFoundError(AuthError):
    """Target user does not exist."""

    status_code = 404
    default_message = "User not found"

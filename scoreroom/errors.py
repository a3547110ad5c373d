"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class AuthorizationError(AppError):
    """Raised when a scorer password does not match the room pin."""

    def __init__(self, message="Incorrect scorer password."):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class SyncPendingError(AppError):
    """Raised when a mutation is attempted before the room is hydrated."""

    def __init__(self, message="Room data is still syncing."):
        """Initialize the error."""
        super().__init__(message, 409)


class ClaimConflictError(AppError):
    """Raised when a player is already claimed by another device."""

    def __init__(self, message="That player is already taken on another device."):
        """Initialize the error."""
        super().__init__(message, 409)


class ConnectionUnavailableError(AppError):
    """Raised when the remote store is unavailable or rejects a request."""

    def __init__(self, message="Firebase not ready."):
        """Initialize the error."""
        super().__init__(message, 503)

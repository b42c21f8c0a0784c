"""Custom exception classes for goaltrack."""


class GoalTrackError(Exception):
    """Base exception for goaltrack."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(GoalTrackError):
    """Request or argument validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(GoalTrackError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class AuthenticationError(GoalTrackError):
    """Authentication required or token invalid."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class AuthorizationError(GoalTrackError):
    """Insufficient permissions."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__("AUTHORIZATION_ERROR", message, status_code=403)


class ConflictError(GoalTrackError):
    """Resource state conflict."""

    def __init__(self, message: str):
        super().__init__("CONFLICT", message, status_code=409)


class BackendError(GoalTrackError):
    """The managed backend rejected or failed a call.

    Covers constraint violations, RLS denials surfaced as API errors,
    edge function failures and transport errors alike.
    """

    def __init__(self, message: str, details=None):
        super().__init__("BACKEND_ERROR", message, details, status_code=502)

    @classmethod
    def wrap(cls, operation: str, exc: Exception) -> "BackendError":
        """Build a BackendError from a client library exception."""
        message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
        details = None
        code = getattr(exc, "code", None)
        if code:
            details = {"backend_code": str(code)}
        return cls(f"Failed to {operation}: {message}", details)

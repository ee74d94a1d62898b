"""
CreatorShare Exceptions

The ledger core reports expected negative outcomes (not found, duplicate
vote, ended poll) as None/False. Exceptions are reserved for validation
failures at the API boundary and for genuinely exceptional conditions.
"""


class CreatorShareError(Exception):
    """Base exception for all CreatorShare errors."""


class ApiError(CreatorShareError):
    """Error translated directly into an HTTP response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class AuthenticationRequired(ApiError):
    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(401, message)


class PermissionDenied(ApiError):
    def __init__(self, message: str = "Not allowed") -> None:
        super().__init__(403, message)


class NotFound(ApiError):
    def __init__(self, message: str = "Not found") -> None:
        super().__init__(404, message)


class Conflict(ApiError):
    def __init__(self, message: str = "Already exists") -> None:
        super().__init__(409, message)


class RateLimitExceeded(ApiError):
    def __init__(self, message: str = "Rate limit exceeded", retry_after: int = 0) -> None:
        super().__init__(429, message)
        self.retry_after = retry_after


class FrameValidationError(ApiError):
    """Frame message failed basic validation (missing fields, stale timestamp)."""

    def __init__(self, message: str = "Invalid frame message") -> None:
        super().__init__(400, message)


class FrameActionError(ApiError):
    """Frame action could not be performed."""

    def __init__(self, message: str) -> None:
        super().__init__(400, message)


class FrameNotFoundError(ApiError):
    """Entity referenced by a frame action does not exist."""

    def __init__(self, message: str = "Content not found") -> None:
        super().__init__(404, message)


class IdentifierCollisionError(CreatorShareError):
    """Repeated identifier collisions; indicates a broken id source."""

"""
Error taxonomy for candidate exports.

Every failure an export can surface derives from ExportError, so callers
can catch one type and show the message to the user.
"""

from typing import Optional


class ExportError(Exception):
    """Base class for all export failures."""
    pass


class MissingCredential(ExportError):
    """Raised when no usable API key was supplied."""

    def __init__(self, message: str = "Missing API key"):
        super().__init__(message)


class InvalidCredential(ExportError):
    """Raised when Teamtailor rejects the API key (401)."""

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message)


class AccessDenied(ExportError):
    """Raised when the API key lacks permission for candidates (403)."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class RateLimitExceeded(ExportError):
    """Raised when 429 responses persist after all retries."""

    def __init__(self, message: str = "Rate limited"):
        super().__init__(message)


class UpstreamError(ExportError):
    """Raised for any other unsuccessful upstream response."""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"API error: {status}")


class TransportError(ExportError):
    """Raised when the request never produced a response (timeout, DNS, reset)."""
    pass


class PaginationLimitExceeded(ExportError):
    """Raised when the upstream keeps paginating past the configured page bound."""

    def __init__(self, max_pages: int):
        self.max_pages = max_pages
        super().__init__(f"Pagination limit exceeded: more than {max_pages} pages")

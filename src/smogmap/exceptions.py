"""Upstream service exceptions.

AuthenticationError aborts the current request and is mapped to a generic
error response by the API layer. LookupServiceError never leaves the
enrichment pipeline, which substitutes a fallback description.
"""


class SmogmapError(Exception):
    """Base exception for all smogmap errors."""

    def __init__(self, message: str = "smogmap error"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(SmogmapError):
    """Raised when the pollution provider rejects the login."""

    def __init__(self, message: str = "Authentication with pollution API failed"):
        super().__init__(message)


class LookupServiceError(SmogmapError):
    """Raised when the lookup service cannot describe a city."""

    def __init__(self, title: str, message: str | None = None):
        self.title = title
        super().__init__(message or f"Lookup failed for {title!r}")

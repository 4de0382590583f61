"""Exception classes for CMS access.

The pure resolution helpers never raise these; they are reserved for the
fetch transport and the HTTP surface.
"""

from typing import Any


class CMSError(Exception):
    """Base exception for all CMS content errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CMSConfigurationError(CMSError):
    """Required CMS connection settings are missing or invalid."""

    pass


class CMSFetchError(CMSError):
    """A JSON:API request failed or returned an unusable response."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(
            message,
            details={"url": url, "status_code": status_code, "errors": self.errors},
        )

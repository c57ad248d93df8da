"""
Error types raised by GitHub file operations.

Every remote failure is surfaced as a ``RemoteError`` (or one of its
subclasses); caller mistakes are raised as ``InvalidArgumentError`` before
any request is made.
"""

from typing import Optional


class GitHubToolError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgumentError(GitHubToolError):
    """Arguments are missing, conflicting or malformed."""


class ContentExtractionError(GitHubToolError):
    """A published document did not contain exactly one code block."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not extract a single <code> block from {url}: {reason}")


class ResponseValidationError(GitHubToolError):
    """A GitHub response did not match the expected schema."""

    def __init__(self, schema_name: str, detail: str):
        self.schema_name = schema_name
        self.detail = detail
        super().__init__(f"Unexpected {schema_name} response from GitHub: {detail}")


class RemoteError(GitHubToolError):
    """A remote call failed (non-2xx status or network error)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class BranchNotFoundError(RemoteError):
    """The branch reference could not be resolved."""


class ConflictError(RemoteError):
    """The remote state changed or a required SHA was not supplied."""

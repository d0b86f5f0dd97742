"""Errors raised by the Vilkas client and workflow."""

from typing import Any, Optional


class HarnessError(Exception):
    """Base exception for harness errors."""

    detail: str = "Harness run failed"

    def __init__(self, detail: Optional[str] = None):
        """Initialize exception.

        Args:
            detail: Error detail message
        """
        if detail:
            self.detail = detail
        super().__init__(self.detail)


class RemoteCallFailed(HarnessError):
    """Error raised when the service answers with a status code of 300 or above."""

    detail = "Remote call failed"

    def __init__(
        self,
        status_code: int,
        method: str,
        url: str,
        body: Optional[str] = None,
    ):
        """Initialize exception.

        Args:
            status_code: HTTP status code returned by the service
            method: HTTP method of the failing request
            url: Requested URL
            body: Raw response body, kept for diagnostics
        """
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        super().__init__(f"{method} {url} returned {status_code}")


class UnexpectedResponseShape(HarnessError):
    """Error raised when a successful response does not have the expected shape."""

    detail = "Unexpected response shape"

    def __init__(self, what: str, reason: Optional[Any] = None):
        """Initialize exception.

        Args:
            what: Name of the structure that could not be decoded
            reason: Validation failure or other explanation
        """
        self.what = what
        self.reason = reason
        detail = f"Unexpected {what} response"
        if reason is not None:
            detail = f"{detail}: {reason}"
        super().__init__(detail)

"""Custom exception types for graphcall.

Error messages follow one pattern:
- What failed (request method, URL, or config file)
- Why it failed (status code, Graph error code, validation detail)
- How to fix it (actionable guidance where we have any)
"""

from typing import Any


class GraphCallError(Exception):
    """Base exception for all graphcall errors."""

    pass


class ConfigValidationError(GraphCallError):
    """Raised when config.yaml fails Pydantic validation.

    Includes specific field errors with actionable messages.
    """

    pass


class ConfigLoadError(GraphCallError):
    """Raised when config.yaml cannot be loaded (file not found, YAML parse error)."""

    pass


class GraphRequestError(GraphCallError):
    """Raised when a Graph request fails terminally.

    Terminal means the status is not retryable, or retries were exhausted.

    Attributes:
        status_code: HTTP status code (None for transport failures)
        error_code: Error code from the Graph error body (if available)
        retries: Number of retries consumed before giving up
        url: The URL of the failing request
        kind: Error kind tag from the status table (e.g. "throttled")
        partial_result: Pages accumulated before the failure, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        retries: int = 0,
        url: str | None = None,
        kind: str | None = None,
        partial_result: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.retries = retries
        self.url = url
        self.kind = kind
        self.partial_result = partial_result


class ThrottledError(GraphRequestError):
    """Raised when Graph kept answering 429 after all retries were used."""

    pass


class NotFoundError(GraphRequestError):
    """Raised on 404 when the caller did not ask for 404 suppression."""

    pass

"""HTTP transport for Graph requests built on requests.

The transport performs exactly one HTTP attempt per call and never raises for
HTTP or network failures. Everything comes back as an AttemptResult so the
retry controller can decide what to do next.
"""

import math
from typing import Any, Protocol

import requests

from graphcall.core.logging import get_logger
from graphcall.graph.models import DEFAULT_TIMEOUT, AttemptResult, Failure, PreparedRequest, Success

logger = get_logger(__name__)


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds.

    Returns None when the header is absent or not a finite, non-negative
    number.
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def _error_details(response: requests.Response) -> tuple[str | None, str]:
    """Extract (error_code, message) from a Graph error body."""
    try:
        error_data = response.json()
    except ValueError:
        error_data = None

    # Gateways and OAuth proxies may send {"error": "invalid_token"} instead of an object
    error_info = error_data.get("error") if isinstance(error_data, dict) else None
    if isinstance(error_info, dict):
        error_code = error_info.get("code")
        error_message = error_info.get("message") or response.text
    else:
        error_code = None
        error_message = response.text
    return error_code, error_message or f"HTTP {response.status_code}"


class Transport(Protocol):
    """Anything that can perform one attempt for a PreparedRequest."""

    def send(self, request: PreparedRequest) -> AttemptResult: ...


class RequestsTransport:
    """Single-attempt transport backed by a requests.Session.

    Attributes:
        session: requests.Session used for all attempts
        timeout: Per-attempt timeout in seconds
        proxies: Proxy mapping passed to requests, or None
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: str | None = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.proxies = {"http": proxy, "https": proxy} if proxy else None

    def send(self, request: PreparedRequest) -> AttemptResult:
        """Send one attempt and classify the outcome.

        Args:
            request: The prepared request for this page

        Returns:
            Success with the decoded JSON body, or Failure
        """
        kwargs: dict[str, Any] = {
            "method": request.method,
            "url": request.url,
            "headers": request.headers,
            "timeout": self.timeout,
        }
        if request.body is not None:
            kwargs["json"] = request.body
        if self.proxies:
            kwargs["proxies"] = self.proxies

        try:
            response = self.session.request(**kwargs)
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
            logger.debug("transport_error", url=request.url, error=str(e), transient=True)
            return Failure(status_code=None, message=str(e), transient=True)
        except requests.exceptions.RequestException as e:
            logger.debug("transport_error", url=request.url, error=str(e), transient=False)
            return Failure(status_code=None, message=str(e), transient=False)

        if response.status_code < 400:
            if response.status_code == 204 or not response.content:
                return Success(status_code=response.status_code)
            try:
                return Success(status_code=response.status_code, payload=response.json())
            except ValueError:
                # Non-JSON success bodies (e.g. $value downloads) come back as text
                return Success(status_code=response.status_code, payload=response.text)

        error_code, message = _error_details(response)
        return Failure(
            status_code=response.status_code,
            message=message,
            retry_after=parse_retry_after(response.headers.get("Retry-After")),
            error_code=error_code,
        )

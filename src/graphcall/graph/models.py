"""Request and attempt data types for the Graph request executor.

RequestSpec is what a caller asks for. PreparedRequest is what actually goes
on the wire for one page. AttemptResult is the outcome of a single HTTP
attempt, either Success or Failure.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

HttpMethod = Literal["GET", "POST", "PATCH", "PUT", "DELETE"]

DEFAULT_MAX_RETRIES = 5
DEFAULT_DEPTH = 10
DEFAULT_TIMEOUT = 30.0


class RequestSpec(BaseModel):
    """One logical Graph call, immutable for the duration of an invocation."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod = Field(default="GET", description="HTTP method")
    path: str = Field(description="Path relative to the API version root, e.g. '/users'")
    body: Any = Field(default=None, description="JSON body, sent on the first request only")
    query: dict[str, Any] | None = Field(default=None, description="Extra query parameters")
    headers: dict[str, str] | None = Field(
        default=None, description="Extra headers, merged over the defaults"
    )
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0, le=20)
    use_beta: bool = Field(default=False, description="Target the beta endpoint")
    user_agent: str | None = Field(default=None, description="User-Agent override")
    proxy: str | None = Field(default=None, description="Proxy address for http and https")
    paginate: bool = Field(default=True, description="Follow @odata.nextLink")
    suppress_404: bool = Field(default=False, description="Return empty on 404 instead of raising")
    raw: bool = Field(default=False, description="Return the result as JSON text")
    depth: int = Field(default=DEFAULT_DEPTH, ge=1, description="Max JSON serialization depth")
    verbose: bool = Field(default=False, description="Emit diagnostic events at INFO")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-attempt timeout")


@dataclass(frozen=True)
class PreparedRequest:
    """A fully built request for one page."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class Success:
    """A 2xx/3xx attempt with its decoded body (None when there was no body)."""

    status_code: int
    payload: Any = None


@dataclass(frozen=True)
class Failure:
    """A failed attempt.

    status_code is None when the transport never got a response. transient
    marks transport failures that are safe to retry (timeouts, dropped
    connections).
    """

    status_code: int | None
    message: str
    retry_after: float | None = None
    error_code: str | None = None
    transient: bool = False


AttemptResult = Success | Failure

"""Status code classification for Graph responses.

Maps HTTP status codes to an error kind plus a human-readable category and a
hint. The retry decision only looks at RETRYABLE_STATUS; the table is used to
pick the exception type and to word error messages.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Coarse error category for a failed attempt."""

    THROTTLED = "throttled"
    SERVER = "server"
    CLIENT = "client"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class StatusInfo:
    kind: ErrorKind
    category: str
    hint: str = ""


RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})

STATUS_TABLE: dict[int, StatusInfo] = {
    400: StatusInfo(ErrorKind.CLIENT, "Bad request", "Check the path, query and body."),
    401: StatusInfo(
        ErrorKind.AUTH,
        "Authentication failed",
        "The access token is missing, invalid or expired. Acquire a new token.",
    ),
    403: StatusInfo(
        ErrorKind.AUTH,
        "Permission denied",
        "Check that the required API permissions are granted and consented.",
    ),
    404: StatusInfo(
        ErrorKind.NOT_FOUND,
        "Resource not found",
        "The path may be incorrect or the resource doesn't exist.",
    ),
    405: StatusInfo(ErrorKind.CLIENT, "Method not allowed"),
    409: StatusInfo(ErrorKind.CONFLICT, "Conflict", "The resource is in a conflicting state."),
    412: StatusInfo(
        ErrorKind.CONFLICT,
        "Precondition failed",
        "The resource was modified by another client. Retry with fresh data.",
    ),
    429: StatusInfo(
        ErrorKind.THROTTLED,
        "Too many requests",
        "Reduce request frequency or raise max retries.",
    ),
    500: StatusInfo(ErrorKind.SERVER, "Internal server error"),
    502: StatusInfo(ErrorKind.SERVER, "Bad gateway"),
    503: StatusInfo(
        ErrorKind.SERVER,
        "Service unavailable",
        "Microsoft Graph may be experiencing issues.",
    ),
    504: StatusInfo(ErrorKind.SERVER, "Gateway timeout"),
}

_TRANSPORT_INFO = StatusInfo(
    ErrorKind.TRANSPORT,
    "Transport failure",
    "Check your network connection and proxy settings.",
)


def classify(status_code: int | None) -> StatusInfo:
    """Look up the StatusInfo for a status code.

    Unlisted codes fall back by range: 5xx is a server error, anything else a
    client error. None means the request never got a response.
    """
    if status_code is None:
        return _TRANSPORT_INFO
    info = STATUS_TABLE.get(status_code)
    if info is not None:
        return info
    if 500 <= status_code < 600:
        return StatusInfo(ErrorKind.SERVER, f"Server error ({status_code})")
    return StatusInfo(ErrorKind.CLIENT, f"Client error ({status_code})")


def is_retryable(status_code: int | None, transient: bool = False) -> bool:
    """True if a failure with this status may be retried."""
    if status_code is None:
        return transient
    return status_code in RETRYABLE_STATUS

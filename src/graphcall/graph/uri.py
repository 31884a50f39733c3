"""Graph request URL construction."""

from typing import Any
from urllib.parse import quote

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
GRAPH_BETA_URL = "https://graph.microsoft.com/beta"


def base_url(use_beta: bool = False) -> str:
    """Return the API root for the stable or preview endpoint."""
    return GRAPH_BETA_URL if use_beta else GRAPH_BASE_URL


def encode_query(query: dict[str, Any]) -> str:
    """Join query parameters as key=value pairs separated by '&'.

    Each value is percent-encoded on its own. Keys are left as given so that
    OData system options like $filter and $select keep their '$'.
    """
    return "&".join(f"{key}={quote(str(value), safe='')}" for key, value in query.items())


def build_uri(path: str, query: dict[str, Any] | None = None, use_beta: bool = False) -> str:
    """Build the absolute URL for a Graph request.

    The path is appended to the API root untouched; a leading slash is the
    caller's responsibility.

    Args:
        path: Path relative to the version root (e.g. "/users")
        query: Optional query parameters
        use_beta: Target the beta endpoint instead of v1.0

    Returns:
        The absolute request URL

    Example:
        >>> build_uri("/users", {"$filter": "startswith(displayName,'A')"})
        "https://graph.microsoft.com/v1.0/users?$filter=startswith%28displayName%2C%27A%27%29"
    """
    url = base_url(use_beta) + path
    if query:
        url += "?" + encode_query(query)
    return url

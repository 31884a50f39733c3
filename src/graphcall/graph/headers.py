"""Header composition for Graph requests."""

from graphcall import __version__

DEFAULT_USER_AGENT = f"graphcall/{__version__}"


def compose_headers(
    token: str,
    user_agent: str | None = None,
    additional: dict[str, str] | None = None,
) -> dict[str, str]:
    """Build the header mapping for a request.

    Caller-supplied headers are merged last and win over the defaults. This is
    how callers opt in to things like ConsistencyLevel: eventual for advanced
    queries, or a different Accept for metadata suppression.

    Args:
        token: Bearer token (opaque, caller managed)
        user_agent: User-Agent override, or None for the default
        additional: Extra headers to merge over the defaults

    Returns:
        Dictionary of HTTP headers
    """
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": user_agent or DEFAULT_USER_AGENT,
    }
    if additional:
        headers.update(additional)
    return headers

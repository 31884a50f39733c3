"""Microsoft Graph request execution.

Provides the request executor and its building blocks:
- URL construction with per-value percent-encoding
- Header composition with caller overrides
- Retry with exponential backoff and Retry-After support
- Transparent @odata.nextLink pagination

Usage:
    from graphcall.graph import RequestExecutor, RequestSpec

    executor = RequestExecutor(token)
    users = executor.execute(RequestSpec(path="/users"))
"""

from graphcall.graph.executor import RequestExecutor
from graphcall.graph.models import Failure, PreparedRequest, RequestSpec, Success
from graphcall.graph.pagination import PageAccumulator, PaginationWalker
from graphcall.graph.retry import NOT_FOUND, RetryController, RetryState
from graphcall.graph.transport import RequestsTransport

__all__ = [
    "NOT_FOUND",
    "Failure",
    "PageAccumulator",
    "PaginationWalker",
    "PreparedRequest",
    "RequestExecutor",
    "RequestSpec",
    "RequestsTransport",
    "RetryController",
    "RetryState",
    "Success",
]

"""Request executor for Microsoft Graph.

Ties the pieces together for one logical call:
- URL and headers are built once
- every HTTP attempt runs under a RetryController
- a PaginationWalker follows @odata.nextLink until the last page
- the accumulated result is returned structured or as JSON text

Usage:
    from graphcall.graph import RequestExecutor, RequestSpec

    executor = RequestExecutor(token)

    users = executor.execute(RequestSpec(path="/users", query={"$top": 100}))
    group = executor.get("/groups/0a1b2c", suppress_404=True)
"""

import time
from collections.abc import Callable
from typing import Any

import requests

from graphcall.core.logging import bind_request_id, get_logger
from graphcall.graph.headers import compose_headers
from graphcall.graph.models import PreparedRequest, RequestSpec
from graphcall.graph.pagination import PaginationWalker
from graphcall.graph.retry import RetryController
from graphcall.graph.shaping import shape_result
from graphcall.graph.transport import RequestsTransport, Transport
from graphcall.graph.uri import build_uri

logger = get_logger(__name__)


class RequestExecutor:
    """Executes Graph requests with retries and transparent pagination.

    One executor runs one invocation at a time. For parallel calls, use one
    executor per thread; nothing here is shared across invocations besides
    the underlying requests.Session.

    Attributes:
        token: Bearer token sent with every request
        transport: Fixed transport, or None to build a RequestsTransport per
            invocation from the RequestSpec's timeout and proxy
        retry: RetryController used for every attempt
    """

    def __init__(
        self,
        token: str,
        transport: Transport | None = None,
        sleep: Callable[[float], Any] = time.sleep,
        session: requests.Session | None = None,
    ):
        self.token = token
        self.transport = transport
        self.retry = RetryController(sleep=sleep)
        self._session = session

    def _transport_for(self, spec: RequestSpec) -> Transport:
        if self.transport is not None:
            return self.transport
        if self._session is None:
            self._session = requests.Session()
        return RequestsTransport(self._session, timeout=spec.timeout, proxy=spec.proxy)

    def prepare(self, spec: RequestSpec) -> PreparedRequest:
        """Build the first request of an invocation."""
        return PreparedRequest(
            method=spec.method,
            url=build_uri(spec.path, spec.query, use_beta=spec.use_beta),
            headers=compose_headers(self.token, spec.user_agent, spec.headers),
            body=spec.body,
        )

    def execute(self, spec: RequestSpec) -> Any:
        """Run one logical call.

        Args:
            spec: What to request and how

        Returns:
            A list of items for collection endpoints, a single object for
            single-resource endpoints, None for empty or suppressed-404
            responses, or JSON text of any of these when spec.raw is set

        Raises:
            GraphRequestError: On a terminal failure (non-retryable status,
                retries exhausted, or a 404 without suppression)
        """
        transport = self._transport_for(spec)
        first = self.prepare(spec)

        def fetch(request: PreparedRequest) -> Any:
            return self.retry.run(
                lambda: transport.send(request),
                max_retries=spec.max_retries,
                url=request.url,
                suppress_404=spec.suppress_404,
                verbose=spec.verbose,
            )

        with bind_request_id():
            (logger.info if spec.verbose else logger.debug)(
                "request_start",
                method=spec.method,
                url=first.url,
                paginate=spec.paginate,
                max_retries=spec.max_retries,
            )
            walker = PaginationWalker(fetch, paginate=spec.paginate, verbose=spec.verbose)
            accumulator = walker.walk(first)

        return shape_result(accumulator.result(), raw=spec.raw, depth=spec.depth)

    def request(self, method: str, path: str, **options: Any) -> Any:
        """Build a RequestSpec from keyword options and execute it."""
        return self.execute(RequestSpec(method=method, path=path, **options))

    def get(self, path: str, **options: Any) -> Any:
        return self.request("GET", path, **options)

    def post(self, path: str, body: Any = None, **options: Any) -> Any:
        return self.request("POST", path, body=body, **options)

    def patch(self, path: str, body: Any = None, **options: Any) -> Any:
        return self.request("PATCH", path, body=body, **options)

    def put(self, path: str, body: Any = None, **options: Any) -> Any:
        return self.request("PUT", path, body=body, **options)

    def delete(self, path: str, **options: Any) -> Any:
        return self.request("DELETE", path, **options)

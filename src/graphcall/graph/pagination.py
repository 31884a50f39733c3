"""Pagination over @odata.nextLink.

The walker is a two-state loop (fetching, done). Each successful page is
folded into a PageAccumulator, which is an immutable value handed from one
iteration to the next rather than a shared list.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from graphcall.core.errors import GraphRequestError
from graphcall.core.logging import get_logger
from graphcall.graph.models import PreparedRequest
from graphcall.graph.retry import NOT_FOUND

logger = get_logger(__name__)

COLLECTION_FIELD = "value"
NEXT_LINK_FIELD = "@odata.nextLink"


@dataclass(frozen=True)
class PageAccumulator:
    """Ordered items gathered across pages.

    Attributes:
        items: Items in the order they were received
        collection: True once any page carried a collection field
    """

    items: tuple[Any, ...] = ()
    collection: bool = False

    def extend(self, payload: Any) -> "PageAccumulator":
        """Return a new accumulator with this page's items appended.

        Collection pages contribute their elements; any other payload is
        appended as a single item. A missing body contributes nothing.
        """
        if payload is None:
            return self
        values = collection_of(payload)
        if values is not None:
            return PageAccumulator(self.items + tuple(values), collection=True)
        return PageAccumulator(self.items + (payload,), self.collection)

    def result(self) -> Any:
        """The accumulated value in the shape callers expect.

        A list for collection endpoints, the object itself for a single
        resource, and None when a non-collection call returned nothing.
        """
        if self.collection or len(self.items) > 1:
            return list(self.items)
        if self.items:
            return self.items[0]
        return None


def collection_of(payload: Any) -> list[Any] | None:
    """Return the payload's collection field, or None if it has none."""
    if isinstance(payload, dict):
        values = payload.get(COLLECTION_FIELD)
        if isinstance(values, list):
            return values
    return None


def next_link_of(payload: Any) -> str | None:
    if isinstance(payload, dict):
        return payload.get(NEXT_LINK_FIELD) or None
    return None


def is_empty_page(payload: Any) -> bool:
    values = collection_of(payload)
    return values is not None and not values


class PaginationWalker:
    """Follows next-page links until the server stops returning them.

    Attributes:
        fetch: Performs one retry-wrapped request and returns the decoded
            payload (or NOT_FOUND for a suppressed 404)
        paginate: When False, only the first page is fetched
        verbose: Emit pagination events at INFO instead of DEBUG
    """

    def __init__(
        self,
        fetch: Callable[[PreparedRequest], Any],
        paginate: bool = True,
        verbose: bool = False,
    ):
        self.fetch = fetch
        self.paginate = paginate
        self.verbose = verbose

    def walk(self, first: PreparedRequest) -> PageAccumulator:
        """Fetch the first page and every page after it.

        Args:
            first: The initial request, including its body if any

        Returns:
            The final accumulator

        Raises:
            GraphRequestError: On a terminal failure. Pages fetched before the
                failure are attached as partial_result.
        """
        emit = logger.info if self.verbose else logger.debug
        accumulator = PageAccumulator()
        request = first
        page = 1

        while True:
            try:
                payload = self.fetch(request)
            except GraphRequestError as e:
                if accumulator.items:
                    e.partial_result = accumulator.result()
                raise

            # A suppressed 404 is terminal-empty on any page
            if payload is NOT_FOUND:
                return PageAccumulator()

            # An empty page means "nothing to return", even after earlier pages
            if is_empty_page(payload):
                if accumulator.items:
                    emit("empty_page_discarded", page=page, discarded=len(accumulator.items))
                return PageAccumulator(collection=True)

            accumulator = accumulator.extend(payload)

            next_link = next_link_of(payload)
            if not next_link or not self.paginate:
                return accumulator

            page += 1
            emit(
                "pagination_follow",
                page=page,
                next_link=next_link,
                items_so_far=len(accumulator.items),
            )
            request = replace(request, url=next_link, body=None)

"""Retry state machine for single Graph requests.

Every HTTP attempt (the first page and each pagination follow-up) runs under a
RetryController. Retryable failures are slept on and retried; everything else
is terminal and raised as a GraphRequestError.

Backoff policy, with attempt_count counted before the increment:
- server sent Retry-After: wait exactly that many seconds
- first retry (attempt_count == 0): no wait
- later retries: 2 ** attempt_count seconds (2, 4, 8, ...)
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from graphcall.core.errors import GraphRequestError, NotFoundError, ThrottledError
from graphcall.core.logging import get_logger
from graphcall.graph.models import AttemptResult, Failure, Success
from graphcall.graph.status import ErrorKind, classify, is_retryable

logger = get_logger(__name__)

_ERROR_TYPES: dict[ErrorKind, type[GraphRequestError]] = {
    ErrorKind.THROTTLED: ThrottledError,
    ErrorKind.NOT_FOUND: NotFoundError,
}


class _NotFound:
    def __repr__(self) -> str:
        return "NOT_FOUND"


# Returned instead of a payload when a 404 was suppressed
NOT_FOUND = _NotFound()


@dataclass
class RetryState:
    """Retry bookkeeping for one request. Only RetryController mutates it."""

    max_retries: int
    attempt_count: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempt_count >= self.max_retries


def backoff_delay(attempt_count: int) -> float:
    """Wait before the next retry when the server gave no hint."""
    if attempt_count == 0:
        return 0.0
    return float(2**attempt_count)


def next_delay(failure: Failure, state: RetryState) -> float | None:
    """Decide whether to retry a failure.

    Args:
        failure: The failed attempt
        state: Current retry state (not modified)

    Returns:
        Seconds to wait before retrying, or None if the failure is terminal
    """
    if not is_retryable(failure.status_code, failure.transient):
        return None
    if state.exhausted:
        return None
    if failure.retry_after is not None:
        return failure.retry_after
    return backoff_delay(state.attempt_count)


def build_error(failure: Failure, url: str, retries: int) -> GraphRequestError:
    """Turn a terminal failure into the matching exception."""
    info = classify(failure.status_code)
    status = failure.status_code if failure.status_code is not None else "no response"
    message = f"{info.category} ({status}) for {url}: {failure.message}"
    if retries:
        message += f" (after {retries} retries)"
    if info.hint:
        message += f". {info.hint}"
    error_type = _ERROR_TYPES.get(info.kind, GraphRequestError)
    return error_type(
        message,
        status_code=failure.status_code,
        error_code=failure.error_code,
        retries=retries,
        url=url,
        kind=info.kind.value,
    )


class RetryController:
    """Runs one request's attempts until success or a terminal failure.

    Attributes:
        sleep: Callable used to wait between attempts. Tests pass a recorder
            instead of time.sleep.
    """

    def __init__(self, sleep: Callable[[float], Any] = time.sleep):
        self.sleep = sleep

    def run(
        self,
        attempt: Callable[[], AttemptResult],
        max_retries: int,
        url: str,
        suppress_404: bool = False,
        verbose: bool = False,
    ) -> Any:
        """Call attempt() until it succeeds or fails terminally.

        Args:
            attempt: Performs one HTTP attempt
            max_retries: Retries allowed after the first attempt
            url: Request URL, for log events and errors
            suppress_404: Return NOT_FOUND instead of raising on 404
            verbose: Emit retry_wait at INFO instead of DEBUG

        Returns:
            The decoded payload of the successful attempt, or NOT_FOUND

        Raises:
            GraphRequestError: On a terminal failure
        """
        state = RetryState(max_retries=max_retries)
        emit = logger.info if verbose else logger.debug

        while True:
            result = attempt()
            if isinstance(result, Success):
                return result.payload

            delay = next_delay(result, state)
            if delay is None:
                break

            emit(
                "retry_wait",
                url=url,
                status_code=result.status_code,
                attempt=state.attempt_count + 1,
                max_retries=state.max_retries,
                delay=delay,
                retry_after=result.retry_after,
            )
            self.sleep(delay)
            state.attempt_count += 1

        if result.status_code == 404 and suppress_404:
            return NOT_FOUND

        error = build_error(result, url, state.attempt_count)
        logger.error(
            "graph_request_failed",
            url=url,
            status_code=result.status_code,
            error_code=result.error_code,
            kind=error.kind,
            retries=state.attempt_count,
            error_message=result.message[:200],
        )
        raise error

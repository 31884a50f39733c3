"""Pytest fixtures for graphcall tests.

Provides a scripted transport, a sleep recorder, and config isolation.
"""

import itertools
from collections.abc import Generator, Iterable
from typing import Any
from unittest.mock import MagicMock

import pytest

from graphcall.config import reset_config
from graphcall.graph.models import AttemptResult, Failure, PreparedRequest, Success


class FakeTransport:
    """Transport that replays scripted AttemptResults and records requests."""

    def __init__(self, results: Iterable[AttemptResult]):
        self._results = iter(results)
        self.requests: list[PreparedRequest] = []

    def send(self, request: PreparedRequest) -> AttemptResult:
        self.requests.append(request)
        return next(self._results)


def always(result: AttemptResult) -> Iterable[AttemptResult]:
    """Script a transport that returns the same result forever."""
    return itertools.repeat(result)


def page(items: list[Any], next_link: str | None = None) -> Success:
    """Build a successful collection page."""
    payload: dict[str, Any] = {"value": items}
    if next_link:
        payload["@odata.nextLink"] = next_link
    return Success(status_code=200, payload=payload)


def failure(status_code: int | None, retry_after: float | None = None, **kwargs: Any) -> Failure:
    return Failure(
        status_code=status_code,
        message=kwargs.pop("message", f"HTTP {status_code}"),
        retry_after=retry_after,
        **kwargs,
    )


def make_response(
    status_code: int = 200,
    json_body: Any = None,
    headers: dict[str, str] | None = None,
    text: str | None = None,
) -> MagicMock:
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    if json_body is not None:
        response.json.return_value = json_body
        response.content = b"{...}"
        response.text = text or "{...}"
    else:
        response.json.side_effect = ValueError("No JSON")
        response.text = text or ""
        response.content = (text or "").encode()
    return response


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Generator[None, None, None]:
    """Reset the config singleton before each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sleeps() -> list[float]:
    """Delays passed to the fake sleep, in call order."""
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]):
    """A sleep replacement that records instead of waiting."""
    return sleeps.append

"""Tests for cli.py using click's CliRunner and a scripted transport."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from conftest import FakeTransport, failure, page

import graphcall.cli
import graphcall.graph
from graphcall.cli import cli
from graphcall.config import CONFIG_PATH_ENV
from graphcall.graph import RequestExecutor
from graphcall.graph.models import Success

NEXT = "https://graph.microsoft.com/v1.0/users?$skiptoken=abc"


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run without any config file so built-in defaults apply.

    configure_logging is stubbed out: it enables logger caching, which would
    hide later capture_logs assertions from already-used loggers.
    """
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(graphcall.cli, "configure_logging", lambda **kwargs: None)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _install(monkeypatch: pytest.MonkeyPatch, transport: FakeTransport) -> list[str]:
    """Make the CLI build executors on top of the given transport."""
    tokens: list[str] = []

    def factory(token: str) -> RequestExecutor:
        tokens.append(token)
        return RequestExecutor(token, transport=transport, sleep=lambda seconds: None)

    monkeypatch.setattr(graphcall.graph, "RequestExecutor", factory)
    return tokens


class TestRequestCommand:
    """Tests for `graphcall request`."""

    def test_raw_output(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        transport = FakeTransport([page([{"id": "u1"}], next_link=NEXT), page([{"id": "u2"}])])
        tokens = _install(monkeypatch, transport)

        result = runner.invoke(
            cli, ["request", "/users", "--raw"], env={"GRAPH_ACCESS_TOKEN": "tok"}
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"id": "u1"}, {"id": "u2"}]
        assert tokens == ["tok"]

    def test_structured_output(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, FakeTransport([Success(200, {"id": "g1"})]))

        result = runner.invoke(cli, ["request", "/groups/g1", "--token", "tok"])

        assert result.exit_code == 0, result.output
        assert '"g1"' in result.output

    def test_options_reach_request(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        transport = FakeTransport([page([1], next_link=NEXT)])
        _install(monkeypatch, transport)

        result = runner.invoke(
            cli,
            [
                "request",
                "/users",
                "--token",
                "tok",
                "-X",
                "post",
                "--body",
                '{"a": 1}',
                "-q",
                "$top=5",
                "-H",
                "ConsistencyLevel=eventual",
                "--beta",
                "--no-paging",
                "--raw",
            ],
        )

        assert result.exit_code == 0, result.output
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.body == {"a": 1}
        assert request.url == "https://graph.microsoft.com/beta/users?$top=5"
        assert request.headers["ConsistencyLevel"] == "eventual"
        assert len(transport.requests) == 1

    def test_failure_exits_nonzero(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _install(monkeypatch, FakeTransport([failure(403, message="Insufficient privileges")]))

        result = runner.invoke(cli, ["request", "/users", "--token", "tok"])

        assert result.exit_code == 1
        assert "Request failed" in result.output

    def test_suppress_404(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        _install(monkeypatch, FakeTransport([failure(404)]))

        result = runner.invoke(
            cli, ["request", "/groups/gone", "--token", "tok", "--suppress-404", "--raw"]
        )

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "null"

    def test_bad_body(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["request", "/users", "--token", "tok", "--body", "{nope"])

        assert result.exit_code == 2
        assert "not valid JSON" in result.output

    def test_bad_query_pair(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["request", "/users", "--token", "tok", "-q", "novalue"])

        assert result.exit_code == 2
        assert "KEY=VALUE" in result.output

    def test_token_required(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["request", "/users"], env={"GRAPH_ACCESS_TOKEN": None})

        assert result.exit_code == 2


class TestValidateConfigCommand:
    """Tests for `graphcall validate-config`."""

    def test_valid(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("request:\n  max_retries: 3\n")

        result = runner.invoke(cli, ["validate-config", "--config", str(path)])

        assert result.exit_code == 0
        assert "max_retries: 3" in result.output

    def test_missing(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["validate-config", "--config", str(tmp_path / "x.yaml")])

        assert result.exit_code == 1
        assert "Load error" in result.output

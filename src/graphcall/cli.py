"""Command-line interface for graphcall.

Usage:
    python -m graphcall request /users -q '$top=50' --verbose
    python -m graphcall request /groups/abc --suppress-404 --raw
    python -m graphcall request /users -X POST --body '{"displayName": "A"}'
    python -m graphcall validate-config
"""

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from graphcall.config import get_config, validate_config_file
from graphcall.core.errors import ConfigLoadError, ConfigValidationError, GraphRequestError
from graphcall.core.logging import configure_logging

console = Console()


def _parse_pairs(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str] | None:
    """Parse repeated KEY=VALUE options into a dict."""
    if not values:
        return None
    pairs: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", ctx=ctx, param=param)
        pairs[key] = value
    return pairs


def _parse_body(ctx: click.Context, param: click.Parameter, value: str | None) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError as e:
        raise click.BadParameter(f"body is not valid JSON: {e}", ctx=ctx, param=param) from e


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """graphcall - resilient Microsoft Graph requests from the shell."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command("request")
@click.argument("path")
@click.option(
    "--method",
    "-X",
    type=click.Choice(["GET", "POST", "PATCH", "PUT", "DELETE"], case_sensitive=False),
    default="GET",
    help="HTTP method",
)
@click.option("--body", callback=_parse_body, default=None, help="JSON request body")
@click.option("--max-retries", type=click.IntRange(0, 20), default=None, help="Retries for 429/5xx")
@click.option("--beta/--v1", "use_beta", default=None, help="Use the beta endpoint")
@click.option("--user-agent", default=None, help="User-Agent override")
@click.option("--raw", is_flag=True, help="Print the result as JSON text")
@click.option("--proxy", default=None, help="Proxy address, e.g. http://proxy:8080")
@click.option("--no-paging", is_flag=True, help="Only fetch the first page")
@click.option("--verbose", "-v", is_flag=True, help="Log retries and pagination")
@click.option("--suppress-404", is_flag=True, help="Return nothing instead of failing on 404")
@click.option(
    "--query", "-q", multiple=True, callback=_parse_pairs, help="Query parameter KEY=VALUE"
)
@click.option("--header", "-H", multiple=True, callback=_parse_pairs, help="Header KEY=VALUE")
@click.option("--depth", type=click.IntRange(1, 100), default=None, help="JSON depth for --raw")
@click.option("--timeout", type=float, default=None, help="Per-attempt timeout in seconds")
@click.option(
    "--token",
    envvar="GRAPH_ACCESS_TOKEN",
    required=True,
    help="Bearer token (default: $GRAPH_ACCESS_TOKEN)",
)
@click.pass_context
def request(
    ctx: click.Context,
    path: str,
    method: str,
    body: Any,
    max_retries: int | None,
    use_beta: bool | None,
    user_agent: str | None,
    raw: bool,
    proxy: str | None,
    no_paging: bool,
    verbose: bool,
    suppress_404: bool,
    query: dict[str, str] | None,
    header: dict[str, str] | None,
    depth: int | None,
    timeout: float | None,
    token: str,
) -> None:
    """Send a request to PATH (e.g. /users) and print the result."""
    from graphcall.graph import RequestExecutor, RequestSpec

    try:
        config = get_config()
    except (ConfigLoadError, ConfigValidationError) as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        sys.exit(1)

    debug = bool(ctx.obj and ctx.obj.get("debug"))
    log_level = "DEBUG" if debug else ("INFO" if verbose else config.logging.level)
    configure_logging(log_level=log_level, json_output=config.logging.json_output)

    defaults = config.request
    spec = RequestSpec(
        method=method.upper(),
        path=path,
        body=body,
        query=query,
        headers=header,
        max_retries=defaults.max_retries if max_retries is None else max_retries,
        use_beta=defaults.use_beta if use_beta is None else use_beta,
        user_agent=user_agent or defaults.user_agent,
        proxy=proxy or defaults.proxy,
        paginate=not no_paging,
        suppress_404=suppress_404,
        raw=raw,
        depth=depth or defaults.depth,
        verbose=verbose,
        timeout=timeout or defaults.timeout,
    )

    try:
        result = RequestExecutor(token).execute(spec)
    except GraphRequestError as e:
        console.print(f"[red]Request failed:[/red] {escape(str(e))}")
        sys.exit(1)

    if raw:
        click.echo(result)
    else:
        console.print_json(data=result)


@cli.command("validate-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to config file (default: config/config.yaml)",
)
def validate_config(config_path: Path | None) -> None:
    """Validate the configuration file.

    Checks that config.yaml exists and passes Pydantic schema validation.
    """
    console.print(f"Validating config: [cyan]{config_path or 'config/config.yaml'}[/cyan]")

    is_valid, message = validate_config_file(config_path)

    if is_valid:
        console.print(f"\n[green]✓[/green] {escape(message)}")
        sys.exit(0)
    else:
        console.print(f"\n[red]✗[/red] {escape(message)}")
        sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

"""CLI interface for retryable-http"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
import requests

from retryable_http.domain.checks import status_code_check
from retryable_http.domain.errors import ConfigurationError
from retryable_http.infrastructure.config.config_manager import ConfigManager
from retryable_http.infrastructure.executor import (
    RetryingExecutor,
    new_executor,
    with_acceptability_check,
    with_delay,
    with_max_attempts,
    with_transport,
)
from retryable_http.infrastructure.transport import default_transport, prepare_request

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def parse_status_range(value: str) -> Tuple[int, int]:
    """Parse an accepted status range such as "200-299", or a single code such as "204"

    Raises:
        ValueError: If the value is neither a status code nor a range
    """
    try:
        bounds = [int(part.strip()) for part in value.split("-", 1)]
    except ValueError:
        raise ValueError(f"Invalid status range: {value!r}") from None
    if len(bounds) == 1:
        return bounds[0], bounds[0]
    return bounds[0], bounds[1]


def parse_headers(values: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated "Name: value" header options

    Raises:
        ValueError: If a header has no colon or an empty name
    """
    headers = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid header (expected 'Name: value'): {raw!r}")
        headers[name.strip()] = value.strip()
    return headers


def _create_executor(
    config_manager: ConfigManager,
    transport: requests.Session,
    max_attempts: Optional[int],
    delay: Optional[float],
    accept_status: Optional[str],
) -> RetryingExecutor:
    """Create executor from config, with CLI overrides applied on top

    Args:
        config_manager: Configuration manager
        transport: Transport to wrap
        max_attempts: Optional attempt budget override
        delay: Optional delay override in seconds
        accept_status: Optional accepted status range override

    Returns:
        RetryingExecutor instance
    """
    retry_config = config_manager.get_retry_config()
    acceptance_config = config_manager.get_acceptance_config()

    if accept_status:
        min_status, max_status = parse_status_range(accept_status)
    else:
        min_status, max_status = acceptance_config.min_status, acceptance_config.max_status

    return new_executor(
        with_transport(transport),
        with_max_attempts(retry_config.max_attempts if max_attempts is None else max_attempts),
        with_delay(retry_config.delay if delay is None else delay),
        with_acceptability_check(status_code_check(min_status, max_status)),
    )


def _output_response(response: Optional[requests.Response], include_headers: bool) -> None:
    """Write final response to stdout"""
    if response is None:
        return
    click.echo(f"HTTP {response.status_code} {response.reason or ''}".rstrip())
    if include_headers:
        for name, value in response.headers.items():
            click.echo(f"{name}: {value}")
    click.echo("")
    if response.text:
        click.echo(response.text)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .retryable-http.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """retryable-http - send HTTP requests with bounded retries"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("method", type=str)
@click.argument("url", type=str)
@click.option("--header", "-H", "headers", multiple=True, help="Request header 'Name: value' (repeatable)")
@click.option("--data", "-d", type=str, help="Request body")
@click.option("--max-attempts", type=int, help="Maximum number of attempts. Overrides config.")
@click.option("--delay", type=float, help="Delay between attempts in seconds. Overrides config.")
@click.option("--timeout", type=float, help="Per-attempt timeout in seconds. Overrides config.")
@click.option("--accept-status", type=str, help="Accepted status range, e.g. 200-299. Overrides config.")
@click.option("--include", "-i", is_flag=True, help="Print response headers")
@click.pass_context
def request(
    ctx,
    method: str,
    url: str,
    headers: Tuple[str, ...],
    data: Optional[str],
    max_attempts: Optional[int],
    delay: Optional[float],
    timeout: Optional[float],
    accept_status: Optional[str],
    include: bool,
):
    """Send a request, retrying until the response is accepted.

    METHOD: HTTP method (GET, POST, ...)
    URL: Target URL
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        config_manager = ConfigManager(config_path=ctx.obj.get("config_path"))
        transport_config = config_manager.get_transport_config()

        transport = default_transport()
        executor = _create_executor(config_manager, transport, max_attempts, delay, accept_status)

        request_headers = dict(transport_config.headers)
        request_headers.update(parse_headers(headers))
        prepared = prepare_request(method, url, headers=request_headers, data=data, transport=transport)

        timeout = timeout if timeout is not None else transport_config.timeout
        logger.info(f"Sending {prepared.method} {prepared.url} (max attempts: {executor.max_attempts})")
        response, error = executor.execute(prepared, timeout=timeout)
    except (ConfigurationError, ValueError) as e:
        _die(str(e), verbose=verbose, exc=e)

    _output_response(response, include)

    if error is not None:
        click.echo(f"ERROR: {error}", err=True)
        sys.exit(1)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()

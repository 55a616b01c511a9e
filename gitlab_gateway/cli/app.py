"""
GitLab Gateway CLI.

Entry point: parses the global options with click, hands the remaining
tokens to the translator, dispatches one API call, and prints the JSON
result on standard output.

Usage:
    gitlab --help
    gitlab project 42 --per-page=10
    gitlab add_group_member my-group --user-id=7 --developer
    gitlab --all --pretty groups
    gitlab configure
    gitlab help [<method>]
"""

import asyncio
import sys
from typing import Any

import click
import structlog
from rich.console import Console
from rich.table import Table

from gitlab_gateway import __version__
from gitlab_gateway.cli.configure import run_configure
from gitlab_gateway.cli.output import render_json
from gitlab_gateway.cli.registry import CommandRegistry, build_registry, dispatch
from gitlab_gateway.cli.translator import (
    CONFIGURE_METHOD,
    HELP_METHOD,
    CallDescriptor,
    translate,
)
from gitlab_gateway.client.client import GitLabClient
from gitlab_gateway.core.config import get_app_config, get_settings
from gitlab_gateway.core.config_schema import ApiSchema
from gitlab_gateway.core.exceptions import ConfigurationError, GatewayError
from gitlab_gateway.core.logging import get_logger, setup_logging

console = Console()


def show_help(registry: CommandRegistry, args: list[str]) -> None:
    """Print the registered methods, or one method when named."""
    commands = [registry.get(name) for name in args] if args else registry.commands()

    table = Table(title="GitLab Methods", show_header=True)
    table.add_column("Usage", style="cyan", no_wrap=True)
    table.add_column("Description")

    for command in commands:
        table.add_row(command.usage, command.summary or "-")

    console.print(table)
    if not args:
        console.print(
            "\n[dim]Parameters: --key=value, --flag, --no-flag. "
            "Access levels: --guest --reporter --developer --master --owner.[/dim]"
        )


async def _call(descriptor: CallDescriptor, registry: CommandRegistry, api: ApiSchema, logger: Any) -> Any:
    """Async implementation of a single API call."""
    async with GitLabClient.from_config(api) as client:
        return await dispatch(client, descriptor, registry, logger)


def run_call(descriptor: CallDescriptor, registry: CommandRegistry, logger: Any) -> Any:
    """Validate the method, load the config, and run the call."""
    registry.get(descriptor.method)
    api = get_app_config().api
    return asyncio.run(_call(descriptor, registry, api, logger))


def _use_pretty(pretty: bool) -> bool:
    return pretty or get_settings().pretty_json or get_app_config().output.pretty


@click.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
@click.option(
    "--all", "-a", "fetch_all",
    is_flag=True,
    help="Fetch every page of a list method.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (DEBUG level logging).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Only log fatal errors.",
)
@click.option(
    "--pretty", "-p",
    is_flag=True,
    help="Pretty-print the JSON output (also GITLAB_PRETTY_JSON=1).",
)
@click.version_option(__version__, prog_name="gitlab")
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def main(
    fetch_all: bool,
    verbose: bool,
    quiet: bool,
    pretty: bool,
    tokens: tuple[str, ...],
) -> None:
    """
    GitLab API gateway.

    Calls one GitLab API method and prints the JSON result.

    \b
    Examples:
        gitlab current_user
        gitlab project 42 --per-page=10
        gitlab project_issues group/project --state=opened
        gitlab add_project_member 42 --user-id=7 --developer
        gitlab --all groups
        gitlab help
        gitlab configure
    """
    if verbose:
        log_level = "DEBUG"
    elif quiet:
        log_level = "CRITICAL"
    else:
        log_level = None

    try:
        setup_logging(level=log_level)
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)

    logger.debug("CLI invoked", extra={"tokens": len(tokens), "fetch_all": fetch_all})

    try:
        descriptor = translate(tokens, fetch_all=fetch_all)

        if descriptor.method == CONFIGURE_METHOD:
            run_configure(logger)
            return

        registry = build_registry()

        if descriptor.method == HELP_METHOD:
            show_help(registry, descriptor.args)
            return

        result = run_call(descriptor, registry, logger)
        use_pretty = _use_pretty(pretty)
    except GatewayError as e:
        logger.critical(e.message, extra={"code": e.code})
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("Interrupted", err=True)
        sys.exit(130)

    click.echo(render_json(result, use_pretty))


if __name__ == "__main__":
    main()

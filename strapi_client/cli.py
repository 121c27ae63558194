"""Command-line interface for strapi-client."""

from __future__ import annotations

import os
from pathlib import Path

import click

from strapi_client._version import __version__
from strapi_client.auth import AuthProvider, CredentialsFileAuth, StaticTokenAuth
from strapi_client.client import StrapiClient
from strapi_client.config import Config, load_config
from strapi_client.observer import LoggingObserver
from strapi_client.utils.output import (
    error,
    set_color,
    set_verbosity,
    setup_logging,
    warning,
)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False
        self._client: StrapiClient | None = None

    def client(self) -> StrapiClient:
        """Return the client for the loaded config, creating it on first use.

        The token comes from the config (or --token); without one the
        saved credentials file is consulted on every request.
        """
        if self._client is None:
            config = self.config or Config()
            auth: AuthProvider
            if config.token:
                auth = StaticTokenAuth(config.token)
            else:
                auth = CredentialsFileAuth()
            observer = LoggingObserver() if self.verbose else None
            self._client = StrapiClient(config, auth=auth, observer=observer)
        return self._client


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/strapi-client/config.toml)",
)
@click.option(
    "--base-url",
    "-u",
    default=None,
    help="Strapi server URL, e.g. https://cms.example.com (overrides config)",
)
@click.option(
    "--token",
    "-t",
    envvar="STRAPI_TOKEN",
    default=None,
    help="API token (overrides config; also read from STRAPI_TOKEN)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log each request and response",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Also log headers and bodies (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="strapi-client")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    base_url: str | None,
    token: str | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """strapi-client: Query a Strapi CMS from the command line.

    Builds filter, sort, pagination, populate and field parameters and
    sends them to the server's REST API.

    Configuration is loaded from ~/.config/strapi-client/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Show the encoded query string without sending anything
        strapi-client query --filter title:eq:Hello --sort createdAt:desc

        # Fetch published articles with their author
        strapi-client get /articles --filter status:eq:published --populate author
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug)
    if app_ctx.verbose:
        setup_logging(verbose=verbose, debug=debug)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
        app_ctx.config = loaded_config

        if base_url is not None:
            loaded_config.base_url = base_url
            warnings.extend(loaded_config.validate())
        if token is not None:
            loaded_config.token = token or None

        if not disable_color and not loaded_config.colored_output:
            set_color(False)

        if not quiet:
            for warn in warnings:
                warning(warn)

    except Exception as e:
        error(str(e))
        ctx.exit(1)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from strapi_client.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()

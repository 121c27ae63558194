"""Save an API token to the credentials file."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from strapi_client.cli import Context, pass_context
from strapi_client.credentials import (
    StoredCredentials,
    get_credentials_path,
    load_credentials,
    save_credentials,
)
from strapi_client.utils.output import error, info, success


@click.command("auth")
@click.option(
    "--token",
    "new_token",
    default=None,
    help="API token to store (prompted for when omitted)",
)
@click.option(
    "--status",
    is_flag=True,
    default=False,
    help="Show whether a token is stored and exit",
)
@pass_context
def cli(ctx: Context, new_token: str | None, status: bool) -> None:
    """Store an API token in ~/.config/strapi-client/credentials.json.

    The stored token is used whenever neither --token nor the config file
    provides one.
    """
    if status:
        creds = load_credentials()
        if creds is None:
            info(f"No token stored at {get_credentials_path()}")
            return
        saved = f" (saved {creds.saved_at})" if creds.saved_at else ""
        server = f" for {creds.base_url}" if creds.base_url else ""
        info(f"Token stored{server}{saved}")
        return

    if new_token is None:
        new_token = click.prompt("API token", hide_input=True)
    new_token = new_token.strip()
    if not new_token:
        error("Token must not be empty")
        raise SystemExit(1)

    creds = StoredCredentials(
        token=new_token,
        base_url=ctx.config.base_url if ctx.config else None,
        saved_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        source="cli",
    )
    try:
        save_credentials(creds)
    except OSError as e:
        error(f"Failed to write credentials: {e}")
        raise SystemExit(1)

    success(f"Token saved to {get_credentials_path()}")

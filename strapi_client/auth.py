"""Bearer token providers for StrapiClient."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from strapi_client.credentials import load_credentials


class AuthProvider(Protocol):
    """Anything exposing an optional bearer token."""

    @property
    def token(self) -> str | None: ...


@dataclass(frozen=True)
class StaticTokenAuth:
    """A fixed token, typically from the config file or the command line."""

    token: str | None


class CredentialsFileAuth:
    """Reads the token from the credentials file on every request.

    A token saved while the client is alive is picked up without
    recreating the client.

    Args:
        config_dir: Override config directory. Defaults to ~/.config/strapi-client/.
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        self.config_dir = config_dir

    @property
    def token(self) -> str | None:
        creds = load_credentials(self.config_dir)
        if creds is None:
            return None
        return creds.token

"""API token file management.

Handles reading and writing the API token and associated metadata
to a dedicated credentials file at ~/.config/strapi-client/credentials.json.
"""

from __future__ import annotations

import json
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path

from strapi_client.config import get_config_dir

CREDENTIALS_FILENAME = "credentials.json"


@dataclass
class StoredCredentials:
    """Stored API token for one Strapi server."""

    token: str
    base_url: str | None = None
    saved_at: str = ""
    source: str = ""


def get_credentials_path(config_dir: Path | None = None) -> Path:
    """Return the path to the credentials file.

    Args:
        config_dir: Override config directory. Defaults to ~/.config/strapi-client/.
    """
    if config_dir is None:
        config_dir = get_config_dir()
    return config_dir / CREDENTIALS_FILENAME


def load_credentials(config_dir: Path | None = None) -> StoredCredentials | None:
    """Load credentials from the JSON file.

    Returns:
        StoredCredentials if file exists and is valid, None otherwise.
    """
    path = get_credentials_path(config_dir)
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return None

    if not isinstance(data, dict) or not isinstance(data.get("token"), str):
        return None

    return StoredCredentials(
        token=data["token"],
        base_url=data.get("base_url"),
        saved_at=data.get("saved_at", ""),
        source=data.get("source", ""),
    )


def save_credentials(creds: StoredCredentials, config_dir: Path | None = None) -> None:
    """Save credentials to the JSON file atomically.

    Uses a temporary file and rename to avoid partial writes.
    """
    path = get_credentials_path(config_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(creds)
    content = json.dumps(data, indent=2) + "\n"

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".strapi-creds-", suffix=".tmp")
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp_path).chmod(0o600)
        Path(tmp_path).replace(path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise

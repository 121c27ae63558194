"""Unit tests for the credentials file."""

from __future__ import annotations

import json
import stat
from pathlib import Path

from strapi_client.credentials import (
    StoredCredentials,
    get_credentials_path,
    load_credentials,
    save_credentials,
)


class TestCredentials:
    def test_path(self, temp_dir: Path) -> None:
        assert get_credentials_path(temp_dir) == temp_dir / "credentials.json"

    def test_missing_file(self, temp_dir: Path) -> None:
        assert load_credentials(temp_dir) is None

    def test_save_and_load(self, temp_dir: Path) -> None:
        creds = StoredCredentials(
            token="abc",
            base_url="https://cms.example.com",
            saved_at="2026-01-01T00:00:00+00:00",
            source="cli",
        )
        save_credentials(creds, temp_dir)

        assert load_credentials(temp_dir) == creds

    def test_file_is_private(self, temp_dir: Path) -> None:
        save_credentials(StoredCredentials(token="abc"), temp_dir)

        mode = stat.S_IMODE(get_credentials_path(temp_dir).stat().st_mode)
        assert mode == 0o600

    def test_no_temp_files_left(self, temp_dir: Path) -> None:
        save_credentials(StoredCredentials(token="abc"), temp_dir)
        save_credentials(StoredCredentials(token="def"), temp_dir)

        assert [p.name for p in temp_dir.iterdir()] == ["credentials.json"]
        assert load_credentials(temp_dir).token == "def"

    def test_invalid_json(self, temp_dir: Path) -> None:
        get_credentials_path(temp_dir).write_text("{not json")
        assert load_credentials(temp_dir) is None

    def test_missing_token(self, temp_dir: Path) -> None:
        get_credentials_path(temp_dir).write_text(json.dumps({"base_url": "x"}))
        assert load_credentials(temp_dir) is None

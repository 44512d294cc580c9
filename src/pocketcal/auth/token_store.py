# Token Store - file-based credential persistence at ~/.pocketcal/oauth/.
# Created: 2026-10-18

from __future__ import annotations

import json
import logging
import os
import stat
from dataclasses import asdict
from pathlib import Path

from pocketcal.auth.client import GoogleClient
from pocketcal.auth.credentials import AccessToken, ClientCredentials
from pocketcal.config import get_config_dir

logger = logging.getLogger(__name__)


def _get_oauth_dir() -> Path:
    """Get/create the OAuth token directory."""
    d = get_config_dir() / "oauth"
    d.mkdir(exist_ok=True)
    return d


class TokenStore:
    """File-based store at ~/.pocketcal/oauth/{account}.json.

    Keeps the client credentials (including the latest rotated refresh token)
    and the current access token. Files are chmod 0600 (owner-only
    read/write).
    """

    def save(self, account: str, credentials: ClientCredentials, token: AccessToken) -> None:
        path = _get_oauth_dir() / f"{account}.json"
        data = {"credentials": asdict(credentials), "token": asdict(token)}
        path.write_text(json.dumps(data, indent=2))
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
        logger.info("Saved OAuth credentials for %s", account)

    def load(self, account: str) -> tuple[ClientCredentials, AccessToken] | None:
        """Load credentials for an account. Returns None if not found."""
        path = _get_oauth_dir() / f"{account}.json"
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text())
            return ClientCredentials(**data["credentials"]), AccessToken(**data["token"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to load OAuth credentials for %s: %s", account, e)
            return None

    def delete(self, account: str) -> bool:
        """Delete stored credentials. Returns True if deleted."""
        path = _get_oauth_dir() / f"{account}.json"
        if path.exists():
            path.unlink()
            logger.info("Deleted OAuth credentials for %s", account)
            return True
        return False

    def list_accounts(self) -> list[str]:
        return [f.stem for f in _get_oauth_dir().glob("*.json")]

    def persist_on_refresh(self, account: str):
        """Callback for ``GoogleClient(on_refresh=...)`` that saves rotated credentials."""

        def _save(client: GoogleClient) -> None:
            self.save(account, client.credentials, client.token)

        return _save

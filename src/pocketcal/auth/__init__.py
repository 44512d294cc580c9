"""OAuth 2.0 authentication for pocketcal."""

from pocketcal.auth.client import GoogleClient
from pocketcal.auth.credentials import AccessToken, ClientCredentials
from pocketcal.auth.oauth import OAuthManager
from pocketcal.auth.scopes import Scope
from pocketcal.auth.token_store import TokenStore

__all__ = [
    "AccessToken",
    "ClientCredentials",
    "GoogleClient",
    "OAuthManager",
    "Scope",
    "TokenStore",
]

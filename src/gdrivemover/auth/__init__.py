"""Public auth exports for gdrivemover."""

from __future__ import annotations

from .auth_info import AuthInfo, discover_client_secrets
from .oauth_client import OAuthClient, scopes_for

__all__ = ["AuthInfo", "OAuthClient", "discover_client_secrets", "scopes_for"]

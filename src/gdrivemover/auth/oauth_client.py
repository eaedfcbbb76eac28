"""OAuth client utilities for gdrivemover."""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional, Sequence

from gdrivemover.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)

SCOPE_DRIVE = "https://www.googleapis.com/auth/drive"
SCOPE_DRIVE_READONLY = "https://www.googleapis.com/auth/drive.readonly"


def scopes_for(read_only: bool) -> list[str]:
    return [SCOPE_DRIVE_READONLY] if read_only else [SCOPE_DRIVE]


class OAuthClient:
    """Create and manage OAuth credentials and Drive API service objects."""

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        callback_port: int = 0,
        manual: bool = False,
        prompt: Optional[Callable[[str], str]] = None,
    ) -> None:
        self._auth_info = auth_info
        self._callback_port = callback_port
        self._manual = manual
        self._prompt = prompt or input

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return OAuth credentials for the given scopes.

        Args:
            scopes: OAuth scopes.
            ensure_valid: If True, refresh credentials when possible.

        Returns:
            google.oauth2.credentials.Credentials

        Raises:
            AuthError: on load/refresh/flow failures.
            InvalidArgumentError: if scopes is invalid.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        token_file = self._auth_info.token_file
        creds = None

        if os.path.exists(token_file):
            try:
                creds = Credentials.from_authorized_user_file(
                    token_file,
                    scopes=list(scopes),
                )
            except Exception as exc:
                raise AuthError(
                    "Failed to load token_file",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc

            if not ensure_valid:
                return creds

            if not creds.valid and creds.refresh_token:
                try:
                    creds.refresh(Request())
                    self._save_credentials(creds)
                except Exception as exc:
                    # A revoked refresh token falls through to a new authorization.
                    logger.warning("Failed to refresh cached token %s: %s", token_file, exc)

            if creds.valid:
                return creds

        creds = self._run_flow(scopes)
        self._save_credentials(creds)
        return creds

    def build_drive_service(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Build a Drive API service resource.

        Returns:
            googleapiclient.discovery.Resource
        """
        from googleapiclient.discovery import build

        creds = self.get_credentials(scopes=scopes, ensure_valid=ensure_valid)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    def _run_flow(self, scopes: Sequence[str]):
        """
        Obtain a new authorization. Blocks until the user completes it.

        The default flow opens a browser and waits for the redirect on a local
        callback listener. In manual mode the authorization URL is printed and
        the code is read from the prompt.
        """
        from google_auth_oauthlib.flow import InstalledAppFlow

        client_secrets = self._auth_info.client_secrets_file
        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                client_secrets,
                scopes=list(scopes),
            )
            if not self._manual:
                return flow.run_local_server(port=self._callback_port)

            flow.redirect_uri = f"http://localhost:{self._callback_port}/"
            auth_url, _ = flow.authorization_url(
                access_type="offline",
                prompt="consent",
            )
            print(f"Go to the following link in your browser:\n\n{auth_url}\n")
            code = self._prompt("Enter the authorization code: ").strip()
            if not code:
                raise AuthError("Authorization code missing")
            flow.fetch_token(code=code)
            return flow.credentials
        except AuthError:
            raise
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={
                    "client_secrets_file": client_secrets,
                    "token_file": self._auth_info.token_file,
                },
                cause=exc,
            ) from exc

    def _save_credentials(self, creds) -> None:
        token_file = self._auth_info.token_file
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except Exception as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

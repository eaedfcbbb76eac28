"""Authentication information for one Drive account (OAuth only)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from gdrivemover.config import CLIENT_SECRETS_SUFFIX, MoverConfig
from gdrivemover.errors import AuthError


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    client_secrets_file:
        OAuth client secrets JSON (installed application).
    token_file:
        Cached authorized-user token JSON for one account.
    """

    client_secrets_file: str
    token_file: str

    def __post_init__(self) -> None:
        for key in ("client_secrets_file", "token_file"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.{key} must be a non-empty string")

    @classmethod
    def for_account(cls, account_name: str, config: MoverConfig) -> "AuthInfo":
        """
        Build AuthInfo for a named account.

        Raises:
            AuthError: if no client secrets file can be found.
        """
        secrets = config.client_secrets_file or discover_client_secrets(".")
        if not secrets:
            raise AuthError(
                "Unable to find OAuth client secrets file",
                details={
                    "hint": "Set GOOGLE_APPLICATION_CREDENTIALS or place "
                    f"a *{CLIENT_SECRETS_SUFFIX} file in the working directory",
                },
            )
        return cls(
            client_secrets_file=secrets,
            token_file=config.token_file_for(account_name),
        )


def discover_client_secrets(directory: str) -> Optional[str]:
    """Return the first client secrets file found in `directory`, if any."""
    try:
        names = sorted(os.listdir(directory))
    except OSError as exc:
        raise AuthError(
            "Unable to read directory",
            details={"directory": directory},
            cause=exc,
        ) from exc

    for name in names:
        path = os.path.join(directory, name)
        if name.endswith(CLIENT_SECRETS_SUFFIX) and os.path.isfile(path):
            return path
    return None

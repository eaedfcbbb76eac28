"""Authenticator: turns an account name into a live AccountHandle."""

from __future__ import annotations

import logging

from gdrivemover.config import MoverConfig
from gdrivemover.controller import DriveController
from gdrivemover.errors import AuthError, GDriveMoverError
from gdrivemover.models import AccountHandle

from .auth_info import AuthInfo
from .oauth_client import scopes_for

logger = logging.getLogger(__name__)


class Authenticator:
    """Authenticate named accounts using cached or interactive authorization."""

    def __init__(self, config: MoverConfig, *, manual: bool = False) -> None:
        self._config = config
        self._manual = manual

    def authenticate(self, account_name: str, read_only: bool = False) -> AccountHandle:
        """
        Return an AccountHandle for `account_name`.

        Raises:
            AuthError: if credential discovery, token exchange or client
                construction fails.
        """
        try:
            auth_info = AuthInfo.for_account(account_name, self._config)
            client = DriveController(
                auth_info,
                scopes=scopes_for(read_only),
                supports_all_drives=self._config.supports_all_drives,
                chunk_size=self._config.chunk_size,
                manual=self._manual,
                callback_port=self._config.callback_port,
            )
        except AuthError:
            raise
        except (GDriveMoverError, ValueError, OSError) as exc:
            raise AuthError(
                f"Unable to authenticate account {account_name}",
                details={"account": account_name},
                cause=exc,
            ) from exc

        logger.info("Authenticated account %s", account_name)
        return AccountHandle(name=account_name, client=client)

"""Runtime configuration for gdrivemover."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from gdrivemover.errors import InvalidArgumentError

# Environment variable names
ENV_CLIENT_SECRETS = "GOOGLE_APPLICATION_CREDENTIALS"
ENV_TOKEN_DIR = "GDRIVEMOVER_TOKEN_DIR"
ENV_CALLBACK_PORT = "GDRIVEMOVER_CALLBACK_PORT"
ENV_SERVER_HOST = "GDRIVEMOVER_SERVER_HOST"
ENV_SERVER_PORT = "GDRIVEMOVER_SERVER_PORT"
ENV_CHUNK_SIZE = "GDRIVEMOVER_CHUNK_SIZE"
ENV_SUPPORTS_ALL_DRIVES = "GDRIVEMOVER_SUPPORTS_ALL_DRIVES"

CLIENT_SECRETS_SUFFIX = ".apps.googleusercontent.com.json"

# Resumable upload chunks must be a multiple of 256 KiB.
CHUNK_ALIGNMENT = 256 * 1024
DEFAULT_CHUNK_SIZE = 10 * 1024 * 1024

DEFAULT_PORT = 8088


@dataclass(frozen=True)
class MoverConfig:
    """
    Settings shared by authentication, the Drive client and the HTTP server.

    client_secrets_file:
        OAuth client secrets JSON. When None, the working directory is
        searched for a file ending with CLIENT_SECRETS_SUFFIX.
    """

    client_secrets_file: Optional[str] = None
    token_dir: str = "."
    callback_port: int = DEFAULT_PORT
    server_host: str = "localhost"
    server_port: int = DEFAULT_PORT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    supports_all_drives: bool = True

    def __post_init__(self) -> None:
        if self.chunk_size <= 0 or self.chunk_size % CHUNK_ALIGNMENT:
            raise InvalidArgumentError(
                "chunk_size must be a positive multiple of 256 KiB",
                details={"chunk_size": self.chunk_size},
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MoverConfig":
        env = os.environ if environ is None else environ
        return cls(
            client_secrets_file=env.get(ENV_CLIENT_SECRETS) or None,
            token_dir=env.get(ENV_TOKEN_DIR) or ".",
            callback_port=_int_env(env, ENV_CALLBACK_PORT, DEFAULT_PORT),
            server_host=env.get(ENV_SERVER_HOST) or "localhost",
            server_port=_int_env(env, ENV_SERVER_PORT, DEFAULT_PORT),
            chunk_size=_int_env(env, ENV_CHUNK_SIZE, DEFAULT_CHUNK_SIZE),
            supports_all_drives=_bool_env(env, ENV_SUPPORTS_ALL_DRIVES, True),
        )

    def token_file_for(self, account_name: str) -> str:
        """Path of the cached token for one account."""
        return os.path.join(self.token_dir, f"token_{account_name}.json")


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"{name} must be an integer",
            details={"name": name, "value": raw},
            cause=exc,
        ) from exc


def _bool_env(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")

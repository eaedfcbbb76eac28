"""gdrivemover public API."""

from __future__ import annotations

from gdrivemover.auth import AuthInfo, OAuthClient
from gdrivemover.auth.authenticator import Authenticator
from gdrivemover.config import MoverConfig
from gdrivemover.controller import DriveController
from gdrivemover.errors import (
    ApiError,
    AuthError,
    ChecksumMismatchError,
    ConflictError,
    GDriveMoverError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RemoteError,
    UnknownMoveTypeError,
    map_http_error,
)
from gdrivemover.models import (
    AccountHandle,
    EventKind,
    FolderChain,
    MoveOutcome,
    Owner,
    ProgressEvent,
    RemoteFile,
)
from gdrivemover.mover import (
    EventStream,
    MoveService,
    ParentMirrorResolver,
    TransferEngine,
)

__all__ = [
    # High-level
    "MoveService",
    "TransferEngine",
    "ParentMirrorResolver",
    "EventStream",
    "DriveController",
    # Auth / Config
    "Authenticator",
    "AuthInfo",
    "OAuthClient",
    "MoverConfig",
    # Models
    "AccountHandle",
    "RemoteFile",
    "Owner",
    "FolderChain",
    "ProgressEvent",
    "EventKind",
    "MoveOutcome",
    # Errors
    "GDriveMoverError",
    "AuthError",
    "RemoteError",
    "InvalidArgumentError",
    "PermissionError",
    "QuotaExceededError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "NetworkError",
    "ApiError",
    "UnknownMoveTypeError",
    "ChecksumMismatchError",
    "HttpErrorInfo",
    "map_http_error",
]

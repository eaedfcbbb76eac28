"""Public error exports for gdrivemover."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
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

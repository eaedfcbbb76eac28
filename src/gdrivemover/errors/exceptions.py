"""Exception hierarchy and HTTP error mapping for gdrivemover."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveMoverError(Exception):
    """
    Base exception for gdrivemover.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason, body).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class AuthError(GDriveMoverError):
    """Raised when credential discovery, token exchange or client construction fails."""


class RemoteError(GDriveMoverError):
    """Base class for failures reported by (or on the way to) the Drive API."""


class InvalidArgumentError(RemoteError):
    """Raised when request arguments are invalid (HTTP 400, bad input)."""


class PermissionError(RemoteError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class QuotaExceededError(RemoteError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NotFoundError(RemoteError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(RemoteError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(RemoteError):
    """Raised when rate-limited (HTTP 429)."""


class NetworkError(RemoteError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(RemoteError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


class UnknownMoveTypeError(InvalidArgumentError):
    """Raised when a move request names a type other than files/directories."""


class ChecksumMismatchError(GDriveMoverError):
    """
    Raised (and reported) when the uploaded copy does not match the source.

    The source file is kept; the destination copy is left in place.
    """

    def __init__(
        self,
        file_name: str,
        *,
        source_checksum: Optional[str],
        destination_checksum: Optional[str],
        destination_id: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"File {file_name} uploaded successfully but the checksums do not match",
            details={
                "source_checksum": source_checksum,
                "destination_checksum": destination_checksum,
                "destination_id": destination_id,
            },
        )
        self.source_checksum = source_checksum
        self.destination_checksum = destination_checksum
        self.destination_id = destination_id


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivemover exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)

_RATE_LIMIT_REASONS: tuple[str, ...] = (
    "rateLimitExceeded",
    "userRateLimitExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RemoteError:
    """
    Map an HTTP error to a gdrivemover exception.

    Policy:
        - 401/403 -> RateLimitError for rate-limit reasons, QuotaExceededError
          for quota reasons, PermissionError otherwise (AuthError is reserved
          for startup authentication)
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - 5xx and anything else -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code in (401, 403):
        if info.reason in _RATE_LIMIT_REASONS:
            return RateLimitError(message, details=details, cause=cause)
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)

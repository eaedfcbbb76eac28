"""Google Drive API controller: typed facade over one account's Drive service."""

from __future__ import annotations

import json
import logging
import tempfile
from typing import IO, Any, Callable, Optional, Sequence, TypeVar

from gdrivemover.auth import AuthInfo, OAuthClient
from gdrivemover.errors import (
    ApiError,
    HttpErrorInfo,
    NetworkError,
    RemoteError,
    map_http_error,
)
from gdrivemover.models import Owner, RemoteFile
from gdrivemover.util.mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME
from gdrivemover.util.time import parse_rfc3339

from .fields import (
    ALL_FIELDS,
    CHECKSUM_FIELDS,
    FILE_FIELDS,
    LIST_FIELDS,
    PERMISSION_FIELDS,
    PROBE_FIELDS,
)

T = TypeVar("T")

ProgressCallback = Callable[[int, int], None]

logger = logging.getLogger(__name__)

# Downloads larger than this spill from memory to a temporary file.
_SPOOL_MAX_BYTES = 32 * 1024 * 1024
_DEFAULT_CHUNK_SIZE = 10 * 1024 * 1024

_OWNED_FOLDERS_QUERY = f"mimeType='{FOLDER_MIME}' and 'me' in owners"
_OWNED_FILES_QUERY = "'me' in owners"
_QUOTA_ORDER = "quotaBytesUsed desc"


class DriveController:
    """
    Drive API controller for a single account.

    Notes:
        - Every remote call is attempted exactly once (no retries).
        - API failures are raised as gdrivemover RemoteError subclasses.
        - `supports_all_drives` is applied to all requests consistently.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        chunk_size: int = _DEFAULT_CHUNK_SIZE,
        manual: bool = False,
        callback_port: int = 0,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._chunk_size = chunk_size

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info, callback_port=callback_port, manual=manual)
        self._service = client.build_drive_service(use_scopes)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
        chunk_size: int = _DEFAULT_CHUNK_SIZE,
    ) -> "DriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._chunk_size = chunk_size
        obj._service = service
        return obj

    # ----------------------------
    # Metadata
    # ----------------------------
    def get(self, file_id: str) -> RemoteFile:
        """Fetch one item's full metadata."""
        req = self._service.files().get(
            fileId=file_id,
            fields=ALL_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_file(data)

    def get_checksum(self, file_id: str) -> Optional[str]:
        """Fetch only the md5Checksum of an item."""
        req = self._service.files().get(
            fileId=file_id,
            fields=CHECKSUM_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        md5 = data.get("md5Checksum")
        return md5 if isinstance(md5, str) and md5 else None

    def get_with_ancestors(self, file_id: str) -> list[RemoteFile]:
        """
        Return the item followed by all of its ancestors.

        Parents are walked depth-first in the order Drive reports them.
        """
        item = self.get(file_id)
        items = [item]
        for parent_id in item.parents:
            items.extend(self.get_with_ancestors(parent_id))
        return items

    # ----------------------------
    # Listing
    # ----------------------------
    def list_children(
        self,
        folder_id: str,
        *,
        include_trashed: bool = False,
    ) -> list[RemoteFile]:
        """Return all direct children (files and folders) of a folder."""
        q = _build_parent_query(folder_id, include_trashed=include_trashed)
        return self._list_by_query(q)

    def list_owned_folders(self) -> list[RemoteFile]:
        """Return all folders owned by the account, largest quota usage first."""
        return self._list_by_query(_OWNED_FOLDERS_QUERY, order_by=_QUOTA_ORDER)

    def list_owned_files(self) -> list[RemoteFile]:
        """Return all items owned by the account, largest quota usage first."""
        return self._list_by_query(_OWNED_FILES_QUERY, order_by=_QUOTA_ORDER)

    def find_folder(self, name: str, parent_id: Optional[str] = None) -> Optional[RemoteFile]:
        """
        Return the first folder called `name` (under `parent_id` if given).

        Used as an existence probe before creating folders; returns None when
        nothing matches.
        """
        q = f"name='{escape_query_value(name)}' and mimeType='{FOLDER_MIME}' and trashed=false"
        if parent_id is not None:
            q = f"{q} and '{escape_query_value(parent_id)}' in parents"

        req = self._service.files().list(
            q=q,
            fields=PROBE_FIELDS,
            pageSize=1,
            **self._common_list_kwargs(),
        )
        data = self._execute(req.execute)
        files = data.get("files") or []
        if not files:
            return None
        return _file_dict_to_remote_file(files[0])

    def folder_size(self, folder_id: str) -> tuple[int, int]:
        """
        Recursively sum (size, quota_bytes_used) of everything under a folder.
        """
        size = 0
        quota = 0
        for child in self.list_children(folder_id):
            if child.is_folder:
                child_size, child_quota = self.folder_size(child.file_id)
                size += child_size
                quota += child_quota
            size += child.size or 0
            quota += child.quota_bytes_used or 0
        return size, quota

    # ----------------------------
    # Mutations
    # ----------------------------
    def create_folder(self, name: str, parent_ids: Sequence[str] = ()) -> RemoteFile:
        """Create a folder. Always creates; callers deduplicate."""
        body: dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME}
        if parent_ids:
            body["parents"] = list(parent_ids)

        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_remote_file(data)

    def delete(self, file_id: str) -> None:
        req = self._service.files().delete(
            fileId=file_id,
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    def share(self, file_id: str, email_address: str, role: str = "reader") -> str:
        """Grant `role` on a file to a user. Returns the permission id."""
        body = {"type": "user", "role": role, "emailAddress": email_address}
        req = self._service.permissions().create(
            fileId=file_id,
            body=body,
            fields=PERMISSION_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return str(data.get("id", ""))

    # ----------------------------
    # Content
    # ----------------------------
    def download(self, file_id: str) -> IO[bytes]:
        """
        Stream an item's content into a spooled temporary file.

        Returns:
            A binary file object positioned at offset 0. The caller closes it.
        """
        from googleapiclient.http import MediaIoBaseDownload

        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_get_kwargs(),
        )

        buffer = tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_BYTES)
        try:
            downloader = MediaIoBaseDownload(buffer, req, chunksize=self._chunk_size)
            done = False
            while not done:
                _, done = self._execute(downloader.next_chunk)
        except BaseException:
            buffer.close()
            raise

        buffer.seek(0)
        return buffer

    def upload(
        self,
        metadata: dict[str, Any],
        content: IO[bytes],
        *,
        size: Optional[int] = None,
        mime_type: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> RemoteFile:
        """
        Create a new file from `content`.

        Args:
            metadata: Drive file body (name, originalFilename, parents, ...).
            content: Readable binary stream.
            size: Declared content length; 0 uploads in a single request.
            mime_type: Content type; defaults to application/octet-stream.
            progress_callback: Called with (bytes_so_far, total_bytes) after
                each uploaded chunk. total_bytes is 0 when unknown. Once the
                upload completes it is called with (total, total).
        """
        from googleapiclient.http import MediaIoBaseUpload

        resumable = size != 0
        media = MediaIoBaseUpload(
            content,
            mimetype=mime_type or DEFAULT_UPLOAD_MIME,
            chunksize=self._chunk_size,
            resumable=resumable,
        )
        req = self._service.files().create(
            body=metadata,
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )

        if not resumable:
            data = self._execute(req.execute)
            return _file_dict_to_remote_file(data)

        total = 0
        response = None
        while response is None:
            status, response = self._execute(req.next_chunk)
            if status is not None:
                total = int(status.total_size or 0) or total
                if progress_callback is not None:
                    progress_callback(
                        int(status.resumable_progress or 0),
                        int(status.total_size or 0),
                    )

        # next_chunk returns no status for the final chunk.
        final = size or total
        if progress_callback is not None and final > 0:
            progress_callback(final, final)
        return _file_dict_to_remote_file(response)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _list_by_query(self, q: str, *, order_by: Optional[str] = None) -> list[RemoteFile]:
        all_files: list[RemoteFile] = []
        page_token: Optional[str] = None
        extra: dict[str, Any] = {"orderBy": order_by} if order_by else {}

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                **extra,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            for f in data.get("files", []):
                all_files.append(_file_dict_to_remote_file(f))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return all_files

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except RemoteError:
            raise
        except Exception as exc:
            mapped = _map_exception(exc)
            if mapped.details.get("body"):
                logger.debug("Error Body: %s", mapped.details["body"])
            raise mapped from exc


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside single quotes in a Drive query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _build_parent_query(parent_id: str, *, include_trashed: bool) -> str:
    q = f"'{escape_query_value(parent_id)}' in parents"
    if not include_trashed:
        q = f"{q} and trashed=false"
    return q


def _map_exception(exc: Exception) -> RemoteError:
    try:
        from googleapiclient.errors import HttpError
    except Exception:  # pragma: no cover
        HttpError = None  # type: ignore[assignment]

    if HttpError is not None and isinstance(exc, HttpError):
        info = _http_error_to_info(exc)
        return map_http_error(info, cause=exc)

    if isinstance(exc, (OSError, TimeoutError)):
        return NetworkError("Network error", cause=exc)

    return ApiError("Drive API error", cause=exc)


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _to_datetime(value: Any):
    if not isinstance(value, str):
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None


def _file_dict_to_remote_file(data: dict[str, Any]) -> RemoteFile:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    owners: list[Owner] = []
    for owner in data.get("owners", []) or []:
        if isinstance(owner, dict) and isinstance(owner.get("emailAddress"), str):
            owners.append(
                Owner(
                    email_address=owner["emailAddress"],
                    display_name=owner.get("displayName"),
                )
            )

    md5 = data.get("md5Checksum")
    original = data.get("originalFilename")

    return RemoteFile(
        file_id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=list(parents) if isinstance(parents, list) else [],
        owners=owners,
        size=_to_int(data.get("size")),
        quota_bytes_used=_to_int(data.get("quotaBytesUsed")),
        md5_checksum=md5 if isinstance(md5, str) and md5 else None,
        original_filename=original if isinstance(original, str) else None,
        created_time=_to_datetime(data.get("createdTime")),
        modified_time=_to_datetime(data.get("modifiedTime")),
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        body = content.decode("utf-8", errors="replace")
        if body:
            details["body"] = body
        try:
            payload = json.loads(body)
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            err = payload.get("error", {})
            if isinstance(err, dict):
                message = err.get("message") or None
                errors = err.get("errors") or []
                if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                    details["domain"] = errors[0].get("domain")
                    details["reason_detail"] = errors[0].get("reason")
                    if isinstance(errors[0].get("reason"), str):
                        reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )

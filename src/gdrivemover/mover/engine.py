"""Move files and folder trees from a source account to a target account."""

from __future__ import annotations

import logging
from typing import Any, Optional

from gdrivemover.errors import ChecksumMismatchError, InvalidArgumentError, RemoteError
from gdrivemover.models import (
    CODE_COMPLETE,
    CODE_PRE_UPLOAD_FAILURE,
    CODE_UPLOAD_FAILURE,
    AccountHandle,
    ProgressEvent,
    RemoteFile,
    percent_of,
)
from gdrivemover.util.mime import is_google_app

from .resolver import ParentMirrorResolver
from .stream import Emit, EventStream

logger = logging.getLogger(__name__)

SHARE_ROLE = "reader"


class TransferEngine:
    """
    Transfer items between two accounts and report progress as events.

    Each public call runs on its own thread and returns an EventStream.
    Folder children are transferred one at a time, in listing order; their
    events are relayed into the folder's stream tagged one level deeper.
    """

    def __init__(self, source: AccountHandle, target: AccountHandle) -> None:
        self._source = source
        self._target = target

    @property
    def source(self) -> AccountHandle:
        return self._source

    @property
    def target(self) -> AccountHandle:
        return self._target

    def transfer_file(self, file: RemoteFile, share_back: bool = False) -> EventStream:
        """Move one file: download, upload, verify, delete source, share back."""
        return EventStream.spawn(
            lambda emit: self.run_file(file, share_back, emit),
            name=f"transfer-file-{file.file_id}",
        )

    def transfer_folder(self, folder: RemoteFile, share_back: bool = False) -> EventStream:
        """Move every item under a folder, recursing into sub-folders."""
        return EventStream.spawn(
            lambda emit: self.run_folder(folder, share_back, emit),
            name=f"transfer-folder-{folder.file_id}",
        )

    # ----------------------------
    # Synchronous bodies (run on the stream thread)
    # ----------------------------
    def run_file(self, file: RemoteFile, share_back: bool, emit: Emit) -> None:
        """
        Transfer one file, emitting progress and exactly one terminal event.

        The source is deleted only when both md5 checksums are present and
        equal; a missing checksum on either side counts as a mismatch, even
        when both are missing. Google apps documents have no binary content
        and fail before anything is created in the target account.
        """
        if file.is_folder:
            emit(
                ProgressEvent.failure(
                    InvalidArgumentError(
                        "Folders must be transferred with transfer_folder",
                        details={"file_id": file.file_id},
                    ),
                    file=file,
                )
            )
            return

        try:
            fresh = self._source.client.get(file.file_id)
            if is_google_app(fresh.mime_type):
                raise InvalidArgumentError(
                    f"File {fresh.name} is a Google apps document and has no downloadable content",
                    details={"file_id": fresh.file_id, "mime_type": fresh.mime_type},
                )
            dest_parents = ParentMirrorResolver(self._source, self._target).resolve_parents(
                fresh.parents
            )
            content = self._source.client.download(fresh.file_id)
        except RemoteError as exc:
            logger.error("Unable to prepare transfer of %s: %s", file.name, exc)
            emit(ProgressEvent.failure(exc, code=CODE_PRE_UPLOAD_FAILURE, file=file))
            return

        def on_progress(current: int, total: int) -> None:
            percent = percent_of(current, total, fresh.size)
            if percent is not None:
                emit(ProgressEvent.progress(percent, fresh))

        try:
            uploaded = self._target.client.upload(
                _upload_metadata(fresh, dest_parents),
                content,
                size=fresh.size,
                mime_type=fresh.mime_type or None,
                progress_callback=on_progress,
            )
        except RemoteError as exc:
            logger.error("Unable to upload file %s: %s", fresh.name, exc)
            if exc.details.get("body"):
                logger.error("Error Body: %s", exc.details["body"])
            emit(ProgressEvent.failure(exc, code=CODE_UPLOAD_FAILURE, file=fresh))
            return
        finally:
            content.close()

        logger.info("File %s uploaded successfully", uploaded.name)

        dest_checksum = uploaded.md5_checksum
        if not dest_checksum:
            try:
                dest_checksum = self._target.client.get_checksum(uploaded.file_id)
            except RemoteError as exc:
                logger.error("Unable to get uploaded file's checksum: %s", exc)
                emit(
                    ProgressEvent.failure(
                        exc, code=CODE_COMPLETE, percent=100.0, file=fresh, dest=uploaded
                    )
                )
                return

        if not fresh.md5_checksum or dest_checksum != fresh.md5_checksum:
            mismatch = ChecksumMismatchError(
                uploaded.name,
                source_checksum=fresh.md5_checksum,
                destination_checksum=dest_checksum,
                destination_id=uploaded.file_id,
            )
            logger.error("%s", mismatch)
            emit(
                ProgressEvent.failure(
                    mismatch, code=CODE_COMPLETE, percent=100.0, file=fresh, dest=uploaded
                )
            )
            return

        emit(ProgressEvent.complete(fresh, uploaded))

        try:
            self._source.client.delete(fresh.file_id)
        except RemoteError as exc:
            logger.warning("Unable to delete file %s: %s", fresh.name, exc)
            return

        if share_back:
            self._share_back(fresh, uploaded.file_id)

    def run_folder(self, folder: RemoteFile, share_back: bool, emit: Emit) -> None:
        try:
            children = self._source.client.list_children(folder.file_id)
        except RemoteError as exc:
            logger.error("Unable to list folder %s: %s", folder.name, exc)
            emit(ProgressEvent.failure(exc, code=CODE_PRE_UPLOAD_FAILURE, file=folder))
            return

        def relay(event: ProgressEvent) -> None:
            emit(event.nested())

        for child in children:
            if child.is_folder:
                self.run_folder(child, False, relay)
            else:
                self.run_file(child, False, relay)

        emit(ProgressEvent.complete(folder))

        if share_back:
            self._share_folder_back(folder)

    # ----------------------------
    # Follow-up actions (failures are logged only)
    # ----------------------------
    def _share_back(self, original: RemoteFile, dest_id: str) -> None:
        email = original.owner_email
        if not email:
            logger.warning("Unable to share %s: source owner unknown", original.name)
            return
        try:
            permission_id = self._target.client.share(dest_id, email, SHARE_ROLE)
        except RemoteError as exc:
            logger.warning("Unable to share file %s: %s", original.name, exc)
            return
        logger.info("File %s shared successfully (%s)", dest_id, permission_id)

    def _share_folder_back(self, folder: RemoteFile) -> None:
        # Lookup only: a folder whose transfer mirrored nothing has no copy to share.
        try:
            dest_id = ParentMirrorResolver(self._source, self._target).lookup(folder.file_id)
        except RemoteError as exc:
            logger.warning("Unable to locate destination folder for %s: %s", folder.name, exc)
            return
        if dest_id is None:
            logger.info("Folder %s has no copy in %s; nothing to share", folder.name, self._target.name)
            return
        self._share_back(folder, dest_id)


def _upload_metadata(file: RemoteFile, parent_ids: list[str]) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": file.name}
    if file.original_filename:
        metadata["originalFilename"] = file.original_filename
    if parent_ids:
        metadata["parents"] = parent_ids
    return metadata


def terminal_event(events: list[ProgressEvent]) -> Optional[ProgressEvent]:
    """Return the top-level terminal event of a drained stream, if any."""
    for event in reversed(events):
        if event.done and event.depth == 0:
            return event
    return None

"""Progress events emitted by transfers."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .remote_file import RemoteFile

# Code sentinels carried by terminal events.
CODE_PRE_UPLOAD_FAILURE: int = -2
CODE_UPLOAD_FAILURE: int = 0
CODE_COMPLETE: int = 100


class EventKind(str, Enum):
    PROGRESS = "progress"
    FAILED = "failed"
    COMPLETE = "complete"


@dataclass(slots=True, frozen=True)
class ProgressEvent:
    """
    One step of a transfer.

    PROGRESS events are intermediate; FAILED and COMPLETE are terminal
    (``done`` is True). ``depth`` is 0 for events of the transfer the caller
    started and grows by one for every folder level an event was relayed
    through.
    """

    kind: EventKind
    percent: float = 0.0
    code: Optional[int] = None
    error: Optional[BaseException] = None

    file_id: Optional[str] = None
    file_name: Optional[str] = None
    dest_file_id: Optional[str] = None
    dest_file_name: Optional[str] = None

    depth: int = 0

    @property
    def done(self) -> bool:
        return self.kind is not EventKind.PROGRESS

    @property
    def failed(self) -> bool:
        return self.kind is EventKind.FAILED

    @classmethod
    def progress(cls, percent: float, file: RemoteFile) -> ProgressEvent:
        return cls(
            kind=EventKind.PROGRESS,
            percent=percent,
            file_id=file.file_id,
            file_name=file.name,
        )

    @classmethod
    def failure(
        cls,
        error: BaseException,
        *,
        code: int = CODE_PRE_UPLOAD_FAILURE,
        percent: float = 0.0,
        file: Optional[RemoteFile] = None,
        dest: Optional[RemoteFile] = None,
    ) -> ProgressEvent:
        return cls(
            kind=EventKind.FAILED,
            percent=percent,
            code=code,
            error=error,
            **_names(file, dest),
        )

    @classmethod
    def complete(
        cls,
        file: Optional[RemoteFile] = None,
        dest: Optional[RemoteFile] = None,
    ) -> ProgressEvent:
        return cls(
            kind=EventKind.COMPLETE,
            percent=100.0,
            code=CODE_COMPLETE,
            **_names(file, dest),
        )

    def nested(self) -> ProgressEvent:
        """Return a copy tagged one folder level deeper."""
        return dataclasses.replace(self, depth=self.depth + 1)


def percent_of(current: int, total: int, fallback_total: Optional[int]) -> Optional[float]:
    """
    Convert a byte count into a percentage.

    Uses ``fallback_total`` when the upload driver reports an unknown (0)
    total. Returns None when no positive total is known or nothing was sent.
    """
    if total <= 0:
        total = fallback_total or 0
    if total <= 0 or current <= 0:
        return None
    return min(current * 100.0 / total, 100.0)


def _names(file: Optional[RemoteFile], dest: Optional[RemoteFile]) -> dict:
    names: dict = {}
    if file is not None:
        names["file_id"] = file.file_id
        names["file_name"] = file.name
    if dest is not None:
        names["dest_file_id"] = dest.file_id
        names["dest_file_name"] = dest.name
    return names

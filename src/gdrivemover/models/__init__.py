"""Public model exports for gdrivemover."""

from __future__ import annotations

from .account import AccountHandle
from .folder_chain import FolderChain
from .progress import (
    CODE_COMPLETE,
    CODE_PRE_UPLOAD_FAILURE,
    CODE_UPLOAD_FAILURE,
    EventKind,
    ProgressEvent,
    percent_of,
)
from .remote_file import Owner, RemoteFile
from .results import MoveOutcome, MoveStatus

__all__ = [
    "AccountHandle",
    "FolderChain",
    "RemoteFile",
    "Owner",
    "EventKind",
    "ProgressEvent",
    "percent_of",
    "CODE_COMPLETE",
    "CODE_PRE_UPLOAD_FAILURE",
    "CODE_UPLOAD_FAILURE",
    "MoveOutcome",
    "MoveStatus",
]

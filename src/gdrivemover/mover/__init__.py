"""Transfer core: folder mirroring, file/folder transfer and move requests."""

from __future__ import annotations

from .engine import TransferEngine, terminal_event
from .resolver import ParentMirrorResolver
from .service import MOVE_TYPES, MoveService
from .stream import EventStream

__all__ = [
    "EventStream",
    "ParentMirrorResolver",
    "TransferEngine",
    "MoveService",
    "MOVE_TYPES",
    "terminal_event",
]

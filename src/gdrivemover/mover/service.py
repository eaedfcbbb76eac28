"""Move request surface shared by the CLI and the HTTP server."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional

from gdrivemover.errors import GDriveMoverError, UnknownMoveTypeError
from gdrivemover.models import AccountHandle, MoveOutcome, ProgressEvent
from gdrivemover.observer import LoggingObserver, ProgressObserver, observe

from .engine import TransferEngine

logger = logging.getLogger(__name__)

MOVE_TYPE_FILES = "files"
MOVE_TYPE_DIRECTORIES = "directories"
MOVE_TYPES: tuple[str, ...] = (MOVE_TYPE_FILES, MOVE_TYPE_DIRECTORIES)

ObserverFactory = Callable[[str], ProgressObserver]


class MoveService:
    """
    Move a batch of items from the source account to the target account.

    Items are moved one after another; the first failure stops the batch.
    """

    def __init__(
        self,
        source: AccountHandle,
        target: AccountHandle,
        *,
        observer_factory: Optional[ObserverFactory] = None,
    ) -> None:
        self._engine = TransferEngine(source, target)
        self._observer_factory = observer_factory or LoggingObserver

    @property
    def source(self) -> AccountHandle:
        return self._engine.source

    @property
    def target(self) -> AccountHandle:
        return self._engine.target

    def move(
        self,
        move_type: str,
        file_ids: Iterable[str],
        *,
        share_back: bool = True,
    ) -> list[MoveOutcome]:
        """
        Move each id in order.

        Returns:
            One outcome per attempted id. When an id fails, its failed outcome
            is the last element and the remaining ids are not attempted.

        Raises:
            UnknownMoveTypeError: if move_type is not files/directories.
        """
        if move_type not in MOVE_TYPES:
            raise UnknownMoveTypeError(
                f"Unknown type {move_type}",
                details={"move_type": move_type, "allowed": list(MOVE_TYPES)},
            )

        outcomes: list[MoveOutcome] = []
        for file_id in file_ids:
            outcome = self.move_one(file_id, share_back=share_back)
            outcomes.append(outcome)
            if not outcome.ok:
                break
        return outcomes

    def move_one(self, file_id: str, *, share_back: bool = True) -> MoveOutcome:
        try:
            item = self.source.client.get(file_id)
        except GDriveMoverError as exc:
            logger.error("Unable to retrieve file %s: %s", file_id, exc)
            return _failed(file_id, None, exc)

        # Folders always go through the folder transfer, whatever was requested.
        if item.is_folder:
            stream = self._engine.transfer_folder(item, share_back)
        else:
            stream = self._engine.transfer_file(item, share_back)

        observer = self._observer_factory(item.name)
        failures: list[BaseException] = []
        observe(_track_failures(stream, failures), observer)

        # Any failure, including one in a nested child, fails the requested item.
        if failures:
            return _failed(file_id, item.name, failures[0])
        return MoveOutcome(file_id=file_id, status="success", file_name=item.name)


def _track_failures(
    events: Iterable[ProgressEvent], failures: list[BaseException]
) -> Iterator[ProgressEvent]:
    for event in events:
        if event.failed and event.error is not None:
            failures.append(event.error)
        yield event


def _failed(file_id: str, name: Optional[str], exc: BaseException) -> MoveOutcome:
    return MoveOutcome(
        file_id=file_id,
        status="failed",
        file_name=name,
        error_type=exc.__class__.__name__,
        error_message=str(exc),
    )

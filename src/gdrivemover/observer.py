"""Progress observers: consumers of transfer event streams."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from gdrivemover.models import ProgressEvent

logger = logging.getLogger(__name__)


class ProgressObserver(Protocol):
    """Consumes ProgressEvents of one transfer."""

    def on_event(self, event: ProgressEvent) -> None: ...

    def close(self) -> None: ...


class LoggingObserver:
    """
    Log progress changes and failures.

    `error` is the first failure seen at any depth: a failed child makes the
    whole requested item fail.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self.error: Optional[BaseException] = None
        self.finished = False
        self._last_percent: Optional[float] = None

    def on_event(self, event: ProgressEvent) -> None:
        if event.failed:
            logger.error("Error: %s (%s)", event.error, event.file_name or self.label)
            if self.error is None:
                self.error = event.error
        elif event.done:
            logger.info("Done File %s!", event.file_name or self.label)
        elif event.depth == 0 and _changed(self._last_percent, event.percent):
            self._last_percent = event.percent
            logger.debug("%s: %.1f%%", self.label, event.percent)

        if event.done and event.depth == 0:
            self.finished = True

    def close(self) -> None:
        pass


class RichProgressObserver(LoggingObserver):
    """Terminal progress bar for one transfer."""

    def __init__(self, label: str, console: Optional[Console] = None) -> None:
        super().__init__(label)
        self._progress = Progress(
            TextColumn("[cyan]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            "•",
            TimeElapsedColumn(),
            console=console,
        )
        self._progress.start()
        self._task: TaskID = self._progress.add_task(label[:50], total=100)
        self._shown: Optional[float] = None

    def on_event(self, event: ProgressEvent) -> None:
        super().on_event(event)
        if event.depth == 0 and _changed(self._shown, event.percent):
            self._shown = event.percent
            self._progress.update(self._task, completed=event.percent)

    def close(self) -> None:
        self._progress.stop()


def observe(events: Iterable[ProgressEvent], observer: ProgressObserver) -> None:
    """Feed every event to `observer` until the stream closes."""
    try:
        for event in events:
            observer.on_event(event)
    finally:
        observer.close()


def _changed(previous: Optional[float], current: float) -> bool:
    return previous is None or round(previous, 1) != round(current, 1)

"""Threaded single-producer event stream."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Iterator, Optional

from gdrivemover.models import ProgressEvent

logger = logging.getLogger(__name__)

Emit = Callable[[ProgressEvent], None]
Producer = Callable[[Emit], None]

_CLOSED = object()


class EventStream:
    """
    Events produced by one background transfer.

    The producer runs on its own thread and emits events onto an unbounded
    queue; iterating the stream blocks until the producer returns and the
    stream is closed. Closing is the only termination signal.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._terminated = False

    @classmethod
    def spawn(cls, producer: Producer, *, name: str = "transfer") -> "EventStream":
        """Run `producer(emit)` on a daemon thread and return its stream."""
        stream = cls()
        stream._thread = threading.Thread(
            target=stream._run,
            args=(producer,),
            name=name,
            daemon=True,
        )
        stream._thread.start()
        return stream

    def __iter__(self) -> Iterator[ProgressEvent]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item

    def drain(self) -> list[ProgressEvent]:
        """Consume the whole stream and return its events."""
        return list(self)

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _emit(self, event: ProgressEvent) -> None:
        if event.done and event.depth == 0:
            self._terminated = True
        self._queue.put(event)

    def _run(self, producer: Producer) -> None:
        try:
            producer(self._emit)
        except Exception as exc:
            logger.exception("Transfer worker failed")
            if not self._terminated:
                self._queue.put(ProgressEvent.failure(exc))
        finally:
            self._queue.put(_CLOSED)

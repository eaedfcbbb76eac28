import io
import unittest

from rich.console import Console

from gdrivemover.errors import ApiError
from gdrivemover.models import ProgressEvent, RemoteFile
from gdrivemover.observer import LoggingObserver, RichProgressObserver, observe

FILE = RemoteFile(file_id="F", name="f.txt", mime_type="text/plain")


class TestLoggingObserver(unittest.TestCase):
    def test_records_first_error_at_any_depth(self) -> None:
        observer = LoggingObserver("f.txt")
        child = ApiError("child")

        observer.on_event(ProgressEvent.failure(child, file=FILE).nested())
        self.assertIs(observer.error, child)
        self.assertFalse(observer.finished)

        observer.on_event(ProgressEvent.failure(ApiError("top"), file=FILE))

        self.assertIs(observer.error, child)
        self.assertTrue(observer.finished)

    def test_completion(self) -> None:
        observer = LoggingObserver("f.txt")
        observer.on_event(ProgressEvent.complete(FILE).nested())
        self.assertFalse(observer.finished)
        observer.on_event(ProgressEvent.complete(FILE))
        self.assertTrue(observer.finished)
        self.assertIsNone(observer.error)

    def test_unchanged_percent_is_logged_once(self) -> None:
        observer = LoggingObserver("f.txt")
        with self.assertLogs("gdrivemover.observer", level="DEBUG") as logs:
            observer.on_event(ProgressEvent.progress(10.01, FILE))
            observer.on_event(ProgressEvent.progress(10.04, FILE))
            observer.on_event(ProgressEvent.progress(20.0, FILE))
        self.assertEqual(len(logs.records), 2)


class TestRichProgressObserver(unittest.TestCase):
    def test_observe_closes_progress(self) -> None:
        console = Console(file=io.StringIO(), force_terminal=False)
        observer = RichProgressObserver("f.txt", console=console)

        observe(
            [ProgressEvent.progress(50.0, FILE), ProgressEvent.complete(FILE)],
            observer,
        )

        self.assertTrue(observer.finished)
        self.assertFalse(observer._progress.live.is_started)

    def test_observe_closes_on_consumer_error(self) -> None:
        class Exploding(LoggingObserver):
            closed = False

            def on_event(self, event):
                raise ValueError("bad consumer")

            def close(self):
                self.closed = True

        observer = Exploding("f.txt")
        with self.assertRaises(ValueError):
            observe([ProgressEvent.complete(FILE)], observer)
        self.assertTrue(observer.closed)


if __name__ == "__main__":
    unittest.main()

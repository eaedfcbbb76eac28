import unittest

from fake_drive import make_accounts

from gdrivemover.errors import ApiError, UnknownMoveTypeError
from gdrivemover.mover import MoveService
from gdrivemover.observer import LoggingObserver


class RecordingObserver(LoggingObserver):
    def __init__(self, label: str) -> None:
        super().__init__(label)
        self.events = []
        self.closed = False

    def on_event(self, event) -> None:
        self.events.append(event)
        super().on_event(event)

    def close(self) -> None:
        self.closed = True


class TestMoveService(unittest.TestCase):
    def setUp(self) -> None:
        self.src, self.dst, source, target = make_accounts()
        self.observers = []

        def factory(label):
            obs = RecordingObserver(label)
            self.observers.append(obs)
            return obs

        self.service = MoveService(source, target, observer_factory=factory)
        self.src.add_file("F1", "a.txt", b"aaaa")
        self.src.add_file("F2", "b.txt", b"bbbb")
        self.src.add_folder("D", "Docs")
        self.src.add_file("F3", "c.txt", b"cccc", parents=["D"])

    def test_moves_each_id_in_order(self) -> None:
        outcomes = self.service.move("files", ["F1", "F2"])

        self.assertEqual([o.file_id for o in outcomes], ["F1", "F2"])
        self.assertTrue(all(o.ok for o in outcomes))
        self.assertEqual([o.label for o in self.observers], ["a.txt", "b.txt"])
        self.assertTrue(all(o.closed for o in self.observers))
        self.assertEqual(
            [c[1] for c in self.dst.ops("share")],
            [f.file_id for f in self.dst.items.values() if f.name in ("a.txt", "b.txt")],
        )

    def test_first_failure_stops_the_batch(self) -> None:
        self.dst.fail("upload", "a.txt", ApiError("quota"))

        outcomes = self.service.move("files", ["F1", "F2"], share_back=False)

        self.assertEqual(len(outcomes), 1)
        self.assertEqual(outcomes[0].status, "failed")
        self.assertEqual(outcomes[0].error_type, "ApiError")
        self.assertIn("F2", self.src.items)

    def test_unknown_source_id_fails(self) -> None:
        outcomes = self.service.move("files", ["missing", "F1"])
        self.assertEqual(len(outcomes), 1)
        self.assertEqual(outcomes[0].error_type, "NotFoundError")
        self.assertIn("F1", self.src.items)

    def test_unknown_type_is_rejected(self) -> None:
        with self.assertRaises(UnknownMoveTypeError):
            self.service.move("albums", ["F1"])
        self.assertEqual(self.src.calls, [])

    def test_directories_move_folder_contents(self) -> None:
        outcomes = self.service.move("directories", ["D"], share_back=False)

        self.assertTrue(outcomes[0].ok)
        self.assertNotIn("F3", self.src.items)
        self.assertEqual(len(self.dst.folders_named("Docs")), 1)

    def test_nested_child_failure_fails_the_folder_and_stops_the_batch(self) -> None:
        self.dst.fail("upload", "c.txt", ApiError("quota"))

        outcomes = self.service.move("directories", ["D", "F1"], share_back=False)

        self.assertEqual(len(outcomes), 1)
        self.assertEqual(outcomes[0].file_id, "D")
        self.assertEqual(outcomes[0].status, "failed")
        self.assertEqual(outcomes[0].error_message, "quota")
        self.assertIn("F3", self.src.items)
        self.assertIn("F1", self.src.items)

    def test_sub_folder_listing_failure_fails_the_folder(self) -> None:
        self.src.add_folder("S", "Sub", parents=["D"])
        self.src.fail("list_children", "S", ApiError("listing failed"))

        outcomes = self.service.move("directories", ["D", "F1"], share_back=False)

        self.assertEqual([(o.file_id, o.status) for o in outcomes], [("D", "failed")])
        self.assertEqual(outcomes[0].error_type, "ApiError")
        self.assertIn("F1", self.src.items)

    def test_folder_requested_as_file_goes_through_folder_transfer(self) -> None:
        outcomes = self.service.move("files", ["D"], share_back=False)

        self.assertTrue(outcomes[0].ok)
        self.assertNotIn("F3", self.src.items)
        last = self.observers[0].events[-1]
        self.assertEqual(last.file_id, "D")
        self.assertEqual(last.depth, 0)


if __name__ == "__main__":
    unittest.main()

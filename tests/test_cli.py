import unittest
from unittest.mock import Mock, patch

from gdrivemover import cli
from gdrivemover.config import MoverConfig
from gdrivemover.errors import AuthError
from gdrivemover.models import MoveOutcome


class TestParser(unittest.TestCase):
    def test_move_arguments(self) -> None:
        args = cli.build_parser().parse_args(
            ["--source", "a", "move", "files", "F1", "F2", "--no-share-back"]
        )
        self.assertEqual(args.source, "a")
        self.assertEqual(args.target, "target")
        self.assertEqual(args.type, "files")
        self.assertEqual(args.file_ids, ["F1", "F2"])
        self.assertFalse(args.share_back)

    def test_move_type_is_checked(self) -> None:
        with patch("sys.stderr"), self.assertRaises(SystemExit):
            cli.build_parser().parse_args(["move", "albums", "F1"])


class TestRun(unittest.TestCase):
    def setUp(self) -> None:
        self.config = MoverConfig()
        self.source = Mock()
        self.target = Mock()

    def _run(self, argv):
        args = cli.build_parser().parse_args(argv)
        with patch.object(cli, "_accounts", return_value=(self.source, self.target)):
            with patch.object(cli, "MoveService") as service_cls, patch.object(cli, "console"):
                service_cls.return_value.move.return_value = self.outcomes
                code = cli.run(args, self.config)
        return code, service_cls

    def test_move_success(self) -> None:
        self.outcomes = [MoveOutcome(file_id="F1", status="success", file_name="a")]
        code, service_cls = self._run(["move", "files", "F1"])

        self.assertEqual(code, 0)
        service_cls.return_value.move.assert_called_once_with("files", ["F1"], share_back=True)

    def test_move_failure_exit_code(self) -> None:
        self.outcomes = [MoveOutcome(file_id="F1", status="failed", error_message="x")]
        code, _ = self._run(["move", "directories", "F1", "F2"])
        self.assertEqual(code, 2)

    def test_folder_size(self) -> None:
        self.outcomes = []
        self.source.client.folder_size.return_value = (10, 20)
        code, service_cls = self._run(["folder-size", "D"])

        self.assertEqual(code, 0)
        self.source.client.folder_size.assert_called_once_with("D")
        service_cls.assert_not_called()

    def test_move_without_target_account(self) -> None:
        args = cli.build_parser().parse_args(["move", "files", "F1"])
        with patch.object(cli, "_accounts", return_value=(self.source, None)):
            with patch.object(cli, "MoveService") as service_cls:
                self.assertEqual(cli.run(args, self.config), 1)
        service_cls.assert_not_called()

    def test_auth_failure(self) -> None:
        args = cli.build_parser().parse_args(["list-files"])
        with patch.object(cli, "_accounts", side_effect=AuthError("no secrets")):
            self.assertEqual(cli.run(args, self.config), 1)


if __name__ == "__main__":
    unittest.main()

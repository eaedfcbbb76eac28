import json
import unittest
from unittest.mock import Mock

from gdrivemover.errors import ApiError, UnknownMoveTypeError
from gdrivemover.models import MoveOutcome, RemoteFile
from gdrivemover.server import MoveRouter


class TestMoveRouter(unittest.TestCase):
    def setUp(self) -> None:
        self.service = Mock()
        self.client = self.service.source.client
        self.router = MoveRouter(self.service)

    def test_index(self) -> None:
        response = self.router.dispatch("GET", "/")
        self.assertEqual(response.status, 200)
        self.assertEqual(response.body, b"Server running")

    def test_list_files(self) -> None:
        self.client.list_owned_files.return_value = [
            RemoteFile(
                file_id="F1",
                name="big.iso",
                mime_type="application/octet-stream",
                size=2048,
                quota_bytes_used=2048,
            )
        ]

        response = self.router.dispatch("GET", "/files?x=1")

        self.assertEqual(response.status, 200)
        payload = json.loads(response.body)
        self.assertEqual(payload["type"], "files")
        self.assertEqual(payload["files"][0]["id"], "F1")
        self.assertEqual(payload["files"][0]["size"], "2.0 KB")

    def test_list_directories(self) -> None:
        self.client.list_owned_folders.return_value = []
        response = self.router.dispatch("GET", "/directories")
        self.assertEqual(json.loads(response.body), {"type": "directories", "files": []})
        self.client.list_owned_files.assert_not_called()

    def test_listing_error(self) -> None:
        self.client.list_owned_files.side_effect = ApiError("boom", details={"body": "{}"})
        response = self.router.dispatch("GET", "/files")
        self.assertEqual(response.status, 502)

    def test_transfer_redirects_on_success(self) -> None:
        self.service.move.return_value = [MoveOutcome(file_id="F1", status="success")]

        response = self.router.dispatch("POST", "/files/transfer", b"fileId=F1&fileId=F2")

        self.assertEqual(response.status, 302)
        self.assertEqual(response.headers["Location"], "/files")
        self.service.move.assert_called_once_with("files", ["F1", "F2"])

    def test_transfer_without_file_id(self) -> None:
        response = self.router.dispatch("POST", "/files/transfer", b"")
        self.assertEqual(response.status, 400)
        self.assertEqual(response.body, b"fileId missing")
        self.service.move.assert_not_called()

    def test_transfer_with_undecodable_body(self) -> None:
        response = self.router.dispatch("POST", "/files/transfer", b"fileId=\xff\xfe")
        self.assertEqual(response.status, 400)
        self.service.move.assert_not_called()

    def test_transfer_unknown_type(self) -> None:
        self.service.move.side_effect = UnknownMoveTypeError("Unknown type albums")
        response = self.router.dispatch("POST", "/albums/transfer", b"fileId=F1")
        self.assertEqual(response.status, 500)
        self.assertEqual(response.body, b"Error: Unknown type albums")

    def test_transfer_failure(self) -> None:
        self.service.move.return_value = [
            MoveOutcome(file_id="F1", status="failed", error_message="quota")
        ]
        response = self.router.dispatch("POST", "/directories/transfer", b"fileId=F1")
        self.assertEqual(response.status, 500)
        self.assertIn(b"quota", response.body)

    def test_method_and_path_errors(self) -> None:
        self.assertEqual(self.router.dispatch("GET", "/files/transfer").status, 405)
        self.assertEqual(self.router.dispatch("POST", "/files").status, 405)
        self.assertEqual(self.router.dispatch("GET", "/nowhere").status, 404)


if __name__ == "__main__":
    unittest.main()

import unittest
from unittest.mock import patch

from gdrivemover.auth.authenticator import Authenticator
from gdrivemover.config import MoverConfig
from gdrivemover.errors import AuthError, NetworkError


class TestAuthenticator(unittest.TestCase):
    def setUp(self) -> None:
        self.config = MoverConfig(client_secrets_file="secrets.json", token_dir="tokens")

    def test_authenticate_returns_named_handle(self) -> None:
        with patch("gdrivemover.auth.authenticator.DriveController") as controller_cls:
            handle = Authenticator(self.config).authenticate("work", read_only=True)

        self.assertEqual(handle.name, "work")
        self.assertIs(handle.client, controller_cls.return_value)

        args, kwargs = controller_cls.call_args
        self.assertTrue(args[0].token_file.endswith("token_work.json"))
        self.assertEqual(kwargs["scopes"], ["https://www.googleapis.com/auth/drive.readonly"])
        self.assertEqual(kwargs["callback_port"], 8088)
        self.assertFalse(kwargs["manual"])

    def test_auth_errors_propagate(self) -> None:
        with patch(
            "gdrivemover.auth.authenticator.DriveController",
            side_effect=AuthError("flow failed"),
        ):
            with self.assertRaises(AuthError):
                Authenticator(self.config).authenticate("work")

    def test_other_failures_become_auth_errors(self) -> None:
        with patch(
            "gdrivemover.auth.authenticator.DriveController",
            side_effect=NetworkError("offline"),
        ):
            with self.assertRaises(AuthError) as ctx:
                Authenticator(self.config).authenticate("work")

        self.assertEqual(ctx.exception.details["account"], "work")


if __name__ == "__main__":
    unittest.main()

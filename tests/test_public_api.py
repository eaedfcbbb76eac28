import unittest

import gdrivemover


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(gdrivemover, "MoveService"))
        self.assertTrue(hasattr(gdrivemover, "TransferEngine"))
        self.assertTrue(hasattr(gdrivemover, "ParentMirrorResolver"))
        self.assertTrue(hasattr(gdrivemover, "DriveController"))
        self.assertTrue(hasattr(gdrivemover, "AuthInfo"))
        self.assertTrue(hasattr(gdrivemover, "OAuthClient"))

        self.assertTrue(hasattr(gdrivemover, "ProgressEvent"))
        self.assertTrue(hasattr(gdrivemover, "RemoteFile"))
        self.assertTrue(hasattr(gdrivemover, "MoveOutcome"))

        self.assertTrue(hasattr(gdrivemover, "GDriveMoverError"))
        self.assertTrue(hasattr(gdrivemover, "ChecksumMismatchError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(gdrivemover, "__all__"))
        self.assertIn("MoveService", gdrivemover.__all__)
        self.assertIn("GDriveMoverError", gdrivemover.__all__)
        for name in gdrivemover.__all__:
            self.assertTrue(hasattr(gdrivemover, name), name)


if __name__ == "__main__":
    unittest.main()

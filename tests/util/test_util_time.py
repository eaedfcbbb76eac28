import unittest
from datetime import datetime, timezone

from gdrivemover.util.time import parse_rfc3339


class TestUtilTime(unittest.TestCase):
    def test_parse_rfc3339_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56Z")
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_fractional_z(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56.123456Z")
        self.assertEqual(
            dt, datetime(2025, 1, 1, 12, 34, 56, 123456, tzinfo=timezone.utc)
        )

    def test_parse_rfc3339_offset_converts_to_utc(self) -> None:
        dt = parse_rfc3339("2025-01-01T12:34:56+09:00")
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt, datetime(2025, 1, 1, 3, 34, 56, tzinfo=timezone.utc))

    def test_parse_rfc3339_rejects_naive_and_empty(self) -> None:
        with self.assertRaises(ValueError):
            parse_rfc3339("2025-01-01T12:34:56")
        with self.assertRaises(ValueError):
            parse_rfc3339("")


if __name__ == "__main__":
    unittest.main()

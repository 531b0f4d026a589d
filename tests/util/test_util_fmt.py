import unittest

from gdriveupdate.util.fmt import format_duration, format_size


class TestFormatSize(unittest.TestCase):
    def test_bytes(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(999), "999 B")

    def test_decimal_units(self) -> None:
        self.assertEqual(format_size(1500), "1.5 KB")
        self.assertEqual(format_size(5_000_000), "5.0 MB")
        self.assertEqual(format_size(2_500_000_000), "2.5 GB")


class TestFormatDuration(unittest.TestCase):
    def test_seconds(self) -> None:
        self.assertEqual(format_duration(2), "2s")
        self.assertEqual(format_duration(2.0), "2s")
        self.assertEqual(format_duration(1.5), "1.5s")

    def test_sub_second(self) -> None:
        self.assertEqual(format_duration(0.25), "250ms")

    def test_minutes_and_hours(self) -> None:
        self.assertEqual(format_duration(300), "5m0s")
        self.assertEqual(format_duration(3720), "1h2m0s")

    def test_zero(self) -> None:
        self.assertEqual(format_duration(0), "0s")


if __name__ == "__main__":
    unittest.main()

import unittest

from gdriveupdate.util.rate import calc_rate


class TestCalcRate(unittest.TestCase):
    def test_zero_bytes_zero_elapsed(self) -> None:
        self.assertEqual(calc_rate(0, 5.0, 5.0), 0)

    def test_zero_elapsed_returns_byte_count(self) -> None:
        self.assertEqual(calc_rate(1000, 5.0, 5.0), 1000)

    def test_sub_second_is_instantaneous(self) -> None:
        self.assertEqual(calc_rate(1000, 0.0, 0.4), 1000)

    def test_bytes_per_second(self) -> None:
        self.assertEqual(calc_rate(1000, 0.0, 2.0), 500)
        self.assertEqual(calc_rate(50_000_000, 100.0, 110.0), 5_000_000)


if __name__ == "__main__":
    unittest.main()

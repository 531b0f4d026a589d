import io
import unittest

from gdriveupdate.stream import ProgressReader


class TestProgressReader(unittest.TestCase):
    def test_reports_cumulative_bytes_after_each_read(self) -> None:
        reports = []
        reader = ProgressReader(io.BytesIO(b"x" * 10), 10, lambda n, t: reports.append((n, t)))

        self.assertEqual(reader.read(4), b"xxxx")
        self.assertEqual(reader.read(4), b"xxxx")
        self.assertEqual(reader.read(4), b"xx")

        self.assertEqual(reports, [(4, 10), (8, 10), (10, 10)])
        self.assertEqual(reader.bytes_read, 10)

    def test_zero_byte_read_is_not_reported(self) -> None:
        reports = []
        reader = ProgressReader(io.BytesIO(b"abc"), 3, lambda n, t: reports.append(n))

        reader.read()
        reader.read()
        reader.read(10)

        self.assertEqual(reports, [3])

    def test_failed_read_is_not_reported(self) -> None:
        class Broken(io.BytesIO):
            def read(self, size=-1):
                raise OSError("disk gone")

        reports = []
        reader = ProgressReader(Broken(), 3, lambda n, t: reports.append(n))
        with self.assertRaises(OSError):
            reader.read(1)
        self.assertEqual(reports, [])

    def test_observer_is_optional(self) -> None:
        reader = ProgressReader(io.BytesIO(b"abc"), 3, None)
        self.assertEqual(reader.read(), b"abc")
        self.assertEqual(reader.bytes_read, 3)

    def test_seek_back_does_not_decrease_progress(self) -> None:
        reports = []
        reader = ProgressReader(io.BytesIO(b"0123456789"), 10, lambda n, t: reports.append(n))

        reader.read(6)
        reader.seek(2)
        reader.read(2)
        reader.read(6)

        self.assertEqual(reports, [6, 6, 10])
        self.assertEqual(reports, sorted(reports))

    def test_seek_and_tell_pass_through(self) -> None:
        reader = ProgressReader(io.BytesIO(b"0123456789"), 10)
        self.assertEqual(reader.seek(0, io.SEEK_END), 10)
        self.assertEqual(reader.tell(), 10)
        reader.seek(3)
        self.assertEqual(reader.read(2), b"34")
        self.assertTrue(reader.seekable())


if __name__ == "__main__":
    unittest.main()

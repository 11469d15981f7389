import unittest
from datetime import datetime, timedelta, timezone

from bucket_index.formatting import SizeFormatOptions, encode_href, format_size, format_uploaded


class FormatSizeTests(unittest.TestCase):
    def test_decimal_units_with_two_places(self):
        self.assertEqual("1.54 KB", format_size(1536))
        self.assertEqual("2.5 MB", format_size(2_500_000))
        self.assertEqual("2 KB", format_size(2000))

    def test_plain_bytes_stay_integral(self):
        self.assertEqual("0 B", format_size(0))
        self.assertEqual("999 B", format_size(999))

    def test_binary_units(self):
        options = SizeFormatOptions(unit_base="binary", decimal_places=1)

        self.assertEqual("1.5 KiB", format_size(1536, options))
        self.assertEqual("1000 B", format_size(1000, options))
        self.assertEqual("1 MiB", format_size(1024 * 1024, options))

    def test_zero_decimal_places(self):
        self.assertEqual("2 KB", format_size(1536, SizeFormatOptions(decimal_places=0)))

    def test_rejects_invalid_options(self):
        with self.assertRaises(ValueError):
            SizeFormatOptions(unit_base="metric")
        with self.assertRaises(ValueError):
            SizeFormatOptions(decimal_places=-1)


class FormatUploadedTests(unittest.TestCase):
    def test_formats_in_utc(self):
        uploaded = datetime(2024, 1, 1, 2, 30, 5, tzinfo=timezone(timedelta(hours=2)))

        self.assertEqual("2024-01-01 00:30:05", format_uploaded(uploaded))


class EncodeHrefTests(unittest.TestCase):
    def test_keeps_slashes_and_encodes_reserved_characters(self):
        self.assertEqual("/docs/my%20file%3F%231.txt", encode_href("docs/my file?#1.txt"))
        self.assertEqual("/caf%C3%A9/", encode_href("café/"))


if __name__ == "__main__":
    unittest.main()

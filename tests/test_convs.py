import unittest

from webutil import parse_ints


class TestParseInts(unittest.TestCase):
    def test_parses_signed_decimals(self):
        assert parse_ints("1", "-2", "+3", "007") == [1, -2, 3, 7]

    def test_no_values(self):
        assert parse_ints() == []

    def test_rejects_non_decimal(self):
        for value in ("", " 4", "4 ", "1_000", "4.0", "0x10", "\u0663", "--1"):
            with self.subTest(value=value):
                with self.assertLogs("webutil.convs", level="ERROR"), self.assertRaises(ValueError):
                    parse_ints("1", value)


if __name__ == "__main__":
    unittest.main()

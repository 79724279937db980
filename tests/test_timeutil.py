import time
import unittest
from datetime import datetime, timedelta, timezone

from webutil import ms_to_time, now_local_ms, now_utc_ms, time_to_ms
from webutil.timeutil import EPOCH


class TestTimeUtil(unittest.TestCase):
    def test_now(self):
        wall = time.time() * 1000
        assert abs(now_local_ms() - wall) < 5000
        assert abs(now_utc_ms() - wall) < 5000

    def test_ms_to_time(self):
        assert ms_to_time("0") == EPOCH
        assert ms_to_time("1700000000123") == datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc)
        assert ms_to_time("-1") == EPOCH - timedelta(milliseconds=1)
        assert ms_to_time(1000).tzinfo is timezone.utc

    def test_ms_to_time_rejects_bad_input(self):
        for value in ("abc", "1.5", "", "99999999999999999999"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    ms_to_time(value)

    def test_time_to_ms(self):
        aware = datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc)
        assert time_to_ms(aware) == 1700000000123
        shifted = aware.astimezone(timezone(timedelta(hours=5)))
        assert time_to_ms(shifted) == 1700000000123

    def test_naive_datetime_is_local(self):
        naive = datetime.fromtimestamp(1700000000.5)
        assert time_to_ms(naive) == 1700000000500

    def test_round_trip(self):
        assert time_to_ms(ms_to_time("1234567890123")) == 1234567890123


if __name__ == "__main__":
    unittest.main()

from datetime import date, time

import pytest
from pytz import timezone

from salah import clock
from salah.errors import ParseError, TimeRangeError


def test_hour_to_time():
    t = clock.hour_to_time(17.4, round_seconds=True)
    assert (t.hour, t.minute, t.second) == (17, 24, 0)


def test_hour_to_time_keeps_seconds():
    assert clock.hour_to_time(10.25 + 40 / 3600) == time(10, 15, 40)
    assert clock.hour_to_time(12.5) == time(12, 30)


def test_hour_to_time_rounds_minutes():
    assert clock.hour_to_time(10.25 + 40 / 3600, round_seconds=True) == time(10, 16)
    assert clock.hour_to_time(10.25 + 20 / 3600, round_seconds=True) == time(10, 15)


def test_hour_to_time_carries_into_hour():
    assert clock.hour_to_time(5.99999, round_seconds=True) == time(6, 0)
    assert clock.hour_to_time(5.99999) == time(6, 0)


def test_hour_to_time_wraps_midnight():
    assert clock.hour_to_time(23.9999, round_seconds=True) == time(0, 0)
    assert clock.hour_to_time(24.0) == time(0, 0)


@pytest.mark.parametrize("hour", [float("nan"), float("inf"), -1.5, 25.0])
def test_hour_to_time_out_of_range(hour):
    with pytest.raises(TimeRangeError):
        clock.hour_to_time(hour)


def test_time_to_hour():
    assert clock.time_to_hour(time(17, 24, 0)) == pytest.approx(17.4)
    assert clock.time_to_hour(time(6, 0, 36)) == pytest.approx(6.01)


def test_time_to_hour_inverts_hour_to_time():
    for hour in (0.0, 5.75, 12.5, 17.4, 23.5):
        t = clock.hour_to_time(hour, round_seconds=True)
        assert clock.time_to_hour(t) == pytest.approx(hour)


def test_timezone_offset_follows_daylight_saving():
    toronto = timezone("America/Toronto")
    assert clock.timezone_offset(toronto, date(2024, 2, 9)) == -5.0
    assert clock.timezone_offset(toronto, date(2024, 7, 1)) == -4.0


def test_timezone_offset_fractional():
    assert clock.timezone_offset(timezone("Asia/Kolkata"), date(2024, 2, 9)) == 5.5


def test_load_timezone():
    assert clock.load_timezone("Europe/Istanbul").zone == "Europe/Istanbul"
    with pytest.raises(ParseError):
        clock.load_timezone("Mars/Olympus_Mons")


def test_date_from_string():
    tz = timezone("America/Toronto")
    assert clock.date_from_string("2024-02-09", tz) == date(2024, 2, 9)
    assert clock.date_from_string(" 2024-2-9 ", tz) == date(2024, 2, 9)


def test_date_from_string_today():
    tz = timezone("Asia/Tokyo")
    assert clock.date_from_string("today", tz) == clock.today(tz)
    assert clock.date_from_string("TODAY", tz) == clock.today(tz)


@pytest.mark.parametrize(
    "value", ["2024-02", "2024-02-09-01", "2024-xx-09", "", "2023-02-29", "2024-13-01"]
)
def test_date_from_string_rejects(value):
    with pytest.raises(ParseError):
        clock.date_from_string(value, timezone("UTC"))

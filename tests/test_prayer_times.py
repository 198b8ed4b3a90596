from datetime import date, datetime

import pytest
import pytz

from prayer_times import (
    NextPrayer,
    build_schedule,
    compute_next_prayer,
    current_minutes,
    display_name,
    format_minutes,
    local_today,
    parse_time,
    resolve_timezone,
)
from user_state import InvalidArgumentError

SCHEDULE = {"fajr": 330, "dhuhr": 780, "asr": 990, "maghrib": 1155, "isha": 1260}


def test_exactly_at_isha_wraps_to_tomorrow_fajr():
    result = compute_next_prayer(SCHEDULE, 1260)
    assert result == NextPrayer("fajr", 1770, 510)
    assert result.is_tomorrow
    assert result.prayer_time_text() == "05:30"
    assert result.countdown_text() == "08:30"


def test_one_minute_before_isha():
    result = compute_next_prayer(SCHEDULE, 1259)
    assert result.prayer == "isha"
    assert result.prayer_time_minutes == 1260
    assert result.countdown_minutes == 1
    assert not result.is_tomorrow


def test_last_minute_of_day_wraps():
    result = compute_next_prayer(SCHEDULE, 1439)
    assert result.prayer == "fajr"
    assert result.prayer_time_minutes == 1770
    assert result.countdown_minutes == 331


def test_midnight_selects_fajr_today():
    result = compute_next_prayer(SCHEDULE, 0)
    assert result == NextPrayer("fajr", 330, 330)


def test_prayer_time_equal_to_now_counts_as_past():
    assert compute_next_prayer(SCHEDULE, 780).prayer == "asr"
    assert compute_next_prayer(SCHEDULE, 779).prayer == "dhuhr"


def test_countdown_is_consistent_over_whole_day():
    for now in range(0, 1440):
        result = compute_next_prayer(SCHEDULE, now)
        assert result.countdown_minutes >= 0
        assert result.prayer_time_minutes - result.countdown_minutes == now


@pytest.mark.parametrize("now", [-1, 1440])
def test_out_of_range_now_is_rejected(now):
    with pytest.raises(InvalidArgumentError):
        compute_next_prayer(SCHEDULE, now)


def test_format_minutes_wraps_hours():
    assert format_minutes(0) == "00:00"
    assert format_minutes(65) == "01:05"
    assert format_minutes(1770) == "05:30"


def test_parse_time_ignores_annotations():
    assert parse_time("05:10") == 310
    assert parse_time("19:30 (EET)") == 1170


@pytest.mark.parametrize("text", ["", "5:10", "24:00", "12:60", "noon"])
def test_parse_time_rejects_invalid_values(text):
    with pytest.raises(InvalidArgumentError):
        parse_time(text)


def test_build_schedule_accepts_strings_and_minutes():
    schedule = build_schedule({"fajr": "05:30", "dhuhr": 780, "asr": "16:30", "maghrib": "19:15", "isha": "21:00"})
    assert schedule == {"fajr": 330, "dhuhr": 780, "asr": 990, "maghrib": 1155, "isha": 1260}


def test_build_schedule_requires_all_five_prayers():
    with pytest.raises(InvalidArgumentError):
        build_schedule({"fajr": "05:30", "dhuhr": "13:00"})
    with pytest.raises(InvalidArgumentError):
        build_schedule(dict(SCHEDULE, sunrise=400))


def test_display_name():
    assert display_name("maghrib") == "Maghrib"
    with pytest.raises(InvalidArgumentError):
        display_name("tahajjud")


def test_current_minutes_uses_requested_timezone():
    moment = pytz.UTC.localize(datetime(2024, 2, 25, 20, 15))
    assert current_minutes("Europe/Moscow", now=moment) == 23 * 60 + 15
    assert current_minutes("UTC", now=moment) == 20 * 60 + 15


def test_current_minutes_localizes_naive_datetimes():
    assert current_minutes("Asia/Tokyo", now=datetime(2024, 2, 25, 4, 45)) == 4 * 60 + 45


def test_unknown_timezone_falls_back_to_utc():
    assert resolve_timezone("Mars/Olympus") == "UTC"
    assert resolve_timezone("Europe/Moscow") == "Europe/Moscow"


def test_local_today_follows_configured_timezone():
    moment = pytz.UTC.localize(datetime(2024, 2, 25, 15, 5))
    assert local_today("Asia/Tokyo", now=moment) == date(2024, 2, 26)
    assert local_today("UTC", now=moment) == date(2024, 2, 25)

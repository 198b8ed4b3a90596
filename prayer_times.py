"""Daily prayer schedule helpers and the next-prayer countdown computation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Mapping, Optional, Union

import pytz
from tzlocal import get_localzone_name

from user_state import PRAYER_ORDER, InvalidArgumentError

LOGGER = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

PRAYER_DISPLAY_NAMES = {
    "fajr": "Fajr",
    "dhuhr": "Dhuhr",
    "asr": "Asr",
    "maghrib": "Maghrib",
    "isha": "Isha",
}

PrayerSchedule = Dict[str, int]


@dataclass(frozen=True)
class NextPrayer:
    prayer: str
    prayer_time_minutes: int
    countdown_minutes: int

    @property
    def display_name(self) -> str:
        return display_name(self.prayer)

    @property
    def is_tomorrow(self) -> bool:
        return self.prayer_time_minutes >= MINUTES_PER_DAY

    def prayer_time_text(self) -> str:
        return format_minutes(self.prayer_time_minutes)

    def countdown_text(self) -> str:
        return format_minutes(self.countdown_minutes)


def display_name(prayer: str) -> str:
    try:
        return PRAYER_DISPLAY_NAMES[prayer]
    except KeyError:
        raise InvalidArgumentError(f"Unknown prayer name: {prayer!r}") from None


def parse_time(time_str: str) -> int:
    """Convert an ``HH:MM`` string into minutes since midnight.

    Trailing annotations such as ``"05:10 (EET)"`` are ignored.
    """
    clean = "".join(ch for ch in str(time_str) if ch.isdigit() or ch == ":")[:5]
    if len(clean) != 5 or clean[2] != ":":
        raise InvalidArgumentError(f"Invalid prayer time {time_str!r}")
    hour, minute = map(int, clean.split(":"))
    if hour > 23 or minute > 59:
        raise InvalidArgumentError(f"Invalid prayer time {time_str!r}")
    return hour * 60 + minute


def build_schedule(timings: Mapping[str, Union[str, int]]) -> PrayerSchedule:
    """Build a schedule from ``HH:MM`` strings or minute counts for all five prayers."""
    missing = [name for name in PRAYER_ORDER if name not in timings]
    unknown = [name for name in timings if name not in PRAYER_ORDER]
    if missing or unknown:
        raise InvalidArgumentError(f"Schedule must name the five daily prayers (missing={missing} unknown={unknown})")

    schedule: PrayerSchedule = {}
    for name in PRAYER_ORDER:
        value = timings[name]
        if isinstance(value, int) and not isinstance(value, bool):
            _check_minutes(value)
            schedule[name] = value
        else:
            schedule[name] = parse_time(str(value))
    LOGGER.debug("Built prayer schedule %s", {name: format_minutes(minutes) for name, minutes in schedule.items()})
    return schedule


def compute_next_prayer(schedule: Mapping[str, int], now_minutes: int) -> NextPrayer:
    """Return the first prayer strictly after *now_minutes*, wrapping to tomorrow's Fajr."""
    _check_minutes(now_minutes)
    for name in PRAYER_ORDER:
        prayer_time = schedule[name]
        if prayer_time > now_minutes:
            return NextPrayer(name, prayer_time, prayer_time - now_minutes)

    prayer_time = schedule["fajr"] + MINUTES_PER_DAY
    LOGGER.debug("No prayer left today at %s; wrapping to tomorrow's fajr", format_minutes(now_minutes))
    return NextPrayer("fajr", prayer_time, prayer_time - now_minutes)


def format_minutes(minutes: int) -> str:
    hours = (minutes // 60) % 24
    return f"{hours:02d}:{minutes % 60:02d}"


def minutes_since_midnight(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def resolve_timezone(timezone_name: Optional[str] = None) -> str:
    """Validate *timezone_name*, defaulting to the system zone and then UTC."""
    if not timezone_name:
        try:
            timezone_name = get_localzone_name()
        except Exception:  # pragma: no cover - platform dependent
            LOGGER.warning("Unable to detect the system timezone; defaulting to UTC")
            timezone_name = "UTC"
    try:
        pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        LOGGER.warning("Unknown timezone '%s'; falling back to UTC", timezone_name)
        timezone_name = "UTC"
    return timezone_name


def current_minutes(timezone_name: Optional[str] = None, now: Optional[datetime] = None) -> int:
    """Minutes since local midnight in the given zone, for feeding compute_next_prayer."""
    return minutes_since_midnight(_local_now(timezone_name, now))


def local_today(timezone_name: Optional[str] = None, now: Optional[datetime] = None) -> date:
    """Calendar date in the given zone, matching the clock used for the countdown."""
    return _local_now(timezone_name, now).date()


def _local_now(timezone_name: Optional[str], now: Optional[datetime]) -> datetime:
    tzinfo = pytz.timezone(resolve_timezone(timezone_name))
    if now is None:
        return datetime.now(tzinfo)
    if now.tzinfo is None:
        return tzinfo.localize(now)
    return now.astimezone(tzinfo)


def _check_minutes(minutes: int) -> None:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidArgumentError(f"Minutes since midnight out of range: {minutes}")

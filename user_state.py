"""Persisted user document: settings, daily progress, bookmarks and statistics."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

LOGGER = logging.getLogger(__name__)

PRAYER_ORDER = ["fajr", "dhuhr", "asr", "maghrib", "isha"]
THEMES = ("auto", "light", "dark")


class MalformedStateError(ValueError):
    """Raised when a persisted document cannot be parsed into a UserState."""


class InvalidArgumentError(ValueError):
    """Raised when an engine operation receives input outside its domain."""


def validate_prayer(prayer: str) -> str:
    if prayer not in PRAYER_ORDER:
        raise InvalidArgumentError(f"Unknown prayer name: {prayer!r}")
    return prayer


def require_int(value: object, name: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass
class Location:
    city: str = "Москва"
    country: str = "Россия"
    latitude: Optional[float] = 55.7558
    longitude: Optional[float] = 37.6173


@dataclass
class NotificationSettings:
    prayer: bool = True
    daily_ayah: bool = True


@dataclass
class Settings:
    theme: str = "auto"
    location: Location = field(default_factory=Location)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)


@dataclass
class Progress:
    streak: int = 0
    prayers: Dict[str, bool] = field(default_factory=lambda: {name: False for name in PRAYER_ORDER})
    quran_pages: int = 0
    dhikr_count: int = 0
    last_activity: date = field(default_factory=date.today)

    def completed_prayers(self) -> int:
        return sum(1 for name in PRAYER_ORDER if self.prayers.get(name))

    def has_activity(self) -> bool:
        return self.completed_prayers() > 0 or self.quran_pages > 0 or self.dhikr_count > 0


@dataclass
class Bookmark:
    id: str
    surah: int
    ayah: int
    arabic: str = ""
    translation: str = ""
    reference: str = ""


@dataclass
class Statistics:
    total_prayers: int = 0
    total_pages: int = 0
    total_dhikr: int = 0
    longest_streak: int = 0


@dataclass
class UserState:
    settings: Settings = field(default_factory=Settings)
    progress: Progress = field(default_factory=Progress)
    bookmarks: List[Bookmark] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)

    @classmethod
    def default(cls, today: Optional[date] = None) -> "UserState":
        """Return the first-run document: zero counters and no completed prayers."""
        state = cls()
        if today is not None:
            state.progress.last_activity = today
        return state

    def to_dict(self) -> Dict[str, Any]:
        settings = self.settings
        progress = self.progress
        stats = self.statistics
        return {
            "settings": {
                "theme": settings.theme,
                "location": {
                    "city": settings.location.city,
                    "country": settings.location.country,
                    "latitude": settings.location.latitude,
                    "longitude": settings.location.longitude,
                },
                "notifications": {
                    "prayer": settings.notifications.prayer,
                    "dailyAyah": settings.notifications.daily_ayah,
                },
            },
            "progress": {
                "streak": progress.streak,
                "prayers": {name: bool(progress.prayers.get(name, False)) for name in PRAYER_ORDER},
                "quranPages": progress.quran_pages,
                "dhikrCount": progress.dhikr_count,
                "lastActivity": progress.last_activity.isoformat(),
            },
            "bookmarks": [
                {
                    "id": bookmark.id,
                    "surah": bookmark.surah,
                    "ayah": bookmark.ayah,
                    "arabic": bookmark.arabic,
                    "translation": bookmark.translation,
                    "reference": bookmark.reference,
                }
                for bookmark in self.bookmarks
            ],
            "statistics": {
                "totalPrayers": stats.total_prayers,
                "totalPages": stats.total_pages,
                "totalDhikr": stats.total_dhikr,
                "longestStreak": stats.longest_streak,
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> "UserState":
        """Validate a decoded JSON document and build a UserState from it.

        Raises MalformedStateError when a section is missing, a counter is not
        a non-negative integer, or the prayer map does not hold exactly the
        five canonical names.
        """
        if not isinstance(data, dict):
            raise MalformedStateError("Document root must be an object")
        try:
            settings_raw = _section(data, "settings")
            progress_raw = _section(data, "progress")
            stats_raw = _section(data, "statistics")
            bookmarks_raw = data["bookmarks"]
        except KeyError as exc:
            raise MalformedStateError(f"Missing section {exc}") from exc
        if not isinstance(bookmarks_raw, list):
            raise MalformedStateError("'bookmarks' must be a list")

        theme = settings_raw.get("theme", "auto")
        if theme not in THEMES:
            raise MalformedStateError(f"Unknown theme {theme!r}")
        location_raw = settings_raw.get("location") or {}
        notifications_raw = settings_raw.get("notifications") or {}
        if not isinstance(location_raw, dict) or not isinstance(notifications_raw, dict):
            raise MalformedStateError("Invalid settings section")
        settings = Settings(
            theme=theme,
            location=Location(
                city=str(location_raw.get("city", "")),
                country=str(location_raw.get("country", "")),
                latitude=_optional_float(location_raw.get("latitude")),
                longitude=_optional_float(location_raw.get("longitude")),
            ),
            notifications=NotificationSettings(
                prayer=bool(notifications_raw.get("prayer", True)),
                daily_ayah=bool(notifications_raw.get("dailyAyah", True)),
            ),
        )

        prayers_raw = progress_raw.get("prayers")
        if not isinstance(prayers_raw, dict) or set(prayers_raw) != set(PRAYER_ORDER):
            raise MalformedStateError("Prayer map must contain exactly the five daily prayers")
        if not all(isinstance(value, bool) for value in prayers_raw.values()):
            raise MalformedStateError("Prayer flags must be booleans")
        try:
            last_activity = date.fromisoformat(str(progress_raw["lastActivity"]))
        except (KeyError, ValueError) as exc:
            raise MalformedStateError("Invalid lastActivity date") from exc
        progress = Progress(
            streak=_counter(progress_raw, "streak"),
            prayers={name: prayers_raw[name] for name in PRAYER_ORDER},
            quran_pages=_counter(progress_raw, "quranPages"),
            dhikr_count=_counter(progress_raw, "dhikrCount"),
            last_activity=last_activity,
        )

        statistics = Statistics(
            total_prayers=_counter(stats_raw, "totalPrayers"),
            total_pages=_counter(stats_raw, "totalPages"),
            total_dhikr=_counter(stats_raw, "totalDhikr", allow_negative=True),
            longest_streak=_counter(stats_raw, "longestStreak"),
        )

        bookmarks: List[Bookmark] = []
        seen: set = set()
        for entry in bookmarks_raw:
            bookmark = _bookmark_from_dict(entry)
            if bookmark.id in seen:
                raise MalformedStateError(f"Duplicate bookmark {bookmark.id}")
            seen.add(bookmark.id)
            bookmarks.append(bookmark)

        return cls(settings=settings, progress=progress, bookmarks=bookmarks, statistics=statistics)


def bookmark_id(surah: int, ayah: int) -> str:
    return f"{surah}-{ayah}"


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data[key]
    if not isinstance(value, dict):
        raise MalformedStateError(f"'{key}' must be an object")
    return value


def _counter(section: Dict[str, Any], key: str, allow_negative: bool = False) -> int:
    value = section.get(key, 0)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedStateError(f"'{key}' must be an integer")
    if value < 0 and not allow_negative:
        raise MalformedStateError(f"'{key}' must not be negative")
    return value


def _optional_float(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedStateError(f"Invalid coordinate {value!r}") from exc


def _bookmark_from_dict(entry: Any) -> Bookmark:
    if not isinstance(entry, dict):
        raise MalformedStateError("Bookmark entries must be objects")
    surah = entry.get("surah")
    ayah = entry.get("ayah")
    if isinstance(surah, bool) or isinstance(ayah, bool) or not isinstance(surah, int) or not isinstance(ayah, int):
        raise MalformedStateError("Bookmark surah/ayah must be integers")
    if surah < 1 or ayah < 1:
        raise MalformedStateError("Bookmark surah/ayah must be positive")
    expected_id = bookmark_id(surah, ayah)
    if entry.get("id", expected_id) != expected_id:
        raise MalformedStateError(f"Bookmark id {entry.get('id')!r} does not match {expected_id}")
    return Bookmark(
        id=expected_id,
        surah=surah,
        ayah=ayah,
        arabic=str(entry.get("arabic", "")),
        translation=str(entry.get("translation", "")),
        reference=str(entry.get("reference", f"{surah}:{ayah}")),
    )

"""Daily progress tracking: prayer flags, Quran pages, dhikr and streaks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from notifications import DayRolledOver, DhikrUpdated, NotificationChannel, PagesAdded, PrayerMarked
from prayer_times import display_name
from state_store import StateStore
from user_state import PRAYER_ORDER, UserState, require_int, validate_prayer

LOGGER = logging.getLogger(__name__)

DAILY_PAGE_GOAL = 10
DAILY_DHIKR_GOAL = 100


@dataclass(frozen=True)
class ProgressSnapshot:
    completed_prayer_count: int
    total_prayer_slots: int
    pages_ratio: float
    dhikr_ratio: float
    streak: int


class ProgressTracker:
    """Mutate the progress section of a UserState, persisting after every change."""

    def __init__(self, state: UserState, store: StateStore, channel: NotificationChannel) -> None:
        self.state = state
        self.store = store
        self.channel = channel

    def set_prayer_status(self, prayer: str, completed: bool) -> None:
        validate_prayer(prayer)
        prayers = self.state.progress.prayers
        newly_completed = completed and not prayers.get(prayer, False)
        prayers[prayer] = bool(completed)
        if newly_completed:
            self.state.statistics.total_prayers += 1
        LOGGER.info("Prayer %s marked %s", prayer, "completed" if completed else "not completed")
        self.store.save(self.state)
        if newly_completed:
            self.channel.emit(PrayerMarked(prayer, display_name(prayer)))

    def add_quran_pages(self, pages: int) -> None:
        require_int(pages, "pages")
        if pages <= 0:
            LOGGER.debug("Ignoring non-positive page count %s", pages)
            return
        self.state.progress.quran_pages += pages
        self.state.statistics.total_pages += pages
        LOGGER.info("Added %d Quran pages (today=%d)", pages, self.state.progress.quran_pages)
        self.store.save(self.state)
        self.channel.emit(PagesAdded(pages))

    def add_dhikr(self, delta: int) -> None:
        require_int(delta, "delta")
        progress = self.state.progress
        progress.dhikr_count = max(0, progress.dhikr_count + delta)
        self.state.statistics.total_dhikr += delta
        LOGGER.debug("Dhikr delta %d -> count %d", delta, progress.dhikr_count)
        self.store.save(self.state)
        self.channel.emit(DhikrUpdated(delta, progress.dhikr_count))

    def compute_progress_snapshot(self) -> ProgressSnapshot:
        progress = self.state.progress
        return ProgressSnapshot(
            completed_prayer_count=progress.completed_prayers(),
            total_prayer_slots=len(PRAYER_ORDER),
            pages_ratio=progress.quran_pages / DAILY_PAGE_GOAL,
            dhikr_ratio=progress.dhikr_count / DAILY_DHIKR_GOAL,
            streak=progress.streak,
        )

    def roll_over_day(self, today: date) -> bool:
        """Close the day recorded in ``last_activity`` and start *today*.

        A closed day with any activity extends the streak; an idle day, or a
        gap of more than one day, resets it to zero. Daily flags and counters
        are cleared while lifetime statistics are left untouched. Returns
        False when *today* is not after the last recorded day.
        """
        progress = self.state.progress
        if today == progress.last_activity:
            return False
        if today < progress.last_activity:
            LOGGER.warning("Refusing to roll back from %s to %s", progress.last_activity, today)
            return False

        progress.streak = progress.streak + 1 if progress.has_activity() else 0
        stats = self.state.statistics
        stats.longest_streak = max(stats.longest_streak, progress.streak)
        if (today - progress.last_activity).days > 1:
            progress.streak = 0

        progress.prayers = {name: False for name in PRAYER_ORDER}
        progress.quran_pages = 0
        progress.dhikr_count = 0
        progress.last_activity = today
        LOGGER.info("Rolled over to %s (streak=%d longest=%d)", today, progress.streak, stats.longest_streak)
        self.store.save(self.state)
        self.channel.emit(DayRolledOver(today, progress.streak))
        return True

from datetime import date, timedelta

import pytest

from notifications import DayRolledOver, DhikrUpdated, PagesAdded, PrayerMarked
from progress import ProgressTracker
from user_state import InvalidArgumentError


@pytest.fixture
def tracker(state, store, channel):
    return ProgressTracker(state, store, channel)


def test_marking_prayer_twice_counts_once(tracker, store, events):
    tracker.set_prayer_status("fajr", True)
    tracker.set_prayer_status("fajr", True)

    assert tracker.state.progress.prayers["fajr"] is True
    assert tracker.state.statistics.total_prayers == 1
    assert events == [PrayerMarked("fajr", "Fajr")]
    assert events[0].message == "Fajr prayer marked as completed!"
    assert store.load().statistics.total_prayers == 1


def test_unmarking_prayer_keeps_lifetime_total(tracker, events):
    tracker.set_prayer_status("asr", True)
    tracker.set_prayer_status("asr", False)
    tracker.set_prayer_status("asr", True)

    assert tracker.state.progress.prayers["asr"] is True
    assert tracker.state.statistics.total_prayers == 2
    assert len(events) == 2


def test_unknown_prayer_is_rejected(tracker, store):
    with pytest.raises(InvalidArgumentError):
        tracker.set_prayer_status("tahajjud", True)
    assert store.load() is None


def test_add_quran_pages_updates_progress_and_totals(tracker, store, events):
    tracker.add_quran_pages(3)
    tracker.add_quran_pages(4)

    assert tracker.state.progress.quran_pages == 7
    assert tracker.state.statistics.total_pages == 7
    assert events == [PagesAdded(3), PagesAdded(4)]
    assert store.load().progress.quran_pages == 7


@pytest.mark.parametrize("pages", [0, -3])
def test_non_positive_pages_are_ignored(tracker, store, events, pages):
    before = tracker.state.to_dict()
    tracker.add_quran_pages(pages)

    assert tracker.state.to_dict() == before
    assert events == []
    assert not store.exists()


def test_dhikr_is_clamped_but_total_is_not(tracker, events):
    tracker.add_dhikr(20)
    tracker.add_dhikr(-50)

    assert tracker.state.progress.dhikr_count == 0
    assert tracker.state.statistics.total_dhikr == -30
    assert events[-1] == DhikrUpdated(-50, 0)


def test_snapshot_reports_unclamped_ratios(tracker):
    tracker.set_prayer_status("fajr", True)
    tracker.set_prayer_status("dhuhr", True)
    tracker.add_quran_pages(15)
    tracker.add_dhikr(33)
    before = tracker.state.to_dict()

    snapshot = tracker.compute_progress_snapshot()

    assert snapshot.completed_prayer_count == 2
    assert snapshot.total_prayer_slots == 5
    assert snapshot.pages_ratio == 1.5
    assert snapshot.dhikr_ratio == pytest.approx(0.33)
    assert snapshot.streak == 0
    assert tracker.state.to_dict() == before


def test_rollover_extends_streak_after_active_day(tracker, events):
    today = tracker.state.progress.last_activity
    tracker.set_prayer_status("fajr", True)
    tracker.add_quran_pages(2)

    assert tracker.roll_over_day(today + timedelta(days=1)) is True

    progress = tracker.state.progress
    assert progress.streak == 1
    assert progress.prayers["fajr"] is False
    assert progress.quran_pages == 0
    assert progress.last_activity == today + timedelta(days=1)
    assert tracker.state.statistics.longest_streak == 1
    assert tracker.state.statistics.total_pages == 2
    assert events[-1] == DayRolledOver(today + timedelta(days=1), 1)


def test_rollover_after_idle_day_resets_streak(tracker):
    tracker.state.progress.streak = 4
    tracker.state.statistics.longest_streak = 4

    tracker.roll_over_day(tracker.state.progress.last_activity + timedelta(days=1))

    assert tracker.state.progress.streak == 0
    assert tracker.state.statistics.longest_streak == 4


def test_rollover_after_gap_resets_streak_but_records_longest(tracker):
    tracker.state.progress.streak = 4
    tracker.add_dhikr(10)

    tracker.roll_over_day(tracker.state.progress.last_activity + timedelta(days=3))

    assert tracker.state.progress.streak == 0
    assert tracker.state.statistics.longest_streak == 5


def test_rollover_same_or_earlier_day_is_noop(tracker, store, events):
    today = tracker.state.progress.last_activity
    assert tracker.roll_over_day(today) is False
    assert tracker.roll_over_day(today - timedelta(days=1)) is False
    assert tracker.state.progress.last_activity == today
    assert events == []
    assert not store.exists()


def test_rollover_persists(tracker, store):
    tracker.roll_over_day(date(2024, 3, 1))
    assert store.load().progress.last_activity == date(2024, 3, 1)


@pytest.mark.parametrize("delta", [0.5, True, "3"])
def test_non_integer_dhikr_is_rejected(tracker, store, events, delta):
    with pytest.raises(InvalidArgumentError):
        tracker.add_dhikr(delta)
    assert tracker.state.progress.dhikr_count == 0
    assert tracker.state.statistics.total_dhikr == 0
    assert events == []
    assert not store.exists()


@pytest.mark.parametrize("pages", [2.5, True, None])
def test_non_integer_pages_are_rejected(tracker, store, pages):
    with pytest.raises(InvalidArgumentError):
        tracker.add_quran_pages(pages)
    assert tracker.state.progress.quran_pages == 0
    assert not store.exists()

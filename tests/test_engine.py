import json
from datetime import date

import pytest

from bookmarks import make_bookmark
from engine import QuranConnectEngine
from notifications import PrayerMarked
from prayer_times import NextPrayer
from user_state import Bookmark, InvalidArgumentError

SCHEDULE = {"fajr": 330, "dhuhr": 780, "asr": 990, "maghrib": 1155, "isha": 1260}


def test_open_initializes_and_saves_first_run_document(store, channel):
    engine = QuranConnectEngine.open(store, channel, today=date(2024, 2, 25))

    assert store.exists()
    assert engine.state.progress.last_activity == date(2024, 2, 25)
    assert store.load() == engine.state


def test_open_reuses_existing_document(store, channel):
    first = QuranConnectEngine.open(store, channel, today=date(2024, 2, 25))
    first.progress.add_quran_pages(5)

    second = QuranConnectEngine.open(store, channel)
    assert second.state.progress.quran_pages == 5


def test_open_recovers_from_malformed_document(store, channel):
    store.path.write_text(json.dumps({"settings": "broken"}), encoding="utf-8")

    engine = QuranConnectEngine.open(store, channel, today=date(2024, 2, 25))

    assert engine.state.statistics.total_prayers == 0
    assert store.load() == engine.state


def test_components_share_one_state(store, channel, events):
    engine = QuranConnectEngine.open(store, channel, today=date(2024, 2, 25))

    engine.progress.set_prayer_status("isha", True)
    engine.preferences.set_theme("light")

    stored = store.load()
    assert stored.progress.prayers["isha"] is True
    assert stored.settings.theme == "light"
    assert events[0] == PrayerMarked("isha", "Isha")


def test_next_prayer_and_new_day(store, channel):
    engine = QuranConnectEngine.open(store, channel, today=date(2024, 2, 25))

    assert engine.next_prayer(SCHEDULE, 1259) == NextPrayer("isha", 1260, 1)
    engine.progress.add_dhikr(5)
    assert engine.start_new_day(date(2024, 2, 26)) is True
    assert engine.state.progress.streak == 1


def test_rejected_input_does_not_corrupt_saved_document(store, channel):
    engine = QuranConnectEngine.open(store, channel, today=date(2024, 2, 25))
    engine.progress.add_quran_pages(40)
    engine.progress.set_prayer_status("fajr", True)
    engine.bookmarks.toggle_bookmark(make_bookmark(2, 255))

    with pytest.raises(InvalidArgumentError):
        engine.progress.add_dhikr(0.5)
    with pytest.raises(InvalidArgumentError):
        engine.bookmarks.toggle_bookmark(Bookmark(id="x", surah=0, ayah=0))

    reopened = QuranConnectEngine.open(store, channel)
    assert reopened.state.statistics.total_pages == 40
    assert reopened.state.progress.prayers["fajr"] is True
    assert [b.id for b in reopened.state.bookmarks] == ["2-255"]

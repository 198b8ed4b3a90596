"""Wire the engine components around one explicitly owned UserState."""
from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from bookmarks import BookmarkManager
from notifications import NotificationChannel
from prayer_times import NextPrayer, compute_next_prayer
from preferences import Preferences
from progress import ProgressTracker
from state_store import StateStore
from user_state import UserState

LOGGER = logging.getLogger(__name__)


class QuranConnectEngine:
    """Own the user document and expose the tracker, bookmark and settings operations."""

    def __init__(self, state: UserState, store: StateStore, channel: Optional[NotificationChannel] = None) -> None:
        self.state = state
        self.store = store
        self.channel = channel or NotificationChannel()
        self.progress = ProgressTracker(state, store, self.channel)
        self.bookmarks = BookmarkManager(state, store, self.channel)
        self.preferences = Preferences(state, store, self.channel)

    @classmethod
    def open(
        cls,
        store: StateStore,
        channel: Optional[NotificationChannel] = None,
        today: Optional[date] = None,
    ) -> "QuranConnectEngine":
        """Load the stored document, creating and saving the first-run one when absent."""
        state = store.load()
        if state is None:
            LOGGER.info("Initialising a new user document at %s", store.path)
            state = UserState.default(today)
            store.save(state)
        return cls(state, store, channel)

    def next_prayer(self, schedule: Mapping[str, int], now_minutes: int) -> NextPrayer:
        return compute_next_prayer(schedule, now_minutes)

    def start_new_day(self, today: Optional[date] = None) -> bool:
        return self.progress.roll_over_day(today or date.today())

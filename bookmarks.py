"""Bookmarked verses kept in display order inside the user document."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from notifications import BookmarkAdded, BookmarkRemoved, NotificationChannel
from providers import validate_ayah
from state_store import StateStore
from user_state import Bookmark, UserState, bookmark_id

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    added: bool


def make_bookmark(surah: int, ayah: int, arabic: str = "", translation: str = "") -> Bookmark:
    """Build a bookmark candidate for an existing ayah, deriving its id and reference."""
    validate_ayah(surah, ayah)
    return Bookmark(
        id=bookmark_id(surah, ayah),
        surah=surah,
        ayah=ayah,
        arabic=arabic,
        translation=translation,
        reference=f"{surah}:{ayah}",
    )


class BookmarkManager:
    """Toggle and remove verse bookmarks, persisting after every change."""

    def __init__(self, state: UserState, store: StateStore, channel: NotificationChannel) -> None:
        self.state = state
        self.store = store
        self.channel = channel

    def bookmarks(self) -> List[Bookmark]:
        return list(self.state.bookmarks)

    def is_bookmarked(self, surah: int, ayah: int) -> bool:
        return self._index_of(bookmark_id(surah, ayah)) is not None

    def toggle_bookmark(self, candidate: Bookmark) -> ToggleResult:
        """Remove the bookmark for the candidate's ayah if present, otherwise append it."""
        validate_ayah(candidate.surah, candidate.ayah)
        key = bookmark_id(candidate.surah, candidate.ayah)
        index = self._index_of(key)
        if index is not None:
            del self.state.bookmarks[index]
            LOGGER.info("Removed bookmark %s", key)
            self.store.save(self.state)
            self.channel.emit(BookmarkRemoved(key))
            return ToggleResult(added=False)

        entry = replace(candidate, id=key)
        self.state.bookmarks.append(entry)
        LOGGER.info("Added bookmark %s", key)
        self.store.save(self.state)
        self.channel.emit(BookmarkAdded(key, entry.reference))
        return ToggleResult(added=True)

    def remove_bookmark(self, entry_id: str) -> None:
        index = self._index_of(entry_id)
        if index is None:
            LOGGER.debug("Bookmark %s not present; nothing to remove", entry_id)
            return
        del self.state.bookmarks[index]
        LOGGER.info("Removed bookmark %s", entry_id)
        self.store.save(self.state)
        self.channel.emit(BookmarkRemoved(entry_id))

    def _index_of(self, key: str) -> Optional[int]:
        for index, bookmark in enumerate(self.state.bookmarks):
            if bookmark.id == key:
                return index
        return None

"""Semantic events emitted by the engine and the channel that delivers them."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

try:  # Prefer PyQt5, fall back to Qt for Python if available
    from PyQt5 import QtCore  # type: ignore
except Exception:  # pragma: no cover - fallback only used when PyQt5 missing
    try:
        from PySide2 import QtCore  # type: ignore
    except Exception:
        from PySide6 import QtCore  # type: ignore

try:  # Compatibility alias for Qt signals
    Signal = QtCore.pyqtSignal  # type: ignore[attr-defined]
except AttributeError:  # pragma: no cover - PySide compatibility
    Signal = QtCore.Signal  # type: ignore[attr-defined]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrayerMarked:
    prayer: str
    display_name: str

    @property
    def message(self) -> str:
        return f"{self.display_name} prayer marked as completed!"


@dataclass(frozen=True)
class PagesAdded:
    pages: int

    @property
    def message(self) -> str:
        return f"Added {self.pages} Quran pages"


@dataclass(frozen=True)
class DhikrUpdated:
    delta: int
    dhikr_count: int

    @property
    def message(self) -> str:
        return f"Dhikr count: {self.dhikr_count}"


@dataclass(frozen=True)
class BookmarkAdded:
    bookmark_id: str
    reference: str

    @property
    def message(self) -> str:
        return "Ayah added to bookmarks"


@dataclass(frozen=True)
class BookmarkRemoved:
    bookmark_id: str

    @property
    def message(self) -> str:
        return "Bookmark removed"


@dataclass(frozen=True)
class ThemeChanged:
    theme: str

    @property
    def message(self) -> str:
        return f"Theme set to {self.theme}"


@dataclass(frozen=True)
class LocationChanged:
    city: str
    country: str

    @property
    def message(self) -> str:
        return f"Current location: {self.city}, {self.country}"


@dataclass(frozen=True)
class NotificationsChanged:
    prayer: bool
    daily_ayah: bool

    @property
    def message(self) -> str:
        return "Notification settings updated"


@dataclass(frozen=True)
class DayRolledOver:
    today: date
    streak: int

    @property
    def message(self) -> str:
        return f"New day started, streak: {self.streak}"


class NotificationChannel(QtCore.QObject):
    """Deliver engine events to whichever presentation layer subscribes."""

    event_emitted = Signal(object)

    def __init__(self, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)

    def subscribe(self, callback: Callable[[object], None]) -> None:
        self.event_emitted.connect(callback)  # type: ignore[attr-defined]

    def emit(self, event: object) -> None:
        LOGGER.debug("Emitting %s: %s", type(event).__name__, getattr(event, "message", ""))
        self.event_emitted.emit(event)  # type: ignore[attr-defined]

"""Entry point for the QuranConnect tracking engine."""
from __future__ import annotations

import logging
import sys
from typing import Optional

try:  # Prefer PyQt5, fall back to Qt for Python if available
    from PyQt5 import QtCore  # type: ignore
except Exception:  # pragma: no cover - fallback only used when PyQt5 missing
    try:
        from PySide2 import QtCore  # type: ignore
    except Exception:
        from PySide6 import QtCore  # type: ignore

try:  # Compatibility alias for Qt signal and slot decorators
    Signal = QtCore.pyqtSignal  # type: ignore[attr-defined]
    Slot = QtCore.pyqtSlot  # type: ignore[attr-defined]
except AttributeError:  # pragma: no cover - PySide compatibility
    Signal = QtCore.Signal  # type: ignore[attr-defined]
    Slot = QtCore.Slot  # type: ignore[attr-defined]

from config import (
    countdown_interval_from_config,
    load_config,
    schedule_from_config,
    state_path_from_config,
    timezone_from_config,
)
from engine import QuranConnectEngine
from notifications import NotificationChannel
from prayer_times import NextPrayer, local_today
from scheduler import CountdownScheduler
from state_store import StateStore

logging.basicConfig(level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
LOGGER = logging.getLogger(__name__)


class QuranConnectApp(QtCore.QCoreApplication):
    """Run the engine headless: countdown refreshes and the daily rollover."""

    # emitted from scheduler threads; delivered on the application thread
    countdown_ready = Signal(object)
    rollover_requested = Signal()

    def __init__(self, argv: list[str]) -> None:
        super().__init__(argv)
        self.setApplicationName("QuranConnect")

        self._config = load_config()
        self.schedule = schedule_from_config(self._config)
        self.channel = NotificationChannel(self)
        self.channel.subscribe(self._on_engine_event)
        self.engine = QuranConnectEngine.open(StateStore(state_path_from_config(self._config)), self.channel)
        self.last_countdown: Optional[NextPrayer] = None

        self.countdown_ready.connect(self._on_countdown)  # type: ignore[attr-defined]
        self.rollover_requested.connect(self._on_rollover)  # type: ignore[attr-defined]

        self.scheduler = CountdownScheduler(self.schedule, timezone_from_config(self._config))
        self.scheduler.schedule_countdown(
            self.countdown_ready.emit,  # type: ignore[attr-defined]
            interval_seconds=countdown_interval_from_config(self._config),
        )
        self.scheduler.schedule_rollover(self.rollover_requested.emit)  # type: ignore[attr-defined]
        self.aboutToQuit.connect(self._cleanup)  # type: ignore[attr-defined]

        self._on_rollover()
        self._on_countdown(self.scheduler.tick())
        self.scheduler.start()

    @Slot(object)
    def _on_countdown(self, next_prayer: NextPrayer) -> None:
        self.last_countdown = next_prayer
        snapshot = self.engine.progress.compute_progress_snapshot()
        LOGGER.info(
            "Next prayer: %s at %s (in %s) | prayers %d/%d, pages %.0f%%, dhikr %.0f%%, streak %d",
            next_prayer.display_name,
            next_prayer.prayer_time_text(),
            next_prayer.countdown_text(),
            snapshot.completed_prayer_count,
            snapshot.total_prayer_slots,
            min(snapshot.pages_ratio, 1.0) * 100,
            min(snapshot.dhikr_ratio, 1.0) * 100,
            snapshot.streak,
        )

    @Slot()
    def _on_rollover(self) -> None:
        try:
            self.engine.start_new_day(local_today(self.scheduler.timezone))
        except OSError:
            LOGGER.exception("Failed to persist the daily rollover")

    def _on_engine_event(self, event: object) -> None:
        LOGGER.info("%s", getattr(event, "message", event))

    def _cleanup(self) -> None:
        self.scheduler.shutdown()


def main() -> int:
    app = QuranConnectApp(sys.argv)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())

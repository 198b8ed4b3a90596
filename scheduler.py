"""Background jobs that refresh the prayer countdown and roll the day over."""
from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from prayer_times import NextPrayer, compute_next_prayer, current_minutes, resolve_timezone

LOGGER = logging.getLogger(__name__)

COUNTDOWN_JOB_ID = "prayer-countdown"
ROLLOVER_JOB_ID = "daily-rollover"


class CountdownScheduler:
    """Wrap APScheduler to drive the next-prayer countdown and midnight rollover."""

    def __init__(
        self,
        schedule: Mapping[str, int],
        timezone: Optional[str] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._timezone = resolve_timezone(timezone)
        self._scheduler = BackgroundScheduler(timezone=self._timezone)
        self._schedule = dict(schedule)
        self._clock = clock or (lambda: current_minutes(self._timezone))

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        if not self._scheduler.running:
            LOGGER.info("Starting background scheduler (%s)", self._timezone)
            self._scheduler.start()

    def shutdown(self) -> None:
        if self._scheduler.running:
            LOGGER.info("Stopping background scheduler")
            self._scheduler.shutdown(wait=False)

    def update_schedule(self, schedule: Mapping[str, int]) -> None:
        self._schedule = dict(schedule)

    def tick(self) -> NextPrayer:
        """Compute the next prayer for the current wall-clock minute."""
        next_prayer = compute_next_prayer(self._schedule, self._clock())
        LOGGER.debug(
            "Next prayer %s at %s (in %s)",
            next_prayer.prayer,
            next_prayer.prayer_time_text(),
            next_prayer.countdown_text(),
        )
        return next_prayer

    def schedule_countdown(self, callback: Callable[[NextPrayer], None], interval_seconds: int = 30) -> None:
        """Deliver a fresh NextPrayer to *callback* every *interval_seconds*."""
        self._remove_job(COUNTDOWN_JOB_ID)
        trigger = IntervalTrigger(seconds=interval_seconds, timezone=self._timezone)
        job = self._scheduler.add_job(lambda: callback(self.tick()), trigger=trigger, id=COUNTDOWN_JOB_ID)
        LOGGER.debug("Scheduled countdown job %s every %ss", job.id, interval_seconds)

    def schedule_rollover(self, callback: Callable[[], None], hour: int = 0, minute: int = 5) -> None:
        """Run *callback* once a day shortly after local midnight."""
        self._remove_job(ROLLOVER_JOB_ID)
        trigger = CronTrigger(hour=hour, minute=minute, timezone=self._timezone)
        job = self._scheduler.add_job(callback, trigger=trigger, id=ROLLOVER_JOB_ID)
        LOGGER.debug("Scheduled rollover job %s at %02d:%02d", job.id, hour, minute)

    def job_ids(self) -> list:
        return [job.id for job in self._scheduler.get_jobs()]

    def _remove_job(self, job_id: str) -> None:
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            return
        LOGGER.debug("Removed existing job %s", job_id)

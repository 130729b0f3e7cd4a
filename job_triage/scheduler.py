"""Periodic digest trigger that can be stopped cleanly and driven by hand in tests."""
from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Callable

from job_triage.config import DigestConfig
from job_triage.log import get_logger

log = get_logger(__name__)

# A slot still fires when the first tick after it comes this late.
MISSED_SLOT_GRACE = timedelta(minutes=30)


def _parse_run_time(value: str) -> tuple[int, int]:
    hour, _, minute = value.strip().partition(":")
    h, m = int(hour), int(minute or 0)
    if not (0 <= h < 24 and 0 <= m < 60):
        raise ValueError(f"invalid run time {value!r}")
    return h, m


class DigestScheduler:
    """Calls *job* once per configured HH:MM slot per day.

    ``tick(now)`` does the time check and is what the background thread
    calls every ``check_interval_s``; tests call it directly.
    """

    def __init__(
        self,
        job: Callable[[], object],
        config: DigestConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.job = job
        self.config = config or DigestConfig()
        self.clock = clock
        self.slots = [_parse_run_time(t) for t in self.config.run_times]
        self._fired: set[str] = set()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def tick(self, now: datetime | None = None) -> bool:
        """Run the job if a slot passed less than MISSED_SLOT_GRACE ago and has
        not been served today.
        """
        now = now or self.clock()
        for hour, minute in self.slots:
            slot = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
            if not (slot <= now < slot + MISSED_SLOT_GRACE):
                continue
            key = f"{now.date().isoformat()}-{hour:02d}:{minute:02d}"
            if key in self._fired:
                continue
            self._fired.add(key)
            log.info(
                "Digest slot %02d:%02d reached at %s, triggering digest",
                hour, minute, now.strftime("%H:%M:%S"),
            )
            try:
                self.job()
            except Exception as exc:
                log.error("Scheduled digest failed: %s", exc)
            return True
        return False

    def _loop(self) -> None:
        while not self._stop.wait(self.config.check_interval_s):
            self.tick()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="digest-scheduler", daemon=True)
        self._thread.start()
        log.info("Digest scheduler active: %s", ", ".join(self.config.run_times))

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        log.info("Digest scheduler stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

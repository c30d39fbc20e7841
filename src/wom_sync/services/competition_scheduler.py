"""Periodically mirror Wise Old Man competitions into the config store."""

from __future__ import annotations

import datetime
import logging
import threading
import time
from collections.abc import Callable

from wom_sync.classes.competition import CompetitionData
from wom_sync.classes.competition_finder import CompetitionFinder
from wom_sync.classes.config_updater import ConfigUpdater
from wom_sync.classes.event_kind import HUNT, TITLE_MATCHED_KINDS, EventKind
from wom_sync.classes.wiseoldman import WiseOldMan
from wom_sync.errors import SelectionAbortedError, WomSyncError

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_SECONDS = 7 * 60
DEFAULT_STOP_GRACE_SECONDS = 30.0
DEFAULT_HUNT_COMPETITION_ID = 100262
HUNT_COMPETITION_ID_KEY = "hunt_competition_id"


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class CompetitionScheduler:
    """
    Runs one sync cycle at a fixed rate on a single background thread. Cycles never
    overlap and a failing cycle never stops the schedule.
    """

    def __init__(
        self,
        client: WiseOldMan,
        finder: CompetitionFinder,
        updater: ConfigUpdater,
        *,
        period_seconds: float = DEFAULT_PERIOD_SECONDS,
        initial_delay_seconds: float = 0.0,
        stop_grace_seconds: float = DEFAULT_STOP_GRACE_SECONDS,
        hunt_competition_id: int | None = DEFAULT_HUNT_COMPETITION_ID,
        clock: Callable[[], datetime.datetime] = utcnow,
    ) -> None:
        if period_seconds <= 0:
            raise ValueError(f"period_seconds must be positive, got {period_seconds}")
        self.client = client
        self.finder = finder
        self.updater = updater
        self.period_seconds = period_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self.stop_grace_seconds = stop_grace_seconds
        self.default_hunt_competition_id = hunt_competition_id
        self.clock = clock
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        # worker left behind by a stop() that timed out, possibly mid-cycle
        self._abandoned: threading.Thread | None = None

    # -----------------------
    # Lifecycle
    # -----------------------

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            previous = self._abandoned
            if previous is not None and not previous.is_alive():
                previous = self._abandoned = None
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run_loop,
                args=(self._stop_event, previous),
                name="competition-scheduler",
                daemon=True,
            )
            self._thread.start()
        logger.info("competition scheduler started [period: %ss]", self.period_seconds)

    def stop(self, timeout: float | None = None) -> bool:
        """
        Stop scheduling. A cycle already in flight is allowed to finish within the
        grace period; returns False if it was still running when the wait gave up.
        """
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
        if thread is None:
            return True

        grace = self.stop_grace_seconds if timeout is None else timeout
        if thread is not threading.current_thread():
            thread.join(grace)
        if thread.is_alive():
            with self._lock:
                self._abandoned = thread
            logger.warning("in-flight cycle still running after %ss; abandoning scheduler thread", grace)
            return False
        logger.info("competition scheduler stopped")
        return True

    def _run_loop(self, stop_event: threading.Event, previous: threading.Thread | None = None) -> None:
        if previous is not None:
            logger.info("waiting for the abandoned scheduler thread to finish its cycle")
            while previous.is_alive():
                previous.join(0.1)
                if stop_event.is_set():
                    return
        if stop_event.wait(self.initial_delay_seconds):
            return
        next_run = time.monotonic()
        while not stop_event.is_set():
            self.run_cycle()
            next_run += self.period_seconds
            delay = next_run - time.monotonic()
            if delay < 0:
                # overran the period: run again now and keep the rate from here
                next_run = time.monotonic()
                delay = 0
            if stop_event.wait(delay):
                break

    # -----------------------
    # Sync cycle
    # -----------------------

    def run_cycle(self, now: datetime.datetime | None = None) -> None:
        now = now or self.clock()
        logger.debug("checking competitions at %s", now.isoformat())
        try:
            self.check_title_matched_events(now)
            self.check_hunt(now)
        except Exception:
            logger.exception("error during scheduled competition check")

    def check_title_matched_events(self, now: datetime.datetime) -> None:
        try:
            competitions = self.client.fetch_competition_list()
        except WomSyncError as err:
            logger.error("failed to fetch competition list, skipping SOTW/BOTM this cycle: %s", err)
            return

        for kind in TITLE_MATCHED_KINDS:
            try:
                data, is_active = self.finder.select(kind, competitions, now)
            except SelectionAbortedError as err:
                logger.error("skipping %s this cycle: %s", kind.name, err, exc_info=err.__cause__)
                continue

            if data is None:
                logger.debug("no %s competition found; marking inactive", kind.name)
                self.updater.set_inactive(kind)
            else:
                self.update_event(kind, data, is_active)

    def check_hunt(self, now: datetime.datetime) -> None:
        competition_id = self.resolve_hunt_competition_id()
        if competition_id is None:
            logger.debug("no Hunt competition configured")
            return
        try:
            data = self.finder.find_hunt(competition_id)
        except SelectionAbortedError as err:
            logger.error("skipping %s this cycle: %s", HUNT.name, err, exc_info=err.__cause__)
            return
        # written whether or not the window is open
        self.update_event(HUNT, data, data.is_active(now))

    def update_event(self, kind: type[EventKind], data: CompetitionData, is_active: bool) -> None:
        wom_url = self.client.competition_url(data.competition_id)
        self.updater.update_event(kind, data, is_active, wom_url)
        logger.debug("%s synced: %s [id: %d active: %s]", kind.name, data.title, data.competition_id, is_active)

    def resolve_hunt_competition_id(self) -> int | None:
        """Stored id wins; otherwise the default is used and saved for the UI."""
        stored = self.updater.get_config(HUNT_COMPETITION_ID_KEY)
        if stored:
            try:
                return int(stored)
            except ValueError:
                logger.warning("ignoring invalid %s=%r", HUNT_COMPETITION_ID_KEY, stored)

        if self.default_hunt_competition_id is None:
            return None
        self.updater.write_if_changed(HUNT_COMPETITION_ID_KEY, str(self.default_hunt_competition_id))
        return self.default_hunt_competition_id
